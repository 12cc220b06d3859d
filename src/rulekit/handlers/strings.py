"""String and choice handlers.

- accepted: Looks like a boolean answer (true/false, 1/0, on/off, yes/no)
- alphaNumeric: Only letters and digits
- boolean: Strictly True, False, 0, 1, "0" or "1"
- empty: Blank or whitespace only
- equalTo: Equal to another field of the validated data
- inList: One of the values of the ``list`` option
- length, lengthBetween, lengthMax, lengthMin: String length bounds
- phone, time, uuid: Fixed formats
- regex: A valid regular expression
"""

import re
from typing import Any, Mapping

from rulekit.formats import check_formats
from rulekit.types import Pattern

_ACCEPTED_VALUES = {"1", "0", "true", "false", "on", "off", "yes", "no", ""}

ALPHA_NUMERIC_PATTERN = Pattern.compile(r"[^\W_]+")

EMPTY_PATTERN = r"\s*"

PHONE_PATTERN = r"\+?[0-9()\-]{10,20}"

TIME_PATTERN = (
    r"^((0?[1-9]|1[012])(:[0-5]\d){0,2}([AP]M|[ap]m))$"
    r"|^([01]\d|2[0-3])(:[0-5]\d){0,2}$"
)

UUID_PATTERN = r"[A-Fa-f0-9]{8}-[A-Fa-f0-9]{4}-[A-Fa-f0-9]{4}-[A-Fa-f0-9]{4}-[A-Fa-f0-9]{12}"


def accepted(value: Any, options: Mapping[str, Any]) -> bool:
    if isinstance(value, bool):
        return True
    if value is None or not isinstance(value, (str, int)):
        return False
    return str(value).strip().lower() in _ACCEPTED_VALUES


def alpha_numeric(value: Any, options: Mapping[str, Any]) -> bool:
    if value is None or value == "":
        return False
    return check_formats(value, [(None, ALPHA_NUMERIC_PATTERN)], options).valid


def boolean(value: Any, options: Mapping[str, Any]) -> bool:
    if isinstance(value, bool):
        return True
    if type(value) is int:
        return value in (0, 1)
    return isinstance(value, str) and value in ("0", "1")


def equal_to(value: Any, options: Mapping[str, Any]) -> bool:
    key = options.get("key")
    data = options.get("data") or {}
    if key is None or not isinstance(data, Mapping):
        return False
    other = data.get(key)
    return other is not None and value == other


def in_list(value: Any, options: Mapping[str, Any]) -> bool:
    choices = options.get("list") or []
    # Blank and boolean values must match exactly; other scalars also
    # match on their string form ("1" is in [1, 2]).
    if value is None or value == "" or isinstance(value, bool):
        return any(type(choice) is type(value) and choice == value for choice in choices)
    if value in choices:
        return True
    text = str(value)
    return any(
        not isinstance(choice, bool) and choice is not None and str(choice) == text
        for choice in choices
    )


def _length(value: Any) -> int:
    if value is None:
        return 0
    if isinstance(value, (str, list, tuple, dict, set)):
        return len(value)
    return len(str(value))


def length(value: Any, options: Mapping[str, Any]) -> bool:
    expected = options.get("length")
    return expected is not None and _length(value) == int(expected)


def length_between(value: Any, options: Mapping[str, Any]) -> bool:
    low, high = options.get("min"), options.get("max")
    if low is None or high is None:
        return False
    return int(low) <= _length(value) <= int(high)


def length_max(value: Any, options: Mapping[str, Any]) -> bool:
    limit = options.get("length")
    return limit is not None and _length(value) <= int(limit)


def length_min(value: Any, options: Mapping[str, Any]) -> bool:
    limit = options.get("length")
    return limit is not None and _length(value) >= int(limit)


def regex(value: Any, options: Mapping[str, Any]) -> bool:
    if not isinstance(value, str) or not value:
        return False
    try:
        re.compile(value)
    except re.error:
        return False
    return True
