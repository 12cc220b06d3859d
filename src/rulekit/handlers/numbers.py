"""Numeric handlers.

- decimal: A decimal number, optionally with an exact ``precision``
- inRange: A number between the ``lower`` and ``upper`` options
- integer: An integer, or a string holding one
- max, min: Compared against the ``max``/``min`` options
- money: Monetary amount, symbol on the ``left`` or ``right`` (multi-format)
- numeric: A number, or a string holding one
"""

import math
import operator
import re
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Mapping

NUMERIC_PATTERN = re.compile(r"\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?\s*")
DECIMAL_PATTERN = re.compile(r"[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?")
INTEGER_PATTERN = re.compile(r"\s*[+-]?(0|[1-9]\d*)\s*")

# Unicode currency symbols (general category Sc)
_CURRENCY = r"[$\u00a2-\u00a5\u058f\u060b\u09f2\u09f3\u0e3f\u17db\u20a0-\u20c0\ufdfc\ufe69\uff04\uffe0\uffe1\uffe5\uffe6]"
_AMOUNT = r"(?!0,?\d)(?:\d{1,3}(?:([, .])\d{3})?(?:\1\d{3})*|(?:\d+))((?!\1)[,.]\d{2})?"

MONEY_FORMATS = {
    "right": rf"^{_AMOUNT}(?<!\u00a2){_CURRENCY}?$",
    "left": rf"^(?!\u00a2){_CURRENCY}?{_AMOUNT}$",
}


def to_number(value: Any) -> int | float | Decimal | None:
    """Return the numeric value of a number or numeric string, else None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float, Decimal)):
        return value
    if isinstance(value, str) and NUMERIC_PATTERN.fullmatch(value):
        return float(value)
    return None


def _compare(value: Any, bound: Any, op: Callable[[Any, Any], bool]) -> bool:
    number, limit = to_number(value), to_number(bound)
    if number is not None and limit is not None:
        return op(number, limit)
    if value is None or value == "":
        return False
    try:
        return op(value, bound)
    except TypeError:
        return False


def decimal(value: Any, options: Mapping[str, Any]) -> bool:
    if isinstance(value, bool) or value is None:
        return False
    text = str(value)
    if not DECIMAL_PATTERN.fullmatch(text):
        return False
    precision = options.get("precision")
    if precision is not None:
        digits = len(text) - text.rfind(".") - 1 if "." in text else 0
        if digits != int(precision):
            return False
    return True


def in_range(value: Any, options: Mapping[str, Any]) -> bool:
    number = to_number(value)
    if number is None:
        return False
    lower, upper = to_number(options.get("lower")), to_number(options.get("upper"))
    if lower is not None and number < lower:
        return False
    if upper is not None and number > upper:
        return False
    if lower is None and upper is None:
        return math.isfinite(number)
    return True


def integer(value: Any, options: Mapping[str, Any]) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    if isinstance(value, float):
        return value.is_integer()
    if isinstance(value, Decimal):
        try:
            return value == value.to_integral_value()
        except InvalidOperation:
            return False
    return isinstance(value, str) and INTEGER_PATTERN.fullmatch(value) is not None


def maximum(value: Any, options: Mapping[str, Any]) -> bool:
    bound = options.get("max")
    return bound is not None and _compare(value, bound, operator.le)


def minimum(value: Any, options: Mapping[str, Any]) -> bool:
    bound = options.get("min")
    return bound is not None and _compare(value, bound, operator.ge)


def numeric(value: Any, options: Mapping[str, Any]) -> bool:
    number = to_number(value)
    return number is not None and not (isinstance(number, float) and math.isnan(number))
