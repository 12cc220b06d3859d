"""Date handlers.

- date: A date/datetime object or a parseable date string
- dateAfter, dateBefore: Compared against the ``date`` option
- dateFormat: A string matching the strptime ``format`` option
"""

from datetime import date as date_type, datetime
from typing import Any, Mapping

from rulekit.types import CheckResult

DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Tried in order after ISO 8601
_FALLBACK_FORMATS = (
    "%Y/%m/%d",
    "%Y/%m/%d %H:%M:%S",
    "%m/%d/%Y",
    "%m/%d/%Y %H:%M:%S",
    "%d %B %Y",
    "%d %b %Y",
    "%B %d, %Y",
    "%b %d, %Y",
)

# Values of the "format" option that are format selectors, not strptime formats
_SELECTORS = {None, "", "any", "all"}


def parse_datetime(value: Any) -> datetime | None:
    """Parse a date-like value into a datetime. Returns None if not a date."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, date_type):
        return datetime(value.year, value.month, value.day)
    if not isinstance(value, str) or not value.strip():
        return None

    text = value.strip()
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        pass
    for fmt in _FALLBACK_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def _comparable(left: datetime, right: datetime) -> tuple[datetime, datetime]:
    """Drop timezone info when only one side carries it."""
    if (left.tzinfo is None) != (right.tzinfo is None):
        return left.replace(tzinfo=None), right.replace(tzinfo=None)
    return left, right


def date(value: Any, options: Mapping[str, Any]) -> bool:
    return parse_datetime(value) is not None


def date_after(value: Any, options: Mapping[str, Any]) -> CheckResult:
    bound = parse_datetime(options.get("date"))
    if bound is None:
        return CheckResult(False)
    params = {"date": bound.strftime(DEFAULT_DATE_FORMAT)}
    moment = parse_datetime(value)
    if moment is None:
        return CheckResult(False, params)
    moment, bound = _comparable(moment, bound)
    return CheckResult(moment >= bound, params)


def date_before(value: Any, options: Mapping[str, Any]) -> CheckResult:
    bound = parse_datetime(options.get("date"))
    if bound is None:
        return CheckResult(False)
    params = {"date": bound.strftime(DEFAULT_DATE_FORMAT)}
    moment = parse_datetime(value)
    if moment is None:
        return CheckResult(False, params)
    moment, bound = _comparable(moment, bound)
    return CheckResult(moment <= bound, params)


def date_format(value: Any, options: Mapping[str, Any]) -> CheckResult:
    fmt = options.get("format")
    if fmt in _SELECTORS or not isinstance(fmt, str):
        fmt = DEFAULT_DATE_FORMAT
    if not isinstance(value, str):
        return CheckResult(False, {"format": fmt})
    try:
        datetime.strptime(value, fmt)
    except ValueError:
        return CheckResult(False, {"format": fmt})
    return CheckResult(True, {"format": fmt})
