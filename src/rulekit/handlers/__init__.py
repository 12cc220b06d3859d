"""Builtin validation handlers.

These handlers ship with rulekit and are loaded into the Checker on first
use and by ``Checker.reset()``. Each is registered under a fixed name with
a default error message; any of them can be replaced with ``Checker.set()``.
"""

from rulekit.handlers import cards, dates, network, numbers, strings
from rulekit.types import HandlerEntry

DEFAULT_MESSAGES: dict[str, str] = {
    "accepted": "must be accepted",
    "alphaNumeric": "must contain only letters a-z and/or numbers 0-9",
    "boolean": "must be a boolean",
    "creditCard": "must be a valid credit card number",
    "date": "is not a valid date",
    "dateAfter": "must be date after {:date}",
    "dateBefore": "must be date before {:date}",
    "dateFormat": "must be date with format {:format}",
    "decimal": "must be decimal",
    "email": "is not a valid email address",
    "equalTo": "must be the equal to the field `{:key}`",
    "empty": "must be a empty",
    "not:empty": "must not be a empty",
    "inList": "must contain a valid value",
    "not:inList": "must contain a valid value",
    "inRange": "must be inside the range",
    "not:inRange": "must be ouside the range",
    "integer": "must be an integer",
    "ip": "must be an ip",
    "length": "must be longer than {:length}",
    "lengthBetween": "must be between {:min} and {:max} characters",
    "lengthMax": "must contain less than {:length} characters",
    "lengthMin": "must contain greater than {:length} characters",
    "luhn": "must be a valid credit card number",
    "max": "must be no more than {:max}",
    "min": "must be at least {:min}",
    "money": "must be a valid monetary amount",
    "numeric": "must be numeric",
    "phone": "must be a phone number",
    "regex": "contains invalid characters",
    "required": "is required",
    "time": "must be a valid time",
    "url": "not a URL",
    "uuid": "must be a valid UUID",
}


def builtin_handlers() -> dict[str, HandlerEntry]:
    """Return a fresh table of the builtin handlers."""
    return {
        "accepted": strings.accepted,
        "alphaNumeric": strings.alpha_numeric,
        "boolean": strings.boolean,
        "creditCard": cards.credit_card,
        "date": dates.date,
        "dateAfter": dates.date_after,
        "dateBefore": dates.date_before,
        "dateFormat": dates.date_format,
        "decimal": numbers.decimal,
        "email": network.email,
        "empty": strings.EMPTY_PATTERN,
        "equalTo": strings.equal_to,
        "inList": strings.in_list,
        "inRange": numbers.in_range,
        "integer": numbers.integer,
        "ip": network.ip,
        "length": strings.length,
        "lengthBetween": strings.length_between,
        "lengthMax": strings.length_max,
        "lengthMin": strings.length_min,
        "luhn": cards.luhn,
        "max": numbers.maximum,
        "min": numbers.minimum,
        "money": dict(numbers.MONEY_FORMATS),
        "numeric": numbers.numeric,
        "phone": strings.PHONE_PATTERN,
        "regex": strings.regex,
        "time": strings.TIME_PATTERN,
        "url": network.url,
        "uuid": strings.UUID_PATTERN,
    }


__all__ = ["DEFAULT_MESSAGES", "builtin_handlers"]
