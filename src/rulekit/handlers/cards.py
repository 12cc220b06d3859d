"""Credit card handlers.

- creditCard: Matches a card brand. The brand is picked with the ``format``
  option ("any" by default); ``deep`` also applies the Luhn checksum.
- luhn: Passes the Luhn checksum
"""

from typing import Any, Mapping

from rulekit.formats import check_formats, normalize_entry

CARD_FORMATS = {
    "amex": r"^3[47]\d{13}$",
    "bankcard": r"^56(10\d\d|022[1-5])\d{10}$",
    "diners": r"^(?:3(0[0-5]|[68]\d)\d{11})|(?:5[1-5]\d{14})$",
    "disc": r"^(?:6011|650\d)\d{12}$",
    "electron": r"^(?:417500|4917\d{2}|4913\d{2})\d{10}$",
    "enroute": r"^2(?:014|149)\d{11}$",
    "jcb": r"^(3\d{4}|2100|1800)\d{11}$",
    "maestro": r"^(?:5020|6\d{3})\d{12}$",
    "mc": r"^5[1-5]\d{14}$",
    "solo": r"^(6334[5-9][0-9]|6767[0-9]{2})\d{10}(\d{2,3})?$",
    "switch": (
        r"^(?:49(03(0[2-9]|3[5-9])|11(0[1-2]|7[4-9]|8[1-2])|36[0-9]{2})"
        r"\d{10}(\d{2,3})?)|(?:564182\d{10}(\d{2,3})?)|(6(3(33[0-4]"
        r"[0-9])|759[0-9]{2})\d{10}(\d{2,3})?)$"
    ),
    "visa": r"^4\d{12}(\d{3})?$",
    "voyager": r"^8699[0-9]{11}$",
    "fast": (
        r"^(?:4[0-9]{12}(?:[0-9]{3})?|5[1-5][0-9]{14}|6011[0-9]{12}|3"
        r"(?:0[0-5]|[68][0-9])[0-9]{11}|3[47][0-9]{13})$"
    ),
}

_CARD_FORMATS = normalize_entry(CARD_FORMATS)


def luhn_checksum_ok(number: str) -> bool:
    """Validate a digit string with the Luhn algorithm."""
    total = 0
    for position, char in enumerate(reversed(number)):
        digit = int(char)
        if position % 2 == 1:
            digit *= 2
            if digit > 9:
                digit -= 9
        total += digit
    return total % 10 == 0


def luhn(value: Any, options: Mapping[str, Any]) -> bool:
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        return False
    number = str(value)
    return number.isdigit() and luhn_checksum_ok(number)


def credit_card(value: Any, options: Mapping[str, Any]) -> bool:
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        return False
    number = str(value).replace("-", "").replace(" ", "")
    if len(number) < 13:
        return False
    if not check_formats(number, _CARD_FORMATS, options).valid:
        return False
    if options.get("deep"):
        return luhn(number, options)
    return True
