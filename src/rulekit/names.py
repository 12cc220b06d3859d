"""Handler name normalization.

Rules may be referenced by their registered name (``email``), a negated
name (``not:email``) or a method-style identifier (``isEmail``,
``isNotEmpty``, ``is_not_in_list``).
"""

import re

from rulekit.types import NEGATION_PREFIX

_CAMEL_IDENTIFIER = re.compile(r"^is(Not)?([A-Z][A-Za-z0-9]*)$")
_SNAKE_IDENTIFIER = re.compile(r"^is_(not_)?([a-z0-9]+(?:_[a-z0-9]+)*)$")


def split_negation(name: str) -> tuple[str, bool]:
    """Strip the negation prefix. Returns (handler name, negated)."""
    if name.startswith(NEGATION_PREFIX):
        return name[len(NEGATION_PREFIX):], True
    return name, False


def rule_name_from_identifier(identifier: str) -> str:
    """Map a method-style identifier to a rule name.

    ``isEmail`` -> ``email``, ``isNotEmpty`` -> ``not:empty``,
    ``is_alpha_numeric`` -> ``alphaNumeric``. Anything else is returned as is.
    """
    match = _CAMEL_IDENTIFIER.match(identifier)
    if match:
        negated, rest = match.groups()
        name = rest[0].lower() + rest[1:]
    else:
        match = _SNAKE_IDENTIFIER.match(identifier)
        if not match:
            return identifier
        negated, rest = match.groups()
        first, *others = rest.split("_")
        name = first + "".join(part.capitalize() for part in others)
    return f"{NEGATION_PREFIX}{name}" if negated else name
