"""Core types for the rulekit validation engine.

This module defines the foundational types shared by the registry, the
format evaluator and the rule store:
- Handlers: a regular expression (Pattern) or a callable (Predicate)
- CheckResult: the outcome of a check plus parameters for message rendering
- RuleDefinition: one declared (field, handler) rule with its options
"""

import re
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Callable, Mapping, Union

NEGATION_PREFIX = "not:"
DEFAULT_MESSAGE_KEY = "_default_"

# Reserved rule option keys and their declaration-time defaults
RULE_DEFAULTS: dict[str, Any] = {
    "message": None,
    "required": True,
    "skipEmpty": False,
    "format": "any",
    "not": False,
    "on": None,
}

# Python-style aliases accepted in rule declarations
_OPTION_ALIASES = {
    "skip_empty": "skipEmpty",
}


@dataclass(frozen=True)
class CheckResult:
    """Outcome of evaluating a handler against a value.

    Attributes:
        valid: True if the check succeeded
        params: Values surfaced for message interpolation (e.g. a formatted date bound)
    """

    valid: bool
    params: dict[str, Any] = field(default_factory=dict)

    def __bool__(self) -> bool:
        return self.valid

    @classmethod
    def coerce(cls, outcome: Any) -> "CheckResult":
        """Normalize a predicate return value into a CheckResult."""
        if isinstance(outcome, CheckResult):
            return outcome
        return cls(bool(outcome))


@dataclass(frozen=True)
class Pattern:
    """A handler that succeeds when the whole value matches a regular expression."""

    regex: re.Pattern

    @classmethod
    def compile(cls, pattern: "str | re.Pattern") -> "Pattern":
        if isinstance(pattern, re.Pattern):
            return cls(pattern)
        return cls(re.compile(pattern))

    def matches(self, value: Any) -> bool:
        """Match the string form of a scalar value. Collections never match."""
        if value is None:
            text = ""
        elif isinstance(value, bool):
            text = "1" if value else ""
        elif isinstance(value, (str, int, float, Decimal)):
            text = str(value)
        else:
            return False
        return self.regex.fullmatch(text) is not None


@dataclass(frozen=True)
class Predicate:
    """A handler backed by a callable taking (value, options)."""

    func: Callable[[Any, Mapping[str, Any]], Any]

    def __call__(self, value: Any, options: Mapping[str, Any]) -> CheckResult:
        return CheckResult.coerce(self.func(value, options))


Handler = Union[Pattern, Predicate]

# What callers may register: a pattern string, a compiled regex, a callable,
# an already wrapped Handler, or a mapping of format name -> any of these.
HandlerEntry = Union[
    str,
    re.Pattern,
    Callable[..., Any],
    Pattern,
    Predicate,
    Mapping[str, Any],
]


def to_handler(candidate: Any) -> Handler:
    """Wrap a single registration value into a Pattern or Predicate."""
    if isinstance(candidate, (Pattern, Predicate)):
        return candidate
    if isinstance(candidate, (str, re.Pattern)):
        return Pattern.compile(candidate)
    if callable(candidate):
        return Predicate(candidate)
    raise TypeError(
        f"Unsupported validation handler {candidate!r}: expected a regular "
        "expression, a callable or a mapping of format names to either."
    )


@dataclass
class RuleDefinition:
    """A declared rule: one handler applied to one field path.

    Attributes:
        name: Handler name as declared, including any negation prefix
        message: Error message template, or None to use the default message
        required: Record a "required" error when the field is absent
        skip_empty: Skip the check for empty values
        format: Format selector ("any", "all", a format name or a list of names)
        negated: Derived from the negation prefix of the name
        on: Event tags this rule is scoped to, or None for every event
        params: Handler-specific options (e.g. min, max, list)
    """

    name: str
    message: str | None = None
    required: bool = True
    skip_empty: bool = False
    format: Any = "any"
    negated: bool = False
    on: list[str] | None = None
    params: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_declaration(cls, name: str, declaration: Any = None) -> "RuleDefinition":
        """Create a RuleDefinition from a declaration value.

        The value may be None (bare handler name), a message string,
        or a mapping of options.
        """
        if not isinstance(name, str):
            raise TypeError(f"Rule names must be strings, got {name!r}")

        if declaration is None:
            options: dict[str, Any] = {}
        elif isinstance(declaration, str):
            options = {"message": declaration}
        elif isinstance(declaration, Mapping):
            options = {_OPTION_ALIASES.get(k, k): v for k, v in declaration.items()}
        else:
            raise TypeError(
                f"Options for rule '{name}' must be a message string or a mapping, "
                f"got {type(declaration).__name__}"
            )

        merged = {**RULE_DEFAULTS, **options}
        on = merged.pop("on")
        if isinstance(on, str):
            on = [on]
        elif on is not None:
            on = list(on)

        return cls(
            name=name,
            message=merged.pop("message"),
            required=bool(merged.pop("required")),
            skip_empty=bool(merged.pop("skipEmpty")),
            format=merged.pop("format"),
            negated=name.startswith(NEGATION_PREFIX),
            on=on,
            params={k: v for k, v in merged.items() if k != "not"},
        )

    def applies_to(self, events: list[str]) -> bool:
        """Check whether this rule runs for the given events."""
        if not events or not self.on:
            return True
        return any(event in self.on for event in events)

    def to_options(self) -> dict[str, Any]:
        """Flatten into the options mapping handed to handlers and messages."""
        return {
            **self.params,
            "message": self.message,
            "required": self.required,
            "skipEmpty": self.skip_empty,
            "format": self.format,
            "not": self.negated,
            "on": self.on,
        }
