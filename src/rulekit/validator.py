"""The rulekit Validator.

A Validator holds per-field rules and checks data against them:

    validator = Validator()
    validator.rule("title", {"not:empty": {"message": "please enter a title"}})
    validator.rule("emails.*", "email")

    validator.validate({"title": "", "emails": ["bad"]})  # False
    validator.errors()
    # {"title": ["please enter a title"], "emails.0": ["is not a valid email address"]}

Handlers and messages registered on a Validator shadow the global ones held
by the Checker. A Validator keeps the errors of its last ``validate()`` call,
so one instance must not validate concurrently from several threads.
"""

import logging
from decimal import Decimal
from typing import Any, Callable, Iterable, Mapping

from rulekit.checker import Checker
from rulekit.config import ValidatorConfig
from rulekit.exceptions import UnknownHandlerError
from rulekit.formats import check_formats, normalize_entry
from rulekit.messages import interpolate
from rulekit.names import rule_name_from_identifier, split_negation
from rulekit.paths import extract_values, split_path
from rulekit.types import CheckResult, HandlerEntry, RuleDefinition

logger = logging.getLogger(__name__)

# (handler name, options, meta) -> rendered error message
ErrorHandler = Callable[[str, Mapping[str, Any], Mapping[str, Any]], str]

REQUIRED = "required"


def is_empty(value: Any) -> bool:
    """Check if a value is considered empty for ``skipEmpty``.

    Empty means None, "", "0", False, numeric zero or an empty collection.
    Whitespace-only strings are data.
    """
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return value in ("", "0")
    if isinstance(value, (int, float, Decimal)):
        return value == 0
    if isinstance(value, (list, tuple, dict, set)):
        return len(value) == 0
    return False


class Validator:
    """Validates data against per-field rules.

    Args:
        config: A ValidatorConfig, or a mapping with the same keys
            (``handlers``, ``messages``, ``meta``, ``error``)
        checker: The global registry to fall back to
    """

    def __init__(
        self,
        config: ValidatorConfig | Mapping[str, Any] | None = None,
        checker: type[Checker] = Checker,
    ):
        if not isinstance(config, ValidatorConfig):
            config = ValidatorConfig.from_dict(config or {})

        self.checker = checker
        self.meta: dict[str, Any] = dict(config.meta)
        self.error_handler: ErrorHandler = config.error or self._render_error

        self._handlers: dict[str, HandlerEntry] = {}
        self._messages: dict[str, str] = {}
        self._rules: dict[str, dict[str, RuleDefinition]] = {}
        self._errors: dict[str, list[str]] = {}

        self.set(config.handlers)
        self.messages(config.messages)

    # =========================================================================
    # Handlers
    # =========================================================================

    def set(
        self,
        name: str | Mapping[str, HandlerEntry],
        handler: HandlerEntry | None = None,
    ) -> None:
        """Register local handlers. They shadow global handlers of the same name.

        Example:
            validator.set("zeroToNine", r"[0-9]")
            validator.set({"tenToNineteen": r"1[0-9]", "even": lambda v, o: int(v) % 2 == 0})
        """
        entries = name if isinstance(name, Mapping) else {name: handler}
        for key, entry in entries.items():
            normalize_entry(entry)
            self._handlers[key] = entry

    def has(self, name: str) -> bool:
        """Check if a handler exists locally or globally."""
        return name in self._handlers or self.checker.has(name)

    def get(self, name: str) -> HandlerEntry:
        """Get a handler, preferring the local one.

        Raises:
            UnknownHandlerError: If the handler exists neither locally nor globally
        """
        if name in self._handlers:
            return self._handlers[name]
        if self.checker.has(name):
            return self.checker.get(name)
        raise UnknownHandlerError(name)

    def handlers(
        self,
        handlers: Mapping[str, HandlerEntry] | None = None,
        append: bool = True,
    ) -> dict[str, HandlerEntry]:
        """Get, merge or replace the local handlers.

        Returns:
            The available handlers: local ones merged over the global ones
        """
        if handlers is not None:
            for entry in handlers.values():
                normalize_entry(entry)
            if append:
                self._handlers.update(handlers)
            else:
                self._handlers = dict(handlers)
        return {**self.checker.handlers(), **self._handlers}

    # =========================================================================
    # Checks
    # =========================================================================

    def evaluate(
        self,
        name: str,
        value: Any,
        options: Mapping[str, Any] | None = None,
    ) -> CheckResult:
        """Check a single value against a handler.

        Args:
            name: Handler name, optionally prefixed with ``not:``, or a
                method-style identifier such as ``isNotEmpty``
            value: The value to check
            options: Handler options, including the format selector

        Returns:
            CheckResult with the outcome and parameters for the error message
        """
        handler_name, negated = split_negation(name)
        if not self.has(handler_name):
            handler_name, negated = split_negation(rule_name_from_identifier(name))
        result = check_formats(value, normalize_entry(self.get(handler_name)), options)
        return CheckResult(result.valid != negated, result.params)

    def is_valid(
        self,
        name: str,
        value: Any,
        options: Mapping[str, Any] | None = None,
    ) -> bool:
        """Check a single value against a handler. See evaluate()."""
        return self.evaluate(name, value, options).valid

    @staticmethod
    def values(
        data: Any,
        path: str | Iterable[str] = (),
        base: str | None = None,
    ) -> dict[str, Any]:
        """Extract the values located at a field path. See paths.extract_values().

        ``path`` is a dotted field path or its list of segments.
        """
        if isinstance(path, str):
            return extract_values(data, split_path(path), base)
        return extract_values(data, list(path), base)

    # =========================================================================
    # Rules
    # =========================================================================

    def rule(self, field: str, rules: Any = None) -> None:
        """Declare rules for a field.

        ``rules`` may be a handler name, a list of handler names and/or
        mappings, or a mapping of handler name -> message or options:

            validator.rule("title", "not:empty")
            validator.rule("title", {"not:empty": "please enter a title"})
            validator.rule("title", {"lengthBetween": {"min": 1, "max": 7}})
            validator.rule("email", ["not:empty", {"email": {"skipEmpty": True}}])

        Declaring a handler again for the same field replaces its options.
        """
        field_rules = self._rules.setdefault(field, {})
        for name, declaration in _iter_declarations(rules):
            field_rules[name] = RuleDefinition.from_declaration(name, declaration)
            logger.debug("Declared rule %s on %s", name, field)

    def rules(self) -> dict[str, dict[str, RuleDefinition]]:
        """Return the declared rules by field, in declaration order."""
        return {field: dict(rules) for field, rules in self._rules.items()}

    def validate(self, data: Any, options: Mapping[str, Any] | None = None) -> bool:
        """Validate data against the declared rules.

        Args:
            data: The data to validate, usually a (nested) dict
            options: Runtime options merged under every rule's own options.
                ``events`` (a tag or list of tags) skips rules whose ``on``
                scope does not include any of them.

        Returns:
            True if no rule failed. Failures are available through errors().

        Raises:
            UnknownHandlerError: If a rule references an unregistered handler
        """
        options = dict(options or {})
        events = options.get("events")
        if isinstance(events, str):
            events = [events]
        events = list(events or [])

        self._errors = {}

        for field, rules in self._rules.items():
            values = extract_values(data, split_path(field))

            for name, rule in rules.items():
                if not rule.applies_to(events):
                    logger.debug("Skipping %s on %s for events %s", name, field, events)
                    continue

                rule_options = {**options, **rule.to_options(), "field": field}

                if not values:
                    if rule.required:
                        rule_options["message"] = None
                        self._add_error(field, self.error_handler(REQUIRED, rule_options, self.meta))
                        break
                    continue

                for path, value in values.items():
                    if rule.skip_empty and is_empty(value):
                        logger.debug("Skipping empty value at %s for %s", path, name)
                        continue
                    result = self.evaluate(name, value, {**rule_options, "data": data})
                    if not result.valid:
                        message = self.error_handler(
                            name, {**rule_options, **result.params}, self.meta
                        )
                        self._add_error(path, message)

        logger.debug(
            "Validated %d field(s): %d with errors", len(self._rules), len(self._errors)
        )
        return not self._errors

    def errors(self) -> dict[str, list[str]]:
        """Return the errors of the last validate() call by resolved field path."""
        return {path: list(messages) for path, messages in self._errors.items()}

    def _add_error(self, path: str, message: str) -> None:
        self._errors.setdefault(path, []).append(message)

    # =========================================================================
    # Messages
    # =========================================================================

    def message(self, name: str) -> str:
        """Get the error message template for a handler."""
        if name in self._messages:
            return self._messages[name]
        return self.checker.message(name)

    def set_message(self, name: str, message: str) -> str:
        """Set a local error message template for a handler."""
        self._messages[name] = message
        return message

    def messages(
        self,
        messages: Mapping[str, str] | None = None,
        append: bool = True,
    ) -> dict[str, str]:
        """Get, merge or replace the local error messages.

        Returns:
            The available messages: local ones merged over the global ones
        """
        if messages is not None:
            if append:
                self._messages.update(messages)
            else:
                self._messages = dict(messages)
        return {**self.checker.messages(), **self._messages}

    def _render_error(
        self,
        name: str,
        options: Mapping[str, Any],
        meta: Mapping[str, Any],
    ) -> str:
        template = options.get("message") or self.message(name)
        return interpolate(template, options)


def _iter_declarations(rules: Any) -> Iterable[tuple[str, Any]]:
    """Yield (handler name, declaration) pairs from any accepted rule shape."""
    if rules is None:
        return
    if isinstance(rules, str):
        yield rules, None
    elif isinstance(rules, Mapping):
        yield from rules.items()
    elif isinstance(rules, (list, tuple)):
        for item in rules:
            yield from _iter_declarations(item)
    else:
        raise TypeError(
            f"Rules must be a handler name, a mapping or a list, got {type(rules).__name__}"
        )
