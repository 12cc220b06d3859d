"""Process-wide handler registry for rulekit.

The Checker holds the global validation handlers and default error messages.
Every Validator falls back to it for handlers and messages it does not
define locally. The tables are filled with the builtin catalog on first use.

Configure the Checker once at application startup, before validating
concurrently: it provides no locking.

Example:
    # Register a global handler
    Checker.set("zeroToNine", r"[0-9]")

    Checker.is_valid("zeroToNine", "5")  # True
    Checker.is_valid("not:zeroToNine", "5")  # False
"""

import logging
from typing import Any, Mapping

from rulekit.exceptions import UnknownHandlerError
from rulekit.formats import check_formats, normalize_entry
from rulekit.names import split_negation
from rulekit.types import DEFAULT_MESSAGE_KEY, CheckResult, HandlerEntry

logger = logging.getLogger(__name__)

DEFAULT_MESSAGE = "is invalid"


class Checker:
    """Global registry of validation handlers and error messages.

    Handlers are stored as registered: a regular expression, a callable,
    or a mapping of format names to either (multi-format handlers).

    Each subclass keeps its own tables, filled with the builtins on first use,
    so a subclass can serve as an isolated registry for a Validator.
    """

    _handlers: dict[str, HandlerEntry] = {}
    _messages: dict[str, str] = {DEFAULT_MESSAGE_KEY: DEFAULT_MESSAGE}
    _loaded: bool = False

    @classmethod
    def _ensure_loaded(cls) -> None:
        if not cls.__dict__.get("_loaded", False):
            cls.reset()

    @classmethod
    def set(
        cls,
        name: str | Mapping[str, HandlerEntry],
        handler: HandlerEntry | None = None,
    ) -> None:
        """Register one handler, or several from a mapping of name -> handler.

        Re-registering a name replaces the previous handler.

        Args:
            name: Handler name, or a mapping of names to handlers
            handler: A regular expression, a callable (value, options) -> bool
                or CheckResult, or a mapping of format names to either
        """
        cls._ensure_loaded()
        entries = name if isinstance(name, Mapping) else {name: handler}
        for key, entry in entries.items():
            normalize_entry(entry)
            cls._handlers[key] = entry

    @classmethod
    def has(cls, name: str) -> bool:
        """Check if a handler is registered."""
        cls._ensure_loaded()
        return name in cls._handlers

    @classmethod
    def get(cls, name: str) -> HandlerEntry:
        """Get a registered handler.

        Raises:
            UnknownHandlerError: If the handler is not registered
        """
        cls._ensure_loaded()
        if name not in cls._handlers:
            raise UnknownHandlerError(name)
        return cls._handlers[name]

    @classmethod
    def handlers(
        cls,
        handlers: Mapping[str, HandlerEntry] | None = None,
        append: bool = True,
    ) -> dict[str, HandlerEntry]:
        """Get, merge or replace the registered handlers.

        Args:
            handlers: Handlers to add; None only reads the table
            append: Merge into the table if True, replace it if False

        Returns:
            A copy of the handler table
        """
        cls._ensure_loaded()
        if handlers is not None:
            for entry in handlers.values():
                normalize_entry(entry)
            if append:
                cls._handlers.update(handlers)
            else:
                cls._handlers = dict(handlers)
        return dict(cls._handlers)

    @classmethod
    def evaluate(
        cls,
        name: str,
        value: Any,
        options: Mapping[str, Any] | None = None,
    ) -> CheckResult:
        """Check a value against a handler, honouring the ``not:`` prefix.

        Returns:
            CheckResult with the (possibly negated) outcome and the parameters
            reported by the handler for message rendering
        """
        handler_name, negated = split_negation(name)
        result = check_formats(value, normalize_entry(cls.get(handler_name)), options)
        return CheckResult(result.valid != negated, result.params)

    @classmethod
    def is_valid(
        cls,
        name: str,
        value: Any,
        options: Mapping[str, Any] | None = None,
    ) -> bool:
        """Check a value against a handler. See evaluate()."""
        return cls.evaluate(name, value, options).valid

    @staticmethod
    def check(
        value: Any,
        handlers: Any,
        options: Mapping[str, Any] | None = None,
    ) -> CheckResult:
        """Check a value against a set of formats. See formats.check_formats()."""
        return check_formats(value, handlers, options)

    @classmethod
    def message(cls, name: str) -> str:
        """Get the default error message for a handler."""
        cls._ensure_loaded()
        return cls._messages.get(name, cls._messages.get(DEFAULT_MESSAGE_KEY, DEFAULT_MESSAGE))

    @classmethod
    def set_message(cls, name: str, message: str) -> str:
        """Set the default error message for a handler."""
        cls._ensure_loaded()
        cls._messages[name] = message
        return message

    @classmethod
    def messages(
        cls,
        messages: Mapping[str, str] | None = None,
        append: bool = True,
    ) -> dict[str, str]:
        """Get, merge or replace the default error messages.

        Replacing keeps the ``_default_`` fallback unless the new table sets it.
        """
        cls._ensure_loaded()
        if messages is not None:
            if append:
                cls._messages.update(messages)
            else:
                cls._messages = {**messages}
                cls._messages.setdefault(DEFAULT_MESSAGE_KEY, DEFAULT_MESSAGE)
        return dict(cls._messages)

    @classmethod
    def reset(cls) -> None:
        """Restore the builtin handlers and messages."""
        from rulekit.handlers import DEFAULT_MESSAGES, builtin_handlers

        cls._handlers = builtin_handlers()
        cls._messages = {DEFAULT_MESSAGE_KEY: DEFAULT_MESSAGE, **DEFAULT_MESSAGES}
        cls._loaded = True
        logger.debug("Checker reset with %d builtin handlers", len(cls._handlers))

    @classmethod
    def reset_empty(cls) -> None:
        """Remove every handler and message except the ``_default_`` message."""
        cls._handlers = {}
        cls._messages = {DEFAULT_MESSAGE_KEY: DEFAULT_MESSAGE}
        cls._loaded = True
        logger.debug("Checker emptied")
