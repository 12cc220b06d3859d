"""Exceptions raised by rulekit.

Validation failures are never raised: they are collected in the error map
returned by ``Validator.errors()``. Exceptions signal configuration defects.
"""


class RuleKitError(Exception):
    """Base error for rulekit configuration problems."""
    pass


class UnknownHandlerError(RuleKitError, ValueError):
    """A rule or check references a handler that is not registered."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(
            f"Validation handler '{name}' is not registered. "
            "Handlers must be registered on the Checker or on the Validator before use."
        )


class RuleSetError(RuleKitError):
    """A declarative rule set file could not be loaded."""

    def __init__(self, message: str, issues: list | None = None):
        self.issues = issues or []
        super().__init__(message)
