"""Configuration for rulekit validators and the command line."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping


@dataclass
class ValidatorConfig:
    """Construction options for a Validator.

    Attributes:
        handlers: Local handlers, shadowing the global ones
        messages: Local error messages, shadowing the global ones
        meta: Free-form metadata passed to the error handler (e.g. model name, locale)
        error: Error handler (name, options, meta) -> message; None renders the
            rule's message or the handler's default message
    """

    handlers: dict[str, Any] = field(default_factory=dict)
    messages: dict[str, str] = field(default_factory=dict)
    meta: dict[str, Any] = field(default_factory=dict)
    error: Callable[..., str] | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ValidatorConfig:
        """Create ValidatorConfig from a plain dict."""
        unknown = set(data) - {"handlers", "messages", "meta", "error"}
        if unknown:
            raise ValueError(f"Unknown validator option(s): {', '.join(sorted(unknown))}")

        return cls(
            handlers=dict(data.get("handlers") or {}),
            messages=dict(data.get("messages") or {}),
            meta=dict(data.get("meta") or {}),
            error=data.get("error"),
        )


@dataclass
class Settings:
    """Process settings for the rulekit command line."""

    log_level: str = "WARNING"
    events: list[str] = field(default_factory=list)

    @classmethod
    def from_env(cls) -> Settings:
        """Create settings from environment variables.

        - RULEKIT_LOG_LEVEL: logging level name (default WARNING)
        - RULEKIT_EVENTS: comma-separated events applied when none are given
        """
        events = os.environ.get("RULEKIT_EVENTS", "")
        return cls(
            log_level=os.environ.get("RULEKIT_LOG_LEVEL", "WARNING").upper(),
            events=[e.strip() for e in events.split(",") if e.strip()],
        )
