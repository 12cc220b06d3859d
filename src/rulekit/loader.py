"""Load declarative rule sets from YAML files.

A rule set file declares field rules, optional message overrides and
optional metadata:

    rules:
      title:
        - not:empty: please enter a title
        - lengthBetween: {min: 1, max: 80}
      emails.*: email
      status:
        inList:
          list: [draft, published]
          on: update
    messages:
      required: must be provided

Files are checked against ``schemas/ruleset.schema.json`` before loading.

PyYAML quirk: the bare key ``on:`` is parsed as boolean ``True``, not the string
``"on"``. Loaded documents are preprocessed to rename that key.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from jsonschema import Draft202012Validator
from jsonschema.exceptions import ValidationError

from rulekit.exceptions import RuleSetError
from rulekit.names import split_negation
from rulekit.validator import Validator

logger = logging.getLogger(__name__)

_SCHEMA_PATH = Path(__file__).parent / "schemas" / "ruleset.schema.json"

# Message keys that do not name a handler
_RESERVED_MESSAGE_KEYS = {"required", "_default_"}


@dataclass
class RuleSetIssue:
    """A single problem found in a rule set file."""

    file: Path
    message: str
    path: str = ""  # Location within the document, e.g. "rules/title[0]"

    def __str__(self) -> str:
        loc = f" at {self.path}" if self.path else ""
        return f"[ERROR] {self.file}{loc}: {self.message}"


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _load_schema() -> dict[str, Any]:
    with _SCHEMA_PATH.open() as fh:
        return json.load(fh)


def _preprocess_on_key(obj: Any) -> Any:
    """Recursively rename the boolean key ``True`` to ``"on"``."""
    if isinstance(obj, dict):
        return {("on" if k is True else k): _preprocess_on_key(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_preprocess_on_key(item) for item in obj]
    return obj


def _json_path(error: ValidationError) -> str:
    """Convert a jsonschema ValidationError path to a readable string."""
    parts = []
    for p in error.absolute_path:
        if isinstance(p, int):
            parts.append(f"[{p}]")
        else:
            parts.append(str(p))
    return "/".join(parts).replace("/[", "[")


def _read_document(path: Path) -> tuple[Any, list[RuleSetIssue]]:
    try:
        with path.open() as fh:
            raw = yaml.safe_load(fh)
    except yaml.YAMLError as exc:
        return None, [RuleSetIssue(file=path, message=f"YAML parse error: {exc}")]

    if raw is None:
        return None, [RuleSetIssue(file=path, message="File is empty or contains only whitespace")]

    return _preprocess_on_key(raw), []


def _schema_issues(path: Path, doc: Any) -> list[RuleSetIssue]:
    validator = Draft202012Validator(_load_schema())
    return [
        RuleSetIssue(file=path, message=error.message, path=_json_path(error))
        for error in sorted(validator.iter_errors(doc), key=lambda e: [str(p) for p in e.path])
    ]


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def validate_rule_file(path: Path) -> list[RuleSetIssue]:
    """Check a rule set file against the rule set schema.

    Returns:
        A list of RuleSetIssue objects (empty on success)
    """
    path = Path(path)
    doc, issues = _read_document(path)
    if issues:
        return issues
    return _schema_issues(path, doc)


def load_rule_file(path: Path) -> dict[str, Any]:
    """Load and check a rule set file.

    Returns:
        The document with ``rules``, ``messages`` and ``meta`` keys

    Raises:
        RuleSetError: If the file cannot be parsed or does not match the schema
    """
    path = Path(path)
    doc, issues = _read_document(path)
    if not issues:
        issues = _schema_issues(path, doc)
    if issues:
        raise RuleSetError(f"Invalid rule set {path}: {issues[0].message}", issues)

    return {
        "rules": doc["rules"],
        "messages": doc.get("messages", {}),
        "meta": doc.get("meta", {}),
    }


class RuleSetLoader:
    """Applies a rule set file to Validators.

    Example:
        loader = RuleSetLoader(Path("rules/article.yaml"))
        validator = loader.build()
        validator.validate(record)
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self._document: dict[str, Any] | None = None

    @property
    def document(self) -> dict[str, Any]:
        if self._document is None:
            self._document = load_rule_file(self.path)
            logger.debug(
                "Loaded %d field rule(s) from %s", len(self._document["rules"]), self.path
            )
        return self._document

    def apply(self, validator: Validator) -> Validator:
        """Declare the rule set's rules, messages and metadata on a Validator."""
        doc = self.document
        for field, declaration in doc["rules"].items():
            validator.rule(field, declaration)

        messages = doc["messages"]
        for name in messages:
            handler_name, _ = split_negation(name)
            if name not in _RESERVED_MESSAGE_KEYS and not validator.has(handler_name):
                logger.warning(
                    "Rule set %s declares a message for unknown handler '%s'", self.path, name
                )
        if messages:
            validator.messages(messages)

        validator.meta.update(doc["meta"])
        return validator

    def build(self, **config: Any) -> Validator:
        """Create a new Validator with this rule set applied."""
        return self.apply(Validator(config or None))

    def handler_names(self) -> list[str]:
        """List the handler names referenced by the rule set, without negation."""
        validator = Validator()
        for field, declaration in self.document["rules"].items():
            validator.rule(field, declaration)
        names = {
            split_negation(name)[0]
            for rules in validator.rules().values()
            for name in rules
        }
        return sorted(names)
