"""rulekit: a rule-based data validation engine.

Fields are declared with named rules; data is validated against them and
failures are collected per resolved field path:
- Handlers: named checks (a regex, a callable or a set of named formats)
- Checker: the process-wide handler and message registry
- Validator: per-instance rules, local handlers/messages and the error map
- RuleSetLoader: declarative rule sets loaded from YAML

Usage:
    from rulekit import Validator

    validator = Validator()
    validator.rule("people.*.email", "email")
    validator.validate({"people": [{"email": "bad"}]})  # False
    validator.errors()  # {"people.0.email": ["is not a valid email address"]}
"""

from rulekit.checker import Checker
from rulekit.config import Settings, ValidatorConfig
from rulekit.exceptions import RuleKitError, RuleSetError, UnknownHandlerError
from rulekit.formats import check_formats
from rulekit.loader import RuleSetIssue, RuleSetLoader, load_rule_file, validate_rule_file
from rulekit.messages import MessageInterpolator
from rulekit.names import rule_name_from_identifier, split_negation
from rulekit.paths import extract_values
from rulekit.types import CheckResult, Pattern, Predicate, RuleDefinition
from rulekit.validator import Validator

__all__ = [
    # Types
    "CheckResult",
    "Pattern",
    "Predicate",
    "RuleDefinition",
    # Registry and engine
    "Checker",
    "Validator",
    "check_formats",
    "extract_values",
    "rule_name_from_identifier",
    "split_negation",
    "MessageInterpolator",
    # Configuration
    "Settings",
    "ValidatorConfig",
    # Rule sets
    "RuleSetIssue",
    "RuleSetLoader",
    "load_rule_file",
    "validate_rule_file",
    # Errors
    "RuleKitError",
    "RuleSetError",
    "UnknownHandlerError",
]
