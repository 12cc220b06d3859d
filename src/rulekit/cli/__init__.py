"""rulekit command line interface."""

from rulekit.cli.main import cli

__all__ = ["cli"]
