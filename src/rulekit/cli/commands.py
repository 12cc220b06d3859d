"""rulekit CLI commands: check, lint and handlers."""

import json
from pathlib import Path
from typing import Any

import click
import yaml

from rulekit.checker import Checker
from rulekit.config import Settings
from rulekit.exceptions import RuleKitError
from rulekit.formats import normalize_entry
from rulekit.loader import RuleSetLoader, validate_rule_file

EXIT_INVALID = 1
EXIT_CONFIG_ERROR = 2


def _load_data(path: Path) -> Any:
    """Load a data file: YAML for .yaml/.yml, JSON otherwise."""
    with path.open() as fh:
        if path.suffix.lower() in (".yaml", ".yml"):
            return yaml.safe_load(fh)
        return json.load(fh)


@click.command()
@click.argument("rules_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("data_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--event",
    "-e",
    "events",
    multiple=True,
    help="Only run rules scoped to this event (repeatable).",
)
@click.option("--json", "as_json", is_flag=True, default=False, help="Print errors as JSON.")
@click.pass_obj
def check(
    settings: Settings | None,
    rules_path: Path,
    data_path: Path,
    events: tuple[str, ...],
    as_json: bool,
):
    """Validate the DATA_PATH file against the RULES_PATH rule set."""
    settings = settings or Settings.from_env()
    selected = list(events) or settings.events

    try:
        data = _load_data(data_path)
    except (OSError, ValueError, yaml.YAMLError) as e:
        click.echo(click.style(f"Cannot read {data_path}: {e}", fg="red"), err=True)
        raise SystemExit(EXIT_CONFIG_ERROR)

    try:
        validator = RuleSetLoader(rules_path).build()
        valid = validator.validate(data, {"events": selected} if selected else {})
    except RuleKitError as e:
        click.echo(click.style(f"Configuration error: {e}", fg="red"), err=True)
        raise SystemExit(EXIT_CONFIG_ERROR)

    errors = validator.errors()

    if as_json:
        click.echo(json.dumps(errors, indent=2))
    else:
        for path, messages in errors.items():
            for message in messages:
                click.echo(click.style(f"{path}: {message}", fg="red"))
        if valid:
            click.echo(click.style("Data is valid.", fg="green", bold=True))
        else:
            count = sum(len(m) for m in errors.values())
            click.echo(
                click.style(
                    f"\n{count} error(s) in {len(errors)} field(s)", fg="red", bold=True
                )
            )

    if not valid:
        raise SystemExit(EXIT_INVALID)


@click.command()
@click.argument("rules_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def lint(rules_path: Path):
    """Check a rule set file against the schema and the registered handlers."""
    issues = [str(issue) for issue in validate_rule_file(rules_path)]

    if not issues:
        for name in RuleSetLoader(rules_path).handler_names():
            if not Checker.has(name):
                issues.append(f"[ERROR] {rules_path}: unknown handler '{name}'")

    for issue in issues:
        click.echo(click.style(issue, fg="red"))

    if issues:
        click.echo(click.style(f"\n{len(issues)} issue(s) found", fg="red", bold=True))
        raise SystemExit(EXIT_INVALID)

    click.echo(click.style("Rule set is valid.", fg="green", bold=True))


@click.command()
def handlers():
    """List the registered handlers with their default messages."""
    for name, entry in sorted(Checker.handlers().items()):
        formats = [f for f, _ in normalize_entry(entry) if f is not None]
        suffix = f" [{', '.join(formats)}]" if formats else ""
        click.echo(f"{name}{suffix}: {Checker.message(name)}")
