"""rulekit CLI entry point."""

import logging

import click

from rulekit.config import Settings


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log at DEBUG level.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool):
    """rulekit: rule-based data validation CLI."""
    settings = Settings.from_env()
    level = logging.DEBUG if verbose else getattr(logging, settings.log_level, logging.WARNING)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
    ctx.obj = settings


# Register subcommands
from rulekit.cli.commands import check, handlers, lint  # noqa: E402

cli.add_command(check)
cli.add_command(lint)
cli.add_command(handlers)
