#!/usr/bin/env python3
"""
Main CLI Entry Point for Budget Book

Provides the unified command-line interface for the household ledger.
"""

import logging
import os

import click

from ..core.config import get_config, reload_config


@click.group()
@click.option(
    "--config-env",
    type=click.Choice(["development", "test", "production"]),
    help="Override environment configuration",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, config_env: str | None, verbose: bool, debug: bool) -> None:
    """
    Budget Book - household budgeting ledger

    Tracks a year of monthly records: daily food and going-out spend, recurring
    fixed costs from shared templates, variable positions, misc costs and income.
    """
    ctx.ensure_object(dict)

    if config_env:
        os.environ["BUDGETBOOK_ENV"] = config_env

    if debug:
        os.environ["LOG_LEVEL"] = "DEBUG"

    config = reload_config() if (config_env or debug) else get_config()
    if debug:
        logging.getLogger("budgetbook").setLevel(logging.DEBUG)

    ctx.obj["verbose"] = verbose
    ctx.obj["debug"] = debug
    ctx.obj["config"] = config

    if verbose:
        click.echo(f"Environment: {config.environment.value}")
        click.echo(f"Data directory: {config.data_dir}")


@main.command()
def version() -> None:
    """Show version information."""
    from budgetbook import __version__

    click.echo(f"Budget Book v{__version__}")


@main.command()
@click.pass_context
def config(ctx: click.Context) -> None:
    """Show current configuration."""
    config_obj = ctx.obj["config"]

    click.echo("Current Configuration:")
    click.echo(f"  Environment: {config_obj.environment.value}")
    click.echo(f"  Data Directory: {config_obj.data_dir}")
    click.echo(f"  Ledger Directory: {config_obj.storage.ledger_dir}")
    click.echo(f"  Backup Directory: {config_obj.storage.backup_dir}")
    click.echo(f"  Classification Threshold: {config_obj.ledger.classify_threshold_cents} cents")
    click.echo(f"  Debug Mode: {config_obj.debug}")
    click.echo(f"  Log Level: {config_obj.log_level}")


@main.command()
@click.pass_context
def status(ctx: click.Context) -> None:
    """Show what is stored in the ledger directory."""
    from ..storage.json_store import JsonLedgerStore

    store = JsonLedgerStore(ctx.obj["config"].storage.ledger_dir)
    click.echo(f"📊 {store.summary_text()}")
    if store.exists():
        click.echo(f"  Size: {store.size_bytes()} bytes")
        click.echo(f"  Last modified: {store.last_modified():%Y-%m-%d %H:%M} ({store.age_days()} days ago)")


from .backup import backup  # noqa: E402
from .month import month  # noqa: E402
from .report import report  # noqa: E402
from .template import template  # noqa: E402
from .year import year  # noqa: E402

main.add_command(year)
main.add_command(template)
main.add_command(month)
main.add_command(backup)
main.add_command(report)


if __name__ == "__main__":
    main()
