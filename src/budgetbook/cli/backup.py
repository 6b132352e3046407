#!/usr/bin/env python3
"""Backup commands: export and import the whole ledger as one JSON file."""

from pathlib import Path

import click

from .common import get_book, handle_errors
from ..storage.backup import backup_filename


@click.group()
def backup() -> None:
    """Export and import full-ledger backups."""
    pass


@backup.command("export")
@click.option("--output", "-o", type=click.Path(dir_okay=False, path_type=Path), help="Backup file to write")
@click.pass_context
@handle_errors
def export(ctx: click.Context, output: Path | None) -> None:
    """Write all years and templates to a backup file."""
    book = get_book(ctx)
    target = output or ctx.obj["config"].storage.backup_dir / backup_filename()
    written = book.export_backup(target)
    click.echo(f"✅ Backup written to {written} ({len(book.years)} years, {len(book.templates)} templates)")


@backup.command("import")
@click.argument("backup_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.confirmation_option(prompt="Importing replaces ALL years and templates. Continue?")
@click.pass_context
@handle_errors
def import_(ctx: click.Context, backup_file: Path) -> None:
    """Replace the ledger with BACKUP_FILE."""
    book = get_book(ctx)
    report = book.import_backup(backup_file)
    click.echo(f"✅ Imported {len(book.years)} years and {len(book.templates)} templates from {backup_file}")
    if report.months_healed:
        click.echo(f"   Upgraded {report.months_healed} months from an older format")
