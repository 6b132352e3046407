#!/usr/bin/env python3
"""Year commands: create, list, delete."""

import click

from ..core.currency import format_cents
from .common import get_book, handle_errors


@click.group()
def year() -> None:
    """Create, list and delete years."""
    pass


@year.command("create")
@click.argument("year_number", type=int)
@click.pass_context
@handle_errors
def create(ctx: click.Context, year_number: int) -> None:
    """Create YEAR_NUMBER with twelve months seeded from the current templates."""
    book = get_book(ctx)
    record = book.create_year(year_number)
    fixed = record.months[0].fixed_budget_cents or 0
    click.echo(f"✅ Year {record.year} created ({len(book.templates)} fixed costs, {format_cents(fixed)}/month)")


@year.command("list")
@click.pass_context
@handle_errors
def list_years(ctx: click.Context) -> None:
    """List stored years with their total spend."""
    book = get_book(ctx)
    if not book.years:
        click.echo("No years yet. Create one with: budgetbook year create 2026")
        return
    for record in book.years:
        total = book.year_summary(record.year).total_cents
        click.echo(f"{record.year}  spent {format_cents(total)}")


@year.command("delete")
@click.argument("year_number", type=int)
@click.confirmation_option(prompt="Really delete this year?")
@click.pass_context
@handle_errors
def delete(ctx: click.Context, year_number: int) -> None:
    """Delete YEAR_NUMBER and all its months."""
    get_book(ctx).delete_year(year_number)
    click.echo(f"🗑️  Year {year_number} deleted")
