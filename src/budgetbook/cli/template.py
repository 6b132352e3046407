#!/usr/bin/env python3
"""
Fixed-Cost Template Commands

Every change takes effect from an effective month on; earlier months keep
their historical entries. The effective month defaults to the current month
and is always asked for unless given with --effective.
"""

import click

from ..core.currency import format_cents
from ..core.dates import MonthKey
from .common import amount_option, get_book, handle_errors, month_option

effective_option = click.option(
    "--effective",
    prompt="Effective from (YYYY-MM)",
    default=lambda: str(MonthKey.current()),
    callback=month_option,
    help="First month the change applies to (YYYY-MM)",
)


@click.group()
def template() -> None:
    """Manage recurring fixed-cost templates."""
    pass


@template.command("list")
@click.pass_context
@handle_errors
def list_templates(ctx: click.Context) -> None:
    """List templates."""
    book = get_book(ctx)
    if not book.templates:
        click.echo("No fixed-cost templates")
        return
    for item in book.templates:
        click.echo(f"{item.id}  {item.name:<30} {format_cents(item.planned_cents):>14}")
    click.echo(f"Total planned: {format_cents(sum(t.planned_cents for t in book.templates))}")


@template.command("add")
@click.argument("name")
@click.argument("amount", callback=amount_option)
@effective_option
@click.pass_context
@handle_errors
def add(ctx: click.Context, name: str, amount: int, effective: MonthKey) -> None:
    """Add template NAME with planned AMOUNT (e.g. 900,00)."""
    created = get_book(ctx).add_template(name, amount, effective)
    click.echo(f"✅ Template {created.name!r} added from {effective} ({created.id})")


@template.command("update")
@click.argument("template_id")
@click.option("--name", help="New name (default: unchanged)")
@click.option("--amount", callback=amount_option, help="New planned amount (default: unchanged)")
@effective_option
@click.pass_context
@handle_errors
def update(ctx: click.Context, template_id: str, name: str | None, amount: int | None, effective: MonthKey) -> None:
    """Change template TEMPLATE_ID from the effective month on."""
    book = get_book(ctx)
    current = book.get_template(template_id)
    updated = book.update_template(
        template_id,
        name if name is not None else current.name,
        amount if amount is not None else current.planned_cents,
        effective,
    )
    click.echo(f"✅ Template {updated.name!r} updated from {effective}")


@template.command("remove")
@click.argument("template_id")
@effective_option
@click.confirmation_option(prompt="Really delete this template?")
@click.pass_context
@handle_errors
def remove(ctx: click.Context, template_id: str, effective: MonthKey) -> None:
    """Delete template TEMPLATE_ID from the effective month on."""
    get_book(ctx).remove_template(template_id, effective)
    click.echo(f"🗑️  Template {template_id} removed from {effective}")
