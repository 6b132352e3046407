#!/usr/bin/env python3
"""Month commands: show a month and edit its entries."""

import click

from ..core.currency import format_cents
from ..core.dates import MonthKey, month_key
from ..ledger.entries import BUDGET_FIELDS, DAY_FIELDS
from ..ledger.summary import BudgetStatus
from .common import amount_option, get_book, handle_errors, month_option, signed_amount_option

month_argument = click.argument("period", metavar="YYYY-MM", callback=month_option)

STATUS_MARKERS = {
    BudgetStatus.OVER: "▲ over",
    BudgetStatus.UNDER: "▼ under",
    BudgetStatus.ON_TARGET: "",
}


@click.group()
def month() -> None:
    """Show and edit one month."""
    pass


@month.command("show")
@month_argument
@click.option("--days", is_flag=True, help="Also list every day")
@click.pass_context
@handle_errors
def show(ctx: click.Context, period: MonthKey, days: bool) -> None:
    """Show fixed costs, positions, expenses, incomes and budget status."""
    book = get_book(ctx)
    record = book.get_month(period.year, period.month)

    click.echo(f"📅 {period}")

    click.echo("\nFixed costs:")
    for entry in record.fixed_costs:
        click.echo(
            f"  {entry.id}  {entry.name:<28} planned {format_cents(entry.planned_cents):>12}"
            f"  actual {format_cents(entry.actual_cents):>12}"
        )

    click.echo("\nVariable positions:")
    for position in record.variable_positions or []:
        click.echo(
            f"  {position.id}  {position.name:<28} budget {format_cents(position.budget_cents):>12}"
            f"  actual {format_cents(position.actual_cents):>12}"
        )

    for title, items in (
        ("Variable costs", record.variable_costs),
        ("Misc costs", record.misc_costs),
        ("Incomes", record.incomes or []),
    ):
        if items:
            click.echo(f"\n{title}:")
            for item in items:
                click.echo(f"  {item.id}  {item.description:<28} {format_cents(item.amount_cents):>12}")

    if days:
        click.echo("\nDays:")
        for day in record.days:
            click.echo(f"  {day.iso_date}  food {format_cents(day.food_cents):>10}  out {format_cents(day.going_out_cents):>10}")

    click.echo("\nBudget overview:")
    for status in book.month_overview(period.year, period.month):
        click.echo(
            f"  {status.category:<10} budget {format_cents(status.budget_cents):>12}"
            f"  actual {format_cents(status.actual_cents):>12}  {STATUS_MARKERS[status.status]}"
        )

    flow = book.income_flow().get(month_key(period.year, period.month))
    if flow is not None:
        carried = format_cents(flow.carried_from_previous_cents) if flow.has_previous_month else "-"
        click.echo(f"\nIncome {format_cents(flow.recorded_income_cents)}  carried over {carried}")
        click.echo(f"Spent {format_cents(flow.expense_cents)}  net {format_cents(flow.net_cents)}")


@month.command("set-day")
@month_argument
@click.argument("day", type=click.IntRange(1, 31))
@click.argument("kind", type=click.Choice(sorted(DAY_FIELDS)))
@click.argument("amount", callback=amount_option)
@click.pass_context
@handle_errors
def set_day(ctx: click.Context, period: MonthKey, day: int, kind: str, amount: int) -> None:
    """Set the food or going-out AMOUNT of DAY."""
    iso_date = f"{period}-{day:02d}"
    get_book(ctx).set_day_amount(period.year, period.month, iso_date, kind, amount)
    click.echo(f"✅ {iso_date} {kind}: {format_cents(amount)}")


@month.command("set-fixed-actual")
@month_argument
@click.argument("entry_id")
@click.argument("amount", callback=amount_option)
@click.pass_context
@handle_errors
def set_fixed_actual(ctx: click.Context, period: MonthKey, entry_id: str, amount: int) -> None:
    """Record what was really paid for fixed cost ENTRY_ID."""
    get_book(ctx).set_fixed_cost_actual(period.year, period.month, entry_id, amount)
    click.echo(f"✅ Actual set to {format_cents(amount)}")


@month.command("set-budget")
@month_argument
@click.argument("category", type=click.Choice(sorted(BUDGET_FIELDS)))
@click.argument("amount", callback=amount_option)
@click.pass_context
@handle_errors
def set_budget(ctx: click.Context, period: MonthKey, category: str, amount: int) -> None:
    """Set the monthly budget for CATEGORY."""
    get_book(ctx).set_month_budget(period.year, period.month, category, amount)
    click.echo(f"✅ {category} budget set to {format_cents(amount)}")


@month.command("set-carryover")
@month_argument
@click.argument("amount", required=False, callback=signed_amount_option)
@click.pass_context
@handle_errors
def set_carryover(ctx: click.Context, period: MonthKey, amount: int | None) -> None:
    """Override the carried-over amount; omit AMOUNT to clear the override."""
    get_book(ctx).set_carryover_override(period.year, period.month, amount)
    click.echo("✅ Carry-over override cleared" if amount is None else f"✅ Carry-over set to {format_cents(amount)}")


@month.command("add-position")
@month_argument
@click.argument("name")
@click.argument("budget", callback=amount_option)
@click.pass_context
@handle_errors
def add_position(ctx: click.Context, period: MonthKey, name: str, budget: int) -> None:
    """Add a variable position NAME with BUDGET."""
    position = get_book(ctx).add_variable_position(period.year, period.month, name, budget)
    click.echo(f"✅ Position {position.name!r} added ({position.id})")


@month.command("set-position-actual")
@month_argument
@click.argument("position_id")
@click.argument("amount", callback=amount_option)
@click.pass_context
@handle_errors
def set_position_actual(ctx: click.Context, period: MonthKey, position_id: str, amount: int) -> None:
    """Record the actual spend of variable position POSITION_ID."""
    get_book(ctx).set_variable_position_actual(period.year, period.month, position_id, amount)
    click.echo(f"✅ Actual set to {format_cents(amount)}")


@month.command("remove-position")
@month_argument
@click.argument("position_id")
@click.pass_context
@handle_errors
def remove_position(ctx: click.Context, period: MonthKey, position_id: str) -> None:
    """Delete variable position POSITION_ID."""
    get_book(ctx).remove_variable_position(period.year, period.month, position_id)
    click.echo(f"🗑️  Position {position_id} removed")


@month.command("add-expense")
@month_argument
@click.argument("description")
@click.argument("amount", callback=amount_option)
@click.option("--misc", "force_misc", is_flag=True, help="File as misc regardless of amount")
@click.pass_context
@handle_errors
def add_expense(ctx: click.Context, period: MonthKey, description: str, amount: int, force_misc: bool) -> None:
    """Record an expense; large amounts are filed as variable costs."""
    book = get_book(ctx)
    if force_misc:
        entry = book.add_misc_expense(period.year, period.month, description, amount)
        bucket = "misc"
    else:
        cost_class, entry = book.record_expense(period.year, period.month, description, amount)
        bucket = cost_class.value
    click.echo(f"✅ {bucket} expense {entry.description!r} {format_cents(entry.amount_cents)} ({entry.id})")


@month.command("add-income")
@month_argument
@click.argument("description")
@click.argument("amount", callback=amount_option)
@click.pass_context
@handle_errors
def add_income(ctx: click.Context, period: MonthKey, description: str, amount: int) -> None:
    """Record an income line."""
    entry = get_book(ctx).add_income(period.year, period.month, description, amount)
    click.echo(f"✅ Income {entry.description!r} {format_cents(entry.amount_cents)} ({entry.id})")


@month.command("remove-entry")
@month_argument
@click.argument("entry_id")
@click.pass_context
@handle_errors
def remove_entry(ctx: click.Context, period: MonthKey, entry_id: str) -> None:
    """Delete an expense or income line."""
    get_book(ctx).remove_expense(period.year, period.month, entry_id)
    click.echo(f"🗑️  Entry {entry_id} removed")
