#!/usr/bin/env python3
"""Report commands: month budget overview and year summary by month."""

from pathlib import Path

import click

from ..analysis import budget_overview_frame, format_cents_frame, write_csv, year_summary_frame
from ..core.dates import MonthKey
from .common import get_book, handle_errors, month_option


@click.group()
def report() -> None:
    """Month and year summaries."""
    pass


@report.command("month")
@click.argument("period", metavar="YYYY-MM", callback=month_option)
@click.option("--csv", "csv_path", type=click.Path(dir_okay=False, path_type=Path), help="Also write CSV (cents)")
@click.pass_context
@handle_errors
def month_report(ctx: click.Context, period: MonthKey, csv_path: Path | None) -> None:
    """Budget vs. actual per category for one month."""
    df = budget_overview_frame(get_book(ctx).month_overview(period.year, period.month))
    click.echo(f"📋 Budget overview {period}")
    click.echo(format_cents_frame(df).to_string())
    if csv_path:
        click.echo(f"\n✅ CSV written to {write_csv(df, csv_path)}")


@report.command("year")
@click.argument("year_number", type=int)
@click.option("--csv", "csv_path", type=click.Path(dir_okay=False, path_type=Path), help="Also write CSV (cents)")
@click.pass_context
@handle_errors
def year_report(ctx: click.Context, year_number: int, csv_path: Path | None) -> None:
    """Category totals for every month of a year."""
    df = year_summary_frame(get_book(ctx).year_summary_by_month(year_number))
    click.echo(f"📋 Spending {year_number}")
    click.echo(format_cents_frame(df).to_string())
    if csv_path:
        click.echo(f"\n✅ CSV written to {write_csv(df, csv_path)}")
