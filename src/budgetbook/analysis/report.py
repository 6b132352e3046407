#!/usr/bin/env python3
"""
Ledger Reports

Turns month summaries and budget overviews into pandas DataFrames for display
and CSV export. All numeric columns stay integer cents; formatting to euro
strings happens only in format_cents_frame.
"""

import logging
from pathlib import Path

import pandas as pd

from ..core.currency import format_cents
from ..ledger.summary import CategoryStatus, CostSummary, MonthSummaryRow

logger = logging.getLogger(__name__)

SUMMARY_COLUMNS = {
    "food_cents": "food",
    "going_out_cents": "going_out",
    "fixed_actual_cents": "fixed",
    "variable_cents": "variable",
    "misc_cents": "misc",
    "total_cents": "total",
}


def _summary_values(summary: CostSummary) -> dict[str, int]:
    return {column: getattr(summary, attr) for attr, column in SUMMARY_COLUMNS.items()}


def year_summary_frame(rows: list[MonthSummaryRow], include_total: bool = True) -> pd.DataFrame:
    """
    One row per month with category totals in cents.

    Args:
        rows: Month summaries ordered by month
        include_total: Append a "total" row with the column sums

    Returns:
        DataFrame indexed by month number (and "total")
    """
    df = pd.DataFrame(
        [_summary_values(row.summary) for row in rows],
        index=pd.Index([row.month for row in rows], name="month", dtype="object"),
        columns=list(SUMMARY_COLUMNS.values()),
    ).astype("int64")

    if include_total:
        totals = df.sum(axis=0).to_frame("total").T
        df = pd.concat([df, totals]).astype("int64")
        df.index.name = "month"

    return df


def budget_overview_frame(statuses: list[CategoryStatus]) -> pd.DataFrame:
    """Budget, actual, difference and status per category."""
    return pd.DataFrame(
        {
            "budget": [s.budget_cents for s in statuses],
            "actual": [s.actual_cents for s in statuses],
            "difference": [s.difference_cents for s in statuses],
            "status": [s.status.value for s in statuses],
        },
        index=pd.Index([s.category for s in statuses], name="category"),
    )


def format_cents_frame(df: pd.DataFrame) -> pd.DataFrame:
    """Copy of the frame with integer columns rendered as euro strings."""
    formatted = df.copy()
    for column in formatted.columns:
        if pd.api.types.is_integer_dtype(formatted[column]):
            formatted[column] = formatted[column].map(format_cents)
    return formatted


def write_csv(df: pd.DataFrame, path: str | Path) -> Path:
    """Write a report frame as CSV."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(path)
    logger.info(f"Wrote report to {path}")
    return path
