"""
Analysis Package

Tabular reports over the ledger summaries (pandas DataFrames, CSV export).
"""

from .report import budget_overview_frame, format_cents_frame, year_summary_frame, write_csv

__all__ = [
    "budget_overview_frame",
    "format_cents_frame",
    "write_csv",
    "year_summary_frame",
]
