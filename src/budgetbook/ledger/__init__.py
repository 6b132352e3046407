"""
Ledger Package

Year records and the rules that keep them consistent:
- models: entity shapes and their JSON form
- factory: build a calendar-correct year seeded from templates
- templates: forward-only propagation of template changes
- normalize: upgrade records from older schema versions
- entries: direct edits of one month
- summary: cost totals, budget status, classification, income flow
"""

from .factory import create_month_days, create_year
from .models import (
    BackupPayload,
    DayEntry,
    ExpenseEntry,
    FixedCostEntry,
    FixedCostTemplate,
    MonthRecord,
    VariableBudgetPosition,
    YearRecord,
)
from .normalize import normalize_years
from .summary import (
    BudgetStatus,
    CostClass,
    CostSummary,
    budget_status,
    classify,
    summarize_income_flow,
    summarize_month,
    summarize_year,
    summarize_year_by_month,
)
from .templates import (
    apply_template_to_future_months,
    remove_template_from_future_months,
    update_template_in_future_months,
)

__all__ = [
    "BackupPayload",
    "BudgetStatus",
    "CostClass",
    "CostSummary",
    "DayEntry",
    "ExpenseEntry",
    "FixedCostEntry",
    "FixedCostTemplate",
    "MonthRecord",
    "VariableBudgetPosition",
    "YearRecord",
    "apply_template_to_future_months",
    "budget_status",
    "classify",
    "create_month_days",
    "create_year",
    "normalize_years",
    "remove_template_from_future_months",
    "summarize_income_flow",
    "summarize_month",
    "summarize_year",
    "summarize_year_by_month",
    "update_template_in_future_months",
]
