#!/usr/bin/env python3
"""
Aggregation Engine

Pure read-side computations over normalized month and year records:
cost summaries, budget-vs-actual status, expense classification and the
income carry-over flow. Nothing here mutates its inputs.
"""

from dataclasses import dataclass, fields
from enum import Enum

from ..core.config import DEFAULT_CLASSIFY_THRESHOLD_CENTS
from ..core.dates import month_key
from .models import MonthRecord, YearRecord


class BudgetStatus(Enum):
    """Actual spend relative to a budget."""

    OVER = "over"
    UNDER = "under"
    ON_TARGET = "on_target"


class CostClass(Enum):
    """Bucket an expense is filed into when it is recorded."""

    VARIABLE = "variable"
    MISC = "misc"


@dataclass(frozen=True)
class CostSummary:
    """Per-category cost totals in cents. Income is not part of the grand total."""

    food_cents: int = 0
    going_out_cents: int = 0
    fixed_actual_cents: int = 0
    variable_cents: int = 0
    misc_cents: int = 0
    total_cents: int = 0

    def __add__(self, other: "CostSummary") -> "CostSummary":
        return CostSummary(**{f.name: getattr(self, f.name) + getattr(other, f.name) for f in fields(self)})


@dataclass(frozen=True)
class MonthSummaryRow:
    month: int
    summary: CostSummary


@dataclass(frozen=True)
class CategoryStatus:
    """Budget vs. actual for one category of one month."""

    category: str
    budget_cents: int
    actual_cents: int

    @property
    def difference_cents(self) -> int:
        """Remaining budget; negative when overspent."""
        return self.budget_cents - self.actual_cents

    @property
    def status(self) -> BudgetStatus:
        return budget_status(self.actual_cents, self.budget_cents)


@dataclass(frozen=True)
class IncomeFlow:
    """Income and carry-over for one month in the chronological chain of all months."""

    has_previous_month: bool
    carried_from_previous_cents: int
    recorded_income_cents: int
    effective_income_cents: int
    expense_cents: int
    net_cents: int


def summarize_month(month: MonthRecord) -> CostSummary:
    """Cost totals of one month."""
    food = sum(day.food_cents for day in month.days)
    going_out = sum(day.going_out_cents for day in month.days)
    fixed_actual = sum(entry.actual_cents for entry in month.fixed_costs)
    # Legacy free-form bucket and budgeted positions both count as variable spend
    variable = sum(entry.amount_cents for entry in month.variable_costs) + sum(
        position.actual_cents for position in month.variable_positions or []
    )
    misc = sum(entry.amount_cents for entry in month.misc_costs)

    return CostSummary(
        food_cents=food,
        going_out_cents=going_out,
        fixed_actual_cents=fixed_actual,
        variable_cents=variable,
        misc_cents=misc,
        total_cents=food + going_out + fixed_actual + variable + misc,
    )


def summarize_year(year: YearRecord) -> CostSummary:
    """Field-wise sum of the month summaries."""
    total = CostSummary()
    for month in year.months:
        total = total + summarize_month(month)
    return total


def summarize_year_by_month(year: YearRecord) -> list[MonthSummaryRow]:
    """Month summaries ordered by month number."""
    return [
        MonthSummaryRow(month=month.month, summary=summarize_month(month))
        for month in sorted(year.months, key=lambda m: m.month)
    ]


def budget_status(actual_cents: int, budget_cents: int) -> BudgetStatus:
    """
    Compare actual spend with a budget.

    An unset budget (zero or negative) never flags a variance.
    """
    if budget_cents <= 0:
        return BudgetStatus.ON_TARGET
    if actual_cents > budget_cents:
        return BudgetStatus.OVER
    if actual_cents < budget_cents:
        return BudgetStatus.UNDER
    return BudgetStatus.ON_TARGET


def classify(amount_cents: int, threshold_cents: int = DEFAULT_CLASSIFY_THRESHOLD_CENTS) -> CostClass:
    """Expenses at or above the threshold are variable costs, smaller ones misc."""
    return CostClass.VARIABLE if amount_cents >= threshold_cents else CostClass.MISC


def month_budget_overview(month: MonthRecord) -> list[CategoryStatus]:
    """Budget vs. actual for each category of a month."""
    summary = summarize_month(month)
    return [
        CategoryStatus("food", month.food_budget_cents or 0, summary.food_cents),
        CategoryStatus("going_out", month.going_out_budget_cents or 0, summary.going_out_cents),
        CategoryStatus("fixed", month.fixed_budget_cents or 0, summary.fixed_actual_cents),
        CategoryStatus("variable", month.variable_budget_cents, summary.variable_cents),
        CategoryStatus("misc", month.misc_budget_cents or 0, summary.misc_cents),
    ]


def summarize_income_flow(years: list[YearRecord]) -> dict[int, IncomeFlow]:
    """
    Walk every month of every year chronologically and carry each month's net into the next.

    A month's carry-over override replaces the carried amount. The result is keyed by
    ``year * 100 + month``.
    """
    ordered = [
        (year.year, month)
        for year in sorted(years, key=lambda y: y.year)
        for month in sorted(year.months, key=lambda m: m.month)
    ]

    flows: dict[int, IncomeFlow] = {}
    carryover = 0

    for index, (year_number, month) in enumerate(ordered):
        override = month.carryover_override_cents
        has_override = override is not None
        carried = override if has_override else carryover

        recorded_income = sum(entry.amount_cents for entry in month.incomes or [])
        expenses = summarize_month(month).total_cents
        effective_income = recorded_income + carried
        net = effective_income - expenses

        flows[month_key(year_number, month.month)] = IncomeFlow(
            has_previous_month=index > 0 or has_override,
            carried_from_previous_cents=carried,
            recorded_income_cents=recorded_income,
            effective_income_cents=effective_income,
            expense_cents=expenses,
            net_cents=net,
        )
        carryover = net

    return flows
