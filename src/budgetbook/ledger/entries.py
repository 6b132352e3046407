#!/usr/bin/env python3
"""
Month Entry Operations

Direct edits of a single month: daily amounts, fixed-cost actuals, monthly
budgets, variable positions, misc expenses and incomes.

Every function validates its input before touching the month, so a rejected
edit leaves the record unchanged.
"""

from ..core.config import DEFAULT_CLASSIFY_THRESHOLD_CENTS
from ..core.currency import validate_cents
from ..core.dates import now_iso
from ..core.errors import NotFoundError, ValidationError
from ..core.ids import create_id
from .models import ExpenseEntry, MonthRecord, VariableBudgetPosition
from .summary import CostClass, classify

BUDGET_FIELDS = {
    "food": "food_budget_cents",
    "going_out": "going_out_budget_cents",
    "fixed": "fixed_budget_cents",
    "misc": "misc_budget_cents",
}

DAY_FIELDS = {
    "food": "food_cents",
    "going_out": "going_out_cents",
}


def _clean_text(value: str, what: str) -> str:
    cleaned = (value or "").strip()
    if not cleaned:
        raise ValidationError(f"{what} must not be empty")
    return cleaned


def _require_positive(amount_cents: int, what: str) -> int:
    validate_cents(amount_cents, what)
    if amount_cents <= 0:
        raise ValidationError(f"{what} must be positive")
    return amount_cents


def create_expense(description: str, amount_cents: int) -> ExpenseEntry:
    """Build a new expense or income line stamped with the current time."""
    return ExpenseEntry(
        id=create_id("expense"),
        description=description,
        amount_cents=amount_cents,
        created_at=now_iso(),
    )


def set_day_amount(month: MonthRecord, iso_date: str, kind: str, amount_cents: int) -> None:
    """Set the food or going-out amount of one day."""
    if kind not in DAY_FIELDS:
        raise ValidationError(f"Unknown day amount {kind!r}, expected one of {sorted(DAY_FIELDS)}")
    validate_cents(amount_cents)
    for day in month.days:
        if day.iso_date == iso_date:
            setattr(day, DAY_FIELDS[kind], amount_cents)
            return
    raise NotFoundError(f"Day {iso_date} is not part of month {month.month}")


def set_fixed_cost_actual(month: MonthRecord, entry_id: str, amount_cents: int) -> None:
    """Record what was really paid for a fixed cost this month."""
    validate_cents(amount_cents)
    for entry in month.fixed_costs:
        if entry.id == entry_id:
            entry.actual_cents = amount_cents
            return
    raise NotFoundError(f"Fixed cost {entry_id} not found in month {month.month}")


def set_month_budget(month: MonthRecord, category: str, amount_cents: int) -> None:
    """
    Set a monthly budget.

    Setting the fixed budget overrides the planned sum; later normalization keeps it.
    The variable budget is derived from the positions and cannot be set.
    """
    if category not in BUDGET_FIELDS:
        raise ValidationError(f"Unknown budget {category!r}, expected one of {sorted(BUDGET_FIELDS)}")
    validate_cents(amount_cents)
    setattr(month, BUDGET_FIELDS[category], amount_cents)


def set_carryover_override(month: MonthRecord, amount_cents: int | None) -> None:
    """Override the amount carried over from the previous month, or clear it with None."""
    if amount_cents is not None and (isinstance(amount_cents, bool) or not isinstance(amount_cents, int)):
        raise ValidationError(f"Carry-over must be an integer number of cents, got {amount_cents!r}")
    month.carryover_override_cents = amount_cents


def add_variable_position(month: MonthRecord, name: str, budget_cents: int) -> VariableBudgetPosition:
    """Add a budgeted position at the top of the month's list."""
    clean_name = _clean_text(name, "Position name")
    validate_cents(budget_cents, "budget")
    position = VariableBudgetPosition(id=create_id("varpos"), name=clean_name, budget_cents=budget_cents)
    month.variable_positions = [position, *(month.variable_positions or [])]
    return position


def set_variable_position_actual(month: MonthRecord, position_id: str, actual_cents: int) -> None:
    validate_cents(actual_cents)
    for position in month.variable_positions or []:
        if position.id == position_id:
            position.actual_cents = actual_cents
            return
    raise NotFoundError(f"Variable position {position_id} not found in month {month.month}")


def remove_variable_position(month: MonthRecord, position_id: str) -> None:
    positions = month.variable_positions or []
    remaining = [position for position in positions if position.id != position_id]
    if len(remaining) == len(positions):
        raise NotFoundError(f"Variable position {position_id} not found in month {month.month}")
    month.variable_positions = remaining


def add_misc_expense(month: MonthRecord, description: str, amount_cents: int) -> ExpenseEntry:
    """Add a misc expense at the top of the month's list."""
    entry = create_expense(_clean_text(description, "Description"), _require_positive(amount_cents, "Amount"))
    month.misc_costs = [entry, *month.misc_costs]
    return entry


def add_income(month: MonthRecord, description: str, amount_cents: int) -> ExpenseEntry:
    """Add an income line at the top of the month's list."""
    entry = create_expense(_clean_text(description, "Description"), _require_positive(amount_cents, "Income"))
    month.incomes = [entry, *(month.incomes or [])]
    return entry


def record_expense(
    month: MonthRecord,
    description: str,
    amount_cents: int,
    threshold_cents: int = DEFAULT_CLASSIFY_THRESHOLD_CENTS,
) -> tuple[CostClass, ExpenseEntry]:
    """
    File an expense by amount: variable costs at or above the threshold, misc below.

    The bucket is fixed at creation; editing the amount later does not move it.
    """
    entry = create_expense(_clean_text(description, "Description"), _require_positive(amount_cents, "Amount"))
    cost_class = classify(amount_cents, threshold_cents)
    if cost_class is CostClass.VARIABLE:
        month.variable_costs = [entry, *month.variable_costs]
    else:
        month.misc_costs = [entry, *month.misc_costs]
    return cost_class, entry


def remove_expense(month: MonthRecord, entry_id: str) -> str:
    """
    Remove a misc, legacy variable or income line by id.

    Returns:
        Name of the list the entry was removed from
    """
    for list_name in ("misc_costs", "variable_costs", "incomes"):
        entries = getattr(month, list_name) or []
        remaining = [entry for entry in entries if entry.id != entry_id]
        if len(remaining) != len(entries):
            setattr(month, list_name, remaining)
            return list_name
    raise NotFoundError(f"Entry {entry_id} not found in month {month.month}")
