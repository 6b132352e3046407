#!/usr/bin/env python3
"""
Ledger Domain Models

Type-safe models for a year of household budget records.

All amounts are integer euro cents. The persisted JSON shape uses camelCase keys
(``plannedCents``, ``fixedBudgetCents`` ...) so files written by older versions of
the application load unchanged. In ``from_dict``, fields that older schema
versions did not write come back as ``None`` and are filled in by
``budgetbook.ledger.normalize``.
"""

from dataclasses import dataclass, field
from typing import Any


def _number_or_none(value: Any) -> int | None:
    """Stored amount as int cents, or None if it is not a whole number."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def _cents(value: Any, default: int | None = 0) -> int | None:
    """
    Coerce a stored amount to int cents; ``default`` if it is absent.

    Raises:
        ValueError: If a value is present but not a whole number
    """
    if value is None:
        return default
    cents = _number_or_none(value)
    if cents is None:
        raise ValueError(f"Invalid amount {value!r}, expected integer cents")
    return cents


def _list(value: Any) -> list | None:
    return value if isinstance(value, list) else None


@dataclass
class FixedCostTemplate:
    """Recurring fixed-cost definition, independent of any year."""

    id: str
    name: str
    planned_cents: int

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "plannedCents": self.planned_cents}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FixedCostTemplate":
        return cls(
            id=data["id"],
            name=data["name"],
            planned_cents=_cents(data.get("plannedCents")),
        )


@dataclass
class FixedCostEntry:
    """
    A month's snapshot of a template.

    ``template_id`` is a plain identifier; the template it names may no longer exist.
    """

    id: str
    template_id: str
    name: str
    planned_cents: int
    actual_cents: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "templateId": self.template_id,
            "name": self.name,
            "plannedCents": self.planned_cents,
            "actualCents": self.actual_cents,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FixedCostEntry":
        return cls(
            id=data["id"],
            template_id=data.get("templateId", ""),
            name=data.get("name", ""),
            planned_cents=_cents(data.get("plannedCents")),
            actual_cents=_cents(data.get("actualCents")),
        )


@dataclass
class VariableBudgetPosition:
    """Budgeted discretionary position that lives inside one month."""

    id: str
    name: str
    budget_cents: int
    actual_cents: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "budgetCents": self.budget_cents,
            "actualCents": self.actual_cents,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "VariableBudgetPosition":
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            budget_cents=_cents(data.get("budgetCents")),
            actual_cents=_cents(data.get("actualCents")),
        )


@dataclass
class ExpenseEntry:
    """Misc cost, legacy variable cost or income line."""

    id: str
    description: str
    amount_cents: int
    created_at: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "description": self.description,
            "amountCents": self.amount_cents,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ExpenseEntry":
        return cls(
            id=data["id"],
            description=data.get("description", ""),
            amount_cents=_cents(data.get("amountCents")),
            created_at=data.get("createdAt", ""),
        )


@dataclass
class DayEntry:
    """Daily food and going-out spend."""

    iso_date: str
    food_cents: int = 0
    going_out_cents: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "isoDate": self.iso_date,
            "foodCents": self.food_cents,
            "goingOutCents": self.going_out_cents,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DayEntry":
        return cls(
            iso_date=data["isoDate"],
            food_cents=_cents(data.get("foodCents")),
            going_out_cents=_cents(data.get("goingOutCents")),
        )


@dataclass
class MonthRecord:
    """
    One month of a year record.

    Fields typed ``X | None`` may be absent in records written by older schema
    versions; after normalization they are always set (except the carry-over
    override, where ``None`` means "no override").
    """

    month: int
    days: list[DayEntry] = field(default_factory=list)
    fixed_costs: list[FixedCostEntry] = field(default_factory=list)
    fixed_budget_cents: int | None = 0
    variable_costs: list[ExpenseEntry] = field(default_factory=list)
    variable_positions: list[VariableBudgetPosition] | None = field(default_factory=list)
    misc_costs: list[ExpenseEntry] = field(default_factory=list)
    incomes: list[ExpenseEntry] | None = field(default_factory=list)
    food_budget_cents: int | None = 0
    going_out_budget_cents: int | None = 0
    misc_budget_cents: int | None = 0
    carryover_override_cents: int | None = None

    @property
    def variable_budget_cents(self) -> int:
        """Sum of the positions' budgets. Derived, never read from storage."""
        return sum(position.budget_cents for position in self.variable_positions or [])

    @property
    def planned_fixed_cents(self) -> int:
        """Sum of the fixed-cost entries' planned amounts."""
        return sum(entry.planned_cents for entry in self.fixed_costs)

    def recalculate_fixed_budget(self) -> None:
        """Reset the fixed budget to the planned sum, discarding any manual override."""
        self.fixed_budget_cents = self.planned_fixed_cents

    def to_dict(self) -> dict[str, Any]:
        return {
            "month": self.month,
            "days": [day.to_dict() for day in self.days],
            "fixedCosts": [entry.to_dict() for entry in self.fixed_costs],
            "fixedBudgetCents": self.fixed_budget_cents,
            "variableCosts": [entry.to_dict() for entry in self.variable_costs],
            "variablePositions": [position.to_dict() for position in self.variable_positions or []],
            "variableBudgetCents": self.variable_budget_cents,
            "miscCosts": [entry.to_dict() for entry in self.misc_costs],
            "incomes": [entry.to_dict() for entry in self.incomes or []],
            "foodBudgetCents": self.food_budget_cents,
            "goingOutBudgetCents": self.going_out_budget_cents,
            "miscBudgetCents": self.misc_budget_cents,
            "carryoverOverrideCents": self.carryover_override_cents,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MonthRecord":
        positions = _list(data.get("variablePositions"))
        incomes = _list(data.get("incomes"))
        return cls(
            month=int(data["month"]),
            days=[DayEntry.from_dict(day) for day in data.get("days") or []],
            fixed_costs=[FixedCostEntry.from_dict(entry) for entry in data.get("fixedCosts") or []],
            fixed_budget_cents=_number_or_none(data.get("fixedBudgetCents")),
            variable_costs=[ExpenseEntry.from_dict(entry) for entry in data.get("variableCosts") or []],
            variable_positions=(
                [VariableBudgetPosition.from_dict(position) for position in positions]
                if positions is not None
                else None
            ),
            misc_costs=[ExpenseEntry.from_dict(entry) for entry in data.get("miscCosts") or []],
            incomes=[ExpenseEntry.from_dict(entry) for entry in incomes] if incomes is not None else None,
            food_budget_cents=_cents(data.get("foodBudgetCents"), default=None),
            going_out_budget_cents=_cents(data.get("goingOutBudgetCents"), default=None),
            misc_budget_cents=_cents(data.get("miscBudgetCents"), default=None),
            carryover_override_cents=_cents(data.get("carryoverOverrideCents"), default=None),
        )


@dataclass
class YearRecord:
    """A full year of months; the unit of persistence."""

    year: int
    created_at: str
    template_version: str
    months: list[MonthRecord] = field(default_factory=list)

    def get_month(self, month: int) -> MonthRecord | None:
        """Find a month by number (storage order is not trusted)."""
        for month_record in self.months:
            if month_record.month == month:
                return month_record
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "year": self.year,
            "createdAt": self.created_at,
            "templateVersion": self.template_version,
            "months": [month.to_dict() for month in self.months],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "YearRecord":
        return cls(
            year=int(data["year"]),
            created_at=data.get("createdAt", ""),
            template_version=data.get("templateVersion", ""),
            months=[MonthRecord.from_dict(month) for month in data["months"]],
        )


@dataclass
class BackupPayload:
    """Full-state snapshot used for export and import."""

    exported_at: str
    years: list[YearRecord]
    fixed_templates: list[FixedCostTemplate]

    def to_dict(self) -> dict[str, Any]:
        return {
            "exportedAt": self.exported_at,
            "years": [year.to_dict() for year in self.years],
            "fixedTemplates": [template.to_dict() for template in self.fixed_templates],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BackupPayload":
        return cls(
            exported_at=data["exportedAt"],
            years=[YearRecord.from_dict(year) for year in data["years"]],
            fixed_templates=[FixedCostTemplate.from_dict(template) for template in data["fixedTemplates"]],
        )
