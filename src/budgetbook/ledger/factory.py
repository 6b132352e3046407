#!/usr/bin/env python3
"""
Year/Month Factory

Builds a full year of calendar-correct months seeded from the current
fixed-cost templates.
"""

import logging

from ..core.dates import month_dates, now_iso
from ..core.ids import create_id
from .models import DayEntry, FixedCostEntry, FixedCostTemplate, MonthRecord, YearRecord

logger = logging.getLogger(__name__)

MONTH_NUMBERS = range(1, 13)


def create_month_days(year: int, month: int) -> list[DayEntry]:
    """One zeroed DayEntry per calendar day of the month."""
    return [DayEntry(iso_date=day.isoformat()) for day in month_dates(year, month)]


def seed_fixed_cost(template: FixedCostTemplate) -> FixedCostEntry:
    """
    Snapshot a template into a month entry.

    The actual amount starts equal to the planned amount: without edits the
    household expects to pay exactly what is planned.
    """
    return FixedCostEntry(
        id=create_id("fixed"),
        template_id=template.id,
        name=template.name,
        planned_cents=template.planned_cents,
        actual_cents=template.planned_cents,
    )


def seed_month_from_templates(templates: list[FixedCostTemplate]) -> list[FixedCostEntry]:
    return [seed_fixed_cost(template) for template in templates]


def create_year(year: int, templates: list[FixedCostTemplate], template_version: str) -> YearRecord:
    """
    Create a year with twelve months seeded from the given templates.

    The factory does not check for an existing record; callers (BudgetBook.create_year)
    refuse duplicates before calling it.

    Args:
        year: Calendar year
        templates: Current fixed-cost templates
        template_version: Template state version at creation time

    Returns:
        New, unsaved YearRecord
    """
    default_fixed_budget = sum(template.planned_cents for template in templates)

    months = [
        MonthRecord(
            month=month,
            days=create_month_days(year, month),
            fixed_costs=seed_month_from_templates(templates),
            fixed_budget_cents=default_fixed_budget,
        )
        for month in MONTH_NUMBERS
    ]

    logger.debug(f"Created year {year} with {len(templates)} fixed-cost templates")
    return YearRecord(year=year, created_at=now_iso(), template_version=template_version, months=months)
