#!/usr/bin/env python3
"""
Normalization / Migration Pass

Upgrades year records loaded from storage or from an imported backup to the
current schema. Runs once after every bulk load, before the records are used.
"""

import logging
from dataclasses import dataclass

from .models import MonthRecord, YearRecord

logger = logging.getLogger(__name__)


@dataclass
class NormalizationReport:
    """What the pass changed."""

    years_seen: int = 0
    months_seen: int = 0
    months_healed: int = 0


def normalize_month(month: MonthRecord) -> bool:
    """
    Fill fields missing from older schema versions.

    A present fixed budget is kept even if it differs from the planned sum: it may
    be a user override. The variable budget total is a computed property of the
    month and needs no repair.

    Returns:
        True if any field was filled in
    """
    healed = False

    if month.incomes is None:
        month.incomes = []
        healed = True
    if month.fixed_budget_cents is None:
        month.recalculate_fixed_budget()
        healed = True
    if month.variable_positions is None:
        month.variable_positions = []
        healed = True
    if month.food_budget_cents is None:
        month.food_budget_cents = 0
        healed = True
    if month.going_out_budget_cents is None:
        month.going_out_budget_cents = 0
        healed = True
    if month.misc_budget_cents is None:
        month.misc_budget_cents = 0
        healed = True

    return healed


def normalize_years(years: list[YearRecord]) -> NormalizationReport:
    """
    Normalize every month of every year in place.

    Callers persist all records afterwards so later loads see migrated data.
    """
    report = NormalizationReport(years_seen=len(years))
    for year_record in years:
        for month_record in year_record.months:
            report.months_seen += 1
            if normalize_month(month_record):
                report.months_healed += 1

    if report.months_healed:
        logger.info(f"Normalized {report.months_healed} of {report.months_seen} months")
    return report
