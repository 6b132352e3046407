#!/usr/bin/env python3
"""
Template Propagation Engine

Applies create/update/delete of a fixed-cost template to every month at or after
an effective month. Earlier months are a frozen historical record and are never
touched.

All functions mutate the given year records in place and return the number of
months they changed. They are idempotent: re-running with the same effective
month converges to the same result.
"""

import logging
from collections.abc import Iterator

from ..core.dates import MonthKey, month_key
from .factory import seed_fixed_cost
from .models import FixedCostTemplate, MonthRecord, YearRecord

logger = logging.getLogger(__name__)


def months_from(years: list[YearRecord], effective: MonthKey) -> Iterator[tuple[YearRecord, MonthRecord]]:
    """Yield every (year, month) pair at or after the effective month."""
    threshold = effective.key
    for year_record in years:
        for month_record in year_record.months:
            if month_key(year_record.year, month_record.month) >= threshold:
                yield year_record, month_record


def apply_template_to_future_months(
    years: list[YearRecord], template: FixedCostTemplate, effective: MonthKey
) -> int:
    """
    Seed a new template into every month from the effective month on.

    Months that already carry an entry for the template are left alone.
    """
    touched = 0
    for _, month_record in months_from(years, effective):
        if any(entry.template_id == template.id for entry in month_record.fixed_costs):
            continue
        month_record.fixed_costs.append(seed_fixed_cost(template))
        month_record.recalculate_fixed_budget()
        touched += 1

    logger.info(f"Template {template.name!r} applied to {touched} months from {effective}")
    return touched


def update_template_in_future_months(
    years: list[YearRecord],
    previous: FixedCostTemplate,
    updated: FixedCostTemplate,
    effective: MonthKey,
) -> int:
    """
    Copy a template's new name and planned amount into every month from the effective month on.

    The actual amount follows the new planned amount only while it still equals the
    previous planned amount; a user-entered actual is kept.
    """
    touched = 0
    for _, month_record in months_from(years, effective):
        changed = False
        for entry in month_record.fixed_costs:
            if entry.template_id != updated.id:
                continue
            if entry.actual_cents == previous.planned_cents:
                entry.actual_cents = updated.planned_cents
            entry.name = updated.name
            entry.planned_cents = updated.planned_cents
            changed = True
        if changed:
            month_record.recalculate_fixed_budget()
            touched += 1

    logger.info(f"Template {updated.name!r} updated in {touched} months from {effective}")
    return touched


def remove_template_from_future_months(years: list[YearRecord], template_id: str, effective: MonthKey) -> int:
    """Drop a template's entries from every month from the effective month on."""
    touched = 0
    for _, month_record in months_from(years, effective):
        remaining = [entry for entry in month_record.fixed_costs if entry.template_id != template_id]
        if len(remaining) != len(month_record.fixed_costs):
            month_record.fixed_costs = remaining
            month_record.recalculate_fixed_budget()
            touched += 1

    logger.info(f"Template {template_id} removed from {touched} months from {effective}")
    return touched


def find_template(templates: list[FixedCostTemplate], template_id: str) -> FixedCostTemplate | None:
    """Look up a template by id in the current set."""
    for template in templates:
        if template.id == template_id:
            return template
    return None
