#!/usr/bin/env python3
"""
Backup Export and Import

A backup is a single JSON file holding the complete ledger:
``{"exportedAt": ISO-8601, "years": [...], "fixedTemplates": [...]}``.

Imported payloads are checked in full before anything is handed to the store,
so a malformed file never touches existing data. Year and month records inside
a backup may use an older schema; the BudgetBook service normalizes them before
they are written to the store.
"""

import json
import logging
from datetime import date
from pathlib import Path
from typing import Any

from ..core.dates import MAX_YEAR, MIN_YEAR, month_dates, now_iso
from ..core.errors import MalformedBackupError, StorageError
from ..core.json_utils import read_json, write_json
from ..ledger.models import BackupPayload, FixedCostTemplate, YearRecord

logger = logging.getLogger(__name__)

BACKUP_FILENAME_PREFIX = "budgetbook-backup"


def backup_filename(on: date | None = None) -> str:
    """Default file name, e.g. ``budgetbook-backup-2026-03-01.json``."""
    return f"{BACKUP_FILENAME_PREFIX}-{(on or date.today()).isoformat()}.json"


def create_backup(years: list[YearRecord], templates: list[FixedCostTemplate]) -> BackupPayload:
    """Snapshot the given state, years ascending."""
    return BackupPayload(
        exported_at=now_iso(),
        years=sorted(years, key=lambda record: record.year),
        fixed_templates=list(templates),
    )


# Amount fields per list key in a month
ENTRY_AMOUNTS = {
    "fixedCosts": ("plannedCents", "actualCents"),
    "variablePositions": ("budgetCents", "actualCents"),
    "variableCosts": ("amountCents",),
    "miscCosts": ("amountCents",),
    "incomes": ("amountCents",),
}

# Lists older schema versions did not write
OPTIONAL_LISTS = ("variablePositions", "variableCosts", "miscCosts", "incomes")

BUDGET_AMOUNTS = ("foodBudgetCents", "goingOutBudgetCents", "miscBudgetCents")


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_cents(value: Any) -> bool:
    return _is_int(value) and value >= 0


def validate_backup_data(data: Any) -> list[str]:
    """
    Check the shape of a decoded backup.

    Returns:
        List of problems; empty when the payload is usable
    """
    if not isinstance(data, dict):
        return [f"Backup must be a JSON object, got {type(data).__name__}"]

    errors = []
    if not isinstance(data.get("exportedAt"), str):
        errors.append("exportedAt must be a string")
    if not isinstance(data.get("years"), list):
        errors.append("years must be a list")
    if not isinstance(data.get("fixedTemplates"), list):
        errors.append("fixedTemplates must be a list")
    if errors:
        return errors

    for index, template in enumerate(data["fixedTemplates"]):
        if not isinstance(template, dict):
            errors.append(f"fixedTemplates[{index}] must be an object")
            continue
        if not isinstance(template.get("id"), str) or not isinstance(template.get("name"), str):
            errors.append(f"fixedTemplates[{index}] needs string id and name")
        if not _is_cents(template.get("plannedCents")):
            errors.append(f"fixedTemplates[{index}].plannedCents must be a non-negative integer")

    seen_years: set[int] = set()
    for index, year in enumerate(data["years"]):
        if not isinstance(year, dict):
            errors.append(f"years[{index}] must be an object")
            continue
        year_number = year.get("year")
        if not _is_int(year_number) or not MIN_YEAR <= year_number <= MAX_YEAR:
            errors.append(f"years[{index}].year must be an integer between {MIN_YEAR} and {MAX_YEAR}")
            continue
        if year_number in seen_years:
            errors.append(f"Year {year_number} appears more than once")
        seen_years.add(year_number)
        errors.extend(_validate_months(year_number, year.get("months")))

    return errors


def _validate_months(year_number: int, months: Any) -> list[str]:
    if not isinstance(months, list):
        return [f"Year {year_number}: months must be a list"]

    errors = []
    numbers = []
    for month in months:
        if not isinstance(month, dict) or not _is_int(month.get("month")) or not 1 <= month["month"] <= 12:
            errors.append(f"Year {year_number}: every month needs a month number 1-12")
            continue
        numbers.append(month["month"])
        errors.extend(_validate_month(year_number, month))

    if sorted(numbers) != list(range(1, 13)):
        errors.append(f"Year {year_number}: expected months 1-12 exactly once, got {sorted(numbers)}")
    return errors


def _validate_month(year_number: int, month: dict) -> list[str]:
    where = f"Year {year_number}, month {month['month']}"
    errors = []

    for list_key in ("days", "fixedCosts"):
        if not isinstance(month.get(list_key), list):
            errors.append(f"{where}: {list_key} must be a list")
    for list_key in OPTIONAL_LISTS:
        if month.get(list_key) is not None and not isinstance(month[list_key], list):
            errors.append(f"{where}: {list_key} must be a list")
    if errors:
        return errors

    for list_key, amount_keys in ENTRY_AMOUNTS.items():
        for position, entry in enumerate(month.get(list_key) or []):
            if not isinstance(entry, dict) or not isinstance(entry.get("id"), str):
                errors.append(f"{where}: {list_key}[{position}] needs a string id")
                continue
            for amount_key in amount_keys:
                if not _is_cents(entry.get(amount_key)):
                    errors.append(f"{where}: {list_key}[{position}].{amount_key} must be a non-negative integer")

    for key in BUDGET_AMOUNTS:
        if month.get(key) is not None and not _is_cents(month[key]):
            errors.append(f"{where}: {key} must be a non-negative integer")
    override = month.get("carryoverOverrideCents")
    if override is not None and not _is_int(override):
        errors.append(f"{where}: carryoverOverrideCents must be an integer")

    errors.extend(_validate_days(where, year_number, month))
    return errors


def _validate_days(where: str, year_number: int, month: dict) -> list[str]:
    days = month["days"]
    if not all(isinstance(day, dict) for day in days):
        return [f"{where}: every day must be an object"]

    expected = [day.isoformat() for day in month_dates(year_number, month["month"])]
    if [day.get("isoDate") for day in days] != expected:
        return [f"{where}: days must list every calendar day in order ({len(expected)} expected, got {len(days)})"]

    errors = []
    for day in days:
        for amount_key in ("foodCents", "goingOutCents"):
            if not _is_cents(day.get(amount_key)):
                errors.append(f"{where}: {day['isoDate']}.{amount_key} must be a non-negative integer")
    return errors


def parse_backup(data: Any) -> BackupPayload:
    """
    Validate and decode a backup.

    Raises:
        MalformedBackupError: If the shape check fails or a record cannot be decoded
    """
    errors = validate_backup_data(data)
    if errors:
        raise MalformedBackupError("Malformed backup: " + "; ".join(errors))
    try:
        return BackupPayload.from_dict(data)
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise MalformedBackupError(f"Malformed backup: {e}") from e


def read_backup_file(path: str | Path) -> BackupPayload:
    """Read and validate a backup file."""
    try:
        data = read_json(path)
    except json.JSONDecodeError as e:
        raise MalformedBackupError(f"Backup is not valid JSON: {e}") from e
    except UnicodeDecodeError as e:
        raise MalformedBackupError(f"Backup is not UTF-8 text: {e}") from e
    except OSError as e:
        raise StorageError(f"Failed to read backup {path}: {e}") from e
    return parse_backup(data)


def write_backup_file(payload: BackupPayload, path: str | Path) -> Path:
    """Write a backup file, returning its path."""
    path = Path(path)
    write_json(path, payload.to_dict())
    logger.info(f"Exported backup with {len(payload.years)} years to {path}")
    return path
