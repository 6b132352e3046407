#!/usr/bin/env python3
"""
Budget Book Service

Application state for one household ledger: the loaded year records, the
fixed-cost template set and the stores they persist to. Every ledger operation
goes through a BudgetBook instance; nothing is held in module globals.

Mutations follow the same pattern: validate, change the in-memory records,
then persist. A StorageError leaves memory ahead of disk; retrying the same
operation is safe because propagation and normalization are idempotent.
"""

import logging
import threading
from collections import defaultdict
from collections.abc import Callable, Iterator
from contextlib import ExitStack, contextmanager
from pathlib import Path
from typing import TypeVar

from .core.config import DEFAULT_CLASSIFY_THRESHOLD_CENTS, Config
from .core.currency import validate_cents
from .core.datastore import LedgerStore
from .core.dates import MAX_YEAR, MIN_YEAR, MonthKey
from .core.errors import DuplicateYearError, NotFoundError, ValidationError
from .core.ids import create_id
from .ledger import entries
from .ledger.factory import create_year as build_year
from .ledger.models import BackupPayload, FixedCostTemplate, MonthRecord, YearRecord
from .ledger.normalize import NormalizationReport, normalize_years
from .ledger.summary import (
    CategoryStatus,
    CostSummary,
    IncomeFlow,
    MonthSummaryRow,
    month_budget_overview,
    summarize_income_flow,
    summarize_month,
    summarize_year,
    summarize_year_by_month,
)
from .ledger.templates import (
    apply_template_to_future_months,
    find_template,
    remove_template_from_future_months,
    update_template_in_future_months,
)
from .storage.backup import create_backup, parse_backup, read_backup_file, write_backup_file
from .storage.json_store import JsonLedgerStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


class BudgetBook:
    """
    In-memory ledger state bound to a store.

    ``has_imported_backup`` and ``has_unexported_changes`` belong to this
    instance only and are never written to the store; a new BudgetBook over the
    same directory starts with both False.

    Args:
        store: Any LedgerStore (year, template and restore operations)
        classify_threshold_cents: Boundary between misc and variable expenses
    """

    def __init__(self, store: LedgerStore, classify_threshold_cents: int = DEFAULT_CLASSIFY_THRESHOLD_CENTS):
        self.store = store
        self.classify_threshold_cents = classify_threshold_cents
        self.years: list[YearRecord] = []
        self.templates: list[FixedCostTemplate] = []
        self.template_version = ""
        self.has_imported_backup = False
        self.has_unexported_changes = False
        self._year_locks: defaultdict[int, threading.RLock] = defaultdict(threading.RLock)
        self._locks_guard = threading.Lock()

    @classmethod
    def from_config(cls, config: Config) -> "BudgetBook":
        """Open the ledger configured for this environment and load it."""
        book = cls(JsonLedgerStore(config.storage.ledger_dir), config.ledger.classify_threshold_cents)
        book.load()
        return book

    # Loading

    def load(self) -> NormalizationReport:
        """
        Load all years and templates, normalize them and write them back.

        Writing back right away means later loads see already-migrated records.
        """
        self.years = self.store.list_years()
        self.templates, self.template_version = self.store.get_state()
        report = normalize_years(self.years)
        self._persist_all_years()
        logger.info(f"Loaded {len(self.years)} years and {len(self.templates)} templates")
        return report

    # Locking and persistence

    @contextmanager
    def _year_lock(self, year: int) -> Iterator[None]:
        with self._locks_guard:
            lock = self._year_locks[year]
        with lock:
            yield

    @contextmanager
    def _all_years_locked(self) -> Iterator[None]:
        """Hold every loaded year's lock, acquired in year order."""
        with ExitStack() as stack:
            for record in sorted(self.years, key=lambda r: r.year):
                stack.enter_context(self._year_lock(record.year))
            yield

    def _persist_year(self, record: YearRecord) -> None:
        self.store.save_year(record)
        self._mark_changed()

    def _persist_all_years(self) -> None:
        for record in self.years:
            with self._year_lock(record.year):
                self.store.save_year(record)

    def _mark_changed(self) -> None:
        if self.has_imported_backup:
            self.has_unexported_changes = True

    # Lookup

    def get_year(self, year: int) -> YearRecord:
        for record in self.years:
            if record.year == year:
                return record
        raise NotFoundError(f"Year {year} does not exist")

    def get_month(self, year: int, month: int) -> MonthRecord:
        month_record = self.get_year(year).get_month(month)
        if month_record is None:
            raise NotFoundError(f"Month {month} of {year} does not exist")
        return month_record

    def get_template(self, template_id: str) -> FixedCostTemplate:
        template = find_template(self.templates, template_id)
        if template is None:
            raise NotFoundError(f"Template {template_id} does not exist")
        return template

    # Years

    def create_year(self, year: int) -> YearRecord:
        """
        Create and persist a new year seeded from the current templates.

        Raises:
            ValidationError: If the year is outside 1-9999
            DuplicateYearError: If the year is already stored
        """
        if isinstance(year, bool) or not isinstance(year, int) or not MIN_YEAR <= year <= MAX_YEAR:
            raise ValidationError(f"Year must be between {MIN_YEAR} and {MAX_YEAR}, got {year!r}")
        with self._year_lock(year):
            if self.store.get_year(year) is not None or any(r.year == year for r in self.years):
                raise DuplicateYearError(year)
            record = build_year(year, self.templates, self.template_version)
            self.store.save_year(record)
            self.years = sorted([*self.years, record], key=lambda r: r.year)
        self._mark_changed()
        logger.info(f"Created year {year}")
        return record

    def delete_year(self, year: int) -> None:
        record = self.get_year(year)
        with self._year_lock(year):
            self.store.delete_year(year)
            self.years = [r for r in self.years if r is not record]
        self._mark_changed()
        logger.info(f"Deleted year {year}")

    # Templates

    def add_template(self, name: str, planned_cents: int, effective: MonthKey) -> FixedCostTemplate:
        """Create a template and seed it into every month from the effective month on."""
        clean_name = _require_name(name)
        validate_cents(planned_cents, "planned amount")

        template = FixedCostTemplate(id=create_id("tpl"), name=clean_name, planned_cents=planned_cents)
        with self._all_years_locked():
            self.templates = [*self.templates, template]
            apply_template_to_future_months(self.years, template, effective)
            self._save_templates_and_years()
        return template

    def update_template(
        self, template_id: str, name: str, planned_cents: int, effective: MonthKey
    ) -> FixedCostTemplate:
        """Change a template and carry the change into every month from the effective month on."""
        previous = self.get_template(template_id)
        clean_name = _require_name(name)
        validate_cents(planned_cents, "planned amount")

        updated = FixedCostTemplate(id=previous.id, name=clean_name, planned_cents=planned_cents)
        with self._all_years_locked():
            self.templates = [updated if t.id == template_id else t for t in self.templates]
            update_template_in_future_months(self.years, previous, updated, effective)
            self._save_templates_and_years()
        return updated

    def remove_template(self, template_id: str, effective: MonthKey) -> None:
        """Delete a template; months before the effective month keep their snapshot entries."""
        self.get_template(template_id)
        with self._all_years_locked():
            self.templates = [t for t in self.templates if t.id != template_id]
            remove_template_from_future_months(self.years, template_id, effective)
            self._save_templates_and_years()

    def _save_templates_and_years(self) -> None:
        self.template_version = self.store.save_templates(self.templates)
        self._persist_all_years()
        self._mark_changed()

    # Month edits

    def edit_month(self, year: int, month: int, edit: Callable[[MonthRecord], T]) -> T:
        """Apply an edit function to one month under the year's lock and persist the year."""
        record = self.get_year(year)
        with self._year_lock(year):
            month_record = self.get_month(year, month)
            result = edit(month_record)
            self._persist_year(record)
        return result

    def set_day_amount(self, year: int, month: int, iso_date: str, kind: str, amount_cents: int) -> None:
        self.edit_month(year, month, lambda m: entries.set_day_amount(m, iso_date, kind, amount_cents))

    def set_fixed_cost_actual(self, year: int, month: int, entry_id: str, amount_cents: int) -> None:
        self.edit_month(year, month, lambda m: entries.set_fixed_cost_actual(m, entry_id, amount_cents))

    def set_month_budget(self, year: int, month: int, category: str, amount_cents: int) -> None:
        self.edit_month(year, month, lambda m: entries.set_month_budget(m, category, amount_cents))

    def set_carryover_override(self, year: int, month: int, amount_cents: int | None) -> None:
        self.edit_month(year, month, lambda m: entries.set_carryover_override(m, amount_cents))

    def add_variable_position(self, year: int, month: int, name: str, budget_cents: int):
        return self.edit_month(year, month, lambda m: entries.add_variable_position(m, name, budget_cents))

    def set_variable_position_actual(self, year: int, month: int, position_id: str, actual_cents: int) -> None:
        self.edit_month(
            year, month, lambda m: entries.set_variable_position_actual(m, position_id, actual_cents)
        )

    def remove_variable_position(self, year: int, month: int, position_id: str) -> None:
        self.edit_month(year, month, lambda m: entries.remove_variable_position(m, position_id))

    def add_misc_expense(self, year: int, month: int, description: str, amount_cents: int):
        return self.edit_month(year, month, lambda m: entries.add_misc_expense(m, description, amount_cents))

    def record_expense(self, year: int, month: int, description: str, amount_cents: int):
        return self.edit_month(
            year,
            month,
            lambda m: entries.record_expense(m, description, amount_cents, self.classify_threshold_cents),
        )

    def add_income(self, year: int, month: int, description: str, amount_cents: int):
        return self.edit_month(year, month, lambda m: entries.add_income(m, description, amount_cents))

    def remove_expense(self, year: int, month: int, entry_id: str) -> str:
        return self.edit_month(year, month, lambda m: entries.remove_expense(m, entry_id))

    # Reports

    def month_summary(self, year: int, month: int) -> CostSummary:
        return summarize_month(self.get_month(year, month))

    def year_summary(self, year: int) -> CostSummary:
        return summarize_year(self.get_year(year))

    def year_summary_by_month(self, year: int) -> list[MonthSummaryRow]:
        return summarize_year_by_month(self.get_year(year))

    def month_overview(self, year: int, month: int) -> list[CategoryStatus]:
        return month_budget_overview(self.get_month(year, month))

    def income_flow(self) -> dict[int, IncomeFlow]:
        return summarize_income_flow(self.years)

    # Backup

    def create_backup(self) -> BackupPayload:
        return create_backup(self.years, self.templates)

    def export_backup(self, path: str | Path) -> Path:
        written = write_backup_file(self.create_backup(), path)
        self.has_unexported_changes = False
        return written

    def import_backup(self, path: str | Path) -> NormalizationReport:
        """
        Replace the whole ledger with a backup file.

        The file is validated completely first; a MalformedBackupError leaves the
        store untouched.
        """
        return self.restore_backup(read_backup_file(path))

    def restore_backup(self, payload: BackupPayload | dict) -> NormalizationReport:
        """
        Replace the whole ledger with a backup payload.

        Records from an older schema are normalized before they reach the store;
        the returned report counts the months that were upgraded.
        """
        if isinstance(payload, dict):
            payload = parse_backup(payload)
        report = normalize_years(payload.years)
        self.store.restore(payload.years, payload.fixed_templates)
        self.load()
        self.has_imported_backup = True
        self.has_unexported_changes = False
        logger.info(f"Imported backup exported at {payload.exported_at}")
        return report


def _require_name(name: str) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise ValidationError("Template name must not be empty")
    return cleaned
