#!/usr/bin/env python3
"""
JSON File Ledger Store

File-backed implementation of the year and template storage contract.

Layout under ``ledger_dir``::

    years/2025.json
    years/2026.json
    templates.json      {"templates": [...], "version": "...", "updatedAt": "..."}

Single files are written atomically. A backup restore stages a complete new
ledger directory and swaps it in, so readers see either the old or the new
state, never a mix.
"""

import json
import logging
import shutil
import threading
import uuid
from datetime import datetime
from pathlib import Path

from ..core.dates import now_iso
from ..core.errors import StorageError
from ..core.json_utils import read_json, write_json
from ..ledger.models import FixedCostTemplate, YearRecord

logger = logging.getLogger(__name__)

TEMPLATES_FILENAME = "templates.json"
YEARS_DIRNAME = "years"


def _version_token() -> str:
    return now_iso()


class JsonLedgerStore:
    """
    DataStore for year records and the fixed-cost template singleton.

    Implements YearStore, TemplateStore and BackupCapableStore.
    """

    def __init__(self, ledger_dir: Path):
        """
        Initialize the store.

        Args:
            ledger_dir: Directory holding ``years/`` and ``templates.json`` (data/ledger)
        """
        self.ledger_dir = Path(ledger_dir)
        self._lock = threading.RLock()
        self._recover_interrupted_restore()

    @property
    def years_dir(self) -> Path:
        return self.ledger_dir / YEARS_DIRNAME

    @property
    def templates_file(self) -> Path:
        return self.ledger_dir / TEMPLATES_FILENAME

    def _year_file(self, year: int) -> Path:
        return self.years_dir / f"{year}.json"

    # Year records

    def list_years(self) -> list[YearRecord]:
        """Load every stored year, ascending by year number."""
        with self._lock:
            files = self._year_files()
            records = [self._read_year_file(path) for path in files]
        return sorted(records, key=lambda record: record.year)

    def get_year(self, year: int) -> YearRecord | None:
        with self._lock:
            path = self._year_file(year)
            if not path.exists():
                return None
            return self._read_year_file(path)

    def save_year(self, record: YearRecord) -> None:
        with self._lock:
            try:
                write_json(self._year_file(record.year), record.to_dict())
            except OSError as e:
                raise StorageError(f"Failed to save year {record.year}: {e}") from e
        logger.debug(f"Saved year {record.year}")

    def delete_year(self, year: int) -> None:
        with self._lock:
            try:
                self._year_file(year).unlink(missing_ok=True)
            except OSError as e:
                raise StorageError(f"Failed to delete year {year}: {e}") from e
        logger.debug(f"Deleted year {year}")

    def _read_year_file(self, path: Path) -> YearRecord:
        try:
            return YearRecord.from_dict(read_json(path))
        except (OSError, json.JSONDecodeError) as e:
            raise StorageError(f"Failed to read {path}: {e}") from e
        except (KeyError, TypeError, ValueError) as e:
            raise StorageError(f"Invalid year record in {path}: {e}") from e

    # Template singleton

    def get_state(self) -> tuple[list[FixedCostTemplate], str]:
        """Load ``(templates, version)``, creating an empty state on first access."""
        with self._lock:
            if not self.templates_file.exists():
                version = self._write_templates([])
                return [], version
            try:
                data = read_json(self.templates_file)
                templates = [FixedCostTemplate.from_dict(item) for item in data.get("templates", [])]
                return templates, data.get("version", "")
            except (OSError, json.JSONDecodeError) as e:
                raise StorageError(f"Failed to read {self.templates_file}: {e}") from e
            except (AttributeError, KeyError, TypeError, ValueError) as e:
                raise StorageError(f"Invalid template state in {self.templates_file}: {e}") from e

    def save_templates(self, templates: list[FixedCostTemplate]) -> str:
        with self._lock:
            return self._write_templates(templates)

    def _write_templates(self, templates: list[FixedCostTemplate], ledger_dir: Path | None = None) -> str:
        target = (ledger_dir or self.ledger_dir) / TEMPLATES_FILENAME
        version = _version_token()
        payload = {
            "templates": [template.to_dict() for template in templates],
            "version": version,
            "updatedAt": now_iso(),
        }
        try:
            write_json(target, payload)
        except OSError as e:
            raise StorageError(f"Failed to save templates: {e}") from e
        return version

    # Restore

    def restore(self, years: list[YearRecord], templates: list[FixedCostTemplate]) -> str:
        """
        Replace all years and the template set in one step.

        The new state is written to a staging directory next to the ledger
        directory and then swapped in. If anything fails before the swap the
        existing ledger is untouched.

        Returns:
            New template version token
        """
        parent = self.ledger_dir.parent
        suffix = uuid.uuid4().hex[:8]
        staging = parent / f".{self.ledger_dir.name}-staging-{suffix}"
        retired = parent / f".{self.ledger_dir.name}-old-{suffix}"

        with self._lock:
            try:
                for record in years:
                    write_json(staging / YEARS_DIRNAME / f"{record.year}.json", record.to_dict())
                (staging / YEARS_DIRNAME).mkdir(parents=True, exist_ok=True)
                version = self._write_templates(templates, ledger_dir=staging)

                if self.ledger_dir.exists():
                    self.ledger_dir.rename(retired)
                staging.rename(self.ledger_dir)
            except (OSError, StorageError) as e:
                shutil.rmtree(staging, ignore_errors=True)
                if retired.exists() and not self.ledger_dir.exists():
                    retired.rename(self.ledger_dir)
                raise StorageError(f"Failed to restore ledger: {e}") from e

            shutil.rmtree(retired, ignore_errors=True)

        logger.info(f"Restored ledger with {len(years)} years and {len(templates)} templates")
        return version

    def _recover_interrupted_restore(self) -> None:
        """Put back a retired ledger if a restore died between its two renames."""
        parent = self.ledger_dir.parent
        if not parent.exists():
            return
        if not self.ledger_dir.exists():
            retired = sorted(parent.glob(f".{self.ledger_dir.name}-old-*"))
            if retired:
                logger.warning(f"Recovering ledger from interrupted restore: {retired[-1]}")
                retired[-1].rename(self.ledger_dir)
        for leftover in parent.glob(f".{self.ledger_dir.name}-staging-*"):
            shutil.rmtree(leftover, ignore_errors=True)

    # Metadata

    def _year_files(self) -> list[Path]:
        if not self.years_dir.exists():
            return []
        return sorted(self.years_dir.glob("*.json"))

    def _all_files(self) -> list[Path]:
        files = self._year_files()
        if self.templates_file.exists():
            files.append(self.templates_file)
        return files

    def exists(self) -> bool:
        return bool(self._year_files())

    def last_modified(self) -> datetime | None:
        files = self._all_files()
        if not files:
            return None
        latest = max(files, key=lambda p: p.stat().st_mtime)
        return datetime.fromtimestamp(latest.stat().st_mtime)

    def age_days(self) -> int | None:
        """Days since the last write, or None if nothing is stored."""
        last_mod = self.last_modified()
        if last_mod is None:
            return None
        return (datetime.now() - last_mod).days

    def item_count(self) -> int | None:
        """Number of stored years."""
        if not self.exists():
            return None
        return len(self._year_files())

    def size_bytes(self) -> int | None:
        if not self.exists():
            return None
        return sum(path.stat().st_size for path in self._all_files())

    def summary_text(self) -> str:
        count = self.item_count()
        if count is None:
            return "No years stored"
        return f"Ledger: {count} years"
