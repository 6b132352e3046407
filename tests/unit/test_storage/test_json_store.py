#!/usr/bin/env python3
"""
Unit tests for the JSON ledger store.
"""

import pytest

from budgetbook.core.datastore import BackupCapableStore, LedgerStore, TemplateStore, YearStore
from budgetbook.core.errors import StorageError
from budgetbook.core.json_utils import read_json, write_json
from budgetbook.ledger.factory import create_year
from budgetbook.storage.json_store import JsonLedgerStore


@pytest.mark.storage
class TestYearRecords:
    """Test year persistence."""

    def test_empty_store(self, store):
        assert store.list_years() == []
        assert store.get_year(2026) is None
        assert store.exists() is False
        assert store.summary_text() == "No years stored"

    def test_save_and_get(self, store, year_2026):
        store.save_year(year_2026)

        assert (store.years_dir / "2026.json").exists()
        assert store.get_year(2026) == year_2026

    def test_list_years_sorted(self, store, rent_template):
        for year in (2027, 2025, 2026):
            store.save_year(create_year(year, [rent_template], "v1"))

        assert [record.year for record in store.list_years()] == [2025, 2026, 2027]
        assert store.item_count() == 3
        assert store.summary_text() == "Ledger: 3 years"

    def test_delete_year(self, store, year_2026):
        store.save_year(year_2026)
        store.delete_year(2026)
        assert store.get_year(2026) is None
        # Deleting again is a no-op
        store.delete_year(2026)

    def test_corrupt_year_file(self, store):
        store.years_dir.mkdir(parents=True)
        (store.years_dir / "2026.json").write_text("{not json", encoding="utf-8")

        with pytest.raises(StorageError):
            store.get_year(2026)

    def test_year_file_without_months(self, store):
        write_json(store.years_dir / "2026.json", {"year": 2026})

        with pytest.raises(StorageError):
            store.list_years()

    def test_metadata(self, store, year_2026):
        store.save_year(year_2026)
        store.get_state()

        assert store.size_bytes() > 0
        assert store.last_modified() is not None
        assert store.age_days() == 0

    def test_metadata_follows_writes(self, store, year_2026, rent_template):
        store.save_year(year_2026)
        assert store.item_count() == 1

        store.save_year(create_year(2027, [rent_template], "v1"))
        assert store.item_count() == 2

        store.delete_year(2026)
        store.delete_year(2027)
        assert store.exists() is False
        assert store.item_count() is None

    def test_string_amount_in_year_file(self, store, year_2026):
        data = year_2026.to_dict()
        data["months"][0]["fixedCosts"][0]["actualCents"] = "91000"
        write_json(store.years_dir / "2026.json", data)

        with pytest.raises(StorageError, match="Invalid year record"):
            store.get_year(2026)


@pytest.mark.storage
class TestTemplateState:
    """Test the template singleton."""

    def test_first_access_creates_empty_state(self, store):
        templates, version = store.get_state()

        assert templates == []
        assert version
        assert store.templates_file.exists()

    def test_save_and_reload(self, store, rent_template, internet_template):
        version = store.save_templates([rent_template, internet_template])

        templates, loaded_version = store.get_state()
        assert templates == [rent_template, internet_template]
        assert loaded_version == version

        data = read_json(store.templates_file)
        assert set(data) == {"templates", "version", "updatedAt"}

    def test_invalid_state(self, store):
        write_json(store.templates_file, {"templates": [{"name": "no id"}], "version": "x"})

        with pytest.raises(StorageError):
            store.get_state()


@pytest.mark.storage
class TestRestore:
    """Test whole-ledger replacement."""

    def test_restore_replaces_everything(self, store, year_2026, rent_template, internet_template):
        store.save_year(create_year(2024, [rent_template], "v0"))
        store.save_templates([rent_template])

        store.restore([year_2026], [internet_template])

        assert [record.year for record in store.list_years()] == [2026]
        templates, _ = store.get_state()
        assert templates == [internet_template]
        leftovers = [p.name for p in store.ledger_dir.parent.iterdir() if p.name.startswith(".ledger-")]
        assert leftovers == []

    def test_restore_into_empty_directory(self, temp_dir, year_2026):
        store = JsonLedgerStore(temp_dir / "fresh" / "ledger")
        store.restore([year_2026], [])
        assert store.get_year(2026) == year_2026

    def test_restore_with_no_years(self, store, year_2026):
        store.save_year(year_2026)
        store.restore([], [])
        assert store.list_years() == []
        assert store.years_dir.exists()

    def test_interrupted_restore_is_recovered(self, temp_dir, year_2026):
        ledger_dir = temp_dir / "ledger"
        JsonLedgerStore(ledger_dir).save_year(year_2026)

        # Simulate a crash between retiring the old ledger and moving the new one in
        ledger_dir.rename(temp_dir / ".ledger-old-deadbeef")
        (temp_dir / ".ledger-staging-deadbeef").mkdir()

        store = JsonLedgerStore(ledger_dir)

        assert store.get_year(2026) == year_2026
        assert not (temp_dir / ".ledger-staging-deadbeef").exists()


class TestStoreProtocols:
    def test_json_store_satisfies_ledger_store(self, store):
        assert isinstance(store, YearStore)
        assert isinstance(store, TemplateStore)
        assert isinstance(store, BackupCapableStore)
        assert isinstance(store, LedgerStore)
