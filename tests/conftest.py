"""
Pytest Configuration and Shared Fixtures

Provides common test fixtures and configuration for the entire test suite.
"""

import tempfile
from pathlib import Path

import pytest

from budgetbook.core import config as config_module
from budgetbook.ledger.factory import create_year
from budgetbook.ledger.models import FixedCostTemplate
from budgetbook.service import BudgetBook
from budgetbook.storage.json_store import JsonLedgerStore


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as temp_path:
        yield Path(temp_path)


@pytest.fixture
def rent_template() -> FixedCostTemplate:
    return FixedCostTemplate(id="tpl-rent", name="Miete", planned_cents=90000)


@pytest.fixture
def internet_template() -> FixedCostTemplate:
    return FixedCostTemplate(id="tpl-net", name="Internet", planned_cents=3999)


@pytest.fixture
def year_2026(rent_template, internet_template):
    """Year 2026 seeded with rent and internet."""
    return create_year(2026, [rent_template, internet_template], "v1")


@pytest.fixture
def store(temp_dir) -> JsonLedgerStore:
    return JsonLedgerStore(temp_dir / "ledger")


@pytest.fixture
def book(store) -> BudgetBook:
    """Empty, loaded BudgetBook backed by a temporary JSON store."""
    budget_book = BudgetBook(store)
    budget_book.load()
    return budget_book


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch, tmp_path):
    """Point configuration at a per-test data directory."""
    monkeypatch.setenv("BUDGETBOOK_ENV", "test")
    monkeypatch.setenv("BUDGETBOOK_DATA_DIR", str(tmp_path / "budgetbook_data"))
    monkeypatch.delenv("BUDGETBOOK_BACKUP_DIR", raising=False)
    monkeypatch.delenv("BUDGETBOOK_CLASSIFY_THRESHOLD_CENTS", raising=False)
    monkeypatch.setattr(config_module, "_config", None)


def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: Integration tests for complete workflows")
    config.addinivalue_line("markers", "e2e: End-to-end CLI tests")
    config.addinivalue_line("markers", "currency: Tests for currency handling and precision")
    config.addinivalue_line("markers", "propagation: Tests for fixed-cost template propagation")
    config.addinivalue_line("markers", "storage: Tests for persistence and backups")
