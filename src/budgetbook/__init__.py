"""
Budget Book - Household Budgeting Ledger

Tracks a year of monthly records in four categories: daily food and going-out
spend, recurring fixed costs, budgeted variable positions and misc expenses.

Domain Packages:
- core: Currency handling, dates, configuration, errors, storage protocols
- ledger: Models, year factory, template propagation, normalization, summaries
- storage: JSON file store and backup import/export
- analysis: Tabular reports
- cli: Command-line interface

Example Usage:
    from budgetbook import BudgetBook, MonthKey
    from budgetbook.storage import JsonLedgerStore

    book = BudgetBook(JsonLedgerStore(Path("data/ledger")))
    book.load()
    book.create_year(2026)
    book.add_template("Miete", 90000, MonthKey(2026, 1))
"""

__version__ = "0.1.0"

from .core.dates import MonthKey
from .core.errors import (
    BudgetBookError,
    DuplicateYearError,
    MalformedBackupError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from .ledger.models import BackupPayload, FixedCostTemplate, MonthRecord, YearRecord
from .service import BudgetBook

__all__ = [
    "BackupPayload",
    "BudgetBook",
    "BudgetBookError",
    "DuplicateYearError",
    "FixedCostTemplate",
    "MalformedBackupError",
    "MonthKey",
    "MonthRecord",
    "NotFoundError",
    "StorageError",
    "ValidationError",
    "YearRecord",
]
