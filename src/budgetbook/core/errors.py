#!/usr/bin/env python3
"""
Budget Book Error Types

All failures raised by the ledger engine, storage layer and service derive from
BudgetBookError so the CLI can report them uniformly.
"""


class BudgetBookError(Exception):
    """Base class for all budget book errors."""


class ValidationError(BudgetBookError):
    """Input rejected before any state was mutated (empty name, bad amount, bad month)."""


class DuplicateYearError(BudgetBookError):
    """A year record for the requested year already exists."""

    def __init__(self, year: int):
        super().__init__(f"Year {year} already exists")
        self.year = year


class NotFoundError(BudgetBookError):
    """Referenced year, month, template or entry does not exist."""


class StorageError(BudgetBookError):
    """Failure underneath the storage contract (I/O, decoding)."""


class MalformedBackupError(BudgetBookError):
    """Imported backup payload does not have the expected shape."""
