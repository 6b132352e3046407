"""
Core Utilities Package

Shared primitives used across the ledger:
- Currency handling with integer cents
- MonthKey and calendar helpers
- Configuration management for environment-specific settings
- Error types and storage protocols
"""

from .config import Config, Environment, get_config, reload_config
from .currency import cents_to_euros_str, format_cents, parse_euros_to_cents, validate_cents
from .datastore import BackupCapableStore, LedgerStore, TemplateStore, YearStore
from .dates import MonthKey, days_in_month, month_key, now_iso
from .errors import (
    BudgetBookError,
    DuplicateYearError,
    MalformedBackupError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from .ids import create_id

__all__ = [
    "BackupCapableStore",
    "BudgetBookError",
    "Config",
    "DuplicateYearError",
    "Environment",
    "LedgerStore",
    "MalformedBackupError",
    "MonthKey",
    "NotFoundError",
    "StorageError",
    "TemplateStore",
    "ValidationError",
    "YearStore",
    "cents_to_euros_str",
    "create_id",
    "days_in_month",
    "format_cents",
    "get_config",
    "month_key",
    "now_iso",
    "parse_euros_to_cents",
    "reload_config",
    "validate_cents",
]
