#!/usr/bin/env python3
"""
Configuration Management for Budget Book

Handles environment-based configuration with defaults and validation.
Supports multiple environments (development, test, production).
"""

import logging
import os
import tempfile
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

DEFAULT_CLASSIFY_THRESHOLD_CENTS = 3000


class Environment(Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TEST = "test"
    PRODUCTION = "production"


@dataclass
class StorageConfig:
    """Storage locations.

    ``ledger_dir`` holds ``years/<year>.json`` and ``templates.json``; it is
    replaced as a whole when a backup is restored.
    """

    ledger_dir: Path
    backup_dir: Path


@dataclass
class LedgerConfig:
    """Ledger rule settings."""

    # Expenses at or above this amount are classified as variable costs
    classify_threshold_cents: int = DEFAULT_CLASSIFY_THRESHOLD_CENTS


@dataclass
class Config:
    """
    Main configuration class for the budget book.

    Loads configuration from environment variables with defaults
    and validation for each environment type.
    """

    environment: Environment
    data_dir: Path
    storage: StorageConfig
    ledger: LedgerConfig

    # Application settings
    debug: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_environment(cls) -> "Config":
        """Create configuration from environment variables."""
        env = Environment(os.getenv("BUDGETBOOK_ENV", "development"))

        if env == Environment.TEST:
            default_test_dir = Path(tempfile.gettempdir()) / "test_budgetbook"
            data_dir = Path(os.getenv("BUDGETBOOK_DATA_DIR", str(default_test_dir)))
        else:
            data_dir = Path(os.getenv("BUDGETBOOK_DATA_DIR", "./data")).expanduser().resolve()

        data_dir.mkdir(parents=True, exist_ok=True)

        backup_dir = Path(os.getenv("BUDGETBOOK_BACKUP_DIR", str(data_dir / "backups")))

        storage = StorageConfig(
            ledger_dir=data_dir / "ledger",
            backup_dir=backup_dir,
        )

        ledger = LedgerConfig(
            classify_threshold_cents=int(
                os.getenv("BUDGETBOOK_CLASSIFY_THRESHOLD_CENTS", str(DEFAULT_CLASSIFY_THRESHOLD_CENTS))
            ),
        )

        return cls(
            environment=env,
            data_dir=data_dir,
            storage=storage,
            ledger=ledger,
            debug=os.getenv("DEBUG", "false").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    def validate(self) -> list:
        """Validate configuration and return list of errors."""
        errors = []

        if not self.data_dir.exists():
            errors.append(f"data_dir does not exist: {self.data_dir}")

        if self.ledger.classify_threshold_cents < 0:
            errors.append("Classification threshold must be non-negative")

        if self.log_level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            errors.append(f"Unknown log level: {self.log_level}")

        return errors

    def setup_logging(self) -> None:
        """Configure logging based on configuration."""
        level = getattr(logging, self.log_level, logging.INFO)

        if self.environment == Environment.DEVELOPMENT:
            format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        else:
            format_str = "%(asctime)s - %(levelname)s - %(message)s"

        logging.basicConfig(level=level, format=format_str, datefmt="%Y-%m-%d %H:%M:%S")

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a JSON-friendly dictionary."""
        result: dict[str, Any] = {}

        for field_name, field_value in self.__dict__.items():
            if hasattr(field_value, "__dict__") and not isinstance(field_value, (Path, Enum)):
                result[field_name] = {
                    nested_name: str(nested_value) if isinstance(nested_value, Path) else nested_value
                    for nested_name, nested_value in field_value.__dict__.items()
                }
            elif isinstance(field_value, Path):
                result[field_name] = str(field_value)
            elif isinstance(field_value, Enum):
                result[field_name] = field_value.value
            else:
                result[field_name] = field_value

        return result


# Global configuration instance
_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config.from_environment()

        errors = _config.validate()
        if errors:
            raise ValueError(f"Configuration validation failed: {'; '.join(errors)}")

        _config.setup_logging()

    return _config


def reload_config() -> Config:
    """Reload configuration from environment (useful for testing)."""
    global _config
    _config = None
    return get_config()
