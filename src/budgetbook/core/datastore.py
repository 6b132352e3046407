#!/usr/bin/env python3
"""
DataStore Protocols - Storage contract for year records and fixed-cost templates.

The ledger engine never touches storage directly; the BudgetBook service talks
to implementations of these protocols. Any failure underneath must surface as
StorageError.
"""

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from budgetbook.ledger.models import FixedCostTemplate, YearRecord


@runtime_checkable
class YearStore(Protocol):
    """Key-value persistence of year records, keyed by year number."""

    def list_years(self) -> list["YearRecord"]:
        """
        Load every stored year, ascending by year number.

        Raises:
            StorageError: If any record cannot be read
        """
        ...

    def get_year(self, year: int) -> "YearRecord | None":
        """Load one year, or None if it is not stored."""
        ...

    def save_year(self, record: "YearRecord") -> None:
        """Insert or replace a year record."""
        ...

    def delete_year(self, year: int) -> None:
        """Delete a year record. Deleting a missing year is a no-op."""
        ...


@runtime_checkable
class TemplateStore(Protocol):
    """Singleton persistence of the fixed-cost template set."""

    def get_state(self) -> tuple[list["FixedCostTemplate"], str]:
        """
        Load ``(templates, version)``.

        Creates and persists an empty state on first access.
        """
        ...

    def save_templates(self, templates: list["FixedCostTemplate"]) -> str:
        """
        Replace the template set.

        Returns:
            Fresh version token (ISO timestamp), a change marker only
        """
        ...


@runtime_checkable
class BackupCapableStore(Protocol):
    """Store able to replace years and templates as one transaction."""

    def restore(self, years: list["YearRecord"], templates: list["FixedCostTemplate"]) -> str:
        """
        Atomically replace all years and the template set.

        Returns:
            New template version token
        """
        ...


@runtime_checkable
class LedgerStore(YearStore, TemplateStore, BackupCapableStore, Protocol):
    """Everything the BudgetBook service needs from its store."""
