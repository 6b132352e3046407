#!/usr/bin/env python3
"""
MonthKey Primitive Type

Immutable (year, month) pair used for effective-month thresholds and for
ordering months across years. Also provides calendar helpers and ISO timestamps.
"""

import calendar
import re
from dataclasses import dataclass
from datetime import date, datetime, timezone

from .errors import ValidationError

# Range of datetime.date
MIN_YEAR = 1
MAX_YEAR = 9999

_MONTH_PATTERN = re.compile(r"^(\d{4})-(0[1-9]|1[0-2])$")


@dataclass(frozen=True, order=True)
class MonthKey:
    """
    Immutable calendar month.

    Ordering is lexicographic by year then month, which equals ordering by
    ``year * 100 + month``.
    """

    year: int
    month: int

    def __post_init__(self) -> None:
        if not 1 <= self.month <= 12:
            raise ValidationError(f"Month must be 1-12, got {self.month}")

    @classmethod
    def parse(cls, text: str) -> "MonthKey":
        """
        Parse a ``YYYY-MM`` string.

        Raises:
            ValidationError: If the string is not of the form YYYY-MM with month 01-12
        """
        match = _MONTH_PATTERN.match((text or "").strip())
        if not match:
            raise ValidationError(f"Invalid month {text!r}, expected YYYY-MM")
        return cls(year=int(match.group(1)), month=int(match.group(2)))

    @classmethod
    def from_date(cls, value: date) -> "MonthKey":
        return cls(year=value.year, month=value.month)

    @classmethod
    def current(cls) -> "MonthKey":
        """Get the month containing today."""
        return cls.from_date(date.today())

    @property
    def key(self) -> int:
        """Integer sort key ``year * 100 + month``."""
        return month_key(self.year, self.month)

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"


def month_key(year: int, month: int) -> int:
    """Integer sort key for a month."""
    return year * 100 + month


def days_in_month(year: int, month: int) -> int:
    """Number of calendar days in a Gregorian month (leap years included)."""
    return calendar.monthrange(year, month)[1]


def month_dates(year: int, month: int) -> list[date]:
    """All calendar dates of a month, ascending."""
    return [date(year, month, day) for day in range(1, days_in_month(year, month) + 1)]


def now_iso() -> str:
    """Current UTC time as ISO-8601 string with millisecond precision."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
