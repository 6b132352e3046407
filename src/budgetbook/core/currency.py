#!/usr/bin/env python3
"""
Currency Conversion and Handling Utilities

All amounts are stored as non-negative integer euro cents.
Display uses euro strings: "1234.56 €".

Key Principles:
- Never use floating-point arithmetic for currency calculations
- Parse user input with integer/decimal arithmetic only
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from .errors import ValidationError


def cents_to_euros_str(cents: int) -> str:
    """
    Convert cents to euro string using pure integer arithmetic.

    Example:
        cents_to_euros_str(4599) -> "45.99"
    """
    is_negative = cents < 0
    abs_cents = abs(int(cents))

    euros = abs_cents // 100
    remainder = abs_cents % 100

    if is_negative:
        return f"-{euros}.{remainder:02d}"
    return f"{euros}.{remainder:02d}"


def parse_euros_to_cents(euros_str: str, allow_negative: bool = False) -> int:
    """
    Parse a euro amount typed by a user into cents.

    Accepts a comma or a dot as decimal separator and an optional euro sign.
    Fractions beyond two digits are rounded half-up.

    Args:
        euros_str: String like "12,34", "12.34 €" or "12"
        allow_negative: Accept a leading minus sign (carry-over overrides)

    Returns:
        Amount in cents

    Raises:
        ValidationError: If the string is empty, not numeric, or negative when not allowed

    Examples:
        parse_euros_to_cents("12,34") -> 1234
        parse_euros_to_cents("12") -> 1200
        parse_euros_to_cents("0.005") -> 1
    """
    clean = str(euros_str).replace("€", "").replace(" ", "").strip()
    if "," in clean and "." in clean:
        # "1.234,56" style grouping
        clean = clean.replace(".", "").replace(",", ".")
    else:
        clean = clean.replace(",", ".")

    if not clean:
        raise ValidationError("Amount must not be empty")

    try:
        amount = Decimal(clean)
    except InvalidOperation as e:
        raise ValidationError(f"Not a valid amount: {euros_str!r}") from e

    if not amount.is_finite():
        raise ValidationError(f"Not a valid amount: {euros_str!r}")
    if amount < 0 and not allow_negative:
        raise ValidationError(f"Amount must not be negative: {euros_str!r}")

    return int((amount * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def validate_cents(value: object, field_name: str = "amount") -> int:
    """
    Check that a programmatic amount is a non-negative integer number of cents.

    Raises:
        ValidationError: For floats, booleans, strings or negative values
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{field_name} must be an integer number of cents, got {value!r}")
    if value < 0:
        raise ValidationError(f"{field_name} must not be negative, got {value}")
    return value


def format_cents(cents: int) -> str:
    """Format cents as euro string with € suffix."""
    return f"{cents_to_euros_str(cents)} €"
