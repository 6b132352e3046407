#!/usr/bin/env python3
"""Tests for euro amount parsing and formatting."""

import pytest

from budgetbook.core.currency import cents_to_euros_str, format_cents, parse_euros_to_cents, validate_cents
from budgetbook.core.errors import ValidationError


class TestParseEurosToCents:
    """Test parsing of user-typed euro amounts."""

    @pytest.mark.currency
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("12,34", 1234),
            ("12.34", 1234),
            ("12", 1200),
            ("12,5", 1250),
            ("900,00 €", 90000),
            ("1.234,56", 123456),
            ("0", 0),
            ("0.005", 1),
            (" 7,10 ", 710),
        ],
    )
    def test_valid_amounts(self, text, expected):
        assert parse_euros_to_cents(text) == expected

    @pytest.mark.currency
    @pytest.mark.parametrize("text", ["", "   ", "abc", "12,3x", "nan", "inf"])
    def test_invalid_amounts_rejected(self, text):
        with pytest.raises(ValidationError):
            parse_euros_to_cents(text)

    @pytest.mark.currency
    def test_negative_rejected_by_default(self):
        with pytest.raises(ValidationError, match="negative"):
            parse_euros_to_cents("-5")

    @pytest.mark.currency
    def test_negative_allowed_when_requested(self):
        assert parse_euros_to_cents("-5,50", allow_negative=True) == -550


class TestFormatting:
    """Test cents to euro string conversion."""

    @pytest.mark.currency
    def test_cents_to_euros_str(self):
        assert cents_to_euros_str(4599) == "45.99"
        assert cents_to_euros_str(5) == "0.05"
        assert cents_to_euros_str(-1250) == "-12.50"

    @pytest.mark.currency
    def test_format_cents(self):
        assert format_cents(90000) == "900.00 €"


class TestValidateCents:
    """Test programmatic amount validation."""

    def test_accepts_non_negative_int(self):
        assert validate_cents(0) == 0
        assert validate_cents(3000) == 3000

    @pytest.mark.parametrize("value", [12.5, "100", True, None, -1])
    def test_rejects_everything_else(self, value):
        with pytest.raises(ValidationError):
            validate_cents(value)
