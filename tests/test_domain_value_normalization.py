"""Tests for single-cell date, currency and boolean normalizers."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from bulk_import.domain import (
    domain_normalize_boolean,
    domain_normalize_currency,
    domain_normalize_date,
    domain_normalize_text,
)


@pytest.mark.parametrize(
    "raw_value",
    ["May 19, 2025", "19 May 2025", "19/05/2025", "19-05-2025", "2025/05/19", "2025-05-19", "19.05.2025"],
)
def test_domain_normalize_date_accepts_equivalent_formats(raw_value: str) -> None:
    """Normalize every supported notation of the same day to one calendar date.

    Returns:
        None: Assertions validate date equivalence.

    Raises:
        AssertionError: Raised when a notation yields a different date.
    """

    assert domain_normalize_date(raw_value) == date(2025, 5, 19)


def test_domain_normalize_date_accepts_abbreviated_and_mixed_case_month_names() -> None:
    """Map three-letter and mixed-case month names to month numbers."""

    assert domain_normalize_date("sep 3 2024") == date(2024, 9, 3)
    assert domain_normalize_date("3 DECEMBER 2024") == date(2024, 12, 3)
    assert domain_normalize_date("Event on Feb 14, 2026 at noon") == date(2026, 2, 14)


def test_domain_normalize_date_discards_time_of_day() -> None:
    """Return a date without time for date/time inputs.

    Returns:
        None: Assertions validate time truncation.

    Raises:
        AssertionError: Raised when time information survives.
    """

    assert domain_normalize_date("2025-05-19T18:30:00") == date(2025, 5, 19)
    assert domain_normalize_date("19/05/2025 18:30") == date(2025, 5, 19)


def test_domain_normalize_date_reads_slash_dates_day_first() -> None:
    """Treat the first component of a slash date as the day."""

    assert domain_normalize_date("03/04/2025") == date(2025, 4, 3)


def test_domain_normalize_date_falls_back_to_generic_parse() -> None:
    """Use generic parsing when no ordered pattern forms a real date."""

    # Day-first reading of 05/19 is impossible, so the US fallback applies.
    assert domain_normalize_date("05/19/2025") == date(2025, 5, 19)
    assert domain_normalize_date("20250519") == date(2025, 5, 19)


@pytest.mark.parametrize("raw_value", ["", "   ", None, "not a date", "Smarch 3 2025", "32/13/2025"])
def test_domain_normalize_date_returns_none_for_unparseable_values(raw_value: str | None) -> None:
    """Return None instead of raising for malformed dates.

    Returns:
        None: Assertions validate absence marker.

    Raises:
        AssertionError: Raised when a malformed value yields a date.
    """

    assert domain_normalize_date(raw_value) is None


@pytest.mark.parametrize("raw_value", ["$1,234.56", "1234.56", "USD 1234.56", " 1 234.56 "])
def test_domain_normalize_currency_strips_symbols_and_separators(raw_value: str) -> None:
    """Normalize common currency notations to the same decimal amount.

    Returns:
        None: Assertions validate currency equivalence.

    Raises:
        AssertionError: Raised when an amount differs.
    """

    assert domain_normalize_currency(raw_value) == Decimal("1234.56")


@pytest.mark.parametrize("raw_value", ["", None, "n/a", "--", "1.2.3", "$", "1234.56.", "$1,234.56 - $100"])
def test_domain_normalize_currency_returns_zero_for_invalid_numbers(raw_value: str | None) -> None:
    """Return zero for empty or unparseable amounts."""

    assert domain_normalize_currency(raw_value) == Decimal("0")


def test_domain_normalize_currency_keeps_negative_amounts() -> None:
    """Keep the minus sign of refunds and credits."""

    assert domain_normalize_currency("-$45.00") == Decimal("-45.00")


@pytest.mark.parametrize("raw_value", ["Yes", "TRUE", "1", "Paid", " y ", "completed", "Complete"])
def test_domain_normalize_boolean_accepts_affirmative_values(raw_value: str) -> None:
    """Map affirmative words to True regardless of case and padding.

    Returns:
        None: Assertions validate boolean mapping.

    Raises:
        AssertionError: Raised when an affirmative value maps to False.
    """

    assert domain_normalize_boolean(raw_value) is True


@pytest.mark.parametrize("raw_value", ["No", "", "0", "maybe", None, "false", "unpaid"])
def test_domain_normalize_boolean_rejects_everything_else(raw_value: str | None) -> None:
    """Map every other value, including blanks, to False."""

    assert domain_normalize_boolean(raw_value) is False


def test_domain_normalize_text_trims_and_blanks_to_none() -> None:
    """Trim text and return None for blank cells."""

    assert domain_normalize_text("  Jane Doe ") == "Jane Doe"
    assert domain_normalize_text("   ") is None
    assert domain_normalize_text(None) is None
