"""Single-cell value normalizers for user-supplied tabular data.

Every normalizer in this module is total: it accepts any text (or None) and
returns either a typed value or an explicit absence marker. None of them raise,
so callers decide which absent values are fatal for a row.
"""

from __future__ import annotations

import re
from datetime import date, datetime
from decimal import Decimal, InvalidOperation

_DOMAIN_MONTH_NUMBER_BY_NAME = {
    "january": 1,
    "february": 2,
    "march": 3,
    "april": 4,
    "may": 5,
    "june": 6,
    "july": 7,
    "august": 8,
    "september": 9,
    "october": 10,
    "november": 11,
    "december": 12,
    "jan": 1,
    "feb": 2,
    "mar": 3,
    "apr": 4,
    "jun": 6,
    "jul": 7,
    "aug": 8,
    "sep": 9,
    "oct": 10,
    "nov": 11,
    "dec": 12,
}

# Ordered (pattern, group order) pairs; first structural match that forms a real date wins.
_DOMAIN_DATE_PATTERNS: tuple[tuple[re.Pattern[str], tuple[str, str, str]], ...] = (
    (re.compile(r"([A-Za-z]+)\s+(\d{1,2}),?\s+(\d{4})"), ("month", "day", "year")),
    (re.compile(r"(\d{1,2})\s+([A-Za-z]+)\s+(\d{4})"), ("day", "month", "year")),
    (re.compile(r"(\d{1,2})[/\-.](\d{1,2})[/\-.](\d{4})"), ("day", "month", "year")),
    (re.compile(r"(\d{4})[/\-.](\d{1,2})[/\-.](\d{1,2})"), ("year", "month", "day")),
)

_DOMAIN_FALLBACK_DATE_FORMATS = (
    "%m/%d/%Y %I:%M:%S %p",
    "%m/%d/%Y %H:%M:%S",
    "%m/%d/%Y",
    "%m/%d/%y",
    "%Y%m%d",
    "%d-%b-%y",
    "%d %b %y",
)

_DOMAIN_CURRENCY_STRIP_PATTERN = re.compile(r"[^0-9.\-]")

_DOMAIN_AFFIRMATIVE_VALUES = frozenset({"true", "yes", "y", "1", "paid", "complete", "completed"})


def domain_normalize_text(value: str | None) -> str | None:
    """Trim one text cell and map blank values to None.

    Args:
        value: Raw cell text.

    Returns:
        str | None: Trimmed text, or None when the cell is blank.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    if value is None:
        return None
    normalized_value = str(value).strip()
    if not normalized_value:
        return None
    return normalized_value


def domain_normalize_date(value: str | None) -> date | None:
    """Normalize one date cell into a calendar date.

    Patterns are tried in fixed order: `MonthName D, YYYY`, `D MonthName YYYY`,
    `D/M/YYYY` (also `-` and `.` separators), then `YYYY/M/D` (also `-`). Month
    names may be full or three-letter abbreviations in any case. When no pattern
    yields a real date, a generic date/time parse of the whole string is
    attempted. Time-of-day information is discarded.

    Args:
        value: Raw cell text.

    Returns:
        date | None: Parsed calendar date, or None when nothing matches.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    normalized_value = domain_normalize_text(value)
    if normalized_value is None:
        return None

    for pattern, group_order in _DOMAIN_DATE_PATTERNS:
        match = pattern.search(normalized_value)
        if match is None:
            continue
        parts = dict(zip(group_order, match.groups()))
        parsed_date = _domain_build_date(year_text=parts["year"], month_text=parts["month"], day_text=parts["day"])
        if parsed_date is not None:
            return parsed_date

    return _domain_parse_date_fallback(normalized_value)


def domain_normalize_currency(value: str | None) -> Decimal:
    """Normalize one currency cell into a decimal amount.

    Every character other than digits, `.` and `-` is removed before parsing,
    so symbols, thousands separators and currency codes are ignored.

    Args:
        value: Raw cell text.

    Returns:
        Decimal: Parsed amount, or `Decimal("0")` when the remainder is not a number.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    if value is None:
        return Decimal("0")

    cleaned_value = _DOMAIN_CURRENCY_STRIP_PATTERN.sub("", str(value))
    if not cleaned_value:
        return Decimal("0")

    # The whole stripped text must parse; a numeric prefix such as "1234.56." is not read.
    try:
        parsed_value = Decimal(cleaned_value)
    except InvalidOperation:
        return Decimal("0")
    if not parsed_value.is_finite():
        return Decimal("0")
    return parsed_value


def domain_normalize_boolean(value: str | None) -> bool:
    """Normalize one yes/no style cell into a boolean.

    Args:
        value: Raw cell text.

    Returns:
        bool: True for `true`, `yes`, `y`, `1`, `paid`, `complete`, `completed`
        (case-insensitive, trimmed); False for anything else.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    if value is None:
        return False
    return str(value).strip().lower() in _DOMAIN_AFFIRMATIVE_VALUES


def _domain_build_date(year_text: str, month_text: str, day_text: str) -> date | None:
    """Build a calendar date from matched components.

    Args:
        year_text: Four-digit year text.
        month_text: Month number or month name text.
        day_text: Day-of-month text.

    Returns:
        date | None: Calendar date, or None when components do not form a real date.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    if month_text.isdigit():
        month_number = int(month_text)
    else:
        month_number = _DOMAIN_MONTH_NUMBER_BY_NAME.get(month_text.lower())
        if month_number is None:
            return None

    try:
        return date(int(year_text), month_number, int(day_text))
    except ValueError:
        return None


def _domain_parse_date_fallback(normalized_value: str) -> date | None:
    """Parse a date with generic ISO and common date/time formats.

    Args:
        normalized_value: Trimmed non-empty cell text.

    Returns:
        date | None: Parsed date, or None when unsupported.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    try:
        return datetime.fromisoformat(normalized_value).date()
    except ValueError:
        pass

    for supported_format in _DOMAIN_FALLBACK_DATE_FORMATS:
        try:
            return datetime.strptime(normalized_value, supported_format).date()
        except ValueError:
            continue

    return None


__all__ = [
    "domain_normalize_boolean",
    "domain_normalize_currency",
    "domain_normalize_date",
    "domain_normalize_text",
]
