"""Date parsing and validation for account and transaction dates."""

from __future__ import annotations

import re
from datetime import date

_DATE_PATTERN = re.compile(r"\s*([+-]?\d+).\s*([+-]?\d+).\s*([+-]?\d+)", re.DOTALL)

_THIRTY_ONE_DAY_MONTHS = frozenset({1, 3, 5, 7, 8, 10, 12})


def is_leap(year: int) -> bool:
    """Return True if ``year`` is a Gregorian leap year."""
    return (year % 4 == 0 and year % 100 != 0) or year % 400 == 0


def parse_date(text: str) -> tuple[int, int, int]:
    """Split a date such as ``dd-mm-yyyy`` or ``dd/mm/yyyy`` into (day, month, year).

    Any single character separates the fields. Raises ValueError when the
    text does not hold three numbers.
    """
    match = _DATE_PATTERN.match(text)
    if match is None:
        raise ValueError(f"not a date: {text!r}")
    day, month, year = (int(group) for group in match.groups())
    return day, month, year


def format_date(day: int, month: int, year: int) -> str:
    """Render a date as ``d-m-yyyy`` without zero padding."""
    return f"{day}-{month}-{year}"


def is_valid_date(text: str, today: date | None = None) -> bool:
    """Check that ``text`` names a real calendar date that is not after ``today``.

    In the current year only the day of the current month is checked against
    today; later months of the current year are accepted.
    """
    if today is None:
        today = date.today()
    try:
        day, month, year = parse_date(text)
    except ValueError:
        return False

    if not 1 <= day <= 31:
        return False
    if not 1 <= month <= 12:
        return False
    if year < 0 or year > today.year:
        return False
    if year == today.year and month == today.month and day > today.day:
        return False

    if month == 2:
        return day <= (29 if is_leap(year) else 28)
    if month in _THIRTY_ONE_DAY_MONTHS:
        return day <= 31
    return day <= 30


def is_within_range(text: str, opened: str, today: date | None = None) -> bool:
    """Check that the date in ``text`` lies between ``opened`` and ``today``.

    Both ``text`` and ``opened`` are date strings; a string that cannot be
    read makes the check fail.
    """
    if today is None:
        today = date.today()
    try:
        open_day, open_month, open_year = parse_date(opened)
        day, month, year = parse_date(text)
    except ValueError:
        return False

    if year < open_year or year > today.year:
        return False
    if year == open_year and month < open_month:
        return False
    if year == today.year and month > today.month:
        return False
    if year == open_year and month == open_month and day < open_day:
        return False
    if year == today.year and month == today.month and day > today.day:
        return False
    return True