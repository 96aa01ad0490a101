"""
Calendar helpers for month and day keys.

All functions here are pure. Month indexes are zero-based (0 = January)
to match how months are selected; month ids and day-keys use the
1-based calendar month, zero-padded.
"""

import calendar
from datetime import date
from typing import Iterable


def month_names(year: int) -> list[str]:
    """
    Locale month names, January first.

    `year` does not change the result; it is accepted so callers can pass
    the selected year alongside the month list they render.
    """
    return [calendar.month_name[month] for month in range(1, 13)]


def days_in_month(year: int, month_index: int) -> list[str]:
    """Every day-key (YYYY-MM-DD) of the month, in ascending order."""
    month = month_index + 1
    _, last_day = calendar.monthrange(year, month)
    return [
        f"{year:04d}-{month:02d}-{day:02d}"
        for day in range(1, last_day + 1)
    ]


def month_id(year: int, month_index: int) -> str:
    """Build the YYYY-MM identifier for a year and zero-based month."""
    if not 0 <= month_index <= 11:
        raise ValueError(f"Month index must be 0-11, got {month_index}")
    return f"{year:04d}-{month_index + 1:02d}"


def parse_month_id(value: str) -> tuple[int, int]:
    """Split a YYYY-MM identifier into (year, zero-based month index)."""
    try:
        year_part, month_part = value.split("-")
        year, month = int(year_part), int(month_part)
    except ValueError:
        raise ValueError(f"Invalid month id: {value!r}")
    if len(year_part) != 4 or len(month_part) != 2 or not 1 <= month <= 12:
        raise ValueError(f"Invalid month id: {value!r}")
    return year, month - 1


def day_belongs_to_month(day_key: str, month_identifier: str) -> bool:
    """True if `day_key` is a real calendar date inside the given month."""
    if not isinstance(day_key, str) or not day_key.startswith(f"{month_identifier}-"):
        return False
    try:
        day = date.fromisoformat(day_key)
    except ValueError:
        return False
    return day.isoformat() == day_key


def format_day_label(day_key: str) -> str:
    """Short label for a day row, e.g. 'Sun, Mar 15'."""
    day = date.fromisoformat(day_key)
    return (
        f"{calendar.day_abbr[day.weekday()]}, "
        f"{calendar.month_abbr[day.month]} {day.day}"
    )


def available_years(current_year: int, extra_years: Iterable[int] = ()) -> list[int]:
    """The current year plus any configured extras, sorted and de-duplicated."""
    return sorted({current_year, *extra_years})
