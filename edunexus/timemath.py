"""
Time and calendar math shared by the renderers and the reminder scheduler.

All functions are pure. Clock times are "HH:MM" strings, months are
0-indexed (0 = January) and weekdays follow the 0 = Sunday convention
used on the wire.
"""

from __future__ import annotations

import calendar
from datetime import date

DEFAULT_DAY_START_HOUR = 7
DEFAULT_DAY_TOTAL_HOURS = 15

# Blocks shorter than this (or with end <= start) are still drawn this tall
MIN_VISUAL_MINUTES = 15


def time_to_minutes(value: str | None) -> int:
    """
    Convert 'HH:MM' to minutes since midnight.

    Permissive on purpose: empty or malformed input gives 0 instead of raising,
    so a broken record never stops a whole view from rendering.
    """
    if not value or ":" not in value:
        return 0
    parts = value.strip().split(":")
    if len(parts) != 2:
        return 0
    try:
        hours = int(parts[0])
        minutes = int(parts[1])
    except ValueError:
        return 0
    return hours * 60 + minutes


def time_to_percent(
    value: str | None,
    day_start_hour: int = DEFAULT_DAY_START_HOUR,
    day_total_hours: int = DEFAULT_DAY_TOTAL_HOURS,
) -> float:
    """
    Position of a clock time inside the visible day window, in [0, 100].
    """
    if day_total_hours <= 0:
        return 0.0
    day_total_minutes = day_total_hours * 60
    from_start = time_to_minutes(value) - day_start_hour * 60
    if from_start <= 0:
        return 0.0
    if from_start >= day_total_minutes:
        return 100.0
    return from_start / day_total_minutes * 100


def duration_to_percent(
    start: str | None,
    end: str | None,
    day_total_hours: int = DEFAULT_DAY_TOTAL_HOURS,
) -> float:
    """
    Height of a course block as a share of the day window.
    """
    if day_total_hours <= 0:
        return 0.0
    duration = max(time_to_minutes(end) - time_to_minutes(start), MIN_VISUAL_MINUTES)
    return duration / (day_total_hours * 60) * 100


def normalize_month(year: int, month: int) -> tuple[int, int]:
    """Fold an out-of-range 0-indexed month (e.g. -1 or 12) into (year, 0..11)."""
    extra_years, month = divmod(month, 12)
    return year + extra_years, month


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    return normalize_month(year, month + delta)


def days_in_month(year: int, month: int) -> int:
    year, month = normalize_month(year, month)
    return calendar.monthrange(year, month + 1)[1]


def first_weekday_of_month(year: int, month: int) -> int:
    """Weekday of the 1st of the month, 0 = Sunday."""
    year, month = normalize_month(year, month)
    return js_weekday(date(year, month + 1, 1))


def js_weekday(d: date) -> int:
    # date.weekday() is Monday-based
    return (d.weekday() + 1) % 7
