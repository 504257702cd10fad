"""
View cursors and view switching.

The week cursor is a signed offset from the current week; the month cursor
is an absolute (year, month) pair. They never share state. Entering the
month view always jumps back to the real current month; entering the week
view keeps whatever offset was last used.
"""

from __future__ import annotations

from datetime import date
from typing import Callable

from edunexus.render_month import format_month_title
from edunexus.render_week import format_week_range, week_dates
from edunexus.timemath import shift_month

WEEK = "week"
MONTH = "month"


class ViewCursor:
    def __init__(self, today_fn: Callable[[], date] = date.today) -> None:
        self._today = today_fn
        today = today_fn()
        self.week_offset = 0
        self.display_year = today.year
        self.display_month = today.month - 1
        self.active_view = WEEK

    # week cursor

    def next_week(self) -> None:
        self.week_offset += 1

    def prev_week(self) -> None:
        self.week_offset -= 1

    def this_week(self) -> None:
        self.week_offset = 0

    # month cursor

    def next_month(self) -> None:
        self.display_year, self.display_month = shift_month(self.display_year, self.display_month, 1)

    def prev_month(self) -> None:
        self.display_year, self.display_month = shift_month(self.display_year, self.display_month, -1)

    def reset_month(self) -> None:
        today = self._today()
        self.display_year = today.year
        self.display_month = today.month - 1

    def switch_to(self, view: str) -> str:
        if view == MONTH:
            self.active_view = MONTH
            self.reset_month()
        else:
            self.active_view = WEEK
        return self.active_view

    def header(self) -> str:
        if self.active_view == MONTH:
            return format_month_title(self.display_year, self.display_month)
        start, end = week_dates(self.week_offset, self._today())
        return format_week_range(start, end)
