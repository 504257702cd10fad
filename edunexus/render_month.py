"""
Month view layout: always 42 cells (6 weeks, Sunday first) so the grid
height never changes. Cells before the 1st and after the last day belong
to the neighbouring months and are marked as such.

Course dots come from day_of_week only (there are no dated courses), so a
weekly course shows on every matching weekday of the displayed month.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, Optional

from edunexus.model import DEFAULT_COLOR, Course
from edunexus.timemath import days_in_month, first_weekday_of_month, normalize_month, shift_month

GRID_CELLS = 42

MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]


@dataclass(frozen=True)
class Dot:
    color: str
    label: str


@dataclass
class DayCell:
    day: int
    year: int
    month: int  # 0-indexed
    weekday: int  # 0 = Sunday
    in_month: bool
    is_today: bool = False
    dots: list[Dot] = field(default_factory=list)
    overflow: int = 0

    @property
    def date(self) -> date:
        return date(self.year, self.month + 1, self.day)


@dataclass
class MonthLayout:
    year: int
    month: int
    title: str
    cells: list[DayCell]

    def weeks(self) -> list[list[DayCell]]:
        return [self.cells[i:i + 7] for i in range(0, len(self.cells), 7)]


def format_month_title(year: int, month: int) -> str:
    return f"{MONTH_NAMES[month]} {year}"


def build_month_layout(
    courses: Iterable[Course],
    year: int,
    month: int,
    today: Optional[date] = None,
    max_dots: int = 3,
    default_color: str = DEFAULT_COLOR,
) -> MonthLayout:
    today = today or date.today()
    courses = list(courses)
    year, month = normalize_month(year, month)

    first = first_weekday_of_month(year, month)
    n_days = days_in_month(year, month)
    prev_year, prev_month = shift_month(year, month, -1)
    next_year, next_month = shift_month(year, month, 1)
    n_prev = days_in_month(prev_year, prev_month)

    spans = [
        (prev_year, prev_month, range(n_prev - first + 1, n_prev + 1), False),
        (year, month, range(1, n_days + 1), True),
        (next_year, next_month, range(1, GRID_CELLS - first - n_days + 1), False),
    ]

    cells: list[DayCell] = []
    for y, m, days, in_month in spans:
        for day in days:
            weekday = len(cells) % 7
            cell = DayCell(
                day=day,
                year=y,
                month=m,
                weekday=weekday,
                in_month=in_month,
                is_today=in_month and (day, m, y) == (today.day, today.month - 1, today.year),
            )
            if in_month:
                matches = [c for c in courses if c.day_of_week == weekday]
                cell.dots = [Dot(c.color or default_color, c.name) for c in matches[:max_dots]]
                cell.overflow = max(len(matches) - max_dots, 0)
            cells.append(cell)

    return MonthLayout(year=year, month=month, title=format_month_title(year, month), cells=cells)
