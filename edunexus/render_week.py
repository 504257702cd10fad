"""
Week view layout.

Turns the course snapshot into seven day columns (Sunday first) of
positioned blocks. Positions are percentages of the visible day window;
the painter decides what a percent means on screen.

Stacking: z_index = floor(start_minutes / 10) + 1, so a later-starting
course is drawn above an earlier one it overlaps.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Iterable, Optional

from edunexus.conflicts import overlap_index
from edunexus.model import DEFAULT_COLOR, Course
from edunexus.timemath import (
    DEFAULT_DAY_START_HOUR,
    DEFAULT_DAY_TOTAL_HOURS,
    duration_to_percent,
    js_weekday,
    time_to_minutes,
    time_to_percent,
)

DAY_NAMES = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]

EMPTY_MESSAGE = "No courses scheduled yet. Add a course!"


@dataclass(frozen=True)
class CourseBlock:
    course: Course
    top: float
    height: float
    z_index: int
    color: str
    overlaps: tuple[str, ...] = ()


@dataclass
class DayColumn:
    index: int
    name: str
    date: date
    is_today: bool
    blocks: list[CourseBlock] = field(default_factory=list)


@dataclass
class WeekLayout:
    title: str
    start_date: date
    end_date: date
    offset: int
    columns: list[DayColumn]
    empty: bool
    day_start_hour: int = DEFAULT_DAY_START_HOUR
    day_total_hours: int = DEFAULT_DAY_TOTAL_HOURS


def week_dates(offset: int = 0, today: Optional[date] = None) -> tuple[date, date]:
    """
    (Sunday, Saturday) of the week `offset` weeks away from the current one.
    """
    today = today or date.today()
    start = today - timedelta(days=js_weekday(today)) + timedelta(weeks=offset)
    return start, start + timedelta(days=6)


def _md(d: date) -> str:
    return f"{d:%b} {d.day}"


def format_week_range(start: date, end: date) -> str:
    """
    "Oct 18 - 24, 2026", "Oct 25 - Nov 1, 2026" or "Dec 27, 2026 - Jan 2, 2027".
    """
    if start.year != end.year:
        return f"{_md(start)}, {start.year} - {_md(end)}, {end.year}"
    if start.month == end.month:
        return f"{_md(start)} - {end.day}, {start.year}"
    return f"{_md(start)} - {_md(end)}, {start.year}"


def stacking_order(start_time: str) -> int:
    return time_to_minutes(start_time) // 10 + 1


def build_week_layout(
    courses: Iterable[Course],
    offset: int = 0,
    today: Optional[date] = None,
    day_start_hour: int = DEFAULT_DAY_START_HOUR,
    day_total_hours: int = DEFAULT_DAY_TOTAL_HOURS,
    default_color: str = DEFAULT_COLOR,
) -> WeekLayout:
    today = today or date.today()
    courses = list(courses)
    start, end = week_dates(offset, today)
    # nonzero offsets never highlight, even if they wrap onto this week
    today_index = js_weekday(today) if offset == 0 else None

    columns = [
        DayColumn(
            index=i,
            name=name,
            date=start + timedelta(days=i),
            is_today=i == today_index,
        )
        for i, name in enumerate(DAY_NAMES)
    ]

    overlaps = overlap_index(courses)
    for course in courses:
        if not 0 <= course.day_of_week <= 6:
            continue
        columns[course.day_of_week].blocks.append(
            CourseBlock(
                course=course,
                top=time_to_percent(course.start_time, day_start_hour, day_total_hours),
                height=duration_to_percent(course.start_time, course.end_time, day_total_hours),
                z_index=stacking_order(course.start_time),
                color=course.color or default_color,
                overlaps=tuple(overlaps.get(course.id, ())),
            )
        )

    return WeekLayout(
        title=format_week_range(start, end),
        start_date=start,
        end_date=end,
        offset=offset,
        columns=columns,
        empty=not courses,
        day_start_hour=day_start_hour,
        day_total_hours=day_total_hours,
    )
