"""
Terminal painting of week and month layouts with rich.

The layouts are computed elsewhere; this module only maps percentages to
hour rows and cells to table cells.
"""

from __future__ import annotations

from typing import Optional

from rich import box
from rich.color import Color, ColorParseError
from rich.console import Console
from rich.table import Table
from rich.text import Text

from edunexus.model import DEFAULT_COLOR
from edunexus.render_month import MonthLayout
from edunexus.render_week import EMPTY_MESSAGE, CourseBlock, WeekLayout

SHORT_DAYS = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]


def safe_color(value: Optional[str], default: str = DEFAULT_COLOR) -> str:
    """Courses may carry any string as color; fall back when rich can't parse it."""
    try:
        Color.parse(value or default)
        return value or default
    except ColorParseError:
        return default


def _top_block(blocks: list[CourseBlock], row_top: float, row_bottom: float) -> tuple[Optional[CourseBlock], int]:
    """
    Highest-stacked block touching the row, plus how many others hide below it.
    """
    hits = [b for b in blocks if b.top < row_bottom and b.top + b.height > row_top]
    if not hits:
        return None, 0
    # ties keep store order: the later one in the list is drawn last
    best = max(enumerate(hits), key=lambda item: (item[1].z_index, item[0]))[1]
    return best, len(hits) - 1


def week_table(layout: WeekLayout) -> Table:
    table = Table(title=f"Week: {layout.title}", box=box.SIMPLE_HEAVY, show_lines=False, expand=True)
    table.add_column("", justify="right", style="dim", no_wrap=True)
    for col in layout.columns:
        header = f"{SHORT_DAYS[col.index]} {col.date.day}"
        table.add_column(Text(header, style="bold reverse" if col.is_today else "bold"), ratio=1)

    hours = max(layout.day_total_hours, 0)
    for i in range(hours):
        row_top = i / hours * 100
        row_bottom = (i + 1) / hours * 100
        cells: list[Text] = [Text(f"{layout.day_start_hour + i:02d}:00")]
        for col in layout.columns:
            block, hidden = _top_block(col.blocks, row_top, row_bottom)
            if block is None:
                cells.append(Text(""))
                continue
            color = safe_color(block.color)
            if row_top <= block.top < row_bottom:
                c = block.course
                text = Text(c.name, style=f"bold {color}")
                text.append(f"\n{c.start_time}-{c.end_time}", style=color)
                if c.location:
                    text.append(f"\n@ {c.location}", style="dim")
            else:
                text = Text("┃", style=color)
            if hidden:
                text.append(f" (+{hidden})", style="yellow")
            cells.append(text)
        table.add_row(*cells)

    if layout.empty:
        table.caption = EMPTY_MESSAGE
    return table


def month_table(layout: MonthLayout) -> Table:
    table = Table(title=layout.title, box=box.SQUARE, show_lines=True, expand=True)
    for name in SHORT_DAYS:
        table.add_column(name, justify="left", ratio=1)

    for week in layout.weeks():
        row: list[Text] = []
        for cell in week:
            if cell.is_today:
                style = "bold reverse"
            elif not cell.in_month:
                style = "dim"
            else:
                style = ""
            text = Text(str(cell.day), style=style)
            if cell.dots:
                text.append("\n")
                for dot in cell.dots:
                    text.append("●", style=safe_color(dot.color))
            if cell.overflow:
                text.append(f" +{cell.overflow}", style="yellow")
            row.append(text)
        table.add_row(*row)
    return table


def print_week(layout: WeekLayout, console: Optional[Console] = None) -> None:
    (console or Console()).print(week_table(layout))


def print_month(layout: MonthLayout, console: Optional[Console] = None) -> None:
    (console or Console()).print(month_table(layout))
