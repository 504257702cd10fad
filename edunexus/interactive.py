from __future__ import annotations

import getpass
import logging
from typing import Callable, Optional

from rich import box
from rich.console import Console
from rich.table import Table

from edunexus.app import App
from edunexus.display import month_table, week_table
from edunexus.errors import EduNexusError, ValidationError
from edunexus.model import Course
from edunexus.navigation import MONTH, WEEK
from edunexus.render_week import DAY_NAMES
from edunexus.reminders import GRANTED

log = logging.getLogger(__name__)

console = Console()

NOTICE_STYLES = {"info": "cyan", "success": "green", "error": "bold red"}


def _println(msg: str = "") -> None:
    console.print(msg)


def _prompt(msg: str) -> str:
    return console.input(msg)


def _show_notice(app: App) -> None:
    notice = app.notices.current
    if notice is not None:
        console.print(f"[{NOTICE_STYLES.get(notice.kind, 'white')}]{notice.text}[/]")


def _attempt(app: App, action: Callable[[], object]) -> bool:
    """
    Run one user action. Errors end up in the notice area, never in a crash.
    """
    try:
        action()
        return True
    except ValidationError as e:
        app.notices.error(str(e))
    except EduNexusError as e:
        # remote/network/401 paths already posted their notice
        log.debug("Action failed: %s", e)
    return False


def run_interactive(app: App) -> None:
    """
    Interactive menu loop: logged-out menu (login/register) and the
    logged-in calendar menu, switching whenever the session changes.
    """
    if app.session.logged_in:
        _after_login(app)

    while True:
        if app.session.logged_in:
            keep_going = _logged_in_round(app)
        else:
            keep_going = _logged_out_round(app)
        if not keep_going:
            _println("Bye.")
            return


def _after_login(app: App) -> None:
    _attempt(app, app.store.load_courses)
    app.cursor.switch_to(WEEK)
    if app.reminders.notifier.permission == GRANTED:
        app.reminders.schedule_today(app.store.courses)


# ---------------------------------------------------------------------------
# Logged out
# ---------------------------------------------------------------------------


def _logged_out_round(app: App) -> bool:
    _println("\n=== EduNexus (interactive) ===")
    _println("Please log in or register.")
    _show_notice(app)

    choice = _prompt("\n[1] Log in\n[2] Register\n[0] Exit\nSelect: ").strip()
    if choice == "0":
        return False
    if choice == "1":
        _flow_login(app)
    elif choice == "2":
        _flow_register(app)
    else:
        _println("Invalid choice.")
    return True


def _flow_login(app: App) -> None:
    username = _prompt("Username: ").strip()
    password = getpass.getpass("Password: ")
    if _attempt(app, lambda: app.api.login(username, password)):
        _after_login(app)
        if app.session.logged_in:
            app.notices.success("Login successful!")


def _flow_register(app: App) -> None:
    username = _prompt("Username: ").strip()
    password = getpass.getpass("Password (min. 6 characters): ")
    _attempt(app, lambda: app.api.register(username, password))


# ---------------------------------------------------------------------------
# Logged in
# ---------------------------------------------------------------------------


def _print_header(app: App) -> None:
    _println(f"\n=== EduNexus (interactive) === {app.session.username}")
    _println(f"Courses: {len(app.store)} | View: {app.cursor.active_view} | {app.cursor.header()}")


def _render_active_view(app: App) -> None:
    if app.cursor.active_view == MONTH:
        console.print(month_table(app.month_layout()))
    else:
        console.print(week_table(app.week_layout()))


def _logged_in_round(app: App) -> bool:
    _print_header(app)
    _render_active_view(app)
    _show_notice(app)

    choice = _prompt(
        "\n[1] Week view\n"
        "[2] Month view\n"
        "[3] Previous\n"
        "[4] Next\n"
        "[5] Today\n"
        "[6] Add course\n"
        "[7] Edit course\n"
        "[8] Delete course\n"
        "[9] Enable reminders\n"
        "[L] Log out\n"
        "[0] Exit\n"
        "Select: "
    ).strip().lower()

    if choice == "0":
        return False

    if choice == "1":
        app.cursor.switch_to(WEEK)
    elif choice == "2":
        app.cursor.switch_to(MONTH)
    elif choice == "3":
        if app.cursor.active_view == MONTH:
            app.cursor.prev_month()
        else:
            app.cursor.prev_week()
    elif choice == "4":
        if app.cursor.active_view == MONTH:
            app.cursor.next_month()
        else:
            app.cursor.next_week()
    elif choice == "5":
        if app.cursor.active_view == MONTH:
            app.cursor.reset_month()
        else:
            app.cursor.this_week()
    elif choice == "6":
        _flow_add(app)
    elif choice == "7":
        _flow_edit(app)
    elif choice == "8":
        _flow_delete(app)
    elif choice == "9":
        _flow_reminders(app)
    elif choice == "l":
        app.api.logout()
    else:
        _println("Invalid choice.")
    return True


def _ask_day(default: Optional[int] = None) -> Optional[int]:
    listing = ", ".join(f"{i}={name[:3]}" for i, name in enumerate(DAY_NAMES))
    suffix = f" [{default}]" if default is not None else ""
    raw = _prompt(f"Day of week ({listing}){suffix}: ").strip()
    if not raw:
        return default
    if raw.isdigit():
        return int(raw)
    return -1


def _ask(label: str, default: Optional[str] = None) -> str:
    suffix = f" [{default}]" if default else ""
    raw = _prompt(f"{label}{suffix}: ").strip()
    return raw or (default or "")


def _flow_add(app: App) -> None:
    name = _ask("Course name")
    start = _ask("Start time (HH:MM)")
    end = _ask("End time (HH:MM)")
    day = _ask_day()
    color = _ask("Color", app.settings.default_color)
    instructor = _ask("Instructor (optional)")
    location = _ask("Location (optional)")
    _attempt(
        app,
        lambda: app.store.create(
            name,
            start,
            end,
            day if day is not None else -1,
            color=color,
            instructor=instructor,
            location=location,
        ),
    )


def _pick_course(app: App, title: str) -> Optional[Course]:
    courses = list(app.store.courses)
    if not courses:
        _println("No courses scheduled yet. Add a course!")
        return None

    table = Table(title=title, box=box.SIMPLE)
    table.add_column("#", justify="right")
    table.add_column("Course")
    table.add_column("Day")
    table.add_column("Time")
    for i, c in enumerate(courses, start=1):
        day = DAY_NAMES[c.day_of_week] if 0 <= c.day_of_week <= 6 else str(c.day_of_week)
        table.add_row(str(i), f"[bold cyan]{c.name}[/]", day, f"{c.start_time}-{c.end_time}")
    console.print(table)

    pick = _prompt("Enter number (blank = cancel): ").strip()
    if not pick:
        return None
    if not pick.isdigit() or not 1 <= int(pick) <= len(courses):
        _println("Out of range.")
        return None
    return courses[int(pick) - 1]


def _flow_edit(app: App) -> None:
    course = _pick_course(app, "Edit course")
    if course is None:
        return
    _println("Press Enter to keep the current value.")
    name = _ask("Course name", course.name)
    start = _ask("Start time (HH:MM)", course.start_time)
    end = _ask("End time (HH:MM)", course.end_time)
    day = _ask_day(course.day_of_week)
    color = _ask("Color", course.color)
    instructor = _ask("Instructor", course.instructor)
    location = _ask("Location", course.location)
    _attempt(
        app,
        lambda: app.store.update(
            course.id,
            name=name,
            start_time=start,
            end_time=end,
            day_of_week=day,
            color=color,
            instructor=instructor,
            location=location,
        ),
    )


def _flow_delete(app: App) -> None:
    course = _pick_course(app, "Delete course")
    if course is None:
        return
    confirm = _prompt(f'Are you sure you want to delete "{course.name}"? [y/N]: ').strip().lower()
    if confirm != "y":
        return
    _attempt(app, lambda: app.store.delete(course.id))


def _flow_reminders(app: App) -> None:
    notifier = app.reminders.notifier
    if notifier.permission != GRANTED and notifier.request_permission() != GRANTED:
        app.notices.info("Notification permission denied.")
        return
    app.reminders.cancel_all()
    scheduled = app.reminders.schedule_today(app.store.courses)
    app.notices.success(f"Notification permission granted! Reminders active ({len(scheduled)} today).")
