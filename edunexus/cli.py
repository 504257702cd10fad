"""
CLI (Command Line Interface).

Quick terminal commands, e.g.:

    edunexus register <username>
    edunexus login <username>
    edunexus add "Algorithms" 09:00 10:30 tue
    edunexus week --offset 1
    edunexus month --year 2026 --month 12
    edunexus interactive

Note:
- The interactive UI lives in edunexus/interactive.py
- Messages are plain text; only the calendars are drawn with rich
"""

from __future__ import annotations

import argparse
import getpass
from typing import Optional

from edunexus.app import App, build_app
from edunexus.display import print_month, print_week
from edunexus.errors import EduNexusError, ValidationError

DAY_ALIASES = {
    "sun": 0, "sunday": 0,
    "mon": 1, "monday": 1,
    "tue": 2, "tuesday": 2,
    "wed": 3, "wednesday": 3,
    "thu": 4, "thursday": 4,
    "fri": 5, "friday": 5,
    "sat": 6, "saturday": 6,
}

LOGIN_PROMPT = "Please log in or register."


def parse_day(value: str) -> int:
    """
    Accept 0-6 (0 = Sunday) or a day name / three-letter abbreviation.
    """
    v = (value or "").strip().lower()
    if v.isdigit() and 0 <= int(v) <= 6:
        return int(v)
    if v in DAY_ALIASES:
        return DAY_ALIASES[v]
    raise ValidationError(f"Unknown day of week: {value!r} (use 0-6 or sun..sat)")


def _password(args: argparse.Namespace) -> str:
    return args.password if args.password is not None else getpass.getpass("Password: ")


def _require_login(app: App) -> bool:
    if not app.session.logged_in:
        print(LOGIN_PROMPT)
        return False
    return True


def _cmd_register(args: argparse.Namespace, app: App) -> int:
    print(app.api.register(args.username, _password(args)))
    return 0


def _cmd_login(args: argparse.Namespace, app: App) -> int:
    app.api.login(args.username, _password(args))
    app.store.load_courses()
    print(f"Login successful! Logged in as {app.session.username} ({len(app.store)} courses).")
    return 0


def _cmd_logout(args: argparse.Namespace, app: App) -> int:
    app.api.logout()
    print("You have been successfully logged out.")
    return 0


def _cmd_whoami(args: argparse.Namespace, app: App) -> int:
    if not _require_login(app):
        return 1
    print(app.session.username)
    return 0


def _cmd_list(args: argparse.Namespace, app: App) -> int:
    if not _require_login(app):
        return 1
    courses = app.store.load_courses()
    if not courses:
        print("No courses scheduled yet. Add a course!")
        return 0
    for c in courses:
        bits = [c.id, c.name, f"day={c.day_of_week}", f"{c.start_time}-{c.end_time}"]
        if c.instructor:
            bits.append(c.instructor)
        if c.location:
            bits.append(f"@ {c.location}")
        print(" | ".join(bits))
    return 0


def _cmd_add(args: argparse.Namespace, app: App) -> int:
    day = parse_day(args.day)
    if not _require_login(app):
        return 1
    course_id = app.store.create(
        args.name,
        args.start,
        args.end,
        day,
        color=args.color,
        instructor=args.instructor,
        location=args.location,
    )
    print(f'Course "{args.name.strip()}" added! (id: {course_id})')
    return 0


def _cmd_edit(args: argparse.Namespace, app: App) -> int:
    day = parse_day(args.day) if args.day is not None else None
    if not _require_login(app):
        return 1
    app.store.load_courses()
    app.store.update(
        args.course_id,
        name=args.name,
        start_time=args.start,
        end_time=args.end,
        day_of_week=day,
        color=args.color,
        instructor=args.instructor,
        location=args.location,
    )
    print(f"Updated: {args.course_id}")
    return 0


def _cmd_delete(args: argparse.Namespace, app: App) -> int:
    if not _require_login(app):
        return 1
    app.store.delete(args.course_id)
    print(f"Course deleted successfully. (remaining: {len(app.store)})")
    return 0


def _cmd_week(args: argparse.Namespace, app: App) -> int:
    if not _require_login(app):
        return 1
    app.store.load_courses()
    app.cursor.switch_to("week")
    app.cursor.week_offset = args.offset
    print_week(app.week_layout())
    return 0


def _cmd_month(args: argparse.Namespace, app: App) -> int:
    if not _require_login(app):
        return 1
    if args.month is not None and not 1 <= args.month <= 12:
        raise ValidationError("Month must be between 1 and 12.")
    app.store.load_courses()
    app.cursor.switch_to("month")
    if args.year is not None:
        app.cursor.display_year = args.year
    if args.month is not None:
        app.cursor.display_month = args.month - 1
    print_month(app.month_layout())
    return 0


def _cmd_remind(args: argparse.Namespace, app: App) -> int:
    if not _require_login(app):
        return 1
    app.store.load_courses()
    scheduled = app.reminders.enable(app.store.courses)
    if not scheduled:
        print("No upcoming courses today.")
        return 0
    for r in scheduled:
        print(f"Reminder at {r.fire_at:%H:%M}: {r.course.name}")
    print("Waiting for reminders (Ctrl+C to stop)...")
    try:
        app.reminders.wait()
    except KeyboardInterrupt:
        app.reminders.cancel_all()
    return 0


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser with sub-commands.
    """
    parser = argparse.ArgumentParser(prog="edunexus", description="EduNexus course schedule CLI")
    sub = parser.add_subparsers(dest="command", required=True)

    for name, help_text in (("register", "Create an account"), ("login", "Log in and load courses")):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("username", type=str, help="Username")
        p.add_argument("--password", "-p", type=str, default=None, help="Password (prompted if omitted)")

    sub.add_parser("logout", help="Forget the stored session")
    sub.add_parser("whoami", help="Show the logged-in user")
    sub.add_parser("list", help="List your courses")

    p_add = sub.add_parser("add", help="Add a weekly course")
    p_add.add_argument("name", type=str, help="Course name")
    p_add.add_argument("start", type=str, help="Start time HH:MM")
    p_add.add_argument("end", type=str, help="End time HH:MM")
    p_add.add_argument("day", type=str, help="Day of week (0-6, 0 = Sunday, or sun..sat)")
    p_add.add_argument("--color", type=str, default=None)
    p_add.add_argument("--instructor", type=str, default=None)
    p_add.add_argument("--location", type=str, default=None)

    p_edit = sub.add_parser("edit", help="Change fields of a course")
    p_edit.add_argument("course_id", type=str, help="Course id (see 'list')")
    p_edit.add_argument("--name", type=str, default=None)
    p_edit.add_argument("--start", type=str, default=None)
    p_edit.add_argument("--end", type=str, default=None)
    p_edit.add_argument("--day", type=str, default=None)
    p_edit.add_argument("--color", type=str, default=None)
    p_edit.add_argument("--instructor", type=str, default=None)
    p_edit.add_argument("--location", type=str, default=None)

    p_delete = sub.add_parser("delete", help="Delete a course")
    p_delete.add_argument("course_id", type=str, help="Course id (see 'list')")

    p_week = sub.add_parser("week", help="Show the week timeline")
    p_week.add_argument("--offset", type=int, default=0, help="Weeks from now (negative = past)")

    p_month = sub.add_parser("month", help="Show the month grid")
    p_month.add_argument("--year", type=int, default=None)
    p_month.add_argument("--month", type=int, default=None, help="1-12")

    sub.add_parser("remind", help="Schedule reminders for today's courses and wait")
    sub.add_parser("interactive", help="Interactive menu mode")

    return parser


COMMANDS = {
    "register": _cmd_register,
    "login": _cmd_login,
    "logout": _cmd_logout,
    "whoami": _cmd_whoami,
    "list": _cmd_list,
    "add": _cmd_add,
    "edit": _cmd_edit,
    "delete": _cmd_delete,
    "week": _cmd_week,
    "month": _cmd_month,
    "remind": _cmd_remind,
}


def main(argv: list[str] | None = None, app: Optional[App] = None) -> None:
    """
    CLI entry point. Parses args, dispatches to command handlers,
    and exits via SystemExit with a return code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    app = app or build_app()

    if args.command == "interactive":
        from edunexus.interactive import run_interactive

        run_interactive(app)
        raise SystemExit(0)

    handler = COMMANDS.get(args.command)
    if handler is None:
        raise SystemExit(2)

    try:
        raise SystemExit(handler(args, app))
    except EduNexusError as e:
        print(f"Error: {e}")
        raise SystemExit(1)
