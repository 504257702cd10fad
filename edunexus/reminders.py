"""
One-shot reminders for today's courses.

For each course on today's weekday a timer fires `lead_minutes` before its
start time, provided that moment is still ahead and notification permission
is already granted. Nothing is re-scanned at midnight and nothing survives
a restart. Pending timers are cancelled when the session ends.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Iterable, Optional

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm

from edunexus.model import Course
from edunexus.timemath import js_weekday, time_to_minutes

log = logging.getLogger(__name__)

DEFAULT = "default"
GRANTED = "granted"
DENIED = "denied"


class ConsoleNotifier:
    """
    Terminal stand-in for desktop notifications: a rich panel plus the bell.

    Permission is asked once through `ask` (a yes/no prompt, rich Confirm by default).
    """

    def __init__(self, console: Optional[Console] = None, ask: Optional[Callable[[str], bool]] = None) -> None:
        self.console = console or Console()
        self._ask = ask or Confirm.ask
        self.permission = DEFAULT

    def request_permission(self) -> str:
        if self.permission != DEFAULT:
            return self.permission
        self.permission = GRANTED if self._ask("Allow course reminders in this terminal?") else DENIED
        return self.permission

    def notify(self, title: str, body: str) -> None:
        self.console.bell()
        self.console.print(Panel(body, title=title, border_style="cyan"))


@dataclass
class Reminder:
    course: Course
    fire_at: datetime
    timer: threading.Timer


class ReminderScheduler:
    def __init__(
        self,
        notifier,
        lead_minutes: int = 5,
        timer_factory: Callable[..., threading.Timer] = threading.Timer,
    ) -> None:
        self.notifier = notifier
        self.lead_minutes = lead_minutes
        self._timer_factory = timer_factory
        self._lock = threading.Lock()
        self.pending: list[Reminder] = []

    def schedule_today(self, courses: Iterable[Course], now: Optional[datetime] = None) -> list[Reminder]:
        if self.notifier.permission != GRANTED:
            log.debug("Notification permission is %s, no reminders scheduled", self.notifier.permission)
            return []

        now = now or datetime.now()
        today = js_weekday(now.date())
        midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)

        scheduled: list[Reminder] = []
        for course in courses:
            if course.day_of_week != today:
                continue
            starts_at = midnight + timedelta(minutes=time_to_minutes(course.start_time))
            fire_at = starts_at - timedelta(minutes=self.lead_minutes)
            if fire_at <= now:
                continue

            timer = self._timer_factory((fire_at - now).total_seconds(), self._fire, args=(course,))
            timer.daemon = True
            timer.start()
            reminder = Reminder(course=course, fire_at=fire_at, timer=timer)
            with self._lock:
                self.pending.append(reminder)
            scheduled.append(reminder)
            log.info("Reminder for %s at %s", course.name, fire_at.strftime("%H:%M"))

        return scheduled

    def enable(self, courses: Iterable[Course], now: Optional[datetime] = None) -> list[Reminder]:
        """Ask for permission (if not decided yet), then schedule today's reminders."""
        if self.notifier.request_permission() != GRANTED:
            return []
        return self.schedule_today(courses, now)

    def cancel_all(self) -> None:
        with self._lock:
            pending, self.pending = self.pending, []
        for reminder in pending:
            reminder.timer.cancel()

    def wait(self) -> None:
        """Block until every pending reminder has fired or been cancelled."""
        with self._lock:
            pending = list(self.pending)
        for reminder in pending:
            reminder.timer.join()

    def _fire(self, course: Course) -> None:
        with self._lock:
            remaining = [r for r in self.pending if r.course is not course]
            cancelled = len(remaining) == len(self.pending)
            self.pending = remaining
        # already cancelled
        if cancelled:
            return
        self.notifier.notify(
            f"Upcoming Class: {course.name}",
            f"Starts at {course.start_time} in {course.location or 'class'}.",
        )
