"""
Wiring of the client: one object owning session, sync client, store,
cursors, notices and reminders, shared by the CLI and the interactive mode.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

import requests

from edunexus.api import ApiClient
from edunexus.config import Settings, load_settings
from edunexus.logger import setup_logging
from edunexus.navigation import MONTH, ViewCursor
from edunexus.notices import Notices
from edunexus.reminders import ConsoleNotifier, ReminderScheduler
from edunexus.render_month import MonthLayout, build_month_layout
from edunexus.render_week import WeekLayout, build_week_layout
from edunexus.session import Session
from edunexus.store import CourseStore


@dataclass
class App:
    settings: Settings
    session: Session
    notices: Notices
    api: ApiClient
    store: CourseStore
    cursor: ViewCursor
    reminders: ReminderScheduler

    def week_layout(self, today: Optional[date] = None) -> WeekLayout:
        return build_week_layout(
            self.store.courses,
            offset=self.cursor.week_offset,
            today=today,
            day_start_hour=self.settings.day_start_hour,
            day_total_hours=self.settings.day_total_hours,
            default_color=self.settings.default_color,
        )

    def month_layout(self, today: Optional[date] = None) -> MonthLayout:
        return build_month_layout(
            self.store.courses,
            self.cursor.display_year,
            self.cursor.display_month,
            today=today,
            max_dots=self.settings.max_dots,
            default_color=self.settings.default_color,
        )

    def current_layout(self, today: Optional[date] = None) -> WeekLayout | MonthLayout:
        if self.cursor.active_view == MONTH:
            return self.month_layout(today)
        return self.week_layout(today)


def build_app(
    settings: Optional[Settings] = None,
    http: Optional[requests.Session] = None,
    notifier=None,
) -> App:
    settings = settings or load_settings()
    setup_logging(settings.log_level, settings.log_file)

    session = Session(settings.token_path)
    notices = Notices(clear_after=settings.notice_seconds)
    api = ApiClient(settings.api_url, session, notices=notices, http=http, timeout=settings.http_timeout)
    store = CourseStore(api, default_color=settings.default_color)
    reminders = ReminderScheduler(notifier or ConsoleNotifier(), lead_minutes=settings.reminder_lead_minutes)
    session.on_logout(reminders.cancel_all)

    return App(
        settings=settings,
        session=session,
        notices=notices,
        api=api,
        store=store,
        cursor=ViewCursor(),
        reminders=reminders,
    )
