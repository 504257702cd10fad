"""
In-memory course store for the logged-in user.

The store never patches itself: every successful mutation is followed by
a full reload from the server, and the snapshot is replaced as a whole.
It is emptied on logout and whenever a load fails.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from edunexus.api import ApiClient
from edunexus.errors import EduNexusError
from edunexus.model import (
    DEFAULT_COLOR,
    WIRE_FIELDS,
    Course,
    generate_course_id,
    validate_course_fields,
    validate_partial_fields,
)

log = logging.getLogger(__name__)


class CourseStore:
    def __init__(self, api: ApiClient, default_color: str = DEFAULT_COLOR) -> None:
        self.api = api
        self.default_color = default_color
        self.courses: tuple[Course, ...] = ()
        api.session.on_logout(self.clear)

    def __len__(self) -> int:
        return len(self.courses)

    def clear(self) -> None:
        self.courses = ()

    def get(self, course_id: str) -> Optional[Course]:
        for course in self.courses:
            if course.id == course_id:
                return course
        return None

    def courses_on(self, day_of_week: int) -> list[Course]:
        return [c for c in self.courses if c.day_of_week == day_of_week]

    def load_courses(self) -> tuple[Course, ...]:
        """
        Replace the snapshot with the server's list, in server order.

        Without a session no request is made and the store is emptied.
        On failure the store is emptied and the error re-raised.
        """
        if not self.api.session.logged_in:
            log.debug("Not logged in. Skipping course load.")
            self.clear()
            return self.courses

        try:
            rows = self.api.list_courses()
        except EduNexusError:
            self.clear()
            raise

        self.courses = tuple(Course.from_api(row) for row in rows if isinstance(row, dict))
        log.debug("Loaded %d courses", len(self.courses))
        return self.courses

    def create(
        self,
        name: str,
        start_time: str,
        end_time: str,
        day_of_week: int,
        color: Optional[str] = None,
        instructor: Optional[str] = None,
        location: Optional[str] = None,
    ) -> str:
        """
        Create a course with a client-generated id and reload. Returns the id.
        """
        validate_course_fields(name, start_time, end_time, day_of_week)
        course = Course(
            id=generate_course_id(),
            name=name.strip(),
            start_time=start_time,
            end_time=end_time,
            day_of_week=day_of_week,
            color=color or self.default_color,
            instructor=(instructor or "").strip() or None,
            location=(location or "").strip() or None,
        )
        created = self.api.create_course(course.to_payload())
        if self.api.notices is not None:
            self.api.notices.success(f'Course "{created.get("name") or course.name}" added!')
        self.load_courses()
        return course.id

    def update(self, course_id: str, **fields: Any) -> None:
        """
        Send a partial update. Fields left as None are kept by the server.

        The merged result is validated against the current snapshot row
        before the request goes out.
        """
        unknown = set(fields) - set(WIRE_FIELDS)
        if unknown:
            raise TypeError(f"Unknown course fields: {', '.join(sorted(unknown))}")

        current = self.get(course_id)
        if current is not None:
            merged = current.with_changes(**fields)
            validate_course_fields(merged.name, merged.start_time, merged.end_time, merged.day_of_week)
            name = merged.name
        else:
            # not in the snapshot: the server decides (404 if it is not ours)
            validate_partial_fields(
                fields.get("name"), fields.get("start_time"), fields.get("end_time"), fields.get("day_of_week")
            )
            name = fields.get("name") or course_id

        body = {WIRE_FIELDS[k]: v for k, v in fields.items() if v is not None}
        result = self.api.update_course(course_id, body)
        name = (result.get("data") or {}).get("name") or name
        if self.api.notices is not None:
            self.api.notices.success(f'Course "{name}" updated!')
        self.load_courses()

    def delete(self, course_id: str) -> None:
        self.api.delete_course(course_id)
        if self.api.notices is not None:
            self.api.notices.success("Course deleted successfully.")
        self.load_courses()
