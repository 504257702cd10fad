"""
Central data model definitions used across the project.

This module defines the canonical structure of Course objects so that:
- the store, the renderers and the reminder scheduler share the same fields
- the camelCase wire format of the backend stays confined to one place
"""

from __future__ import annotations

import random
import string
import time
from dataclasses import dataclass, replace
from typing import Any, Optional

from edunexus.errors import ValidationError

DEFAULT_COLOR = "#4A90E2"

_BASE36 = string.digits + string.ascii_lowercase


@dataclass(frozen=True)
class Course:
    """
    One weekly recurring course entry, owned by exactly one user.

    day_of_week uses 0 = Sunday ... 6 = Saturday.
    """

    id: str
    name: str
    start_time: str
    end_time: str
    day_of_week: int
    color: str = ""  # empty: the configured default color is drawn
    instructor: Optional[str] = None
    location: Optional[str] = None
    user_id: Optional[str] = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Course":
        """
        Build a Course from one row of the backend's JSON.
        """
        try:
            day = int(data.get("dayOfWeek", 0))
        except (TypeError, ValueError):
            day = 0
        return cls(
            id=str(data.get("id", "")),
            name=str(data.get("name") or ""),
            start_time=str(data.get("startTime") or ""),
            end_time=str(data.get("endTime") or ""),
            day_of_week=day,
            color=str(data.get("color") or ""),
            instructor=data.get("instructor") or None,
            location=data.get("location") or None,
            user_id=data.get("userId"),
        )

    def to_payload(self) -> dict[str, Any]:
        """
        Write body for POST /courses. userId is assigned by the server and never sent.
        """
        return {
            "id": self.id,
            "name": self.name,
            "startTime": self.start_time,
            "endTime": self.end_time,
            "dayOfWeek": self.day_of_week,
            "color": self.color,
            "instructor": self.instructor or "",
            "location": self.location or "",
        }

    def with_changes(self, **fields: Any) -> "Course":
        # None means "keep the current value", like the server's COALESCE update
        return replace(self, **{k: v for k, v in fields.items() if v is not None})


# Python attribute name -> wire field name
WIRE_FIELDS = {
    "name": "name",
    "start_time": "startTime",
    "end_time": "endTime",
    "day_of_week": "dayOfWeek",
    "color": "color",
    "instructor": "instructor",
    "location": "location",
}


def _base36(n: int) -> str:
    if n == 0:
        return "0"
    out = []
    while n:
        n, r = divmod(n, 36)
        out.append(_BASE36[r])
    return "".join(reversed(out))


def generate_course_id() -> str:
    """
    Client-side course id: base36 millisecond timestamp + 9 random base36 chars.
    """
    stamp = _base36(int(time.time() * 1000))
    suffix = "".join(random.choices(_BASE36, k=9))
    return stamp + suffix


def validate_course_fields(name: str | None, start_time: str | None, end_time: str | None, day_of_week: Any) -> None:
    """
    Local checks run before any request is sent.

    Raises ValidationError with a user-facing message.
    """
    if not (name or "").strip() or not start_time or not end_time:
        raise ValidationError("Required fields: Name, Start Time, End Time.")
    # zero-padded HH:MM compares correctly as text
    if end_time <= start_time:
        raise ValidationError("End time must be after start time.")
    if not isinstance(day_of_week, int) or isinstance(day_of_week, bool) or not 0 <= day_of_week <= 6:
        raise ValidationError("Day of week must be between 0 (Sunday) and 6 (Saturday).")


def validate_partial_fields(
    name: str | None = None,
    start_time: str | None = None,
    end_time: str | None = None,
    day_of_week: Any = None,
) -> None:
    """
    Checks for an update whose current row is unknown: only the fields
    actually given (not None) are checked.
    """
    if name is not None and not name.strip():
        raise ValidationError("Required fields: Name, Start Time, End Time.")
    if start_time is not None and not start_time.strip():
        raise ValidationError("Required fields: Name, Start Time, End Time.")
    if end_time is not None and not end_time.strip():
        raise ValidationError("Required fields: Name, Start Time, End Time.")
    if start_time and end_time and end_time <= start_time:
        raise ValidationError("End time must be after start time.")
    if day_of_week is not None and (
        not isinstance(day_of_week, int) or isinstance(day_of_week, bool) or not 0 <= day_of_week <= 6
    ):
        raise ValidationError("Day of week must be between 0 (Sunday) and 6 (Saturday).")
