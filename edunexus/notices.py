"""
The single transient message area.

Every load/mutation path reports here. Messages clear themselves after a
fixed delay. Several requests failing with 401 at once show the "session
expired" message only once; every other message is always shown.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Callable, Optional

SESSION_EXPIRED = "Your session has expired or is invalid. Please log in again."


@dataclass(frozen=True)
class Notice:
    text: str
    kind: str  # "info" | "success" | "error"


class Notices:
    def __init__(
        self,
        clear_after: float = 3.0,
        timer_factory: Callable[..., threading.Timer] = threading.Timer,
    ) -> None:
        self.clear_after = clear_after
        self._timer_factory = timer_factory
        self._timer: Optional[threading.Timer] = None
        self._lock = threading.Lock()
        self.current: Optional[Notice] = None

    @property
    def text(self) -> str:
        return self.current.text if self.current else ""

    def info(self, text: str) -> None:
        self._show(Notice(text, "info"))

    def success(self, text: str) -> None:
        self._show(Notice(text, "success"))

    def error(self, text: str) -> None:
        self._show(Notice(text, "error"))

    def session_expired(self) -> bool:
        """Show the expiry message unless it is already up. Returns True if shown."""
        with self._lock:
            if self.current is not None and self.current.text == SESSION_EXPIRED:
                return False
            self._show_locked(Notice(SESSION_EXPIRED, "error"))
        return True

    def clear(self) -> None:
        with self._lock:
            self.current = None
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

    def _show(self, notice: Notice) -> None:
        with self._lock:
            self._show_locked(notice)

    def _show_locked(self, notice: Notice) -> None:
        self.current = notice
        if self._timer is not None:
            self._timer.cancel()
        self._timer = self._timer_factory(self.clear_after, self._expire, args=(notice,))
        self._timer.daemon = True
        self._timer.start()

    def _expire(self, notice: Notice) -> None:
        with self._lock:
            # a newer message owns the area now
            if self.current is notice:
                self.current = None
                self._timer = None
