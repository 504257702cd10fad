"""
Error taxonomy surfaced by the sync client and the course store.

- ValidationError: local pre-check failed, no request was sent
- Unauthorized:    401 from the server (session is torn down)
- RemoteError:     any other non-2xx answer, carries the server message
- NotFound:        404 (unknown id or a course owned by someone else)
- NetworkError:    the server could not be reached at all
"""

from __future__ import annotations

from typing import Optional


class EduNexusError(Exception):
    """Base class for every error the client raises on purpose."""


class ValidationError(EduNexusError):
    pass


class Unauthorized(EduNexusError):
    def __init__(self, message: str = "Unauthorized: Session expired or token invalid.") -> None:
        super().__init__(message)


class RemoteError(EduNexusError):
    def __init__(self, message: str, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status = status


class NotFound(RemoteError):
    pass


class NetworkError(EduNexusError):
    pass
