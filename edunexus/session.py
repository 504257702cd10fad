"""
Session state: the bearer credential and the logged-in/out mode derived from it.

The token is opaque to the client except for the username shown in the
header, which is read from the JWT payload segment. Tokens are never
refreshed; an expired token is only noticed when the server answers 401.
"""

from __future__ import annotations

import base64
import json
import logging
from pathlib import Path
from typing import Callable, Optional

from edunexus.storage import clear_token, load_token, save_token

log = logging.getLogger(__name__)

LOGGED_IN = "logged_in"
LOGGED_OUT = "logged_out"


def decode_token_user(token: str) -> Optional[dict]:
    """
    Return the `user` claim ({id, username}) of a JWT, or None if unreadable.
    """
    parts = token.split(".")
    if len(parts) != 3:
        return None
    payload = parts[1]
    # JWT segments are unpadded base64url
    payload += "=" * (-len(payload) % 4)
    try:
        data = json.loads(base64.urlsafe_b64decode(payload.encode("ascii")))
    except (ValueError, UnicodeDecodeError):
        return None
    user = data.get("user") if isinstance(data, dict) else None
    return user if isinstance(user, dict) else None


class Session:
    def __init__(self, token_path: Optional[Path] = None, token: Optional[str] = None) -> None:
        self.token_path = token_path
        self._logout_callbacks: list[Callable[[], None]] = []
        if token is None and token_path is not None:
            token = load_token(token_path)
        self.token: Optional[str] = token

    @property
    def logged_in(self) -> bool:
        return bool(self.token)

    @property
    def mode(self) -> str:
        return LOGGED_IN if self.logged_in else LOGGED_OUT

    @property
    def username(self) -> Optional[str]:
        if not self.token:
            return None
        user = decode_token_user(self.token)
        if user and user.get("username"):
            return str(user["username"])
        log.debug("Could not decode username from token")
        return "User"

    def on_logout(self, callback: Callable[[], None]) -> None:
        """Register something that must be torn down together with the session."""
        self._logout_callbacks.append(callback)

    def login(self, token: str) -> None:
        self.token = token
        if self.token_path is not None:
            save_token(token, self.token_path)

    def logout(self) -> None:
        self.token = None
        if self.token_path is not None:
            clear_token(self.token_path)
        for callback in self._logout_callbacks:
            callback()
