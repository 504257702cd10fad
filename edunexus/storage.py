"""
Persistent storage for the session credential.

This module manages the file (default location):

    ~/.edunexus/session.json

Only the bearer token is stored. Course data is never cached on disk:
the server is the source of truth and the store is refilled on login.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional


def load_token(path: str | Path) -> Optional[str]:
    """
    Load the stored bearer token.

    Returns None if the file does not exist or is invalid, so a corrupted
    session file simply means "logged out".
    """
    token_path = Path(path)

    # First run: no file yet -> not logged in
    if not token_path.exists():
        return None

    try:
        data = json.loads(token_path.read_text(encoding="utf-8"))
        token = data.get("token")
        if isinstance(token, str) and token.strip():
            return token.strip()
        return None
    except (OSError, json.JSONDecodeError, UnicodeDecodeError, AttributeError):
        return None


def save_token(token: str, path: str | Path) -> None:
    """
    Save the bearer token, creating parent directories if needed.
    """
    token_path = Path(path)
    token_path.parent.mkdir(parents=True, exist_ok=True)
    token_path.write_text(json.dumps({"token": token}, indent=2), encoding="utf-8")


def clear_token(path: str | Path) -> None:
    token_path = Path(path)
    try:
        token_path.unlink()
    except FileNotFoundError:
        pass
