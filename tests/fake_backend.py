"""
In-memory stand-in for the EduNexus backend, used instead of real HTTP.

It exposes the one method the client uses on requests.Session, `request()`,
and answers with real requests.Response objects. Behaviour follows the
backend's routes: userId scoping, COALESCE-style PUT, 404 for unknown or
foreign ids, 401 for missing/invalid tokens.
"""

from __future__ import annotations

import base64
import itertools
import json
from typing import Any, Optional

import requests

BASE_URL = "http://api.test/api"


def _b64(data: dict) -> str:
    raw = json.dumps(data).encode("utf-8")
    return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")


def make_token(user_id: str, username: str) -> str:
    header = _b64({"alg": "HS256", "typ": "JWT"})
    payload = _b64({"user": {"id": user_id, "username": username}, "exp": 4102444800})
    return f"{header}.{payload}.signature"


def make_response(status: int, body: Optional[dict] = None, url: str = BASE_URL) -> requests.Response:
    r = requests.Response()
    r.status_code = status
    r.url = url
    r._content = b"" if body is None else json.dumps(body).encode("utf-8")
    if body is not None:
        r.headers["Content-Type"] = "application/json"
    return r


class FakeBackend:
    def __init__(self, base_url: str = BASE_URL) -> None:
        self.base_url = base_url
        self.users: dict[str, dict[str, str]] = {}
        self.courses: list[dict[str, Any]] = []
        self.tokens: dict[str, str] = {}  # token -> user id
        self.calls: list[tuple[str, str, Optional[dict], dict]] = []
        self.offline = False
        self._ids = itertools.count(1)

    # helpers for tests

    def add_user(self, username: str, password: str) -> str:
        user_id = f"u{next(self._ids)}"
        self.users[username] = {"id": user_id, "username": username, "password": password}
        return user_id

    def token_for(self, username: str) -> str:
        user = self.users[username]
        token = make_token(user["id"], username)
        self.tokens[token] = user["id"]
        return token

    def expire_all_tokens(self) -> None:
        self.tokens.clear()

    def paths(self) -> list[tuple[str, str]]:
        return [(m, p) for m, p, _, _ in self.calls]

    # requests.Session interface

    def request(self, method: str, url: str, json: Any = None, headers: Optional[dict] = None, timeout: Any = None):
        headers = headers or {}
        path = url[len(self.base_url):] if url.startswith(self.base_url) else url
        self.calls.append((method, path, json, dict(headers)))
        if self.offline:
            raise requests.ConnectionError("Connection refused")

        if path == "/auth/register" and method == "POST":
            return self._register(json or {})
        if path == "/auth/login" and method == "POST":
            return self._login(json or {})

        user_id = self._authenticate(headers)
        if user_id is None:
            return make_response(401, {"msg": "Token is not valid"}, url)

        if path == "/courses" and method == "GET":
            rows = [dict(c) for c in self.courses if c["userId"] == user_id]
            return make_response(200, {"message": "success", "data": rows}, url)
        if path == "/courses" and method == "POST":
            return self._create(json or {}, user_id)
        if path.startswith("/courses/"):
            course_id = path[len("/courses/"):]
            if method == "PUT":
                return self._update(course_id, json or {}, user_id)
            if method == "DELETE":
                return self._delete(course_id, user_id)
        return make_response(404, {"error": "Endpoint not found"}, url)

    # routes

    def _authenticate(self, headers: dict) -> Optional[str]:
        auth = headers.get("Authorization")
        if not auth:
            return None
        parts = auth.split(" ")
        if len(parts) != 2 or parts[0] != "Bearer":
            return None
        return self.tokens.get(parts[1])

    def _register(self, body: dict):
        username, password = body.get("username"), body.get("password")
        if not username or not password:
            return make_response(400, {"error": "Username and password are required"})
        if len(password) < 6:
            return make_response(400, {"error": "Password must be at least 6 characters long"})
        if username in self.users:
            return make_response(400, {"error": "Username already exists"})
        user_id = self.add_user(username, password)
        return make_response(201, {"message": "User registered successfully", "userId": user_id})

    def _login(self, body: dict):
        username, password = body.get("username"), body.get("password")
        if not username or not password:
            return make_response(400, {"error": "Username and password are required"})
        user = self.users.get(username)
        if user is None:
            return make_response(400, {"error": "Invalid credentials (user not found)"})
        if user["password"] != password:
            return make_response(400, {"error": "Invalid credentials (password mismatch)"})
        return make_response(200, {"token": self.token_for(username), "message": "Login successful"})

    def _create(self, body: dict, user_id: str):
        errors = []
        if not body.get("name"):
            errors.append("Name is required")
        if not body.get("startTime"):
            errors.append("Start time is required")
        if not body.get("endTime"):
            errors.append("End time is required")
        if body.get("dayOfWeek") is None:
            errors.append("Day of week is required")
        if not body.get("id"):
            errors.append("Client-generated ID is required")
        if errors:
            return make_response(400, {"error": ", ".join(errors)})
        if any(c["id"] == body["id"] for c in self.courses):
            return make_response(400, {"error": "SQLITE_CONSTRAINT: UNIQUE constraint failed: courses.id"})

        row = {
            "id": body["id"],
            "name": body["name"],
            "startTime": body["startTime"],
            "endTime": body["endTime"],
            "dayOfWeek": body["dayOfWeek"],
            "color": body.get("color"),
            "instructor": body.get("instructor"),
            "location": body.get("location"),
            "userId": user_id,
        }
        self.courses.append(row)
        return make_response(201, {"message": "success", "data": dict(row)})

    def _find(self, course_id: str, user_id: str) -> Optional[dict]:
        for c in self.courses:
            if c["id"] == course_id and c["userId"] == user_id:
                return c
        return None

    def _update(self, course_id: str, body: dict, user_id: str):
        row = self._find(course_id, user_id)
        if row is None:
            return make_response(404, {"error": "Course not found or not authorized to update."})
        fields = ("name", "startTime", "endTime", "dayOfWeek", "color", "instructor", "location")
        for key in fields:
            if body.get(key) is not None:
                row[key] = body[key]
        data = {key: body.get(key) for key in fields}
        return make_response(200, {"message": "success", "data": data, "changes": 1})

    def _delete(self, course_id: str, user_id: str):
        row = self._find(course_id, user_id)
        if row is None:
            return make_response(404, {"error": "Course not found or not authorized to delete."})
        self.courses.remove(row)
        return make_response(200, {"message": "deleted", "changes": 1})


class FakeTimer:
    """threading.Timer look-alike that only fires when the test says so."""

    created: list["FakeTimer"] = []

    def __init__(self, interval: float, function, args=None, kwargs=None) -> None:
        self.interval = interval
        self.function = function
        self.args = args or ()
        self.kwargs = kwargs or {}
        self.daemon = False
        self.started = False
        self.cancelled = False
        FakeTimer.created.append(self)

    def start(self) -> None:
        self.started = True

    def cancel(self) -> None:
        self.cancelled = True

    def join(self, timeout=None) -> None:
        pass

    def fire(self) -> None:
        if not self.cancelled:
            self.function(*self.args, **self.kwargs)
