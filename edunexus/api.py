"""
Remote sync client for the EduNexus backend.

Endpoints (relative to the API base URL):

    POST   /auth/register   {username, password}
    POST   /auth/login      {username, password} -> {token}
    GET    /courses                      -> {data: [...]}
    POST   /courses         {id, ...}    -> 201 {data}
    PUT    /courses/<id>    partial      -> {data, changes}
    DELETE /courses/<id>                 -> {changes}

Every course endpoint needs the bearer token. A 401 from any of them tears
the session down before the error is raised.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import requests

from edunexus.errors import NetworkError, NotFound, RemoteError, Unauthorized, ValidationError
from edunexus.notices import Notices
from edunexus.session import Session

log = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


def _error_message(response: requests.Response) -> str:
    """
    Server-provided message if the body has one, generic HTTP status text otherwise.
    """
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        msg = body.get("error") or body.get("msg") or body.get("message")
        if isinstance(msg, str) and msg.strip():
            return msg.strip()
    return f"HTTP error! Status: {response.status_code}"


class ApiClient:
    def __init__(
        self,
        base_url: str,
        session: Session,
        notices: Optional[Notices] = None,
        http: Optional[requests.Session] = None,
        timeout: float = 15.0,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.session = session
        self.notices = notices
        self.http = http if http is not None else requests.Session()
        self.timeout = timeout

    def _url(self, path: str) -> str:
        if not path.startswith("/"):
            path = "/" + path
        return f"{self.base_url}{path}"

    def _send(self, method: str, path: str, payload: Any = None, headers: Optional[dict[str, str]] = None) -> requests.Response:
        all_headers = {"Content-Type": "application/json"}
        all_headers.update(headers or {})
        try:
            return self.http.request(method, self._url(path), json=payload, headers=all_headers, timeout=self.timeout)
        except requests.RequestException as e:
            log.warning("%s %s failed: %s", method, path, e)
            raise NetworkError(f"Could not reach the server: {e}") from e

    def request(self, method: str, path: str, payload: Any = None) -> Any:
        """
        Authenticated call. Returns the decoded JSON body, or None for 204.
        """
        headers: dict[str, str] = {}
        if self.session.token:
            headers["Authorization"] = f"Bearer {self.session.token}"

        try:
            response = self._send(method, path, payload, headers)
        except NetworkError as e:
            if self.notices is not None:
                self.notices.error(str(e))
            raise

        if response.status_code == 401:
            log.info("Authentication failed (401). Logging out.")
            self.session.logout()
            if self.notices is not None:
                self.notices.session_expired()
            raise Unauthorized()

        if not response.ok:
            message = _error_message(response)
            log.error("API error on %s %s: %s", method, path, message)
            if self.notices is not None:
                self.notices.error(message)
            if response.status_code == 404:
                raise NotFound(message, status=404)
            raise RemoteError(message, status=response.status_code)

        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise RemoteError(f"Invalid JSON from server ({response.status_code})", status=response.status_code) from e

    # ------------------------------------------------------------------
    # Auth (no bearer token)
    # ------------------------------------------------------------------

    @staticmethod
    def _check_credentials(username: str, password: str) -> str:
        username = (username or "").strip()
        if not username or not password:
            raise ValidationError("Username and password are required.")
        return username

    def register(self, username: str, password: str) -> str:
        username = self._check_credentials(username, password)
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters.")

        response = self._send("POST", "/auth/register", {"username": username, "password": password})
        if not response.ok:
            message = _error_message(response)
            if self.notices is not None:
                self.notices.error(message)
            raise RemoteError(message, status=response.status_code)

        if self.notices is not None:
            self.notices.success("Registration successful! Please log in.")
        log.info("Registered user %s", username)
        return "Registration successful! Please log in."

    def login(self, username: str, password: str) -> str:
        """
        Exchange credentials for a token and store it in the session.

        On any failure the session is left without a credential.
        """
        username = self._check_credentials(username, password)
        try:
            response = self._send("POST", "/auth/login", {"username": username, "password": password})
            if not response.ok:
                raise RemoteError(_error_message(response), status=response.status_code)
            try:
                token = response.json().get("token")
            except (ValueError, AttributeError):
                token = None
            if not isinstance(token, str) or not token:
                raise RemoteError("Login returned no token.", status=response.status_code)
        except (RemoteError, NetworkError) as e:
            if self.session.logged_in:
                self.session.logout()
            if self.notices is not None:
                self.notices.error(str(e))
            raise

        self.session.login(token)
        log.info("Logged in as %s", username)
        return token

    def logout(self) -> None:
        self.session.logout()
        if self.notices is not None:
            self.notices.success("You have been successfully logged out.")

    # ------------------------------------------------------------------
    # Courses
    # ------------------------------------------------------------------

    def list_courses(self) -> list[dict[str, Any]]:
        result = self.request("GET", "/courses")
        data = result.get("data") if isinstance(result, dict) else None
        return list(data) if isinstance(data, list) else []

    def create_course(self, payload: dict[str, Any]) -> dict[str, Any]:
        result = self.request("POST", "/courses", payload)
        return (result or {}).get("data") or {}

    def update_course(self, course_id: str, fields: dict[str, Any]) -> dict[str, Any]:
        return self.request("PUT", f"/courses/{course_id}", fields) or {}

    def delete_course(self, course_id: str) -> dict[str, Any]:
        return self.request("DELETE", f"/courses/{course_id}") or {}
