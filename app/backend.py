import logging
from typing import Any, Optional

import requests

from app.config import settings

logger = logging.getLogger("app.backend")


class BackendError(Exception):
    """
    The timetable backend refused a request (or could not be reached).
    message / conflict are the backend's own, shown to the user verbatim.
    """

    def __init__(self, status_code: int, message: str, conflict: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.conflict = conflict


class BackendClient:
    def __init__(self, base_url: str, timeout: float = 10.0, session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def close(self):
        self.session.close()

    def _request(
        self,
        method: str,
        path: str,
        *,
        token: Optional[str] = None,
        default_error: str = "Request failed",
        **kwargs,
    ):
        headers = kwargs.pop("headers", {})
        if token:
            headers["Authorization"] = f"Bearer {token}"

        url = f"{self.base_url}{path}"
        try:
            resp = self.session.request(method, url, headers=headers, timeout=self.timeout, **kwargs)
        except requests.exceptions.RequestException as exc:
            logger.warning("%s %s failed: %s", method, url, exc)
            raise BackendError(502, "Backend unavailable") from exc

        try:
            data = resp.json()
        except ValueError:
            data = None

        if not resp.ok:
            message = default_error
            conflict = None
            if isinstance(data, dict):
                message = data.get("message") or default_error
                conflict = data.get("conflict")
            elif resp.text:
                message = resp.text
            logger.info("%s %s rejected (%s): %s", method, path, resp.status_code, message)
            raise BackendError(resp.status_code, message, conflict)

        return data

    # --- timetable ---
    def list_sessions(self, category: Optional[str] = None, day: Optional[str] = None) -> list:
        params = {}
        if category:
            params["category"] = category
        if day:
            params["day"] = day
        return self._request(
            "GET", "/timetable", params=params or None,
            default_error="Failed to fetch classes.",
        ) or []

    def create_session(self, payload: dict, token: Optional[str] = None) -> dict:
        return self._request("POST", "/timetable", json=payload, token=token, default_error="Failed to save.")

    def update_session(self, session_id: str, payload: dict, token: Optional[str] = None) -> dict:
        return self._request(
            "PUT", f"/timetable/{session_id}", json=payload, token=token,
            default_error="Failed to save.",
        )

    def delete_session(self, session_id: str, token: Optional[str] = None):
        return self._request(
            "DELETE", f"/timetable/{session_id}", token=token,
            default_error="Failed to delete class",
        )

    # --- auth ---
    def login(self, username: str, password: str) -> dict:
        return self._request(
            "POST", "/api/auth/login",
            json={"username": username, "password": password},
            default_error="Login failed",
        )

    # --- notices ---
    def list_notices(self) -> list:
        return self._request("GET", "/notices", default_error="Failed to fetch notices") or []

    def create_notice(self, payload: dict, token: Optional[str] = None) -> dict:
        return self._request("POST", "/notices", json=payload, token=token, default_error="Failed to save notice")

    def update_notice(self, notice_id: str, payload: dict, token: Optional[str] = None) -> dict:
        return self._request(
            "PUT", f"/notices/{notice_id}", json=payload, token=token,
            default_error="Failed to save notice",
        )

    def delete_notice(self, notice_id: str, token: Optional[str] = None):
        return self._request(
            "DELETE", f"/notices/{notice_id}", token=token,
            default_error="Failed to delete notice",
        )

    def upload_notice_image(self, filename: str, content: bytes, content_type: str, token: Optional[str] = None) -> dict:
        return self._request(
            "POST", "/notices/upload",
            files={"image": (filename, content, content_type)},
            token=token,
            default_error="Image upload failed",
        )


def get_backend():
    client = BackendClient(settings.BACKEND_URL, timeout=settings.BACKEND_TIMEOUT)
    try:
        yield client
    finally:
        client.close()
