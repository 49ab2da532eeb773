import time
from datetime import datetime, timezone
from zoneinfo import ZoneInfo

import pytest
from fastapi.testclient import TestClient
from jose import jwt

from app.backend import BackendError, get_backend
from app.config import settings
from app.main import app


class FakeBackend:
    """In-memory stand-in for the timetable backend."""

    def __init__(self, token: str):
        self.token = token
        self.sessions = []
        self.notices = []
        self.calls = []
        self.fail = {}
        self._next_id = 1

    def _record(self, name, *args):
        self.calls.append((name, *args))
        err = self.fail.get(name)
        if err is not None:
            raise err

    def _new_id(self, prefix):
        new_id = f"{prefix}{self._next_id}"
        self._next_id += 1
        return new_id

    def called(self, name):
        return [c for c in self.calls if c[0] == name]

    # --- timetable ---
    # filters are recorded but not applied, like a backend that ignores them
    def list_sessions(self, category=None, day=None):
        self._record("list_sessions", category, day)
        return [dict(r) for r in self.sessions]

    def create_session(self, payload, token=None):
        self._record("create_session", payload, token)
        row = dict(payload, _id=self._new_id("s"))
        self.sessions.append(row)
        return dict(row)

    def update_session(self, session_id, payload, token=None):
        self._record("update_session", session_id, payload, token)
        for row in self.sessions:
            if row.get("_id") == session_id:
                row.update(payload)
                return dict(row)
        raise BackendError(404, "Class not found")

    def delete_session(self, session_id, token=None):
        self._record("delete_session", session_id, token)
        before = len(self.sessions)
        self.sessions = [r for r in self.sessions if r.get("_id") != session_id]
        if len(self.sessions) == before:
            raise BackendError(404, "Class not found")
        return {"message": "deleted"}

    # --- auth ---
    def login(self, username, password):
        self._record("login", username)
        if password != "secret":
            raise BackendError(401, "Invalid credentials")
        return {"token": self.token, "username": username}

    # --- notices ---
    def list_notices(self):
        self._record("list_notices")
        return [dict(n) for n in self.notices]

    def create_notice(self, payload, token=None):
        self._record("create_notice", payload, token)
        row = dict(payload, _id=self._new_id("n"), createdAt="2025-01-06T03:30:00.000Z")
        self.notices.append(row)
        return dict(row)

    def update_notice(self, notice_id, payload, token=None):
        self._record("update_notice", notice_id, payload, token)
        for row in self.notices:
            if row.get("_id") == notice_id:
                row.update(payload)
                return dict(row)
        raise BackendError(404, "Notice not found")

    def delete_notice(self, notice_id, token=None):
        self._record("delete_notice", notice_id, token)
        self.notices = [n for n in self.notices if n.get("_id") != notice_id]

    def upload_notice_image(self, filename, content, content_type, token=None):
        self._record("upload_notice_image", filename, len(content), content_type, token)
        return {"imageUrl": f"https://cdn.example.com/{filename}"}


@pytest.fixture(autouse=True)
def institute_settings(monkeypatch):
    monkeypatch.setattr(settings, "TIMEZONE", "Asia/Colombo")
    monkeypatch.setattr(settings, "JWT_SECRET", "")


@pytest.fixture
def admin_token():
    return jwt.encode({"sub": "admin", "exp": int(time.time()) + 3600}, "backend-secret", algorithm="HS256")


@pytest.fixture
def auth_headers(admin_token):
    return {"Authorization": f"Bearer {admin_token}"}


@pytest.fixture
def fake_backend(admin_token):
    return FakeBackend(admin_token)


@pytest.fixture
def client(fake_backend):
    app.dependency_overrides[get_backend] = lambda: fake_backend
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def local_iso():
    """
    Wall time at the institute on the week of Sun 2025-01-05 -> backend ISO (UTC, "Z").
    local_iso("Monday", "09:00") -> "2025-01-06T03:30:00.000Z"
    """
    days = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]

    def _iso(day: str, hhmm: str) -> str:
        h, m = (int(x) for x in hhmm.split(":"))
        dt = datetime(2025, 1, 5 + days.index(day), h, m, tzinfo=ZoneInfo("Asia/Colombo"))
        return dt.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")

    return _iso


@pytest.fixture
def make_session(local_iso):
    def _make(_id, day, start, end, category="PERSONAL", **extra):
        row = {
            "_id": _id,
            "day": day,
            "startTime": local_iso(day, start),
            "endTime": local_iso(day, end),
            "category": category,
            "type": "Theory",
            "location": "Thumbasiddy" if category == "PERSONAL" else "Excellent Institute",
            "subject": "Science",
            "grade": "Grade 10",
            "title": "Science - Grade 10",
            "classNumber": 10,
        }
        row.update(extra)
        return row

    return _make
