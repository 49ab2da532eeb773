import re
from datetime import datetime
from typing import Callable, List, Optional

from app.schemas.class_session import (
    DAYS,
    ClassSessionForm,
    ClassSessionOut,
    ClassSessionRecord,
    DayGroupOut,
)
from app.utils.timeformat import format_time_24h, next_day_of_week, to_iso_utc, to_minutes


_DIGITS_RE = re.compile(r"\d+")


def class_number_from_grade(text: Optional[str]) -> Optional[int]:
    """"Grade 10" -> 10"""
    m = _DIGITS_RE.search(text or "")
    return int(m.group(0)) if m else None


def session_label(record: ClassSessionRecord) -> str:
    if record.class_number:
        return f"Class {record.class_number}"
    return record.grade or record.subject or record.title or ""


def to_session_out(
    record: ClassSessionRecord,
    fmt: Callable[[Optional[str]], str] = format_time_24h,
) -> ClassSessionOut:
    return ClassSessionOut(
        id=record.id,
        day=record.day or "",
        start_time=fmt(record.start_time),
        end_time=fmt(record.end_time),
        category=record.category,
        class_type=record.type,
        location=record.location,
        grade=record.grade,
        subject=record.subject,
        title=record.title,
        class_number=record.class_number,
        label=session_label(record),
    )


def _start_key(s: ClassSessionOut):
    # admin list shows HH:MM, so plain string order is start order
    return s.start_time


def sort_by_start(sessions: List[ClassSessionOut]) -> List[ClassSessionOut]:
    return sorted(sessions, key=_start_key)


def merge_saved_session(
    sessions: List[ClassSessionOut],
    saved: ClassSessionOut,
    editing_id: Optional[str] = None,
) -> List[ClassSessionOut]:
    """
    editing: replace the row with the same id
    new: append
    """
    if editing_id:
        merged = [saved if s.id == saved.id else s for s in sessions]
    else:
        merged = [*sessions, saved]
    return sort_by_start(merged)


def group_by_day(sessions: List[ClassSessionOut]) -> List[DayGroupOut]:
    groups = []
    for day in DAYS:
        day_sessions = [s for s in sessions if s.day == day]
        if day_sessions:
            groups.append(DayGroupOut(day=day, sessions=day_sessions))
    return groups


def minutes_or_max(value: str) -> int:
    m = to_minutes(value)
    return m if m is not None else 24 * 60


def build_backend_payload(form: ClassSessionForm, now: Optional[datetime] = None) -> dict:
    """
    Form -> timetable body expected by the backend.
    The backend stores full timestamps, so the weekday + wall time
    is pinned to its next occurrence.
    """
    start = next_day_of_week(form.day, form.start_time, now)
    end = next_day_of_week(form.day, form.end_time, now)

    payload = {
        "day": form.day,
        "grade": form.grade,
        "subject": form.subject,
        "category": form.category,
        "classType": form.class_type,
        "type": form.class_type,
        "location": form.location,
        "title": f"{form.subject} - {form.grade}",
        "startTime": to_iso_utc(start),
        "endTime": to_iso_utc(end),
    }
    class_number = class_number_from_grade(form.grade)
    if class_number is not None:
        payload["classNumber"] = class_number
    return payload
