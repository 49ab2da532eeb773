from typing import List, Optional
from fastapi import APIRouter, Depends, Query

from app.backend import BackendClient, BackendError, get_backend
from app.schemas.class_session import (
    STUDENT_DAYS,
    ClassSessionRecord,
    Day,
    StudentClassOut,
    StudentDayOut,
    TodayPreviewItem,
)
from app.utils.sessions import class_number_from_grade, minutes_or_max
from app.utils.timeformat import format_time_12h, is_evening, now_local, parse_timestamp, weekday_name

import logging
logger = logging.getLogger("app.timetable")

router = APIRouter(prefix="/timetable", tags=["Student - Timetable"])


def _heading(r: ClassSessionRecord) -> str:
    """"Class 10 — Science", or just the subject when no number is known."""
    name = r.subject or r.title or ""
    num = r.class_number
    if num is None:
        num = class_number_from_grade(r.title or r.subject)
    return f"Class {num} — {name}" if num else name


def _personal_for_day(backend: BackendClient, day: str) -> List[ClassSessionRecord]:
    rows = backend.list_sessions(category="PERSONAL", day=day)
    records = [ClassSessionRecord.model_validate(r) for r in rows]
    # the backend filter is trusted only loosely
    return [r for r in records if r.day == day and r.category == "PERSONAL"]


@router.get("/days", response_model=list[str])
def list_days():
    return STUDENT_DAYS


@router.get("", response_model=StudentDayOut)
def get_day_schedule(
    backend: BackendClient = Depends(get_backend),
    day: Optional[Day] = Query(None, description="Weekday name, today when omitted"),
):
    today = weekday_name(now_local())
    day = day or today

    items = []
    for r in _personal_for_day(backend, day):
        items.append(StudentClassOut(
            id=r.id,
            day=r.day,
            start_time=format_time_12h(r.start_time),
            end_time=format_time_12h(r.end_time),
            subject=r.subject,
            title=r.title,
            class_type=r.type,
            location=r.location,
            class_number=r.class_number,
            heading=_heading(r),
            is_evening=is_evening(parse_timestamp(r.start_time)),
        ))
    items.sort(key=lambda x: minutes_or_max(x.start_time))

    return StudentDayOut(day=day, is_today=(day == today), count=len(items), items=items)


@router.get("/today", response_model=list[TodayPreviewItem])
def get_today_preview(backend: BackendClient = Depends(get_backend)):
    """Home page live preview. A failing backend shows an empty preview."""
    today = weekday_name(now_local())
    try:
        records = _personal_for_day(backend, today)
    except BackendError as e:
        logger.warning("Today preview unavailable: %s", e.message)
        return []

    out = []
    for r in records:
        start = parse_timestamp(r.start_time)
        out.append(TodayPreviewItem(
            id=r.id,
            time=format_time_12h(r.start_time),
            subject=r.title or r.subject,
            location=r.location,
            type=r.type,
            is_evening=is_evening(start),
        ))
    out.sort(key=lambda x: minutes_or_max(x.time))
    return out
