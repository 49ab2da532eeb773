from datetime import timedelta
from fastapi import APIRouter, Depends, HTTPException

from app.backend import BackendClient, BackendError, get_backend
from app.schemas.calendar import CalendarConfigOut, CalendarEvent, EventMoveIn, LegendItem
from app.utils.auth import require_admin
from app.utils.colors import color_for_key
from app.utils.timeformat import local_tz, to_iso_utc, weekday_name

import logging
logger = logging.getLogger("app.calendar")

router = APIRouter(prefix="/calendar", tags=["Calendar"])


def to_event(row: dict) -> CalendarEvent:
    key = row.get("_id") or row.get("title") or row.get("subject") or ""
    color = color_for_key(key)
    raw_id = row.get("_id")
    return CalendarEvent(
        id=str(raw_id) if raw_id is not None else None,
        title=row.get("title") or row.get("subject") or "Class",
        start=row.get("startTime") or "",
        end=row.get("endTime") or "",
        background_color=color,
        border_color=color,
        extended_props=dict(row),
    )


@router.get("/config", response_model=CalendarConfigOut)
def calendar_config():
    return CalendarConfigOut(legend=[
        LegendItem(label="Theory", color="#3B82F6"),
        LegendItem(label="Revision", color="#10B981"),
        LegendItem(label="Paper", color="#EF4444"),
    ])


@router.get("/events", response_model=list[CalendarEvent])
def list_events(backend: BackendClient = Depends(get_backend)):
    return [to_event(r) for r in backend.list_sessions()]


@router.put("/events/{event_id}", response_model=CalendarEvent)
def move_event(
    event_id: str,
    body: EventMoveIn,
    backend: BackendClient = Depends(get_backend),
    token: str = Depends(require_admin),
):
    """
    Drag / resize. The weekday follows the new start.
    On failure the widget reverts the event.
    """
    start = body.start
    if start.tzinfo is None:
        start = start.replace(tzinfo=local_tz())
    end = body.end or start + timedelta(hours=1)
    if end.tzinfo is None:
        end = end.replace(tzinfo=local_tz())

    props = body.extended_props
    payload = {
        "title": props.get("title") or props.get("subject") or "Class",
        "startTime": to_iso_utc(start),
        "endTime": to_iso_utc(end),
        "location": props.get("location") or "Unknown",
        "category": props.get("category") or "EXTERNAL",
        "type": props.get("type") or "Theory",
        "medium": props.get("medium") or "English",
        "day": weekday_name(start),
    }

    try:
        updated = backend.update_session(event_id, payload, token=token)
    except BackendError as e:
        logger.warning("Moving event %s failed: %s", event_id, e.message)
        raise HTTPException(
            status_code=e.status_code,
            detail={"message": "Failed to save change", "reason": e.message, "conflict": e.conflict},
        )

    updated = dict(updated or {})
    updated.setdefault("_id", event_id)
    return to_event(updated)
