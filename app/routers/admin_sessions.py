from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import StreamingResponse

from app.backend import BackendClient, BackendError, get_backend
from app.utils.auth import require_admin
from app.schemas.class_session import (
    CLASS_TYPES, DAYS, GRADES, LOCATIONS,
    AdminSessionListOut,
    ClassSessionForm,
    ClassSessionOut,
    ClassSessionRecord,
    SessionFormOptions,
    SessionSaveOut,
)
from app.utils.conflict import TIME_CONFLICT, check_admission, check_time_window
from app.utils.excel_export import make_filename, timetable_to_xlsx_bytes
from app.utils.sessions import (
    build_backend_payload,
    group_by_day,
    merge_saved_session,
    sort_by_start,
    to_session_out,
)

import logging
logger = logging.getLogger("app.admin")


router = APIRouter(prefix="/admin/sessions", tags=["Admin - Sessions"])


def load_sessions(backend: BackendClient) -> List[ClassSessionOut]:
    """All sessions, HH:MM times, sorted by start."""
    rows = backend.list_sessions()
    return sort_by_start([to_session_out(ClassSessionRecord.model_validate(r)) for r in rows])


@router.get("", response_model=AdminSessionListOut)
def admin_list_sessions(
    backend: BackendClient = Depends(get_backend),
    token: str = Depends(require_admin),
):
    sessions = load_sessions(backend)
    return AdminSessionListOut(items=sessions, days=group_by_day(sessions), total=len(sessions))


#給表單下拉選單用
@router.get("/options", response_model=SessionFormOptions)
def admin_session_options(token: str = Depends(require_admin)):
    return SessionFormOptions(
        days=DAYS,
        grades=GRADES,
        class_types=CLASS_TYPES,
        locations=LOCATIONS,
    )


@router.get("/export")
def admin_export_sessions(
    backend: BackendClient = Depends(get_backend),
    token: str = Depends(require_admin),
):
    """
    Weekly timetable grid as .xlsx (days across, start times down).
    """
    sessions = load_sessions(backend)

    xlsx_bytes = timetable_to_xlsx_bytes(sessions)
    filename = make_filename("timetable")

    return StreamingResponse(
        iter([xlsx_bytes]),
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


def save_session(
    body: ClassSessionForm,
    backend: BackendClient,
    token: str,
    editing_id: Optional[str] = None,
) -> SessionSaveOut:
    # 1) 時間必填、結束要晚於開始
    error = check_time_window(body.start_time, body.end_time)
    if error:
        raise HTTPException(status_code=400, detail=error)

    # 2) 本地衝堂檢查（後端仍會再驗一次）
    sessions = load_sessions(backend)
    admission = check_admission(body, sessions, exclude_id=editing_id)
    if not admission.admitted:
        conflict = admission.conflicting_session
        logger.info(
            "Local conflict on %s %s-%s with session %s",
            body.day, body.start_time, body.end_time, conflict.id,
        )
        raise HTTPException(
            status_code=409,
            detail={"message": TIME_CONFLICT, "conflict": conflict.model_dump()},
        )

    # 3) 送出
    payload = build_backend_payload(body)
    if editing_id:
        result = backend.update_session(editing_id, payload, token=token)
    else:
        result = backend.create_session(payload, token=token)

    if not isinstance(result, dict):
        logger.warning("Backend saved session but replied with %r", result)
        raise BackendError(502, "Failed to save.")

    saved = to_session_out(ClassSessionRecord.model_validate(result))
    logger.info("Saved session %s (%s %s-%s)", saved.id, saved.day, saved.start_time, saved.end_time)

    return SessionSaveOut(session=saved, sessions=merge_saved_session(sessions, saved, editing_id))


@router.post("", response_model=SessionSaveOut)
def admin_create_session(
    body: ClassSessionForm,
    backend: BackendClient = Depends(get_backend),
    token: str = Depends(require_admin),
):
    return save_session(body, backend, token)


@router.put("/{session_id}", response_model=SessionSaveOut)
def admin_update_session(
    session_id: str,
    body: ClassSessionForm,
    backend: BackendClient = Depends(get_backend),
    token: str = Depends(require_admin),
):
    return save_session(body, backend, token, editing_id=session_id)


@router.delete("/{session_id}")
def admin_delete_session(
    session_id: str,
    backend: BackendClient = Depends(get_backend),
    token: str = Depends(require_admin),
):
    backend.delete_session(session_id, token=token)
    logger.info("Deleted session %s", session_id)
    return {"detail": "deleted"}
