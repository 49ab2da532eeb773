from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile

from app.backend import BackendClient, get_backend
from app.schemas.notice import (
    NoticeCreate,
    NoticeImageOut,
    NoticeListOut,
    NoticeOut,
    NoticeRecord,
    NoticeUpdate,
)
from app.utils.auth import require_admin

import logging
logger = logging.getLogger("app.admin")

router = APIRouter(prefix="/notices", tags=["Notices"])

MAX_IMAGE_BYTES = 5 * 1024 * 1024
IMAGE_TYPES = {"image/jpeg", "image/png", "image/webp", "image/gif"}


def _to_out(row: dict) -> NoticeOut:
    return NoticeOut(**NoticeRecord.model_validate(row).model_dump())


def _sort_key(n: NoticeOut):
    created = n.created_at.timestamp() if n.created_at else 0
    return (not n.is_pinned, -created)


@router.get("", response_model=NoticeListOut)
def list_notices(
    backend: BackendClient = Depends(get_backend),
    page: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1, le=100),
    keyword: str | None = Query(None),
    include_inactive: bool = Query(False, description="管理者可看下架公告"),
):
    notices = [_to_out(r) for r in backend.list_notices()]

    if not include_inactive:
        notices = [n for n in notices if n.is_active]
    if keyword:
        k = keyword.strip().lower()
        notices = [n for n in notices if k in n.title.lower()]

    notices.sort(key=_sort_key)
    total = len(notices)
    start = (page - 1) * page_size
    return NoticeListOut(items=notices[start:start + page_size], total=total, page=page, page_size=page_size)


# 只有管理者可以新增
@router.post("", response_model=NoticeOut)
def create_notice(
    body: NoticeCreate,
    backend: BackendClient = Depends(get_backend),
    token: str = Depends(require_admin),
):
    row = backend.create_notice(body.model_dump(by_alias=True), token=token)
    logger.info("Created notice %r", body.title)
    return _to_out(row)


# 只有管理者可以修改
@router.put("/{notice_id}", response_model=NoticeOut)
def update_notice(
    notice_id: str,
    body: NoticeUpdate,
    backend: BackendClient = Depends(get_backend),
    token: str = Depends(require_admin),
):
    data = body.model_dump(by_alias=True, exclude_unset=True)
    if not data:
        raise HTTPException(status_code=400, detail="Nothing to update")
    return _to_out(backend.update_notice(notice_id, data, token=token))


# 只有管理者可以刪除
@router.delete("/{notice_id}")
def delete_notice(
    notice_id: str,
    backend: BackendClient = Depends(get_backend),
    token: str = Depends(require_admin),
):
    backend.delete_notice(notice_id, token=token)
    logger.info("Deleted notice %s", notice_id)
    return {"detail": "deleted"}


@router.post("/image", response_model=NoticeImageOut)
def upload_notice_image(
    image: UploadFile = File(...),
    backend: BackendClient = Depends(get_backend),
    token: str = Depends(require_admin),
):
    if image.content_type not in IMAGE_TYPES:
        raise HTTPException(status_code=400, detail="Only JPEG, PNG, WebP or GIF images are allowed")

    content = image.file.read(MAX_IMAGE_BYTES + 1)
    if len(content) > MAX_IMAGE_BYTES:
        raise HTTPException(status_code=400, detail="Image too large (max 5MB)")

    data = backend.upload_notice_image(image.filename or "notice", content, image.content_type, token=token) or {}
    url = data.get("imageUrl") or data.get("url")
    if not url:
        raise HTTPException(status_code=502, detail="Image upload failed")
    return NoticeImageOut(image_url=url)
