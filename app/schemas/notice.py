from typing import Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class NoticeRecord(BaseModel):
    """Notice as the backend sends it."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    id: Optional[str] = Field(None, alias="_id")
    title: str = ""
    content: str = ""
    image_url: Optional[str] = None
    is_active: bool = True
    is_pinned: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class NoticeCreate(BaseModel):
    # sent to the backend by alias (camelCase)
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    title: str = Field(min_length=1, max_length=200)
    content: str = Field(min_length=1)
    image_url: Optional[str] = None
    is_active: bool = True
    is_pinned: bool = False


class NoticeUpdate(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")

    title: Optional[str] = Field(None, min_length=1, max_length=200)
    content: Optional[str] = None
    image_url: Optional[str] = None
    is_active: Optional[bool] = None
    is_pinned: Optional[bool] = None


class NoticeOut(BaseModel):
    id: Optional[str] = None
    title: str
    content: str
    image_url: Optional[str] = None
    is_active: bool
    is_pinned: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class NoticeListOut(BaseModel):
    items: list[NoticeOut]
    total: int
    page: int
    page_size: int


class NoticeImageOut(BaseModel):
    image_url: str
