from typing import Any, List, Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CalendarEvent(BaseModel):
    """FullCalendar event object, serialized in camelCase."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: Optional[str] = None
    title: str
    start: str
    end: str
    background_color: str
    border_color: str
    text_color: str = "#fff"
    extended_props: dict[str, Any] = Field(default_factory=dict)


class EventMoveIn(BaseModel):
    """Drop / resize of an event. No end means a one hour block."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    start: datetime
    end: Optional[datetime] = None
    extended_props: dict[str, Any] = Field(default_factory=dict)


class LegendItem(BaseModel):
    label: str
    color: str


class CalendarConfigOut(BaseModel):
    initial_view: str = "timeGridWeek"
    narrow_view: str = "timeGridDay"
    narrow_max_width: int = 480
    slot_min_time: str = "06:00:00"
    slot_max_time: str = "22:00:00"
    editable: bool = True
    legend: List[LegendItem]
