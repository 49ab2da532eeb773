from typing import Any, List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


Category = Literal["PERSONAL", "EXTERNAL"]
ClassType = Literal["Theory", "Revision", "Paper Class"]
Day = Literal["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]

DAYS: List[str] = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]
STUDENT_DAYS: List[str] = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]
CLASS_TYPES: List[str] = ["Theory", "Revision", "Paper Class"]
GRADES: List[str] = ["Grade 6", "Grade 7", "Grade 8", "Grade 9", "Grade 10", "Grade 11"]

EXTERNAL_INSTITUTES: List[str] = ["Excellent Institute", "Viyabarimoolai Institute"]
PERSONAL_LOCATIONS: List[str] = ["Thumbasiddy", "Puttalai"]

LOCATIONS = {
    "EXTERNAL": EXTERNAL_INSTITUTES,
    "PERSONAL": PERSONAL_LOCATIONS,
}


def default_location(category: str) -> str:
    return LOCATIONS.get(category, EXTERNAL_INSTITUTES)[0]


class ClassSessionRecord(BaseModel):
    """
    A timetable row as the backend sends it (camelCase, `_id`).
    startTime / endTime are ISO timestamps.
    """
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: Optional[str] = Field(None, alias="_id")
    title: Optional[str] = None
    subject: Optional[str] = None
    grade: Optional[str] = None
    day: Optional[str] = None
    start_time: Optional[str] = Field(None, alias="startTime")
    end_time: Optional[str] = Field(None, alias="endTime")
    location: Optional[str] = None
    category: Optional[str] = None
    type: Optional[str] = None
    class_number: Optional[int] = Field(None, alias="classNumber")
    medium: Optional[str] = None


class ClassSessionOut(BaseModel):
    """Session as shown by the views, times already re-formatted."""
    id: Optional[str] = None
    day: str
    start_time: str
    end_time: str
    category: Optional[str] = None
    class_type: Optional[str] = None
    location: Optional[str] = None
    grade: Optional[str] = None
    subject: Optional[str] = None
    title: Optional[str] = None
    class_number: Optional[int] = None
    label: str = ""


class ClassSessionForm(BaseModel):
    """
    Add / edit form. Times come from a time picker as HH:MM (24h);
    an empty picker is sent as "" or omitted.
    """
    model_config = ConfigDict(extra="forbid")

    day: Day = "Monday"
    grade: str = "Grade 10"
    subject: str = "Science"
    category: Category = "EXTERNAL"
    class_type: ClassType = "Theory"
    location: Optional[str] = None
    start_time: Optional[str] = Field(None, pattern=r"^([01]\d|2[0-3]):[0-5]\d$")
    end_time: Optional[str] = Field(None, pattern=r"^([01]\d|2[0-3]):[0-5]\d$")

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def _blank_time_is_unset(cls, v: Any):
        if isinstance(v, str) and v.strip() == "":
            return None
        return v

    @model_validator(mode="after")
    def _validate_location(self):
        allowed = LOCATIONS[self.category]
        if not self.location:
            # switching category resets the location
            self.location = default_location(self.category)
        elif self.location not in allowed:
            raise ValueError(f"location must be one of {', '.join(allowed)} for {self.category} classes")
        return self


class SessionSaveOut(BaseModel):
    session: ClassSessionOut
    sessions: List[ClassSessionOut]


class DayGroupOut(BaseModel):
    day: str
    sessions: List[ClassSessionOut]


class AdminSessionListOut(BaseModel):
    items: List[ClassSessionOut]
    days: List[DayGroupOut]
    total: int


class SessionFormOptions(BaseModel):
    days: List[str]
    grades: List[str]
    class_types: List[str]
    locations: dict[str, List[str]]


class StudentClassOut(BaseModel):
    id: Optional[str] = None
    day: str
    start_time: str
    end_time: str
    subject: Optional[str] = None
    title: Optional[str] = None
    class_type: Optional[str] = None
    location: Optional[str] = None
    class_number: Optional[int] = None
    heading: str
    is_evening: bool = False


class StudentDayOut(BaseModel):
    day: str
    is_today: bool
    count: int
    items: List[StudentClassOut]


class TodayPreviewItem(BaseModel):
    id: Optional[str] = None
    time: str
    subject: Optional[str] = None
    location: Optional[str] = None
    type: Optional[str] = None
    is_evening: bool
