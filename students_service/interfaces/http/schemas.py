from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from ...domain.entities import Course, DEFAULT_GRADE, Grade

NAME_MIN, NAME_MAX = 2, 50
AGE_MIN, AGE_MAX = 16, 100

# ^\w+([.-]?\w+)*@\w+([.-]?\w+)*(\.\w{2,3})+$ c ASCII-\w; движок regex у pydantic без backtracking
_W = "[A-Za-z0-9_]"
EMAIL_PATTERN = rf"^{_W}+([.-]?{_W}+)*@{_W}+([.-]?{_W}+)*(\.{_W}{{2,3}})+$"

def _utcnow() -> datetime:
    return datetime.now(timezone.utc)

class StudentCreate(BaseModel):
    """Тело POST /api/students. Неизвестные поля (в том числе id и метки времени) отбрасываются."""
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(min_length=NAME_MIN, max_length=NAME_MAX)
    age: int = Field(ge=AGE_MIN, le=AGE_MAX)
    course: Course
    email: str = Field(pattern=EMAIL_PATTERN)
    grade: Grade = DEFAULT_GRADE
    enrollment_date: datetime = Field(default_factory=_utcnow, alias="enrollmentDate")

    @field_validator("name", mode="before")
    @classmethod
    def name_as_text(cls, v: Any) -> Any:
        # числа приводим к строке, как это делает String-поле в исходной схеме
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            v = str(v)
        return v.strip() if isinstance(v, str) else v

    @field_validator("course", mode="before")
    @classmethod
    def strip_course(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v

    @field_validator("email", mode="before")
    @classmethod
    def lower_email(cls, v: Any) -> Any:
        return v.lower() if isinstance(v, str) else v

    @field_validator("enrollment_date")
    @classmethod
    def enrollment_date_in_utc(cls, v: datetime) -> datetime:
        # в SQLite смещение не сохраняется, поэтому храним всё в UTC
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)

class StudentUpdate(StudentCreate):
    """Тело PUT: любое поле можно не передавать, но явный null не принимается."""
    name: str = Field(None, min_length=NAME_MIN, max_length=NAME_MAX)
    age: int = Field(None, ge=AGE_MIN, le=AGE_MAX)
    course: Course = None
    email: str = Field(None, pattern=EMAIL_PATTERN)
    grade: Grade = None
    enrollment_date: datetime = Field(None, alias="enrollmentDate")

class StudentOut(BaseModel):
    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)

    id: str
    name: str
    age: int
    course: str
    email: str
    grade: str
    enrollment_date: datetime
    created_at: datetime
    updated_at: datetime

class Envelope(BaseModel):
    success: bool = True
    message: str | None = None
    count: int | None = None
    data: StudentOut | list[StudentOut] | dict[str, Any] | None = None

def envelope(data: Any = None, message: str | None = None) -> Envelope:
    """Оборачивает запись или список записей в конверт ответа; для списков добавляет count."""
    if isinstance(data, list):
        items = [StudentOut.model_validate(s) for s in data]
        return Envelope(message=message, count=len(items), data=items)
    if data is not None and not isinstance(data, dict):
        data = StudentOut.model_validate(data)
    return Envelope(message=message, data=data)
