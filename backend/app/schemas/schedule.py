from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.schemas.school_day import validate_day_name


class ScheduleCreate(BaseModel):
    day: str | None = None
    class_id: str = Field(min_length=1, max_length=36)
    teacher_id: str = Field(min_length=1, max_length=36)
    subject_id: str = Field(min_length=1, max_length=36)
    period_id: str = Field(min_length=1, max_length=36)
    academic_session_id: str | None = Field(default=None, min_length=1, max_length=36)

    @field_validator("day")
    @classmethod
    def validate_day(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return validate_day_name(value)


class Schedule(BaseModel):
    """One class taking one subject with one teacher in one period of one day."""

    model_config = ConfigDict(frozen=True)

    id: str
    day: str
    class_id: str
    teacher_id: str
    subject_id: str
    period_id: str
    academic_session_id: str

    @field_validator("day")
    @classmethod
    def validate_day(cls, value: str) -> str:
        return validate_day_name(value)
