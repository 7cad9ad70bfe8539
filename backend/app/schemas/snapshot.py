from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.schemas.academic_session import AcademicSession
from app.schemas.period import Period
from app.schemas.reference import ClassGrade, Subject, Teacher
from app.schemas.schedule import Schedule
from app.schemas.school_day import DAY_ORDER, SchoolDay, check_full_week, default_school_days


class TimetableSnapshot(BaseModel):
    """Every collection at one store version. Shared read-only with callers."""

    model_config = ConfigDict(frozen=True)

    version: int = 0
    teachers: tuple[Teacher, ...] = ()
    subjects: tuple[Subject, ...] = ()
    class_grades: tuple[ClassGrade, ...] = ()
    periods: tuple[Period, ...] = ()
    school_days: tuple[SchoolDay, ...] = Field(default_factory=default_school_days)
    academic_sessions: tuple[AcademicSession, ...] = ()
    schedules: tuple[Schedule, ...] = ()

    @field_validator("school_days")
    @classmethod
    def validate_school_days(cls, value: tuple[SchoolDay, ...]) -> tuple[SchoolDay, ...]:
        check_full_week(value)
        if not any(day.active for day in value):
            raise ValueError("At least one school day must be active")
        return tuple(sorted(value, key=lambda day: DAY_ORDER.index(day.name)))

    def active_session(self) -> AcademicSession | None:
        return next((item for item in self.academic_sessions if item.is_active), None)

    def active_day_names(self) -> list[str]:
        return [day.name for day in self.school_days if day.active]
