from pydantic import BaseModel, Field

from app.schemas.schedule import Schedule


class CountEntry(BaseModel):
    id: str
    name: str
    count: int


class PeriodCountEntry(CountEntry):
    time: str


class TimetableSummary(BaseModel):
    academic_session_id: str | None = None
    total_classes: int
    total_teachers: int
    total_subjects: int
    total_teaching_periods: int
    total_schedules: int
    active_days: int
    average_workload: float
    completion_percentage: int
    teacher_workload: list[CountEntry] = Field(default_factory=list)
    subject_distribution: list[CountEntry] = Field(default_factory=list)
    class_density: list[CountEntry] = Field(default_factory=list)
    day_distribution: list[CountEntry] = Field(default_factory=list)
    period_distribution: list[PeriodCountEntry] = Field(default_factory=list)


class GridRow(BaseModel):
    class_id: str
    class_name: str
    # period id -> schedule occupying that cell
    cells: dict[str, Schedule] = Field(default_factory=dict)


class DayGrid(BaseModel):
    day: str
    academic_session_id: str | None = None
    period_ids: list[str]
    rows: list[GridRow]
