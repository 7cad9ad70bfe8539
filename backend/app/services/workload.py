from __future__ import annotations

from collections import Counter
from collections.abc import Iterable

from app.schemas.insights import CountEntry, DayGrid, GridRow, PeriodCountEntry, TimetableSummary
from app.schemas.period import parse_time_to_minutes
from app.schemas.schedule import Schedule
from app.schemas.school_day import DAY_ORDER
from app.schemas.snapshot import TimetableSnapshot


def get_teacher_workload(schedules: Iterable[Schedule], teacher_id: str) -> int:
    """Number of periods assigned to a teacher. Not filtered by day or session."""
    return sum(1 for schedule in schedules if schedule.teacher_id == teacher_id)


def filter_schedules(
    schedules: Iterable[Schedule],
    *,
    academic_session_id: str | None = None,
    day: str | None = None,
    teacher_id: str | None = None,
    class_id: str | None = None,
) -> list[Schedule]:
    return [
        schedule
        for schedule in schedules
        if (academic_session_id is None or schedule.academic_session_id == academic_session_id)
        and (day is None or schedule.day == day)
        and (teacher_id is None or schedule.teacher_id == teacher_id)
        and (class_id is None or schedule.class_id == class_id)
    ]


def _counted(records, counts: Counter, *, keep_zero: bool = True) -> list[CountEntry]:
    entries = [CountEntry(id=item.id, name=item.name, count=counts.get(item.id, 0)) for item in records]
    if not keep_zero:
        entries = [entry for entry in entries if entry.count > 0]
    entries.sort(key=lambda entry: entry.count, reverse=True)
    return entries


def teacher_workloads(schedules: Iterable[Schedule], teachers, limit: int | None = None) -> list[CountEntry]:
    counts = Counter(schedule.teacher_id for schedule in schedules)
    entries = _counted(teachers, counts)
    return entries[:limit] if limit is not None else entries


def subject_distribution(schedules: Iterable[Schedule], subjects) -> list[CountEntry]:
    counts = Counter(schedule.subject_id for schedule in schedules)
    return _counted(subjects, counts, keep_zero=False)


def class_density(schedules: Iterable[Schedule], class_grades) -> list[CountEntry]:
    counts = Counter(schedule.class_id for schedule in schedules)
    return _counted(class_grades, counts)


def day_distribution(schedules: Iterable[Schedule]) -> list[CountEntry]:
    counts = Counter(schedule.day for schedule in schedules)
    return [CountEntry(id=day, name=day, count=counts.get(day, 0)) for day in DAY_ORDER]


def period_distribution(schedules: Iterable[Schedule], periods) -> list[PeriodCountEntry]:
    counts = Counter(schedule.period_id for schedule in schedules)
    entries = [
        PeriodCountEntry(
            id=period.id,
            name=period.name,
            count=counts.get(period.id, 0),
            time=f"{period.start_time}-{period.end_time}",
        )
        for period in periods
        if not period.is_interval
    ]
    entries.sort(key=lambda entry: entry.count, reverse=True)
    return entries


def completion_percentage(schedule_count: int, teaching_periods: int, classes: int, active_days: int) -> int:
    capacity = teaching_periods * classes * active_days
    if capacity <= 0:
        return 0
    return round(schedule_count / capacity * 100)


def summarize(snapshot: TimetableSnapshot, academic_session_id: str | None = None) -> TimetableSummary:
    schedules = filter_schedules(snapshot.schedules, academic_session_id=academic_session_id)
    teaching_periods = [period for period in snapshot.periods if not period.is_interval]
    active_days = len(snapshot.active_day_names())
    total_teachers = len(snapshot.teachers)
    average = round(len(schedules) / total_teachers, 1) if total_teachers else 0.0
    return TimetableSummary(
        academic_session_id=academic_session_id,
        total_classes=len(snapshot.class_grades),
        total_teachers=total_teachers,
        total_subjects=len(snapshot.subjects),
        total_teaching_periods=len(teaching_periods),
        total_schedules=len(schedules),
        active_days=active_days,
        average_workload=average,
        completion_percentage=completion_percentage(
            len(schedules), len(teaching_periods), len(snapshot.class_grades), active_days
        ),
        teacher_workload=teacher_workloads(schedules, snapshot.teachers, limit=10),
        subject_distribution=subject_distribution(schedules, snapshot.subjects),
        class_density=class_density(schedules, snapshot.class_grades),
        day_distribution=day_distribution(schedules),
        period_distribution=period_distribution(schedules, snapshot.periods),
    )


def build_day_grid(
    snapshot: TimetableSnapshot,
    day: str,
    academic_session_id: str | None = None,
    class_id: str | None = None,
) -> DayGrid:
    """Class x period matrix for one day, periods in time order (breaks included)."""
    periods = sorted(snapshot.periods, key=lambda period: parse_time_to_minutes(period.start_time))
    classes = [item for item in snapshot.class_grades if class_id is None or item.id == class_id]
    rows = {item.id: GridRow(class_id=item.id, class_name=item.name) for item in classes}
    for schedule in filter_schedules(
        snapshot.schedules, academic_session_id=academic_session_id, day=day, class_id=class_id
    ):
        row = rows.get(schedule.class_id)
        if row is not None:
            row.cells[schedule.period_id] = schedule
    return DayGrid(
        day=day,
        academic_session_id=academic_session_id,
        period_ids=[period.id for period in periods],
        rows=list(rows.values()),
    )
