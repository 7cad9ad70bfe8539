from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Tuple

from app.schemas.conflict import ConflictDetail, ConflictDetails, ConflictReport, ConflictResult
from app.schemas.schedule import Schedule


def _in_scope(schedule: Schedule, exclude_schedule_id: Optional[str], academic_session_id: Optional[str]) -> bool:
    if exclude_schedule_id is not None and schedule.id == exclude_schedule_id:
        return False
    if academic_session_id is not None and schedule.academic_session_id != academic_session_id:
        return False
    return True


def check_teacher_conflict(
    schedules: Iterable[Schedule],
    teacher_id: str,
    period_id: str,
    day: str,
    exclude_schedule_id: Optional[str] = None,
    *,
    academic_session_id: Optional[str] = None,
) -> ConflictResult:
    """Report the first schedule that already books ``teacher_id`` in the slot.

    Sessions are only compared when ``academic_session_id`` is given; with the
    default ``None`` every schedule in ``schedules`` is scanned.
    """
    for schedule in schedules:
        if schedule.teacher_id != teacher_id or schedule.period_id != period_id or schedule.day != day:
            continue
        if not _in_scope(schedule, exclude_schedule_id, academic_session_id):
            continue
        return ConflictResult(
            has_conflict=True,
            conflict_details=ConflictDetails(
                conflict_type="teacher",
                schedule_id=schedule.id,
                conflicting_id=schedule.class_id,
                conflicting_period_id=schedule.period_id,
            ),
        )
    return ConflictResult(has_conflict=False)


def check_class_conflict(
    schedules: Iterable[Schedule],
    class_id: str,
    period_id: str,
    day: str,
    exclude_schedule_id: Optional[str] = None,
    *,
    academic_session_id: Optional[str] = None,
) -> ConflictResult:
    """Report the first schedule that already fills the class's slot."""
    for schedule in schedules:
        if schedule.class_id != class_id or schedule.period_id != period_id or schedule.day != day:
            continue
        if not _in_scope(schedule, exclude_schedule_id, academic_session_id):
            continue
        return ConflictResult(
            has_conflict=True,
            conflict_details=ConflictDetails(
                conflict_type="class",
                schedule_id=schedule.id,
                conflicting_id=schedule.teacher_id,
                conflicting_period_id=schedule.period_id,
            ),
        )
    return ConflictResult(has_conflict=False)


def detect_conflicts(
    schedules: Iterable[Schedule],
    teacher_names: Optional[Dict[str, str]] = None,
    class_names: Optional[Dict[str, str]] = None,
) -> ConflictReport:
    """Audit a whole collection for double-bookings, e.g. after loading old data."""
    teacher_names = teacher_names or {}
    class_names = class_names or {}
    conflicts: List[ConflictDetail] = []
    scanned = 0

    # Bucket by slot so only schedules sharing (session, day, period) are compared
    slots: Dict[Tuple[str, str, str], List[Schedule]] = defaultdict(list)
    for schedule in schedules:
        scanned += 1
        slots[(schedule.academic_session_id, schedule.day, schedule.period_id)].append(schedule)

    for (session_id, day, period_id), slot_schedules in slots.items():
        if len(slot_schedules) < 2:
            continue
        by_teacher: Dict[str, List[str]] = defaultdict(list)
        by_class: Dict[str, List[str]] = defaultdict(list)
        for schedule in slot_schedules:
            by_teacher[schedule.teacher_id].append(schedule.id)
            by_class[schedule.class_id].append(schedule.id)

        for teacher_id, schedule_ids in by_teacher.items():
            if len(schedule_ids) < 2:
                continue
            name = teacher_names.get(teacher_id, teacher_id)
            conflicts.append(ConflictDetail(
                id=f"teacher-{session_id}-{day}-{period_id}-{teacher_id}",
                conflict_type="teacher_conflict",
                description=f"{name} is booked {len(schedule_ids)} times on {day} in period {period_id}",
                day=day,
                period_id=period_id,
                academic_session_id=session_id,
                affected_slots=schedule_ids,
            ))
        for class_id, schedule_ids in by_class.items():
            if len(schedule_ids) < 2:
                continue
            name = class_names.get(class_id, class_id)
            conflicts.append(ConflictDetail(
                id=f"class-{session_id}-{day}-{period_id}-{class_id}",
                conflict_type="class_conflict",
                description=f"{name} has {len(schedule_ids)} subjects on {day} in period {period_id}",
                day=day,
                period_id=period_id,
                academic_session_id=session_id,
                affected_slots=schedule_ids,
            ))

    return ConflictReport(conflicts=conflicts, scanned_schedules=scanned)
