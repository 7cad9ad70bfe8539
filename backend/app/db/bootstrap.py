from __future__ import annotations

from datetime import date
import logging

from app.core.config import Settings
from app.schemas.academic_session import AcademicSession
from app.schemas.period import IntervalPeriod, TeachingPeriod
from app.schemas.reference import ClassGrade, Subject, Teacher
from app.schemas.schedule import Schedule
from app.schemas.snapshot import TimetableSnapshot
from app.services.conflict_service import detect_conflicts
from app.services.persistence import JsonFileSnapshotWriter
from app.services.timetable_store import TimetableStore

logger = logging.getLogger(__name__)

DEMO_SESSION_ID = "as1"


def demo_snapshot() -> TimetableSnapshot:
    teachers = (
        Teacher(id="t1", name="Dhan Bahadur Rokaya"),
        Teacher(id="t2", name="Deepa Kshetri"),
        Teacher(id="t3", name="Neha Sunar"),
        Teacher(id="t4", name="Krishna Niroula"),
        Teacher(id="t5", name="Prakash Raj Bhatt"),
    )
    subjects = (
        Subject(id="s1", name="Mathematics"),
        Subject(id="s2", name="Science"),
        Subject(id="s3", name="English"),
        Subject(id="s4", name="Social Studies"),
        Subject(id="s5", name="Computer Science"),
        Subject(id="s6", name="Physical Education"),
    )
    periods = (
        TeachingPeriod(id="p1", name="1st Period", start_time="08:00", end_time="09:00"),
        TeachingPeriod(id="p2", name="2nd Period", start_time="09:10", end_time="10:10"),
        IntervalPeriod(id="p3", name="Break", start_time="10:10", end_time="10:30"),
        TeachingPeriod(id="p4", name="3rd Period", start_time="10:30", end_time="11:30"),
        TeachingPeriod(id="p5", name="4th Period", start_time="11:40", end_time="12:40"),
        IntervalPeriod(id="p6", name="Lunch", start_time="12:40", end_time="13:30"),
        TeachingPeriod(id="p7", name="5th Period", start_time="13:30", end_time="14:30"),
        TeachingPeriod(id="p8", name="6th Period", start_time="14:40", end_time="15:40"),
    )
    class_grades = tuple(ClassGrade(id=f"c{number}", name=f"Class {number}") for number in range(1, 7))
    sessions = (
        AcademicSession(
            id=DEMO_SESSION_ID,
            name="2082",
            start_date=date(2025, 4, 14),
            end_date=date(2026, 4, 13),
            is_active=True,
        ),
    )
    rows = [
        ("Monday", "c1", "t1", "s1", "p1"),
        ("Monday", "c2", "t2", "s2", "p1"),
        ("Monday", "c1", "t3", "s3", "p2"),
        ("Monday", "c2", "t1", "s1", "p2"),
        ("Monday", "c1", "t4", "s4", "p4"),
        ("Monday", "c2", "t5", "s5", "p4"),
        ("Tuesday", "c3", "t1", "s1", "p1"),
        ("Tuesday", "c4", "t2", "s2", "p1"),
        ("Tuesday", "c3", "t3", "s3", "p2"),
        ("Tuesday", "c4", "t4", "s4", "p2"),
    ]
    schedules = tuple(
        Schedule(
            id=f"sch{index}",
            day=day,
            class_id=class_id,
            teacher_id=teacher_id,
            subject_id=subject_id,
            period_id=period_id,
            academic_session_id=DEMO_SESSION_ID,
        )
        for index, (day, class_id, teacher_id, subject_id, period_id) in enumerate(rows, start=1)
    )
    return TimetableSnapshot(
        teachers=teachers,
        subjects=subjects,
        class_grades=class_grades,
        periods=periods,
        academic_sessions=sessions,
        schedules=schedules,
    )


def build_store(settings: Settings) -> TimetableStore:
    writer = JsonFileSnapshotWriter(settings.snapshot_path) if settings.snapshot_path else None
    snapshot = writer.load() if writer is not None else None
    if snapshot is None and settings.seed_demo_data:
        snapshot = demo_snapshot()
        logger.info("Seeded timetable with demo data")

    if snapshot is not None:
        report = detect_conflicts(snapshot.schedules)
        if report.conflicts:
            # Imported data is kept as-is; writes through the engine stay conflict-free.
            logger.warning("Loaded timetable contains %d double-booking(s)", len(report.conflicts))

    return TimetableStore(snapshot, writer=writer, activity_log_limit=settings.activity_log_limit)
