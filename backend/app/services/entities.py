from __future__ import annotations

import logging
import uuid

from app.core.exceptions import ValidationError
from app.schemas.academic_session import AcademicSession, AcademicSessionCreate
from app.schemas.period import IntervalPeriod, PeriodCreate, TeachingPeriod, build_period, parse_time_to_minutes
from app.schemas.reference import (
    ClassGrade,
    ClassGradeCreate,
    Subject,
    SubjectCreate,
    Teacher,
    TeacherCreate,
)
from app.schemas.school_day import DAY_ORDER, SchoolDay, SchoolDaysUpdate, validate_day_name
from app.services.timetable_store import TimetableDraft, TimetableStore, coerce_payload

logger = logging.getLogger(__name__)


def new_id() -> str:
    return str(uuid.uuid4())


class EntityService:
    """CRUD over the reference collections. Deletes cascade into schedules."""

    def __init__(self, store: TimetableStore) -> None:
        self.store = store

    # Teachers, subjects and classes share one shape: id + name.

    def _add_named(self, collection: str, create_model, record_model, payload):
        data = coerce_payload(create_model, payload)
        with self.store.transaction() as draft:
            record = record_model(id=new_id(), **data.model_dump())
            draft.put(collection, record)
            draft.record("create", collection, record.id, name=record.name)
        return record

    def _update_named(self, collection: str, create_model, record_model, item_id: str, payload):
        data = coerce_payload(create_model, payload)
        with self.store.transaction() as draft:
            draft.require(collection, item_id)
            record = record_model(id=item_id, **data.model_dump())
            draft.put(collection, record)
            draft.record("update", collection, item_id, name=record.name)
        return record

    def _delete_cascading(self, collection: str, item_id: str) -> int:
        with self.store.transaction() as draft:
            draft.require(collection, item_id)
            removed = draft.remove_dependent_schedules(collection, item_id)
            draft.remove(collection, item_id)
            draft.record("delete", collection, item_id, removed_schedule_ids=removed)
        if removed:
            logger.info("Deleted %s %s and %d dependent schedule(s)", collection, item_id, len(removed))
        return len(removed)

    def list_teachers(self) -> tuple[Teacher, ...]:
        return self.store.snapshot().teachers

    def add_teacher(self, payload: TeacherCreate | dict) -> Teacher:
        return self._add_named("teachers", TeacherCreate, Teacher, payload)

    def update_teacher(self, teacher_id: str, payload: TeacherCreate | dict) -> Teacher:
        return self._update_named("teachers", TeacherCreate, Teacher, teacher_id, payload)

    def delete_teacher(self, teacher_id: str) -> int:
        return self._delete_cascading("teachers", teacher_id)

    def list_subjects(self) -> tuple[Subject, ...]:
        return self.store.snapshot().subjects

    def add_subject(self, payload: SubjectCreate | dict) -> Subject:
        return self._add_named("subjects", SubjectCreate, Subject, payload)

    def update_subject(self, subject_id: str, payload: SubjectCreate | dict) -> Subject:
        return self._update_named("subjects", SubjectCreate, Subject, subject_id, payload)

    def delete_subject(self, subject_id: str) -> int:
        return self._delete_cascading("subjects", subject_id)

    def list_class_grades(self) -> tuple[ClassGrade, ...]:
        return self.store.snapshot().class_grades

    def add_class_grade(self, payload: ClassGradeCreate | dict) -> ClassGrade:
        return self._add_named("class_grades", ClassGradeCreate, ClassGrade, payload)

    def update_class_grade(self, class_id: str, payload: ClassGradeCreate | dict) -> ClassGrade:
        return self._update_named("class_grades", ClassGradeCreate, ClassGrade, class_id, payload)

    def delete_class_grade(self, class_id: str) -> int:
        return self._delete_cascading("class_grades", class_id)

    # Periods

    def list_periods(self) -> list[TeachingPeriod | IntervalPeriod]:
        return sorted(self.store.snapshot().periods, key=lambda item: parse_time_to_minutes(item.start_time))

    @staticmethod
    def _ensure_no_overlap(draft: TimetableDraft, candidate, exclude_id: str | None = None) -> None:
        for existing in draft.items("periods"):
            if existing.id == exclude_id:
                continue
            if candidate.overlaps(existing):
                raise ValidationError(
                    f"{candidate.name} ({candidate.start_time}-{candidate.end_time}) overlaps "
                    f"{existing.name} ({existing.start_time}-{existing.end_time})",
                    details={"overlapping_period_id": existing.id},
                )

    def add_period(self, payload: PeriodCreate | dict) -> TeachingPeriod | IntervalPeriod:
        data = coerce_payload(PeriodCreate, payload)
        with self.store.transaction() as draft:
            self._ensure_no_overlap(draft, data)
            period = build_period(new_id(), data)
            draft.put("periods", period)
            draft.record("create", "periods", period.id, name=period.name, kind=period.kind)
        return period

    def update_period(self, period_id: str, payload: PeriodCreate | dict) -> TeachingPeriod | IntervalPeriod:
        data = coerce_payload(PeriodCreate, payload)
        with self.store.transaction() as draft:
            draft.require("periods", period_id)
            self._ensure_no_overlap(draft, data, exclude_id=period_id)
            if data.is_interval:
                booked = [item.id for item in draft.schedules if item.period_id == period_id]
                if booked:
                    raise ValidationError(
                        "Cannot turn a scheduled period into a break",
                        details={"schedule_ids": booked},
                    )
            period = build_period(period_id, data)
            draft.put("periods", period)
            draft.record("update", "periods", period_id, name=period.name, kind=period.kind)
        return period

    def delete_period(self, period_id: str) -> int:
        return self._delete_cascading("periods", period_id)

    # School days

    def list_school_days(self) -> tuple[SchoolDay, ...]:
        return self.store.snapshot().school_days

    def set_school_day_active(self, name: str, active: bool) -> tuple[SchoolDay, ...]:
        try:
            day_name = validate_day_name(name)
        except ValueError as exc:
            raise ValidationError(f"Unknown school day {name!r}") from exc
        with self.store.transaction() as draft:
            updated = [
                SchoolDay(name=day.name, active=active) if day.name == day_name else day
                for day in draft.school_days
            ]
            self._ensure_active_day(updated)
            if updated != draft.school_days:
                draft.replace_school_days(updated)
                draft.record("update", "school_days", day_name, active=active)
            days = tuple(draft.school_days)
        return days

    def update_school_days(self, payload: SchoolDaysUpdate | dict) -> tuple[SchoolDay, ...]:
        data = coerce_payload(SchoolDaysUpdate, payload)
        self._ensure_active_day(data.days)
        with self.store.transaction() as draft:
            by_name = {day.name: day for day in data.days}
            # Keep the canonical weekday order regardless of input order
            updated = [by_name[name] for name in DAY_ORDER]
            if updated != draft.school_days:
                draft.replace_school_days(updated)
                draft.record("update", "school_days", None, active=[day.name for day in updated if day.active])
            days = tuple(draft.school_days)
        return days

    @staticmethod
    def _ensure_active_day(days) -> None:
        if not any(day.active for day in days):
            raise ValidationError("At least one school day must remain active")

    # Academic sessions

    def list_academic_sessions(self) -> tuple[AcademicSession, ...]:
        return self.store.snapshot().academic_sessions

    @staticmethod
    def _activate_only(draft: TimetableDraft, session_id: str) -> None:
        for item in draft.items("academic_sessions"):
            should_be_active = item.id == session_id
            if item.is_active != should_be_active:
                draft.put("academic_sessions", item.model_copy(update={"is_active": should_be_active}))

    def add_academic_session(self, payload: AcademicSessionCreate | dict) -> AcademicSession:
        data = coerce_payload(AcademicSessionCreate, payload)
        with self.store.transaction() as draft:
            # The first session is always the active one
            is_active = data.is_active or not draft.items("academic_sessions")
            session = AcademicSession(id=new_id(), **data.model_dump(exclude={"is_active"}), is_active=is_active)
            draft.put("academic_sessions", session)
            if is_active:
                self._activate_only(draft, session.id)
            draft.record("create", "academic_sessions", session.id, name=session.name, is_active=is_active)
        return session

    def update_academic_session(self, session_id: str, payload: AcademicSessionCreate | dict) -> AcademicSession:
        data = coerce_payload(AcademicSessionCreate, payload)
        with self.store.transaction() as draft:
            current = draft.require("academic_sessions", session_id)
            if current.is_active and not data.is_active:
                raise ValidationError("Activate another academic session instead of deactivating the active one")
            session = AcademicSession(id=session_id, **data.model_dump())
            draft.put("academic_sessions", session)
            if session.is_active:
                self._activate_only(draft, session_id)
            draft.record("update", "academic_sessions", session_id, name=session.name, is_active=session.is_active)
        return session

    def set_active_session(self, session_id: str) -> AcademicSession:
        with self.store.transaction() as draft:
            draft.require("academic_sessions", session_id)
            self._activate_only(draft, session_id)
            if draft.changed:
                draft.record("activate", "academic_sessions", session_id)
            session = draft.get("academic_sessions", session_id)
        return session

    def delete_academic_session(self, session_id: str) -> int:
        with self.store.transaction() as draft:
            session = draft.require("academic_sessions", session_id)
            if session.is_active:
                raise ValidationError("Activate another academic session before deleting this one")
            if len(draft.items("academic_sessions")) == 1:
                raise ValidationError("Cannot delete the only academic session")
            removed = draft.remove_dependent_schedules("academic_sessions", session_id)
            draft.remove("academic_sessions", session_id)
            draft.record("delete", "academic_sessions", session_id, removed_schedule_ids=removed)
        if removed:
            logger.info("Deleted academic session %s and %d dependent schedule(s)", session_id, len(removed))
        return len(removed)
