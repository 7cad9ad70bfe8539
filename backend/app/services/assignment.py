from __future__ import annotations

import logging
from typing import NamedTuple

from app.core.exceptions import ConflictError, ValidationError
from app.schemas.conflict import AssignmentCheck
from app.schemas.period import IntervalPeriod
from app.schemas.schedule import Schedule, ScheduleCreate
from app.schemas.school_day import validate_day_name
from app.services.conflict_service import check_class_conflict, check_teacher_conflict
from app.services.entities import new_id
from app.services.timetable_store import TimetableDraft, TimetableStore, coerce_payload

logger = logging.getLogger(__name__)


class _ResolvedCandidate(NamedTuple):
    data: ScheduleCreate
    day: str
    academic_session_id: str
    period_is_interval: bool


class AssignmentEngine:
    """Validates manual schedule assignments and commits them atomically.

    Every add/update runs the teacher and class conflict checks inside the same
    store transaction as the write, so two writers can never both pass a check
    and double-book a slot.
    """

    def __init__(self, store: TimetableStore, *, session_scoped_conflicts: bool = True) -> None:
        self.store = store
        self.session_scoped_conflicts = session_scoped_conflicts

    def _resolve_session(self, draft: TimetableDraft, requested: str | None) -> str:
        if requested is not None:
            if draft.get("academic_sessions", requested) is None:
                raise ValidationError(
                    f"Unknown academic session {requested}",
                    details={"field": "academic_session_id"},
                )
            return requested
        sessions = draft.items("academic_sessions")
        if not sessions:
            raise ValidationError("Create an academic session before scheduling classes")
        active = next((item for item in sessions if item.is_active), None)
        return (active or sessions[0]).id

    def _resolve(self, draft: TimetableDraft, payload, selected_day: str | None) -> _ResolvedCandidate:
        data = coerce_payload(ScheduleCreate, payload)
        day = data.day
        if day is None:
            if not selected_day:
                raise ValidationError("A day is required to schedule a class", details={"field": "day"})
            try:
                day = validate_day_name(selected_day)
            except ValueError as exc:
                raise ValidationError(f"Unknown day {selected_day!r}", details={"field": "day"}) from exc
        if day not in [item.name for item in draft.school_days if item.active]:
            raise ValidationError(f"{day} is not an active school day", details={"field": "day"})

        for collection, field in (
            ("teachers", "teacher_id"),
            ("subjects", "subject_id"),
            ("class_grades", "class_id"),
            ("periods", "period_id"),
        ):
            if draft.get(collection, getattr(data, field)) is None:
                raise ValidationError(f"Unknown {field} {getattr(data, field)}", details={"field": field})

        session_id = self._resolve_session(draft, data.academic_session_id)
        period = draft.get("periods", data.period_id)
        return _ResolvedCandidate(data, day, session_id, isinstance(period, IntervalPeriod))

    def _check(self, draft: TimetableDraft, candidate: _ResolvedCandidate, exclude_schedule_id: str | None) -> AssignmentCheck:
        schedules = draft.schedules
        scope = candidate.academic_session_id if self.session_scoped_conflicts else None
        data = candidate.data
        return AssignmentCheck(
            day=candidate.day,
            academic_session_id=candidate.academic_session_id,
            teacher_conflict=check_teacher_conflict(
                schedules, data.teacher_id, data.period_id, candidate.day, exclude_schedule_id,
                academic_session_id=scope,
            ),
            class_conflict=check_class_conflict(
                schedules, data.class_id, data.period_id, candidate.day, exclude_schedule_id,
                academic_session_id=scope,
            ),
            period_is_interval=candidate.period_is_interval,
        )

    def _validated(self, draft: TimetableDraft, payload, selected_day, exclude_schedule_id) -> _ResolvedCandidate:
        candidate = self._resolve(draft, payload, selected_day)
        if candidate.period_is_interval:
            raise ValidationError(
                "Classes cannot be scheduled during a break",
                details={"field": "period_id", "period_id": candidate.data.period_id},
            )
        check = self._check(draft, candidate, exclude_schedule_id)
        if check.has_conflict:
            conflicts = [
                result.conflict_details.model_dump()
                for result in (check.teacher_conflict, check.class_conflict)
                if result.has_conflict
            ]
            kinds = " and ".join(item["conflict_type"] for item in conflicts)
            raise ConflictError(f"Schedule conflicts with an existing {kinds} booking", conflicts)
        return candidate

    @staticmethod
    def _build(schedule_id: str, candidate: _ResolvedCandidate) -> Schedule:
        return Schedule(
            id=schedule_id,
            day=candidate.day,
            class_id=candidate.data.class_id,
            teacher_id=candidate.data.teacher_id,
            subject_id=candidate.data.subject_id,
            period_id=candidate.data.period_id,
            academic_session_id=candidate.academic_session_id,
        )

    def check_assignment(
        self,
        payload: ScheduleCreate | dict,
        *,
        selected_day: str | None = None,
        exclude_schedule_id: str | None = None,
    ) -> AssignmentCheck:
        """Run both conflict checks without writing anything (live form feedback)."""
        draft = TimetableDraft(self.store.snapshot())
        candidate = self._resolve(draft, payload, selected_day)
        return self._check(draft, candidate, exclude_schedule_id)

    def add_schedule(self, payload: ScheduleCreate | dict, *, selected_day: str | None = None) -> Schedule:
        with self.store.transaction() as draft:
            candidate = self._validated(draft, payload, selected_day, exclude_schedule_id=None)
            schedule = self._build(new_id(), candidate)
            draft.put("schedules", schedule)
            draft.record("create", "schedules", schedule.id, day=schedule.day, period_id=schedule.period_id)
        logger.info(
            "Scheduled class %s with teacher %s on %s period %s",
            schedule.class_id, schedule.teacher_id, schedule.day, schedule.period_id,
        )
        return schedule

    def update_schedule(
        self,
        schedule_id: str,
        payload: ScheduleCreate | dict,
        *,
        selected_day: str | None = None,
    ) -> Schedule:
        with self.store.transaction() as draft:
            candidate = self._validated(draft, payload, selected_day, exclude_schedule_id=schedule_id)
            schedule = self._build(schedule_id, candidate)
            exists = draft.get("schedules", schedule_id) is not None
            draft.put("schedules", schedule)
            if exists:
                draft.record("update", "schedules", schedule_id, day=schedule.day, period_id=schedule.period_id)
            else:
                # TODO: revisit once clients send a version with edits; this can hide lost updates
                draft.record("schedule.upsert_fallback", "schedules", schedule_id, day=schedule.day)
        if not exists:
            logger.warning("Schedule %s not found during update; inserted as a new schedule", schedule_id)
        return schedule

    def delete_schedule(self, schedule_id: str) -> None:
        with self.store.transaction() as draft:
            if draft.remove("schedules", schedule_id) is not None:
                draft.record("delete", "schedules", schedule_id)
