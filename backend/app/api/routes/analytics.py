from fastapi import APIRouter, Depends, Query

from app.api.deps import get_store
from app.core.exceptions import NotFoundError
from app.schemas.insights import CountEntry, TimetableSummary
from app.services.timetable_store import TimetableStore
from app.services.workload import filter_schedules, get_teacher_workload, summarize, teacher_workloads

router = APIRouter()


@router.get("/analytics/workload", response_model=list[CountEntry])
def workload(
    academic_session_id: str | None = Query(default=None),
    limit: int | None = Query(default=None, ge=1, le=500),
    store: TimetableStore = Depends(get_store),
) -> list[CountEntry]:
    snapshot = store.snapshot()
    schedules = filter_schedules(snapshot.schedules, academic_session_id=academic_session_id)
    return teacher_workloads(schedules, snapshot.teachers, limit=limit)


@router.get("/analytics/workload/{teacher_id}")
def teacher_workload(
    teacher_id: str,
    academic_session_id: str | None = Query(default=None),
    store: TimetableStore = Depends(get_store),
) -> dict:
    snapshot = store.snapshot()
    if not any(item.id == teacher_id for item in snapshot.teachers):
        raise NotFoundError("Teacher", teacher_id)
    schedules = filter_schedules(snapshot.schedules, academic_session_id=academic_session_id)
    return {"teacher_id": teacher_id, "periods": get_teacher_workload(schedules, teacher_id)}


@router.get("/analytics/summary", response_model=TimetableSummary)
def summary(
    academic_session_id: str | None = Query(default=None),
    store: TimetableStore = Depends(get_store),
) -> TimetableSummary:
    return summarize(store.snapshot(), academic_session_id)
