from fastapi import APIRouter, Depends, Query

from app.api.deps import get_store
from app.schemas.conflict import ConflictReport
from app.services.conflict_service import detect_conflicts
from app.services.timetable_store import TimetableStore
from app.services.workload import filter_schedules

router = APIRouter()

@router.get("/", response_model=ConflictReport)
def conflict_report(
    academic_session_id: str | None = Query(default=None),
    store: TimetableStore = Depends(get_store),
):
    snapshot = store.snapshot()
    teacher_names = {item.id: item.name for item in snapshot.teachers}
    class_names = {item.id: item.name for item in snapshot.class_grades}
    schedules = filter_schedules(snapshot.schedules, academic_session_id=academic_session_id)
    return detect_conflicts(schedules, teacher_names, class_names)
