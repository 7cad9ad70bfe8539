from fastapi import APIRouter, Depends, Query, status

from app.api.deps import get_assignment_engine, get_store
from app.schemas.conflict import AssignmentCheck
from app.schemas.insights import DayGrid
from app.schemas.schedule import Schedule, ScheduleCreate
from app.schemas.school_day import DAY_ORDER
from app.services.assignment import AssignmentEngine
from app.services.timetable_store import TimetableStore
from app.services.workload import build_day_grid, filter_schedules

router = APIRouter()

DAY_QUERY_PATTERN = f"^({'|'.join(DAY_ORDER)})$"


@router.get("/", response_model=list[Schedule])
def list_schedules(
    academic_session_id: str | None = Query(default=None),
    day: str | None = Query(default=None, pattern=DAY_QUERY_PATTERN),
    teacher_id: str | None = Query(default=None),
    class_id: str | None = Query(default=None),
    store: TimetableStore = Depends(get_store),
) -> list[Schedule]:
    return filter_schedules(
        store.snapshot().schedules,
        academic_session_id=academic_session_id,
        day=day,
        teacher_id=teacher_id,
        class_id=class_id,
    )


@router.get("/grid", response_model=DayGrid)
def day_grid(
    day: str = Query(..., pattern=DAY_QUERY_PATTERN),
    academic_session_id: str | None = Query(default=None),
    class_id: str | None = Query(default=None),
    store: TimetableStore = Depends(get_store),
) -> DayGrid:
    snapshot = store.snapshot()
    if academic_session_id is None:
        active = snapshot.active_session()
        academic_session_id = active.id if active is not None else None
    return build_day_grid(snapshot, day, academic_session_id, class_id)


@router.post("/check", response_model=AssignmentCheck)
def check_schedule(
    payload: ScheduleCreate,
    selected_day: str | None = Query(default=None),
    exclude_schedule_id: str | None = Query(default=None),
    engine: AssignmentEngine = Depends(get_assignment_engine),
) -> AssignmentCheck:
    return engine.check_assignment(payload, selected_day=selected_day, exclude_schedule_id=exclude_schedule_id)


@router.post("/", response_model=Schedule, status_code=status.HTTP_201_CREATED)
def create_schedule(
    payload: ScheduleCreate,
    selected_day: str | None = Query(default=None),
    engine: AssignmentEngine = Depends(get_assignment_engine),
) -> Schedule:
    return engine.add_schedule(payload, selected_day=selected_day)


@router.put("/{schedule_id}", response_model=Schedule)
def update_schedule(
    schedule_id: str,
    payload: ScheduleCreate,
    selected_day: str | None = Query(default=None),
    engine: AssignmentEngine = Depends(get_assignment_engine),
) -> Schedule:
    return engine.update_schedule(schedule_id, payload, selected_day=selected_day)


@router.delete("/{schedule_id}")
def delete_schedule(
    schedule_id: str,
    engine: AssignmentEngine = Depends(get_assignment_engine),
) -> dict:
    engine.delete_schedule(schedule_id)
    return {"success": True}
