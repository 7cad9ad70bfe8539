from fastapi import APIRouter, Depends, Query

from app.api.deps import get_store
from app.schemas.activity import ActivityLogOut
from app.services.timetable_store import TimetableStore

router = APIRouter()


@router.get("/activity/logs", response_model=list[ActivityLogOut])
def list_activity_logs(
    limit: int = Query(default=100, ge=1, le=500),
    store: TimetableStore = Depends(get_store),
) -> list[ActivityLogOut]:
    return store.activity(limit)
