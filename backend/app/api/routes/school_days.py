from fastapi import APIRouter, Depends

from app.api.deps import get_entity_service
from app.schemas.school_day import SchoolDay, SchoolDaysUpdate, SchoolDayToggle
from app.services.entities import EntityService

router = APIRouter()


@router.get("/", response_model=list[SchoolDay])
def list_school_days(service: EntityService = Depends(get_entity_service)) -> list[SchoolDay]:
    return list(service.list_school_days())


@router.put("/", response_model=list[SchoolDay])
def update_school_days(
    payload: SchoolDaysUpdate,
    service: EntityService = Depends(get_entity_service),
) -> list[SchoolDay]:
    return list(service.update_school_days(payload))


@router.put("/{day_name}", response_model=list[SchoolDay])
def toggle_school_day(
    day_name: str,
    payload: SchoolDayToggle,
    service: EntityService = Depends(get_entity_service),
) -> list[SchoolDay]:
    return list(service.set_school_day_active(day_name, payload.active))
