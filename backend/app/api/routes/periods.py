from fastapi import APIRouter, Depends, status

from app.api.deps import get_entity_service
from app.schemas.period import Period, PeriodCreate
from app.services.entities import EntityService

router = APIRouter()


@router.get("/", response_model=list[Period])
def list_periods(service: EntityService = Depends(get_entity_service)) -> list[Period]:
    return service.list_periods()


@router.post("/", response_model=Period, status_code=status.HTTP_201_CREATED)
def create_period(payload: PeriodCreate, service: EntityService = Depends(get_entity_service)) -> Period:
    return service.add_period(payload)


@router.put("/{period_id}", response_model=Period)
def update_period(
    period_id: str,
    payload: PeriodCreate,
    service: EntityService = Depends(get_entity_service),
) -> Period:
    return service.update_period(period_id, payload)


@router.delete("/{period_id}")
def delete_period(period_id: str, service: EntityService = Depends(get_entity_service)) -> dict:
    removed = service.delete_period(period_id)
    return {"success": True, "removed_schedule_count": removed}
