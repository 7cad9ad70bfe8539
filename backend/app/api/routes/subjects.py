from fastapi import APIRouter, Depends, status

from app.api.deps import get_entity_service
from app.schemas.reference import Subject, SubjectCreate
from app.services.entities import EntityService

router = APIRouter()


@router.get("/", response_model=list[Subject])
def list_subjects(service: EntityService = Depends(get_entity_service)) -> list[Subject]:
    return list(service.list_subjects())


@router.post("/", response_model=Subject, status_code=status.HTTP_201_CREATED)
def create_subject(payload: SubjectCreate, service: EntityService = Depends(get_entity_service)) -> Subject:
    return service.add_subject(payload)


@router.put("/{subject_id}", response_model=Subject)
def update_subject(
    subject_id: str,
    payload: SubjectCreate,
    service: EntityService = Depends(get_entity_service),
) -> Subject:
    return service.update_subject(subject_id, payload)


@router.delete("/{subject_id}")
def delete_subject(subject_id: str, service: EntityService = Depends(get_entity_service)) -> dict:
    removed = service.delete_subject(subject_id)
    return {"success": True, "removed_schedule_count": removed}
