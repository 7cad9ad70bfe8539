from fastapi import APIRouter, Depends, status

from app.api.deps import get_entity_service
from app.schemas.reference import Teacher, TeacherCreate
from app.services.entities import EntityService

router = APIRouter()


@router.get("/", response_model=list[Teacher])
def list_teachers(service: EntityService = Depends(get_entity_service)) -> list[Teacher]:
    return list(service.list_teachers())


@router.post("/", response_model=Teacher, status_code=status.HTTP_201_CREATED)
def create_teacher(payload: TeacherCreate, service: EntityService = Depends(get_entity_service)) -> Teacher:
    return service.add_teacher(payload)


@router.put("/{teacher_id}", response_model=Teacher)
def update_teacher(
    teacher_id: str,
    payload: TeacherCreate,
    service: EntityService = Depends(get_entity_service),
) -> Teacher:
    return service.update_teacher(teacher_id, payload)


@router.delete("/{teacher_id}")
def delete_teacher(teacher_id: str, service: EntityService = Depends(get_entity_service)) -> dict:
    removed = service.delete_teacher(teacher_id)
    return {"success": True, "removed_schedule_count": removed}
