from fastapi import APIRouter, Depends, status

from app.api.deps import get_entity_service
from app.schemas.reference import ClassGrade, ClassGradeCreate
from app.services.entities import EntityService

router = APIRouter()


@router.get("/", response_model=list[ClassGrade])
def list_classes(service: EntityService = Depends(get_entity_service)) -> list[ClassGrade]:
    return list(service.list_class_grades())


@router.post("/", response_model=ClassGrade, status_code=status.HTTP_201_CREATED)
def create_class(payload: ClassGradeCreate, service: EntityService = Depends(get_entity_service)) -> ClassGrade:
    return service.add_class_grade(payload)


@router.put("/{class_id}", response_model=ClassGrade)
def update_class(
    class_id: str,
    payload: ClassGradeCreate,
    service: EntityService = Depends(get_entity_service),
) -> ClassGrade:
    return service.update_class_grade(class_id, payload)


@router.delete("/{class_id}")
def delete_class(class_id: str, service: EntityService = Depends(get_entity_service)) -> dict:
    removed = service.delete_class_grade(class_id)
    return {"success": True, "removed_schedule_count": removed}
