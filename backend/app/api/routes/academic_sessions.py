from fastapi import APIRouter, Depends, status

from app.api.deps import get_entity_service
from app.schemas.academic_session import AcademicSession, AcademicSessionCreate
from app.services.entities import EntityService

router = APIRouter()


@router.get("/", response_model=list[AcademicSession])
def list_academic_sessions(service: EntityService = Depends(get_entity_service)) -> list[AcademicSession]:
    return list(service.list_academic_sessions())


@router.post("/", response_model=AcademicSession, status_code=status.HTTP_201_CREATED)
def create_academic_session(
    payload: AcademicSessionCreate,
    service: EntityService = Depends(get_entity_service),
) -> AcademicSession:
    return service.add_academic_session(payload)


@router.put("/{session_id}", response_model=AcademicSession)
def update_academic_session(
    session_id: str,
    payload: AcademicSessionCreate,
    service: EntityService = Depends(get_entity_service),
) -> AcademicSession:
    return service.update_academic_session(session_id, payload)


@router.post("/{session_id}/activate", response_model=AcademicSession)
def activate_academic_session(
    session_id: str,
    service: EntityService = Depends(get_entity_service),
) -> AcademicSession:
    return service.set_active_session(session_id)


@router.delete("/{session_id}")
def delete_academic_session(session_id: str, service: EntityService = Depends(get_entity_service)) -> dict:
    removed = service.delete_academic_session(session_id)
    return {"success": True, "removed_schedule_count": removed}
