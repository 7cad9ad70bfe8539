from fastapi import Depends, Request

from app.core.config import Settings
from app.services.assignment import AssignmentEngine
from app.services.entities import EntityService
from app.services.timetable_store import TimetableStore


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_store(request: Request) -> TimetableStore:
    return request.app.state.store


def get_entity_service(store: TimetableStore = Depends(get_store)) -> EntityService:
    return EntityService(store)


def get_assignment_engine(
    store: TimetableStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
) -> AssignmentEngine:
    return AssignmentEngine(store, session_scoped_conflicts=settings.scope_conflicts_to_session)
