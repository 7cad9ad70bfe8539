import pytest
from fastapi.testclient import TestClient #fake http client that calls the FastAPI routes without a real server.

from app.core.config import Settings
from app.main import create_app
from app.services.assignment import AssignmentEngine
from app.services.entities import EntityService
from app.services.timetable_store import TimetableStore


@pytest.fixture()
def store():
    return TimetableStore()


@pytest.fixture()
def entities(store):
    return EntityService(store)


@pytest.fixture()
def engine(store):
    return AssignmentEngine(store)


@pytest.fixture()
def school(entities):
    """Two teachers, two classes, two subjects, two teaching periods, a break and one active session."""
    return {
        "t1": entities.add_teacher({"name": "Deepa Kshetri"}).id,
        "t2": entities.add_teacher({"name": "Neha Sunar"}).id,
        "c1": entities.add_class_grade({"name": "Class 1"}).id,
        "c2": entities.add_class_grade({"name": "Class 2"}).id,
        "s1": entities.add_subject({"name": "Mathematics"}).id,
        "s2": entities.add_subject({"name": "Science"}).id,
        "p1": entities.add_period({"name": "1st Period", "start_time": "08:00", "end_time": "09:00"}).id,
        "p2": entities.add_period({"name": "2nd Period", "start_time": "09:10", "end_time": "10:10"}).id,
        "break": entities.add_period(
            {"name": "Break", "start_time": "10:10", "end_time": "10:30", "is_interval": True}
        ).id,
        "session": entities.add_academic_session(
            {"name": "2082", "start_date": "2025-04-14", "end_date": "2026-04-13"}
        ).id,
    }


@pytest.fixture() #test client
def client():
    settings = Settings(_env_file=None, snapshot_path=None, seed_demo_data=False)
    app = create_app(settings, store=TimetableStore()) #isolated store per test
    with TestClient(app) as test_client:
        yield test_client
