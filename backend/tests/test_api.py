from fastapi.testclient import TestClient

from app.core.config import Settings
from app.db.bootstrap import demo_snapshot
from app.main import create_app
from app.schemas.schedule import Schedule
from app.services.timetable_store import TimetableStore


def create(client, path, payload):
    response = client.post(path, json=payload)
    assert response.status_code == 201, response.text
    return response.json()


def seed(client):
    return {
        "t1": create(client, "/api/teachers/", {"name": "Deepa Kshetri"})["id"],
        "t2": create(client, "/api/teachers/", {"name": "Neha Sunar"})["id"],
        "c1": create(client, "/api/classes/", {"name": "Class 1"})["id"],
        "c2": create(client, "/api/classes/", {"name": "Class 2"})["id"],
        "s1": create(client, "/api/subjects/", {"name": "Mathematics"})["id"],
        "p1": create(client, "/api/periods/", {"name": "1st Period", "start_time": "08:00", "end_time": "09:00"})["id"],
        "break": create(
            client,
            "/api/periods/",
            {"name": "Break", "start_time": "09:00", "end_time": "09:20", "is_interval": True},
        )["id"],
        "session": create(
            client,
            "/api/academic-sessions/",
            {"name": "2082", "start_date": "2025-04-14", "end_date": "2026-04-13"},
        )["id"],
    }


def lesson(ids, **overrides):
    payload = {
        "day": "Monday",
        "teacher_id": ids["t1"],
        "class_id": ids["c1"],
        "subject_id": ids["s1"],
        "period_id": ids["p1"],
    }
    payload.update(overrides)
    return payload


def test_health_check(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_schedule_lifecycle(client):
    ids = seed(client)

    created = create(client, "/api/schedules/", lesson(ids))
    assert created["academic_session_id"] == ids["session"]

    conflict = client.post("/api/schedules/", json=lesson(ids, class_id=ids["c2"]))
    assert conflict.status_code == 409
    body = conflict.json()
    assert body["details"]["conflicts"][0]["conflict_type"] == "teacher"
    assert body["details"]["conflicts"][0]["schedule_id"] == created["id"]

    updated = client.put(f"/api/schedules/{created['id']}", json=lesson(ids, day="Tuesday"))
    assert updated.status_code == 200
    assert updated.json()["day"] == "Tuesday"

    listed = client.get("/api/schedules/", params={"day": "Tuesday"})
    assert [item["id"] for item in listed.json()] == [created["id"]]

    deleted = client.delete(f"/api/schedules/{created['id']}")
    assert deleted.json() == {"success": True}
    assert client.delete(f"/api/schedules/{created['id']}").status_code == 200
    assert client.get("/api/schedules/").json() == []


def test_check_endpoint_reports_without_writing(client):
    ids = seed(client)
    create(client, "/api/schedules/", lesson(ids))

    response = client.post("/api/schedules/check", json=lesson(ids, teacher_id=ids["t2"]))

    assert response.status_code == 200
    body = response.json()
    assert body["has_conflict"] is True
    assert body["class_conflict"]["conflict_details"]["conflict_type"] == "class"
    assert body["teacher_conflict"]["has_conflict"] is False
    assert len(client.get("/api/schedules/").json()) == 1


def test_selected_day_query_fills_missing_day(client):
    ids = seed(client)
    payload = lesson(ids)
    del payload["day"]

    response = client.post("/api/schedules/", params={"selected_day": "Thursday"}, json=payload)
    assert response.status_code == 201
    assert response.json()["day"] == "Thursday"

    missing = client.post("/api/schedules/", json=lesson(ids, day=None, class_id=ids["c2"], teacher_id=ids["t2"]))
    assert missing.status_code == 400


def test_break_period_is_rejected(client):
    ids = seed(client)

    response = client.post("/api/schedules/", json=lesson(ids, period_id=ids["break"]))

    assert response.status_code == 400
    assert response.json()["details"]["field"] == "period_id"


def test_unknown_entities_return_not_found(client):
    response = client.put("/api/teachers/missing", json={"name": "Someone"})
    assert response.status_code == 404
    assert response.json()["details"] == {"resource_type": "Teacher", "resource_id": "missing"}

    assert client.get("/api/analytics/workload/missing").status_code == 404


def test_deleting_teacher_cascades(client):
    ids = seed(client)
    for day in ("Monday", "Tuesday", "Wednesday"):
        create(client, "/api/schedules/", lesson(ids, day=day))

    response = client.delete(f"/api/teachers/{ids['t1']}")

    assert response.json() == {"success": True, "removed_schedule_count": 3}
    assert client.get("/api/schedules/").json() == []


def test_overlapping_period_returns_bad_request(client):
    seed(client)
    response = client.post("/api/periods/", json={"name": "Clash", "start_time": "08:30", "end_time": "09:10"})
    assert response.status_code == 400


def test_school_days_endpoints(client):
    days = client.get("/api/school-days/").json()
    assert [day["name"] for day in days if day["active"]][0] == "Sunday"

    toggled = client.put("/api/school-days/Saturday", json={"active": True})
    assert all(day["active"] for day in toggled.json())

    rejected = client.put(
        "/api/school-days/",
        json={"days": [{"name": day["name"], "active": False} for day in days]},
    )
    assert rejected.status_code == 400
    assert all(day["active"] for day in client.get("/api/school-days/").json())


def test_session_activation(client):
    ids = seed(client)
    other = create(
        client,
        "/api/academic-sessions/",
        {"name": "2083", "start_date": "2026-04-14", "end_date": "2027-04-13"},
    )

    response = client.post(f"/api/academic-sessions/{other['id']}/activate")

    assert response.json()["is_active"] is True
    sessions = client.get("/api/academic-sessions/").json()
    assert {item["id"]: item["is_active"] for item in sessions} == {ids["session"]: False, other["id"]: True}


def test_workload_and_summary(client):
    ids = seed(client)
    create(client, "/api/schedules/", lesson(ids))
    create(client, "/api/schedules/", lesson(ids, day="Tuesday"))

    workload = client.get(f"/api/analytics/workload/{ids['t1']}")
    assert workload.json() == {"teacher_id": ids["t1"], "periods": 2}

    ranking = client.get("/api/analytics/workload").json()
    assert [(item["id"], item["count"]) for item in ranking] == [(ids["t1"], 2), (ids["t2"], 0)]

    summary = client.get("/api/analytics/summary").json()
    assert summary["total_schedules"] == 2
    assert summary["total_teaching_periods"] == 1


def test_day_grid_defaults_to_active_session(client):
    ids = seed(client)
    created = create(client, "/api/schedules/", lesson(ids))

    grid = client.get("/api/schedules/grid", params={"day": "Monday"}).json()

    assert grid["academic_session_id"] == ids["session"]
    assert grid["rows"][0]["cells"][ids["p1"]]["id"] == created["id"]
    assert client.get("/api/schedules/grid", params={"day": "Someday"}).status_code == 422


def test_activity_log_lists_newest_first(client):
    ids = seed(client)
    created = create(client, "/api/schedules/", lesson(ids))

    entries = client.get("/api/activity/logs", params={"limit": 2}).json()

    assert len(entries) == 2
    assert entries[0]["action"] == "create"
    assert entries[0]["entity_id"] == created["id"]
    assert entries[0]["version"] > entries[1]["version"]


def test_conflict_report_flags_imported_double_bookings():
    snapshot = demo_snapshot()
    clash = Schedule(
        id="imported",
        day="Monday",
        class_id="c5",
        teacher_id="t1",
        subject_id="s1",
        period_id="p1",
        academic_session_id="as1",
    )
    store = TimetableStore(snapshot.model_copy(update={"schedules": snapshot.schedules + (clash,)}))
    app = create_app(Settings(_env_file=None), store=store)

    with TestClient(app) as client:
        report = client.get("/api/conflicts/").json()

    assert report["scanned_schedules"] == 11
    assert len(report["conflicts"]) == 1
    conflict = report["conflicts"][0]
    assert conflict["conflict_type"] == "teacher_conflict"
    assert sorted(conflict["affected_slots"]) == ["imported", "sch1"]
    assert "Dhan Bahadur Rokaya" in conflict["description"]
