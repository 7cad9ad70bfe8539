from app.db.bootstrap import DEMO_SESSION_ID, demo_snapshot
from app.schemas.reference import Subject, Teacher
from app.schemas.schedule import Schedule
from app.services.workload import (
    build_day_grid,
    completion_percentage,
    day_distribution,
    filter_schedules,
    get_teacher_workload,
    subject_distribution,
    summarize,
    teacher_workloads,
)


def make_schedule(schedule_id, teacher_id="t1", day="Monday", session="as1", subject_id="s1"):
    return Schedule(
        id=schedule_id,
        day=day,
        class_id="c1",
        teacher_id=teacher_id,
        subject_id=subject_id,
        period_id="p1",
        academic_session_id=session,
    )


def test_teacher_workload_counts_every_day_and_session():
    schedules = [
        make_schedule("a"),
        make_schedule("b", day="Tuesday"),
        make_schedule("c", session="as2"),
        make_schedule("d", teacher_id="t2"),
    ]
    assert get_teacher_workload(schedules, "t1") == 3
    assert get_teacher_workload(schedules, "t2") == 1
    assert get_teacher_workload(schedules, "nobody") == 0
    assert get_teacher_workload([], "t1") == 0


def test_filter_schedules_combines_filters():
    schedules = [make_schedule("a"), make_schedule("b", day="Tuesday"), make_schedule("c", session="as2")]
    assert [item.id for item in filter_schedules(schedules, academic_session_id="as1")] == ["a", "b"]
    assert [item.id for item in filter_schedules(schedules, academic_session_id="as1", day="Tuesday")] == ["b"]
    assert filter_schedules(schedules) == schedules


def test_teacher_workloads_sorted_with_limit():
    teachers = [Teacher(id="t1", name="A"), Teacher(id="t2", name="B"), Teacher(id="t3", name="C")]
    schedules = [make_schedule("a", teacher_id="t2"), make_schedule("b", teacher_id="t2"), make_schedule("c")]

    entries = teacher_workloads(schedules, teachers)
    assert [(entry.id, entry.count) for entry in entries] == [("t2", 2), ("t1", 1), ("t3", 0)]
    assert len(teacher_workloads(schedules, teachers, limit=2)) == 2


def test_subject_distribution_skips_unused_subjects():
    subjects = [Subject(id="s1", name="Maths"), Subject(id="s2", name="Science")]
    entries = subject_distribution([make_schedule("a")], subjects)
    assert [entry.id for entry in entries] == ["s1"]


def test_day_distribution_lists_every_weekday():
    entries = day_distribution([make_schedule("a"), make_schedule("b", day="Friday")])
    assert len(entries) == 7
    assert {entry.id: entry.count for entry in entries}["Friday"] == 1


def test_completion_percentage():
    assert completion_percentage(30, 6, 5, 6) == 17
    assert completion_percentage(0, 0, 5, 6) == 0
    assert completion_percentage(180, 6, 5, 6) == 100


def test_summary_of_demo_data():
    summary = summarize(demo_snapshot(), DEMO_SESSION_ID)

    assert summary.total_schedules == 10
    assert summary.total_teaching_periods == 6
    assert summary.active_days == 6
    assert summary.average_workload == 2.0
    assert summary.completion_percentage == round(10 / (6 * 6 * 6) * 100)
    assert summary.teacher_workload[0].id == "t1"
    assert summary.teacher_workload[0].count == 3
    assert all(entry.id not in {"p3", "p6"} for entry in summary.period_distribution)


def test_summary_for_other_session_is_empty():
    summary = summarize(demo_snapshot(), "unknown")
    assert summary.total_schedules == 0
    assert summary.average_workload == 0.0


def test_day_grid_places_schedules_by_class_and_period():
    grid = build_day_grid(demo_snapshot(), "Monday", DEMO_SESSION_ID)

    assert grid.period_ids == ["p1", "p2", "p3", "p4", "p5", "p6", "p7", "p8"]
    assert len(grid.rows) == 6
    first = grid.rows[0]
    assert first.class_id == "c1"
    assert {period_id: cell.teacher_id for period_id, cell in first.cells.items()} == {
        "p1": "t1",
        "p2": "t3",
        "p4": "t4",
    }
    assert grid.rows[2].cells == {}


def test_day_grid_for_one_class():
    grid = build_day_grid(demo_snapshot(), "Tuesday", DEMO_SESSION_ID, class_id="c3")
    assert [row.class_id for row in grid.rows] == ["c3"]
    assert sorted(grid.rows[0].cells) == ["p1", "p2"]
