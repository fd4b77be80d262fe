from datetime import datetime, timedelta, timezone

import pytest

from edulms.api import DataStoreError
from edulms.schemas.assignment import Assignment, AssignmentSubmission
from edulms.schemas.course import Course, Video
from edulms.schemas.user import Profile
from edulms.services.assignments import (
    OVERDUE,
    PENDING,
    SUBMITTED,
    assignment_status,
    create_assignment,
    grade_submission,
    submit_assignment,
    upcoming_count,
)
from edulms.services.courses import add_video, create_course, fetch_catalog, filter_courses, video_count
from edulms.services.dashboard import load_admin_dashboard, load_student_dashboard
from edulms.services.forms import FormValidationError
from edulms.services.notes import submit_note
from edulms.services.profile import save_profile_details

NOW = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)


def make_assignment(assignment_id="a1", due=NOW + timedelta(days=1)):
    return Assignment(id=assignment_id, title="HW1", course_id="c1", due_date=due, max_points=100)


# ---------------------------------------------------------
# Courses
# ---------------------------------------------------------
def test_filter_courses_matches_title_or_description():
    courses = [
        Course(id="1", title="Intro to Python", description="Basics"),
        Course(id="2", title="Databases", description="SQL and python drivers"),
        Course(id="3", title="Art History"),
    ]

    assert [c.id for c in filter_courses(courses, "PYTHON")] == ["1", "2"]
    assert len(filter_courses(courses, "  ")) == 3


def test_video_count_per_course():
    videos = [
        Video(id="v1", title="a", course_id="c1"),
        Video(id="v2", title="b", course_id="c1"),
        Video(id="v3", title="c", course_id="c2"),
    ]

    assert video_count(videos, "c1") == 2
    assert video_count(videos, "c9") == 0


def test_fetch_catalog_newest_first(fake_db, data_store):
    fake_db.add("courses", {"title": "Old", "created_at": "2024-01-01T00:00:00+00:00"})
    fake_db.add("courses", {"title": "New", "created_at": "2024-06-01T00:00:00+00:00"})
    fake_db.add("videos", {"title": "Lesson", "course_id": "courses-1"})

    catalog = fetch_catalog(data_store)

    assert [c.title for c in catalog.courses] == ["New", "Old"]
    assert catalog.videos[0].course_id == "courses-1"


def test_create_course_requires_title(fake_db, data_store):
    with pytest.raises(FormValidationError):
        create_course(data_store, "admin", "   ", "desc")

    assert "courses" not in fake_db.tables


def test_create_course_inserts_row(fake_db, data_store):
    create_course(data_store, "admin", " Python 101 ", "Learn Python")

    row = fake_db.tables["courses"][0]
    assert row["title"] == "Python 101"
    assert row["instructor_id"] == "admin"


def test_add_video_rejects_non_http_url(data_store):
    with pytest.raises(FormValidationError):
        add_video(data_store, "c1", "Lesson 1", "", "ftp://example.com/video.mp4")


def test_add_video_stores_pasted_url(fake_db, data_store):
    add_video(data_store, "c1", "Lesson 1", "", "https://videos.example.com/1")

    row = fake_db.tables["videos"][0]
    assert row["video_url"] == "https://videos.example.com/1"
    assert row["description"] is None


# ---------------------------------------------------------
# Notes & assignments
# ---------------------------------------------------------
def test_submit_note_requires_course(data_store):
    with pytest.raises(FormValidationError, match="course"):
        submit_note(data_store, "s1", None, "Title", "Body")


def test_resubmitting_assignment_updates_same_row(fake_db, data_store):
    submit_assignment(data_store, "s1", "a1", "first")
    submit_assignment(data_store, "s1", "a1", "second")

    rows = fake_db.tables["assignment_submissions"]
    assert len(rows) == 1
    assert rows[0]["content"] == "second"
    assert fake_db.calls[-1].on_conflict == "assignment_id,student_id"


def test_create_assignment_rejects_zero_points(data_store):
    with pytest.raises(FormValidationError):
        create_assignment(data_store, "c1", "HW", "", NOW, 0)


def test_create_assignment_serializes_due_date(fake_db, data_store):
    create_assignment(data_store, "c1", "HW", "", datetime(2025, 3, 8, 23, 59), 50)

    row = fake_db.tables["assignments"][0]
    assert row["due_date"].startswith("2025-03-08T23:59:00")
    assert row["max_points"] == 50


def test_grade_submission_stamps_graded_at(fake_db, data_store):
    fake_db.add("assignment_submissions", {"id": "sub-1", "assignment_id": "a1", "grade": None})

    grade_submission(data_store, "sub-1", 87, "Nice work", now=NOW)

    row = fake_db.tables["assignment_submissions"][0]
    assert row["grade"] == 87
    assert row["feedback"] == "Nice work"
    assert row["graded_at"].startswith("2025-03-01T12:00:00")


@pytest.mark.parametrize("grade", [-1, 101])
def test_grade_out_of_range_is_rejected(data_store, grade):
    with pytest.raises(FormValidationError):
        grade_submission(data_store, "sub-1", grade, "", now=NOW)


def test_assignment_status():
    submitted = [AssignmentSubmission(id="s", assignment_id="a1")]

    assert assignment_status(make_assignment(), submitted, NOW) == SUBMITTED
    assert assignment_status(make_assignment(due=NOW - timedelta(hours=1)), [], NOW) == OVERDUE
    assert assignment_status(make_assignment(), [], NOW) == PENDING


def test_upcoming_count_handles_naive_due_dates():
    assignments = [
        make_assignment("a1", due=datetime(2025, 3, 2)),
        make_assignment("a2", due=NOW - timedelta(days=1)),
    ]

    assert upcoming_count(assignments, NOW) == 1


# ---------------------------------------------------------
# Dashboards & profile
# ---------------------------------------------------------
def test_student_dashboard_stats(fake_db, data_store):
    fake_db.add("courses", {"title": "Python"})
    fake_db.add("notes", {"title": "n", "content": "c", "course_id": "courses-1", "courses": {"title": "Python"}})
    fake_db.add("assignments", {"title": "HW", "course_id": "courses-1", "due_date": "2099-01-01T00:00:00+00:00", "max_points": 10})

    dashboard = load_student_dashboard(data_store)
    stats = {card.title: card.value for card in dashboard.stats(NOW)}

    assert stats == {"Enrolled Courses": 1, "Notes Created": 1, "Assignments Due": 1, "Completed": 0}
    assert dashboard.notes[0].course_title == "Python"


def test_admin_dashboard_lists_pending_review(fake_db, data_store):
    fake_db.add("assignment_submissions", {"assignment_id": "a1", "grade": None, "profiles": {"full_name": "Student One"}})
    fake_db.add("assignment_submissions", {"assignment_id": "a2", "grade": 75})

    dashboard = load_admin_dashboard(data_store)

    assert [s.student_name for s in dashboard.pending_review] == ["Student One"]
    assert {card.title: card.value for card in dashboard.stats()}["Submissions"] == 2


def test_save_profile_details_never_writes_role(fake_db, data_store):
    profile = Profile.model_validate(fake_db.tables["profiles"][0])

    save_profile_details(data_store, profile, "Student Uno", "")

    row = fake_db.tables["profiles"][0]
    assert row["full_name"] == "Student Uno"
    assert row["avatar_url"] is None
    assert row["role"] == "student"
    assert "role" not in fake_db.calls[-1].payload


def test_malformed_row_fails_the_load_as_data_store_error(fake_db, data_store):
    fake_db.add("assignments", {"title": "HW", "course_id": "courses-1", "due_date": None, "max_points": 10})

    with pytest.raises(DataStoreError) as exc:
        load_student_dashboard(data_store)

    assert exc.value.table == "assignments"
