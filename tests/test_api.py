import httpx
import pytest
from postgrest.exceptions import APIError

from edulms.api import DataStoreError


def test_select_builds_filtered_ordered_query(fake_db, data_store):
    fake_db.add("courses", {"title": "Older", "created_at": "2024-01-01T00:00:00Z", "instructor_id": "a"})
    fake_db.add("courses", {"title": "Newer", "created_at": "2024-02-01T00:00:00Z", "instructor_id": "a"})
    fake_db.add("courses", {"title": "Other", "created_at": "2024-03-01T00:00:00Z", "instructor_id": "b"})

    rows = data_store.select("courses", filters={"instructor_id": "a"}, order="created_at", ascending=False)

    assert [row["title"] for row in rows] == ["Newer", "Older"]
    query = fake_db.calls[-1]
    assert query.columns == "*"
    assert query.order_by == ("created_at", True)


def test_select_passes_expansion_columns(fake_db, data_store):
    data_store.select("videos", columns="*, courses(title)")

    assert fake_db.calls[-1].columns == "*, courses(title)"


def test_insert_returns_created_rows(data_store):
    rows = data_store.insert("notes", {"title": "Week 1", "content": "Intro", "course_id": "c1"})

    assert rows[0]["title"] == "Week 1"
    assert rows[0]["id"]


def test_update_targets_row_by_id(fake_db, data_store):
    fake_db.add("assignment_submissions", {"id": "s1", "grade": None})
    fake_db.add("assignment_submissions", {"id": "s2", "grade": None})

    data_store.update("assignment_submissions", "s2", {"grade": 90})

    grades = {row["id"]: row["grade"] for row in fake_db.tables["assignment_submissions"]}
    assert grades == {"s1": None, "s2": 90}
    assert fake_db.calls[-1].filters == [("id", "s2")]


def test_upsert_passes_conflict_keys(fake_db, data_store):
    data_store.upsert("assignment_submissions", {"assignment_id": "a1", "student_id": "s1"}, on_conflict="assignment_id,student_id")

    assert fake_db.calls[-1].on_conflict == "assignment_id,student_id"


def test_api_error_is_wrapped(fake_db, data_store):
    fake_db.error = APIError({"message": "duplicate key value", "code": "23505"})

    with pytest.raises(DataStoreError) as exc:
        data_store.insert("courses", {"title": "x"})

    assert exc.value.operation == "insert"
    assert exc.value.message == "duplicate key value"


def test_transport_error_is_wrapped(fake_db, data_store):
    fake_db.error = httpx.ConnectError("connection refused")

    with pytest.raises(DataStoreError) as exc:
        data_store.select("courses")

    assert "connection refused" in str(exc.value)


def test_unexpected_errors_propagate(fake_db, data_store):
    fake_db.error = KeyError("bug")

    with pytest.raises(KeyError):
        data_store.select("courses")
