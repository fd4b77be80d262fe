import logging
from datetime import datetime, timezone
from typing import List, Optional

from pydantic import ValidationError

from edulms.api import DataStore, parse_rows
from edulms.schemas.assignment import (
    Assignment,
    AssignmentCreate,
    AssignmentSubmission,
    GradeUpdate,
    SubmissionCreate,
)
from edulms.services.forms import FormValidationError, require_fields

logger = logging.getLogger(__name__)

# One submission per student per assignment; resubmitting overwrites it
SUBMISSION_CONFLICT_KEYS = "assignment_id,student_id"

SUBMITTED = "Submitted"
OVERDUE = "Overdue"
PENDING = "Pending"


def _utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _now(now: Optional[datetime]) -> datetime:
    return _utc(now) if now else datetime.now(timezone.utc)


def fetch_assignments(store: DataStore) -> List[Assignment]:
    rows = store.select("assignments", columns="*, courses(title)", order="due_date", ascending=True)
    return parse_rows("assignments", Assignment, rows)


def fetch_submissions(store: DataStore, with_students: bool = False) -> List[AssignmentSubmission]:
    columns = "*, profiles(full_name), assignments(title)" if with_students else "*, assignments(title)"
    rows = store.select("assignment_submissions", columns=columns, order="submitted_at", ascending=False)
    return parse_rows("assignment_submissions", AssignmentSubmission, rows)


def create_assignment(
    store: DataStore,
    course_id: str,
    title: str,
    description: str,
    due_date: datetime,
    max_points: int,
) -> None:
    require_fields(course=course_id, title=title, due_date=due_date, max_points=max_points)
    try:
        row = AssignmentCreate(
            course_id=course_id,
            title=title.strip(),
            description=(description or "").strip() or None,
            due_date=_utc(due_date),
            max_points=max_points,
        )
    except ValidationError:
        raise FormValidationError("Max points must be at least 1")

    store.insert("assignments", row.model_dump(mode="json"))
    logger.info(f"[ASSIGNMENTS] Assignment created for course {course_id}: {row.title}")


def submit_assignment(store: DataStore, student_id: str, assignment_id: str, content: str) -> None:
    require_fields(assignment=assignment_id, content=content)
    row = SubmissionCreate(student_id=student_id, assignment_id=assignment_id, content=content)
    store.upsert("assignment_submissions", row.model_dump(mode="json"), on_conflict=SUBMISSION_CONFLICT_KEYS)
    logger.info(f"[ASSIGNMENTS] Submission from {student_id} for assignment {assignment_id}")


def grade_submission(
    store: DataStore,
    submission_id: str,
    grade: int,
    feedback: Optional[str],
    now: Optional[datetime] = None,
) -> None:
    require_fields(grade=grade)
    try:
        patch = GradeUpdate(grade=grade, feedback=feedback or None, graded_at=_now(now))
    except ValidationError:
        raise FormValidationError("Grade must be between 0 and 100")

    store.update("assignment_submissions", submission_id, patch.model_dump(mode="json"))
    logger.info(f"[ASSIGNMENTS] Submission {submission_id} graded: {grade}")


def has_submitted(assignment: Assignment, submissions: List[AssignmentSubmission]) -> bool:
    return any(s.assignment_id == assignment.id for s in submissions)


def assignment_status(
    assignment: Assignment,
    submissions: List[AssignmentSubmission],
    now: Optional[datetime] = None,
) -> str:
    if has_submitted(assignment, submissions):
        return SUBMITTED
    if _utc(assignment.due_date) < _now(now):
        return OVERDUE
    return PENDING


def upcoming_count(assignments: List[Assignment], now: Optional[datetime] = None) -> int:
    current = _now(now)
    return sum(1 for a in assignments if _utc(a.due_date) > current)
