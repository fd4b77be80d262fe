import logging
from typing import List

from edulms.api import DataStore, parse_rows
from edulms.schemas.note import Note, NoteCreate
from edulms.services.forms import require_fields

logger = logging.getLogger(__name__)


def fetch_notes(store: DataStore, with_authors: bool = False) -> List[Note]:
    columns = "*, profiles(full_name), courses(title)" if with_authors else "*, courses(title)"
    rows = store.select("notes", columns=columns, order="created_at", ascending=False)
    return parse_rows("notes", Note, rows)


def submit_note(store: DataStore, student_id: str, course_id: str, title: str, content: str) -> None:
    require_fields(course=course_id, title=title, content=content)
    row = NoteCreate(
        student_id=student_id,
        course_id=course_id,
        title=title.strip(),
        content=content,
    )
    store.insert("notes", row.model_dump(mode="json"))
    logger.info(f"[NOTES] Note submitted by {student_id} for course {course_id}")
