from pydantic import BaseModel
from typing import Optional
from datetime import datetime

from edulms.schemas.course import CourseRef


class AuthorRef(BaseModel):
    """Embedded `profiles(full_name)` expansion."""
    full_name: Optional[str] = None


class Note(BaseModel):
    id: str
    title: str
    content: str
    course_id: str
    student_id: Optional[str] = None
    created_at: Optional[datetime] = None
    courses: Optional[CourseRef] = None
    profiles: Optional[AuthorRef] = None

    @property
    def course_title(self) -> Optional[str]:
        return self.courses.title if self.courses else None

    @property
    def author_name(self) -> Optional[str]:
        return self.profiles.full_name if self.profiles else None


class NoteCreate(BaseModel):
    student_id: str
    course_id: str
    title: str
    content: str
