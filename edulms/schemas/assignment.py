from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from edulms.schemas.course import CourseRef
from edulms.schemas.note import AuthorRef


class AssignmentRef(BaseModel):
    """Embedded `assignments(title)` expansion."""
    title: Optional[str] = None


class Assignment(BaseModel):
    id: str
    title: str
    course_id: str
    due_date: datetime
    max_points: int
    description: Optional[str] = None
    courses: Optional[CourseRef] = None

    @property
    def course_title(self) -> Optional[str]:
        return self.courses.title if self.courses else None


class AssignmentCreate(BaseModel):
    course_id: str
    title: str
    description: Optional[str] = None
    due_date: datetime
    max_points: int = Field(ge=1)


class AssignmentSubmission(BaseModel):
    id: str
    assignment_id: str
    student_id: Optional[str] = None
    content: Optional[str] = None
    file_url: Optional[str] = None
    grade: Optional[int] = None
    feedback: Optional[str] = None
    submitted_at: Optional[datetime] = None
    graded_at: Optional[datetime] = None
    profiles: Optional[AuthorRef] = None
    assignments: Optional[AssignmentRef] = None

    @property
    def is_graded(self) -> bool:
        return self.grade is not None

    @property
    def assignment_title(self) -> Optional[str]:
        return self.assignments.title if self.assignments else None

    @property
    def student_name(self) -> Optional[str]:
        return self.profiles.full_name if self.profiles else None


class SubmissionCreate(BaseModel):
    student_id: str
    assignment_id: str
    content: str


class GradeUpdate(BaseModel):
    grade: int = Field(ge=0, le=100)
    feedback: Optional[str] = None
    graded_at: datetime
