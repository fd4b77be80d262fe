from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class CourseRef(BaseModel):
    """Embedded `courses(title)` expansion."""
    title: Optional[str] = None


class Course(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    instructor_id: Optional[str] = None
    thumbnail_url: Optional[str] = None
    created_at: Optional[datetime] = None


class CourseCreate(BaseModel):
    instructor_id: str
    title: str
    description: str


class Video(BaseModel):
    id: str
    title: str
    course_id: str
    description: Optional[str] = None
    video_url: Optional[str] = None
    created_at: Optional[datetime] = None
    courses: Optional[CourseRef] = None

    @property
    def course_title(self) -> Optional[str]:
        return self.courses.title if self.courses else None


class VideoCreate(BaseModel):
    course_id: str
    title: str
    description: Optional[str] = None
    video_url: str
