import logging
from typing import List, NamedTuple

from edulms.api import DataStore, parse_rows
from edulms.schemas.course import Course, CourseCreate, Video, VideoCreate
from edulms.services.forms import require_fields, require_url

logger = logging.getLogger(__name__)


class Catalog(NamedTuple):
    courses: List[Course]
    videos: List[Video]


def fetch_courses(store: DataStore) -> List[Course]:
    rows = store.select("courses", order="created_at", ascending=False)
    return parse_rows("courses", Course, rows)


def fetch_videos(store: DataStore, with_courses: bool = False) -> List[Video]:
    if with_courses:
        rows = store.select("videos", columns="*, courses(title)", order="created_at", ascending=False)
    else:
        rows = store.select("videos", columns="id, title, course_id")
    return parse_rows("videos", Video, rows)


def fetch_catalog(store: DataStore) -> Catalog:
    return Catalog(courses=fetch_courses(store), videos=fetch_videos(store))


def filter_courses(courses: List[Course], term: str) -> List[Course]:
    """Case-insensitive match on title or description."""
    term = (term or "").strip().lower()
    if not term:
        return list(courses)
    return [
        course for course in courses
        if term in course.title.lower()
        or (course.description and term in course.description.lower())
    ]


def video_count(videos: List[Video], course_id: str) -> int:
    return sum(1 for video in videos if video.course_id == course_id)


def create_course(store: DataStore, instructor_id: str, title: str, description: str) -> None:
    require_fields(title=title, description=description)
    row = CourseCreate(
        instructor_id=instructor_id,
        title=title.strip(),
        description=description.strip(),
    )
    store.insert("courses", row.model_dump(mode="json"))
    logger.info(f"[COURSES] Course created by {instructor_id}: {row.title}")


def add_video(store: DataStore, course_id: str, title: str, description: str, video_url: str) -> None:
    """Attach a video link to a course. There is no upload; the URL is stored as pasted."""
    require_fields(course=course_id, title=title, video_url=video_url)
    require_url("Video URL", video_url)
    row = VideoCreate(
        course_id=course_id,
        title=title.strip(),
        description=(description or "").strip() or None,
        video_url=video_url.strip(),
    )
    store.insert("videos", row.model_dump(mode="json"))
    logger.info(f"[COURSES] Video added to course {course_id}: {row.title}")
