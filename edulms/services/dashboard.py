"""
Page-level loaders. Each page refetches its whole dataset after every mutation;
nothing is shared between pages.
"""
from datetime import datetime
from typing import List, NamedTuple, Optional

from edulms.api import DataStore
from edulms.schemas.assignment import Assignment, AssignmentSubmission
from edulms.schemas.course import Course, Video
from edulms.schemas.note import Note
from edulms.services.assignments import fetch_assignments, fetch_submissions, upcoming_count
from edulms.services.courses import fetch_courses, fetch_videos
from edulms.services.notes import fetch_notes


class StatCard(NamedTuple):
    title: str
    value: int
    icon: str


class StudentDashboard(NamedTuple):
    courses: List[Course]
    notes: List[Note]
    assignments: List[Assignment]
    submissions: List[AssignmentSubmission]

    def stats(self, now: Optional[datetime] = None) -> List[StatCard]:
        return [
            StatCard("Enrolled Courses", len(self.courses), "📘"),
            StatCard("Notes Created", len(self.notes), "📝"),
            StatCard("Assignments Due", upcoming_count(self.assignments, now), "⏰"),
            StatCard("Completed", len(self.submissions), "✅"),
        ]


class AdminDashboard(NamedTuple):
    courses: List[Course]
    videos: List[Video]
    notes: List[Note]
    assignments: List[Assignment]
    submissions: List[AssignmentSubmission]

    def stats(self) -> List[StatCard]:
        return [
            StatCard("Total Courses", len(self.courses), "📚"),
            StatCard("Videos Uploaded", len(self.videos), "🎬"),
            StatCard("Student Notes", len(self.notes), "📝"),
            StatCard("Submissions", len(self.submissions), "📈"),
        ]

    @property
    def pending_review(self) -> List[AssignmentSubmission]:
        return [s for s in self.submissions if not s.is_graded]


def load_student_dashboard(store: DataStore) -> StudentDashboard:
    return StudentDashboard(
        courses=fetch_courses(store),
        notes=fetch_notes(store),
        assignments=fetch_assignments(store),
        submissions=fetch_submissions(store),
    )


def load_admin_dashboard(store: DataStore) -> AdminDashboard:
    return AdminDashboard(
        courses=fetch_courses(store),
        videos=fetch_videos(store, with_courses=True),
        notes=fetch_notes(store, with_authors=True),
        assignments=fetch_assignments(store),
        submissions=fetch_submissions(store, with_students=True),
    )
