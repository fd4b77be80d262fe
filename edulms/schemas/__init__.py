from edulms.schemas.user import Identity, Profile, ProfileLookup, ProfileState, Role, role_of
from edulms.schemas.course import Course, CourseCreate, CourseRef, Video, VideoCreate
from edulms.schemas.note import AuthorRef, Note, NoteCreate
from edulms.schemas.assignment import (
    Assignment,
    AssignmentCreate,
    AssignmentRef,
    AssignmentSubmission,
    GradeUpdate,
    SubmissionCreate,
)

__all__ = [
    "Identity",
    "Profile",
    "ProfileLookup",
    "ProfileState",
    "Role",
    "role_of",
    "Course",
    "CourseCreate",
    "CourseRef",
    "Video",
    "VideoCreate",
    "AuthorRef",
    "Note",
    "NoteCreate",
    "Assignment",
    "AssignmentCreate",
    "AssignmentRef",
    "AssignmentSubmission",
    "GradeUpdate",
    "SubmissionCreate",
]
