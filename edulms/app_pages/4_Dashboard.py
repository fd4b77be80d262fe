import streamlit as st

from edulms.api import DataStoreError
from edulms.services.assignments import (
    OVERDUE,
    SUBMITTED,
    assignment_status,
    submit_assignment,
)
from edulms.services.dashboard import StudentDashboard, load_student_dashboard
from edulms.services.forms import FormValidationError
from edulms.services.notes import submit_note
from edulms.views import get_data_store, guard_page, invalidate, load_page_data, notify_error, notify_success

ROUTE = "/dashboard"

gate = guard_page(ROUTE)
student_id = gate.identity.id
store = get_data_store()

data = load_page_data(
    ROUTE,
    lambda: load_student_dashboard(store),
    "Failed to load dashboard data",
) or StudentDashboard(courses=[], notes=[], assignments=[], submissions=[])


def _submitted(message: str) -> None:
    notify_success(message)
    invalidate(ROUTE)
    st.rerun()


# ---------------------------------------------------------
# HEADER & STATS
# ---------------------------------------------------------
st.title("Student Dashboard")
st.caption("Manage your courses, notes, and assignments")

for col, card in zip(st.columns(4), data.stats()):
    col.metric(f"{card.icon} {card.title}", card.value)

st.divider()

main_col, side_col = st.columns([2, 1])

# ---------------------------------------------------------
# MAIN CONTENT
# ---------------------------------------------------------
with main_col:
    courses_tab, assignments_tab, notes_tab = st.tabs(["Courses", "Assignments", "My Notes"])

    with courses_tab:
        st.subheader("Available Courses")
        if not data.courses:
            st.caption("No courses available at the moment")
        for course in data.courses:
            with st.container(border=True):
                st.markdown(f"#### 🎬 {course.title}")
                st.caption(course.description or "")

    with assignments_tab:
        st.subheader("Assignments")
        if not data.assignments:
            st.caption("No assignments yet")
        for assignment in data.assignments:
            status = assignment_status(assignment, data.submissions)
            badge = {SUBMITTED: "🟢", OVERDUE: "🔴"}.get(status, "🟡")

            with st.container(border=True):
                title_col, status_col = st.columns([3, 1])
                with title_col:
                    st.markdown(f"#### 📄 {assignment.title}")
                    st.caption(assignment.description or "")
                with status_col:
                    st.markdown(f"{badge} **{status}**")
                    st.caption(f"Due: {assignment.due_date:%Y-%m-%d}")
                st.caption(f"Max Points: {assignment.max_points}")

                if status != SUBMITTED:
                    with st.expander("Submit Assignment"):
                        with st.form(f"submit_assignment_{assignment.id}", clear_on_submit=True):
                            content = st.text_area(
                                "Your Submission",
                                placeholder="Enter your assignment content here...",
                            )
                            if st.form_submit_button("Submit Assignment", use_container_width=True):
                                try:
                                    submit_assignment(store, student_id, assignment.id, content)
                                except FormValidationError as e:
                                    st.error(str(e))
                                except DataStoreError:
                                    notify_error("Failed to submit assignment")
                                else:
                                    _submitted("Assignment submitted successfully!")

    with notes_tab:
        st.subheader("My Notes")
        if not data.notes:
            st.caption("You have not written any notes yet")
        for note in data.notes:
            with st.container(border=True):
                st.markdown(f"#### 📝 {note.title}")
                if note.created_at:
                    st.caption(f"Created: {note.created_at:%Y-%m-%d}")
                st.write(note.content)

# ---------------------------------------------------------
# SIDEBAR COLUMN
# ---------------------------------------------------------
with side_col:
    with st.container(border=True):
        st.markdown("#### ⬆️ Submit Note")
        course_titles = {course.id: course.title for course in data.courses}
        with st.form("submit_note", clear_on_submit=True):
            course_id = st.selectbox(
                "Course",
                options=list(course_titles),
                format_func=lambda cid: course_titles[cid],
                index=None,
                placeholder="Select a course",
            )
            title = st.text_input("Title", placeholder="Note title")
            content = st.text_area("Content", placeholder="Write your notes here...")
            if st.form_submit_button("Submit Note", use_container_width=True):
                try:
                    submit_note(store, student_id, course_id, title, content)
                except FormValidationError as e:
                    st.error(str(e))
                except DataStoreError:
                    notify_error("Failed to submit note")
                else:
                    _submitted("Note submitted successfully!")

    with st.container(border=True):
        st.markdown("#### Recent Submissions")
        if not data.submissions:
            st.caption("No submissions yet")
        for submission in data.submissions[:5]:
            left, right = st.columns([3, 1])
            with left:
                st.markdown(f"**{submission.assignment_title or 'Assignment Submitted'}**")
                if submission.submitted_at:
                    st.caption(f"{submission.submitted_at:%Y-%m-%d}")
            with right:
                if submission.is_graded:
                    st.markdown(f"`{submission.grade}%`")
