from datetime import date, datetime, time, timedelta

import pandas as pd
import streamlit as st

from edulms.api import DataStoreError
from edulms.services.assignments import create_assignment, grade_submission
from edulms.services.courses import add_video, create_course
from edulms.services.dashboard import AdminDashboard, load_admin_dashboard
from edulms.services.forms import FormValidationError
from edulms.views import get_data_store, guard_page, invalidate, load_page_data, notify_error, notify_success

ROUTE = "/admin"

gate = guard_page(ROUTE)
admin_id = gate.identity.id
store = get_data_store()

data = load_page_data(
    ROUTE,
    lambda: load_admin_dashboard(store),
    "Failed to load admin data",
) or AdminDashboard(courses=[], videos=[], notes=[], assignments=[], submissions=[])

course_titles = {course.id: course.title for course in data.courses}


def _saved(message: str) -> None:
    notify_success(message)
    invalidate(ROUTE)
    st.rerun()


def _run(action, success_message: str, failure_message: str) -> None:
    try:
        action()
    except FormValidationError as e:
        st.error(str(e))
    except DataStoreError:
        notify_error(failure_message)
    else:
        _saved(success_message)


def _course_select(key: str):
    return st.selectbox(
        "Course",
        options=list(course_titles),
        format_func=lambda cid: course_titles[cid],
        index=None,
        placeholder="Select course",
        key=key,
    )


# ---------------------------------------------------------
# HEADER & STATS
# ---------------------------------------------------------
st.title("Admin Dashboard")
st.caption("Manage courses, videos, and student submissions")

for col, card in zip(st.columns(4), data.stats()):
    col.metric(f"{card.icon} {card.title}", card.value)

st.divider()

main_col, side_col = st.columns([3, 1])

# ---------------------------------------------------------
# MAIN CONTENT
# ---------------------------------------------------------
with main_col:
    courses_tab, videos_tab, notes_tab, submissions_tab = st.tabs(
        ["Courses", "Videos", "Student Notes", "Submissions"]
    )

    with courses_tab:
        st.subheader("Manage Courses")
        if not data.courses:
            st.caption("No courses yet. Create one from the panel on the right.")
        for course in data.courses:
            with st.container(border=True):
                st.markdown(f"#### {course.title}")
                st.caption(course.description or "")

    with videos_tab:
        st.subheader("Course Videos")
        if not data.videos:
            st.caption("No videos uploaded yet")
        for video in data.videos:
            with st.container(border=True):
                st.markdown(f"#### 🎬 {video.title}")
                st.caption(video.description or "")
                st.caption(f"Course: {video.course_title or '-'}")
                if video.video_url:
                    st.link_button("Watch", video.video_url)

    with notes_tab:
        st.subheader("Student Notes")
        if not data.notes:
            st.caption("No student notes yet")
        for note in data.notes:
            with st.container(border=True):
                st.markdown(f"#### 📝 {note.title}")
                st.caption(f"By: {note.author_name or '-'} • Course: {note.course_title or '-'}")
                st.write(note.content)
                if note.created_at:
                    st.caption(f"Created: {note.created_at:%Y-%m-%d}")

    with submissions_tab:
        st.subheader("Assignment Submissions")

        if data.submissions:
            df = pd.DataFrame([
                {
                    "Assignment": s.assignment_title,
                    "Student": s.student_name,
                    "Submitted": s.submitted_at,
                    "Grade": s.grade,
                    "Status": "Graded" if s.is_graded else "Pending Review",
                }
                for s in data.submissions
            ])
            st.dataframe(df, use_container_width=True, hide_index=True)
        else:
            st.caption("No submissions yet")

        for submission in data.pending_review:
            with st.container(border=True):
                st.markdown(f"#### 📄 {submission.assignment_title or 'Assignment'}")
                st.caption(f"Student: {submission.student_name or '-'}")
                st.write(submission.content or "")

                with st.expander("Grade Assignment"):
                    with st.form(f"grade_{submission.id}"):
                        grade = st.number_input("Grade (%)", min_value=0, max_value=100, step=1, value=None)
                        feedback = st.text_area("Feedback", placeholder="Provide feedback to the student...")
                        if st.form_submit_button("Assign Grade", use_container_width=True):
                            _run(
                                lambda: grade_submission(
                                    store,
                                    submission.id,
                                    int(grade) if grade is not None else None,
                                    feedback,
                                ),
                                "Grade assigned successfully!",
                                "Failed to assign grade",
                            )

# ---------------------------------------------------------
# QUICK ACTIONS
# ---------------------------------------------------------
with side_col:
    with st.container(border=True):
        st.markdown("#### ➕ Create Course")
        with st.form("create_course", clear_on_submit=True):
            title = st.text_input("Course Title", placeholder="Enter course title")
            description = st.text_area("Description", placeholder="Course description")
            if st.form_submit_button("Create Course", use_container_width=True):
                _run(
                    lambda: create_course(store, admin_id, title, description),
                    "Course created successfully!",
                    "Failed to create course",
                )

    with st.container(border=True):
        st.markdown("#### ⬆️ Upload Video")
        with st.form("upload_video", clear_on_submit=True):
            course_id = _course_select("video_course")
            title = st.text_input("Video Title", placeholder="Enter video title")
            description = st.text_area("Description", placeholder="Video description")
            video_url = st.text_input("Video URL", placeholder="https://...")
            if st.form_submit_button("Upload Video", use_container_width=True):
                _run(
                    lambda: add_video(store, course_id, title, description, video_url),
                    "Video uploaded successfully!",
                    "Failed to upload video",
                )

    with st.container(border=True):
        st.markdown("#### 📅 Create Assignment")
        with st.form("create_assignment", clear_on_submit=True):
            course_id = _course_select("assignment_course")
            title = st.text_input("Assignment Title", placeholder="Enter assignment title")
            description = st.text_area("Description", placeholder="Assignment description")
            due_day = st.date_input("Due Date", value=date.today() + timedelta(days=7))
            due_time = st.time_input("Due Time", value=time(23, 59))
            max_points = st.number_input("Max Points", min_value=1, value=100, step=1)
            if st.form_submit_button("Create Assignment", use_container_width=True):
                _run(
                    lambda: create_assignment(
                        store,
                        course_id,
                        title,
                        description,
                        datetime.combine(due_day, due_time),
                        int(max_points),
                    ),
                    "Assignment created successfully!",
                    "Failed to create assignment",
                )
