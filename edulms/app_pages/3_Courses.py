import streamlit as st

from edulms.navigation import ROUTES
from edulms.services.courses import Catalog, fetch_catalog, filter_courses, video_count
from edulms.views import enter_page, get_data_store, invalidate, load_page_data

enter_page("/courses")

# ---------------------------------------------------------
# DATA
# ---------------------------------------------------------
catalog = load_page_data(
    "/courses",
    lambda: fetch_catalog(get_data_store()),
    "Failed to load courses",
) or Catalog(courses=[], videos=[])

# ---------------------------------------------------------
# HEADER
# ---------------------------------------------------------
st.title("Explore Our Courses")
st.caption("Discover a wide range of courses designed to help you learn and grow in your field of interest.")

search_col, refresh_col = st.columns([5, 1])
with search_col:
    search_term = st.text_input(
        "Search",
        placeholder="Search courses...",
        label_visibility="collapsed",
        key="course_search",
    )
with refresh_col:
    if st.button("🔄 Refresh", use_container_width=True):
        invalidate("/courses")
        st.rerun()

# ---------------------------------------------------------
# STATS
# ---------------------------------------------------------
m1, m2, m3 = st.columns(3)
m1.metric("Total Courses", len(catalog.courses))
m2.metric("Video Lessons", len(catalog.videos))
m3.metric("Active Learners", "2,500+")

st.divider()

# ---------------------------------------------------------
# COURSE GRID
# ---------------------------------------------------------
filtered = filter_courses(catalog.courses, search_term)

if not filtered:
    st.markdown("### No Courses Found")
    if search_term:
        st.caption(f'No courses match your search for "{search_term}"')
    else:
        st.caption("No courses available at the moment")
else:
    for row_start in range(0, len(filtered), 3):
        cols = st.columns(3)
        for col, course in zip(cols, filtered[row_start:row_start + 3]):
            with col:
                with st.container(border=True):
                    if course.thumbnail_url:
                        st.image(course.thumbnail_url, use_container_width=True)
                    st.markdown(f"#### {course.title}")
                    st.caption(course.description or "No description available")
                    st.markdown(f"🎬 {video_count(catalog.videos, course.id)} videos · ⏱ Self-paced · 👥 Open enrollment")
                    st.page_link(ROUTES["/dashboard"]["file"], label="Enroll Now", icon="➡️")

st.divider()
st.markdown("### Ready to Start Learning?")
st.caption("Join our learning community and access all courses with personalized progress tracking.")
st.page_link(ROUTES["/auth"]["file"], label="Create Account", icon="📝")
