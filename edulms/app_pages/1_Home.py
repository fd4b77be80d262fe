import streamlit as st

from edulms import config
from edulms.navigation import ROUTES
from edulms.views import enter_page

enter_page("/")

FEATURES = [
    ("🎬", "Interactive Video Lessons", "High-quality video content with interactive elements and progress tracking."),
    ("📄", "Assignment Management", "Submit, track, and receive feedback on assignments with integrated grading."),
    ("📘", "Digital Note Taking", "Organize and share notes with classmates and instructors seamlessly."),
    ("👥", "Collaborative Learning", "Connect with peers and instructors in a supportive learning environment."),
    ("🏆", "Progress Tracking", "Monitor your learning progress with detailed analytics and achievements."),
    ("⏰", "Flexible Schedule", "Learn at your own pace with 24/7 access to course materials and resources."),
]

# --- CUSTOM CSS ---
st.markdown("""
    <style>
    .hero {
        text-align: center;
        padding: 48px 12px 24px 12px;
    }
    .hero h1 {
        font-size: 52px;
        font-weight: 800;
        margin-bottom: 8px;
    }
    .hero p {
        font-size: 20px;
        color: #94a3b8;
        max-width: 760px;
        margin: 0 auto;
    }
    .feature-card {
        padding: 20px;
        background-color: rgba(255, 255, 255, 0.04);
        border: 1px solid rgba(255, 255, 255, 0.08);
        border-radius: 12px;
        margin-bottom: 20px;
        min-height: 150px;
    }
    .feature-title {
        font-size: 18px;
        font-weight: 600;
        margin: 8px 0 6px 0;
    }
    .feature-text {
        font-size: 14px;
        color: #cbd5e1;
        margin: 0;
    }
    </style>
""", unsafe_allow_html=True)

# ---------------------------------------------------------
# HERO
# ---------------------------------------------------------
st.markdown(
    f"""
    <div class="hero">
        <span>🎓 Transform Your Learning Journey</span>
        <h1>Learn. Create. Excel.</h1>
        <p>Join {config.APP_TITLE}, where students submit assignments and notes while
        instructors create engaging video content.</p>
    </div>
    """,
    unsafe_allow_html=True,
)

c1, c2, c3, c4 = st.columns([2, 1.2, 1.2, 2])
with c2:
    st.page_link(ROUTES["/auth"]["file"], label="Start Learning Today", icon="🎓")
with c3:
    st.page_link(ROUTES["/courses"]["file"], label="Browse Courses", icon="📚")

st.divider()

# ---------------------------------------------------------
# FEATURES
# ---------------------------------------------------------
st.subheader("Everything You Need to Succeed")

for row_start in range(0, len(FEATURES), 3):
    cols = st.columns(3)
    for col, (icon, title, text) in zip(cols, FEATURES[row_start:row_start + 3]):
        with col:
            st.markdown(
                f"""
                <div class="feature-card">
                    <div style="font-size: 28px;">{icon}</div>
                    <p class="feature-title">{title}</p>
                    <p class="feature-text">{text}</p>
                </div>
                """,
                unsafe_allow_html=True,
            )

# ---------------------------------------------------------
# CALL TO ACTION
# ---------------------------------------------------------
st.divider()
st.markdown("### Ready to Start Your Learning Journey?")
st.caption(f"Join the students and educators already using {config.APP_TITLE} to reach their goals.")
cta1, cta2, _ = st.columns([1, 1, 3])
with cta1:
    st.page_link(ROUTES["/auth"]["file"], label="Get Started Free")
with cta2:
    st.page_link(ROUTES["/courses"]["file"], label="Explore Courses")
