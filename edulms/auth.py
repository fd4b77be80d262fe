import logging

import streamlit as st

from edulms import config
from edulms.session_store import SessionStatus
from edulms.views import get_navbar, get_navigator, get_session_store, get_supabase

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


def _after_sign_in() -> None:
    # Deliver SIGNED_IN now so the navbar has resolved the profile before routing
    get_session_store().dispatch_pending()
    navbar = get_navbar()
    get_navigator().request("/admin" if navbar.is_admin else "/dashboard")


def _login_error_message(error_msg: str) -> str:
    if "Invalid login credentials" in error_msg or "invalid" in error_msg.lower():
        return "❌ Invalid email or password. Please check your credentials."
    if "Email not confirmed" in error_msg:
        return "❌ Please verify your email address before logging in. Check your inbox for the confirmation email."
    if "Too many requests" in error_msg:
        return "❌ Too many login attempts. Please wait a few minutes and try again."
    return f"Login error: {error_msg}"


def _signup_error_message(error_msg: str) -> str:
    if "User already registered" in error_msg or "already exists" in error_msg.lower():
        return "❌ An account with this email already exists. Please use the 'Sign In' tab instead."
    if "Password should be at least" in error_msg:
        return f"❌ {error_msg}"
    if "Invalid email" in error_msg:
        return "❌ Please enter a valid email address."
    return f"Sign up error: {error_msg}"


def login_form() -> None:
    st.markdown("### Sign in to your account")

    with st.form("login_form"):
        email = st.text_input("Email", key="login_email")
        password = st.text_input("Password", type="password", key="login_password")
        submitted = st.form_submit_button("Sign In", use_container_width=True)

    if not submitted:
        return

    if not email or not password:
        st.error("Please enter both email and password")
        return

    supabase = get_supabase()
    try:
        res = supabase.auth.sign_in_with_password({
            "email": email,
            "password": password,
        })
    except Exception as e:
        logger.info(f"[AUTH] Sign-in failed for {email}: {e}")
        st.error(_login_error_message(str(e)))
        return

    if not res.session:
        st.error("Sign in failed: no session returned")
        return

    logger.info(f"[AUTH] Signed in: {email}")
    st.success("✅ Logged in successfully")
    _after_sign_in()


def signup_form() -> None:
    st.markdown("### Create New Account")

    with st.form("signup_form"):
        full_name = st.text_input("Full Name", key="signup_name")
        email = st.text_input("Email", key="signup_email")
        password = st.text_input("Password", type="password", key="signup_password")
        confirm_password = st.text_input("Confirm Password", type="password", key="signup_confirm_password")
        submitted = st.form_submit_button("Get Started", use_container_width=True)

    if not submitted:
        return

    if not email or not password:
        st.error("Please enter both email and password")
        return

    if password != confirm_password:
        st.error("❌ Passwords do not match. Please try again.")
        return

    if len(password) < MIN_PASSWORD_LENGTH:
        st.error(f"❌ Password must be at least {MIN_PASSWORD_LENGTH} characters long.")
        return

    signup_data = {
        "email": email,
        "password": password,
        "options": {
            "email_redirect_to": config.SUPABASE_REDIRECT_URL,
            # The profiles row (role defaults to student) is created from this metadata by the backend
            "data": {"full_name": full_name or email.split("@")[0]},
        },
    }

    supabase = get_supabase()
    try:
        res = supabase.auth.sign_up(signup_data)
    except Exception as e:
        logger.info(f"[AUTH] Sign-up failed for {email}: {e}")
        st.error(_signup_error_message(str(e)))
        return

    if not res.user:
        st.error("Sign up failed: No user created")
        return

    if res.session:
        # Email confirmation not required - auto login
        st.success("✅ Account created successfully! Logged in.")
        _after_sign_in()
    else:
        st.success("✅ Account created successfully!")
        st.info("📧 **Please check your email to verify your account before signing in.**")


def login_ui() -> None:
    st.title(f"Welcome to {config.APP_TITLE}")

    store = get_session_store()
    if store.status is SessionStatus.UNAVAILABLE:
        st.warning("⚠️ The authentication service could not be reached. You may already be signed in; try again shortly.")

    tab1, tab2 = st.tabs(["🔐 Sign In", "📝 Sign Up"])

    with tab1:
        login_form()

    with tab2:
        signup_form()
