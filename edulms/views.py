"""
Streamlit glue: per-browser-session singletons, scoped view mounting and
transient notifications.

Everything here lives in st.session_state, which Streamlit keeps per browser
session. Page scripts re-run top to bottom on every interaction; views mounted
here survive those re-runs until the user leaves the page.
"""
import logging
from typing import Callable, Optional, TypeVar

import streamlit as st

from edulms import config
from edulms.api import DataStore, DataStoreError
from edulms.navigation import ROUTES, NavBar, Navigator
from edulms.profiles import ProfileResolver, SessionView
from edulms.role_guard import POLICIES, AuthorizationGate, GateState
from edulms.schemas.user import Profile
from edulms.session_store import SessionStore
from edulms.supabase_client import create_supabase

logger = logging.getLogger(__name__)

T = TypeVar("T")

NAVBAR_KEY = "navbar"
GATE_PREFIX = "gate:"


# ---------------------------------------------------------
# PER-SESSION SINGLETONS
# ---------------------------------------------------------
def get_supabase():
    if "supabase" not in st.session_state:
        st.session_state["supabase"] = create_supabase()
    return st.session_state["supabase"]


def get_session_store() -> SessionStore:
    if "session_store" not in st.session_state:
        st.session_state["session_store"] = SessionStore(get_supabase().auth)
    return st.session_state["session_store"]


def get_data_store() -> DataStore:
    if "data_store" not in st.session_state:
        st.session_state["data_store"] = DataStore(get_supabase())
    return st.session_state["data_store"]


def get_resolver() -> ProfileResolver:
    return ProfileResolver(get_data_store())


def get_navigator() -> Navigator:
    if "navigator" not in st.session_state:
        st.session_state["navigator"] = Navigator()
    return st.session_state["navigator"]


# ---------------------------------------------------------
# SCOPED VIEWS
# ---------------------------------------------------------
def _mounted() -> dict:
    if "mounted_views" not in st.session_state:
        st.session_state["mounted_views"] = {}
    return st.session_state["mounted_views"]


def mount(key: str, factory: Callable[[], SessionView]) -> SessionView:
    views = _mounted()
    view = views.get(key)
    if view is None or view.closed:
        view = factory().attach(get_session_store())
        views[key] = view
        logger.info(f"[VIEWS] Mounted {key}")
    return view


def unmount(key: str) -> None:
    view = _mounted().pop(key, None)
    if view is not None:
        view.close()
        logger.info(f"[VIEWS] Unmounted {key}")


def get_navbar() -> NavBar:
    return mount(NAVBAR_KEY, lambda: NavBar(get_resolver(), get_navigator()))


def enter_page(route: str) -> None:
    """
    Release the gates of every other page and mark this page's data stale
    when the user has just arrived.
    """
    for key in list(_mounted()):
        if key.startswith(GATE_PREFIX) and key != GATE_PREFIX + route:
            unmount(key)

    if st.session_state.get("current_route") != route:
        st.session_state["current_route"] = route
        invalidate(route)


def apply_navigation() -> None:
    route = get_navigator().take()
    if route and route != st.session_state.get("current_route"):
        st.switch_page(ROUTES[route]["file"])


def dispatch_session_events() -> None:
    get_session_store().dispatch_pending()
    apply_navigation()


def guard_page(route: str) -> AuthorizationGate:
    """
    Call this at the top of every protected page.
    Returns the admitted gate; otherwise the script is redirected or stopped.
    """
    enter_page(route)
    gate = mount(
        GATE_PREFIX + route,
        lambda: AuthorizationGate(POLICIES[route], get_resolver(), get_navigator()),
    )
    dispatch_session_events()

    if gate.state is GateState.LOADING:
        st.info("🔄 Loading...")
        st.stop()
    if gate.state is GateState.REDIRECTING:
        st.switch_page(ROUTES[gate.redirect_to]["file"])

    if gate.fetch_error:
        notify_error("Could not load your profile")
    return gate


def _sign_out() -> None:
    get_navbar().sign_out(get_session_store())


def render_navbar(navbar: NavBar) -> None:
    with st.sidebar:
        st.markdown(f"## 🎓 {config.APP_TITLE}")
        st.page_link(ROUTES["/"]["file"], label="Home", icon=ROUTES["/"]["icon"])
        for item in navbar.primary_items():
            st.page_link(ROUTES[item.route]["file"], label=item.label, icon=ROUTES[item.route]["icon"])

        st.divider()

        if not navbar.signed_in:
            for item in navbar.account_items():
                st.page_link(ROUTES[item.route]["file"], label=item.label)
            return

        avatar_col, info_col = st.columns([1, 3])
        with avatar_col:
            avatar_url = navbar.profile.avatar_url if isinstance(navbar.profile, Profile) else None
            if avatar_url:
                st.image(avatar_url, width=40)
            else:
                st.markdown(f"### {navbar.avatar_initial}")
        with info_col:
            st.markdown(f"**{navbar.display_name}**")
            st.caption(navbar.email or "")
            if navbar.role_badge:
                st.caption(f"`{navbar.role_badge}`")

        for item in navbar.account_items():
            st.page_link(ROUTES[item.route]["file"], label=item.label, icon=ROUTES[item.route]["icon"])

        st.button("Sign Out", key="navbar_sign_out", on_click=_sign_out, use_container_width=True)


# ---------------------------------------------------------
# PAGE DATA
# ---------------------------------------------------------
def invalidate(key: str) -> None:
    st.session_state.setdefault("stale_data", set()).add(key)


def load_page_data(key: str, loader: Callable[[], T], error_message: str) -> Optional[T]:
    """
    Refetch when the key is stale, otherwise reuse the last result.
    A failed fetch keeps the last-known value and shows a transient notice.
    """
    cache_key = f"data:{key}"
    stale = st.session_state.setdefault("stale_data", set())

    if key not in stale and cache_key in st.session_state:
        return st.session_state[cache_key]

    try:
        data = loader()
    except DataStoreError as e:
        logger.warning(f"[VIEWS] Loading {key} failed: {e}")
        notify_error(error_message)
        return st.session_state.get(cache_key)

    st.session_state[cache_key] = data
    stale.discard(key)
    return data


# ---------------------------------------------------------
# NOTIFICATIONS
# ---------------------------------------------------------
def notify_success(message: str) -> None:
    st.toast(message, icon="✅")


def notify_error(message: str) -> None:
    st.toast(message, icon="❌")
