"""
Navigation module: route table, deferred route changes and the identity-aware navbar
"""
import logging
from typing import List, NamedTuple, Optional

import streamlit as st

from edulms.profiles import ProfileResolver, SessionView
from edulms.schemas.user import Profile, Role, role_of
from edulms.session_store import SessionStore

logger = logging.getLogger(__name__)

# Route definitions - mapping app routes to page scripts
ROUTES = {
    "/": {
        "file": "app_pages/1_Home.py",
        "label": "Home",
        "icon": "🎓",
        "url_path": "",
    },
    "/auth": {
        "file": "app_pages/2_Auth.py",
        "label": "Sign In",
        "icon": "🔐",
        "url_path": "auth",
    },
    "/courses": {
        "file": "app_pages/3_Courses.py",
        "label": "Courses",
        "icon": "📚",
        "url_path": "courses",
    },
    "/dashboard": {
        "file": "app_pages/4_Dashboard.py",
        "label": "My Learning",
        "icon": "📖",
        "url_path": "dashboard",
    },
    "/admin": {
        "file": "app_pages/5_Admin.py",
        "label": "Admin Panel",
        "icon": "⚙️",
        "url_path": "admin",
    },
    "/profile": {
        "file": "app_pages/6_Profile.py",
        "label": "Profile",
        "icon": "👤",
        "url_path": "profile",
    },
}


class Navigator:
    """
    Holds a requested route change until the script can act on it.

    st.switch_page stops the current script run, so it must not be called
    while the Session Store is still delivering a notification to other views.
    """

    def __init__(self):
        self.pending: Optional[str] = None

    def request(self, route: str) -> None:
        if route not in ROUTES:
            raise ValueError(f"Unknown route: {route}")
        logger.info(f"[NAV] Navigation requested to {route}")
        self.pending = route

    def take(self) -> Optional[str]:
        route, self.pending = self.pending, None
        return route


def get_pages() -> dict:
    """
    Build one st.Page per route, keyed by route. "/" is the default page.
    """
    pages = {}
    for route, page_config in ROUTES.items():
        if route == "/":
            page = st.Page(
                page_config["file"],
                title=page_config["label"],
                icon=page_config["icon"],
                default=True,
            )
        else:
            page = st.Page(
                page_config["file"],
                title=page_config["label"],
                icon=page_config["icon"],
                url_path=page_config["url_path"],
            )
        pages[route] = page
    return pages


def setup_navigation(pages: dict):
    """
    Register every route with st.navigation. The menu itself is drawn by the
    NavBar, so Streamlit's own page list is hidden.
    """
    return st.navigation(list(pages.values()), position="hidden")


class NavItem(NamedTuple):
    label: str
    route: str


class NavBar(SessionView):
    """
    Identity-aware menu. Follows the Session Store on its own subscription and
    never takes part in page admission.
    """

    name = "nav"

    def __init__(self, resolver: ProfileResolver, navigator: Navigator):
        super().__init__(resolver)
        self._navigator = navigator

    @property
    def signed_in(self) -> bool:
        return self.identity is not None

    @property
    def is_admin(self) -> bool:
        return role_of(self.profile) is Role.ADMIN

    def primary_items(self) -> List[NavItem]:
        items = [NavItem("Courses", "/courses")]
        if self.signed_in:
            if self.is_admin:
                items.append(NavItem("Admin Panel", "/admin"))
            else:
                items.append(NavItem("My Learning", "/dashboard"))
        return items

    def account_items(self) -> List[NavItem]:
        if not self.signed_in:
            return [NavItem("Sign In", "/auth"), NavItem("Get Started", "/auth")]
        return [
            NavItem("Profile", "/profile"),
            NavItem("Admin Panel", "/admin") if self.is_admin else NavItem("Dashboard", "/dashboard"),
        ]

    @property
    def display_name(self) -> str:
        if isinstance(self.profile, Profile):
            return self.profile.display_name
        return "Student"

    @property
    def email(self) -> Optional[str]:
        return self.identity.email if self.identity else None

    @property
    def avatar_initial(self) -> str:
        if isinstance(self.profile, Profile) and self.profile.initial:
            return self.profile.initial
        if self.email:
            return self.email[0].upper()
        return "?"

    @property
    def role_badge(self) -> Optional[str]:
        role = role_of(self.profile)
        return role.value if role else None

    def sign_out(self, store: SessionStore) -> None:
        store.sign_out()
        self._navigator.request("/")
