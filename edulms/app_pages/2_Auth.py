import streamlit as st

from edulms.auth import login_ui
from edulms.views import apply_navigation, enter_page, get_navbar, get_navigator

enter_page("/auth")

# Already signed in - nothing to do here
navbar = get_navbar()
if navbar.signed_in:
    get_navigator().request("/admin" if navbar.is_admin else "/dashboard")
    apply_navigation()
    st.stop()

login_ui()

# Sign-in above may have requested a route change
apply_navigation()
