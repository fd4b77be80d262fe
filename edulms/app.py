import streamlit as st

from edulms import config
from edulms.navigation import get_pages, setup_navigation
from edulms.views import apply_navigation, get_navbar, get_session_store, render_navbar

st.set_page_config(page_title=config.APP_TITLE, page_icon="🎓", layout="wide")
config.configure_logging()

# Register every route so st.switch_page can reach any of them
pg = setup_navigation(get_pages())

# The navbar follows the session on its own subscription
navbar = get_navbar()

# Deliver auth events queued since the last run (sign-in, sign-out, token refresh)
get_session_store().dispatch_pending()
apply_navigation()

render_navbar(navbar)

pg.run()
