import streamlit as st

from edulms.api import DataStoreError
from edulms.schemas.user import Profile
from edulms.services.forms import FormValidationError
from edulms.services.profile import save_profile_details
from edulms.views import (
    GATE_PREFIX,
    NAVBAR_KEY,
    get_data_store,
    get_navbar,
    guard_page,
    notify_error,
    notify_success,
    unmount,
)

gate = guard_page("/profile")

st.title("My Profile")

profile = gate.profile
if not isinstance(profile, Profile):
    st.info("Your profile has not been set up yet. Please contact an administrator.")
    st.caption(f"Signed in as {gate.identity.email}")
    st.stop()

info_col, form_col = st.columns([1, 2])

with info_col:
    if profile.avatar_url:
        st.image(profile.avatar_url, width=120)
    st.markdown(f"### {profile.display_name}")
    st.caption(gate.identity.email or "")
    st.markdown(f"Role: `{profile.role.value}`")

with form_col:
    with st.form("profile_form"):
        full_name = st.text_input("Full Name", value=profile.full_name or "")
        avatar_url = st.text_input("Avatar URL", value=profile.avatar_url or "", placeholder="https://...")
        if st.form_submit_button("Save Changes"):
            try:
                save_profile_details(get_data_store(), profile, full_name, avatar_url)
            except FormValidationError as e:
                st.error(str(e))
            except DataStoreError:
                notify_error("Failed to update profile")
            else:
                notify_success("Profile updated successfully!")
                # Profile content changes raise no session event; remount so both views refetch
                unmount(GATE_PREFIX + "/profile")
                unmount(NAVBAR_KEY)
                get_navbar()
                st.rerun()
