"""Account Settings — display name and password."""

import streamlit as st

from auth import change_password, require_auth
from backoffice.accounts import rename_profile
from db import init_db
import ui_theme

ui_theme.setup_page("Account Settings", "🔐")
init_db()
user = require_auth()

ui_theme.page_header("Account Settings", user["email"])

ui_theme.section_header("Profile")
with st.form("profile_form"):
    full_name = st.text_input("Full name", value=user["full_name"])
    saved = st.form_submit_button("Save")
if saved:
    try:
        rename_profile(user["id"], full_name)
        st.session_state["user"] = {**user, "full_name": full_name.strip()}
        st.toast("Profile updated.")
        st.rerun()
    except ValueError as e:
        st.error(str(e))

ui_theme.section_header("Change Password")
with st.form("password_form", clear_on_submit=True):
    current = st.text_input("Current password", type="password")
    new = st.text_input("New password", type="password")
    confirm = st.text_input("Confirm new password", type="password")
    changed = st.form_submit_button("Update Password")
if changed:
    if new != confirm:
        st.error("New passwords do not match.")
    else:
        try:
            change_password(user["id"], current, new)
            st.success("Password updated.")
        except ValueError as e:
            st.error(str(e))
