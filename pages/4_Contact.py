"""Contact — firm details and an enquiry form."""

import logging

import streamlit as st

from config import FIRM_EMAIL, FIRM_LLPIN, FIRM_LOCATION, FIRM_NAME
import ui_theme

logger = logging.getLogger(__name__)

ui_theme.setup_page("Contact")
ui_theme.page_header("Contact Us", "Questions about Wolfcrux? Interested in partnering with us?")

info_col, form_col = st.columns([1, 2])

with info_col:
    ui_theme.section_header("Reach us")
    st.markdown(f"**{FIRM_NAME}**")
    st.markdown(f"LLPIN: {FIRM_LLPIN}")
    st.markdown(f"📍 {FIRM_LOCATION}")
    st.markdown(f"✉️ [{FIRM_EMAIL}](mailto:{FIRM_EMAIL})")

with form_col:
    ui_theme.section_header("Send a message")
    with st.form("contact_form", clear_on_submit=True):
        name = st.text_input("Name")
        email = st.text_input("Email")
        subject = st.text_input("Subject")
        message = st.text_area("Message", height=150)
        submitted = st.form_submit_button("Send", use_container_width=True)

    if submitted:
        if not name.strip() or not email.strip() or not message.strip():
            st.error("Name, email and message are required.")
        elif "@" not in email:
            st.error("Please enter a valid email address.")
        else:
            logger.info("Contact enquiry from %s: %s", email.strip(), subject.strip() or "(no subject)")
            st.toast("Thank you for reaching out. We'll get back to you soon.")

ui_theme.firm_footer()
