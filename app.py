"""Wolfcrux Global Markets — landing page and employee portal entry point."""

from __future__ import annotations

import streamlit as st

from auth import get_current_user, is_admin, render_sidebar_user_info
from config import FIRM_NAME
from db import init_db
import ui_theme

ui_theme.setup_page("Home")
init_db()

user = get_current_user()
if user:
    render_sidebar_user_info()

ui_theme.page_header(
    FIRM_NAME,
    "Proprietary US equity trading, built on technology, data and discipline.",
)

st.markdown(
    "Wolfcrux Global Markets leverages cutting-edge technology and quantitative research "
    "to trade US equities with speed and precision. Our traders work from Mumbai during "
    "US market hours, backed by real-time risk controls and a team that wants them to win."
)

col1, col2, col3 = st.columns(3)
with col1:
    ui_theme.colored_metric("Execution", "Low latency", ui_theme.COLORS["accent"],
                            "Proprietary infrastructure")
with col2:
    ui_theme.colored_metric("Research", "Quantitative", ui_theme.COLORS["blue"],
                            "Models over terabytes of market data")
with col3:
    ui_theme.colored_metric("Risk", "Controlled", ui_theme.COLORS["profit"],
                            "Real-time monitoring of every account")

ui_theme.section_header("Where to go")

if user is None:
    st.info("Employees: open **My Data** in the sidebar and sign in with the credentials from your administrator.")
    st.page_link("pages/5_Market_Dashboard.py", label="Market Dashboard", icon="📈")
    st.page_link("pages/2_Careers.py", label="Join the desk", icon="💼")
elif is_admin(user):
    st.page_link("pages/9_Admin_Dashboard.py", label="Admin Dashboard", icon="📊")
    st.page_link("pages/10_Trading_Entry.py", label="Trading Data Entry", icon="✍️")
    st.page_link("pages/13_Leave_Management.py", label="Leave Management", icon="🗓️")
else:
    st.page_link("pages/6_My_Data.py", label="My Data", icon="📒")
    st.page_link("pages/7_Leave.py", label="Apply for Leave", icon="🗓️")
    st.page_link("pages/5_Market_Dashboard.py", label="Market Dashboard", icon="📈")

ui_theme.firm_footer()
