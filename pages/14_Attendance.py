"""Attendance — mark daily status per employee."""

import streamlit as st

from analytics.market_hours import today_et
from auth import require_admin
from backoffice.accounts import get_profiles
from backoffice.attendance import delete_attendance, get_attendance, mark_attendance
from config import ATTENDANCE_STATUSES
from db import init_db
import ui_theme

ui_theme.setup_page("Attendance", "🕘")
init_db()
require_admin()

ui_theme.page_header("Attendance", "One record per employee per day")

employees = get_profiles(role="user")
if not employees:
    ui_theme.empty_state("No employees yet.")
    st.stop()

today = today_et()

with st.form("attendance_form"):
    c1, c2, c3 = st.columns(3)
    employee = c1.selectbox("Employee", employees, format_func=lambda u: u.name)
    record_date = c2.date_input("Date", value=today, max_value=today)
    status = c3.selectbox("Status", ATTENDANCE_STATUSES,
                          format_func=lambda s: s.replace("_", " ").title())
    is_deductible = st.checkbox("Deductible from leave allowance")
    notes = st.text_input("Notes")
    saved = st.form_submit_button("Save", use_container_width=True)

if saved:
    try:
        mark_attendance(employee.id, record_date, status, is_deductible, notes)
        st.toast(f"Saved {employee.name}: {status} on {record_date:%b %d}")
    except ValueError as e:
        st.error(str(e))

ui_theme.section_header("This Month")
df = get_attendance(start=today.replace(day=1), end=today)
if df.empty:
    st.caption("No attendance marked this month.")
else:
    st.dataframe(
        df[["record_date", "employee", "status", "is_deductible", "notes"]],
        hide_index=True,
        use_container_width=True,
    )
    labels = {int(r.id): f"{r.record_date} · {r.employee} · {r.status}" for r in df.itertuples()}
    rid = st.selectbox("Remove record", list(labels), format_func=labels.get, index=None,
                       placeholder="Select a record")
    if st.button("Remove", disabled=rid is None):
        delete_attendance(rid)
        st.rerun()
