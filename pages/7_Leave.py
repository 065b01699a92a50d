"""Leave — balance, monthly allowance, application form and request history."""

from datetime import timedelta

import streamlit as st

from analytics.leave_rules import leave_deduction
from analytics.market_hours import today_et
from auth import require_auth
from backoffice.leave_store import (
    apply_leave,
    get_balance,
    get_holidays,
    get_leave_requests,
    monthly_leave_summary,
)
from db import init_db
import ui_theme

ui_theme.setup_page("Leave", "🗓️")
init_db()
user = require_auth()

ui_theme.page_header("Leave", "Annual balance and monthly allowance")

today = today_et()
balance = get_balance(user["id"], today.year)

c1, c2, c3 = st.columns(3)
with c1:
    ui_theme.colored_metric("Total Leaves", f"{balance.total_leaves:g}", ui_theme.COLORS["blue"])
with c2:
    ui_theme.colored_metric("Used", f"{balance.used_leaves:g}", ui_theme.COLORS["accent"])
with c3:
    ui_theme.colored_metric("Remaining", f"{balance.remaining:g}", ui_theme.pnl_color(balance.remaining))

month = monthly_leave_summary(user["id"], today.year, today.month)
st.caption(
    f"This month: {month.used_full_days}/{month.allowed_full_days} full day, "
    f"{month.used_half_days}/{month.allowed_half_days} half day used · "
    f"{month.late_count} late mark(s)"
    + (f" · {month.excess_days:g} day(s) over allowance" if month.excess_days else "")
)

# =====================================================================
# Apply
# =====================================================================
ui_theme.section_header("Apply for Leave")
with st.form("leave_form", clear_on_submit=True):
    col1, col2 = st.columns(2)
    leave_date = col1.date_input("Date", value=today + timedelta(days=1), min_value=today)
    leave_type = col2.radio(
        "Type", ["full", "half"],
        format_func=lambda t: f"{t.title()} day ({leave_deduction(t):g})",
        horizontal=True,
    )
    reason = st.text_area("Reason")
    submitted = st.form_submit_button(
        "Submit Request", use_container_width=True, disabled=balance.remaining <= 0,
    )

if submitted:
    try:
        apply_leave(user["id"], leave_date, leave_type, reason)
        st.toast("Leave request submitted.")
        st.rerun()
    except ValueError as e:
        st.error(str(e))

# =====================================================================
# History & holidays
# =====================================================================
left, right = st.columns([3, 2])
with left:
    ui_theme.section_header("My Requests")
    requests_df = get_leave_requests(user["id"])
    if requests_df.empty:
        st.caption("No leave requests yet.")
    else:
        st.dataframe(
            requests_df[["leave_date", "leave_type", "status", "reason"]],
            hide_index=True,
            use_container_width=True,
        )

with right:
    ui_theme.section_header("Holidays", str(today.year))
    holidays = get_holidays(today.year)
    if holidays.empty:
        st.caption("No holidays announced.")
    else:
        st.dataframe(holidays[["holiday_date", "name"]], hide_index=True, use_container_width=True)
