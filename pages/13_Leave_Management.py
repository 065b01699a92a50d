"""Leave Management — approve or reject requests, balances and holidays."""

import pandas as pd
import streamlit as st

from analytics.leave_rules import default_balance
from analytics.market_hours import today_et
from auth import require_admin
from backoffice.accounts import get_profiles
from backoffice.leave_store import (
    add_holiday,
    approve_leave,
    delete_holiday,
    get_balances,
    get_holidays,
    get_leave_requests,
    monthly_leave_summary,
    reject_leave,
)
from db import init_db
import ui_theme

ui_theme.setup_page("Leave Management", "🗓️")
init_db()
require_admin()

ui_theme.page_header("Leave Management", "Requests, balances and holidays")
today = today_et()

tab_requests, tab_balances, tab_holidays = st.tabs(["Requests", "Balances", "Holidays"])

# =====================================================================
# Requests
# =====================================================================
with tab_requests:
    pending = get_leave_requests(status="pending")
    if pending.empty:
        st.caption("No pending requests.")
    for req in pending.itertuples():
        with st.container(border=True):
            c1, c2, c3 = st.columns([4, 1, 1])
            c1.markdown(
                f"**{req.employee}** · {req.leave_date} · {req.leave_type} day"
                + (f"  \n{req.reason}" if req.reason else "")
            )
            if c2.button("Approve", key=f"approve_{req.id}", use_container_width=True):
                try:
                    balance = approve_leave(req.id)
                    st.toast(f"Approved. {req.employee} has {balance.remaining:g} day(s) left.")
                    st.rerun()
                except ValueError as e:
                    st.error(str(e))
            if c3.button("Reject", key=f"reject_{req.id}", use_container_width=True):
                try:
                    reject_leave(req.id)
                    st.toast("Rejected.")
                    st.rerun()
                except ValueError as e:
                    st.error(str(e))

    with st.expander("All requests"):
        st.dataframe(
            get_leave_requests()[["employee", "leave_date", "leave_type", "status", "reason"]],
            hide_index=True,
            use_container_width=True,
        )

# =====================================================================
# Balances & monthly allowance
# =====================================================================
with tab_balances:
    c1, c2 = st.columns(2)
    year = c1.selectbox("Year", list(range(today.year, today.year - 3, -1)))
    month = c2.selectbox("Month", list(range(1, 13)), index=today.month - 1,
                         format_func=lambda m: pd.Timestamp(2000, m, 1).strftime("%B"))
    balances = get_balances(year)
    rows = []
    for u in get_profiles(role="user"):
        bal = balances.get(u.id) or default_balance()
        summary = monthly_leave_summary(u.id, year, month)
        rows.append({
            "Employee": u.name,
            "Total": bal.total_leaves,
            "Used": bal.used_leaves,
            "Remaining": bal.remaining,
            "Full Days (month)": summary.used_full_days,
            "Half Days (month)": summary.used_half_days,
            "Late": summary.late_count,
            "Deductible": summary.deductible_count,
            "Excess Days": summary.excess_days,
        })
    if rows:
        st.dataframe(pd.DataFrame(rows), hide_index=True, use_container_width=True)
    else:
        st.caption("No employees yet.")

# =====================================================================
# Holidays
# =====================================================================
with tab_holidays:
    with st.form("holiday_form", clear_on_submit=True):
        h1, h2 = st.columns(2)
        holiday_date = h1.date_input("Date", value=today)
        holiday_name = h2.text_input("Name")
        added = st.form_submit_button("Add Holiday")
    if added:
        try:
            add_holiday(holiday_date, holiday_name)
            st.toast("Holiday added.")
            st.rerun()
        except ValueError as e:
            st.error(str(e))

    holidays = get_holidays()
    for h in holidays.itertuples():
        c1, c2 = st.columns([5, 1])
        c1.markdown(f"**{h.holiday_date}** · {h.name}")
        if c2.button("Delete", key=f"del_holiday_{h.id}"):
            delete_holiday(h.id)
            st.rerun()
