"""Trading Data Entry — one trader, one date, up to two accounts."""

import streamlit as st

from analytics.daily_summary import brokerage_for
from analytics.market_hours import today_et
from auth import require_admin
from backoffice.accounts import get_accounts, get_profiles
from backoffice.trading_entry import AccountLeg, DailyEntry, submit_entry
from db import init_db
import ui_theme

ui_theme.setup_page("Trading Data Entry", "✍️")
init_db()
require_admin()

ui_theme.page_header("Trading Data Entry", "Daily results per trader and account")

traders = get_profiles(role="user")
accounts = get_accounts()
if not traders or accounts.empty:
    ui_theme.empty_state("Create at least one trader and one trading account in User Management first.")
    st.stop()

account_labels = {
    int(row.id): f"{row.account_name}" + (f" ({row.account_number})" if row.account_number else "")
    for row in accounts.itertuples()
}
account_options = [None] + list(account_labels)

with st.form("trading_entry_form"):
    c1, c2 = st.columns(2)
    trader = c1.selectbox("Trader", traders, format_func=lambda u: u.name, index=None,
                          placeholder="Select trader")
    trade_date = c2.date_input("Date", value=today_et())

    legs = []
    for i in (1, 2):
        st.markdown(f"**Account {i}**" + ("" if i == 1 else " (optional)"))
        a, b, c = st.columns(3)
        account_id = a.selectbox(
            "Account", account_options, key=f"acct_{i}",
            format_func=lambda v: "None" if v is None else account_labels[v],
        )
        pnl = b.number_input("Net P&L ($)", value=0.0, step=10.0, format="%.2f", key=f"pnl_{i}")
        shares = c.number_input("Shares traded", min_value=0, value=0, step=100, key=f"shares_{i}")
        legs.append(AccountLeg(account_id=account_id, net_pnl=pnl, shares_traded=int(shares)))

    is_holiday = st.checkbox("Holiday (not counted as a trading day)")
    late_remarks = st.text_input("Late remarks")
    notes = st.text_area("Notes")
    submitted = st.form_submit_button("Save Entry", use_container_width=True)

if submitted:
    entry = DailyEntry(
        user_id=trader.id if trader else None,
        trade_date=trade_date,
        legs=legs,
        is_holiday=is_holiday,
        late_remarks=late_remarks,
        notes=notes,
    )
    try:
        count = submit_entry(entry)
    except ValueError as e:
        st.error(str(e))
    else:
        shares_total = sum(leg.shares_traded for leg in legs if leg.account_id is not None)
        st.success(
            f"Saved {count} row(s) for {trader.name} on {trade_date:%b %d, %Y}. "
            f"Brokerage: {ui_theme.format_money(brokerage_for(shares_total))}"
        )
