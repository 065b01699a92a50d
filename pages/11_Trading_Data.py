"""Trading Data View — totals by person or account for a month, quarter or year."""

import streamlit as st

from analytics.daily_summary import group_totals
from analytics.date_ranges import period_range, recent_months, recent_quarters
from analytics.market_hours import today_et
from auth import require_admin
from db import delete_trading_data, frame_to_records, get_trading_data, init_db
import ui_theme

ui_theme.setup_page("Trading Data", "🗂️")
init_db()
require_admin()

ui_theme.page_header("Trading Data", "Review and clean up entered results")

c1, c2, c3 = st.columns(3)
kind = c1.radio("Period", ["monthly", "quarterly", "yearly"], format_func=str.title, horizontal=True)
view = c3.radio("Group by", ["user", "account"],
                format_func=lambda v: "Person" if v == "user" else "Account", horizontal=True)

if kind == "monthly":
    label = c2.selectbox("Month", recent_months())
    year, month = (int(p) for p in label.split("-"))
    date_range = period_range("monthly", year, month=month)
elif kind == "quarterly":
    label = c2.selectbox("Quarter", recent_quarters())
    year, q = label.split("-Q")
    date_range = period_range("quarterly", int(year), quarter=int(q))
else:
    current = today_et().year
    year = c2.selectbox("Year", list(range(current, current - 5, -1)))
    date_range = period_range("yearly", year)

df = get_trading_data(start=date_range.start, end=date_range.end)
if df.empty:
    ui_theme.empty_state("No trading data in this period.")
    st.stop()

records = frame_to_records(df)
names = (
    df.drop_duplicates("user_id").set_index("user_id")["trader"].to_dict()
    if view == "user"
    else df.drop_duplicates("account_id").set_index("account_id")["account_name"].to_dict()
)

total = df["net_pnl"].sum()
m1, m2, m3 = st.columns(3)
m1.metric("Entries", len(df))
m2.metric("Total P&L", ui_theme.format_money(total))
m3.metric("Shares", f"{int(df['shares_traded'].sum()):,}")

for group in group_totals(records, by=view):
    header = (
        f"{names.get(group.key, group.key)} · {group.entries} entries · "
        f"{ui_theme.format_money(group.total_pnl)} · {group.total_shares:,} shares"
    )
    with st.expander(header):
        ids = {r.id for r in group.records}
        rows = df[df["id"].isin(ids)]
        st.dataframe(
            rows[["trade_date", "trader", "account_name", "net_pnl", "shares_traded",
                  "is_holiday", "late_remarks", "notes"]],
            hide_index=True,
            use_container_width=True,
        )

ui_theme.section_header("Delete an entry")
labels = {
    int(r.id): f"{r.trade_date} · {r.trader} · {r.account_name} · {ui_theme.format_money(r.net_pnl)}"
    for r in df.itertuples()
}
to_delete = st.selectbox("Entry", list(labels), format_func=labels.get, index=None,
                         placeholder="Select an entry to delete")
confirm = st.checkbox("I understand this cannot be undone")
if st.button("Delete", type="primary", disabled=to_delete is None or not confirm):
    delete_trading_data(to_delete)
    st.toast("Entry deleted.")
    st.rerun()
