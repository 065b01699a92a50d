"""My Data — own accounts, daily P&L after brokerage and personal trading analytics."""

import pandas as pd
import plotly.graph_objects as go
import streamlit as st

from analytics.daily_summary import (
    build_daily_summary,
    count_trading_days,
    group_totals,
    summarize_trading,
)
from analytics.date_ranges import filter_records, resolve_date_range
from analytics.performance import build_daily_series, compute_drawdown
from auth import require_auth
from backoffice.accounts import get_accounts
from config import BASE_CAPITAL_PER_ACCOUNT
from db import frame_to_records, get_trading_data, init_db
import ui_theme

ui_theme.setup_page("My Data", "📒")
init_db()
user = require_auth()

ui_theme.page_header("My Data", f"Welcome back, {user['full_name']}")

# =====================================================================
# Accounts
# =====================================================================
accounts = get_accounts(user["id"])
ui_theme.section_header("My Accounts")
if accounts.empty:
    st.caption("No trading accounts are assigned to you yet.")
else:
    st.dataframe(
        accounts[["account_name", "account_number"]].rename(
            columns={"account_name": "Account", "account_number": "Number"}
        ),
        hide_index=True,
        use_container_width=True,
    )

# =====================================================================
# Period filter
# =====================================================================
date_filter, custom = ui_theme.date_filter_selector("my_data")
date_range = resolve_date_range(date_filter, custom_range=custom)
st.caption(f"{date_range.start:%b %d, %Y} – {date_range.end:%b %d, %Y}")

df = get_trading_data(user["id"], date_range.start, date_range.end)
records = filter_records(frame_to_records(df), date_range)
if not records:
    ui_theme.empty_state("No trading data for this period.")
    st.stop()

daily = build_daily_summary(records)
summary = summarize_trading(daily)

# =====================================================================
# KPIs
# =====================================================================
net_total = sum(d.net_after_brokerage for d in daily)
gross_total = sum(d.combined_pnl for d in daily)
brokerage_total = sum(d.brokerage for d in daily)

c1, c2, c3, c4 = st.columns(4)
with c1:
    ui_theme.colored_metric("Gross P&L", ui_theme.format_money(gross_total), ui_theme.pnl_color(gross_total))
with c2:
    ui_theme.colored_metric("Brokerage", ui_theme.format_money(brokerage_total), ui_theme.COLORS["accent"])
with c3:
    ui_theme.colored_metric("Net P&L", ui_theme.format_money(net_total), ui_theme.pnl_color(net_total))
with c4:
    ui_theme.colored_metric("Trading Days", str(count_trading_days(records)), ui_theme.COLORS["blue"])

c5, c6, c7, c8 = st.columns(4)
c5.metric("Win Rate", f"{summary.win_rate:.1f}%")
c6.metric("Profit Factor",
          "∞" if summary.profit_factor == float("inf") else f"{summary.profit_factor:.2f}")
c7.metric("Avg Winning Day", ui_theme.format_money(summary.avg_winning_day))
c8.metric("Avg Losing Day", ui_theme.format_money(summary.avg_losing_day))

c9, c10, c11, c12 = st.columns(4)
if summary.best_day:
    c9.metric("Best Day", ui_theme.format_money(summary.best_day.net_after_brokerage),
              f"{summary.best_day.date:%b %d}")
if summary.worst_day:
    c10.metric("Worst Day", ui_theme.format_money(summary.worst_day.net_after_brokerage),
               f"{summary.worst_day.date:%b %d}", delta_color="inverse")
c11.metric("Max Win Streak", summary.max_consecutive_wins)
c12.metric("Max Loss Streak", summary.max_consecutive_losses)

# =====================================================================
# Equity curve & drawdown
# =====================================================================
ui_theme.section_header("Equity Curve & Drawdown")
series = build_daily_series(records, BASE_CAPITAL_PER_ACCOUNT)
drawdown = compute_drawdown(series, BASE_CAPITAL_PER_ACCOUNT)

fig = go.Figure()
fig.add_trace(go.Scatter(
    x=[p.date for p in series], y=[p.cumulative_pnl for p in series],
    name="Cumulative P&L", line={"color": ui_theme.COLORS["accent"], "width": 2},
))
fig.add_trace(go.Scatter(
    x=[p.date for p in drawdown], y=[-p.drawdown for p in drawdown],
    name="Drawdown", fill="tozeroy", line={"color": ui_theme.COLORS["loss"], "width": 1},
))
fig.update_layout(**ui_theme.plotly_layout("standard"))
st.plotly_chart(fig, use_container_width=True)

# =====================================================================
# Daily summary
# =====================================================================
ui_theme.section_header("Daily Summary", "both accounts combined, $14 per 1,000 shares")
st.dataframe(
    pd.DataFrame([
        {
            "Date": d.date,
            "Combined P&L": d.combined_pnl,
            "Shares": d.total_shares,
            "Brokerage": d.brokerage,
            "Net P&L": d.net_after_brokerage,
        }
        for d in reversed(daily)
    ]),
    hide_index=True,
    use_container_width=True,
    column_config={
        "Combined P&L": st.column_config.NumberColumn(format="$%.2f"),
        "Brokerage": st.column_config.NumberColumn(format="$%.2f"),
        "Net P&L": st.column_config.NumberColumn(format="$%.2f"),
    },
)

# =====================================================================
# Per account
# =====================================================================
ui_theme.section_header("By Account")
names = df.drop_duplicates("account_id").set_index("account_id")["account_name"].to_dict()
st.dataframe(
    pd.DataFrame([
        {
            "Account": names.get(g.key, g.key),
            "Entries": g.entries,
            "Total P&L": g.total_pnl,
            "Shares": g.total_shares,
        }
        for g in group_totals(records, by="account")
    ]),
    hide_index=True,
    use_container_width=True,
    column_config={"Total P&L": st.column_config.NumberColumn(format="$%.2f")},
)

with st.expander("Raw entries"):
    st.dataframe(
        df[["trade_date", "account_name", "net_pnl", "shares_traded", "is_holiday",
            "late_remarks", "notes"]],
        hide_index=True,
        use_container_width=True,
    )
