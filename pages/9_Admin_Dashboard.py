"""Admin Dashboard — company KPIs, employee performance, charts and exports."""

import pandas as pd
import plotly.graph_objects as go
import streamlit as st

from analytics.export import company_pnl_csv, employee_equity_csv, employee_summary_csv
from analytics.performance import aggregate_performance, compute_drawdown
from auth import require_admin
from backoffice.accounts import get_account_count, get_profiles
from config import BASE_CAPITAL_PER_ACCOUNT
from db import get_trade_records, init_db
import ui_theme

ui_theme.setup_page("Admin Dashboard", "📊")
init_db()
require_admin()

ui_theme.page_header("Admin Dashboard", "Company and employee performance")

date_filter, custom = ui_theme.date_filter_selector("admin_dash", default="lifetime")

records = get_trade_records()
users = get_profiles(role="user")
data = aggregate_performance(
    records, users, date_filter, custom_range=custom, account_count=get_account_count(),
)
cs = data.company_stats
st.caption(f"{data.date_range.start:%b %d, %Y} – {data.date_range.end:%b %d, %Y}")

# =====================================================================
# Company KPIs (all records, independent of the period filter)
# =====================================================================
ui_theme.section_header("Company", "all-time, independent of the period filter")
k1, k2, k3, k4 = st.columns(4)
with k1:
    ui_theme.colored_metric("Total P&L", ui_theme.format_money(cs.total_pnl), ui_theme.pnl_color(cs.total_pnl))
with k2:
    ui_theme.colored_metric("Today", ui_theme.format_money(cs.today_pnl, signed=True), ui_theme.pnl_color(cs.today_pnl))
with k3:
    ui_theme.colored_metric("This Week", ui_theme.format_money(cs.week_pnl, signed=True), ui_theme.pnl_color(cs.week_pnl))
with k4:
    ui_theme.colored_metric("This Month", ui_theme.format_money(cs.month_pnl, signed=True), ui_theme.pnl_color(cs.month_pnl))

k5, k6, k7, k8 = st.columns(4)
k5.metric("Realized Profit", ui_theme.format_money(cs.total_realized_profit))
k6.metric("Realized Loss", ui_theme.format_money(-cs.total_realized_loss))
k7.metric("Best Day", ui_theme.format_money(cs.best_day_pnl),
          f"{cs.best_day_date:%b %d, %Y}" if cs.best_day_date else None)
k8.metric("Worst Day", ui_theme.format_money(cs.worst_day_pnl),
          f"{cs.worst_day_date:%b %d, %Y}" if cs.worst_day_date else None, delta_color="off")

k9, k10, k11, k12 = st.columns(4)
k9.metric("Active Traders", cs.total_active_employees)
k10.metric("Max Drawdown", ui_theme.format_money(cs.max_drawdown))
k11.metric("Capital Deployed", ui_theme.format_money(cs.total_capital_deployed))
k12.metric("Company Equity", ui_theme.format_money(cs.net_company_equity))

# =====================================================================
# Charts (filtered)
# =====================================================================
ui_theme.section_header("Daily P&L & Equity")
if not data.daily_pnl:
    ui_theme.empty_state("No trading data in this period.")
else:
    dates = [d.date for d in data.daily_pnl]
    fig = go.Figure()
    fig.add_trace(go.Bar(
        x=dates, y=[d.pnl for d in data.daily_pnl], name="Daily P&L",
        marker_color=[ui_theme.pnl_color(d.pnl) for d in data.daily_pnl],
    ))
    fig.add_trace(go.Scatter(
        x=dates, y=[d.cumulative_pnl for d in data.daily_pnl], name="Cumulative",
        line={"color": ui_theme.COLORS["accent"], "width": 2}, yaxis="y2",
    ))
    fig.update_layout(**ui_theme.plotly_layout(
        "hero", yaxis2={"overlaying": "y", "side": "right", "showgrid": False},
    ))
    st.plotly_chart(fig, use_container_width=True)

# =====================================================================
# Employee table
# =====================================================================
ui_theme.section_header("Employees")
emp_df = pd.DataFrame([
    {
        "Name": e.name,
        "Status": e.status,
        "Total P&L": e.total_pnl,
        "Today": e.today_pnl,
        "Best Day": e.max_profit,
        "Worst Day": e.max_loss,
        "Win Rate %": e.win_rate,
        "Avg Daily": e.avg_daily_pnl,
        "Max DD": e.max_drawdown,
        "Equity": e.current_equity,
        "Days": e.trading_days,
        "Win Streak": e.max_consecutive_wins,
        "Loss Streak": e.max_consecutive_losses,
    }
    for e in data.employee_stats
])
money = st.column_config.NumberColumn(format="$%.2f")
st.dataframe(
    emp_df,
    hide_index=True,
    use_container_width=True,
    column_config={
        "Total P&L": money, "Today": money, "Best Day": money, "Worst Day": money,
        "Avg Daily": money, "Max DD": money, "Equity": money,
        "Win Rate %": st.column_config.NumberColumn(format="%.1f"),
    },
)

# =====================================================================
# Employee detail & comparison
# =====================================================================
active = [e for e in data.employee_stats if e.status == "Active"]
tab_detail, tab_compare = st.tabs(["Employee Detail", "Compare"])

with tab_detail:
    if not active:
        st.caption("No active employees in this period.")
    else:
        selected = st.selectbox("Employee", active, format_func=lambda e: e.name)
        series = data.employee_daily_pnl(selected.user_id)
        dd = compute_drawdown(series, BASE_CAPITAL_PER_ACCOUNT)
        d1, d2, d3, d4 = st.columns(4)
        d1.metric("Total P&L", ui_theme.format_money(selected.total_pnl))
        d2.metric("Win Rate", f"{selected.win_rate:.1f}%")
        d3.metric("W / L Days", f"{selected.winning_days} / {selected.losing_days}")
        d4.metric("Max Drawdown", f"{max((p.drawdown_pct for p in dd), default=0):.2f}%")

        fig = go.Figure()
        fig.add_trace(go.Scatter(
            x=[p.date for p in series], y=[p.equity for p in series], name="Equity",
            line={"color": ui_theme.COLORS["accent"], "width": 2},
        ))
        fig.update_layout(**ui_theme.plotly_layout("standard"))
        st.plotly_chart(fig, use_container_width=True)

with tab_compare:
    picked = st.multiselect("Employees", active, format_func=lambda e: e.name,
                            default=active[:3])
    if picked:
        fig = go.Figure()
        for e in picked:
            s = data.employee_daily_pnl(e.user_id)
            fig.add_trace(go.Scatter(
                x=[p.date for p in s], y=[p.cumulative_pnl for p in s], name=e.name,
            ))
        fig.update_layout(**ui_theme.plotly_layout("standard"))
        st.plotly_chart(fig, use_container_width=True)

# =====================================================================
# Export
# =====================================================================
ui_theme.section_header("Data Export")
x1, x2, x3 = st.columns(3)
with x1:
    name, content = company_pnl_csv(data.daily_pnl)
    st.download_button("Company P&L History", content, file_name=name, mime="text/csv",
                       disabled=not data.daily_pnl, use_container_width=True)
with x2:
    name, content = employee_summary_csv(data.employee_stats)
    st.download_button("Employee Summary", content, file_name=name, mime="text/csv",
                       disabled=not data.employee_stats, use_container_width=True)
with x3:
    if active:
        who = st.selectbox("Equity curve for", active, format_func=lambda e: e.name,
                           key="export_employee")
        name, content = employee_equity_csv(who.name, data.employee_daily_pnl(who.user_id))
        st.download_button("Employee Equity Curve", content, file_name=name, mime="text/csv",
                           use_container_width=True)
