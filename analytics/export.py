"""CSV exports for the admin dashboard."""

from __future__ import annotations

import re
from datetime import date
from typing import Optional

import pandas as pd

from analytics.market_hours import today_et
from models import DailyPnL, EmployeeStats


def export_filename(stem: str, day: Optional[date] = None) -> str:
    """``<stem>_YYYY-MM-DD.csv``; whitespace in *stem* becomes underscores."""
    stem = re.sub(r"\s+", "_", stem.strip())
    return f"{stem}_{(day or today_et()).isoformat()}.csv"


def daily_pnl_frame(series: list[DailyPnL]) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "Date": d.date.isoformat(),
                "Daily PnL": round(d.pnl, 2),
                "Cumulative PnL": round(d.cumulative_pnl, 2),
                "Equity": round(d.equity, 2),
            }
            for d in series
        ],
        columns=["Date", "Daily PnL", "Cumulative PnL", "Equity"],
    )


def employee_summary_frame(employees: list[EmployeeStats]) -> pd.DataFrame:
    columns = [
        "Name", "Email", "Status", "Total PnL", "Today PnL", "Max Profit (Day)",
        "Max Loss (Day)", "Win Rate %", "Avg Daily PnL", "Trading Days",
        "Winning Days", "Losing Days",
    ]
    rows = [
        {
            "Name": e.name,
            "Email": e.email,
            "Status": e.status,
            "Total PnL": round(e.total_pnl, 2),
            "Today PnL": round(e.today_pnl, 2),
            "Max Profit (Day)": round(e.max_profit, 2),
            "Max Loss (Day)": round(e.max_loss, 2),
            "Win Rate %": round(e.win_rate, 2),
            "Avg Daily PnL": round(e.avg_daily_pnl, 2),
            "Trading Days": e.trading_days,
            "Winning Days": e.winning_days,
            "Losing Days": e.losing_days,
        }
        for e in employees
    ]
    return pd.DataFrame(rows, columns=columns)


def to_csv_bytes(df: pd.DataFrame) -> bytes:
    return df.to_csv(index=False).encode("utf-8")


def company_pnl_csv(series: list[DailyPnL], day: Optional[date] = None) -> tuple[str, bytes]:
    """(filename, content) for the company P&L history."""
    return export_filename("company_pnl_history", day), to_csv_bytes(daily_pnl_frame(series))


def employee_summary_csv(employees: list[EmployeeStats], day: Optional[date] = None) -> tuple[str, bytes]:
    return (
        export_filename("employee_performance_summary", day),
        to_csv_bytes(employee_summary_frame(employees)),
    )


def employee_equity_csv(name: str, series: list[DailyPnL], day: Optional[date] = None) -> tuple[str, bytes]:
    return export_filename(f"{name}_equity_curve", day), to_csv_bytes(daily_pnl_frame(series))
