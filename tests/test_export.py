"""Tests for analytics.export."""

import io
from datetime import date

import pandas as pd

from analytics.export import (
    company_pnl_csv,
    daily_pnl_frame,
    employee_equity_csv,
    employee_summary_csv,
    employee_summary_frame,
    export_filename,
)
from models import DailyPnL, EmployeeStats

DAY = date(2024, 6, 12)


def _series():
    return [
        DailyPnL(date(2024, 6, 10), 100.126, 100.126, 100100.126),
        DailyPnL(date(2024, 6, 11), -40.0, 60.126, 100060.126),
    ]


class TestExportFilename:
    def test_dated_stem(self):
        assert export_filename("company_pnl_history", DAY) == "company_pnl_history_2024-06-12.csv"

    def test_whitespace_collapsed(self):
        assert export_filename("  Asha  Trader equity ", DAY) == "Asha_Trader_equity_2024-06-12.csv"


class TestFrames:
    def test_daily_pnl_frame(self):
        df = daily_pnl_frame(_series())
        assert list(df.columns) == ["Date", "Daily PnL", "Cumulative PnL", "Equity"]
        assert df.iloc[0]["Date"] == "2024-06-10"
        assert df.iloc[0]["Daily PnL"] == 100.13

    def test_empty_frames_keep_columns(self):
        assert list(daily_pnl_frame([]).columns) == ["Date", "Daily PnL", "Cumulative PnL", "Equity"]
        assert len(employee_summary_frame([]).columns) == 12

    def test_employee_summary_frame(self):
        e = EmployeeStats(7, "Asha", "a@desk.test", "Active", total_pnl=1234.567,
                          win_rate=66.666, trading_days=3, winning_days=2, losing_days=1)
        row = employee_summary_frame([e]).iloc[0]
        assert row["Total PnL"] == 1234.57
        assert row["Win Rate %"] == 66.67
        assert row["Status"] == "Active"


class TestCsv:
    def test_company_csv(self):
        name, content = company_pnl_csv(_series(), DAY)
        assert name == "company_pnl_history_2024-06-12.csv"
        df = pd.read_csv(io.BytesIO(content))
        assert df["Cumulative PnL"].tolist() == [100.13, 60.13]

    def test_employee_csvs(self):
        name, content = employee_summary_csv([EmployeeStats(1, "A", "a@x", "Inactive")], DAY)
        assert name == "employee_performance_summary_2024-06-12.csv"
        assert content.decode("utf-8").splitlines()[0].startswith("Name,Email,Status")

        name, _ = employee_equity_csv("Asha Trader", _series(), DAY)
        assert name == "Asha_Trader_equity_curve_2024-06-12.csv"
