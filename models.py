"""Data models for the trading desk back office."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Optional


class DateRangeFilter(str, Enum):
    TODAY = "today"
    WEEK = "week"
    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"
    LIFETIME = "lifetime"
    CUSTOM = "custom"


@dataclass(frozen=True)
class DateRange:
    """Inclusive calendar interval [start, end]."""
    start: date
    end: date

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end


@dataclass(frozen=True)
class TradeRecord:
    """One trader's result on one account for one day."""
    user_id: int
    account_id: int
    trade_date: date
    net_pnl: float
    shares_traded: int = 0
    is_holiday: bool = False
    id: Optional[int] = None


@dataclass(frozen=True)
class UserProfile:
    id: int
    name: str
    email: str
    role: str = "user"


@dataclass
class DailyPnL:
    date: date
    pnl: float
    cumulative_pnl: float
    equity: float


@dataclass
class DrawdownPoint:
    date: date
    cumulative_pnl: float
    peak: float
    drawdown: float  # peak - cumulative, >= 0
    drawdown_pct: float  # vs. peak equity


@dataclass
class EmployeeStats:
    user_id: int
    name: str
    email: str
    status: str  # "Active" | "Inactive"
    total_pnl: float = 0.0
    today_pnl: float = 0.0
    max_profit: float = 0.0  # best single day
    max_loss: float = 0.0  # worst single day
    win_rate: float = 0.0
    avg_daily_pnl: float = 0.0
    max_drawdown: float = 0.0
    capital_allocated: float = 0.0
    current_equity: float = 0.0
    trading_days: int = 0
    winning_days: int = 0
    losing_days: int = 0
    max_consecutive_wins: int = 0
    max_consecutive_losses: int = 0


@dataclass
class CompanyStats:
    total_pnl: float = 0.0
    today_pnl: float = 0.0
    week_pnl: float = 0.0
    month_pnl: float = 0.0
    total_realized_profit: float = 0.0
    total_realized_loss: float = 0.0
    best_day_pnl: float = 0.0
    best_day_date: Optional[date] = None
    worst_day_pnl: float = 0.0
    worst_day_date: Optional[date] = None
    total_active_employees: int = 0
    max_drawdown: float = 0.0
    total_capital_deployed: float = 0.0
    net_company_equity: float = 0.0


@dataclass
class DailySummary:
    """A trader's combined result for one date across accounts."""
    date: date
    combined_pnl: float
    total_shares: int
    brokerage: float
    net_after_brokerage: float


@dataclass
class TradingSummary:
    best_day: Optional[DailySummary] = None
    worst_day: Optional[DailySummary] = None
    avg_daily_pnl: float = 0.0
    winning_days: int = 0
    losing_days: int = 0
    win_rate: float = 0.0
    avg_winning_day: float = 0.0
    avg_losing_day: float = 0.0
    profit_factor: float = 0.0
    max_consecutive_wins: int = 0
    max_consecutive_losses: int = 0


@dataclass
class GroupTotal:
    """Entries, P&L and share totals for one person or account."""
    key: int
    entries: int
    total_pnl: float
    total_shares: int
    records: list[TradeRecord] = field(default_factory=list)


@dataclass
class LeaveBalance:
    total_leaves: float
    used_leaves: float

    @property
    def remaining(self) -> float:
        return self.total_leaves - self.used_leaves


@dataclass
class MonthlyLeaveSummary:
    user_id: int
    year: int
    month: int
    allowed_full_days: int
    allowed_half_days: int
    used_full_days: int = 0
    used_half_days: int = 0
    late_count: int = 0
    deductible_count: int = 0
    remaining_full_days: int = 0
    remaining_half_days: int = 0
    excess_days: float = 0.0  # usage beyond allowance, in days


@dataclass
class Quote:
    symbol: str
    name: str
    price: float
    change: float
    change_percent: float
    market_state: str = ""


@dataclass
class SectorMove:
    name: str
    change_percent: float


@dataclass
class StockSplit:
    company_name: str
    ticker: str
    split_ratio: str
    ex_date: str  # ISO date


@dataclass
class NewsItem:
    headline: str
    source: str
    published: str
    url: str
    category: str = ""


@dataclass
class EconomicEvent:
    title: str
    country: str
    date: str
    time: str
    impact: str  # high | medium | low
    forecast: str = ""
    previous: str = ""
