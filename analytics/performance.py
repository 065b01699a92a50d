"""Trading performance aggregation — company KPIs, per-employee stats, equity and drawdown.

Pure functions over already-loaded TradeRecord lists. Nothing here touches the
database, the session or the wall clock except through the ``now`` argument,
so the same inputs always produce the same output.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Iterable, Optional

from analytics.date_ranges import filter_records, resolve_date_range
from analytics.market_hours import today_et
from config import BASE_CAPITAL_PER_ACCOUNT
from models import (
    CompanyStats,
    DailyPnL,
    DateRange,
    DateRangeFilter,
    DrawdownPoint,
    EmployeeStats,
    TradeRecord,
    UserProfile,
)


# ---------------------------------------------------------------------------
# Building blocks
# ---------------------------------------------------------------------------

def daily_totals(records: Iterable[TradeRecord]) -> dict[date, float]:
    """Sum net P&L per calendar date. Returned dict is ordered by date."""
    totals: dict[date, float] = defaultdict(float)
    for r in records:
        totals[r.trade_date] += float(r.net_pnl)
    return dict(sorted(totals.items()))


def build_daily_series(records: Iterable[TradeRecord], base_capital: float = 0.0) -> list[DailyPnL]:
    """Chronological daily P&L with running cumulative P&L and equity."""
    series: list[DailyPnL] = []
    cumulative = 0.0
    for day, pnl in daily_totals(records).items():
        cumulative += pnl
        series.append(DailyPnL(
            date=day,
            pnl=pnl,
            cumulative_pnl=cumulative,
            equity=base_capital + cumulative,
        ))
    return series


def compute_drawdown(series: list[DailyPnL], base_capital: float = 0.0) -> list[DrawdownPoint]:
    """Peak-to-trough drawdown at each point of a date-sorted series.

    The running peak starts at zero cumulative P&L (flat capital), so a losing
    first day is already a drawdown.
    """
    points: list[DrawdownPoint] = []
    peak = 0.0
    for row in series:
        if row.cumulative_pnl > peak:
            peak = row.cumulative_pnl
        drawdown = peak - row.cumulative_pnl
        peak_equity = base_capital + peak
        drawdown_pct = drawdown / peak_equity * 100 if peak_equity > 0 else 0.0
        points.append(DrawdownPoint(
            date=row.date,
            cumulative_pnl=row.cumulative_pnl,
            peak=peak,
            drawdown=drawdown,
            drawdown_pct=drawdown_pct,
        ))
    return points


def max_drawdown(daily_pnls: Iterable[float]) -> float:
    """Largest peak-to-trough decline of the cumulative sum of date-ordered daily P&L."""
    peak = 0.0
    cumulative = 0.0
    worst = 0.0
    for pnl in daily_pnls:
        cumulative += pnl
        peak = max(peak, cumulative)
        worst = max(worst, peak - cumulative)
    return worst


def compute_streaks(daily_pnls: Iterable[float]) -> tuple[int, int]:
    """Longest runs of winning and losing days, in date order.

    A flat day (exactly zero) breaks both runs.
    """
    max_wins = max_losses = 0
    wins = losses = 0
    for pnl in daily_pnls:
        if pnl > 0:
            wins += 1
            losses = 0
        elif pnl < 0:
            losses += 1
            wins = 0
        else:
            wins = losses = 0
        max_wins = max(max_wins, wins)
        max_losses = max(max_losses, losses)
    return max_wins, max_losses


def best_and_worst_day(daily: dict[date, float]) -> tuple[Optional[date], float, Optional[date], float]:
    """(best_date, best_pnl, worst_date, worst_pnl); on ties the earliest date wins."""
    best_date = worst_date = None
    best = worst = 0.0
    for day, pnl in sorted(daily.items()):
        if best_date is None or pnl > best:
            best_date, best = day, pnl
        if worst_date is None or pnl < worst:
            worst_date, worst = day, pnl
    return best_date, best, worst_date, worst


def win_rate(winning_days: int, trading_days: int) -> float:
    return winning_days / trading_days * 100 if trading_days > 0 else 0.0


# ---------------------------------------------------------------------------
# Per-employee stats
# ---------------------------------------------------------------------------

def _inactive_stats(user: UserProfile) -> EmployeeStats:
    return EmployeeStats(user_id=user.id, name=user.name, email=user.email, status="Inactive")


def employee_stats_for(
    user: UserProfile,
    records: list[TradeRecord],
    today: date,
    capital_allocated: float = BASE_CAPITAL_PER_ACCOUNT,
) -> EmployeeStats:
    """Stats for one user from that user's in-scope records."""
    if not records:
        return _inactive_stats(user)

    daily = daily_totals(records)
    values = list(daily.values())
    total_pnl = sum(float(r.net_pnl) for r in records)
    trading_days = len(values)
    winning_days = sum(1 for v in values if v > 0)
    losing_days = sum(1 for v in values if v < 0)
    max_wins, max_losses = compute_streaks(values)

    return EmployeeStats(
        user_id=user.id,
        name=user.name,
        email=user.email,
        status="Active",
        total_pnl=total_pnl,
        today_pnl=daily.get(today, 0.0),
        max_profit=max(values),
        max_loss=min(values),
        win_rate=win_rate(winning_days, trading_days),
        avg_daily_pnl=total_pnl / trading_days,
        max_drawdown=max_drawdown(values),
        capital_allocated=capital_allocated,
        current_equity=capital_allocated + total_pnl,
        trading_days=trading_days,
        winning_days=winning_days,
        losing_days=losing_days,
        max_consecutive_wins=max_wins,
        max_consecutive_losses=max_losses,
    )


def compute_employee_stats(
    records: list[TradeRecord],
    users: list[UserProfile],
    today: date,
) -> list[EmployeeStats]:
    """One EmployeeStats per user, in the order of *users*, from already-scoped records."""
    by_user: dict[int, list[TradeRecord]] = defaultdict(list)
    for r in records:
        by_user[r.user_id].append(r)
    return [employee_stats_for(u, by_user.get(u.id, []), today) for u in users]


# ---------------------------------------------------------------------------
# Company stats
# ---------------------------------------------------------------------------

def compute_company_stats(
    records: list[TradeRecord],
    now: Optional[datetime] = None,
    account_count: int = 0,
) -> CompanyStats:
    """Company-wide KPIs over every record, independent of the dashboard filter."""
    today = today_et(now)
    week = resolve_date_range(DateRangeFilter.WEEK, now)
    month = resolve_date_range(DateRangeFilter.MONTH, now)

    total_pnl = today_pnl = week_pnl = month_pnl = 0.0
    for r in records:
        pnl = float(r.net_pnl)
        total_pnl += pnl
        if r.trade_date == today:
            today_pnl += pnl
        if week.contains(r.trade_date):
            week_pnl += pnl
        if month.contains(r.trade_date):
            month_pnl += pnl

    daily = daily_totals(records)
    best_date, best, worst_date, worst = best_and_worst_day(daily)
    capital = account_count * BASE_CAPITAL_PER_ACCOUNT

    return CompanyStats(
        total_pnl=total_pnl,
        today_pnl=today_pnl,
        week_pnl=week_pnl,
        month_pnl=month_pnl,
        total_realized_profit=sum(v for v in daily.values() if v > 0),
        total_realized_loss=abs(sum(v for v in daily.values() if v < 0)),
        best_day_pnl=best,
        best_day_date=best_date,
        worst_day_pnl=worst,
        worst_day_date=worst_date,
        total_active_employees=len({r.user_id for r in records}),
        max_drawdown=max_drawdown(daily.values()),
        total_capital_deployed=capital,
        net_company_equity=capital + total_pnl,
    )


# ---------------------------------------------------------------------------
# Dashboard entry point
# ---------------------------------------------------------------------------

@dataclass
class DashboardData:
    date_range: DateRange
    company_stats: CompanyStats
    employee_stats: list[EmployeeStats]
    daily_pnl: list[DailyPnL]
    filtered_records: list[TradeRecord] = field(default_factory=list)

    def employee_daily_pnl(self, user_id: int) -> list[DailyPnL]:
        """Daily series for a single employee within the dashboard's range."""
        own = [r for r in self.filtered_records if r.user_id == user_id]
        return build_daily_series(own, BASE_CAPITAL_PER_ACCOUNT)

    def employee(self, user_id: int) -> Optional[EmployeeStats]:
        return next((e for e in self.employee_stats if e.user_id == user_id), None)


def aggregate_performance(
    records: list[TradeRecord],
    users: list[UserProfile],
    date_filter: DateRangeFilter | str = DateRangeFilter.LIFETIME,
    custom_range: Optional[DateRange] = None,
    now: Optional[datetime] = None,
    account_count: int = 0,
) -> DashboardData:
    """Everything the admin dashboard shows, recomputed from scratch."""
    date_range = resolve_date_range(date_filter, now, custom_range)
    scoped = filter_records(records, date_range)
    today = today_et(now)

    return DashboardData(
        date_range=date_range,
        company_stats=compute_company_stats(records, now, account_count),
        employee_stats=compute_employee_stats(scoped, users, today),
        daily_pnl=build_daily_series(scoped, account_count * BASE_CAPITAL_PER_ACCOUNT),
        filtered_records=scoped,
    )
