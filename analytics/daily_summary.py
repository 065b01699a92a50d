"""Personal daily summary — P&L across accounts per day, brokerage, and trader analytics."""

from __future__ import annotations

from collections import defaultdict
from datetime import date

from analytics.performance import compute_streaks, win_rate
from config import BROKERAGE_PER_1000_SHARES
from models import DailySummary, GroupTotal, TradeRecord, TradingSummary


def brokerage_for(shares: int) -> float:
    """Brokerage charged on a share count ($14 per 1,000 shares)."""
    return shares / 1000 * BROKERAGE_PER_1000_SHARES


def build_daily_summary(records: list[TradeRecord]) -> list[DailySummary]:
    """Combine a trader's rows per date (both accounts), oldest first."""
    pnl: dict[date, float] = defaultdict(float)
    shares: dict[date, int] = defaultdict(int)
    for r in records:
        pnl[r.trade_date] += float(r.net_pnl)
        shares[r.trade_date] += int(r.shares_traded)

    summary = []
    for day in sorted(pnl):
        fee = brokerage_for(shares[day])
        summary.append(DailySummary(
            date=day,
            combined_pnl=pnl[day],
            total_shares=shares[day],
            brokerage=fee,
            net_after_brokerage=pnl[day] - fee,
        ))
    return summary


def count_trading_days(records: list[TradeRecord]) -> int:
    """Rows that are not holidays."""
    return sum(1 for r in records if not r.is_holiday)


def summarize_trading(daily: list[DailySummary]) -> TradingSummary:
    """Best/worst day, win rate, profit factor and streaks on net-after-brokerage."""
    if not daily:
        return TradingSummary()

    ordered = sorted(daily, key=lambda d: d.date)
    nets = [d.net_after_brokerage for d in ordered]
    winners = [v for v in nets if v > 0]
    losers = [v for v in nets if v < 0]

    best = worst = ordered[0]
    for d in ordered[1:]:
        if d.net_after_brokerage > best.net_after_brokerage:
            best = d
        if d.net_after_brokerage < worst.net_after_brokerage:
            worst = d

    total_profit = sum(winners)
    total_loss = abs(sum(losers))
    if total_loss > 0:
        profit_factor = total_profit / total_loss
    elif total_profit > 0:
        profit_factor = float("inf")
    else:
        profit_factor = 0.0

    max_wins, max_losses = compute_streaks(nets)

    return TradingSummary(
        best_day=best,
        worst_day=worst,
        avg_daily_pnl=sum(nets) / len(nets),
        winning_days=len(winners),
        losing_days=len(losers),
        win_rate=win_rate(len(winners), len(nets)),
        avg_winning_day=total_profit / len(winners) if winners else 0.0,
        avg_losing_day=sum(losers) / len(losers) if losers else 0.0,
        profit_factor=profit_factor,
        max_consecutive_wins=max_wins,
        max_consecutive_losses=max_losses,
    )


def group_totals(records: list[TradeRecord], by: str = "user") -> list[GroupTotal]:
    """Group rows by person ("user") or by account ("account"), keeping input order."""
    if by not in ("user", "account"):
        raise ValueError(f"Unknown grouping: {by}")
    groups: dict[int, list[TradeRecord]] = {}
    for r in records:
        key = r.user_id if by == "user" else r.account_id
        groups.setdefault(key, []).append(r)
    return [
        GroupTotal(
            key=key,
            entries=len(rows),
            total_pnl=sum(float(r.net_pnl) for r in rows),
            total_shares=sum(int(r.shares_traded) for r in rows),
            records=rows,
        )
        for key, rows in groups.items()
    ]
