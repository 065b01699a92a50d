"""Date-range resolution for the dashboard filters and period selectors.

All ranges are inclusive calendar-date intervals in US/Eastern.
"""

from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta
from typing import Optional

from analytics.market_hours import today_et
from config import CUSTOM_RANGE_FALLBACK_DAYS, LIFETIME_START
from models import DateRange, DateRangeFilter, TradeRecord


def _quarter_start_month(month: int) -> int:
    return 3 * ((month - 1) // 3) + 1


def _month_end(year: int, month: int) -> date:
    return date(year, month, calendar.monthrange(year, month)[1])


def resolve_date_range(
    date_filter: DateRangeFilter | str,
    now: Optional[datetime] = None,
    custom_range: Optional[DateRange] = None,
) -> DateRange:
    """Turn a named filter into concrete [start, end] bounds relative to *now*.

    Unrecognised filter names resolve to the lifetime range.
    """
    try:
        date_filter = DateRangeFilter(date_filter)
    except ValueError:
        date_filter = DateRangeFilter.LIFETIME
    today = today_et(now)

    if date_filter == DateRangeFilter.TODAY:
        return DateRange(today, today)
    if date_filter == DateRangeFilter.WEEK:
        monday = today - timedelta(days=today.weekday())
        return DateRange(monday, monday + timedelta(days=6))
    if date_filter == DateRangeFilter.MONTH:
        return DateRange(today.replace(day=1), _month_end(today.year, today.month))
    if date_filter == DateRangeFilter.QUARTER:
        first = _quarter_start_month(today.month)
        return DateRange(date(today.year, first, 1), _month_end(today.year, first + 2))
    if date_filter == DateRangeFilter.YEAR:
        return DateRange(date(today.year, 1, 1), date(today.year, 12, 31))
    if date_filter == DateRangeFilter.CUSTOM:
        if custom_range is not None:
            return custom_range
        return DateRange(today - timedelta(days=CUSTOM_RANGE_FALLBACK_DAYS), today)
    return DateRange(LIFETIME_START, today)


def filter_records(records: list[TradeRecord], date_range: DateRange) -> list[TradeRecord]:
    """Records whose trade_date falls within the range, inclusive on both ends."""
    return [r for r in records if date_range.contains(r.trade_date)]


# ---------------------------------------------------------------------------
# Explicit period selection (Trading Data view)
# ---------------------------------------------------------------------------

def period_range(
    kind: str,
    year: int,
    month: Optional[int] = None,
    quarter: Optional[int] = None,
) -> DateRange:
    """Bounds of a specific month, quarter or year.

    kind: "monthly" | "quarterly" | "yearly"
    """
    if kind == "monthly":
        if month is None:
            raise ValueError("month is required for a monthly period")
        return DateRange(date(year, month, 1), _month_end(year, month))
    if kind == "quarterly":
        if quarter not in (1, 2, 3, 4):
            raise ValueError("quarter must be 1-4")
        first = (quarter - 1) * 3 + 1
        return DateRange(date(year, first, 1), _month_end(year, first + 2))
    if kind == "yearly":
        return DateRange(date(year, 1, 1), date(year, 12, 31))
    raise ValueError(f"Unknown period kind: {kind}")


def recent_months(now: Optional[datetime] = None, count: int = 12) -> list[str]:
    """The last *count* months as 'YYYY-MM', newest first."""
    today = today_et(now)
    year, month = today.year, today.month
    months = []
    for _ in range(count):
        months.append(f"{year:04d}-{month:02d}")
        month -= 1
        if month == 0:
            year, month = year - 1, 12
    return months


def recent_quarters(now: Optional[datetime] = None, years: int = 3) -> list[str]:
    """Quarters as 'YYYY-Qn' for the current and previous years, newest first."""
    current_year = today_et(now).year
    return [
        f"{y}-Q{q}"
        for y in range(current_year, current_year - years, -1)
        for q in (4, 3, 2, 1)
    ]
