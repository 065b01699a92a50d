"""Shared US/Eastern clock helpers — every day boundary in the app goes through here."""

from __future__ import annotations

from datetime import date, datetime

import pytz

from config import (
    MARKET_CLOSE_HOUR,
    MARKET_CLOSE_MINUTE,
    MARKET_OPEN_HOUR,
    MARKET_OPEN_MINUTE,
    MARKET_TIMEZONE,
)

ET = pytz.timezone(MARKET_TIMEZONE)


def now_et() -> datetime:
    return datetime.now(ET)


def to_et(moment: datetime) -> datetime:
    """Convert an aware datetime to Eastern; naive values are taken as Eastern already."""
    if moment.tzinfo is None:
        return ET.localize(moment)
    return moment.astimezone(ET)


def today_et(now: datetime | None = None) -> date:
    """Civil date in US/Eastern for *now* (defaults to the wall clock)."""
    return to_et(now).date() if now is not None else now_et().date()


def is_market_hours(now: datetime | None = None) -> bool:
    """Check if the time is within US market hours (weekday, 9:30-16:00 ET)."""
    now = to_et(now) if now is not None else now_et()
    if now.weekday() >= 5:  # Saturday=5, Sunday=6
        return False
    market_open = now.replace(
        hour=MARKET_OPEN_HOUR, minute=MARKET_OPEN_MINUTE, second=0, microsecond=0,
    )
    market_close = now.replace(
        hour=MARKET_CLOSE_HOUR, minute=MARKET_CLOSE_MINUTE, second=0, microsecond=0,
    )
    return market_open <= now <= market_close
