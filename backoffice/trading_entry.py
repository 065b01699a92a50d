"""Dual-account daily trading entry — validation and submission."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Optional

import db

logger = logging.getLogger(__name__)


@dataclass
class AccountLeg:
    """One account's result inside a daily entry."""
    account_id: Optional[int]
    net_pnl: float = 0.0
    shares_traded: int = 0


@dataclass
class DailyEntry:
    user_id: Optional[int]
    trade_date: Optional[date]
    legs: list[AccountLeg] = field(default_factory=list)
    is_holiday: bool = False
    late_remarks: str = ""
    notes: str = ""


def validate_entry(entry: DailyEntry):
    """Raise ValueError describing the first problem with *entry*."""
    if entry.user_id is None:
        raise ValueError("Please select a trader.")
    if entry.trade_date is None:
        raise ValueError("Please select a date.")

    legs = [leg for leg in entry.legs if leg.account_id is not None]
    if not legs:
        raise ValueError("Please select at least one account.")
    if len(legs) > 2:
        raise ValueError("At most two accounts can be entered per day.")
    if len(legs) == 2 and legs[0].account_id == legs[1].account_id:
        raise ValueError("Account 1 and Account 2 must be different.")
    for leg in legs:
        if leg.shares_traded < 0:
            raise ValueError("Shares traded cannot be negative.")


def entry_rows(entry: DailyEntry) -> list[dict]:
    """trading_data rows for a validated entry, one per selected account."""
    return [
        {
            "user_id": entry.user_id,
            "account_id": leg.account_id,
            "trade_date": entry.trade_date,
            "net_pnl": float(leg.net_pnl),
            "shares_traded": int(leg.shares_traded),
            "is_holiday": bool(entry.is_holiday),
            "late_remarks": entry.late_remarks.strip() or None,
            "notes": entry.notes.strip() or None,
        }
        for leg in entry.legs
        if leg.account_id is not None
    ]


def submit_entry(entry: DailyEntry) -> int:
    """Validate then persist. Returns number of rows written.

    Raises ValueError on validation failure or a duplicate daily record;
    nothing is written in either case.
    """
    validate_entry(entry)
    count = db.insert_trading_data(entry_rows(entry))
    logger.info(
        "Saved %d trading row(s) for user %s on %s",
        count, entry.user_id, entry.trade_date.isoformat(),
    )
    return count
