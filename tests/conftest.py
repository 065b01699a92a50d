"""Shared fixtures: a throwaway SQLite database and record builders."""

from __future__ import annotations

from datetime import date
from unittest.mock import patch

import pytest

from models import TradeRecord, UserProfile


@pytest.fixture()
def tmp_db(tmp_path):
    """Point the app at a temporary SQLite DB created from the real schema."""
    db_path = str(tmp_path / "test.db")
    with patch("db.DB_PATH", db_path):
        import db
        db.init_db()
        yield db_path


def rec(user_id: int, day: date, pnl: float, account_id: int = 1, shares: int = 0,
        holiday: bool = False) -> TradeRecord:
    return TradeRecord(
        user_id=user_id,
        account_id=account_id,
        trade_date=day,
        net_pnl=pnl,
        shares_traded=shares,
        is_holiday=holiday,
    )


def profile(user_id: int, name: str = "") -> UserProfile:
    name = name or f"Trader {user_id}"
    return UserProfile(id=user_id, name=name, email=f"t{user_id}@desk.test")
