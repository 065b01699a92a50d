"""Tests for dual-account trading entry and trading_data persistence."""

from __future__ import annotations

from datetime import date

import pytest

from backoffice.trading_entry import AccountLeg, DailyEntry, entry_rows, submit_entry, validate_entry


@pytest.fixture()
def desk(tmp_db):
    """One trader with two accounts."""
    from backoffice.accounts import create_account, create_user

    user_id = create_user("trader@desk.test", "x", "Asha Trader")
    a1 = create_account("Main", "ACC-1", user_id)
    a2 = create_account("Second", None, user_id)
    return user_id, a1, a2


def _entry(user_id, legs, day=date(2024, 6, 12), **kw):
    return DailyEntry(user_id=user_id, trade_date=day, legs=legs, **kw)


class TestValidateEntry:
    def test_trader_required(self):
        with pytest.raises(ValueError, match="trader"):
            validate_entry(_entry(None, [AccountLeg(1)]))

    def test_date_required(self):
        with pytest.raises(ValueError, match="date"):
            validate_entry(DailyEntry(user_id=1, trade_date=None, legs=[AccountLeg(1)]))

    def test_at_least_one_account(self):
        with pytest.raises(ValueError, match="at least one account"):
            validate_entry(_entry(1, [AccountLeg(None), AccountLeg(None)]))

    def test_accounts_must_differ(self):
        with pytest.raises(ValueError, match="different"):
            validate_entry(_entry(1, [AccountLeg(3, 10), AccountLeg(3, 20)]))

    def test_negative_shares(self):
        with pytest.raises(ValueError, match="negative"):
            validate_entry(_entry(1, [AccountLeg(3, 10, -5)]))

    def test_second_account_optional(self):
        validate_entry(_entry(1, [AccountLeg(3, 10, 100), AccountLeg(None)]))

    def test_rows_skip_empty_leg_and_blank_text(self):
        rows = entry_rows(_entry(1, [AccountLeg(3, 10, 100), AccountLeg(None)], notes="  "))
        assert len(rows) == 1
        assert rows[0]["account_id"] == 3
        assert rows[0]["notes"] is None


class TestSubmitEntry:
    def test_two_accounts_written(self, desk):
        from db import get_trade_records

        user_id, a1, a2 = desk
        count = submit_entry(_entry(user_id, [AccountLeg(a1, 250.5, 1200), AccountLeg(a2, -40, 300)]))
        assert count == 2
        records = get_trade_records(user_id)
        assert sorted(r.net_pnl for r in records) == [-40, 250.5]
        assert {r.trade_date for r in records} == {date(2024, 6, 12)}

    def test_assignment_upserted(self, desk):
        from db import get_db

        user_id, a1, _ = desk
        submit_entry(_entry(user_id, [AccountLeg(a1, 1)]))
        submit_entry(_entry(user_id, [AccountLeg(a1, 1)], day=date(2024, 6, 13)))
        with get_db() as conn:
            rows = conn.execute(
                "SELECT assignment_date FROM trader_account_assignments WHERE user_id=? ORDER BY 1",
                (user_id,),
            ).fetchall()
        assert [r["assignment_date"] for r in rows] == ["2024-06-12", "2024-06-13"]

    def test_duplicate_rejected_with_message(self, desk):
        from db import DUPLICATE_DAILY_RECORD_MSG, get_trade_records

        user_id, a1, a2 = desk
        submit_entry(_entry(user_id, [AccountLeg(a1, 100)]))
        with pytest.raises(ValueError) as exc:
            submit_entry(_entry(user_id, [AccountLeg(a2, 5), AccountLeg(a1, 200)]))
        assert str(exc.value) == DUPLICATE_DAILY_RECORD_MSG
        # whole entry rolled back, including the non-duplicate leg
        assert [r.net_pnl for r in get_trade_records(user_id)] == [100]

    def test_invalid_entry_writes_nothing(self, desk):
        from db import get_trade_records

        user_id, a1, _ = desk
        with pytest.raises(ValueError):
            submit_entry(_entry(user_id, [AccountLeg(a1, 1), AccountLeg(a1, 2)]))
        assert get_trade_records(user_id) == []


class TestTradingData:
    def test_frame_has_names_and_types(self, desk):
        from db import get_trading_data

        user_id, a1, _ = desk
        submit_entry(_entry(user_id, [AccountLeg(a1, 10, 100)], is_holiday=True, late_remarks="traffic"))
        df = get_trading_data(user_id)
        row = df.iloc[0]
        assert row["trader"] == "Asha Trader"
        assert row["account_name"] == "Main"
        assert row["trade_date"] == date(2024, 6, 12)
        assert bool(row["is_holiday"]) is True
        assert row["late_remarks"] == "traffic"

    def test_scoped_by_user_and_dates(self, desk):
        from backoffice.accounts import create_user
        from db import get_trading_data

        user_id, a1, _ = desk
        other = create_user("other@desk.test", "x", "Other")
        submit_entry(_entry(user_id, [AccountLeg(a1, 1)], day=date(2024, 6, 1)))
        submit_entry(_entry(user_id, [AccountLeg(a1, 2)], day=date(2024, 6, 20)))
        submit_entry(_entry(other, [AccountLeg(a1, 3)], day=date(2024, 6, 20)))

        assert len(get_trading_data()) == 3
        assert len(get_trading_data(user_id)) == 2
        june_late = get_trading_data(user_id, start=date(2024, 6, 10), end=date(2024, 6, 30))
        assert list(june_late["net_pnl"]) == [2]

    def test_delete(self, desk):
        from db import delete_trading_data, get_trade_records

        user_id, a1, _ = desk
        submit_entry(_entry(user_id, [AccountLeg(a1, 1)]))
        record = get_trade_records(user_id)[0]
        delete_trading_data(record.id)
        assert get_trade_records(user_id) == []

    def test_deleting_user_cascades(self, desk):
        from backoffice.accounts import delete_user
        from db import get_trade_records

        user_id, a1, _ = desk
        submit_entry(_entry(user_id, [AccountLeg(a1, 1)]))
        assert delete_user(user_id)
        assert get_trade_records() == []
