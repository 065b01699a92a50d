"""Tests for users, admin operations, auth, leave and attendance stores."""

from __future__ import annotations

from datetime import date

import pytest


ADMIN = {"id": 1, "email": "admin@desk.test", "full_name": "Admin", "role": "admin"}
TRADER = {"id": 2, "email": "t@desk.test", "full_name": "Trader", "role": "user"}


@pytest.fixture()
def trader_id(tmp_db):
    from auth import hash_password
    from backoffice.accounts import create_user

    return create_user("trader@desk.test", hash_password("secret1"), "Asha Trader")


# ---------------------------------------------------------------------------
# Schema seed & accounts
# ---------------------------------------------------------------------------

class TestSeedAndAccounts:
    def test_default_admin_seeded_once(self, tmp_db):
        import db
        from backoffice.accounts import get_profiles
        from config import DEFAULT_ADMIN_EMAIL

        db.init_db()
        admins = get_profiles(role="admin")
        assert len(admins) == 1
        assert admins[0].email == DEFAULT_ADMIN_EMAIL.lower()

    def test_duplicate_email(self, trader_id):
        from backoffice.accounts import create_user

        with pytest.raises(ValueError, match="already exists"):
            create_user("TRADER@desk.test ", "x", "Dup")

    def test_profiles_filtered_by_role(self, trader_id):
        from backoffice.accounts import get_profiles

        users = get_profiles(role="user")
        assert [u.name for u in users] == ["Asha Trader"]

    def test_account_crud(self, trader_id):
        from backoffice.accounts import (
            assign_account,
            create_account,
            delete_account,
            get_account_count,
            get_accounts,
        )

        acct = create_account(" Main ", " 123 ")
        assert get_accounts(trader_id).empty
        assign_account(acct, trader_id)
        mine = get_accounts(trader_id)
        assert list(mine["account_name"]) == ["Main"]
        assert mine.iloc[0]["account_number"] == "123"
        assert mine.iloc[0]["owner"] == "Asha Trader"
        assert get_account_count() == 1
        delete_account(acct)
        assert get_account_count() == 0

    def test_account_name_required(self, tmp_db):
        from backoffice.accounts import create_account

        with pytest.raises(ValueError):
            create_account("   ")

    def test_rename_profile(self, trader_id):
        from auth import get_user_by_id
        from backoffice.accounts import rename_profile

        rename_profile(trader_id, "  Asha K.  ")
        assert get_user_by_id(trader_id)["full_name"] == "Asha K."
        with pytest.raises(ValueError):
            rename_profile(trader_id, " ")


# ---------------------------------------------------------------------------
# Admin operations
# ---------------------------------------------------------------------------

class TestRunAdminAction:
    def test_requires_caller(self, tmp_db):
        from backoffice.admin_operations import run_admin_action

        assert run_admin_action(None, "create_user", {}) == {"error": "Unauthorized", "status": 401}

    def test_requires_admin_role(self, tmp_db):
        from backoffice.admin_operations import run_admin_action

        result = run_admin_action(TRADER, "delete_user", {"user_id": 1})
        assert result["status"] == 403

    def test_unknown_action(self, tmp_db):
        from backoffice.admin_operations import run_admin_action

        assert run_admin_action(ADMIN, "promote", {})["status"] == 400

    def test_create_user_and_login(self, tmp_db):
        from auth import authenticate_user
        from backoffice.admin_operations import run_admin_action

        result = run_admin_action(ADMIN, "create_user", {
            "email": "New@Desk.test", "password": "hunter22", "full_name": "New Hire",
        })
        assert result["success"] is True
        user = authenticate_user("new@desk.test", "hunter22")
        assert user["id"] == result["user_id"]
        assert user["role"] == "user"

    def test_create_admin_role(self, tmp_db):
        from auth import get_user_by_id
        from backoffice.admin_operations import run_admin_action

        result = run_admin_action(ADMIN, "create_user", {
            "email": "boss@desk.test", "password": "hunter22", "full_name": "Boss", "role": "admin",
        })
        assert get_user_by_id(result["user_id"])["role"] == "admin"

    @pytest.mark.parametrize("payload", [
        {"email": "a@b.c", "password": "hunter22"},
        {"email": "a@b.c", "password": "123", "full_name": "Short"},
        {"email": "a@b.c", "password": "hunter22", "full_name": "X", "role": "root"},
    ])
    def test_create_user_bad_input(self, tmp_db, payload):
        from backoffice.admin_operations import run_admin_action

        assert run_admin_action(ADMIN, "create_user", payload)["status"] == 400

    def test_create_duplicate_email(self, trader_id):
        from backoffice.admin_operations import run_admin_action

        result = run_admin_action(ADMIN, "create_user", {
            "email": "trader@desk.test", "password": "hunter22", "full_name": "Again",
        })
        assert result == {"error": "A user with this email already exists.", "status": 400}

    def test_reset_password(self, trader_id):
        from auth import authenticate_user
        from backoffice.admin_operations import run_admin_action

        assert run_admin_action(ADMIN, "reset_password",
                                {"user_id": trader_id, "password": "newpass1"}) == {"success": True}
        assert authenticate_user("trader@desk.test", "secret1") is None
        assert authenticate_user("trader@desk.test", "newpass1") is not None

    def test_reset_password_too_short(self, trader_id):
        from backoffice.admin_operations import run_admin_action

        result = run_admin_action(ADMIN, "reset_password", {"user_id": trader_id, "password": "abc"})
        assert result["status"] == 400

    def test_delete_user(self, trader_id):
        from auth import get_user_by_id
        from backoffice.admin_operations import run_admin_action

        assert run_admin_action(ADMIN, "delete_user", {"user_id": trader_id}) == {"success": True}
        assert get_user_by_id(trader_id) is None
        assert run_admin_action(ADMIN, "delete_user", {"user_id": trader_id})["status"] == 400

    def test_unexpected_error_is_500(self, tmp_db):
        from unittest.mock import patch

        from backoffice.admin_operations import run_admin_action

        with patch("backoffice.accounts.delete_user", side_effect=RuntimeError("disk full")):
            result = run_admin_action(ADMIN, "delete_user", {"user_id": 5})
        assert result == {"error": "disk full", "status": 500}


# ---------------------------------------------------------------------------
# Auth
# ---------------------------------------------------------------------------

class TestAuth:
    def test_wrong_password(self, trader_id):
        from auth import authenticate_user

        assert authenticate_user("trader@desk.test", "nope") is None

    def test_change_password(self, trader_id):
        from auth import authenticate_user, change_password

        with pytest.raises(ValueError, match="incorrect"):
            change_password(trader_id, "wrong", "another1")
        change_password(trader_id, "secret1", "another1")
        assert authenticate_user("trader@desk.test", "another1")["id"] == trader_id

    def test_change_password_validates_length(self, trader_id):
        from auth import change_password

        with pytest.raises(ValueError, match="at least"):
            change_password(trader_id, "secret1", "abc")

    def test_session_token_roundtrip(self, trader_id):
        from auth import _create_session_token, _delete_session_token, _get_user_by_token

        token = _create_session_token(trader_id)
        assert _get_user_by_token(token)["id"] == trader_id
        _delete_session_token(token)
        assert _get_user_by_token(token) is None

    def test_is_admin(self):
        from auth import is_admin

        assert is_admin(ADMIN)
        assert not is_admin(TRADER)
        assert not is_admin(None)


# ---------------------------------------------------------------------------
# Leave
# ---------------------------------------------------------------------------

class TestLeaveStore:
    def test_balance_defaults_without_row(self, trader_id):
        from backoffice.leave_store import get_balance

        assert get_balance(trader_id, 2024).remaining == 18

    def test_apply_and_approve_creates_balance(self, trader_id):
        from backoffice.leave_store import apply_leave, approve_leave, get_balance, get_leave_requests

        req = apply_leave(trader_id, date(2024, 7, 1), "half", "dentist")
        updated = approve_leave(req)
        assert updated.used_leaves == 0.5
        assert get_balance(trader_id, 2024).remaining == 17.5
        assert get_leave_requests(trader_id).iloc[0]["status"] == "approved"

    def test_approve_twice_rejected(self, trader_id):
        from backoffice.leave_store import apply_leave, approve_leave, get_balance

        req = apply_leave(trader_id, date(2024, 7, 1), "full")
        approve_leave(req)
        with pytest.raises(ValueError, match="already approved"):
            approve_leave(req)
        assert get_balance(trader_id, 2024).used_leaves == 1

    def test_reject(self, trader_id):
        from backoffice.leave_store import apply_leave, get_balance, get_leave_requests, reject_leave

        req = apply_leave(trader_id, date(2024, 7, 1), "full")
        reject_leave(req)
        assert get_leave_requests(trader_id, status="rejected")["id"].tolist() == [req]
        assert get_balance(trader_id, 2024).used_leaves == 0

    def test_apply_beyond_balance(self, trader_id):
        from db import get_db
        from backoffice.leave_store import apply_leave

        with get_db() as conn:
            conn.execute(
                "INSERT INTO leave_balances (user_id, year, total_leaves, used_leaves) VALUES (?, 2024, 18, 17.5)",
                (trader_id,),
            )
        with pytest.raises(ValueError, match="Insufficient"):
            apply_leave(trader_id, date(2024, 12, 1), "full")
        apply_leave(trader_id, date(2024, 12, 1), "half")

    def test_balance_is_per_year(self, trader_id):
        from backoffice.leave_store import apply_leave, approve_leave, get_balance

        approve_leave(apply_leave(trader_id, date(2024, 12, 30), "full"))
        assert get_balance(trader_id, 2025).used_leaves == 0

    def test_balances_keyed_by_user(self, trader_id):
        from backoffice.leave_store import apply_leave, approve_leave, get_balances

        assert get_balances(2024) == {}
        approve_leave(apply_leave(trader_id, date(2024, 3, 4), "half"))
        balances = get_balances(2024)
        assert list(balances) == [trader_id]
        assert balances[trader_id].remaining == 17.5
        assert get_balances(2023) == {}

    def test_monthly_summary(self, trader_id):
        from backoffice.attendance import mark_attendance
        from backoffice.leave_store import apply_leave, approve_leave, monthly_leave_summary

        approve_leave(apply_leave(trader_id, date(2024, 7, 2), "full"))
        approve_leave(apply_leave(trader_id, date(2024, 7, 9), "full"))
        apply_leave(trader_id, date(2024, 7, 10), "half")  # still pending
        approve_leave(apply_leave(trader_id, date(2024, 8, 1), "half"))
        mark_attendance(trader_id, date(2024, 7, 3), "late", is_deductible=True)

        s = monthly_leave_summary(trader_id, 2024, 7)
        assert s.used_full_days == 2
        assert s.used_half_days == 0
        assert s.excess_days == 1.0
        assert s.late_count == 1
        assert s.deductible_count == 1

    def test_holidays(self, tmp_db):
        from backoffice.leave_store import add_holiday, delete_holiday, get_holidays

        hid = add_holiday(date(2024, 12, 25), "Christmas")
        add_holiday(date(2025, 1, 1), "New Year")
        with pytest.raises(ValueError, match="already exists"):
            add_holiday(date(2024, 12, 25), "Again")
        assert get_holidays(2024)["name"].tolist() == ["Christmas"]
        delete_holiday(hid)
        assert get_holidays()["name"].tolist() == ["New Year"]


# ---------------------------------------------------------------------------
# Attendance
# ---------------------------------------------------------------------------

class TestAttendance:
    def test_upsert_one_row_per_day(self, trader_id):
        from backoffice.attendance import get_attendance, get_month_attendance, mark_attendance

        mark_attendance(trader_id, date(2024, 7, 3), "late", notes="train")
        mark_attendance(trader_id, date(2024, 7, 3), "present")
        rows = get_month_attendance(trader_id, 2024, 7)
        assert len(rows) == 1
        assert rows[0]["status"] == "present"
        assert rows[0]["notes"] is None
        assert get_attendance(trader_id).iloc[0]["employee"] == "Asha Trader"

    def test_unknown_status(self, trader_id):
        from backoffice.attendance import mark_attendance

        with pytest.raises(ValueError):
            mark_attendance(trader_id, date(2024, 7, 3), "vacation")

    def test_delete(self, trader_id):
        from backoffice.attendance import delete_attendance, get_attendance, mark_attendance

        mark_attendance(trader_id, date(2024, 7, 3), "absent", is_deductible=True)
        df = get_attendance(trader_id)
        assert bool(df.iloc[0]["is_deductible"]) is True
        delete_attendance(int(df.iloc[0]["id"]))
        assert get_attendance(trader_id).empty
