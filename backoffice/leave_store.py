"""Leave requests, balances and holidays — SQLite CRUD."""

from __future__ import annotations

import logging
import sqlite3
from datetime import date
from typing import Optional

import pandas as pd

from analytics.leave_rules import (
    apply_approval,
    can_apply,
    default_balance,
    leave_deduction,
    summarize_month,
)
from backoffice.attendance import get_month_attendance
from db import get_db
from models import LeaveBalance, MonthlyLeaveSummary

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Balances
# ---------------------------------------------------------------------------

def get_balance(user_id: int, year: int) -> LeaveBalance:
    """The user's balance for *year*; the default allowance if no row exists yet."""
    with get_db() as conn:
        row = conn.execute(
            "SELECT total_leaves, used_leaves FROM leave_balances WHERE user_id=? AND year=?",
            (user_id, year),
        ).fetchone()
    if not row:
        return default_balance()
    return LeaveBalance(total_leaves=row["total_leaves"], used_leaves=row["used_leaves"])


def get_balances(year: int) -> dict[int, LeaveBalance]:
    """Stored balances for *year* keyed by user_id. Users without a row are absent."""
    with get_db() as conn:
        rows = conn.execute(
            "SELECT user_id, total_leaves, used_leaves FROM leave_balances WHERE year=?",
            (year,),
        ).fetchall()
    return {
        r["user_id"]: LeaveBalance(total_leaves=r["total_leaves"], used_leaves=r["used_leaves"])
        for r in rows
    }


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------

def apply_leave(user_id: int, leave_date: date, leave_type: str, reason: str = "") -> int:
    """File a pending request. Raises ValueError when the balance can't cover it."""
    balance = get_balance(user_id, leave_date.year)
    if not can_apply(balance, leave_type):
        raise ValueError(
            f"Insufficient leave balance. You have {balance.remaining:g} day(s) remaining."
        )
    with get_db() as conn:
        cur = conn.execute(
            "INSERT INTO leave_requests (user_id, leave_date, leave_type, reason) VALUES (?, ?, ?, ?)",
            (user_id, leave_date.isoformat(), leave_type, reason.strip() or None),
        )
        return cur.lastrowid


def _get_request(conn, request_id: int):
    row = conn.execute(
        "SELECT id, user_id, leave_date, leave_type, status FROM leave_requests WHERE id=?",
        (request_id,),
    ).fetchone()
    if not row:
        raise ValueError("Leave request not found.")
    if row["status"] != "pending":
        raise ValueError(f"Request is already {row['status']}.")
    return row


def approve_leave(request_id: int) -> LeaveBalance:
    """Approve a pending request and deduct it from the user's balance for that year."""
    with get_db() as conn:
        req = _get_request(conn, request_id)
        year = date.fromisoformat(req["leave_date"]).year
        row = conn.execute(
            "SELECT total_leaves, used_leaves FROM leave_balances WHERE user_id=? AND year=?",
            (req["user_id"], year),
        ).fetchone()
        current = (
            LeaveBalance(total_leaves=row["total_leaves"], used_leaves=row["used_leaves"])
            if row else default_balance()
        )
        updated = apply_approval(current, req["leave_type"])

        conn.execute("UPDATE leave_requests SET status='approved' WHERE id=?", (request_id,))
        conn.execute(
            """INSERT INTO leave_balances (user_id, year, total_leaves, used_leaves)
               VALUES (?, ?, ?, ?)
               ON CONFLICT(user_id, year) DO UPDATE SET used_leaves=excluded.used_leaves""",
            (req["user_id"], year, updated.total_leaves, updated.used_leaves),
        )
    logger.info(
        "Approved %s leave %s for user %s (-%g)",
        req["leave_type"], req["leave_date"], req["user_id"], leave_deduction(req["leave_type"]),
    )
    return updated


def reject_leave(request_id: int):
    with get_db() as conn:
        _get_request(conn, request_id)
        conn.execute("UPDATE leave_requests SET status='rejected' WHERE id=?", (request_id,))
    logger.info("Rejected leave request %s", request_id)


def get_leave_requests(user_id: Optional[int] = None, status: Optional[str] = None) -> pd.DataFrame:
    """Requests with requester names, newest leave date first."""
    query = """
        SELECT r.id, r.user_id, u.full_name AS employee, r.leave_date, r.leave_type,
               r.status, r.reason, r.created_at
        FROM leave_requests r JOIN users u ON u.id = r.user_id
        WHERE 1=1
    """
    params: list = []
    if user_id is not None:
        query += " AND r.user_id=?"
        params.append(user_id)
    if status:
        query += " AND r.status=?"
        params.append(status)
    query += " ORDER BY r.leave_date DESC, r.id DESC"
    with get_db() as conn:
        return pd.read_sql_query(query, conn, params=params)


def _approved_leave_types(user_id: int, year: int, month: int) -> list[str]:
    prefix = f"{year:04d}-{month:02d}-%"
    with get_db() as conn:
        rows = conn.execute(
            """SELECT leave_type FROM leave_requests
               WHERE user_id=? AND status='approved' AND leave_date LIKE ?""",
            (user_id, prefix),
        ).fetchall()
    return [r["leave_type"] for r in rows]


def monthly_leave_summary(user_id: int, year: int, month: int) -> MonthlyLeaveSummary:
    """Allowance usage for one user and month, from approved leaves and attendance."""
    return summarize_month(
        user_id,
        year,
        month,
        _approved_leave_types(user_id, year, month),
        get_month_attendance(user_id, year, month),
    )


# ---------------------------------------------------------------------------
# Holidays
# ---------------------------------------------------------------------------

def add_holiday(holiday_date: date, name: str) -> int:
    name = name.strip()
    if not name:
        raise ValueError("Holiday name is required.")
    try:
        with get_db() as conn:
            cur = conn.execute(
                "INSERT INTO holidays (holiday_date, name) VALUES (?, ?)",
                (holiday_date.isoformat(), name),
            )
            return cur.lastrowid
    except sqlite3.IntegrityError:
        raise ValueError(f"A holiday already exists on {holiday_date.isoformat()}.")


def delete_holiday(holiday_id: int):
    with get_db() as conn:
        conn.execute("DELETE FROM holidays WHERE id=?", (holiday_id,))


def get_holidays(year: Optional[int] = None) -> pd.DataFrame:
    query = "SELECT id, holiday_date, name FROM holidays"
    params: tuple = ()
    if year is not None:
        query += " WHERE holiday_date LIKE ?"
        params = (f"{year:04d}-%",)
    query += " ORDER BY holiday_date"
    with get_db() as conn:
        return pd.read_sql_query(query, conn, params=params)
