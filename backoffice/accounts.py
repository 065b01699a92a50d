"""Users, profiles and trading accounts — SQLite CRUD."""

from __future__ import annotations

import sqlite3
from typing import Optional

import pandas as pd

from db import get_db
from models import UserProfile


# ---------------------------------------------------------------------------
# Users / profiles
# ---------------------------------------------------------------------------

def create_user(email: str, password_hash: str, full_name: str, role: str = "user") -> int:
    """Insert a user. Returns user_id. Raises ValueError if the email exists."""
    email = email.strip().lower()
    try:
        with get_db() as conn:
            cur = conn.execute(
                "INSERT INTO users (email, password_hash, full_name, role) VALUES (?, ?, ?, ?)",
                (email, password_hash, full_name.strip() or email.split("@")[0], role),
            )
            return cur.lastrowid
    except sqlite3.IntegrityError:
        raise ValueError("A user with this email already exists.")


def delete_user(user_id: int) -> bool:
    """Delete a user; trading data, leave and attendance rows cascade."""
    with get_db() as conn:
        cur = conn.execute("DELETE FROM users WHERE id=?", (user_id,))
        return cur.rowcount > 0


def set_password_hash(user_id: int, password_hash: str) -> bool:
    with get_db() as conn:
        cur = conn.execute(
            "UPDATE users SET password_hash=? WHERE id=?", (password_hash, user_id)
        )
        return cur.rowcount > 0


def rename_profile(user_id: int, full_name: str):
    full_name = full_name.strip()
    if not full_name:
        raise ValueError("Name cannot be empty.")
    with get_db() as conn:
        conn.execute("UPDATE users SET full_name=? WHERE id=?", (full_name, user_id))


def get_users() -> pd.DataFrame:
    with get_db() as conn:
        return pd.read_sql_query(
            "SELECT id, email, full_name, role, created_at FROM users ORDER BY full_name",
            conn,
        )


def get_profiles(role: Optional[str] = None) -> list[UserProfile]:
    """Profiles sorted by name, optionally limited to one role."""
    query = "SELECT id, full_name, email, role FROM users"
    params: tuple = ()
    if role:
        query += " WHERE role=?"
        params = (role,)
    query += " ORDER BY full_name"
    with get_db() as conn:
        rows = conn.execute(query, params).fetchall()
    return [
        UserProfile(id=r["id"], name=r["full_name"], email=r["email"], role=r["role"])
        for r in rows
    ]


# ---------------------------------------------------------------------------
# Trading accounts
# ---------------------------------------------------------------------------

def create_account(
    account_name: str,
    account_number: Optional[str] = None,
    user_id: Optional[int] = None,
) -> int:
    account_name = account_name.strip()
    if not account_name:
        raise ValueError("Account name is required.")
    with get_db() as conn:
        cur = conn.execute(
            "INSERT INTO trading_accounts (account_name, account_number, user_id) VALUES (?, ?, ?)",
            (account_name, (account_number or "").strip() or None, user_id),
        )
        return cur.lastrowid


def assign_account(account_id: int, user_id: Optional[int]):
    """Set (or clear, with None) the account's owner."""
    with get_db() as conn:
        conn.execute(
            "UPDATE trading_accounts SET user_id=? WHERE id=?", (user_id, account_id)
        )


def delete_account(account_id: int):
    with get_db() as conn:
        conn.execute("DELETE FROM trading_accounts WHERE id=?", (account_id,))


def get_accounts(user_id: Optional[int] = None) -> pd.DataFrame:
    """Accounts with owner names. user_id limits to accounts that user owns."""
    query = """
        SELECT a.id, a.account_name, a.account_number, a.user_id,
               u.full_name AS owner, a.created_at
        FROM trading_accounts a
        LEFT JOIN users u ON u.id = a.user_id
    """
    params: tuple = ()
    if user_id is not None:
        query += " WHERE a.user_id=?"
        params = (user_id,)
    query += " ORDER BY a.account_name"
    with get_db() as conn:
        return pd.read_sql_query(query, conn, params=params)


def get_account_count() -> int:
    with get_db() as conn:
        return conn.execute("SELECT COUNT(*) FROM trading_accounts").fetchone()[0]
