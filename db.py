"""SQLite database schema, connection handling and trading-data CRUD."""

from __future__ import annotations

import os
import sqlite3
from contextlib import contextmanager
from datetime import date
from typing import Optional

import pandas as pd

from config import DB_PATH
from models import TradeRecord

DUPLICATE_DAILY_RECORD_MSG = "A record already exists for this trader, account and date."

SCHEMA = """
    CREATE TABLE IF NOT EXISTS users (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        email TEXT NOT NULL UNIQUE,
        password_hash TEXT NOT NULL,
        full_name TEXT NOT NULL,
        role TEXT NOT NULL DEFAULT 'user' CHECK (role IN ('admin', 'user')),
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    );

    CREATE TABLE IF NOT EXISTS session_tokens (
        token TEXT PRIMARY KEY,
        user_id INTEGER NOT NULL REFERENCES users(id) ON DELETE CASCADE,
        expires_at TEXT NOT NULL
    );

    CREATE TABLE IF NOT EXISTS trading_accounts (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        account_name TEXT NOT NULL,
        account_number TEXT,
        user_id INTEGER REFERENCES users(id) ON DELETE SET NULL,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    );

    CREATE TABLE IF NOT EXISTS trading_data (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        user_id INTEGER NOT NULL REFERENCES users(id) ON DELETE CASCADE,
        account_id INTEGER NOT NULL REFERENCES trading_accounts(id) ON DELETE CASCADE,
        trade_date TEXT NOT NULL,
        net_pnl REAL NOT NULL DEFAULT 0,
        shares_traded INTEGER NOT NULL DEFAULT 0 CHECK (shares_traded >= 0),
        is_holiday INTEGER NOT NULL DEFAULT 0,
        late_remarks TEXT,
        notes TEXT,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
        updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
        UNIQUE(user_id, account_id, trade_date)
    );

    CREATE TABLE IF NOT EXISTS trader_account_assignments (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        user_id INTEGER NOT NULL REFERENCES users(id) ON DELETE CASCADE,
        account_id INTEGER NOT NULL REFERENCES trading_accounts(id) ON DELETE CASCADE,
        assignment_date TEXT NOT NULL,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
        UNIQUE(user_id, account_id, assignment_date)
    );

    CREATE TABLE IF NOT EXISTS holidays (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        holiday_date TEXT NOT NULL UNIQUE,
        name TEXT NOT NULL,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    );

    CREATE TABLE IF NOT EXISTS leave_requests (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        user_id INTEGER NOT NULL REFERENCES users(id) ON DELETE CASCADE,
        leave_date TEXT NOT NULL,
        leave_type TEXT NOT NULL CHECK (leave_type IN ('full', 'half')),
        status TEXT NOT NULL DEFAULT 'pending'
            CHECK (status IN ('pending', 'approved', 'rejected')),
        reason TEXT,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    );

    CREATE TABLE IF NOT EXISTS leave_balances (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        user_id INTEGER NOT NULL REFERENCES users(id) ON DELETE CASCADE,
        year INTEGER NOT NULL,
        total_leaves REAL NOT NULL,
        used_leaves REAL NOT NULL DEFAULT 0,
        UNIQUE(user_id, year)
    );

    CREATE TABLE IF NOT EXISTS attendance_records (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        user_id INTEGER NOT NULL REFERENCES users(id) ON DELETE CASCADE,
        record_date TEXT NOT NULL,
        status TEXT NOT NULL,
        is_deductible INTEGER NOT NULL DEFAULT 0,
        notes TEXT,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
        updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
        UNIQUE(user_id, record_date)
    );

    CREATE INDEX IF NOT EXISTS idx_trading_data_date ON trading_data(trade_date);
    CREATE INDEX IF NOT EXISTS idx_trading_data_user ON trading_data(user_id);
    CREATE INDEX IF NOT EXISTS idx_trading_accounts_user ON trading_accounts(user_id);
    CREATE INDEX IF NOT EXISTS idx_leave_requests_user ON leave_requests(user_id, leave_date);
    CREATE INDEX IF NOT EXISTS idx_attendance_user ON attendance_records(user_id, record_date);
"""


def get_connection() -> sqlite3.Connection:
    os.makedirs(os.path.dirname(DB_PATH) or ".", exist_ok=True)
    conn = sqlite3.connect(DB_PATH)
    conn.execute("PRAGMA journal_mode=WAL")
    conn.execute("PRAGMA foreign_keys=ON")
    conn.row_factory = sqlite3.Row
    return conn


@contextmanager
def get_db():
    conn = get_connection()
    try:
        yield conn
        conn.commit()
    finally:
        conn.close()


def init_db():
    """Create all tables if they don't exist, then seed the first admin."""
    with get_db() as conn:
        conn.executescript(SCHEMA)
    _seed_admin()


def _seed_admin():
    """Create the default admin when the users table is empty."""
    from config import DEFAULT_ADMIN_EMAIL, DEFAULT_ADMIN_NAME, DEFAULT_ADMIN_PASSWORD

    with get_db() as conn:
        has_users = conn.execute("SELECT 1 FROM users LIMIT 1").fetchone()
        if has_users:
            return
        import bcrypt
        pw_hash = bcrypt.hashpw(
            DEFAULT_ADMIN_PASSWORD.encode("utf-8"), bcrypt.gensalt()
        ).decode("utf-8")
        conn.execute(
            "INSERT INTO users (email, password_hash, full_name, role) VALUES (?, ?, ?, 'admin')",
            (DEFAULT_ADMIN_EMAIL.strip().lower(), pw_hash, DEFAULT_ADMIN_NAME),
        )


# ---------------------------------------------------------------------------
# Trading data
# ---------------------------------------------------------------------------

def insert_trading_data(rows: list[dict]) -> int:
    """Insert daily rows and their trader/account assignments in one transaction.

    Each row: user_id, account_id, trade_date (date), net_pnl, shares_traded,
    is_holiday, late_remarks, notes. Raises ValueError on a duplicate
    (user, account, date).
    """
    try:
        with get_db() as conn:
            conn.executemany(
                """INSERT INTO trading_data
                   (user_id, account_id, trade_date, net_pnl, shares_traded,
                    is_holiday, late_remarks, notes)
                   VALUES (?, ?, ?, ?, ?, ?, ?, ?)""",
                [(r["user_id"], r["account_id"], r["trade_date"].isoformat(),
                  float(r["net_pnl"]), int(r["shares_traded"]), int(r["is_holiday"]),
                  r.get("late_remarks"), r.get("notes"))
                 for r in rows],
            )
            conn.executemany(
                """INSERT INTO trader_account_assignments (user_id, account_id, assignment_date)
                   VALUES (?, ?, ?)
                   ON CONFLICT(user_id, account_id, assignment_date) DO NOTHING""",
                [(r["user_id"], r["account_id"], r["trade_date"].isoformat()) for r in rows],
            )
    except sqlite3.IntegrityError as e:
        if "UNIQUE" in str(e):
            raise ValueError(DUPLICATE_DAILY_RECORD_MSG)
        raise
    return len(rows)


def get_trading_data(
    user_id: Optional[int] = None,
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> pd.DataFrame:
    """Trading rows joined with trader and account names, newest first.

    user_id=None returns every trader's rows (admin view).
    """
    with get_db() as conn:
        query = """
            SELECT d.id, d.user_id, d.account_id, d.trade_date, d.net_pnl,
                   d.shares_traded, d.is_holiday, d.late_remarks, d.notes,
                   u.full_name AS trader, a.account_name, a.account_number
            FROM trading_data d
            JOIN users u ON u.id = d.user_id
            JOIN trading_accounts a ON a.id = d.account_id
            WHERE 1=1
        """
        params: list = []
        if user_id is not None:
            query += " AND d.user_id=?"
            params.append(user_id)
        if start is not None:
            query += " AND d.trade_date>=?"
            params.append(start.isoformat())
        if end is not None:
            query += " AND d.trade_date<=?"
            params.append(end.isoformat())
        query += " ORDER BY d.trade_date DESC, d.id DESC"
        df = pd.read_sql_query(query, conn, params=params)
        if not df.empty:
            df["trade_date"] = pd.to_datetime(df["trade_date"]).dt.date
            df["is_holiday"] = df["is_holiday"].astype(bool)
        return df


def frame_to_records(df: pd.DataFrame) -> list[TradeRecord]:
    """Convert trading_data rows to immutable TradeRecords."""
    if df.empty:
        return []
    return [
        TradeRecord(
            id=int(row["id"]),
            user_id=int(row["user_id"]),
            account_id=int(row["account_id"]),
            trade_date=row["trade_date"],
            net_pnl=float(row["net_pnl"]),
            shares_traded=int(row["shares_traded"]),
            is_holiday=bool(row["is_holiday"]),
        )
        for _, row in df.iterrows()
    ]


def get_trade_records(user_id: Optional[int] = None) -> list[TradeRecord]:
    return frame_to_records(get_trading_data(user_id))


def delete_trading_data(row_id: int):
    with get_db() as conn:
        conn.execute("DELETE FROM trading_data WHERE id=?", (row_id,))
