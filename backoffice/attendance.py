"""Attendance records — one row per user per date."""

from __future__ import annotations

from datetime import date
from typing import Optional

import pandas as pd

from config import ATTENDANCE_STATUSES
from db import get_db


def mark_attendance(
    user_id: int,
    record_date: date,
    status: str,
    is_deductible: bool = False,
    notes: str = "",
) -> None:
    """Insert or replace the user's attendance for *record_date*."""
    if status not in ATTENDANCE_STATUSES:
        raise ValueError(f"Unknown attendance status: {status}")
    with get_db() as conn:
        conn.execute(
            """INSERT INTO attendance_records (user_id, record_date, status, is_deductible, notes)
               VALUES (?, ?, ?, ?, ?)
               ON CONFLICT(user_id, record_date) DO UPDATE SET
                   status=excluded.status,
                   is_deductible=excluded.is_deductible,
                   notes=excluded.notes,
                   updated_at=CURRENT_TIMESTAMP""",
            (user_id, record_date.isoformat(), status, int(is_deductible), notes.strip() or None),
        )


def delete_attendance(record_id: int):
    with get_db() as conn:
        conn.execute("DELETE FROM attendance_records WHERE id=?", (record_id,))


def get_month_attendance(user_id: int, year: int, month: int) -> list[dict]:
    with get_db() as conn:
        rows = conn.execute(
            """SELECT record_date, status, is_deductible, notes FROM attendance_records
               WHERE user_id=? AND record_date LIKE ? ORDER BY record_date""",
            (user_id, f"{year:04d}-{month:02d}-%"),
        ).fetchall()
    return [
        {
            "record_date": r["record_date"],
            "status": r["status"],
            "is_deductible": bool(r["is_deductible"]),
            "notes": r["notes"],
        }
        for r in rows
    ]


def get_attendance(user_id: Optional[int] = None, start: Optional[date] = None,
                   end: Optional[date] = None) -> pd.DataFrame:
    query = """
        SELECT a.id, a.user_id, u.full_name AS employee, a.record_date, a.status,
               a.is_deductible, a.notes
        FROM attendance_records a JOIN users u ON u.id = a.user_id
        WHERE 1=1
    """
    params: list = []
    if user_id is not None:
        query += " AND a.user_id=?"
        params.append(user_id)
    if start is not None:
        query += " AND a.record_date>=?"
        params.append(start.isoformat())
    if end is not None:
        query += " AND a.record_date<=?"
        params.append(end.isoformat())
    query += " ORDER BY a.record_date DESC, u.full_name"
    with get_db() as conn:
        df = pd.read_sql_query(query, conn, params=params)
    if not df.empty:
        df["is_deductible"] = df["is_deductible"].astype(bool)
    return df
