"""Leave balance and monthly allowance arithmetic."""

from __future__ import annotations

from config import (
    DEFAULT_ANNUAL_LEAVES,
    LEAVE_DEDUCTION,
    MONTHLY_ALLOWED_FULL_DAYS,
    MONTHLY_ALLOWED_HALF_DAYS,
)
from models import LeaveBalance, MonthlyLeaveSummary


def leave_deduction(leave_type: str) -> float:
    """Days deducted for a leave type: full = 1, half = 0.5."""
    try:
        return LEAVE_DEDUCTION[leave_type]
    except KeyError:
        raise ValueError(f"Unknown leave type: {leave_type}")


def default_balance() -> LeaveBalance:
    return LeaveBalance(total_leaves=DEFAULT_ANNUAL_LEAVES, used_leaves=0.0)


def can_apply(balance: LeaveBalance, leave_type: str) -> bool:
    return leave_deduction(leave_type) <= balance.remaining


def apply_approval(balance: LeaveBalance, leave_type: str) -> LeaveBalance:
    """Balance after approving one request of *leave_type*."""
    return LeaveBalance(
        total_leaves=balance.total_leaves,
        used_leaves=balance.used_leaves + leave_deduction(leave_type),
    )


def summarize_month(
    user_id: int,
    year: int,
    month: int,
    approved_leave_types: list[str],
    attendance: list[dict],
) -> MonthlyLeaveSummary:
    """Usage of the monthly allowance (1 full + 1 half day) for one user.

    Full and half days are counted separately against their own allowance;
    a half day is never converted into half of a full day. Excess is reported
    in days (full = 1, half = 0.5). Attendance rows contribute late and
    deductible counts.
    """
    used_full = sum(1 for t in approved_leave_types if t == "full")
    used_half = sum(1 for t in approved_leave_types if t == "half")
    late = sum(1 for a in attendance if a.get("status") == "late")
    deductible = sum(1 for a in attendance if a.get("is_deductible"))

    excess_full = max(0, used_full - MONTHLY_ALLOWED_FULL_DAYS)
    excess_half = max(0, used_half - MONTHLY_ALLOWED_HALF_DAYS)

    return MonthlyLeaveSummary(
        user_id=user_id,
        year=year,
        month=month,
        allowed_full_days=MONTHLY_ALLOWED_FULL_DAYS,
        allowed_half_days=MONTHLY_ALLOWED_HALF_DAYS,
        used_full_days=used_full,
        used_half_days=used_half,
        late_count=late,
        deductible_count=deductible,
        remaining_full_days=max(0, MONTHLY_ALLOWED_FULL_DAYS - used_full),
        remaining_half_days=max(0, MONTHLY_ALLOWED_HALF_DAYS - used_half),
        excess_days=excess_full * LEAVE_DEDUCTION["full"] + excess_half * LEAVE_DEDUCTION["half"],
    )
