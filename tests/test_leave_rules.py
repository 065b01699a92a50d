"""Tests for leave deductions, balances and the monthly allowance."""

from __future__ import annotations

import pytest

from analytics.leave_rules import (
    apply_approval,
    can_apply,
    default_balance,
    leave_deduction,
    summarize_month,
)
from models import LeaveBalance


class TestDeduction:
    def test_full_and_half(self):
        assert leave_deduction("full") == 1.0
        assert leave_deduction("half") == 0.5

    def test_unknown_type(self):
        with pytest.raises(ValueError):
            leave_deduction("sabbatical")


class TestBalance:
    def test_default_is_eighteen_days(self):
        b = default_balance()
        assert b.total_leaves == 18
        assert b.remaining == 18

    def test_can_apply_against_remaining(self):
        b = LeaveBalance(total_leaves=18, used_leaves=17.5)
        assert can_apply(b, "half")
        assert not can_apply(b, "full")

    def test_approval_adds_deduction(self):
        b = apply_approval(LeaveBalance(18, 2), "half")
        assert b.used_leaves == 2.5
        assert b.remaining == 15.5


class TestMonthlySummary:
    def test_within_allowance(self):
        s = summarize_month(1, 2024, 6, ["full", "half"], [])
        assert s.used_full_days == 1
        assert s.used_half_days == 1
        assert s.remaining_full_days == 0
        assert s.remaining_half_days == 0
        assert s.excess_days == 0

    def test_excess_in_days(self):
        s = summarize_month(1, 2024, 6, ["full", "full", "half", "half", "half"], [])
        # one extra full (1.0) + two extra halves (2 x 0.5)
        assert s.excess_days == 2.0

    def test_attendance_counts(self):
        attendance = [
            {"status": "late", "is_deductible": False},
            {"status": "late", "is_deductible": True},
            {"status": "absent", "is_deductible": True},
            {"status": "present", "is_deductible": False},
        ]
        s = summarize_month(1, 2024, 6, [], attendance)
        assert s.late_count == 2
        assert s.deductible_count == 2
        assert s.remaining_full_days == 1
