"""Tests for analytics.market_hours."""

from datetime import date, datetime

import pytz

from analytics.market_hours import ET, is_market_hours, to_et, today_et


class TestEasternClock:
    def test_naive_taken_as_eastern(self):
        assert to_et(datetime(2024, 6, 12, 9, 0)).utcoffset().total_seconds() == -4 * 3600

    def test_utc_evening_is_previous_day_in_new_york(self):
        late = pytz.utc.localize(datetime(2024, 6, 13, 2, 30))
        assert today_et(late) == date(2024, 6, 12)

    def test_et_is_new_york(self):
        assert ET.zone == "US/Eastern"


class TestIsMarketHours:
    def test_open_session(self):
        assert is_market_hours(datetime(2024, 6, 12, 9, 30))
        assert is_market_hours(datetime(2024, 6, 12, 16, 0))

    def test_outside_session(self):
        assert not is_market_hours(datetime(2024, 6, 12, 9, 29))
        assert not is_market_hours(datetime(2024, 6, 12, 16, 1))

    def test_weekend(self):
        assert not is_market_hours(datetime(2024, 6, 15, 11, 0))
