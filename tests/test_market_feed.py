"""Tests for analytics.market_feed — HTTP is always mocked."""

from datetime import date
from unittest.mock import MagicMock, patch

import requests

from analytics.market_feed import (
    ECONOMIC_EVENTS,
    fallback_splits,
    fetch_dashboard_feed,
    fetch_market_news,
    fetch_stock_splits,
    get_economic_events,
    parse_rss,
    parse_splits,
)

RSS = b"""<?xml version="1.0"?>
<rss version="2.0"><channel>
  <title>Desk Wire</title>
  <item>
    <title>Stocks close higher</title>
    <link>https://example.com/a</link>
    <pubDate>Wed, 12 Jun 2024 20:05:00 GMT</pubDate>
    <category>Markets</category>
  </item>
  <item><title>   </title><link>https://example.com/skip</link></item>
  <item><title>Oil slips</title><link>https://example.com/b</link><pubDate>not a date</pubDate></item>
</channel></rss>"""


def _response(json_data=None, content=b""):
    resp = MagicMock()
    resp.json.return_value = json_data
    resp.content = content
    resp.raise_for_status.return_value = None
    return resp


class TestEconomicEvents:
    def test_sorted_by_date_and_time(self):
        events = get_economic_events()
        assert len(events) == len(ECONOMIC_EVENTS)
        keys = [(e.date, e.time) for e in events]
        assert keys == sorted(keys)


class TestSplits:
    def test_fallback_dates_relative_to_today(self):
        splits = fallback_splits(date(2024, 6, 1))
        assert splits[0].ticker == "AVGO"
        assert splits[0].ex_date == "2024-06-04"
        assert [s.ex_date for s in splits] == sorted(s.ex_date for s in splits)

    def test_parse_list_of_camel_case(self):
        payload = [
            {"companyName": "Late Co", "symbol": "LATE", "splitRatio": "2:1", "exDate": "2024-07-09T00:00:00"},
            {"name": "Early Co", "ticker": "EARL", "ratio": "4:1", "date": "2024-07-01"},
        ]
        splits = parse_splits(payload)
        assert [s.ticker for s in splits] == ["EARL", "LATE"]
        assert splits[1].ex_date == "2024-07-09"
        assert splits[1].split_ratio == "2:1"

    def test_parse_wrapped_payloads(self):
        row = {"company": "X", "ticker": "X", "split_ratio": "3:1", "ex_date": "2024-08-01"}
        assert len(parse_splits({"data": [row]})) == 1
        assert len(parse_splits({"splits": [row, "junk"]})) == 1

    def test_parse_unusable_payloads(self):
        assert parse_splits({"message": "nope"}) == []
        assert parse_splits("text") == []

    def test_limit(self):
        rows = [{"ticker": f"T{i}", "exDate": f"2024-07-{i + 1:02d}"} for i in range(20)]
        assert len(parse_splits(rows, limit=4)) == 4

    def test_limit_keeps_nearest_dates(self):
        rows = [
            {"ticker": "FAR", "exDate": "2024-09-01"},
            {"ticker": "MID", "exDate": "2024-08-01"},
            {"ticker": "NEAR", "exDate": "2024-07-01"},
        ]
        assert [s.ticker for s in parse_splits(rows, limit=2)] == ["NEAR", "MID"]

    @patch("analytics.market_feed.requests.get", side_effect=requests.ConnectionError("down"))
    def test_fetch_falls_back_on_network_error(self, _):
        assert [s.ticker for s in fetch_stock_splits()] == ["AVGO", "CMG", "WMT", "SONY", "LRCX"]

    @patch("analytics.market_feed.requests.get")
    def test_fetch_falls_back_on_bad_json(self, mock_get):
        resp = _response()
        resp.json.side_effect = ValueError("not json")
        mock_get.return_value = resp
        assert fetch_stock_splits()[0].ticker == "AVGO"

    @patch("analytics.market_feed.requests.get")
    def test_fetch_uses_payload(self, mock_get):
        mock_get.return_value = _response([{"ticker": "NEW", "exDate": "2024-07-01"}])
        assert [s.ticker for s in fetch_stock_splits()] == ["NEW"]


class TestNews:
    def test_parse_rss(self):
        items = parse_rss(RSS)
        assert [i.headline for i in items] == ["Stocks close higher", "Oil slips"]
        assert items[0].source == "Desk Wire"
        assert items[0].category == "Markets"
        assert items[0].published.startswith("2024-06-12T20:05:00")
        assert items[1].published == "not a date"

    def test_parse_rss_limit_and_missing_channel(self):
        assert len(parse_rss(RSS, limit=1)) == 1
        assert parse_rss(b"<feed/>") == []

    @patch("analytics.market_feed.requests.get")
    def test_fetch_falls_back_on_bad_xml(self, mock_get):
        mock_get.return_value = _response(content=b"<rss><channel>")
        news = fetch_market_news()
        assert len(news) == 8
        assert news[0].source == "Reuters"

    @patch("analytics.market_feed.requests.get")
    def test_fetch_http_error_falls_back(self, mock_get):
        resp = _response()
        resp.raise_for_status.side_effect = requests.HTTPError("503")
        mock_get.return_value = resp
        assert len(fetch_market_news()) == 8

    @patch("analytics.market_feed.requests.get")
    def test_fetch_parses_feed(self, mock_get):
        mock_get.return_value = _response(content=RSS)
        assert fetch_market_news()[0].url == "https://example.com/a"


class TestDashboardFeed:
    @patch("analytics.market_feed.fetch_market_news", return_value=[])
    @patch("analytics.market_feed.fetch_etf_quotes", return_value=["q"])
    def test_bundle_keys(self, _quotes, _news):
        feed = fetch_dashboard_feed()
        assert set(feed) == {"economic_events", "market_data", "news"}
        assert feed["market_data"] == ["q"]
        assert feed["economic_events"] == get_economic_events()
