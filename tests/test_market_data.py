"""Tests for analytics.market_data — yfinance is always mocked."""

from unittest.mock import MagicMock, patch

import pandas as pd

from analytics.market_data import (
    FALLBACK_ETF_QUOTES,
    FALLBACK_GAINERS,
    FALLBACK_SECTORS,
    fetch_etf_quotes,
    fetch_market_movers,
    fetch_quote,
    fetch_sector_performance,
    quote_from_history,
    rank_movers,
)
from config import ETF_SYMBOLS
from models import Quote


def _hist(*closes):
    return pd.DataFrame({"Close": list(closes)})


def _ticker_returning(hist):
    ticker = MagicMock()
    ticker.history.return_value = hist
    return ticker


class TestQuoteFromHistory:
    def test_last_two_closes(self):
        q = quote_from_history("SPY", "S&P", _hist(99.0, 100.0, 102.0))
        assert q.price == 102.0
        assert q.change == 2.0
        assert q.change_percent == 2.0

    def test_needs_two_closes(self):
        assert quote_from_history("SPY", "S&P", _hist(100.0)) is None
        assert quote_from_history("SPY", "S&P", pd.DataFrame()) is None
        assert quote_from_history("SPY", "S&P", _hist(float("nan"), 101.0)) is None

    def test_zero_previous_close(self):
        assert quote_from_history("X", "X", _hist(0.0, 5.0)) is None


class TestFetchers:
    @patch("analytics.market_data.yf.Ticker")
    def test_fetch_quote_uses_symbol_as_default_name(self, mock_ticker):
        mock_ticker.return_value = _ticker_returning(_hist(10.0, 11.0))
        q = fetch_quote("AAPL")
        assert q.name == "AAPL"
        mock_ticker.assert_called_once_with("AAPL")
        mock_ticker.return_value.history.assert_called_once_with(period="5d")

    @patch("analytics.market_data.yf.Ticker", side_effect=RuntimeError("rate limited"))
    def test_fetch_quote_swallows_provider_error(self, _):
        assert fetch_quote("AAPL") is None

    @patch("analytics.market_data.yf.Ticker")
    def test_etf_quotes_in_config_order(self, mock_ticker):
        mock_ticker.return_value = _ticker_returning(_hist(10.0, 11.0))
        quotes = fetch_etf_quotes()
        assert [q.symbol for q in quotes] == list(ETF_SYMBOLS)

    @patch("analytics.market_data.yf.Ticker")
    def test_etf_fallback_when_empty(self, mock_ticker):
        mock_ticker.return_value = _ticker_returning(pd.DataFrame())
        assert fetch_etf_quotes() == FALLBACK_ETF_QUOTES

    @patch("analytics.market_data.yf.Ticker", side_effect=ConnectionError)
    def test_sector_fallback(self, _):
        assert fetch_sector_performance() == FALLBACK_SECTORS

    @patch("analytics.market_data.yf.Ticker")
    def test_sectors_sorted_best_first(self, mock_ticker):
        moves = iter([_hist(100.0, 100.0 + i) for i in range(11)])
        mock_ticker.side_effect = lambda symbol: _ticker_returning(next(moves))
        sectors = fetch_sector_performance()
        pcts = [s.change_percent for s in sectors]
        assert pcts == sorted(pcts, reverse=True)
        assert sectors[0].name == "Materials"

    @patch("analytics.market_data.yf.Ticker", side_effect=RuntimeError)
    def test_movers_fallback(self, _):
        gainers, losers = fetch_market_movers()
        assert gainers == FALLBACK_GAINERS
        assert all(q.change_percent < 0 for q in losers)


class TestRankMovers:
    def test_split_and_ordered(self):
        quotes = [
            Quote("A", "A", 1, 0, 1.5),
            Quote("B", "B", 1, 0, -2.0),
            Quote("C", "C", 1, 0, 3.0),
            Quote("D", "D", 1, 0, 0.0),
            Quote("E", "E", 1, 0, -0.5),
        ]
        gainers, losers = rank_movers(quotes, count=5)
        assert [q.symbol for q in gainers] == ["C", "A"]
        assert [q.symbol for q in losers] == ["B", "E"]

    def test_count_limit(self):
        quotes = [Quote(str(i), "", 1, 0, float(i)) for i in range(1, 9)]
        gainers, losers = rank_movers(quotes, count=3)
        assert [q.symbol for q in gainers] == ["8", "7", "6"]
        assert losers == []
