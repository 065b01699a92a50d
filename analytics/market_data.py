"""Market quotes via yfinance — indices, ETFs, sector performance and movers.

Every fetcher fails closed: when yfinance returns nothing usable the caller
gets the static fallback table instead, and a warning is logged.
Note: No @st.cache_data here — caching is applied at the page level.
"""

from __future__ import annotations

import logging

import pandas as pd
import yfinance as yf

from config import ETF_SYMBOLS, INDEX_SYMBOLS, MOVERS_COUNT, MOVERS_UNIVERSE, SECTOR_ETFS
from models import Quote, SectorMove

logger = logging.getLogger(__name__)


FALLBACK_INDEX_QUOTES = [
    Quote("ES=F", "S&P 500", 5948.71, 22.10, 0.37),
    Quote("NQ=F", "NASDAQ", 19480.91, 130.25, 0.67),
    Quote("YM=F", "Dow Jones", 42706.56, -83.44, -0.19),
    Quote("^VIX", "VIX", 17.42, -0.88, -4.80),
]

FALLBACK_ETF_QUOTES = [
    Quote("SPY", "S&P 500 ETF", 594.28, 0.0, 0.0),
    Quote("QQQ", "Nasdaq 100 ETF", 518.42, 0.0, 0.0),
    Quote("DIA", "Dow Jones ETF", 428.75, 0.0, 0.0),
    Quote("IWM", "Russell 2000 ETF", 224.36, 0.0, 0.0),
    Quote("VIX", "Volatility Index", 16.42, 0.0, 0.0),
    Quote("DXY", "US Dollar Index", 108.24, 0.0, 0.0),
    Quote("GLD", "Gold ETF", 242.18, 0.0, 0.0),
    Quote("TLT", "Treasury Bond ETF", 87.54, 0.0, 0.0),
]

FALLBACK_SECTORS = [
    SectorMove("Technology", 1.24),
    SectorMove("Communication Services", 0.91),
    SectorMove("Healthcare", 0.87),
    SectorMove("Financials", 0.52),
    SectorMove("Consumer Staples", 0.23),
    SectorMove("Utilities", 0.15),
    SectorMove("Industrials", -0.18),
    SectorMove("Materials", -0.28),
    SectorMove("Consumer Discretionary", -0.34),
    SectorMove("Real Estate", -0.67),
    SectorMove("Energy", -1.45),
]

FALLBACK_GAINERS = [
    Quote("NVDA", "NVIDIA Corporation", 142.87, 6.18, 4.52),
    Quote("SMCI", "Super Micro Computer", 34.56, 1.29, 3.87),
    Quote("AMD", "Advanced Micro Devices", 128.45, 3.99, 3.21),
    Quote("TSLA", "Tesla Inc", 398.23, 11.19, 2.89),
    Quote("MSTR", "MicroStrategy Inc", 378.90, 9.07, 2.45),
]

FALLBACK_LOSERS = [
    Quote("INTC", "Intel Corporation", 19.87, -0.71, -3.45),
    Quote("BA", "Boeing Company", 167.23, -4.98, -2.89),
    Quote("DIS", "Walt Disney Co", 112.45, -2.44, -2.12),
    Quote("NKE", "Nike Inc", 74.56, -1.42, -1.87),
    Quote("PFE", "Pfizer Inc", 26.78, -0.42, -1.54),
]


def quote_from_history(symbol: str, name: str, hist: pd.DataFrame) -> Quote | None:
    """Build a Quote from daily bars: last close vs. the close before it.

    Expects a DataFrame with a ``Close`` column and at least two rows.
    """
    if hist is None or hist.empty or "Close" not in hist or len(hist) < 2:
        return None
    closes = hist["Close"].dropna()
    if len(closes) < 2:
        return None
    price = float(closes.iloc[-1])
    prev = float(closes.iloc[-2])
    if prev == 0:
        return None
    change = price - prev
    return Quote(
        symbol=symbol,
        name=name,
        price=round(price, 2),
        change=round(change, 2),
        change_percent=round(change / prev * 100, 2),
    )


def fetch_quote(symbol: str, name: str = "") -> Quote | None:
    """Latest daily quote for one symbol, or None on failure."""
    try:
        hist = yf.Ticker(symbol).history(period="5d")
    except Exception:
        logger.exception("yfinance history failed for %s", symbol)
        return None
    return quote_from_history(symbol, name or symbol, hist)


def fetch_quotes(symbols: dict[str, str], fallback: list[Quote]) -> list[Quote]:
    """Quotes for {symbol: display name}, in the given order, or *fallback*."""
    quotes = [q for q in (fetch_quote(s, n) for s, n in symbols.items()) if q is not None]
    if not quotes:
        logger.warning("No quotes for %s, using fallback", ", ".join(symbols))
        return list(fallback)
    return quotes


def fetch_index_quotes() -> list[Quote]:
    return fetch_quotes(INDEX_SYMBOLS, FALLBACK_INDEX_QUOTES)


def fetch_etf_quotes() -> list[Quote]:
    return fetch_quotes(ETF_SYMBOLS, FALLBACK_ETF_QUOTES)


def fetch_sector_performance() -> list[SectorMove]:
    """Daily % change of the sector SPDR ETFs, best sector first."""
    sectors = []
    for etf, name in SECTOR_ETFS.items():
        q = fetch_quote(etf, name)
        if q is not None:
            sectors.append(SectorMove(name=name, change_percent=q.change_percent))
    if not sectors:
        logger.warning("No sector ETF quotes, using fallback sectors")
        return list(FALLBACK_SECTORS)
    return sorted(sectors, key=lambda s: s.change_percent, reverse=True)


def rank_movers(quotes: list[Quote], count: int = MOVERS_COUNT) -> tuple[list[Quote], list[Quote]]:
    """(gainers, losers): biggest positive movers first, biggest negative movers first."""
    gainers = sorted((q for q in quotes if q.change_percent > 0),
                     key=lambda q: q.change_percent, reverse=True)
    losers = sorted((q for q in quotes if q.change_percent < 0),
                    key=lambda q: q.change_percent)
    return gainers[:count], losers[:count]


def fetch_market_movers() -> tuple[list[Quote], list[Quote]]:
    """Top gainers and losers across the liquid universe."""
    quotes = [q for q in (fetch_quote(s) for s in MOVERS_UNIVERSE) if q is not None]
    if not quotes:
        logger.warning("No mover quotes, using fallback gainers/losers")
        return list(FALLBACK_GAINERS), list(FALLBACK_LOSERS)
    return rank_movers(quotes)
