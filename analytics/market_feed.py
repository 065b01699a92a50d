"""HTTP-backed dashboard feeds — stock splits, market news and the economic calendar.

Each adapter names the payload shape it accepts and returns the static fallback
list when the source is unreachable or returns something else.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from datetime import date, timedelta
from email.utils import parsedate_to_datetime
from typing import Optional

import requests

from analytics.market_data import fetch_etf_quotes
from analytics.market_hours import now_et, today_et
from config import HTTP_TIMEOUT_SECONDS, NEWS_LIMIT, NEWS_RSS_URL, SPLITS_LIMIT, STOCK_SPLITS_URL
from models import EconomicEvent, NewsItem, StockSplit

logger = logging.getLogger(__name__)


ECONOMIC_EVENTS = [
    EconomicEvent("ISM Manufacturing PMI", "US", "2025-01-03", "10:00", "high", "48.5", "48.4"),
    EconomicEvent("FOMC Meeting Minutes", "US", "2025-01-08", "14:00", "high"),
    EconomicEvent("Initial Jobless Claims", "US", "2025-01-09", "08:30", "medium", "210K", "211K"),
    EconomicEvent("Non-Farm Payrolls", "US", "2025-01-10", "08:30", "high", "175K", "227K"),
    EconomicEvent("Unemployment Rate", "US", "2025-01-10", "08:30", "medium", "4.2%", "4.2%"),
    EconomicEvent("Producer Price Index (PPI) m/m", "US", "2025-01-14", "08:30", "medium", "0.2%", "0.4%"),
    EconomicEvent("Consumer Price Index (CPI) m/m", "US", "2025-01-15", "08:30", "high", "0.3%", "0.3%"),
    EconomicEvent("Retail Sales m/m", "US", "2025-01-16", "08:30", "medium", "0.5%", "0.7%"),
    EconomicEvent("Durable Goods Orders m/m", "US", "2025-01-28", "08:30", "medium", "0.8%", "-1.1%"),
    EconomicEvent("GDP q/q", "US", "2025-01-30", "08:30", "high", "2.8%", "2.8%"),
]

_FALLBACK_HEADLINES = [
    ("Federal Reserve signals cautious approach to rate cuts", "Reuters", "https://reuters.com", "Fed"),
    ("Tech stocks rally on strong earnings expectations", "Bloomberg", "https://bloomberg.com", "Markets"),
    ("Oil prices surge amid Middle East tensions", "CNBC", "https://cnbc.com", "Commodities"),
    ("Treasury yields climb as inflation concerns persist", "WSJ", "https://wsj.com", "Bonds"),
    ("Jobs report preview: what economists expect", "MarketWatch", "https://marketwatch.com", "Economy"),
    ("China's manufacturing sector shows signs of recovery", "Financial Times", "https://ft.com", "Global"),
    ("Cryptocurrency markets stabilize after volatile week", "CoinDesk", "https://coindesk.com", "Crypto"),
    ("European Central Bank expected to hold rates steady", "Reuters", "https://reuters.com", "Central Banks"),
]

_FALLBACK_SPLITS = [
    ("Broadcom Inc", "AVGO", "10:1", 3),
    ("Chipotle Mexican Grill", "CMG", "50:1", 7),
    ("Walmart Inc", "WMT", "3:1", 14),
    ("Sony Group Corp", "SONY", "5:1", 21),
    ("Lam Research Corp", "LRCX", "10:1", 28),
]


# ---------------------------------------------------------------------------
# Economic calendar
# ---------------------------------------------------------------------------

def get_economic_events() -> list[EconomicEvent]:
    """Static US macro calendar, in date/time order."""
    return sorted(ECONOMIC_EVENTS, key=lambda e: (e.date, e.time))


# ---------------------------------------------------------------------------
# Stock splits
# ---------------------------------------------------------------------------

def fallback_splits(today: Optional[date] = None) -> list[StockSplit]:
    today = today or today_et()
    return [
        StockSplit(name, ticker, ratio, (today + timedelta(days=offset)).isoformat())
        for name, ticker, ratio, offset in _FALLBACK_SPLITS
    ]


def _first(item: dict, *keys: str) -> str:
    for key in keys:
        value = item.get(key)
        if value:
            return str(value)
    return ""


def parse_splits(payload, limit: int = SPLITS_LIMIT) -> list[StockSplit]:
    """Map the calendar payload to StockSplits, nearest ex-date first.

    Accepts a bare list of split objects or a dict wrapping one under
    ``data`` or ``splits``. Field names vary between camelCase and
    snake_case. Returns [] for any other shape.
    """
    if isinstance(payload, dict):
        payload = payload.get("data") or payload.get("splits")
    if not isinstance(payload, list):
        return []

    splits = [
        StockSplit(
            company_name=_first(item, "companyName", "name", "company"),
            ticker=_first(item, "ticker", "symbol"),
            split_ratio=_first(item, "splitRatio", "ratio", "split_ratio"),
            ex_date=_first(item, "exDate", "date", "ex_date")[:10],
        )
        for item in payload
        if isinstance(item, dict)
    ]
    return sorted(splits, key=lambda s: s.ex_date)[:limit]


def fetch_stock_splits() -> list[StockSplit]:
    """Upcoming splits from the public calendar JSON, or the fallback list."""
    try:
        resp = requests.get(STOCK_SPLITS_URL, timeout=HTTP_TIMEOUT_SECONDS)
        resp.raise_for_status()
        splits = parse_splits(resp.json())
    except (requests.RequestException, ValueError) as e:
        logger.warning("Stock splits fetch failed: %s", e)
        return fallback_splits()
    if not splits:
        logger.warning("Stock splits payload had no usable rows, using fallback")
        return fallback_splits()
    return splits


# ---------------------------------------------------------------------------
# News
# ---------------------------------------------------------------------------

def fallback_news() -> list[NewsItem]:
    now = now_et()
    return [
        NewsItem(headline, source, (now - timedelta(hours=i)).isoformat(), url, category)
        for i, (headline, source, url, category) in enumerate(_FALLBACK_HEADLINES)
    ]


def _published_iso(raw: str) -> str:
    try:
        return parsedate_to_datetime(raw).isoformat()
    except (TypeError, ValueError):
        return raw


def parse_rss(content: bytes, limit: int = NEWS_LIMIT) -> list[NewsItem]:
    """Items of an RSS 2.0 document (``rss/channel/item``). Items without a title are skipped."""
    root = ET.fromstring(content)
    channel = root.find("channel")
    if channel is None:
        return []
    source = (channel.findtext("title") or "").strip() or "MarketWatch"

    items = []
    for item in channel.findall("item"):
        headline = (item.findtext("title") or "").strip()
        if not headline:
            continue
        items.append(NewsItem(
            headline=headline,
            source=source,
            published=_published_iso((item.findtext("pubDate") or "").strip()),
            url=(item.findtext("link") or "").strip(),
            category=(item.findtext("category") or "").strip(),
        ))
        if len(items) >= limit:
            break
    return items


def fetch_market_news() -> list[NewsItem]:
    """Top stories from the RSS feed, or the fallback headlines."""
    try:
        resp = requests.get(NEWS_RSS_URL, timeout=HTTP_TIMEOUT_SECONDS)
        resp.raise_for_status()
        news = parse_rss(resp.content)
    except (requests.RequestException, ET.ParseError) as e:
        logger.warning("News feed fetch failed: %s", e)
        return fallback_news()
    if not news:
        logger.warning("News feed had no items, using fallback")
        return fallback_news()
    return news


# ---------------------------------------------------------------------------
# Bundle
# ---------------------------------------------------------------------------

def fetch_dashboard_feed() -> dict:
    """Economic events, ETF market data and news in one payload."""
    return {
        "economic_events": get_economic_events(),
        "market_data": fetch_etf_quotes(),
        "news": fetch_market_news(),
    }
