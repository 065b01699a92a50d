"""Constants, firm details and environment-backed settings."""

from __future__ import annotations

import os
from datetime import date

try:
    from dotenv import load_dotenv
    load_dotenv()
except ImportError:
    pass


def get_secret(key: str, default: str = "") -> str:
    """Read from env vars first (.env / local), then Streamlit secrets (Cloud)."""
    val = os.environ.get(key, "")
    if val:
        return val
    try:
        import streamlit as st
        return st.secrets.get(key, default)
    except Exception:
        return default


DB_PATH = get_secret("DESK_DB_PATH") or os.path.join(os.path.dirname(__file__), "data", "desk.db")

# Seed admin for an empty database (set via env vars or use defaults)
DEFAULT_ADMIN_EMAIL = get_secret("ADMIN_EMAIL", "admin@wolfcrux.local")
DEFAULT_ADMIN_PASSWORD = get_secret("ADMIN_PASSWORD", "changeme123")
DEFAULT_ADMIN_NAME = get_secret("ADMIN_NAME", "Administrator")

SESSION_EXPIRY_DAYS = 30
MIN_PASSWORD_LENGTH = 6

ROLES = ("admin", "user")

# ---------------------------------------------------------------------------
# Firm
# ---------------------------------------------------------------------------

FIRM_NAME = "Wolfcrux Global Markets LLP"
FIRM_SHORT_NAME = "Wolfcrux"
FIRM_LLPIN = "ACQ-1837"
FIRM_EMAIL = "info@wolfcrux.com"
FIRM_LOCATION = "Mumbai, India"

# ---------------------------------------------------------------------------
# Performance analytics
# ---------------------------------------------------------------------------

# Capital assumed behind every trading account (USD)
BASE_CAPITAL_PER_ACCOUNT = 25_000.0

# "Lifetime" filter start (platform inception)
LIFETIME_START = date(2020, 1, 1)

# Custom range without explicit bounds falls back to this many trailing days
CUSTOM_RANGE_FALLBACK_DAYS = 30

# Brokerage: $14 per 1,000 shares traded
BROKERAGE_PER_1000_SHARES = 14.0

# All day-boundary comparisons use this civil calendar
MARKET_TIMEZONE = "US/Eastern"

MARKET_OPEN_HOUR = 9
MARKET_OPEN_MINUTE = 30
MARKET_CLOSE_HOUR = 16
MARKET_CLOSE_MINUTE = 0

# ---------------------------------------------------------------------------
# Leave & attendance
# ---------------------------------------------------------------------------

DEFAULT_ANNUAL_LEAVES = 18.0

LEAVE_DEDUCTION = {
    "full": 1.0,
    "half": 0.5,
}

# Monthly allowance: 1 full day + 1 half day
MONTHLY_ALLOWED_FULL_DAYS = 1
MONTHLY_ALLOWED_HALF_DAYS = 1

LEAVE_STATUSES = ("pending", "approved", "rejected")

ATTENDANCE_STATUSES = ("present", "late", "absent", "half_day")

# ---------------------------------------------------------------------------
# Market dashboard
# ---------------------------------------------------------------------------

HTTP_TIMEOUT_SECONDS = 10

INDEX_SYMBOLS = {
    "ES=F": "S&P 500 Futures",
    "YM=F": "Dow Jones Futures",
    "NQ=F": "Nasdaq 100 Futures",
    "RTY=F": "Russell 2000 Futures",
    "^VIX": "VIX Index",
}

ETF_SYMBOLS = {
    "SPY": "SPDR S&P 500 ETF",
    "DIA": "SPDR Dow Jones ETF",
    "QQQ": "Invesco QQQ Trust",
    "IWM": "iShares Russell 2000 ETF",
    "VXX": "iPath S&P 500 VIX",
}

SECTOR_ETFS = {
    "XLK": "Technology",
    "XLV": "Healthcare",
    "XLF": "Financials",
    "XLY": "Consumer Discretionary",
    "XLC": "Communication Services",
    "XLI": "Industrials",
    "XLP": "Consumer Staples",
    "XLE": "Energy",
    "XLU": "Utilities",
    "XLRE": "Real Estate",
    "XLB": "Materials",
}

MOVERS_UNIVERSE = [
    "AAPL", "MSFT", "NVDA", "AMZN", "META", "GOOGL", "TSLA", "AMD",
    "AVGO", "NFLX", "INTC", "BA", "DIS", "NKE", "PFE", "SMCI", "MSTR",
    "PLTR", "COIN", "JPM",
]

MOVERS_COUNT = 5

STOCK_SPLITS_URL = get_secret(
    "STOCK_SPLITS_URL",
    "https://tr-cdn.tipranks.com/calendars/prod/calendars/stock-splits/upcoming/payload.json",
)

NEWS_RSS_URL = get_secret(
    "NEWS_RSS_URL",
    "https://feeds.content.dowjones.io/public/rss/mw_topstories",
)

NEWS_LIMIT = 10
SPLITS_LIMIT = 10

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

LOG_LEVEL = get_secret("LOG_LEVEL", "INFO")
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
