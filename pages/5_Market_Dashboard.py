"""Market Dashboard — futures, ETFs, sectors, movers, news, splits and the macro calendar."""

from datetime import datetime

import pandas as pd
import plotly.graph_objects as go
import streamlit as st
from streamlit_autorefresh import st_autorefresh

from analytics.market_data import (
    fetch_etf_quotes,
    fetch_index_quotes,
    fetch_market_movers,
    fetch_sector_performance,
)
from analytics.market_feed import fetch_market_news, fetch_stock_splits, get_economic_events
from analytics.market_hours import is_market_hours, now_et, today_et
import ui_theme

ui_theme.setup_page("Market Dashboard", "📈")
ui_theme.page_header("Market Dashboard", "US market snapshot")

_market_open = is_market_hours()
if _market_open:
    st_autorefresh(interval=60_000, key="market_refresh")
    st.caption(f"Market open · auto-refresh every minute · {now_et().strftime('%H:%M:%S')} ET")
else:
    st.caption(f"Market closed · last update {now_et().strftime('%Y-%m-%d %H:%M')} ET")


# ---------------------------------------------------------------------------
# Cached fetchers
# ---------------------------------------------------------------------------

@st.cache_data(ttl=60, show_spinner=False)
def _cached_index_quotes():
    return fetch_index_quotes()


@st.cache_data(ttl=60, show_spinner=False)
def _cached_etf_quotes():
    return fetch_etf_quotes()


@st.cache_data(ttl=300, show_spinner=False)
def _cached_sectors():
    return fetch_sector_performance()


@st.cache_data(ttl=300, show_spinner=False)
def _cached_movers():
    return fetch_market_movers()


@st.cache_data(ttl=600, show_spinner=False)
def _cached_news():
    return fetch_market_news()


@st.cache_data(ttl=3600, show_spinner=False)
def _cached_splits():
    return fetch_stock_splits()


def _quote_cards(quotes):
    cols = st.columns(len(quotes) or 1)
    for col, q in zip(cols, quotes):
        col.metric(q.name, f"{q.price:,.2f}", f"{q.change:+,.2f} ({q.change_percent:+.2f}%)")


# =====================================================================
# Futures & ETFs
# =====================================================================
with st.spinner("Loading quotes..."):
    index_quotes = _cached_index_quotes()
    etf_quotes = _cached_etf_quotes()

ui_theme.section_header("Futures & Volatility")
_quote_cards(index_quotes)

ui_theme.section_header("Major ETFs")
_quote_cards(etf_quotes)

# =====================================================================
# Sectors & movers
# =====================================================================
left, right = st.columns([3, 2])

with left:
    ui_theme.section_header("Sector Performance")
    sectors = _cached_sectors()
    fig = go.Figure(go.Bar(
        x=[s.change_percent for s in sectors],
        y=[s.name for s in sectors],
        orientation="h",
        marker_color=[ui_theme.pnl_color(s.change_percent) for s in sectors],
        text=[f"{s.change_percent:+.2f}%" for s in sectors],
        textposition="outside",
    ))
    fig.update_layout(**ui_theme.plotly_layout("standard", yaxis={"autorange": "reversed"}))
    st.plotly_chart(fig, use_container_width=True)

with right:
    ui_theme.section_header("Market Movers")
    gainers, losers = _cached_movers()
    tab_gain, tab_loss = st.tabs(["Top Gainers", "Top Losers"])
    for tab, movers in ((tab_gain, gainers), (tab_loss, losers)):
        with tab:
            if not movers:
                st.caption("No movers in this direction today.")
                continue
            st.dataframe(
                pd.DataFrame([
                    {"Ticker": q.symbol, "Price": q.price, "Change %": q.change_percent}
                    for q in movers
                ]),
                hide_index=True,
                use_container_width=True,
                column_config={
                    "Price": st.column_config.NumberColumn(format="$%.2f"),
                    "Change %": st.column_config.NumberColumn(format="%+.2f%%"),
                },
            )

# =====================================================================
# News, splits, calendar
# =====================================================================
news_col, side_col = st.columns([3, 2])

with news_col:
    ui_theme.section_header("Market News")
    for item in _cached_news():
        published = item.published
        try:
            published = datetime.fromisoformat(item.published).strftime("%b %d, %H:%M")
        except ValueError:
            pass
        st.markdown(f"**[{item.headline}]({item.url})**")
        st.caption(" · ".join(p for p in (item.source, item.category, published) if p))

with side_col:
    ui_theme.section_header("Upcoming Stock Splits")
    today = today_et()
    split_rows = []
    for s in _cached_splits():
        try:
            days = (datetime.fromisoformat(s.ex_date).date() - today).days
        except ValueError:
            days = None
        split_rows.append({
            "Ticker": s.ticker,
            "Company": s.company_name,
            "Ratio": s.split_ratio,
            "Ex-Date": s.ex_date,
            "Days": days,
        })
    st.dataframe(pd.DataFrame(split_rows), hide_index=True, use_container_width=True)

    ui_theme.section_header("Economic Calendar")
    st.dataframe(
        pd.DataFrame([
            {
                "Date": e.date,
                "Time (ET)": e.time,
                "Event": e.title,
                "Impact": e.impact.title(),
                "Forecast": e.forecast,
                "Previous": e.previous,
            }
            for e in get_economic_events()
        ]),
        hide_index=True,
        use_container_width=True,
    )

ui_theme.firm_footer()
