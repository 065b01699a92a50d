"""Shared Wolfcrux look and feel: CSS, headers, KPI cards, chart layout and formatting."""

from __future__ import annotations

import logging

import streamlit as st

from config import (
    FIRM_EMAIL,
    FIRM_LLPIN,
    FIRM_LOCATION,
    FIRM_NAME,
    FIRM_SHORT_NAME,
    LOG_FORMAT,
    LOG_LEVEL,
)
from models import DateRange, DateRangeFilter

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

COLORS = {
    "profit": "#22c55e",
    "loss": "#ef4444",
    "accent": "#d4a017",
    "accent_soft": "#f5d76e",
    "blue": "#3b82f6",
    "purple": "#8b5cf6",
    "bg_primary": "#0b1120",
    "bg_card": "#111a2e",
    "border": "#243352",
    "text_muted": "#94a3b8",
}

CHART_HEIGHTS = {
    "hero": 420,
    "standard": 360,
    "compact": 280,
}


# ---------------------------------------------------------------------------
# CSS injection
# ---------------------------------------------------------------------------

def inject_custom_css():
    """Dark navy/gold styling for metrics, tables, sidebar and tabs."""
    st.markdown(f"""
    <style>
    @import url('https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600;700&display=swap');

    html, body, [class*="css"] {{
        font-family: 'Inter', sans-serif;
    }}

    #MainMenu {{visibility: hidden;}}
    footer {{visibility: hidden;}}

    .block-container {{
        padding-top: 1.5rem !important;
    }}

    [data-testid="stMetric"] {{
        background: {COLORS["bg_card"]};
        border: 1px solid {COLORS["border"]};
        border-radius: 10px;
        padding: 12px 16px;
    }}
    [data-testid="stMetric"] label {{
        text-transform: uppercase;
        font-size: 0.7rem !important;
        letter-spacing: 0.05em;
        color: {COLORS["text_muted"]} !important;
    }}

    [data-testid="stDataFrame"] {{
        border: 1px solid {COLORS["border"]};
        border-radius: 8px;
    }}

    [data-testid="stSidebar"] {{
        background: {COLORS["bg_primary"]};
        border-right: 1px solid {COLORS["border"]};
    }}

    .stTabs [data-baseweb="tab"] {{
        border-radius: 6px;
        padding: 6px 16px;
    }}
    .stTabs [aria-selected="true"] {{
        background-color: {COLORS["border"]};
    }}
    </style>
    """, unsafe_allow_html=True)


# ---------------------------------------------------------------------------
# Helper components
# ---------------------------------------------------------------------------

def page_header(title: str, subtitle: str = ""):
    subtitle_html = (
        f"<p style='color:{COLORS['text_muted']};font-size:0.95rem;margin:0'>{subtitle}</p>"
        if subtitle else ""
    )
    st.markdown(f"""
    <div style='margin-bottom:1rem'>
        <h1 style='color:{COLORS["accent"]};font-size:2rem;font-weight:700;margin:0'>{title}</h1>
        {subtitle_html}
    </div>
    """, unsafe_allow_html=True)


def section_header(title: str, description: str = ""):
    desc_html = (
        f"<span style='color:{COLORS['text_muted']};font-size:0.85rem;margin-left:12px'>{description}</span>"
        if description else ""
    )
    st.markdown(f"""
    <div style='border-bottom:2px solid {COLORS["border"]};padding-bottom:6px;margin:1.2rem 0 0.8rem 0'>
        <h3 style='margin:0;font-size:1.15rem;font-weight:600'>{title}{desc_html}</h3>
    </div>
    """, unsafe_allow_html=True)


def colored_metric(label: str, value: str, color: str = COLORS["blue"], delta: str = ""):
    """KPI card with a left accent border."""
    delta_html = (
        f"<div style='color:{COLORS['text_muted']};font-size:0.75rem;margin-top:2px'>{delta}</div>"
        if delta else ""
    )
    st.markdown(f"""
    <div style='border-left:3px solid {color};background:{COLORS["bg_card"]};
                border-radius:0 8px 8px 0;padding:10px 14px;margin-bottom:8px'>
        <div style='text-transform:uppercase;font-size:0.7rem;letter-spacing:0.05em;
                    color:{COLORS["text_muted"]}'>{label}</div>
        <div style='font-size:1.3rem;font-weight:600;color:{color}'>{value}</div>
        {delta_html}
    </div>
    """, unsafe_allow_html=True)


def empty_state(message: str):
    st.markdown(f"""
    <div style='text-align:center;padding:2rem 1.5rem;background:{COLORS["bg_card"]};
                border:1px solid {COLORS["border"]};border-radius:10px;margin:1rem 0;
                color:{COLORS["text_muted"]}'>
        {message}
    </div>
    """, unsafe_allow_html=True)


def sidebar_branding():
    st.sidebar.markdown(f"""
    <div style='text-align:center;padding:12px 0 16px 0;margin-bottom:8px;
                border-bottom:1px solid {COLORS["border"]}'>
        <div style='font-size:1.4rem;font-weight:700;color:{COLORS["accent"]}'>{FIRM_SHORT_NAME}</div>
        <div style='color:{COLORS["text_muted"]};font-size:0.75rem;letter-spacing:0.08em;
                    text-transform:uppercase'>Global Markets</div>
    </div>
    """, unsafe_allow_html=True)


def firm_footer():
    st.divider()
    st.caption(f"{FIRM_NAME} · LLPIN {FIRM_LLPIN} · {FIRM_LOCATION} · {FIRM_EMAIL}")


def setup_page(title: str, icon: str = "🐺"):
    """set_page_config + logging + CSS + sidebar logo; call first on every page."""
    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt="%H:%M:%S",
    )
    st.set_page_config(
        page_title=f"{title} | {FIRM_SHORT_NAME}",
        page_icon=icon,
        layout="wide",
        initial_sidebar_state="expanded",
    )
    inject_custom_css()
    sidebar_branding()


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------

def pnl_color(value: float) -> str:
    return COLORS["profit"] if value >= 0 else COLORS["loss"]


def format_money(value: float, signed: bool = False) -> str:
    """$1,234.56 / -$1,234.56; signed adds a leading + for gains."""
    sign = "-" if value < 0 else ("+" if signed and value > 0 else "")
    return f"{sign}${abs(value):,.2f}"


def plotly_layout(height_key: str = "standard", **overrides) -> dict:
    """Consistent Plotly layout dict for dark-themed charts."""
    layout = {
        "height": CHART_HEIGHTS.get(height_key, CHART_HEIGHTS["standard"]),
        "paper_bgcolor": "rgba(0,0,0,0)",
        "plot_bgcolor": "rgba(0,0,0,0)",
        "font": {"family": "Inter, sans-serif", "color": "#e2e8f0"},
        "xaxis": {"gridcolor": COLORS["border"], "zerolinecolor": COLORS["border"]},
        "yaxis": {"gridcolor": COLORS["border"], "zerolinecolor": COLORS["border"]},
        "legend": {"orientation": "h", "y": 1.08},
        "margin": {"l": 40, "r": 20, "t": 40, "b": 30},
    }
    layout.update(overrides)
    return layout


# ---------------------------------------------------------------------------
# Shared widgets
# ---------------------------------------------------------------------------

def date_filter_selector(key: str, default: str = "month"):
    """Horizontal period picker. Returns (DateRangeFilter, custom DateRange or None)."""
    options = [f.value for f in DateRangeFilter]
    choice = st.radio(
        "Period",
        options,
        index=options.index(default),
        format_func=str.title,
        horizontal=True,
        key=f"{key}_period",
    )
    date_filter = DateRangeFilter(choice)
    custom = None
    if date_filter == DateRangeFilter.CUSTOM:
        picked = st.date_input("Date range", value=[], key=f"{key}_custom")
        if isinstance(picked, (list, tuple)) and len(picked) == 2:
            custom = DateRange(picked[0], picked[1])
    return date_filter, custom
