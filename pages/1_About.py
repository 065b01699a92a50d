"""About — who we are and how we trade."""

import streamlit as st

from config import FIRM_NAME
import ui_theme

ui_theme.setup_page("About")
ui_theme.page_header("About Us", FIRM_NAME)

st.markdown(
    f"{FIRM_NAME} is a proprietary trading firm focused on US equities. We combine "
    "technology, data science and market expertise to deliver consistent results."
)

col1, col2 = st.columns(2)
with col1:
    ui_theme.section_header("Mission")
    st.write(
        "To leverage technology and quantitative research to provide liquidity "
        "and trade efficiently in US equity markets."
    )
with col2:
    ui_theme.section_header("Vision")
    st.write(
        "Data-driven decision making and continuous innovation, practised by "
        "disciplined traders who keep improving."
    )

ui_theme.section_header("How we trade")
st.markdown(
    "- **Technology first**: algorithms and low-latency infrastructure for execution.\n"
    "- **Risk management**: real-time monitoring with controlled exposure on every account.\n"
    "- **People**: senior traders mentor every new desk member through live sessions."
)

ui_theme.section_header("Our values")
v1, v2, v3 = st.columns(3)
v1.markdown("**Innovation**  \nNew approaches to trading and technology.")
v2.markdown("**Excellence**  \nAttention to every detail of execution.")
v3.markdown("**Integrity**  \nThe highest ethical standards and transparency.")

ui_theme.firm_footer()
