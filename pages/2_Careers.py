"""Careers — open roles."""

import streamlit as st

from config import FIRM_EMAIL
import ui_theme

OPEN_ROLES = [
    {
        "title": "US Equity Trader",
        "department": "Trading",
        "location": "Mumbai",
        "type": "Full-time, on-site",
        "description": (
            "Analyze market trends, provide liquidity and execute high-precision trading "
            "strategies during US market hours. You will interpret real-time data, keep "
            "your discipline under pressure and work with senior traders to refine "
            "strategies as conditions change."
        ),
        "qualifications": [
            "Strong understanding of stock market concepts and live market behavior",
            "Technical analysis knowledge and the ability to build or follow strategies",
            "Analytical thinking and fast decision-making",
            "Strong discipline and emotional control",
        ],
    },
]

HIRING_STEPS = [
    "Submit your application and resume",
    "Initial screening call",
    "Technical assessment and review",
    "Final interview with the trading desk",
]

ui_theme.setup_page("Careers")
ui_theme.page_header("Careers", "Help us push the boundaries of trading technology.")

for role in OPEN_ROLES:
    with st.expander(f"{role['title']} · {role['department']} · {role['location']}", expanded=True):
        st.caption(role["type"])
        st.write(role["description"])
        st.markdown("**Qualifications**")
        st.markdown("\n".join(f"- {q}" for q in role["qualifications"]))
        st.markdown(f"Apply: [{FIRM_EMAIL}](mailto:{FIRM_EMAIL}?subject={role['title']})")

ui_theme.section_header("Hiring process")
for i, step in enumerate(HIRING_STEPS, start=1):
    st.markdown(f"**{i}.** {step}")

st.info(
    "Don't see a fit? Send us your resume and we'll keep you in mind for future openings."
)
ui_theme.firm_footer()
