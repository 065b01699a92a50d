"""Testimonials — traders on working at Wolfcrux."""

import streamlit as st

import ui_theme

TESTIMONIALS = [
    ("Krisha Gandhi", "Equity Trader",
     "Joining Wolfcrux Global pushed me to think faster and trade smarter. Every day I feel "
     "like I'm leveling up with people who genuinely want me to win."),
    ("Jenish Pansuriya", "Senior Trader",
     "Wolfcrux taught me discipline and gave me a structure that actually works in live "
     "markets. The support during volatile sessions has been a game-changer."),
    ("Purvi Doshi", "Equity Trader",
     "The seniors break down complex ideas into simple, actionable steps. I've never felt "
     "this confident placing trades backed by real logic and risk control."),
    ("Labdhi Gada", "Equity Trader",
     "From day one I felt part of something bigger. Knowing the team has your back on "
     "tough market days makes all the difference."),
    ("Darshit Shiroiya", "Equity Analyst",
     "The technology and data-driven approach changed the way I analyze price action."),
    ("Jinal Ranka", "Equity Trader",
     "Clear communication, teamwork and consistent results. The environment makes you "
     "better without you even noticing."),
]

ui_theme.setup_page("Testimonials")
ui_theme.page_header("Testimonials", "Hear what our traders say about working with us.")

cols = st.columns(2)
for i, (author, position, quote) in enumerate(TESTIMONIALS):
    with cols[i % 2]:
        with st.container(border=True):
            st.markdown(f"> {quote}")
            st.markdown(f"**{author}**  \n{position}")

ui_theme.firm_footer()
