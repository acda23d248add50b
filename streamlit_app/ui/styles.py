"""
Global CSS Styling for Kitz Chef.

This module provides load_global_styles() to inject consistent styling and the
light/dark theme colours.
"""

import streamlit as st

THEME_COLORS = {
    "light": {"background": "#fffaf3", "text": "#2b2118", "card": "#ffffff", "accent": "#e8772e"},
    "dark": {"background": "#1d1b19", "text": "#f3ece4", "card": "#2a2724", "accent": "#f29b57"},
}


def load_global_styles(theme: str = "light") -> None:
    """
    Inject global CSS styles for the given theme ("light" or "dark").

    Unknown themes fall back to light.
    """
    colors = THEME_COLORS.get(theme, THEME_COLORS["light"])
    css = f"""
    <style>
        .stApp {{
            background-color: {colors["background"]};
            color: {colors["text"]};
        }}

        .kc-navbar-title {{
            font-size: 2.2rem;
            font-weight: 700;
            margin-bottom: 0;
        }}

        .kc-navbar-subtitle {{
            opacity: 0.75;
            margin-top: 0;
        }}

        .kc-history-item {{
            background-color: {colors["card"]};
            border: 1px solid rgba(0, 0, 0, 0.08);
            border-radius: 10px;
            padding: 0.6rem 0.75rem;
            margin-bottom: 0.25rem;
        }}

        .kc-history-item--active {{
            border-color: {colors["accent"]};
            box-shadow: inset 3px 0 0 {colors["accent"]};
        }}

        .kc-history-item--new {{
            animation: kc-pulse 1s ease-in-out 2;
        }}

        @keyframes kc-pulse {{
            50% {{ background-color: {colors["accent"]}33; }}
        }}

        .kc-history-meta {{
            font-size: 0.8rem;
            opacity: 0.7;
        }}
    </style>
    """
    st.markdown(css, unsafe_allow_html=True)
