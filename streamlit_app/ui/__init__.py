"""
UI Styling and Components Module.

This module provides global CSS styling and reusable UI components
for the Kitz Chef Streamlit app.
"""

from ui.styles import load_global_styles
from ui.feedback import show_empty_state, show_error, working_spinner

__all__ = [
    "load_global_styles",
    "show_empty_state",
    "show_error",
    "working_spinner",
]
