"""
Utility modules for the Streamlit frontend.

This package contains:
- api_client: Backend API communication
- history_state: Session-scoped access to the recipe history store
- ingredients: Ingredient input parsing
"""
