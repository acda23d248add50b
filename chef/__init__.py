"""
Core recipe logic for Kitz Chef.

This package contains:
- recipes: ingredient validation and recipe generation through a provider
- providers: text-generation provider interface and the OpenAI implementation
- history: the saved-recipe history store used by the Streamlit frontend
- storage: key/value persistence backends for the history store
- preview / dates: derived display metadata for saved recipes
"""
