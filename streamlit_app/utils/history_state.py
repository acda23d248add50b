"""
Recipe history and view state for the Streamlit session.

Every browser gets its own profile: a random hex id kept in the page URL
(`?profile=...`), so reloading or bookmarking the page finds the same history
again while other browsers never see it. The profile's key/value storage is a
JSON file under FrontendConfig.get_history_dir().

The RecipeHistoryStore lives in st.session_state so it survives reruns, and is
loaded from the profile storage once per browser session. The theme choice is
stored in the same storage under `recipeTheme`.
"""

import logging
import uuid

import streamlit as st

from api.config import PROFILE_ID_PATTERN, FrontendConfig
from chef.errors import PersistenceReadError, PersistenceWriteError
from chef.history import RecipeHistoryStore
from chef.storage import BaseStorage, JsonFileStorage

logger = logging.getLogger(__name__)

PROFILE_PARAM = "profile"

STORAGE_KEY = "recipe_storage"
HISTORY_STORE_KEY = "recipe_history_store"
CONFIRM_CLEAR_KEY = "confirm_clear_all"
FLASH_KEY = "flash_message"
THEME_KEY = "recipe_theme"

THEME_STORAGE_KEY = "recipeTheme"
THEME_LIGHT = "light"
THEME_DARK = "dark"


def get_profile_id() -> str:
    """
    Get this browser's profile id from the URL, creating one if needed.

    A missing or malformed `profile` query parameter is replaced by a fresh id.
    """
    profile_id = st.query_params.get(PROFILE_PARAM)
    if not profile_id or not PROFILE_ID_PATTERN.fullmatch(profile_id):
        profile_id = uuid.uuid4().hex
        st.query_params[PROFILE_PARAM] = profile_id
    return profile_id


def get_storage() -> BaseStorage:
    if STORAGE_KEY not in st.session_state:
        path = FrontendConfig.get_history_file(get_profile_id())
        st.session_state[STORAGE_KEY] = JsonFileStorage(path)
    return st.session_state[STORAGE_KEY]


def get_history_store() -> RecipeHistoryStore:
    """
    Get or create the session's history store.

    Returns:
        Loaded RecipeHistoryStore backed by this browser's profile storage
    """
    if HISTORY_STORE_KEY not in st.session_state:
        store = RecipeHistoryStore(get_storage())
        store.load()
        st.session_state[HISTORY_STORE_KEY] = store
    return st.session_state[HISTORY_STORE_KEY]


def _read_theme(storage: BaseStorage) -> str:
    try:
        theme = storage.get_item(THEME_STORAGE_KEY)
    except PersistenceReadError as e:
        logger.error("Error reading theme from storage: %s", e)
        return THEME_LIGHT
    return theme if theme in (THEME_LIGHT, THEME_DARK) else THEME_LIGHT


def get_theme() -> str:
    if THEME_KEY not in st.session_state:
        st.session_state[THEME_KEY] = _read_theme(get_storage())
    return st.session_state[THEME_KEY]


def toggle_theme() -> None:
    theme = THEME_DARK if get_theme() == THEME_LIGHT else THEME_LIGHT
    st.session_state[THEME_KEY] = theme
    try:
        get_storage().set_item(THEME_STORAGE_KEY, theme)
    except PersistenceWriteError as e:
        logger.error("Error saving theme to storage: %s", e)


def set_flash(message: str, icon: str = "✅") -> None:
    """Queue a one-shot toast shown on the next rerun."""
    st.session_state[FLASH_KEY] = (message, icon)


def pop_flash():
    return st.session_state.pop(FLASH_KEY, None)
