"""
Tests for the per-browser session helpers of the Streamlit frontend.

This test module verifies that:
1. Each browser gets its own profile id (kept in the URL) and its own history file
2. Two profiles never see each other's recipes
3. The theme choice is stored under `recipeTheme` and survives a reload
"""

import json
from types import SimpleNamespace
from unittest.mock import patch

import pytest

from chef.errors import PersistenceWriteError
from chef.storage import MemoryStorage
from streamlit_app.utils import history_state
from streamlit_app.utils.history_state import (
    PROFILE_PARAM,
    THEME_DARK,
    THEME_LIGHT,
    THEME_STORAGE_KEY,
    get_history_store,
    get_profile_id,
    get_storage,
    get_theme,
    toggle_theme,
)

PROFILE_A = "a" * 32
PROFILE_B = "b" * 32

RECIPE = "# Lentil Soup\n\nSimmer lentils with carrots and cumin for thirty minutes."


@pytest.fixture(autouse=True)
def history_dir(monkeypatch, tmp_path):
    monkeypatch.setenv("RECIPE_HISTORY_DIR", str(tmp_path))
    return tmp_path


def browser_session(profile_id=None):
    """Fake `st` for one browser session: fresh session state, URL query params."""
    query_params = {} if profile_id is None else {PROFILE_PARAM: profile_id}
    return SimpleNamespace(session_state={}, query_params=query_params)


class TestProfile:
    def test_new_browser_gets_a_profile_in_the_url(self):
        fake_st = browser_session()
        with patch.object(history_state, "st", fake_st):
            profile_id = get_profile_id()
        assert len(profile_id) == 32
        assert fake_st.query_params[PROFILE_PARAM] == profile_id

    def test_existing_profile_is_reused(self):
        with patch.object(history_state, "st", browser_session(PROFILE_A)):
            assert get_profile_id() == PROFILE_A

    def test_malformed_profile_is_replaced(self):
        fake_st = browser_session("../../secrets")
        with patch.object(history_state, "st", fake_st):
            profile_id = get_profile_id()
        assert profile_id != "../../secrets"
        assert fake_st.query_params[PROFILE_PARAM] == profile_id

    def test_each_profile_has_its_own_file(self, history_dir):
        with patch.object(history_state, "st", browser_session(PROFILE_A)):
            assert get_storage().path == history_dir / f"{PROFILE_A}.json"

    def test_profiles_do_not_share_recipes(self, history_dir):
        with patch.object(history_state, "st", browser_session(PROFILE_A)):
            committed, _ = get_history_store().save(RECIPE)
        assert committed is True

        with patch.object(history_state, "st", browser_session(PROFILE_B)):
            assert get_history_store().entries == []

        # Reloading profile A finds the recipe again.
        with patch.object(history_state, "st", browser_session(PROFILE_A)):
            assert [e.content for e in get_history_store().entries] == [RECIPE]


class TestTheme:
    def test_defaults_to_light(self):
        with patch.object(history_state, "st", browser_session(PROFILE_A)):
            assert get_theme() == THEME_LIGHT

    def test_toggle_survives_reload(self, history_dir):
        with patch.object(history_state, "st", browser_session(PROFILE_A)):
            toggle_theme()
            assert get_theme() == THEME_DARK

        stored = json.loads((history_dir / f"{PROFILE_A}.json").read_text(encoding="utf-8"))
        assert stored[THEME_STORAGE_KEY] == THEME_DARK

        with patch.object(history_state, "st", browser_session(PROFILE_A)):
            assert get_theme() == THEME_DARK
            toggle_theme()
            assert get_theme() == THEME_LIGHT

    def test_unknown_stored_value_falls_back_to_light(self):
        fake_st = browser_session(PROFILE_A)
        fake_st.session_state[history_state.STORAGE_KEY] = MemoryStorage({THEME_STORAGE_KEY: "sepia"})
        with patch.object(history_state, "st", fake_st):
            assert get_theme() == THEME_LIGHT

    def test_clear_all_keeps_the_theme(self):
        with patch.object(history_state, "st", browser_session(PROFILE_A)):
            toggle_theme()
            store = get_history_store()
            store.save(RECIPE)
            store.clear_all(lambda: True)
            assert get_storage().get_item(THEME_STORAGE_KEY) == THEME_DARK

    def test_write_failure_keeps_session_theme(self, caplog):
        class ReadOnlyStorage(MemoryStorage):
            def set_item(self, key, value):
                raise PersistenceWriteError("read-only")

        fake_st = browser_session(PROFILE_A)
        fake_st.session_state[history_state.STORAGE_KEY] = ReadOnlyStorage()
        with patch.object(history_state, "st", fake_st):
            toggle_theme()
            assert get_theme() == THEME_DARK
        assert "read-only" in caplog.text
