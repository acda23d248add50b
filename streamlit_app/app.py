"""
Kitz Chef - Streamlit Frontend Main Entry Point.

Single-page app: enter ingredients, generate a recipe through the backend, save
it to the local recipe history and browse or delete saved recipes.

Run with:
    streamlit run streamlit_app/app.py
"""

import html
import sys
from pathlib import Path

# Ensure the streamlit_app directory is in the Python path
# This allows imports to work regardless of how the app is run
streamlit_app_dir = Path(__file__).parent
if str(streamlit_app_dir) not in sys.path:
    sys.path.insert(0, str(streamlit_app_dir))

# Add project root to path so we can import api.config and chef
project_root = streamlit_app_dir.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

# Import config early to load .env file before any other code accesses environment variables
import api.config  # noqa: F401

import streamlit as st

from chef.history import RecipeHistoryStore, is_placeholder
from chef.models import SavedRecipe
from utils.api_client import generate_recipe, get_health_status
from utils.history_state import (
    CONFIRM_CLEAR_KEY,
    THEME_LIGHT,
    get_history_store,
    get_theme,
    pop_flash,
    set_flash,
    toggle_theme,
)
from utils.ingredients import parse_ingredients
from ui.feedback import show_empty_state, show_error, working_spinner
from ui.styles import load_global_styles

# Page configuration - must be called before any other Streamlit commands
st.set_page_config(
    page_title="Kitz Chef",
    page_icon="🍳",
    layout="wide",
)

# How often to check whether the "new" badges can be dropped.
BADGE_REFRESH_SECONDS = 0.5


# ---------------------------------------------------------------------------
# Callbacks (run before the rerun that renders their effect)
# ---------------------------------------------------------------------------

def on_save(store: RecipeHistoryStore) -> None:
    committed, entry = store.save()
    if committed:
        set_flash(f"Saved “{entry.preview}”")
    else:
        set_flash("This recipe is already in your history", icon="ℹ️")


def on_view(store: RecipeHistoryStore, recipe_id: str) -> None:
    store.set_active(recipe_id)


def on_delete(store: RecipeHistoryStore, recipe_id: str) -> None:
    store.delete(recipe_id)


def on_request_clear_all() -> None:
    st.session_state[CONFIRM_CLEAR_KEY] = True


def on_confirm_clear_all(store: RecipeHistoryStore, confirmed: bool) -> None:
    st.session_state[CONFIRM_CLEAR_KEY] = False
    if store.clear_all(lambda: confirmed):
        set_flash("Recipe history cleared", icon="🗑️")


def on_clear_recipe(store: RecipeHistoryStore) -> None:
    store.clear_current()


def on_clear_input() -> None:
    st.session_state["ingredients_input"] = ""


def on_toggle_history(store: RecipeHistoryStore) -> None:
    store.set_sidebar_expanded(not store.sidebar_expanded)


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

@st.fragment(run_every=BADGE_REFRESH_SECONDS)
def watch_new_badges(store: RecipeHistoryStore) -> None:
    """Rerun the whole page once the store's timer has cleared every "new" flag."""
    if not store.has_new_entries:
        st.rerun()


def render_navbar() -> None:
    col_title, col_theme = st.columns([4, 1])
    with col_title:
        st.markdown('<p class="kc-navbar-title">🍴 Kitz Chef</p>', unsafe_allow_html=True)
        st.markdown(
            '<p class="kc-navbar-subtitle">Turn your ingredients into delicious recipes!</p>',
            unsafe_allow_html=True,
        )
    with col_theme:
        label = "🌙 Dark Mode" if get_theme() == THEME_LIGHT else "☀️ Light Mode"
        st.button(label, on_click=toggle_theme, use_container_width=True)


def render_history_item(store: RecipeHistoryStore, entry: SavedRecipe) -> None:
    classes = ["kc-history-item"]
    if entry.id == store.active_id:
        classes.append("kc-history-item--active")
    if entry.is_new:
        classes.append("kc-history-item--new")

    badge = " 🆕" if entry.is_new else ""
    st.markdown(
        f'<div class="{" ".join(classes)}">🍪 <strong>{html.escape(entry.preview)}</strong>{badge}'
        f'<div class="kc-history-meta">📅 {entry.date_info.date} · 🕒 {entry.date_info.time}'
        f" · {entry.date_info.relative_time}</div></div>",
        unsafe_allow_html=True,
    )
    col_view, col_delete = st.columns(2)
    with col_view:
        st.button(
            "👁️ View",
            key=f"view_{entry.id}",
            on_click=on_view,
            args=(store, entry.id),
            use_container_width=True,
            help="View this recipe",
        )
    with col_delete:
        st.button(
            "🗑️ Delete",
            key=f"delete_{entry.id}",
            on_click=on_delete,
            args=(store, entry.id),
            use_container_width=True,
            help="Delete this recipe",
        )


def render_history(store: RecipeHistoryStore) -> None:
    col_title, col_clear = st.columns([3, 2])
    with col_title:
        st.markdown(f"### 💬 Recipe History ({len(store)})")
    with col_clear:
        st.button(
            "Clear All",
            on_click=on_request_clear_all,
            type="secondary",
            use_container_width=True,
            help="Clear all saved recipes",
        )

    if st.session_state.get(CONFIRM_CLEAR_KEY):
        st.warning("Are you sure you want to delete all saved recipes?")
        col_yes, col_no = st.columns(2)
        with col_yes:
            st.button("Yes, delete all", on_click=on_confirm_clear_all, args=(store, True), type="primary")
        with col_no:
            st.button("Cancel", on_click=on_confirm_clear_all, args=(store, False))

    st.button("◀ Collapse", on_click=on_toggle_history, args=(store,), key="collapse_history")

    store.refresh_date_info()
    for entry in store.entries:
        render_history_item(store, entry)
    if store.has_new_entries:
        watch_new_badges(store)


def render_generator(store: RecipeHistoryStore) -> None:
    st.markdown("#### Your Recipe")

    with st.form("generate_form"):
        text = st.text_area(
            "Ingredients",
            placeholder="Describe your recipe here... e.g. eggs, tomatoes, basil",
            key="ingredients_input",
            height=120,
            label_visibility="collapsed",
        )
        submitted = st.form_submit_button("🍪 Generate Recipe", type="primary")
    st.button("✖ Clear input", on_click=on_clear_input, key="clear_input")

    if submitted:
        ingredients = parse_ingredients(text)
        if ingredients:
            store.begin_generation()
            with working_spinner("Generating..."):
                store.show_recipe(generate_recipe(ingredients))
            st.rerun()

    if store.current_recipe:
        render_recipe(store)
    elif not store.entries:
        show_empty_state("Welcome to Kitz Chef!", "Here you can create inspired recipes")


def render_recipe(store: RecipeHistoryStore) -> None:
    col_title, col_date = st.columns([3, 2])
    with col_title:
        st.markdown("### 🍪 Generated Recipe")
    active = store.active_entry
    if active is not None:
        with col_date:
            st.caption(f"📅 {active.date_info.full_date_time}")

    if is_placeholder(store.current_recipe):
        show_error(store.current_recipe, hint="Check that the backend is running and try again.")
    else:
        with st.container(border=True):
            st.markdown(store.current_recipe)

    col_save, col_clear, _ = st.columns([1, 1, 3])
    with col_save:
        st.button(
            "🔖 Save Recipe",
            on_click=on_save,
            args=(store,),
            disabled=not store.can_save,
            type="primary",
        )
    with col_clear:
        st.button("Clear Recipe", on_click=on_clear_recipe, args=(store,))


def main() -> None:
    load_global_styles(get_theme())
    store = get_history_store()
    # Another tab on the same profile may have saved or deleted recipes.
    store.sync()

    flash = pop_flash()
    if flash:
        message, icon = flash
        st.toast(message, icon=icon)

    with st.sidebar:
        st.markdown("### 🍳 **Kitz Chef**")
        st.divider()
        health = get_health_status()
        if health:
            st.success(f"Backend online ({health.get('mode', 'unknown')})")
        else:
            st.warning("Backend offline")

    render_navbar()

    if store.entries and store.sidebar_expanded:
        col_history, col_main = st.columns([1, 2], gap="large")
        with col_history:
            render_history(store)
        with col_main:
            render_generator(store)
    else:
        if store.entries:
            st.button(
                f"📚 Recipe History ({len(store)})",
                on_click=on_toggle_history,
                args=(store,),
                key="expand_history",
            )
        render_generator(store)


main()
