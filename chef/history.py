"""
Recipe History Store.

Keeps the user's saved recipes, the currently displayed recipe, the active
(selected) history entry and the sidebar expansion flag, and mirrors them into
a key/value storage backend under three independent keys:

- `savedRecipes`: JSON array of saved recipes (newest first)
- `lastActiveRecipeId`: id of the selected entry
- `sidebarExpanded`: JSON boolean

Invariants:
- entry ids are unique
- no two entries share content (a save is rejected when content or preview matches)
- active_id is None or the id of an entry in `entries`

Older versions of the app persisted `savedRecipes` as a plain list of recipe
strings. load() resolves every persisted element once into a LegacyEntry or a
StructuredEntry, migrates legacy ones and writes the structured form straight
back, so later loads never see the old format again.

Several sessions may share one storage (two tabs on the same profile). save()
and delete() call sync() first, which adopts entries written elsewhere when
storage no longer holds what this store last saw, so neither overwrites the
other's recipes.

Persistence errors never escape this module: reads fall back to an empty
history and writes are logged while the in-memory state stays authoritative.
"""

import json
import logging
import threading
import uuid
from dataclasses import dataclass
from datetime import datetime, tzinfo
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from chef.dates import get_date_info, parse_timestamp, to_iso, utc_now
from chef.errors import PersistenceReadError, PersistenceWriteError
from chef.models import DateInfo, SavedRecipe
from chef.preview import get_recipe_preview
from chef.storage import BaseStorage

logger = logging.getLogger(__name__)

ENTRIES_KEY = "savedRecipes"
ACTIVE_ID_KEY = "lastActiveRecipeId"
SIDEBAR_KEY = "sidebarExpanded"

FAILURE_PLACEHOLDER = "Failed to generate recipe. Please try again."
EMPTY_RESULT_PLACEHOLDER = "No recipe generated"
_PLACEHOLDER_MARKERS = ("Failed to generate recipe", EMPTY_RESULT_PLACEHOLDER)

NEW_FLAG_SECONDS = 2.0

# scheduler(delay_seconds, callback): run callback once after the delay without blocking.
Scheduler = Callable[[float, Callable[[], None]], Any]


def thread_scheduler(delay: float, callback: Callable[[], None]) -> threading.Timer:
    timer = threading.Timer(delay, callback)
    timer.daemon = True
    timer.start()
    return timer


def is_placeholder(content: str) -> bool:
    """True if content is one of the UI's placeholder texts rather than a real recipe."""
    text = content.strip()
    return text == EMPTY_RESULT_PLACEHOLDER or _PLACEHOLDER_MARKERS[0] in text


def new_recipe_id() -> str:
    return f"recipe-{uuid.uuid4().hex}"


def build_saved_recipe(
    content: str,
    created: datetime,
    now: Optional[datetime] = None,
    tz: Optional[tzinfo] = None,
) -> SavedRecipe:
    """Create a new SavedRecipe with a fresh id and derived preview/date info."""
    return SavedRecipe(
        id=new_recipe_id(),
        content=content,
        preview=get_recipe_preview(content),
        date_created=to_iso(created),
        date_info=get_date_info(created, now=now or created, tz=tz),
    )


# ---------------------------------------------------------------------------
# Persisted format
# ---------------------------------------------------------------------------

@dataclass
class LegacyEntry:
    """A recipe persisted by the old format: just the recipe text."""
    content: str


@dataclass
class StructuredEntry:
    """A recipe persisted as an object; fields may be incomplete."""
    data: Dict[str, Any]


PersistedEntry = Union[LegacyEntry, StructuredEntry]


def parse_persisted_entries(raw: str) -> List[PersistedEntry]:
    """
    Decode the `savedRecipes` value into tagged entries.

    Raises:
        PersistenceReadError: If raw is not a JSON array of strings and/or
            objects carrying a string `content`
    """
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, TypeError) as e:
        raise PersistenceReadError(f"Saved recipes are not valid JSON: {e}") from e

    if not isinstance(data, list):
        raise PersistenceReadError("Saved recipes must be a JSON array")

    entries: List[PersistedEntry] = []
    for index, element in enumerate(data):
        if isinstance(element, str):
            entries.append(LegacyEntry(content=element))
        elif isinstance(element, dict) and isinstance(element.get("content"), str):
            entries.append(StructuredEntry(data=element))
        else:
            raise PersistenceReadError(f"Unrecognised saved recipe at index {index}")
    return entries


def migrate_legacy_entry(
    entry: LegacyEntry,
    now: datetime,
    tz: Optional[tzinfo] = None,
) -> SavedRecipe:
    return build_saved_recipe(entry.content, created=now, now=now, tz=tz)


def restore_structured_entry(
    entry: StructuredEntry,
    now: datetime,
    tz: Optional[tzinfo] = None,
) -> Tuple[SavedRecipe, bool]:
    """
    Rebuild a SavedRecipe from its persisted object, backfilling derived fields.

    id, content and dateCreated are kept as stored. A missing id or dateCreated
    is filled in; a missing or incomplete preview/dateInfo is recomputed.

    Returns:
        (recipe, repaired) where repaired tells whether anything was backfilled
    """
    data = entry.data
    repaired = False
    content = data["content"]

    recipe_id = data.get("id")
    if not isinstance(recipe_id, str) or not recipe_id:
        recipe_id = new_recipe_id()
        repaired = True

    date_created = data.get("dateCreated")
    if not isinstance(date_created, str) or not date_created:
        date_created = to_iso(now)
        repaired = True

    preview = data.get("preview")
    if not isinstance(preview, str) or not preview:
        preview = get_recipe_preview(content)
        repaired = True

    date_info = DateInfo.from_dict(data.get("dateInfo"))
    if date_info is None:
        try:
            date_info = get_date_info(date_created, now=now, tz=tz)
        except ValueError:
            logger.warning("Recipe %s has an unreadable dateCreated %r", recipe_id, date_created)
            date_info = get_date_info(now, now=now, tz=tz)
        repaired = True

    recipe = SavedRecipe(
        id=recipe_id,
        content=content,
        preview=preview,
        date_created=date_created,
        date_info=date_info,
    )
    return recipe, repaired


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------

class RecipeHistoryStore:
    """
    Saved-recipe history plus the view state that depends on it.

    Attributes:
        entries: Saved recipes, newest first
        active_id: Id of the selected entry, or None
        sidebar_expanded: Whether the history sidebar is expanded
        current_recipe: Recipe text currently displayed (saved or not)

    Args:
        storage: Persistence backend
        scheduler: Runs the delayed "new" flag clear (defaults to a daemon threading.Timer)
        clock: Returns the current aware datetime (defaults to UTC now)
        tz: Timezone used for display strings (defaults to the local timezone)
    """

    def __init__(
        self,
        storage: BaseStorage,
        scheduler: Optional[Scheduler] = None,
        clock: Optional[Callable[[], datetime]] = None,
        tz: Optional[tzinfo] = None,
        new_flag_seconds: float = NEW_FLAG_SECONDS,
    ):
        self.storage = storage
        self._schedule = scheduler or thread_scheduler
        self._clock = clock or utc_now
        self.tz = tz
        self.new_flag_seconds = new_flag_seconds

        self.entries: List[SavedRecipe] = []
        self.active_id: Optional[str] = None
        self.sidebar_expanded = False
        self.current_recipe = ""
        # Last savedRecipes value read from or written to storage by this store.
        self._entries_snapshot: Optional[str] = None

    def __len__(self) -> int:
        return len(self.entries)

    def get(self, recipe_id: str) -> Optional[SavedRecipe]:
        return next((e for e in self.entries if e.id == recipe_id), None)

    @property
    def active_entry(self) -> Optional[SavedRecipe]:
        if self.active_id is None:
            return None
        return self.get(self.active_id)

    @property
    def can_save(self) -> bool:
        return bool(self.current_recipe) and not is_placeholder(self.current_recipe)

    @property
    def has_new_entries(self) -> bool:
        return any(e.is_new for e in self.entries)

    # -- loading -----------------------------------------------------------

    def load(self) -> List[SavedRecipe]:
        """
        Populate the store from storage.

        Migrates the legacy string format (and re-persists it), backfills missing
        derived fields, restores the active entry if it still exists and the
        sidebar flag (default collapsed). Unreadable data resets the history.
        """
        now = self._clock()
        entries, needs_persist = self._read_entries(now)
        self.entries = entries
        if needs_persist:
            self._persist_entries()

        self.active_id = None
        self.current_recipe = ""
        last_active_id = self._read_item(ACTIVE_ID_KEY)
        if last_active_id:
            entry = self.get(last_active_id)
            if entry is not None:
                self.active_id = entry.id
                self.current_recipe = entry.content
            else:
                logger.debug("Ignoring stale active recipe id %s", last_active_id)

        self.sidebar_expanded = self._read_sidebar_flag()
        if self.active_id is not None:
            self._set_sidebar(True)

        return self.entries

    def _read_item(self, key: str) -> Optional[str]:
        try:
            return self.storage.get_item(key)
        except PersistenceReadError as e:
            logger.error("Error reading %s from storage: %s", key, e)
            return None

    def _read_entries(self, now: datetime) -> Tuple[List[SavedRecipe], bool]:
        try:
            raw = self.storage.get_item(ENTRIES_KEY)
            self._entries_snapshot = raw
            return self._decode_entries(raw, now)
        except PersistenceReadError as e:
            logger.error("Error loading saved recipes, starting with an empty history: %s", e)
            return [], True

    def _decode_entries(self, raw: Optional[str], now: datetime) -> Tuple[List[SavedRecipe], bool]:
        if raw is None:
            return [], False
        persisted = parse_persisted_entries(raw)

        entries: List[SavedRecipe] = []
        seen_ids = set()
        needs_persist = False
        migrated = 0
        for item in persisted:
            if isinstance(item, LegacyEntry):
                recipe = migrate_legacy_entry(item, now, tz=self.tz)
                migrated += 1
                needs_persist = True
            else:
                recipe, repaired = restore_structured_entry(item, now, tz=self.tz)
                needs_persist = needs_persist or repaired
            if recipe.id in seen_ids:
                recipe.id = new_recipe_id()
                needs_persist = True
            seen_ids.add(recipe.id)
            entries.append(recipe)

        if migrated:
            logger.info("Migrated %d saved recipes from the legacy format", migrated)
        return entries, needs_persist

    def _read_sidebar_flag(self) -> bool:
        raw = self._read_item(SIDEBAR_KEY)
        if raw is None:
            return False
        try:
            return json.loads(raw) is True
        except json.JSONDecodeError:
            logger.debug("Ignoring unreadable sidebar flag %r", raw)
            return False

    # -- persistence -------------------------------------------------------

    def _write(self, key: str, value: str) -> bool:
        try:
            self.storage.set_item(key, value)
        except PersistenceWriteError as e:
            logger.error("Error saving %s to storage: %s", key, e)
            return False
        return True

    def _remove(self, key: str) -> bool:
        try:
            self.storage.remove_item(key)
        except PersistenceWriteError as e:
            logger.error("Error removing %s from storage: %s", key, e)
            return False
        return True

    def _persist_entries(self) -> None:
        if self.entries:
            raw = json.dumps([e.to_dict() for e in self.entries], ensure_ascii=False)
            if self._write(ENTRIES_KEY, raw):
                self._entries_snapshot = raw
        elif self._remove(ENTRIES_KEY):
            self._entries_snapshot = None

    def sync(self) -> bool:
        """
        Pick up entries another session wrote to the same storage.

        Nothing changes when storage still holds what this store last read or
        wrote, which also keeps unsaved in-memory state after failed writes.
        "New" flags survive for entries this store already knows, and an
        active id whose entry disappeared is dropped.

        Returns:
            True if the in-memory entries were replaced
        """
        try:
            raw = self.storage.get_item(ENTRIES_KEY)
            if raw == self._entries_snapshot:
                return False
            entries, _ = self._decode_entries(raw, self._clock())
        except PersistenceReadError as e:
            logger.error("Error re-reading saved recipes, keeping the current history: %s", e)
            return False

        new_ids = {e.id for e in self.entries if e.is_new}
        for entry in entries:
            entry.is_new = entry.id in new_ids
        self.entries = entries
        self._entries_snapshot = raw
        if self.active_id is not None and self.get(self.active_id) is None:
            self.active_id = None
        return True

    def _set_entries(self, entries: List[SavedRecipe]) -> None:
        self.entries = entries
        self._persist_entries()

    def _set_active_id(self, recipe_id: Optional[str]) -> None:
        if recipe_id != self.active_id:
            self.active_id = recipe_id
            if recipe_id:
                self._write(ACTIVE_ID_KEY, recipe_id)
            else:
                self._remove(ACTIVE_ID_KEY)
        if recipe_id:
            self._set_sidebar(True)

    def _set_sidebar(self, expanded: bool) -> None:
        if expanded != self.sidebar_expanded:
            self.sidebar_expanded = expanded
            self._write(SIDEBAR_KEY, json.dumps(expanded))

    # -- operations --------------------------------------------------------

    def save(self, content: Optional[str] = None) -> Tuple[bool, Optional[SavedRecipe]]:
        """
        Save a recipe to the history (defaults to the displayed recipe).

        The new entry goes first, becomes active, expands the sidebar and is
        flagged as new for `new_flag_seconds`.

        Returns:
            (True, entry) when saved; (False, None) when content is empty, a
            placeholder, or duplicates an existing entry's content or preview
        """
        content = self.current_recipe if content is None else content
        if not content or is_placeholder(content):
            return False, None

        self.sync()

        now = self._clock()
        entry = build_saved_recipe(content, created=now, now=now, tz=self.tz)
        exists = any(
            saved.content == content or saved.preview == entry.preview
            for saved in self.entries
        )
        if exists:
            logger.debug("Recipe already saved, skipping (%s)", entry.preview)
            return False, None

        entry.is_new = True
        self._set_entries([entry] + self.entries)
        self.current_recipe = content
        self._set_active_id(entry.id)
        self._set_sidebar(True)

        recipe_id = entry.id
        self._schedule(self.new_flag_seconds, lambda: self._clear_new_flag(recipe_id))
        return True, entry

    def _clear_new_flag(self, recipe_id: str) -> None:
        entry = self.get(recipe_id)
        if entry is None:
            # Deleted before the timer fired.
            return
        entry.is_new = False

    def delete(self, recipe_id: str) -> bool:
        """
        Delete one entry. Deleting the active entry also clears the displayed
        recipe, and collapses the sidebar when nothing is left.

        Returns:
            True if an entry was removed
        """
        self.sync()
        remaining = [e for e in self.entries if e.id != recipe_id]
        if len(remaining) == len(self.entries):
            return False

        self._set_entries(remaining)
        if self.active_id == recipe_id:
            self._set_active_id(None)
            self.current_recipe = ""
            if not remaining:
                self._set_sidebar(False)
        return True

    def clear_all(self, confirm: Callable[[], bool]) -> bool:
        """
        Delete every entry after the user confirms.

        All three storage keys are removed rather than written as empty values.

        Args:
            confirm: Prompt returning True when the user agreed

        Returns:
            True if the history was cleared
        """
        if not confirm():
            return False

        self.entries = []
        self.active_id = None
        self.current_recipe = ""
        self.sidebar_expanded = False
        self._persist_entries()
        for key in (ACTIVE_ID_KEY, SIDEBAR_KEY):
            self._remove(key)
        return True

    def set_active(self, recipe_id: str) -> bool:
        """Select an entry and display it. Unknown ids are ignored."""
        entry = self.get(recipe_id)
        if entry is None:
            logger.warning("Cannot select unknown recipe %s", recipe_id)
            return False
        self.current_recipe = entry.content
        self._set_active_id(entry.id)
        self._set_sidebar(True)
        return True

    def clear_current(self) -> None:
        """Stop displaying a recipe, deselect and collapse the sidebar."""
        self.current_recipe = ""
        self._set_active_id(None)
        self._set_sidebar(False)

    def begin_generation(self) -> None:
        self.clear_current()

    def show_recipe(self, text: str) -> None:
        """Display freshly generated (not yet saved) recipe text."""
        self.current_recipe = text

    def set_sidebar_expanded(self, expanded: bool) -> None:
        self._set_sidebar(bool(expanded))

    def refresh_date_info(self) -> None:
        """Recompute every entry's date labels against the current time (not persisted)."""
        now = self._clock()
        for entry in self.entries:
            try:
                entry.date_info = get_date_info(parse_timestamp(entry.date_created), now=now, tz=self.tz)
            except ValueError:
                continue
