"""
Saved-recipe models for the history store.

SavedRecipe is persisted as a camelCase JSON object so that history written by
earlier versions of the app (and the legacy plain-string format, see
chef.history) stays readable:

    {
        "id": "recipe-3f2a...",
        "content": "# Tomato Pasta ...",
        "preview": "Tomato Pasta Serves 2 Ingredients...",
        "dateCreated": "2026-10-19T12:30:00+00:00",
        "dateInfo": {"date": ..., "time": ..., "fullDateTime": ..., "relativeTime": ...}
    }

# NOTE: is_new is a transient UI flag and is never written to storage.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class DateInfo:
    """
    Display fields derived from a recipe's creation timestamp.

    Attributes:
        date: Absolute date (e.g. "10/19/2026")
        time: Time of day (e.g. "02:30 PM")
        full_date_time: Combined date and time (e.g. "10/19/2026, 2:30:00 PM")
        relative_time: Short label relative to now ("02:30 PM", "Mon 02:30 PM" or "Oct 5")
    """
    date: str
    time: str
    full_date_time: str
    relative_time: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "date": self.date,
            "time": self.time,
            "fullDateTime": self.full_date_time,
            "relativeTime": self.relative_time,
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Optional["DateInfo"]:
        """
        Build DateInfo from its persisted form.

        Returns None when data is missing or incomplete so the caller can
        recompute it from the creation timestamp.
        """
        if not isinstance(data, dict):
            return None
        try:
            return cls(
                date=str(data["date"]),
                time=str(data["time"]),
                full_date_time=str(data["fullDateTime"]),
                relative_time=str(data["relativeTime"]),
            )
        except KeyError:
            return None


@dataclass
class SavedRecipe:
    """A recipe the user saved to their history."""
    id: str
    content: str
    preview: str
    date_created: str
    date_info: DateInfo
    is_new: bool = field(default=False, compare=False)

    def to_dict(self) -> Dict[str, Any]:
        """Persisted representation (camelCase, without the transient is_new flag)."""
        return {
            "id": self.id,
            "content": self.content,
            "preview": self.preview,
            "dateCreated": self.date_created,
            "dateInfo": self.date_info.to_dict(),
        }
