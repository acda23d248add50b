"""
Preview derivation for saved recipes.

A preview is the first few words of a recipe with markdown markers removed,
used as the title of a history entry.
"""

import re

PREVIEW_WORD_LIMIT = 6
PREVIEW_ELLIPSIS = "..."
EMPTY_PREVIEW = "No preview available"

_HEADING_RE = re.compile(r"^#+\s+", re.MULTILINE)
_BOLD_RE = re.compile(r"\*\*|__")
_CODE_RE = re.compile(r"`")
_BULLET_RE = re.compile(r"^\s*[*-]\s+", re.MULTILINE)
# Single-character emphasis left over once bold and bullets are gone.
_ITALIC_RE = re.compile(r"\*|(?<!\w)_|_(?!\w)")
_WHITESPACE_RE = re.compile(r"\s+")


def strip_markdown(text: str) -> str:
    """
    Remove heading, emphasis, inline code and bullet markers and collapse whitespace.

    Args:
        text: Markdown text

    Returns:
        Single-line plain text
    """
    plain = _HEADING_RE.sub("", text)
    plain = _BOLD_RE.sub("", plain)
    plain = _CODE_RE.sub("", plain)
    plain = _BULLET_RE.sub("", plain)
    plain = _ITALIC_RE.sub("", plain)
    return _WHITESPACE_RE.sub(" ", plain).strip()


def get_recipe_preview(recipe_text: str) -> str:
    """
    Build a short plain-text preview of a recipe.

    Returns the stripped text unchanged when it has at most PREVIEW_WORD_LIMIT
    words, otherwise the first PREVIEW_WORD_LIMIT words followed by "...".

    Example:
        >>> get_recipe_preview("# Title\\n**Bold** word one two three four")
        'Title Bold word one two three...'
    """
    if not recipe_text:
        return EMPTY_PREVIEW

    plain = strip_markdown(recipe_text)
    words = plain.split()
    if len(words) <= PREVIEW_WORD_LIMIT:
        return plain
    return " ".join(words[:PREVIEW_WORD_LIMIT]) + PREVIEW_ELLIPSIS
