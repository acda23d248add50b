"""Ingredient input parsing."""

from typing import List


def parse_ingredients(text: str) -> List[str]:
    """
    Split comma-separated user input into ingredients.

    Surrounding whitespace is trimmed and empty items are dropped.

    Example:
        >>> parse_ingredients(" eggs, , tomatoes ,basil ")
        ['eggs', 'tomatoes', 'basil']
    """
    if not text:
        return []
    return [item.strip() for item in text.split(",") if item.strip()]
