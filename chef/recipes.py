"""
Recipe generation.

Validates an ingredient list, builds the chef prompts and asks a provider for a
recipe. Any provider failure is collapsed into GenerationFailedError; the
underlying exception is logged here and chained, never shown to API callers.
"""

import logging
from typing import Any, List

from chef.errors import GenerationFailedError, InvalidIngredientsError
from chef.providers.base import BaseRecipeProvider

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = "You are a professional chef. Write clear, practical recipes."
USER_PROMPT_TEMPLATE = "Create a recipe using these ingredients: {ingredients}"
TEMPERATURE = 0.7


def validate_ingredients(ingredients: Any) -> List[str]:
    """
    Check that ingredients is a non-empty list of non-blank strings.

    Args:
        ingredients: Value taken from the request body

    Returns:
        The ingredient list, unchanged

    Raises:
        InvalidIngredientsError: If the value is not a list, is empty, or holds
            anything other than non-blank strings
    """
    if not isinstance(ingredients, list) or not ingredients:
        raise InvalidIngredientsError("ingredients must be a non-empty list")
    for item in ingredients:
        if not isinstance(item, str) or not item.strip():
            raise InvalidIngredientsError("every ingredient must be a non-empty string")
    return ingredients


def build_user_prompt(ingredients: List[str]) -> str:
    return USER_PROMPT_TEMPLATE.format(ingredients=", ".join(ingredients))


async def generate_recipe(ingredients: Any, provider: BaseRecipeProvider) -> str:
    """
    Generate a recipe from an ingredient list.

    Args:
        ingredients: Ingredient list (validated here)
        provider: Text-generation provider

    Returns:
        Recipe text (markdown), never empty

    Raises:
        InvalidIngredientsError: If the ingredient list is invalid
        GenerationFailedError: If the provider fails or returns no text
    """
    ingredients = validate_ingredients(ingredients)
    user_prompt = build_user_prompt(ingredients)

    try:
        recipe = await provider.generate(SYSTEM_PROMPT, user_prompt, TEMPERATURE)
    except Exception as e:
        logger.exception("Recipe generation failed (provider=%s)", getattr(provider, "name", "unknown"))
        raise GenerationFailedError("Failed to generate recipe") from e

    if not isinstance(recipe, str) or not recipe.strip():
        logger.error("Provider %s returned an empty recipe", getattr(provider, "name", "unknown"))
        raise GenerationFailedError("Failed to generate recipe")

    return recipe
