"""
Text-generation providers.

All providers implement BaseRecipeProvider so the API can swap or mock the
language-model backend without touching request handling.
"""

from chef.providers.base import BaseRecipeProvider
from chef.providers.openai_provider import OpenAIRecipeProvider

__all__ = ["BaseRecipeProvider", "OpenAIRecipeProvider"]
