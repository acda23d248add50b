"""
Base provider abstract class for text-generation backends.

A provider turns a system prompt and a user prompt into generated text. It
knows nothing about ingredients, HTTP or error reporting; chef.recipes builds
the prompts and normalises failures.
"""

from abc import ABC, abstractmethod


class BaseRecipeProvider(ABC):
    """
    Abstract base class for text-generation providers.

    Attributes:
        name: Short identifier used in logs (e.g. "openai")
    """
    name: str

    @abstractmethod
    async def generate(self, system_prompt: str, user_prompt: str, temperature: float) -> str:
        """
        Generate a single completion.

        Args:
            system_prompt: Instruction describing the assistant's role
            user_prompt: The user's request
            temperature: Sampling temperature

        Returns:
            Generated text. May raise any exception on failure; callers are
            expected to wrap it.
        """
        pass
