"""
OpenAI chat-completions provider.

Environment Variables:
- OPENAI_API_KEY: Required, API credential
- OPENAI_MODEL: Optional, defaults to "gpt-4o-mini"
"""

import logging
from typing import Optional

from openai import AsyncOpenAI

from api.config import DEFAULT_MODEL
from chef.providers.base import BaseRecipeProvider

logger = logging.getLogger(__name__)


class OpenAIRecipeProvider(BaseRecipeProvider):
    """
    Provider backed by the OpenAI chat completions API.

    The AsyncOpenAI client is created on first use, so a missing API key only
    fails the request that needs it (as a generation failure) instead of
    failing at startup.
    """

    name = "openai"

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = DEFAULT_MODEL,
        client: Optional[AsyncOpenAI] = None,
    ):
        self._api_key = api_key
        self._client = client
        self.model = model

    @property
    def client(self) -> AsyncOpenAI:
        if self._client is None:
            # Raises openai.OpenAIError when no API key is configured.
            self._client = AsyncOpenAI(api_key=self._api_key)
        return self._client

    async def generate(self, system_prompt: str, user_prompt: str, temperature: float) -> str:
        completion = await self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            temperature=temperature,
        )
        content = completion.choices[0].message.content
        logger.debug("OpenAI completion received (model=%s, chars=%d)", self.model, len(content or ""))
        return content or ""
