"""
Tests for the OpenAI provider, using a mocked AsyncOpenAI client.
"""

import asyncio
from types import SimpleNamespace
from unittest.mock import AsyncMock, Mock

import openai
import pytest

from chef.providers.openai_provider import DEFAULT_MODEL, OpenAIRecipeProvider


def completion(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


@pytest.fixture
def mock_client():
    client = Mock()
    client.chat.completions.create = AsyncMock(return_value=completion("# Soup\n\nSimmer."))
    return client


class TestOpenAIRecipeProvider:
    def test_generate_sends_prompts_and_temperature(self, mock_client):
        provider = OpenAIRecipeProvider(client=mock_client, model="gpt-test")

        result = asyncio.run(provider.generate("system", "user", 0.7))

        assert result == "# Soup\n\nSimmer."
        mock_client.chat.completions.create.assert_awaited_once_with(
            model="gpt-test",
            messages=[
                {"role": "system", "content": "system"},
                {"role": "user", "content": "user"},
            ],
            temperature=0.7,
        )

    def test_none_content_becomes_empty_string(self, mock_client):
        mock_client.chat.completions.create.return_value = completion(None)
        provider = OpenAIRecipeProvider(client=mock_client)
        assert asyncio.run(provider.generate("s", "u", 0.7)) == ""

    def test_api_errors_propagate(self, mock_client):
        mock_client.chat.completions.create.side_effect = RuntimeError("rate limited")
        provider = OpenAIRecipeProvider(client=mock_client)
        with pytest.raises(RuntimeError):
            asyncio.run(provider.generate("s", "u", 0.7))

    def test_default_model(self):
        assert OpenAIRecipeProvider(api_key="sk-test").model == DEFAULT_MODEL

    def test_client_created_lazily(self, monkeypatch):
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        provider = OpenAIRecipeProvider(api_key=None)
        with pytest.raises(openai.OpenAIError):
            provider.client
