"""
Tests for the frontend's backend client.

The client must never raise: every failure turns into placeholder text that the
history store refuses to save.
"""

from unittest.mock import Mock, patch

import pytest
import requests

from chef.history import EMPTY_RESULT_PLACEHOLDER, FAILURE_PLACEHOLDER, is_placeholder
from streamlit_app.utils.api_client import generate_recipe


def make_response(status_code=200, payload=None, json_error=None):
    response = Mock()
    response.status_code = status_code
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.exceptions.HTTPError(response=response)
    else:
        response.raise_for_status.return_value = None
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = payload
    return response


@pytest.fixture
def backend(monkeypatch):
    monkeypatch.setenv("BACKEND_URL", "http://backend.test")


class TestGenerateRecipe:
    def test_posts_ingredients_and_returns_recipe(self, backend):
        with patch("streamlit_app.utils.api_client.requests.post") as mock_post:
            mock_post.return_value = make_response(payload={"recipe": "# Salad"})
            result = generate_recipe(["lettuce", "tomato"])

        assert result == "# Salad"
        args, kwargs = mock_post.call_args
        assert args[0] == "http://backend.test/api/recipe"
        assert kwargs["json"] == {"ingredients": ["lettuce", "tomato"]}

    def test_missing_recipe_field(self, backend):
        with patch("streamlit_app.utils.api_client.requests.post") as mock_post:
            mock_post.return_value = make_response(payload={})
            assert generate_recipe(["rice"]) == EMPTY_RESULT_PLACEHOLDER

    @pytest.mark.parametrize(
        "error",
        (
            requests.exceptions.Timeout("slow"),
            requests.exceptions.ConnectionError("refused"),
            requests.exceptions.RequestException("boom"),
        ),
    )
    def test_network_errors_become_placeholder(self, backend, error):
        with patch("streamlit_app.utils.api_client.requests.post", side_effect=error):
            assert generate_recipe(["rice"]) == FAILURE_PLACEHOLDER

    @pytest.mark.parametrize("status_code", (400, 500))
    def test_http_errors_become_placeholder(self, backend, status_code):
        with patch("streamlit_app.utils.api_client.requests.post") as mock_post:
            mock_post.return_value = make_response(
                status_code=status_code, payload={"error": "Failed to generate recipe"}
            )
            assert generate_recipe(["rice"]) == FAILURE_PLACEHOLDER

    def test_invalid_json_becomes_placeholder(self, backend):
        with patch("streamlit_app.utils.api_client.requests.post") as mock_post:
            mock_post.return_value = make_response(json_error=ValueError("not json"))
            assert generate_recipe(["rice"]) == FAILURE_PLACEHOLDER

    def test_placeholders_are_not_saveable(self):
        assert is_placeholder(FAILURE_PLACEHOLDER)
        assert is_placeholder(EMPTY_RESULT_PLACEHOLDER)
