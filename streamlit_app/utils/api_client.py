"""
Backend API Client Module.

This module is the single place the frontend talks to the FastAPI backend.

Key principles:
- Centralized error handling for network issues
- Graceful degradation when the backend is unavailable
- Never let exceptions bubble up to crash the Streamlit app: a failed
  generation becomes the FAILURE_PLACEHOLDER text, which the history store
  refuses to save
"""

import logging
from typing import Any, Dict, List, Optional

import requests
import streamlit as st

from api.config import FrontendConfig
from chef.history import EMPTY_RESULT_PLACEHOLDER, FAILURE_PLACEHOLDER

logger = logging.getLogger(__name__)

GENERATE_TIMEOUT_SECONDS = 120


def get_backend_url() -> str:
    return FrontendConfig.get_backend_url()


@st.cache_data(ttl=60)  # Cache for 60 seconds to avoid hitting backend too frequently
def get_health_status() -> Optional[Dict[str, Any]]:
    """
    Check backend health status by calling the /health endpoint.

    Returns:
        The health payload ({"status": "ok", "mode": ..., "uptime_seconds": ...}),
        or None if the backend is unreachable or unhealthy.
    """
    try:
        response = requests.get(f"{get_backend_url()}/health", timeout=5)
        response.raise_for_status()
        data = response.json()
    except (requests.exceptions.RequestException, ValueError):
        return None
    return data if data.get("status") == "ok" else None


def generate_recipe(ingredients: List[str]) -> str:
    """
    Ask the backend for a recipe.

    Args:
        ingredients: Parsed ingredient list

    Returns:
        Recipe markdown; EMPTY_RESULT_PLACEHOLDER if the backend answered
        without a recipe; FAILURE_PLACEHOLDER on any network or HTTP error.
    """
    try:
        response = requests.post(
            f"{get_backend_url()}/api/recipe",
            json={"ingredients": ingredients},
            timeout=GENERATE_TIMEOUT_SECONDS,
        )
        response.raise_for_status()
        data = response.json()
    except requests.exceptions.Timeout:
        logger.error("Error generating recipe: request timed out")
        return FAILURE_PLACEHOLDER
    except requests.exceptions.ConnectionError as e:
        logger.error("Error generating recipe: could not connect to backend: %s", e)
        return FAILURE_PLACEHOLDER
    except requests.exceptions.HTTPError as e:
        logger.error("Error generating recipe: HTTP error! status: %s", e.response.status_code)
        return FAILURE_PLACEHOLDER
    except (requests.exceptions.RequestException, ValueError) as e:
        logger.error("Error generating recipe: %s", e)
        return FAILURE_PLACEHOLDER

    recipe = data.get("recipe") if isinstance(data, dict) else None
    return recipe or EMPTY_RESULT_PLACEHOLDER
