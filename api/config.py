"""
Configuration management for Kitz Chef.

This module centralizes environment variable loading from the .env file at the
project root. It should be imported early in both the backend (api/main.py) and
the frontend (streamlit_app/app.py) so .env is loaded before anything reads the
environment.

In deployed environments .env usually does not exist; load_dotenv() then
no-ops and platform environment variables are used instead.

Environment Variables:
- PORT: Optional, backend listening port (default: 3001)
- FRONTEND_ORIGINS: Optional, comma-separated CORS allowlist (default: http://localhost:8501)
- APP_ENV / NODE_ENV: Optional, "production" disables verbose request logging
- OPENAI_API_KEY: Required for recipe generation
- OPENAI_MODEL: Optional, defaults to "gpt-4o-mini"
- BACKEND_URL: Optional, backend URL used by the frontend (default: http://localhost:3001)
- RECIPE_HISTORY_DIR: Optional, directory of per-browser history files (default: .kitz_chef/profiles)
"""

import os
import re
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).resolve().parent.parent

DEFAULT_MODEL = "gpt-4o-mini"

PROFILE_ID_PATTERN = re.compile(r"[0-9a-f]{32}")


def load_env_file() -> None:
    """
    Load environment variables from .env at the project root.

    Safe to call multiple times. Existing environment variables take precedence
    (override=False).
    """
    load_dotenv(PROJECT_ROOT / ".env", override=False)


load_env_file()


class ServerConfig:
    """Configuration for the FastAPI backend."""

    @staticmethod
    def get_port() -> int:
        """
        Get the listening port.

        Returns:
            Port number (default: 3001). Invalid values fall back to the default.
        """
        try:
            return int(os.getenv("PORT", "3001"))
        except ValueError:
            return 3001

    @staticmethod
    def get_frontend_origins() -> List[str]:
        """
        Get the CORS allowlist.

        Returns:
            List of allowed origins, parsed from the comma-separated FRONTEND_ORIGINS
        """
        raw = os.getenv("FRONTEND_ORIGINS", "http://localhost:8501")
        return [origin.strip().rstrip("/") for origin in raw.split(",") if origin.strip()]

    @staticmethod
    def is_production() -> bool:
        env = os.getenv("APP_ENV") or os.getenv("NODE_ENV") or "development"
        return env.strip().lower() == "production"

    @staticmethod
    def get_mode() -> str:
        return "production" if ServerConfig.is_production() else "development"


class OpenAIConfig:
    """Configuration for the OpenAI provider."""

    @staticmethod
    def get_api_key() -> Optional[str]:
        """
        Get the OpenAI API key.

        Returns:
            API key string or None if not set

        Note:
            This does not raise an error - the provider dependency handles a missing key.
        """
        return os.getenv("OPENAI_API_KEY")

    @staticmethod
    def get_model() -> str:
        return os.getenv("OPENAI_MODEL", DEFAULT_MODEL)


class FrontendConfig:
    """Configuration for the Streamlit frontend."""

    @staticmethod
    def get_backend_url() -> str:
        """
        Get the backend API base URL.

        Returns:
            Backend URL with trailing slash removed (default: http://localhost:3001)
        """
        return os.getenv("BACKEND_URL", "http://localhost:3001").rstrip("/")

    @staticmethod
    def get_history_dir() -> Path:
        """
        Get the directory holding one history file per browser profile.

        Relative paths are resolved against the project root.
        """
        path = Path(os.getenv("RECIPE_HISTORY_DIR", ".kitz_chef/profiles"))
        return path if path.is_absolute() else PROJECT_ROOT / path

    @staticmethod
    def get_history_file(profile_id: str) -> Path:
        """
        Get the history file of one browser profile.

        Args:
            profile_id: Hex profile id (see streamlit_app/utils/history_state.py)

        Raises:
            ValueError: If profile_id is not a plain hex string
        """
        if not PROFILE_ID_PATTERN.fullmatch(profile_id or ""):
            raise ValueError(f"Invalid profile id: {profile_id!r}")
        return FrontendConfig.get_history_dir() / f"{profile_id}.json"


def validate_required_config() -> None:
    """
    Validate that all required environment variables are set.

    Raises:
        RuntimeError: If any required configuration is missing
    """
    missing = []
    if not OpenAIConfig.get_api_key():
        missing.append("OPENAI_API_KEY (required for recipe generation)")

    if missing:
        raise RuntimeError(
            "Missing required environment variables:\n"
            + "\n".join(f"  - {var}" for var in missing)
            + "\n\nPlease create a .env file at the project root with these variables."
        )
