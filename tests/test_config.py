"""
Tests for environment-driven configuration.
"""

import subprocess
import sys
from pathlib import Path

import pytest

from api.config import (
    DEFAULT_MODEL,
    PROJECT_ROOT,
    FrontendConfig,
    OpenAIConfig,
    ServerConfig,
    validate_required_config,
)


class TestServerConfig:
    def test_defaults(self, monkeypatch):
        for name in ("PORT", "FRONTEND_ORIGINS", "APP_ENV", "NODE_ENV"):
            monkeypatch.delenv(name, raising=False)
        assert ServerConfig.get_port() == 3001
        assert ServerConfig.get_frontend_origins() == ["http://localhost:8501"]
        assert ServerConfig.is_production() is False
        assert ServerConfig.get_mode() == "development"

    def test_invalid_port_falls_back(self, monkeypatch):
        monkeypatch.setenv("PORT", "not-a-port")
        assert ServerConfig.get_port() == 3001

    def test_origins_are_split_and_trimmed(self, monkeypatch):
        monkeypatch.setenv("FRONTEND_ORIGINS", " https://a.example.com/ , ,https://b.example.com")
        assert ServerConfig.get_frontend_origins() == ["https://a.example.com", "https://b.example.com"]

    @pytest.mark.parametrize("var", ("APP_ENV", "NODE_ENV"))
    def test_production_flag(self, monkeypatch, var):
        monkeypatch.delenv("APP_ENV", raising=False)
        monkeypatch.delenv("NODE_ENV", raising=False)
        monkeypatch.setenv(var, "Production")
        assert ServerConfig.is_production() is True
        assert ServerConfig.get_mode() == "production"


class TestOpenAIConfig:
    def test_model_default(self, monkeypatch):
        monkeypatch.delenv("OPENAI_MODEL", raising=False)
        assert OpenAIConfig.get_model() == DEFAULT_MODEL

    def test_missing_key_fails_validation(self, monkeypatch):
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        with pytest.raises(RuntimeError, match="OPENAI_API_KEY"):
            validate_required_config()

    def test_key_present_passes_validation(self, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
        validate_required_config()


class TestFrontendConfig:
    def test_backend_url_strips_trailing_slash(self, monkeypatch):
        monkeypatch.setenv("BACKEND_URL", "http://api.example.com/")
        assert FrontendConfig.get_backend_url() == "http://api.example.com"

    def test_relative_history_dir_resolves_to_project_root(self, monkeypatch):
        monkeypatch.delenv("RECIPE_HISTORY_DIR", raising=False)
        assert FrontendConfig.get_history_dir() == PROJECT_ROOT / ".kitz_chef" / "profiles"

    def test_history_file_per_profile(self, monkeypatch, tmp_path):
        monkeypatch.setenv("RECIPE_HISTORY_DIR", str(tmp_path))
        profile_id = "0123456789abcdef0123456789abcdef"
        assert FrontendConfig.get_history_file(profile_id) == Path(tmp_path) / f"{profile_id}.json"

    @pytest.mark.parametrize("profile_id", ("", "../../etc/passwd", "ABCDEF0123456789ABCDEF0123456789", "abc"))
    def test_malformed_profile_id_rejected(self, profile_id):
        with pytest.raises(ValueError):
            FrontendConfig.get_history_file(profile_id)


class TestImportFootprint:
    def test_config_does_not_load_the_openai_sdk(self):
        """The frontend imports api.config; it must stay free of backend-only libraries."""
        code = "import sys, api.config; sys.exit(1 if 'openai' in sys.modules else 0)"
        result = subprocess.run([sys.executable, "-c", code], cwd=str(PROJECT_ROOT))
        assert result.returncode == 0
