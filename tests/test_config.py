"""Tests for configuration loading and validation."""

from __future__ import annotations

import os
from unittest.mock import patch

import pytest

from contextrelay.config import Settings, load_env_file
from contextrelay.errors import ConfigError


class TestSettings:
    """Test cases for Settings configuration."""

    def test_default_values(self):
        """Test that default values are set correctly."""
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings()
            assert settings.log_level == "INFO"
            assert settings.api_key is None
            assert settings.slack_bot_token is None
            assert settings.slack_api_url == "https://slack.com/api"
            assert settings.github_token is None
            assert settings.github_api_url == "https://api.github.com"
            assert settings.github_lenient_lookup is False
            assert settings.http_timeout is None
            assert settings.cors_origins == ["*"]
            assert settings.host == "0.0.0.0"
            assert settings.port == 3000

    def test_environment_variable_loading(self):
        """Test that environment variables are loaded correctly."""
        with patch.dict(
            os.environ,
            {
                "LOG_LEVEL": "debug",
                "MCP_API_KEY": "secret",
                "SLACK_BOT_TOKEN": "xoxb-1",
                "SLACK_API_URL": "https://slack.example/api/",
                "GITHUB_TOKEN": "ghp_1",
                "GITHUB_OWNER": "octo",
                "GITHUB_REPO": "notes",
                "GITHUB_LENIENT_LOOKUP": "true",
                "HTTP_TIMEOUT": "12.5",
                "CORS_ORIGINS": "https://a.example, https://b.example",
                "PORT": "8080",
            },
            clear=True,
        ):
            settings = Settings()
            assert settings.log_level == "DEBUG"
            assert settings.api_key == "secret"
            assert settings.slack_bot_token == "xoxb-1"
            assert settings.slack_api_url == "https://slack.example/api"
            assert settings.github_configured is True
            assert settings.github_lenient_lookup is True
            assert settings.http_timeout == 12.5
            assert settings.cors_origins == ["https://a.example", "https://b.example"]
            assert settings.port == 8080

    def test_explicit_values_win_over_environment(self):
        with patch.dict(os.environ, {"GITHUB_OWNER": "env-owner"}, clear=True):
            settings = Settings(github_owner="injected", github_repo="repo")
            assert settings.github_owner == "injected"
            assert settings.github_repo == "repo"

    def test_validate_slack_config_missing_token(self):
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings()
        with pytest.raises(ConfigError, match="SLACK_BOT_TOKEN not configured"):
            settings.validate_slack_config()

    @pytest.mark.parametrize("missing", ["github_token", "github_owner", "github_repo"])
    def test_validate_github_config_requires_all_coordinates(self, missing):
        values = {"github_token": "t", "github_owner": "o", "github_repo": "r"}
        values[missing] = ""
        settings = Settings(**values)
        with pytest.raises(ConfigError, match="GitHub credentials not configured") as exc_info:
            settings.validate_github_config()
        assert exc_info.value.error.status_code == 500

    def test_validate_github_config_success(self):
        Settings(github_token="t", github_owner="o", github_repo="r").validate_github_config()


def test_load_env_file_does_not_override_existing(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("# comment\nGITHUB_OWNER=from-file\nGITHUB_REPO = repo\nbogus line\n")
    with patch.dict(os.environ, {"GITHUB_OWNER": "from-env"}, clear=True):
        load_env_file(env_file)
        assert os.environ["GITHUB_OWNER"] == "from-env"
        assert os.environ["GITHUB_REPO"] == "repo"
        assert "bogus line" not in os.environ


def test_load_env_file_ignores_missing_file(tmp_path):
    load_env_file(tmp_path / "absent.env")
