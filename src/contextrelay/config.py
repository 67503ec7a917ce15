"""Application configuration loaded from environment variables or a .env file."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from .errors import ConfigError

__all__ = ["Settings", "settings"]


def load_env_file(path: Path) -> None:
    """Load key-value pairs from ``path`` into ``os.environ`` if present."""
    if not path.exists():
        return
    for line in path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        os.environ.setdefault(key.strip(), value.strip())


# Load environment variables from a .env file in the project root.
load_env_file(Path(__file__).resolve().parents[2] / ".env")


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class Settings:
    """Application settings.

    Any field left as ``None`` is filled from the environment when the
    instance is created, so tests can pass explicit coordinates and still
    fall back to the process environment for everything else.
    """

    log_level: str | None = None

    # Shared secret expected in the ``x-api-key`` header.
    api_key: str | None = None

    slack_bot_token: str | None = None
    slack_api_url: str | None = None

    github_token: str | None = None
    github_owner: str | None = None
    github_repo: str | None = None
    github_api_url: str | None = None
    github_lenient_lookup: bool | None = None

    http_timeout: float | None = None
    cors_origins: list[str] = field(default_factory=list)
    host: str | None = None
    port: int | None = None

    def __post_init__(self):
        """Load values from environment variables after initialization."""
        if self.log_level is None:
            self.log_level = os.getenv("LOG_LEVEL", "INFO").upper()
        if self.api_key is None:
            self.api_key = os.getenv("MCP_API_KEY") or None
        if self.slack_bot_token is None:
            self.slack_bot_token = os.getenv("SLACK_BOT_TOKEN") or None
        if self.slack_api_url is None:
            self.slack_api_url = os.getenv("SLACK_API_URL", "https://slack.com/api")
        if self.github_token is None:
            self.github_token = os.getenv("GITHUB_TOKEN") or None
        if self.github_owner is None:
            self.github_owner = os.getenv("GITHUB_OWNER") or None
        if self.github_repo is None:
            self.github_repo = os.getenv("GITHUB_REPO") or None
        if self.github_api_url is None:
            self.github_api_url = os.getenv("GITHUB_API_URL", "https://api.github.com")
        if self.github_lenient_lookup is None:
            self.github_lenient_lookup = _env_flag("GITHUB_LENIENT_LOOKUP")
        if self.http_timeout is None and os.getenv("HTTP_TIMEOUT"):
            self.http_timeout = float(os.environ["HTTP_TIMEOUT"])
        if not self.cors_origins:
            self.cors_origins = [
                origin.strip()
                for origin in os.getenv("CORS_ORIGINS", "*").split(",")
                if origin.strip()
            ]
        if self.host is None:
            self.host = os.getenv("HOST", "0.0.0.0")
        if self.port is None:
            self.port = int(os.getenv("PORT", "3000"))

        self.slack_api_url = self.slack_api_url.rstrip("/")
        self.github_api_url = self.github_api_url.rstrip("/")

    @property
    def slack_configured(self) -> bool:
        return bool(self.slack_bot_token)

    @property
    def github_configured(self) -> bool:
        return bool(self.github_token and self.github_owner and self.github_repo)

    def validate_slack_config(self) -> None:
        """Raise :class:`ConfigError` if the Slack bot token is missing."""
        if not self.slack_configured:
            raise ConfigError("SLACK_BOT_TOKEN not configured")

    def validate_github_config(self) -> None:
        """Raise :class:`ConfigError` unless token, owner and repo are all set."""
        if not self.github_configured:
            raise ConfigError("GitHub credentials not configured")


settings = Settings()

# Configure root logging according to the resolved settings.
logging.basicConfig(level=settings.log_level)
