"""Client for Slack's ``conversations.history`` Web API method."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from .config import Settings
from .errors import UpstreamError
from .models import MessagePage, SlackMessage

logger = logging.getLogger(__name__)

__all__ = ["SlackClient"]


class SlackClient:
    """Fetch a single page of channel history with a bot token.

    ``transport`` is handed to :class:`httpx.AsyncClient`, which lets tests
    swap the network for an :class:`httpx.MockTransport`.
    """

    def __init__(
        self,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._settings = settings
        self._transport = transport

    @property
    def is_configured(self) -> bool:
        return self._settings.slack_configured

    def validate_config(self) -> None:
        self._settings.validate_slack_config()

    def _client_kwargs(self) -> dict[str, Any]:
        kwargs: dict[str, Any] = {"transport": self._transport}
        if self._settings.http_timeout is not None:
            kwargs["timeout"] = self._settings.http_timeout
        return kwargs

    async def fetch_messages(
        self, channel: str, limit: int = 100, older_than: str | None = None
    ) -> MessagePage:
        """Return one page of ``channel`` history, newest message first.

        Raises:
            ConfigError: If no bot token is configured.
            UpstreamError: If Slack answers ``ok: false`` or cannot be reached.
        """
        self.validate_config()

        params = {"channel": channel, "limit": str(limit)}
        if older_than:
            params["oldest"] = older_than
        headers = {
            "Authorization": f"Bearer {self._settings.slack_bot_token}",
            "Content-Type": "application/json",
        }
        url = f"{self._settings.slack_api_url}/conversations.history"

        logger.debug("Fetching up to %s messages from Slack channel %s", limit, channel)
        try:
            async with httpx.AsyncClient(**self._client_kwargs()) as client:
                response = await client.get(url, params=params, headers=headers)
        except httpx.HTTPError as exc:
            logger.error("Slack request failed: %s", exc)
            raise UpstreamError(f"Slack request failed: {exc}") from exc

        try:
            data = response.json()
        except ValueError as exc:
            status = response.status_code if response.is_error else 502
            logger.error("Slack returned a non-JSON body (HTTP %s)", response.status_code)
            raise UpstreamError("Invalid response from Slack API", status) from exc

        if not isinstance(data, dict) or not data.get("ok"):
            error = (isinstance(data, dict) and data.get("error")) or "Slack API error"
            logger.warning("Slack reported an error for channel %s: %s", channel, error)
            raise UpstreamError(error, 400)

        page = MessagePage(
            messages=[SlackMessage.model_validate(m) for m in data.get("messages") or []],
            has_more=bool(data.get("has_more")),
        )
        logger.info("Fetched %d messages from Slack channel %s", page.count, channel)
        return page
