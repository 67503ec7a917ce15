"""Client for the GitHub repository contents API."""

from __future__ import annotations

import base64
import logging
from typing import Any
from urllib.parse import quote

import httpx

from .config import Settings
from .errors import UpstreamError
from .models import WriteResult

logger = logging.getLogger(__name__)

__all__ = ["GitHubClient", "DEFAULT_COMMIT_MESSAGE"]

DEFAULT_COMMIT_MESSAGE = "Update from Slack context"


class GitHubClient:
    """Create or update single files in the configured repository.

    Writing is deliberately two calls: :meth:`lookup_sha` followed by
    :meth:`put_file`. The pair is not atomic; another writer may move the
    file in between, in which case GitHub rejects the stale sha with a 409
    and that response is surfaced as :class:`UpstreamError`.
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
        return self._settings.github_configured

    def validate_config(self) -> None:
        self._settings.validate_github_config()

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"token {self._settings.github_token}",
            "Accept": "application/vnd.github.v3+json",
        }

    def _contents_url(self, path: str) -> str:
        s = self._settings
        return (
            f"{s.github_api_url}/repos/{s.github_owner}/{s.github_repo}"
            f"/contents/{quote(path.lstrip('/'), safe='/')}"
        )

    def _client(self) -> httpx.AsyncClient:
        kwargs: dict[str, Any] = {"transport": self._transport}
        if self._settings.http_timeout is not None:
            kwargs["timeout"] = self._settings.http_timeout
        return httpx.AsyncClient(**kwargs)

    async def _get_contents(self, path: str, branch: str) -> httpx.Response:
        self.validate_config()
        async with self._client() as client:
            return await client.get(
                self._contents_url(path),
                params={"ref": branch},
                headers=self._headers(),
            )

    async def lookup_sha(self, path: str, branch: str = "main") -> str | None:
        """Return the sha of ``path`` on ``branch`` or ``None`` if it is absent.

        A 404 means the file does not exist yet. Any other failure raises
        :class:`UpstreamError`, unless ``github_lenient_lookup`` is enabled,
        in which case it is logged and treated as absent.
        """
        try:
            response = await self._get_contents(path, branch)
        except httpx.HTTPError as exc:
            return self._lookup_failed(path, f"GitHub request failed: {exc}", 500, exc)

        if response.status_code == 404:
            logger.debug("%s does not exist on %s", path, branch)
            return None
        if response.is_error:
            message = _error_message(response)
            return self._lookup_failed(path, message, response.status_code)

        try:
            data = response.json()
        except ValueError as exc:
            return self._lookup_failed(path, "Invalid response from GitHub API", 502, exc)
        sha = data.get("sha") if isinstance(data, dict) else None
        if sha is None:
            # Directories come back as a JSON list and carry no sha.
            return self._lookup_failed(path, f"{path} is not a file", 422)
        logger.debug("Found existing %s at sha %s", path, sha)
        return sha

    def _lookup_failed(
        self,
        path: str,
        message: str,
        status_code: int,
        cause: Exception | None = None,
    ) -> None:
        if self._settings.github_lenient_lookup:
            logger.warning("Lookup of %s failed, treating it as absent: %s", path, message)
            return None
        logger.error("Lookup of %s failed: %s", path, message)
        raise UpstreamError(message, status_code) from cause

    async def put_file(
        self,
        path: str,
        content: str,
        message: str,
        branch: str = "main",
        sha: str | None = None,
    ) -> WriteResult:
        """Create ``path`` or, when ``sha`` is given, overwrite it."""
        self.validate_config()
        body = {
            "message": message,
            "content": base64.b64encode(content.encode("utf-8")).decode("ascii"),
            "branch": branch,
        }
        if sha:
            body["sha"] = sha

        logger.debug("%s %s on %s", "Updating" if sha else "Creating", path, branch)
        try:
            async with self._client() as client:
                response = await client.put(
                    self._contents_url(path), json=body, headers=self._headers()
                )
        except httpx.HTTPError as exc:
            logger.error("GitHub request failed: %s", exc)
            raise UpstreamError(f"GitHub request failed: {exc}") from exc

        if response.is_error:
            message = _error_message(response)
            logger.error("GitHub rejected write to %s (%s): %s", path, response.status_code, message)
            raise UpstreamError(message, response.status_code)

        try:
            data = response.json()
        except ValueError as exc:
            raise UpstreamError("Invalid response from GitHub API", 502) from exc

        result = WriteResult(
            success=True,
            commit_sha=(data.get("commit") or {}).get("sha"),
            file_url=(data.get("content") or {}).get("html_url"),
        )
        logger.info("Committed %s to %s as %s", path, branch, result.commit_sha)
        return result

    async def write_file(
        self,
        path: str,
        content: str,
        commit_message: str | None = None,
        branch: str = "main",
    ) -> WriteResult:
        """Look up the current sha of ``path`` and then create or update it.

        Raises:
            ConfigError: If token, owner or repository name is missing.
            UpstreamError: If GitHub does not accept the write.
        """
        self.validate_config()
        sha = await self.lookup_sha(path, branch)
        return await self.put_file(
            path,
            content,
            commit_message or DEFAULT_COMMIT_MESSAGE,
            branch=branch,
            sha=sha,
        )

    async def read_file(self, path: str, branch: str = "main") -> str | None:
        """Return the decoded text of ``path`` on ``branch``, or ``None`` if absent."""
        try:
            response = await self._get_contents(path, branch)
        except httpx.HTTPError as exc:
            raise UpstreamError(f"GitHub request failed: {exc}") from exc
        if response.status_code == 404:
            return None
        if response.is_error:
            raise UpstreamError(_error_message(response), response.status_code)

        data = response.json()
        if not isinstance(data, dict) or "content" not in data:
            raise UpstreamError(f"{path} is not a file", 422)
        # GitHub wraps the base64 payload at 60 columns.
        return base64.b64decode("".join(data["content"].split())).decode("utf-8")


def _error_message(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        return "GitHub API error"
    if isinstance(data, dict) and data.get("message"):
        return data["message"]
    return "GitHub API error"
