"""Composite workflow: pull Slack history and commit it to GitHub as markdown."""

from __future__ import annotations

import logging

from .errors import UpstreamError
from .formatting import isoformat_now, oldest_first, render_context_document
from .github_client import GitHubClient
from .models import ContextResult
from .slack_client import SlackClient

logger = logging.getLogger(__name__)

__all__ = ["slack_to_github_context"]

# The composite path always commits to this branch.
CONTEXT_BRANCH = "main"


async def slack_to_github_context(
    slack: SlackClient,
    github: GitHubClient,
    channel: str,
    path: str,
    limit: int = 100,
    commit_message: str | None = None,
) -> ContextResult:
    """Fetch one page of ``channel`` and commit it to ``path`` as markdown.

    A failed write is not rolled back; the raised :class:`UpstreamError`
    carries ``slack_messages_retrieved`` so the caller knows the Slack half
    completed.
    """
    # Fail on missing configuration before any outbound call is made.
    slack.validate_config()
    github.validate_config()

    page = await slack.fetch_messages(channel, limit)
    messages = oldest_first(page.messages)

    document = render_context_document(messages)
    message = commit_message or f"Update Slack context - {isoformat_now()}"

    try:
        result = await github.write_file(path, document, message, branch=CONTEXT_BRANCH)
    except UpstreamError as exc:
        logger.error(
            "Fetched %d messages from %s but could not save %s: %s",
            len(messages),
            channel,
            path,
            exc.error.message,
        )
        exc.error.extra["slack_messages_retrieved"] = len(messages)
        raise

    return ContextResult(
        messages_saved=len(messages),
        github_url=result.file_url,
        commit_sha=result.commit_sha,
    )
