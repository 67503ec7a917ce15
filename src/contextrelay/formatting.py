"""Render Slack history as a markdown context document."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timezone

from .models import SlackMessage

__all__ = [
    "render_context_document",
    "format_timestamp",
    "isoformat_now",
    "oldest_first",
]


def isoformat_now() -> str:
    """Current UTC time as ISO-8601 with millisecond precision and a ``Z`` suffix."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def format_timestamp(ts: str | None) -> str:
    """Turn a Slack ``ts`` (epoch seconds) into local ``YYYY-MM-DD HH:MM:SS``."""
    try:
        moment = datetime.fromtimestamp(float(ts))
    except (TypeError, ValueError, OverflowError, OSError):
        return "Unknown time"
    return moment.strftime("%Y-%m-%d %H:%M:%S")


def _sort_key(message: SlackMessage) -> float:
    try:
        return float(message.ts)
    except (TypeError, ValueError):
        return float("inf")


def oldest_first(messages: Iterable[SlackMessage]) -> list[SlackMessage]:
    """Reverse Slack's newest-first page and order it by ``ts``.

    Messages without a usable ``ts`` go last. The sort is stable, so equal
    timestamps keep their reversed page order.
    """
    return sorted(reversed(list(messages)), key=_sort_key)


def render_context_document(
    messages: Iterable[SlackMessage], generated_at: str | None = None
) -> str:
    """Render ``messages`` in the order given.

    Callers pass messages oldest first, see :func:`oldest_first`.
    """
    messages = list(messages)
    blocks = [
        f"### {msg.author} - {format_timestamp(msg.ts)}\n\n{msg.text or ''}\n\n---"
        for msg in messages
    ]
    header = (
        "# Slack Context from Channel\n"
        f"Generated: {generated_at or isoformat_now()}\n"
        f"Total messages: {len(messages)}\n"
        "\n"
        "---\n"
        "\n"
    )
    return header + "\n\n".join(blocks) + "\n"
