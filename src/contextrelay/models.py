"""Data models for the relay's function payloads."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class SlackMessage(BaseModel):
    """A single entry of a Slack channel's history.

    Only the fields used for rendering are declared; everything else Slack
    returns is kept so ``get_slack_messages`` can hand it back untouched.
    """

    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    ts: str | None = None
    user: str | None = None
    username: str | None = None
    text: str | None = ""

    @property
    def author(self) -> str:
        return self.user or self.username or "Unknown"


class MessagePage(BaseModel):
    """One page of channel history, newest first as Slack returns it."""

    messages: list[SlackMessage] = Field(default_factory=list)
    has_more: bool = False

    @property
    def count(self) -> int:
        return len(self.messages)


class WriteResult(BaseModel):
    """Outcome of a create-or-update call against the GitHub contents API."""

    success: bool = True
    commit_sha: str | None = None
    file_url: str | None = None


class GetSlackMessagesRequest(BaseModel):
    """Payload for ``get_slack_messages``."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    channel: str = Field(default="", description="Channel ID or name")
    limit: int = Field(
        default=100, gt=0, description="Number of messages to retrieve (default: 100)"
    )
    older_than: str | None = Field(
        default=None,
        description="Optional: timestamp to get messages older than this",
    )


class SaveToGithubRequest(BaseModel):
    """Payload for ``save_to_github``."""

    path: str = Field(default="", description="File path in repository")
    content: str = Field(default="", description="File content")
    message: str | None = Field(default=None, description="Commit message")
    branch: str = Field(default="main", description="Branch name (default: main)")


class SlackToGithubContextRequest(BaseModel):
    """Payload for ``slack_to_github_context``."""

    slack_channel: str = Field(default="", description="Slack channel ID or name")
    github_path: str = Field(
        default="", description="Path to save in GitHub repository"
    )
    message_limit: int = Field(
        default=100, gt=0, description="Number of messages to retrieve (default: 100)"
    )
    commit_message: str | None = Field(
        default=None, description="GitHub commit message"
    )


class ContextResult(BaseModel):
    """Outcome of the composite Slack-to-GitHub workflow."""

    success: bool = True
    messages_saved: int
    github_url: str | None = None
    commit_sha: str | None = None


class FunctionSpec(BaseModel):
    """Catalog entry describing one callable function."""

    name: str
    description: str
    parameters: dict[str, Any]
