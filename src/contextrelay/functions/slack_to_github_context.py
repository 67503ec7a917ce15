"""Pull Slack history and commit it to GitHub as a markdown context file."""

from ..context import slack_to_github_context
from ..errors import ValidationError
from ..models import SlackToGithubContextRequest
from .base import BaseFunction, Services


class SlackToGithubContext(BaseFunction):
    """Pull Slack messages and save as context file in GitHub."""

    name = "slack_to_github_context"
    description = "Pull Slack messages and save as context file in GitHub"
    request_model = SlackToGithubContextRequest

    async def run(
        self, request: SlackToGithubContextRequest, services: Services
    ) -> dict:
        if not request.slack_channel or not request.github_path:
            raise ValidationError(
                "slack_channel and github_path parameters are required"
            )

        result = await slack_to_github_context(
            services.slack,
            services.github,
            request.slack_channel,
            request.github_path,
            limit=request.message_limit,
            commit_message=request.commit_message,
        )
        return result.model_dump()
