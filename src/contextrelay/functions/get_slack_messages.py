"""Return one page of a Slack channel's history."""

from ..errors import ValidationError
from ..models import GetSlackMessagesRequest
from .base import BaseFunction, Services


class GetSlackMessages(BaseFunction):
    """Get messages from a Slack channel."""

    name = "get_slack_messages"
    description = "Get messages from a Slack channel"
    request_model = GetSlackMessagesRequest

    async def run(self, request: GetSlackMessagesRequest, services: Services) -> dict:
        if not request.channel:
            raise ValidationError("channel parameter is required")

        page = await services.slack.fetch_messages(
            request.channel, request.limit, request.older_than
        )
        return {
            "success": True,
            "messages": [m.model_dump(exclude_unset=True) for m in page.messages],
            "count": page.count,
            "has_more": page.has_more,
        }
