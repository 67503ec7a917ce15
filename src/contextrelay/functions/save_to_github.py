"""Create or update a file in the configured GitHub repository."""

from ..errors import ValidationError
from ..models import SaveToGithubRequest
from .base import BaseFunction, Services


class SaveToGithub(BaseFunction):
    """Save content to a GitHub repository."""

    name = "save_to_github"
    description = "Save content to a GitHub repository"
    request_model = SaveToGithubRequest

    async def run(self, request: SaveToGithubRequest, services: Services) -> dict:
        if not request.path or not request.content:
            raise ValidationError("path and content parameters are required")

        result = await services.github.write_file(
            request.path,
            request.content,
            request.message,
            branch=request.branch or "main",
        )
        return result.model_dump()
