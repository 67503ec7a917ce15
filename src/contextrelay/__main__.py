"""Command line interface to run the relay server."""

import logging

import uvicorn

from .api import app
from .config import settings

logger = logging.getLogger(__name__)


def main() -> None:
    """Run the Uvicorn server hosting the API."""
    if not settings.api_key:
        logger.warning("MCP_API_KEY is not set; every request except /health will be rejected")
    if not settings.slack_configured:
        logger.warning("SLACK_BOT_TOKEN is not set; Slack functions will fail")
    if not settings.github_configured:
        logger.warning("GitHub credentials are not set; GitHub functions will fail")

    logger.info("Relay server starting on port %s", settings.port)
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
