"""FastAPI application exposing the relay's callable functions."""

from __future__ import annotations

import hmac
import json
import logging

import httpx
import pydantic
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Settings, settings
from .errors import RelayException, ValidationError
from .formatting import isoformat_now
from .functions import Services, all_functions, get_function
from .github_client import GitHubClient
from .slack_client import SlackClient

logger = logging.getLogger(__name__)
logger.setLevel(settings.log_level)

__all__ = ["app", "create_app"]

UNAUTHENTICATED_PATHS = frozenset({"/health"})


def _is_authorized(request: Request, config: Settings) -> bool:
    supplied = request.headers.get("x-api-key")
    if not config.api_key or supplied is None:
        return False
    return hmac.compare_digest(supplied.encode(), config.api_key.encode())


def _validation_message(exc: pydantic.ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"])
        parts.append(f"{location}: {error['msg']}" if location else error["msg"])
    return "; ".join(parts)


async def _read_payload(request: Request) -> dict:
    body = await request.body()
    if not body.strip():
        return {}
    try:
        payload = json.loads(body)
    except ValueError as exc:
        raise ValidationError("Request body must be valid JSON") from exc
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")
    return payload


def create_app(
    config: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Build the application around ``config``.

    ``transport`` is passed to the Slack and GitHub clients so tests can
    replace outbound HTTP with an :class:`httpx.MockTransport`.
    """
    config = config or settings
    services = Services(
        slack=SlackClient(config, transport=transport),
        github=GitHubClient(config, transport=transport),
    )

    app = FastAPI(title="contextrelay")
    app.state.settings = config
    app.state.services = services

    @app.middleware("http")
    async def require_api_key(request: Request, call_next):
        """Reject every request except the health probe without a valid key."""
        if request.url.path not in UNAUTHENTICATED_PATHS and not _is_authorized(
            request, config
        ):
            logger.warning("Unauthorized %s %s", request.method, request.url.path)
            return JSONResponse(status_code=401, content={"error": "Unauthorized"})
        return await call_next(request)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log basic information about incoming requests and outgoing responses."""
        logger.info("Request %s %s", request.method, request.url.path)
        response = await call_next(request)
        logger.info("Response %s %s", response.status_code, request.url.path)
        return response

    # Added last so it wraps the auth check and answers preflight requests.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        """Return routing errors such as 404 and 405 in the ``{"error"}`` shape."""
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Liveness probe; the only unauthenticated endpoint."""
        return {"status": "healthy", "timestamp": isoformat_now()}

    @app.get("/functions")
    async def list_functions() -> dict:
        """Describe the available functions for discovery by an agent."""
        return {"functions": [f.spec().model_dump() for f in all_functions()]}

    @app.post("/functions/{name}", response_model=None)
    async def call_function(name: str, request: Request):
        """Validate the payload and dispatch it to the named function.

        Every failure is returned as ``{"error": ...}`` with a status code
        chosen by the raised :class:`RelayException`.
        """
        function = get_function(name)
        if function is None:
            return JSONResponse(
                status_code=404, content={"error": f"Unknown function: {name}"}
            )

        try:
            payload = await _read_payload(request)
            try:
                parsed = function.parse(payload)
            except pydantic.ValidationError as exc:
                raise ValidationError(_validation_message(exc)) from exc
            return await function.run(parsed, services)

        except RelayException as e:
            logger.error(
                "%s in %s: %s", e.error.error_type, name, e.error.message
            )
            return JSONResponse(
                status_code=e.error.status_code, content=e.error.to_response()
            )

        except Exception:
            logger.exception("Unexpected error in %s", name)
            return JSONResponse(
                status_code=500, content={"error": "Internal server error"}
            )

    return app


app = create_app()
