"""Structured errors raised by the relay and serialised at the HTTP boundary."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

__all__ = [
    "RelayError",
    "RelayException",
    "ValidationError",
    "ConfigError",
    "UpstreamError",
]


@dataclass
class RelayError:
    """Structured error information returned to the calling agent."""

    message: str
    status_code: int
    error_type: str = "internal_error"
    extra: dict[str, Any] = field(default_factory=dict)

    def to_response(self) -> dict[str, Any]:
        """Return the JSON body sent back to the caller."""
        return {"error": self.message, **self.extra}


class RelayException(Exception):
    """Exception that carries structured error information."""

    status_code = 500
    error_type = "internal_error"

    def __init__(self, message: str, status_code: int | None = None, **extra: Any):
        self.error = RelayError(
            message=message,
            status_code=status_code or self.status_code,
            error_type=self.error_type,
            extra=extra,
        )
        super().__init__(message)


class ValidationError(RelayException):
    """A required request field is missing or malformed."""

    status_code = 400
    error_type = "validation_error"


class ConfigError(RelayException):
    """A credential or repository coordinate is not configured."""

    status_code = 500
    error_type = "configuration_error"


class UpstreamError(RelayException):
    """Slack or GitHub reported a failure, or the transport failed."""

    status_code = 500
    error_type = "upstream_error"
