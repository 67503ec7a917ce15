"""Base classes for callable function implementations."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel

from ..github_client import GitHubClient
from ..models import FunctionSpec
from ..slack_client import SlackClient


@dataclass
class Services:
    """Outbound clients shared by every function invocation."""

    slack: SlackClient
    github: GitHubClient


class BaseFunction(ABC):
    """Abstract base class for all functions exposed under ``/functions``.

    Subclasses declare a ``request_model`` whose field descriptions double
    as the parameter documentation served to the orchestrating agent.
    """

    name: str = "base"
    description: str = ""
    request_model: type[BaseModel]

    def spec(self) -> FunctionSpec:
        """Return the catalog entry for this function."""
        parameters = {
            field_name: field.description or ""
            for field_name, field in self.request_model.model_fields.items()
        }
        return FunctionSpec(
            name=self.name, description=self.description, parameters=parameters
        )

    def parse(self, payload: dict[str, Any]) -> BaseModel:
        """Validate a raw JSON body against ``request_model``."""
        return self.request_model.model_validate(payload)

    @abstractmethod
    async def run(self, request: Any, services: Services) -> dict[str, Any]:
        """Execute the function and return the JSON response body."""
