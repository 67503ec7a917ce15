"""Function registry and discovery utilities."""

from __future__ import annotations

from importlib import import_module
from pkgutil import iter_modules

from .base import BaseFunction, Services

__all__ = ["BaseFunction", "Services", "register", "get_function", "all_functions"]

_REGISTRY: dict[str, BaseFunction] = {}


def _discover_functions() -> None:
    """Import all modules in this package to populate the registry."""
    package = __name__
    for module_info in iter_modules(__path__):
        if module_info.name == "base":
            continue
        module = import_module(f"{package}.{module_info.name}")
        for obj in module.__dict__.values():
            if (
                isinstance(obj, type)
                and issubclass(obj, BaseFunction)
                and obj is not BaseFunction
            ):
                register(obj())


def register(function: BaseFunction) -> None:
    """Manually register a function instance, replacing one with the same name."""
    _REGISTRY[function.name] = function


def get_function(name: str) -> BaseFunction | None:
    """Return the function registered under ``name``."""
    return _REGISTRY.get(name)


def all_functions() -> list[BaseFunction]:
    """Return every registered function in registration order."""
    return list(_REGISTRY.values())


# Discover functions on import.
_discover_functions()
