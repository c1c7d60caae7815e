"""Name-keyed registry of fill decorators.

A decorator is any object with ``name``, ``description`` and an
``apply(grid, **params)`` method that writes only to blank cells.  New
fills register at runtime without touching the lookup code.
"""

from __future__ import annotations

import inspect
import logging
import re
from typing import TYPE_CHECKING, Any, Iterator, Protocol, runtime_checkable

from asciiforge.errors import ConfigurationError, UnknownDecoratorError

if TYPE_CHECKING:
    from asciiforge.grid import Grid

logger = logging.getLogger(__name__)


@runtime_checkable
class Decorator(Protocol):
    """Stateless fill strategy for the blank cells of a grid."""

    name: str
    description: str

    def apply(self, grid: Grid, **params: Any) -> None: ...


class DecoratorRegistry:
    """Registry of available fill decorators, looked up by name."""

    def __init__(self) -> None:
        self._decorators: dict[str, Decorator] = {}

    def register(self, decorator: Decorator, name: str | None = None) -> None:
        """Register *decorator* under *name* (defaults to ``decorator.name``).

        Re-registering a name replaces the previous entry.
        """
        key = name or decorator.name
        if not key:
            raise ValueError("Decorator must have a non-empty name")
        self._decorators[key] = decorator
        logger.debug("Registered decorator: %s", key)

    def get(self, name: str) -> Decorator:
        """Look up a decorator, listing every registered name on failure."""
        decorator = self._decorators.get(name)
        if decorator is None:
            raise UnknownDecoratorError(name, self.names())
        return decorator

    def names(self) -> list[str]:
        return list(self._decorators)

    def describe(self) -> list[dict[str, str]]:
        """Name/description pairs for display."""
        return [
            {"name": key, "description": decorator.description}
            for key, decorator in self._decorators.items()
        ]

    def __contains__(self, name: object) -> bool:
        return name in self._decorators

    def __iter__(self) -> Iterator[str]:
        return iter(self._decorators)

    def __len__(self) -> int:
        return len(self._decorators)


# Module-level registry singleton
_registry: DecoratorRegistry | None = None


def get_decorator_registry() -> DecoratorRegistry:
    """Return the global decorator registry, populated with the built-in fills."""
    global _registry  # noqa: PLW0603
    if _registry is None:
        from asciiforge.decorators.fills import BUILTIN_DECORATORS

        _registry = DecoratorRegistry()
        for decorator in BUILTIN_DECORATORS:
            _registry.register(decorator)
    return _registry


def get_decorator(name: str) -> Decorator:
    return get_decorator_registry().get(name)


def register_decorator(decorator: Decorator, name: str | None = None) -> None:
    get_decorator_registry().register(decorator, name)


def _snake_case(key: str) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", "_", key).lower()


def apply_decorator(name: str, grid: Grid, **params: Any) -> Grid:
    """Apply the named decorator to *grid* in place and return it.

    Parameter names may use the camelCase spelling of recipe documents
    (``densityString``) or the Python one (``density_string``).  Unknown
    parameter names raise :class:`ConfigurationError`.
    """
    decorator = get_decorator(name)
    kwargs = {_snake_case(key): value for key, value in params.items()}
    try:
        inspect.signature(decorator.apply).bind(grid, **kwargs)
    except TypeError as exc:
        raise ConfigurationError(f"Invalid parameters for {name} decorator: {exc}", kwargs) from exc
    decorator.apply(grid, **kwargs)
    logger.debug("Applied %s decorator to %dx%d grid", name, grid.width, grid.height)
    return grid
