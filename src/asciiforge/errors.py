"""Exception taxonomy for asciiforge.

Library code raises these; only the CLI turns them into messages and
exit codes.
"""

from __future__ import annotations

from typing import Any


class AsciiForgeError(Exception):
    """Base class for every error raised by asciiforge."""


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


class ConfigurationError(AsciiForgeError, ValueError):
    """An argument is outside the accepted set (degrees, axis, factor, ...)."""

    def __init__(self, message: str, value: Any = None) -> None:
        super().__init__(message)
        self.value = value


class InvalidAnchorError(ConfigurationError):
    """Placement anchor is not one of the supported names."""


class UnknownShapeError(ConfigurationError):
    """Shape kind has no registered factory."""


# ---------------------------------------------------------------------------
# Recipe execution
# ---------------------------------------------------------------------------


class RecipeExecutionError(AsciiForgeError):
    """A recipe run was aborted.  No partial output is returned."""


class SymbolNotFoundError(RecipeExecutionError):
    """An operation referenced a name that was never stored."""

    def __init__(self, symbol: str, index: int, operation: str) -> None:
        super().__init__(
            f"Operation #{index} ({operation}) references unknown grid '{symbol}'"
        )
        self.symbol = symbol
        self.index = index
        self.operation = operation


class OutputNotProducedError(RecipeExecutionError):
    """The declared output name was never stored by any operation."""

    def __init__(self, output: str) -> None:
        super().__init__(f"Declared output '{output}' was never produced")
        self.output = output


class UnsupportedOperationError(RecipeExecutionError):
    """Operation kind has no handler."""

    def __init__(self, operation: Any, index: int) -> None:
        super().__init__(f"Operation #{index} has unsupported kind: {operation!r}")
        self.operation = operation
        self.index = index


# ---------------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------------


class UnknownDecoratorError(AsciiForgeError, LookupError):
    """Decorator name is not registered."""

    def __init__(self, name: str, available: list[str]) -> None:
        super().__init__(
            f"Unknown decorator: {name}. Available: {', '.join(available)}"
        )
        self.name = name
        self.available = available


class GlyphNotFoundError(AsciiForgeError, LookupError):
    """No glyph exists for a character."""

    def __init__(self, char: str) -> None:
        super().__init__(f"No glyph for character {char!r}")
        self.char = char


# ---------------------------------------------------------------------------
# Documents and I/O
# ---------------------------------------------------------------------------


class RecipeValidationError(AsciiForgeError, ValueError):
    """A recipe or shape-recipe document failed validation."""

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or []


class ExportError(AsciiForgeError):
    """Reading or writing a grid file failed."""
