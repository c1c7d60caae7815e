"""Recipe interpreter.

Runs an ordered list of grid-producing operations against a symbol
table (``name -> Grid``) and returns the grid stored under the
recipe's declared output.  Operations run strictly in document order:
every name an operation references must already have been stored by an
earlier one.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping

from asciiforge.decorators import apply_decorator
from asciiforge.errors import (
    OutputNotProducedError,
    RecipeExecutionError,
    SymbolNotFoundError,
    UnsupportedOperationError,
)
from asciiforge.grid import Grid
from asciiforge.recipe.models import Recipe

logger = logging.getLogger(__name__)

SymbolTable = dict[str, Grid]
Handler = Callable[[Mapping[str, Any], SymbolTable, int], Grid]


# ---------------------------------------------------------------------------
# Data structures
# ---------------------------------------------------------------------------


@dataclass
class ExecutionResult:
    """Outcome of one recipe run."""

    output: Grid
    symbols: SymbolTable = field(default_factory=dict)
    """Every grid stored during the run, keyed by its ``storeAs`` name."""
    operations: int = 0
    elapsed_ms: float = 0.0


# ---------------------------------------------------------------------------
# Executor
# ---------------------------------------------------------------------------


class RecipeExecutor:
    """Interpreter for recipe documents.

    The executor keeps no per-run state: the symbol table is passed into
    :meth:`run` (or created there), cleared at entry and handed back in
    the result, so a single instance can serve concurrent runs.

    Any failure aborts the run immediately; nothing after the failing
    operation executes and no output is returned.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, Handler] = {
            "generate": self._generate,
            "overlay": self._overlay,
            "clip": self._clip,
            "transform": self._transform,
            "topAppend": self._top_append,
            "bottomAppend": self._bottom_append,
            "centerHorizontally": self._center_horizontally,
        }

    @property
    def operations(self) -> list[str]:
        """Operation kinds this executor understands."""
        return list(self._handlers)

    def execute(self, recipe: Recipe | Mapping[str, Any], symbols: SymbolTable | None = None) -> Grid:
        """Run *recipe* and return its output grid."""
        return self.run(recipe, symbols).output

    def run(self, recipe: Recipe | Mapping[str, Any], symbols: SymbolTable | None = None) -> ExecutionResult:
        """Run *recipe* and return the output together with the symbol table.

        *recipe* is either a validated :class:`Recipe` or a raw document
        whose operations live under ``recipe`` or ``operations``.  Raw
        documents are trusted as-is.
        """
        operations, output = self._unpack(recipe)
        if symbols is None:
            symbols = {}
        symbols.clear()

        start = time.monotonic()
        for index, op in enumerate(operations):
            kind = op.get("operation")
            handler = self._handlers.get(kind)  # type: ignore[arg-type]
            if handler is None:
                raise UnsupportedOperationError(kind, index)

            store_as = op["storeAs"]
            logger.debug("Operation #%d: %s -> %s", index, kind, store_as)
            symbols[store_as] = handler(op, symbols, index)

        if output not in symbols:
            raise OutputNotProducedError(output)

        elapsed_ms = (time.monotonic() - start) * 1000
        result = symbols[output]
        logger.info(
            "Recipe finished: %d operations, output '%s' is %dx%d (%.1f ms)",
            len(operations), output, result.width, result.height, elapsed_ms,
        )
        return ExecutionResult(
            output=result,
            symbols=symbols,
            operations=len(operations),
            elapsed_ms=elapsed_ms,
        )

    @staticmethod
    def _unpack(recipe: Recipe | Mapping[str, Any]) -> tuple[list[Mapping[str, Any]], str]:
        if isinstance(recipe, Recipe):
            document: Mapping[str, Any] = recipe.model_dump(by_alias=True)
        else:
            document = recipe
        operations = document.get("recipe", document.get("operations"))
        if operations is None:
            raise RecipeExecutionError("Recipe document has no 'recipe' operation list")
        return list(operations), document.get("output", "")

    @staticmethod
    def _lookup(symbols: SymbolTable, name: str, index: int, kind: str) -> Grid:
        grid = symbols.get(name)
        if grid is None:
            raise SymbolNotFoundError(name, index, kind)
        return grid

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------

    def _generate(self, op: Mapping[str, Any], symbols: SymbolTable, index: int) -> Grid:
        grid = Grid.generate(op["shape"], op.get("params") or {})
        pattern = op.get("fillPattern")
        if pattern:
            apply_decorator(pattern, grid, **(op.get("fillParams") or {}))
        return grid

    def _overlay(self, op: Mapping[str, Any], symbols: SymbolTable, index: int) -> Grid:
        target = self._lookup(symbols, op["target"], index, "overlay")
        source = self._lookup(symbols, op["source"], index, "overlay")
        position = op.get("position") or {}
        target.overlay(
            source,
            row=position.get("row", 0),
            col=position.get("col", 0),
            char=op.get("char"),
            transparent=op.get("transparent", True),
        )
        # The target slot keeps the mutated grid; storeAs gets its own copy.
        return target.copy()

    def _clip(self, op: Mapping[str, Any], symbols: SymbolTable, index: int) -> Grid:
        source = self._lookup(symbols, op["source"], index, "clip")
        bounds = op["bounds"]
        return source.clip(bounds["startRow"], bounds["endRow"], bounds["startCol"], bounds["endCol"])

    def _transform(self, op: Mapping[str, Any], symbols: SymbolTable, index: int) -> Grid:
        source = self._lookup(symbols, op["source"], index, "transform")
        return Grid.apply_transformation(source, op["type"], op.get("params"))

    def _top_append(self, op: Mapping[str, Any], symbols: SymbolTable, index: int) -> Grid:
        target = self._lookup(symbols, op["target"], index, "topAppend")
        source = self._lookup(symbols, op["source"], index, "topAppend")
        return target.top_append(source)

    def _bottom_append(self, op: Mapping[str, Any], symbols: SymbolTable, index: int) -> Grid:
        target = self._lookup(symbols, op["target"], index, "bottomAppend")
        source = self._lookup(symbols, op["source"], index, "bottomAppend")
        return target.bottom_append(source)

    def _center_horizontally(self, op: Mapping[str, Any], symbols: SymbolTable, index: int) -> Grid:
        source = self._lookup(symbols, op["source"], index, "centerHorizontally")
        return source.center_horizontally(op["targetWidth"])


def execute_recipe(recipe: Recipe | Mapping[str, Any]) -> Grid:
    """Run *recipe* with a fresh executor and return its output grid."""
    return RecipeExecutor().execute(recipe)
