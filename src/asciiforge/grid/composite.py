"""Anchor-based composition of several shapes into one canvas."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping

from asciiforge.errors import InvalidAnchorError
from asciiforge.grid.grid import Grid

logger = logging.getLogger(__name__)

ANCHORS = ("center", "topLeft", "topRight", "bottomLeft", "bottomRight")


@dataclass(frozen=True)
class Layer:
    """One ``add_shape`` call, kept for debugging only."""

    grid: Grid
    anchor: str
    offset_row: int
    offset_col: int
    char: str | None
    row: int
    col: int


class CompositeGrid(Grid):
    """Grid that places sub-grids by anchor and records every placement.

    ``layers`` is an append-only log; rendering never consults it.
    """

    def __init__(self, width: int, height: int) -> None:
        super().__init__(width, height)
        self.layers: list[Layer] = []

    def anchor_origin(
        self, shape: Grid, anchor: str, offset_row: int = 0, offset_col: int = 0,
    ) -> tuple[int, int]:
        """Top-left (row, col) at which *shape* lands for *anchor*.

        Offsets on corner anchors point inward: right anchors subtract
        *offset_col*, bottom anchors subtract *offset_row*.
        """
        if anchor == "center":
            center = self.get_center_point()
            shape_center = shape.get_center_point()
            return center.row - shape_center.row + offset_row, center.col - shape_center.col + offset_col
        if anchor not in ANCHORS:
            raise InvalidAnchorError(
                f"Unknown anchor: {anchor!r}. Available: {', '.join(ANCHORS)}", anchor,
            )

        if anchor.startswith("bottom"):
            row = self.height - shape.height - offset_row
        else:
            row = offset_row
        if anchor.endswith("Right"):
            col = self.width - shape.width - offset_col
        else:
            col = offset_col
        return row, col

    def add_shape(
        self,
        shape: Grid,
        anchor: str = "center",
        offset_row: int = 0,
        offset_col: int = 0,
        char: str | None = None,
    ) -> CompositeGrid:
        """Overlay *shape* at its anchored position and log the layer."""
        row, col = self.anchor_origin(shape, anchor, offset_row, offset_col)
        self.overlay(shape, row=row, col=col, char=char)
        self.layers.append(Layer(shape, anchor, offset_row, offset_col, char, row, col))
        logger.debug(
            "Placed %dx%d shape at (%d, %d) via %s anchor",
            shape.width, shape.height, row, col, anchor,
        )
        return self

    @classmethod
    def from_recipe(cls, recipe: Any) -> CompositeGrid:
        """Build a canvas from a shape recipe, first shape at the bottom.

        *recipe* is a :class:`~asciiforge.recipe.models.ShapeRecipe` or a
        mapping with ``width``, ``height`` and ``shapes``.
        """
        from asciiforge.decorators import apply_decorator

        if hasattr(recipe, "model_dump"):
            recipe = recipe.model_dump(by_alias=True)

        composite = cls(recipe["width"], recipe["height"])
        for entry in recipe.get("shapes", []):
            shape = Grid.generate(entry["type"], _shape_params(entry.get("params")))
            pattern = entry.get("fillPattern")
            if pattern:
                apply_decorator(pattern, shape, **(entry.get("fillParams") or {}))
            placement = entry.get("placement") or {}
            composite.add_shape(
                shape,
                anchor=placement.get("anchor", "center"),
                offset_row=placement.get("offsetRow", 0),
                offset_col=placement.get("offsetCol", 0),
                char=placement.get("char"),
            )
        logger.info("Composed %d shapes on a %dx%d canvas", len(composite.layers), composite.width, composite.height)
        return composite


def _shape_params(params: Mapping[str, Any] | None) -> dict[str, Any]:
    return {key: value for key, value in (params or {}).items() if value is not None}
