"""Built-in fill patterns.

Each fill computes a grid-shaped numpy array (or a single character)
and hands it to :meth:`Grid.paint_blanks`, so drawn cells are never
overwritten.
"""

from __future__ import annotations

import logging

import numpy as np

from asciiforge.config.settings import settings
from asciiforge.errors import ConfigurationError
from asciiforge.grid import Grid

logger = logging.getLogger(__name__)

GRADIENT_DIRECTIONS = ("horizontal", "vertical", "radial")


def _parity_mask(grid: Grid) -> np.ndarray:
    """True where row and column parity differ."""
    rows, cols = np.indices(grid.cells.shape)
    return (rows % 2) != (cols % 2)


class SolidFill:
    name = "solid"
    description = "Fill every blank cell with one character"

    def apply(self, grid: Grid, char: str = "*") -> None:
        grid.paint_blanks(char)


class DotsFill:
    """Scatter *char* over blank cells, each with probability *density*."""

    name = "dots"
    description = "Random dots with a configurable density"

    def apply(
        self, grid: Grid, char: str = ".", density: float = 1.0, seed: int | None = None,
    ) -> None:
        if not 0.0 <= density <= 1.0:
            raise ConfigurationError(f"Dot density must be within [0, 1], got {density}", density)
        rng = np.random.default_rng(settings.render.dots_seed if seed is None else seed)
        grid.paint_blanks(char, mask=rng.random(grid.cells.shape) < density)


class GradientFill:
    """Shade blank cells along a light-to-dark density ramp.

    ``horizontal`` and ``vertical`` ramps run from the first to the last
    column/row; ``radial`` uses the distance from the grid centre divided
    by the centre-to-corner distance.  A one-column (or one-row) grid
    uses ratio 0 throughout.
    """

    name = "gradient"
    description = "Horizontal, vertical or radial shading ramp"

    def apply(
        self,
        grid: Grid,
        direction: str = "horizontal",
        density_string: str | None = None,
        reverse: bool = False,
    ) -> None:
        ramp = density_string if density_string is not None else settings.render.density_ramp
        if not ramp:
            raise ConfigurationError("Gradient density string must not be empty", ramp)

        ratio = self._ratio(grid, direction)
        if reverse:
            ratio = 1.0 - ratio

        max_index = len(ramp) - 1
        index = np.clip(np.floor(ratio * max_index + 0.5), 0, max_index).astype(int)
        chars = np.array(list(ramp), dtype="<U1")
        grid.paint_blanks(chars[index])

    @staticmethod
    def _ratio(grid: Grid, direction: str) -> np.ndarray:
        rows, cols = np.indices(grid.cells.shape, dtype=float)
        if direction == "horizontal":
            return cols / (grid.width - 1) if grid.width > 1 else np.zeros_like(cols)
        if direction == "vertical":
            return rows / (grid.height - 1) if grid.height > 1 else np.zeros_like(rows)
        if direction == "radial":
            center_row, center_col = grid.height / 2, grid.width / 2
            max_dist = np.hypot(center_row, center_col)
            return np.hypot(rows - center_row, cols - center_col) / max_dist
        raise ConfigurationError(
            f"Unknown gradient direction: {direction!r} (allowed: {', '.join(GRADIENT_DIRECTIONS)})",
            direction,
        )


class DiagonalFill:
    name = "diagonal"
    description = "Checkerboard of one character on alternating cells"

    def apply(self, grid: Grid, char: str = "/") -> None:
        grid.paint_blanks(char, mask=_parity_mask(grid))


class CrosshatchFill:
    """Alternate two characters so no blank cell is left empty."""

    name = "crosshatch"
    description = "Alternating forward and back slashes"

    def apply(self, grid: Grid, forward: str = "/", back: str = "\\") -> None:
        grid.paint_blanks(np.where(_parity_mask(grid), forward, back))


BUILTIN_DECORATORS = (
    SolidFill(),
    DotsFill(),
    GradientFill(),
    DiagonalFill(),
    CrosshatchFill(),
)
