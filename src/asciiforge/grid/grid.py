"""Character grid: the buffer every shape, text banner and composition renders into.

A :class:`Grid` wraps a 2D numpy array of single characters (row-major,
blank cells hold a space).  It provides bounds-checked cell access,
rasterization factories (circle, rectangle, polygon, line, text),
rotate/mirror/scale transforms and the composition primitives used by
:class:`~asciiforge.grid.composite.CompositeGrid` and the recipe
executor.
"""

from __future__ import annotations

import functools
import logging
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Iterable, Mapping, NamedTuple

import numpy as np

from asciiforge.errors import ConfigurationError, UnknownShapeError
from asciiforge.grid.stream import DelayedRowStream, RowStream

if TYPE_CHECKING:
    from asciiforge.grid.glyphs import GlyphMap

logger = logging.getLogger(__name__)

BLANK = " "
DEFAULT_CHAR = "*"
CIRCLE_TOLERANCE = 0.5
_CELL_DTYPE = "<U1"

Point = tuple[float, float]
"""(row, col) coordinate; fractional values are rounded half-up."""


# ---------------------------------------------------------------------------
# Data structures
# ---------------------------------------------------------------------------


class CenterPoint(NamedTuple):
    row: int
    col: int


@dataclass(frozen=True)
class ContentBounds:
    """Tight bounding box of the non-blank cells (inclusive)."""

    min_row: int
    max_row: int
    min_col: int
    max_col: int

    @property
    def width(self) -> int:
        return self.max_col - self.min_col + 1

    @property
    def height(self) -> int:
        return self.max_row - self.min_row + 1


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties towards +infinity."""
    return math.floor(value + 0.5)


def check_char(char: str) -> str:
    """Return *char* if it is exactly one character, else raise ConfigurationError."""
    if not isinstance(char, str) or len(char) != 1:
        raise ConfigurationError(f"Cell character must be a single character, got {char!r}", char)
    return char


def polygon_vertices(sides: int, radius: int, center: int) -> list[tuple[int, int]]:
    """Vertices of a regular polygon as (row, col), starting at angle 0."""
    vertices = []
    for i in range(sides):
        angle = 2 * math.pi * i / sides
        row = round_half_up(center + radius * math.sin(angle))
        col = round_half_up(center + radius * math.cos(angle))
        vertices.append((row, col))
    return vertices


# ---------------------------------------------------------------------------
# Grid
# ---------------------------------------------------------------------------


class Grid:
    """Fixed-size 2D character buffer.

    Every row holds exactly ``width`` cells.  Out-of-bounds writes are
    ignored and out-of-bounds reads return ``None``.
    """

    ALLOWED_DEGREES = (90, 180, 270)
    ALLOWED_AXES = ("horizontal", "vertical")
    ALLOWED_FACTORS = (0.5, 2.0)
    SHAPES = ("circle", "rectangle", "polygon", "text")

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ConfigurationError(
                f"Grid dimensions must be positive, got {width}x{height}",
                (width, height),
            )
        self.cells: np.ndarray = np.full((height, width), BLANK, dtype=_CELL_DTYPE)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_dimensions(cls, width: int, height: int) -> Grid:
        """Blank grid of the given size."""
        return cls(width, height)

    @classmethod
    def from_string(cls, content: str) -> Grid:
        """Parse newline-separated rows; short rows are padded with spaces."""
        lines = content.split("\n")
        width = max(len(line) for line in lines)
        if width == 0:
            raise ConfigurationError("Cannot build a grid from empty content", content)
        grid = cls(width, len(lines))
        for row, line in enumerate(lines):
            if line:
                grid.cells[row, : len(line)] = list(line)
        return grid

    @staticmethod
    def _from_cells(cells: np.ndarray) -> Grid:
        grid = Grid(cells.shape[1], cells.shape[0])
        grid.cells[:, :] = cells
        return grid

    @staticmethod
    def _from_rows(rows: Iterable[str]) -> Grid:
        return Grid.from_string("\n".join(rows))

    # ------------------------------------------------------------------
    # Cell access
    # ------------------------------------------------------------------

    @property
    def width(self) -> int:
        return self.cells.shape[1]

    @property
    def height(self) -> int:
        return self.cells.shape[0]

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.height and 0 <= col < self.width

    def get(self, row: int, col: int) -> str | None:
        """Character at (row, col), or ``None`` outside the grid."""
        if not self.in_bounds(row, col):
            return None
        return str(self.cells[row, col])

    def set(self, row: int, col: int, char: str) -> None:
        """Write one cell; a no-op outside the grid."""
        check_char(char)
        if self.in_bounds(row, col):
            self.cells[row, col] = char

    def set_row(self, row: int, char: str) -> None:
        """Fill a whole row with *char*; a no-op outside the grid."""
        check_char(char)
        if self.has_row(row):
            self.cells[row, :] = char

    def has_row(self, row: int) -> bool:
        return 0 <= row < self.height

    def row_string(self, row: int) -> str | None:
        if not self.has_row(row):
            return None
        return "".join(self.cells[row])

    def paint_blanks(self, values: str | np.ndarray, mask: np.ndarray | None = None) -> int:
        """Bulk write that only touches blank cells.

        *values* is either one character or a grid-shaped array of
        characters.  *mask* further restricts which blank cells are
        written.  Every character written must be exactly one code
        point.  Returns the number of cells painted.
        """
        target = self.cells == BLANK
        if mask is not None:
            target &= mask
        if isinstance(values, str):
            self.cells[target] = check_char(values)
            return int(target.sum())

        chosen = np.asarray(values, dtype=str)[target]
        lengths = np.char.str_len(chosen)
        if chosen.size and (lengths != 1).any():
            bad = str(chosen[lengths != 1][0])
            raise ConfigurationError(f"Cell character must be a single character, got {bad!r}", bad)
        self.cells[target] = chosen
        return int(target.sum())

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def rows(self) -> list[str]:
        return ["".join(row) for row in self.cells]

    def to_string(self) -> str:
        """Rows joined by ``\\n``, each exactly ``width`` characters, no trailing newline."""
        return "\n".join(self.rows())

    def to_list(self) -> list[list[str]]:
        return self.cells.tolist()

    def copy(self) -> Grid:
        return Grid._from_cells(self.cells)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(width={self.width}, height={self.height})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self.cells.shape == other.cells.shape and bool(np.array_equal(self.cells, other.cells))

    __hash__ = None  # type: ignore[assignment]

    # ------------------------------------------------------------------
    # Rasterization
    # ------------------------------------------------------------------

    @classmethod
    def generate(cls, shape: str, params: Mapping[str, Any]) -> Grid:
        """Dispatch a shape name to its factory."""
        factories = {
            "circle": cls.generate_circle,
            "rectangle": cls.generate_rectangle,
            "polygon": cls.generate_polygon,
            "text": cls.create_text,
        }
        factory = factories.get(shape)
        if factory is None:
            raise UnknownShapeError(
                f"Unknown shape: {shape!r}. Available: {', '.join(cls.SHAPES)}", shape,
            )
        return factory(**params)

    @classmethod
    def generate_circle(cls, radius: int, filled: bool = False, char: str = DEFAULT_CHAR) -> Grid:
        """Rasterize a circle into a ``(2r+1)`` square grid.

        A cell is on the boundary when ``|dx² + dy² - r²| < 0.5``; filled
        circles also take every cell with a negative difference.
        """
        check_char(char)
        size = radius * 2 + 1
        grid = cls(size, size)
        rows, cols = np.ogrid[:size, :size]
        diff = (cols - radius) ** 2 + (rows - radius) ** 2 - radius ** 2
        mask = np.abs(diff) < CIRCLE_TOLERANCE
        if filled:
            mask |= diff < 0
        grid.cells[mask] = char
        return grid

    @classmethod
    def generate_rectangle(
        cls, width: int, height: int, char: str = DEFAULT_CHAR, filled: bool = False,
    ) -> Grid:
        grid = cls(width, height)
        for row in range(height):
            if filled or row in (0, height - 1):
                grid.set_row(row, char)
            else:
                grid.set(row, 0, char)
                grid.set(row, width - 1, char)
        return grid

    @classmethod
    def generate_polygon(
        cls, sides: int, radius: int, filled: bool = False, char: str = DEFAULT_CHAR,
    ) -> Grid:
        """Regular polygon inscribed in a ``(2r+1)`` square grid.

        Outline edges use :meth:`draw_line`; *filled* polygons are then
        scanline-filled between sorted edge crossings.
        """
        check_char(char)
        if sides < 3:
            raise ConfigurationError(f"A polygon needs at least 3 sides, got {sides}", sides)
        size = radius * 2 + 1
        grid = cls(size, size)
        vertices = polygon_vertices(sides, radius, center=radius)
        for start, end in zip(vertices, vertices[1:] + vertices[:1]):
            grid.draw_line(start, end, char)
        if filled:
            grid._scanline_fill(vertices, char)
        return grid

    def _scanline_fill(self, vertices: list[tuple[int, int]], char: str) -> None:
        edges = list(zip(vertices, vertices[1:] + vertices[:1]))
        for row in range(self.height):
            crossings: list[int] = []
            for (r1, c1), (r2, c2) in edges:
                if r1 == r2:
                    continue
                # Half-open so a vertex shared by two edges counts once
                if min(r1, r2) <= row < max(r1, r2):
                    t = (row - r1) / (r2 - r1)
                    crossings.append(round_half_up(c1 + t * (c2 - c1)))
            crossings.sort()
            for left, right in zip(crossings[::2], crossings[1::2]):
                for col in range(left, right + 1):
                    self.set(row, col, char)

    def draw_line(self, start: Point, end: Point, char: str = DEFAULT_CHAR) -> None:
        """Digital line from *start* to *end*, both (row, col).

        Zero-length segments draw nothing.
        """
        check_char(char)
        start_row, start_col = round_half_up(start[0]), round_half_up(start[1])
        end_row, end_col = round_half_up(end[0]), round_half_up(end[1])
        steps = max(abs(end_row - start_row), abs(end_col - start_col))
        if steps == 0:
            return

        row_inc = (end_row - start_row) / steps
        col_inc = (end_col - start_col) / steps
        row, col = float(start_row), float(start_col)
        for _ in range(steps + 1):
            self.set(round_half_up(row), round_half_up(col), char)
            row += row_inc
            col += col_inc

    @classmethod
    def create_text(cls, text: str, glyphs: GlyphMap | None = None) -> Grid:
        """Render *text* from 5-row glyphs joined by one blank column."""
        from asciiforge.grid.glyphs import default_glyph_map

        if not text:
            raise ConfigurationError("Text must not be empty", text)
        glyph_map = glyphs if glyphs is not None else default_glyph_map()
        first, *rest = (glyph_map.glyph(char) for char in text)
        return functools.reduce(Grid.right_append, rest, first)

    # ------------------------------------------------------------------
    # Transforms
    # ------------------------------------------------------------------

    def rotate(self, degrees: int) -> Grid:
        """Rotate clockwise by 90, 180 or 270 degrees into a new grid."""
        if degrees not in self.ALLOWED_DEGREES:
            raise ConfigurationError(
                f"Improper degree amount specified: {degrees!r} (allowed: 90, 180, 270)",
                degrees,
            )
        return Grid._from_cells(np.rot90(self.cells, k=-(int(degrees) // 90)))

    def mirror(self, axis: str) -> Grid:
        """``horizontal`` flips left-right, ``vertical`` flips top-bottom."""
        if axis not in self.ALLOWED_AXES:
            raise ConfigurationError(
                f"Axis not allowed: {axis!r} (allowed: horizontal, vertical)", axis,
            )
        if axis == "horizontal":
            return Grid._from_cells(np.fliplr(self.cells))
        return Grid._from_cells(np.flipud(self.cells))

    def scale(self, factor: float) -> Grid:
        """Scale by 2.0 (each cell becomes a 2x2 block) or 0.5 (every second row/col).

        Shrinking keeps ``ceil(n/2)`` rows and columns, so odd sizes lose
        their last row/column on a later round trip.
        """
        if isinstance(factor, bool) or factor not in self.ALLOWED_FACTORS:
            raise ConfigurationError(
                f"Scale factor not allowed: {factor!r} (allowed: 0.5, 2.0)", factor,
            )
        if factor == 2.0:
            return Grid._from_cells(np.repeat(np.repeat(self.cells, 2, axis=0), 2, axis=1))
        return Grid._from_cells(self.cells[::2, ::2])

    @staticmethod
    def apply_transformation(grid: Grid, kind: str, params: Mapping[str, Any] | None = None) -> Grid:
        """Apply one ``rotate`` / ``mirror`` / ``scale`` step to *grid*."""
        params = params or {}
        if kind == "rotate":
            return grid.rotate(params.get("degrees"))  # type: ignore[arg-type]
        if kind == "mirror":
            return grid.mirror(params.get("axis"))  # type: ignore[arg-type]
        if kind == "scale":
            return grid.scale(params.get("factor"))  # type: ignore[arg-type]
        raise ConfigurationError(f"Unknown transformation type: {kind!r}", kind)

    def transform(self, steps: Iterable[Mapping[str, Any]]) -> Grid:
        """Apply ``{"type": ..., "params": {...}}`` steps in order."""
        result = self.copy()
        for step in steps:
            result = Grid.apply_transformation(result, step["type"], step.get("params"))
        return result

    # ------------------------------------------------------------------
    # Composition
    # ------------------------------------------------------------------

    def overlay(
        self,
        source: Grid,
        row: int = 0,
        col: int = 0,
        char: str | None = None,
        transparent: bool = True,
    ) -> Grid:
        """Stamp *source* onto this grid with its top-left at (row, col).

        Source cells landing outside this grid are skipped.  With
        *transparent*, blank source cells leave the target untouched.
        *char* replaces every stamped character; ``None`` keeps the
        source's own characters.  Mutates in place and returns ``self``.
        """
        if char is not None:
            check_char(char)
        r0, c0 = max(row, 0), max(col, 0)
        r1 = min(row + source.height, self.height)
        c1 = min(col + source.width, self.width)
        if r0 >= r1 or c0 >= c1:
            return self

        window = source.cells[r0 - row: r1 - row, c0 - col: c1 - col]
        if transparent:
            mask = window != BLANK
        else:
            mask = np.ones(window.shape, dtype=bool)
        target = self.cells[r0:r1, c0:c1]
        target[mask] = window[mask] if char is None else char
        return self

    def place_at(
        self,
        source: Grid,
        row: int = 0,
        col: int = 0,
        char: str | None = None,
        transparent: bool = True,
    ) -> Grid:
        """Alias of :meth:`overlay`."""
        return self.overlay(source, row=row, col=col, char=char, transparent=transparent)

    def clip(self, start_row: int, end_row: int, start_col: int, end_col: int) -> Grid:
        """Copy the region ``[start_row, end_row) x [start_col, end_col)``.

        Bounds are clamped to the grid; an empty region yields a 1x1
        blank grid.
        """
        r0 = min(max(start_row, 0), self.height)
        r1 = min(max(end_row, 0), self.height)
        c0 = min(max(start_col, 0), self.width)
        c1 = min(max(end_col, 0), self.width)
        if r1 <= r0 or c1 <= c0:
            return Grid(1, 1)
        return Grid._from_cells(self.cells[r0:r1, c0:c1])

    def right_append(self, other: Grid) -> Grid:
        """Place *other* to the right, separated by one blank column."""
        height = max(self.height, other.height)
        left = self.rows() + [BLANK * self.width] * (height - self.height)
        right = other.rows() + [BLANK * other.width] * (height - other.height)
        return Grid._from_rows(f"{lhs}{BLANK}{rhs}" for lhs, rhs in zip(left, right))

    def top_append(self, other: Grid) -> Grid:
        """Stack *other* above this grid, padding to the wider width."""
        return Grid._from_rows(other.rows() + self.rows())

    def bottom_append(self, other: Grid) -> Grid:
        """Stack *other* below this grid, padding to the wider width."""
        return Grid._from_rows(self.rows() + other.rows())

    def center_horizontally(self, target_width: int) -> Grid:
        """Pad on the left (and right) so the content sits centred in *target_width*."""
        width = max(self.width, target_width)
        pad = max((target_width - self.width) // 2, 0)
        grid = Grid(width, self.height)
        grid.cells[:, pad: pad + self.width] = self.cells
        return grid

    # ------------------------------------------------------------------
    # Geometry queries
    # ------------------------------------------------------------------

    def get_bounds(self) -> tuple[int, int]:
        """(width, height)."""
        return self.width, self.height

    def get_center_point(self) -> CenterPoint:
        return CenterPoint(self.height // 2, self.width // 2)

    def get_content_bounds(self) -> ContentBounds | None:
        """Bounding box of all non-blank cells, or ``None`` for a blank grid."""
        rows, cols = np.nonzero(self.cells != BLANK)
        if rows.size == 0:
            return None
        return ContentBounds(
            min_row=int(rows.min()),
            max_row=int(rows.max()),
            min_col=int(cols.min()),
            max_col=int(cols.max()),
        )

    # ------------------------------------------------------------------
    # Row streaming
    # ------------------------------------------------------------------

    def stream_rows(self) -> RowStream:
        """Restartable sequence of row notifications followed by one completion."""
        return RowStream(self)

    def stream_rows_with_delay(self, delay: float = 0.05) -> DelayedRowStream:
        """Async variant that pauses *delay* seconds between successive rows."""
        return DelayedRowStream(self, delay)
