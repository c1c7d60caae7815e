"""Character grid engine: buffer, rasterization, transforms and composition."""

from asciiforge.grid.grid import (
    BLANK,
    DEFAULT_CHAR,
    CenterPoint,
    ContentBounds,
    Grid,
    check_char,
    round_half_up,
)
from asciiforge.grid.composite import ANCHORS, CompositeGrid, Layer
from asciiforge.grid.glyphs import GlyphMap, default_glyph_map
from asciiforge.grid.stream import DelayedRowStream, RowCompleted, RowStream, StreamComplete

__all__ = [
    "ANCHORS",
    "BLANK",
    "DEFAULT_CHAR",
    "CenterPoint",
    "CompositeGrid",
    "ContentBounds",
    "DelayedRowStream",
    "GlyphMap",
    "Grid",
    "Layer",
    "RowCompleted",
    "RowStream",
    "StreamComplete",
    "check_char",
    "default_glyph_map",
    "round_half_up",
]
