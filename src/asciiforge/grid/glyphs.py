"""Five-row block glyphs used by :meth:`Grid.create_text`."""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Mapping

from asciiforge.errors import ConfigurationError, GlyphNotFoundError
from asciiforge.grid.grid import Grid

logger = logging.getLogger(__name__)

GLYPH_HEIGHT = 5

_GLYPHS: dict[str, tuple[str, ...]] = {
    "A": (" *** ", "*   *", "*****", "*   *", "*   *"),
    "B": ("**** ", "*   *", "**** ", "*   *", "**** "),
    "C": (" ****", "*    ", "*    ", "*    ", " ****"),
    "D": ("**** ", "*   *", "*   *", "*   *", "**** "),
    "E": ("*****", "*    ", "**** ", "*    ", "*****"),
    "F": ("*****", "*    ", "**** ", "*    ", "*    "),
    "G": (" ****", "*    ", "*  **", "*   *", " ****"),
    "H": ("*   *", "*   *", "*****", "*   *", "*   *"),
    "I": ("*****", "  *  ", "  *  ", "  *  ", "*****"),
    "J": ("*****", "   * ", "   * ", "*  * ", " **  "),
    "K": ("*   *", "*  * ", "***  ", "*  * ", "*   *"),
    "L": ("*    ", "*    ", "*    ", "*    ", "*****"),
    "M": ("*   *", "** **", "* * *", "*   *", "*   *"),
    "N": ("*   *", "**  *", "* * *", "*  **", "*   *"),
    "O": (" *** ", "*   *", "*   *", "*   *", " *** "),
    "P": ("**** ", "*   *", "**** ", "*    ", "*    "),
    "Q": (" *** ", "*   *", "* * *", "*  * ", " ** *"),
    "R": ("**** ", "*   *", "**** ", "*  * ", "*   *"),
    "S": (" ****", "*    ", " *** ", "    *", "**** "),
    "T": ("*****", "  *  ", "  *  ", "  *  ", "  *  "),
    "U": ("*   *", "*   *", "*   *", "*   *", " *** "),
    "V": ("*   *", "*   *", "*   *", " * * ", "  *  "),
    "W": ("*   *", "*   *", "* * *", "** **", "*   *"),
    "X": ("*   *", " * * ", "  *  ", " * * ", "*   *"),
    "Y": ("*   *", " * * ", "  *  ", "  *  ", "  *  "),
    "Z": ("*****", "   * ", "  *  ", " *   ", "*****"),
    "0": (" *** ", "*  **", "* * *", "**  *", " *** "),
    "1": ("  *  ", " **  ", "  *  ", "  *  ", " *** "),
    "2": (" *** ", "*   *", "  ** ", " *   ", "*****"),
    "3": ("**** ", "    *", " *** ", "    *", "**** "),
    "4": ("*   *", "*   *", "*****", "    *", "    *"),
    "5": ("*****", "*    ", "**** ", "    *", "**** "),
    "6": (" *** ", "*    ", "**** ", "*   *", " *** "),
    "7": ("*****", "    *", "   * ", "  *  ", "  *  "),
    "8": (" *** ", "*   *", " *** ", "*   *", " *** "),
    "9": (" *** ", "*   *", " ****", "    *", " *** "),
    " ": ("   ", "   ", "   ", "   ", "   "),
    "!": ("*", "*", "*", " ", "*"),
    "?": (" *** ", "*   *", "  ** ", "     ", "  *  "),
    ".": (" ", " ", " ", " ", "*"),
    "-": ("   ", "   ", "***", "   ", "   "),
    "+": ("   ", " * ", "***", " * ", "   "),
    ":": (" ", "*", " ", "*", " "),
}


class GlyphMap:
    """Character to glyph lookup.  Every glyph is exactly five rows tall."""

    def __init__(self, glyphs: Mapping[str, tuple[str, ...]] | None = None) -> None:
        source = glyphs if glyphs is not None else _GLYPHS
        for char, rows in source.items():
            if len(rows) != GLYPH_HEIGHT:
                raise ConfigurationError(
                    f"Glyph {char!r} has {len(rows)} rows, expected {GLYPH_HEIGHT}", char,
                )
        self._glyphs = dict(source)

    def glyph(self, char: str) -> Grid:
        """Fresh grid for *char*; lowercase letters map to their capitals."""
        rows = self._glyphs.get(char, self._glyphs.get(char.upper()))
        if rows is None:
            raise GlyphNotFoundError(char)
        return Grid.from_string("\n".join(rows))

    def supports(self, char: str) -> bool:
        return char in self._glyphs or char.upper() in self._glyphs

    @property
    def characters(self) -> str:
        return "".join(self._glyphs)

    def __contains__(self, char: object) -> bool:
        return isinstance(char, str) and self.supports(char)


@lru_cache(maxsize=1)
def default_glyph_map() -> GlyphMap:
    return GlyphMap()
