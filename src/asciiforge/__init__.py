"""asciiforge: ASCII art engine.

Rasterizes shapes and block-letter text into character grids, transforms
and composes them, and interprets recipe documents that chain those
operations together.
"""

from __future__ import annotations

__version__ = "0.1.0"

__all__ = ["__version__"]
