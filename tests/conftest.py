"""Shared test fixtures for asciiforge.

Provides small hand-made grids and recipe documents so individual test
modules stay focused.
"""

from __future__ import annotations

from typing import Any

import pytest

from asciiforge.grid import Grid

# ---------------------------------------------------------------------------
# Grid fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def bracket() -> Grid:
    """Asymmetric 3x3 shape, so every rotation and mirror is distinguishable."""
    return Grid.from_string("***\n*  \n***")


@pytest.fixture()
def framed() -> Grid:
    """5x3 frame of '*' around a row of '#'."""
    return Grid.from_string("*****\n*###*\n*****")


@pytest.fixture()
def uneven() -> Grid:
    """Odd-sized grid with a distinct character in every cell."""
    return Grid.from_string("abc\ndef\nghi\njkl\nmno")


# ---------------------------------------------------------------------------
# Recipe fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def framed_text_recipe() -> dict[str, Any]:
    """Recipe that draws a box, writes HI inside it and centres the result."""
    return {
        "recipe": [
            {
                "operation": "generate",
                "shape": "rectangle",
                "params": {"width": 15, "height": 7},
                "storeAs": "box",
            },
            {
                "operation": "generate",
                "shape": "text",
                "params": {"text": "HI"},
                "storeAs": "label",
            },
            {
                "operation": "overlay",
                "target": "box",
                "source": "label",
                "position": {"row": 1, "col": 2},
                "storeAs": "labelled",
            },
            {
                "operation": "centerHorizontally",
                "source": "labelled",
                "targetWidth": 21,
                "storeAs": "final",
            },
        ],
        "output": "final",
    }
