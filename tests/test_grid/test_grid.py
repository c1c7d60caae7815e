"""Tests for Grid construction, cell access and serialization."""

from __future__ import annotations

import numpy as np
import pytest

from asciiforge.errors import ConfigurationError
from asciiforge.grid import BLANK, ContentBounds, Grid


class TestConstruction:
    def test_from_dimensions_is_blank(self) -> None:
        grid = Grid.from_dimensions(4, 2)
        assert grid.width == 4
        assert grid.height == 2
        assert grid.to_string() == "    \n    "

    def test_from_string_pads_short_rows(self) -> None:
        grid = Grid.from_string("ab\nc\n")
        assert grid.get_bounds() == (2, 3)
        assert grid.rows() == ["ab", "c ", "  "]

    def test_from_string_keeps_spaces(self) -> None:
        grid = Grid.from_string(" * \n***")
        assert grid.get(0, 0) == BLANK
        assert grid.get(0, 1) == "*"

    def test_empty_string_rejected(self) -> None:
        with pytest.raises(ConfigurationError):
            Grid.from_string("")

    def test_only_newlines_rejected(self) -> None:
        with pytest.raises(ConfigurationError):
            Grid.from_string("\n\n")

    @pytest.mark.parametrize("width,height", [(0, 3), (3, 0), (-1, 2)])
    def test_non_positive_dimensions_rejected(self, width: int, height: int) -> None:
        with pytest.raises(ConfigurationError):
            Grid(width, height)

    def test_buffer_is_single_char_array(self) -> None:
        grid = Grid(3, 2)
        assert grid.cells.shape == (2, 3)
        assert grid.cells.dtype == np.dtype("<U1")


class TestCellAccess:
    def test_set_and_get(self) -> None:
        grid = Grid(3, 3)
        grid.set(1, 2, "#")
        assert grid.get(1, 2) == "#"
        assert grid.row_string(1) == "  #"

    @pytest.mark.parametrize("row,col", [(-1, 0), (0, -1), (3, 0), (0, 3), (10, 10)])
    def test_out_of_bounds_read_returns_none(self, row: int, col: int) -> None:
        assert Grid(3, 3).get(row, col) is None

    @pytest.mark.parametrize("row,col", [(-1, 0), (0, -1), (3, 0), (0, 3)])
    def test_out_of_bounds_write_is_noop(self, row: int, col: int) -> None:
        grid = Grid(3, 3)
        grid.set(row, col, "#")
        assert grid == Grid(3, 3)

    def test_set_row(self) -> None:
        grid = Grid(4, 2)
        grid.set_row(1, "=")
        assert grid.to_string() == "    \n===="

    def test_set_row_out_of_bounds_is_noop(self) -> None:
        grid = Grid(2, 2)
        grid.set_row(5, "=")
        grid.set_row(-1, "=")
        assert grid.to_string() == "  \n  "

    def test_has_row(self) -> None:
        grid = Grid(2, 2)
        assert grid.has_row(0)
        assert grid.has_row(1)
        assert not grid.has_row(2)
        assert not grid.has_row(-1)
        assert grid.row_string(2) is None


class TestSerialization:
    def test_to_string_has_no_trailing_newline(self, framed: Grid) -> None:
        assert framed.to_string() == "*****\n*###*\n*****"
        assert str(framed) == framed.to_string()

    def test_every_row_is_full_width(self) -> None:
        grid = Grid.from_string("a\nabcd\nab")
        assert all(len(row) == 4 for row in grid.to_string().split("\n"))

    def test_to_list_is_detached(self, framed: Grid) -> None:
        rows = framed.to_list()
        assert rows[1] == ["*", "#", "#", "#", "*"]
        rows[0][0] = "X"
        assert framed.get(0, 0) == "*"

    def test_copy_is_independent(self, framed: Grid) -> None:
        clone = framed.copy()
        clone.set(0, 0, "X")
        assert framed.get(0, 0) == "*"
        assert clone != framed

    def test_equality(self) -> None:
        assert Grid.from_string("ab\ncd") == Grid.from_string("ab\ncd")
        assert Grid.from_string("ab\ncd") != Grid.from_string("ab\ndc")
        assert Grid(2, 3) != Grid(3, 2)
        assert Grid(1, 1) != " "

    def test_repr(self) -> None:
        assert repr(Grid(4, 2)) == "Grid(width=4, height=2)"


class TestGeometryQueries:
    def test_center_point_even(self) -> None:
        center = Grid(6, 6).get_center_point()
        assert (center.row, center.col) == (3, 3)

    def test_center_point_odd(self) -> None:
        center = Grid(5, 3).get_center_point()
        assert (center.row, center.col) == (1, 2)

    def test_content_bounds(self) -> None:
        grid = Grid.from_string("     \n  ** \n   * \n     ")
        assert grid.get_content_bounds() == ContentBounds(min_row=1, max_row=2, min_col=2, max_col=3)

    def test_content_bounds_size(self) -> None:
        bounds = Grid.from_string(" # \n###").get_content_bounds()
        assert bounds is not None
        assert (bounds.width, bounds.height) == (3, 2)

    def test_content_bounds_of_blank_grid(self) -> None:
        assert Grid(4, 4).get_content_bounds() is None


class TestPaintBlanks:
    def test_single_char_fills_only_blanks(self) -> None:
        grid = Grid.from_string("* \n *")
        painted = grid.paint_blanks(".")
        assert painted == 2
        assert grid.to_string() == "*.\n.*"

    def test_mask_restricts_cells(self) -> None:
        grid = Grid(2, 2)
        grid.paint_blanks("#", mask=np.array([[True, False], [False, False]]))
        assert grid.to_string() == "# \n  "

    def test_array_values(self) -> None:
        grid = Grid.from_string("x \n  ")
        grid.paint_blanks(np.array([["a", "b"], ["c", "d"]]))
        assert grid.to_string() == "xb\ncd"

    @pytest.mark.parametrize("values", ["", "ab"])
    def test_single_value_must_be_one_character(self, values: str) -> None:
        grid = Grid(2, 2)
        with pytest.raises(ConfigurationError):
            grid.paint_blanks(values)
        assert grid == Grid(2, 2)

    def test_array_values_must_be_one_character(self) -> None:
        grid = Grid(2, 1)
        with pytest.raises(ConfigurationError, match="'ab'"):
            grid.paint_blanks(np.array([["a", "ab"]]))
        assert grid.to_string() == "  "


class TestSingleCharacterWrites:
    @pytest.mark.parametrize("char", ["", "ab"])
    def test_set_rejects(self, char: str) -> None:
        grid = Grid(3, 2)
        with pytest.raises(ConfigurationError, match="single character"):
            grid.set(0, 0, char)
        assert grid == Grid(3, 2)

    @pytest.mark.parametrize("char", ["", "ab"])
    def test_set_row_rejects(self, char: str) -> None:
        grid = Grid(3, 2)
        with pytest.raises(ConfigurationError):
            grid.set_row(1, char)
        assert [len(row) for row in grid.rows()] == [3, 3]

    def test_rejected_even_out_of_bounds(self) -> None:
        with pytest.raises(ConfigurationError):
            Grid(1, 1).set(5, 5, "")
