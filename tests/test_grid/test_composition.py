"""Tests for overlay, clip, append and centring."""

from __future__ import annotations

import pytest

from asciiforge.errors import ConfigurationError
from asciiforge.grid import Grid


class TestOverlay:
    def test_keeps_source_glyphs_by_default(self) -> None:
        canvas = Grid(4, 2)
        canvas.overlay(Grid.from_string("ab\ncd"), row=0, col=1)
        assert canvas.to_string() == " ab \n cd "

    def test_char_override(self) -> None:
        canvas = Grid(3, 1)
        canvas.overlay(Grid.from_string("ab"), col=1, char="#")
        assert canvas.to_string() == " ##"

    @pytest.mark.parametrize("char", ["", "ab"])
    def test_char_override_must_be_one_character(self, char: str) -> None:
        canvas = Grid(3, 1)
        with pytest.raises(ConfigurationError):
            canvas.overlay(Grid.from_string("ab"), char=char)
        assert canvas.to_string() == "   "

    def test_transparent_skips_blank_source_cells(self) -> None:
        canvas = Grid.from_string("xxx\nxxx")
        canvas.overlay(Grid.from_string("a \n b"))
        assert canvas.to_string() == "axx\nxbx"

    def test_opaque_overwrites_every_cell(self) -> None:
        canvas = Grid.from_string("xxx\nxxx")
        canvas.overlay(Grid.from_string("a \n b"), transparent=False)
        assert canvas.to_string() == "a x\n bx"

    def test_source_beyond_edges_is_cut(self) -> None:
        canvas = Grid(3, 3)
        canvas.overlay(Grid.from_string("ab\ncd"), row=2, col=2)
        assert canvas.to_string() == "   \n   \n  a"

    def test_negative_position(self) -> None:
        canvas = Grid(3, 3)
        canvas.overlay(Grid.from_string("ab\ncd"), row=-1, col=-1)
        assert canvas.to_string() == "d  \n   \n   "

    def test_fully_outside_is_noop(self) -> None:
        canvas = Grid(2, 2)
        canvas.overlay(Grid.from_string("ab"), row=5, col=5)
        assert canvas == Grid(2, 2)

    def test_mutates_and_returns_self(self) -> None:
        canvas = Grid(2, 1)
        assert canvas.overlay(Grid.from_string("z")) is canvas
        assert canvas.get(0, 0) == "z"

    def test_source_is_untouched(self) -> None:
        source = Grid.from_string("ab")
        Grid(3, 3).overlay(source, char="#")
        assert source.to_string() == "ab"

    def test_place_at_is_overlay(self) -> None:
        a, b = Grid(4, 4), Grid(4, 4)
        shape = Grid.generate_circle(radius=1)
        a.overlay(shape, row=1, col=1)
        b.place_at(shape, row=1, col=1)
        assert a == b


class TestClip:
    def test_interior_region(self, framed: Grid) -> None:
        assert framed.clip(1, 2, 1, 4).to_string() == "###"

    def test_end_bounds_are_exclusive(self, framed: Grid) -> None:
        assert framed.clip(0, 3, 0, 5) == framed

    def test_bounds_are_clamped(self, framed: Grid) -> None:
        assert framed.clip(-5, 99, 3, 99).to_string() == "**\n#*\n**"

    def test_empty_region_is_single_blank_cell(self, framed: Grid) -> None:
        assert framed.clip(2, 2, 0, 5).to_string() == " "
        assert framed.clip(10, 20, 10, 20).to_string() == " "

    def test_clip_is_a_copy(self, framed: Grid) -> None:
        part = framed.clip(0, 1, 0, 2)
        part.set(0, 0, "X")
        assert framed.get(0, 0) == "*"


class TestAppend:
    def test_right_append_inserts_blank_column(self) -> None:
        result = Grid.from_string("***\n***").right_append(Grid.from_string("##\n##"))
        assert result.to_string() == "*** ##\n*** ##"

    def test_right_append_pads_shorter_side(self) -> None:
        result = Grid.from_string("ab").right_append(Grid.from_string("c\nd\ne"))
        assert result.to_string() == "ab c\n   d\n   e"

    def test_right_append_shorter_right_side(self) -> None:
        result = Grid.from_string("a\nb").right_append(Grid.from_string("cd"))
        assert result.to_string() == "a cd\nb   "

    def test_top_append_puts_other_above(self) -> None:
        result = Grid.from_string("base").top_append(Grid.from_string("up"))
        assert result.to_string() == "up  \nbase"

    def test_bottom_append_puts_other_below(self) -> None:
        result = Grid.from_string("ab").bottom_append(Grid.from_string("wide"))
        assert result.to_string() == "ab  \nwide"

    def test_appends_do_not_mutate_operands(self) -> None:
        left, right = Grid.from_string("a"), Grid.from_string("b")
        left.right_append(right)
        left.top_append(right)
        left.bottom_append(right)
        assert left.to_string() == "a"
        assert right.to_string() == "b"

    def test_append_keeps_blank_rows(self) -> None:
        result = Grid(2, 1).bottom_append(Grid.from_string("xy"))
        assert result.get_bounds() == (2, 2)
        assert result.to_string() == "  \nxy"


class TestCenterHorizontally:
    def test_pads_left_by_floor_half(self) -> None:
        result = Grid.from_string("ab").center_horizontally(7)
        assert result.to_string() == "  ab   "

    def test_even_padding(self) -> None:
        assert Grid.from_string("ab").center_horizontally(6).to_string() == "  ab  "

    def test_narrower_target_keeps_grid(self) -> None:
        grid = Grid.from_string("abcd\nef")
        assert grid.center_horizontally(2) == grid

    def test_all_rows_shift_together(self) -> None:
        result = Grid.from_string("a\nbc").center_horizontally(4)
        assert result.to_string() == " a  \n bc "
