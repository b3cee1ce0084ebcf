"""Tests for the Grid module."""

import pytest

from torus_snake.directions import Direction
from torus_snake.grid import Grid, Position, quantize


class TestQuantize:
    def test_rounds_down_to_cell(self):
        assert quantize(59, 20) == 40
        assert quantize(60, 20) == 60
        assert quantize(0.5, 20) == 0

    def test_float_input(self):
        assert quantize(812.7, 20) == 800


class TestGridInit:
    def test_default_dimensions(self):
        grid = Grid()
        assert grid.width == 800
        assert grid.height == 600
        assert grid.cell_size == 20
        assert grid.columns == 40
        assert grid.rows == 30

    def test_dimensions_rounded_to_whole_cells(self):
        grid = Grid(width=815, height=619, cell_size=20)
        assert grid.width == 800
        assert grid.height == 600

    def test_minimum_size_enforced(self):
        with pytest.raises(ValueError, match="at least 4"):
            Grid(width=60, height=200, cell_size=20)
        with pytest.raises(ValueError, match="at least 4"):
            Grid(width=200, height=79, cell_size=20)

    def test_from_viewport_reserves_height(self):
        grid = Grid.from_viewport(1033, 768, cell_size=20, reserved_height=100)
        assert grid.width == 1020
        assert grid.height == 660


class TestWrap:
    def test_inside_unchanged(self):
        grid = Grid(width=200, height=160)
        assert grid.wrap(Position(40, 60)) == (40, 60)

    def test_right_edge_wraps_to_zero(self):
        grid = Grid(width=200, height=160)
        assert grid.wrap(Position(200, 60)) == (0, 60)

    def test_left_edge_wraps_to_last_column(self):
        grid = Grid(width=200, height=160)
        assert grid.wrap(Position(-20, 60)) == (180, 60)

    def test_top_edge_wraps_to_last_row(self):
        grid = Grid(width=200, height=160)
        assert grid.wrap(Position(40, -20)) == (40, 140)

    def test_bottom_edge_wraps_to_zero(self):
        grid = Grid(width=200, height=160)
        assert grid.wrap(Position(40, 160)) == (40, 0)


class TestStep:
    @pytest.mark.parametrize(
        ("start", "direction", "expected"),
        [
            ((40, 0), Direction.UP, (40, 140)),
            ((40, 140), Direction.DOWN, (40, 0)),
            ((0, 60), Direction.LEFT, (180, 60)),
            ((180, 60), Direction.RIGHT, (0, 60)),
            ((40, 60), Direction.RIGHT, (60, 60)),
        ],
    )
    def test_step_wraps_every_edge(self, start, direction, expected):
        grid = Grid(width=200, height=160)
        assert grid.step(Position(*start), direction) == expected


class TestCells:
    def test_in_bounds(self):
        grid = Grid(width=100, height=100)
        assert grid.in_bounds(Position(0, 0))
        assert grid.in_bounds(Position(80, 80))
        assert not grid.in_bounds(Position(100, 0))
        assert not grid.in_bounds(Position(-20, 0))
        assert not grid.in_bounds(Position(10, 0))

    def test_cells_cover_grid(self):
        grid = Grid(width=100, height=80)
        cells = grid.cells()
        assert len(cells) == 5 * 4
        assert len(set(cells)) == len(cells)
        assert all(grid.in_bounds(c) for c in cells)

    def test_to_dict(self):
        d = Grid(width=100, height=80).to_dict()
        assert d == {"width": 100, "height": 80, "cell_size": 20}
