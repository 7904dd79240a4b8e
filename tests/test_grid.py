"""
Tests for bounding boxes and regular lattices.
"""

import dataclasses

import numpy as np
import pytest

from py_terrain.core.exceptions import InvalidParameter
from py_terrain.core.grid import BoundingBox, Grid


class TestBoundingBox:
    """Test bounding box validation."""

    def test_valid_box(self):
        bbox = BoundingBox(min_x=-10, max_x=30, min_y=5, max_y=7.5)

        assert bbox.width == 40.0
        assert bbox.height == 2.5
        assert isinstance(bbox.min_x, float)

    @pytest.mark.parametrize(
        "kwargs, field",
        [
            (dict(min_x=0, max_x=0, min_y=0, max_y=1), "max_x"),
            (dict(min_x=5, max_x=1, min_y=0, max_y=1), "max_x"),
            (dict(min_x=0, max_x=1, min_y=2, max_y=2), "max_y"),
            (dict(min_x=float("nan"), max_x=1, min_y=0, max_y=1), "min_x"),
            (dict(min_x=0, max_x=float("inf"), min_y=0, max_y=1), "max_x"),
            (dict(min_x=0, max_x=1, min_y="a", max_y=1), "min_y"),
            (dict(min_x=-1e308, max_x=1e308, min_y=0, max_y=1), "max_x"),
            (dict(min_x=0, max_x=1, min_y=-1e308, max_y=1e308), "max_y"),
            (dict(min_x=np.complex128(0), max_x=1, min_y=0, max_y=1), "min_x"),
        ],
    )
    def test_invalid_box_names_field(self, kwargs, field):
        """Malformed boxes are rejected with the offending field."""
        with pytest.raises(InvalidParameter) as excinfo:
            BoundingBox(**kwargs)
        assert excinfo.value.field == field

    def test_box_is_immutable(self):
        bbox = BoundingBox(0, 1, 0, 1)
        with pytest.raises(dataclasses.FrozenInstanceError):
            bbox.min_x = 0.5


class TestGrid:
    """Test regular lattice construction."""

    @pytest.fixture
    def bbox(self):
        return BoundingBox(min_x=0, max_x=100, min_y=0, max_y=100)

    def test_initial_lattice(self, bbox):
        """Iteration 1 is a 3x3 lattice through min, mid and max."""
        grid = Grid.for_iteration(bbox, 1)

        assert grid.shape == (3, 3)
        np.testing.assert_array_equal(grid.x_axis, [0.0, 50.0, 100.0])
        np.testing.assert_array_equal(grid.y_axis, [0.0, 50.0, 100.0])
        np.testing.assert_array_equal(grid.x[0], [0.0, 50.0, 100.0])
        np.testing.assert_array_equal(grid.y[:, 0], [0.0, 50.0, 100.0])

    @pytest.mark.parametrize("iteration", [1, 2, 3, 4, 6])
    def test_shape_law(self, bbox, iteration):
        grid = Grid.for_iteration(bbox, iteration)
        size = 2 ** iteration + 1

        assert grid.shape == (size, size)
        assert grid.x.shape == grid.y.shape == (size, size)

    @pytest.mark.parametrize("iteration", [1, 2, 5, 8])
    def test_endpoints_are_exact(self, iteration):
        """Lattice limits equal the box limits with no rounding."""
        bbox = BoundingBox(min_x=-3.7, max_x=12.1, min_y=0.1, max_y=0.3)
        grid = Grid.for_iteration(bbox, iteration)

        assert grid.x.min() == bbox.min_x
        assert grid.x.max() == bbox.max_x
        assert grid.y.min() == bbox.min_y
        assert grid.y.max() == bbox.max_y

    def test_uniform_spacing(self):
        bbox = BoundingBox(min_x=0, max_x=80, min_y=-20, max_y=20)
        grid = Grid.for_iteration(bbox, 3)

        dx, dy = grid.spacing
        assert dx == pytest.approx(10.0)
        assert dy == pytest.approx(5.0)
        np.testing.assert_allclose(np.diff(grid.x, axis=1), dx)
        np.testing.assert_allclose(np.diff(grid.y, axis=0), dy)
        # Axis-aligned: x constant down columns, y constant along rows
        assert np.all(grid.x == grid.x[0])
        assert np.all(grid.y.T == grid.y[:, 0])

    def test_coarse_points_survive_refinement(self, bbox):
        """Every point of iteration k-1 is a point of iteration k."""
        coarse = Grid.for_iteration(bbox, 2)
        fine = Grid.for_iteration(bbox, 3)

        np.testing.assert_allclose(fine.x_axis[::2], coarse.x_axis)
        np.testing.assert_allclose(fine.y_axis[::2], coarse.y_axis)

    def test_coordinates_are_read_only(self, bbox):
        grid = Grid.for_iteration(bbox, 2)
        with pytest.raises(ValueError):
            grid.x[0, 0] = 1.0

    def test_rejects_zero_intervals(self, bbox):
        with pytest.raises(InvalidParameter):
            Grid.regular(bbox, 0)
