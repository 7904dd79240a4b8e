"""
Bilinear interpolation over a regular 2-D lattice.

The synthesizer rebuilds its lattice from scratch at every refinement step,
so the previous elevation field has to be resampled at the new sample
positions. This module does that explicitly instead of relying on a library
routine.
"""

from typing import Union

import numpy as np

from .exceptions import InvalidParameter
from .grid import Grid

ArrayLike = Union[float, np.ndarray]


class GridInterpolator:
    """
    Evaluate a field stored on a regular lattice at arbitrary points.

    Each query point is located in its surrounding 2x2 cell and the four
    corner values are blended with bilinear weights. Queries that fall on a
    lattice point return the stored value exactly.
    """

    def __init__(self, x_axis: np.ndarray, y_axis: np.ndarray, values: np.ndarray):
        """
        Args:
            x_axis: Strictly increasing column breakpoints
            y_axis: Strictly increasing row breakpoints
            values: Field of shape ``(len(y_axis), len(x_axis))``
        """
        self.x_axis = self._check_axis("x_axis", x_axis)
        self.y_axis = self._check_axis("y_axis", y_axis)

        values = np.asarray(values, dtype=np.float64)
        expected = (len(self.y_axis), len(self.x_axis))
        if values.shape != expected:
            raise InvalidParameter(
                "values", f"shape {values.shape} does not match axes {expected}"
            )
        self.values = values

    @classmethod
    def from_grid(cls, grid: Grid, values: np.ndarray) -> "GridInterpolator":
        return cls(grid.x_axis, grid.y_axis, values)

    @staticmethod
    def _check_axis(name: str, axis) -> np.ndarray:
        axis = np.asarray(axis, dtype=np.float64)
        if axis.ndim != 1 or len(axis) < 2:
            raise InvalidParameter(name, "must be 1-D with at least two breakpoints")
        if not np.all(np.diff(axis) > 0):
            raise InvalidParameter(name, "breakpoints must be strictly increasing")
        return axis

    @staticmethod
    def _locate(axis: np.ndarray, queries: np.ndarray) -> np.ndarray:
        """Index of the lower breakpoint of the interval holding each query."""
        idx = np.searchsorted(axis, queries, side="right") - 1
        # The last breakpoint belongs to the last interval
        return np.clip(idx, 0, len(axis) - 2)

    @staticmethod
    def _check_range(queries: np.ndarray, axis: np.ndarray, label: str) -> None:
        outside = np.isnan(queries) | (queries < axis[0]) | (queries > axis[-1])
        if np.any(outside):
            raise InvalidParameter(
                "query",
                f"{int(np.count_nonzero(outside))} {label} coordinate(s) outside "
                f"[{axis[0]}, {axis[-1]}]",
            )

    def __call__(self, xq: ArrayLike, yq: ArrayLike) -> ArrayLike:
        """
        Interpolate at query coordinates.

        Args:
            xq: Query x coordinates (scalar or array)
            yq: Query y coordinates, broadcastable against ``xq``

        Returns:
            Interpolated values with the broadcast shape of the queries,
            or a float for scalar queries
        """
        xq, yq = np.broadcast_arrays(
            np.asarray(xq, dtype=np.float64), np.asarray(yq, dtype=np.float64)
        )
        self._check_range(xq, self.x_axis, "x")
        self._check_range(yq, self.y_axis, "y")

        col = self._locate(self.x_axis, xq)
        row = self._locate(self.y_axis, yq)

        x0 = self.x_axis[col]
        x1 = self.x_axis[col + 1]
        y0 = self.y_axis[row]
        y1 = self.y_axis[row + 1]
        t = (xq - x0) / (x1 - x0)
        u = (yq - y0) / (y1 - y0)

        v00 = self.values[row, col]
        v01 = self.values[row, col + 1]
        v10 = self.values[row + 1, col]
        v11 = self.values[row + 1, col + 1]

        # A zero weight drops its corner exactly, so lattice points
        # reproduce their stored value.
        result = (
            (1.0 - t) * (1.0 - u) * v00
            + t * (1.0 - u) * v01
            + (1.0 - t) * u * v10
            + t * u * v11
        )
        if result.ndim == 0:
            return float(result)
        return result

    def resample(self, grid: Grid) -> np.ndarray:
        """Interpolate onto every point of another lattice."""
        return self(grid.x, grid.y)
