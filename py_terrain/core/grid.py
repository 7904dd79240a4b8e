"""Regular lattices over a rectangular region."""

import math
import numbers
from dataclasses import dataclass
from typing import Tuple

import numpy as np

from .exceptions import InvalidParameter


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned rectangle the terrain is synthesized over."""

    min_x: float
    max_x: float
    min_y: float
    max_y: float

    def __post_init__(self):
        for name in ("min_x", "max_x", "min_y", "max_y"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Real):
                raise InvalidParameter(name, f"must be a real number, got {value!r}")
            if not math.isfinite(value):
                raise InvalidParameter(name, f"must be finite, got {value!r}")
            object.__setattr__(self, name, float(value))

        if not self.min_x < self.max_x:
            raise InvalidParameter(
                "max_x", f"x span is empty ({self.min_x} >= {self.max_x})"
            )
        if not self.min_y < self.max_y:
            raise InvalidParameter(
                "max_y", f"y span is empty ({self.min_y} >= {self.max_y})"
            )

        if not math.isfinite(self.max_x - self.min_x):
            raise InvalidParameter(
                "max_x", f"x span overflows ({self.min_x} to {self.max_x})"
            )
        if not math.isfinite(self.max_y - self.min_y):
            raise InvalidParameter(
                "max_y", f"y span overflows ({self.min_y} to {self.max_y})"
            )

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y


@dataclass(frozen=True)
class Grid:
    """
    Coordinate matrices of a regular lattice.

    ``x`` and ``y`` have shape ``(len(y_axis), len(x_axis))``: rows follow
    the y axis and columns the x axis, as produced by ``numpy.meshgrid``.
    """

    x_axis: np.ndarray
    y_axis: np.ndarray
    x: np.ndarray
    y: np.ndarray

    @classmethod
    def regular(cls, bbox: BoundingBox, intervals: int) -> "Grid":
        """
        Build a lattice with ``intervals`` equal steps along each axis.

        The first and last breakpoints are the box limits exactly.
        """
        if intervals < 1:
            raise InvalidParameter("intervals", f"must be >= 1, got {intervals}")

        x_axis = np.linspace(bbox.min_x, bbox.max_x, intervals + 1)
        y_axis = np.linspace(bbox.min_y, bbox.max_y, intervals + 1)
        x, y = np.meshgrid(x_axis, y_axis)

        for array in (x_axis, y_axis, x, y):
            array.setflags(write=False)
        return cls(x_axis=x_axis, y_axis=y_axis, x=x, y=y)

    @classmethod
    def for_iteration(cls, bbox: BoundingBox, iteration: int) -> "Grid":
        """Lattice of shape ``(2^k + 1, 2^k + 1)`` for iteration ``k``."""
        return cls.regular(bbox, 2 ** iteration)

    @property
    def shape(self) -> Tuple[int, int]:
        return self.x.shape

    @property
    def spacing(self) -> Tuple[float, float]:
        """Column spacing along x and row spacing along y."""
        return (
            float(self.x_axis[1] - self.x_axis[0]),
            float(self.y_axis[1] - self.y_axis[0]),
        )
