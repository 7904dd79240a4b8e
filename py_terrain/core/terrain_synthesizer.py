"""
Multiresolution terrain synthesis.

The terrain starts as a flat 3x3 lattice. Every iteration doubles the
lattice resolution, resamples the previous elevation field onto it with
bilinear interpolation, adds Gaussian noise whose amplitude shrinks by the
roughness factor, and floors the result at sea level. Coarse structure is
therefore laid down first at large amplitude and finer detail added at
shrinking amplitude.
"""

import math
import numbers
from dataclasses import dataclass
from typing import Iterator, Tuple

import numpy as np
import structlog

from .exceptions import InvalidParameter
from .grid import BoundingBox, Grid
from .interpolation import GridInterpolator
from .random_source import RandomSource

logger = structlog.get_logger()


def _is_real(value) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


@dataclass(frozen=True)
class SynthesisParameters:
    """Inputs of a terrain synthesis run."""

    roughness: float
    initial_height: float
    initial_amplitude: float
    bounding_box: BoundingBox
    iteration_count: int
    clamp: bool = True  # floor negative elevations after every step
    floor: float = 0.0

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        """Raise ``InvalidParameter`` naming the first offending field."""
        for name in ("roughness", "initial_height", "initial_amplitude", "floor"):
            value = getattr(self, name)
            if not _is_real(value):
                raise InvalidParameter(name, f"must be a real number, got {value!r}")
            if not math.isfinite(value):
                raise InvalidParameter(name, f"must be finite, got {value!r}")

        if self.roughness <= 0:
            raise InvalidParameter("roughness", f"must be > 0, got {self.roughness}")
        if not isinstance(self.clamp, (bool, np.bool_)):
            raise InvalidParameter("clamp", f"must be a boolean, got {self.clamp!r}")
        if self.initial_amplitude < 0:
            raise InvalidParameter(
                "initial_amplitude", f"must be >= 0, got {self.initial_amplitude}"
            )
        if not isinstance(self.bounding_box, BoundingBox):
            raise InvalidParameter(
                "bounding_box", f"must be a BoundingBox, got {type(self.bounding_box).__name__}"
            )
        if isinstance(self.iteration_count, bool) or not isinstance(
            self.iteration_count, (int, np.integer)
        ):
            raise InvalidParameter(
                "iteration_count", f"must be an integer, got {self.iteration_count!r}"
            )
        if self.iteration_count < 1:
            raise InvalidParameter(
                "iteration_count", f"must be >= 1, got {self.iteration_count}"
            )


@dataclass(frozen=True)
class TerrainSurface:
    """
    A lattice and its elevation field at one iteration.

    ``amplitude`` is the standard deviation of the noise applied at that
    iteration, 0 for iteration 1 which is never perturbed.
    """

    grid: Grid
    elevation: np.ndarray
    iteration: int
    amplitude: float

    @property
    def shape(self) -> Tuple[int, int]:
        return self.elevation.shape


def clamp_to_floor(elevation: np.ndarray, floor: float = 0.0) -> np.ndarray:
    """Raise every elevation below ``floor`` up to ``floor``."""
    return np.maximum(elevation, floor)


class TerrainSynthesizer:
    """
    Builds a terrain by iterative refine, interpolate, perturb, clamp steps.

    The random source is consumed one draw per cell per refinement step in
    row-major order, so identically seeded sources give identical terrain.
    """

    def __init__(self, params: SynthesisParameters):
        params.validate()
        self.params = params

    def amplitude_at(self, iteration: int) -> float:
        """Perturbation standard deviation applied at ``iteration``."""
        if iteration < 1:
            raise InvalidParameter("iteration", f"must be >= 1, got {iteration}")
        return self.params.initial_amplitude / self.params.roughness ** (iteration - 1)

    def _apply_floor(self, elevation: np.ndarray) -> np.ndarray:
        if not self.params.clamp:
            return elevation
        return clamp_to_floor(elevation, self.params.floor)

    def _freeze(self, grid: Grid, elevation: np.ndarray, iteration: int, amplitude: float) -> TerrainSurface:
        elevation.setflags(write=False)
        return TerrainSurface(
            grid=grid, elevation=elevation, iteration=iteration, amplitude=amplitude
        )

    def initial_surface(self) -> TerrainSurface:
        """Flat 3x3 lattice at the initial height."""
        grid = Grid.for_iteration(self.params.bounding_box, 1)
        elevation = np.full(grid.shape, float(self.params.initial_height))
        return self._freeze(grid, self._apply_floor(elevation), 1, 0.0)

    def refine(
        self, previous: TerrainSurface, amplitude: float, rng: RandomSource
    ) -> TerrainSurface:
        """
        Produce the next surface from ``previous``.

        Args:
            previous: Surface of the preceding iteration (read only)
            amplitude: Noise standard deviation for the new iteration
            rng: Random source

        Returns:
            Surface at ``previous.iteration + 1``
        """
        iteration = previous.iteration + 1
        grid = Grid.for_iteration(self.params.bounding_box, iteration)

        interpolator = GridInterpolator.from_grid(previous.grid, previous.elevation)
        elevation = interpolator.resample(grid)
        elevation = elevation + rng.normal(amplitude, grid.shape)

        below = int(np.count_nonzero(elevation < self.params.floor))
        elevation = self._apply_floor(elevation)

        logger.debug(
            "Refined terrain",
            iteration=iteration,
            shape=grid.shape,
            amplitude=amplitude,
            below_floor=below,
            clamped=self.params.clamp,
        )
        return self._freeze(grid, elevation, iteration, amplitude)

    def iter_surfaces(self, rng: RandomSource) -> Iterator[TerrainSurface]:
        """Yield the surface of every iteration, starting with iteration 1."""
        if rng is None:
            raise InvalidParameter("rng", "a random source is required")

        surface = self.initial_surface()
        yield surface

        amplitude = float(self.params.initial_amplitude)
        for _ in range(2, self.params.iteration_count + 1):
            amplitude = amplitude / self.params.roughness
            surface = self.refine(surface, amplitude, rng)
            yield surface

    def synthesize(self, rng: RandomSource) -> TerrainSurface:
        """Run every iteration and return the final surface."""
        if rng is None:
            raise InvalidParameter("rng", "a random source is required")

        surface = None
        for surface in self.iter_surfaces(rng):
            pass

        logger.info(
            "Terrain synthesized",
            iterations=self.params.iteration_count,
            shape=surface.shape,
            max_elevation=float(surface.elevation.max()),
        )
        return surface


def synthesize(
    roughness: float,
    initial_height: float,
    initial_amplitude: float,
    min_x: float,
    max_x: float,
    min_y: float,
    max_y: float,
    iteration_count: int,
    rng: RandomSource,
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Synthesize a terrain and return its coordinate and elevation matrices.

    All three matrices have shape ``(2^iteration_count + 1,) * 2``.

    Raises:
        InvalidParameter: If any input violates a precondition
    """
    params = SynthesisParameters(
        roughness=roughness,
        initial_height=initial_height,
        initial_amplitude=initial_amplitude,
        bounding_box=BoundingBox(min_x=min_x, max_x=max_x, min_y=min_y, max_y=max_y),
        iteration_count=iteration_count,
    )
    surface = TerrainSynthesizer(params).synthesize(rng)
    return surface.grid.x, surface.grid.y, surface.elevation
