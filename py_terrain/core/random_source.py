"""
Seeded random sources for terrain synthesis.

Randomness is always passed into the synthesizer as an explicit object so a
fixed seed reproduces a terrain bit for bit without any process-wide state.
Two backends are provided:

- ``SeededRandomSource``: Johannes Baagøe's Alea generator with a Box-Muller
  Gaussian on top. Pure Python and portable, one value at a time.
- ``NumpyRandomSource``: NumPy's ``default_rng``. Vectorized, the better
  choice for high iteration counts.
"""

import hashlib
import math
from typing import Optional, Protocol, Tuple, Union

import numpy as np

from .exceptions import InvalidParameter

Seed = Union[str, int, float]


def _uint32(n):
    """Convert to unsigned 32-bit integer."""
    return int(n) & 0xFFFFFFFF


class AleaPRNG:
    """
    Alea PRNG producing uniform floats in [0, 1).

    Seeds may be strings or numbers; an iterable of values is mashed in order.
    """

    def __init__(self, seed):
        self.call_count = 0

        if hasattr(seed, "__iter__") and not isinstance(seed, str):
            args = list(seed)
        else:
            args = [seed]

        mash_n = 0xEFC8249D

        def mash(data):
            nonlocal mash_n
            for char in str(data):
                mash_n = mash_n + ord(char)
                h = 0.02519603282416938 * mash_n
                mash_n = _uint32(h)
                h -= mash_n
                h *= mash_n
                mash_n = _uint32(h)
                h -= mash_n
                mash_n += h * 0x100000000  # 2^32
            return _uint32(mash_n) * 2.3283064365386963e-10  # 2^-32

        self.s0 = mash(" ")
        self.s1 = mash(" ")
        self.s2 = mash(" ")
        self.c = 1

        for arg in args:
            self.s0 -= mash(arg)
            if self.s0 < 0:
                self.s0 += 1
            self.s1 -= mash(arg)
            if self.s1 < 0:
                self.s1 += 1
            self.s2 -= mash(arg)
            if self.s2 < 0:
                self.s2 += 1

    def random(self) -> float:
        """Generate next random number in [0, 1)."""
        self.call_count += 1
        t = 2091639 * self.s0 + self.c * 2.3283064365386963e-10  # 2^-32
        self.s0 = self.s1
        self.s1 = self.s2
        self.c = int(t)
        self.s2 = t - self.c
        return self.s2


class RandomSource(Protocol):
    """Anything that can fill an array with zero-mean Gaussian noise."""

    def normal(self, scale: float, shape: Tuple[int, ...]) -> np.ndarray:
        ...


class SeededRandomSource:
    """
    Gaussian stream built on the Alea generator.

    ``gauss()`` uses the Box-Muller transform and caches the second value of
    each pair, so the sequence of draws only depends on the seed.
    """

    def __init__(self, seed: Seed):
        self.seed = seed
        self._prng = AleaPRNG(seed)
        self._spare: Optional[float] = None

    @property
    def draws(self) -> int:
        """Number of uniform values consumed so far."""
        return self._prng.call_count

    def random(self) -> float:
        """Uniform value in [0, 1)."""
        return self._prng.random()

    def gauss(self) -> float:
        """Standard normal value."""
        if self._spare is not None:
            value, self._spare = self._spare, None
            return value

        # 1 - u keeps the log argument in (0, 1]
        u1 = 1.0 - self._prng.random()
        u2 = self._prng.random()
        radius = math.sqrt(-2.0 * math.log(u1))
        theta = 2.0 * math.pi * u2
        self._spare = radius * math.sin(theta)
        return radius * math.cos(theta)

    def normal(self, scale: float, shape: Tuple[int, ...]) -> np.ndarray:
        """
        Zero-mean Gaussian samples with standard deviation ``scale``.

        Samples are drawn one per element in row-major order.
        """
        size = int(np.prod(shape))
        samples = np.fromiter(
            (self.gauss() for _ in range(size)), dtype=np.float64, count=size
        )
        return samples.reshape(shape) * scale


class NumpyRandomSource:
    """Gaussian stream backed by ``numpy.random.default_rng``."""

    def __init__(self, seed: Seed):
        self.seed = seed
        self._rng = np.random.default_rng(_numeric_seed(seed))

    def random(self) -> float:
        return float(self._rng.random())

    def normal(self, scale: float, shape: Tuple[int, ...]) -> np.ndarray:
        return self._rng.normal(0.0, scale, size=shape)


def _numeric_seed(seed: Seed) -> int:
    """Map any seed value to a non-negative integer for NumPy."""
    if isinstance(seed, int) and not isinstance(seed, bool) and seed >= 0:
        return seed
    digest = hashlib.sha256(str(seed).encode("utf-8")).digest()
    return int.from_bytes(digest[:8], "little")


BACKENDS = {
    "alea": SeededRandomSource,
    "numpy": NumpyRandomSource,
}


def create_random_source(seed: Seed, backend: str = "alea") -> RandomSource:
    """
    Build a seeded random source.

    Args:
        seed: Seed string or number
        backend: ``"alea"`` or ``"numpy"``

    Returns:
        Random source ready to pass to the synthesizer
    """
    try:
        factory = BACKENDS[backend]
    except KeyError:
        raise InvalidParameter(
            "backend", f"unknown random backend {backend!r}, expected one of {sorted(BACKENDS)}"
        ) from None
    return factory(seed)
