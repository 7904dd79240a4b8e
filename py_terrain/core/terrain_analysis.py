"""Summary statistics of a synthesized elevation field."""

from dataclasses import asdict, dataclass
from typing import Dict

import numpy as np

from .exceptions import InvalidParameter


@dataclass(frozen=True)
class TerrainStatistics:
    """Elevation summary of one terrain."""

    min: float
    max: float
    mean: float
    std: float
    relief: float
    land_fraction: float  # share of cells strictly above the floor
    cell_count: int

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


def compute_statistics(elevation: np.ndarray, floor: float = 0.0) -> TerrainStatistics:
    """
    Summarize an elevation field.

    Args:
        elevation: Elevation matrix
        floor: Sea level used to separate land from water

    Returns:
        TerrainStatistics for the field
    """
    heights = np.asarray(elevation, dtype=np.float64)
    if heights.size == 0:
        raise InvalidParameter("elevation", "cannot summarize an empty field")

    low = float(heights.min())
    high = float(heights.max())
    land_cells = int(np.count_nonzero(heights > floor))

    return TerrainStatistics(
        min=low,
        max=high,
        mean=float(heights.mean()),
        std=float(heights.std()),
        relief=high - low,
        land_fraction=land_cells / heights.size,
        cell_count=int(heights.size),
    )
