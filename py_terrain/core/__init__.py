"""
Core terrain synthesis functionality.
"""

from .exceptions import InvalidParameter
from .grid import BoundingBox, Grid
from .interpolation import GridInterpolator
from .random_source import (
    NumpyRandomSource,
    RandomSource,
    SeededRandomSource,
    create_random_source,
)
from .terrain_synthesizer import (
    SynthesisParameters,
    TerrainSurface,
    TerrainSynthesizer,
    clamp_to_floor,
    synthesize,
)
from .terrain_analysis import TerrainStatistics, compute_statistics
from .visibility import (
    VisibilityLabel,
    VisibilityReport,
    classify_visibility,
    visibility_percentage,
    visibility_report,
)

__all__ = ['InvalidParameter', 'BoundingBox', 'Grid', 'GridInterpolator',
           'NumpyRandomSource', 'RandomSource', 'SeededRandomSource', 'create_random_source',
           'SynthesisParameters', 'TerrainSurface', 'TerrainSynthesizer', 'clamp_to_floor',
           'synthesize', 'TerrainStatistics', 'compute_statistics',
           'VisibilityLabel', 'VisibilityReport', 'classify_visibility',
           'visibility_percentage', 'visibility_report']
