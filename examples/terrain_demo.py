#!/usr/bin/env python3
"""
Simple demo script showing terrain synthesis at increasing roughness.
"""

import numpy as np
from py_terrain.core import (
    BoundingBox,
    SynthesisParameters,
    TerrainSynthesizer,
    compute_statistics,
    create_random_source,
)


def main():
    """Demonstrate terrain synthesis."""
    print("Py-Terrain Synthesis Demo")
    print("=" * 40)

    bbox = BoundingBox(min_x=0, max_x=1000, min_y=0, max_y=1000)

    for roughness in [1.5, 2.0, 3.0]:
        print(f"\nRoughness {roughness}:")
        print("-" * 30)

        params = SynthesisParameters(
            roughness=roughness,
            initial_height=20.0,
            initial_amplitude=150.0,
            bounding_box=bbox,
            iteration_count=7,
        )
        synthesizer = TerrainSynthesizer(params)

        for surface in synthesizer.iter_surfaces(create_random_source("demo", "numpy")):
            stats = compute_statistics(surface.elevation)
            print(
                f"  iteration {surface.iteration}: {surface.shape[0]}x{surface.shape[1]}"
                f"  amplitude {surface.amplitude:7.2f}"
                f"  relief {stats.relief:7.1f}  land {stats.land_fraction * 100:5.1f}%"
            )

        heights = surface.elevation
        bins = [0, 1, 25, 50, 100, 200, 400]
        hist, _ = np.histogram(heights, bins=bins)
        print("  Height distribution:")
        for i in range(len(bins) - 1):
            bar = '#' * int(hist[i] / max(hist.max(), 1) * 20)
            print(f"    {bins[i]:3d}-{bins[i+1]:3d}: {bar} ({hist[i]})")


if __name__ == "__main__":
    main()
