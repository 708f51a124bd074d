"""
Test Fixtures - Deterministic cubes for testing.
"""

from __future__ import annotations

import numpy as np

from soniverse.cube import DataCube


def make_cube_arrays(
    width: int = 4,
    height: int = 3,
    depth: int = 8,
) -> tuple[np.ndarray, list[tuple[int, int, int]]]:
    """
    Create flat cube samples and colours.

    Each spectrum has a single peak whose position depends on the cell,
    so neighbouring cells sound different.

    Returns:
        (samples, colors) in delivery order.
    """
    samples = np.zeros((height, width, depth), dtype=np.float64)
    colors = []
    for y in range(height):
        for x in range(width):
            peak = (x + y * width) % depth
            samples[y, x, :] = 1.0
            samples[y, x, peak] = 200.0
            colors.append((x * 255 // max(width - 1, 1), y * 255 // max(height - 1, 1), 128))
    return samples.reshape(-1), colors


def make_test_cube(width: int = 4, height: int = 3, depth: int = 8) -> DataCube:
    samples, colors = make_cube_arrays(width, height, depth)
    return DataCube.from_arrays(width, height, depth, samples, colors)
