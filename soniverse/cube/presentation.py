"""
Spectrum display values.

The core decides bar heights and colours; drawing is left to a
Presentation collaborator.
"""

from __future__ import annotations

from typing import Callable, Protocol, Sequence, runtime_checkable

import numpy as np

from soniverse.cube.source import RGB


@runtime_checkable
class Presentation(Protocol):
    """Something that can show a spectrum as coloured bars."""

    def draw_bars(self, values: Sequence[float], color_of: Callable[[int], RGB]) -> None:
        ...

    def clear(self) -> None:
        ...


def color_ramp(index: int, bins: int) -> RGB:
    """Red (low frequency) to blue (high frequency) ramp.

    blue = floor(255 * i / (D - 1)), red = 255 - blue,
    green = 255 - floor((red + blue) / 2). A single bin is red.
    """
    if bins <= 1:
        blue = 0
    else:
        blue = (255 * index) // (bins - 1)
    red = 255 - blue
    green = 255 - (red + blue) // 2
    return red, green, blue


def ramp_for(bins: int) -> Callable[[int], RGB]:
    """Bind ``color_ramp`` to a bin count."""
    return lambda index: color_ramp(index, bins)


def bar_heights(values: Sequence[float] | np.ndarray, data_max: float) -> np.ndarray:
    """Bar heights as fractions of the data maximum, clipped to [0, 1].

    Bars always go down to zero regardless of the data minimum.
    """
    values = np.asarray(values, dtype=np.float64)
    if data_max <= 0:
        return np.zeros_like(values)
    return np.clip(values / data_max, 0.0, 1.0)
