"""
Data cube boundary.

The player reads spectra through the DataSource protocol. Parsing cube
files is the caller's job; DataCube only checks that what it is handed
agrees with the declared dimensions.

Layout (matching the flat order cubes are delivered in):

    data index = s + x * depth + y * depth * width
    color index = x + y * width
"""

from __future__ import annotations

import logging
from typing import Protocol, Sequence, runtime_checkable

import numpy as np

from soniverse.errors import DimensionMismatchError, IndexOutOfRangeError

logger = logging.getLogger(__name__)

RGB = tuple[int, int, int]


@runtime_checkable
class DataSource(Protocol):
    """Read-only access to a spectral cube."""

    @property
    def width(self) -> int:
        ...

    @property
    def height(self) -> int:
        ...

    @property
    def depth(self) -> int:
        ...

    def sample(self, x: int, y: int, s: int) -> float:
        ...

    def color(self, x: int, y: int) -> RGB:
        ...


class DataCube:
    """In-memory spectral cube with a colour image.

    Build with ``from_arrays``; the constructor trusts its arrays.

    Example:
        cube = DataCube.from_arrays(2, 1, 3, [0, 1, 2, 3, 4, 5], [(255, 0, 0), (0, 0, 255)])
        index = cube.spectrum_index(1, 0)   # 3
        cube.spectrum_at(index)             # array([3., 4., 5.])
    """

    def __init__(self, values: np.ndarray, colors: np.ndarray):
        if values.ndim != 3:
            raise ValueError("values must have shape (height, width, depth)")
        if colors.shape != values.shape[:2] + (3,):
            raise ValueError("colors must have shape (height, width, 3)")

        self._values = np.array(values, dtype=np.float64)
        self._values.flags.writeable = False
        self._flat = self._values.reshape(-1)
        self._colors = np.array(colors, dtype=np.uint8)
        self._colors.flags.writeable = False

        self._data_min = min(0.0, float(self._flat.min())) if self._flat.size else 0.0
        self._data_max = max(0.0, float(self._flat.max())) if self._flat.size else 0.0

    @classmethod
    def from_arrays(
        cls,
        width: int,
        height: int,
        depth: int,
        samples: Sequence[float] | np.ndarray,
        colors: Sequence[RGB] | np.ndarray,
    ) -> "DataCube":
        """Validate flat data against declared dimensions and build a cube.

        Raises:
            ValueError: A dimension is not a positive integer.
            DimensionMismatchError: Sample or colour counts disagree with the
                declared dimensions.
        """
        for name, value in (("width", width), ("height", height), ("depth", depth)):
            if int(value) != value or value < 1:
                raise ValueError(f"{name} must be a positive integer, got {value}")
        width, height, depth = int(width), int(height), int(depth)

        values = np.asarray(samples, dtype=np.float64).reshape(-1)
        expected = width * height * depth
        if values.size != expected:
            raise DimensionMismatchError("data values", expected, values.size)

        rgb = np.asarray(colors, dtype=np.int64).reshape(-1, 3)
        if len(rgb) != width * height:
            raise DimensionMismatchError("RGB values", width * height, len(rgb))
        if rgb.size and (rgb.min() < 0 or rgb.max() > 255):
            raise ValueError("RGB components must be in 0..255")

        cube = cls(
            values.reshape(height, width, depth),
            rgb.reshape(height, width, 3),
        )
        logger.info("Loaded %dx%dx%d cube (max %.3g)", width, height, depth, cube.data_max)
        return cube

    @property
    def width(self) -> int:
        return self._values.shape[1]

    @property
    def height(self) -> int:
        return self._values.shape[0]

    @property
    def depth(self) -> int:
        return self._values.shape[2]

    @property
    def size(self) -> int:
        return self._flat.size

    @property
    def data_min(self) -> float:
        """Smallest value, never above 0."""
        return self._data_min

    @property
    def data_max(self) -> float:
        return self._data_max

    def _check_cell(self, x: int, y: int) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexOutOfRangeError((x, y), (self.width, self.height))

    def data_index(self, x: int, y: int, s: int = 0) -> int:
        self._check_cell(x, y)
        if not 0 <= s < self.depth:
            raise IndexOutOfRangeError(s, self.depth)
        return s + x * self.depth + y * self.depth * self.width

    def spectrum_index(self, x: int, y: int) -> int:
        """Index of the first element of the spectrum at (x, y)."""
        return self.data_index(x, y, 0)

    def spectrum_at(self, index: int) -> np.ndarray:
        """The ``depth`` values starting at a spectrum index (read-only).

        The index must be the start of a cell, as from ``spectrum_index``.
        """
        if not 0 <= index <= self.size - self.depth or index % self.depth:
            raise IndexOutOfRangeError(index, (0, self.size - self.depth))
        return self._flat[index:index + self.depth]

    def sample(self, x: int, y: int, s: int) -> float:
        return float(self._flat[self.data_index(x, y, s)])

    def color(self, x: int, y: int) -> RGB:
        self._check_cell(x, y)
        r, g, b = self._colors[y, x]
        return int(r), int(g), int(b)
