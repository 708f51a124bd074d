"""
Discrete frequency transform over power-of-two sample counts.

Thin wrappers over numpy.fft that enforce the power-of-two contract, plus
a reusable scratch buffer for accumulating bins.
"""

from __future__ import annotations

import numpy as np

NORMS = ("backward", "ortho", "forward")


def is_power_of_two(n: int) -> bool:
    return n > 0 and (n & (n - 1)) == 0


def next_power_of_two(n: int) -> int:
    """Smallest power of two >= n."""
    if n < 1:
        raise ValueError(f"n must be >= 1, got {n}")
    return 1 << (int(n) - 1).bit_length()


def _check(size: int, norm: str) -> None:
    if not is_power_of_two(size):
        raise ValueError(f"transform size must be a power of two, got {size}")
    if norm not in NORMS:
        raise ValueError(f"norm must be one of {NORMS}, got {norm!r}")


def forward(samples: np.ndarray, norm: str = "ortho") -> np.ndarray:
    """Time-domain samples -> complex bins."""
    _check(len(samples), norm)
    return np.fft.fft(samples, norm=norm)


def inverse(bins: np.ndarray, norm: str = "ortho") -> np.ndarray:
    """Complex bins -> complex time-domain signal."""
    _check(len(bins), norm)
    return np.fft.ifft(bins, norm=norm)


class TransformScratch:
    """Pre-sized complex bin buffer reused between renders.

    Not thread-safe on its own; the owner serialises access.

    Example:
        scratch = TransformScratch()
        bins = scratch.acquire(1024)   # zeroed
        bins[10] += 1.0
    """

    def __init__(self, size: int = 0):
        self._bins = np.zeros(size, dtype=np.complex128)
        self.allocations = 1 if size else 0

    @property
    def size(self) -> int:
        return len(self._bins)

    def acquire(self, size: int) -> np.ndarray:
        """Return a zeroed buffer of ``size`` bins."""
        if not is_power_of_two(size):
            raise ValueError(f"transform size must be a power of two, got {size}")
        if len(self._bins) != size:
            self._bins = np.zeros(size, dtype=np.complex128)
            self.allocations += 1
        else:
            self._bins.fill(0)
        return self._bins
