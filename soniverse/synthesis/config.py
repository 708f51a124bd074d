"""
Render configuration.

Defaults suit the sample ALMA cubes; other data sets may need a different
``amplify``.
"""

from __future__ import annotations

from dataclasses import dataclass

from soniverse.synthesis.transform import NORMS


@dataclass
class RenderConfig:
    """How spectra are turned into transform bins.

    Args:
        amplify: Gain applied to each raw intensity in index-amplitude mode.
        amp_scale: Exponent applied to raw intensities. Above 1 exaggerates
            peaks, below 1 smooths the sound.
        min_freq: Audio frequency (Hz) for spectral index 0.
        max_freq: Audio frequency (Hz) for the last spectral index.
        norm: Normalisation used by the inverse transform.
        cache_size: Maximum cached renders.

    Example:
        config = RenderConfig(amplify=0.01, amp_scale=1.3)
    """

    amplify: float = 0.04
    amp_scale: float = 0.8
    min_freq: float = 50.0
    max_freq: float = 1000.0
    norm: str = "ortho"
    cache_size: int = 128

    def __post_init__(self) -> None:
        if self.min_freq < 0:
            raise ValueError("min_freq must be >= 0")
        if self.max_freq < self.min_freq:
            raise ValueError("max_freq must be >= min_freq")
        if self.amp_scale <= 0:
            raise ValueError("amp_scale must be > 0")
        if self.norm not in NORMS:
            raise ValueError(f"norm must be one of {NORMS}")
        if self.cache_size < 1:
            raise ValueError("cache_size must be >= 1")

    def index_frequency(self, index: int, depth: int) -> float:
        """Audio frequency for spectral index ``index`` of ``depth``."""
        if depth <= 1:
            return self.min_freq
        return self.min_freq + (index / (depth - 1)) * (self.max_freq - self.min_freq)
