"""
Spectral synthesis.

Key Components:
    AudioRenderer       - Spectrum / intensities -> float32 samples
    RenderConfig        - Frequency mapping and amplitude settings
    RenderCache         - Revision-checked LRU cache of renders
    TransformScratch    - Reusable bin buffer for the inverse transform
"""

from soniverse.synthesis.config import RenderConfig
from soniverse.synthesis.cache import RenderCache, CacheStats
from soniverse.synthesis.renderer import (
    AudioRenderer,
    frequency_bins,
    representable_range,
)
from soniverse.synthesis.transform import (
    TransformScratch,
    forward,
    inverse,
    is_power_of_two,
    next_power_of_two,
)

__all__ = [
    "AudioRenderer",
    "RenderConfig",
    "RenderCache",
    "CacheStats",
    "TransformScratch",
    "forward",
    "inverse",
    "is_power_of_two",
    "next_power_of_two",
    "frequency_bins",
    "representable_range",
]
