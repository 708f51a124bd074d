"""
AudioRenderer - spectrum -> time-domain samples via an inverse transform.

Two ways to fill the transform bins:

    Index-amplitude mode (render_amplitudes)
        A raw intensity per wavelength index, e.g. one cell of a data cube.
        Index 0 maps to ``min_freq`` and the last index to ``max_freq``;
        each contributes ``amplify * raw ** amp_scale`` to the real part of
        its bin.

    Triple mode (render)
        A Spectrum of (frequency, power, phase) lines, each converted to
        rectangular form and added to its bin. Only frequencies the
        transform can represent are used.

In both modes bin = floor(freq * N / sample_rate) where N is the smallest
power of two covering the requested length. The real part of the inverse
transform, truncated to the requested length, is the audio.
"""

from __future__ import annotations

import logging
import threading

import numpy as np

from soniverse.spectrum import Spectrum
from soniverse.synthesis.cache import RenderCache
from soniverse.synthesis.config import RenderConfig
from soniverse.synthesis.transform import (
    TransformScratch,
    inverse,
    next_power_of_two,
)

logger = logging.getLogger(__name__)


def representable_range(sample_rate: float, transform_size: int) -> tuple[float, float]:
    """Frequencies [min, max) that a transform of this size can hold.

    min is half the frequency of bin 1; max is the frequency of the last bin.
    """
    return (
        0.5 * sample_rate / transform_size,
        (transform_size - 1) * sample_rate / transform_size,
    )


def frequency_bins(
    frequencies: np.ndarray,
    sample_rate: float,
    transform_size: int,
) -> np.ndarray:
    """Map frequencies (Hz) to integer bin indices."""
    return np.floor(frequencies * transform_size / sample_rate).astype(np.int64)


def _check_request(sample_rate: float, requested_length: int) -> None:
    if sample_rate <= 0:
        raise ValueError(f"sample_rate must be > 0, got {sample_rate}")
    if requested_length < 1:
        raise ValueError(f"requested_length must be >= 1, got {requested_length}")


class AudioRenderer:
    """Render spectra into float32 audio buffers.

    The transform scratch buffer is shared between calls and guarded by a
    lock, so concurrent renders serialise on it.

    Args:
        config: Frequency mapping and amplitude settings.

    Example:
        renderer = AudioRenderer()
        spectrum = Spectrum.from_triples([(440.0, 1.0, 0.0)])
        samples = renderer.render(spectrum, sample_rate=44100, requested_length=1024)
    """

    def __init__(self, config: RenderConfig | None = None):
        self.config = config or RenderConfig()
        self._scratch = TransformScratch()
        self._lock = threading.Lock()
        self._cache = RenderCache(max_size=self.config.cache_size)

        self.last_min_freq = 0.0
        self.last_max_freq = 0.0
        self.render_count = 0

    @property
    def cache(self) -> RenderCache:
        return self._cache

    @property
    def scratch(self) -> TransformScratch:
        return self._scratch

    def render(
        self,
        spectrum: Spectrum,
        sample_rate: int,
        requested_length: int,
    ) -> np.ndarray:
        """Render a Spectrum of (frequency, power, phase) lines.

        Returns exactly ``requested_length`` float32 samples. Lines outside
        the representable range are skipped; if none remain the result is
        silence.
        """
        _check_request(sample_rate, requested_length)

        cached = self._cache.get(spectrum, requested_length, sample_rate)
        if cached is not None:
            logger.debug("Render cache hit for spectrum %s", spectrum.spectrum_id)
            return cached

        size = next_power_of_two(requested_length)
        min_freq, max_freq = representable_range(sample_rate, size)
        freqs, powers, phases = spectrum.as_arrays()

        keep = (freqs >= min_freq) & (freqs < max_freq)
        if len(freqs) and not keep.all():
            logger.debug(
                "Skipping %d of %d lines outside [%.2f, %.2f) Hz",
                int(np.count_nonzero(~keep)), len(freqs), min_freq, max_freq,
            )

        bins_idx = frequency_bins(freqs[keep], sample_rate, size)
        real = powers[keep] * np.cos(phases[keep])
        imag = powers[keep] * np.sin(phases[keep])

        samples = self._synthesize(size, bins_idx, real + 1j * imag, requested_length)

        self.last_min_freq = min_freq
        self.last_max_freq = max_freq
        spectrum.modified = False
        self._cache.put(spectrum, requested_length, sample_rate, samples)
        return samples

    def render_amplitudes(
        self,
        values: np.ndarray,
        sample_rate: int,
        requested_length: int,
    ) -> np.ndarray:
        """Render raw intensities indexed by wavelength.

        Negative intensities are treated as zero. Indices whose frequency
        lands beyond the transform are dropped.
        """
        _check_request(sample_rate, requested_length)

        values = np.asarray(values, dtype=np.float64).ravel()
        depth = len(values)
        size = next_power_of_two(requested_length)

        if depth == 0:
            logger.warning("Empty spectrum, rendering silence")
            return np.zeros(requested_length, dtype=np.float32)

        cfg = self.config
        if depth == 1:
            freqs = np.full(1, cfg.min_freq)
        else:
            freqs = cfg.min_freq + (np.arange(depth) / (depth - 1)) * (cfg.max_freq - cfg.min_freq)

        bins_idx = frequency_bins(freqs, sample_rate, size)
        keep = bins_idx < size
        if not keep.all():
            logger.warning(
                "%d of %d indices map above %d Hz and were dropped",
                int(np.count_nonzero(~keep)), depth, sample_rate,
            )

        amplitudes = cfg.amplify * np.power(np.clip(values[keep], 0.0, None), cfg.amp_scale)
        return self._synthesize(size, bins_idx[keep], amplitudes, requested_length)

    def _synthesize(
        self,
        size: int,
        bins_idx: np.ndarray,
        contributions: np.ndarray,
        requested_length: int,
    ) -> np.ndarray:
        with self._lock:
            bins = self._scratch.acquire(size)
            # add.at so lines sharing a bin accumulate
            np.add.at(bins, bins_idx, contributions)
            signal = inverse(bins, norm=self.config.norm)
            self.render_count += 1

        return np.ascontiguousarray(signal.real[:requested_length], dtype=np.float32)
