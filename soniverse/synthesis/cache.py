"""
Render cache - reuse audio for spectra that have not changed.

Provides:
- LRU eviction
- Thread-safe access
- Revision-checked hits (a spectrum mutated since it was cached misses)
- Statistics tracking

Usage:
    cache = RenderCache(max_size=64)

    audio = cache.get(spectrum, length, sample_rate)
    if audio is None:
        audio = render(...)
        cache.put(spectrum, length, sample_rate, audio)
"""

from __future__ import annotations

import logging
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass, field

import numpy as np

from soniverse.spectrum import Spectrum

logger = logging.getLogger(__name__)

CacheKey = tuple[str, int, int]


@dataclass
class CacheStats:
    """Cache statistics."""
    hits: int = 0
    misses: int = 0
    stale: int = 0
    evictions: int = 0
    size: int = 0
    max_size: int = 0

    @property
    def hit_rate(self) -> float:
        total = self.hits + self.misses
        return self.hits / total if total > 0 else 0.0

    def reset(self):
        self.hits = 0
        self.misses = 0
        self.stale = 0
        self.evictions = 0


@dataclass
class CacheEntry:
    """Rendered samples plus the spectrum revision they came from."""
    samples: np.ndarray
    revision: int
    created_at: float = field(default_factory=time.time)
    access_count: int = 0


class RenderCache:
    """LRU cache of rendered buffers keyed by spectrum identity.

    A hit requires the spectrum to be unmodified and at the cached
    revision, and the same length and sample rate.
    """

    def __init__(self, max_size: int = 128):
        self.max_size = max_size
        self._entries: OrderedDict[CacheKey, CacheEntry] = OrderedDict()
        self._lock = threading.Lock()
        self._stats = CacheStats(max_size=max_size)

    @staticmethod
    def make_key(spectrum: Spectrum, length: int, sample_rate: int) -> CacheKey:
        return (spectrum.spectrum_id, int(length), int(sample_rate))

    def get(
        self,
        spectrum: Spectrum,
        length: int,
        sample_rate: int,
    ) -> np.ndarray | None:
        """Return a copy of the cached samples, or None."""
        key = self.make_key(spectrum, length, sample_rate)
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self._stats.misses += 1
                return None

            if spectrum.modified or entry.revision != spectrum.revision:
                del self._entries[key]
                self._stats.stale += 1
                self._stats.misses += 1
                self._stats.size = len(self._entries)
                return None

            self._entries.move_to_end(key)
            entry.access_count += 1
            self._stats.hits += 1
            return entry.samples.copy()

    def put(
        self,
        spectrum: Spectrum,
        length: int,
        sample_rate: int,
        samples: np.ndarray,
    ) -> None:
        key = self.make_key(spectrum, length, sample_rate)
        with self._lock:
            if key in self._entries:
                del self._entries[key]

            while len(self._entries) >= self.max_size:
                oldest = next(iter(self._entries))
                del self._entries[oldest]
                self._stats.evictions += 1

            self._entries[key] = CacheEntry(
                samples=samples.copy(),
                revision=spectrum.revision,
            )
            self._stats.size = len(self._entries)

    def invalidate(self, spectrum: Spectrum) -> int:
        """Drop every entry for ``spectrum``. Returns the number removed."""
        with self._lock:
            keys = [k for k in self._entries if k[0] == spectrum.spectrum_id]
            for key in keys:
                del self._entries[key]
            self._stats.size = len(self._entries)
            return len(keys)

    def clear(self):
        with self._lock:
            self._entries.clear()
            self._stats.size = 0

    @property
    def stats(self) -> CacheStats:
        return self._stats

    def __len__(self) -> int:
        return len(self._entries)
