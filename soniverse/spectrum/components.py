"""
Spectral components and the Spectrum container.

A Spectrum is an unordered bag of (frequency, power, phase) triples that
knows whether it is currently in frequency order and whether it changed
since it was last rendered. Ordering is restored lazily.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Iterator
from uuid import uuid4

import numpy as np


@dataclass(frozen=True)
class SpectralComponent:
    """One spectral line.

    Attributes:
        frequency: Frequency in Hz (>= 0).
        power: Amplitude of the line (>= 0).
        phase: Phase in radians.
    """

    frequency: float
    power: float
    phase: float = 0.0

    def __post_init__(self) -> None:
        if not self.frequency >= 0:
            raise ValueError(f"frequency must be >= 0, got {self.frequency}")
        if not self.power >= 0:
            raise ValueError(f"power must be >= 0, got {self.power}")
        if not math.isfinite(self.phase):
            raise ValueError(f"phase must be finite, got {self.phase}")

    def to_rectangular(self) -> tuple[float, float]:
        """Return (real, imag) for this line."""
        return (
            self.power * math.cos(self.phase),
            self.power * math.sin(self.phase),
        )


class Spectrum:
    """Frequency-domain audio as a sequence of SpectralComponents.

    Mutation contract:
        The spectrum is owned by whoever created it and mutated in place.
        Every mutation sets ``modified`` and bumps ``revision``; only the
        renderer clears ``modified``. ``sorted`` is set True only by
        ``ensure_sorted``/``cleanup`` or for 0/1-length sequences.
        ``components`` is a read-only snapshot; change the spectrum only
        through its methods.

    Example:
        spec = Spectrum()
        spec.append_component(440.0, 1.0, 0.0)
        spec.append_component(220.0, 0.5, 0.0)
        spec.is_sorted()       # False
        spec.min_frequency()   # 220.0, sorts lazily
    """

    def __init__(self, components: Iterable[SpectralComponent] | None = None):
        self._components: list[SpectralComponent] = list(components or ())
        self.sorted = len(self._components) <= 1 or all(
            a.frequency < b.frequency
            for a, b in zip(self._components, self._components[1:])
        )
        self.modified = bool(self._components)
        self.revision = 0
        self.spectrum_id = uuid4().hex

    def __repr__(self) -> str:
        return (
            f"Spectrum(components={len(self._components)}, sorted={self.sorted}, "
            f"revision={self.revision})"
        )

    @property
    def components(self) -> tuple[SpectralComponent, ...]:
        return tuple(self._components)

    @classmethod
    def from_triples(
        cls,
        triples: list[tuple[float, float, float]],
    ) -> "Spectrum":
        """Build a spectrum by appending (frequency, power, phase) triples."""
        spectrum = cls()
        for freq, power, phase in triples:
            spectrum.append_component(freq, power, phase)
        return spectrum

    def __len__(self) -> int:
        return len(self._components)

    def __iter__(self) -> Iterator[SpectralComponent]:
        return iter(self._components)

    def num_components(self) -> int:
        return len(self._components)

    def is_sorted(self) -> bool:
        return self.sorted

    def append_component(
        self,
        frequency: float,
        power: float,
        phase: float = 0.0,
    ) -> None:
        """Append a line without re-checking the whole order.

        The sorted flag survives only if the new frequency is strictly
        above the previous last one.
        """
        component = SpectralComponent(frequency, power, phase)
        self._components.append(component)
        self._touch()

        if len(self._components) == 1:
            self.sorted = True
        elif not self.sorted:
            pass
        elif frequency <= self._components[-2].frequency:
            self.sorted = False

    def ensure_sorted(self) -> None:
        """Stable ascending sort by frequency."""
        if not self.sorted:
            self._components.sort(key=lambda c: c.frequency)
        self.sorted = True

    def min_frequency(self) -> float:
        if not self._components:
            raise ValueError("Spectrum is empty")
        self.ensure_sorted()
        return self._components[0].frequency

    def max_frequency(self) -> float:
        if not self._components:
            raise ValueError("Spectrum is empty")
        self.ensure_sorted()
        return self._components[-1].frequency

    def cleanup(self) -> None:
        """Empty the spectrum ready for a rebuild."""
        self._components = []
        self.sorted = True
        self._touch()

    def as_arrays(self) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        """Return (frequency, power, phase) as float64 arrays."""
        if not self._components:
            empty = np.zeros(0, dtype=np.float64)
            return empty, empty.copy(), empty.copy()

        data = np.array(
            [(c.frequency, c.power, c.phase) for c in self._components],
            dtype=np.float64,
        )
        return data[:, 0], data[:, 1], data[:, 2]

    def _touch(self) -> None:
        self.modified = True
        self.revision += 1
