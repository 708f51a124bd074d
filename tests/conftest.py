"""
Shared fixtures for Soniverse tests.

Provides:
    - A recording mock backend at a low sample rate
    - A small voice pool configuration
    - Deterministic test cubes
    - A presentation that records what it was asked to draw
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

import pytest

from soniverse.cube import RGB
from soniverse.realtime import VoiceConfig
from soniverse.synthesis import AudioRenderer, RenderConfig
from soniverse.testing import MockAudioBackend, make_test_cube


SAMPLE_RATE = 8000


@dataclass
class RecordingPresentation:
    """Presentation that keeps every draw and clear."""

    draws: list[tuple[list[float], list[RGB]]] = field(default_factory=list)
    clears: int = 0

    def draw_bars(self, values, color_of: Callable[[int], RGB]) -> None:
        values = list(values)
        self.draws.append((values, [color_of(i) for i in range(len(values))]))

    def clear(self) -> None:
        self.clears += 1

    @property
    def last_values(self) -> list[float] | None:
        return self.draws[-1][0] if self.draws else None


@pytest.fixture
def backend():
    return MockAudioBackend(sample_rate=SAMPLE_RATE)


@pytest.fixture
def voice_config():
    return VoiceConfig(
        pool_size=4,
        buffer_size=256,
        sample_rate=SAMPLE_RATE,
        fade_time=0.1,
        gain=0.5,
    )


@pytest.fixture
def renderer():
    return AudioRenderer(RenderConfig(min_freq=100.0, max_freq=2000.0))


@pytest.fixture
def cube():
    return make_test_cube(width=4, height=3, depth=8)


@pytest.fixture
def presentation():
    return RecordingPresentation()

