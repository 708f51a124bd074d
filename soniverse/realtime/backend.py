"""
Audio Backend - the realtime playback boundary.

The voice pool never touches an audio device. It hands buffers and gain
automation to an AudioBackend and makes no assumption about the
backend's callback timing beyond ordering of its own instructions.

BACKEND CONTRACT:
    Backends MUST:
        - Expose a monotonic ``current_time`` in seconds
        - Loop an attached buffer from ``start`` until ``stop``
        - Treat ``set_gain_at_time`` as an automation point; gain ramps
          linearly from the previous point to this one
    Backends MAY raise from attach/start/stop/set_gain_at_time; the voice
    pool isolates such failures to the slot involved.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

import numpy as np
import soundfile as sf

logger = logging.getLogger(__name__)


@dataclass
class AudioBuffer:
    """Fixed-length mono samples owned by one voice slot."""

    samples: np.ndarray
    sample_rate: int
    slot_id: int = -1

    @property
    def length(self) -> int:
        return len(self.samples)

    @property
    def duration(self) -> float:
        return len(self.samples) / self.sample_rate

    def fill(self, samples: np.ndarray) -> None:
        """Copy ``samples`` in, zero-padding or truncating to fit."""
        n = min(len(samples), len(self.samples))
        self.samples[:n] = samples[:n]
        self.samples[n:] = 0.0


@runtime_checkable
class AudioBackend(Protocol):
    """Protocol for realtime audio backends."""

    @property
    def sample_rate(self) -> int:
        ...

    @property
    def current_time(self) -> float:
        """Backend clock in seconds."""
        ...

    def create_buffer(self, length: int, slot_id: int = -1) -> AudioBuffer:
        ...

    def attach(self, buffer: AudioBuffer) -> Any:
        """Connect a buffer to the output; returns a voice handle."""
        ...

    def set_gain_at_time(self, voice: Any, value: float, time: float) -> None:
        ...

    def start(self, voice: Any) -> None:
        ...

    def stop(self, voice: Any) -> None:
        ...


class BaseAudioBackend(ABC):
    """Base class for audio backends with common functionality."""

    @property
    @abstractmethod
    def sample_rate(self) -> int:
        ...

    @property
    @abstractmethod
    def current_time(self) -> float:
        ...

    def create_buffer(self, length: int, slot_id: int = -1) -> AudioBuffer:
        """Allocate a silent buffer at the backend sample rate."""
        if length < 1:
            raise ValueError(f"length must be >= 1, got {length}")
        return AudioBuffer(
            samples=np.zeros(length, dtype=np.float32),
            sample_rate=self.sample_rate,
            slot_id=slot_id,
        )

    @abstractmethod
    def attach(self, buffer: AudioBuffer) -> Any:
        ...

    @abstractmethod
    def set_gain_at_time(self, voice: Any, value: float, time: float) -> None:
        ...

    @abstractmethod
    def start(self, voice: Any) -> None:
        ...

    @abstractmethod
    def stop(self, voice: Any) -> None:
        ...


@dataclass
class OfflineVoice:
    """One attached buffer and its automation, as seen by OfflineBackend."""

    voice_id: int
    samples: np.ndarray
    gain_points: list[tuple[float, float]] = field(default_factory=list)
    started_at: float | None = None
    stopped_at: float | None = None

    def gain_at(self, times: np.ndarray) -> np.ndarray:
        """Linear interpolation through the automation points."""
        if not self.gain_points:
            return np.ones_like(times)
        points = sorted(self.gain_points, key=lambda p: p[0])
        return np.interp(
            times,
            [p[0] for p in points],
            [p[1] for p in points],
        )


class OfflineBackend(BaseAudioBackend):
    """Deterministic backend that mixes into memory.

    The clock only moves when ``advance`` is called, which makes it
    suitable for tests and for rendering interaction scripts to a file.

    Example:
        backend = OfflineBackend(sample_rate=44100)
        voices = VoiceManager(renderer, backend, resolve)
        voices.start(0)
        backend.advance(1.0)
        voices.stop()
        backend.advance(1.0)
        backend.export("out.wav", duration=2.0)
    """

    def __init__(self, sample_rate: int = 44100):
        if sample_rate <= 0:
            raise ValueError("sample_rate must be > 0")
        self._sample_rate = sample_rate
        self._time = 0.0
        self._voices: dict[int, OfflineVoice] = {}
        self._next_id = 0

    @property
    def sample_rate(self) -> int:
        return self._sample_rate

    @property
    def current_time(self) -> float:
        return self._time

    @property
    def voices(self) -> dict[int, OfflineVoice]:
        return self._voices

    def advance(self, seconds: float) -> float:
        """Move the clock forward; returns the new time."""
        if seconds < 0:
            raise ValueError("cannot move the clock backwards")
        self._time += seconds
        return self._time

    def attach(self, buffer: AudioBuffer) -> int:
        if buffer.sample_rate != self._sample_rate:
            raise ValueError(
                f"buffer sample rate {buffer.sample_rate} != backend {self._sample_rate}"
            )
        voice_id = self._next_id
        self._next_id += 1
        self._voices[voice_id] = OfflineVoice(
            voice_id=voice_id,
            samples=buffer.samples.copy(),
        )
        return voice_id

    def _voice(self, voice: int) -> OfflineVoice:
        try:
            return self._voices[voice]
        except KeyError:
            raise KeyError(f"Unknown voice {voice}") from None

    def set_gain_at_time(self, voice: int, value: float, time: float) -> None:
        self._voice(voice).gain_points.append((float(time), float(value)))

    def start(self, voice: int) -> None:
        self._voice(voice).started_at = self._time

    def stop(self, voice: int) -> None:
        v = self._voice(voice)
        if v.started_at is not None and v.stopped_at is None:
            v.stopped_at = self._time

    def mixdown(self, duration: float, start: float = 0.0) -> np.ndarray:
        """Mix every voice over [start, start + duration) seconds."""
        n = int(round(duration * self._sample_rate))
        times = start + np.arange(n, dtype=np.float64) / self._sample_rate
        out = np.zeros(n, dtype=np.float64)

        for voice in self._voices.values():
            if voice.started_at is None or len(voice.samples) == 0:
                continue
            active = times >= voice.started_at
            if voice.stopped_at is not None:
                active &= times < voice.stopped_at
            if not active.any():
                continue

            offsets = np.round((times - voice.started_at) * self._sample_rate).astype(np.int64)
            looped = voice.samples[np.mod(offsets, len(voice.samples))]
            out += np.where(active, looped * voice.gain_at(times), 0.0)

        return out.astype(np.float32)

    def export(self, path: str | Path, duration: float, start: float = 0.0) -> Path:
        """Write the mixdown to an audio file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        audio = self.mixdown(duration, start=start)
        peak = float(np.max(np.abs(audio))) if len(audio) else 0.0
        if peak > 1.0:
            logger.warning("Mixdown peaks at %.2f; output will clip", peak)
        sf.write(str(path), audio, self._sample_rate)
        logger.info("Exported %.2fs of audio to %s", duration, path)
        return path
