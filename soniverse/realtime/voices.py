"""
Voice pool with fade envelopes.

Swapping the samples of a playing buffer in place clicks. Instead every
new target gets its own slot: the previous slot fades out while the new
one fades in, and slots are reused round-robin.

Slot lifecycle:

    IDLE -> STARTING -> PLAYING -> STOPPING -> IDLE
                 \\________________/
                  (fade out may begin at any point)

A STOPPING slot reached again by the round robin is cut off and reused at
once; nothing waits for a fade to finish.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Union

import numpy as np

from soniverse.errors import BackendError
from soniverse.realtime.backend import AudioBackend, AudioBuffer
from soniverse.realtime.config import VoiceConfig
from soniverse.spectrum import Spectrum
from soniverse.synthesis import AudioRenderer

logger = logging.getLogger(__name__)

SpectrumSource = Union[np.ndarray, Spectrum]
Resolver = Callable[[int], SpectrumSource]


class SlotState(Enum):
    """Lifecycle state of a voice slot."""

    IDLE = "idle"
    STARTING = "starting"
    PLAYING = "playing"
    STOPPING = "stopping"


@dataclass
class VoiceSlot:
    """One playback unit: a reusable buffer and its gain envelope.

    The envelope is a single linear ramp from ``gain_from`` at
    ``ramp_start`` to ``gain_to`` at ``ramp_end``.
    """

    slot_id: int
    buffer: AudioBuffer
    state: SlotState = SlotState.IDLE
    target: int | None = None
    voice: Any = None

    gain_from: float = 0.0
    gain_to: float = 0.0
    ramp_start: float = 0.0
    ramp_end: float = 0.0

    @property
    def is_idle(self) -> bool:
        return self.state == SlotState.IDLE

    def gain_at(self, now: float) -> float:
        if now >= self.ramp_end or self.ramp_end <= self.ramp_start:
            return self.gain_to
        if now <= self.ramp_start:
            return self.gain_from
        frac = (now - self.ramp_start) / (self.ramp_end - self.ramp_start)
        return self.gain_from + frac * (self.gain_to - self.gain_from)

    def set_ramp(self, gain_from: float, gain_to: float, start: float, end: float) -> None:
        self.gain_from = gain_from
        self.gain_to = gain_to
        self.ramp_start = start
        self.ramp_end = end

    def reset(self) -> None:
        self.state = SlotState.IDLE
        self.target = None
        self.voice = None
        self.set_ramp(0.0, 0.0, 0.0, 0.0)


@dataclass
class VoiceStats:
    """Counters for monitoring the pool."""

    renders: int = 0
    starts: int = 0
    stops: int = 0
    preemptions: int = 0
    failures: int = 0
    errors: deque[BackendError] = field(default_factory=lambda: deque(maxlen=100))
    """Most recent slot failures."""


class VoiceManager:
    """Round-robin pool of fading voices.

    Args:
        renderer: Renders the audio for each new target.
        backend: Realtime audio backend the slots play through.
        resolve: Maps a target index to its spectral content: a numpy array
            of raw intensities (index-amplitude mode) or a Spectrum.
        config: Pool size, buffer size, fade time and gain.
        on_error: Called with a BackendError when a slot fails.

    Example:
        voices = VoiceManager(renderer, backend, resolve=cube.spectrum_at)
        voices.start(index)          # fade in
        voices.change_target(other)  # cross-fade to another slot
        voices.stop_all()            # fade everything out
    """

    def __init__(
        self,
        renderer: AudioRenderer,
        backend: AudioBackend,
        resolve: Resolver,
        config: VoiceConfig | None = None,
        on_error: Callable[[BackendError], None] | None = None,
    ):
        self._renderer = renderer
        self._backend = backend
        self._resolve = resolve
        self._config = config or VoiceConfig(sample_rate=backend.sample_rate)
        self._on_error = on_error

        if self._config.sample_rate != backend.sample_rate:
            raise ValueError(
                f"config sample rate {self._config.sample_rate} != "
                f"backend {backend.sample_rate}"
            )

        # Buffers live as long as the pool
        self._slots = [
            VoiceSlot(
                slot_id=i,
                buffer=backend.create_buffer(self._config.buffer_size, slot_id=i),
            )
            for i in range(self._config.pool_size)
        ]
        self._cursor = -1
        self._active_index: int | None = None
        self._stats = VoiceStats()

    @property
    def config(self) -> VoiceConfig:
        return self._config

    @property
    def slots(self) -> list[VoiceSlot]:
        return self._slots

    @property
    def stats(self) -> VoiceStats:
        return self._stats

    @property
    def active_index(self) -> int | None:
        """Target currently sounding, or None."""
        return self._active_index

    @property
    def active_slot(self) -> VoiceSlot | None:
        if self._cursor < 0 or self._active_index is None:
            return None
        return self._slots[self._cursor]

    def set_resolver(self, resolve: Resolver) -> None:
        self._resolve = resolve

    def start(self, target: int) -> bool:
        """Fade in ``target`` on the next slot, fading out the current one.

        A repeat of the active target is a no-op. Returns True if the
        target is sounding afterwards.
        """
        self.update()
        if target == self._active_index:
            return True

        # Render before touching any slot so a bad index leaves the pool as is
        samples = self._render(target)

        if self._active_index is not None:
            self._fade_out(self._slots[self._cursor])
            self._active_index = None

        self._cursor = (self._cursor + 1) % len(self._slots)
        slot = self._slots[self._cursor]
        if not slot.is_idle:
            self._preempt(slot)

        if not self._fade_in(slot, target, samples):
            return False

        self._active_index = target
        return True

    def change_target(self, target: int) -> bool:
        """Move the sound to ``target``; identical targets are ignored."""
        return self.start(target)

    def stop(self) -> None:
        """Fade out the active slot."""
        self.update()
        slot = self.active_slot
        if slot is not None:
            self._fade_out(slot)
        self._active_index = None

    def stop_all(self) -> None:
        """Fade out every sounding slot.

        Safety net for a missed release. Slots already fading out keep
        their current ramp.
        """
        self.update()
        for slot in self._slots:
            if slot.state in (SlotState.STARTING, SlotState.PLAYING):
                self._fade_out(slot)
        self._active_index = None

    def update(self, now: float | None = None) -> None:
        """Advance envelopes whose fade has finished."""
        if now is None:
            now = self._backend.current_time

        for slot in self._slots:
            if slot.state == SlotState.STARTING and now >= slot.ramp_end:
                slot.state = SlotState.PLAYING
                logger.debug("Slot %d playing target %s", slot.slot_id, slot.target)
            elif slot.state == SlotState.STOPPING and now >= slot.ramp_end:
                self._release(slot)

    def _render(self, target: int) -> np.ndarray:
        source = self._resolve(target)
        cfg = self._config
        if isinstance(source, Spectrum):
            samples = self._renderer.render(source, cfg.sample_rate, cfg.buffer_size)
        else:
            samples = self._renderer.render_amplitudes(source, cfg.sample_rate, cfg.buffer_size)
        self._stats.renders += 1
        return samples

    def _fade_in(self, slot: VoiceSlot, target: int, samples: np.ndarray) -> bool:
        now = self._backend.current_time
        end = now + self._config.fade_time
        slot.buffer.fill(samples)

        try:
            slot.voice = self._backend.attach(slot.buffer)
            self._backend.set_gain_at_time(slot.voice, 0.0, now)
            self._backend.start(slot.voice)
            self._backend.set_gain_at_time(slot.voice, self._config.gain, end)
        except Exception as e:
            self._fail(slot, "start", e)
            return False

        slot.state = SlotState.STARTING
        slot.target = target
        slot.set_ramp(0.0, self._config.gain, now, end)
        self._stats.starts += 1
        logger.debug("Slot %d starting target %s", slot.slot_id, target)
        return True

    def _fade_out(self, slot: VoiceSlot) -> None:
        if slot.state not in (SlotState.STARTING, SlotState.PLAYING):
            return
        now = self._backend.current_time
        end = now + self._config.fade_time
        current = slot.gain_at(now)

        try:
            self._backend.set_gain_at_time(slot.voice, current, now)
            self._backend.set_gain_at_time(slot.voice, 0.0, end)
        except Exception as e:
            self._fail(slot, "fade_out", e)
            return

        slot.state = SlotState.STOPPING
        slot.set_ramp(current, 0.0, now, end)
        self._stats.stops += 1
        logger.debug("Slot %d stopping target %s", slot.slot_id, slot.target)

    def _preempt(self, slot: VoiceSlot) -> None:
        logger.debug("Pre-empting slot %d (%s)", slot.slot_id, slot.state.value)
        self._stats.preemptions += 1
        self._release(slot)

    def _release(self, slot: VoiceSlot) -> None:
        """Stop the backend voice and return the slot to IDLE."""
        if slot.voice is not None:
            try:
                self._backend.stop(slot.voice)
            except Exception as e:
                self._fail(slot, "stop", e)
                return
        slot.reset()

    def _fail(self, slot: VoiceSlot, operation: str, cause: Exception) -> None:
        error = BackendError(slot.slot_id, operation, cause)
        logger.warning("Voice slot %d %s failed: %s", slot.slot_id, operation, cause)
        self._stats.failures += 1
        self._stats.errors.append(error)
        # The slot forgets its handle on reset, so silence it first
        if slot.voice is not None and operation != "stop":
            try:
                self._backend.stop(slot.voice)
            except Exception as stop_error:
                logger.warning(
                    "Voice slot %d stop after %s failure also failed: %s",
                    slot.slot_id, operation, stop_error,
                )
        slot.reset()
        if self._on_error:
            self._on_error(error)
