"""
Player session - input events to voices and spectrum display.

Owns everything the interaction needs (cube, voice pool, press state) so
callers can run several independent players side by side.

Input handling is gated by a two-state machine:

    RELEASED --press--> PRESSED --release--> RELEASED

enter/leave/move only mean something while PRESSED. ``leave`` silences
the player without releasing, so re-entering with the button still held
picks the sound back up.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Sequence

import numpy as np

from soniverse.config import Config
from soniverse.cube import DataCube, Presentation, RGB, bar_heights, ramp_for
from soniverse.errors import BackendError
from soniverse.realtime import AudioBackend, VoiceManager
from soniverse.synthesis import AudioRenderer

logger = logging.getLogger(__name__)


class InputState(Enum):
    """Whether the pointer is logically held down."""

    RELEASED = "released"
    PRESSED = "pressed"


class PlayerSession:
    """Interactive cube player.

    Args:
        backend: Audio backend the voices play through.
        config: Render and voice settings. Defaults follow the backend's
            sample rate.
        presentation: Optional spectrum display.
        renderer: Shared renderer; one is created from ``config`` if omitted.
        on_error: Receives per-slot backend failures.

    Example:
        session = PlayerSession(OfflineBackend())
        session.load_cube(width, height, depth, samples, colors)
        session.press(3, 4)
        session.move(4, 4)
        session.release()
    """

    def __init__(
        self,
        backend: AudioBackend,
        config: Config | None = None,
        presentation: Presentation | None = None,
        renderer: AudioRenderer | None = None,
        on_error: Callable[[BackendError], None] | None = None,
    ):
        self.config = config or Config().with_sample_rate(backend.sample_rate)
        self._presentation = presentation
        self._renderer = renderer or AudioRenderer(self.config.render)
        self._voices = VoiceManager(
            self._renderer,
            backend,
            self._resolve,
            config=self.config.voice,
            on_error=on_error,
        )
        self._cube: DataCube | None = None
        self._state = InputState.RELEASED

    @property
    def state(self) -> InputState:
        return self._state

    @property
    def ready(self) -> bool:
        """Whether a cube is loaded."""
        return self._cube is not None

    @property
    def cube(self) -> DataCube | None:
        return self._cube

    @property
    def voices(self) -> VoiceManager:
        return self._voices

    @property
    def playing_index(self) -> int | None:
        return self._voices.active_index

    def load_cube(
        self,
        width: int,
        height: int,
        depth: int,
        samples: Sequence[float] | np.ndarray,
        colors: Sequence[RGB] | np.ndarray,
    ) -> DataCube:
        """Replace the current cube.

        Validation happens first; if it fails the previous cube and any
        sounding voices are left exactly as they were.
        """
        cube = DataCube.from_arrays(width, height, depth, samples, colors)

        self._voices.stop_all()
        self._cube = cube
        self._state = InputState.RELEASED
        if self._presentation:
            self._presentation.clear()
        return cube

    def press(self, x: int, y: int) -> None:
        if not self.ready:
            return
        index = self._cube.spectrum_index(x, y)
        self._state = InputState.PRESSED
        logger.info("press at (%d, %d)", x, y)
        self._play(index)

    def release(self) -> None:
        if not self.ready:
            return
        self._state = InputState.RELEASED
        logger.info("release")
        self._silence()

    def enter(self, x: int, y: int) -> None:
        if self.ready and self._state == InputState.PRESSED:
            self._play(self._cube.spectrum_index(x, y))

    def leave(self) -> None:
        # A release outside the surface is never seen, so silence here
        if self.ready and self._state == InputState.PRESSED:
            self._silence()

    def move(self, x: int, y: int) -> None:
        if self.ready and self._state == InputState.PRESSED:
            self._play(self._cube.spectrum_index(x, y))

    def _resolve(self, index: int) -> np.ndarray:
        if self._cube is None:
            raise RuntimeError("No cube loaded")
        return self._cube.spectrum_at(index)

    def _play(self, index: int) -> None:
        previous = self._voices.active_index
        if self._voices.change_target(index) and index != previous:
            self._draw(index)

    def _silence(self) -> None:
        self._voices.stop_all()
        if self._presentation:
            self._presentation.clear()

    def _draw(self, index: int) -> None:
        if not self._presentation:
            return
        cube = self._cube
        heights = bar_heights(cube.spectrum_at(index), cube.data_max)
        self._presentation.draw_bars(heights.tolist(), ramp_for(cube.depth))
