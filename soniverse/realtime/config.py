"""
Voice pool configuration for Soniverse.

Defines the buffer pool and fade envelope used for interactive playback.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class VoiceConfig:
    """Configuration for the click-free voice pool.

    Args:
        pool_size: Number of playback slots. More slots cost memory but
            give fewer clicks from fast pointer movement.
        buffer_size: Samples per looped buffer. Too small limits the range
            of pitches; too large can "warble". 512 is fine for ALMA cubes.
        sample_rate: Playback sample rate in Hz.
        fade_time: Fade in/out duration in seconds. Too short clicks.
        gain: Steady-state gain of a sounding slot.

    Example:
        config = VoiceConfig(pool_size=16, fade_time=0.2)
    """

    pool_size: int = 64
    """Number of rotating playback slots."""

    buffer_size: int = 1024
    """Length of each looped buffer in samples."""

    sample_rate: int = 44100
    """Playback sample rate in Hz."""

    fade_time: float = 0.4
    """Fade in/out time in seconds."""

    gain: float = 0.5
    """Target gain once faded in."""

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.pool_size < 2:
            raise ValueError("pool_size must be >= 2")
        if self.buffer_size < 1:
            raise ValueError("buffer_size must be >= 1")
        if self.sample_rate <= 0:
            raise ValueError("sample_rate must be > 0")
        if self.fade_time < 0:
            raise ValueError("fade_time must be >= 0")
        if self.gain < 0:
            raise ValueError("gain must be >= 0")

    @property
    def buffer_seconds(self) -> float:
        """Duration of one loop of a buffer."""
        return self.buffer_size / self.sample_rate
