"""
Real-Time Playback

Click-free interactive playback over an external audio backend.

Key Components:
    VoiceManager    - Round-robin pool of fading voice slots
    VoiceConfig     - Pool size, buffer size, fade time, gain
    AudioBackend    - Protocol the pool plays through
    OfflineBackend  - Deterministic in-memory backend with WAV export

Example:
    from soniverse.realtime import OfflineBackend, VoiceManager

    backend = OfflineBackend(sample_rate=44100)
    voices = VoiceManager(renderer, backend, resolve=cube.spectrum_at)
    voices.start(index)
    backend.advance(0.5)
    voices.change_target(other_index)
"""

from soniverse.realtime.backend import (
    AudioBackend,
    AudioBuffer,
    BaseAudioBackend,
    OfflineBackend,
    OfflineVoice,
)
from soniverse.realtime.config import VoiceConfig
from soniverse.realtime.voices import (
    SlotState,
    VoiceManager,
    VoiceSlot,
    VoiceStats,
)

__all__ = [
    "AudioBackend",
    "AudioBuffer",
    "BaseAudioBackend",
    "OfflineBackend",
    "OfflineVoice",
    "VoiceConfig",
    "SlotState",
    "VoiceManager",
    "VoiceSlot",
    "VoiceStats",
]
