"""
Testing utilities for Soniverse.

Provides:
    MockAudioBackend    - Recording backend with a manual clock and
                          per-slot failure injection
    make_test_cube      - Small deterministic cube for player tests
"""

from soniverse.testing.mock import (
    CallRecord,
    MockAudioBackend,
    MockBackendConfig,
)
from soniverse.testing.fixtures import make_cube_arrays, make_test_cube

__all__ = [
    "CallRecord",
    "MockAudioBackend",
    "MockBackendConfig",
    "make_cube_arrays",
    "make_test_cube",
]
