"""
Soniverse - Spectral sonification in an expanding universe of sound.

Architecture:
    DataCube / Spectrum → AudioRenderer → VoiceManager → AudioBackend
    CosmologyModel → DistanceCalculator → RedshiftMapper → Spectrum

Public API (stable):
    PlayerSession       - Interactive cube player (press/move/release)
    AudioRenderer       - Spectrum or raw intensities → float32 samples
    VoiceManager        - Click-free pool of fading playback slots
    Spectrum            - (frequency, power, phase) lines, lazily sorted
    redshift_into       - Frequency-scale a spectrum by 1/(1+z)
    CosmologyModel      - Hubble constant and density parameters
    DistanceCalculator  - Ages and distances at a redshift
    Config              - Render + voice configuration

Submodules:
    spectrum    - SpectralComponent, Spectrum, RedshiftMapper
    synthesis   - Transform primitive, renderer, render cache
    realtime    - Voice pool, backend protocol, OfflineBackend
    cosmology   - CosmologyModel, DistancePosition, DistanceCalculator
    cube        - DataSource/DataCube, colour ramp, bar heights
    player      - PlayerSession, InputState
    testing     - MockAudioBackend, test cubes

Example:
    from soniverse import PlayerSession
    from soniverse.realtime import OfflineBackend

    backend = OfflineBackend(sample_rate=44100)
    session = PlayerSession(backend)
    session.load_cube(width, height, depth, samples, colors)
    session.press(10, 12)
    backend.advance(0.5)
    session.move(11, 12)
    session.release()
    backend.export("session.wav", duration=2.0)

    # Redshift a spectrum and find out how long the sound took to arrive
    from soniverse import CosmologyModel, RedshiftMapper, Spectrum

    source = Spectrum.from_triples([(440.0, 1.0, 0.0), (660.0, 0.5, 0.0)])
    shifted = Spectrum()
    position = RedshiftMapper(CosmologyModel()).shift(source, 1.0, shifted)
    print(position.travel_time)
"""

__version__ = "0.3.0"

from soniverse.config import Config
from soniverse.cosmology import CosmologyModel, DistanceCalculator, DistancePosition
from soniverse.errors import (
    BackendError,
    DimensionMismatchError,
    IndexOutOfRangeError,
    MalformedModelError,
    SoniverseError,
)
from soniverse.player import InputState, PlayerSession
from soniverse.realtime import VoiceManager
from soniverse.spectrum import RedshiftMapper, SpectralComponent, Spectrum, redshift_into
from soniverse.synthesis import AudioRenderer

__all__ = [
    "__version__",
    # Core
    "PlayerSession",
    "InputState",
    "AudioRenderer",
    "VoiceManager",
    "Config",
    # Spectra
    "Spectrum",
    "SpectralComponent",
    "RedshiftMapper",
    "redshift_into",
    # Cosmology
    "CosmologyModel",
    "DistanceCalculator",
    "DistancePosition",
    # Errors
    "SoniverseError",
    "MalformedModelError",
    "DimensionMismatchError",
    "IndexOutOfRangeError",
    "BackendError",
]
