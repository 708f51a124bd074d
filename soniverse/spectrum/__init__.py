"""
Spectral data for Soniverse.

Key Components:
    SpectralComponent   - One (frequency, power, phase) line
    Spectrum            - Lazily sorted collection with dirty tracking
    redshift_into       - Frequency-scale one spectrum into another
    RedshiftMapper      - Redshift paired with distance measures
"""

from soniverse.spectrum.components import SpectralComponent, Spectrum
from soniverse.spectrum.redshift import RedshiftMapper, redshift_into

__all__ = [
    "SpectralComponent",
    "Spectrum",
    "RedshiftMapper",
    "redshift_into",
]
