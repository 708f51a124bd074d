"""
Spectral cube access and display values.

Key Components:
    DataSource      - Protocol for read-only cube access
    DataCube        - In-memory cube validated against declared dimensions
    Presentation    - Protocol for whatever draws the spectrum bars
    color_ramp      - Red-to-blue bar colours
    bar_heights     - Bar heights as fractions of the data maximum
"""

from soniverse.cube.source import RGB, DataCube, DataSource
from soniverse.cube.presentation import (
    Presentation,
    bar_heights,
    color_ramp,
    ramp_for,
)

__all__ = [
    "RGB",
    "DataCube",
    "DataSource",
    "Presentation",
    "bar_heights",
    "color_ramp",
    "ramp_for",
]
