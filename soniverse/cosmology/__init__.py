"""
Soniverse cosmology.

Key Components:
    CosmologyModel      - Immutable density/Hubble parameters
    DistancePosition    - Ages and distances at one redshift
    DistanceCalculator  - Numerical integration over the scale factor

Example:
    from soniverse.cosmology import CosmologyModel, DistanceCalculator

    model = CosmologyModel(hubble=0.01, omega_mass=0.3, omega_vac=0.7)
    position = DistanceCalculator().calculate(model, z=2.0)
    print(position.travel_time, position.volume_distance)
"""

from soniverse.cosmology.model import CosmologyModel
from soniverse.cosmology.distance import (
    DistanceCalculator,
    DistancePosition,
    curvature_transform,
)

__all__ = [
    "CosmologyModel",
    "DistanceCalculator",
    "DistancePosition",
    "curvature_transform",
]
