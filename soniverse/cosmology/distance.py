"""
Distance measures for a soniverse position.

Based on Ned Wright's cosmology calculator: ages and distances come from
midpoint-rule integrals of the expansion rate

    adot(a) = sqrt(Ok + Om / a + Ov * a^2)

over the scale factor a, computed in units of 1/H and converted to
seconds (and sound-seconds) at the end.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterable

import numpy as np

from soniverse.cosmology.model import CosmologyModel
from soniverse.errors import MalformedModelError

logger = logging.getLogger(__name__)

DEFAULT_STEPS = 1000
"""Number of midpoint samples per integral."""

SMALL_CURVATURE = 0.1
"""Below this x the series expansion replaces sinh/sin."""


def curvature_transform(omega_k: float, distance: float) -> float:
    """Correct a comoving distance for spatial curvature.

    For x = sqrt(|Ok| * |d|) above 0.1 the ratio is sinh(x)/x (open) or
    sin(x)/x (closed); below it a series is used to avoid cancellation.
    """
    x = math.sqrt(abs(omega_k) * abs(distance))
    if x > SMALL_CURVATURE:
        ratio = math.sinh(x) / x if omega_k > 0 else math.sin(x) / x
        return ratio * distance

    y = x * x
    if omega_k < 0:
        y = -y
    ratio = 1 + y / 6 + y * y / 120
    return ratio * distance


def _expansion_rate(model: CosmologyModel, a: np.ndarray) -> np.ndarray:
    omega_k = model.omega_curvature
    adot_sq = omega_k + model.omega_mass / a + model.omega_vac * a * a
    if not np.all(adot_sq > 0):
        bad = float(a[np.argmin(adot_sq)])
        raise MalformedModelError(
            f"expansion rate is not real at a={bad:.4g}",
            details={
                "omega_mass": model.omega_mass,
                "omega_vac": model.omega_vac,
            },
        )
    return np.sqrt(adot_sq)


@dataclass
class DistancePosition:
    """Cosmological measures at one redshift.

    Everything except ``z`` is derived and only written by ``calculate``.
    Ages and times are in seconds, distances in sound-seconds.
    """

    z: float = 0.0

    age: float = 0.0
    """Age of the soniverse (independent of z, computed alongside)."""

    z_age: float = 0.0
    """Age of the soniverse at z."""

    travel_time: float = 0.0
    """Sound travel time from z, i.e. the delay."""

    comoving_distance: float = 0.0

    angular_distance: float = 0.0
    """Angular-size distance (no direct sonic equivalent)."""

    volume_distance: float = 0.0
    """Inverse-square drop distance (luminosity distance)."""

    def calculate(self, model: CosmologyModel, steps: int = DEFAULT_STEPS) -> None:
        """Recompute every measure for the current z."""
        if self.z <= -1:
            raise ValueError(f"z must be > -1, got {self.z}")
        if steps < 1:
            raise ValueError(f"steps must be >= 1, got {steps}")

        omega_k = model.omega_curvature
        a_z = 1.0 / (1.0 + self.z)
        midpoints = (np.arange(steps, dtype=np.float64) + 0.5) / steps

        # [0, a_z]
        a_early = a_z * midpoints
        # [a_z, 1]
        a_late = a_z + (1.0 - a_z) * midpoints

        # Validate the whole grid before summing anything
        adot_early = _expansion_rate(model, a_early)
        adot_late = _expansion_rate(model, a_late)

        z_age = a_z * float(np.sum(1.0 / adot_early)) / steps
        travel_time = (1.0 - a_z) * float(np.sum(1.0 / adot_late)) / steps
        comoving = (1.0 - a_z) * float(np.sum(1.0 / (a_late * adot_late))) / steps

        age = travel_time + z_age
        angular = a_z * curvature_transform(omega_k, comoving)
        volume = angular / (a_z * a_z)

        h = model.hubble
        self.age = age / h
        self.z_age = z_age / h
        self.travel_time = travel_time / h
        self.comoving_distance = comoving / h
        self.angular_distance = angular / h
        self.volume_distance = volume / h

    def to_dict(self) -> dict[str, float]:
        return {
            "z": self.z,
            "age": self.age,
            "z_age": self.z_age,
            "travel_time": self.travel_time,
            "comoving_distance": self.comoving_distance,
            "angular_distance": self.angular_distance,
            "volume_distance": self.volume_distance,
        }


class DistanceCalculator:
    """Produce DistancePositions for a model.

    Example:
        calc = DistanceCalculator()
        pos = calc.calculate(CosmologyModel(), z=1.0)
        print(pos.travel_time)  # seconds of delay
    """

    def __init__(self, steps: int = DEFAULT_STEPS):
        if steps < 1:
            raise ValueError(f"steps must be >= 1, got {steps}")
        self.steps = steps

    def calculate(self, model: CosmologyModel, z: float) -> DistancePosition:
        position = DistancePosition(z=float(z))
        position.calculate(model, steps=self.steps)
        logger.debug(
            "z=%.4g: age=%.4gs travel=%.4gs comoving=%.4g",
            position.z, position.age, position.travel_time, position.comoving_distance,
        )
        return position

    def sweep(
        self,
        model: CosmologyModel,
        redshifts: Iterable[float],
    ) -> list[DistancePosition]:
        """Calculate a position for each redshift, in order."""
        return [self.calculate(model, z) for z in redshifts]
