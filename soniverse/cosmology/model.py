"""
Soniverse cosmological model.

The model works in "natural" units where the reference speed (the speed
of sound) is 1. Times are in seconds, so wavelengths are in
sound-seconds:

    w_phys = reference_speed * w_nat
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from numbers import Real
from typing import Any, Mapping

from soniverse.errors import MalformedModelError


def _check_density(name: str, value: Any) -> None:
    if value is None:
        raise MalformedModelError(f"{name} is missing", parameter=name)
    if isinstance(value, bool) or not isinstance(value, Real):
        raise MalformedModelError(
            f"{name} must be a number, got {type(value).__name__}",
            parameter=name,
        )
    if not math.isfinite(value):
        raise MalformedModelError(f"{name} must be finite, got {value}", parameter=name)


@dataclass(frozen=True)
class CosmologyModel:
    """Immutable snapshot of the soniverse parameters.

    Args:
        reference_speed: Speed of sound in physical units (m/s). Defaults to
            dry air at STP.
        hubble: Hubble-like constant in 1/s. The default gives an upper
            limit of 100 s.
        omega_mass: Matter density parameter.
        omega_vac: Vacuum energy density parameter.

    Radiation is ignored; it has no sensible equivalent for sound.
    """

    reference_speed: float = 343.2
    hubble: float = 0.01
    omega_mass: float = 0.26
    omega_vac: float = 0.74

    def __post_init__(self) -> None:
        _check_density("omega_mass", self.omega_mass)
        _check_density("omega_vac", self.omega_vac)
        for name in ("hubble", "reference_speed"):
            value = getattr(self, name)
            _check_density(name, value)
            if value <= 0:
                raise MalformedModelError(f"{name} must be > 0, got {value}", parameter=name)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "CosmologyModel":
        """Build a model from a mapping.

        Density parameters are required; only ``hubble`` and
        ``reference_speed`` fall back to the defaults.
        """
        for name in ("omega_mass", "omega_vac"):
            if name not in data:
                raise MalformedModelError(f"{name} is missing", parameter=name)

        kwargs = {
            key: data[key]
            for key in ("reference_speed", "hubble", "omega_mass", "omega_vac")
            if key in data
        }
        return cls(**kwargs)

    @property
    def omega_total(self) -> float:
        return self.omega_mass + self.omega_vac

    @property
    def omega_curvature(self) -> float:
        """Deviation from flatness, 1 - omega_total."""
        return 1.0 - self.omega_total

    @property
    def is_flat(self) -> bool:
        return math.isclose(self.omega_total, 1.0)

    def to_physical_wavelength(self, wavelength: float) -> float:
        """Natural wavelength -> physical wavelength."""
        return wavelength * self.reference_speed

    def to_natural_wavelength(self, wavelength: float) -> float:
        """Physical wavelength -> natural wavelength."""
        return wavelength / self.reference_speed
