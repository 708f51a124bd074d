"""
Redshift mapping between spectra.

Frequencies scale by 1/(1+z); power and phase are carried over. Negative
z (a blueshift) is allowed as long as z > -1.
"""

from __future__ import annotations

from soniverse.cosmology import CosmologyModel, DistanceCalculator, DistancePosition
from soniverse.spectrum.components import Spectrum


def _check_redshift(z: float) -> float:
    z = float(z)
    if not z > -1.0:
        raise ValueError(f"z must be > -1, got {z}")
    return z


def redshift_into(source: Spectrum, z: float, target: Spectrum) -> Spectrum:
    """Write ``source`` shifted by ``z`` into ``target``.

    The target is emptied first; the source is never touched. Returns
    the target for chaining.
    """
    z = _check_redshift(z)
    if target is source:
        raise ValueError("target must be a different spectrum from source")

    scale = 1.0 + z
    target.cleanup()
    for component in source:
        target.append_component(
            component.frequency / scale,
            component.power,
            component.phase,
        )
    return target


class RedshiftMapper:
    """Shift spectra, optionally pairing each shift with distance measures.

    Args:
        model: If given, every shift also computes the DistancePosition for
            that z (e.g. ``travel_time`` as a playback delay).
        calculator: Calculator to use with ``model``.

    Example:
        mapper = RedshiftMapper(CosmologyModel())
        position = mapper.shift(source, 1.0, target)
        delay = position.travel_time
    """

    def __init__(
        self,
        model: CosmologyModel | None = None,
        calculator: DistanceCalculator | None = None,
    ):
        self.model = model
        self.calculator = calculator or DistanceCalculator()

    def shift(
        self,
        source: Spectrum,
        z: float,
        target: Spectrum,
    ) -> DistancePosition | None:
        z = _check_redshift(z)
        # Compute the position first so a malformed model leaves target alone
        position = None
        if self.model is not None:
            position = self.calculator.calculate(self.model, z)

        redshift_into(source, z, target)
        return position
