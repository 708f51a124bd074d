"""
Tests for the cosmology model and distance engine.

Closed forms used for checks:
    Einstein-de Sitter (Om=1, Ov=0): age = 2/3, Dc(z) = 2 (1 - sqrt(a))
    Empty (Om=0, Ov=0):              travel = 1 - a, Dc(z) = ln(1 + z)
all in units of 1/H.
"""

import math

import pytest

from soniverse.cosmology import (
    CosmologyModel,
    DistanceCalculator,
    DistancePosition,
    curvature_transform,
)
from soniverse.errors import MalformedModelError


EDS = CosmologyModel(hubble=1.0, omega_mass=1.0, omega_vac=0.0)
EMPTY = CosmologyModel(hubble=1.0, omega_mass=0.0, omega_vac=0.0)


class TestCosmologyModel:
    """Tests for model validation and unit conversion."""

    def test_defaults(self):
        model = CosmologyModel()
        assert model.reference_speed == 343.2
        assert model.hubble == 0.01
        assert model.omega_total == pytest.approx(1.0)
        assert model.is_flat
        assert model.omega_curvature == pytest.approx(0.0, abs=1e-12)

    def test_open_universe_curvature(self):
        assert EMPTY.omega_curvature == 1.0
        assert not EMPTY.is_flat

    @pytest.mark.parametrize("kwargs,parameter", [
        ({"omega_mass": None}, "omega_mass"),
        ({"omega_vac": float("nan")}, "omega_vac"),
        ({"omega_mass": "0.3"}, "omega_mass"),
        ({"omega_vac": True}, "omega_vac"),
        ({"hubble": 0.0}, "hubble"),
        ({"reference_speed": -1.0}, "reference_speed"),
    ])
    def test_malformed(self, kwargs, parameter):
        with pytest.raises(MalformedModelError) as exc:
            CosmologyModel(**kwargs)
        assert exc.value.parameter == parameter

    def test_from_mapping(self):
        model = CosmologyModel.from_mapping({"omega_mass": 0.3, "omega_vac": 0.7, "hubble": 0.02})
        assert model.omega_mass == 0.3
        assert model.hubble == 0.02
        assert model.reference_speed == 343.2

    def test_from_mapping_missing_density(self):
        with pytest.raises(MalformedModelError) as exc:
            CosmologyModel.from_mapping({"omega_mass": 0.3})
        assert exc.value.parameter == "omega_vac"

    def test_wavelength_conversion(self):
        model = CosmologyModel()
        assert model.to_physical_wavelength(2.0) == pytest.approx(686.4)
        assert model.to_natural_wavelength(343.2) == pytest.approx(1.0)
        assert model.to_natural_wavelength(model.to_physical_wavelength(0.37)) == pytest.approx(0.37)


class TestCurvatureTransform:
    """Tests for sin/sinh curvature correction."""

    def test_flat(self):
        assert curvature_transform(0.0, 2.5) == 2.5

    def test_open(self):
        assert curvature_transform(1.0, 1.0) == pytest.approx(math.sinh(1.0))

    def test_closed(self):
        assert curvature_transform(-1.0, 1.0) == pytest.approx(math.sin(1.0))

    @pytest.mark.parametrize("omega_k", [0.01, -0.01])
    def test_small_curvature_series(self, omega_k):
        x = math.sqrt(abs(omega_k) * 0.5)
        exact = math.sinh(x) / x if omega_k > 0 else math.sin(x) / x
        assert curvature_transform(omega_k, 0.5) == pytest.approx(exact * 0.5, rel=1e-9)

    def test_negative_distance(self):
        assert curvature_transform(1.0, -1.0) == pytest.approx(-math.sinh(1.0))


class TestDistancePosition:
    """Tests for ages and distances at a redshift."""

    def test_flat_at_zero(self):
        pos = DistancePosition(z=0.0)
        pos.calculate(CosmologyModel())

        assert pos.age == pos.z_age
        assert pos.travel_time == 0.0
        assert pos.comoving_distance == 0.0
        assert pos.angular_distance == 0.0
        assert pos.volume_distance == 0.0
        assert pos.age > 0

    def test_einstein_de_sitter(self):
        pos = DistanceCalculator().calculate(EDS, 3.0)

        assert pos.age == pytest.approx(2.0 / 3.0, abs=1e-4)
        assert pos.comoving_distance == pytest.approx(1.0, rel=1e-5)
        assert pos.travel_time == pytest.approx(2.0 / 3.0 * (1 - 0.125), rel=1e-5)
        assert pos.angular_distance == pytest.approx(0.25, rel=1e-5)
        assert pos.volume_distance == pytest.approx(4.0, rel=1e-5)

    def test_empty_universe(self):
        pos = DistanceCalculator().calculate(EMPTY, 1.0)

        d = math.log(2.0)
        x = math.sqrt(d)
        assert pos.travel_time == pytest.approx(0.5, rel=1e-9)
        assert pos.comoving_distance == pytest.approx(d, rel=1e-6)
        assert pos.angular_distance == pytest.approx(0.5 * math.sinh(x) / x * d, rel=1e-5)

    def test_scales_with_hubble(self):
        calc = DistanceCalculator()
        slow = calc.calculate(CosmologyModel(hubble=0.5), 2.0)
        fast = calc.calculate(CosmologyModel(hubble=1.0), 2.0)

        assert slow.travel_time == pytest.approx(2 * fast.travel_time)
        assert slow.comoving_distance == pytest.approx(2 * fast.comoving_distance)
        assert slow.age == pytest.approx(2 * fast.age)

    def test_monotonic_in_redshift(self):
        positions = DistanceCalculator().sweep(CosmologyModel(), [0.0, 0.25, 0.5, 1.0, 2.0, 4.0, 8.0])

        travel = [p.travel_time for p in positions]
        comoving = [p.comoving_distance for p in positions]
        z_age = [p.z_age for p in positions]
        assert all(a < b for a, b in zip(travel, travel[1:]))
        assert all(a < b for a, b in zip(comoving, comoving[1:]))
        assert all(a > b for a, b in zip(z_age, z_age[1:]))

    def test_age_is_constant(self):
        """Age of the universe does not depend on where you look."""
        positions = DistanceCalculator().sweep(CosmologyModel(), [0.0, 1.0, 5.0])
        for pos in positions:
            assert pos.age == pytest.approx(positions[0].age, rel=1e-3)

    def test_blueshift(self):
        pos = DistanceCalculator().calculate(CosmologyModel(), -0.5)
        assert pos.travel_time < 0
        assert pos.comoving_distance < 0

    def test_invalid_redshift(self):
        with pytest.raises(ValueError):
            DistanceCalculator().calculate(CosmologyModel(), -1.0)

    def test_no_real_expansion(self):
        model = CosmologyModel(omega_mass=0.0, omega_vac=3.0)
        with pytest.raises(MalformedModelError):
            DistanceCalculator().calculate(model, 1.0)

    def test_invalid_steps(self):
        with pytest.raises(ValueError):
            DistanceCalculator(steps=0)

    def test_to_dict(self):
        data = DistanceCalculator().calculate(CosmologyModel(), 1.0).to_dict()
        assert set(data) == {
            "z", "age", "z_age", "travel_time",
            "comoving_distance", "angular_distance", "volume_distance",
        }
