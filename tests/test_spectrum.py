"""
Tests for spectra and redshift mapping.
"""

import math

import pytest

from soniverse.cosmology import CosmologyModel
from soniverse.errors import MalformedModelError
from soniverse.spectrum import RedshiftMapper, SpectralComponent, Spectrum, redshift_into


class TestSpectralComponent:
    """Tests for single spectral lines."""

    def test_rectangular_form(self):
        """power/phase converts to real/imag parts."""
        c = SpectralComponent(100.0, 2.0, math.pi / 2)
        real, imag = c.to_rectangular()
        assert real == pytest.approx(0.0, abs=1e-12)
        assert imag == pytest.approx(2.0)

    @pytest.mark.parametrize("freq,power,phase", [
        (-1.0, 1.0, 0.0),
        (1.0, -0.5, 0.0),
        (1.0, 1.0, float("nan")),
    ])
    def test_invalid_values_rejected(self, freq, power, phase):
        with pytest.raises(ValueError):
            SpectralComponent(freq, power, phase)


class TestSpectrumOrdering:
    """Tests for the incrementally tracked sorted flag."""

    def test_empty_and_single_are_sorted(self):
        spec = Spectrum()
        assert spec.is_sorted()

        spec.append_component(440.0, 1.0)
        assert spec.is_sorted()

    def test_ascending_appends_stay_sorted(self):
        spec = Spectrum.from_triples([(100.0, 1.0, 0.0), (200.0, 1.0, 0.0), (300.0, 1.0, 0.0)])
        assert spec.is_sorted()

    def test_descending_append_clears_flag(self):
        spec = Spectrum.from_triples([(200.0, 1.0, 0.0), (100.0, 1.0, 0.0)])
        assert not spec.is_sorted()

    def test_equal_frequency_clears_flag(self):
        """Order must be strictly ascending to count as sorted."""
        spec = Spectrum.from_triples([(200.0, 1.0, 0.0), (200.0, 0.5, 0.0)])
        assert not spec.is_sorted()

    def test_flag_stays_cleared(self):
        """A later ascending append does not restore the flag."""
        spec = Spectrum.from_triples([(200.0, 1.0, 0.0), (100.0, 1.0, 0.0)])
        spec.append_component(300.0, 1.0)
        assert not spec.is_sorted()

    def test_ensure_sorted_orders_components(self):
        spec = Spectrum.from_triples([
            (500.0, 1.0, 0.0),
            (120.0, 1.0, 0.0),
            (330.0, 1.0, 0.0),
            (120.0, 1.0, 0.0),
            (90.0, 1.0, 0.0),
        ])
        spec.ensure_sorted()

        freqs = [c.frequency for c in spec]
        assert spec.is_sorted()
        assert all(a <= b for a, b in zip(freqs, freqs[1:]))

    def test_ensure_sorted_is_stable(self):
        """Lines with the same frequency keep their append order."""
        spec = Spectrum.from_triples([
            (300.0, 0.1, 0.0),
            (100.0, 0.2, 0.0),
            (100.0, 0.3, 0.0),
        ])
        spec.ensure_sorted()
        assert [c.power for c in spec] == [0.2, 0.3, 0.1]

    def test_constructed_from_components(self):
        components = [SpectralComponent(300.0, 1.0), SpectralComponent(100.0, 1.0)]
        spec = Spectrum(components)
        assert not spec.is_sorted()
        assert spec.modified

    def test_constructor_copies_components(self):
        components = [SpectralComponent(100.0, 1.0)]
        spec = Spectrum(components)
        components.append(SpectralComponent(50.0, 1.0))
        assert spec.num_components() == 1

    def test_components_are_read_only(self):
        """Changes go through the methods so the revision always moves."""
        spec = Spectrum.from_triples([(100.0, 1.0, 0.0)])
        revision = spec.revision

        with pytest.raises(AttributeError):
            spec.components.append(SpectralComponent(200.0, 1.0))
        with pytest.raises(AttributeError):
            spec.components = []

        assert spec.components == (SpectralComponent(100.0, 1.0, 0.0),)
        assert spec.revision == revision


class TestSpectrumQueries:
    """Tests for min/max frequency and housekeeping."""

    def test_min_max_sort_lazily(self):
        spec = Spectrum.from_triples([(440.0, 1.0, 0.0), (220.0, 0.5, 0.0), (880.0, 0.2, 0.0)])
        assert spec.min_frequency() == 220.0
        assert spec.max_frequency() == 880.0
        assert spec.is_sorted()

    def test_min_on_empty_raises(self):
        with pytest.raises(ValueError):
            Spectrum().min_frequency()
        with pytest.raises(ValueError):
            Spectrum().max_frequency()

    def test_mutations_mark_modified(self):
        spec = Spectrum()
        assert not spec.modified
        revision = spec.revision

        spec.append_component(100.0, 1.0)
        assert spec.modified
        assert spec.revision == revision + 1

        spec.modified = False
        spec.cleanup()
        assert spec.modified
        assert spec.revision == revision + 2

    def test_cleanup_empties(self):
        spec = Spectrum.from_triples([(300.0, 1.0, 0.0), (100.0, 1.0, 0.0)])
        spec.cleanup()
        assert spec.num_components() == 0
        assert len(spec) == 0
        assert spec.is_sorted()

    def test_as_arrays(self):
        spec = Spectrum.from_triples([(100.0, 0.5, 0.25), (200.0, 1.5, 0.0)])
        freqs, powers, phases = spec.as_arrays()
        assert list(freqs) == [100.0, 200.0]
        assert list(powers) == [0.5, 1.5]
        assert list(phases) == [0.25, 0.0]

    def test_as_arrays_empty(self):
        freqs, powers, phases = Spectrum().as_arrays()
        assert len(freqs) == len(powers) == len(phases) == 0

    def test_ids_are_unique(self):
        assert Spectrum().spectrum_id != Spectrum().spectrum_id


class TestRedshiftInto:
    """Tests for frequency scaling by 1/(1+z)."""

    @pytest.fixture
    def source(self):
        return Spectrum.from_triples([
            (440.0, 1.0, 0.0),
            (660.0, 0.5, 1.0),
            (880.0, 0.25, 2.0),
        ])

    def test_zero_is_identity(self, source):
        target = redshift_into(source, 0.0, Spectrum())
        assert [c.frequency for c in target] == [c.frequency for c in source]
        assert [c.power for c in target] == [c.power for c in source]
        assert [c.phase for c in target] == [c.phase for c in source]

    def test_scales_frequencies(self, source):
        target = redshift_into(source, 1.0, Spectrum())
        assert [c.frequency for c in target] == pytest.approx([220.0, 330.0, 440.0])
        assert target.modified

    def test_chained_shifts_compose(self, source):
        z1, z2 = 0.5, 2.0
        step = redshift_into(source, z1, Spectrum())
        twice = redshift_into(step, z2, Spectrum())
        once = redshift_into(source, (1 + z1) * (1 + z2) - 1, Spectrum())

        assert [c.frequency for c in twice] == pytest.approx([c.frequency for c in once])

    def test_blueshift(self, source):
        target = redshift_into(source, -0.5, Spectrum())
        assert target.max_frequency() == pytest.approx(1760.0)

    def test_source_untouched(self, source):
        revision = source.revision
        redshift_into(source, 3.0, Spectrum())
        assert source.revision == revision
        assert source.min_frequency() == 440.0

    def test_target_replaced(self, source):
        target = Spectrum.from_triples([(1.0, 1.0, 0.0)] * 5)
        redshift_into(source, 1.0, target)
        assert target.num_components() == 3

    def test_invalid_redshift(self, source):
        with pytest.raises(ValueError):
            redshift_into(source, -1.0, Spectrum())
        with pytest.raises(ValueError):
            redshift_into(source, -2.5, Spectrum())

    def test_target_must_differ(self, source):
        with pytest.raises(ValueError):
            redshift_into(source, 1.0, source)


class TestRedshiftMapper:
    """Tests for redshifting with a cosmological position."""

    def test_without_model(self):
        source = Spectrum.from_triples([(400.0, 1.0, 0.0)])
        target = Spectrum()
        assert RedshiftMapper().shift(source, 1.0, target) is None
        assert target.min_frequency() == pytest.approx(200.0)

    def test_with_model(self):
        source = Spectrum.from_triples([(400.0, 1.0, 0.0)])
        target = Spectrum()
        position = RedshiftMapper(CosmologyModel()).shift(source, 1.0, target)

        assert position.z == 1.0
        assert position.travel_time > 0
        assert target.min_frequency() == pytest.approx(200.0)

    def test_malformed_model_leaves_target(self):
        """A model without a real expansion rate fails before shifting."""
        model = CosmologyModel(omega_mass=0.0, omega_vac=3.0)
        source = Spectrum.from_triples([(400.0, 1.0, 0.0)])
        target = Spectrum.from_triples([(10.0, 1.0, 0.0)])

        with pytest.raises(MalformedModelError):
            RedshiftMapper(model).shift(source, 1.0, target)

        assert target.min_frequency() == 10.0
