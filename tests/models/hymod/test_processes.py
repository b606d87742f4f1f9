"""Tests for Hymod soil moisture process functions."""

import pytest

from pyhymod.models.hymod.processes import (
    partition_excess,
    soil_moisture_after_excess,
    storage_excess_fraction,
)


class TestStorageExcessFraction:
    """Tests for the storage-excess curve."""

    def test_empty_store(self) -> None:
        assert storage_excess_fraction(0.0, 100.0, 2.0) == 0.0

    def test_full_store(self) -> None:
        assert storage_excess_fraction(100.0, 100.0, 2.0) == 1.0

    def test_half_full_quadratic(self) -> None:
        assert storage_excess_fraction(50.0, 100.0, 2.0) == pytest.approx(0.75)

    def test_linear_exponent(self) -> None:
        """With b=1 the fraction equals the relative storage."""
        assert storage_excess_fraction(30.0, 100.0, 1.0) == pytest.approx(0.3)

    def test_increases_with_storage(self) -> None:
        values = [storage_excess_fraction(s, 100.0, 0.5) for s in (10.0, 40.0, 70.0, 95.0)]
        assert values == sorted(values)


class TestPartitionExcess:
    """Tests for the quick/slow split."""

    def test_split_sums_to_fraction(self) -> None:
        runoff_in, slow_in = partition_excess(0.84, 0.3)
        assert runoff_in == pytest.approx(0.252)
        assert slow_in == pytest.approx(0.588)
        assert runoff_in + slow_in == pytest.approx(0.84)

    def test_all_quick(self) -> None:
        assert partition_excess(0.5, 1.0) == (0.5, 0.0)

    def test_all_slow(self) -> None:
        assert partition_excess(0.5, 0.0) == (0.0, 0.5)


class TestSoilMoistureAfterExcess:
    """The fraction is subtracted as a depth."""

    def test_subtracts_fraction_directly(self) -> None:
        assert soil_moisture_after_excess(60.0, 0.84) == pytest.approx(59.16)
