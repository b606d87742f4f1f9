"""Tests for ForcingData and Resolution."""

import numpy as np
import pandas as pd
import pytest
from pydantic import ValidationError

from pyhymod import ForcingData, Resolution


def _daily(n: int) -> np.ndarray:
    return pd.date_range("2020-01-01", periods=n, freq="D").values


class TestResolution:
    def test_seconds_per_timestep(self) -> None:
        assert Resolution.daily.seconds_per_timestep == 86400.0
        assert Resolution.hourly.seconds_per_timestep == pytest.approx(3600.0)

    def test_only_hourly_and_daily(self) -> None:
        assert [r.value for r in Resolution] == ["hourly", "daily"]
        with pytest.raises(ValueError):
            Resolution("monthly")


class TestForcingData:
    """Tests for the validated forcing container."""

    def test_creates_with_precip_only(self) -> None:
        forcing = ForcingData(time=_daily(3), precip=[1.0, 2.0, 3.0])

        assert len(forcing) == 3
        assert forcing.precip.dtype == np.float64
        assert forcing.resolution == Resolution.daily

    def test_is_frozen(self) -> None:
        forcing = ForcingData(time=_daily(2), precip=np.zeros(2))
        with pytest.raises(ValidationError):
            forcing.precip = np.ones(2)  # type: ignore[misc]

    def test_rejects_nan_precip(self) -> None:
        with pytest.raises(ValidationError, match="NaN"):
            ForcingData(time=_daily(2), precip=[1.0, np.nan])

    def test_rejects_negative_precip(self) -> None:
        with pytest.raises(ValidationError, match="negative"):
            ForcingData(time=_daily(2), precip=[1.0, -1.0])

    def test_rejects_2d_precip(self) -> None:
        with pytest.raises(ValidationError, match="1D"):
            ForcingData(time=_daily(2), precip=np.zeros((2, 1)))

    def test_rejects_length_mismatch(self) -> None:
        with pytest.raises(ValidationError, match="does not match time length"):
            ForcingData(time=_daily(3), precip=np.zeros(2))

    def test_rejects_wrong_spacing(self) -> None:
        with pytest.raises(ValidationError, match="does not match resolution"):
            ForcingData(time=_daily(3), precip=np.zeros(3), resolution=Resolution.hourly)

    def test_monthly_series_rejected(self) -> None:
        """Only sub-daily and daily series are accepted."""
        monthly = pd.date_range("2020-01-01", periods=3, freq="MS").values
        with pytest.raises(ValidationError, match="does not match resolution"):
            ForcingData(time=monthly, precip=np.zeros(3))
