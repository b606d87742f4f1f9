"""Input data structures for Hymod time-series runs.

This module defines validated input containers:
- Resolution: Temporal resolution of the forcing series
- ForcingData: Time series forcing data (precipitation)
"""

from __future__ import annotations

from enum import Enum

import numpy as np
from pydantic import BaseModel, ConfigDict, field_validator, model_validator


class Resolution(str, Enum):
    """Temporal resolution of forcing data."""

    hourly = "hourly"
    daily = "daily"

    @property
    def days_per_timestep(self) -> float:
        return {
            Resolution.hourly: 1 / 24,
            Resolution.daily: 1.0,
        }[self]

    @property
    def seconds_per_timestep(self) -> float:
        """Length of one timestep in seconds."""
        return self.days_per_timestep * 86400.0


_RESOLUTION_TOLERANCES: dict[Resolution, tuple[float, float]] = {
    Resolution.hourly: (0.9, 1.1),  # ~54-66 minutes in hours
    Resolution.daily: (22.0, 26.0),  # 22-26 hours
}


def _as_clean_1d(v: np.ndarray, name: str) -> np.ndarray:
    arr = np.asarray(v, dtype=np.float64)
    if arr.ndim != 1:
        msg = f"{name} array must be 1D, got {arr.ndim}D"
        raise ValueError(msg)
    if np.any(np.isnan(arr)):
        msg = f"{name} array contains NaN values"
        raise ValueError(msg)
    return arr


class ForcingData(BaseModel):
    """Validated forcing data for a single catchment.

    All arrays must be 1D with the same length. NaN values are rejected.
    Numeric arrays are coerced to float64.

    Attributes:
        time: Datetime array for each timestep (datetime64).
        precip: Water entering the catchment each timestep [mm/timestep].
        resolution: Temporal resolution of the series.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    time: np.ndarray  # datetime64
    precip: np.ndarray  # [mm/timestep]
    resolution: Resolution = Resolution.daily

    @field_validator("time", mode="before")
    @classmethod
    def validate_time(cls, v: np.ndarray) -> np.ndarray:
        """Validate time array: must be 1D and coerced to datetime64."""
        arr = np.asarray(v)
        if arr.ndim != 1:
            msg = f"time array must be 1D, got {arr.ndim}D"
            raise ValueError(msg)
        return arr.astype("datetime64[ns]")

    @field_validator("precip", mode="before")
    @classmethod
    def validate_precip(cls, v: np.ndarray) -> np.ndarray:
        """Validate precip array: 1D float64, no NaN, no negative values."""
        arr = _as_clean_1d(v, "precip")
        if np.any(arr < 0.0):
            msg = "precip array contains negative values"
            raise ValueError(msg)
        return arr

    @model_validator(mode="after")
    def validate_array_lengths(self) -> ForcingData:
        """Ensure all arrays have the same length."""
        n = len(self.time)
        if len(self.precip) != n:
            msg = f"precip length {len(self.precip)} does not match time length {n}"
            raise ValueError(msg)
        return self

    @model_validator(mode="after")
    def validate_time_resolution(self) -> ForcingData:
        if len(self.time) <= 1:
            return self
        median_gap_hours = float(np.median(np.diff(self.time)) / np.timedelta64(1, "h"))
        min_hours, max_hours = _RESOLUTION_TOLERANCES[self.resolution]
        if not (min_hours <= median_gap_hours <= max_hours):
            msg = (
                f"Time spacing (median {median_gap_hours:.1f} hours) does not match "
                f"resolution '{self.resolution.value}' (expected {min_hours}-{max_hours} hours)"
            )
            raise ValueError(msg)
        return self

    def __len__(self) -> int:
        """Return the number of timesteps."""
        return len(self.time)
