"""Structured model output combining a time index with model fluxes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

import numpy as np
import pandas as pd

__all__ = ["ModelOutput"]

# Type variable for flux types
F = TypeVar("F")


@dataclass(frozen=True)
class ModelOutput(Generic[F]):
    """Complete model output for one simulation.

    Generic over the flux type F, so each model keeps its own flux container
    while sharing time indexing and DataFrame conversion.

    Attributes:
        time: Datetime array for each timestep.
        fluxes: Model flux outputs (type depends on the model).
    """

    time: np.ndarray
    fluxes: F

    @property
    def streamflow(self) -> np.ndarray:
        """Return the streamflow array from flux outputs."""
        return self.fluxes.streamflow  # type: ignore[attr-defined, return-value]

    def __len__(self) -> int:
        """Return the number of timesteps."""
        return len(self.time)

    def to_dataframe(self) -> pd.DataFrame:
        """Convert to DataFrame with time index.

        Returns:
            DataFrame with all flux outputs and time as index.
        """
        data = self.fluxes.to_dict()  # type: ignore[attr-defined]

        df = pd.DataFrame(data, index=self.time)
        df.index.name = "time"

        return df
