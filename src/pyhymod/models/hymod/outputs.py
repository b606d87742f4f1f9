"""Hymod model flux outputs as arrays.

This module provides the dataclass collecting per-timestep Hymod outputs.
"""

from __future__ import annotations

from dataclasses import dataclass, fields

import numpy as np


@dataclass(frozen=True)
class HymodFluxes:
    """Hymod model outputs as arrays.

    All arrays have the same length as the input forcing data.

    Attributes:
        precip: Water entering the catchment [mm/timestep].
        soil_storage: Soil moisture storage after timestep [mm].
        groundwater_storage: Slow-flow reservoir storage after timestep [mm].
        slow_flow: Outflow of the slow-flow reservoir [mm/timestep].
        runoff: Outflow of the quick-flow cascade [mm/timestep].
        et_loss: Evapotranspiration loss [mm/timestep].
        streamflow: Total simulated streamflow, runoff + slow_flow [mm/timestep].
        mass_balance_status: Kernel status code of each timestep.
    """

    precip: np.ndarray

    # Storages
    soil_storage: np.ndarray
    groundwater_storage: np.ndarray

    # Outflows
    slow_flow: np.ndarray
    runoff: np.ndarray
    et_loss: np.ndarray

    streamflow: np.ndarray
    mass_balance_status: np.ndarray

    def to_dict(self) -> dict[str, np.ndarray]:
        """Convert to dictionary of arrays.

        Returns:
            Dictionary mapping field names to their numpy array values.
        """
        return {field.name: getattr(self, field.name) for field in fields(self)}
