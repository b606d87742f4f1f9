"""Evapotranspiration models pluggable into the Hymod kernel.

The kernel only needs a loss amount for a given soil moisture. Hosts supply
their own model by implementing EvapotranspirationModel; the default
NoEvapotranspiration returns zero.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@runtime_checkable
class EvapotranspirationModel(Protocol):
    """Protocol for evapotranspiration loss models."""

    def evapotranspiration(self, soil_moisture: float) -> float:
        """Return the water lost to evapotranspiration this step.

        Args:
            soil_moisture: Soil moisture after storage excess is removed [mm].

        Returns:
            Evapotranspiration loss [mm].
        """
        ...


@dataclass(frozen=True)
class NoEvapotranspiration:
    """Placeholder model: no water is lost to evapotranspiration."""

    def evapotranspiration(self, soil_moisture: float) -> float:
        return 0.0
