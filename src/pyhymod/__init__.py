"""pyhymod hydrological modeling package.

The Hymod conceptual rainfall-runoff kernel: a soil moisture store with a
storage-excess runoff curve, a Nash cascade of linear reservoirs for quick
flow and a single linear reservoir for slow flow.
"""

import pyhymod.models.hymod  # noqa: F401 - triggers auto-registration
from pyhymod.et import EvapotranspirationModel, NoEvapotranspiration
from pyhymod.models.hymod import (
    Fluxes,
    HymodErrorCode,
    HymodFluxes,
    HymodInputError,
    HymodKernel,
    Parameters,
    State,
    hymod,
    run,
    step,
)
from pyhymod.outputs import ModelOutput
from pyhymod.processes import LinearReservoir
from pyhymod.registry import get_model, get_model_info, list_models
from pyhymod.types import ForcingData, Resolution

__all__ = [
    "EvapotranspirationModel",
    "Fluxes",
    "ForcingData",
    "HymodErrorCode",
    "HymodFluxes",
    "HymodInputError",
    "HymodKernel",
    "LinearReservoir",
    "ModelOutput",
    "NoEvapotranspiration",
    "Parameters",
    "Resolution",
    "State",
    "get_model",
    "get_model_info",
    "hymod",
    "list_models",
    "run",
    "step",
]
