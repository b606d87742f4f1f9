"""Hymod model subpackage.

Public API for the Hymod conceptual rainfall-runoff model.
"""

from .constants import (
    DEFAULT_BOUNDS,
    MASS_BALANCE_TOLERANCE,
    PARAM_NAMES,
    SECONDS_PER_RESERVOIR_STEP,
    STATE_SIZE,
    SUPPORTED_RESOLUTIONS,
    HymodErrorCode,
    compute_state_size,
)
from .errors import HymodInputError
from .outputs import HymodFluxes
from .run import HymodKernel, hymod, run, step
from .types import Fluxes, Parameters, State

__all__ = [
    "DEFAULT_BOUNDS",
    "Fluxes",
    "HymodErrorCode",
    "HymodFluxes",
    "HymodInputError",
    "HymodKernel",
    "MASS_BALANCE_TOLERANCE",
    "PARAM_NAMES",
    "Parameters",
    "SECONDS_PER_RESERVOIR_STEP",
    "STATE_SIZE",
    "SUPPORTED_RESOLUTIONS",
    "State",
    "compute_state_size",
    "hymod",
    "run",
    "step",
]

# Auto-register with the model registry
import pyhymod.models.hymod as _self
from pyhymod.registry import register

register("hymod", _self)
