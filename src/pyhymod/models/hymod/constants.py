"""Hymod numerical constants.

Fixed values used by the Hymod kernel: parameter names and typical bounds,
the reservoir sub-step length, the mass-balance tolerance, array layout sizes
and the status codes returned across the kernel call boundary.
"""

from enum import IntEnum

from pyhymod.types import Resolution

# Model parameter names in canonical order
PARAM_NAMES: tuple[str, ...] = ("max_storage", "a", "b", "ks", "kq", "n")

# Typical calibration ranges (values outside only log a warning)
DEFAULT_BOUNDS: dict[str, tuple[float, float]] = {
    "max_storage": (1.0, 2000.0),  # Maximum soil moisture storage [mm]
    "a": (0.0, 1.0),  # Quick/slow runoff split [-]
    "b": (0.1, 2.0),  # Storage-excess curve exponent [-]
    "ks": (0.001, 0.1),  # Slow reservoir decay coefficient [-]
    "kq": (0.1, 0.99),  # Quick reservoir decay coefficient [-]
    "n": (1.0, 5.0),  # Number of Nash cascade reservoirs [-]
}

# Internal sub-step of every linear reservoir, independent of the outer dt
SECONDS_PER_RESERVOIR_STEP: float = 86400.0

# Largest tolerated water loss across one step
MASS_BALANCE_TOLERANCE: float = 1e-6

# State layout: [storage, groundwater_storage, cascade_storages (n)]
STATE_BASE_SIZE: int = 2

# Flux layout: [slow_flow, runoff, et_loss]
FLUX_NAMES: tuple[str, ...] = ("slow_flow", "runoff", "et_loss")
FLUX_SIZE: int = len(FLUX_NAMES)


def compute_state_size(n: int = 1) -> int:
    """Compute state array size for a cascade of n reservoirs."""
    return STATE_BASE_SIZE + n


# State vector size for a single-reservoir cascade; use compute_state_size(n) otherwise
STATE_SIZE: int = compute_state_size(1)

SUPPORTED_RESOLUTIONS: tuple[Resolution, ...] = (Resolution.hourly, Resolution.daily)


class HymodErrorCode(IntEnum):
    """Status codes returned by one kernel step."""

    NO_ERROR = 0
    MASS_BALANCE_ERROR = 100
