"""Hymod data structures for parameters, state variables and fluxes.

This module defines the core data types used by the Hymod kernel:
- Parameters: The six model parameters, fixed for a catchment
- State: The storages carried from one timestep to the next
- Fluxes: The water leaving the stores during one timestep
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, fields

import numpy as np

from .constants import DEFAULT_BOUNDS, FLUX_SIZE, PARAM_NAMES, STATE_BASE_SIZE, compute_state_size
from .errors import HymodInputError

logger = logging.getLogger(__name__)


def _warn_if_outside_bounds(params: Parameters) -> None:
    """Log warnings for parameters outside typical calibration ranges.

    This does not raise errors - parameters outside bounds may still be valid
    for specific catchments or research purposes.
    """
    for name, (lower, upper) in DEFAULT_BOUNDS.items():
        value = getattr(params, name)
        if value < lower or value > upper:
            logger.warning(
                "Parameter %s=%.4f is outside typical range [%.2f, %.2f]",
                name,
                value,
                lower,
                upper,
            )


def _validate_parameters(params: Parameters) -> None:
    for name in PARAM_NAMES:
        value = getattr(params, name)
        if not math.isfinite(value):
            msg = f"Parameter {name} must be finite, got {value}"
            raise HymodInputError(msg)
    if params.max_storage <= 0.0:
        msg = f"max_storage must be positive, got {params.max_storage}"
        raise HymodInputError(msg)
    if not 0.0 <= params.a <= 1.0:
        msg = f"a must be in [0, 1], got {params.a}"
        raise HymodInputError(msg)
    if params.b <= 0.0:
        msg = f"b must be positive, got {params.b}"
        raise HymodInputError(msg)
    for name in ("ks", "kq"):
        value = getattr(params, name)
        if not 0.0 < value < 1.0:
            msg = f"{name} must be in (0, 1), got {value}"
            raise HymodInputError(msg)


@dataclass(frozen=True)
class Parameters:
    """Hymod calibrated parameters.

    Frozen for the lifetime of a simulation and shared by every timestep of
    one catchment.

    Attributes:
        max_storage: Maximum soil moisture storage [mm].
        a: Fraction of generated excess sent to the quick-flow cascade [-].
        b: Exponent of the storage-excess curve [-].
        ks: Decay coefficient of the slow (groundwater) reservoir [-].
        kq: Decay coefficient of each quick-flow cascade reservoir [-].
        n: Number of reservoirs in the quick-flow Nash cascade.
    """

    max_storage: float  # [mm]
    a: float  # [-]
    b: float  # [-]
    ks: float  # [-]
    kq: float  # [-]
    n: int  # [-]

    def __post_init__(self) -> None:
        n = self.n
        if isinstance(n, bool) or not math.isfinite(n) or n < 0 or int(n) != n:
            msg = f"n must be a non-negative integer, got {n!r}"
            raise HymodInputError(msg)
        object.__setattr__(self, "n", int(n))
        _validate_parameters(self)
        _warn_if_outside_bounds(self)

    def __array__(self, dtype: np.dtype | None = None, copy: bool | None = None) -> np.ndarray:
        """Convert parameters to a 1D array.

        Layout: [max_storage, a, b, ks, kq, n] (6 elements, n as float)
        """
        arr = np.array(
            [self.max_storage, self.a, self.b, self.ks, self.kq, float(self.n)],
            dtype=np.float64,
        )
        if dtype is not None:
            arr = arr.astype(dtype)
        return arr

    @classmethod
    def from_array(cls, arr: np.ndarray) -> Parameters:
        """Reconstruct Parameters from array."""
        if len(arr) != len(PARAM_NAMES):
            msg = f"Expected array of length {len(PARAM_NAMES)}, got {len(arr)}"
            raise HymodInputError(msg)
        return cls(
            max_storage=float(arr[0]),
            a=float(arr[1]),
            b=float(arr[2]),
            ks=float(arr[3]),
            kq=float(arr[4]),
            n=float(arr[5]),
        )


@dataclass
class State:
    """Hymod model state variables.

    The cascade_storages buffer belongs to the caller. The kernel reads from
    and writes into it but never resizes or replaces it, so it must hold at
    least Parameters.n elements and must not be shared with another State
    passed to the same step.

    Attributes:
        storage: Soil moisture storage [mm].
        groundwater_storage: Water held in the slow-flow reservoir [mm].
        cascade_storages: Storage of each quick-flow cascade reservoir [mm].
    """

    storage: float = 0.0
    groundwater_storage: float = 0.0
    cascade_storages: np.ndarray | None = None

    def __post_init__(self) -> None:
        if self.cascade_storages is None:
            self.cascade_storages = np.zeros(0, dtype=np.float64)

    @property
    def n_reservoirs(self) -> int:
        """Length of the cascade storage buffer."""
        return len(self.cascade_storages)

    @classmethod
    def initialize(
        cls,
        params: Parameters,
        storage: float = 0.0,
        groundwater_storage: float = 0.0,
    ) -> State:
        """Create an initial state with an empty cascade sized to params.n."""
        return cls(
            storage=storage,
            groundwater_storage=groundwater_storage,
            cascade_storages=np.zeros(params.n, dtype=np.float64),
        )

    @classmethod
    def allocate_like(cls, state: State) -> State:
        """Create a zeroed state with its own cascade buffer of the same length."""
        return cls(cascade_storages=np.zeros(state.n_reservoirs, dtype=np.float64))

    def total_storage(self, n: int) -> float:
        """Water held in all stores, counting the first n cascade reservoirs."""
        return self.storage + self.groundwater_storage + float(np.sum(self.cascade_storages[:n]))

    def __array__(self, dtype: np.dtype | None = None, copy: bool | None = None) -> np.ndarray:
        """Convert state to a 1D array.

        Layout: [storage, groundwater_storage, cascade_storages (n)]
        """
        n = self.n_reservoirs
        arr = np.empty(compute_state_size(n), dtype=np.float64)
        arr[0] = self.storage
        arr[1] = self.groundwater_storage
        arr[STATE_BASE_SIZE:] = self.cascade_storages
        if dtype is not None:
            arr = arr.astype(dtype)
        return arr

    @classmethod
    def from_array(cls, arr: np.ndarray, n: int) -> State:
        """Reconstruct State from array, copying the cascade storages."""
        expected = compute_state_size(n)
        if len(arr) < expected:
            msg = f"Expected state array of length at least {expected}, got {len(arr)}"
            raise HymodInputError(msg)
        return cls(
            storage=float(arr[0]),
            groundwater_storage=float(arr[1]),
            cascade_storages=np.array(arr[STATE_BASE_SIZE:expected], dtype=np.float64),
        )


@dataclass
class Fluxes:
    """Water leaving the Hymod stores during one timestep.

    Attributes:
        slow_flow: Outflow of the groundwater reservoir [mm].
        runoff: Outflow of the last quick-flow cascade reservoir [mm].
        et_loss: Water lost to evapotranspiration [mm].
    """

    slow_flow: float = 0.0
    runoff: float = 0.0
    et_loss: float = 0.0

    def total(self) -> float:
        return self.slow_flow + self.runoff + self.et_loss

    def to_dict(self) -> dict[str, float]:
        return {field.name: getattr(self, field.name) for field in fields(self)}

    def __array__(self, dtype: np.dtype | None = None, copy: bool | None = None) -> np.ndarray:
        """Layout: [slow_flow, runoff, et_loss]"""
        arr = np.array([self.slow_flow, self.runoff, self.et_loss], dtype=np.float64)
        if dtype is not None:
            arr = arr.astype(dtype)
        return arr

    @classmethod
    def from_array(cls, arr: np.ndarray) -> Fluxes:
        if len(arr) < FLUX_SIZE:
            msg = f"Expected flux array of length at least {FLUX_SIZE}, got {len(arr)}"
            raise HymodInputError(msg)
        return cls(slow_flow=float(arr[0]), runoff=float(arr[1]), et_loss=float(arr[2]))
