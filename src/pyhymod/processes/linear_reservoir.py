"""Linear reservoir routing element.

A single storage whose outflow is proportional to its content. The decay is
applied once per internal sub-step, so the response over an outer timestep
depends on how many sub-steps (whole and fractional) that timestep spans.
"""

from __future__ import annotations

import math

from numba import njit


@njit(cache=True)
def linear_reservoir_response(
    storage: float,
    max_storage: float,
    coefficient: float,
    seconds_per_step: float,
    inflow: float,
    seconds: float,
) -> tuple[float, float]:
    """Route one outer timestep of inflow through a linear reservoir.

    Storage above max_storage spills straight to the outflow. The remaining
    storage then decays by coefficient once per whole sub-step, and by a
    proportional share of coefficient for the trailing partial sub-step.

    Args:
        storage: Storage at the start of the timestep [mm].
        max_storage: Storage capacity [mm].
        coefficient: Fraction of storage released per sub-step [-].
        seconds_per_step: Length of the internal sub-step [s].
        inflow: Water added during the timestep [mm].
        seconds: Length of the outer timestep [s].

    Returns:
        Tuple of (outflow, new_storage) in mm. Their sum equals
        storage + inflow.
    """
    current = storage + inflow
    outflow = 0.0

    if current > max_storage:
        outflow = current - max_storage
        current = max_storage

    response_steps = seconds / seconds_per_step
    whole_steps = math.floor(response_steps)
    partial_step = response_steps - whole_steps

    for _ in range(int(whole_steps)):
        delta = coefficient * current
        outflow += delta
        current -= delta

    delta = coefficient * current * partial_step
    outflow += delta
    current -= delta

    return outflow, current


class LinearReservoir:
    """Stateful wrapper around linear_reservoir_response.

    Holds one storage value between calls to response(). The Hymod kernel
    builds these fresh on every step from scalar storages and discards them
    after reading back storage().

    Args:
        storage: Initial storage [mm].
        max_storage: Storage capacity [mm].
        coefficient: Fraction of storage released per sub-step, in [0, 1].
        seconds_per_step: Length of the internal sub-step [s].
    """

    __slots__ = ("_storage", "max_storage", "coefficient", "seconds_per_step")

    def __init__(
        self,
        storage: float = 0.0,
        max_storage: float = 1.0,
        coefficient: float = 1.0,
        seconds_per_step: float = 86400.0,
    ) -> None:
        if max_storage <= 0.0:
            msg = f"max_storage must be positive, got {max_storage}"
            raise ValueError(msg)
        if not 0.0 <= coefficient <= 1.0:
            msg = f"coefficient must be in [0, 1], got {coefficient}"
            raise ValueError(msg)
        if seconds_per_step <= 0.0:
            msg = f"seconds_per_step must be positive, got {seconds_per_step}"
            raise ValueError(msg)
        self._storage = float(storage)
        self.max_storage = float(max_storage)
        self.coefficient = float(coefficient)
        self.seconds_per_step = float(seconds_per_step)

    def response(self, inflow: float, seconds: float) -> float:
        """Add inflow, release water for the given duration and return the outflow."""
        outflow, self._storage = linear_reservoir_response(
            self._storage,
            self.max_storage,
            self.coefficient,
            self.seconds_per_step,
            float(inflow),
            float(seconds),
        )
        return outflow

    def storage(self) -> float:
        """Current storage [mm]."""
        return self._storage

    def __repr__(self) -> str:
        return (
            f"LinearReservoir(storage={self._storage!r}, max_storage={self.max_storage!r}, "
            f"coefficient={self.coefficient!r}, seconds_per_step={self.seconds_per_step!r})"
        )
