"""Hymod model orchestration functions.

This module provides the entry points for the Hymod kernel:
- HymodKernel: One timestep on caller-owned state buffers, plus the mass check
- hymod(): The same step over flat float64 arrays written in place
- step(): Execute a single timestep and return freshly allocated outputs
- run(): Execute the model over a single-catchment timeseries
"""

from __future__ import annotations

import logging
import math

import numpy as np

from pyhymod.et import EvapotranspirationModel, NoEvapotranspiration
from pyhymod.outputs import ModelOutput
from pyhymod.processes.linear_reservoir import LinearReservoir
from pyhymod.types import ForcingData
from .constants import (
    FLUX_SIZE,
    MASS_BALANCE_TOLERANCE,
    PARAM_NAMES,
    SECONDS_PER_RESERVOIR_STEP,
    STATE_BASE_SIZE,
    HymodErrorCode,
    compute_state_size,
)
from .errors import HymodInputError
from .outputs import HymodFluxes
from .processes import partition_excess, soil_moisture_after_excess, storage_excess_fraction
from .types import Fluxes, Parameters, State

logger = logging.getLogger(__name__)

_NO_ET = NoEvapotranspiration()


def _check_cascade_buffer(buffer: object, n: int, label: str) -> None:
    if not isinstance(buffer, np.ndarray) or buffer.ndim != 1:
        msg = f"{label}.cascade_storages must be a 1D numpy array"
        raise HymodInputError(msg)
    if len(buffer) < n:
        msg = f"{label}.cascade_storages has {len(buffer)} elements, cascade needs {n}"
        raise HymodInputError(msg)


def _validate_step_inputs(
    dt: float,
    params: Parameters,
    state: State,
    new_state: State,
    input_flux: float,
) -> None:
    """Reject inputs the kernel cannot compute on, before touching any buffer."""
    if not math.isfinite(dt) or dt <= 0.0:
        msg = f"dt must be a positive finite number, got {dt}"
        raise HymodInputError(msg)
    if not math.isfinite(input_flux) or input_flux < 0.0:
        msg = f"input_flux must be a non-negative finite number, got {input_flux}"
        raise HymodInputError(msg)

    n = params.n
    _check_cascade_buffer(state.cascade_storages, n, "state")
    _check_cascade_buffer(new_state.cascade_storages, n, "new_state")
    if n > 0 and np.shares_memory(state.cascade_storages[:n], new_state.cascade_storages[:n]):
        msg = "state and new_state must not share cascade_storages"
        raise HymodInputError(msg)
    if not new_state.cascade_storages.flags.writeable:
        msg = "new_state.cascade_storages is read-only"
        raise HymodInputError(msg)

    if not (math.isfinite(state.storage) and math.isfinite(state.groundwater_storage)):
        msg = "state storages must be finite"
        raise HymodInputError(msg)
    if not np.all(np.isfinite(state.cascade_storages[:n])):
        msg = "state.cascade_storages must be finite"
        raise HymodInputError(msg)
    if state.storage < 0.0:
        msg = f"state.storage must be non-negative, got {state.storage}"
        raise HymodInputError(msg)
    if state.storage + input_flux > params.max_storage:
        msg = (
            f"storage after input ({state.storage + input_flux}) exceeds "
            f"max_storage ({params.max_storage})"
        )
        raise HymodInputError(msg)


class HymodKernel:
    """The Hymod rainfall-runoff kernel.

    Stateless between calls: everything carried from one step to the next
    lives in the State objects owned by the caller.
    """

    @staticmethod
    def calc_et(soil_m: float, et_params: EvapotranspirationModel | None) -> float:
        """Evapotranspiration loss for the given soil moisture.

        Raises:
            HymodInputError: If the model returns a non-finite loss.
        """
        model = _NO_ET if et_params is None else et_params
        et = float(model.evapotranspiration(soil_m))
        if not math.isfinite(et):
            msg = f"{type(model).__name__}.evapotranspiration returned a non-finite loss ({et})"
            raise HymodInputError(msg)
        return et

    @staticmethod
    def run(
        dt: float,
        params: Parameters,
        state: State,
        new_state: State,
        fluxes: Fluxes,
        input_flux: float,
        et_params: EvapotranspirationModel | None = None,
    ) -> HymodErrorCode:
        """Run one timestep of Hymod.

        Writes the next storages into new_state (including its caller-owned
        cascade buffer) and the step's outflows into fluxes. Both are fully
        populated even when the mass check fails. The input state is left
        untouched.

        Args:
            dt: Length of the timestep [s].
            params: Static model parameters.
            state: Model state at the start of the step.
            new_state: State object receiving the next state.
            fluxes: Fluxes object receiving this step's outflows.
            input_flux: Water entering the catchment this step [mm].
            et_params: Evapotranspiration model. None disables evapotranspiration.

        Returns:
            HymodErrorCode.NO_ERROR, or HymodErrorCode.MASS_BALANCE_ERROR when
            the mass check detects a loss beyond tolerance.

        Raises:
            HymodInputError: If the inputs break the calling contract.
        """
        _validate_step_inputs(dt, params, state, new_state, input_flux)
        if et_params is not None and not isinstance(et_params, EvapotranspirationModel):
            msg = f"et_params must implement evapotranspiration(), got {type(et_params).__name__}"
            raise HymodInputError(msg)

        n = params.n
        nash_cascade = [
            LinearReservoir(state.cascade_storages[i], params.max_storage, params.kq, SECONDS_PER_RESERVOIR_STEP)
            for i in range(n)
        ]
        groundwater = LinearReservoir(
            state.groundwater_storage, params.max_storage, params.ks, SECONDS_PER_RESERVOIR_STEP
        )

        # Work on a copy; the caller's state keeps its storage
        current = State(
            storage=state.storage + input_flux,
            groundwater_storage=state.groundwater_storage,
            cascade_storages=state.cascade_storages,
        )

        fs = storage_excess_fraction(current.storage, params.max_storage, params.b)
        runoff, slow = partition_excess(fs, params.a)
        soil_m = soil_moisture_after_excess(current.storage, fs)

        et = HymodKernel.calc_et(soil_m, et_params)

        slow_flow = groundwater.response(slow, dt)

        for reservoir in nash_cascade:
            runoff = reservoir.response(runoff, dt)

        fluxes.slow_flow = float(slow_flow)
        fluxes.runoff = float(runoff)
        fluxes.et_loss = et

        new_state.storage = float(soil_m - et)
        new_state.groundwater_storage = groundwater.storage()
        for i, reservoir in enumerate(nash_cascade):
            new_state.cascade_storages[i] = reservoir.storage()

        # current already holds input_flux, which mass_check adds again
        return HymodKernel.mass_check(params, current, input_flux, new_state, fluxes)

    @staticmethod
    def mass_check(
        params: Parameters,
        current_state: State,
        input_flux: float,
        next_state: State,
        calculated_fluxes: Fluxes,
    ) -> HymodErrorCode:
        """Check that no water was lost across a step.

        Only a loss larger than MASS_BALANCE_TOLERANCE is reported; a gain
        is never flagged.

        Args:
            params: Static model parameters (n selects the cascade storages).
            current_state: State before the step.
            input_flux: Water that entered during the step [mm].
            next_state: State after the step.
            calculated_fluxes: Outflows of the step.

        Returns:
            HymodErrorCode.MASS_BALANCE_ERROR on loss beyond tolerance,
            HymodErrorCode.NO_ERROR otherwise.
        """
        n = params.n
        initial_mass = current_state.total_storage(n) + input_flux
        final_mass = next_state.total_storage(n) + calculated_fluxes.total()

        if initial_mass - final_mass > MASS_BALANCE_TOLERANCE:
            logger.debug(
                "Mass balance violation: initial=%.9f final=%.9f loss=%.3e",
                initial_mass,
                final_mass,
                initial_mass - final_mass,
            )
            return HymodErrorCode.MASS_BALANCE_ERROR
        return HymodErrorCode.NO_ERROR


def _check_flat_array(arr: object, min_size: int, label: str, writable: bool = False) -> np.ndarray:
    if not isinstance(arr, np.ndarray) or arr.ndim != 1 or arr.dtype != np.float64:
        msg = f"{label} must be a 1D float64 numpy array"
        raise HymodInputError(msg)
    if len(arr) < min_size:
        msg = f"{label} has {len(arr)} elements, expected at least {min_size}"
        raise HymodInputError(msg)
    if writable and not arr.flags.writeable:
        msg = f"{label} is read-only"
        raise HymodInputError(msg)
    return arr


def hymod(
    dt: float,
    params_arr: np.ndarray,
    state_arr: np.ndarray,
    new_state_arr: np.ndarray,
    fluxes_arr: np.ndarray,
    input_flux: float,
    et_params: EvapotranspirationModel | None = None,
) -> int:
    """Run one Hymod timestep on flat float64 arrays.

    Entry point for hosts that exchange plain buffers rather than Python
    objects. new_state_arr and fluxes_arr are written in place; the cascade
    part of new_state_arr is handed to the kernel as a view, so the new
    cascade storages land directly in the caller's buffer.

    Layouts:
        params_arr: [max_storage, a, b, ks, kq, n]
        state_arr / new_state_arr: [storage, groundwater_storage, cascade (n)]
        fluxes_arr: [slow_flow, runoff, et_loss]

    Returns:
        Integer status code (0 or 100).

    Raises:
        HymodInputError: If an array is missing, too short or read-only.
    """
    _check_flat_array(params_arr, len(PARAM_NAMES), "params_arr")
    params = Parameters.from_array(params_arr[: len(PARAM_NAMES)])

    size = compute_state_size(params.n)
    _check_flat_array(state_arr, size, "state_arr")
    _check_flat_array(new_state_arr, size, "new_state_arr", writable=True)
    _check_flat_array(fluxes_arr, FLUX_SIZE, "fluxes_arr", writable=True)

    state = State(
        storage=float(state_arr[0]),
        groundwater_storage=float(state_arr[1]),
        cascade_storages=state_arr[STATE_BASE_SIZE:size],
    )
    new_state = State(cascade_storages=new_state_arr[STATE_BASE_SIZE:size])
    fluxes = Fluxes()

    status = HymodKernel.run(dt, params, state, new_state, fluxes, input_flux, et_params)

    new_state_arr[0] = new_state.storage
    new_state_arr[1] = new_state.groundwater_storage
    fluxes_arr[:FLUX_SIZE] = np.asarray(fluxes)
    return int(status)


def step(
    state: State,
    params: Parameters,
    input_flux: float,
    dt: float = SECONDS_PER_RESERVOIR_STEP,
    et_model: EvapotranspirationModel | None = None,
) -> tuple[State, dict[str, float], HymodErrorCode]:
    """Execute one timestep of Hymod with freshly allocated outputs.

    Args:
        state: Current model state. Not modified.
        params: Model parameters.
        input_flux: Water entering the catchment this step [mm].
        dt: Length of the timestep [s]. Defaults to one day.
        et_model: Evapotranspiration model. None disables evapotranspiration.

    Returns:
        Tuple of (new_state, fluxes, status) where:
        - new_state: New State with its own cascade buffer of length params.n
        - fluxes: Dictionary with slow_flow, runoff and et_loss
        - status: Mass check result for the step
    """
    new_state = State(cascade_storages=np.zeros(params.n, dtype=np.float64))
    fluxes = Fluxes()
    status = HymodKernel.run(dt, params, state, new_state, fluxes, input_flux, et_model)
    return new_state, fluxes.to_dict(), status


def run(
    params: Parameters,
    forcing: ForcingData,
    initial_state: State | None = None,
    et_model: EvapotranspirationModel | None = None,
) -> ModelOutput[HymodFluxes]:
    """Run Hymod over the timeseries of one catchment.

    Each timestep feeds forcing.precip as input_flux with dt equal to the
    forcing resolution in seconds. Two state objects are swapped between
    steps so no buffer is allocated inside the loop.

    A step removes at most one unit of excess from the soil store, so a
    sustained wet series without evapotranspiration fills it up to
    max_storage. The first step whose storage plus input exceeds
    max_storage stops the run with HymodInputError naming that timestep;
    no partial output is returned.

    Args:
        params: Model parameters.
        forcing: Input forcing data.
        initial_state: Initial model state. If None, uses State.initialize(params).
        et_model: Evapotranspiration model. None disables evapotranspiration.

    Returns:
        ModelOutput containing HymodFluxes outputs.

    Raises:
        HymodInputError: If a step receives invalid inputs. The message
            carries the timestep index and date.
    """
    source = State.initialize(params) if initial_state is None else initial_state
    # Own copies so the caller's initial state is never written to
    state = State(
        storage=source.storage,
        groundwater_storage=source.groundwater_storage,
        cascade_storages=np.array(source.cascade_storages, dtype=np.float64),
    )
    next_state = State.allocate_like(state)
    fluxes = Fluxes()

    dt = forcing.resolution.seconds_per_timestep
    n_timesteps = len(forcing)
    outputs_arr = np.zeros((n_timesteps, 6), dtype=np.float64)
    status_arr = np.zeros(n_timesteps, dtype=np.int64)

    for t in range(n_timesteps):
        try:
            status = HymodKernel.run(dt, params, state, next_state, fluxes, float(forcing.precip[t]), et_model)
        except HymodInputError as e:
            msg = f"Timestep {t} ({np.datetime_as_string(forcing.time[t], unit='s')}): {e}"
            raise HymodInputError(msg) from e
        status_arr[t] = status
        outputs_arr[t] = (
            next_state.storage,
            next_state.groundwater_storage,
            fluxes.slow_flow,
            fluxes.runoff,
            fluxes.et_loss,
            fluxes.runoff + fluxes.slow_flow,
        )
        state, next_state = next_state, state

    n_flagged = int(np.count_nonzero(status_arr))
    if n_flagged:
        logger.warning(
            "Mass balance check flagged %d of %d timesteps",
            n_flagged,
            n_timesteps,
        )

    hymod_fluxes = HymodFluxes(
        precip=forcing.precip.copy(),
        soil_storage=outputs_arr[:, 0],
        groundwater_storage=outputs_arr[:, 1],
        slow_flow=outputs_arr[:, 2],
        runoff=outputs_arr[:, 3],
        et_loss=outputs_arr[:, 4],
        streamflow=outputs_arr[:, 5],
        mass_balance_status=status_arr,
    )

    return ModelOutput(time=forcing.time, fluxes=hymod_fluxes)
