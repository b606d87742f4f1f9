"""Hymod soil moisture process functions.

Numba-compiled functions for the storage-excess runoff generation and the
split of generated excess between the quick-flow and slow-flow pathways.
"""

from numba import njit


@njit(cache=True)
def storage_excess_fraction(storage: float, max_storage: float, b: float) -> float:
    """Compute the storage-excess fraction.

    fs = 1 - (1 - storage / max_storage) ** b

    Grows toward 1 as storage approaches max_storage. Not clamped: callers
    keep storage within [0, max_storage].

    Args:
        storage: Soil moisture storage after adding this step's input [mm].
        max_storage: Maximum soil moisture storage [mm].
        b: Exponent of the storage-excess curve [-].

    Returns:
        Storage-excess fraction [-].
    """
    return 1.0 - (1.0 - storage / max_storage) ** b


@njit(cache=True)
def partition_excess(fs: float, a: float) -> tuple[float, float]:
    """Split the storage excess between quick and slow flow.

    Args:
        fs: Storage-excess fraction.
        a: Share routed to the quick-flow cascade [-].

    Returns:
        Tuple of (runoff_in, slow_in).
    """
    return fs * a, fs * (1.0 - a)


@njit(cache=True)
def soil_moisture_after_excess(storage: float, fs: float) -> float:
    """Soil moisture left once the excess has been removed.

    fs is subtracted directly as a depth.
    """
    return storage - fs
