"""Model registry for pyhymod models.

Lets a host simulation driver select a model by name at runtime. Each
registered model module must follow the model contract below.

Required model exports:
    - PARAM_NAMES: tuple[str, ...] - Parameter names in order
    - DEFAULT_BOUNDS: dict[str, tuple[float, float]] - (min, max) per parameter
    - STATE_SIZE: int - State array size for the default configuration
    - Parameters: class - Dataclass with from_array() classmethod and __array__() method
    - State: class - Dataclass with from_array() classmethod and __array__() method
    - run: function - Execute model over timeseries
    - step: function - Execute single timestep
    - SUPPORTED_RESOLUTIONS: tuple[Resolution, ...] - Accepted forcing resolutions
"""

import logging
from types import ModuleType

from pyhymod.types import Resolution

logger = logging.getLogger(__name__)

_REQUIRED_EXPORTS: tuple[str, ...] = (
    "PARAM_NAMES",
    "DEFAULT_BOUNDS",
    "STATE_SIZE",
    "Parameters",
    "State",
    "run",
    "step",
    "SUPPORTED_RESOLUTIONS",
)

_REQUIRED_ARRAY_METHODS: tuple[str, ...] = ("from_array", "__array__")

# Global registry: {name: module}
_models: dict[str, ModuleType] = {}


def _missing_methods(cls: type, methods: tuple[str, ...]) -> list[str]:
    return [method for method in methods if not hasattr(cls, method)]


def _validate_module(name: str, module: ModuleType) -> None:
    """Validate that a module has all required exports.

    Raises:
        ValueError: If the module is missing required exports or methods.
    """
    missing_exports = [export for export in _REQUIRED_EXPORTS if not hasattr(module, export)]
    if missing_exports:
        missing_str = ", ".join(missing_exports)
        msg = f"Model '{name}' is missing required exports: {missing_str}"
        raise ValueError(msg)

    for cls_name in ("Parameters", "State"):
        missing = _missing_methods(getattr(module, cls_name), _REQUIRED_ARRAY_METHODS)
        if missing:
            missing_str = ", ".join(missing)
            msg = f"Model '{name}' {cls_name} class is missing required methods: {missing_str}"
            raise ValueError(msg)

    resolutions = module.SUPPORTED_RESOLUTIONS
    if not isinstance(resolutions, tuple):
        msg = f"Model '{name}' SUPPORTED_RESOLUTIONS must be a tuple"
        raise ValueError(msg)
    if not all(isinstance(r, Resolution) for r in resolutions):
        msg = f"Model '{name}' SUPPORTED_RESOLUTIONS must contain only Resolution enum values"
        raise ValueError(msg)


def register(name: str, module: ModuleType) -> None:
    """Register a model module under the given name.

    Args:
        name: The name to register the model under (e.g., "hymod").
        module: The model module containing required exports.

    Raises:
        ValueError: If the module is missing required exports or methods.

    Example:
        >>> from pyhymod import registry
        >>> from pyhymod.models import hymod
        >>> registry.register("hymod", hymod)
    """
    _validate_module(name, module)
    _models[name] = module
    logger.debug("Registered model '%s'", name)


def get_model(name: str) -> ModuleType:
    """Get a registered model module by name.

    Raises:
        KeyError: If the model name is not registered.
    """
    if name not in _models:
        available = ", ".join(sorted(_models.keys())) if _models else "(none)"
        msg = f"Unknown model '{name}'. Available models: {available}"
        raise KeyError(msg)
    return _models[name]


def list_models() -> list[str]:
    """Return sorted list of registered model names."""
    return sorted(_models.keys())


def get_model_info(name: str) -> dict[str, object]:
    """Get metadata about a registered model.

    state_size is the state vector length of the model's default
    configuration. Models whose state grows with a parameter (Hymod's
    cascade length n) also export compute_state_size, returned alongside
    it so callers can size the vector for their own parameters.

    Returns:
        Dictionary containing param_names, default_bounds, state_size,
        compute_state_size (None for fixed-size models) and
        supported_resolutions.

    Raises:
        KeyError: If the model name is not registered.
    """
    module = get_model(name)

    return {
        "param_names": module.PARAM_NAMES,
        "default_bounds": module.DEFAULT_BOUNDS,
        "state_size": module.STATE_SIZE,
        "compute_state_size": getattr(module, "compute_state_size", None),
        "supported_resolutions": module.SUPPORTED_RESOLUTIONS,
    }
