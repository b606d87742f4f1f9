"""Process building blocks shared by the models."""

from .linear_reservoir import LinearReservoir, linear_reservoir_response

__all__ = ["LinearReservoir", "linear_reservoir_response"]
