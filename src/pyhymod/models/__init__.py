"""Hydrological models shipped with pyhymod."""
