"""Utility modules for HydroLift."""

from hydrolift.utils.constants import GRAVITY, MAX_FULL_PRESSURE_BAR, MIN_EMPTY_PRESSURE_BAR
from hydrolift.utils.units import convert, get_unit_registry

__all__ = [
    "GRAVITY",
    "MAX_FULL_PRESSURE_BAR",
    "MIN_EMPTY_PRESSURE_BAR",
    "convert",
    "get_unit_registry",
]
