"""Unit conversion utilities for HydroLift.

Provides a lightweight unit conversion system built on top of pint,
with convenience functions for the quantities shown on a lift quote.
"""

from __future__ import annotations

from functools import lru_cache

import pint

# Module-level unit registry (singleton)
_ureg = pint.UnitRegistry()
_ureg.formatter.default_format = "~P"  # short pretty format


def get_unit_registry() -> pint.UnitRegistry:
    """Return the shared pint UnitRegistry instance."""
    return _ureg


Q_ = _ureg.Quantity


def pressure_from_bar(value_bar: float, unit: str) -> float:
    """Convert a pressure in bar to the target unit (e.g. "psi", "MPa")."""
    return convert(value_bar, "bar", unit)


def is_pressure_unit(unit: str) -> bool:
    """Return True if *unit* parses as a pint pressure unit."""
    try:
        ureg = get_unit_registry()
        return ureg.parse_units(unit).dimensionality == ureg.bar.dimensionality
    except (pint.errors.PintError, AttributeError, ValueError):
        return False


@lru_cache(maxsize=256)
def convert(value: float, from_unit: str, to_unit: str) -> float:
    """General-purpose unit conversion.

    Args:
        value: Numeric value in *from_unit*.
        from_unit: Source unit string.
        to_unit: Target unit string.

    Returns:
        Converted numeric value.
    """
    return Q_(value, from_unit).to(to_unit).magnitude
