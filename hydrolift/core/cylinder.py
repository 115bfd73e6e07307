"""Cylinder feasibility engine for HydroLift.

Evaluates every catalog cylinder against the lift loads: static
pressures with the car empty and fully loaded, and buckling of the ram
(Euler above the slenderness limit, Tetmajer below it).

Units: lengths in mm, loads in kg, pressures in bar, forces in N.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Iterable

import numpy as np

from hydrolift.core.catalog import Catalog, load_catalog
from hydrolift.utils.constants import (
    BUCKLING_LOAD_FACTOR,
    DEFAULT_BUFFER,
    EULER_SLENDERNESS_LIMIT,
    EXTRA_WEIGHT,
    GRAVITY,
    MAX_FULL_PRESSURE_BAR,
    MIN_EMPTY_PRESSURE_BAR,
    PI,
    RAM_BUCKLING_SHARE,
    RAM_WEIGHT_DIVISOR,
    STEEL_E_MODULUS,
    STEEL_RP02,
    TETMAJER_BASE,
)


class Suspension(Enum):
    """Reeving ratio between car travel and ram travel."""

    ONE_TO_ONE = "1:1"
    TWO_TO_ONE = "2:1"

    @property
    def factor(self) -> int:
        return 2 if self is Suspension.TWO_TO_ONE else 1


@dataclass(frozen=True)
class LoadInputs:
    """Elevator load parameters for one calculation.

    ``regulation`` is carried through untouched for the caller.
    """

    capacity: float  # kg
    carcass_weight: float  # kg
    travel_distance: float  # mm
    speed: float  # m/s
    suspension: Suspension = Suspension.TWO_TO_ONE
    cylinder_count: int = 2
    buffer: float = DEFAULT_BUFFER  # mm
    regulation: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.suspension, Suspension):
            object.__setattr__(self, "suspension", Suspension(str(self.suspension)))

    @property
    def suspension_factor(self) -> int:
        return self.suspension.factor

    @property
    def stroke(self) -> float:
        """Ram stroke [mm]."""
        return stroke_length(self.travel_distance, self.buffer, self.suspension)

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["suspension"] = self.suspension.value
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LoadInputs:
        fields = {k: data[k] for k in cls.__dataclass_fields__ if k in data}
        return cls(**fields)


@dataclass(frozen=True)
class CylinderEvaluation:
    """Pressure and buckling check of one catalog cylinder."""

    type_code: str
    diameter: float  # mm
    thickness: float  # mm
    stroke: float  # mm
    ram_weight: float  # kg
    area: float  # mm²
    pressure_empty: float  # bar
    pressure_full: float  # bar
    slenderness: float
    critical_force: float  # N
    acting_force: float  # N
    utilization: float  # %
    buckling_safe: bool
    valid: bool

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CylinderEvaluation:
        return cls(**{k: data[k] for k in cls.__dataclass_fields__})


def stroke_length(travel_distance: float, buffer: float, suspension: Suspension) -> float:
    """Ram stroke [mm] for a car travel and buffer margin."""
    total = travel_distance + buffer
    return total if suspension is Suspension.ONE_TO_ONE else total / 2.0


def critical_buckling_force(
    area: float | np.ndarray,
    inertia: float | np.ndarray,
    length: float,
    slenderness: float | np.ndarray,
) -> float | np.ndarray:
    """Critical buckling force of the ram [N].

    Elastic (Euler) regime for λ >= 100::

        F = π² · E · I / (2 · L²)

    Plastic (Tetmajer) regime below::

        F = A/2 · (Rp0.2 − (Rp0.2 − 210) · (λ/100)²)
    """
    area = np.asarray(area, dtype=float)
    inertia = np.asarray(inertia, dtype=float)
    slenderness = np.asarray(slenderness, dtype=float)

    euler = PI**2 * STEEL_E_MODULUS * inertia / (2.0 * length**2)
    tetmajer = (area / 2.0) * (
        STEEL_RP02 - (STEEL_RP02 - TETMAJER_BASE) * (slenderness / EULER_SLENDERNESS_LIMIT) ** 2
    )
    result = np.where(slenderness >= EULER_SLENDERNESS_LIMIT, euler, tetmajer)
    return float(result) if result.ndim == 0 else result


def is_feasible(pressure_empty: float, pressure_full: float, buckling_safe: bool) -> bool:
    """The only validity rule: enough pressure empty, not too much full, no buckling."""
    return bool(
        pressure_empty >= MIN_EMPTY_PRESSURE_BAR
        and pressure_full <= MAX_FULL_PRESSURE_BAR
        and buckling_safe
    )


def evaluate_cylinders(
    inputs: LoadInputs,
    catalog: Catalog | None = None,
) -> list[CylinderEvaluation]:
    """Check every catalog cylinder against the given loads.

    Entries with a non-positive wall thickness are skipped. The result
    keeps catalog order; use :func:`suitable_cylinders` for the sorted,
    valid-only list.

    Args:
        inputs: Lift load parameters.
        catalog: Reference catalog (bundled catalog if omitted).

    Returns:
        One CylinderEvaluation per usable catalog entry.
    """
    catalog = catalog or load_catalog()
    sizes = [s for s in catalog.cylinder_sizes if s.thickness > 0]
    if not sizes:
        return []

    D = np.array([s.diameter for s in sizes], dtype=float)
    t = np.array([s.thickness for s in sizes], dtype=float)
    stroke = inputs.stroke
    factor = inputs.suspension_factor

    ram_weight = ((D - t) * t / RAM_WEIGHT_DIVISOR) * (stroke / 1000.0)
    area = PI / 4.0 * D**2

    empty_term = inputs.carcass_weight * factor / inputs.cylinder_count
    full_term = (inputs.capacity + inputs.carcass_weight) * factor / inputs.cylinder_count

    force_empty = empty_term + ram_weight + EXTRA_WEIGHT
    force_full = full_term + ram_weight + EXTRA_WEIGHT

    # kg → N, N/mm² → bar
    pressure_empty = force_empty * GRAVITY * 10.0 / area
    pressure_full = force_full * GRAVITY * 10.0 / area

    d_inner = D - 2.0 * t
    inertia = PI * (D**4 - d_inner**4) / 64.0
    radius_of_gyration = np.sqrt(inertia / area)
    slenderness = stroke / radius_of_gyration

    f_crit = critical_buckling_force(area, inertia, stroke, slenderness)
    f_acting = BUCKLING_LOAD_FACTOR * GRAVITY * (
        full_term + RAM_BUCKLING_SHARE * (ram_weight + EXTRA_WEIGHT)
    )
    safe = f_crit >= f_acting
    utilization = f_acting / f_crit * 100.0

    results = []
    for i, size in enumerate(sizes):
        results.append(
            CylinderEvaluation(
                type_code=size.type_code,
                diameter=float(size.diameter),
                thickness=float(size.thickness),
                stroke=float(stroke),
                ram_weight=float(ram_weight[i]),
                area=float(area[i]),
                pressure_empty=float(pressure_empty[i]),
                pressure_full=float(pressure_full[i]),
                slenderness=float(slenderness[i]),
                critical_force=float(f_crit[i]),
                acting_force=float(f_acting[i]),
                utilization=float(utilization[i]),
                buckling_safe=bool(safe[i]),
                valid=is_feasible(pressure_empty[i], pressure_full[i], safe[i]),
            )
        )
    return results


def suitable_cylinders(evaluations: Iterable[CylinderEvaluation]) -> list[CylinderEvaluation]:
    """Valid evaluations sorted by diameter (then wall thickness) ascending.

    An empty list means no catalog cylinder fits the loads; callers
    should ask for different parameters rather than fail.
    """
    return sorted(
        (e for e in evaluations if e.valid),
        key=lambda e: (e.diameter, e.thickness),
    )


def find_evaluation(
    evaluations: Iterable[CylinderEvaluation], type_code: str
) -> CylinderEvaluation | None:
    """Return the evaluation for a cylinder type string such as ``"90x10"``."""
    for e in evaluations:
        if e.type_code == type_code:
            return e
    return None
