"""Component selection for HydroLift.

Given a feasible cylinder, derives the oil flow and drive power the lift
needs and picks the default pump, motor, main valve, rupture valve,
power unit and hose sizes from the catalog. Every pick is only a
default: :func:`update_selection` returns a new configuration with the
caller's overrides and re-derives what depends on them.

Units: flow in L/min, power in kW, pressure in bar, lengths in mm
unless a name says otherwise.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, replace
from typing import Any, Iterable

from hydrolift.core.catalog import (
    Catalog,
    CatalogError,
    HoseSize,
    Motor,
    PowerUnit,
    Pump,
    RuptureValve,
    load_catalog,
)
from hydrolift.core.cylinder import CylinderEvaluation, LoadInputs
from hydrolift.utils.constants import (
    MAIN_VALVE_SMALL_TIER_MAX_FLOW,
    MM_TO_M,
    MOTOR_CURRENT_FACTOR,
    MOTOR_POWER_FACTOR,
    OIL_RESERVE_FACTOR,
    PI,
    POWER_MARGIN,
    RUPTURE_SPEED_MARGIN,
    SQRT3,
    SUPPLY_VOLTAGE,
)

logger = logging.getLogger(__name__)

# Main valve tiers actually reachable from the flow rule
MAIN_VALVE_SMALL = "ev100_075"
MAIN_VALVE_LARGE = "ev100_150"

# Per-cylinder flow [L/min] → nominal rupture valve size
RUPTURE_SIZE_BREAKPOINTS: tuple[tuple[float, str], ...] = (
    (55.0, '0.5"'),
    (100.0, '0.75"'),
    (165.0, '1.0"'),
    (400.0, '1.5"'),
    (1200.0, '2.0"'),
)
RUPTURE_OUT_OF_RANGE = "out of range"

DEFAULT_HOSE_LENGTH = 5.0  # m


@dataclass(frozen=True)
class HoseConfiguration:
    """Hose diameters (hose catalog codes) and lengths [m]."""

    main_diameter: str
    cylinder_diameter: str
    main_length: float = DEFAULT_HOSE_LENGTH
    cylinder_length: float = DEFAULT_HOSE_LENGTH
    cylinder_count: int = 1


@dataclass(frozen=True)
class SizingFigures:
    """Hydraulic figures derived while selecting components."""

    required_flow: float  # L/min
    actual_flow: float  # L/min, flow of the chosen pump
    effective_speed: float  # m/s at the chosen pump's flow
    required_power: float  # kW
    working_pressure: float  # bar, full-load static pressure
    max_flow_per_cylinder: float  # L/min, at rated speed + 0.3 m/s
    rupture_size: str
    required_oil_volume: float  # L
    recommended_motor: str


@dataclass(frozen=True)
class SelectedConfiguration:
    """A complete set of component picks for one cylinder choice.

    ``rupture_valve`` is ``None`` when no rupture valve is fitted and
    ``power_unit`` is ``None`` when no catalog unit holds enough oil.
    """

    cylinder_type: str
    diameter: float  # mm
    thickness: float  # mm
    stroke: float  # mm
    cylinder_count: int
    suspension_factor: int
    pump: str
    motor: str
    main_valve: str
    rupture_valve: str | None
    power_unit: str | None
    hoses: HoseConfiguration
    sizing: SizingFigures
    accessories: frozenset[str] = frozenset()
    two_piece: bool = False
    voltage: str = "380V"
    suitable_power_units: tuple[str, ...] = ()

    @property
    def stroke_m(self) -> float:
        return self.stroke * MM_TO_M

    @property
    def area(self) -> float:
        """Ram cross-section [mm²]."""
        return cylinder_area(self.diameter)

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["accessories"] = sorted(self.accessories)
        data["suitable_power_units"] = list(self.suitable_power_units)
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SelectedConfiguration:
        data = dict(data)
        data["hoses"] = HoseConfiguration(**data["hoses"])
        data["sizing"] = SizingFigures(**data["sizing"])
        data["accessories"] = frozenset(data.get("accessories", ()))
        data["suitable_power_units"] = tuple(data.get("suitable_power_units", ()))
        return cls(**data)


@dataclass(frozen=True)
class MotorOption:
    motor: Motor
    sufficient: bool
    recommended: bool


@dataclass(frozen=True)
class MotorElectrical:
    """Electrical data of a motor on a given supply."""

    voltage: str
    nominal_current: float  # A
    star_current: float | None = None  # A
    delta_current: float | None = None  # A


# --- Hydraulic figures ---


def cylinder_area(diameter: float) -> float:
    """Ram cross-section [mm²] for an outer diameter [mm]."""
    return PI / 4.0 * diameter**2


def required_flow(speed: float, area: float, cylinder_count: int, suspension_factor: int) -> float:
    """Oil flow [L/min] to move the car at *speed* [m/s]."""
    return speed * area * 60.0 * cylinder_count / (suspension_factor * 1000.0)


def effective_speed(flow: float, area: float, cylinder_count: int, suspension_factor: int) -> float:
    """Car speed [m/s] produced by a pump flow [L/min]."""
    return flow * suspension_factor * 1000.0 / (area * 60.0 * cylinder_count)


def required_power(flow: float, pressure: float) -> float:
    """Motor power [kW] for a flow [L/min] at a pressure [bar], with 30 % margin."""
    return flow * pressure * POWER_MARGIN / 600.0


def max_flow_per_cylinder(speed: float, area: float, suspension_factor: int) -> float:
    """Per-cylinder flow [L/min] the rupture valve must tolerate before tripping."""
    return (speed + RUPTURE_SPEED_MARGIN) * area * 60.0 / (suspension_factor * 1000.0)


def required_oil_volume(diameter: float, travel_distance: float, cylinder_count: int) -> float:
    """Oil volume [L] for the cylinders over the car travel, with 50 % reserve.

    Args:
        diameter: Ram outer diameter [mm].
        travel_distance: Car travel [mm].
        cylinder_count: Number of cylinders.
    """
    travel_m = travel_distance * MM_TO_M
    cylinder_volume = cylinder_area(diameter) * travel_m * cylinder_count / 1000.0
    return cylinder_volume * OIL_RESERVE_FACTOR


# --- Catalog picks ---


def select_pump(flow: float, catalog: Catalog) -> Pump:
    """First pump delivering at least *flow*; the largest pump if none does."""
    if not catalog.pumps:
        raise CatalogError("Catalog contains no pumps")
    for pump in catalog.pumps:
        if pump.flow >= flow:
            return pump
    largest = max(catalog.pumps, key=lambda p: p.flow)
    logger.warning("No pump reaches %.1f L/min, using largest (%s)", flow, largest.name)
    return largest


def select_motor(power: float, catalog: Catalog) -> Motor:
    """First motor rated for at least *power*; the largest motor if none is."""
    if not catalog.motors:
        raise CatalogError("Catalog contains no motors")
    for motor in catalog.motors:
        if motor.power >= power:
            return motor
    largest = max(catalog.motors, key=lambda m: m.power)
    logger.warning("No motor reaches %.1f kW, using largest (%s)", power, largest.name)
    return largest


def select_main_valve(flow: float) -> str:
    """Main valve code for the pump flow: 0.75'' EV100 up to 122 L/min, else 1.5'' EV100."""
    if flow <= MAIN_VALVE_SMALL_TIER_MAX_FLOW:
        return MAIN_VALVE_SMALL
    return MAIN_VALVE_LARGE


def rupture_size(flow_per_cylinder: float) -> str:
    """Nominal rupture valve size for a per-cylinder flow [L/min]."""
    for limit, size in RUPTURE_SIZE_BREAKPOINTS:
        if flow_per_cylinder <= limit:
            return size
    return RUPTURE_OUT_OF_RANGE


def select_rupture_valve(size: str, cylinder_count: int, catalog: Catalog) -> RuptureValve | None:
    """Rupture valve of *size*, dual (DK) variant iff two or more cylinders.

    A missing dual 0.5" valve is upgraded to the dual 0.75" one; any
    other missing combination yields ``None``.
    """
    needs_dual = cylinder_count >= 2
    for valve in catalog.rupture_valves:
        if valve.size == size and valve.dual == needs_dual:
            return valve
    if needs_dual and size == '0.5"':
        for valve in catalog.rupture_valves:
            if valve.size == '0.75"' and valve.dual:
                return valve
    return None


def rupture_valve_options(cylinder_count: int, catalog: Catalog) -> list[RuptureValve]:
    """Rupture valves that may be offered for the cylinder count."""
    needs_dual = cylinder_count >= 2
    return [v for v in catalog.rupture_valves if v.dual == needs_dual]


def suitable_power_units(oil_volume: float, catalog: Catalog) -> list[PowerUnit]:
    """Power units whose tank holds at least *oil_volume* [L], in catalog order."""
    return [u for u in catalog.power_units if u.tank_capacity >= oil_volume]


def select_power_unit(oil_volume: float, catalog: Catalog) -> PowerUnit | None:
    """Smallest suitable power unit, or ``None`` if no tank is large enough."""
    units = suitable_power_units(oil_volume, catalog)
    if not units:
        logger.warning("No power unit holds %.1f L of oil", oil_volume)
        return None
    return units[0]


def recommend_hose(flow: float, catalog: Catalog) -> HoseSize:
    """Smallest hose rated for *flow* [L/min]; the largest hose otherwise."""
    if not catalog.hoses:
        raise CatalogError("Catalog contains no hoses")
    for hose in catalog.hoses:
        if hose.max_flow >= flow:
            return hose
    return max(catalog.hoses, key=lambda h: h.max_flow)


def motor_options(power: float, catalog: Catalog) -> list[MotorOption]:
    """All motors, flagged as sufficient for *power* and the recommended one."""
    recommended = select_motor(power, catalog)
    return [
        MotorOption(motor=m, sufficient=m.power >= power, recommended=m.code == recommended.code)
        for m in catalog.motors
    ]


def motor_electrical(motor: Motor, voltage: str = "380V") -> MotorElectrical:
    """Nominal and star/delta starting currents of *motor* on a supply.

    Nominal current follows the panel sizing rule
    ``1.5 · kW · 1000 / (√3 · V · 0.79)`` with V = 400 for the 380 V
    network and 230 for the 220 V one.
    """
    if voltage not in SUPPLY_VOLTAGE:
        raise ValueError(f"Unknown supply voltage {voltage!r}, expected one of {list(SUPPLY_VOLTAGE)}")
    v = SUPPLY_VOLTAGE[voltage]
    nominal = MOTOR_CURRENT_FACTOR * motor.power * 1000.0 / (SQRT3 * v * MOTOR_POWER_FACTOR)
    currents = motor.current_380 if voltage == "380V" else motor.current_220
    if currents is None:
        return MotorElectrical(voltage=voltage, nominal_current=nominal)
    return MotorElectrical(
        voltage=voltage,
        nominal_current=nominal,
        star_current=currents.star,
        delta_current=currents.delta,
    )


# --- Configuration ---


def select_components(
    evaluation: CylinderEvaluation,
    inputs: LoadInputs,
    catalog: Catalog | None = None,
) -> SelectedConfiguration:
    """Build the default configuration for a chosen cylinder.

    Args:
        evaluation: The cylinder picked from :func:`evaluate_cylinders`.
        inputs: Lift load parameters used for that evaluation.
        catalog: Reference catalog (bundled catalog if omitted).

    Returns:
        SelectedConfiguration with recommended picks and sizing figures.
    """
    catalog = catalog or load_catalog()
    count = inputs.cylinder_count
    factor = inputs.suspension_factor
    area = cylinder_area(evaluation.diameter)

    q_req = required_flow(inputs.speed, area, count, factor)
    pump = select_pump(q_req, catalog)
    q_actual = pump.flow
    p_req = required_power(q_actual, evaluation.pressure_full)
    motor = select_motor(p_req, catalog)

    flow_per_cylinder = max_flow_per_cylinder(inputs.speed, area, factor)
    size = rupture_size(flow_per_cylinder)
    rupture = select_rupture_valve(size, count, catalog)

    oil_volume = required_oil_volume(evaluation.diameter, inputs.travel_distance, count)
    units = suitable_power_units(oil_volume, catalog)
    power_unit = select_power_unit(oil_volume, catalog)

    hoses = HoseConfiguration(
        main_diameter=recommend_hose(q_actual, catalog).code,
        cylinder_diameter=recommend_hose(q_actual / count, catalog).code,
        cylinder_count=count,
    )

    sizing = SizingFigures(
        required_flow=q_req,
        actual_flow=q_actual,
        effective_speed=effective_speed(q_actual, area, count, factor),
        required_power=p_req,
        working_pressure=evaluation.pressure_full,
        max_flow_per_cylinder=flow_per_cylinder,
        rupture_size=size,
        required_oil_volume=oil_volume,
        recommended_motor=motor.code,
    )

    logger.debug(
        "Selected for %s: pump=%s motor=%s rupture=%s unit=%s",
        evaluation.type_code,
        pump.code,
        motor.code,
        rupture.code if rupture else None,
        power_unit.code if power_unit else None,
    )

    return SelectedConfiguration(
        cylinder_type=evaluation.type_code,
        diameter=evaluation.diameter,
        thickness=evaluation.thickness,
        stroke=evaluation.stroke,
        cylinder_count=count,
        suspension_factor=factor,
        pump=pump.code,
        motor=motor.code,
        main_valve=select_main_valve(q_actual),
        rupture_valve=rupture.code if rupture else None,
        power_unit=power_unit.code if power_unit else None,
        hoses=hoses,
        sizing=sizing,
        accessories=catalog.default_accessories(),
        suitable_power_units=tuple(u.code for u in units),
    )


_EDITABLE = frozenset(
    {
        "pump",
        "motor",
        "main_valve",
        "rupture_valve",
        "power_unit",
        "hoses",
        "accessories",
        "two_piece",
        "voltage",
    }
)


def update_selection(
    config: SelectedConfiguration,
    catalog: Catalog | None = None,
    **changes: Any,
) -> SelectedConfiguration:
    """Return a new configuration with some picks overridden.

    A new pump re-derives actual flow, effective speed, required power
    and the recommended motor; the chosen motor itself is left alone.
    Unknown component codes are accepted and priced as zero later.

    Raises:
        TypeError: For a field that is not a user-editable pick.
    """
    unknown = set(changes) - _EDITABLE
    if unknown:
        raise TypeError(f"Cannot override {sorted(unknown)}; editable: {sorted(_EDITABLE)}")

    catalog = catalog or load_catalog()
    if "accessories" in changes:
        changes["accessories"] = frozenset(changes["accessories"])

    if "pump" in changes and changes["pump"] != config.pump:
        pump = catalog.pump(changes["pump"])
        if pump is None:
            logger.warning("Unknown pump %r, sizing figures left unchanged", changes["pump"])
        else:
            changes["sizing"] = _resize_for_pump(config, pump, catalog)

    return replace(config, **changes)


def _resize_for_pump(config: SelectedConfiguration, pump: Pump, catalog: Catalog) -> SizingFigures:
    area = config.area
    p_req = required_power(pump.flow, config.sizing.working_pressure)
    return replace(
        config.sizing,
        actual_flow=pump.flow,
        effective_speed=effective_speed(pump.flow, area, config.cylinder_count, config.suspension_factor),
        required_power=p_req,
        recommended_motor=select_motor(p_req, catalog).code,
    )


def toggle_accessories(
    config: SelectedConfiguration,
    include: Iterable[str] = (),
    exclude: Iterable[str] = (),
) -> SelectedConfiguration:
    """Return a configuration with accessories added and/or removed."""
    accessories = (set(config.accessories) | set(include)) - set(exclude)
    return replace(config, accessories=frozenset(accessories))
