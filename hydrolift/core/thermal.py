"""Oil heating estimate for HydroLift.

A lumped model: a fixed share of the motor power turns into heat during
each up-travel, the tank oil absorbs it, and passive dissipation
removes a fixed share. Good enough to decide whether a cooler is needed.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass

from hydrolift.core.catalog import Catalog, load_catalog
from hydrolift.core.cylinder import LoadInputs
from hydrolift.core.selection import SelectedConfiguration
from hydrolift.utils.constants import (
    DEFAULT_AMBIENT_TEMPERATURE,
    DEFAULT_OIL_VOLUME,
    HEAT_LOSS_FRACTION,
    MAX_OIL_TEMPERATURE,
    MM_TO_M,
    OIL_DENSITY,
    OIL_SPECIFIC_HEAT,
    PASSIVE_RETENTION,
    TRIPS_PER_BUILDING_CLASS,
)

COOLER_RECOMMENDED = "Oil cooler recommended"
NATURAL_COOLING_OK = "Natural cooling is sufficient"


@dataclass(frozen=True)
class ThermalResult:
    """Oil heating estimate."""

    heat_per_hour: float  # kJ/h
    temp_rise_per_hour: float  # °C/h without any cooling
    steady_state_temperature: float  # °C
    needs_cooling: bool
    recommendation: str

    def to_dict(self) -> dict:
        return asdict(self)


def heat_generation(motor_power: float, cycle_time: float, trips_per_hour: float) -> float:
    """Heat put into the oil per hour [kJ/h].

    Args:
        motor_power: Motor power [kW].
        cycle_time: Duration of one up-travel [s].
        trips_per_hour: Number of up-travels per hour.
    """
    heat_per_cycle = motor_power * cycle_time * HEAT_LOSS_FRACTION  # kJ
    return heat_per_cycle * trips_per_hour


def oil_temperature(
    heat_per_hour: float,
    oil_volume: float,
    ambient_temperature: float = DEFAULT_AMBIENT_TEMPERATURE,
) -> tuple[float, float]:
    """Temperature rise per hour and steady-state temperature [°C].

    ΔT/h = Q / (m · c) with m = V · 870 kg/m³ and c = 2.0 kJ/(kg·°C);
    steady state keeps 70 % of the hourly rise above ambient.
    """
    oil_mass = (oil_volume / 1000.0) * OIL_DENSITY
    rise = heat_per_hour / (oil_mass * OIL_SPECIFIC_HEAT)
    return rise, ambient_temperature + rise * PASSIVE_RETENTION


def compute_thermal(
    motor_power: float,
    pump_flow: float,
    pressure: float,
    oil_volume: float,
    travel_distance: float,
    speed: float,
    trips_per_hour: float,
    ambient_temperature: float = DEFAULT_AMBIENT_TEMPERATURE,
) -> ThermalResult:
    """Estimate oil heating for a lift duty.

    Pump flow and pressure are part of the duty description but the
    lumped model only uses the motor power.

    Args:
        motor_power: Motor power [kW].
        pump_flow: Pump flow [L/min].
        pressure: Working pressure [bar].
        oil_volume: Oil in the tank [L].
        travel_distance: Car travel [mm].
        speed: Car speed [m/s].
        trips_per_hour: Up-travels per hour.
        ambient_temperature: Machine room temperature [°C].

    Returns:
        ThermalResult; cooling is required above 55 °C.
    """
    cycle_time = travel_distance * MM_TO_M / speed
    heat_per_hour = heat_generation(motor_power, cycle_time, trips_per_hour)
    rise, steady = oil_temperature(heat_per_hour, oil_volume, ambient_temperature)
    needs_cooling = steady > MAX_OIL_TEMPERATURE
    return ThermalResult(
        heat_per_hour=heat_per_hour,
        temp_rise_per_hour=rise,
        steady_state_temperature=steady,
        needs_cooling=needs_cooling,
        recommendation=COOLER_RECOMMENDED if needs_cooling else NATURAL_COOLING_OK,
    )


def trips_per_hour(building_type: int) -> int:
    """Typical trips per hour for a building class (1 = light residential)."""
    return building_type * TRIPS_PER_BUILDING_CLASS


def thermal_for_configuration(
    config: SelectedConfiguration,
    inputs: LoadInputs,
    trips: float,
    catalog: Catalog | None = None,
    ambient_temperature: float = DEFAULT_AMBIENT_TEMPERATURE,
) -> ThermalResult:
    """Run :func:`compute_thermal` for a selected configuration.

    Oil volume is the selected power unit's total oil, or 100 L when no
    unit is selected or it is not in the catalog. An unknown motor
    contributes no heat.
    """
    catalog = catalog or load_catalog()
    unit = catalog.power_unit(config.power_unit)
    motor = catalog.motor(config.motor)
    return compute_thermal(
        motor_power=motor.power if motor else 0.0,
        pump_flow=config.sizing.actual_flow,
        pressure=config.sizing.working_pressure,
        oil_volume=unit.total_oil if unit else DEFAULT_OIL_VOLUME,
        travel_distance=inputs.travel_distance,
        speed=inputs.speed,
        trips_per_hour=trips,
        ambient_temperature=ambient_temperature,
    )
