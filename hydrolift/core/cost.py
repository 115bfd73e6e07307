"""Bill-of-materials pricing for HydroLift.

Prices a :class:`SelectedConfiguration` by category. Cylinders carry
the manufacturing and sales margins; bought-in components (motor, pump,
power unit, valves) are priced flat from the catalog. The breakdown is
always recomputed from scratch.

Missing catalog entries never raise: the item is priced at zero and a
warning is logged.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Iterable

from hydrolift.core.catalog import BallValveTier, Catalog, load_catalog
from hydrolift.core.selection import HoseConfiguration, SelectedConfiguration
from hydrolift.utils.constants import MANUFACTURING_MARGIN, SALES_MARGIN

logger = logging.getLogger(__name__)

POWER_UNIT_HOSES = "power_unit_hoses"
BALL_VALVE = "ball_valve"

CATEGORIES = (
    "cylinders",
    "motor",
    "pump",
    "power_unit",
    "rupture_valve",
    "main_valve",
    "accessories",
)


@dataclass(frozen=True)
class CostBreakdown:
    """Price per category [€]. ``power_unit`` includes hoses when ordered."""

    cylinders: float = 0.0
    motor: float = 0.0
    pump: float = 0.0
    power_unit: float = 0.0
    rupture_valve: float = 0.0
    main_valve: float = 0.0
    accessories: float = 0.0

    @property
    def total(self) -> float:
        return sum(getattr(self, name) for name in CATEGORIES)

    def as_dict(self) -> dict[str, float]:
        return asdict(self)


# --- Item pricing ---


def cylinder_price(
    cylinder_type: str,
    stroke_m: float,
    quantity: int,
    two_piece: bool = False,
    catalog: Catalog | None = None,
) -> float:
    """Selling price of *quantity* cylinders of a "DxT" type.

    ``(fixed + per_meter · stroke [+ additional]) · 1.16 · 1.30 · quantity``.
    Unknown types price at zero.
    """
    catalog = catalog or load_catalog()
    pricing = catalog.pricing_for(cylinder_type)
    if pricing is None:
        logger.warning("Pricing not found for cylinder type %s", cylinder_type)
        return 0.0

    base = pricing.fixed + pricing.per_meter * stroke_m
    if two_piece:
        base += pricing.additional
    return base * MANUFACTURING_MARGIN * SALES_MARGIN * quantity


def hose_cost(hoses: HoseConfiguration, catalog: Catalog | None = None) -> float:
    """Cost of the main line plus one line per cylinder.

    A single-cylinder lift has only the main line.
    """
    catalog = catalog or load_catalog()
    cost = _hose_price(hoses.main_diameter, catalog) * hoses.main_length
    if hoses.cylinder_count > 1:
        cost += (
            _hose_price(hoses.cylinder_diameter, catalog)
            * hoses.cylinder_length
            * hoses.cylinder_count
        )
    return cost


def _hose_price(code: str, catalog: Catalog) -> float:
    hose = catalog.hose(code)
    if hose is None:
        logger.warning("Hose diameter %r not in catalog", code)
        return 0.0
    return hose.price_per_meter


def ball_valve_tier(main_valve_name: str) -> BallValveTier | None:
    """Classify the ball valve size needed in front of a main valve.

    The tier is read off the main valve's display name; ``None`` means
    the name matches no known tier.
    """
    if "KV" in main_valve_name:
        return BallValveTier.KV
    if "0,75'' EV100" in main_valve_name or "0.75'' EV100" in main_valve_name:
        return BallValveTier.EV100_075
    if "1,5'' EV100" in main_valve_name or "1.5'' EV100" in main_valve_name:
        return BallValveTier.EV100_150
    if "2'' EV100" in main_valve_name or "2.0'' EV100" in main_valve_name:
        return BallValveTier.EV100_200
    return None


def ball_valve_price(main_valve: str | None, catalog: Catalog | None = None) -> float:
    """Ball valve price for a main valve code; the 0.75'' EV100 price when unknown."""
    catalog = catalog or load_catalog()
    valve = catalog.main_valve(main_valve)
    tier = ball_valve_tier(valve.name) if valve else None
    if tier is None:
        tier = BallValveTier.EV100_075
    return catalog.ball_valve_prices.get(tier, 0.0)


def accessories_price(
    accessories: Iterable[str],
    main_valve: str | None,
    catalog: Catalog | None = None,
) -> float:
    """Sum of accessory prices. Power unit hoses count under the power unit."""
    catalog = catalog or load_catalog()
    total = 0.0
    for code in sorted(accessories):
        if code == POWER_UNIT_HOSES:
            continue
        if code == BALL_VALVE:
            total += ball_valve_price(main_valve, catalog)
            continue
        accessory = catalog.accessory(code)
        if accessory is None:
            logger.warning("Accessory %r not in catalog", code)
            continue
        total += accessory.price
    return total


# --- Breakdown ---


def compute_cost(
    config: SelectedConfiguration,
    catalog: Catalog | None = None,
) -> CostBreakdown:
    """Price a configuration by category.

    Args:
        config: Selected components.
        catalog: Reference catalog (bundled catalog if omitted).

    Returns:
        CostBreakdown; ``total`` is the sum of the seven categories.
    """
    catalog = catalog or load_catalog()

    cylinders = cylinder_price(
        config.cylinder_type, config.stroke_m, config.cylinder_count, config.two_piece, catalog
    )

    motor = catalog.motor(config.motor)
    if motor is None:
        logger.warning("Motor %r not in catalog", config.motor)
    pump = catalog.pump(config.pump)
    if pump is None:
        logger.warning("Pump %r not in catalog", config.pump)
    main_valve = catalog.main_valve(config.main_valve)
    if main_valve is None:
        logger.warning("Main valve %r not in catalog", config.main_valve)

    power_unit_price = 0.0
    if config.power_unit is not None:
        unit = catalog.power_unit(config.power_unit)
        if unit is None:
            logger.warning("Power unit %r not in catalog", config.power_unit)
        else:
            power_unit_price = unit.price
            if POWER_UNIT_HOSES in config.accessories:
                power_unit_price += hose_cost(config.hoses, catalog)

    rupture_price = 0.0
    if config.rupture_valve is not None:
        rupture = catalog.rupture_valve(config.rupture_valve)
        if rupture is None:
            logger.warning("Rupture valve %r not in catalog", config.rupture_valve)
        else:
            rupture_price = rupture.price * config.cylinder_count

    return CostBreakdown(
        cylinders=cylinders,
        motor=motor.price if motor else 0.0,
        pump=pump.price if pump else 0.0,
        power_unit=power_unit_price,
        rupture_valve=rupture_price,
        main_valve=main_valve.price if main_valve else 0.0,
        accessories=accessories_price(config.accessories, config.main_valve, catalog),
    )
