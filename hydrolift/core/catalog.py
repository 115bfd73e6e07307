"""Reference catalog for HydroLift.

Loads the cylinder, pump, motor, power unit, valve, hose and accessory
catalogs from the bundled JSON file and exposes them as immutable,
code-keyed look-ups. Display names are kept for presentation only.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

_DATA_DIR = Path(__file__).resolve().parent.parent / "data"
_CATALOG_PATH = _DATA_DIR / "catalog.json"

CATALOG_ENV_VAR = "HYDROLIFT_CATALOG"


class CatalogError(ValueError):
    """Raised when a catalog file is missing or malformed."""


class BallValveTier(Enum):
    """Size tier of the ball valve fitted in front of the main valve."""

    KV = "kv"
    EV100_075 = "ev100_075"
    EV100_150 = "ev100_150"
    EV100_200 = "ev100_200"


# --- Entries ---


@dataclass(frozen=True)
class CylinderSize:
    """Cylinder tube geometry: outer diameter and wall thickness [mm]."""

    diameter: float
    thickness: float

    @property
    def type_code(self) -> str:
        """Catalog type string, e.g. ``"80x10"``."""
        return f"{self.diameter:g}x{self.thickness:g}"


@dataclass(frozen=True)
class CylinderPricing:
    """Base cylinder cost: fixed part, per metre of stroke and two-piece surcharge."""

    fixed: float
    per_meter: float
    additional: float


@dataclass(frozen=True)
class Pump:
    code: str
    name: str
    flow: float  # L/min
    price: float


@dataclass(frozen=True)
class MotorCurrents:
    star: float  # A
    delta: float  # A


@dataclass(frozen=True)
class Motor:
    code: str
    name: str
    power: float  # kW
    price: float
    current_380: MotorCurrents | None = None
    current_220: MotorCurrents | None = None


@dataclass(frozen=True)
class PowerUnit:
    code: str
    name: str
    tank_capacity: float  # L
    total_oil: float  # L
    dead_zone: float  # L
    length: float  # mm
    width: float  # mm
    height: float  # mm
    price: float


@dataclass(frozen=True)
class MainValve:
    code: str
    name: str
    price: float


@dataclass(frozen=True)
class RuptureValve:
    """Burst-hose (rupture) valve; ``dual`` marks the DK multi-cylinder variant."""

    code: str
    name: str
    size: str  # nominal size, e.g. '0.75"'
    dual: bool
    price: float


@dataclass(frozen=True)
class HoseSize:
    code: str
    name: str
    max_flow: float  # L/min, largest flow this diameter is recommended for
    price_per_meter: float


@dataclass(frozen=True)
class Accessory:
    code: str
    name: str
    category: str
    price: float
    included: bool = False


# --- Catalog ---


def _index(entries: tuple[Any, ...]) -> dict[str, Any]:
    return {e.code: e for e in entries}


@dataclass(frozen=True)
class Catalog:
    """Read-only snapshot of all reference data.

    Sequences keep catalog order (pumps ascending by flow, motors by
    power, power units by tank capacity); the look-up methods return
    ``None`` for unknown codes.
    """

    cylinder_sizes: tuple[CylinderSize, ...] = ()
    cylinder_pricing: dict[str, CylinderPricing] = field(default_factory=dict)
    pumps: tuple[Pump, ...] = ()
    motors: tuple[Motor, ...] = ()
    power_units: tuple[PowerUnit, ...] = ()
    main_valves: tuple[MainValve, ...] = ()
    rupture_valves: tuple[RuptureValve, ...] = ()
    hoses: tuple[HoseSize, ...] = ()
    accessories: tuple[Accessory, ...] = ()
    ball_valve_prices: dict[BallValveTier, float] = field(default_factory=dict)

    _by_code: dict[str, dict[str, Any]] = field(
        default_factory=dict, init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "_by_code",
            {
                "pumps": _index(self.pumps),
                "motors": _index(self.motors),
                "power_units": _index(self.power_units),
                "main_valves": _index(self.main_valves),
                "rupture_valves": _index(self.rupture_valves),
                "hoses": _index(self.hoses),
                "accessories": _index(self.accessories),
            },
        )

    def pump(self, code: str | None) -> Pump | None:
        return self._by_code["pumps"].get(code)

    def motor(self, code: str | None) -> Motor | None:
        return self._by_code["motors"].get(code)

    def power_unit(self, code: str | None) -> PowerUnit | None:
        return self._by_code["power_units"].get(code)

    def main_valve(self, code: str | None) -> MainValve | None:
        return self._by_code["main_valves"].get(code)

    def rupture_valve(self, code: str | None) -> RuptureValve | None:
        return self._by_code["rupture_valves"].get(code)

    def hose(self, code: str | None) -> HoseSize | None:
        return self._by_code["hoses"].get(code)

    def accessory(self, code: str | None) -> Accessory | None:
        return self._by_code["accessories"].get(code)

    def pricing_for(self, cylinder_type: str) -> CylinderPricing | None:
        return self.cylinder_pricing.get(cylinder_type)

    def default_accessories(self) -> frozenset[str]:
        """Codes of accessories included in a quote unless deselected."""
        return frozenset(a.code for a in self.accessories if a.included)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Catalog:
        """Build a catalog from the JSON structure of ``catalog.json``."""
        try:
            return cls(
                cylinder_sizes=tuple(CylinderSize(**c) for c in data["cylinder_sizes"]),
                cylinder_pricing={
                    k: CylinderPricing(**v) for k, v in data.get("cylinder_pricing", {}).items()
                },
                pumps=tuple(Pump(**p) for p in data.get("pumps", [])),
                motors=tuple(_motor_from_dict(m) for m in data.get("motors", [])),
                power_units=tuple(PowerUnit(**u) for u in data.get("power_units", [])),
                main_valves=tuple(MainValve(**v) for v in data.get("main_valves", [])),
                rupture_valves=tuple(RuptureValve(**v) for v in data.get("rupture_valves", [])),
                hoses=tuple(HoseSize(**h) for h in data.get("hoses", [])),
                accessories=tuple(Accessory(**a) for a in data.get("accessories", [])),
                ball_valve_prices={
                    BallValveTier(k): float(v) for k, v in data.get("ball_valve_prices", {}).items()
                },
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise CatalogError(f"Malformed catalog data: {exc}") from exc


def _motor_from_dict(data: dict[str, Any]) -> Motor:
    data = dict(data)
    for key in ("current_380", "current_220"):
        if data.get(key) is not None:
            data[key] = MotorCurrents(**data[key])
    return Motor(**data)


# --- Loading ---


@lru_cache(maxsize=8)
def _load_catalog_file(path: str) -> Catalog:
    p = Path(path)
    if not p.exists():
        raise CatalogError(f"Catalog not found at {p}")
    try:
        with open(p, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as exc:
        raise CatalogError(f"Catalog {p} is not valid JSON: {exc}") from exc
    catalog = Catalog.from_dict(data)
    logger.debug(
        "Loaded catalog from %s (%d cylinders, %d pumps, %d motors)",
        p,
        len(catalog.cylinder_sizes),
        len(catalog.pumps),
        len(catalog.motors),
    )
    return catalog


def catalog_path() -> Path:
    """Path of the active catalog file (``HYDROLIFT_CATALOG`` or the bundled one)."""
    override = os.environ.get(CATALOG_ENV_VAR)
    return Path(override) if override else _CATALOG_PATH


def load_catalog(path: str | Path | None = None) -> Catalog:
    """Load (and cache) a catalog.

    Args:
        path: Catalog JSON file. Defaults to :func:`catalog_path`.

    Raises:
        CatalogError: If the file is missing or malformed.
    """
    return _load_catalog_file(str(Path(path) if path is not None else catalog_path()))
