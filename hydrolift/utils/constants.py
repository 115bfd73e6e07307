"""Engineering constants and fixed design limits used throughout HydroLift.

Units follow the lift industry conventions of the calculation sheets:
lengths in mm, loads in kg, pressures in bar, flows in L/min.
"""

import math

# Gravitational (the sizing sheets use the rounded value)
GRAVITY = 9.81  # m/s²

# Mathematical
PI = math.pi

# Ram / load model
EXTRA_WEIGHT = 100.0  # kg, fixed allowance for ram head, guides and fittings
RAM_WEIGHT_DIVISOR = 40.55  # (D - t)·t / 40.55 → kg per metre of tube
DEFAULT_BUFFER = 300.0  # mm, buffer margin added to travel

# Pressure limits (bar), fixed engineering limits
MIN_EMPTY_PRESSURE_BAR = 12.0
MAX_FULL_PRESSURE_BAR = 59.0

# Buckling
STEEL_E_MODULUS = 210000.0  # N/mm²
STEEL_RP02 = 355.0  # N/mm², yield strength
TETMAJER_BASE = 210.0  # N/mm², stress at λ = 100 in the plastic regime
EULER_SLENDERNESS_LIMIT = 100.0
BUCKLING_LOAD_FACTOR = 1.4
RAM_BUCKLING_SHARE = 0.64

# Hydraulic sizing
POWER_MARGIN = 1.3
RUPTURE_SPEED_MARGIN = 0.3  # m/s added to the rated speed for valve sizing
OIL_RESERVE_FACTOR = 1.5
MAIN_VALVE_SMALL_TIER_MAX_FLOW = 122.0  # L/min

# Pricing
MANUFACTURING_MARGIN = 1.16
SALES_MARGIN = 1.30

# Oil / thermal
OIL_DENSITY = 870.0  # kg/m³
OIL_SPECIFIC_HEAT = 2.0  # kJ/(kg·°C)
HEAT_LOSS_FRACTION = 0.15
PASSIVE_RETENTION = 0.7  # 30 % passive dissipation
DEFAULT_AMBIENT_TEMPERATURE = 25.0  # °C
MAX_OIL_TEMPERATURE = 55.0  # °C
DEFAULT_OIL_VOLUME = 100.0  # L, used when no power unit is selected
TRIPS_PER_BUILDING_CLASS = 6

# Electrical
SUPPLY_VOLTAGE = {"380V": 400.0, "220V": 230.0}
MOTOR_CURRENT_FACTOR = 1.5
SQRT3 = 1.732
MOTOR_POWER_FACTOR = 0.79

# Conversion factors
MM_TO_M = 1.0e-3
