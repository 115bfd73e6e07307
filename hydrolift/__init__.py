"""HydroLift: hydraulic elevator sizing and quoting.

Selects a cylinder, pump, motor, valves and power unit for a hydraulic
lift, prices the resulting bill of materials and estimates oil heating.
"""

__app_name__ = "hydrolift"
__version__ = "0.3.0"
