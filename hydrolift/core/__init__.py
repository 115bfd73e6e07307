"""Core calculation modules for HydroLift.

This package contains the sizing and quoting engines:
- catalog: Reference data (cylinders, pumps, motors, valves, hoses, accessories)
- cylinder: Pressure and buckling feasibility of catalog cylinders
- selection: Pump, motor, valve, power unit and hose picks
- cost: Bill-of-materials pricing
- thermal: Oil heating estimate
- config: Quote state persistence (JSON)
- projects: Numbered project store with revisions and activity log
"""
