"""Quote report generation for HydroLift."""
