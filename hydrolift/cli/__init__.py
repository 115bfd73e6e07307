"""HydroLift command-line interface package.

Supports ``python -m hydrolift.cli`` as an alternative to the ``hydrolift`` entry point.
"""

from hydrolift.cli.main import cli, main

__all__ = ["cli", "main"]
