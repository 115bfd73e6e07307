"""HydroLift command-line interface.

Entry point for the ``hydrolift`` CLI tool.
"""

from __future__ import annotations

import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from hydrolift import __app_name__, __version__
from hydrolift.core.catalog import CatalogError, load_catalog
from hydrolift.utils.units import is_pressure_unit

console = Console()
err_console = Console(stderr=True)


@click.group()
@click.version_option(version=__version__, prog_name=__app_name__)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging.")
@click.option(
    "--catalog",
    "catalog_file",
    type=click.Path(exists=True, dir_okay=False),
    envvar="HYDROLIFT_CATALOG",
    default=None,
    help="Catalog JSON file (default: bundled catalog).",
)
@click.option(
    "--pressure-unit",
    default="bar",
    show_default=True,
    help="Unit for displayed pressures (any pint pressure unit, e.g. psi, MPa).",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, catalog_file: str | None, pressure_unit: str) -> None:
    """HydroLift: hydraulic elevator sizing and quoting.

    Checks catalog cylinders against the lift loads, picks the hydraulic
    components, prices the bill of materials and estimates oil heating.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
    )
    if not is_pressure_unit(pressure_unit):
        raise click.BadParameter(f"{pressure_unit!r} is not a pressure unit", param_hint="--pressure-unit")

    try:
        catalog = load_catalog(catalog_file)
    except CatalogError as exc:
        console.print(f"[red]{exc}[/red]")
        ctx.exit(1)

    ctx.ensure_object(dict)
    ctx.obj["console"] = console
    ctx.obj["catalog"] = catalog
    ctx.obj["pressure_unit"] = pressure_unit


# Import and register sub-commands
from hydrolift.cli.catalog_cmd import catalog  # noqa: E402
from hydrolift.cli.cylinders_cmd import cylinders  # noqa: E402
from hydrolift.cli.project_cmd import project  # noqa: E402
from hydrolift.cli.quote_cmd import quote  # noqa: E402
from hydrolift.cli.report_cmd import report  # noqa: E402
from hydrolift.cli.thermal_cmd import thermal  # noqa: E402

cli.add_command(cylinders)
cli.add_command(quote)
cli.add_command(thermal)
cli.add_command(report)
cli.add_command(catalog)
cli.add_command(project)


def main() -> None:
    """Convenience wrapper for entry-point scripts."""
    cli()
