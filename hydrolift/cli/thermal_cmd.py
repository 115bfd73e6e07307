"""CLI command for the oil heating estimate."""

from __future__ import annotations

import click
from rich.console import Console
from rich.table import Table

from hydrolift.core.thermal import ThermalResult, compute_thermal, trips_per_hour
from hydrolift.utils.constants import DEFAULT_AMBIENT_TEMPERATURE, DEFAULT_OIL_VOLUME


def print_thermal(console: Console, result: ThermalResult) -> None:
    table = Table(title="Oil Temperature")
    table.add_column("Parameter", style="cyan")
    table.add_column("Value", style="green", justify="right")
    table.add_column("Unit", style="dim")
    table.add_row("Heat Input", f"{result.heat_per_hour:.0f}", "kJ/h")
    table.add_row("Rise per Hour", f"{result.temp_rise_per_hour:.1f}", "°C/h")
    table.add_row("Steady State", f"{result.steady_state_temperature:.1f}", "°C")
    console.print(table)
    style = "red" if result.needs_cooling else "green"
    console.print(f"[{style}]{result.recommendation}[/{style}]")


@click.command("thermal")
@click.option("--motor-power", type=float, required=True, help="Motor power [kW].")
@click.option("--pump-flow", type=float, default=0.0, help="Pump flow [L/min].")
@click.option("--pressure", type=float, default=0.0, help="Working pressure [bar].")
@click.option("--oil-volume", type=float, default=DEFAULT_OIL_VOLUME, show_default=True, help="Tank oil [L].")
@click.option("--travel", type=float, required=True, help="Car travel [mm].")
@click.option("--speed", type=float, required=True, help="Rated speed [m/s].")
@click.option("--trips", type=float, default=None, help="Trips per hour (overrides --building-type).")
@click.option(
    "--building-type",
    type=click.IntRange(1, 5),
    default=2,
    show_default=True,
    help="Building class 1-5, six trips per hour each.",
)
@click.option(
    "--ambient",
    type=float,
    default=DEFAULT_AMBIENT_TEMPERATURE,
    show_default=True,
    help="Machine room temperature [°C].",
)
@click.pass_context
def thermal(
    ctx: click.Context,
    motor_power: float,
    pump_flow: float,
    pressure: float,
    oil_volume: float,
    travel: float,
    speed: float,
    trips: float | None,
    building_type: int,
    ambient: float,
) -> None:
    """Estimate oil heating for a lift duty."""
    console: Console = ctx.obj.get("console", Console())

    for name, value in (("--oil-volume", oil_volume), ("--speed", speed), ("--travel", travel)):
        if value <= 0:
            console.print(f"[red]Error:[/red] {name} must be positive, got {value}")
            ctx.exit(1)

    result = compute_thermal(
        motor_power=motor_power,
        pump_flow=pump_flow,
        pressure=pressure,
        oil_volume=oil_volume,
        travel_distance=travel,
        speed=speed,
        trips_per_hour=trips if trips is not None else trips_per_hour(building_type),
        ambient_temperature=ambient,
    )

    console.print("\n[bold]HydroLift — Thermal Estimate[/bold]\n")
    print_thermal(console, result)
