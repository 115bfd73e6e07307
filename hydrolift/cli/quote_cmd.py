"""CLI command for a complete quote: cylinder, components, price and heating."""

from __future__ import annotations

from typing import Any

import click
from rich.console import Console
from rich.table import Table

from hydrolift.cli.options import load_options, pop_load_inputs
from hydrolift.cli.thermal_cmd import print_thermal
from hydrolift.core.catalog import Catalog
from hydrolift.core.config import ProjectMeta, QuoteState, save_quote_json
from hydrolift.core.cost import CATEGORIES, CostBreakdown, compute_cost
from hydrolift.core.cylinder import evaluate_cylinders, find_evaluation, suitable_cylinders
from hydrolift.core.selection import (
    SelectedConfiguration,
    motor_electrical,
    motor_options,
    rupture_valve_options,
    select_components,
    toggle_accessories,
    update_selection,
)
from hydrolift.core.thermal import thermal_for_configuration, trips_per_hour
from hydrolift.utils.constants import DEFAULT_AMBIENT_TEMPERATURE
from hydrolift.utils.units import pressure_from_bar


def _name(entry: Any, code: str | None, missing: str = "none") -> str:
    if code is None:
        return missing
    return entry.name if entry is not None else f"{code} (not in catalog)"


def print_configuration(console: Console, config: SelectedConfiguration, catalog: Catalog, unit: str) -> None:
    s = config.sizing
    table = Table(title=f"Components for {config.cylinder_count} × {config.cylinder_type}")
    table.add_column("Item", style="cyan")
    table.add_column("Selection", style="green")
    table.add_column("Detail", style="dim")

    table.add_row("Pump", _name(catalog.pump(config.pump), config.pump),
                  f"{s.actual_flow:.0f} L/min (needs {s.required_flow:.1f})")
    motor = catalog.motor(config.motor)
    detail = f"needs {s.required_power:.2f} kW"
    if motor is not None:
        elec = motor_electrical(motor, config.voltage)
        detail += f", {elec.nominal_current:.1f} A @ {config.voltage}"
    table.add_row("Motor", _name(motor, config.motor), detail)
    table.add_row("Main Valve", _name(catalog.main_valve(config.main_valve), config.main_valve), "")
    table.add_row(
        "Rupture Valve",
        _name(catalog.rupture_valve(config.rupture_valve), config.rupture_valve),
        f"{s.max_flow_per_cylinder:.1f} L/min per cylinder → {s.rupture_size}",
    )
    table.add_row(
        "Power Unit",
        _name(catalog.power_unit(config.power_unit), config.power_unit, "No suitable unit found"),
        f"oil {s.required_oil_volume:.1f} L",
    )
    table.add_row("Hoses", f"{config.hoses.main_diameter}\" main",
                  f"{config.hoses.cylinder_diameter}\" per cylinder")
    table.add_row("Accessories", ", ".join(sorted(config.accessories)) or "none", "")
    table.add_row("Speed", f"{s.effective_speed:.2f} m/s", "at pump flow")
    table.add_row("Working Pressure", f"{pressure_from_bar(s.working_pressure, unit):.1f} {unit}", "")
    console.print(table)
    insufficient = [o.motor.code for o in motor_options(s.required_power, catalog) if not o.sufficient]
    if config.motor in insufficient:
        console.print(
            f"[yellow]Warning:[/yellow] motor {config.motor} is below the required "
            f"{s.required_power:.2f} kW"
        )


def print_cost(console: Console, cost: CostBreakdown) -> None:
    table = Table(title="Price")
    table.add_column("Category", style="cyan")
    table.add_column("EUR", style="green", justify="right")
    for name in CATEGORIES:
        table.add_row(name.replace("_", " ").title(), f"{getattr(cost, name):,.2f}")
    table.add_row("[bold]Total[/bold]", f"[bold]{cost.total:,.2f}[/bold]")
    console.print(table)


@click.command("quote")
@load_options
@click.option("--cylinder", "cylinder_type", default=None, help='Cylinder type, e.g. "90x10" (default: smallest suitable).')
@click.option("--pump", default=None, help="Override pump code.")
@click.option("--motor", default=None, help="Override motor code.")
@click.option("--main-valve", default=None, help="Override main valve code.")
@click.option("--rupture-valve", default=None, help='Override rupture valve code ("none" to omit).')
@click.option("--power-unit", default=None, help="Override power unit code.")
@click.option("--voltage", type=click.Choice(["380V", "220V"]), default="380V", show_default=True)
@click.option("--two-piece", is_flag=True, help="Cylinders made in two pieces.")
@click.option("--with", "include", multiple=True, help="Add an accessory (repeatable).")
@click.option("--without", "exclude", multiple=True, help="Remove an accessory (repeatable).")
@click.option("--building-type", type=click.IntRange(1, 5), default=2, show_default=True,
              help="Building class 1-5 for the trip frequency.")
@click.option("--ambient", type=float, default=DEFAULT_AMBIENT_TEMPERATURE, show_default=True,
              help="Machine room temperature [°C].")
@click.option("--name", default="Untitled", help="Quote name.")
@click.option("--customer", default="", help="Customer name.")
@click.option("--output", "-o", type=click.Path(), default=None, help="Output file (JSON).")
@click.pass_context
def quote(
    ctx: click.Context,
    cylinder_type: str | None,
    pump: str | None,
    motor: str | None,
    main_valve: str | None,
    rupture_valve: str | None,
    power_unit: str | None,
    voltage: str,
    two_piece: bool,
    include: tuple[str, ...],
    exclude: tuple[str, ...],
    building_type: int,
    ambient: float,
    name: str,
    customer: str,
    output: str | None,
    **kwargs: Any,
) -> None:
    """Size, select and price a complete lift."""
    console: Console = ctx.obj.get("console", Console())
    catalog: Catalog = ctx.obj["catalog"]
    unit: str = ctx.obj.get("pressure_unit", "bar")
    inputs = pop_load_inputs(ctx, kwargs)

    evaluations = evaluate_cylinders(inputs, catalog)
    if cylinder_type is None:
        suitable = suitable_cylinders(evaluations)
        if not suitable:
            console.print(
                "[yellow]No suitable cylinder found.[/yellow] "
                "Try another cylinder count, suspension or load."
            )
            ctx.exit(1)
        evaluation = suitable[0]
    else:
        evaluation = find_evaluation(evaluations, cylinder_type)
        if evaluation is None:
            console.print(f"[red]Error:[/red] unknown cylinder type {cylinder_type!r}")
            ctx.exit(1)
        if not evaluation.valid:
            console.print(f"[red]Error:[/red] cylinder {cylinder_type} fails the pressure or buckling checks")
            ctx.exit(1)

    config = select_components(evaluation, inputs, catalog)
    overrides = {
        key: value
        for key, value in (
            ("pump", pump),
            ("motor", motor),
            ("main_valve", main_valve),
            ("rupture_valve", rupture_valve),
            ("power_unit", power_unit),
        )
        if value is not None
    }
    if overrides.get("rupture_valve") == "none":
        overrides["rupture_valve"] = None
    config = update_selection(config, catalog, voltage=voltage, two_piece=two_piece, **overrides)
    config = toggle_accessories(config, include=include, exclude=exclude)
    if config.rupture_valve is not None and config.rupture_valve not in {
        v.code for v in rupture_valve_options(config.cylinder_count, catalog)
    }:
        console.print(
            f"[yellow]Warning:[/yellow] rupture valve {config.rupture_valve} is not offered "
            f"for {config.cylinder_count} cylinder(s)"
        )

    cost = compute_cost(config, catalog)
    heat = thermal_for_configuration(
        config, inputs, trips_per_hour(building_type), catalog, ambient_temperature=ambient
    )

    console.print("\n[bold]HydroLift — Quote[/bold]\n")
    print_configuration(console, config, catalog, unit)
    print_cost(console, cost)
    print_thermal(console, heat)

    if output:
        state = QuoteState(
            meta=ProjectMeta(name=name, customer=customer),
            inputs=inputs.to_dict(),
            cylinder=evaluation.to_dict(),
            selection=config.to_dict(),
            cost={**cost.as_dict(), "total": cost.total},
            thermal=heat.to_dict(),
        )
        save_quote_json(state, output)
        console.print(f"\n[dim]Saved to {output}[/dim]")
