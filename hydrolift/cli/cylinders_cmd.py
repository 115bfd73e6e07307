"""CLI command for cylinder feasibility."""

from __future__ import annotations

from typing import Any

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from hydrolift.cli.options import load_options, pop_load_inputs
from hydrolift.core.cylinder import evaluate_cylinders, suitable_cylinders
from hydrolift.utils.units import pressure_from_bar


@click.command("cylinders")
@load_options
@click.option("--all", "show_all", is_flag=True, help="Also list cylinders that fail the checks.")
@click.pass_context
def cylinders(ctx: click.Context, show_all: bool, **kwargs: Any) -> None:
    """Check catalog cylinders against the lift loads."""
    console: Console = ctx.obj.get("console", Console())
    unit: str = ctx.obj.get("pressure_unit", "bar")
    inputs = pop_load_inputs(ctx, kwargs)

    evaluations = evaluate_cylinders(inputs, ctx.obj["catalog"])
    shown = evaluations if show_all else suitable_cylinders(evaluations)

    console.print("\n[bold]HydroLift — Cylinder Check[/bold]\n")
    console.print(f"Stroke: {inputs.stroke:.0f} mm, suspension {inputs.suspension.value}, "
                  f"{inputs.cylinder_count} cylinder(s)\n")

    if not shown:
        console.print(
            "[yellow]No suitable cylinder found.[/yellow] "
            "Try another cylinder count, suspension or load."
        )
        return

    table = Table(title="Cylinders")
    table.add_column("Type", style="cyan")
    table.add_column(escape("Ram Weight [kg]"), justify="right")
    table.add_column(escape(f"P empty [{unit}]"), justify="right")
    table.add_column(escape(f"P full [{unit}]"), justify="right")
    table.add_column("λ", justify="right")
    table.add_column("Buckling [%]", justify="right")
    table.add_column("Status")

    for e in shown:
        table.add_row(
            e.type_code,
            f"{e.ram_weight:.1f}",
            f"{pressure_from_bar(e.pressure_empty, unit):.1f}",
            f"{pressure_from_bar(e.pressure_full, unit):.1f}",
            f"{e.slenderness:.0f}",
            f"{e.utilization:.0f}",
            "[green]OK[/green]" if e.valid else "[red]X[/red]",
        )
    console.print(table)
