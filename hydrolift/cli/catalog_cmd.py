"""CLI commands for browsing the reference catalog."""

from __future__ import annotations

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from hydrolift.core.catalog import Catalog


def _setup(ctx: click.Context, title: str, *columns: str) -> tuple[Console, Catalog, Table]:
    console: Console = ctx.obj.get("console", Console())
    table = Table(title=title)
    for i, col in enumerate(columns):
        if i == 0:
            table.add_column(escape(col), style="cyan")
        elif col.endswith("]") or col == "Price":
            table.add_column(escape(col), justify="right")
        else:
            table.add_column(escape(col))
    return console, ctx.obj["catalog"], table


@click.group("catalog")
@click.pass_context
def catalog(ctx: click.Context) -> None:
    """List catalog components."""
    pass


@catalog.command("cylinders")
@click.pass_context
def catalog_cylinders(ctx: click.Context) -> None:
    """List cylinder sizes and base prices."""
    console, cat, table = _setup(
        ctx, "Cylinders", "Type", "Fixed [EUR]", "Per Metre [EUR]", "Two-piece [EUR]"
    )
    for size in cat.cylinder_sizes:
        pricing = cat.pricing_for(size.type_code)
        if pricing is None:
            table.add_row(size.type_code, "—", "—", "—")
        else:
            table.add_row(
                size.type_code,
                f"{pricing.fixed:.2f}",
                f"{pricing.per_meter:.2f}",
                f"{pricing.additional:.2f}",
            )
    console.print(table)


@catalog.command("pumps")
@click.pass_context
def catalog_pumps(ctx: click.Context) -> None:
    """List pumps."""
    console, cat, table = _setup(ctx, "Pumps", "Code", "Name", "Flow [L/min]", "Price")
    for p in cat.pumps:
        table.add_row(p.code, p.name, f"{p.flow:g}", f"{p.price:.2f}")
    console.print(table)


@catalog.command("motors")
@click.pass_context
def catalog_motors(ctx: click.Context) -> None:
    """List motors with starting currents."""
    console, cat, table = _setup(
        ctx, "Motors", "Code", "Name", "Power [kW]", "380V Y/Δ [A]", "220V Y/Δ [A]", "Price"
    )
    for m in cat.motors:
        c380 = f"{m.current_380.star:g}/{m.current_380.delta:g}" if m.current_380 else "—"
        c220 = f"{m.current_220.star:g}/{m.current_220.delta:g}" if m.current_220 else "—"
        table.add_row(m.code, m.name, f"{m.power:g}", c380, c220, f"{m.price:.2f}")
    console.print(table)


@catalog.command("power-units")
@click.pass_context
def catalog_power_units(ctx: click.Context) -> None:
    """List power units."""
    console, cat, table = _setup(
        ctx, "Power Units", "Code", "Name", "Tank [L]", "Oil [L]", "L×W×H [mm]", "Price"
    )
    for u in cat.power_units:
        table.add_row(
            u.code,
            u.name,
            f"{u.tank_capacity:g}",
            f"{u.total_oil:g}",
            f"{u.length:g}×{u.width:g}×{u.height:g}",
            f"{u.price:.2f}",
        )
    console.print(table)


@catalog.command("valves")
@click.pass_context
def catalog_valves(ctx: click.Context) -> None:
    """List main and rupture valves."""
    console, cat, table = _setup(ctx, "Main Valves", "Code", "Name", "Price")
    for v in cat.main_valves:
        table.add_row(v.code, v.name, f"{v.price:.2f}")
    console.print(table)

    table = Table(title="Rupture Valves")
    table.add_column("Code", style="cyan")
    table.add_column("Name")
    table.add_column("Size")
    table.add_column("Multi-cylinder")
    table.add_column("Price", justify="right")
    for v in cat.rupture_valves:
        table.add_row(v.code, v.name, v.size, "yes" if v.dual else "no", f"{v.price:.2f}")
    console.print(table)


@catalog.command("hoses")
@click.pass_context
def catalog_hoses(ctx: click.Context) -> None:
    """List hose diameters."""
    console, cat, table = _setup(ctx, "Hoses", "Code", "Name", "Max Flow [L/min]", "Price / m")
    for h in cat.hoses:
        table.add_row(h.code, h.name, f"{h.max_flow:g}", f"{h.price_per_meter:.2f}")
    console.print(table)


@catalog.command("accessories")
@click.pass_context
def catalog_accessories(ctx: click.Context) -> None:
    """List accessories and whether they are included by default."""
    console, cat, table = _setup(ctx, "Accessories", "Code", "Name", "Category", "Default", "Price")
    for a in cat.accessories:
        table.add_row(a.code, a.name, a.category, "yes" if a.included else "no", f"{a.price:.2f}")
    console.print(table)
