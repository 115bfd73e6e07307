"""Shared lift-load options and input checking for CLI commands."""

from __future__ import annotations

from typing import Any, Callable

import click
from rich.console import Console

from hydrolift.core.cylinder import LoadInputs
from hydrolift.utils.constants import DEFAULT_BUFFER
from hydrolift.utils.validation import validate_load_inputs

_LOAD_OPTIONS = (
    click.option("--capacity", type=float, required=True, help="Rated load [kg]."),
    click.option("--carcass-weight", type=float, required=True, help="Car frame weight [kg]."),
    click.option("--travel", "travel_distance", type=float, required=True, help="Car travel [mm]."),
    click.option("--speed", type=float, required=True, help="Rated speed [m/s]."),
    click.option(
        "--suspension",
        type=click.Choice(["1:1", "2:1"]),
        default="2:1",
        show_default=True,
        help="Roping ratio.",
    ),
    click.option("--cylinders", "cylinder_count", type=int, default=2, show_default=True, help="Number of cylinders."),
    click.option("--buffer", type=float, default=DEFAULT_BUFFER, show_default=True, help="Stroke margin [mm]."),
    click.option("--regulation", default="", help="Applicable regulation (recorded only)."),
)

LOAD_KEYS = (
    "capacity",
    "carcass_weight",
    "travel_distance",
    "speed",
    "suspension",
    "cylinder_count",
    "buffer",
    "regulation",
)


def load_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Add the lift-load options to a command."""
    for option in reversed(_LOAD_OPTIONS):
        func = option(func)
    return func


def pop_load_inputs(ctx: click.Context, kwargs: dict[str, Any]) -> LoadInputs:
    """Remove the load options from *kwargs*, validate them and build LoadInputs.

    Validation errors are printed and end the command with exit code 1;
    warnings are printed and the command continues.
    """
    console: Console = ctx.obj.get("console", Console())
    raw = {key: kwargs.pop(key) for key in LOAD_KEYS}

    result = validate_load_inputs(raw)
    for msg in result.warnings:
        console.print(f"[yellow]Warning:[/yellow] {msg.message}")
    if not result.is_valid:
        for msg in result.errors:
            console.print(f"[red]Error:[/red] {msg.message}")
        ctx.exit(1)

    return LoadInputs(**raw)
