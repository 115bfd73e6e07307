"""CLI commands for the numbered project store."""

from __future__ import annotations

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

from hydrolift.core.config import QuoteState, load_quote_json
from hydrolift.core.cylinder import LoadInputs
from hydrolift.core.projects import (
    STATUS_PRODUCTION,
    ProjectNotFoundError,
    ProjectRecord,
    ProjectStore,
)
from hydrolift.core.selection import SelectedConfiguration


def _record_from_quote(state: QuoteState, customer: str | None) -> ProjectRecord:
    inputs = LoadInputs.from_dict(state.inputs)
    config = SelectedConfiguration.from_dict(state.selection) if state.selection else None
    return ProjectRecord.from_selection(customer or state.meta.customer, inputs, config)


def _not_found(ctx: click.Context, number: str) -> None:
    console: Console = ctx.obj.get("console", Console())
    console.print(f"[red]Project {number} not found[/red]")
    ctx.exit(1)


@click.group("project")
@click.option(
    "--store",
    type=click.Path(dir_okay=False),
    envvar="HYDROLIFT_PROJECTS",
    default=None,
    help="Project store file (default: ~/.hydrolift/projects.json).",
)
@click.option("--user", envvar="HYDROLIFT_USER", default="unknown", help="User recorded in the activity log.")
@click.pass_context
def project(ctx: click.Context, store: str | None, user: str) -> None:
    """Save, revise and release quotes as numbered projects."""
    ctx.obj["store"] = ProjectStore(store)
    ctx.obj["user"] = user


@project.command("save")
@click.argument("quote_file", type=click.Path(exists=True))
@click.option("--customer", default=None, help="Customer name (default: from the quote).")
@click.pass_context
def project_save(ctx: click.Context, quote_file: str, customer: str | None) -> None:
    """Save a quote file as a new draft project."""
    console: Console = ctx.obj.get("console", Console())
    store: ProjectStore = ctx.obj["store"]

    record = _record_from_quote(load_quote_json(quote_file), customer)
    if not record.customer:
        console.print("[red]Error:[/red] a customer name is required")
        ctx.exit(1)

    saved = store.save(record)
    store.log_change(ctx.obj["user"], "save", f"Project {saved.number} ({saved.customer})")
    console.print(f"[green]Project {saved.number} saved[/green]")


@project.command("update")
@click.argument("number")
@click.argument("quote_file", type=click.Path(exists=True))
@click.option("--customer", default=None, help="Customer name (default: from the quote).")
@click.pass_context
def project_update(ctx: click.Context, number: str, quote_file: str, customer: str | None) -> None:
    """Replace project NUMBER with a new quote, recording a revision."""
    console: Console = ctx.obj.get("console", Console())
    store: ProjectStore = ctx.obj["store"]

    record = _record_from_quote(load_quote_json(quote_file), customer)
    record.number = number
    try:
        previous = store.load(number)
        updated = store.update(record)
    except ProjectNotFoundError:
        _not_found(ctx, number)
        return

    if len(updated.revisions) > len(previous.revisions):
        rev = updated.revisions[-1]
        store.log_change(ctx.obj["user"], "update", f"Project {number} rev. {rev.revision_number}")
        console.print(f"[green]Project {number} updated (rev. {rev.revision_number})[/green]")
        for change in rev.changes:
            console.print(f"  • {change}")
    else:
        console.print(f"[green]Project {number} saved (no changes)[/green]")


@project.command("list")
@click.pass_context
def project_list(ctx: click.Context) -> None:
    """List projects, newest first."""
    console: Console = ctx.obj.get("console", Console())
    records = ctx.obj["store"].list_projects()
    if not records:
        console.print("[dim]No saved projects[/dim]")
        return

    table = Table(title="Projects")
    table.add_column("Number", style="cyan")
    table.add_column("Saved")
    table.add_column("Customer", style="green")
    table.add_column(escape("Capacity [kg]"), justify="right")
    table.add_column(escape("Speed [m/s]"), justify="right")
    table.add_column("Cylinders", justify="right")
    table.add_column("Status")
    for r in records:
        table.add_row(
            r.number,
            r.saved_date[:16].replace("T", " "),
            r.customer,
            str(r.inputs.get("capacity", "")),
            str(r.inputs.get("speed", "")),
            str(r.inputs.get("cylinder_count", "")),
            "[bold]production[/bold]" if r.status == STATUS_PRODUCTION else r.status,
        )
    console.print(table)


@project.command("show")
@click.argument("number")
@click.pass_context
def project_show(ctx: click.Context, number: str) -> None:
    """Show a project and its revisions."""
    console: Console = ctx.obj.get("console", Console())
    try:
        record = ctx.obj["store"].load(number)
    except ProjectNotFoundError:
        _not_found(ctx, number)
        return

    tree = Tree(f"[bold]{record.number}[/bold] {record.customer} ({record.status})")
    inputs = tree.add("[cyan]Inputs[/cyan]")
    for k, v in record.inputs.items():
        inputs.add(f"{k}: {v}")
    comps = tree.add("[cyan]Components[/cyan]")
    comps.add(f"cylinder: {record.selected_cylinder or '—'}")
    for k, v in record.components.items():
        comps.add(f"{k}: {v or '—'}")
    comps.add(f"accessories: {', '.join(record.accessories) or '—'}")
    if record.revisions:
        revs = tree.add("[cyan]Revisions[/cyan]")
        for rev in record.revisions:
            node = revs.add(f"Rev. {rev.revision_number} ({rev.date[:16].replace('T', ' ')})")
            for change in rev.changes:
                node.add(change)
    console.print(tree)


@project.command("delete")
@click.argument("number")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation.")
@click.pass_context
def project_delete(ctx: click.Context, number: str, yes: bool) -> None:
    """Delete a project."""
    console: Console = ctx.obj.get("console", Console())
    if not yes:
        click.confirm(f"Delete project {number}?", abort=True)
    try:
        ctx.obj["store"].delete(number)
    except ProjectNotFoundError:
        _not_found(ctx, number)
        return
    ctx.obj["store"].log_change(ctx.obj["user"], "delete", f"Project {number}")
    console.print(f"Project {number} deleted")


@project.command("produce")
@click.argument("number")
@click.pass_context
def project_produce(ctx: click.Context, number: str) -> None:
    """Release a project to production."""
    console: Console = ctx.obj.get("console", Console())
    try:
        ctx.obj["store"].move_to_production(number)
    except ProjectNotFoundError:
        _not_found(ctx, number)
        return
    ctx.obj["store"].log_change(ctx.obj["user"], "production", f"Project {number}")
    console.print(f"[green]Project {number} moved to production[/green]")


@project.command("log")
@click.option("--project", "number", default=None, help="Only entries mentioning this project.")
@click.pass_context
def project_log(ctx: click.Context, number: str | None) -> None:
    """Show the activity log."""
    console: Console = ctx.obj.get("console", Console())
    entries = ctx.obj["store"].activity_log()
    if number:
        entries = [e for e in entries if number in e.details]

    table = Table(title="Activity Log")
    table.add_column("Time", style="dim")
    table.add_column("User", style="cyan")
    table.add_column("Action", style="green")
    table.add_column("Details")
    for e in entries:
        table.add_row(e.timestamp[:19].replace("T", " "), e.user, e.action, e.details)
    console.print(table)
