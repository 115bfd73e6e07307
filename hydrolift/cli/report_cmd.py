"""CLI commands for report generation."""

from __future__ import annotations

import click
from rich.console import Console

from hydrolift.core.config import load_quote_json
from hydrolift.reports.summary import (
    generate_text_report,
    save_html_report,
    save_text_report,
)


@click.command("report")
@click.option(
    "--quote",
    "quote_file",
    type=click.Path(exists=True),
    required=True,
    help="Input quote JSON (from `hydrolift quote -o`).",
)
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["text", "html", "both"], case_sensitive=False),
    default="text",
    show_default=True,
    help="Report format.",
)
@click.option(
    "--output", "-o",
    type=click.Path(),
    default=None,
    help="Output file path (auto-generated if not specified).",
)
@click.pass_context
def report(ctx: click.Context, quote_file: str, fmt: str, output: str | None) -> None:
    """Generate a quote summary report."""
    console: Console = ctx.obj.get("console", Console())
    unit: str = ctx.obj.get("pressure_unit", "bar")
    fmt = fmt.lower()

    state = load_quote_json(quote_file)

    if fmt in ("text", "both"):
        out_txt = output or "quote.txt"
        if fmt == "both" and output:
            out_txt = output.rsplit(".", 1)[0] + ".txt"
        save_text_report(state, out_txt, unit)
        console.print(f"[green]Text report saved:[/green] {out_txt}")

    if fmt in ("html", "both"):
        out_html = output or "quote.html"
        if fmt == "both" and output:
            out_html = output.rsplit(".", 1)[0] + ".html"
        save_html_report(state, out_html, unit)
        console.print(f"[green]HTML report saved:[/green] {out_html}")

    if fmt == "text" and not output:
        console.print(f"\n{generate_text_report(state, unit)}")
