"""Quote summary report generation for HydroLift.

Produces text and HTML reports from a QuoteState, summarising the lift
data, the chosen cylinder, the component picks, the price breakdown and
the oil heating estimate. Values are rounded here and nowhere else.
"""

from __future__ import annotations

import html as html_mod
from datetime import datetime, timezone
from typing import Any

from hydrolift.core.config import QuoteState
from hydrolift.utils.units import pressure_from_bar

NONE_LABEL = "none"
NO_POWER_UNIT_LABEL = "No suitable unit found"

_COST_LABELS = (
    ("cylinders", "Cylinders"),
    ("motor", "Motor"),
    ("pump", "Pump"),
    ("power_unit", "Power Unit"),
    ("rupture_valve", "Rupture Valves"),
    ("main_valve", "Main Valve"),
    ("accessories", "Accessories"),
)


def _pressure(value_bar: float | None, unit: str) -> float | None:
    if value_bar is None:
        return None
    return value_bar if unit == "bar" else pressure_from_bar(value_bar, unit)


def _component_rows(selection: dict[str, Any]) -> list[tuple[str, str, str]]:
    hoses = selection.get("hoses") or {}
    return [
        ("Cylinder", str(selection.get("cylinder_type", "")), "mm"),
        ("Pump", str(selection.get("pump", "")), ""),
        ("Motor", str(selection.get("motor", "")), ""),
        ("Main Valve", str(selection.get("main_valve", "")), ""),
        ("Rupture Valve", selection.get("rupture_valve") or NONE_LABEL, ""),
        ("Power Unit", selection.get("power_unit") or NO_POWER_UNIT_LABEL, ""),
        ("Main Hose", str(hoses.get("main_diameter", "")), "in"),
        ("Cylinder Hoses", str(hoses.get("cylinder_diameter", "")), "in"),
        ("Supply", str(selection.get("voltage", "")), ""),
        ("Accessories", ", ".join(selection.get("accessories", [])) or NONE_LABEL, ""),
    ]


# --- Plain-text report ---


def generate_text_report(state: QuoteState, pressure_unit: str = "bar") -> str:
    """Generate a plain-text quote report.

    Args:
        state: QuoteState with quote data.
        pressure_unit: pint unit for pressures (default bar).

    Returns:
        Multi-line text report string.
    """
    lines: list[str] = []
    _hr = "=" * 60

    lines.append(_hr)
    lines.append("  HydroLift Quote")
    lines.append(f"  {state.meta.name}")
    if state.meta.customer:
        lines.append(f"  Customer: {state.meta.customer}")
    lines.append(_hr)
    lines.append("")

    if state.inputs:
        lines.append("LIFT DATA")
        lines.append("-" * 40)
        _add_param(lines, "Capacity", state.inputs, "capacity", "kg")
        _add_param(lines, "Carcass Weight", state.inputs, "carcass_weight", "kg")
        _add_param(lines, "Travel Distance", state.inputs, "travel_distance", "mm")
        _add_param(lines, "Buffer", state.inputs, "buffer", "mm")
        _add_param(lines, "Speed", state.inputs, "speed", "m/s")
        _add_param_str(lines, "Suspension", str(state.inputs.get("suspension", "")))
        _add_param(lines, "Cylinders", state.inputs, "cylinder_count")
        if state.inputs.get("regulation"):
            _add_param_str(lines, "Regulation", state.inputs["regulation"])
        lines.append("")

    if state.cylinder:
        cyl = state.cylinder
        lines.append("CYLINDER")
        lines.append("-" * 40)
        _add_param_str(lines, "Type", str(cyl.get("type_code", "")))
        _add_param(lines, "Stroke", cyl, "stroke", "mm")
        _add_param(lines, "Ram Weight", cyl, "ram_weight", "kg")
        _add_value(lines, "Pressure (empty)", _pressure(cyl.get("pressure_empty"), pressure_unit), pressure_unit)
        _add_value(lines, "Pressure (full)", _pressure(cyl.get("pressure_full"), pressure_unit), pressure_unit)
        _add_param(lines, "Slenderness", cyl, "slenderness")
        _add_param(lines, "Buckling Use", cyl, "utilization", "%")
        lines.append("")

    if state.selection:
        lines.append("COMPONENTS")
        lines.append("-" * 40)
        for label, value, _unit in _component_rows(state.selection):
            _add_param_str(lines, label, value)
        lines.append("")

        sizing = state.selection.get("sizing") or {}
        if sizing:
            lines.append("HYDRAULICS")
            lines.append("-" * 40)
            _add_param(lines, "Required Flow", sizing, "required_flow", "L/min")
            _add_param(lines, "Pump Flow", sizing, "actual_flow", "L/min")
            _add_param(lines, "Effective Speed", sizing, "effective_speed", "m/s")
            _add_param(lines, "Required Power", sizing, "required_power", "kW")
            _add_param(lines, "Flow / Cylinder", sizing, "max_flow_per_cylinder", "L/min")
            _add_param_str(lines, "Rupture Size", str(sizing.get("rupture_size", "")))
            _add_param(lines, "Oil Volume", sizing, "required_oil_volume", "L")
            lines.append("")

    if state.cost:
        lines.append("PRICE")
        lines.append("-" * 40)
        for key, label in _COST_LABELS:
            _add_param(lines, label, state.cost, key, "EUR")
        _add_param(lines, "TOTAL", state.cost, "total", "EUR")
        lines.append("")

    if state.thermal:
        th = state.thermal
        lines.append("OIL TEMPERATURE")
        lines.append("-" * 40)
        _add_param(lines, "Heat Input", th, "heat_per_hour", "kJ/h")
        _add_param(lines, "Rise per Hour", th, "temp_rise_per_hour", "°C/h")
        _add_param(lines, "Steady State", th, "steady_state_temperature", "°C")
        _add_param_str(lines, "Recommendation", str(th.get("recommendation", "")))
        lines.append("")

    lines.append(_hr)
    lines.append(f"  Generated: {datetime.now(timezone.utc).strftime('%Y-%m-%d %H:%M UTC')}")
    lines.append(f"  HydroLift v{state.meta.version}")
    lines.append(_hr)

    return "\n".join(lines)


def _add_value(lines: list[str], label: str, value: Any, unit: str = "") -> None:
    if value is None:
        return
    unit_str = f" {unit}" if unit else ""
    if isinstance(value, float):
        lines.append(f"  {label:<20s} {value:>12.2f}{unit_str}")
    else:
        lines.append(f"  {label:<20s} {value!s:>12}{unit_str}")


def _add_param(lines: list[str], label: str, data: dict[str, Any], key: str, unit: str = "") -> None:
    """Add a parameter line if the key exists in data."""
    _add_value(lines, label, data.get(key), unit)


def _add_param_str(lines: list[str], label: str, value: str) -> None:
    lines.append(f"  {label:<20s} {value:>12}")


# --- HTML report ---


def generate_html_report(state: QuoteState, pressure_unit: str = "bar") -> str:
    """Generate a self-contained HTML quote report with inline CSS."""
    sections: list[str] = [_html_header(state)]

    if state.inputs:
        inp = state.inputs
        rows: list[tuple[str, str, str]] = []
        _html_row(rows, "Capacity", inp, "capacity", "kg")
        _html_row(rows, "Carcass Weight", inp, "carcass_weight", "kg")
        _html_row(rows, "Travel Distance", inp, "travel_distance", "mm")
        _html_row(rows, "Buffer", inp, "buffer", "mm")
        _html_row(rows, "Speed", inp, "speed", "m/s")
        rows.append(("Suspension", str(inp.get("suspension", "")), ""))
        _html_row(rows, "Cylinders", inp, "cylinder_count", "")
        sections.append(_html_table("Lift Data", rows))

    if state.cylinder:
        cyl = state.cylinder
        rows = [("Type", str(cyl.get("type_code", "")), "mm")]
        _html_row(rows, "Stroke", cyl, "stroke", "mm")
        _html_row(rows, "Ram Weight", cyl, "ram_weight", "kg")
        _html_value(rows, "Pressure (empty)", _pressure(cyl.get("pressure_empty"), pressure_unit), pressure_unit)
        _html_value(rows, "Pressure (full)", _pressure(cyl.get("pressure_full"), pressure_unit), pressure_unit)
        _html_row(rows, "Buckling Use", cyl, "utilization", "%")
        sections.append(_html_table("Cylinder", rows))

    if state.selection:
        sections.append(_html_table("Components", _component_rows(state.selection)))

    if state.cost:
        rows = []
        for key, label in _COST_LABELS:
            _html_row(rows, label, state.cost, key, "EUR")
        _html_row(rows, "Total", state.cost, "total", "EUR")
        sections.append(_html_table("Price", rows))

    if state.thermal:
        th = state.thermal
        rows = []
        _html_row(rows, "Heat Input", th, "heat_per_hour", "kJ/h")
        _html_row(rows, "Rise per Hour", th, "temp_rise_per_hour", "°C/h")
        _html_row(rows, "Steady State", th, "steady_state_temperature", "°C")
        rows.append(("Recommendation", str(th.get("recommendation", "")), ""))
        sections.append(_html_table("Oil Temperature", rows))

    sections.append(_html_footer(state))
    return "\n".join(sections)


def _html_header(state: QuoteState) -> str:
    title = html_mod.escape(state.meta.name)
    customer = html_mod.escape(state.meta.customer)
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>HydroLift Quote: {title}</title>
<style>
body {{ font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, sans-serif;
       max-width: 800px; margin: 2em auto; padding: 0 1em; color: #222; }}
h1 {{ color: #1a365d; border-bottom: 2px solid #2b6cb0; padding-bottom: 0.3em; }}
h2 {{ color: #2b6cb0; margin-top: 1.5em; }}
table {{ width: 100%; border-collapse: collapse; margin: 0.5em 0 1.5em; }}
th, td {{ text-align: left; padding: 0.4em 0.8em; border-bottom: 1px solid #e2e8f0; }}
th {{ background: #ebf4ff; color: #1a365d; }}
td:nth-child(2) {{ text-align: right; font-family: "SF Mono", "Fira Code", monospace; }}
td:nth-child(3) {{ color: #718096; font-size: 0.9em; }}
.footer {{ margin-top: 2em; padding-top: 1em; border-top: 1px solid #e2e8f0;
           color: #a0aec0; font-size: 0.85em; }}
</style>
</head>
<body>
<h1>HydroLift Quote</h1>
<p><strong>{title}</strong> {customer}</p>
"""


def _html_table(title: str, rows: list[tuple[str, str, str]]) -> str:
    esc = html_mod.escape
    lines = [f"<h2>{esc(title)}</h2>", "<table>"]
    lines.append("<tr><th>Item</th><th>Value</th><th>Unit</th></tr>")
    for label, value, unit in rows:
        lines.append(f"<tr><td>{esc(label)}</td><td>{esc(value)}</td><td>{esc(unit)}</td></tr>")
    lines.append("</table>")
    return "\n".join(lines)


def _html_row(
    rows: list[tuple[str, str, str]],
    label: str,
    data: dict[str, Any],
    key: str,
    unit: str,
) -> None:
    _html_value(rows, label, data.get(key), unit)


def _html_value(rows: list[tuple[str, str, str]], label: str, val: Any, unit: str) -> None:
    if val is not None:
        rows.append((label, f"{val:.2f}" if isinstance(val, float) else str(val), unit))


def _html_footer(state: QuoteState) -> str:
    ts = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M UTC")
    return f"""<div class="footer">
Generated: {ts} &middot; HydroLift v{html_mod.escape(state.meta.version)}
</div>
</body>
</html>"""


def save_text_report(state: QuoteState, filepath: str, pressure_unit: str = "bar") -> None:
    """Generate and save a plain-text report to a file."""
    with open(filepath, "w", encoding="utf-8") as f:
        f.write(generate_text_report(state, pressure_unit))


def save_html_report(state: QuoteState, filepath: str, pressure_unit: str = "bar") -> None:
    """Generate and save an HTML report to a file."""
    with open(filepath, "w", encoding="utf-8") as f:
        f.write(generate_html_report(state, pressure_unit))
