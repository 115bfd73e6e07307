"""Quote state management and file I/O for HydroLift.

A quote is saved as a single JSON file holding the load inputs, the
chosen cylinder, the component picks and the computed cost and thermal
figures.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import numpy as np

from hydrolift import __version__

logger = logging.getLogger(__name__)


# --- Quote metadata ---


@dataclass
class ProjectMeta:
    """Top-level quote metadata."""

    name: str = "Untitled"
    customer: str = ""
    author: str = ""
    version: str = __version__
    created: str = ""
    modified: str = ""

    def touch(self) -> None:
        """Update the modified timestamp (and set ``created`` on first save)."""
        now = datetime.now(timezone.utc).isoformat()
        if not self.created:
            self.created = now
        self.modified = now


@dataclass
class QuoteState:
    """Complete quote state.

    Each section holds the ``to_dict()`` form of the matching engine
    result so the file stays readable without HydroLift installed.
    """

    meta: ProjectMeta = field(default_factory=ProjectMeta)

    # LoadInputs
    inputs: dict[str, Any] = field(default_factory=dict)

    # CylinderEvaluation of the chosen cylinder
    cylinder: dict[str, Any] = field(default_factory=dict)

    # SelectedConfiguration
    selection: dict[str, Any] = field(default_factory=dict)

    # CostBreakdown, plus "total"
    cost: dict[str, Any] = field(default_factory=dict)

    # ThermalResult
    thermal: dict[str, Any] = field(default_factory=dict)


# --- JSON serialization ---


class _NumpyEncoder(json.JSONEncoder):
    """JSON encoder that handles numpy scalars and arrays, sets and frozensets."""

    def default(self, obj: Any) -> Any:
        if isinstance(obj, np.ndarray):
            return obj.tolist()
        if isinstance(obj, np.integer):
            return int(obj)
        if isinstance(obj, np.floating):
            return float(obj)
        if isinstance(obj, np.bool_):
            return bool(obj)
        if isinstance(obj, (set, frozenset)):
            return sorted(obj)
        return super().default(obj)


def save_quote_json(state: QuoteState, path: str | Path) -> None:
    """Save a quote to a JSON file."""
    path = Path(path)
    state.meta.touch()
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w", encoding="utf-8") as f:
        json.dump(asdict(state), f, indent=2, cls=_NumpyEncoder)

    logger.info("Saved quote to %s", path)


def load_quote_json(path: str | Path) -> QuoteState:
    """Load a quote from a JSON file."""
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        data = json.load(f)

    meta = ProjectMeta(**data.pop("meta", {}))
    return QuoteState(meta=meta, **data)
