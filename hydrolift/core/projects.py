"""Numbered project store for HydroLift.

Projects live in one JSON file together with the monthly numbering
counter and an append-only activity log. Project numbers look like
``2025-1101``: year, month and a two-digit counter that restarts every
month. Updating a saved project records what changed as a revision.

The store does no locking; the last write wins.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, field, replace
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable

from hydrolift.core.cylinder import LoadInputs
from hydrolift.core.selection import SelectedConfiguration

logger = logging.getLogger(__name__)

PROJECTS_ENV_VAR = "HYDROLIFT_PROJECTS"
_DEFAULT_PROJECTS_PATH = Path.home() / ".hydrolift" / "projects.json"

STATUS_DRAFT = "draft"
STATUS_PRODUCTION = "production"

# Labels used in revision change lines
_INPUT_LABELS = {
    "capacity": "Capacity",
    "carcass_weight": "Carcass weight",
    "travel_distance": "Travel distance",
    "buffer": "Buffer",
    "speed": "Speed",
    "suspension": "Suspension",
    "cylinder_count": "Cylinder count",
    "regulation": "Regulation",
}
_COMPONENT_LABELS = {
    "motor": "Motor",
    "pump": "Pump",
    "power_unit": "Power unit",
    "rupture_valve": "Rupture valve",
    "main_valve": "Main valve",
    "voltage": "Voltage",
}


class ProjectNotFoundError(KeyError):
    """Raised when a project number is not in the store."""


@dataclass
class Revision:
    revision_number: int
    date: str
    changes: list[str] = field(default_factory=list)


@dataclass
class ProjectRecord:
    """One saved quote as kept in the project store."""

    customer: str
    inputs: dict[str, Any] = field(default_factory=dict)
    components: dict[str, Any] = field(default_factory=dict)
    selected_cylinder: str | None = None
    accessories: list[str] = field(default_factory=list)
    number: str = ""
    status: str = STATUS_DRAFT
    saved_date: str = ""
    revisions: list[Revision] = field(default_factory=list)

    @classmethod
    def from_selection(
        cls,
        customer: str,
        inputs: LoadInputs,
        config: SelectedConfiguration | None = None,
    ) -> ProjectRecord:
        """Build a record from load inputs and (optionally) a component selection."""
        if config is None:
            return cls(customer=customer, inputs=inputs.to_dict())
        return cls(
            customer=customer,
            inputs=inputs.to_dict(),
            components={
                "motor": config.motor,
                "pump": config.pump,
                "power_unit": config.power_unit,
                "rupture_valve": config.rupture_valve,
                "main_valve": config.main_valve,
                "voltage": config.voltage,
            },
            selected_cylinder=config.cylinder_type,
            accessories=sorted(config.accessories),
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ProjectRecord:
        data = dict(data)
        data["revisions"] = [Revision(**r) for r in data.get("revisions", [])]
        return cls(**data)


@dataclass
class ChangeLogEntry:
    user: str
    action: str
    details: str
    timestamp: str


def _fmt(value: Any) -> str:
    return "-" if value in (None, "") else str(value)


def diff_records(old: ProjectRecord, new: ProjectRecord) -> list[str]:
    """Human-readable change lines between two versions of a project."""
    changes: list[str] = []

    def check(label: str, before: Any, after: Any) -> None:
        if before != after:
            changes.append(f"{label}: {_fmt(before)} → {_fmt(after)}")

    check("Customer", old.customer, new.customer)
    for key, label in _INPUT_LABELS.items():
        check(label, old.inputs.get(key), new.inputs.get(key))
    for key, label in _COMPONENT_LABELS.items():
        check(label, old.components.get(key), new.components.get(key))
    check("Selected cylinder", old.selected_cylinder, new.selected_cylinder)

    added = [a for a in new.accessories if a not in old.accessories]
    if added:
        changes.append(f"Added accessories: {', '.join(added)}")
    removed = [a for a in old.accessories if a not in new.accessories]
    if removed:
        changes.append(f"Removed accessories: {', '.join(removed)}")
    return changes


def projects_path() -> Path:
    """Path of the project store (``HYDROLIFT_PROJECTS`` or ``~/.hydrolift/projects.json``)."""
    override = os.environ.get(PROJECTS_ENV_VAR)
    return Path(override).expanduser() if override else _DEFAULT_PROJECTS_PATH


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ProjectStore:
    """JSON-file backed project list.

    Args:
        path: Store file; created on first write. Defaults to :func:`projects_path`.
        clock: Returns the current time; replaced in tests.
    """

    def __init__(
        self,
        path: str | Path | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.path = Path(path) if path is not None else projects_path()
        self._clock = clock

    # --- File access ---

    def _read(self) -> dict[str, Any]:
        if not self.path.exists():
            return {"counter": {"year_month": "", "counter": 0}, "projects": [], "log": []}
        with open(self.path, encoding="utf-8") as f:
            data = json.load(f)
        data.setdefault("counter", {"year_month": "", "counter": 0})
        data.setdefault("projects", [])
        data.setdefault("log", [])
        return data

    def _write(self, data: dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)

    @staticmethod
    def _find(data: dict[str, Any], number: str) -> int:
        for i, project in enumerate(data["projects"]):
            if project["number"] == number:
                return i
        raise ProjectNotFoundError(number)

    # --- Numbering ---

    def _next_number(self, data: dict[str, Any]) -> str:
        year_month = self._clock().strftime("%Y-%m")
        counter = data["counter"]
        if counter.get("year_month") != year_month:
            counter = {"year_month": year_month, "counter": 1}
        else:
            counter = {"year_month": year_month, "counter": counter["counter"] + 1}
        data["counter"] = counter
        return f"{year_month}{counter['counter']:02d}"

    # --- Projects ---

    def save(self, record: ProjectRecord) -> ProjectRecord:
        """Store *record* as a new draft project under a fresh number."""
        data = self._read()
        saved = replace(
            record,
            number=self._next_number(data),
            status=STATUS_DRAFT,
            saved_date=self._clock().isoformat(),
            revisions=[],
        )
        data["projects"].append(asdict(saved))
        self._write(data)
        logger.info("Saved project %s (%s)", saved.number, saved.customer)
        return saved

    def update(self, record: ProjectRecord) -> ProjectRecord:
        """Replace a stored project, keeping its number and status.

        A revision listing the changes is appended when anything differs
        from the stored copy.

        Raises:
            ProjectNotFoundError: If ``record.number`` is not stored.
        """
        data = self._read()
        index = self._find(data, record.number)
        old = ProjectRecord.from_dict(data["projects"][index])

        now = self._clock().isoformat()
        revisions = list(old.revisions)
        changes = diff_records(old, record)
        if changes:
            revisions.append(Revision(revision_number=len(revisions) + 1, date=now, changes=changes))

        updated = replace(record, status=old.status, saved_date=now, revisions=revisions)
        data["projects"][index] = asdict(updated)
        self._write(data)
        if changes:
            logger.info("Updated project %s (rev. %d)", record.number, len(revisions))
        else:
            logger.info("Saved project %s (no changes)", record.number)
        return updated

    def load(self, number: str) -> ProjectRecord:
        data = self._read()
        return ProjectRecord.from_dict(data["projects"][self._find(data, number)])

    def delete(self, number: str) -> None:
        data = self._read()
        del data["projects"][self._find(data, number)]
        self._write(data)
        logger.info("Deleted project %s", number)

    def list_projects(self) -> list[ProjectRecord]:
        """All projects, most recently saved first."""
        records = [ProjectRecord.from_dict(p) for p in self._read()["projects"]]
        return sorted(records, key=lambda r: r.saved_date, reverse=True)

    def move_to_production(self, number: str) -> ProjectRecord:
        """Mark a project as released to production."""
        data = self._read()
        index = self._find(data, number)
        data["projects"][index]["status"] = STATUS_PRODUCTION
        self._write(data)
        logger.info("Project %s moved to production", number)
        return ProjectRecord.from_dict(data["projects"][index])

    # --- Activity log ---

    def log_change(self, user: str, action: str, details: str = "") -> ChangeLogEntry:
        """Append an entry to the activity log."""
        entry = ChangeLogEntry(
            user=user or "unknown",
            action=action,
            details=details,
            timestamp=self._clock().isoformat(),
        )
        data = self._read()
        data["log"].append(asdict(entry))
        self._write(data)
        return entry

    def activity_log(self) -> list[ChangeLogEntry]:
        return [ChangeLogEntry(**e) for e in self._read()["log"]]
