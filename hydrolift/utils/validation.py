"""Design rule checking and input validation for HydroLift.

The calculation engines assume well-formed numeric input; callers run
these checks first and refuse to calculate when errors are reported.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Severity(Enum):
    """Severity level for validation messages."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass
class ValidationMessage:
    """A single validation finding."""

    severity: Severity
    parameter: str
    message: str
    value: Any = None
    limit: Any = None


@dataclass
class ValidationResult:
    """Aggregated validation result."""

    messages: list[ValidationMessage] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not any(m.severity == Severity.ERROR for m in self.messages)

    @property
    def has_warnings(self) -> bool:
        return any(m.severity == Severity.WARNING for m in self.messages)

    @property
    def errors(self) -> list[ValidationMessage]:
        return [m for m in self.messages if m.severity == Severity.ERROR]

    @property
    def warnings(self) -> list[ValidationMessage]:
        return [m for m in self.messages if m.severity == Severity.WARNING]

    def add(self, severity: Severity, parameter: str, message: str, **kwargs: Any) -> None:
        self.messages.append(
            ValidationMessage(severity=severity, parameter=parameter, message=message, **kwargs)
        )

    def error(self, parameter: str, message: str, **kwargs: Any) -> None:
        self.add(Severity.ERROR, parameter, message, **kwargs)

    def warning(self, parameter: str, message: str, **kwargs: Any) -> None:
        self.add(Severity.WARNING, parameter, message, **kwargs)

    def info(self, parameter: str, message: str, **kwargs: Any) -> None:
        self.add(Severity.INFO, parameter, message, **kwargs)

    def merge(self, other: ValidationResult) -> None:
        self.messages.extend(other.messages)


# --- Common validators ---


def validate_finite(name: str, value: Any, result: ValidationResult) -> bool:
    """Validate that a value is a finite number. Returns True if it is."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        result.error(name, f"{name} must be a number, got {value!r}", value=value)
        return False
    if not math.isfinite(value):
        result.error(name, f"{name} must be finite, got {value}", value=value)
        return False
    return True


def validate_positive(name: str, value: float, result: ValidationResult) -> None:
    """Validate that a value is strictly positive."""
    if value <= 0:
        result.error(name, f"{name} must be positive, got {value}", value=value, limit=0)


def validate_non_negative(name: str, value: float, result: ValidationResult) -> None:
    """Validate that a value is zero or positive."""
    if value < 0:
        result.error(name, f"{name} must not be negative, got {value}", value=value, limit=0)


def validate_range(
    name: str,
    value: float,
    low: float,
    high: float,
    result: ValidationResult,
    severity: Severity = Severity.ERROR,
) -> None:
    """Validate that a value falls within [low, high]."""
    if value < low or value > high:
        result.add(severity, name, f"{name} = {value} is outside [{low}, {high}]", value=value)


def validate_load_inputs(inputs: dict[str, Any]) -> ValidationResult:
    """Run validation checks on raw elevator load inputs.

    Accepts the plain mapping a form or command line produces (keys as
    in :class:`hydrolift.core.cylinder.LoadInputs`). Missing optional
    keys (``buffer``, ``regulation``) are not reported.
    """
    result = ValidationResult()

    for name in ("capacity", "carcass_weight", "travel_distance", "speed"):
        if name not in inputs:
            result.error(name, f"{name} is required")
            continue
        if validate_finite(name, inputs[name], result):
            validate_positive(name, inputs[name], result)

    buffer = inputs.get("buffer")
    if buffer is not None and validate_finite("buffer", buffer, result):
        validate_non_negative("buffer", buffer, result)

    count = inputs.get("cylinder_count")
    if count is None:
        result.error("cylinder_count", "cylinder_count is required")
    elif isinstance(count, bool) or not isinstance(count, int):
        result.error("cylinder_count", f"cylinder_count must be an integer, got {count!r}")
    else:
        validate_positive("cylinder_count", count, result)
        if count > 4:
            result.warning("cylinder_count", f"{count} cylinders is unusual for a hydraulic lift")

    suspension = str(inputs.get("suspension", ""))
    if suspension not in ("1:1", "2:1"):
        result.error("suspension", f"suspension must be '1:1' or '2:1', got {suspension!r}")

    speed = inputs.get("speed")
    if isinstance(speed, (int, float)) and math.isfinite(speed) and speed > 0:
        validate_range("speed", speed, 0.1, 1.0, result, Severity.WARNING)

    return result
