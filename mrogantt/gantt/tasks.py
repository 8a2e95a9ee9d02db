"""Task records and the validation stage that guards the render pipeline."""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Any, List, Mapping, Optional, Sequence

from dateutil.parser import isoparse

COMPONENT_FIELD = "Component Group"
AIRCRAFT_FIELD = "Aircraft"
FACILITY_FIELD = "MRO"
WARNING_FIELD = "Warning"
START_FIELD = "Start Date"
END_FIELD = "End Date"
PERCENT_FIELD = "PercentComplete"

GRID_PADDING_DAYS = 3
DEFAULT_MAX_GRID_DAYS = 3660

_EARLIEST_DATE = date.min + timedelta(days=GRID_PADDING_DAYS)
_LATEST_DATE = date.max - timedelta(days=GRID_PADDING_DAYS)


class PayloadError(ValueError):
    """Raised when the request body does not carry a usable task array."""


class TaskValidationError(ValueError):
    """Raised when task records cannot be turned into a chart."""

    def __init__(self, message: str, details: Optional[Sequence[str]] = None):
        super().__init__(message)
        self.details = list(details or [])


@dataclass(frozen=True)
class TaskRecord:
    """One maintenance activity as displayed on the chart.

    Attributes
    ----------
    component_group:
        Row label, the part or work category.
    aircraft:
        Tail number of the asset, second grouping level.
    facility:
        Maintenance organisation (MRO), first grouping level.
    warning:
        Free-text severity tag; empty when the payload carried none.
    start_date, end_date:
        Inclusive interval of the work.
    percent_complete:
        Fraction of the work completed, within ``[0, 1]``.
    """

    component_group: str
    aircraft: str
    facility: str
    warning: str
    start_date: date
    end_date: date
    percent_complete: float = 0.0

    @property
    def warning_label(self) -> str:
        return self.warning or "N/A"


@dataclass
class ValidationResult:
    tasks: List[TaskRecord] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def raise_for_errors(self) -> List[TaskRecord]:
        if self.errors:
            raise TaskValidationError("Invalid task records", self.errors)
        return self.tasks


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    return str(value)


def _parse_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise ValueError("missing")
    return isoparse(value.strip()).date()


def _parse_percent(value: Any) -> float:
    if value is None or value == "":
        return 0.0
    if isinstance(value, bool):
        raise ValueError("must be a number")
    try:
        percent = float(value)
    except (TypeError, ValueError):
        raise ValueError("must be a number") from None
    if not math.isfinite(percent):
        raise ValueError("must be a finite number")
    if percent < 0 or percent > 1:
        raise ValueError("must be between 0 and 1")
    return percent


def parse_task(raw: Mapping[str, Any], index: int = 0) -> TaskRecord:
    """Build a :class:`TaskRecord` from one wire object.

    Raises :class:`TaskValidationError` listing every problem found on the
    record.
    """

    problems: List[str] = []
    start = end = None
    percent = 0.0

    try:
        start = _parse_date(raw.get(START_FIELD))
    except (ValueError, OverflowError):
        problems.append(f"task {index}: '{START_FIELD}' must be an ISO date")
    try:
        end = _parse_date(raw.get(END_FIELD))
    except (ValueError, OverflowError):
        problems.append(f"task {index}: '{END_FIELD}' must be an ISO date")
    for label, value in ((START_FIELD, start), (END_FIELD, end)):
        if value and not _EARLIEST_DATE <= value <= _LATEST_DATE:
            problems.append(
                f"task {index}: '{label}' must be between {_EARLIEST_DATE} and {_LATEST_DATE}"
            )
    if start and end and start > end:
        problems.append(f"task {index}: '{START_FIELD}' is after '{END_FIELD}'")

    try:
        percent = _parse_percent(raw.get(PERCENT_FIELD))
    except ValueError as exc:
        problems.append(f"task {index}: '{PERCENT_FIELD}' {exc}")

    if problems:
        raise TaskValidationError("Invalid task record", problems)

    warning = _text(raw.get(WARNING_FIELD))
    if warning.upper() == "N/A":
        warning = ""

    return TaskRecord(
        component_group=_text(raw.get(COMPONENT_FIELD)),
        aircraft=_text(raw.get(AIRCRAFT_FIELD)),
        facility=_text(raw.get(FACILITY_FIELD)),
        warning=warning,
        start_date=start,
        end_date=end,
        percent_complete=percent,
    )


def validate_tasks(raw_tasks: Sequence[Any], max_grid_days: int = DEFAULT_MAX_GRID_DAYS) -> ValidationResult:
    """Validate a raw task array, collecting all record errors at once.

    ``max_grid_days`` caps the padded calendar range the chart may cover.
    """

    result = ValidationResult()
    if not raw_tasks:
        result.errors.append("Task list is empty")
        return result

    for index, raw in enumerate(raw_tasks):
        if not isinstance(raw, Mapping):
            result.errors.append(f"task {index}: expected an object")
            continue
        try:
            result.tasks.append(parse_task(raw, index))
        except TaskValidationError as exc:
            result.errors.extend(exc.details)

    if result.tasks and not result.errors:
        earliest = min(task.start_date for task in result.tasks)
        latest = max(task.end_date for task in result.tasks)
        grid_days = (latest - earliest).days + 1 + 2 * GRID_PADDING_DAYS
        if grid_days > max_grid_days:
            result.errors.append(
                f"Tasks span {grid_days} days from {earliest} to {latest}; the chart allows at most {max_grid_days}"
            )

    if result.errors:
        result.tasks = []
    return result


def tasks_from_body(body: Any) -> List[Any]:
    """Extract the raw ``tasks`` array from a decoded JSON body."""

    if not isinstance(body, Mapping) or not isinstance(body.get("tasks"), list):
        raise PayloadError("Invalid or missing tasks array")
    return body["tasks"]
