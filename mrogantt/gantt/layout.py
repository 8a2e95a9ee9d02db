"""Placement of task bars on the sampled date grid."""
from __future__ import annotations

import enum
import math
from bisect import bisect_right
from dataclasses import dataclass, field
from datetime import date
from typing import ClassVar, List, Optional, Sequence, Union

from .ordering import group_breaks
from .tasks import TaskRecord


class LayoutError(ValueError):
    """Raised when a task cannot be placed on the grid."""


class Severity(enum.Enum):
    NONE = ""
    CAUTION = "warning-caution"
    CRITICAL = "warning-critical"

    @property
    def css_class(self) -> str:
        return self.value


_CRITICAL_WARNINGS = {"workstoppage"}
_EMPTY_WARNINGS = {"", "n/a", "none"}


def severity_for(warning: Optional[str]) -> Severity:
    normalised = "".join((warning or "").split()).lower()
    if normalised in _CRITICAL_WARNINGS:
        return Severity.CRITICAL
    if normalised in _EMPTY_WARNINGS:
        return Severity.NONE
    return Severity.CAUTION


@dataclass
class EmptyCell:
    kind: ClassVar[str] = "empty"

    day: date
    is_today: bool = False


@dataclass
class BarCell:
    kind: ClassVar[str] = "bar"

    start: date
    span: int
    severity: Severity
    fill_percent: int
    complete: bool
    label: str
    today_offset: Optional[float] = None


Cell = Union[EmptyCell, BarCell]


@dataclass
class TaskRow:
    kind: ClassVar[str] = "task"

    task: TaskRecord
    severity: Severity
    cells: List[Cell] = field(default_factory=list)

    @property
    def bar(self) -> BarCell:
        return next(cell for cell in self.cells if isinstance(cell, BarCell))


@dataclass
class SpacerRow:
    kind: ClassVar[str] = "spacer"


@dataclass
class FacilityRow:
    kind: ClassVar[str] = "facility"

    name: str


@dataclass
class AircraftRow:
    kind: ClassVar[str] = "aircraft"

    name: str


BodyRow = Union[SpacerRow, FacilityRow, AircraftRow, TaskRow]


def percent_label(percent: float) -> str:
    return f"{percent * 100:.1f}%"


def layout_task(task: TaskRecord, grid: Sequence[date], today: date) -> TaskRow:
    """Lay out one task row over ``grid``.

    The bar covers every grid column whose day lies in the task interval, so
    its width is counted in sampled columns rather than calendar days. An
    interval that falls between two sampled days takes the column of the
    sampled day before it.
    """

    if not grid or task.end_date < grid[0] or task.start_date > grid[-1]:
        raise LayoutError(
            f"Task '{task.component_group}' ({task.start_date} to {task.end_date}) does not intersect the chart"
        )

    covered = [index for index, day in enumerate(grid) if task.start_date <= day <= task.end_date]
    if covered:
        first, span = covered[0], len(covered)
    else:
        first, span = bisect_right(grid, task.start_date) - 1, 1
    severity = severity_for(task.warning)
    percent = task.percent_complete

    today_offset = None
    if task.start_date <= today <= task.end_date and today in grid:
        today_offset = round((grid.index(today) - first) / span * 100, 2)

    bar = BarCell(
        start=grid[first],
        span=span,
        severity=severity,
        fill_percent=math.floor(min(percent, 1.0) * 100),
        complete=percent >= 1,
        label=percent_label(percent),
        today_offset=today_offset,
    )

    cells: List[Cell] = [EmptyCell(day, day == today) for day in grid[:first]]
    cells.append(bar)
    cells.extend(EmptyCell(day, day == today) for day in grid[first + span:])
    return TaskRow(task=task, severity=severity, cells=cells)


def layout_body(ordered: Sequence[TaskRecord], grid: Sequence[date], today: date) -> List[BodyRow]:
    rows: List[BodyRow] = []
    for task, new_facility, new_aircraft in group_breaks(ordered):
        if new_facility:
            if rows:
                rows.append(SpacerRow())
            rows.append(FacilityRow(task.facility))
        if new_aircraft:
            rows.append(AircraftRow(task.aircraft))
        rows.append(layout_task(task, grid, today))
    return rows
