"""Calendar grid forming the horizontal axis of the chart."""
from __future__ import annotations

from datetime import date, timedelta
from typing import List, Sequence, Tuple

from .tasks import GRID_PADDING_DAYS, TaskRecord, TaskValidationError


def date_bounds(tasks: Sequence[TaskRecord]) -> Tuple[date, date]:
    if not tasks:
        raise TaskValidationError("Invalid task records", ["Task list is empty"])
    lower = min(task.start_date for task in tasks) - timedelta(days=GRID_PADDING_DAYS)
    upper = max(task.end_date for task in tasks) + timedelta(days=GRID_PADDING_DAYS)
    return lower, upper


def build_date_grid(tasks: Sequence[TaskRecord], today: date) -> List[date]:
    """Return the sampled days displayed as chart columns.

    Every other day from the padded lower bound is kept, plus ``today`` so the
    marker column always exists when it falls inside the bounds.
    """

    lower, upper = date_bounds(tasks)
    grid: List[date] = []
    for offset in range((upper - lower).days + 1):
        day = lower + timedelta(days=offset)
        if offset % 2 == 0 or day == today:
            grid.append(day)
    return grid
