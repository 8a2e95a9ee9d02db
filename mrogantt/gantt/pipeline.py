from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, List, Optional, Sequence

from .document import assemble_document
from .grid import build_date_grid
from .layout import BodyRow, layout_body
from .ordering import order_tasks
from .tasks import DEFAULT_MAX_GRID_DAYS, TaskRecord, validate_tasks


@dataclass
class Chart:
    tasks: List[TaskRecord]
    grid: List[date]
    rows: List[BodyRow]
    html: str


def build_chart(raw_tasks: Sequence[Any], today: date, max_grid_days: Optional[int] = None) -> Chart:
    """Validate ``raw_tasks`` and assemble the chart document.

    Raises ``TaskValidationError`` or ``LayoutError`` before any markup is
    produced when the records cannot be charted.
    """

    tasks = validate_tasks(raw_tasks, max_grid_days or DEFAULT_MAX_GRID_DAYS).raise_for_errors()
    grid = build_date_grid(tasks, today)
    ordered = order_tasks(tasks)
    rows = layout_body(ordered, grid, today)
    return Chart(tasks=ordered, grid=grid, rows=rows, html=assemble_document(grid, rows, today))
