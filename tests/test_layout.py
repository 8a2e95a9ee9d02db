from datetime import date
from pathlib import Path
import sys

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from mrogantt.gantt.grid import build_date_grid
from mrogantt.gantt.layout import (
    AircraftRow,
    BarCell,
    EmptyCell,
    FacilityRow,
    LayoutError,
    Severity,
    SpacerRow,
    TaskRow,
    layout_body,
    layout_task,
    severity_for,
)
from mrogantt.gantt.ordering import order_tasks
from mrogantt.gantt.tasks import TaskRecord

FAR_AWAY = date(2030, 6, 1)


def _task(start=date(2025, 1, 1), end=date(2025, 1, 10), **overrides):
    values = dict(
        component_group="Wheel",
        aircraft="N100",
        facility="FacilityA",
        warning="",
        start_date=start,
        end_date=end,
        percent_complete=0.5,
    )
    values.update(overrides)
    return TaskRecord(**values)


@pytest.mark.parametrize(
    "warning, expected",
    [
        ("WorkStoppage", Severity.CRITICAL),
        ("Work Stoppage", Severity.CRITICAL),
        ("Caution", Severity.CAUTION),
        ("Check hydraulic leak", Severity.CAUTION),
        ("N/A", Severity.NONE),
        ("None", Severity.NONE),
        ("", Severity.NONE),
        (None, Severity.NONE),
    ],
)
def test_severity_for_warning(warning, expected):
    assert severity_for(warning) is expected


def test_bar_spans_grid_columns_inside_interval():
    task = _task()
    grid = build_date_grid([task], FAR_AWAY)
    row = layout_task(task, grid, FAR_AWAY)

    bar = row.bar
    assert bar.start == date(2025, 1, 2)
    assert bar.span == 5
    assert bar.span == sum(1 for day in grid if task.start_date <= day <= task.end_date)
    empty = [cell for cell in row.cells if isinstance(cell, EmptyCell)]
    assert len(empty) + bar.span == len(grid)
    assert row.cells.index(bar) == 2


def test_partial_progress_fill_and_label():
    task = _task(percent_complete=0.5)
    grid = build_date_grid([task], FAR_AWAY)
    bar = layout_task(task, grid, FAR_AWAY).bar
    assert bar.fill_percent == 50
    assert bar.label == "50.0%"
    assert bar.complete is False


def test_complete_variant_at_full_progress():
    task = _task(percent_complete=1.0)
    grid = build_date_grid([task], FAR_AWAY)
    bar = layout_task(task, grid, FAR_AWAY).bar
    assert bar.complete is True
    assert bar.fill_percent == 100
    assert bar.label == "100.0%"


def test_zero_progress():
    task = _task(percent_complete=0.0)
    grid = build_date_grid([task], FAR_AWAY)
    bar = layout_task(task, grid, FAR_AWAY).bar
    assert bar.fill_percent == 0
    assert bar.label == "0.0%"
    assert bar.complete is False


def test_bar_carries_severity():
    task = _task(warning="WorkStoppage")
    grid = build_date_grid([task], FAR_AWAY)
    row = layout_task(task, grid, FAR_AWAY)
    assert row.severity is Severity.CRITICAL
    assert row.bar.severity is Severity.CRITICAL


def test_today_column_outside_bar_is_marked():
    task = _task()
    today = date(2025, 1, 11)
    grid = build_date_grid([task], today)
    row = layout_task(task, grid, today)

    marked = [cell.day for cell in row.cells if isinstance(cell, EmptyCell) and cell.is_today]
    assert marked == [today]
    assert row.bar.today_offset is None


def test_today_inside_bar_sets_marker_offset():
    task = _task()
    today = date(2025, 1, 5)
    grid = build_date_grid([task], today)
    row = layout_task(task, grid, today)

    assert row.bar.span == 6
    assert row.bar.today_offset == pytest.approx(33.33)
    assert not any(isinstance(cell, EmptyCell) and cell.is_today for cell in row.cells)


def test_task_outside_grid_is_rejected():
    grid = build_date_grid([_task()], FAR_AWAY)
    outsider = _task(start=date(2026, 1, 1), end=date(2026, 1, 2))
    with pytest.raises(LayoutError):
        layout_task(outsider, grid, FAR_AWAY)


def test_single_day_task_between_sampled_days_takes_previous_column():
    grid = [date(2025, 1, 1), date(2025, 1, 3)]
    row = layout_task(_task(start=date(2025, 1, 2), end=date(2025, 1, 2)), grid, FAR_AWAY)

    assert row.bar.start == date(2025, 1, 1)
    assert row.bar.span == 1
    assert len(row.cells) == 2


def test_lone_single_day_task_gets_one_column():
    task = _task(start=date(2025, 3, 15), end=date(2025, 3, 15))
    grid = build_date_grid([task], FAR_AWAY)
    row = layout_task(task, grid, FAR_AWAY)

    assert date(2025, 3, 15) not in grid
    assert row.bar.start == date(2025, 3, 14)
    assert row.bar.span == 1
    assert row.bar.today_offset is None
    assert len(row.cells) == len(grid)


def test_single_day_task_at_odd_offset_among_others():
    tasks = [
        _task(component_group="Wheel", start=date(2025, 1, 1), end=date(2025, 1, 10)),
        _task(component_group="Brakes", start=date(2025, 1, 3), end=date(2025, 1, 3)),
    ]
    grid = build_date_grid(tasks, FAR_AWAY)
    rows = layout_body(order_tasks(tasks), grid, FAR_AWAY)
    bars = {row.task.component_group: row.bar for row in rows if isinstance(row, TaskRow)}

    assert bars["Brakes"].start == date(2025, 1, 2)
    assert bars["Brakes"].span == 1
    assert bars["Wheel"].start == date(2025, 1, 2)
    assert bars["Wheel"].span == 5


def test_body_rows_for_two_aircraft_under_one_facility():
    tasks = [
        _task(component_group="Brakes", aircraft="N200", end=date(2025, 1, 12)),
        _task(component_group="Wheel", aircraft="N100", end=date(2025, 1, 6)),
    ]
    ordered = order_tasks(tasks)
    grid = build_date_grid(ordered, FAR_AWAY)
    rows = layout_body(ordered, grid, FAR_AWAY)

    assert [type(row) for row in rows] == [FacilityRow, AircraftRow, TaskRow, AircraftRow, TaskRow]
    assert [row.name for row in rows if isinstance(row, AircraftRow)] == ["N100", "N200"]
    assert rows[0].name == "FacilityA"


def test_spacer_precedes_every_facility_after_the_first():
    tasks = [
        _task(facility="FacA", end=date(2025, 1, 4)),
        _task(facility="FacB", end=date(2025, 1, 8)),
    ]
    ordered = order_tasks(tasks)
    grid = build_date_grid(ordered, FAR_AWAY)
    rows = layout_body(ordered, grid, FAR_AWAY)

    assert [type(row) for row in rows] == [
        FacilityRow,
        AircraftRow,
        TaskRow,
        SpacerRow,
        FacilityRow,
        AircraftRow,
        TaskRow,
    ]
    assert all(isinstance(row.bar, BarCell) for row in rows if isinstance(row, TaskRow))
