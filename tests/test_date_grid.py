from datetime import date, timedelta
from pathlib import Path
import sys

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from mrogantt.gantt.grid import build_date_grid, date_bounds
from mrogantt.gantt.tasks import TaskRecord, TaskValidationError

FAR_AWAY = date(2030, 6, 1)


def _task(start, end, **overrides):
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


def test_bounds_are_padded_by_three_days():
    tasks = [
        _task(date(2025, 1, 5), date(2025, 1, 10)),
        _task(date(2025, 1, 1), date(2025, 1, 7)),
        _task(date(2025, 1, 3), date(2025, 1, 20)),
    ]
    lower, upper = date_bounds(tasks)
    assert lower == date(2024, 12, 29)
    assert upper == date(2025, 1, 23)


def test_grid_keeps_every_other_day_from_lower_bound():
    tasks = [_task(date(2025, 1, 1), date(2025, 1, 10))]
    grid = build_date_grid(tasks, FAR_AWAY)

    assert grid[0] == date(2024, 12, 29)
    assert grid[-1] == date(2025, 1, 12)
    assert len(grid) == 8
    assert all((day - grid[0]).days % 2 == 0 for day in grid)
    assert grid == sorted(set(grid))


def test_grid_always_contains_today_inside_bounds():
    tasks = [_task(date(2025, 1, 1), date(2025, 1, 10))]
    today = date(2025, 1, 5)
    grid = build_date_grid(tasks, today)

    assert today in grid
    lower = date(2024, 12, 29)
    for day in grid:
        assert (day - lower).days % 2 == 0 or day == today


def test_today_on_even_offset_is_not_duplicated():
    tasks = [_task(date(2025, 1, 1), date(2025, 1, 10))]
    today = date(2025, 1, 4)
    grid = build_date_grid(tasks, today)
    assert grid.count(today) == 1
    assert len(grid) == 8


def test_single_day_task_produces_padded_grid():
    day = date(2025, 3, 15)
    grid = build_date_grid([_task(day, day)], FAR_AWAY)
    assert grid == [day + timedelta(days=offset) for offset in (-3, -1, 1, 3)]


def test_empty_task_list_is_a_typed_failure():
    with pytest.raises(TaskValidationError) as excinfo:
        build_date_grid([], FAR_AWAY)
    assert excinfo.value.details == ["Task list is empty"]
