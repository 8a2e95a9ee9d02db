"""Facility → aircraft → task ordering used for rows and separators."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Dict, Hashable, Iterator, List, Sequence, Tuple

from .tasks import TaskRecord


@dataclass
class _GroupKey:
    earliest_end: date
    first_seen: int


def _group_keys(tasks: Sequence[TaskRecord], key_of) -> Dict[Hashable, _GroupKey]:
    groups: Dict[Hashable, _GroupKey] = {}
    for index, task in enumerate(tasks):
        key = key_of(task)
        group = groups.get(key)
        if group is None:
            groups[key] = _GroupKey(task.end_date, index)
        elif task.end_date < group.earliest_end:
            group.earliest_end = task.end_date
    return groups


def order_tasks(tasks: Sequence[TaskRecord]) -> List[TaskRecord]:
    """Return a new list sorted for rendering.

    Facilities whose earliest task finishes first come first, then aircraft
    within a facility by the same rule, then tasks by their own end date.
    Groups tied on end date keep the order in which they first appear, and
    ``sorted`` is stable, so tied tasks keep the caller's order.
    """

    facilities = _group_keys(tasks, lambda task: task.facility)
    aircraft = _group_keys(tasks, lambda task: (task.facility, task.aircraft))

    def sort_key(task: TaskRecord):
        facility = facilities[task.facility]
        tail = aircraft[(task.facility, task.aircraft)]
        return (
            facility.earliest_end,
            facility.first_seen,
            tail.earliest_end,
            tail.first_seen,
            task.end_date,
        )

    return sorted(tasks, key=sort_key)


def group_breaks(ordered: Sequence[TaskRecord]) -> Iterator[Tuple[TaskRecord, bool, bool]]:
    """Yield ``(task, new_facility, new_aircraft)`` for each task in order."""

    last_facility = None
    last_aircraft = None
    for task in ordered:
        new_facility = task.facility != last_facility
        new_aircraft = new_facility or task.aircraft != last_aircraft
        last_facility = task.facility
        last_aircraft = task.aircraft
        yield task, new_facility, new_aircraft
