"""Assembly of the chart into one self-contained HTML document."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import List, Sequence

from jinja2 import Environment, PackageLoader, select_autoescape

from .layout import BodyRow

LABEL_COLUMN_WIDTH = 150
DAY_COLUMN_WIDTH = 20

_environment = Environment(
    loader=PackageLoader("mrogantt", "templates"),
    autoescape=select_autoescape(["html"]),
    trim_blocks=True,
    lstrip_blocks=True,
)


@dataclass
class MonthBand:
    label: str
    span: int


@dataclass
class DayHeader:
    day: date
    label: str
    weekend: bool
    is_today: bool


def month_bands(grid: Sequence[date]) -> List[MonthBand]:
    bands: List[MonthBand] = []
    for day in grid:
        label = day.strftime("%B %Y")
        if bands and bands[-1].label == label:
            bands[-1].span += 1
        else:
            bands.append(MonthBand(label, 1))
    return bands


def day_headers(grid: Sequence[date], today: date) -> List[DayHeader]:
    return [
        DayHeader(day=day, label=day.strftime("%d"), weekend=day.weekday() >= 5, is_today=day == today)
        for day in grid
    ]


def assemble_document(
    grid: Sequence[date],
    body: Sequence[BodyRow],
    today: date,
    title: str = "Gantt",
    label_width: int = LABEL_COLUMN_WIDTH,
    day_width: int = DAY_COLUMN_WIDTH,
) -> str:
    template = _environment.get_template("gantt/chart.html")
    return template.render(
        title=title,
        grid=grid,
        months=month_bands(grid),
        days=day_headers(grid, today),
        rows=body,
        column_count=len(grid) + 2,
        label_width=label_width,
        day_width=day_width,
    )
