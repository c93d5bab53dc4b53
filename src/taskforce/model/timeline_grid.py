# SPDX-License-Identifier: MIT

from typing import TypedDict

import pendulum

from taskforce.model.recommendation import Recommendation
from taskforce.model.timeline_item import TimelineItem


class WeekInfo(TypedDict):
    week_start: pendulum.DateTime
    week_end: pendulum.DateTime
    week_label: str
    week_key: str


class GridCell(TypedDict):
    items: list[TimelineItem]
    row_key: str
    week_key: str


class MonthGroup(TypedDict):
    month_label: str
    month_key: str
    year: int
    week_indices: list[int]


class YearGroup(TypedDict):
    year: int
    month_indices: list[int]


class TimelineGrid(TypedDict):
    weeks: list[WeekInfo]
    owners: list[str]
    # key: f"{owner}-{week_key}"
    cells: dict[str, GridCell]
    recommendations: list[Recommendation]
    # key: f"{recommendation_id}-{week_key}"
    recommendation_cells: dict[str, GridCell]
    weeks_with_items: list[str]
    month_groups: list[MonthGroup]
    year_groups: list[YearGroup]


def cell_key(row_key: str, week_key: str) -> str:
    return f"{row_key}-{week_key}"
