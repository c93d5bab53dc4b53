# SPDX-License-Identifier: MIT

import logging
from typing import Callable, Optional

import pendulum

from taskforce.model.recommendation import (
    Recommendation,
    is_owned_by,
    recommendation_owners,
)
from taskforce.model.timeline_grid import (
    GridCell,
    MonthGroup,
    TimelineGrid,
    WeekInfo,
    YearGroup,
    cell_key,
)
from taskforce.model.timeline_item import TimelineItem
from taskforce.service.timeline import get_timeline_items
from taskforce.time import today_local, week_end, week_start

logger = logging.getLogger(__name__)

DEFAULT_WEEKS_AHEAD = 52
DEFAULT_WEEKS_BACK = 4


def get_week_key(datetime: pendulum.DateTime) -> str:
    """ISO date of the Monday starting the week that contains datetime."""
    return week_start(datetime).format("YYYY-MM-DD")


def format_week_label(start: pendulum.DateTime, end: pendulum.DateTime) -> str:
    """Format a week label, e.g. "6-12 Jan 2025" or "27 Jan - 2 Feb 2025"."""
    start_month = start.format("MMM")
    end_month = end.format("MMM")
    if start_month == end_month:
        return f"{start.day}-{end.day} {start_month} {start.year}"
    return f"{start.day} {start_month} - {end.day} {end_month} {start.year}"


def generate_weeks(
    start: pendulum.DateTime, end: pendulum.DateTime
) -> list[WeekInfo]:
    """
    Generate the contiguous weeks covering start to end.

    Both bounds are snapped to their Monday week starts and every week from
    the first through the last is emitted, one per 7-day step.
    """
    weeks: list[WeekInfo] = []
    current = week_start(start)
    last = week_start(end)

    while current <= last:
        end_of_week = week_end(current)
        weeks.append(
            {
                "week_start": current,
                "week_end": end_of_week,
                "week_label": format_week_label(current, end_of_week),
                "week_key": current.format("YYYY-MM-DD"),
            }
        )
        current = current.add(weeks=1)

    return weeks


def build_week_lattice(
    items: list[TimelineItem],
    weeks_ahead: int = DEFAULT_WEEKS_AHEAD,
    weeks_back: int = DEFAULT_WEEKS_BACK,
    today: Optional[pendulum.DateTime] = None,
) -> list[WeekInfo]:
    """
    Build the week sequence spanning the items' dates.

    The range runs from the earliest item date minus weeks_back weeks to the
    later of the latest item date and today, plus weeks_ahead weeks.

    Args:
        items: Timeline items to span
        weeks_ahead: Weeks of look-ahead after the later of latest date/today
        weeks_back: Weeks of look-back before the earliest date
        today: Reference date (defaults to today, local)

    Returns:
        Ordered, gapless list of weeks; empty when there are no items
    """
    if weeks_ahead < 0 or weeks_back < 0:
        raise ValueError(
            f"Week windows must not be negative (ahead={weeks_ahead}, back={weeks_back})"
        )
    if not items:
        return []
    if today is None:
        today = today_local()

    dates = [item["date"] for item in items]
    min_date = min(dates)
    max_date = max(dates)

    start = min_date.subtract(weeks=weeks_back)
    end = max(max_date, today.in_tz("local").start_of("day")).add(weeks=weeks_ahead)

    return generate_weeks(start, end)


def resolve_owner_axis(
    items: list[TimelineItem], recommendations: list[Recommendation]
) -> list[str]:
    """
    Rank every owner (primary or co-owner) referenced by the items.

    Owners are ordered by the fraction of their recommendations that are
    completed (descending), then by how many recommendations they own
    (descending), then by name. Statistics are taken over all of
    recommendations, not only those with timeline items.
    """
    owners: set[str] = set()
    for item in items:
        owners.update(recommendation_owners(item["recommendation"]))

    owner_stats: list[tuple[str, float, int]] = []
    for owner in owners:
        owned = [r for r in recommendations if is_owned_by(r, owner)]
        total = len(owned)
        completed = len(
            [r for r in owned if r["overall_status"]["status"] == "completed"]
        )
        completion = completed / total if total > 0 else 0.0
        owner_stats.append((owner, completion, total))

    owner_stats.sort(key=lambda stats: (-stats[1], -stats[2], stats[0]))
    return [owner for owner, _, _ in owner_stats]


def resolve_recommendation_axis(items: list[TimelineItem]) -> list[Recommendation]:
    """
    Distinct recommendations referenced by the items, sorted by code.

    Codes compare as plain strings, so "R10" sorts before "R2".
    """
    unique: dict[int, Recommendation] = {}
    for item in items:
        recommendation = item["recommendation"]
        if recommendation["id"] not in unique:
            unique[recommendation["id"]] = recommendation

    return sorted(unique.values(), key=lambda r: (r["code"], r["id"]))


def _item_sort_key(item: TimelineItem) -> tuple[pendulum.DateTime, str, str, str]:
    # date first; the rest only makes equal-date ordering independent of input order
    title = item["update"]["title"] if item["type"] == "update" else ""
    return (item["date"], item["recommendation"]["code"], item["type"], title)


def _populate_cells(
    weeks: list[WeekInfo],
    row_keys: list[str],
    items: list[TimelineItem],
    get_item_row_keys: Callable[[TimelineItem], list[str]],
    weeks_with_items: set[str],
) -> dict[str, GridCell]:
    week_keys = {week["week_key"] for week in weeks}

    # Index items by (row, week) in one pass instead of scanning per cell
    buckets: dict[tuple[str, str], list[TimelineItem]] = {}
    for item in sorted(items, key=_item_sort_key):
        item_week_key = get_week_key(item["date"])
        if item_week_key not in week_keys:
            continue
        for row_key in get_item_row_keys(item):
            buckets.setdefault((row_key, item_week_key), []).append(item)

    cells: dict[str, GridCell] = {}
    for row_key in row_keys:
        for week in weeks:
            bucket = buckets.get((row_key, week["week_key"]))
            if not bucket:
                continue
            cells[cell_key(row_key, week["week_key"])] = {
                "items": bucket,
                "row_key": row_key,
                "week_key": week["week_key"],
            }
            weeks_with_items.add(week["week_key"])

    return cells


def group_weeks_by_month(weeks: list[WeekInfo]) -> list[MonthGroup]:
    """Partition the weeks into contiguous groups by the month of each week start."""
    month_groups: list[MonthGroup] = []
    current: Optional[MonthGroup] = None

    for index, week in enumerate(weeks):
        start = week["week_start"]
        month_key = start.format("YYYY-MM")

        if current is None or current["month_key"] != month_key:
            current = {
                "month_label": start.format("MMMM"),
                "month_key": month_key,
                "year": start.year,
                "week_indices": [],
            }
            month_groups.append(current)
        current["week_indices"].append(index)

    return month_groups


def group_months_by_year(month_groups: list[MonthGroup]) -> list[YearGroup]:
    """Partition the month groups into contiguous groups by year."""
    year_groups: list[YearGroup] = []
    current: Optional[YearGroup] = None

    for index, month_group in enumerate(month_groups):
        if current is None or current["year"] != month_group["year"]:
            current = {"year": month_group["year"], "month_indices": []}
            year_groups.append(current)
        current["month_indices"].append(index)

    return year_groups


def get_empty_timeline_grid() -> TimelineGrid:
    return {
        "weeks": [],
        "owners": [],
        "cells": {},
        "recommendations": [],
        "recommendation_cells": {},
        "weeks_with_items": [],
        "month_groups": [],
        "year_groups": [],
    }


def build_timeline_grid(
    items: list[TimelineItem],
    recommendations: Optional[list[Recommendation]] = None,
    weeks_ahead: int = DEFAULT_WEEKS_AHEAD,
    weeks_back: int = DEFAULT_WEEKS_BACK,
    today: Optional[pendulum.DateTime] = None,
) -> TimelineGrid:
    """
    Build the week-by-row activity grid for a set of timeline items.

    Args:
        items: Timeline items, in any order
        recommendations: Full recommendation list used for owner ranking
            (defaults to the recommendations referenced by the items)
        weeks_ahead: Weeks of look-ahead
        weeks_back: Weeks of look-back
        today: Reference date (defaults to today, local)

    Returns:
        A fresh TimelineGrid; an explicitly empty one when items is empty
    """
    weeks = build_week_lattice(items, weeks_ahead, weeks_back, today)
    if not weeks:
        return get_empty_timeline_grid()

    axis_recommendations = resolve_recommendation_axis(items)
    if recommendations is None:
        recommendations = axis_recommendations

    owners = resolve_owner_axis(items, recommendations)

    weeks_with_items: set[str] = set()
    cells = _populate_cells(
        weeks,
        owners,
        items,
        lambda item: recommendation_owners(item["recommendation"]),
        weeks_with_items,
    )
    recommendation_cells = _populate_cells(
        weeks,
        [str(r["id"]) for r in axis_recommendations],
        items,
        lambda item: [str(item["recommendation"]["id"])],
        weeks_with_items,
    )

    month_groups = group_weeks_by_month(weeks)
    year_groups = group_months_by_year(month_groups)

    logger.debug(
        "Built timeline grid: %d weeks, %d owners, %d recommendations, %d active weeks",
        len(weeks),
        len(owners),
        len(axis_recommendations),
        len(weeks_with_items),
    )

    return {
        "weeks": weeks,
        "owners": owners,
        "cells": cells,
        "recommendations": axis_recommendations,
        "recommendation_cells": recommendation_cells,
        "weeks_with_items": [
            week["week_key"] for week in weeks if week["week_key"] in weeks_with_items
        ],
        "month_groups": month_groups,
        "year_groups": year_groups,
    }


def generate_timeline_grid(
    recommendations: list[Recommendation],
    weeks_ahead: int = DEFAULT_WEEKS_AHEAD,
    weeks_back: int = DEFAULT_WEEKS_BACK,
    today: Optional[pendulum.DateTime] = None,
    owner: Optional[str] = None,
) -> TimelineGrid:
    """
    Collect timeline items (updates and open deadlines) and build their grid.

    With owner set, only recommendations owned or co-owned by that owner
    contribute items; owner ranking still uses every recommendation given.
    """
    if today is None:
        today = today_local()
    selected = (
        recommendations
        if owner is None
        else [r for r in recommendations if is_owned_by(r, owner)]
    )
    items = get_timeline_items(selected, include_deadlines=True, today=today)
    return build_timeline_grid(items, recommendations, weeks_ahead, weeks_back, today)
