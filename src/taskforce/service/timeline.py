# SPDX-License-Identifier: MIT

from typing import Optional

import pendulum

from taskforce.model.recommendation import (
    Recommendation,
    effective_target_date,
    has_revised_target_date,
)
from taskforce.model.status import is_terminal_status
from taskforce.model.timeline_item import DeadlineItem, TimelineItem, UpdateItem
from taskforce.time import days_until, today_local


def get_timeline_items(
    recommendations: list[Recommendation],
    include_deadlines: bool = True,
    today: Optional[pendulum.DateTime] = None,
) -> list[TimelineItem]:
    """
    Flatten recommendations into dated timeline items.

    Every update becomes one "update" item. Every recommendation that is not
    completed or abandoned and has an effective target date becomes one
    "deadline" item dated on that effective date.

    Args:
        recommendations: All recommendation records
        include_deadlines: Whether to emit deadline items at all
        today: Reference date for days_until (defaults to today, local)

    Returns:
        Items sorted by date ascending (stable for equal dates)
    """
    if today is None:
        today = today_local()

    items: list[TimelineItem] = []

    for recommendation in recommendations:
        for update in recommendation["updates"]:
            update_item: UpdateItem = {
                "type": "update",
                "date": update["date"],
                "recommendation": recommendation,
                "update": update,
            }
            items.append(update_item)

    if include_deadlines:
        for recommendation in recommendations:
            deadline_item = _get_deadline_item(recommendation, today)
            if deadline_item is not None:
                items.append(deadline_item)

    return sorted(items, key=lambda item: item["date"])


def _get_deadline_item(
    recommendation: Recommendation, today: pendulum.DateTime
) -> Optional[DeadlineItem]:
    if is_terminal_status(recommendation["overall_status"]["status"]):
        return None

    target_date = effective_target_date(recommendation)
    if target_date is None:
        return None

    days = days_until(target_date, today)
    timeline = recommendation["delivery_timeline"]
    return {
        "type": "deadline",
        "date": target_date,
        "recommendation": recommendation,
        "deadline": {
            "target_date": timeline["target_date"],
            "revised_date": timeline["revised_target_date"],
            "days_until": days,
            "is_overdue": days < 0,
            "is_revised": has_revised_target_date(recommendation),
        },
    }
