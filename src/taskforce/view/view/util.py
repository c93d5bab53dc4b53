# SPDX-License-Identifier: MIT

from typing import Optional

import pendulum

from taskforce.color import (
    DEADLINE_STATUS_COLORS,
    OVERALL_STATUS_COLORS,
    UPDATE_STATUS_COLORS,
)
from taskforce.model.recommendation import (
    Recommendation,
    effective_target_date,
    has_revised_target_date,
)
from taskforce.model.status import (
    OVERALL_STATUS_LABELS,
    UPDATE_STATUS_LABELS,
    OverallStatus,
    UpdateStatus,
    is_terminal_status,
)
from taskforce.service.recommendation import get_deadline_status
from taskforce.time import datetime_to_display_date_str, days_until


def format_tags(tags: Optional[list[str]]) -> str:
    """Format a list of tags as a comma-separated string without brackets or quotes."""
    if tags is None or len(tags) == 0:
        return ""
    return ", ".join(tags)


def format_overall_status(status: OverallStatus) -> str:
    color = OVERALL_STATUS_COLORS[status]
    return f"[{color}]{OVERALL_STATUS_LABELS[status]}[/{color}]"


def format_update_status(status: UpdateStatus) -> str:
    color = UPDATE_STATUS_COLORS[status]
    return f"[{color}]{UPDATE_STATUS_LABELS[status]}[/{color}]"


def format_days_until(days: int) -> str:
    if days < 0:
        return f"{-days}d overdue"
    if days == 0:
        return "today"
    return f"in {days}d"


def format_deadline(
    recommendation: Recommendation, today: Optional[pendulum.DateTime] = None
) -> str:
    """
    Describe a recommendation's deadline, e.g. "15 Apr 2024 (revised)".

    Open recommendations are colored by how close the deadline is.
    """
    target_date = effective_target_date(recommendation)
    if target_date is None:
        return ""

    text = datetime_to_display_date_str(target_date)
    if has_revised_target_date(recommendation):
        text += " (revised)"

    if is_terminal_status(recommendation["overall_status"]["status"]):
        return text

    color = DEADLINE_STATUS_COLORS[get_deadline_status(target_date, today)]
    return (
        f"[{color}]{text} {format_days_until(days_until(target_date, today))}[/{color}]"
    )
