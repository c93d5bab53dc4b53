# SPDX-License-Identifier: MIT

from typing import Literal, get_args

OverallStatus = Literal[
    "not_started",
    "on_track",
    "off_track",
    "completed",
    "abandoned",
]

UpdateStatus = Literal[
    "info",
    "progress",
    "risk",
    "off_track",
    "completed",
    "blocked",
]

Confidence = Literal["low", "medium", "high"]

DeadlineStatus = Literal["overdue", "imminent", "upcoming", "distant"]

OVERALL_STATUSES: tuple[OverallStatus, ...] = get_args(OverallStatus)
UPDATE_STATUSES: tuple[UpdateStatus, ...] = get_args(UpdateStatus)
CONFIDENCES: tuple[Confidence, ...] = get_args(Confidence)

# Recommendations in these states no longer contribute deadlines
TERMINAL_STATUSES: frozenset[OverallStatus] = frozenset({"completed", "abandoned"})

OVERALL_STATUS_LABELS: dict[OverallStatus, str] = {
    "not_started": "Not Started",
    "on_track": "On Track",
    "off_track": "Off Track",
    "completed": "Completed",
    "abandoned": "Abandoned",
}

UPDATE_STATUS_LABELS: dict[UpdateStatus, str] = {
    "info": "Info",
    "progress": "Progress",
    "risk": "Risk",
    "off_track": "Off Track",
    "completed": "Completed",
    "blocked": "Blocked",
}


def is_terminal_status(status: OverallStatus) -> bool:
    return status in TERMINAL_STATUSES
