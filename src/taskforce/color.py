# SPDX-License-Identifier: MIT

from taskforce.model.status import DeadlineStatus, OverallStatus, UpdateStatus

OVERALL_STATUS_COLORS: dict[OverallStatus, str] = {
    "not_started": "bright_black",
    "on_track": "green",
    "off_track": "dark_orange",
    "completed": "cyan",
    "abandoned": "red",
}

UPDATE_STATUS_COLORS: dict[UpdateStatus, str] = {
    "info": "blue",
    "progress": "green",
    "risk": "yellow",
    "off_track": "dark_orange",
    "completed": "cyan",
    "blocked": "red",
}

DEADLINE_STATUS_COLORS: dict[DeadlineStatus, str] = {
    "overdue": "bold red",
    "imminent": "dark_orange",
    "upcoming": "yellow",
    "distant": "green",
}

OWNER_COLOR = "plum1"
RECOMMENDATION_COLOR = "sandy_brown"
CURRENT_PERIOD_STYLE = "bold black on bright_cyan"
