# SPDX-License-Identifier: MIT

from typing import Optional

import pendulum
from rich import box
from rich.console import Console
from rich.table import Table

from taskforce.color import DEADLINE_STATUS_COLORS
from taskforce.service.recommendation import UpcomingDeadline, get_deadline_status
from taskforce.time import datetime_to_display_date_str
from taskforce.view.view.util import format_days_until, format_overall_status
from taskforce.view.view.views.header import header


def deadlines_view(
    report_name: str,
    deadlines: list[UpcomingDeadline],
    last_updated: Optional[pendulum.DateTime] = None,
    today: Optional[pendulum.DateTime] = None,
) -> None:
    header(report_name, last_updated)

    deadlines_table = Table(box=box.SIMPLE)
    deadlines_table.add_column("code")
    deadlines_table.add_column("title")
    deadlines_table.add_column("owner")
    deadlines_table.add_column("status")
    deadlines_table.add_column("deadline")
    deadlines_table.add_column("when", justify="right")

    for deadline in deadlines:
        recommendation = deadline["recommendation"]
        color = DEADLINE_STATUS_COLORS[get_deadline_status(deadline["date"], today)]
        deadlines_table.add_row(
            recommendation["code"],
            recommendation["titles"]["short"],
            recommendation["ownership"]["primary_owner"],
            format_overall_status(recommendation["overall_status"]["status"]),
            datetime_to_display_date_str(deadline["date"]),
            f"[{color}]{format_days_until(deadline['days_until'])}[/{color}]",
        )

    console = Console()
    console.print(deadlines_table)
