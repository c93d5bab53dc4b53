# SPDX-License-Identifier: MIT

from typing import Optional

import pendulum
from rich import box
from rich.console import Console
from rich.table import Table

from taskforce.service.recommendation import RecentUpdate
from taskforce.time import datetime_to_display_date_str
from taskforce.view.state import get_no_wrap
from taskforce.view.view.util import format_tags, format_update_status
from taskforce.view.view.views.header import header


def updates_view(
    report_name: str,
    updates: list[RecentUpdate],
    last_updated: Optional[pendulum.DateTime] = None,
) -> None:
    header(report_name, last_updated)

    no_wrap = get_no_wrap()
    updates_table = Table(box=box.SIMPLE)
    updates_table.add_column("date", no_wrap=True)
    updates_table.add_column("code")
    updates_table.add_column("status")
    updates_table.add_column("title", no_wrap=no_wrap, overflow="ellipsis")
    updates_table.add_column("tags", no_wrap=no_wrap, overflow="ellipsis")

    for update_item in updates:
        update = update_item["update"]
        updates_table.add_row(
            datetime_to_display_date_str(update["date"]),
            update_item["recommendation"]["code"],
            format_update_status(update["status"]),
            update["title"],
            format_tags(update["tags"]),
        )

    console = Console()
    console.print(updates_table)
