# SPDX-License-Identifier: MIT

from typing import Optional

import pendulum
from rich import box
from rich.console import Console
from rich.table import Table

from taskforce.color import OVERALL_STATUS_COLORS
from taskforce.model.status import OVERALL_STATUSES, OVERALL_STATUS_LABELS
from taskforce.service.export import OWNER_FULL_NAMES
from taskforce.service.recommendation import OwnerWithStats
from taskforce.view.view.views.header import header


def departments_view(
    report_name: str,
    owners: list[OwnerWithStats],
    last_updated: Optional[pendulum.DateTime] = None,
    show_key_people: bool = False,
) -> None:
    """Display per-owner recommendation totals, status breakdown and progress."""
    header(report_name, last_updated)

    departments_table = Table(box=box.SIMPLE)
    departments_table.add_column("owner")
    departments_table.add_column("name")
    departments_table.add_column("total", justify="right")
    for status in OVERALL_STATUSES:
        color = OVERALL_STATUS_COLORS[status]
        departments_table.add_column(
            f"[{color}]{OVERALL_STATUS_LABELS[status]}[/{color}]", justify="right"
        )
    departments_table.add_column("progress", justify="right")
    if show_key_people:
        departments_table.add_column("key people")

    for owner_stats in owners:
        counts = owner_stats["status_counts"]
        row = [
            owner_stats["owner"],
            OWNER_FULL_NAMES.get(owner_stats["owner"], ""),
            str(owner_stats["total"]),
            *[str(counts[status]) for status in OVERALL_STATUSES],
            f"{owner_stats['progress_percentage']}%",
        ]
        if show_key_people:
            row.append(
                "\n".join(
                    f"{person['title']}: {person['name']}"
                    for person in owner_stats["key_people"]
                )
            )
        departments_table.add_row(*row)

    console = Console()
    console.print(departments_table)
