# SPDX-License-Identifier: MIT

from typing import Optional

import pendulum
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from taskforce.color import UPDATE_STATUS_COLORS
from taskforce.model.recommendation import Recommendation
from taskforce.model.status import OVERALL_STATUSES, OVERALL_STATUS_LABELS
from taskforce.service.export import format_recommendation_reference
from taskforce.service.recommendation import (
    get_progress_percentage,
    get_status_counts,
)
from taskforce.time import (
    datetime_to_display_date_str,
    datetime_to_display_date_str_optional,
)
from taskforce.view.view.util import (
    format_deadline,
    format_overall_status,
    format_tags,
    format_update_status,
)
from taskforce.view.view.views.header import header


def recommendations_view(
    report_name: str,
    recommendations: list[Recommendation],
    columns: list[str] = [
        "code",
        "title",
        "chapter",
        "status",
        "owner",
        "deadline",
        "updates",
    ],
    last_updated: Optional[pendulum.DateTime] = None,
    no_wrap: bool = False,
    today: Optional[pendulum.DateTime] = None,
) -> None:
    header(report_name, last_updated)

    recommendations_table = Table(box=box.SIMPLE)
    for column in columns:
        if no_wrap and column not in ("code",):
            recommendations_table.add_column(column, no_wrap=True, overflow="ellipsis")
        else:
            recommendations_table.add_column(column)

    for recommendation in recommendations:
        row = []
        for column in columns:
            column_value = ""
            if column == "code":
                column_value = recommendation["code"]
            elif column == "title":
                column_value = recommendation["titles"]["short"]
            elif column == "chapter":
                column_value = str(recommendation["chapter"]["number"])
            elif column == "status":
                column_value = format_overall_status(
                    recommendation["overall_status"]["status"]
                )
            elif column == "owner":
                column_value = recommendation["ownership"]["primary_owner"]
                if recommendation["ownership"]["co_owners"]:
                    column_value += " + " + ", ".join(
                        recommendation["ownership"]["co_owners"]
                    )
            elif column == "deadline":
                column_value = format_deadline(recommendation, today)
            elif column == "updates":
                column_value = str(len(recommendation["updates"]))
            row.append(column_value)
        recommendations_table.add_row(*row)

    console = Console()
    console.print(recommendations_table)

    counts = get_status_counts(recommendations)
    summary = "   ".join(
        f"{OVERALL_STATUS_LABELS[status]}: {counts[status]}"
        for status in OVERALL_STATUSES
    )
    console.print(
        f"[dim]{len(recommendations)} recommendations   {summary}   "
        f"progress: {get_progress_percentage(counts)}%[/dim]"
    )


def single_recommendation_view(
    recommendation: Recommendation,
    last_updated: Optional[pendulum.DateTime] = None,
    today: Optional[pendulum.DateTime] = None,
) -> None:
    header("recommendation", last_updated)

    ownership = recommendation["ownership"]
    status_info = recommendation["overall_status"]
    timeline = recommendation["delivery_timeline"]
    dependencies = recommendation["dependencies"]

    recommendation_table = Table(box=box.SIMPLE)
    recommendation_table.add_column("property")
    recommendation_table.add_column("value")

    recommendation_table.add_row("code", recommendation["code"])
    recommendation_table.add_row("title", recommendation["titles"]["long"])
    recommendation_table.add_row(
        "chapter",
        f"{recommendation['chapter']['number']} {recommendation['chapter']['title']}",
    )
    recommendation_table.add_row("status", format_overall_status(status_info["status"]))
    recommendation_table.add_row("confidence", status_info["confidence"] or "")
    recommendation_table.add_row(
        "status_updated",
        datetime_to_display_date_str_optional(status_info["last_updated"]) or "",
    )
    recommendation_table.add_row("primary_owner", ownership["primary_owner"])
    recommendation_table.add_row("co_owners", format_tags(ownership["co_owners"]))
    recommendation_table.add_row(
        "key_regulators", format_tags(ownership["key_regulators"])
    )
    recommendation_table.add_row(
        "target_date",
        datetime_to_display_date_str_optional(timeline["target_date"]) or "",
    )
    recommendation_table.add_row("deadline", format_deadline(recommendation, today))
    recommendation_table.add_row("timeline_text", timeline["original_text"] or "")
    recommendation_table.add_row(
        "sectors", format_tags(recommendation["scope"]["sectors"])
    )
    recommendation_table.add_row(
        "depends_on",
        ", ".join(format_recommendation_reference(id) for id in dependencies["depends_on"]),
    )
    recommendation_table.add_row(
        "enables",
        ", ".join(format_recommendation_reference(id) for id in dependencies["enables"]),
    )

    console = Console()
    console.print(recommendation_table)

    if status_info["summary"]:
        console.print(Panel(status_info["summary"], title="Status", border_style="blue"))

    if recommendation["text"]:
        console.print(
            Panel(recommendation["text"], title="Recommendation", border_style="blue")
        )

    for update in sorted(
        recommendation["updates"], key=lambda u: u["date"], reverse=True
    ):
        color = UPDATE_STATUS_COLORS[update["status"]]
        title = (
            f"{datetime_to_display_date_str(update['date'])}  "
            f"{format_update_status(update['status'])}  {update['title']}"
        )
        body = update["description"]
        if update["tags"]:
            body += f"\n\n[dim]tags: {format_tags(update['tags'])}[/dim]"
        for link in update["links"]:
            body += f"\n[link={link['url']}]{link['title']}[/link]"
        console.print(Panel(body, title=title, title_align="left", border_style=color))
