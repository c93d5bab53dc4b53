# SPDX-License-Identifier: MIT

from typing import Literal, Optional

import pendulum
from rich.console import Console, Group
from rich.padding import Padding
from rich.text import Text

from taskforce.color import (
    CURRENT_PERIOD_STYLE,
    OWNER_COLOR,
    RECOMMENDATION_COLOR,
    UPDATE_STATUS_COLORS,
)
from taskforce.model.timeline_grid import GridCell, TimelineGrid, cell_key
from taskforce.time import datetime_to_local_date_str, today_local
from taskforce.view.view.views.header import header

RowAxis = Literal["owner", "recommendation"]

# Weeks holding at least one item get a wider column
ACTIVE_WEEK_WIDTH = 2
IDLE_WEEK_WIDTH = 1


def timeline_grid_view(
    report_name: str,
    grid: TimelineGrid,
    by: RowAxis = "owner",
    left_column_width: int = 24,
    last_updated: Optional[pendulum.DateTime] = None,
    today: Optional[pendulum.DateTime] = None,
) -> None:
    """
    Display the timeline grid as a week-by-row heatmap.

    Args:
        report_name: The name of the report
        grid: Grid from build_timeline_grid
        by: Row axis, "owner" or "recommendation"
        left_column_width: Width of the left column for row labels
        last_updated: When the dataset was last updated
        today: Reference date for the current-week highlight
    """
    header(report_name, last_updated)

    console = Console()

    if not grid["weeks"]:
        console.print("\n[dim]No timeline items to display[/dim]\n")
        return

    if today is None:
        today = today_local()

    weeks = grid["weeks"]
    first = datetime_to_local_date_str(weeks[0]["week_start"])
    last = datetime_to_local_date_str(weeks[-1]["week_end"])
    console.print(f"\n[bold]{first} to {last}[/bold] (rows: {by})\n")

    widths = get_week_widths(grid)
    current_week_index = get_current_week_index(grid, today)

    chart_elements: list[Text] = []
    chart_elements.append(_build_year_row(grid, widths, left_column_width))
    chart_elements.append(
        _build_month_row(grid, widths, left_column_width, current_week_index)
    )
    chart_elements.append(
        Text("─" * (left_column_width + sum(widths)), style="dim")
    )

    cells = grid["cells"] if by == "owner" else grid["recommendation_cells"]
    for label, style, row_key in get_row_labels(grid, by):
        chart_elements.append(
            build_grid_row(
                label,
                style,
                row_key,
                cells,
                grid,
                widths,
                left_column_width,
                current_week_index,
            )
        )

    console.print(Padding(Group(*chart_elements), (0, 0, 1, 0)))
    console.print(
        "[dim]. o O # updates (by count)   D deadline   ! overdue deadline[/dim]\n"
    )


def get_week_widths(grid: TimelineGrid) -> list[int]:
    """Column width per week; weeks with items are widened."""
    active = set(grid["weeks_with_items"])
    return [
        ACTIVE_WEEK_WIDTH if week["week_key"] in active else IDLE_WEEK_WIDTH
        for week in grid["weeks"]
    ]


def get_current_week_index(
    grid: TimelineGrid, today: pendulum.DateTime
) -> Optional[int]:
    for index, week in enumerate(grid["weeks"]):
        if week["week_start"] <= today <= week["week_end"]:
            return index
    return None


def get_row_labels(grid: TimelineGrid, by: RowAxis) -> list[tuple[str, str, str]]:
    """(label, style, row_key) for each row of the chosen axis, in axis order."""
    if by == "owner":
        return [(owner, OWNER_COLOR, owner) for owner in grid["owners"]]
    return [
        (
            f"{r['code']} {r['titles']['short']}",
            RECOMMENDATION_COLOR,
            str(r["id"]),
        )
        for r in grid["recommendations"]
    ]


def get_cell_symbol(cell: Optional[GridCell]) -> tuple[str, str]:
    """
    Get the symbol and style for a grid cell.

    Deadlines take precedence over updates; update cells show their count as
    "." "o" "O" "#" colored by the status of the latest update.
    """
    if cell is None:
        return (" ", "")

    deadlines = [item for item in cell["items"] if item["type"] == "deadline"]
    if deadlines:
        if any(item["deadline"]["is_overdue"] for item in deadlines):  # type: ignore[typeddict-item]
            return ("!", "bold red")
        return ("D", "bold yellow")

    updates = [item for item in cell["items"] if item["type"] == "update"]
    latest_status = updates[-1]["update"]["status"]  # type: ignore[typeddict-item]
    color = UPDATE_STATUS_COLORS[latest_status]

    count = len(updates)
    if count >= 5:
        return ("#", color)
    elif count >= 3:
        return ("O", color)
    elif count == 2:
        return ("o", color)
    return (".", color)


def _fit_label(label: str, width: int) -> str:
    if len(label) > width:
        if width > 3:
            return label[: width - 3] + "..."
        return label[:width]
    return label.ljust(width)


def _build_span_row(
    spans: list[tuple[str, int, bool]], left_column_width: int
) -> Text:
    row = Text(" " * left_column_width)
    for label, width, highlight in spans:
        text = label if len(label) < width else label[: max(width - 1, 0)]
        text = text.ljust(width)
        row.append(text, style=CURRENT_PERIOD_STYLE if highlight else "bold cyan")
    return row


def _build_year_row(
    grid: TimelineGrid, widths: list[int], left_column_width: int
) -> Text:
    spans: list[tuple[str, int, bool]] = []
    for year_group in grid["year_groups"]:
        width = sum(
            widths[week_index]
            for month_index in year_group["month_indices"]
            for week_index in grid["month_groups"][month_index]["week_indices"]
        )
        spans.append((str(year_group["year"]), width, False))
    return _build_span_row(spans, left_column_width)


def _build_month_row(
    grid: TimelineGrid,
    widths: list[int],
    left_column_width: int,
    current_week_index: Optional[int],
) -> Text:
    spans: list[tuple[str, int, bool]] = []
    for month_group in grid["month_groups"]:
        width = sum(widths[index] for index in month_group["week_indices"])
        label = month_group["month_label"]
        if width <= len(label):
            label = label[:3]
        spans.append(
            (label, width, current_week_index in month_group["week_indices"])
        )
    return _build_span_row(spans, left_column_width)


def build_grid_row(
    label: str,
    style: str,
    row_key: str,
    cells: dict[str, GridCell],
    grid: TimelineGrid,
    widths: list[int],
    left_column_width: int,
    current_week_index: Optional[int] = None,
) -> Text:
    """Build one heatmap row: the label column followed by one symbol per week."""
    row = Text()
    row.append(_fit_label(label, left_column_width), style=style)

    for index, week in enumerate(grid["weeks"]):
        symbol, symbol_style = get_cell_symbol(
            cells.get(cell_key(row_key, week["week_key"]))
        )
        bg_style = " on grey23" if index == current_week_index else ""
        content = symbol.ljust(widths[index])
        if symbol_style or bg_style:
            row.append(content, style=(symbol_style + bg_style).strip())
        else:
            row.append(content)

    return row
