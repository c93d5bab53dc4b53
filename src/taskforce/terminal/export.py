# SPDX-License-Identifier: MIT

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console

from taskforce.repository.dataset import DATASET_REPO
from taskforce.service.export import (
    ExportFormat,
    ExportKind,
    Row,
    get_department_rows,
    get_export_filename,
    get_recommendation_rows,
    get_timeline_rows,
    get_update_rows,
    render_export,
)
from taskforce.service.recommendation import get_all_updates
from taskforce.service.timeline import get_timeline_items
from taskforce.terminal.error import exit_on_dataset_error
from taskforce.terminal.parse import parse_export_format, parse_export_kind
from taskforce.time import today_local

logger = logging.getLogger(__name__)


def export(
    kind: Annotated[
        str,
        typer.Argument(
            parser=parse_export_kind,
            help="What to export: recommendations, updates, timeline or departments",
        ),
    ],
    export_format: Annotated[
        str,
        typer.Option(
            "--format",
            "-f",
            parser=parse_export_format,
            help="File format: csv or xlsx",
        ),
    ] = "csv",
    output: Annotated[
        Optional[Path],
        typer.Option(
            "--output",
            "-o",
            help="Output file (defaults to taskforce-<kind>-<date>.<format>)",
        ),
    ] = None,
) -> None:
    """Export recommendations, updates, timeline items or department stats."""
    export_kind: ExportKind = parse_export_kind(kind)
    file_format: ExportFormat = parse_export_format(export_format)
    today = today_local()

    with exit_on_dataset_error():
        recommendations = DATASET_REPO.get_all_recommendations()
        rows: list[Row]
        if export_kind == "recommendations":
            rows = get_recommendation_rows(
                recommendations, DATASET_REPO.get_chapters(), today
            )
        elif export_kind == "updates":
            rows = get_update_rows(get_all_updates(recommendations))
        elif export_kind == "timeline":
            rows = get_timeline_rows(get_timeline_items(recommendations, today=today))
        else:
            rows = get_department_rows(recommendations, today)

    if output is None:
        output = Path(get_export_filename(export_kind, file_format, today))

    output.write_bytes(render_export(export_kind, rows, file_format))
    logger.info("Wrote %d %s rows to %s", len(rows), export_kind, output)

    console = Console()
    console.print(f"[green]Exported {len(rows)} rows to {output}[/green]")
