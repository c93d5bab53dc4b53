# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer
from rich.console import Console

from taskforce.model.status import OverallStatus
from taskforce.repository.configuration import CONFIGURATION_REPO
from taskforce.repository.dataset import DATASET_REPO
from taskforce.service.recommendation import (
    filter_recommendations,
    get_owners_with_stats,
    get_recent_updates,
    get_upcoming_deadlines,
    search_recommendations,
)
from taskforce.service.timeline_grid import generate_timeline_grid
from taskforce.terminal.completion import complete_code, complete_owner, complete_tag
from taskforce.terminal.error import exit_on_dataset_error
from taskforce.terminal.parse import (
    parse_overall_status,
    parse_row_axis,
    recommendation_code_candidates,
)
from taskforce.time import today_local
from taskforce.view.state import get_no_wrap
from taskforce.view.view.views.deadline import deadlines_view
from taskforce.view.view.views.department import departments_view
from taskforce.view.view.views.recommendation import (
    recommendations_view,
    single_recommendation_view,
)
from taskforce.view.view.views.timeline_grid import RowAxis, timeline_grid_view
from taskforce.view.view.views.update import updates_view


def timeline(
    by: Annotated[
        str,
        typer.Option(
            "--by",
            "-b",
            parser=parse_row_axis,
            help="Row axis of the grid: owner or recommendation",
        ),
    ] = "owner",
    weeks_ahead: Annotated[
        Optional[int],
        typer.Option(
            "--weeks-ahead",
            "-wa",
            min=0,
            help="Weeks shown after the later of the last item and today",
        ),
    ] = None,
    weeks_back: Annotated[
        Optional[int],
        typer.Option(
            "--weeks-back",
            "-wb",
            min=0,
            help="Weeks shown before the first item",
        ),
    ] = None,
    left_width: Annotated[
        Optional[int],
        typer.Option(
            "--left-width",
            "-lw",
            min=8,
            help="Width of the row label column",
        ),
    ] = None,
    owner: Annotated[
        Optional[str],
        typer.Option(
            "--owner",
            "-o",
            help="Only include recommendations owned or co-owned by this owner",
            autocompletion=complete_owner,
        ),
    ] = None,
) -> None:
    """Week-by-week activity heatmap of updates and deadlines."""
    config = CONFIGURATION_REPO.get_config()
    row_axis: RowAxis = parse_row_axis(by)
    today = today_local()

    with exit_on_dataset_error():
        all_recommendations = DATASET_REPO.get_all_recommendations()
        last_updated = DATASET_REPO.get_last_updated()

    grid = generate_timeline_grid(
        all_recommendations,
        weeks_ahead=weeks_ahead if weeks_ahead is not None else config["weeks_ahead"],
        weeks_back=weeks_back if weeks_back is not None else config["weeks_back"],
        today=today,
        owner=owner,
    )
    timeline_grid_view(
        "timeline",
        grid,
        by=row_axis,
        left_column_width=(
            left_width if left_width is not None else config["left_column_width"]
        ),
        last_updated=last_updated,
        today=today,
    )


def recommendations(
    status: Annotated[
        Optional[str],
        typer.Option(
            "--status",
            "-s",
            parser=parse_overall_status,
            help="Filter by overall status (not_started, on_track, off_track, completed, abandoned)",
        ),
    ] = None,
    chapter: Annotated[
        Optional[int],
        typer.Option("--chapter", "-c", help="Filter by chapter number"),
    ] = None,
    owner: Annotated[
        Optional[str],
        typer.Option(
            "--owner",
            "-o",
            help="Filter by primary owner or co-owner",
            autocompletion=complete_owner,
        ),
    ] = None,
    tag: Annotated[
        Optional[str],
        typer.Option(
            "--tag",
            "-t",
            help="Filter recommendations with an update carrying this tag",
            autocompletion=complete_tag,
        ),
    ] = None,
    search: Annotated[
        Optional[str],
        typer.Option(
            "--search",
            "-q",
            help="Case-insensitive search over code, titles and text",
        ),
    ] = None,
) -> None:
    """List recommendations with their status, owners and deadlines."""
    status_filter: Optional[OverallStatus] = parse_overall_status(status)

    with exit_on_dataset_error():
        filtered = filter_recommendations(
            DATASET_REPO.get_all_recommendations(),
            status=status_filter,
            chapter=chapter,
            owner=owner,
            tag=tag,
        )
        last_updated = DATASET_REPO.get_last_updated()

    if search is not None:
        filtered = search_recommendations(filtered, search)

    recommendations_view(
        "recommendations",
        filtered,
        last_updated=last_updated,
        no_wrap=get_no_wrap(),
    )


def recommendation(
    code: Annotated[
        str,
        typer.Argument(
            help="Recommendation code, e.g. R07 or 7",
            autocompletion=complete_code,
        ),
    ],
) -> None:
    """Show a single recommendation with its full update history."""
    with exit_on_dataset_error():
        found = None
        for candidate in recommendation_code_candidates(code):
            found = DATASET_REPO.get_recommendation_by_code(candidate)
            if found is not None:
                break
        last_updated = DATASET_REPO.get_last_updated()

    if found is None:
        Console(stderr=True).print(f"[red]Error: recommendation '{code}' not found[/red]")
        raise typer.Exit(1)

    single_recommendation_view(found, last_updated=last_updated)


def departments(
    key_people: Annotated[
        bool,
        typer.Option("--key-people", "-k", help="Show key people for each owner"),
    ] = False,
) -> None:
    """Recommendation counts and progress per department."""
    with exit_on_dataset_error():
        owners = get_owners_with_stats(
            DATASET_REPO.get_all_recommendations(),
            owner_info=DATASET_REPO.get_owner_info(),
        )
        last_updated = DATASET_REPO.get_last_updated()

    departments_view(
        "departments", owners, last_updated=last_updated, show_key_people=key_people
    )


def deadlines(
    limit: Annotated[
        int,
        typer.Option("--limit", "-l", min=1, help="Maximum number of deadlines"),
    ] = 10,
    owner: Annotated[
        Optional[str],
        typer.Option(
            "--owner",
            "-o",
            help="Filter by primary owner or co-owner",
            autocompletion=complete_owner,
        ),
    ] = None,
) -> None:
    """Upcoming and overdue deadlines of open recommendations."""
    today = today_local()

    with exit_on_dataset_error():
        filtered = filter_recommendations(
            DATASET_REPO.get_all_recommendations(), owner=owner
        )
        last_updated = DATASET_REPO.get_last_updated()

    deadlines_view(
        "deadlines",
        get_upcoming_deadlines(filtered, limit=limit, today=today),
        last_updated=last_updated,
        today=today,
    )


def updates(
    limit: Annotated[
        int,
        typer.Option("--limit", "-l", min=1, help="Maximum number of updates"),
    ] = 10,
    owner: Annotated[
        Optional[str],
        typer.Option(
            "--owner",
            "-o",
            help="Filter by primary owner or co-owner",
            autocompletion=complete_owner,
        ),
    ] = None,
) -> None:
    """Most recent updates across all recommendations."""
    with exit_on_dataset_error():
        filtered = filter_recommendations(
            DATASET_REPO.get_all_recommendations(), owner=owner
        )
        last_updated = DATASET_REPO.get_last_updated()

    updates_view(
        "updates",
        get_recent_updates(filtered, limit=limit),
        last_updated=last_updated,
    )
