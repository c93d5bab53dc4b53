# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Annotated, Optional

import typer

from taskforce import configuration
from taskforce.repository.dataset import DATASET_REPO
from taskforce.terminal import configuration as configuration_terminal
from taskforce.terminal import view
from taskforce.terminal.custom_typer import OrderedAliasedTyperGroup
from taskforce.terminal.export import export
from taskforce.view import state as view_state

app = typer.Typer(
    cls=OrderedAliasedTyperGroup,
    help="Taskforce - Track government recommendations in the CLI",
    no_args_is_help=True,
)
app.command(name="timeline, tl")(view.timeline)
app.command(name="recommendations, r")(view.recommendations)
app.command(name="recommendation, rec")(view.recommendation)
app.command(name="departments, d")(view.departments)
app.command(name="deadlines, dl")(view.deadlines)
app.command(name="updates, u")(view.updates)
app.command(name="export, x")(export)
app.add_typer(configuration_terminal.app, name="config, c")


@app.callback()
def main_callback(
    data: Annotated[
        Optional[Path],
        typer.Option(
            "--data",
            help="Dataset YAML file to read instead of the configured one",
        ),
    ] = None,
    no_header: Annotated[
        bool,
        typer.Option(
            "--no-header",
            "-nh",
            help="Suppress header output in reports",
        ),
    ] = False,
    no_wrap: Annotated[
        bool,
        typer.Option(
            "--no-wrap",
            "-nw",
            help="Truncate long columns instead of wrapping them",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Log debug output to stderr",
        ),
    ] = False,
) -> None:
    """
    Taskforce - Track government recommendations in the CLI

    Global options that apply to all commands.
    """
    if data is not None:
        DATASET_REPO.reset(data.expanduser())
    if no_header:
        view_state.set_show_header(False)
    if no_wrap:
        view_state.set_no_wrap(True)
    if verbose:
        configuration.setup_logging("DEBUG")


def run() -> None:
    app()
