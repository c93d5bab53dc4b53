# SPDX-License-Identifier: MIT

import logging
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from taskforce import configuration
from taskforce.repository.configuration import CONFIGURATION_REPO
from taskforce.terminal.custom_typer import AliasedTyperGroup

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def _configuration_table(
    config: configuration.Configuration, title: Optional[str] = None
) -> Table:
    table = Table(title=title)
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="magenta")

    table.add_row(
        "show_header",
        "✓ Enabled" if config["show_header"] else "✗ Disabled",
    )
    table.add_row("weeks_ahead", str(config["weeks_ahead"]))
    table.add_row("weeks_back", str(config["weeks_back"]))
    table.add_row("left_column_width", str(config["left_column_width"]))
    table.add_row("log_level", config["log_level"])
    table.add_row(
        "data_path",
        config["data_path"] if config["data_path"] else "None (default location)",
    )
    return table


@app.command("view, v")
def view() -> None:
    """Display current configuration settings."""
    config = CONFIGURATION_REPO.get_config()

    console = Console()
    console.print(_configuration_table(config))
    console.print(f"Config file: {configuration.APP_CONFIG_PATH}")
    console.print(f"Dataset file: {configuration.DATA_DATASET_PATH}")

    try:
        from yaml import CLoader as Loader  # noqa: F401

        yaml_library_type = "C"
    except ImportError:
        yaml_library_type = "Python"

    console.print()
    console.print(f"YAML Library Type: {yaml_library_type}")


@app.command("set, s")
def set(
    show_header: Annotated[
        Optional[bool],
        typer.Option(
            "--show-header/--no-show-header",
            help="Show the header above every report",
        ),
    ] = None,
    weeks_ahead: Annotated[
        Optional[int],
        typer.Option(
            "--weeks-ahead",
            min=0,
            help="Default number of look-ahead weeks in the timeline",
        ),
    ] = None,
    weeks_back: Annotated[
        Optional[int],
        typer.Option(
            "--weeks-back",
            min=0,
            help="Default number of look-back weeks in the timeline",
        ),
    ] = None,
    left_column_width: Annotated[
        Optional[int],
        typer.Option(
            "--left-column-width",
            min=8,
            help="Default width of the timeline label column",
        ),
    ] = None,
    log_level: Annotated[
        Optional[str],
        typer.Option(
            "--log-level",
            help="Logging level: DEBUG, INFO, WARNING, ERROR or CRITICAL",
        ),
    ] = None,
    data_path: Annotated[
        Optional[str],
        typer.Option(
            "--data-path",
            help="Path of the dataset YAML file",
        ),
    ] = None,
    remove_data_path: Annotated[
        bool,
        typer.Option(
            "--remove-data-path",
            help="Reset data path to None (use the default location)",
        ),
    ] = False,
) -> None:
    """
    Update configuration settings.
    """
    console = Console()

    if log_level is not None and log_level.upper() not in LOG_LEVELS:
        console.print(
            f"[red]Error: unknown log level '{log_level}', "
            f"expected one of: {', '.join(LOG_LEVELS)}[/red]"
        )
        raise typer.Exit(1)

    CONFIGURATION_REPO.update_config(
        data_path=data_path,
        remove_data_path=remove_data_path,
        show_header=show_header,
        weeks_ahead=weeks_ahead,
        weeks_back=weeks_back,
        left_column_width=left_column_width,
        log_level=log_level,
    )
    CONFIGURATION_REPO.flush()
    logging.getLogger(__name__).info(
        "Configuration written to %s", configuration.APP_CONFIG_PATH
    )

    console.print("[green]Configuration updated successfully![/green]\n")
    console.print(
        _configuration_table(CONFIGURATION_REPO.get_config(), "Updated Configuration")
    )
