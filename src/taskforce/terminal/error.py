# SPDX-License-Identifier: MIT

import logging
from contextlib import contextmanager
from typing import Iterator

import typer
from rich.console import Console

from taskforce.repository.dataset import DatasetError

logger = logging.getLogger(__name__)


@contextmanager
def exit_on_dataset_error() -> Iterator[None]:
    """Turn a DatasetError raised by a command into a red message and exit 1."""
    try:
        yield
    except DatasetError as e:
        logger.debug("Dataset error", exc_info=True)
        Console(stderr=True).print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)
