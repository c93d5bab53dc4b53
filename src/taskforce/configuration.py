# SPDX-License-Identifier: MIT

import logging
from pathlib import Path
from typing import Optional, TypedDict

from yaml import load

try:
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Loader  # type: ignore[assignment]
import platformdirs
from rich.console import Console
from rich.logging import RichHandler

APP_NAME = "taskforce"

CONFIG_PATH = platformdirs.user_config_path(APP_NAME)
APP_CONFIG_PATH = CONFIG_PATH / "config.yaml"

# These will be set dynamically by load_data_path_configuration()
DATA_PATH: Path = platformdirs.user_data_path(APP_NAME)
DATA_DATASET_PATH: Path = DATA_PATH / "taskforce.yaml"


class Configuration(TypedDict):
    data_path: Optional[str]
    show_header: bool
    weeks_ahead: int
    weeks_back: int
    left_column_width: int
    log_level: str


def load_data_path_configuration() -> None:
    """
    Load the configuration and set the dataset path dynamically.

    The configured data_path points directly at the dataset YAML file.
    """
    global DATA_PATH, DATA_DATASET_PATH

    if not APP_CONFIG_PATH.is_file():
        # Config doesn't exist yet, use defaults
        return

    config: Optional[Configuration] = load(APP_CONFIG_PATH.read_text(), Loader=Loader)
    if config is None:
        return
    data_path_setting = config.get("data_path")

    if data_path_setting is not None:
        set_dataset_path(Path(data_path_setting))


def set_dataset_path(path: Path) -> None:
    global DATA_PATH, DATA_DATASET_PATH

    DATA_DATASET_PATH = path.expanduser()
    DATA_PATH = DATA_DATASET_PATH.parent


def setup_logging(log_level: str = "WARNING") -> None:
    """Configure the package logger to write through rich on stderr."""
    logger = logging.getLogger(APP_NAME)
    logger.setLevel(getattr(logging, log_level.upper(), logging.WARNING))

    if not any(isinstance(handler, RichHandler) for handler in logger.handlers):
        handler = RichHandler(
            console=Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        logger.addHandler(handler)
