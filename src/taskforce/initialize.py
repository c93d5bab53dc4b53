# SPDX-License-Identifier: MIT

from yaml import dump

try:
    from yaml import CDumper as Dumper
except ImportError:
    from yaml import Dumper  # type: ignore[assignment]

from taskforce import configuration
from taskforce.repository.configuration import CONFIGURATION_REPO
from taskforce.template.configuration import get_configuration_template
from taskforce.view import state as view_state


def initialize() -> None:
    configuration.CONFIG_PATH.mkdir(parents=True, exist_ok=True)
    __ensure_config_files()

    configuration.load_data_path_configuration()
    configuration.DATA_PATH.mkdir(parents=True, exist_ok=True)

    config = CONFIGURATION_REPO.get_config()
    configuration.setup_logging(config["log_level"])
    view_state.set_show_header(config["show_header"])


def __ensure_config_files() -> None:
    if not configuration.APP_CONFIG_PATH.is_file():
        configuration.APP_CONFIG_PATH.touch()
        config: configuration.Configuration = get_configuration_template()
        configuration.APP_CONFIG_PATH.write_text(dump(config, Dumper=Dumper))
