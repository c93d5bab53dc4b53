# SPDX-License-Identifier: MIT

from copy import deepcopy
from typing import Optional

from yaml import dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from taskforce import configuration
from taskforce.template.configuration import get_configuration_template


class ConfigurationRepository:
    def __init__(self) -> None:
        self._config: Optional[configuration.Configuration] = None
        self.is_dirty = False

    @property
    def config(self) -> configuration.Configuration:
        if self._config is None:
            self.__load_data()
        if self._config is None:
            raise ValueError()
        return self._config

    def __load_data(self) -> None:
        self._config = load(configuration.APP_CONFIG_PATH.read_text(), Loader=Loader)

        if self._config is None:
            raise ValueError()

        # Migration: fill in any settings added since the file was written
        for key, value in get_configuration_template().items():
            if key not in self._config:
                self._config[key] = value  # type: ignore[literal-required]

    def __save_data(self, config: configuration.Configuration) -> None:
        configuration.APP_CONFIG_PATH.write_text(dump(config, Dumper=Dumper))

    def reset(self) -> None:
        self._config = None
        self.is_dirty = False

    def flush(self) -> None:
        if self._config is not None and self.is_dirty:
            self.__save_data(self._config)
            self.is_dirty = False

    def get_config(self) -> configuration.Configuration:
        return deepcopy(self.config)

    def update_config(
        self,
        data_path: Optional[str] = None,
        remove_data_path: bool = False,
        show_header: Optional[bool] = None,
        weeks_ahead: Optional[int] = None,
        weeks_back: Optional[int] = None,
        left_column_width: Optional[int] = None,
        log_level: Optional[str] = None,
    ) -> None:
        self.is_dirty = True

        if data_path is not None:
            self.config["data_path"] = data_path
        if remove_data_path:
            self.config["data_path"] = None
        if show_header is not None:
            self.config["show_header"] = show_header
        if weeks_ahead is not None:
            self.config["weeks_ahead"] = weeks_ahead
        if weeks_back is not None:
            self.config["weeks_back"] = weeks_back
        if left_column_width is not None:
            self.config["left_column_width"] = left_column_width
        if log_level is not None:
            self.config["log_level"] = log_level.upper()


CONFIGURATION_REPO = ConfigurationRepository()
