# SPDX-License-Identifier: MIT

from taskforce.configuration import Configuration


def get_configuration_template() -> Configuration:
    return {
        "data_path": None,
        "show_header": True,
        "weeks_ahead": 52,
        "weeks_back": 4,
        "left_column_width": 24,
        "log_level": "WARNING",
    }
