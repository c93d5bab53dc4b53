# SPDX-License-Identifier: MIT

from typing import Optional

import pendulum
from rich import print
from rich.padding import Padding

from taskforce.time import datetime_to_display_date_str
from taskforce.view.state import get_show_header


def header(
    sub_header: Optional[str] = None,
    last_updated: Optional[pendulum.DateTime] = None,
) -> None:
    """Print the application header with dataset information.

    Args:
        sub_header: Optional sub-header text to display
        last_updated: When the dataset was last updated, if known
    """
    if not get_show_header():
        return

    additional = ""
    if sub_header is not None:
        additional = f"[sandy_brown]{sub_header}[/sandy_brown]"

    print(Padding("[dark_orange]taskforce[/dark_orange]", (1, 0, 0, 1)))
    print(Padding(additional, (0, 1)))
    if last_updated is not None:
        print(
            Padding(
                f"[plum1]data as of {datetime_to_display_date_str(last_updated)}[/plum1]",
                (0, 1),
            )
        )
