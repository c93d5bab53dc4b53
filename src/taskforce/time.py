# SPDX-License-Identifier: MIT

import datetime
from typing import Optional, Union, cast

import pendulum

DateValue = Union[str, datetime.date, datetime.datetime]


def today_local() -> pendulum.DateTime:
    return pendulum.today("local")


def datetime_from_local_date_str(date_str: str) -> pendulum.DateTime:
    """Parse a local date string in 'YYYY-MM-DD' format to a pendulum.DateTime at midnight local time."""
    return cast(pendulum.DateTime, pendulum.parse(date_str, tz="local")).start_of(
        "day"
    )


def datetime_from_date_value(value: DateValue) -> pendulum.DateTime:
    """
    Convert a dataset date value to a pendulum.DateTime at midnight local time.

    YAML loaders turn unquoted ISO dates into datetime.date objects, so both
    those and plain strings are accepted.
    """
    if isinstance(value, datetime.datetime):
        return pendulum.instance(value, tz="local").start_of("day")
    if isinstance(value, datetime.date):
        return pendulum.datetime(value.year, value.month, value.day, tz="local")
    return datetime_from_local_date_str(value)


def datetime_from_date_value_optional(
    value: Optional[DateValue],
) -> Optional[pendulum.DateTime]:
    if value is None or value == "":
        return None
    return datetime_from_date_value(value)


def datetime_to_local_date_str(datetime: pendulum.DateTime) -> str:
    """Convert a pendulum.DateTime to a local date string in 'YYYY-MM-DD' format."""
    return datetime.in_tz("local").format("YYYY-MM-DD")


def datetime_to_local_date_str_optional(
    datetime: Optional[pendulum.DateTime],
) -> Optional[str]:
    if datetime is None:
        return None
    return datetime_to_local_date_str(datetime)


def datetime_to_display_date_str(datetime: pendulum.DateTime) -> str:
    return datetime.in_tz("local").format("D MMM YYYY")


def datetime_to_display_date_str_optional(
    datetime: Optional[pendulum.DateTime],
) -> Optional[str]:
    if datetime is None:
        return None
    return datetime_to_display_date_str(datetime)


def datetime_to_display_short_date_str(datetime: pendulum.DateTime) -> str:
    return datetime.in_tz("local").format("D MMM")


def week_start(datetime: pendulum.DateTime) -> pendulum.DateTime:
    """Monday 00:00 local of the week containing datetime. Sunday belongs to the preceding Monday."""
    return datetime.in_tz("local").start_of("week")


def week_end(start: pendulum.DateTime) -> pendulum.DateTime:
    """Sunday 23:59:59.999999 local of the week starting at start."""
    return start.end_of("week")


def days_until(
    target: pendulum.DateTime, today: Optional[pendulum.DateTime] = None
) -> int:
    """Calendar days from today to target, negative once it has passed."""
    if today is None:
        today = today_local()
    return target.in_tz("local").toordinal() - today.in_tz("local").toordinal()
