# SPDX-License-Identifier: MIT

from typing import Literal, Optional, TypedDict, Union

import pendulum

from taskforce.model.recommendation import Recommendation, Update


class DeadlineInfo(TypedDict):
    target_date: Optional[pendulum.DateTime]
    revised_date: Optional[pendulum.DateTime]
    days_until: int
    is_overdue: bool
    is_revised: bool


class UpdateItem(TypedDict):
    type: Literal["update"]
    date: pendulum.DateTime
    recommendation: Recommendation
    update: Update


class DeadlineItem(TypedDict):
    type: Literal["deadline"]
    date: pendulum.DateTime
    recommendation: Recommendation
    deadline: DeadlineInfo


TimelineItem = Union[UpdateItem, DeadlineItem]
