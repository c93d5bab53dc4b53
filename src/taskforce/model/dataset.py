# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

import pendulum

from taskforce.model.recommendation import Recommendation


class Chapter(TypedDict):
    id: int
    title: str
    description: Optional[str]


class Proposal(TypedDict):
    id: int
    title: str
    description: str
    recommendation_ids: list[int]


class KeyPerson(TypedDict):
    title: str
    name: str


class OwnerInfo(TypedDict):
    owner: str
    key_people: list[KeyPerson]


class Dataset(TypedDict):
    last_updated: Optional[pendulum.DateTime]
    proposals: list[Proposal]
    chapters: list[Chapter]
    owner_info: list[OwnerInfo]
    recommendations: list[Recommendation]
