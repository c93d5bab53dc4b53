# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

import pendulum

from taskforce.model.status import Confidence, OverallStatus, UpdateStatus


class EmbeddedChapter(TypedDict):
    number: int
    title: str


class Titles(TypedDict):
    short: str
    long: str


class Scope(TypedDict):
    sectors: list[str]
    domains: list[str]


class Ownership(TypedDict):
    primary_owner: str
    co_owners: list[str]
    key_regulators: list[str]


class DeliveryTimeline(TypedDict):
    original_text: Optional[str]
    target_date: Optional[pendulum.DateTime]
    revised_target_date: Optional[pendulum.DateTime]
    notes: Optional[str]


class Dependencies(TypedDict):
    depends_on: list[int]
    enables: list[int]


class OverallStatusInfo(TypedDict):
    status: OverallStatus
    last_updated: Optional[pendulum.DateTime]
    confidence: Optional[Confidence]
    summary: Optional[str]


class Link(TypedDict):
    title: str
    url: str


class Source(TypedDict):
    type: str
    reference: Optional[str]


class ImpactOnOverall(TypedDict):
    changes_overall_status_to: Optional[OverallStatus]
    changes_confidence_to: Optional[Confidence]
    notes: Optional[str]


class Update(TypedDict):
    date: pendulum.DateTime
    status: UpdateStatus
    tags: list[str]
    title: str
    description: str
    links: list[Link]
    source: Optional[Source]
    impact_on_overall: Optional[ImpactOnOverall]


class Recommendation(TypedDict):
    id: int
    code: str
    chapter: EmbeddedChapter
    proposal_ids: list[int]
    titles: Titles
    text: str
    scope: Scope
    ownership: Ownership
    delivery_timeline: DeliveryTimeline
    implementation_type: list[str]
    dependencies: Dependencies
    overall_status: OverallStatusInfo
    updates: list[Update]
    notes: Optional[str]


def effective_target_date(
    recommendation: Recommendation,
) -> Optional[pendulum.DateTime]:
    """The revised target date if set, else the original target date."""
    timeline = recommendation["delivery_timeline"]
    if timeline["revised_target_date"] is not None:
        return timeline["revised_target_date"]
    return timeline["target_date"]


def has_revised_target_date(recommendation: Recommendation) -> bool:
    timeline = recommendation["delivery_timeline"]
    return (
        timeline["revised_target_date"] is not None
        and timeline["revised_target_date"] != timeline["target_date"]
    )


def recommendation_owners(recommendation: Recommendation) -> list[str]:
    """Primary owner followed by co-owners, without duplicates."""
    ownership = recommendation["ownership"]
    return list(dict.fromkeys([ownership["primary_owner"], *ownership["co_owners"]]))


def is_owned_by(recommendation: Recommendation, owner: str) -> bool:
    ownership = recommendation["ownership"]
    return ownership["primary_owner"] == owner or owner in ownership["co_owners"]
