# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

import pendulum

from taskforce.model.dataset import KeyPerson
from taskforce.model.recommendation import (
    Recommendation,
    Update,
    effective_target_date,
    is_owned_by,
    recommendation_owners,
)
from taskforce.model.status import (
    OVERALL_STATUSES,
    DeadlineStatus,
    OverallStatus,
    is_terminal_status,
)
from taskforce.time import days_until, today_local

StatusCounts = dict[OverallStatus, int]


class OwnerWithStats(TypedDict):
    owner: str
    recommendations: list[Recommendation]
    status_counts: StatusCounts
    total: int
    progress_percentage: int
    key_people: list[KeyPerson]


class UpcomingDeadline(TypedDict):
    recommendation: Recommendation
    date: pendulum.DateTime
    days_until: int
    is_overdue: bool


class RecentUpdate(TypedDict):
    update: Update
    recommendation: Recommendation


def filter_recommendations(
    recommendations: list[Recommendation],
    status: Optional[OverallStatus] = None,
    chapter: Optional[int] = None,
    owner: Optional[str] = None,
    tag: Optional[str] = None,
) -> list[Recommendation]:
    """Filter recommendations; a None criterion matches everything."""
    if status is not None:
        recommendations = [
            r for r in recommendations if r["overall_status"]["status"] == status
        ]
    if chapter is not None:
        recommendations = [
            r for r in recommendations if r["chapter"]["number"] == chapter
        ]
    if owner is not None:
        recommendations = [r for r in recommendations if is_owned_by(r, owner)]
    if tag is not None:
        recommendations = [
            r
            for r in recommendations
            if any(tag in update["tags"] for update in r["updates"])
        ]
    return recommendations


def search_recommendations(
    recommendations: list[Recommendation], query: str
) -> list[Recommendation]:
    lower_query = query.lower()
    return [
        r
        for r in recommendations
        if lower_query in r["titles"]["short"].lower()
        or lower_query in r["titles"]["long"].lower()
        or lower_query in r["text"].lower()
        or lower_query in r["code"].lower()
    ]


def get_recommendations_by_owner(
    recommendations: list[Recommendation], owner: str
) -> list[Recommendation]:
    return [r for r in recommendations if is_owned_by(r, owner)]


def get_status_counts(recommendations: list[Recommendation]) -> StatusCounts:
    counts: StatusCounts = {status: 0 for status in OVERALL_STATUSES}
    for recommendation in recommendations:
        counts[recommendation["overall_status"]["status"]] += 1
    return counts


def get_progress_percentage(counts: StatusCounts) -> int:
    total = sum(counts.values())
    if total == 0:
        return 0
    return round(counts["completed"] / total * 100)


def get_unique_owners(recommendations: list[Recommendation]) -> list[str]:
    owners: set[str] = set()
    for recommendation in recommendations:
        owners.update(recommendation_owners(recommendation))
    return sorted(owners)


def get_unique_tags(recommendations: list[Recommendation]) -> list[str]:
    tags: set[str] = set()
    for recommendation in recommendations:
        for update in recommendation["updates"]:
            tags.update(update["tags"])
    return sorted(tags)


def get_owners_with_stats(
    recommendations: list[Recommendation],
    min_count: int = 1,
    owner_info: Optional[dict[str, list[KeyPerson]]] = None,
) -> list[OwnerWithStats]:
    """
    Group recommendations under every owner (primary and co-owner).

    Owners with fewer than min_count recommendations are dropped. The result
    is sorted by total recommendations (descending), then progress
    percentage (descending), then owner name.
    """
    if owner_info is None:
        owner_info = {}

    owner_map: dict[str, list[Recommendation]] = {}
    for recommendation in recommendations:
        for owner in recommendation_owners(recommendation):
            owner_map.setdefault(owner, []).append(recommendation)

    owners_with_stats: list[OwnerWithStats] = []
    for owner, owned in owner_map.items():
        if len(owned) < min_count:
            continue
        counts = get_status_counts(owned)
        owners_with_stats.append(
            {
                "owner": owner,
                "recommendations": owned,
                "status_counts": counts,
                "total": len(owned),
                "progress_percentage": get_progress_percentage(counts),
                "key_people": owner_info.get(owner, []),
            }
        )

    return sorted(
        owners_with_stats,
        key=lambda o: (-o["total"], -o["progress_percentage"], o["owner"]),
    )


def get_upcoming_deadlines(
    recommendations: list[Recommendation],
    limit: Optional[int] = 10,
    today: Optional[pendulum.DateTime] = None,
) -> list[UpcomingDeadline]:
    """Deadlines of open recommendations, soonest (most overdue) first."""
    if today is None:
        today = today_local()

    deadlines: list[UpcomingDeadline] = []
    for recommendation in recommendations:
        if is_terminal_status(recommendation["overall_status"]["status"]):
            continue
        target_date = effective_target_date(recommendation)
        if target_date is None:
            continue
        days = days_until(target_date, today)
        deadlines.append(
            {
                "recommendation": recommendation,
                "date": target_date,
                "days_until": days,
                "is_overdue": days < 0,
            }
        )

    deadlines.sort(key=lambda d: (d["days_until"], d["recommendation"]["code"]))
    if limit is None:
        return deadlines
    return deadlines[:limit]


def get_all_updates(recommendations: list[Recommendation]) -> list[RecentUpdate]:
    """Every update paired with its recommendation, newest first."""
    updates: list[RecentUpdate] = [
        {"update": update, "recommendation": recommendation}
        for recommendation in recommendations
        for update in recommendation["updates"]
    ]
    return sorted(updates, key=lambda u: u["update"]["date"], reverse=True)


def get_recent_updates(
    recommendations: list[Recommendation], limit: int = 10
) -> list[RecentUpdate]:
    return get_all_updates(recommendations)[:limit]


def get_deadline_status(
    date: pendulum.DateTime, today: Optional[pendulum.DateTime] = None
) -> DeadlineStatus:
    days = days_until(date, today)
    if days < 0:
        return "overdue"
    if days <= 30:
        return "imminent"
    if days <= 90:
        return "upcoming"
    return "distant"
