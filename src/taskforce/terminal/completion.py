# SPDX-License-Identifier: MIT

from taskforce.repository.dataset import DATASET_REPO, DatasetError
from taskforce.service.recommendation import get_unique_owners, get_unique_tags


def complete_owner(incomplete: str) -> list[str]:
    """Return list of owners for shell completion."""
    try:
        recommendations = DATASET_REPO.get_all_recommendations()
    except DatasetError:
        return []
    return [
        owner
        for owner in get_unique_owners(recommendations)
        if owner.lower().startswith(incomplete.lower())
    ]


def complete_tag(incomplete: str) -> list[str]:
    """Return list of update tags for shell completion."""
    try:
        recommendations = DATASET_REPO.get_all_recommendations()
    except DatasetError:
        return []
    return [tag for tag in get_unique_tags(recommendations) if tag.startswith(incomplete)]


def complete_code(incomplete: str) -> list[str]:
    try:
        recommendations = DATASET_REPO.get_all_recommendations()
    except DatasetError:
        return []
    return [
        r["code"]
        for r in recommendations
        if r["code"].lower().startswith(incomplete.lower())
    ]
