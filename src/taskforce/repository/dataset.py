# SPDX-License-Identifier: MIT

import logging
from copy import deepcopy
from pathlib import Path
from typing import Any, Optional, cast

import pendulum
from yaml import YAMLError, load

try:
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Loader  # type: ignore[assignment]

from taskforce import configuration, time
from taskforce.model.dataset import (
    Chapter,
    Dataset,
    KeyPerson,
    OwnerInfo,
    Proposal,
)
from taskforce.model.recommendation import Recommendation, Update
from taskforce.model.status import CONFIDENCES, OVERALL_STATUSES, UPDATE_STATUSES

logger = logging.getLogger(__name__)


class DatasetError(ValueError):
    """Raised when the dataset file is missing or malformed."""

    pass


class DatasetRepository:
    """
    Read-only access to the recommendations dataset.

    The YAML file is loaded on first access and cached for the lifetime of
    the repository. Accessors hand out deep copies so callers can never
    mutate the cached records.
    """

    def __init__(self, path: Optional[Path] = None) -> None:
        self._path = path
        self._dataset: Optional[Dataset] = None

    @property
    def path(self) -> Path:
        if self._path is not None:
            return self._path
        return configuration.DATA_DATASET_PATH

    @property
    def dataset(self) -> Dataset:
        if self._dataset is None:
            self.__load_data()
        if self._dataset is None:
            raise ValueError()
        return self._dataset

    def reset(self, path: Optional[Path] = None) -> None:
        self._path = path
        self._dataset = None

    def __load_data(self) -> None:
        if not self.path.is_file():
            raise DatasetError(f"Dataset file not found: {self.path}")

        try:
            raw_dataset = load(self.path.read_text(encoding="utf-8"), Loader=Loader)
        except YAMLError as e:
            raise DatasetError(f"Dataset file is not valid YAML: {self.path}") from e

        if not isinstance(raw_dataset, dict):
            raise DatasetError(f"Dataset file must contain a mapping: {self.path}")

        self._dataset = self.__convert_dataset_for_deserialization(raw_dataset)
        logger.info(
            "Loaded %d recommendations from %s",
            len(self._dataset["recommendations"]),
            self.path,
        )

    def __convert_dataset_for_deserialization(
        self, raw_dataset: dict[str, Any]
    ) -> Dataset:
        recommendations = [
            self.__convert_recommendation_for_deserialization(raw_recommendation)
            for raw_recommendation in raw_dataset.get("recommendations") or []
        ]
        return {
            "last_updated": self.__date(raw_dataset.get("last_updated"), "dataset"),
            "proposals": [
                cast(Proposal, {"description": "", "recommendation_ids": [], **p})
                for p in self.__mappings(raw_dataset.get("proposals"), "Proposal")
            ],
            "chapters": [
                self.__convert_chapter_for_deserialization(c)
                for c in self.__mappings(raw_dataset.get("chapters"), "Chapter")
            ],
            "owner_info": [
                self.__convert_owner_info_for_deserialization(o)
                for o in self.__mappings(raw_dataset.get("owner_info"), "Owner info")
            ],
            "recommendations": recommendations,
        }

    def __mappings(self, value: Any, kind: str) -> list[dict[str, Any]]:
        if value is None:
            return []
        if not isinstance(value, list):
            raise DatasetError(f"{kind} entries must be a list, got {value!r}")
        for entry in value:
            if not isinstance(entry, dict):
                raise DatasetError(f"{kind} entry must be a mapping: {entry!r}")
        return value

    def __convert_chapter_for_deserialization(self, raw: dict[str, Any]) -> Chapter:
        if "id" not in raw:
            raise DatasetError(f"Chapter is missing an id: {raw!r}")
        return {
            "id": self.__int(raw["id"], f"chapter {raw!r}"),
            "title": raw.get("title") or "",
            "description": raw.get("description"),
        }

    def __convert_owner_info_for_deserialization(
        self, raw: dict[str, Any]
    ) -> OwnerInfo:
        if not raw.get("owner"):
            raise DatasetError(f"Owner info entry is missing an owner: {raw!r}")
        key_people = raw.get("key_people") or []
        if not isinstance(key_people, list) or not all(
            isinstance(person, dict) for person in key_people
        ):
            raise DatasetError(
                f"Key people of {raw['owner']} must be a list of mappings"
            )
        return {"owner": raw["owner"], "key_people": key_people}

    def __convert_recommendation_for_deserialization(
        self, raw: dict[str, Any]
    ) -> Recommendation:
        if not isinstance(raw, dict) or "id" not in raw or "code" not in raw:
            raise DatasetError(f"Recommendation is missing an id or code: {raw!r}")

        code = str(raw["code"])
        ownership = raw.get("ownership") or {}
        if not ownership.get("primary_owner"):
            raise DatasetError(f"Recommendation {code} has no primary owner")

        status_info = raw.get("overall_status") or {}
        status = status_info.get("status", "not_started")
        if status not in OVERALL_STATUSES:
            raise DatasetError(f"Recommendation {code} has unknown status {status!r}")
        confidence = status_info.get("confidence")
        if confidence is not None and confidence not in CONFIDENCES:
            raise DatasetError(
                f"Recommendation {code} has unknown confidence {confidence!r}"
            )

        chapter = raw.get("chapter") or {}
        if not isinstance(chapter, dict):
            raise DatasetError(f"Recommendation {code} has a malformed chapter")
        titles = raw.get("titles") or {}
        scope = raw.get("scope") or {}
        timeline = raw.get("delivery_timeline") or {}
        dependencies = raw.get("dependencies") or {}
        updates = self.__mappings(
            raw.get("updates"), f"Update on recommendation {code}"
        )

        return {
            "id": self.__int(raw["id"], f"recommendation {code} id"),
            "code": code,
            "chapter": {
                "number": self.__int(
                    chapter.get("number", raw.get("chapter_id", 0)),
                    f"recommendation {code} chapter",
                ),
                "title": chapter.get("title") or "",
            },
            "proposal_ids": raw.get("proposal_ids") or [],
            "titles": {
                "short": titles.get("short") or code,
                "long": titles.get("long") or titles.get("short") or code,
            },
            "text": raw.get("text") or "",
            "scope": {
                "sectors": scope.get("sectors") or [],
                "domains": scope.get("domains") or [],
            },
            "ownership": {
                "primary_owner": ownership["primary_owner"],
                "co_owners": ownership.get("co_owners") or [],
                "key_regulators": ownership.get("key_regulators") or [],
            },
            "delivery_timeline": {
                "original_text": timeline.get("original_text"),
                "target_date": self.__date(timeline.get("target_date"), code),
                "revised_target_date": self.__date(
                    timeline.get("revised_target_date"), code
                ),
                "notes": timeline.get("notes"),
            },
            "implementation_type": raw.get("implementation_type") or [],
            "dependencies": {
                "depends_on": dependencies.get("depends_on") or [],
                "enables": dependencies.get("enables") or [],
            },
            "overall_status": {
                "status": status,
                "last_updated": self.__date(status_info.get("last_updated"), code),
                "confidence": confidence,
                "summary": status_info.get("summary"),
            },
            "updates": [
                self.__convert_update_for_deserialization(update, code)
                for update in updates
            ],
            "notes": raw.get("notes"),
        }

    def __convert_update_for_deserialization(
        self, raw: dict[str, Any], code: str
    ) -> Update:
        if raw.get("date") is None:
            raise DatasetError(f"Update on recommendation {code} has no date")
        status = raw.get("status", "info")
        if status not in UPDATE_STATUSES:
            raise DatasetError(
                f"Update on recommendation {code} has unknown status {status!r}"
            )

        impact = raw.get("impact_on_overall")
        source = raw.get("source")
        return {
            "date": cast(pendulum.DateTime, self.__date(raw["date"], code)),
            "status": status,
            "tags": raw.get("tags") or [],
            "title": raw.get("title") or "",
            "description": raw.get("description") or "",
            "links": raw.get("links") or [],
            "source": (
                {"type": source.get("type", ""), "reference": source.get("reference")}
                if source
                else None
            ),
            "impact_on_overall": (
                {
                    "changes_overall_status_to": impact.get(
                        "changes_overall_status_to"
                    ),
                    "changes_confidence_to": impact.get("changes_confidence_to"),
                    "notes": impact.get("notes"),
                }
                if impact
                else None
            ),
        }

    def __int(self, value: Any, owner: str) -> int:
        try:
            return int(value)
        except (TypeError, ValueError) as e:
            raise DatasetError(f"Invalid number {value!r} in {owner}") from e

    def __date(self, value: Any, owner: str) -> Optional[pendulum.DateTime]:
        try:
            return time.datetime_from_date_value_optional(value)
        except (TypeError, ValueError) as e:
            raise DatasetError(f"Invalid date {value!r} in {owner}") from e

    def get_all_recommendations(self) -> list[Recommendation]:
        return deepcopy(self.dataset["recommendations"])

    def get_recommendation(self, id: int) -> Optional[Recommendation]:
        for recommendation in self.dataset["recommendations"]:
            if recommendation["id"] == id:
                return deepcopy(recommendation)
        return None

    def get_recommendation_by_code(self, code: str) -> Optional[Recommendation]:
        for recommendation in self.dataset["recommendations"]:
            if recommendation["code"].lower() == code.lower():
                return deepcopy(recommendation)
        return None

    def get_update_by_date(
        self, recommendation_id: int, date: pendulum.DateTime
    ) -> Optional[tuple[Recommendation, Update]]:
        recommendation = self.get_recommendation(recommendation_id)
        if recommendation is None:
            return None
        for update in recommendation["updates"]:
            if update["date"] == date:
                return recommendation, update
        return None

    def get_last_updated(self) -> Optional[pendulum.DateTime]:
        return self.dataset["last_updated"]

    def get_proposals(self) -> list[Proposal]:
        return deepcopy(self.dataset["proposals"])

    def get_chapters(self) -> list[Chapter]:
        """Chapters from the dataset, or derived from the recommendations when it lists none."""
        if self.dataset["chapters"]:
            return sorted(deepcopy(self.dataset["chapters"]), key=lambda c: c["id"])

        chapters: dict[int, Chapter] = {}
        for recommendation in self.dataset["recommendations"]:
            number = recommendation["chapter"]["number"]
            if number not in chapters:
                chapters[number] = {
                    "id": number,
                    "title": recommendation["chapter"]["title"] or f"Chapter {number}",
                    "description": None,
                }
        return sorted(chapters.values(), key=lambda c: c["id"])

    def get_owner_info(self) -> dict[str, list[KeyPerson]]:
        return {
            info["owner"]: deepcopy(info["key_people"])
            for info in self.dataset["owner_info"]
            if info["key_people"]
        }


DATASET_REPO = DatasetRepository()
