"""Shared fixtures for building recommendation records and isolating app state."""

from pathlib import Path
from typing import Any, Callable, Optional

import pendulum
import pytest
from yaml import dump

from taskforce import configuration
from taskforce.model.recommendation import Recommendation, Update
from taskforce.repository.configuration import CONFIGURATION_REPO
from taskforce.repository.dataset import DATASET_REPO
from taskforce.template.configuration import get_configuration_template
from taskforce.view import state as view_state

FIXTURES_DIR = Path(__file__).resolve().parent / "fixtures"


def day(year: int, month: int, day_of_month: int) -> pendulum.DateTime:
    return pendulum.datetime(year, month, day_of_month, tz="local")


def make_update(
    date: pendulum.DateTime,
    status: str = "progress",
    title: str = "Update",
    tags: Optional[list[str]] = None,
) -> Update:
    return {
        "date": date,
        "status": status,  # type: ignore[typeddict-item]
        "tags": tags or [],
        "title": title,
        "description": f"{title} description",
        "links": [],
        "source": None,
        "impact_on_overall": None,
    }


def make_recommendation(
    id: int,
    code: Optional[str] = None,
    owner: str = "ONR",
    co_owners: Optional[list[str]] = None,
    status: str = "on_track",
    target_date: Optional[pendulum.DateTime] = None,
    revised_target_date: Optional[pendulum.DateTime] = None,
    updates: Optional[list[Update]] = None,
    chapter: int = 1,
    short_title: Optional[str] = None,
) -> Recommendation:
    code = code or f"R{id}"
    return {
        "id": id,
        "code": code,
        "chapter": {"number": chapter, "title": f"Chapter {chapter}"},
        "proposal_ids": [],
        "titles": {
            "short": short_title or f"Title {code}",
            "long": f"Long title for {code}",
        },
        "text": f"Full text of {code}",
        "scope": {"sectors": [], "domains": []},
        "ownership": {
            "primary_owner": owner,
            "co_owners": co_owners or [],
            "key_regulators": [],
        },
        "delivery_timeline": {
            "original_text": None,
            "target_date": target_date,
            "revised_target_date": revised_target_date,
            "notes": None,
        },
        "implementation_type": [],
        "dependencies": {"depends_on": [], "enables": []},
        "overall_status": {
            "status": status,  # type: ignore[typeddict-item]
            "last_updated": None,
            "confidence": None,
            "summary": None,
        },
        "updates": updates or [],
        "notes": None,
    }


@pytest.fixture
def today() -> pendulum.DateTime:
    return day(2024, 2, 1)


@pytest.fixture
def scenario_recommendations() -> list[Recommendation]:
    """R1 (ONR, open), R2 (DESNZ, completed), R3 (ONR + DESNZ, revised deadline)."""
    return [
        make_recommendation(
            1,
            owner="ONR",
            status="on_track",
            target_date=day(2024, 6, 1),
            updates=[make_update(day(2024, 1, 10), title="R1 kickoff")],
        ),
        make_recommendation(
            2,
            owner="DESNZ",
            status="completed",
            target_date=day(2023, 1, 1),
            updates=[make_update(day(2022, 12, 1), status="completed", title="R2 done")],
        ),
        make_recommendation(
            3,
            owner="ONR",
            co_owners=["DESNZ"],
            status="off_track",
            target_date=day(2024, 3, 1),
            revised_target_date=day(2024, 4, 15),
        ),
    ]


@pytest.fixture
def dataset_path() -> Path:
    return FIXTURES_DIR / "taskforce.yaml"


@pytest.fixture
def write_dataset(tmp_path: Path) -> Callable[[str], Path]:
    def _write(content: str) -> Path:
        path = tmp_path / "dataset.yaml"
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture(autouse=True)
def isolated_app_state(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Any:
    """Point config at a temp file and reset every process-wide cache."""
    config_path = tmp_path / "config" / "config.yaml"
    config_path.parent.mkdir(parents=True)
    config_path.write_text(dump(get_configuration_template()))
    monkeypatch.setattr(configuration, "CONFIG_PATH", config_path.parent)
    monkeypatch.setattr(configuration, "APP_CONFIG_PATH", config_path)
    monkeypatch.setattr(
        configuration, "DATA_DATASET_PATH", tmp_path / "missing-dataset.yaml"
    )

    CONFIGURATION_REPO.reset()
    DATASET_REPO.reset()
    view_state.reset_view_state()
    yield
    CONFIGURATION_REPO.reset()
    DATASET_REPO.reset()
    view_state.reset_view_state()
