import pytest
from conftest import day

from taskforce import configuration
from taskforce.repository.dataset import DatasetError, DatasetRepository


def test_loads_recommendations_with_normalized_fields(dataset_path):
    repository = DatasetRepository(dataset_path)

    recommendations = repository.get_all_recommendations()

    assert [r["code"] for r in recommendations] == ["R01", "R02", "R03", "R10"]
    r10 = recommendations[3]
    assert r10["titles"]["long"] == "Skills review"
    assert r10["ownership"]["co_owners"] == []
    assert r10["delivery_timeline"]["target_date"] is None
    assert r10["updates"] == []
    assert r10["overall_status"]["confidence"] is None


def test_dates_are_local_midnight_datetimes(dataset_path):
    repository = DatasetRepository(dataset_path)

    r01 = repository.get_recommendation(1)

    assert r01 is not None
    assert r01["delivery_timeline"]["target_date"] == day(2025, 6, 30)
    # quoted and unquoted YAML dates are read alike
    assert [u["date"] for u in r01["updates"]] == [day(2025, 1, 15), day(2025, 3, 1)]
    assert repository.get_last_updated() == day(2025, 3, 14)


def test_update_optional_structures(dataset_path):
    repository = DatasetRepository(dataset_path)

    r01 = repository.get_recommendation(1)
    r02 = repository.get_recommendation(2)

    assert r01 is not None and r02 is not None
    assert r01["updates"][0]["source"] == {
        "type": "press_release",
        "reference": "PR-2025-01",
    }
    assert r01["updates"][1]["source"] is None
    assert r02["updates"][0]["impact_on_overall"] == {
        "changes_overall_status_to": "off_track",
        "changes_confidence_to": "low",
        "notes": "Slippage reported by EA.",
    }


def test_lookup_by_code_is_case_insensitive(dataset_path):
    repository = DatasetRepository(dataset_path)

    found = repository.get_recommendation_by_code("r02")

    assert found is not None
    assert found["id"] == 2
    assert repository.get_recommendation_by_code("R99") is None
    assert repository.get_recommendation(99) is None


def test_returned_records_are_copies(dataset_path):
    repository = DatasetRepository(dataset_path)

    first = repository.get_all_recommendations()
    first[0]["titles"]["short"] = "changed"

    assert repository.get_all_recommendations()[0]["titles"]["short"] == (
        "Clear leadership"
    )


def test_get_update_by_date(dataset_path):
    repository = DatasetRepository(dataset_path)

    found = repository.get_update_by_date(1, day(2025, 3, 1))

    assert found is not None
    recommendation, update = found
    assert recommendation["code"] == "R01"
    assert update["title"] == "Terms of reference published"
    assert repository.get_update_by_date(1, day(2025, 3, 2)) is None


def test_chapters_proposals_and_owner_info(dataset_path):
    repository = DatasetRepository(dataset_path)

    assert [c["id"] for c in repository.get_chapters()] == [1, 2]
    assert repository.get_chapters()[1]["description"] is None
    assert repository.get_proposals()[0]["recommendation_ids"] == [1, 2]
    assert repository.get_owner_info() == {
        "ONR": [{"title": "Chief Nuclear Inspector", "name": "Jane Doe"}]
    }


def test_chapters_fall_back_to_recommendations(write_dataset):
    path = write_dataset(
        """
recommendations:
  - id: 1
    code: R1
    chapter: {number: 3, title: Skills}
    ownership: {primary_owner: DWP}
  - id: 2
    code: R2
    chapter: {number: 1}
    ownership: {primary_owner: DWP}
"""
    )

    chapters = DatasetRepository(path).get_chapters()

    assert chapters == [
        {"id": 1, "title": "Chapter 1", "description": None},
        {"id": 3, "title": "Skills", "description": None},
    ]


def test_default_path_comes_from_configuration(dataset_path, monkeypatch):
    monkeypatch.setattr(configuration, "DATA_DATASET_PATH", dataset_path)

    repository = DatasetRepository()

    assert repository.path == dataset_path
    assert len(repository.get_all_recommendations()) == 4


def test_reset_switches_file(dataset_path, write_dataset):
    other = write_dataset(
        "recommendations:\n  - {id: 5, code: R5, ownership: {primary_owner: MOJ}}\n"
    )
    repository = DatasetRepository(dataset_path)
    assert len(repository.get_all_recommendations()) == 4

    repository.reset(other)

    assert [r["code"] for r in repository.get_all_recommendations()] == ["R5"]


def test_missing_file_raises(tmp_path):
    with pytest.raises(DatasetError, match="not found"):
        DatasetRepository(tmp_path / "nope.yaml").get_all_recommendations()


@pytest.mark.parametrize(
    "content, message",
    [
        ("recommendations: [unclosed", "not valid YAML"),
        ("- just\n- a list\n", "must contain a mapping"),
        ("recommendations:\n  - {code: R1}\n", "missing an id or code"),
        ("recommendations:\n  - {id: 1, code: R1}\n", "no primary owner"),
        (
            "recommendations:\n  - id: 1\n    code: R1\n"
            "    ownership: {primary_owner: EA}\n"
            "    overall_status: {status: finished}\n",
            "unknown status",
        ),
        (
            "recommendations:\n  - id: 1\n    code: R1\n"
            "    ownership: {primary_owner: EA}\n"
            "    overall_status: {status: on_track, confidence: certain}\n",
            "unknown confidence",
        ),
        (
            "recommendations:\n  - id: 1\n    code: R1\n"
            "    ownership: {primary_owner: EA}\n"
            "    updates:\n      - {title: undated}\n",
            "has no date",
        ),
        (
            "recommendations:\n  - id: 1\n    code: R1\n"
            "    ownership: {primary_owner: EA}\n"
            "    updates:\n      - {date: 2024-01-01, status: exploded}\n",
            "unknown status",
        ),
        (
            "recommendations:\n  - id: 1\n    code: R1\n"
            "    ownership: {primary_owner: EA}\n"
            "    delivery_timeline: {target_date: someday}\n",
            "Invalid date",
        ),
        (
            "recommendations:\n  - id: 1\n    code: R1\n"
            "    ownership: {primary_owner: EA}\n"
            "    chapter: {number: x}\n",
            "Invalid number 'x' in recommendation R1 chapter",
        ),
        (
            "recommendations:\n  - id: one\n    code: R1\n"
            "    ownership: {primary_owner: EA}\n",
            "Invalid number 'one' in recommendation R1 id",
        ),
        (
            "recommendations:\n  - id: 1\n    code: R1\n"
            "    ownership: {primary_owner: EA}\n"
            "    updates:\n      - just a sentence\n",
            "Update on recommendation R1 entry must be a mapping",
        ),
        ("owner_info:\n  - {key_people: []}\n", "missing an owner"),
        (
            "owner_info:\n  - owner: EA\n    key_people: [Jane]\n",
            "Key people of EA",
        ),
        ("chapters:\n  - {title: Leadership}\n", "Chapter is missing an id"),
        ("chapters:\n  - {id: two}\n", "Invalid number 'two' in chapter"),
        ("proposals: [P1]\n", "Proposal entry must be a mapping"),
    ],
)
def test_malformed_datasets_raise(write_dataset, content, message):
    repository = DatasetRepository(write_dataset(content))

    with pytest.raises(DatasetError, match=message):
        repository.get_all_recommendations()


def test_dataset_error_is_a_value_error():
    assert issubclass(DatasetError, ValueError)
