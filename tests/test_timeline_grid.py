import random

import pytest
from conftest import day, make_recommendation, make_update

from taskforce.model.timeline_grid import cell_key
from taskforce.service.timeline import get_timeline_items
from taskforce.service.timeline_grid import (
    build_timeline_grid,
    build_week_lattice,
    format_week_label,
    generate_timeline_grid,
    generate_weeks,
    get_week_key,
    group_months_by_year,
    group_weeks_by_month,
)


def test_week_key_is_monday_and_sunday_belongs_to_previous_week():
    assert get_week_key(day(2024, 1, 10)) == "2024-01-08"
    assert get_week_key(day(2024, 1, 8)) == "2024-01-08"
    assert get_week_key(day(2024, 1, 14)) == "2024-01-08"
    assert get_week_key(day(2023, 1, 1)) == "2022-12-26"


def test_week_labels():
    assert format_week_label(day(2025, 1, 6), day(2025, 1, 12)) == "6-12 Jan 2025"
    assert (
        format_week_label(day(2025, 1, 27), day(2025, 2, 2)) == "27 Jan - 2 Feb 2025"
    )
    assert (
        format_week_label(day(2024, 12, 30), day(2025, 1, 5))
        == "30 Dec - 5 Jan 2024"
    )


def test_generate_weeks_is_gapless_from_monday_to_sunday():
    weeks = generate_weeks(day(2024, 1, 10), day(2024, 3, 3))

    assert weeks[0]["week_key"] == "2024-01-08"
    assert weeks[-1]["week_key"] == "2024-02-26"
    for week in weeks:
        assert week["week_start"].day_of_week == 0
        assert week["week_start"].hour == 0
        assert week["week_end"].format("YYYY-MM-DD") == week[
            "week_start"
        ].add(days=6).format("YYYY-MM-DD")
        assert week["week_end"].hour == 23
    for previous, current in zip(weeks, weeks[1:]):
        assert current["week_start"] == previous["week_start"].add(weeks=1)


def test_lattice_spans_items_and_today_with_windows(scenario_recommendations, today):
    items = get_timeline_items(scenario_recommendations, today=today)

    weeks = build_week_lattice(items, weeks_ahead=2, weeks_back=1, today=today)

    # earliest item 2022-12-01, minus one week, snapped to Monday
    assert weeks[0]["week_key"] == "2022-11-21"
    # latest item 2024-06-01 (a Saturday), plus two weeks
    assert weeks[-1]["week_key"] == "2024-06-10"


def test_lattice_extends_to_today_when_items_are_in_the_past():
    recommendation = make_recommendation(
        1, updates=[make_update(day(2024, 1, 10))]
    )
    items = get_timeline_items([recommendation], today=day(2024, 3, 20))

    weeks = build_week_lattice(items, weeks_ahead=0, weeks_back=0, today=day(2024, 3, 20))

    assert weeks[0]["week_key"] == "2024-01-08"
    assert weeks[-1]["week_key"] == "2024-03-18"


def test_negative_windows_are_rejected(scenario_recommendations, today):
    items = get_timeline_items(scenario_recommendations, today=today)

    with pytest.raises(ValueError):
        build_week_lattice(items, weeks_ahead=-1, today=today)
    with pytest.raises(ValueError):
        build_timeline_grid(items, weeks_back=-1, today=today)


def test_empty_input_gives_empty_grid(today):
    grid = build_timeline_grid([], today=today)

    assert grid["weeks"] == []
    assert grid["owners"] == []
    assert grid["cells"] == {}
    assert grid["recommendations"] == []
    assert grid["recommendation_cells"] == {}
    assert grid["weeks_with_items"] == []
    assert grid["month_groups"] == []
    assert grid["year_groups"] == []


def test_scenario_owner_ranking_and_cells(scenario_recommendations, today):
    grid = generate_timeline_grid(
        scenario_recommendations, weeks_ahead=4, weeks_back=4, today=today
    )

    # DESNZ completed 1 of 2 (50%), ONR 0 of 2
    assert grid["owners"] == ["DESNZ", "ONR"]

    week_keys = [week["week_key"] for week in grid["weeks"]]
    assert week_keys[-1] >= get_week_key(day(2024, 6, 1).add(weeks=4))

    desnz_cell = grid["cells"][cell_key("DESNZ", get_week_key(day(2022, 12, 1)))]
    assert [item["type"] for item in desnz_cell["items"]] == ["update"]
    assert desnz_cell["items"][0]["recommendation"]["code"] == "R2"

    r2_items = [
        item
        for cell in grid["recommendation_cells"].values()
        for item in cell["items"]
        if item["recommendation"]["code"] == "R2"
    ]
    assert len(r2_items) == 1
    assert r2_items[0]["type"] == "update"

    # R3 is co-owned, so its revised deadline shows for both owners
    r3_week = get_week_key(day(2024, 4, 15))
    for owner in ("ONR", "DESNZ"):
        cell = grid["cells"][cell_key(owner, r3_week)]
        assert [item["recommendation"]["code"] for item in cell["items"]] == ["R3"]
    assert cell_key("ONR", get_week_key(day(2024, 3, 1))) not in grid["cells"]


def test_every_item_lands_in_exactly_one_week(scenario_recommendations, today):
    items = get_timeline_items(scenario_recommendations, today=today)
    grid = build_timeline_grid(items, scenario_recommendations, today=today)

    placements: dict[int, int] = {}
    for cell in grid["recommendation_cells"].values():
        for item in cell["items"]:
            placements[id(item)] = placements.get(id(item), 0) + 1

    assert len(placements) == len(items)
    assert set(placements.values()) == {1}


def test_weeks_with_items_matches_non_empty_cells(scenario_recommendations, today):
    grid = generate_timeline_grid(scenario_recommendations, today=today)

    non_empty = {cell["week_key"] for cell in grid["cells"].values() if cell["items"]}
    non_empty |= {
        cell["week_key"]
        for cell in grid["recommendation_cells"].values()
        if cell["items"]
    }

    assert set(grid["weeks_with_items"]) == non_empty
    week_order = [week["week_key"] for week in grid["weeks"]]
    assert grid["weeks_with_items"] == [
        key for key in week_order if key in non_empty
    ]


def test_month_and_year_groups_partition(scenario_recommendations, today):
    grid = generate_timeline_grid(scenario_recommendations, today=today)

    week_indices = [
        index for group in grid["month_groups"] for index in group["week_indices"]
    ]
    assert week_indices == list(range(len(grid["weeks"])))

    month_indices = [
        index for group in grid["year_groups"] for index in group["month_indices"]
    ]
    assert month_indices == list(range(len(grid["month_groups"])))

    for group in grid["month_groups"]:
        for index in group["week_indices"]:
            assert grid["weeks"][index]["week_start"].format("YYYY-MM") == group[
                "month_key"
            ]


def test_month_grouping_uses_week_start():
    weeks = generate_weeks(day(2024, 1, 22), day(2024, 2, 12))

    month_groups = group_weeks_by_month(weeks)

    # the week of 29 Jan - 4 Feb belongs to January
    assert [(g["month_label"], g["week_indices"]) for g in month_groups] == [
        ("January", [0, 1]),
        ("February", [2, 3]),
    ]
    assert group_months_by_year(month_groups) == [
        {"year": 2024, "month_indices": [0, 1]}
    ]


def test_grid_is_independent_of_input_order(scenario_recommendations, today):
    items = get_timeline_items(scenario_recommendations, today=today)
    expected = build_timeline_grid(items, scenario_recommendations, today=today)

    shuffled_items = list(items)
    shuffled_recommendations = list(scenario_recommendations)
    rng = random.Random(7)
    for _ in range(5):
        rng.shuffle(shuffled_items)
        rng.shuffle(shuffled_recommendations)
        grid = build_timeline_grid(
            shuffled_items, shuffled_recommendations, today=today
        )
        assert grid == expected


def test_cell_items_are_date_ascending(today):
    recommendation = make_recommendation(
        1,
        updates=[
            make_update(day(2024, 1, 12), title="friday"),
            make_update(day(2024, 1, 8), title="monday"),
            make_update(day(2024, 1, 10), title="wednesday"),
        ],
    )

    grid = generate_timeline_grid([recommendation], today=today)

    cell = grid["cells"][cell_key("ONR", "2024-01-08")]
    assert [item["update"]["title"] for item in cell["items"]] == [
        "monday",
        "wednesday",
        "friday",
    ]


def test_owner_ranking_ties_break_on_count_then_name(today):
    recommendations = [
        make_recommendation(1, owner="MOD", status="completed",
                            updates=[make_update(day(2024, 1, 1))]),
        make_recommendation(2, owner="MOD", updates=[make_update(day(2024, 1, 1))]),
        make_recommendation(3, owner="EA", status="completed",
                            updates=[make_update(day(2024, 1, 1))]),
        make_recommendation(4, owner="EA", updates=[make_update(day(2024, 1, 1))]),
        make_recommendation(5, owner="DWP", status="completed",
                            updates=[make_update(day(2024, 1, 1))]),
        make_recommendation(6, owner="DWP"),
        make_recommendation(7, owner="DWP"),
        make_recommendation(8, owner="DWP"),
    ]

    grid = generate_timeline_grid(recommendations, today=today)

    # EA and MOD are both 50% of 2; DWP is 25% of 4
    assert grid["owners"] == ["EA", "MOD", "DWP"]


def test_owner_statistics_use_all_recommendations(today):
    with_updates = make_recommendation(
        1, owner="HSE", updates=[make_update(day(2024, 1, 5))]
    )
    without_items = make_recommendation(2, owner="HSE", status="completed")
    other = make_recommendation(3, owner="DBT", updates=[make_update(day(2024, 1, 5))])

    items = get_timeline_items([with_updates, other], today=today)
    grid = build_timeline_grid(
        items, [with_updates, without_items, other], today=today
    )

    # counted over items alone, HSE would be 0% and sort after DBT
    assert grid["owners"] == ["HSE", "DBT"]


def test_recommendation_axis_sorts_codes_as_strings(today):
    recommendations = [
        make_recommendation(2, updates=[make_update(day(2024, 1, 1))]),
        make_recommendation(10, updates=[make_update(day(2024, 1, 1))]),
        make_recommendation(1, updates=[make_update(day(2024, 1, 1))]),
    ]

    grid = generate_timeline_grid(recommendations, today=today)

    assert [r["code"] for r in grid["recommendations"]] == ["R1", "R10", "R2"]
    assert cell_key("10", "2024-01-01") in grid["recommendation_cells"]


def test_owner_filter_keeps_ranking_over_all_recommendations(today):
    recommendations = [
        make_recommendation(
            1,
            owner="ONR",
            co_owners=["DESNZ", "MOD"],
            updates=[make_update(day(2024, 1, 10))],
        ),
        make_recommendation(2, owner="ONR", updates=[make_update(day(2024, 1, 17))]),
        make_recommendation(3, owner="ONR", status="off_track"),
        make_recommendation(
            4,
            owner="DESNZ",
            status="completed",
            updates=[make_update(day(2023, 6, 1), status="completed")],
        ),
        make_recommendation(5, owner="DESNZ", status="completed"),
        make_recommendation(6, owner="MOD", status="completed"),
        make_recommendation(7, owner="MOD", status="on_track"),
    ]

    grid = generate_timeline_grid(recommendations, today=today, owner="ONR")

    assert grid["owners"] == ["DESNZ", "MOD", "ONR"]
    assert [r["id"] for r in grid["recommendations"]] == [1, 2]
    assert all(
        item["recommendation"]["id"] in (1, 2)
        for cell in grid["cells"].values()
        for item in cell["items"]
    )
