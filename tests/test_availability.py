from draft_assistant.models import DraftedPlayerRecord
from draft_assistant.services.availability import (
    available_players,
    drafted_catalog_players,
    drafted_name_keys,
    index_by_name,
)
from tests.factories import make_player, make_record, make_state


CATALOG = [
    make_player("Christian McCaffrey", "RB", 1),
    make_player("Tyreek Hill", "WR", 2),
    make_player("Josh Allen", "QB", 3),
    make_player("Travis Kelce", "TE", 4),
]


def test_drafted_players_are_removed_case_insensitively():
    state = make_state([make_record("  tyreek HILL ", 1, 1), make_record("Josh Allen", 2, 2)])

    assert [p.name for p in available_players(CATALOG, state)] == [
        "Christian McCaffrey",
        "Travis Kelce",
    ]


def test_sleeper_names_use_first_and_last_name():
    record = DraftedPlayerRecord(
        id="4034",
        name="ignored",
        first_name="Christian",
        last_name="McCaffrey",
        team_id=1,
        pick_number=1,
    )
    state = make_state([record])

    assert drafted_name_keys(state) == {"christian mccaffrey"}
    assert "Christian McCaffrey" not in [p.name for p in available_players(CATALOG, state)]


def test_filtering_is_idempotent():
    state = make_state([make_record("Josh Allen", 1, 1)])

    once = available_players(CATALOG, state)
    assert available_players(once, state) == once


def test_result_is_sorted_by_rank():
    shuffled = list(reversed(CATALOG))
    state = make_state([])

    assert [p.rank for p in available_players(shuffled, state)] == [1, 2, 3, 4]


def test_spelling_differences_stay_available():
    state = make_state([make_record("Chris McCaffrey", 1, 1)])

    assert len(available_players(CATALOG, state)) == len(CATALOG)


def test_index_by_name_keeps_best_rank():
    duplicate = make_player("Josh Allen", "QB", 90)
    index = index_by_name(CATALOG + [duplicate])

    assert index["josh allen"].rank == 3


def test_drafted_catalog_players_in_pick_order():
    state = make_state(
        [make_record("Travis Kelce", 1, 1), make_record("Unknown Guy", 2, 2), make_record("Tyreek Hill", 3, 2)]
    )

    assert [p.name for p in drafted_catalog_players(CATALOG, state)] == ["Travis Kelce", "Tyreek Hill"]
