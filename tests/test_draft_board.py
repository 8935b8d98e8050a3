from draft_assistant.services.draft_board import board_rows, draft_board_frame, draft_summary, on_the_clock
from draft_assistant.services.normalizer import normalize_board
from tests.factories import make_record, make_state


BOARD = {
    "Draft Board": [
        {"Cory": {"player": "Tom Brady", "position": "QB"}, "Beta": "Cooper Kupp"},
        {"Cory": {"player": "Travis Kelce", "position": "TE"}, "Beta": ""},
    ]
}


def test_board_frame_shape_and_cells(settings):
    frame = draft_board_frame(normalize_board(BOARD, settings))

    assert list(frame.columns) == ["Cory", "Beta"]
    assert list(frame.index) == ["Round 1", "Round 2"]
    assert frame.loc["Round 1", "Cory"] == "Tom Brady (QB)"
    assert frame.loc["Round 1", "Beta"] == "Cooper Kupp"
    assert frame.loc["Round 2", "Beta"] == ""


def test_board_rows_are_json_friendly(settings):
    rows = board_rows(normalize_board(BOARD, settings))

    assert rows[1] == {"round": "Round 2", "Cory": "Travis Kelce (TE)", "Beta": ""}


def test_draft_summary(settings):
    summary = draft_summary(normalize_board(BOARD, settings))

    assert summary.picks_made == 3
    assert summary.total_picks == 4
    assert summary.progress_percent == 75
    assert summary.average_picks_per_team == 2
    assert summary.most_drafted_position == "QB"
    assert summary.teams_with_picks == 2
    assert summary.current_pick == 4
    assert summary.current_round == 2
    assert summary.on_the_clock == "Cory"
    assert summary.user_team == "Cory"
    assert [t.last_pick for t in summary.teams] == ["Travis Kelce", "Cooper Kupp"]


def test_summary_of_empty_draft():
    summary = draft_summary(make_state([], total_teams=3, total_rounds=2))

    assert summary.progress_percent == 0
    assert summary.most_drafted_position == "N/A"
    assert summary.teams_with_picks == 0
    assert summary.on_the_clock == "Team 1"


def test_finished_draft_has_nobody_on_the_clock():
    state = make_state([make_record("A", 1, 1), make_record("B", 2, 2)], total_teams=2, total_rounds=1)

    assert draft_summary(state).on_the_clock is None


def test_on_the_clock_follows_snake_order():
    state = make_state([make_record("A", 1, 1), make_record("B", 2, 2)], total_teams=2, total_rounds=2)
    assert on_the_clock(state).id == 2

    finished = make_state([make_record("A", 1, 1)], total_teams=1, total_rounds=1)
    assert on_the_clock(finished) is None
