"""
Draft Board

Grid and progress views of a DraftState. The grid is a pandas DataFrame with
one row per round and one column per team, in draft-slot order.
"""

from collections import Counter

import pandas as pd

from draft_assistant.models.analysis import DraftSummary, TeamPickSummary
from draft_assistant.models.draft import DraftedPlayerRecord, DraftState, Team
from draft_assistant.models.player import UNKNOWN_POSITION
from draft_assistant.services.snake import team_for_pick


def _cell_label(record: DraftedPlayerRecord) -> str:
    if record.position and record.position != UNKNOWN_POSITION:
        return f"{record.display_name} ({record.position})"
    return record.display_name


def draft_board_frame(draft_state: DraftState) -> pd.DataFrame:
    """
    Rounds x teams grid of picks.

    Args:
        draft_state: Current draft

    Returns:
        DataFrame indexed "Round 1".."Round N" with one column per team name;
        empty cells are "".
    """
    rounds = [f"Round {r}" for r in range(1, draft_state.total_rounds + 1)]
    columns = [team.name for team in draft_state.teams]
    frame = pd.DataFrame("", index=pd.Index(rounds, name="round"), columns=columns)

    for position, team in enumerate(draft_state.teams):
        for record in team.picks:
            if not 1 <= record.draft_round <= draft_state.total_rounds:
                continue
            row = record.draft_round - 1
            current = frame.iat[row, position]
            label = _cell_label(record)
            frame.iat[row, position] = f"{current}, {label}" if current else label

    return frame


def board_rows(draft_state: DraftState) -> list[dict[str, str]]:
    """Draft board grid as JSON-friendly rows."""
    return draft_board_frame(draft_state).reset_index().to_dict(orient="records")


def on_the_clock(draft_state: DraftState) -> Team | None:
    """Team whose turn it is, or None once the draft is over."""
    if draft_state.current_pick > draft_state.total_picks:
        return None
    team_id = team_for_pick(draft_state.current_pick, draft_state.total_teams)
    return draft_state.get_team(team_id) if team_id else None


def draft_summary(draft_state: DraftState) -> DraftSummary:
    """Progress overview: completion, busiest position, who is on the clock."""
    picks_made = len(draft_state.drafted_players)
    total_picks = draft_state.total_picks

    positions = Counter(
        r.position for r in draft_state.drafted_players if r.position != UNKNOWN_POSITION
    )
    most_drafted = positions.most_common(1)[0][0] if positions else "N/A"

    clock_team = on_the_clock(draft_state)
    user_team = draft_state.user_team

    teams = [
        TeamPickSummary(
            team_id=team.id,
            team_name=team.name,
            pick_count=len(team.picks),
            last_pick=team.picks[-1].display_name if team.picks else None,
            is_user_team=team.is_user_team,
        )
        for team in draft_state.teams
    ]

    return DraftSummary(
        draft_status=draft_state.draft_status.value,
        data_source=draft_state.data_source.value,
        league_name=draft_state.league_name,
        season=draft_state.season,
        current_pick=draft_state.current_pick,
        current_round=draft_state.current_round,
        total_rounds=draft_state.total_rounds,
        total_picks=total_picks,
        picks_made=picks_made,
        picks_remaining=draft_state.picks_remaining,
        progress_percent=round(picks_made / total_picks * 100) if total_picks else 0,
        average_picks_per_team=(
            round(picks_made / draft_state.total_teams) if draft_state.total_teams else 0
        ),
        most_drafted_position=most_drafted,
        teams_with_picks=sum(1 for t in teams if t.pick_count > 0),
        on_the_clock=clock_team.name if clock_team else None,
        user_team=user_team.name if user_team else None,
        teams=teams,
    )
