"""Builders for test players, picks and draft states."""

from draft_assistant.models import (
    DataSource,
    DraftedPlayerRecord,
    DraftState,
    DraftStatus,
    Player,
    Team,
)
from draft_assistant.services.catalog import tier_for_rank


def make_player(
    name: str,
    position: str,
    rank: int,
    team: str = "FA",
    bye: int = 0,
    adp: str | int | float = "",
    upside: str | int | float = "",
    projected_points: float = 0.0,
    tier: int | None = None,
) -> Player:
    return Player(
        id=rank,
        name=name,
        position=position,
        team=team,
        rank=rank,
        positional_rank=rank,
        tier=tier or tier_for_rank(rank),
        bye=bye,
        adp=adp,
        upside=upside,
        projected_points=projected_points,
    )


def make_record(
    name: str,
    pick_number: int,
    team_id: int | None,
    position: str = "UNK",
    draft_round: int = 1,
    team: str = "UNK",
) -> DraftedPlayerRecord:
    return DraftedPlayerRecord(
        id=f"pick-{pick_number}",
        name=name,
        position=position,
        team=team,
        team_id=team_id,
        draft_round=draft_round,
        pick_number=pick_number,
    )


def make_state(
    records: list[DraftedPlayerRecord],
    total_teams: int = 2,
    total_rounds: int = 15,
    user_team_id: int | None = 1,
    team_names: list[str] | None = None,
) -> DraftState:
    names = team_names or [f"Team {i}" for i in range(1, total_teams + 1)]
    teams = [
        Team(
            id=team_id,
            name=names[team_id - 1],
            picks=[r for r in records if r.team_id == team_id],
            draft_position=team_id,
            is_user_team=team_id == user_team_id,
        )
        for team_id in range(1, total_teams + 1)
    ]
    total_picks = total_teams * total_rounds
    return DraftState(
        current_pick=min(len(records) + 1, total_picks + 1),
        teams=teams,
        drafted_players=records,
        draft_status=DraftStatus.IN_PROGRESS,
        total_rounds=total_rounds,
        total_teams=total_teams,
        total_picks=total_picks,
        picks_remaining=max(0, total_picks - len(records)),
        user_team_id=user_team_id,
        data_source=DataSource.GOOGLE_APPS_SCRIPT,
        league_name="Test League",
    )

