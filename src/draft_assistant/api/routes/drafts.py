"""
Draft API Routes

Endpoints for the normalized draft state, its board, the available pool and
NFL depth charts with drafted players flagged.
"""

from fastapi import APIRouter

from draft_assistant.api.dependencies import (
    DraftStateDep,
    LeagueQuery,
    PositionQuery,
    RankingsDep,
    SearchQuery,
    SettingsDep,
)
from draft_assistant.models import DraftState, DraftSummary, Player, TeamDepthChart
from draft_assistant.services.availability import available_players, drafted_name_keys
from draft_assistant.services.catalog import build_catalog, depth_charts, filter_players
from draft_assistant.services.draft_board import board_rows, draft_summary

router = APIRouter()


@router.get(
    "/{source}",
    response_model=DraftState,
    summary="Get draft state",
    description="Fetch and normalize the draft from Sleeper or the spreadsheet draft board.",
)
async def get_draft(state: DraftStateDep) -> DraftState:
    """Get the current normalized draft state."""
    return state


@router.get(
    "/{source}/summary",
    response_model=DraftSummary,
    summary="Get draft summary",
    description="Progress, most drafted position and the team on the clock.",
)
async def get_draft_summary(state: DraftStateDep) -> DraftSummary:
    """Get a progress overview of the draft."""
    return draft_summary(state)


@router.get(
    "/{source}/board",
    summary="Get draft board",
    description="Rounds by teams grid of picks.",
)
async def get_draft_board(state: DraftStateDep) -> dict:
    """Get the draft board grid."""
    return {
        "teams": [team.name for team in state.teams],
        "rounds": board_rows(state),
    }


@router.get(
    "/{source}/available",
    response_model=list[Player],
    summary="Get available players",
    description="Ranked players not yet drafted, optionally filtered by position or name.",
)
async def get_available_players(
    state: DraftStateDep,
    rankings: RankingsDep,
    settings: SettingsDep,
    league: LeagueQuery = None,
    position: PositionQuery = None,
    search: SearchQuery = None,
) -> list[Player]:
    """Get undrafted players in rank order."""
    catalog = build_catalog(rankings, league or settings.default_league, settings)
    return filter_players(available_players(catalog, state), position, search)


@router.get(
    "/{source}/depth-charts",
    response_model=list[TeamDepthChart],
    summary="Get depth charts",
    description="QB/RB/WR/TE depth charts per NFL team with league ranks and drafted players flagged.",
)
async def get_depth_charts(
    state: DraftStateDep,
    rankings: RankingsDep,
    settings: SettingsDep,
    league: LeagueQuery = None,
) -> list[TeamDepthChart]:
    """Get depth charts annotated with ranks and this draft's picks."""
    catalog = build_catalog(rankings, league or settings.default_league, settings)
    return depth_charts(rankings, catalog, drafted_name_keys(state))
