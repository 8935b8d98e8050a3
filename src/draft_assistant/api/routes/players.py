"""
Player API Routes

Endpoints for the ranked player catalog.
"""

from fastapi import APIRouter

from draft_assistant.api.dependencies import (
    PositionQuery,
    RankingsDep,
    SearchQuery,
    SettingsDep,
)
from draft_assistant.models import Player
from draft_assistant.services.catalog import build_catalog, filter_players

router = APIRouter()


@router.get(
    "/{league}",
    response_model=list[Player],
    summary="Get player rankings",
    description="Ranked player pool for a league, optionally filtered by position or name.",
)
async def get_players(
    league: str,
    rankings: RankingsDep,
    settings: SettingsDep,
    position: PositionQuery = None,
    search: SearchQuery = None,
) -> list[Player]:
    """Get the league's ranked players."""
    return filter_players(build_catalog(rankings, league, settings), position, search)

