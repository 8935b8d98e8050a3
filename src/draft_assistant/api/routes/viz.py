"""
Visualization API Routes

Endpoints for generating interactive Plotly charts.
All endpoints return HTML content for embedding or viewing directly.
"""

from fastapi import APIRouter, HTTPException
from fastapi.responses import HTMLResponse

from draft_assistant.api.dependencies import (
    DraftStateDep,
    LeagueQuery,
    RankingsDep,
    SettingsDep,
)
from draft_assistant.services.catalog import build_catalog
from draft_assistant.services.team_analysis import analyze_team
from draft_assistant.visualization import charts

router = APIRouter()


@router.get(
    "/{source}/board",
    response_class=HTMLResponse,
    summary="Draft board chart",
    description="Draft board table with picks colored by position.",
)
async def get_draft_board_chart(state: DraftStateDep) -> HTMLResponse:
    """Generate the draft board table."""
    return HTMLResponse(content=charts.draft_board_chart(state))


@router.get(
    "/{source}/team",
    response_class=HTMLResponse,
    summary="Team composition chart",
    description="Your roster against the ideal lineup, projections and tiers.",
)
async def get_team_chart(
    state: DraftStateDep,
    rankings: RankingsDep,
    settings: SettingsDep,
    league: LeagueQuery = None,
) -> HTMLResponse:
    """Generate the user's team composition charts."""
    catalog = build_catalog(rankings, league or settings.default_league, settings)
    report = analyze_team(state, catalog)
    if report is None:
        raise HTTPException(status_code=404, detail="Could not identify your team in this draft")
    return HTMLResponse(content=charts.team_composition_chart(report))
