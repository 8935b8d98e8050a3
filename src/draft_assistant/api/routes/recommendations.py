"""
Recommendation API Routes

Endpoints for pick recommendations and analysis of the user's team.
"""

from fastapi import APIRouter, HTTPException

from draft_assistant.api.dependencies import (
    DraftStateDep,
    LeagueQuery,
    RankingsDep,
    SettingsDep,
)
from draft_assistant.config import Settings
from draft_assistant.models import (
    AdvancedInsights,
    DraftState,
    Player,
    ProjectedPicks,
    RecommendationReport,
    TeamAnalysisReport,
)
from draft_assistant.services.availability import available_players
from draft_assistant.services.catalog import build_catalog
from draft_assistant.services.recommendations import build_recommendation_report
from draft_assistant.services.team_analysis import (
    advanced_insights,
    analyze_team,
    projected_picks_before_turn,
)

router = APIRouter()

NO_USER_TEAM = "Could not identify your team in this draft"


def _catalog(rankings: dict, league: str | None, settings: Settings) -> list[Player]:
    return build_catalog(rankings, league or settings.default_league, settings)


def _require_user_team(state: DraftState) -> None:
    if state.user_team is None:
        raise HTTPException(status_code=404, detail=NO_USER_TEAM)


@router.get(
    "/{source}",
    response_model=RecommendationReport,
    summary="Get pick recommendations",
    description="Scored recommendations, tier drops and positional breakdown for your team.",
)
async def get_recommendations(
    state: DraftStateDep,
    rankings: RankingsDep,
    settings: SettingsDep,
    league: LeagueQuery = None,
) -> RecommendationReport:
    """Get recommendations for the user's next pick."""
    report = build_recommendation_report(state, _catalog(rankings, league, settings))
    if report is None:
        raise HTTPException(status_code=404, detail=NO_USER_TEAM)
    return report


@router.get(
    "/{source}/analysis",
    response_model=TeamAnalysisReport,
    summary="Get team analysis",
    description="Balance score, team type, tiers and bye weeks for your team.",
)
async def get_team_analysis(
    state: DraftStateDep,
    rankings: RankingsDep,
    settings: SettingsDep,
    league: LeagueQuery = None,
) -> TeamAnalysisReport:
    """Get the composition analysis of the user's team."""
    report = analyze_team(state, _catalog(rankings, league, settings))
    if report is None:
        raise HTTPException(status_code=404, detail=NO_USER_TEAM)
    return report


@router.get(
    "/{source}/insights",
    response_model=AdvancedInsights,
    summary="Get advanced insights",
    description="Stacks, bye-week alternatives, ADP value and positional scarcity.",
)
async def get_advanced_insights(
    state: DraftStateDep,
    rankings: RankingsDep,
    settings: SettingsDep,
    league: LeagueQuery = None,
) -> AdvancedInsights:
    """Get advanced draft insights for the user's team."""
    insights = advanced_insights(state, _catalog(rankings, league, settings))
    if insights is None:
        raise HTTPException(status_code=404, detail=NO_USER_TEAM)
    return insights


@router.get(
    "/{source}/projected-picks",
    response_model=ProjectedPicks,
    summary="Get projected picks",
    description="Players likely to be drafted before your next turn.",
)
async def get_projected_picks(
    state: DraftStateDep,
    rankings: RankingsDep,
    settings: SettingsDep,
    league: LeagueQuery = None,
) -> ProjectedPicks:
    """Get the players projected to go before the user picks again."""
    _require_user_team(state)
    available = available_players(_catalog(rankings, league, settings), state)
    return projected_picks_before_turn(state, available)
