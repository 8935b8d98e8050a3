"""Pydantic models and schemas."""

from draft_assistant.models.analysis import (
    AdvancedInsights,
    ByeWeekAlternatives,
    ByeWeekConflict,
    ByeWeekSlot,
    DraftSummary,
    PositionScarcity,
    ProjectedPicks,
    TeamAnalysisReport,
    TeamPickSummary,
    ValueAssessment,
)
from draft_assistant.models.draft import (
    DataSource,
    DraftedPlayerRecord,
    DraftState,
    DraftStatus,
    Team,
)
from draft_assistant.models.league import League, Roster, User
from draft_assistant.models.player import (
    POSITIONS,
    DepthChartEntry,
    Player,
    TeamDepthChart,
)
from draft_assistant.models.recommendation import (
    PlayerRecommendation,
    PlayerScore,
    PositionalBreakdown,
    RecommendationReport,
    RosterSlot,
    ScoreBreakdown,
    StackOpportunity,
    TierDropAlert,
)

__all__ = [
    # Analysis
    "AdvancedInsights",
    "ByeWeekAlternatives",
    "ByeWeekConflict",
    "ByeWeekSlot",
    "DraftSummary",
    "PositionScarcity",
    "ProjectedPicks",
    "TeamAnalysisReport",
    "TeamPickSummary",
    "ValueAssessment",
    # Draft
    "DataSource",
    "DraftedPlayerRecord",
    "DraftState",
    "DraftStatus",
    "Team",
    # League
    "League",
    "Roster",
    "User",
    # Player
    "POSITIONS",
    "DepthChartEntry",
    "Player",
    "TeamDepthChart",
    # Recommendation
    "PlayerRecommendation",
    "PlayerScore",
    "PositionalBreakdown",
    "RecommendationReport",
    "RosterSlot",
    "ScoreBreakdown",
    "StackOpportunity",
    "TierDropAlert",
]
