"""
Team Analysis Models

Roster balance, bye-week exposure, value and scarcity views for the user's team.
"""

from pydantic import BaseModel, Field

from draft_assistant.models.player import Player
from draft_assistant.models.recommendation import RosterSlot, StackOpportunity


class ByeWeekConflict(BaseModel):
    """Two or more rostered players sharing a bye week."""

    week: int
    players: list[RosterSlot]
    count: int


class ByeWeekSlot(BaseModel):
    """One week of the bye-week overview."""

    week: int
    players: list[RosterSlot] = Field(default_factory=list)
    count: int = 0
    has_conflict: bool = False


class TeamAnalysisReport(BaseModel):
    """Composition analysis for the user's team."""

    team_id: int
    team_name: str
    total_players: int
    position_counts: dict[str, int]
    tier_counts: dict[int, int]
    projected_points: dict[str, float]
    balance_score: int = Field(description="Average closeness to the ideal roster, in percent")
    team_type: str = Field(description="Balanced, RB-Heavy, WR-Heavy, QB-Heavy or TE-Heavy")
    top_tiers: int
    mid_tiers: int
    late_tiers: int
    bye_weeks: list[int]
    bye_week_conflicts: list[ByeWeekConflict] = Field(default_factory=list)
    bye_week_overview: list[ByeWeekSlot] = Field(default_factory=list)


class ByeWeekAlternatives(BaseModel):
    """Available players who avoid a crowded bye week."""

    week: int
    alternatives: list[Player] = Field(default_factory=list)


class ValueAssessment(BaseModel):
    """Rank versus ADP for one available player."""

    player: Player
    adp: float
    value: float = Field(description="ADP minus rank; positive means ranked ahead of ADP")
    is_value: bool
    is_reach: bool


class PositionScarcity(BaseModel):
    """How deep a position still is among the top available players."""

    position: str
    top_players: list[Player] = Field(default_factory=list)
    count: int
    scarcity_level: str = Field(description="Critical, Low or Good")
    next_pick: Player | None = None


class AdvancedInsights(BaseModel):
    """Stacks, bye-week management, value and scarcity analysis."""

    stack_opportunities: list[StackOpportunity] = Field(default_factory=list)
    bye_week_conflicts: list[ByeWeekConflict] = Field(default_factory=list)
    bye_week_alternatives: list[ByeWeekAlternatives] = Field(default_factory=list)
    value_analysis: list[ValueAssessment] = Field(default_factory=list)
    position_scarcity: dict[str, PositionScarcity] = Field(default_factory=dict)
    scarcity_alerts: list[PositionScarcity] = Field(default_factory=list)


class ProjectedPicks(BaseModel):
    """Players likely to be taken before the user picks again."""

    picks_until_my_turn: int
    next_user_pick: int | None
    players_to_pick: list[Player] = Field(default_factory=list)


class TeamPickSummary(BaseModel):
    """Per-team line of the draft summary."""

    team_id: int
    team_name: str
    pick_count: int
    last_pick: str | None = None
    is_user_team: bool = False


class DraftSummary(BaseModel):
    """Progress overview of the draft."""

    draft_status: str
    data_source: str
    league_name: str
    season: str
    current_pick: int
    current_round: int
    total_rounds: int
    total_picks: int
    picks_made: int
    picks_remaining: int
    progress_percent: int
    average_picks_per_team: int
    most_drafted_position: str
    teams_with_picks: int
    on_the_clock: str | None = None
    user_team: str | None = None
    teams: list[TeamPickSummary] = Field(default_factory=list)
