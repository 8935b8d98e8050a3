"""
Recommendation Models

Scored pick suggestions, tier-drop alerts and positional breakdowns for the
user's team.
"""

from pydantic import BaseModel, Field

from draft_assistant.models.player import Player


class RosterSlot(BaseModel):
    """A player on the user's roster, enriched with catalog data when matched."""

    name: str
    position: str
    team: str
    pick_number: int
    draft_round: int
    rank: int | None = None
    tier: int | None = None
    bye: int = 0
    projected_points: float = 0.0
    adp: str | int | float = ""
    upside: str | int | float = ""
    matched: bool = Field(default=False, description="Found in the rankings catalog")


class ScoreBreakdown(BaseModel):
    """Points contributed by each scoring term."""

    position_need: float = 0.0
    rank_quality: float = 0.0
    adp_value: float = 0.0
    stacking: float = 0.0
    bye_week: float = 0.0
    team_balance: float = 0.0


class PlayerScore(BaseModel):
    """Total score for one candidate plus the reasons behind it."""

    total: float
    breakdown: ScoreBreakdown
    reasons: list[str] = Field(default_factory=list)


class PlayerRecommendation(BaseModel):
    """A recommended pick."""

    player: Player
    score: PlayerScore


class TierDropAlert(BaseModel):
    """Warns that a position is about to fall off a tier cliff."""

    position: str
    current_tier: int
    next_tier: int
    players_until_drop: int
    next_pick_in_range: bool


class PositionalBreakdown(BaseModel):
    """Per-position view of the roster and the best remaining options."""

    position: str
    drafted: list[RosterSlot] = Field(default_factory=list)
    by_rank: list[Player] = Field(default_factory=list)
    by_adp: list[Player] = Field(default_factory=list)
    by_upside: list[Player] = Field(default_factory=list)
    need: bool = False
    count: int = 0


class StackOpportunity(BaseModel):
    """Available pass catchers sharing an NFL team with a rostered QB."""

    qb: RosterSlot
    qb_team: str
    targets: list[Player] = Field(default_factory=list)
    projected_points: float = 0.0


class RecommendationReport(BaseModel):
    """Everything the recommendation panel needs for the user's team."""

    user_team_id: int
    user_team_name: str
    current_pick: int
    current_round: int
    user_next_pick: int
    position_counts: dict[str, int]
    position_needs: dict[str, int]
    recommendations: list[PlayerRecommendation] = Field(default_factory=list)
    tier_drops: dict[str, TierDropAlert] = Field(default_factory=dict)
    positional_breakdown: dict[str, PositionalBreakdown] = Field(default_factory=dict)
    stack_opportunities: list[StackOpportunity] = Field(default_factory=list)
