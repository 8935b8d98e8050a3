"""
Player-related Pydantic models.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# Canonical fantasy positions, in roster-construction order
POSITIONS = ("QB", "RB", "WR", "TE", "K", "D")

UNKNOWN_POSITION = "UNK"
FREE_AGENT = "FA"

MAX_TIER = 11
TIER_SIZE = 12

SourceValue = str | int | float


class Player(BaseModel):
    """A ranked player from the rankings spreadsheet."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(description="Synthetic id, source-list order within one load")
    name: str
    position: str = UNKNOWN_POSITION
    team: str = FREE_AGENT
    rank: int = Field(ge=1, description="Global rank")
    positional_rank: int = Field(ge=1, description="Rank within position")
    tier: int = Field(ge=1, le=MAX_TIER)
    projected_points: float = Field(default=0.0, ge=0)
    bye: int = Field(default=0, description="Bye week, 0 when unknown")

    # Passed through from the ranking row untouched
    adp: SourceValue = ""
    risk: SourceValue = ""
    upside: SourceValue = ""
    boom: SourceValue = ""
    bust: SourceValue = ""

    # Rookie metadata
    is_rookie: bool = False
    college: str | None = None
    draft_round: SourceValue | None = None
    draft_pick: SourceValue | None = None

    # Injury metadata
    injury: str | None = None
    injury_status: str | None = None
    injury_updated: str | None = None

    depth_chart_slot: str | None = Field(
        default=None, description="Depth chart key such as WR2"
    )
    source_fields: dict[str, Any] = Field(default_factory=dict)

    @property
    def is_injured(self) -> bool:
        return bool(self.injury_status)


class DepthChartEntry(BaseModel):
    """One slot on an NFL team's depth chart."""

    slot: str = Field(description="Depth chart key, e.g. WR2")
    name: str
    position: str
    rank: int | None = None
    tier: int | None = None
    is_drafted: bool = False


class TeamDepthChart(BaseModel):
    """Depth chart for a single NFL team, grouped by position."""

    team: str
    positions: dict[str, list[DepthChartEntry]] = Field(default_factory=dict)
