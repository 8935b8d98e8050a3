"""
Draft State Models

Canonical draft model shared by both draft sources. A DraftState is rebuilt
wholesale on every refresh and never patched in place.
"""

import math
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from draft_assistant.models.player import UNKNOWN_POSITION


class DataSource(str, Enum):
    """Where the draft state was loaded from."""

    SLEEPER = "sleeper"
    GOOGLE_APPS_SCRIPT = "google_apps_script"


class DraftStatus(str, Enum):
    """Draft lifecycle status."""

    PRE_DRAFT = "pre_draft"
    IN_PROGRESS = "in_progress"
    COMPLETE = "complete"


class DraftedPlayerRecord(BaseModel):
    """A single pick as reported by the draft source."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Source player id or synthetic pick-<n>")
    name: str
    position: str = UNKNOWN_POSITION
    team: str = UNKNOWN_POSITION
    first_name: str | None = None
    last_name: str | None = None
    team_id: int | None = Field(
        default=None, description="Draft slot the pick is attributed to"
    )
    draft_round: int = Field(default=1, ge=1)
    pick_number: int = Field(ge=1, description="Overall pick number")
    picked_by: str | None = None

    @property
    def display_name(self) -> str:
        """Name used for cross-source matching."""
        if self.first_name and self.last_name:
            return f"{self.first_name} {self.last_name}"
        return self.name


class Team(BaseModel):
    """A fantasy team occupying one draft slot."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(ge=1, description="Draft slot")
    name: str
    roster_id: int | None = None
    owner_id: str | None = None
    picks: list[DraftedPlayerRecord] = Field(default_factory=list)
    draft_position: int = Field(ge=1)
    is_user_team: bool = False


class DraftState(BaseModel):
    """Complete normalized draft state."""

    model_config = ConfigDict(frozen=True)

    current_pick: int = Field(ge=1)
    teams: list[Team] = Field(default_factory=list)
    drafted_players: list[DraftedPlayerRecord] = Field(default_factory=list)
    draft_status: DraftStatus
    total_rounds: int = Field(ge=0)
    total_teams: int = Field(ge=0)
    total_picks: int = Field(ge=0)
    picks_remaining: int = Field(ge=0)
    user_team_id: int | None = None
    data_source: DataSource

    league_name: str = ""
    draft_type: str = "snake"
    season: str = ""
    unattributed_picks: list[int] = Field(
        default_factory=list, description="Pick numbers not on any team's roster"
    )

    @property
    def user_team(self) -> Team | None:
        """The team identified as belonging to the local user."""
        if self.user_team_id is None:
            return None
        return self.get_team(self.user_team_id)

    def get_team(self, team_id: int) -> Team | None:
        return next((t for t in self.teams if t.id == team_id), None)

    @property
    def is_complete(self) -> bool:
        return self.draft_status == DraftStatus.COMPLETE

    @property
    def current_round(self) -> int:
        """Round of the pick currently on the clock (1 when there are no teams)."""
        if self.total_teams <= 0:
            return 1
        return math.ceil(self.current_pick / self.total_teams)
