"""
Sleeper league lookup models.

Only the fields needed to resolve draft slots to owners and display names.
"""

from typing import Any

from pydantic import BaseModel, Field


class League(BaseModel):
    """Sleeper league information."""

    league_id: str
    name: str = ""
    status: str | None = None
    season: str | None = None
    total_rosters: int | None = None
    draft_id: str | None = None


class User(BaseModel):
    """Sleeper user information."""

    user_id: str
    username: str | None = None
    display_name: str | None = None
    metadata: dict[str, Any] | None = Field(default_factory=dict)


class Roster(BaseModel):
    """League roster; maps a roster id to its owner."""

    roster_id: int
    owner_id: str | None = None
    league_id: str | None = None
    players: list[str] | None = Field(default_factory=list)
