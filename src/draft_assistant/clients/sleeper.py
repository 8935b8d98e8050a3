"""
Async Sleeper API Client

Fetches draft data from the Sleeper Fantasy Football platform.
Uses httpx for async HTTP requests with connection pooling.

API Documentation: https://docs.sleeper.com/
"""

import asyncio
import logging
from typing import Any

import httpx

from draft_assistant.config import Settings, get_settings
from draft_assistant.models import League, Roster, User
from draft_assistant.services.normalizer import SleeperDraftPayload

logger = logging.getLogger(__name__)


class SleeperAPIError(Exception):
    """Exception raised for Sleeper API errors."""

    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class SleeperClient:
    """
    Async client for the Sleeper draft endpoints.

    Usage:
        async with SleeperClient() as client:
            payload = await client.fetch_draft_payload("1234567890")
    """

    def __init__(
        self,
        settings: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.settings = settings or get_settings()
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "SleeperClient":
        """Create HTTP client on context entry."""
        self._client = httpx.AsyncClient(
            base_url=self.settings.sleeper_base_url,
            timeout=httpx.Timeout(self.settings.sleeper_timeout),
            headers={"Accept": "application/json"},
            transport=self._transport,
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Close HTTP client on context exit."""
        if self._client:
            await self._client.aclose()
            self._client = None

    @property
    def client(self) -> httpx.AsyncClient:
        """Get the HTTP client, raising if not initialized."""
        if self._client is None:
            raise RuntimeError(
                "SleeperClient must be used as async context manager: "
                "async with SleeperClient() as client: ..."
            )
        return self._client

    async def _get(self, endpoint: str) -> Any:
        """Make a GET request to the Sleeper API; None on 404."""
        try:
            response = await self.client.get(endpoint)
        except httpx.HTTPError as e:
            raise SleeperAPIError(f"API request failed: {endpoint}: {e}") from e

        if response.status_code == 404:
            return None

        if response.status_code != 200:
            raise SleeperAPIError(
                f"API request failed: {endpoint}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise SleeperAPIError(
                f"Invalid JSON from {endpoint}", status_code=response.status_code
            ) from e

    # ==================== Draft Endpoints ====================

    async def get_draft(self, draft_id: str) -> dict:
        """
        Get draft information.

        Args:
            draft_id: Sleeper draft ID

        Returns:
            Draft dictionary

        Raises:
            SleeperAPIError: when the draft does not exist or the request fails
        """
        data = await self._get(f"/draft/{draft_id}")
        if data is None:
            raise SleeperAPIError(
                f"Draft not found. Please check your draft ID: {draft_id}", status_code=404
            )
        if not isinstance(data, dict):
            raise SleeperAPIError(f"Unexpected draft response for {draft_id}")
        return data

    async def get_draft_picks(self, draft_id: str) -> list[dict]:
        """
        Get all picks made so far in a draft.

        Args:
            draft_id: Sleeper draft ID

        Returns:
            List of draft pick dictionaries
        """
        data = await self._get(f"/draft/{draft_id}/picks")
        return data if isinstance(data, list) else []

    # ==================== League Endpoints ====================

    async def get_league(self, league_id: str) -> League | None:
        """Get league information, or None if not found."""
        data = await self._get(f"/league/{league_id}")
        if data is None:
            return None
        return League(**data)

    async def get_league_rosters(self, league_id: str) -> list[Roster]:
        """Get all rosters in a league."""
        data = await self._get(f"/league/{league_id}/rosters")
        if data is None:
            return []
        return [Roster(**roster) for roster in data]

    async def get_league_users(self, league_id: str) -> list[User]:
        """Get all users in a league."""
        data = await self._get(f"/league/{league_id}/users")
        if data is None:
            return []
        return [User(**user) for user in data]

    # ==================== Combined ====================

    async def fetch_draft_payload(self, draft_id: str) -> SleeperDraftPayload:
        """
        Fetch everything needed to normalize a Sleeper draft.

        The draft and its picks are required. League, rosters and users only
        improve team names, so their failures are logged and ignored.

        Args:
            draft_id: Sleeper draft ID

        Returns:
            SleeperDraftPayload ready for normalization
        """
        draft, picks = await asyncio.gather(
            self.get_draft(draft_id), self.get_draft_picks(draft_id)
        )
        logger.info("Fetched Sleeper draft %s with %d picks", draft_id, len(picks))

        league_id = draft.get("league_id")
        if not league_id:
            return SleeperDraftPayload(draft=draft, picks=picks)

        league, rosters, users = await asyncio.gather(
            self.get_league(league_id),
            self.get_league_rosters(league_id),
            self.get_league_users(league_id),
            return_exceptions=True,
        )
        for label, result in (("league", league), ("rosters", rosters), ("users", users)):
            if isinstance(result, Exception):
                logger.warning("Could not fetch %s for league %s: %s", label, league_id, result)

        return SleeperDraftPayload(
            draft=draft,
            picks=picks,
            league=None if isinstance(league, Exception) else league,
            rosters=[] if isinstance(rosters, Exception) else rosters,
            users=[] if isinstance(users, Exception) else users,
        )
