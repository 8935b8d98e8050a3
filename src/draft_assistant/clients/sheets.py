"""
Async Spreadsheet Client

Fetches the two Google Apps Script endpoints backing the draft assistant:
the rankings workbook (rankings, depth charts, injuries, rookies) and the
live draft board. The draft board is only reachable through public CORS
relays, which are tried in order until one answers.
"""

import logging
import time
from typing import Any
from urllib.parse import quote

import httpx

from draft_assistant.config import Settings, get_settings
from draft_assistant.services.normalizer import DraftBoardPayload

logger = logging.getLogger(__name__)

RANKINGS_SOURCE = "rankings"
DRAFT_BOARD_SOURCE = "draft board"


class SheetsAPIError(Exception):
    """Exception raised when a spreadsheet endpoint cannot be fetched."""

    def __init__(self, message: str, source: str, status_code: int | None = None):
        self.message = message
        self.source = source
        self.status_code = status_code
        super().__init__(self.message)


class SheetsClient:
    """
    Async client for the rankings and draft board endpoints.

    Usage:
        async with SheetsClient() as client:
            rankings = await client.get_rankings()
            board = await client.fetch_board_payload()
    """

    _rankings_cache: dict[str, Any] | None = None
    _cache_timestamp: float = 0

    def __init__(
        self,
        settings: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.settings = settings or get_settings()
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "SheetsClient":
        """Create HTTP client on context entry."""
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(self.settings.sheets_timeout),
            headers={"Accept": "application/json"},
            follow_redirects=True,
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
                "SheetsClient must be used as async context manager: "
                "async with SheetsClient() as client: ..."
            )
        return self._client

    @classmethod
    def clear_cache(cls) -> None:
        cls._rankings_cache = None
        cls._cache_timestamp = 0

    # ==================== Rankings ====================

    async def get_rankings(self, force_refresh: bool = False) -> dict[str, Any]:
        """
        Get the rankings workbook with caching.

        Args:
            force_refresh: Bypass the cache

        Returns:
            Decoded payload keyed by table name

        Raises:
            SheetsAPIError: when the endpoint fails or returns a non-object
        """
        current_time = time.time()
        cache_valid = (
            SheetsClient._rankings_cache is not None
            and (current_time - SheetsClient._cache_timestamp)
            < self.settings.rankings_cache_ttl
        )
        if not force_refresh and cache_valid:
            return SheetsClient._rankings_cache  # type: ignore

        try:
            response = await self.client.get(self.settings.rankings_url)
        except httpx.HTTPError as e:
            raise SheetsAPIError(f"Rankings request failed: {e}", RANKINGS_SOURCE) from e

        if response.status_code != 200:
            raise SheetsAPIError(
                "Rankings request failed", RANKINGS_SOURCE, status_code=response.status_code
            )

        try:
            data = response.json()
        except ValueError as e:
            raise SheetsAPIError("Rankings response is not JSON", RANKINGS_SOURCE) from e
        if not isinstance(data, dict):
            raise SheetsAPIError("Rankings response is not an object", RANKINGS_SOURCE)

        SheetsClient._rankings_cache = data
        SheetsClient._cache_timestamp = current_time
        logger.info("Fetched rankings workbook with %d tables", len(data))
        return data

    # ==================== Draft Board ====================

    def relay_urls(self) -> list[str]:
        """Draft board URL wrapped in each relay template, in order."""
        target = self.settings.draft_board_url
        return [
            template.format(url=quote(target, safe=""), raw_url=target)
            for template in self.settings.cors_proxies
        ]

    async def get_draft_board(self) -> Any:
        """
        Fetch the draft board through the first relay that answers 2xx.

        Raises:
            SheetsAPIError: when every relay fails
        """
        last_status: int | None = None
        for relay_url in self.relay_urls():
            logger.info("Trying draft board relay %s", relay_url)
            try:
                response = await self.client.get(relay_url)
            except httpx.HTTPError as e:
                logger.warning("Relay %s failed: %s", relay_url, e)
                continue

            if not response.is_success:
                last_status = response.status_code
                logger.warning("Relay %s answered %d", relay_url, response.status_code)
                continue

            try:
                return response.json()
            except ValueError as e:
                raise SheetsAPIError(
                    "Draft board response is not JSON", DRAFT_BOARD_SOURCE, response.status_code
                ) from e

        raise SheetsAPIError(
            "Failed to fetch draft board through all relays",
            DRAFT_BOARD_SOURCE,
            status_code=last_status,
        )

    async def fetch_board_payload(self) -> DraftBoardPayload:
        """Fetch the draft board ready for normalization."""
        return DraftBoardPayload(data=await self.get_draft_board())
