"""
API Dependencies

Shared dependencies for FastAPI route handlers including client and draft
session management.
"""

import logging
from typing import Annotated, Any

from fastapi import Depends, HTTPException, Query

from draft_assistant.clients.sheets import SheetsAPIError, SheetsClient
from draft_assistant.clients.sleeper import SleeperAPIError, SleeperClient
from draft_assistant.config import Settings, get_settings
from draft_assistant.models.draft import DataSource, DraftState
from draft_assistant.services.normalizer import DraftNormalizationError, normalize_draft
from draft_assistant.services.session import DraftSession, SessionManager

logger = logging.getLogger(__name__)

BOARD_SESSION_ID = "board"


class ClientManager:
    """
    Manages client and session lifecycle for the application.

    Creates single instances that are reused across requests.
    """

    _sleeper: SleeperClient | None = None
    _sheets: SheetsClient | None = None
    _sessions: SessionManager | None = None

    @classmethod
    async def get_sleeper_client(cls) -> SleeperClient:
        """Get or create the SleeperClient instance."""
        if cls._sleeper is None:
            cls._sleeper = SleeperClient()
            await cls._sleeper.__aenter__()
        return cls._sleeper

    @classmethod
    async def get_sheets_client(cls) -> SheetsClient:
        """Get or create the SheetsClient instance."""
        if cls._sheets is None:
            cls._sheets = SheetsClient()
            await cls._sheets.__aenter__()
        return cls._sheets

    @classmethod
    def get_sessions(cls) -> SessionManager:
        if cls._sessions is None:
            cls._sessions = SessionManager()
        return cls._sessions

    @classmethod
    async def close(cls) -> None:
        """Close clients and drop all draft sessions."""
        if cls._sessions is not None:
            cls._sessions.close_all()
            cls._sessions = None
        if cls._sleeper is not None:
            await cls._sleeper.__aexit__(None, None, None)
            cls._sleeper = None
        if cls._sheets is not None:
            await cls._sheets.__aexit__(None, None, None)
            cls._sheets = None


async def get_sleeper_client() -> SleeperClient:
    """Dependency to get the SleeperClient."""
    return await ClientManager.get_sleeper_client()


async def get_sheets_client() -> SheetsClient:
    """Dependency to get the SheetsClient."""
    return await ClientManager.get_sheets_client()


def get_session_manager() -> SessionManager:
    """Dependency to get the draft SessionManager."""
    return ClientManager.get_sessions()


def to_http_error(error: Exception) -> HTTPException:
    """Map fetch and normalization failures onto HTTP errors."""
    if isinstance(error, SleeperAPIError):
        return HTTPException(status_code=502, detail=f"Sleeper: {error.message}")
    if isinstance(error, SheetsAPIError):
        return HTTPException(status_code=502, detail=f"Google Apps Script ({error.source}): {error.message}")
    if isinstance(error, DraftNormalizationError):
        return HTTPException(status_code=422, detail=error.message)
    return HTTPException(status_code=500, detail=str(error))


def get_draft_session(
    source: DataSource,
    sleeper: Annotated[SleeperClient, Depends(get_sleeper_client)],
    sheets: Annotated[SheetsClient, Depends(get_sheets_client)],
    sessions: Annotated[SessionManager, Depends(get_session_manager)],
    settings: Annotated[Settings, Depends(get_settings)],
    draft_id: Annotated[
        str | None, Query(description="Sleeper draft ID (required for the sleeper source)")
    ] = None,
) -> DraftSession:
    """
    Dependency resolving the draft session for a source.

    Raises HTTPException 400 when a Sleeper draft id is missing.
    """
    if source == DataSource.SLEEPER:
        if not draft_id:
            raise HTTPException(status_code=400, detail="draft_id is required for Sleeper drafts")

        async def load() -> DraftState:
            return normalize_draft(await sleeper.fetch_draft_payload(draft_id), settings)

        return sessions.get_or_create(source, draft_id, load)

    async def load_board() -> DraftState:
        return normalize_draft(await sheets.fetch_board_payload(), settings)

    return sessions.get_or_create(source, BOARD_SESSION_ID, load_board)


async def get_draft_state(
    session: Annotated[DraftSession, Depends(get_draft_session)],
    refresh: Annotated[bool, Query(description="Fetch a fresh draft state")] = False,
) -> DraftState:
    """
    Dependency returning the session's draft state, loading it when needed.

    Fetch failures map to 502, malformed payloads to 422.
    """
    try:
        return await session.get(refresh=refresh)
    except (SleeperAPIError, SheetsAPIError, DraftNormalizationError) as e:
        logger.warning("Could not load draft %s: %s", session.name, e)
        raise to_http_error(e) from e


async def get_rankings(
    sheets: Annotated[SheetsClient, Depends(get_sheets_client)],
) -> dict[str, Any]:
    """Dependency returning the (cached) rankings workbook."""
    try:
        return await sheets.get_rankings()
    except SheetsAPIError as e:
        logger.warning("Could not load rankings: %s", e)
        raise to_http_error(e) from e


# Type aliases for cleaner route signatures
SleeperClientDep = Annotated[SleeperClient, Depends(get_sleeper_client)]
SheetsClientDep = Annotated[SheetsClient, Depends(get_sheets_client)]
DraftSessionDep = Annotated[DraftSession, Depends(get_draft_session)]
DraftStateDep = Annotated[DraftState, Depends(get_draft_state)]
RankingsDep = Annotated[dict[str, Any], Depends(get_rankings)]
SettingsDep = Annotated[Settings, Depends(get_settings)]


# Common query parameters
LeagueQuery = Annotated[
    str | None,
    Query(description="League whose rankings to use (defaults to the configured league)"),
]

PositionQuery = Annotated[
    str | None,
    Query(description="Position filter (QB, RB, WR, TE, K, D or ALL)"),
]

SearchQuery = Annotated[
    str | None,
    Query(description="Case-insensitive name or team search"),
]
