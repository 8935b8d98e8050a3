"""
Draft Session

Holds the current DraftState for one draft and refreshes it on demand. A
refresh replaces the state wholesale; a failed refresh leaves the previous
state in place.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from datetime import datetime, timezone

from draft_assistant.models.draft import DataSource, DraftState

logger = logging.getLogger(__name__)

DraftLoader = Callable[[], Awaitable[DraftState]]


class SessionClosedError(RuntimeError):
    """Raised when refreshing a session that has been closed."""


class DraftSession:
    """
    Current value plus refresh trigger for a single draft.

    Concurrent ``refresh()`` calls share one in-flight load instead of
    fetching twice.
    """

    def __init__(self, loader: DraftLoader, name: str = "draft"):
        self._loader = loader
        self.name = name
        self._state: DraftState | None = None
        self._inflight: asyncio.Task[DraftState] | None = None
        self._closed = False
        self.last_error: Exception | None = None
        self.last_updated: datetime | None = None

    @property
    def state(self) -> DraftState | None:
        return self._state

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def refreshing(self) -> bool:
        return self._inflight is not None

    async def _load(self) -> DraftState:
        try:
            state = await self._loader()
        except Exception as e:
            if not self._closed:
                self.last_error = e
            logger.warning("Refresh of %s failed: %s", self.name, e)
            raise
        finally:
            self._inflight = None

        if self._closed:
            logger.info("Discarding late result for closed session %s", self.name)
            return state

        self._state = state
        self.last_error = None
        self.last_updated = datetime.now(timezone.utc)
        logger.info(
            "Refreshed %s: %d picks, pick %d on the clock",
            self.name,
            len(state.drafted_players),
            state.current_pick,
        )
        return state

    async def refresh(self) -> DraftState:
        """
        Load a fresh state, or join the load already in progress.

        Raises:
            SessionClosedError: if the session was closed
            Exception: whatever the loader raised; the previous state is kept
        """
        if self._closed:
            raise SessionClosedError(f"Session {self.name} is closed")
        if self._inflight is None:
            self._inflight = asyncio.create_task(self._load())
        # Shield so one cancelled caller does not cancel the shared load
        return await asyncio.shield(self._inflight)

    async def get(self, refresh: bool = False) -> DraftState:
        """Current state, loading it first when missing or when asked to."""
        if refresh or self._state is None:
            return await self.refresh()
        return self._state

    def close(self) -> None:
        self._closed = True


class SessionManager:
    """Draft sessions keyed by (source, draft id)."""

    def __init__(self):
        self._sessions: dict[tuple[DataSource, str], DraftSession] = {}

    def get_or_create(
        self, source: DataSource, draft_id: str, loader: DraftLoader
    ) -> DraftSession:
        key = (source, draft_id)
        session = self._sessions.get(key)
        if session is None or session.closed:
            session = DraftSession(loader, name=f"{source.value}:{draft_id}")
            self._sessions[key] = session
        return session

    def get(self, source: DataSource, draft_id: str) -> DraftSession | None:
        return self._sessions.get((source, draft_id))

    def close_all(self) -> None:
        for session in self._sessions.values():
            session.close()
        self._sessions.clear()

    def __len__(self) -> int:
        return len(self._sessions)
