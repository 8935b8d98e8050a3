"""API package - FastAPI routes and dependencies."""

from draft_assistant.api.dependencies import (
    ClientManager,
    DraftSessionDep,
    DraftStateDep,
    RankingsDep,
    SettingsDep,
    SheetsClientDep,
    SleeperClientDep,
    get_draft_session,
    get_draft_state,
    get_rankings,
    get_session_manager,
    get_sheets_client,
    get_sleeper_client,
)

__all__ = [
    "ClientManager",
    "get_sleeper_client",
    "get_sheets_client",
    "get_session_manager",
    "get_draft_session",
    "get_draft_state",
    "get_rankings",
    "SleeperClientDep",
    "SheetsClientDep",
    "DraftSessionDep",
    "DraftStateDep",
    "RankingsDep",
    "SettingsDep",
]
