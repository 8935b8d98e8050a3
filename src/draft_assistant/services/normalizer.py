"""
Draft Normalizer

Converts raw draft payloads into the canonical DraftState. Two sources are
supported, modeled as a tagged union:

* ``SleeperDraftPayload``: draft, picks and optional league/roster/user lookups
  from the Sleeper API.
* ``DraftBoardPayload``: the spreadsheet "Draft Board", either the simple shape
  (one object per round keyed by team name) or the enhanced shape (one
  ``{"picks": [...]}`` object per round plus ``teams``/``settings``).

Spreadsheet picks are numbered in board scan order (rounds top to bottom,
team columns left to right), not in snake order. Sleeper picks carry their
own pick numbers. The two orders only agree on odd rounds.
"""

import logging
from collections import defaultdict
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from draft_assistant.config import Settings, get_settings
from draft_assistant.models.draft import (
    DataSource,
    DraftedPlayerRecord,
    DraftState,
    DraftStatus,
    Team,
)
from draft_assistant.models.league import League, Roster, User
from draft_assistant.models.player import UNKNOWN_POSITION
from draft_assistant.services.catalog import parse_int
from draft_assistant.services.names import name_key, normalize_position
from draft_assistant.services.snake import round_for_pick

logger = logging.getLogger(__name__)

DRAFT_BOARD_KEY = "Draft Board"
UNKNOWN_PLAYER = "Unknown Player"


class DraftNormalizationError(Exception):
    """Raised when a draft payload is missing or has malformed required fields."""

    def __init__(self, message: str, data_source: DataSource):
        self.message = message
        self.data_source = data_source
        super().__init__(self.message)


class BoardFormat(str, Enum):
    """Shapes of the spreadsheet draft board."""

    SIMPLE = "simple"
    ENHANCED = "enhanced"


class SleeperDraftPayload(BaseModel):
    """Raw Sleeper responses needed to build a draft state."""

    draft: dict[str, Any]
    picks: list[Any] = Field(default_factory=list)
    league: League | None = None
    rosters: list[Roster] = Field(default_factory=list)
    users: list[User] = Field(default_factory=list)


class DraftBoardPayload(BaseModel):
    """Raw spreadsheet draft board response."""

    data: Any


DraftPayload = SleeperDraftPayload | DraftBoardPayload


class _TeamSeat(BaseModel):
    id: int
    name: str
    roster_id: int | None = None
    owner_id: str | None = None


# ==================== Shared assembly ====================


def _assemble_teams(
    seats: list[_TeamSeat],
    records: list[DraftedPlayerRecord],
    user_team_id: int | None,
) -> tuple[list[Team], list[int]]:
    """Attach records to teams; returns teams and the unattributed pick numbers."""
    known_ids = {seat.id for seat in seats}
    picks_by_team: dict[int, list[DraftedPlayerRecord]] = defaultdict(list)
    unattributed: list[int] = []

    for record in records:
        if record.team_id in known_ids:
            picks_by_team[record.team_id].append(record)
        else:
            logger.warning(
                "Could not assign pick %d (%s) to any team", record.pick_number, record.name
            )
            unattributed.append(record.pick_number)

    teams = [
        Team(
            id=seat.id,
            name=seat.name,
            roster_id=seat.roster_id,
            owner_id=seat.owner_id,
            picks=picks_by_team.get(seat.id, []),
            draft_position=seat.id,
            is_user_team=seat.id == user_team_id,
        )
        for seat in seats
    ]
    return teams, unattributed


def _build_state(
    *,
    seats: list[_TeamSeat],
    records: list[DraftedPlayerRecord],
    total_rounds: int,
    data_source: DataSource,
    user_team_id: int | None,
    status: DraftStatus,
    league_name: str,
    draft_type: str,
    season: str,
) -> DraftState:
    total_teams = len(seats)
    total_picks = total_teams * total_rounds
    picks_made = len(records)

    if picks_made >= total_picks:
        status = DraftStatus.COMPLETE

    teams, unattributed = _assemble_teams(seats, records, user_team_id)

    return DraftState(
        current_pick=min(picks_made + 1, total_picks + 1),
        teams=teams,
        drafted_players=records,
        draft_status=status,
        total_rounds=total_rounds,
        total_teams=total_teams,
        total_picks=total_picks,
        picks_remaining=max(0, total_picks - picks_made),
        user_team_id=user_team_id,
        data_source=data_source,
        league_name=league_name,
        draft_type=draft_type,
        season=season,
        unattributed_picks=unattributed,
    )


def _positive_int(value: Any) -> int | None:
    parsed = parse_int(value)
    if parsed is None or parsed < 1:
        return None
    return parsed


# ==================== Sleeper ====================


def _sleeper_status(raw_status: Any) -> DraftStatus:
    if raw_status == "complete":
        return DraftStatus.COMPLETE
    if raw_status == "pre_draft":
        return DraftStatus.PRE_DRAFT
    return DraftStatus.IN_PROGRESS


def normalize_sleeper(
    payload: SleeperDraftPayload, settings: Settings | None = None
) -> DraftState:
    """
    Normalize a Sleeper draft.

    Teams are synthesized for slots 1..N from ``settings.teams``. A pick is
    attributed to the team whose owner made it (``picked_by``), falling back
    to its ``draft_slot``. The slot where the configured user id made a pick
    becomes the user's team.

    Args:
        payload: Raw Sleeper draft, picks and lookups
        settings: Optional settings override (user identity, defaults)

    Returns:
        Normalized DraftState
    """
    settings = settings or get_settings()
    draft = payload.draft
    draft_settings = draft.get("settings") or {}
    if not isinstance(draft_settings, dict):
        raise DraftNormalizationError("Draft settings must be an object", DataSource.SLEEPER)

    total_teams = _positive_int(draft_settings.get("teams")) or settings.default_teams
    total_rounds = _positive_int(draft_settings.get("rounds")) or settings.default_rounds
    slot_to_roster = draft.get("slot_to_roster_id") or {}
    raw_picks = [pick for pick in payload.picks if isinstance(pick, dict)]
    user_id = settings.sleeper_user_id

    # Last pick made by the configured user decides their slot
    user_slot = None
    for pick in raw_picks:
        if user_id and pick.get("picked_by") == user_id:
            user_slot = _positive_int(pick.get("draft_slot"))

    roster_owner = {r.roster_id: r.owner_id for r in payload.rosters if r.owner_id}
    display_names = {u.user_id: u.display_name for u in payload.users if u.display_name}

    seats: list[_TeamSeat] = []
    for slot in range(1, total_teams + 1):
        roster_id = (
            _positive_int(slot_to_roster.get(str(slot), slot_to_roster.get(slot)))
            if isinstance(slot_to_roster, dict)
            else None
        ) or slot
        owner_id = roster_owner.get(roster_id)
        name = display_names.get(owner_id) if owner_id else None
        seats.append(
            _TeamSeat(id=slot, name=name or f"Team {roster_id}", roster_id=roster_id, owner_id=owner_id)
        )

    if user_slot is None and user_id:
        owned = next((seat for seat in seats if seat.owner_id == user_id), None)
        user_slot = owned.id if owned else None

    if user_slot is not None and user_slot <= total_teams:
        seats[user_slot - 1].name = settings.sleeper_display_name or seats[user_slot - 1].name
        logger.info("Identified user team in draft slot %d", user_slot)
    else:
        if user_slot is not None:
            logger.warning("User draft slot %d is outside 1..%d", user_slot, total_teams)
        user_slot = None
        logger.info("Could not identify user team")

    team_by_owner = {seat.owner_id: seat.id for seat in seats if seat.owner_id}

    records: list[DraftedPlayerRecord] = []
    for index, pick in enumerate(raw_picks):
        metadata = pick.get("metadata") or {}
        first_name = metadata.get("first_name") or None
        last_name = metadata.get("last_name") or None
        picked_by = pick.get("picked_by") or None
        draft_slot = parse_int(pick.get("draft_slot"))
        pick_number = _positive_int(pick.get("pick_no")) or index + 1

        team_id = team_by_owner.get(picked_by) if picked_by else None
        if team_id is None:
            team_id = draft_slot

        records.append(
            DraftedPlayerRecord(
                id=str(pick.get("player_id") or f"pick-{pick_number}"),
                name=f"{first_name} {last_name}" if first_name and last_name else UNKNOWN_PLAYER,
                position=normalize_position(metadata.get("position")),
                team=str(metadata.get("team") or UNKNOWN_POSITION),
                first_name=first_name,
                last_name=last_name,
                team_id=team_id,
                draft_round=_positive_int(pick.get("round"))
                or round_for_pick(pick_number, total_teams)
                or 1,
                pick_number=pick_number,
                picked_by=picked_by,
            )
        )
    records.sort(key=lambda r: r.pick_number)

    metadata = draft.get("metadata") or {}
    league_name = metadata.get("name") or (payload.league.name if payload.league else "")

    return _build_state(
        seats=seats,
        records=records,
        total_rounds=total_rounds,
        data_source=DataSource.SLEEPER,
        user_team_id=user_slot,
        status=_sleeper_status(draft.get("status")),
        league_name=league_name or "Sleeper League",
        draft_type=str(draft.get("type") or "snake"),
        season=str(draft.get("season") or ""),
    )


# ==================== Spreadsheet draft board ====================


def probe_board_format(data: Any) -> BoardFormat:
    """Enhanced when the first round carries a ``picks`` list, simple otherwise."""
    board = data.get(DRAFT_BOARD_KEY) if isinstance(data, dict) else None
    if isinstance(board, list) and board:
        first_round = board[0]
        if isinstance(first_round, dict) and isinstance(first_round.get("picks"), list):
            return BoardFormat.ENHANCED
    return BoardFormat.SIMPLE


def _board_error(message: str) -> DraftNormalizationError:
    return DraftNormalizationError(message, DataSource.GOOGLE_APPS_SCRIPT)


def _draft_board(data: Any) -> list[Any]:
    board = data.get(DRAFT_BOARD_KEY) if isinstance(data, dict) else None
    if not isinstance(board, list):
        raise _board_error(f'Invalid draft board data format - expected "{DRAFT_BOARD_KEY}" array')
    if not board:
        raise _board_error("No draft rounds found")
    return board


def _parse_cell(cell: Any) -> tuple[str, str] | None:
    """(player name, position) for a board cell, None when empty or unreadable."""
    if isinstance(cell, str):
        name = cell.strip()
        return (name, UNKNOWN_POSITION) if name else None
    if isinstance(cell, dict) and isinstance(cell.get("player"), str):
        name = cell["player"].strip()
        return (name, cell.get("position") or UNKNOWN_POSITION) if name else None
    return None


def identify_board_user_team(team_names: list[str], identifier: str) -> int | None:
    """Id of the first team whose name contains ``identifier`` (case-insensitive)."""
    needle = name_key(identifier)
    if not needle:
        return None
    for team_id, team_name in enumerate(team_names, start=1):
        if needle in name_key(team_name):
            return team_id
    return None


def normalize_simple_board(data: Any, settings: Settings | None = None) -> DraftState:
    """
    Normalize the simple board: one object per round keyed by team name.

    Team columns come from the first round's keys. Each cell is a player name
    or ``{"player", "position"}``; empty cells are skipped and do not consume a
    pick number.
    """
    settings = settings or get_settings()
    board = _draft_board(data)

    first_round = board[0]
    if not isinstance(first_round, dict):
        raise _board_error("No draft rounds found or invalid round format")
    team_names = list(first_round.keys())
    if not team_names:
        raise _board_error("No teams found in first round")

    records: list[DraftedPlayerRecord] = []
    pick_number = 1
    for round_number, round_row in enumerate(board, start=1):
        if not isinstance(round_row, dict):
            logger.warning("Skipping round %d: expected an object per round", round_number)
            continue
        for team_id, team_name in enumerate(team_names, start=1):
            cell = _parse_cell(round_row.get(team_name))
            if cell is None:
                continue
            player_name, position = cell
            records.append(
                DraftedPlayerRecord(
                    id=f"pick-{pick_number}",
                    name=player_name,
                    position=normalize_position(position),
                    team=UNKNOWN_POSITION,
                    team_id=team_id,
                    draft_round=round_number,
                    pick_number=pick_number,
                )
            )
            pick_number += 1

    seats = [_TeamSeat(id=i, name=str(n)) for i, n in enumerate(team_names, start=1)]
    return _build_state(
        seats=seats,
        records=records,
        total_rounds=len(board),
        data_source=DataSource.GOOGLE_APPS_SCRIPT,
        user_team_id=identify_board_user_team(
            [seat.name for seat in seats], settings.board_user_identifier
        ),
        status=DraftStatus.IN_PROGRESS,
        league_name="Google Apps Script League",
        draft_type="snake",
        season="",
    )


def _enhanced_team_names(data: dict[str, Any], first_round: dict[str, Any]) -> list[str]:
    team_rows = data.get("teams") or []
    if isinstance(team_rows, list) and team_rows:
        ordered = [
            (_positive_int(row.get("draftPosition")) or index + 1, index, str(row["name"]))
            for index, row in enumerate(team_rows)
            if isinstance(row, dict) and row.get("name")
        ]
        return [name for _, _, name in sorted(ordered)]

    # No team list: infer columns from who picked in the first round
    names: list[str] = []
    for pick in first_round.get("picks", []):
        team = pick.get("team") if isinstance(pick, dict) else None
        if team and str(team) not in names:
            names.append(str(team))
    return names


def normalize_enhanced_board(data: Any, settings: Settings | None = None) -> DraftState:
    """
    Normalize the enhanced board: ``{"picks": [...]}`` per round plus team and
    settings metadata.
    """
    settings = settings or get_settings()
    board = _draft_board(data)

    first_round = board[0]
    if not (isinstance(first_round, dict) and isinstance(first_round.get("picks"), list)):
        raise _board_error("Not enhanced format: first round has no picks array")

    board_settings = data.get("settings") or {}
    if not isinstance(board_settings, dict):
        board_settings = {}

    team_names = _enhanced_team_names(data, first_round)
    if not team_names:
        raise _board_error("No teams found in enhanced draft board")
    team_ids = {name_key(name): team_id for team_id, name in enumerate(team_names, start=1)}

    records: list[DraftedPlayerRecord] = []
    pick_number = 1
    for round_number, round_row in enumerate(board, start=1):
        picks = round_row.get("picks") if isinstance(round_row, dict) else None
        if not isinstance(picks, list):
            logger.warning("Skipping round %d: expected a picks array", round_number)
            continue
        for pick in picks:
            if not isinstance(pick, dict):
                continue
            player_name = str(pick.get("player") or "").strip()
            if not player_name:
                continue
            records.append(
                DraftedPlayerRecord(
                    id=f"pick-{pick_number}",
                    name=player_name,
                    position=normalize_position(pick.get("position")),
                    team=UNKNOWN_POSITION,
                    team_id=team_ids.get(name_key(pick.get("team"))),
                    draft_round=round_number,
                    pick_number=pick_number,
                )
            )
            pick_number += 1

    seats = [_TeamSeat(id=i, name=n) for i, n in enumerate(team_names, start=1)]
    return _build_state(
        seats=seats,
        records=records,
        total_rounds=_positive_int(board_settings.get("totalRounds")) or len(board),
        data_source=DataSource.GOOGLE_APPS_SCRIPT,
        user_team_id=identify_board_user_team(team_names, settings.board_user_identifier),
        status=DraftStatus.IN_PROGRESS,
        league_name=str(board_settings.get("leagueName") or "Google Apps Script League"),
        draft_type=str(board_settings.get("draftType") or "snake"),
        season=str(board_settings.get("season") or ""),
    )


def normalize_board(data: Any, settings: Settings | None = None) -> DraftState:
    """
    Normalize a spreadsheet draft board of either shape.

    The enhanced parser is used when the probe finds a ``picks`` array; if it
    fails the simple parser gets a chance, and the error only surfaces when
    both fail.
    """
    if probe_board_format(data) == BoardFormat.SIMPLE:
        return normalize_simple_board(data, settings)

    try:
        return normalize_enhanced_board(data, settings)
    except DraftNormalizationError as enhanced_error:
        logger.info("Enhanced format failed, trying simple format: %s", enhanced_error.message)
        try:
            return normalize_simple_board(data, settings)
        except DraftNormalizationError as simple_error:
            raise _board_error(
                f"Enhanced format: {enhanced_error.message}; simple format: {simple_error.message}"
            ) from simple_error


# ==================== Dispatch ====================


def normalize_draft(payload: DraftPayload, settings: Settings | None = None) -> DraftState:
    """
    Normalize either draft payload variant.

    Raises:
        DraftNormalizationError: when required fields are missing or malformed
    """
    if isinstance(payload, SleeperDraftPayload):
        source, label = DataSource.SLEEPER, "Sleeper"
        normalize = normalize_sleeper
    else:
        source, label = DataSource.GOOGLE_APPS_SCRIPT, "Google Apps Script"
        normalize = normalize_board

    try:
        if isinstance(payload, SleeperDraftPayload):
            return normalize(payload, settings)
        return normalize(payload.data, settings)
    except DraftNormalizationError as e:
        raise DraftNormalizationError(
            f"Error processing {label} draft data: {e.message}", source
        ) from e
    except (ValidationError, TypeError, AttributeError) as e:
        raise DraftNormalizationError(
            f"Error processing {label} draft data: {e}", source
        ) from e
