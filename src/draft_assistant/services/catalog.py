"""
Player Catalog

Turns the rankings spreadsheet payload (rankings, depth charts, injuries,
rookies) into a rank-ordered list of Player objects for one league.
"""

import logging
import math
import re
from typing import Any

from draft_assistant.config import Settings, get_settings
from draft_assistant.models.player import (
    FREE_AGENT,
    MAX_TIER,
    TIER_SIZE,
    UNKNOWN_POSITION,
    DepthChartEntry,
    Player,
    TeamDepthChart,
)
from draft_assistant.services.names import name_key, normalize_position

logger = logging.getLogger(__name__)

DEPTH_CHARTS_TABLE = "Depth Charts"
INJURIES_TABLE = "Injuries"
ROOKIES_TABLE = "Rookies"

GLOBAL_RANK_FIELDS = ("G_Rank", "Global_Rank", "Overall_Rank")
POSITIONAL_RANK_FIELDS = ("Pos Rank", "Pos_Rank", "Rank")

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
_LEADING_FLOAT = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+))")

# Depth chart slot keys are matched by substring, in this order
_SLOT_POSITIONS = ("QB", "RB", "WR", "TE", "K", "D")


def tier_for_rank(rank: int) -> int:
    """Tier in bands of 12 ranks, capped at 11."""
    if rank <= 0:
        return 1
    return min(MAX_TIER, math.ceil(rank / TIER_SIZE))


def ranking_table_for_league(league: str, settings: Settings | None = None) -> str:
    """Name of the ranking table that backs ``league``."""
    settings = settings or get_settings()
    return settings.league_rankings.get(league, f"{league} Rankings")


def parse_int(value: Any) -> int | None:
    """Leading integer of a spreadsheet cell, or None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    match = _LEADING_INT.match(str(value))
    return int(match.group(1)) if match else None


def parse_float(value: Any) -> float | None:
    """Leading number of a spreadsheet cell, or None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value) if math.isfinite(value) else None
    match = _LEADING_FLOAT.match(str(value))
    return float(match.group(1)) if match else None


def _first_present(row: dict[str, Any], fields: tuple[str, ...]) -> Any:
    for field in fields:
        value = row.get(field)
        if value not in (None, ""):
            return value
    return None


def _rank_or_fallback(row: dict[str, Any], fields: tuple[str, ...], fallback: int) -> int:
    parsed = parse_int(_first_present(row, fields))
    if parsed is None or parsed < 1:
        return fallback
    return parsed


def _position_for_slot(slot: str) -> str:
    upper = slot.upper()
    for position in _SLOT_POSITIONS:
        if position in upper:
            return position
    return UNKNOWN_POSITION


def _table(raw_data: dict[str, Any], name: str) -> list[dict[str, Any]]:
    rows = raw_data.get(name) or []
    if not isinstance(rows, list):
        logger.warning("Table %r is not a list; ignoring it", name)
        return []
    return [row for row in rows if isinstance(row, dict)]


def _depth_chart_map(raw_data: dict[str, Any]) -> dict[str, dict[str, str]]:
    depth: dict[str, dict[str, str]] = {}
    for team_row in _table(raw_data, DEPTH_CHARTS_TABLE):
        team = team_row.get("Team")
        for slot, player_name in team_row.items():
            if slot == "Team" or not player_name:
                continue
            depth[name_key(str(player_name))] = {
                "team": team,
                "slot": slot,
                "position": _position_for_slot(slot),
            }
    return depth


def _injury_map(raw_data: dict[str, Any]) -> dict[str, dict[str, Any]]:
    return {
        name_key(row.get("Player")): {
            "injury": row.get("Injury"),
            "status": row.get("Status"),
            "updated": row.get("Updated"),
        }
        for row in _table(raw_data, INJURIES_TABLE)
        if row.get("Player")
    }


def _rookie_map(raw_data: dict[str, Any]) -> dict[str, dict[str, Any]]:
    return {
        name_key(row.get("Name")): {
            "college": row.get("College"),
            "round": row.get("Round"),
            "pick": row.get("Pick"),
        }
        for row in _table(raw_data, ROOKIES_TABLE)
        if row.get("Name")
    }


def _optional_str(value: Any) -> str | None:
    if value in (None, ""):
        return None
    return str(value)


def build_catalog(
    raw_data: Any, league: str, settings: Settings | None = None
) -> list[Player]:
    """
    Build the ranked player pool for a league.

    A league without a ranking table, or a malformed table, yields an empty
    list rather than an error so callers can render an empty state.

    Args:
        raw_data: Decoded rankings payload keyed by table name
        league: League whose ranking table to use
        settings: Optional settings override (league to table mapping)

    Returns:
        Players sorted ascending by rank, ties in source order
    """
    if not isinstance(raw_data, dict) or not league:
        return []

    table_name = ranking_table_for_league(league, settings)
    rankings = raw_data.get(table_name)
    if rankings is None:
        logger.warning("No ranking data found for league %s (table %r)", league, table_name)
        return []
    if not isinstance(rankings, list):
        logger.error("Ranking table %r is not a list: %s", table_name, type(rankings).__name__)
        return []

    depth_map = _depth_chart_map(raw_data)
    injury_map = _injury_map(raw_data)
    rookie_map = _rookie_map(raw_data)

    players: list[Player] = []
    for index, row in enumerate(rankings):
        if not isinstance(row, dict) or not str(row.get("Name") or "").strip():
            logger.warning("Skipping ranking row %d without a player name", index + 1)
            continue

        name = str(row["Name"]).strip()
        key = name_key(name)
        depth = depth_map.get(key, {})
        injury = injury_map.get(key, {})
        rookie = rookie_map.get(key)

        rank = _rank_or_fallback(row, GLOBAL_RANK_FIELDS, index + 1)
        projected = parse_float(row.get("Proj"))

        players.append(
            Player(
                id=index + 1,
                name=name,
                position=normalize_position(row.get("Pos") or row.get("Position")),
                team=str(depth.get("team") or row.get("Team") or FREE_AGENT),
                rank=rank,
                positional_rank=_rank_or_fallback(row, POSITIONAL_RANK_FIELDS, index + 1),
                tier=tier_for_rank(rank),
                projected_points=max(0.0, projected or 0.0),
                bye=parse_int(row.get("Bye")) or 0,
                adp=row.get("ADP") or "",
                risk=row.get("Risk") or "",
                upside=row.get("Upside") or "",
                boom=row.get("Boom") or "",
                bust=row.get("Bust") or "",
                is_rookie=rookie is not None,
                college=_optional_str((rookie or {}).get("college")),
                draft_round=(rookie or {}).get("round"),
                draft_pick=(rookie or {}).get("pick"),
                injury=_optional_str(injury.get("injury")),
                injury_status=_optional_str(injury.get("status")),
                injury_updated=_optional_str(injury.get("updated")),
                depth_chart_slot=depth.get("slot"),
                source_fields=dict(row),
            )
        )

    return sorted(players, key=lambda p: p.rank)


def filter_players(
    players: list[Player], position: str | None = None, search: str | None = None
) -> list[Player]:
    """Filter by position ("ALL" for any) and by name/team substring, keeping order."""
    wanted = None
    if position and position.upper() != "ALL":
        wanted = normalize_position(position)
    needle = (search or "").strip().casefold()

    return [
        p
        for p in players
        if (wanted is None or p.position == wanted)
        and (not needle or needle in p.name.casefold() or needle in p.team.casefold())
    ]


def depth_charts(
    raw_data: Any,
    catalog: list[Player] | None = None,
    drafted_keys: set[str] | None = None,
) -> list[TeamDepthChart]:
    """
    Per-team depth charts (QB/RB/WR/TE) annotated with catalog rank and draft status.

    Args:
        raw_data: Decoded rankings payload
        catalog: Ranked players used for rank/tier lookups (matched on name and position)
        drafted_keys: Name keys of players already drafted

    Returns:
        One TeamDepthChart per depth chart row, in source order
    """
    if not isinstance(raw_data, dict):
        return []

    by_name_and_position = {}
    for player in catalog or []:
        by_name_and_position.setdefault((name_key(player.name), player.position), player)
    drafted_keys = drafted_keys or set()

    charts: list[TeamDepthChart] = []
    for team_row in _table(raw_data, DEPTH_CHARTS_TABLE):
        positions: dict[str, list[DepthChartEntry]] = {"QB": [], "RB": [], "WR": [], "TE": []}
        for slot, player_name in team_row.items():
            if slot == "Team" or not player_name:
                continue
            position = _position_for_slot(slot)
            if position not in positions:
                continue
            key = name_key(str(player_name))
            ranked = by_name_and_position.get((key, position))
            positions[position].append(
                DepthChartEntry(
                    slot=slot,
                    name=str(player_name),
                    position=position,
                    rank=ranked.rank if ranked else None,
                    tier=ranked.tier if ranked else None,
                    is_drafted=key in drafted_keys,
                )
            )
        charts.append(TeamDepthChart(team=str(team_row.get("Team") or FREE_AGENT), positions=positions))

    return charts
