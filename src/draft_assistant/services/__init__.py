"""Draft reconciliation and recommendation services."""

from draft_assistant.services.availability import (
    available_players,
    drafted_catalog_players,
    drafted_name_keys,
    index_by_name,
)
from draft_assistant.services.catalog import (
    build_catalog,
    depth_charts,
    filter_players,
    ranking_table_for_league,
    tier_for_rank,
)
from draft_assistant.services.draft_board import (
    board_rows,
    draft_board_frame,
    draft_summary,
    on_the_clock,
)
from draft_assistant.services.names import name_key, normalize_position
from draft_assistant.services.normalizer import (
    BoardFormat,
    DraftBoardPayload,
    DraftNormalizationError,
    SleeperDraftPayload,
    normalize_board,
    normalize_draft,
    normalize_sleeper,
    probe_board_format,
)
from draft_assistant.services.recommendations import (
    IDEAL_ROSTER,
    build_recommendation_report,
    score_player,
)
from draft_assistant.services.session import DraftSession, SessionManager
from draft_assistant.services.snake import (
    next_pick_for_team,
    pick_number_for_team_and_round,
    round_for_pick,
    team_for_pick,
)
from draft_assistant.services.team_analysis import (
    advanced_insights,
    analyze_team,
    projected_picks_before_turn,
)

__all__ = [
    # Names
    "name_key",
    "normalize_position",
    # Snake order
    "team_for_pick",
    "pick_number_for_team_and_round",
    "round_for_pick",
    "next_pick_for_team",
    # Catalog
    "build_catalog",
    "tier_for_rank",
    "ranking_table_for_league",
    "filter_players",
    "depth_charts",
    # Normalizer
    "BoardFormat",
    "SleeperDraftPayload",
    "DraftBoardPayload",
    "DraftNormalizationError",
    "probe_board_format",
    "normalize_sleeper",
    "normalize_board",
    "normalize_draft",
    # Availability
    "drafted_name_keys",
    "available_players",
    "index_by_name",
    "drafted_catalog_players",
    # Recommendations
    "IDEAL_ROSTER",
    "score_player",
    "build_recommendation_report",
    # Team analysis
    "analyze_team",
    "advanced_insights",
    "projected_picks_before_turn",
    # Draft board
    "draft_board_frame",
    "board_rows",
    "draft_summary",
    "on_the_clock",
    # Sessions
    "DraftSession",
    "SessionManager",
]
