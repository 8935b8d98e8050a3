"""
Recommendation Engine

Scores available players against the user's roster and draft position.

The score is additive over six terms:

1. Position need: 30 points per open starting slot at the position
2. Rank quality: (200 - rank) / 8, floored at 0
3. ADP value: how far past the player's ADP round the draft already is
4. Stacking: 15 for a WR/TE sharing an NFL team with a rostered QB
5. Bye fit: fewer rostered players on the same bye is better
6. Team balance: first starter at a position, RB/WR depth, RB/WR parity

Kickers are not recommended before round 14, defenses not before round 13.
"""

import re
from typing import Any

from draft_assistant.models.draft import DraftState, Team
from draft_assistant.models.player import (
    FREE_AGENT,
    POSITIONS,
    UNKNOWN_POSITION,
    Player,
)
from draft_assistant.models.recommendation import (
    PlayerRecommendation,
    PlayerScore,
    PositionalBreakdown,
    RecommendationReport,
    RosterSlot,
    ScoreBreakdown,
    StackOpportunity,
    TierDropAlert,
)
from draft_assistant.services.availability import available_players, index_by_name
from draft_assistant.services.catalog import parse_float
from draft_assistant.services.names import name_key
from draft_assistant.services.snake import next_pick_for_team

IDEAL_ROSTER = {"QB": 1, "RB": 2, "WR": 2, "TE": 1, "K": 1, "D": 1}

MAX_RECOMMENDATIONS = 6
MAX_REASONS = 3
KICKER_MIN_ROUND = 14
DEFENSE_MIN_ROUND = 13

TIER_DROP_POSITIONS = ("QB", "RB", "WR", "TE")
BREAKDOWN_POSITIONS = ("RB", "WR", "QB", "TE", "D", "K")
STACK_TARGET_POSITIONS = ("WR", "TE")

MISSING_ADP = 999.0
MISSING_UPSIDE = 5.0
MISSING_RANK = 999

_ADP_ROUND = re.compile(r"^(\d+)\.")


# ==================== Roster ====================


def _known_team(team: str | None) -> bool:
    return bool(team) and team not in (UNKNOWN_POSITION, FREE_AGENT)


def build_roster(team: Team, catalog: list[Player]) -> list[RosterSlot]:
    """Resolve a team's picks against the catalog by name."""
    index = index_by_name(catalog)
    roster = []
    for record in team.picks:
        player = index.get(name_key(record.display_name))
        position = record.position
        if position == UNKNOWN_POSITION and player:
            position = player.position
        nfl_team = record.team
        if not _known_team(nfl_team) and player:
            nfl_team = player.team

        roster.append(
            RosterSlot(
                name=record.display_name,
                position=position,
                team=nfl_team or UNKNOWN_POSITION,
                pick_number=record.pick_number,
                draft_round=record.draft_round,
                rank=player.rank if player else None,
                tier=player.tier if player else None,
                bye=player.bye if player else 0,
                projected_points=player.projected_points if player else 0.0,
                adp=player.adp if player else "",
                upside=player.upside if player else "",
                matched=player is not None,
            )
        )
    return roster


def position_counts(roster: list[RosterSlot]) -> dict[str, int]:
    """Roster count for each canonical position."""
    counts = {position: 0 for position in POSITIONS}
    for slot in roster:
        if slot.position in counts:
            counts[slot.position] += 1
    return counts


def position_needs(counts: dict[str, int]) -> dict[str, int]:
    """Open starting slots per position."""
    return {
        position: max(0, ideal - counts.get(position, 0))
        for position, ideal in IDEAL_ROSTER.items()
    }


def bye_conflicts(roster: list[RosterSlot]) -> dict[int, int]:
    """Rostered players per known bye week."""
    conflicts: dict[int, int] = {}
    for slot in roster:
        if slot.bye > 0:
            conflicts[slot.bye] = conflicts.get(slot.bye, 0) + 1
    return conflicts


# ==================== Scoring ====================


def adp_round(adp: Any) -> int | None:
    """Round part of a "round.pick" ADP such as "3.07"."""
    if adp in (None, ""):
        return None
    match = _ADP_ROUND.match(str(adp))
    return int(match.group(1)) if match else None


def numeric_or(value: Any, default: float) -> float:
    """Leading number of a cell; zero and unparseable values use the default."""
    parsed = parse_float(value)
    return parsed if parsed else default


def _adp_points(adp: Any, current_round: int) -> tuple[float, str | None]:
    round_number = adp_round(adp)
    if round_number is None:
        return 0.0, None

    diff = current_round - round_number
    if diff >= 2:
        return 10.0, f"Falling: ADP round {round_number}, {diff} rounds ago"
    if diff == 1:
        return 7.0, f"Slight value: ADP round {round_number}"
    if diff == 0:
        return 5.0, f"On schedule: ADP round {round_number}"
    if diff == -1:
        return 2.0, f"Slight reach: ADP round {round_number}"
    return 0.0, None


def _balance_points(position: str, composition: dict[str, int]) -> tuple[float, str | None]:
    count = composition.get(position, 0)
    if position in ("QB", "TE", "K", "D") and count == 0:
        return 10.0, f"First {position} on the roster"
    if position in ("RB", "WR") and count < 2:
        return 8.0, f"Builds {position} depth"

    rb, wr = composition.get("RB", 0), composition.get("WR", 0)
    if (position == "WR" and rb > wr) or (position == "RB" and wr > rb):
        return 5.0, "Evens out RB/WR split"
    return 0.0, None


def score_player(
    player: Player,
    roster: list[RosterSlot],
    needs: dict[str, int],
    current_round: int,
    team_composition: dict[str, int],
    conflicts: dict[int, int],
) -> PlayerScore:
    """
    Score one candidate for the user's next pick.

    Pure function of its arguments: the same inputs always give the same
    total, breakdown and reasons.

    Args:
        player: Candidate
        roster: User's current roster
        needs: Open starting slots per position
        current_round: Round of the pick on the clock
        team_composition: Roster count per position
        conflicts: Rostered players per bye week

    Returns:
        Total, per-term breakdown and the top contributing reasons
    """
    reasons: list[tuple[float, str]] = []

    need = needs.get(player.position, 0)
    position_need = need * 30.0
    if position_need:
        reasons.append((position_need, f"Need {need} more {player.position}"))

    rank_quality = max(0.0, (200 - player.rank) * 0.125)
    if rank_quality:
        reasons.append((rank_quality, f"Ranked #{player.rank} overall"))

    adp_value, adp_reason = _adp_points(player.adp, current_round)
    if adp_reason and adp_value:
        reasons.append((adp_value, adp_reason))

    stacking = 0.0
    if player.position in STACK_TARGET_POSITIONS and _known_team(player.team):
        qb = next(
            (s for s in roster if s.position == "QB" and s.team == player.team), None
        )
        if qb is not None:
            stacking = 15.0
            reasons.append((stacking, f"Stacks with {qb.name} ({player.team})"))

    same_bye = conflicts.get(player.bye, 0)
    if same_bye == 0:
        bye_week = 10.0
        reasons.append((bye_week, "No bye week conflict"))
    elif same_bye == 1:
        bye_week = 5.0
        reasons.append((bye_week, f"Shares week {player.bye} bye with one player"))
    else:
        bye_week = 0.0

    team_balance, balance_reason = _balance_points(player.position, team_composition)
    if balance_reason:
        reasons.append((team_balance, balance_reason))

    breakdown = ScoreBreakdown(
        position_need=position_need,
        rank_quality=rank_quality,
        adp_value=adp_value,
        stacking=stacking,
        bye_week=bye_week,
        team_balance=team_balance,
    )
    total = (
        position_need + rank_quality + adp_value + stacking + bye_week + team_balance
    )
    ordered = sorted(reasons, key=lambda item: -item[0])
    return PlayerScore(
        total=total,
        breakdown=breakdown,
        reasons=[text for _, text in ordered[:MAX_REASONS]],
    )


def is_excluded(player: Player, current_round: int) -> bool:
    """Kickers and defenses wait for the late rounds."""
    if player.position == "K":
        return current_round < KICKER_MIN_ROUND
    if player.position == "D":
        return current_round < DEFENSE_MIN_ROUND
    return False


def recommend(
    available: list[Player],
    roster: list[RosterSlot],
    current_round: int,
    limit: int = MAX_RECOMMENDATIONS,
) -> list[PlayerRecommendation]:
    """Top candidates by score; ties go to the better rank, then catalog order."""
    composition = position_counts(roster)
    needs = position_needs(composition)
    conflicts = bye_conflicts(roster)

    scored = []
    for order, player in enumerate(available):
        if is_excluded(player, current_round):
            continue
        score = score_player(player, roster, needs, current_round, composition, conflicts)
        scored.append((-score.total, player.rank, order, player, score))

    scored.sort(key=lambda item: item[:3])
    return [
        PlayerRecommendation(player=player, score=score)
        for *_, player, score in scored[:limit]
    ]


# ==================== Alerts & breakdowns ====================


def tier_drops(available: list[Player]) -> dict[str, TierDropAlert]:
    """
    Positions about to fall off a tier cliff.

    An alert fires when the first player below the leading tier is at most
    three players away and at least two tiers lower.
    """
    alerts: dict[str, TierDropAlert] = {}
    for position in TIER_DROP_POSITIONS:
        ranked = sorted((p for p in available if p.position == position), key=lambda p: p.tier)
        if not ranked:
            continue

        current_tier = ranked[0].tier
        drop_index = next(
            (i for i, p in enumerate(ranked) if p.tier > current_tier), None
        )
        if drop_index is None:
            continue

        next_tier = ranked[drop_index].tier
        if next_tier - current_tier >= 2 and drop_index <= 3:
            alerts[position] = TierDropAlert(
                position=position,
                current_tier=current_tier,
                next_tier=next_tier,
                players_until_drop=drop_index,
                next_pick_in_range=drop_index <= 2,
            )
    return alerts


def positional_breakdown(
    roster: list[RosterSlot], available: list[Player], needs: dict[str, int]
) -> dict[str, PositionalBreakdown]:
    """Per position: drafted players plus the top 3 available by rank, ADP and upside."""
    breakdown: dict[str, PositionalBreakdown] = {}
    for position in BREAKDOWN_POSITIONS:
        mine = [s for s in roster if s.position == position]
        pool = [p for p in available if p.position == position]
        breakdown[position] = PositionalBreakdown(
            position=position,
            drafted=sorted(mine, key=lambda s: s.rank or MISSING_RANK),
            by_rank=sorted(pool, key=lambda p: p.rank)[:3],
            by_adp=sorted(pool, key=lambda p: numeric_or(p.adp, MISSING_ADP))[:3],
            by_upside=sorted(pool, key=lambda p: -numeric_or(p.upside, MISSING_UPSIDE))[:3],
            need=needs.get(position, 0) > 0,
            count=len(mine),
        )
    return breakdown


def stack_opportunities(
    roster: list[RosterSlot], available: list[Player]
) -> list[StackOpportunity]:
    """Up to three available WR/TE by ADP for each rostered QB with a known team."""
    opportunities = []
    for qb in roster:
        if qb.position != "QB" or not _known_team(qb.team):
            continue
        targets = sorted(
            (
                p
                for p in available
                if p.team == qb.team and p.position in STACK_TARGET_POSITIONS
            ),
            key=lambda p: numeric_or(p.adp, MISSING_ADP),
        )[:3]
        if targets:
            opportunities.append(
                StackOpportunity(
                    qb=qb,
                    qb_team=qb.team,
                    targets=targets,
                    projected_points=qb.projected_points,
                )
            )
    return opportunities


def build_recommendation_report(
    draft_state: DraftState,
    catalog: list[Player],
    available: list[Player] | None = None,
) -> RecommendationReport | None:
    """
    Full recommendation panel for the user's team.

    Args:
        draft_state: Current draft
        catalog: Ranked player pool
        available: Undrafted players, computed from the catalog when omitted

    Returns:
        RecommendationReport, or None when the user's team is unknown
    """
    user_team = draft_state.user_team
    if user_team is None:
        return None
    if available is None:
        available = available_players(catalog, draft_state)

    roster = build_roster(user_team, catalog)
    counts = position_counts(roster)
    needs = position_needs(counts)
    current_round = draft_state.current_round

    return RecommendationReport(
        user_team_id=user_team.id,
        user_team_name=user_team.name,
        current_pick=draft_state.current_pick,
        current_round=current_round,
        user_next_pick=next_pick_for_team(
            draft_state.current_pick, user_team.id, draft_state.total_teams
        ),
        position_counts=counts,
        position_needs=needs,
        recommendations=recommend(available, roster, current_round),
        tier_drops=tier_drops(available),
        positional_breakdown=positional_breakdown(roster, available, needs),
        stack_opportunities=stack_opportunities(roster, available),
    )
