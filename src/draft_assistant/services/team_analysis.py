"""
Team Analysis

Composition, bye-week and value views of the user's team, plus a projection
of who goes off the board before the user picks again.
"""

import math
from collections import defaultdict

from draft_assistant.models.analysis import (
    AdvancedInsights,
    ByeWeekAlternatives,
    ByeWeekConflict,
    ByeWeekSlot,
    PositionScarcity,
    ProjectedPicks,
    TeamAnalysisReport,
    ValueAssessment,
)
from draft_assistant.models.draft import DraftState
from draft_assistant.models.player import MAX_TIER, POSITIONS, Player
from draft_assistant.models.recommendation import RosterSlot
from draft_assistant.services.availability import available_players
from draft_assistant.services.catalog import parse_float
from draft_assistant.services.recommendations import (
    IDEAL_ROSTER,
    build_roster,
    position_counts,
    stack_opportunities,
)
from draft_assistant.services.snake import team_for_pick

BYE_OVERVIEW_WEEKS = range(5, 15)
ALTERNATIVE_MAX_RANK = 100
MAX_ALTERNATIVES = 5
MAX_VALUE_ROWS = 10
SCARCITY_WINDOW = 12


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def balance_score(counts: dict[str, int]) -> int:
    """Average closeness to the ideal roster, in percent."""
    closeness = [
        (1 - abs(counts.get(position, 0) - ideal) / ideal) * 100
        for position, ideal in IDEAL_ROSTER.items()
    ]
    return _round_half_up(sum(closeness) / len(closeness))


def team_type(counts: dict[str, int]) -> str:
    rb, wr = counts.get("RB", 0), counts.get("WR", 0)
    if rb > wr + 1:
        return "RB-Heavy"
    if wr > rb + 1:
        return "WR-Heavy"
    if counts.get("QB", 0) > 1:
        return "QB-Heavy"
    if counts.get("TE", 0) > 1:
        return "TE-Heavy"
    return "Balanced"


def _players_by_bye(roster: list[RosterSlot]) -> dict[int, list[RosterSlot]]:
    by_bye: dict[int, list[RosterSlot]] = defaultdict(list)
    for slot in roster:
        if slot.bye > 0:
            by_bye[slot.bye].append(slot)
    return by_bye


def find_bye_conflicts(roster: list[RosterSlot]) -> list[ByeWeekConflict]:
    """Bye weeks shared by two or more rostered players, by week."""
    return [
        ByeWeekConflict(week=week, players=players, count=len(players))
        for week, players in sorted(_players_by_bye(roster).items())
        if len(players) >= 2
    ]


def analyze_team(draft_state: DraftState, catalog: list[Player]) -> TeamAnalysisReport | None:
    """
    Composition report for the user's team.

    Tier counts, projections and bye weeks only include picks that matched
    the catalog.

    Returns:
        TeamAnalysisReport, or None when the user's team is unknown
    """
    user_team = draft_state.user_team
    if user_team is None:
        return None

    roster = build_roster(user_team, catalog)
    counts = position_counts(roster)

    tier_counts = {tier: 0 for tier in range(1, MAX_TIER + 1)}
    projected = {position: 0.0 for position in POSITIONS}
    for slot in roster:
        if slot.tier is not None:
            tier_counts[slot.tier] += 1
        if slot.position in projected:
            projected[slot.position] += slot.projected_points

    by_bye = _players_by_bye(roster)
    overview = [
        ByeWeekSlot(
            week=week,
            players=by_bye.get(week, []),
            count=len(by_bye.get(week, [])),
            has_conflict=len(by_bye.get(week, [])) >= 2,
        )
        for week in BYE_OVERVIEW_WEEKS
    ]

    return TeamAnalysisReport(
        team_id=user_team.id,
        team_name=user_team.name,
        total_players=len(roster),
        position_counts=counts,
        tier_counts=tier_counts,
        projected_points=projected,
        balance_score=balance_score(counts),
        team_type=team_type(counts),
        top_tiers=sum(tier_counts[t] for t in range(1, 4)),
        mid_tiers=sum(tier_counts[t] for t in range(4, 7)),
        late_tiers=sum(tier_counts[t] for t in range(7, MAX_TIER + 1)),
        bye_weeks=sorted(by_bye),
        bye_week_conflicts=find_bye_conflicts(roster),
        bye_week_overview=overview,
    )


def value_analysis(available: list[Player]) -> list[ValueAssessment]:
    """Largest gaps between ADP and rank, in either direction."""
    rows = []
    for player in available:
        adp = parse_float(player.adp)
        if not adp:
            continue
        value = adp - player.rank
        rows.append(
            ValueAssessment(
                player=player, adp=adp, value=value, is_value=value > 0, is_reach=value < 0
            )
        )
    rows.sort(key=lambda row: -abs(row.value))
    return rows[:MAX_VALUE_ROWS]


def position_scarcity(available: list[Player]) -> dict[str, PositionScarcity]:
    """Depth of each position among its best remaining players."""
    scarcity = {}
    for position in POSITIONS:
        top = sorted((p for p in available if p.position == position), key=lambda p: p.rank)
        top = top[:SCARCITY_WINDOW]
        if len(top) < 6:
            level = "Critical"
        elif len(top) < 10:
            level = "Low"
        else:
            level = "Good"
        scarcity[position] = PositionScarcity(
            position=position,
            top_players=top,
            count=len(top),
            scarcity_level=level,
            next_pick=top[0] if top else None,
        )
    return scarcity


def advanced_insights(
    draft_state: DraftState,
    catalog: list[Player],
    available: list[Player] | None = None,
) -> AdvancedInsights | None:
    """
    Stacks, bye-week alternatives, ADP value and positional scarcity.

    Args:
        draft_state: Current draft
        catalog: Ranked player pool
        available: Undrafted players, computed when omitted

    Returns:
        AdvancedInsights, or None when the user's team is unknown
    """
    user_team = draft_state.user_team
    if user_team is None:
        return None
    if available is None:
        available = available_players(catalog, draft_state)

    roster = build_roster(user_team, catalog)
    conflicts = find_bye_conflicts(roster)
    alternatives = [
        ByeWeekAlternatives(
            week=conflict.week,
            alternatives=[
                p
                for p in available
                if p.bye != conflict.week and p.rank <= ALTERNATIVE_MAX_RANK
            ][:MAX_ALTERNATIVES],
        )
        for conflict in conflicts
    ]

    scarcity = position_scarcity(available)
    return AdvancedInsights(
        stack_opportunities=stack_opportunities(roster, available),
        bye_week_conflicts=conflicts,
        bye_week_alternatives=alternatives,
        value_analysis=value_analysis(available),
        position_scarcity=scarcity,
        scarcity_alerts=[s for s in scarcity.values() if s.scarcity_level == "Critical"],
    )


def projected_picks_before_turn(
    draft_state: DraftState, available: list[Player]
) -> ProjectedPicks:
    """
    Players likely to go before the user's next pick.

    Players with a numeric ADP are taken first in ADP order, then the rest by
    rank. When the user has no pick left, every remaining pick counts.
    """
    user_team = draft_state.user_team
    if user_team is None or draft_state.current_pick > draft_state.total_picks:
        return ProjectedPicks(picks_until_my_turn=0, next_user_pick=None)

    next_user_pick = next(
        (
            pick
            for pick in range(draft_state.current_pick, draft_state.total_picks + 1)
            if team_for_pick(pick, draft_state.total_teams) == user_team.id
        ),
        None,
    )
    if next_user_pick is None:
        picks_until = draft_state.total_picks - draft_state.current_pick + 1
    else:
        picks_until = next_user_pick - draft_state.current_pick

    with_adp = [p for p in available if parse_float(p.adp) is not None]
    with_adp.sort(key=lambda p: parse_float(p.adp))
    without_adp = sorted(
        (p for p in available if parse_float(p.adp) is None), key=lambda p: p.rank
    )

    return ProjectedPicks(
        picks_until_my_turn=picks_until,
        next_user_pick=next_user_pick,
        players_to_pick=(with_adp + without_adp)[:picks_until],
    )
