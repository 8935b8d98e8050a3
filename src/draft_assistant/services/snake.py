"""
Snake Draft Arithmetic

Odd rounds run 1..N, even rounds run N..1. Rounds and pick numbers are
1-based; draft slots passed to ``pick_number_for_team_and_round`` are 0-based.
Every function returns None for an empty league instead of dividing by zero.
"""

import math


def _check_pick(pick_number: int) -> None:
    if pick_number < 1:
        raise ValueError(f"Pick numbers start at 1, got {pick_number}")


def round_for_pick(pick_number: int, total_teams: int) -> int | None:
    """Round (1-based) that contains ``pick_number``."""
    _check_pick(pick_number)
    if total_teams <= 0:
        return None
    return math.ceil(pick_number / total_teams)


def team_for_pick(pick_number: int, total_teams: int) -> int | None:
    """
    Draft slot (1..total_teams) that owns ``pick_number``.

    Args:
        pick_number: Overall pick number, 1-based
        total_teams: Number of teams in the draft

    Returns:
        Team slot, or None when there are no teams
    """
    _check_pick(pick_number)
    if total_teams <= 0:
        return None

    round_number = math.ceil(pick_number / total_teams)
    position_in_round = ((pick_number - 1) % total_teams) + 1

    if round_number % 2 == 1:
        return position_in_round
    return total_teams - position_in_round + 1


def pick_number_for_team_and_round(
    team_slot: int, round_number: int, total_teams: int
) -> int | None:
    """
    Overall pick number made by a team in a given round.

    Inverse of ``team_for_pick``.

    Args:
        team_slot: Zero-based draft slot
        round_number: Round, 1-based
        total_teams: Number of teams in the draft

    Returns:
        Pick number, or None when there are no teams
    """
    if total_teams <= 0:
        return None
    if round_number < 1:
        raise ValueError(f"Rounds start at 1, got {round_number}")
    if not 0 <= team_slot < total_teams:
        raise ValueError(f"Team slot {team_slot} outside 0..{total_teams - 1}")

    if round_number % 2 == 1:
        position_in_round = team_slot + 1
    else:
        position_in_round = total_teams - team_slot

    return (round_number - 1) * total_teams + position_in_round


def next_pick_for_team(current_pick: int, team_id: int, total_teams: int) -> int:
    """
    Smallest pick at or after ``current_pick`` that belongs to ``team_id``.

    Scans two rounds ahead; falls back to ``current_pick + total_teams``,
    which a well-formed draft never needs.
    """
    _check_pick(current_pick)
    for pick in range(current_pick, current_pick + total_teams * 2 + 1):
        if team_for_pick(pick, total_teams) == team_id:
            return pick
    return current_pick + total_teams
