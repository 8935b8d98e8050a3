"""
Availability Filter

Cross-references drafted picks against the ranked catalog. Matching is exact
on the normalized name key; a spelling difference between sources leaves the
player in the available pool.
"""

from draft_assistant.models.draft import DraftState
from draft_assistant.models.player import Player
from draft_assistant.services.names import name_key


def drafted_name_keys(draft_state: DraftState) -> set[str]:
    """Name keys of every drafted player."""
    keys = {name_key(record.display_name) for record in draft_state.drafted_players}
    keys.discard("")
    return keys


def available_players(catalog: list[Player], draft_state: DraftState) -> list[Player]:
    """
    Catalog players not yet drafted, ascending by rank.

    Args:
        catalog: Ranked player pool
        draft_state: Current draft

    Returns:
        Undrafted players; running it again on its own output changes nothing
    """
    drafted = drafted_name_keys(draft_state)
    remaining = [p for p in catalog if name_key(p.name) not in drafted]
    return sorted(remaining, key=lambda p: p.rank)


def index_by_name(catalog: list[Player]) -> dict[str, Player]:
    """Catalog lookup by name key; the first (best ranked) entry wins."""
    index: dict[str, Player] = {}
    for player in catalog:
        index.setdefault(name_key(player.name), player)
    return index


def drafted_catalog_players(catalog: list[Player], draft_state: DraftState) -> list[Player]:
    """Catalog entries for drafted players that could be matched, in pick order."""
    index = index_by_name(catalog)
    matched = []
    for record in draft_state.drafted_players:
        player = index.get(name_key(record.display_name))
        if player is not None:
            matched.append(player)
    return matched
