"""
Name and position normalization.

The rankings spreadsheet and the draft sources share no stable player id, so
players are joined on a normalized name. The key is lossy and best-effort:
it only forgives case and surrounding whitespace, never spelling.
"""

from draft_assistant.models.player import UNKNOWN_POSITION

_POSITION_ALIASES = {
    "DEF": "D",
    "DST": "D",
    "D/ST": "D",
    "D/DEF": "D",
    "DEFENSE": "D",
    "PK": "K",
}


def name_key(name: str | None) -> str:
    """Reconciliation key for a player or team name ("" never matches)."""
    if not name:
        return ""
    return str(name).strip().casefold()


def normalize_position(position: str | None) -> str:
    """Map source position spellings onto the canonical set (D for defenses)."""
    if position is None:
        return UNKNOWN_POSITION
    cleaned = str(position).strip().upper()
    if not cleaned:
        return UNKNOWN_POSITION
    return _POSITION_ALIASES.get(cleaned, cleaned)
