"""API route handlers."""

from draft_assistant.api.routes import drafts, players, recommendations, viz

__all__ = [
    "drafts",
    "players",
    "recommendations",
    "viz",
]
