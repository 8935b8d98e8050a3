"""External API clients."""

from draft_assistant.clients.sheets import SheetsAPIError, SheetsClient
from draft_assistant.clients.sleeper import SleeperAPIError, SleeperClient

__all__ = ["SleeperClient", "SleeperAPIError", "SheetsClient", "SheetsAPIError"]
