"""
Configuration module using pydantic-settings.

Loads settings from environment variables with sensible defaults.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="DRAFT_ASSISTANT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # API Configuration
    api_title: str = "Draft Assistant API"
    api_version: str = "0.1.0"
    api_description: str = "Live fantasy football draft tracking and pick recommendations"
    debug: bool = False
    log_level: str = "INFO"

    # Sleeper API
    sleeper_base_url: str = "https://api.sleeper.app/v1"
    sleeper_timeout: float = 30.0

    # Spreadsheet-backed endpoints (Google Apps Script web apps)
    rankings_url: str = (
        "https://script.google.com/macros/s/AKfycbw46dGDE9LUoUh-ahhLgXHGACbe-ECQXhj-"
        "HHaJA_qozEU1YQd9yD-Q_TVQluVobijogw/exec"
    )
    draft_board_url: str = (
        "https://script.google.com/macros/s/AKfycbyrc3faGJjl42kfneDjTv7KmAr8b9p2FAjgH"
        "XriwVC80tw1diwANlEyQVwISkPz5BAO_Q/exec"
    )
    sheets_timeout: float = 30.0
    # Relay templates tried in order; "{url}" is the url-encoded target, "{raw_url}" the bare one
    cors_proxies: list[str] = Field(
        default_factory=lambda: [
            "https://corsproxy.io/?{url}",
            "https://api.allorigins.win/raw?url={url}",
            "https://cors-anywhere.herokuapp.com/{raw_url}",
        ]
    )

    # Cache Settings
    rankings_cache_ttl: int = 300  # 5 minutes in seconds

    # Rankings
    league_rankings: dict[str, str] = Field(
        default_factory=lambda: {
            "FanDuel": "FanDuel Rankings",
            "Jackson": "Jackson Rankings",
            "GVSU": "Team Pahl Rankings",
        }
    )
    default_league: str = "FanDuel"

    # "My team" identification
    sleeper_user_id: str = "331180436753502208"
    sleeper_display_name: str = "CoryPahl"
    board_user_identifier: str = "Cory"

    # Draft defaults when the source omits settings
    default_teams: int = 10
    default_rounds: int = 15

    # Server Configuration
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = True


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
