import pytest

from draft_assistant.clients.sheets import SheetsClient
from draft_assistant.config import Settings


@pytest.fixture
def settings() -> Settings:
    return Settings(
        sleeper_user_id="user-me",
        sleeper_display_name="Me",
        board_user_identifier="Cory",
        default_teams=10,
        default_rounds=15,
        rankings_url="https://sheets.test/rankings",
        draft_board_url="https://sheets.test/board",
        cors_proxies=[
            "https://relay-one.test/?{url}",
            "https://relay-two.test/{raw_url}",
        ],
    )


@pytest.fixture(autouse=True)
def clear_rankings_cache():
    SheetsClient.clear_cache()
    yield
    SheetsClient.clear_cache()


@pytest.fixture
def rankings_payload() -> dict:
    return {
        "FanDuel Rankings": [
            {"Name": "Patrick Mahomes", "Pos": "QB", "G_Rank": 20, "Proj": 380.5, "Bye": 6, "ADP": "2.08"},
            {"Name": "Travis Kelce", "Pos": "TE", "G_Rank": 15, "Proj": 210, "Bye": 6, "ADP": "2.03"},
            {"Name": "Christian McCaffrey", "Pos": "RB", "G_Rank": 1, "Proj": 330, "Bye": 9, "ADP": "1.01"},
            {"Name": "Tyreek Hill", "Pos": "WR", "G_Rank": 3, "Proj": 300, "Bye": 10, "ADP": "1.03"},
            {"Name": "Rookie Runner", "Pos": "RB", "Proj": "95.5 pts", "Bye": "7", "Team": "DAL"},
            {"Name": "Bills D/ST", "Pos": "D/DEF", "G_Rank": 150, "Bye": 12},
            {"Name": "", "Pos": "WR", "G_Rank": 99},
        ],
        "Depth Charts": [
            {"Team": "KC", "QB1": "Patrick Mahomes", "TE1": "Travis Kelce", "WR1": "Rashee Rice"},
            {"Team": "SF", "RB1": "Christian McCaffrey"},
        ],
        "Injuries": [
            {"Player": "christian mccaffrey", "Injury": "Achilles", "Status": "Questionable", "Updated": "Aug 20"},
        ],
        "Rookies": [
            {"Name": "Rookie Runner", "College": "Texas", "Round": 2, "Pick": 40},
        ],
    }
