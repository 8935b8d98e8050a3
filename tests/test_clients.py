import logging

import httpx
import pytest

from draft_assistant.clients.sheets import SheetsAPIError, SheetsClient
from draft_assistant.clients.sleeper import SleeperAPIError, SleeperClient


def _sleeper_handler(routes: dict[str, object]):
    def handler(request: httpx.Request) -> httpx.Response:
        path = request.url.path.removeprefix("/v1")
        if path not in routes:
            return httpx.Response(404)
        result = routes[path]
        if isinstance(result, int):
            return httpx.Response(result)
        return httpx.Response(200, json=result)

    return handler


# ==================== Sleeper ====================


async def test_fetch_draft_payload_with_league_lookups(settings):
    routes = {
        "/draft/d1": {"draft_id": "d1", "league_id": "L1", "settings": {"teams": 2}},
        "/draft/d1/picks": [{"pick_no": 1, "draft_slot": 1}],
        "/league/L1": {"league_id": "L1", "name": "Friends"},
        "/league/L1/rosters": [{"roster_id": 1, "owner_id": "u1"}],
        "/league/L1/users": [{"user_id": "u1", "display_name": "Ann"}],
    }
    transport = httpx.MockTransport(_sleeper_handler(routes))

    async with SleeperClient(settings, transport=transport) as client:
        payload = await client.fetch_draft_payload("d1")

    assert payload.draft["draft_id"] == "d1"
    assert len(payload.picks) == 1
    assert payload.league.name == "Friends"
    assert payload.rosters[0].owner_id == "u1"
    assert payload.users[0].display_name == "Ann"


async def test_optional_lookups_fail_softly(settings, caplog):
    routes = {
        "/draft/d1": {"draft_id": "d1", "league_id": "L1"},
        "/draft/d1/picks": [],
        "/league/L1": 500,
        "/league/L1/rosters": 503,
        "/league/L1/users": [{"user_id": "u1", "display_name": "Ann"}],
    }
    transport = httpx.MockTransport(_sleeper_handler(routes))

    with caplog.at_level(logging.WARNING):
        async with SleeperClient(settings, transport=transport) as client:
            payload = await client.fetch_draft_payload("d1")

    assert payload.league is None
    assert payload.rosters == []
    assert len(payload.users) == 1
    assert "rosters" in caplog.text


async def test_missing_draft_asks_to_check_id(settings):
    transport = httpx.MockTransport(_sleeper_handler({}))

    async with SleeperClient(settings, transport=transport) as client:
        with pytest.raises(SleeperAPIError) as exc_info:
            await client.fetch_draft_payload("nope")

    assert "check your draft ID" in exc_info.value.message
    assert exc_info.value.status_code == 404


async def test_sleeper_server_error(settings):
    transport = httpx.MockTransport(_sleeper_handler({"/draft/d1": 500, "/draft/d1/picks": []}))

    async with SleeperClient(settings, transport=transport) as client:
        with pytest.raises(SleeperAPIError) as exc_info:
            await client.get_draft("d1")

    assert exc_info.value.status_code == 500


async def test_sleeper_transport_error(settings):
    def handler(request):
        raise httpx.ConnectError("unreachable", request=request)

    async with SleeperClient(settings, transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(SleeperAPIError):
            await client.get_draft("d1")


async def test_client_requires_context_manager(settings):
    with pytest.raises(RuntimeError):
        await SleeperClient(settings).get_draft("d1")


# ==================== Spreadsheets ====================


async def test_rankings_are_cached(settings):
    calls = []

    def handler(request):
        calls.append(str(request.url))
        return httpx.Response(200, json={"FanDuel Rankings": []})

    async with SheetsClient(settings, transport=httpx.MockTransport(handler)) as client:
        first = await client.get_rankings()
        second = await client.get_rankings()
        await client.get_rankings(force_refresh=True)

    assert first == second == {"FanDuel Rankings": []}
    assert calls == ["https://sheets.test/rankings"] * 2


async def test_rankings_failure_names_source(settings):
    transport = httpx.MockTransport(lambda request: httpx.Response(500))

    async with SheetsClient(settings, transport=transport) as client:
        with pytest.raises(SheetsAPIError) as exc_info:
            await client.get_rankings()

    assert exc_info.value.source == "rankings"
    assert exc_info.value.status_code == 500


async def test_rankings_must_be_an_object(settings):
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json=[1, 2]))

    async with SheetsClient(settings, transport=transport) as client:
        with pytest.raises(SheetsAPIError):
            await client.get_rankings()


def test_relay_urls(settings):
    urls = SheetsClient(settings).relay_urls()

    assert urls == [
        "https://relay-one.test/?https%3A%2F%2Fsheets.test%2Fboard",
        "https://relay-two.test/https://sheets.test/board",
    ]


async def test_draft_board_uses_first_working_relay(settings):
    hosts = []

    def handler(request):
        hosts.append(request.url.host)
        if request.url.host == "relay-one.test":
            return httpx.Response(403)
        return httpx.Response(200, json={"Draft Board": []})

    async with SheetsClient(settings, transport=httpx.MockTransport(handler)) as client:
        payload = await client.fetch_board_payload()

    assert payload.data == {"Draft Board": []}
    assert hosts == ["relay-one.test", "relay-two.test"]


async def test_draft_board_fails_when_all_relays_fail(settings):
    def handler(request):
        if request.url.host == "relay-one.test":
            raise httpx.ConnectTimeout("slow", request=request)
        return httpx.Response(502)

    async with SheetsClient(settings, transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(SheetsAPIError) as exc_info:
            await client.get_draft_board()

    assert exc_info.value.source == "draft board"
    assert exc_info.value.status_code == 502
