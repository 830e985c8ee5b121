"""
Tests for Riot API client.
"""

import httpx
import pytest
from unittest.mock import AsyncMock, patch

from rift_reunion.core.riot_api.client import RiotAPIClient
from rift_reunion.core.riot_api.constants import GameMode, Region
from rift_reunion.core.riot_api.errors import (
    ForbiddenError,
    NotFoundError,
    RateLimitError,
    RiotAPIError,
)
from rift_reunion.core.riot_api.models import AccountDTO


def make_client(handler) -> RiotAPIClient:
    return RiotAPIClient(api_key="test_api_key", transport=httpx.MockTransport(handler))


@pytest.fixture
def sample_account_data():
    """Sample account data for testing."""
    return {"puuid": "test-puuid-123", "gameName": "TestPlayer", "tagLine": "EUW"}


class TestRiotAPIClient:
    """Test cases for RiotAPIClient."""

    async def test_context_manager(self):
        """Test async context manager."""
        async with RiotAPIClient(api_key="test_key") as client:
            assert client.session is not None
            assert not client.session.is_closed
        assert client.session.is_closed

    async def test_get_account_by_riot_id(self, sample_account_data):
        """Test getting account by Riot ID."""
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["token"] = request.headers.get("X-Riot-Token")
            return httpx.Response(200, json=sample_account_data)

        async with make_client(handler) as client:
            result = await client.get_account_by_riot_id(
                "Test Player", "EUW", Region.EUROPE
            )

        assert isinstance(result, AccountDTO)
        assert result.puuid == "test-puuid-123"
        assert result.game_name == "TestPlayer"
        assert seen["token"] == "test_api_key"
        assert seen["url"] == (
            "https://europe.api.riotgames.com/riot/account/v1/accounts/by-riot-id/"
            "Test%20Player/EUW"
        )

    async def test_not_found_forwards_upstream_message(self):
        """Test 404 raises NotFoundError carrying Riot's message."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                404,
                json={
                    "status": {
                        "message": "Data not found - No results found for player with riot id Nobody#000",
                        "status_code": 404,
                    }
                },
            )

        async with make_client(handler) as client:
            with pytest.raises(NotFoundError) as exc_info:
                await client.get_account_by_riot_id("Nobody", "000", Region.EUROPE)

        error = exc_info.value
        assert error.status_code == 404
        assert "No results found" in error.message
        assert str(error).startswith("Riot API Error 404")

    async def test_error_without_body_uses_reason_phrase(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(403, text="")

        async with make_client(handler) as client:
            with pytest.raises(ForbiddenError) as exc_info:
                await client.get_match("EUW1_1", GameMode.CLASSIC, Region.EUROPE)

        assert exc_info.value.message == "Forbidden"

    async def test_server_error_is_riot_api_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500, json={"status": {"message": "Internal error"}})

        async with make_client(handler) as client:
            with pytest.raises(RiotAPIError) as exc_info:
                await client.get_match("EUW1_1", GameMode.CLASSIC, Region.EUROPE)

        assert exc_info.value.status_code == 500

    async def test_rate_limit_raises_rate_limit_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                429,
                headers={"Retry-After": "3"},
                json={"status": {"message": "Rate limit exceeded", "status_code": 429}},
            )

        async with make_client(handler) as client:
            with pytest.raises(RateLimitError) as exc_info:
                await client.get_match_ids_by_puuid(
                    "puuid", GameMode.CLASSIC, Region.EUROPE
                )

        assert exc_info.value.status_code == 429
        assert exc_info.value.retry_after == 3.0

    async def test_get_match_ids_sends_paging_params(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["path"] = request.url.path
            seen["params"] = dict(request.url.params)
            return httpx.Response(200, json=["EUW1_3", "EUW1_2"])

        async with make_client(handler) as client:
            result = await client.get_match_ids_by_puuid(
                "puuid-1", GameMode.AUTO_BATTLER, Region.EUROPE, start=200, count=100
            )

        assert result == ["EUW1_3", "EUW1_2"]
        assert seen["path"] == "/tft/match/v1/matches/by-puuid/puuid-1/ids"
        assert seen["params"] == {"start": "200", "count": "100"}

    async def test_get_match_ids_rejects_non_list(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"matchIds": []})

        async with make_client(handler) as client:
            with pytest.raises(RiotAPIError):
                await client.get_match_ids_by_puuid(
                    "puuid-1", GameMode.CLASSIC, Region.EUROPE
                )

    async def test_get_match_returns_raw_payload(self):
        payload = {"metadata": {"matchId": "EUW1_1"}, "info": {"gameMode": "ARAM"}}

        with patch.object(
            RiotAPIClient, "_make_request", new_callable=AsyncMock
        ) as mock_request:
            mock_request.return_value = payload
            client = RiotAPIClient(api_key="test_api_key")

            result = await client.get_match("EUW1_1", GameMode.CLASSIC, Region.EUROPE)

        assert result == payload
        mock_request.assert_called_once_with(
            "https://europe.api.riotgames.com/lol/match/v5/matches/EUW1_1"
        )

    async def test_transport_error_is_wrapped(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with make_client(handler) as client:
            with pytest.raises(RiotAPIError) as exc_info:
                await client.get_match("EUW1_1", GameMode.CLASSIC, Region.EUROPE)

        assert "connection refused" in exc_info.value.message

    async def test_unexpected_account_payload(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"gameName": "NoPuuid"})

        async with make_client(handler) as client:
            with pytest.raises(RiotAPIError):
                await client.get_account_by_riot_id("NoPuuid", "EUW", Region.EUROPE)
