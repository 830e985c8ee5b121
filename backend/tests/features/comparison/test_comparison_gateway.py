import pytest
from unittest.mock import AsyncMock, patch

from rift_reunion.core.riot_api.client import RiotAPIClient
from rift_reunion.core.riot_api.constants import GameMode, Region
from rift_reunion.core.riot_api.errors import (
    NotFoundError,
    RateLimitError,
    ServiceUnavailableError,
)
from rift_reunion.core.riot_api.models import AccountDTO
from rift_reunion.features.comparison.gateway import RiotComparisonGateway
from rift_reunion.features.comparison.schemas import ResolvedAccount


def endless_history(puuid, mode, region, start=0, count=20):
    """Upstream that always returns a full page of 100 IDs."""
    return [f"EUW1_{start + i}" for i in range(100)]


def history_of(total: int):
    """Upstream holding exactly ``total`` matches."""

    def pages(puuid, mode, region, start=0, count=20):
        return [f"EUW1_{i}" for i in range(start, min(start + count, total))]

    return pages


def rate_limited() -> RateLimitError:
    return RateLimitError("Rate limit exceeded", status_code=429)


@pytest.fixture
def mock_riot_client():
    return AsyncMock(spec=RiotAPIClient)


@pytest.fixture
def gateway(mock_riot_client):
    return RiotComparisonGateway(
        mock_riot_client, page_delay=0, rate_limit_backoff=0
    )


class TestResolveAccount:
    async def test_returns_resolved_account(self, gateway, mock_riot_client):
        mock_riot_client.get_account_by_riot_id.return_value = AccountDTO(
            puuid="puuid-1", gameName="Faker", tagLine="KR1"
        )

        result = await gateway.resolve_account("faker", "kr1", "kr")

        assert result == ResolvedAccount("puuid-1", "Faker", "KR1")
        mock_riot_client.get_account_by_riot_id.assert_called_once_with(
            "faker", "kr1", Region.ASIA
        )

    async def test_unknown_region_uses_default_cluster(self, gateway, mock_riot_client):
        mock_riot_client.get_account_by_riot_id.return_value = AccountDTO(
            puuid="p", gameName="A", tagLine="B"
        )

        await gateway.resolve_account("A", "B", "atlantis1")

        assert mock_riot_client.get_account_by_riot_id.call_args.args[2] is Region.AMERICAS

    async def test_not_found_is_not_retried(self, gateway, mock_riot_client):
        mock_riot_client.get_account_by_riot_id.side_effect = NotFoundError(
            "Data not found", status_code=404
        )

        with pytest.raises(NotFoundError):
            await gateway.resolve_account("Nobody", "000", "euw1")

        assert mock_riot_client.get_account_by_riot_id.await_count == 1


class TestFetchMatchHistory:
    async def test_stops_at_cap(self, gateway, mock_riot_client):
        """An endless history with a cap of 250 takes exactly three pages."""
        mock_riot_client.get_match_ids_by_puuid.side_effect = endless_history

        result = await gateway.fetch_match_history(
            "puuid-1", "euw1", GameMode.CLASSIC, max_count=250
        )

        assert len(result) == 250
        assert result[0] == "EUW1_0"
        assert result[-1] == "EUW1_249"
        counts = [
            call.kwargs["count"]
            for call in mock_riot_client.get_match_ids_by_puuid.call_args_list
        ]
        starts = [
            call.kwargs["start"]
            for call in mock_riot_client.get_match_ids_by_puuid.call_args_list
        ]
        assert counts == [100, 100, 50]
        assert starts == [0, 100, 200]

    async def test_stops_after_short_page(self, gateway, mock_riot_client):
        mock_riot_client.get_match_ids_by_puuid.side_effect = history_of(240)

        result = await gateway.fetch_match_history(
            "puuid-1", "euw1", GameMode.CLASSIC, max_count=500
        )

        assert len(result) == 240
        assert mock_riot_client.get_match_ids_by_puuid.await_count == 3

    async def test_stops_on_empty_page(self, gateway, mock_riot_client):
        mock_riot_client.get_match_ids_by_puuid.side_effect = history_of(200)

        result = await gateway.fetch_match_history(
            "puuid-1", "euw1", GameMode.CLASSIC, max_count=500
        )

        assert len(result) == 200
        # Two full pages, then an empty one ends the history
        assert mock_riot_client.get_match_ids_by_puuid.await_count == 3

    async def test_empty_history(self, gateway, mock_riot_client):
        mock_riot_client.get_match_ids_by_puuid.return_value = []

        result = await gateway.fetch_match_history(
            "puuid-1", "euw1", GameMode.AUTO_BATTLER
        )

        assert result == []
        assert mock_riot_client.get_match_ids_by_puuid.await_count == 1

    async def test_passes_mode_and_region(self, gateway, mock_riot_client):
        mock_riot_client.get_match_ids_by_puuid.return_value = []

        await gateway.fetch_match_history("puuid-1", "oc1", GameMode.AUTO_BATTLER)

        mock_riot_client.get_match_ids_by_puuid.assert_called_once_with(
            "puuid-1", GameMode.AUTO_BATTLER, Region.SEA, start=0, count=100
        )

    async def test_rate_limited_page_is_retried_without_losing_ids(
        self, mock_riot_client
    ):
        pages = history_of(240)
        responses = iter([rate_limited(), None, rate_limited(), rate_limited(), None, None])

        def flaky(puuid, mode, region, start=0, count=20):
            outcome = next(responses)
            if isinstance(outcome, Exception):
                raise outcome
            return pages(puuid, mode, region, start=start, count=count)

        mock_riot_client.get_match_ids_by_puuid.side_effect = flaky
        gateway = RiotComparisonGateway(
            mock_riot_client, page_delay=0.05, rate_limit_backoff=1.5
        )

        with patch(
            "rift_reunion.features.comparison.gateway.asyncio.sleep",
            new_callable=AsyncMock,
        ) as mock_sleep:
            result = await gateway.fetch_match_history(
                "puuid-1", "euw1", GameMode.CLASSIC, max_count=500
            )

        assert result == [f"EUW1_{i}" for i in range(240)]
        starts = [
            call.kwargs["start"]
            for call in mock_riot_client.get_match_ids_by_puuid.call_args_list
        ]
        assert starts == [0, 0, 100, 100, 100, 200]
        sleeps = [call.args[0] for call in mock_sleep.await_args_list]
        assert sleeps == [1.5, 0.05, 1.5, 1.5, 0.05]

    async def test_unbounded_retry_by_default(self, gateway, mock_riot_client):
        mock_riot_client.get_match_ids_by_puuid.side_effect = [rate_limited()] * 25 + [
            ["EUW1_1"]
        ]

        result = await gateway.fetch_match_history(
            "puuid-1", "euw1", GameMode.CLASSIC
        )

        assert result == ["EUW1_1"]
        assert mock_riot_client.get_match_ids_by_puuid.await_count == 26

    async def test_bounded_retry_gives_up(self, mock_riot_client):
        mock_riot_client.get_match_ids_by_puuid.side_effect = rate_limited()
        gateway = RiotComparisonGateway(
            mock_riot_client,
            page_delay=0,
            rate_limit_backoff=0,
            rate_limit_max_retries=2,
        )

        with pytest.raises(RateLimitError):
            await gateway.fetch_match_history("puuid-1", "euw1", GameMode.CLASSIC)

        assert mock_riot_client.get_match_ids_by_puuid.await_count == 3

    async def test_other_errors_are_fatal(self, gateway, mock_riot_client):
        mock_riot_client.get_match_ids_by_puuid.side_effect = [
            [f"EUW1_{i}" for i in range(100)],
            ServiceUnavailableError("Service unavailable", status_code=503),
        ]

        with pytest.raises(ServiceUnavailableError):
            await gateway.fetch_match_history("puuid-1", "euw1", GameMode.CLASSIC)

        assert mock_riot_client.get_match_ids_by_puuid.await_count == 2

    def test_batch_size_is_capped(self, mock_riot_client):
        assert RiotComparisonGateway(mock_riot_client, batch_size=500).batch_size == 100


class TestFetchMatchDetail:
    async def test_fetches_with_mode_and_cluster(self, gateway, mock_riot_client):
        mock_riot_client.get_match.return_value = {"info": {}}

        result = await gateway.fetch_match_detail(
            "KR_1", "kr", GameMode.AUTO_BATTLER
        )

        assert result == {"info": {}}
        mock_riot_client.get_match.assert_called_once_with(
            "KR_1", GameMode.AUTO_BATTLER, Region.ASIA
        )

    async def test_errors_propagate_without_retry(self, gateway, mock_riot_client):
        mock_riot_client.get_match.side_effect = rate_limited()

        with pytest.raises(RateLimitError):
            await gateway.fetch_match_detail("KR_1", "kr", GameMode.CLASSIC)

        assert mock_riot_client.get_match.await_count == 1
