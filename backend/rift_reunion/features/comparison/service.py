"""Comparison service: find and summarize matches two players shared."""

import asyncio
from typing import Any, List, Sequence

import structlog

from rift_reunion.core.riot_api.constants import GameMode
from rift_reunion.core.validation import parse_riot_id

from .gateway import RiotComparisonGateway
from .schemas import ComparisonResponse, DisplayAccount, MatchSummary, ResolvedAccount
from .transformers import project_match

logger = structlog.get_logger(__name__)


def shared_match_ids(history1: Sequence[str], history2: Sequence[str]) -> List[str]:
    """Match IDs present in both histories, in the order of ``history1``."""
    other = set(history2)
    return [match_id for match_id in history1 if match_id in other]


class ComparisonService:
    """Reconciles two players' match histories.

    Steps: validate both Riot IDs, resolve both accounts concurrently, fetch
    both histories, intersect them, then fetch and project every shared match
    in history order.
    """

    def __init__(
        self,
        gateway: RiotComparisonGateway,
        history_limit: int = 500,
        detail_delay: float = 0.1,
        detail_concurrency: int = 1,
    ):
        """
        Initialize comparison service.

        :param gateway: Riot comparison gateway
        :param history_limit: Maximum match IDs fetched per player
        :param detail_delay: Seconds to pause between match detail requests
        :param detail_concurrency: Match detail requests allowed in flight
        """
        self.gateway = gateway
        self.history_limit = history_limit
        self.detail_delay = detail_delay
        self.detail_concurrency = max(1, detail_concurrency)

    async def compare(
        self,
        player1: Any,
        player2: Any,
        region: str,
        mode: GameMode = GameMode.CLASSIC,
    ) -> ComparisonResponse:
        """
        Compare two players' recent match histories.

        :param player1: First player as ``Name#TAG``
        :param player2: Second player as ``Name#TAG``
        :param region: Platform code (e.g. "euw1")
        :param mode: Game mode to compare
        :returns: Both display accounts and the shared match summaries
        :raises ValidationError: If either Riot ID is malformed (no upstream call is made)
        :raises RiotAPIError: If any upstream call fails
        """
        riot_id1 = parse_riot_id(player1, field="player1")
        riot_id2 = parse_riot_id(player2, field="player2")

        log = logger.bind(region=region, mode=mode.value)

        account1, account2 = await asyncio.gather(
            self.gateway.resolve_account(riot_id1.game_name, riot_id1.tag_line, region),
            self.gateway.resolve_account(riot_id2.game_name, riot_id2.tag_line, region),
        )

        history1, history2 = await asyncio.gather(
            self.gateway.fetch_match_history(
                account1.puuid, region, mode, self.history_limit
            ),
            self.gateway.fetch_match_history(
                account2.puuid, region, mode, self.history_limit
            ),
        )

        shared_ids = shared_match_ids(history1, history2)

        log.info(
            "Match histories compared",
            player1=account1.game_name,
            player2=account2.game_name,
            player1_matches=len(history1),
            player2_matches=len(history2),
            shared_matches=len(shared_ids),
        )
        log.debug("Shared match ids", match_ids=shared_ids)

        matches = await self._summarize(shared_ids, region, mode, account1, account2)

        return ComparisonResponse(
            player1=DisplayAccount.from_account(account1),
            player2=DisplayAccount.from_account(account2),
            matches=matches,
        )

    async def _summarize(
        self,
        match_ids: List[str],
        region: str,
        mode: GameMode,
        account1: ResolvedAccount,
        account2: ResolvedAccount,
    ) -> List[MatchSummary]:
        """Fetch and project each shared match, preserving ``match_ids`` order."""
        if self.detail_concurrency == 1:
            summaries: List[MatchSummary] = []
            for index, match_id in enumerate(match_ids):
                if index:
                    await asyncio.sleep(self.detail_delay)
                raw = await self.gateway.fetch_match_detail(match_id, region, mode)
                summaries.append(project_match(match_id, raw, mode, account1, account2))
            return summaries

        semaphore = asyncio.Semaphore(self.detail_concurrency)

        async def summarize_one(match_id: str) -> MatchSummary:
            async with semaphore:
                raw = await self.gateway.fetch_match_detail(match_id, region, mode)
                # Hold the slot through the pause to cap the request rate
                await asyncio.sleep(self.detail_delay)
            return project_match(match_id, raw, mode, account1, account2)

        return list(await asyncio.gather(*(summarize_one(m) for m in match_ids)))
