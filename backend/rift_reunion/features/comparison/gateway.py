"""Anti-Corruption Layer (Gateway) for the Riot account and match APIs.

Resolves Riot IDs to accounts, pages through match histories and fetches raw
match details, hiding Riot routing and throttling from the comparison service.
"""

import asyncio
from typing import TYPE_CHECKING, Any, Dict, List, Optional

import structlog

from rift_reunion.core.config import MAX_HISTORY_BATCH_SIZE
from rift_reunion.core.riot_api.constants import GameMode, route
from rift_reunion.core.riot_api.errors import RateLimitError

from .schemas import ResolvedAccount

if TYPE_CHECKING:
    from rift_reunion.core.riot_api.client import RiotAPIClient

logger = structlog.get_logger(__name__)


class RiotComparisonGateway:
    """Gateway to the Riot account and match APIs.

    Responsibilities:
    - Route platform codes to regional clusters
    - Page through match histories in fixed-size batches
    - Wait out 429 responses while paging (other errors propagate)
    """

    def __init__(
        self,
        riot_client: "RiotAPIClient",
        batch_size: int = MAX_HISTORY_BATCH_SIZE,
        page_delay: float = 0.05,
        rate_limit_backoff: float = 1.0,
        rate_limit_max_retries: Optional[int] = None,
    ):
        """Initialize gateway with Riot API client.

        :param riot_client: Riot API client instance
        :param batch_size: Match IDs requested per history page
        :param page_delay: Seconds to pause between history pages
        :param rate_limit_backoff: Seconds to pause before retrying a 429
        :param rate_limit_max_retries: Consecutive 429 retries per page, None for unbounded
        """
        self.riot_client = riot_client
        self.batch_size = max(1, min(batch_size, MAX_HISTORY_BATCH_SIZE))
        self.page_delay = page_delay
        self.rate_limit_backoff = rate_limit_backoff
        self.rate_limit_max_retries = rate_limit_max_retries

    async def resolve_account(
        self, game_name: str, tag_line: str, platform: str
    ) -> ResolvedAccount:
        """Resolve a Riot ID to its PUUID and canonical display name.

        :param game_name: Riot ID game name
        :param tag_line: Riot ID tag line
        :param platform: Platform code (e.g. "euw1")
        :returns: Resolved account
        :raises RiotAPIError: If the account lookup fails (NotFoundError for unknown players)
        """
        account = await self.riot_client.get_account_by_riot_id(
            game_name, tag_line, route(platform)
        )

        logger.debug(
            "account_resolved",
            game_name=account.game_name,
            tag_line=account.tag_line,
            platform=platform,
        )

        return ResolvedAccount(
            puuid=account.puuid,
            game_name=account.game_name,
            tag_line=account.tag_line,
        )

    async def fetch_match_history(
        self,
        puuid: str,
        platform: str,
        mode: GameMode,
        max_count: int = 500,
    ) -> List[str]:
        """Fetch up to ``max_count`` most recent match IDs for a player.

        Pages are requested from offset 0 until an empty page, a short page or
        the cap ends the history. A throttled page is requested again after
        ``rate_limit_backoff`` without advancing the offset.

        :param puuid: Player PUUID
        :param platform: Platform code
        :param mode: Game mode whose history to read
        :param max_count: Maximum number of match IDs to return
        :returns: Match IDs, most recent first
        :raises RiotAPIError: On any non-throttling failure
        """
        region = route(platform)
        match_ids: List[str] = []
        start = 0
        pages = 0
        throttled = 0

        while start < max_count:
            count = min(self.batch_size, max_count - start)

            try:
                batch = await self.riot_client.get_match_ids_by_puuid(
                    puuid, mode, region, start=start, count=count
                )
            except RateLimitError:
                throttled += 1
                if (
                    self.rate_limit_max_retries is not None
                    and throttled > self.rate_limit_max_retries
                ):
                    logger.warning(
                        "match_history_rate_limit_retries_exhausted",
                        start=start,
                        retries=self.rate_limit_max_retries,
                    )
                    raise
                logger.warning(
                    "match_history_rate_limited",
                    start=start,
                    attempt=throttled,
                    backoff=self.rate_limit_backoff,
                )
                await asyncio.sleep(self.rate_limit_backoff)
                continue

            throttled = 0
            pages += 1

            if not batch:
                break

            match_ids.extend(batch[:count])

            if len(batch) < count:
                break

            start += count
            if start < max_count:
                await asyncio.sleep(self.page_delay)

        logger.debug(
            "match_history_fetched",
            mode=mode.value,
            count=len(match_ids),
            pages=pages,
        )

        return match_ids

    async def fetch_match_detail(
        self, match_id: str, platform: str, mode: GameMode
    ) -> Dict[str, Any]:
        """Fetch raw match details.

        :param match_id: Riot match identifier
        :param platform: Platform code
        :param mode: Game mode the match belongs to
        :returns: Raw match payload
        :raises RiotAPIError: If the API call fails
        """
        return await self.riot_client.get_match(match_id, mode, route(platform))
