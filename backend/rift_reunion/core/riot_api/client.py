"""Riot API HTTP client with error mapping and authentication."""

import asyncio
from typing import Any, Dict, List, Optional

import httpx
import structlog
from pydantic import ValidationError as PydanticValidationError

from .constants import GameMode, Region
from .endpoints import RiotAPIEndpoints
from .errors import RateLimitError, RiotAPIError, error_for_status
from .models import AccountDTO

logger = structlog.get_logger(__name__)


class RiotAPIClient:
    """Thin Riot API client: one request per call, errors mapped to RiotAPIError.

    Retry and pacing policy belongs to the callers; the client only reports a
    throttled request as RateLimitError so they can decide what to do.
    """

    def __init__(
        self,
        api_key: str,
        endpoints: Optional[RiotAPIEndpoints] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: Optional[httpx.Timeout] = None,
    ):
        """
        Initialize Riot API client.

        Args:
            api_key: Riot API key sent as ``X-Riot-Token``
            endpoints: Endpoint builder (default Riot production hosts)
            transport: Optional httpx transport, used by tests
            timeout: Optional httpx timeout override
        """
        self.api_key = api_key
        self.endpoints = endpoints or RiotAPIEndpoints()
        self.transport = transport
        self.timeout = timeout or httpx.Timeout(
            connect=5.0, read=25.0, write=10.0, pool=30.0
        )

        # HTTP session
        self.session: Optional[httpx.AsyncClient] = None
        self._session_lock = asyncio.Lock()

    async def __aenter__(self):
        """Async context manager entry."""
        await self.start_session()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object | None,
    ) -> None:
        """Async context manager exit."""
        await self.close()

    async def start_session(self) -> None:
        """Start the httpx session."""
        if self.session is None or self.session.is_closed:
            async with self._session_lock:
                if self.session is None or self.session.is_closed:
                    headers = {
                        "X-Riot-Token": self.api_key,
                        "Accept": "application/json",
                        "User-Agent": "RiftReunion/1.0",
                    }
                    limits = httpx.Limits(
                        max_keepalive_connections=10, max_connections=5
                    )

                    self.session = httpx.AsyncClient(
                        headers=headers,
                        timeout=self.timeout,
                        limits=limits,
                        transport=self.transport,
                    )

                    logger.debug(
                        "Riot API client session started",
                        api_key_prefix="[REDACTED]" if self.api_key else "None",
                    )

    async def close(self) -> None:
        """Close the httpx session."""
        if self.session and not self.session.is_closed:
            await self.session.aclose()
            logger.debug("Riot API client session closed")

    @staticmethod
    def _error_message(response: httpx.Response) -> tuple[str, Dict[str, Any]]:
        """Pull the upstream error message, falling back to the reason phrase."""
        try:
            body = response.json()
        except ValueError:
            body = {}

        message = None
        if isinstance(body, dict):
            status = body.get("status")
            if isinstance(status, dict):
                message = status.get("message")
        else:
            body = {}

        return message or response.reason_phrase or "Request failed", body

    def _raise_for_status(self, response: httpx.Response, url: str) -> None:
        """Raise the RiotAPIError subclass matching a non-success response."""
        status = response.status_code
        message, body = self._error_message(response)
        error_cls = error_for_status(status)

        if error_cls is RateLimitError:
            retry_after = response.headers.get("Retry-After")
            logger.debug("Riot API rate limited request", url=url, retry_after=retry_after)
            raise RateLimitError(
                message,
                status_code=status,
                response_data=body,
                retry_after=float(retry_after) if retry_after and retry_after.isdigit() else None,
            )

        logger.warning(
            "Riot API request failed", url=url, status_code=status, message=message
        )
        raise error_cls(message, status_code=status, response_data=body)

    async def _make_request(
        self, url: str, params: Optional[Dict[str, Any]] = None
    ) -> Any:
        """
        Make a GET request and decode its JSON body.

        Args:
            url: Request URL
            params: Query parameters

        Returns:
            Response data as dictionary or list

        Raises:
            RateLimitError: On HTTP 429
            RiotAPIError: For any other failure
        """
        await self.start_session()

        if self.session is None:
            raise RiotAPIError("Session not initialized")

        try:
            response = await self.session.get(url, params=params)
        except httpx.RequestError as e:
            logger.warning("Riot API transport error", url=url, error=str(e))
            raise RiotAPIError(f"Request failed: {str(e)}") from e

        try:
            if not response.is_success:
                self._raise_for_status(response, url)
            try:
                return response.json()
            except ValueError as e:
                raise RiotAPIError(
                    "Invalid JSON in Riot API response",
                    status_code=response.status_code,
                ) from e
        finally:
            await response.aclose()

    # Account endpoints
    async def get_account_by_riot_id(
        self, game_name: str, tag_line: str, region: Region
    ) -> AccountDTO:
        """Get account by Riot ID (gameName#tagLine)."""
        url = self.endpoints.account_by_riot_id(game_name, tag_line, region)
        response = await self._make_request(url)
        try:
            return AccountDTO.model_validate(response)
        except PydanticValidationError as e:
            raise RiotAPIError("Unexpected account response from Riot API") from e

    # Match endpoints
    async def get_match_ids_by_puuid(
        self,
        puuid: str,
        mode: GameMode,
        region: Region,
        start: int = 0,
        count: int = 20,
    ) -> List[str]:
        """Get one page of match IDs by PUUID, most recent first."""
        url = self.endpoints.match_ids_by_puuid(puuid, mode, region)
        response = await self._make_request(url, params={"start": start, "count": count})

        if not isinstance(response, list):
            raise RiotAPIError(
                f"Expected list response for match ids, got {type(response).__name__}"
            )

        return [str(match_id) for match_id in response]

    async def get_match(
        self, match_id: str, mode: GameMode, region: Region
    ) -> Dict[str, Any]:
        """Get raw match details by match ID."""
        url = self.endpoints.match_by_id(match_id, mode, region)
        response = await self._make_request(url)

        if not isinstance(response, dict):
            raise RiotAPIError(
                f"Expected object response for match {match_id}, got {type(response).__name__}"
            )

        return response
