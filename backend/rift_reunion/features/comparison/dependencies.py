"""Dependencies for the comparison feature.

The service is handed out through a factory rather than built eagerly, so the
API key check happens inside the request handler (and the search page can
render without one).
"""

from contextlib import asynccontextmanager
from functools import partial
from typing import Annotated, AsyncContextManager, AsyncIterator, Callable

from fastapi import Depends

from rift_reunion.core.config import Settings, get_global_settings
from rift_reunion.core.riot_api.client import RiotAPIClient

from .gateway import RiotComparisonGateway
from .service import ComparisonService

ComparisonServiceFactory = Callable[[], AsyncContextManager[ComparisonService]]


def get_settings_dependency() -> Settings:
    """Get application settings."""
    return get_global_settings()


@asynccontextmanager
async def open_comparison_service(
    settings: Settings,
) -> AsyncIterator[ComparisonService]:
    """Build a comparison service backed by a fresh Riot API session.

    :param settings: Application settings
    :raises ConfigurationError: If no Riot API key is configured
    """
    api_key = settings.require_riot_api_key()

    async with RiotAPIClient(api_key=api_key) as client:
        gateway = RiotComparisonGateway(
            client,
            batch_size=settings.history_batch_size,
            page_delay=settings.history_page_delay,
            rate_limit_backoff=settings.rate_limit_backoff,
            rate_limit_max_retries=settings.rate_limit_max_retries,
        )
        yield ComparisonService(
            gateway,
            history_limit=settings.match_history_limit,
            detail_delay=settings.detail_request_delay,
            detail_concurrency=settings.detail_concurrency,
        )


def get_comparison_service_factory(
    settings: Annotated[Settings, Depends(get_settings_dependency)],
) -> ComparisonServiceFactory:
    """Get a factory opening comparison services for the current settings."""
    return partial(open_comparison_service, settings)


# Type aliases for cleaner dependency injection
SettingsDep = Annotated[Settings, Depends(get_settings_dependency)]
ComparisonServiceFactoryDep = Annotated[
    ComparisonServiceFactory, Depends(get_comparison_service_factory)
]

__all__ = [
    "get_settings_dependency",
    "get_comparison_service_factory",
    "open_comparison_service",
    "ComparisonServiceFactory",
    "SettingsDep",
    "ComparisonServiceFactoryDep",
]
