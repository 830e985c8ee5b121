"""
Riot API client package.

Provides the HTTP client, routing tables and error types used to talk to the
account and match services for both supported game modes.
"""

from .client import RiotAPIClient
from .constants import GameMode, Platform, Region, route
from .endpoints import RiotAPIEndpoints
from .errors import (
    RiotAPIError,
    RateLimitError,
    AuthenticationError,
    ForbiddenError,
    NotFoundError,
    BadRequestError,
    ServiceUnavailableError,
)
from .models import AccountDTO, AutoBattlerMatchDTO, ClassicMatchDTO

__all__ = [
    "RiotAPIClient",
    "RiotAPIEndpoints",
    "GameMode",
    "Platform",
    "Region",
    "route",
    "RiotAPIError",
    "RateLimitError",
    "AuthenticationError",
    "ForbiddenError",
    "NotFoundError",
    "BadRequestError",
    "ServiceUnavailableError",
    "AccountDTO",
    "AutoBattlerMatchDTO",
    "ClassicMatchDTO",
]
