"""Core infrastructure module.

This module exports core utilities used across features.
Never imports from features - only from external libraries.
"""

from .config import Settings, get_global_settings
from .exceptions import ServiceException, ValidationError, ConfigurationError
from .validation import RiotId, parse_riot_id, is_empty_or_none

__all__ = [
    # Config
    "Settings",
    "get_global_settings",
    # Exceptions
    "ServiceException",
    "ValidationError",
    "ConfigurationError",
    # Validation
    "RiotId",
    "parse_riot_id",
    "is_empty_or_none",
]
