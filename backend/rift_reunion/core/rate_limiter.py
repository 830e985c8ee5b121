"""Inbound rate limiting for the application.

Protects the shared Riot API key from clients hammering the comparison endpoint.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

# key_func determines the key for rate limiting (by default, uses client IP)
limiter = Limiter(key_func=get_remote_address)
