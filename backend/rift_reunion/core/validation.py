"""Validation helpers for user supplied input."""

from typing import Any, NamedTuple

import structlog

from .exceptions import ValidationError

logger = structlog.get_logger(__name__)

INVALID_PLAYER_FORMAT = "Invalid player format. Use: Name#TAG"


class RiotId(NamedTuple):
    """A Riot ID split into its two halves."""

    game_name: str
    tag_line: str

    def __str__(self) -> str:
        return f"{self.game_name}#{self.tag_line}"


def is_empty_or_none(value: Any) -> bool:
    """
    Check if value is None or empty (empty string, list, dict, etc.).

    Args:
        value: Value to check

    Returns:
        True if value is None or empty, False otherwise
    """
    if value is None:
        return True
    if isinstance(value, (str, list, dict, set, tuple)):
        return len(value) == 0
    return False


def parse_riot_id(raw: Any, field: str = "player") -> RiotId:
    """
    Parse a ``gameName#tagLine`` string.

    The string is split on the first ``#``; both halves must be non-empty
    once surrounding whitespace is removed.

    Args:
        raw: Raw user input
        field: Field name reported in the error context

    Returns:
        Parsed RiotId

    Raises:
        ValidationError: If the input is missing or malformed
    """
    if is_empty_or_none(raw) or not isinstance(raw, str):
        raise ValidationError(INVALID_PLAYER_FORMAT, field=field, value=raw)

    game_name, separator, tag_line = raw.strip().partition("#")
    game_name = game_name.strip()
    tag_line = tag_line.strip()

    if not separator or not game_name or not tag_line:
        logger.debug("Rejected malformed Riot ID", field=field, value=raw)
        raise ValidationError(INVALID_PLAYER_FORMAT, field=field, value=raw)

    return RiotId(game_name, tag_line)
