"""Pydantic models for Riot API response data.

Match payloads differ per game mode and are not guaranteed to be complete, so
every match field is optional and a malformed field falls back to its default
without touching its siblings. Participants are kept raw on the info models
and validated one at a time, letting a single malformed entry degrade on its
own instead of invalidating the whole match.
"""

from typing import Any, List, Optional

import structlog
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    ValidatorFunctionWrapHandler,
    field_validator,
)

logger = structlog.get_logger(__name__)


class AccountDTO(BaseModel):
    """Riot Account information."""

    puuid: str
    game_name: str = Field(..., alias="gameName")
    tag_line: str = Field(..., alias="tagLine")

    model_config = ConfigDict(populate_by_name=True)


class LenientModel(BaseModel):
    """Base for match payload models: a field that fails validation gets its default."""

    @field_validator("*", mode="wrap")
    @classmethod
    def default_on_error(
        cls, value: Any, handler: ValidatorFunctionWrapHandler, info: ValidationInfo
    ) -> Any:
        try:
            return handler(value)
        except ValidationError as e:
            logger.debug(
                "Malformed match field",
                model=cls.__name__,
                field=info.field_name,
                errors=e.error_count(),
            )
            return cls.model_fields[info.field_name].get_default(
                call_default_factory=True
            )


# Classic (League of Legends) match-v5


class ClassicParticipantDTO(LenientModel):
    """The participant fields the comparison reads from a classic match."""

    puuid: Optional[str] = None
    champion_name: Optional[str] = Field(None, alias="championName")
    team_id: Optional[int] = Field(None, alias="teamId")

    model_config = ConfigDict(populate_by_name=True)


class ClassicMatchInfoDTO(LenientModel):
    """Classic match information."""

    game_mode: Optional[str] = Field(None, alias="gameMode")
    game_creation: Optional[int] = Field(None, alias="gameCreation")
    game_start_timestamp: Optional[int] = Field(None, alias="gameStartTimestamp")
    game_end_timestamp: Optional[int] = Field(None, alias="gameEndTimestamp")
    # Seconds (a few old records report milliseconds)
    game_duration: Optional[float] = Field(None, alias="gameDuration")
    queue_id: Optional[int] = Field(None, alias="queueId")
    participants: List[Any] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)


class ClassicMatchDTO(LenientModel):
    """Complete classic match data."""

    info: ClassicMatchInfoDTO = Field(default_factory=ClassicMatchInfoDTO)

    model_config = ConfigDict(populate_by_name=True)


# Auto-battler (Teamfight Tactics) match-v1


class TraitDTO(LenientModel):
    """A trait as reported for an auto-battler participant."""

    name: Optional[str] = None
    num_units: int = 0
    style: int = 0
    tier_current: int = 0
    tier_total: int = 0


class AutoBattlerParticipantDTO(LenientModel):
    """The participant fields the comparison reads from an auto-battler match."""

    puuid: Optional[str] = None
    placement: Optional[int] = None
    level: Optional[int] = None
    traits: List[Any] = Field(default_factory=list)


class AutoBattlerMatchInfoDTO(LenientModel):
    """Auto-battler match information."""

    # Epoch milliseconds
    game_datetime: Optional[int] = None
    # Seconds, fractional
    game_length: Optional[float] = None
    queue_id: Optional[int] = None
    tft_game_type: Optional[str] = None
    tft_set_number: Optional[int] = None
    participants: List[Any] = Field(default_factory=list)


class AutoBattlerMatchDTO(LenientModel):
    """Complete auto-battler match data."""

    info: AutoBattlerMatchInfoDTO = Field(default_factory=AutoBattlerMatchInfoDTO)
