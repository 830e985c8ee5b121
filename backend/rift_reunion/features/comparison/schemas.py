"""Pydantic schemas for the player comparison feature."""

from dataclasses import dataclass
from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from rift_reunion.core.riot_api.constants import GameMode


@dataclass(frozen=True)
class ResolvedAccount:
    """A Riot account resolved for the duration of one comparison."""

    puuid: str
    game_name: str
    tag_line: str


class ComparisonRequest(BaseModel):
    """Body of a comparison request.

    Player identifiers are checked by the service so that a missing or
    malformed Riot ID produces the same user-facing message.
    """

    player1: Any = Field(None, description="First player as Name#TAG")
    player2: Any = Field(None, description="Second player as Name#TAG")
    region: Optional[str] = Field(
        None, description="Platform code such as euw1 (defaults to configuration)"
    )
    mode: GameMode = Field(GameMode.CLASSIC, description="classic or auto-battler")

    @field_validator("mode", mode="before")
    @classmethod
    def parse_mode(cls, v: object) -> GameMode:
        """Accept mode aliases (lol/tft) and treat null as the default."""
        if v is None or v == "":
            return GameMode.CLASSIC
        return GameMode(v)


class DisplayAccount(BaseModel):
    """Public view of a resolved account (never includes the PUUID)."""

    game_name: str = Field(..., alias="gameName")
    tag_line: str = Field(..., alias="tagLine")

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_account(cls, account: ResolvedAccount) -> "DisplayAccount":
        return cls(game_name=account.game_name, tag_line=account.tag_line)


class ClassicPlayerStats(BaseModel):
    """Per-player stats for a classic match."""

    champion: Optional[str] = Field(None, description="Champion played")
    team: Optional[int] = Field(None, description="Team ID (100 or 200)")

    model_config = ConfigDict(extra="forbid")


class AutoBattlerPlayerStats(BaseModel):
    """Per-player stats for an auto-battler match."""

    placement: Optional[int] = Field(None, description="Final placement (1-8)")
    traits: str = Field("N/A", description="Top three active traits, comma separated")

    model_config = ConfigDict(extra="forbid")


PlayerStats = Union[ClassicPlayerStats, AutoBattlerPlayerStats]


class MatchPlayers(BaseModel):
    """Stats of both compared players within one match."""

    player1: PlayerStats
    player2: PlayerStats


class MatchSummary(BaseModel):
    """Compact, mode-aware summary of one shared match."""

    match_id: str = Field(..., alias="matchId")
    game_mode: str = Field("N/A", alias="gameMode", description="Display label")
    timestamp: Optional[int] = Field(
        None, description="Match start in milliseconds since epoch"
    )
    duration: str = Field("N/A", description='Formatted as "Xm Ys"')
    players: MatchPlayers

    model_config = ConfigDict(populate_by_name=True)


class ComparisonResponse(BaseModel):
    """Result of comparing two players' match histories."""

    player1: DisplayAccount
    player2: DisplayAccount
    matches: List[MatchSummary] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)


class ErrorResponse(BaseModel):
    """Error payload returned by the comparison endpoint."""

    error: str
