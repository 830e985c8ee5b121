"""Mode-aware projection of raw match payloads into MatchSummary records.

Each game mode has a projection strategy that knows which fields hold the
label, start time, duration and per-player stats. Every read tolerates missing
or malformed data: a broken field becomes ``None``/``"N/A"`` and a broken
participant entry is treated as absent, so one bad match never aborts a
comparison.
"""

import re
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

import structlog
from pydantic import BaseModel, ValidationError

from rift_reunion.core.riot_api.constants import GameMode
from rift_reunion.core.riot_api.models import (
    AutoBattlerMatchDTO,
    AutoBattlerParticipantDTO,
    ClassicMatchDTO,
    ClassicParticipantDTO,
    TraitDTO,
)

from .schemas import (
    AutoBattlerPlayerStats,
    ClassicPlayerStats,
    MatchPlayers,
    MatchSummary,
    PlayerStats,
    ResolvedAccount,
)

logger = structlog.get_logger(__name__)

NOT_AVAILABLE = "N/A"

# Values below this are epoch seconds rather than milliseconds (year ~5138 in s)
_MILLIS_THRESHOLD = 10**11

_MAX_GAME_SECONDS = 86400

_TRAIT_SET_PREFIX = re.compile(r"^TFT\d+_", re.IGNORECASE)

AUTO_BATTLER_QUEUE_LABELS: Dict[int, str] = {
    1090: "Normal",
    1100: "Ranked",
    1130: "Hyper Roll",
    1160: "Double Up",
}

ModelT = TypeVar("ModelT", bound=BaseModel)


def format_duration(seconds: Optional[float]) -> str:
    """Format a duration in seconds as ``"Xm Ys"``."""
    if seconds is None or seconds < 0:
        return NOT_AVAILABLE
    total = int(seconds)
    return f"{total // 60}m {total % 60}s"


def normalize_timestamp(value: Optional[int]) -> Optional[int]:
    """Return an epoch timestamp in milliseconds, converting seconds if needed."""
    if value is None or value <= 0:
        return None
    if value < _MILLIS_THRESHOLD:
        return value * 1000
    return value


def safe_validate(
    model: Type[ModelT], data: Any, context: str, match_id: str
) -> Optional[ModelT]:
    """Validate ``data`` into ``model``, logging and returning None on failure."""
    if not isinstance(data, dict):
        logger.warning(
            "Malformed match data",
            context=context,
            match_id=match_id,
            got_type=type(data).__name__,
        )
        return None
    try:
        return model.model_validate(data)
    except ValidationError as e:
        logger.warning(
            "Malformed match data",
            context=context,
            match_id=match_id,
            errors=e.error_count(),
        )
        return None


def trait_display_name(raw_name: str) -> str:
    """Strip the set prefix from a trait id (``TFT13_Ambusher`` -> ``Ambusher``)."""
    return _TRAIT_SET_PREFIX.sub("", raw_name)


def top_traits(raw_traits: List[Any], match_id: str, limit: int = 3) -> str:
    """Join the names of the strongest active traits, or ``"N/A"``."""
    traits: List[TraitDTO] = []
    for raw in raw_traits:
        trait = safe_validate(TraitDTO, raw, "trait", match_id)
        if trait and trait.name and trait.tier_current > 0:
            traits.append(trait)

    if not traits:
        return NOT_AVAILABLE

    traits.sort(key=lambda t: (t.style, t.tier_current, t.num_units), reverse=True)
    return ", ".join(trait_display_name(t.name) for t in traits[:limit] if t.name)


MatchT = TypeVar("MatchT", bound=BaseModel)
ParticipantT = TypeVar("ParticipantT", bound=BaseModel)


class MatchProjection(Generic[MatchT, ParticipantT]):
    """Shared projection flow; subclasses supply the mode-specific extractors."""

    match_model: Type[MatchT]
    participant_model: Type[ParticipantT]

    def project(
        self,
        match_id: str,
        raw: Any,
        player1: ResolvedAccount,
        player2: ResolvedAccount,
    ) -> MatchSummary:
        match = safe_validate(self.match_model, raw, "match", match_id)
        if match is None:
            match = self.match_model()

        participants = self._participants_by_puuid(match, match_id)

        return MatchSummary(
            match_id=match_id,
            game_mode=self.label(match) or NOT_AVAILABLE,
            timestamp=normalize_timestamp(self.start_time(match)),
            duration=format_duration(self.duration_seconds(match)),
            players=MatchPlayers(
                player1=self._player_stats(participants, player1, match_id),
                player2=self._player_stats(participants, player2, match_id),
            ),
        )

    def _participants_by_puuid(
        self, match: MatchT, match_id: str
    ) -> Dict[str, ParticipantT]:
        participants: Dict[str, ParticipantT] = {}
        for raw in match.info.participants:  # type: ignore[attr-defined]
            participant = safe_validate(
                self.participant_model, raw, "participant", match_id
            )
            puuid = getattr(participant, "puuid", None)
            if participant is not None and puuid:
                participants.setdefault(puuid, participant)
        return participants

    def _player_stats(
        self,
        participants: Dict[str, ParticipantT],
        account: ResolvedAccount,
        match_id: str,
    ) -> PlayerStats:
        participant = participants.get(account.puuid)
        if participant is None:
            logger.warning(
                "Player missing from match participants",
                match_id=match_id,
                game_name=account.game_name,
            )
            return self.empty_stats()
        return self.stats(participant, match_id)

    def label(self, match: MatchT) -> Optional[str]:
        raise NotImplementedError

    def start_time(self, match: MatchT) -> Optional[int]:
        raise NotImplementedError

    def duration_seconds(self, match: MatchT) -> Optional[float]:
        raise NotImplementedError

    def stats(self, participant: ParticipantT, match_id: str) -> PlayerStats:
        raise NotImplementedError

    def empty_stats(self) -> PlayerStats:
        raise NotImplementedError


class ClassicProjection(MatchProjection[ClassicMatchDTO, ClassicParticipantDTO]):
    """League of Legends match-v5 payloads."""

    match_model = ClassicMatchDTO
    participant_model = ClassicParticipantDTO

    def label(self, match: ClassicMatchDTO) -> Optional[str]:
        return match.info.game_mode

    def start_time(self, match: ClassicMatchDTO) -> Optional[int]:
        return match.info.game_start_timestamp or match.info.game_creation

    def duration_seconds(self, match: ClassicMatchDTO) -> Optional[float]:
        duration = match.info.game_duration
        if duration is None:
            return None
        # No game lasts a day, so this is a millisecond value
        if duration > _MAX_GAME_SECONDS:
            return duration / 1000
        return duration

    def stats(
        self, participant: ClassicParticipantDTO, match_id: str
    ) -> ClassicPlayerStats:
        return ClassicPlayerStats(
            champion=participant.champion_name, team=participant.team_id
        )

    def empty_stats(self) -> ClassicPlayerStats:
        return ClassicPlayerStats()


class AutoBattlerProjection(
    MatchProjection[AutoBattlerMatchDTO, AutoBattlerParticipantDTO]
):
    """Teamfight Tactics match-v1 payloads."""

    match_model = AutoBattlerMatchDTO
    participant_model = AutoBattlerParticipantDTO

    def label(self, match: AutoBattlerMatchDTO) -> Optional[str]:
        queue = AUTO_BATTLER_QUEUE_LABELS.get(match.info.queue_id or -1)
        if queue:
            return f"TFT {queue}"
        if match.info.tft_set_number:
            return f"TFT Set {match.info.tft_set_number}"
        return "TFT"

    def start_time(self, match: AutoBattlerMatchDTO) -> Optional[int]:
        return match.info.game_datetime

    def duration_seconds(self, match: AutoBattlerMatchDTO) -> Optional[float]:
        return match.info.game_length

    def stats(
        self, participant: AutoBattlerParticipantDTO, match_id: str
    ) -> AutoBattlerPlayerStats:
        return AutoBattlerPlayerStats(
            placement=participant.placement,
            traits=top_traits(participant.traits, match_id),
        )

    def empty_stats(self) -> AutoBattlerPlayerStats:
        return AutoBattlerPlayerStats()


PROJECTIONS: Dict[GameMode, MatchProjection] = {
    GameMode.CLASSIC: ClassicProjection(),
    GameMode.AUTO_BATTLER: AutoBattlerProjection(),
}


def project_match(
    match_id: str,
    raw: Any,
    mode: GameMode,
    player1: ResolvedAccount,
    player2: ResolvedAccount,
) -> MatchSummary:
    """Project a raw match payload into a MatchSummary for the given mode.

    :param match_id: ID the match was requested by (always used as matchId)
    :param raw: Raw match payload from the Riot API
    :param mode: Game mode the payload belongs to
    :param player1: First compared account
    :param player2: Second compared account
    :returns: MatchSummary with placeholders for anything missing
    """
    return PROJECTIONS[mode].project(match_id, raw, player1, player2)
