"""Riot API constants, enum definitions and regional routing."""

from enum import Enum
from typing import Dict, Optional

import structlog

logger = structlog.get_logger(__name__)


class Region(str, Enum):
    """Riot API regional routing clusters."""

    AMERICAS = "americas"
    ASIA = "asia"
    EUROPE = "europe"
    SEA = "sea"

    @property
    def account_cluster(self) -> "Region":
        """Cluster serving account-v1, which has no SEA deployment."""
        return Region.ASIA if self is Region.SEA else self


class Platform(str, Enum):
    """Riot API platforms (the region codes players pick)."""

    BR1 = "br1"
    EUN1 = "eun1"
    EUW1 = "euw1"
    JP1 = "jp1"
    KR = "kr"
    LA1 = "la1"
    LA2 = "la2"
    ME1 = "me1"
    NA1 = "na1"
    OC1 = "oc1"
    PH2 = "ph2"
    RU = "ru"
    SG2 = "sg2"
    TH2 = "th2"
    TR1 = "tr1"
    TW2 = "tw2"
    VN2 = "vn2"


class GameMode(str, Enum):
    """Game modes whose match histories can be compared."""

    CLASSIC = "classic"
    AUTO_BATTLER = "auto-battler"

    @classmethod
    def _missing_(cls, value: object) -> Optional["GameMode"]:
        """Accept the short game names used in shared links (``lol``/``tft``)."""
        if isinstance(value, str):
            normalized = value.strip().lower()
            alias = MODE_ALIASES.get(normalized)
            if alias:
                return cls(alias)
            for member in cls:
                if member.value == normalized:
                    return member
        return None


MODE_ALIASES: Dict[str, str] = {
    "lol": "classic",
    "league": "classic",
    "tft": "auto-battler",
    "autobattler": "auto-battler",
    "auto_battler": "auto-battler",
}

PLATFORM_TO_REGION: Dict[Platform, Region] = {
    Platform.NA1: Region.AMERICAS,
    Platform.BR1: Region.AMERICAS,
    Platform.LA1: Region.AMERICAS,
    Platform.LA2: Region.AMERICAS,
    Platform.EUW1: Region.EUROPE,
    Platform.EUN1: Region.EUROPE,
    Platform.TR1: Region.EUROPE,
    Platform.RU: Region.EUROPE,
    Platform.ME1: Region.EUROPE,
    Platform.KR: Region.ASIA,
    Platform.JP1: Region.ASIA,
    Platform.OC1: Region.SEA,
    Platform.PH2: Region.SEA,
    Platform.SG2: Region.SEA,
    Platform.TH2: Region.SEA,
    Platform.TW2: Region.SEA,
    Platform.VN2: Region.SEA,
}

DEFAULT_REGION = Region.AMERICAS

# Human readable platform names, in the order the search form lists them
PLATFORM_LABELS: Dict[Platform, str] = {
    Platform.NA1: "North America",
    Platform.EUW1: "Europe West",
    Platform.EUN1: "Europe Nordic & East",
    Platform.KR: "Korea",
    Platform.BR1: "Brazil",
    Platform.LA1: "Latin America North",
    Platform.LA2: "Latin America South",
    Platform.OC1: "Oceania",
    Platform.TR1: "Turkey",
    Platform.RU: "Russia",
    Platform.JP1: "Japan",
}


def route(platform: Optional[str]) -> Region:
    """
    Map a platform code to its regional routing cluster.

    Unknown codes fall back to ``DEFAULT_REGION`` instead of failing.

    Args:
        platform: Platform code such as ``"euw1"`` (case-insensitive)

    Returns:
        Regional routing cluster
    """
    try:
        return PLATFORM_TO_REGION[Platform((platform or "").strip().lower())]
    except ValueError:
        logger.debug(
            "Unknown platform, using default routing cluster",
            platform=platform,
            region=DEFAULT_REGION.value,
        )
        return DEFAULT_REGION
