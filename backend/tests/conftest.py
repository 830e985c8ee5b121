"""Shared fixtures: sample Riot payloads and resolved accounts."""

from typing import Any, Dict, List, Optional

import pytest

from rift_reunion.core.rate_limiter import limiter
from rift_reunion.features.comparison.schemas import ResolvedAccount


@pytest.fixture(autouse=True)
def disable_inbound_rate_limit():
    """Keep the per-client limiter from leaking state between tests."""
    limiter.enabled = False
    yield
    limiter.enabled = True


@pytest.fixture
def account1() -> ResolvedAccount:
    return ResolvedAccount(puuid="puuid-1", game_name="Faker", tag_line="KR1")


@pytest.fixture
def account2() -> ResolvedAccount:
    return ResolvedAccount(puuid="puuid-2", game_name="Keria", tag_line="KR2")


def classic_participant(puuid: str, champion: str, team_id: int) -> Dict[str, Any]:
    return {
        "puuid": puuid,
        "championName": champion,
        "teamId": team_id,
        "kills": 5,
        "deaths": 2,
        "assists": 7,
        "win": team_id == 100,
    }


def classic_match(
    match_id: str, participants: Optional[List[Dict[str, Any]]] = None
) -> Dict[str, Any]:
    """A trimmed match-v5 payload."""
    if participants is None:
        participants = [
            classic_participant("puuid-1", "Ahri", 100),
            classic_participant("puuid-2", "Thresh", 100),
            classic_participant("puuid-3", "Zed", 200),
        ]
    return {
        "metadata": {
            "matchId": match_id,
            "participants": [p["puuid"] for p in participants],
        },
        "info": {
            "gameCreation": 1709999990000,
            "gameStartTimestamp": 1710000000000,
            "gameEndTimestamp": 1710001845000,
            "gameDuration": 1845,
            "gameMode": "CLASSIC",
            "queueId": 420,
            "participants": participants,
        },
    }


def auto_battler_participant(
    puuid: str, placement: int, traits: Optional[List[Dict[str, Any]]] = None
) -> Dict[str, Any]:
    if traits is None:
        traits = [
            {"name": "TFT13_Ambusher", "num_units": 4, "style": 2, "tier_current": 2, "tier_total": 3},
            {"name": "TFT13_Sorcerer", "num_units": 6, "style": 3, "tier_current": 3, "tier_total": 4},
            {"name": "TFT13_Bruiser", "num_units": 2, "style": 1, "tier_current": 1, "tier_total": 3},
            {"name": "TFT13_Sentinel", "num_units": 1, "style": 0, "tier_current": 0, "tier_total": 3},
            {"name": "TFT13_Scrap", "num_units": 3, "style": 1, "tier_current": 1, "tier_total": 4},
        ]
    return {"puuid": puuid, "placement": placement, "level": 8, "traits": traits}


def auto_battler_match(
    match_id: str, participants: Optional[List[Dict[str, Any]]] = None
) -> Dict[str, Any]:
    """A trimmed tft match-v1 payload."""
    if participants is None:
        participants = [
            auto_battler_participant("puuid-1", 1),
            auto_battler_participant("puuid-2", 4),
        ]
    return {
        "metadata": {
            "match_id": match_id,
            "participants": [p["puuid"] for p in participants],
        },
        "info": {
            "game_datetime": 1710000000123,
            "game_length": 2105.37,
            "queue_id": 1100,
            "tft_game_type": "standard",
            "tft_set_number": 13,
            "participants": participants,
        },
    }


@pytest.fixture
def make_classic_match():
    return classic_match


@pytest.fixture
def make_classic_participant():
    return classic_participant


@pytest.fixture
def make_auto_battler_match():
    return auto_battler_match


@pytest.fixture
def make_auto_battler_participant():
    return auto_battler_participant
