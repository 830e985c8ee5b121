"""Riot API endpoint definitions for both supported game modes."""

from typing import Dict
from urllib.parse import quote

from .constants import GameMode, Region

# Path prefix of the match service for each game mode
MATCH_API_PATHS: Dict[GameMode, str] = {
    GameMode.CLASSIC: "/lol/match/v5/matches",
    GameMode.AUTO_BATTLER: "/tft/match/v1/matches",
}


class RiotAPIEndpoints:
    """Riot API endpoint definitions and routing."""

    def __init__(self, base_url_template: str = "https://{region}.api.riotgames.com"):
        """
        Initialize endpoint configuration.

        Args:
            base_url_template: Base URL with a ``{region}`` placeholder
        """
        self.base_url_template = base_url_template

    def get_base_url(self, region: Region) -> str:
        """Get base URL for regional endpoints."""
        region_str = region.value if isinstance(region, Region) else region
        return self.base_url_template.format(region=region_str)

    # Account endpoints (Regional)
    def account_by_riot_id(self, game_name: str, tag_line: str, region: Region) -> str:
        """Get account by Riot ID endpoint."""
        base_url = self.get_base_url(Region(region).account_cluster)
        return (
            f"{base_url}/riot/account/v1/accounts/by-riot-id/"
            f"{quote(game_name, safe='')}/{quote(tag_line, safe='')}"
        )

    # Match endpoints (Regional)
    def match_ids_by_puuid(self, puuid: str, mode: GameMode, region: Region) -> str:
        """Get match id list by PUUID endpoint (paging goes in query params)."""
        base_url = self.get_base_url(region)
        return f"{base_url}{MATCH_API_PATHS[mode]}/by-puuid/{quote(puuid, safe='')}/ids"

    def match_by_id(self, match_id: str, mode: GameMode, region: Region) -> str:
        """Get match by ID endpoint."""
        base_url = self.get_base_url(region)
        return f"{base_url}{MATCH_API_PATHS[mode]}/{quote(match_id, safe='')}"
