"""HTML rendering for the search page."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from html import escape
from typing import Optional
from urllib.parse import urlencode

from rift_reunion.core.riot_api.constants import PLATFORM_LABELS, GameMode
from rift_reunion.features.comparison.schemas import (
    AutoBattlerPlayerStats,
    ComparisonResponse,
    MatchSummary,
    PlayerStats,
)

MODE_LABELS = {
    GameMode.CLASSIC: "League of Legends",
    GameMode.AUTO_BATTLER: "Teamfight Tactics",
}


@dataclass
class SearchForm:
    """Current state of the search form, mirrored in the query string."""

    player1: str = ""
    player2: str = ""
    region: str = "euw1"
    mode: GameMode = GameMode.CLASSIC

    def query(self, **overrides: str) -> str:
        params = {
            "player1": self.player1,
            "player2": self.player2,
            "region": self.region,
            "mode": self.mode.value,
        }
        params.update(overrides)
        return urlencode({k: v for k, v in params.items() if v})


def _format_timestamp(timestamp: Optional[int]) -> str:
    if timestamp is None:
        return "Unknown time"
    started = datetime.fromtimestamp(timestamp / 1000, tz=timezone.utc)
    return started.strftime("%Y-%m-%d %H:%M UTC")


def _render_player_line(name: str, stats: PlayerStats) -> str:
    if isinstance(stats, AutoBattlerPlayerStats):
        placement = f"#{stats.placement}" if stats.placement is not None else "#?"
        detail = f"{placement} - {stats.traits}"
    else:
        detail = stats.champion or "N/A"
    return f"<p class=\"player\"><strong>{escape(name)}</strong>: {escape(detail)}</p>"


def _render_match(match: MatchSummary, result: ComparisonResponse) -> str:
    return f"""
    <div class="match">
        <div class="match-header">
            <div>
                <p class="match-mode">{escape(match.game_mode)}</p>
                <p class="muted">{escape(_format_timestamp(match.timestamp))}</p>
            </div>
            <span class="badge">{escape(match.duration)}</span>
        </div>
        {_render_player_line(result.player1.game_name, match.players.player1)}
        {_render_player_line(result.player2.game_name, match.players.player2)}
    </div>
    """


def _render_results(result: ComparisonResponse) -> str:
    if not result.matches:
        return (
            '<div class="card"><h2>Results</h2>'
            '<p class="alert alert-info">No shared matches found between these players</p>'
            "</div>"
        )
    matches_html = "".join(_render_match(match, result) for match in result.matches)
    return f"""
    <div class="card">
        <h2>Results</h2>
        <p class="stat">Shared Matches: <strong>{len(result.matches)}</strong></p>
        <h3>Match History</h3>
        {matches_html}
    </div>
    """


def _render_mode_toggle(form: SearchForm) -> str:
    links = []
    for mode, label in MODE_LABELS.items():
        css = "btn btn-primary" if mode is form.mode else "btn"
        href = "/?" + form.query(mode=mode.value)
        links.append(f'<a class="{css}" href="{escape(href)}">{escape(label)}</a>')
    return f'<div class="mode-toggle">{"".join(links)}</div>'


def _render_region_options(selected: str) -> str:
    options = []
    for platform, label in PLATFORM_LABELS.items():
        attr = " selected" if platform.value == selected else ""
        options.append(
            f'<option value="{escape(platform.value)}"{attr}>{escape(label)}</option>'
        )
    return "".join(options)


def render_search_page(
    form: SearchForm,
    result: Optional[ComparisonResponse] = None,
    error: Optional[str] = None,
) -> str:
    """Render the full search page.

    :param form: Values to pre-fill the form with
    :param result: Comparison result to list, if a search ran
    :param error: Message shown above the submit button
    :returns: HTML document
    """
    error_html = f'<p class="alert alert-error">{escape(error)}</p>' if error else ""
    results_html = _render_results(result) if result is not None else ""

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="utf-8" />
    <title>Rift Reunion</title>
    <style>
        body {{ font-family: sans-serif; background: #f2f2f2; margin: 0; }}
        main {{ max-width: 42rem; margin: 0 auto; padding: 2rem 1rem; }}
        .card, .match {{ background: #fff; border-radius: 0.5rem; padding: 1rem; margin-top: 1.5rem; }}
        .match {{ background: #f7f7f7; margin-top: 1rem; }}
        .match-header {{ display: flex; justify-content: space-between; align-items: center; }}
        .muted {{ opacity: 0.7; font-size: 0.875rem; }}
        .btn {{ padding: 0.5rem 1rem; border: 1px solid #888; border-radius: 0.375rem; text-decoration: none; color: inherit; }}
        .btn-primary {{ background: #4f46e5; color: #fff; border-color: #4f46e5; }}
        .alert-error {{ color: #b91c1c; }}
        .alert-info {{ color: #1d4ed8; }}
        label, input, select, button {{ display: block; width: 100%; margin-top: 0.5rem; }}
    </style>
</head>
<body>
<main>
    <h1>Rift Reunion</h1>
    <p>Discover if two League of Legends and Teamfight Tactics players have shared the battlefield together</p>
    {_render_mode_toggle(form)}
    <div class="card">
        <form id="search-form" method="get" action="/">
            <input type="hidden" name="mode" value="{escape(form.mode.value)}" />
            <input type="hidden" name="search" value="1" />
            <label for="region">Region</label>
            <select id="region" name="region">{_render_region_options(form.region)}</select>
            <label for="player1">Player 1</label>
            <input id="player1" name="player1" type="text" placeholder="Summoner Name#TAG" value="{escape(form.player1)}" />
            <label for="player2">Player 2</label>
            <input id="player2" name="player2" type="text" placeholder="Summoner Name#TAG" value="{escape(form.player2)}" />
            {error_html}
            <button id="search-button" class="btn btn-primary" type="submit">Search Matches</button>
        </form>
    </div>
    {results_html}
</main>
<script>
    document.getElementById("search-form").addEventListener("submit", function () {{
        var button = document.getElementById("search-button");
        button.disabled = true;
        button.textContent = "Searching...";
    }});
</script>
</body>
</html>
"""
