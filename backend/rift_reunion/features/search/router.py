"""Search page: form for two Riot IDs plus the shared matches they found."""

from typing import Optional

import structlog
from fastapi import APIRouter, Query
from fastapi.responses import HTMLResponse

from rift_reunion.core.exceptions import ValidationError
from rift_reunion.core.riot_api.constants import GameMode
from rift_reunion.features.comparison.dependencies import (
    ComparisonServiceFactoryDep,
    SettingsDep,
)
from rift_reunion.features.comparison.schemas import ComparisonResponse

from .pages import SearchForm, render_search_page

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["search"])

MISSING_PLAYERS_MESSAGE = "Please enter both player names"
RETRY_MESSAGE = "An error occurred. Please try again."


def _parse_mode(raw: Optional[str]) -> GameMode:
    try:
        return GameMode(raw) if raw else GameMode.CLASSIC
    except ValueError:
        return GameMode.CLASSIC


@router.get("/", response_class=HTMLResponse)
async def search_page(
    settings: SettingsDep,
    service_factory: ComparisonServiceFactoryDep,
    player1: str = Query(""),
    player2: str = Query(""),
    region: Optional[str] = Query(None),
    mode: Optional[str] = Query(None),
    search: bool = Query(False, description="Run the comparison for the form values"),
) -> HTMLResponse:
    """Render the search form, running the comparison when it was submitted."""
    form = SearchForm(
        player1=player1.strip(),
        player2=player2.strip(),
        region=(region or settings.default_region).strip().lower(),
        mode=_parse_mode(mode),
    )

    if not search:
        return HTMLResponse(render_search_page(form))

    if not form.player1 or not form.player2:
        return HTMLResponse(render_search_page(form, error=MISSING_PLAYERS_MESSAGE))

    result: Optional[ComparisonResponse] = None
    error: Optional[str] = None
    try:
        async with service_factory() as service:
            result = await service.compare(
                form.player1, form.player2, form.region, form.mode
            )
    except ValidationError as e:
        error = e.message
    except Exception as e:
        logger.error(
            "Search failed",
            region=form.region,
            mode=form.mode.value,
            error=str(e),
            error_type=type(e).__name__,
        )
        error = RETRY_MESSAGE

    return HTMLResponse(render_search_page(form, result=result, error=error))
