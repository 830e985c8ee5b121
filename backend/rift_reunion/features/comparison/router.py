"""Comparison endpoint: shared matches between two players."""

from typing import Union

import structlog
from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from rift_reunion.core.config import get_global_settings
from rift_reunion.core.exceptions import ConfigurationError, ValidationError
from rift_reunion.core.rate_limiter import limiter

from .dependencies import ComparisonServiceFactoryDep, SettingsDep
from .schemas import ComparisonRequest, ComparisonResponse, ErrorResponse

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["comparison"])

GENERIC_ERROR = "An error occurred"


def _compare_rate_limit() -> str:
    return get_global_settings().compare_rate_limit


def error_response(status_code: int, message: str) -> JSONResponse:
    """Build the ``{"error": message}`` payload used by this endpoint."""
    return JSONResponse(status_code=status_code, content={"error": message})


@router.post(
    "/compare",
    response_model=ComparisonResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Malformed player identifier"},
        500: {"model": ErrorResponse, "description": "Configuration or Riot API failure"},
    },
)
@limiter.limit(_compare_rate_limit)
async def compare_players(
    request: Request,
    body: ComparisonRequest,
    settings: SettingsDep,
    service_factory: ComparisonServiceFactoryDep,
) -> Union[ComparisonResponse, JSONResponse]:
    """Find the matches two players both played in."""
    region = body.region or settings.default_region

    try:
        async with service_factory() as service:
            return await service.compare(body.player1, body.player2, region, body.mode)
    except ValidationError as e:
        logger.info("Rejected comparison request", field=e.field)
        return error_response(status.HTTP_400_BAD_REQUEST, e.message)
    except ConfigurationError as e:
        logger.error("Comparison unavailable", setting=e.setting, error=e.message)
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, e.message)
    except Exception as e:
        logger.error(
            "Comparison failed",
            region=region,
            mode=body.mode.value,
            error=str(e),
            error_type=type(e).__name__,
        )
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, str(e) or GENERIC_ERROR
        )
