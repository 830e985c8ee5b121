"""Main FastAPI application for Rift Reunion."""

from contextlib import asynccontextmanager
from typing import Any, Dict

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from rift_reunion import __version__
from rift_reunion.core import get_global_settings
from rift_reunion.core.logging import setup_logging
from rift_reunion.core.rate_limiter import limiter
from rift_reunion.features.comparison import comparison_router
from rift_reunion.features.search import search_router

settings = get_global_settings()
setup_logging(settings.log_level)
logger = structlog.get_logger(__name__)


def _validate_api_key_configuration() -> None:
    """Log Riot API key configuration status."""
    if not settings.has_riot_api_key:
        logger.warning(
            "RIOT_API_KEY not configured! Comparisons will fail until it is set.",
            hint="Get your key from https://developer.riotgames.com",
        )
    elif settings.riot_api_key.startswith("RGAPI-"):
        logger.info("Riot API key configured (development key detected)")
        logger.warning("Development API keys expire every 24 hours!")
    else:
        logger.info("Riot API key configured")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info("Starting up Rift Reunion application")
    _validate_api_key_configuration()
    yield
    logger.info("Shutting down Rift Reunion application")


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed request bodies as ``{"error": ...}`` with status 400."""
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"Invalid request: {location} {first.get('msg', '')}".strip()
    else:
        message = "Invalid request"
    logger.info("Rejected malformed request", path=request.url.path, error=message)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST, content={"error": message}
    )


tags_metadata = [
    {
        "name": "comparison",
        "description": "Find the matches two players both played in.",
    },
    {
        "name": "search",
        "description": "Server-rendered search page.",
    },
    {
        "name": "health",
        "description": "Health check and system status endpoints.",
    },
]

# Create FastAPI application
app = FastAPI(
    title="Rift Reunion",
    description="""
    Compare two players' League of Legends or Teamfight Tactics match histories
    and list the matches they played together.

    ## Rate Limiting

    Comparisons are rate limited per client to protect the shared Riot API key.
    """,
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    openapi_tags=tags_metadata,
    lifespan=lifespan,
    debug=settings.debug,
)

# Configure rate limiter for FastAPI app
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)  # type: ignore[arg-type]
app.add_exception_handler(RequestValidationError, request_validation_error_handler)  # type: ignore[arg-type]

# Configure CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(comparison_router, prefix="/api/v1")
app.include_router(comparison_router, prefix="/api")
app.include_router(search_router)


@app.get("/health", tags=["health"])
async def health_check() -> Dict[str, Any]:
    """
    Health check endpoint.

    Returns the health status of the application including whether a Riot API
    key is configured. Used by monitoring tools and load balancers.
    """
    return {
        "status": "healthy",
        "message": "Application is running",
        "version": __version__,
        "debug": settings.debug,
        "riot_api_key_configured": settings.has_riot_api_key,
    }
