"""Player comparison feature: shared matches between two Riot accounts."""

from .router import router as comparison_router
from .service import ComparisonService

__all__ = ["comparison_router", "ComparisonService"]
