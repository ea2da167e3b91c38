"""API routers package."""

from stockfolio.api.routers.portfolios import router as portfolios_router
from stockfolio.api.routers.analysis import router as analysis_router

__all__ = [
    "portfolios_router",
    "analysis_router",
]
