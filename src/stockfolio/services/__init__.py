"""Service layer - business logic orchestration."""

from stockfolio.services.price_lookup_service import PriceLookupService
from stockfolio.services.portfolio_service import PortfolioService
from stockfolio.services.indicator_service import IndicatorService
from stockfolio.services.performance_service import PerformanceService

__all__ = [
    "PriceLookupService",
    "PortfolioService",
    "IndicatorService",
    "PerformanceService",
]
