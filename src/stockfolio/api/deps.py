"""Dependency injection for FastAPI."""

from fastapi import Depends

from stockfolio.app_context import AppContext, get_app_context
from stockfolio.csv import PortfolioCsvExporter, PortfolioCsvImporter
from stockfolio.services import (
    IndicatorService,
    PerformanceService,
    PortfolioService,
    PriceLookupService,
)


def get_context() -> AppContext:
    """Provide the process-wide AppContext."""
    return get_app_context()


def get_price_lookup(ctx: AppContext = Depends(get_context)) -> PriceLookupService:
    """Provide PriceLookupService instance."""
    return ctx.prices


def get_portfolio_service(ctx: AppContext = Depends(get_context)) -> PortfolioService:
    """Provide PortfolioService instance."""
    return ctx.portfolios


def get_indicator_service(ctx: AppContext = Depends(get_context)) -> IndicatorService:
    """Provide IndicatorService instance."""
    return ctx.indicators


def get_performance_service(ctx: AppContext = Depends(get_context)) -> PerformanceService:
    """Provide PerformanceService instance."""
    return ctx.performance


def get_csv_importer(ctx: AppContext = Depends(get_context)) -> PortfolioCsvImporter:
    """Provide PortfolioCsvImporter instance."""
    return ctx.csv_importer


def get_csv_exporter(ctx: AppContext = Depends(get_context)) -> PortfolioCsvExporter:
    """Provide PortfolioCsvExporter instance."""
    return ctx.csv_exporter
