"""Application context for in-process service management.

Wires the price cache, price source, portfolio registry and services
from settings. Used by the FastAPI lifespan and dependencies, and by
any caller that wants the services without going through HTTP.
"""

import logging
from datetime import date
from typing import Callable, Optional

from stockfolio.config.settings import Settings, get_settings
from stockfolio.controller import PortfolioController
from stockfolio.core.exceptions import ValidationError
from stockfolio.core.timezone import today_eastern
from stockfolio.csv import PortfolioCsvExporter, PortfolioCsvImporter
from stockfolio.providers import (
    AlphaVantagePriceSource,
    PriceSource,
    StubPriceSource,
    YFinancePriceSource,
)
from stockfolio.repositories import InMemoryPortfolioRepository, PriceCache
from stockfolio.services import (
    IndicatorService,
    PerformanceService,
    PortfolioService,
    PriceLookupService,
)

logger = logging.getLogger(__name__)


def build_price_source(settings: Settings) -> PriceSource:
    """Create the price source named by settings.price_source."""
    name = settings.price_source.strip().lower()
    if name == "stub":
        return StubPriceSource()
    if name == "alphavantage":
        if not settings.alpha_vantage_api_key:
            raise ValidationError("alpha_vantage_api_key is required for the alphavantage source")
        return AlphaVantagePriceSource(
            api_key=settings.alpha_vantage_api_key,
            base_url=settings.alpha_vantage_base_url,
            timeout_seconds=settings.request_timeout_seconds,
        )
    if name == "yfinance":
        return YFinancePriceSource()
    raise ValidationError(f"Unknown price source: {settings.price_source}")


class AppContext:
    """
    Application context providing in-process access to all services.

    Services are created lazily and share one price cache and one
    portfolio registry for the lifetime of the context.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        price_source: Optional[PriceSource] = None,
        clock: Callable[[], date] = today_eastern,
    ):
        self._settings = settings
        self._price_source = price_source
        self._clock = clock

        self._price_cache: Optional[PriceCache] = None
        self._portfolio_repo: Optional[InMemoryPortfolioRepository] = None
        self._price_lookup: Optional[PriceLookupService] = None
        self._portfolio_service: Optional[PortfolioService] = None
        self._indicator_service: Optional[IndicatorService] = None
        self._performance_service: Optional[PerformanceService] = None
        self._controller: Optional[PortfolioController] = None

    @property
    def settings(self) -> Settings:
        return self._settings or get_settings()

    # Storage

    @property
    def price_cache(self) -> PriceCache:
        if self._price_cache is None:
            self._price_cache = PriceCache(max_entries=self.settings.price_cache_max_entries)
        return self._price_cache

    @property
    def price_source(self) -> PriceSource:
        if self._price_source is None:
            self._price_source = build_price_source(self.settings)
        return self._price_source

    @property
    def portfolio_repo(self) -> InMemoryPortfolioRepository:
        if self._portfolio_repo is None:
            self._portfolio_repo = InMemoryPortfolioRepository()
        return self._portfolio_repo

    # Services

    @property
    def prices(self) -> PriceLookupService:
        """Get the PriceLookupService instance."""
        if self._price_lookup is None:
            self._price_lookup = PriceLookupService(
                cache=self.price_cache,
                source=self.price_source,
                lookback_days=self.settings.price_lookback_days,
                max_workers=self.settings.prefetch_max_workers,
            )
        return self._price_lookup

    @property
    def portfolios(self) -> PortfolioService:
        """Get the PortfolioService instance."""
        if self._portfolio_service is None:
            self._portfolio_service = PortfolioService(
                portfolio_repo=self.portfolio_repo,
                price_lookup=self.prices,
                clock=self._clock,
            )
        return self._portfolio_service

    @property
    def indicators(self) -> IndicatorService:
        """Get the IndicatorService instance."""
        if self._indicator_service is None:
            self._indicator_service = IndicatorService(price_lookup=self.prices, clock=self._clock)
        return self._indicator_service

    @property
    def performance(self) -> PerformanceService:
        """Get the PerformanceService instance."""
        if self._performance_service is None:
            self._performance_service = PerformanceService(
                portfolio_repo=self.portfolio_repo,
                price_lookup=self.prices,
                clock=self._clock,
            )
        return self._performance_service

    # CSV utilities

    @property
    def csv_importer(self) -> PortfolioCsvImporter:
        return PortfolioCsvImporter(self.portfolio_repo, self.settings.portfolio_type)

    @property
    def csv_exporter(self) -> PortfolioCsvExporter:
        return PortfolioCsvExporter(self.portfolio_repo, self.settings.portfolio_type)

    @property
    def controller(self) -> PortfolioController:
        """Get the PortfolioController instance."""
        if self._controller is None:
            self._controller = PortfolioController(
                portfolios=self.portfolios,
                indicators=self.indicators,
                performance=self.performance,
                prices=self.prices,
                importer=self.csv_importer,
                exporter=self.csv_exporter,
            )
        return self._controller

    # Lifecycle

    def startup(self) -> None:
        """Reload the persisted price cache, if one exists."""
        path = self.settings.get_price_cache_path()
        if path.exists():
            self.price_cache.load(path)
        else:
            logger.info("No price cache at %s; starting empty", path)

    def shutdown(self) -> None:
        """Persist the price cache and release the source's resources."""
        if self._price_cache is not None and len(self._price_cache):
            self._price_cache.save(self.settings.get_price_cache_path())
        close = getattr(self._price_source, "close", None)
        if callable(close):
            close()


# Global application context
_app_context: Optional[AppContext] = None


def get_app_context() -> AppContext:
    """Get or create the global application context."""
    global _app_context
    if _app_context is None:
        _app_context = AppContext()
    return _app_context


def set_app_context(context: Optional[AppContext]) -> None:
    """Set (or clear, with None) the global application context."""
    global _app_context
    _app_context = context
