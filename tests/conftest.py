"""
Pytest configuration and fixtures for stockfolio tests.

This module provides:
- A recording fake price source with synthetic daily series
- Series builders for weekday price bars
- A fixed US/Eastern "today" for deterministic date checks
- Service, context and API client fixtures
"""

from datetime import date, timedelta
from decimal import Decimal
from typing import Optional

import pytest
from fastapi.testclient import TestClient

from stockfolio.api.deps import get_context
from stockfolio.app_context import AppContext, set_app_context
from stockfolio.config.settings import Settings, reset_settings
from stockfolio.core.exceptions import InvalidSymbolError
from stockfolio.csv import PortfolioCsvExporter, PortfolioCsvImporter
from stockfolio.domain.models import PriceBar
from stockfolio.main import app
from stockfolio.providers import render_series
from stockfolio.repositories import InMemoryPortfolioRepository, PriceCache
from stockfolio.services import (
    IndicatorService,
    PerformanceService,
    PortfolioService,
    PriceLookupService,
)


# =============================================================================
# TIME HELPERS
# =============================================================================

# A Friday; every synthetic series ends on or before it.
FIXED_TODAY = date(2024, 6, 14)
SERIES_START = date(2024, 1, 2)


def fixed_clock() -> date:
    """Clock returning FIXED_TODAY."""
    return FIXED_TODAY


def weekdays_from(start: date, count: int) -> list[date]:
    """The first `count` weekdays on or after start."""
    days: list[date] = []
    current = start
    while len(days) < count:
        if current.weekday() < 5:
            days.append(current)
        current += timedelta(days=1)
    return days


def weekdays_between(start: date, end: date) -> list[date]:
    """Every weekday in [start, end]."""
    days: list[date] = []
    current = start
    while current <= end:
        if current.weekday() < 5:
            days.append(current)
        current += timedelta(days=1)
    return days


# =============================================================================
# SERIES BUILDERS
# =============================================================================


def make_bars(
    days: list[date],
    closes: list[Decimal],
    open_offset: Decimal = Decimal("0"),
) -> list[PriceBar]:
    """Build bars for the given days; open = close - open_offset."""
    bars = []
    for d, close in zip(days, closes):
        open_ = close - open_offset
        bars.append(
            PriceBar(
                date=d,
                open=open_,
                high=max(open_, close) + Decimal("1"),
                low=min(open_, close) - Decimal("1"),
                close=close,
                volume=1_000_000,
            )
        )
    return bars


def linear_bars(
    start_price: Decimal,
    step: Decimal,
    open_offset: Decimal,
    days: Optional[list[date]] = None,
) -> list[PriceBar]:
    """Weekday series rising by `step` per trading day."""
    days = days or weekdays_between(SERIES_START, FIXED_TODAY)
    closes = [start_price + step * i for i in range(len(days))]
    return make_bars(days, closes, open_offset)


def wave_bars() -> list[PriceBar]:
    """
    100 weekdays: falling for 40, rising for 30, falling for 30.

    With 5/20 day windows this gives one golden cross during the rise
    and one death cross during the second fall.
    """
    days = weekdays_from(SERIES_START, 100)
    closes: list[Decimal] = []
    price = Decimal("200")
    for i in range(100):
        closes.append(price)
        if i < 39:
            price -= Decimal("1")
        elif i < 69:
            price += Decimal("2")
        else:
            price -= Decimal("2")
    return make_bars(days, closes)


WAVE_DAYS = weekdays_from(SERIES_START, 100)


# =============================================================================
# PRICE SOURCE FIXTURES
# =============================================================================


class FakePriceSource:
    """
    In-memory price source that records every fetch.

    Symbols without a series get the invalid-symbol body the HTTP
    source returns.
    """

    def __init__(self, series: Optional[dict[str, list[PriceBar]]] = None):
        self.series: dict[str, list[PriceBar]] = dict(series or {})
        self.calls: list[str] = []

    def fetch_series(self, symbol: str) -> str:
        self.calls.append(symbol)
        if symbol not in self.series:
            return '{"Error Message": "Invalid API call for %s"}' % symbol
        return render_series(self.series[symbol])

    def calls_for(self, symbol: str) -> int:
        return self.calls.count(symbol)

    def bar_on(self, symbol: str, on_date: date) -> PriceBar:
        for bar in self.series[symbol]:
            if bar.date == on_date:
                return bar
        raise KeyError((symbol, on_date))

    def close_on(self, symbol: str, on_date: date) -> Decimal:
        return self.bar_on(symbol, on_date).close


class RaisingPriceSource:
    """Price source that reports unknown symbols by raising."""

    def __init__(self):
        self.calls: list[str] = []

    def fetch_series(self, symbol: str) -> str:
        self.calls.append(symbol)
        raise InvalidSymbolError(symbol)


def default_series() -> dict[str, list[PriceBar]]:
    """AAPL closes above its open every day, GOOGL below, FLAT at it."""
    return {
        "AAPL": linear_bars(Decimal("180.00"), Decimal("0.50"), open_offset=Decimal("1.00")),
        "GOOGL": linear_bars(Decimal("140.00"), Decimal("0.25"), open_offset=Decimal("-0.50")),
        "FLAT": linear_bars(Decimal("50.00"), Decimal("0"), open_offset=Decimal("0")),
        "WAVE": wave_bars(),
    }


@pytest.fixture
def fake_source() -> FakePriceSource:
    """Provide a recording fake source with the default series."""
    return FakePriceSource(default_series())


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def price_cache() -> PriceCache:
    """Provide an unbounded PriceCache."""
    return PriceCache()


@pytest.fixture
def price_lookup(price_cache, fake_source) -> PriceLookupService:
    """Provide PriceLookupService over the fake source."""
    return PriceLookupService(cache=price_cache, source=fake_source)


@pytest.fixture
def portfolio_repo() -> InMemoryPortfolioRepository:
    """Provide an empty portfolio registry."""
    return InMemoryPortfolioRepository()


@pytest.fixture
def portfolio_service(portfolio_repo, price_lookup) -> PortfolioService:
    """Provide PortfolioService pinned to FIXED_TODAY."""
    return PortfolioService(
        portfolio_repo=portfolio_repo,
        price_lookup=price_lookup,
        clock=fixed_clock,
    )


@pytest.fixture
def indicator_service(price_lookup) -> IndicatorService:
    """Provide IndicatorService pinned to FIXED_TODAY."""
    return IndicatorService(price_lookup=price_lookup, clock=fixed_clock)


@pytest.fixture
def performance_service(portfolio_repo, price_lookup) -> PerformanceService:
    """Provide PerformanceService pinned to FIXED_TODAY."""
    return PerformanceService(
        portfolio_repo=portfolio_repo,
        price_lookup=price_lookup,
        clock=fixed_clock,
    )


@pytest.fixture
def csv_importer(portfolio_repo) -> PortfolioCsvImporter:
    """Provide PortfolioCsvImporter expecting the default portfolio type."""
    return PortfolioCsvImporter(portfolio_repo, portfolio_type="flexible")


@pytest.fixture
def csv_exporter(portfolio_repo) -> PortfolioCsvExporter:
    """Provide PortfolioCsvExporter writing the default portfolio type."""
    return PortfolioCsvExporter(portfolio_repo, portfolio_type="flexible")


# =============================================================================
# CONTEXT AND API CLIENT FIXTURES
# =============================================================================


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    """Settings rooted in a temporary data directory."""
    reset_settings()
    return Settings(data_dir=tmp_path, price_source="stub")


@pytest.fixture
def app_context(test_settings, fake_source) -> AppContext:
    """AppContext wired to the fake source and a fixed clock."""
    return AppContext(settings=test_settings, price_source=fake_source, clock=fixed_clock)


@pytest.fixture
def client(app_context) -> TestClient:
    """Provide FastAPI test client bound to app_context."""
    set_app_context(app_context)
    app.dependency_overrides[get_context] = lambda: app_context
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
    set_app_context(None)
    reset_settings()


# =============================================================================
# PRESET DATA FIXTURES
# =============================================================================


@pytest.fixture
def portfolio_with_stocks(portfolio_service) -> str:
    """Portfolio "P" holding 10 AAPL and 5 GOOGL bought on 2024-02-06."""
    portfolio_service.create_portfolio("P")
    portfolio_service.add_stock("P", "AAPL", Decimal("10"), date(2024, 2, 6))
    portfolio_service.add_stock("P", "GOOGL", Decimal("5"), date(2024, 2, 6))
    return "P"
