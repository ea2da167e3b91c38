"""
Result-returning facade over the services.

Every operation runs through `capture`, so callers receive a Result
and branch on its ErrorKind instead of catching exceptions. Inputs may
be dates or date strings; unparseable dates fail as validation errors.
"""

from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Optional, Union

from stockfolio.core.exceptions import ValidationError
from stockfolio.core.result import Result, capture
from stockfolio.core.timezone import parse_date
from stockfolio.csv import PortfolioCsvExporter, PortfolioCsvImporter
from stockfolio.domain.models import InvestmentFrequency, Portfolio, Transaction
from stockfolio.domain.views import (
    GainLossView,
    HoldingView,
    ImportSummary,
    MovingCrossoverReport,
    PerformanceSeries,
)
from stockfolio.services import (
    IndicatorService,
    PerformanceService,
    PortfolioService,
    PriceLookupService,
)

DateLike = Union[date, str]
PathLike = Union[str, Path]


def _as_date(value: DateLike) -> date:
    try:
        return parse_date(value)
    except (ValueError, OverflowError, AttributeError):
        raise ValidationError(f"Invalid date: {value!r}")


class PortfolioController:
    """Single entry point for user-facing portfolio and analysis operations."""

    def __init__(
        self,
        portfolios: PortfolioService,
        indicators: IndicatorService,
        performance: PerformanceService,
        prices: PriceLookupService,
        importer: PortfolioCsvImporter,
        exporter: PortfolioCsvExporter,
    ):
        self._portfolios = portfolios
        self._indicators = indicators
        self._performance = performance
        self._prices = prices
        self._importer = importer
        self._exporter = exporter

    # Portfolios

    def create_portfolio(self, name: str) -> Result[Portfolio]:
        return capture(self._portfolios.create_portfolio, name)

    def portfolio_names(self) -> Result[list[str]]:
        return capture(self._portfolios.list_portfolio_names)

    def portfolio_count(self) -> int:
        return self._portfolios.portfolio_count()

    def remove_portfolio(self, name: str) -> Result[None]:
        return capture(self._portfolios.remove_portfolio, name)

    def add_stock(
        self,
        name: str,
        symbol: str,
        quantity,
        on_date: DateLike,
        price: Optional[Decimal] = None,
    ) -> Result[Transaction]:
        return capture(
            lambda: self._portfolios.add_stock(name, symbol, quantity, _as_date(on_date), price)
        )

    def sell_stock(
        self,
        name: str,
        symbol: str,
        quantity,
        on_date: DateLike,
        price: Optional[Decimal] = None,
    ) -> Result[Transaction]:
        return capture(
            lambda: self._portfolios.sell_stock(name, symbol, quantity, _as_date(on_date), price)
        )

    def portfolio_value(self, name: str, on_date: DateLike) -> Result[Decimal]:
        return capture(lambda: self._portfolios.value_as_of(name, _as_date(on_date)))

    def total_investment(self, name: str, on_date: DateLike) -> Result[Decimal]:
        return capture(lambda: self._portfolios.investment_as_of(name, _as_date(on_date)))

    def composition(self, name: str, on_date: DateLike) -> Result[list[HoldingView]]:
        return capture(lambda: self._portfolios.composition_as_of(name, _as_date(on_date)))

    def invest_by_weights(
        self,
        name: str,
        amount,
        on_date: DateLike,
        weights: dict[str, Decimal],
    ) -> Result[list[tuple[str, Transaction]]]:
        return capture(
            lambda: self._portfolios.invest_by_weights(name, amount, _as_date(on_date), weights)
        )

    def dollar_cost_average(
        self,
        name: str,
        amount,
        start: DateLike,
        end: DateLike,
        frequency: Union[InvestmentFrequency, str],
        weights: dict[str, Decimal],
    ) -> Result[list[tuple[str, Transaction]]]:
        def run() -> list[tuple[str, Transaction]]:
            try:
                freq = InvestmentFrequency(str(frequency).upper())
            except ValueError:
                raise ValidationError(f"Unknown investment frequency: {frequency}")
            return self._portfolios.dollar_cost_average(
                name, amount, _as_date(start), _as_date(end), freq, weights
            )

        return capture(run)

    # Analysis

    def moving_average(self, symbol: str, end_date: DateLike, window_days: int) -> Result[Decimal]:
        return capture(
            lambda: self._indicators.moving_average(symbol, _as_date(end_date), window_days)
        )

    def crossover_days(self, symbol: str, start: DateLike, end: DateLike) -> Result[list[date]]:
        return capture(
            lambda: self._indicators.crossover_days(symbol, _as_date(start), _as_date(end))
        )

    def moving_crossover_days(
        self,
        symbol: str,
        start: DateLike,
        end: DateLike,
        short_window: int,
        long_window: int,
    ) -> Result[MovingCrossoverReport]:
        return capture(
            lambda: self._indicators.moving_crossover_days(
                symbol, _as_date(start), _as_date(end), short_window, long_window
            )
        )

    def gain_loss(self, symbol: str, on_date: DateLike) -> Result[GainLossView]:
        return capture(lambda: self._indicators.gain_loss(symbol, _as_date(on_date)))

    def performance(self, identifier: str, start: DateLike, end: DateLike) -> Result[PerformanceSeries]:
        return capture(
            lambda: self._performance.performance(
                self._performance.resolve_identifier(identifier), _as_date(start), _as_date(end)
            )
        )

    # Persistence

    def save_portfolios(self, path: PathLike) -> Result[int]:
        return capture(self._exporter.export_csv, path)

    def load_portfolios(self, path: PathLike) -> Result[ImportSummary]:
        return capture(self._importer.import_csv, path)

    def save_cache(self, path: PathLike) -> Result[int]:
        return capture(self._prices.cache.save, path)

    def load_cache(self, path: PathLike) -> Result[int]:
        return capture(self._prices.cache.load, path)
