"""Value-over-time series for a symbol or a portfolio."""

from datetime import date
from typing import Callable, Optional

from stockfolio.core.exceptions import (
    InvalidDateRangeError,
    PortfolioNotFoundError,
    ValidationError,
)
from stockfolio.core.timezone import today_eastern
from stockfolio.core.util import normalize_symbol
from stockfolio.domain.models import Identifier, PortfolioName, Resolution, Symbol
from stockfolio.domain.views import PerformancePoint, PerformanceSeries
from stockfolio.repositories.protocols import PortfolioRepository
from stockfolio.services import sampling
from stockfolio.services.price_lookup_service import PriceLookupService


class PerformanceService:
    """Samples a date range and values the identifier at each point."""

    def __init__(
        self,
        portfolio_repo: PortfolioRepository,
        price_lookup: PriceLookupService,
        clock: Callable[[], date] = today_eastern,
    ):
        self._repo = portfolio_repo
        self._prices = price_lookup
        self._clock = clock

    def resolve_identifier(self, text: str) -> Identifier:
        """Portfolio names win over symbols when both could match."""
        text = (text or "").strip()
        if not text:
            raise ValidationError("Identifier cannot be empty")
        portfolio = self._repo.get_by_name(text)
        if portfolio is not None:
            return PortfolioName(portfolio.name)
        return Symbol(normalize_symbol(text))

    def performance(
        self,
        identifier: Identifier,
        start: date,
        end: date,
        resolution: Optional[Resolution] = None,
    ) -> PerformanceSeries:
        """
        Sampled values of identifier over [start, end].

        Symbols are valued at their latest close, portfolios at their
        market value. Sample dates past end are clamped to end.
        """
        if start >= end:
            raise InvalidDateRangeError(f"Start date {start} must be before end date {end}")
        if end > self._clock():
            raise InvalidDateRangeError(f"End date {end} is in the future")

        resolution = resolution or sampling.determine_resolution(start, end)
        value_on = self._valuer(identifier)
        points: list[PerformancePoint] = []
        for target in sampling.sample_dates(start, end, resolution):
            on_date = min(target, end)
            if points and points[-1].on_date == on_date:
                continue
            points.append(PerformancePoint(on_date=on_date, value=value_on(on_date)))
        return PerformanceSeries(identifier=identifier.value, resolution=resolution, points=points)

    def _valuer(self, identifier: Identifier):
        if isinstance(identifier, PortfolioName):
            portfolio = self._repo.get_by_name(identifier.value)
            if portfolio is None:
                raise PortfolioNotFoundError(identifier.value)
            return lambda on_date: portfolio.value_as_of(self._prices, on_date)
        symbol = identifier.value
        self._prices.ensure_history(symbol)
        return lambda on_date: self._prices.last_close_price(symbol, on_date)
