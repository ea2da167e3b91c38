"""Moving-average indicators and daily gain/loss over cached price history."""

import logging
from bisect import bisect_left, bisect_right
from datetime import date, timedelta
from decimal import Decimal
from typing import Callable, Optional

from stockfolio.core.exceptions import (
    FutureDateError,
    InvalidDateRangeError,
    InvalidSymbolError,
    InvalidWindowError,
    NoPriceDataError,
)
from stockfolio.core.timezone import today_eastern
from stockfolio.core.util import ZERO, normalize_symbol
from stockfolio.domain.models import GainLossDirection
from stockfolio.domain.views import GainLossView, MovingCrossoverReport
from stockfolio.services.price_lookup_service import PriceLookupService

logger = logging.getLogger(__name__)

CROSSOVER_WINDOW_DAYS = 30


class _CloseSeries:
    """Date-ordered closes of one symbol with windowed averages."""

    def __init__(self, closes: dict[date, Decimal]):
        self.dates = sorted(closes)
        self._closes = [closes[d] for d in self.dates]

    def close_on(self, on_date: date) -> Decimal:
        return self._closes[bisect_left(self.dates, on_date)]

    def moving_average(self, end_date: date, window_days: int) -> Decimal:
        lo = bisect_left(self.dates, end_date - timedelta(days=window_days - 1))
        hi = bisect_right(self.dates, end_date)
        if hi <= lo:
            return ZERO
        return sum(self._closes[lo:hi], ZERO) / (hi - lo)

    def trading_days(self, start: date, end: date) -> list[date]:
        return self.dates[bisect_left(self.dates, start):bisect_right(self.dates, end)]

    def previous_trading_day(self, on_date: date) -> Optional[date]:
        idx = bisect_left(self.dates, on_date)
        return self.dates[idx - 1] if idx > 0 else None


class IndicatorService:
    """
    Trend analysis on daily closes.

    Averages are taken over calendar-day windows but only days that have
    a bar contribute; crossovers are evaluated on trading days only.
    """

    def __init__(
        self,
        price_lookup: PriceLookupService,
        clock: Callable[[], date] = today_eastern,
    ):
        self._prices = price_lookup
        self._clock = clock

    def moving_average(self, symbol: str, end_date: date, window_days: int) -> Decimal:
        """Mean close over the window_days calendar days ending at end_date."""
        if window_days <= 0:
            raise InvalidWindowError(f"Window must be positive: {window_days}")
        return self._series(symbol).moving_average(end_date, window_days)

    def crossover_days(self, symbol: str, start: date, end: date) -> list[date]:
        """
        Trading days where the close moves above its 30-day moving average.

        A day is flagged when the previous trading day's close was below
        that day's average and this day's close is above its own.
        """
        self._check_range(start, end)
        series = self._series(symbol)
        flagged: list[date] = []
        previous = series.previous_trading_day(start)
        for day in series.trading_days(start, end):
            if previous is not None:
                was_below = series.close_on(previous) < series.moving_average(
                    previous, CROSSOVER_WINDOW_DAYS
                )
                is_above = series.close_on(day) > series.moving_average(day, CROSSOVER_WINDOW_DAYS)
                if was_below and is_above:
                    flagged.append(day)
            previous = day
        return flagged

    def moving_crossover_days(
        self,
        symbol: str,
        start: date,
        end: date,
        short_window: int,
        long_window: int,
    ) -> MovingCrossoverReport:
        """
        Golden and death crosses of the short vs long moving average.

        The starting relation comes from the last trading day before
        start; a day where both averages are equal keeps the previous
        relation.
        """
        if short_window <= 0 or long_window <= 0:
            raise InvalidWindowError(
                f"Windows must be positive: short={short_window}, long={long_window}"
            )
        if short_window >= long_window:
            raise InvalidWindowError(
                f"Short window must be smaller than long window: {short_window} >= {long_window}"
            )
        self._check_range(start, end)
        series = self._series(symbol)

        def relation(day: date) -> int:
            diff = series.moving_average(day, short_window) - series.moving_average(day, long_window)
            return (diff > 0) - (diff < 0)

        report = MovingCrossoverReport()
        previous_day = series.previous_trading_day(start)
        current = relation(previous_day) if previous_day is not None else 0
        for day in series.trading_days(start, end):
            rel = relation(day)
            if rel == 0:
                continue
            if current < 0 < rel:
                report.golden_crosses.append(day)
            elif rel < 0 < current:
                report.death_crosses.append(day)
            current = rel
        return report

    def gain_loss(self, symbol: str, on_date: date) -> GainLossView:
        """Whether symbol closed above, below or at its open on on_date."""
        if on_date > self._clock():
            raise FutureDateError(on_date)
        symbol = normalize_symbol(symbol) or ""
        bar = self._prices.bar_on_date(symbol, on_date)
        if bar is None:
            raise NoPriceDataError(symbol, on_date)
        amount = bar.close - bar.open
        if amount > 0:
            direction = GainLossDirection.GAINED
        elif amount < 0:
            direction = GainLossDirection.LOST
        else:
            direction = GainLossDirection.UNCHANGED
        return GainLossView(symbol=symbol, on_date=on_date, direction=direction, amount=amount)

    def _check_range(self, start: date, end: date) -> None:
        if start >= end:
            raise InvalidDateRangeError(f"Start date {start} must be before end date {end}")
        today = self._clock()
        if start > today or end > today:
            raise InvalidDateRangeError(f"Date range {start} to {end} extends into the future")

    def _series(self, symbol: str) -> _CloseSeries:
        symbol = normalize_symbol(symbol) or ""
        if not self._prices.has_history(symbol):
            raise InvalidSymbolError(symbol)
        bars = self._prices.cache.bars_for(symbol)
        logger.debug("Analysing %d bars for %s", len(bars), symbol)
        return _CloseSeries({bar.date: bar.close for bar in bars})
