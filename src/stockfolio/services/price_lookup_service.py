"""Price lookup service: cache-first resolution with full-history backfill."""

import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import date, timedelta
from decimal import Decimal
from typing import Optional

from stockfolio.core.exceptions import InvalidSymbolError
from stockfolio.core.util import ZERO
from stockfolio.domain.models import PriceBar
from stockfolio.providers.price_source import PriceSource, parse_series
from stockfolio.repositories.price_cache import PriceCache

logger = logging.getLogger(__name__)

DEFAULT_LOOKBACK_DAYS = 4


class PriceLookupService:
    """
    Resolves (symbol, date) prices against the cache, backfilling on miss.

    A miss pulls the symbol's entire history from the source once per
    session and bulk-loads it into the cache; later misses for the same
    symbol (weekends, holidays, dates past the history) do not refetch.
    Symbols the source rejected are remembered for the session.
    """

    def __init__(
        self,
        cache: PriceCache,
        source: PriceSource,
        lookback_days: int = DEFAULT_LOOKBACK_DAYS,
        max_workers: int = 4,
    ):
        self._cache = cache
        self._source = source
        self._lookback_days = lookback_days
        self._max_workers = max_workers
        self._backfilled: set[str] = set()
        self._invalid: set[str] = set()

    @property
    def cache(self) -> PriceCache:
        return self._cache

    def bar_on_date(self, symbol: str, on_date: date) -> Optional[PriceBar]:
        """Return the cached bar for (symbol, on_date), backfilling on a miss."""
        if not self._cache.has(symbol, on_date):
            self.ensure_history(symbol)
        return self._cache.get(symbol, on_date)

    def price_on_date(self, symbol: str, on_date: date) -> Decimal:
        """
        Close price on on_date.

        Returns zero when the symbol has no bar for that day, so "no
        data" and "zero price" look the same to callers.
        """
        bar = self.bar_on_date(symbol, on_date)
        return bar.close if bar is not None else ZERO

    def last_close_price(self, symbol: str, on_date: date) -> Decimal:
        """
        Close on on_date or the nearest earlier day with data.

        Probes at most lookback_days calendar days starting at on_date;
        zero if none of them has a bar.
        """
        probe = on_date
        for _ in range(self._lookback_days):
            bar = self.bar_on_date(symbol, probe)
            if bar is not None:
                return bar.close
            probe -= timedelta(days=1)
        return ZERO

    def has_history(self, symbol: str) -> bool:
        """Ensure the symbol is loaded and report whether any bars exist."""
        self.ensure_history(symbol)
        return self._cache.has_symbol(symbol) and bool(self._cache.bars_for(symbol))

    def ensure_history(self, symbol: str) -> None:
        """Backfill symbol from the source unless already done this session."""
        if symbol in self._invalid:
            raise InvalidSymbolError(symbol)
        if symbol in self._backfilled and self._cache.has_symbol(symbol):
            return
        bars = self._fetch(symbol)
        self._store(symbol, bars)

    def prefetch(self, symbols: list[str]) -> dict[str, int]:
        """
        Backfill several symbols, fetching in parallel.

        Source calls run in a bounded worker pool; parsing results and
        writing the cache happen on the calling thread. Returns the
        number of bars loaded per symbol (invalid symbols are omitted).
        """
        pending = [
            s for s in dict.fromkeys(symbols)
            if s not in self._invalid
            and not (s in self._backfilled and self._cache.has_symbol(s))
        ]
        loaded: dict[str, int] = {}
        if not pending:
            return loaded

        with ThreadPoolExecutor(max_workers=max(1, min(self._max_workers, len(pending)))) as ex:
            futures = {symbol: ex.submit(self._source.fetch_series, symbol) for symbol in pending}
            for symbol, future in futures.items():
                try:
                    bars = parse_series(future.result(), symbol)
                except InvalidSymbolError:
                    self._invalid.add(symbol)
                    logger.warning("Skipping invalid symbol during prefetch: %s", symbol)
                    continue
                loaded[symbol] = self._store(symbol, bars)
        return loaded

    def _fetch(self, symbol: str) -> list[PriceBar]:
        try:
            return parse_series(self._source.fetch_series(symbol), symbol)
        except InvalidSymbolError:
            self._invalid.add(symbol)
            raise

    def _store(self, symbol: str, bars: list[PriceBar]) -> int:
        count = self._cache.put_many(symbol, bars)
        self._backfilled.add(symbol)
        logger.info("Backfilled %d daily bars for %s", count, symbol)
        return count
