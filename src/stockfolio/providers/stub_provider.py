"""Stub price source for offline/testing use."""

import random
import re
import zlib
from datetime import date, timedelta
from decimal import Decimal
from typing import Callable, Optional

from stockfolio.core.timezone import is_weekend, today_eastern
from stockfolio.domain.models import PriceBar
from stockfolio.providers.price_source import render_series

# Deterministic starting prices for common symbols
_STUB_PRICES: dict[str, Decimal] = {
    "AAPL": Decimal("185.50"),
    "GOOGL": Decimal("142.75"),
    "MSFT": Decimal("378.25"),
    "AMZN": Decimal("178.50"),
    "TSLA": Decimal("248.75"),
    "NVDA": Decimal("485.25"),
    "META": Decimal("505.50"),
    "SPY": Decimal("485.25"),
    "QQQ": Decimal("418.75"),
    "VTI": Decimal("252.30"),
}

_VALID_SYMBOL = re.compile(r"^[A-Z][A-Z0-9.\-]{0,9}$")

CENT = Decimal("0.01")


class StubPriceSource:
    """
    Stub source generating a deterministic weekday random walk per symbol.

    The walk for a symbol depends only on the seed and the symbol, so
    repeated fetches agree. Symbols that do not look like tickers get
    the same error body the HTTP source returns for unknown symbols.
    """

    def __init__(
        self,
        seed: int = 42,
        history_days: int = 3 * 365,
        clock: Optional[Callable[[], date]] = None,
    ):
        self._seed = seed
        self._history_days = history_days
        self._clock = clock or today_eastern
        self.fetch_count = 0

    def fetch_series(self, symbol: str) -> str:
        self.fetch_count += 1
        if not _VALID_SYMBOL.match(symbol):
            return '{"Error Message": "Invalid API call for symbol %s"}' % symbol
        return render_series(self._generate(symbol))

    def _generate(self, symbol: str) -> list[PriceBar]:
        rng = random.Random(self._seed ^ zlib.crc32(symbol.encode("utf-8")))
        price = _STUB_PRICES.get(symbol) or Decimal(str(50 + rng.random() * 200)).quantize(CENT)
        end = self._clock()
        current = end - timedelta(days=self._history_days)
        bars: list[PriceBar] = []
        while current <= end:
            if not is_weekend(current):
                change = Decimal(str((rng.random() - 0.5) * 0.04))
                open_ = price
                close = max((price * (1 + change)).quantize(CENT), CENT)
                spread = (max(open_, close) * Decimal("0.005")).quantize(CENT)
                bars.append(
                    PriceBar(
                        date=current,
                        open=open_,
                        high=max(open_, close) + spread,
                        low=max(min(open_, close) - spread, Decimal("0")),
                        close=close,
                        volume=rng.randint(100_000, 5_000_000),
                    )
                )
                price = close
            current += timedelta(days=1)
        return bars
