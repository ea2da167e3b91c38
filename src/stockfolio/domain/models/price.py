"""Daily OHLCV price bar."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal


@dataclass(frozen=True)
class PriceBar:
    """
    One trading day of price data for a symbol.

    Identity is (symbol, date); the symbol lives in the cache key, not
    on the bar. Immutable once created.
    """

    date: date
    open: Decimal
    high: Decimal
    low: Decimal
    close: Decimal
    volume: int

    def __post_init__(self) -> None:
        if self.close < 0:
            raise ValueError(f"Close price cannot be negative: {self.close}")
