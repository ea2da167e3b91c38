"""Price source providers module."""

from stockfolio.providers.price_source import (
    PriceSource,
    INVALID_SYMBOL_SENTINEL,
    parse_series,
    render_series,
)
from stockfolio.providers.alpha_vantage import AlphaVantagePriceSource
from stockfolio.providers.yfinance_source import YFinancePriceSource
from stockfolio.providers.stub_provider import StubPriceSource

__all__ = [
    "PriceSource",
    "INVALID_SYMBOL_SENTINEL",
    "parse_series",
    "render_series",
    "AlphaVantagePriceSource",
    "YFinancePriceSource",
    "StubPriceSource",
]
