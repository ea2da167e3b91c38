"""Yahoo Finance daily price source via yfinance."""

import logging
import math
from decimal import Decimal

from stockfolio.core.exceptions import InvalidSymbolError
from stockfolio.domain.models import PriceBar
from stockfolio.providers.price_source import render_series

logger = logging.getLogger(__name__)


# Lazy import so tests can patch before import
def _get_yf():
    import yfinance as yf
    return yf


def _is_missing(value) -> bool:
    return value is None or (isinstance(value, float) and math.isnan(value))


class YFinancePriceSource:
    """
    Fetches the maximum available daily history through yfinance.

    Rows are rendered into the same CSV shape as the HTTP source so the
    lookup layer parses every provider identically. Uses unadjusted
    OHLC values.
    """

    def fetch_series(self, symbol: str) -> str:
        yf = _get_yf()
        logger.info("Fetching daily series for %s from Yahoo Finance", symbol)
        hist = yf.Ticker(symbol).history(period="max", auto_adjust=False)
        if hist is None or hist.empty:
            raise InvalidSymbolError(symbol)

        bars: list[PriceBar] = []
        for idx, row in hist.iterrows():
            values = [row.get(col) for col in ("Open", "High", "Low", "Close", "Volume")]
            if any(_is_missing(v) for v in values):
                continue
            open_, high, low, close, volume = values
            bars.append(
                PriceBar(
                    date=idx.date() if hasattr(idx, "date") else idx,
                    open=Decimal(str(round(float(open_), 4))),
                    high=Decimal(str(round(float(high), 4))),
                    low=Decimal(str(round(float(low), 4))),
                    close=Decimal(str(round(float(close), 4))),
                    volume=int(volume),
                )
            )
        return render_series(bars)
