"""Price source protocol and the daily-series wire format."""

import csv
import io
import logging
from decimal import Decimal, InvalidOperation
from typing import Protocol

from stockfolio.core.exceptions import InvalidSymbolError
from stockfolio.core.timezone import parse_date
from stockfolio.domain.models import PriceBar

logger = logging.getLogger(__name__)

# A response body containing this text reports an unknown symbol.
INVALID_SYMBOL_SENTINEL = "Error Message"

SERIES_HEADER = ["timestamp", "open", "high", "low", "close", "volume"]


class PriceSource(Protocol):
    """
    Protocol for external daily price providers.

    Implementations return the symbol's entire available daily history
    as CSV text: one header line, then `date,open,high,low,close,volume`
    rows in any order. An unknown symbol is reported either by raising
    InvalidSymbolError or by a body containing INVALID_SYMBOL_SENTINEL.
    Transport failures propagate as-is.
    """

    def fetch_series(self, symbol: str) -> str:
        """Fetch the full daily series for symbol as CSV text."""
        ...


def parse_series(body: str, symbol: str) -> list[PriceBar]:
    """
    Parse a daily-series CSV body into price bars.

    The header line is skipped. Malformed rows are logged and dropped
    so one bad line does not discard the whole history.
    """
    if INVALID_SYMBOL_SENTINEL in body:
        raise InvalidSymbolError(symbol)

    bars: list[PriceBar] = []
    reader = csv.reader(io.StringIO(body))
    next(reader, None)  # header
    for line_num, row in enumerate(reader, start=2):
        if not row or not any(cell.strip() for cell in row):
            continue
        try:
            bars.append(_row_to_bar(row))
        except (ValueError, InvalidOperation, IndexError) as e:
            logger.warning("Skipping malformed %s row %d: %s", symbol, line_num, e)
    return bars


def _row_to_bar(row: list[str]) -> PriceBar:
    return PriceBar(
        date=parse_date(row[0]),
        open=Decimal(row[1].strip()),
        high=Decimal(row[2].strip()),
        low=Decimal(row[3].strip()),
        close=Decimal(row[4].strip()),
        volume=int(Decimal(row[5].strip())),
    )


def render_series(bars: list[PriceBar]) -> str:
    """Render bars (newest first) in the daily-series CSV shape."""
    out = io.StringIO()
    writer = csv.writer(out, lineterminator="\n")
    writer.writerow(SERIES_HEADER)
    for bar in sorted(bars, key=lambda b: b.date, reverse=True):
        writer.writerow([
            bar.date.isoformat(),
            str(bar.open),
            str(bar.high),
            str(bar.low),
            str(bar.close),
            bar.volume,
        ])
    return out.getvalue()
