"""In-memory daily price cache with flat-file persistence."""

import csv
import logging
import os
import tempfile
from collections import OrderedDict
from datetime import date
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Optional, Union

from stockfolio.core.exceptions import ErrorKind, PersistenceError
from stockfolio.core.timezone import parse_date
from stockfolio.domain.models import PriceBar

logger = logging.getLogger(__name__)

CACHE_COLUMNS = ["Symbol", "Date", "Open", "High", "Low", "Close", "Volume"]


class PriceCache:
    """
    Map of symbol -> date -> PriceBar.

    Unbounded unless max_entries is given, in which case whole symbols
    are evicted least-recently-used first once the total number of bars
    exceeds the limit (the symbol being written is never evicted).
    Single writer; no locking.
    """

    def __init__(self, max_entries: Optional[int] = None):
        self._max_entries = max_entries
        self._data: "OrderedDict[str, dict[date, PriceBar]]" = OrderedDict()
        self._size = 0

    def __len__(self) -> int:
        return self._size

    def has(self, symbol: str, on_date: date) -> bool:
        return on_date in self._data.get(symbol, {})

    def has_symbol(self, symbol: str) -> bool:
        return symbol in self._data

    def get(self, symbol: str, on_date: date) -> Optional[PriceBar]:
        bars = self._data.get(symbol)
        if bars is None:
            return None
        self._data.move_to_end(symbol)
        return bars.get(on_date)

    def put(self, symbol: str, on_date: date, bar: PriceBar) -> None:
        bars = self._data.setdefault(symbol, {})
        if on_date not in bars:
            self._size += 1
        bars[on_date] = bar
        self._data.move_to_end(symbol)
        self._evict(keep=symbol)

    def put_many(self, symbol: str, bars: list[PriceBar]) -> int:
        """Insert bars keyed by their own dates. Returns the number written."""
        target = self._data.setdefault(symbol, {})
        for bar in bars:
            if bar.date not in target:
                self._size += 1
            target[bar.date] = bar
        self._data.move_to_end(symbol)
        self._evict(keep=symbol)
        return len(bars)

    def symbols(self) -> list[str]:
        return sorted(self._data)

    def bars_for(self, symbol: str) -> list[PriceBar]:
        """All cached bars for symbol in date order."""
        bars = self._data.get(symbol, {})
        return [bars[d] for d in sorted(bars)]

    def clear(self) -> None:
        self._data.clear()
        self._size = 0

    def _evict(self, keep: str) -> None:
        if self._max_entries is None:
            return
        while self._size > self._max_entries:
            victim = next((s for s in self._data if s != keep), None)
            if victim is None:
                return
            evicted = self._data.pop(victim)
            self._size -= len(evicted)
            logger.debug("Evicted %d cached bars for %s", len(evicted), victim)

    # Persistence

    def save(self, path: Union[str, Path]) -> int:
        """
        Write every cached bar to a CSV file.

        The file is written next to the target and moved into place, so
        readers never observe a half-written cache. Returns the row count.
        """
        file_path = Path(path)
        try:
            file_path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=file_path.parent, prefix=f".{file_path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", newline="", encoding="utf-8") as csvfile:
                    writer = csv.writer(csvfile)
                    writer.writerow(CACHE_COLUMNS)
                    for symbol in sorted(self._data):
                        for bar in self.bars_for(symbol):
                            writer.writerow([
                                symbol,
                                bar.date.isoformat(),
                                str(bar.open),
                                str(bar.high),
                                str(bar.low),
                                str(bar.close),
                                bar.volume,
                            ])
                os.replace(tmp_name, file_path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except OSError as e:
            raise PersistenceError(f"Error saving price cache to {path}: {e}")

        logger.info("Saved %d cached price bars to %s", self._size, file_path)
        return self._size

    def load(self, path: Union[str, Path], replace: bool = False) -> int:
        """
        Load bars from a CSV file written by save().

        Rows are merged into the current map (replace=True clears it
        first). Nothing is merged if any row is malformed. Returns the
        number of rows read.
        """
        file_path = Path(path)
        staged: list[tuple[str, PriceBar]] = []
        try:
            with open(file_path, newline="", encoding="utf-8") as csvfile:
                reader = csv.reader(csvfile)
                next(reader, None)  # header
                for line_num, row in enumerate(reader, start=2):
                    if not row:
                        continue
                    try:
                        staged.append(_row_to_entry(row))
                    except (ValueError, InvalidOperation, IndexError) as e:
                        raise PersistenceError(
                            f"Error reading {path} line {line_num}: {e}"
                        )
        except FileNotFoundError:
            raise PersistenceError(f"File not found: {path}", code=ErrorKind.FILE_NOT_FOUND)
        except OSError as e:
            raise PersistenceError(f"Error reading price cache {path}: {e}")

        if replace:
            self.clear()
        by_symbol: dict[str, list[PriceBar]] = {}
        for symbol, bar in staged:
            by_symbol.setdefault(symbol, []).append(bar)
        for symbol, bars in by_symbol.items():
            self.put_many(symbol, bars)

        logger.info("Loaded %d cached price bars from %s", len(staged), file_path)
        return len(staged)


def _row_to_entry(row: list[str]) -> tuple[str, PriceBar]:
    symbol = row[0].strip()
    if not symbol:
        raise ValueError("missing symbol")
    return symbol, PriceBar(
        date=parse_date(row[1]),
        open=Decimal(row[2]),
        high=Decimal(row[3]),
        low=Decimal(row[4]),
        close=Decimal(row[5]),
        volume=int(row[6]),
    )
