"""Portfolio file import."""

import csv
import logging
from pathlib import Path
from typing import Union

from stockfolio.core.exceptions import AppError, ErrorKind, PersistenceError, ValidationError
from stockfolio.core.timezone import parse_date
from stockfolio.core.util import normalize_symbol, to_decimal
from stockfolio.domain.models import Ledger, Portfolio
from stockfolio.domain.views import ImportSummary
from stockfolio.repositories.protocols import PortfolioRepository

logger = logging.getLogger(__name__)

# Expected CSV columns
CSV_COLUMNS = [
    "Portfolio Name",
    "Stock Symbol",
    "Quantity",
    "Purchase Price",
    "Purchase Date",
    "Portfolio Type",
]

# The type column is optional on import
REQUIRED_COLUMNS = CSV_COLUMNS[:5]


class PortfolioCsvImporter:
    """
    Rebuilds the portfolio registry from a portfolio file.

    Rows are replayed in file order straight onto each ledger at the
    recorded price: a positive quantity is a buy, a negative one a sell
    of its absolute value. Rows whose names differ only in case belong
    to one portfolio, spelled as first seen. A non-empty type column
    must match the expected portfolio type. Row failures are collected
    rather than aborting the import and leave nothing behind.
    """

    def __init__(self, portfolio_repo: PortfolioRepository, portfolio_type: str = "flexible"):
        self._repo = portfolio_repo
        self._portfolio_type = portfolio_type

    def import_csv(self, path: Union[str, Path]) -> ImportSummary:
        """
        Import portfolios from a CSV file and replace the registry with them.

        Returns a summary with imported/error counts and the loaded names.
        """
        file_path = Path(path)
        if not file_path.exists():
            raise PersistenceError(f"File not found: {path}", code=ErrorKind.FILE_NOT_FOUND)

        summary = ImportSummary()
        portfolios: dict[str, Portfolio] = {}

        try:
            with open(file_path, newline="", encoding="utf-8") as csvfile:
                reader = csv.DictReader(csvfile)

                if reader.fieldnames:
                    missing = set(REQUIRED_COLUMNS) - set(reader.fieldnames)
                    if missing:
                        raise ValidationError(f"Missing required columns: {sorted(missing)}")

                for row_num, row in enumerate(reader, start=2):  # header is row 1
                    try:
                        self._import_row(row, portfolios)
                        summary.imported_count += 1
                    except (AppError, ValueError) as e:
                        summary.error_count += 1
                        summary.errors.append(f"Row {row_num}: {e}")
                        logger.warning("Skipped row %d of %s: %s", row_num, file_path, e)
        except OSError as e:
            raise PersistenceError(f"Error reading portfolio file {path}: {e}")

        self._repo.replace_all(list(portfolios.values()))
        summary.portfolio_names = [p.name for p in portfolios.values()]
        logger.info(
            "Imported %d rows into %d portfolios from %s (%d errors)",
            summary.imported_count,
            len(portfolios),
            file_path,
            summary.error_count,
        )
        return summary

    def _import_row(self, row: dict[str, str], portfolios: dict[str, Portfolio]) -> None:
        name = (row.get("Portfolio Name") or "").strip()
        if not name:
            raise ValidationError("Missing portfolio name")

        portfolio_type = (row.get("Portfolio Type") or "").strip()
        if portfolio_type and portfolio_type != self._portfolio_type:
            raise ValidationError(f"Invalid portfolio type: {portfolio_type}")

        symbol = normalize_symbol(row.get("Stock Symbol"))
        if not symbol:
            raise ValidationError("Missing stock symbol")

        quantity = to_decimal(row.get("Quantity") or "")
        price = to_decimal(row.get("Purchase Price") or "")
        txn_date = parse_date(row.get("Purchase Date") or "")

        key = name.casefold()
        portfolio = portfolios.get(key)
        if portfolio is None:
            portfolio = Portfolio(name=name)
        ledger = portfolio.get_ledger(symbol)
        new_ledger = ledger is None
        if new_ledger:
            ledger = Ledger(symbol=symbol)
        if quantity < 0:
            ledger.sell(-quantity, txn_date, price)
        else:
            ledger.buy(quantity, txn_date, price)

        # Attach only once the trade has been recorded
        if new_ledger:
            portfolio.ledgers.append(ledger)
        portfolios.setdefault(key, portfolio)
