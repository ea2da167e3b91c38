"""Portfolio file export."""

import csv
import logging
from pathlib import Path
from typing import Optional, Union

from stockfolio.core.exceptions import PersistenceError
from stockfolio.csv.importer import CSV_COLUMNS
from stockfolio.repositories.protocols import PortfolioRepository

logger = logging.getLogger(__name__)


class PortfolioCsvExporter:
    """Writes every ledger's activity, in date order, to a portfolio file."""

    def __init__(self, portfolio_repo: PortfolioRepository, portfolio_type: str = "flexible"):
        self._repo = portfolio_repo
        self._portfolio_type = portfolio_type

    def export_csv(
        self,
        path: Union[str, Path],
        portfolio_names: Optional[list[str]] = None,
    ) -> int:
        """
        Export portfolios to a CSV file.

        Args:
            path: Output file path
            portfolio_names: Optional list of portfolios to export (None = all)

        Returns the number of transaction rows written.
        """
        wanted = {n.strip().casefold() for n in portfolio_names} if portfolio_names else None
        portfolios = [
            p for p in self._repo.list_all()
            if wanted is None or p.name.casefold() in wanted
        ]

        file_path = Path(path)
        rows = 0
        try:
            file_path.parent.mkdir(parents=True, exist_ok=True)
            with open(file_path, "w", newline="", encoding="utf-8") as csvfile:
                writer = csv.DictWriter(csvfile, fieldnames=CSV_COLUMNS)
                writer.writeheader()

                for portfolio in portfolios:
                    for ledger in portfolio.ledgers:
                        for txn in ledger.activity_log:
                            writer.writerow({
                                "Portfolio Name": portfolio.name,
                                "Stock Symbol": ledger.symbol,
                                "Quantity": str(txn.quantity),
                                "Purchase Price": str(txn.unit_price),
                                "Purchase Date": txn.txn_date.isoformat(),
                                "Portfolio Type": self._portfolio_type,
                            })
                            rows += 1
        except OSError as e:
            raise PersistenceError(f"Error writing portfolio file {path}: {e}")

        logger.info("Exported %d transactions from %d portfolios to %s", rows, len(portfolios), file_path)
        return rows
