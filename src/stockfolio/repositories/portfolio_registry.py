"""In-memory portfolio registry."""

from typing import Optional

from stockfolio.domain.models import Portfolio


class InMemoryPortfolioRepository:
    """
    Ordered registry of portfolios with case-insensitive name lookup.

    Lives for the process; persisted through the portfolio CSV file.
    """

    def __init__(self):
        self._portfolios: list[Portfolio] = []

    def get_by_name(self, name: str) -> Optional[Portfolio]:
        key = name.strip().casefold()
        for portfolio in self._portfolios:
            if portfolio.name.casefold() == key:
                return portfolio
        return None

    def exists(self, name: str) -> bool:
        return self.get_by_name(name) is not None

    def add(self, portfolio: Portfolio) -> Portfolio:
        self._portfolios.append(portfolio)
        return portfolio

    def remove(self, name: str) -> bool:
        portfolio = self.get_by_name(name)
        if portfolio is None:
            return False
        self._portfolios.remove(portfolio)
        return True

    def list_all(self) -> list[Portfolio]:
        return list(self._portfolios)

    def replace_all(self, portfolios: list[Portfolio]) -> None:
        self._portfolios = list(portfolios)

    def count(self) -> int:
        return len(self._portfolios)
