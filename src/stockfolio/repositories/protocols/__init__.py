"""Repository protocols."""

from stockfolio.repositories.protocols.portfolio_repo import PortfolioRepository

__all__ = [
    "PortfolioRepository",
]
