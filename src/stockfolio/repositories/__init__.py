"""Repository layer - price cache and portfolio registry."""

from stockfolio.repositories.price_cache import PriceCache, CACHE_COLUMNS
from stockfolio.repositories.portfolio_registry import InMemoryPortfolioRepository
from stockfolio.repositories.protocols import PortfolioRepository

__all__ = [
    "PriceCache",
    "CACHE_COLUMNS",
    "InMemoryPortfolioRepository",
    "PortfolioRepository",
]
