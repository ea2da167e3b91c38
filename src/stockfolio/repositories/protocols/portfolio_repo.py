"""Portfolio repository protocol."""

from typing import Optional, Protocol

from stockfolio.domain.models import Portfolio


class PortfolioRepository(Protocol):
    """Interface for portfolio registry access."""

    def get_by_name(self, name: str) -> Optional[Portfolio]:
        """Get portfolio by name (case-insensitive)."""
        ...

    def exists(self, name: str) -> bool:
        """Check whether a portfolio name is taken (case-insensitive)."""
        ...

    def add(self, portfolio: Portfolio) -> Portfolio:
        """Register a new portfolio."""
        ...

    def remove(self, name: str) -> bool:
        """Remove a portfolio; returns False if it did not exist."""
        ...

    def list_all(self) -> list[Portfolio]:
        """List portfolios in creation order."""
        ...

    def replace_all(self, portfolios: list[Portfolio]) -> None:
        """Swap the registry contents (used after loading a file)."""
        ...

    def count(self) -> int:
        """Number of registered portfolios."""
        ...
