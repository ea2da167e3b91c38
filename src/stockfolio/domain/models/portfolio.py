"""Portfolio domain model."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Optional

from stockfolio.domain.models.ledger import ClosePriceLookup, Ledger

ZERO = Decimal("0")


@dataclass
class Portfolio:
    """
    Named container of per-symbol ledgers.

    Ledger order follows the order in which symbols were first traded.
    """

    name: str
    ledgers: list[Ledger] = field(default_factory=list)

    def get_ledger(self, symbol: str) -> Optional[Ledger]:
        for ledger in self.ledgers:
            if ledger.symbol == symbol:
                return ledger
        return None

    def get_or_create_ledger(self, symbol: str) -> Ledger:
        ledger = self.get_ledger(symbol)
        if ledger is None:
            ledger = Ledger(symbol=symbol)
            self.ledgers.append(ledger)
        return ledger

    @property
    def symbols(self) -> list[str]:
        return [ledger.symbol for ledger in self.ledgers]

    def quantity_as_of(self, symbol: str, on_date: date) -> Decimal:
        ledger = self.get_ledger(symbol)
        return ledger.quantity_as_of(on_date) if ledger else ZERO

    def holdings_as_of(self, on_date: date) -> dict[str, Decimal]:
        """Symbols held in a positive quantity on on_date, in ledger order."""
        holdings: dict[str, Decimal] = {}
        for ledger in self.ledgers:
            quantity = ledger.quantity_as_of(on_date)
            if quantity > 0:
                holdings[ledger.symbol] = quantity
        return holdings

    def value_as_of(self, lookup: ClosePriceLookup, on_date: date) -> Decimal:
        return sum((ledger.value_as_of(lookup, on_date) for ledger in self.ledgers), ZERO)

    def investment_as_of(self, on_date: date) -> Decimal:
        return sum((ledger.investment_as_of(on_date) for ledger in self.ledgers), ZERO)

    def earliest_activity_date(self) -> Optional[date]:
        dates = [d for d in (ledger.first_activity_date for ledger in self.ledgers) if d]
        return min(dates) if dates else None
