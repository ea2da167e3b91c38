"""Transaction domain model."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from stockfolio.domain.models.enums import TransactionType


@dataclass(frozen=True)
class Transaction:
    """
    Ledger entry for a single trade (source of truth).

    Quantity is signed: positive for a buy, negative for a sell.
    Fractional shares supported via Decimal. USD only.
    """

    quantity: Decimal
    unit_price: Decimal
    txn_date: date

    @property
    def txn_type(self) -> TransactionType:
        return TransactionType.SELL if self.quantity < 0 else TransactionType.BUY

    @property
    def is_sell(self) -> bool:
        return self.txn_type == TransactionType.SELL

    @property
    def amount(self) -> Decimal:
        """Signed capital moved by this trade (negative for sells)."""
        return self.unit_price * self.quantity
