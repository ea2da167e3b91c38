"""Per-instrument ledger of dated trades."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Optional, Protocol

from stockfolio.core.exceptions import InsufficientQuantityError, InvalidQuantityError
from stockfolio.domain.models.transaction import Transaction

ZERO = Decimal("0")


class ClosePriceLookup(Protocol):
    """Anything that can answer "most recent close on or before a date"."""

    def last_close_price(self, symbol: str, on_date: date) -> Decimal:
        ...


@dataclass
class Ledger:
    """
    Append-only activity log for one instrument inside a portfolio.

    Holds at most one transaction per date: writing a second trade on
    the same date replaces the first. Quantities, value and invested
    capital are always derived from the log, never stored.
    """

    symbol: str
    _activity: dict[date, Transaction] = field(default_factory=dict, repr=False)

    @property
    def running_quantity(self) -> Decimal:
        """Quantity held after every recorded trade."""
        return sum((t.quantity for t in self._activity.values()), ZERO)

    @property
    def activity_log(self) -> list[Transaction]:
        """Date-ordered copy of the activity log."""
        return [self._activity[d] for d in sorted(self._activity)]

    @property
    def first_activity_date(self) -> Optional[date]:
        return min(self._activity) if self._activity else None

    def has_activity_on(self, on_date: date) -> bool:
        return on_date in self._activity

    def quantity_as_of(self, on_date: date) -> Decimal:
        """Sum of signed quantities traded on or before on_date."""
        return sum(
            (t.quantity for d, t in self._activity.items() if d <= on_date),
            ZERO,
        )

    def available_to_sell(self, on_date: date) -> Decimal:
        """
        Largest quantity that can be sold on on_date.

        Bounded by the holding on that date and by the holding at every
        later activity date, so a back-dated sell cannot make any later
        derived quantity negative. An existing entry on on_date is
        ignored because the sell would replace it.
        """
        entries = [self._activity[d] for d in sorted(self._activity) if d != on_date]
        running = sum((t.quantity for t in entries if t.txn_date <= on_date), ZERO)
        available = running
        for txn in entries:
            if txn.txn_date > on_date:
                running += txn.quantity
                available = min(available, running)
        return max(available, ZERO)

    def buy(self, quantity: Decimal, on_date: date, unit_price: Decimal) -> Transaction:
        if quantity <= 0:
            raise InvalidQuantityError(quantity)
        txn = Transaction(quantity=quantity, unit_price=unit_price, txn_date=on_date)
        self._activity[on_date] = txn
        return txn

    def sell(self, quantity: Decimal, on_date: date, unit_price: Decimal) -> Transaction:
        if quantity < 0:
            raise InvalidQuantityError(quantity)
        available = self.available_to_sell(on_date)
        if quantity > available:
            raise InsufficientQuantityError(self.symbol, str(quantity), str(available))
        txn = Transaction(quantity=-quantity, unit_price=unit_price, txn_date=on_date)
        self._activity[on_date] = txn
        return txn

    def investment_as_of(self, on_date: date) -> Decimal:
        """
        Net capital put in strictly before on_date.

        Sells carry a negative quantity, so they reduce the total.
        """
        return sum(
            (t.amount for d, t in self._activity.items() if d < on_date),
            ZERO,
        )

    def value_as_of(self, lookup: ClosePriceLookup, on_date: date) -> Decimal:
        """Market value of the holding on on_date using the latest available close."""
        quantity = self.quantity_as_of(on_date)
        if quantity == 0:
            return ZERO
        return quantity * lookup.last_close_price(self.symbol, on_date)
