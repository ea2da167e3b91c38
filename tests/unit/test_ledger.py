"""
Unit tests for the Ledger and Portfolio domain models.

Tests cover:
- Derived quantity as of a date
- Buy and sell validation
- Date-scoped sell availability
- Invested capital and market value
"""

from datetime import date
from decimal import Decimal

import pytest

from stockfolio.core.exceptions import InsufficientQuantityError, InvalidQuantityError
from stockfolio.domain.models import Ledger, Portfolio, TransactionType


class FixedPriceLookup:
    """Answers every last-close query with one price and counts calls."""

    def __init__(self, price: Decimal):
        self.price = price
        self.calls = 0

    def last_close_price(self, symbol: str, on_date: date) -> Decimal:
        self.calls += 1
        return self.price


D1 = date(2024, 2, 5)
D2 = date(2024, 2, 6)
D3 = date(2024, 2, 7)
D4 = date(2024, 2, 8)


# =============================================================================
# QUANTITY TESTS
# =============================================================================


class TestLedgerQuantity:
    """Tests for quantity_as_of() and running_quantity."""

    def test_buy_visible_same_day(self):
        """
        GIVEN an empty ledger
        WHEN I buy 10 on D2
        THEN quantity is 0 on D1 and 10 on D2 and later
        """
        ledger = Ledger(symbol="AAPL")

        ledger.buy(Decimal("10"), D2, Decimal("100"))

        assert ledger.quantity_as_of(D1) == 0
        assert ledger.quantity_as_of(D2) == Decimal("10")
        assert ledger.quantity_as_of(D4) == Decimal("10")

    def test_quantity_monotone_for_buys(self):
        """
        GIVEN buys on D1, D2 and D3
        WHEN I read quantities in date order
        THEN they never decrease
        """
        ledger = Ledger(symbol="AAPL")
        for d, q in ((D1, "1"), (D2, "2.5"), (D3, "3")):
            ledger.buy(Decimal(q), d, Decimal("100"))

        quantities = [ledger.quantity_as_of(d) for d in (D1, D2, D3, D4)]

        assert quantities == sorted(quantities)
        assert ledger.running_quantity == Decimal("6.5")

    def test_second_buy_same_day_replaces_first(self):
        """
        GIVEN a buy of 10 on D2
        WHEN I buy 4 on D2 again
        THEN the log holds one entry with quantity 4
        """
        ledger = Ledger(symbol="AAPL")
        ledger.buy(Decimal("10"), D2, Decimal("100"))

        ledger.buy(Decimal("4"), D2, Decimal("101"))

        assert len(ledger.activity_log) == 1
        assert ledger.quantity_as_of(D2) == Decimal("4")

    def test_activity_log_sorted_and_first_date(self):
        """
        GIVEN buys entered out of order
        WHEN I read the activity log
        THEN it is in date order and first_activity_date is the earliest
        """
        ledger = Ledger(symbol="AAPL")
        ledger.buy(Decimal("1"), D3, Decimal("100"))
        ledger.buy(Decimal("1"), D1, Decimal("100"))

        assert [t.txn_date for t in ledger.activity_log] == [D1, D3]
        assert ledger.first_activity_date == D1
        assert ledger.has_activity_on(D3)
        assert not ledger.has_activity_on(D2)


# =============================================================================
# BUY / SELL VALIDATION TESTS
# =============================================================================


class TestLedgerTrades:
    """Tests for buy() and sell()."""

    @pytest.mark.parametrize("quantity", ["0", "-1"])
    def test_buy_non_positive_quantity_rejected(self, quantity):
        """
        GIVEN an empty ledger
        WHEN I buy a zero or negative quantity
        THEN InvalidQuantityError is raised
        """
        with pytest.raises(InvalidQuantityError):
            Ledger(symbol="AAPL").buy(Decimal(quantity), D1, Decimal("100"))

    def test_sell_negative_quantity_rejected(self):
        """
        GIVEN a ledger holding shares
        WHEN I sell a negative quantity
        THEN InvalidQuantityError is raised
        """
        ledger = Ledger(symbol="AAPL")
        ledger.buy(Decimal("10"), D1, Decimal("100"))

        with pytest.raises(InvalidQuantityError):
            ledger.sell(Decimal("-1"), D2, Decimal("100"))

    def test_oversell_rejected(self):
        """
        GIVEN a ledger holding 10
        WHEN I sell 11
        THEN InsufficientQuantityError is raised and nothing is written
        """
        ledger = Ledger(symbol="AAPL")
        ledger.buy(Decimal("10"), D1, Decimal("100"))

        with pytest.raises(InsufficientQuantityError):
            ledger.sell(Decimal("11"), D2, Decimal("100"))
        assert not ledger.has_activity_on(D2)

    def test_sell_full_holding_leaves_zero(self):
        """
        GIVEN a ledger holding 10
        WHEN I sell 10 on D2
        THEN quantity is 0 from D2 and the entry is a SELL with negative quantity
        """
        ledger = Ledger(symbol="AAPL")
        ledger.buy(Decimal("10"), D1, Decimal("100"))

        txn = ledger.sell(Decimal("10"), D2, Decimal("110"))

        assert txn.txn_type == TransactionType.SELL
        assert txn.quantity == Decimal("-10")
        assert ledger.quantity_as_of(D2) == 0
        assert ledger.quantity_as_of(D1) == Decimal("10")

    def test_sell_before_first_buy_rejected(self):
        """
        GIVEN a buy on D3
        WHEN I sell on D2
        THEN InsufficientQuantityError is raised
        """
        ledger = Ledger(symbol="AAPL")
        ledger.buy(Decimal("10"), D3, Decimal("100"))

        with pytest.raises(InsufficientQuantityError):
            ledger.sell(Decimal("1"), D2, Decimal("100"))

    def test_backdated_sell_cannot_break_later_sell(self):
        """
        GIVEN buy 10 on D1 and sell 8 on D3
        WHEN I try to sell 5 on D2
        THEN it is rejected because D3 would go negative, but selling 2 is allowed
        """
        ledger = Ledger(symbol="AAPL")
        ledger.buy(Decimal("10"), D1, Decimal("100"))
        ledger.sell(Decimal("8"), D3, Decimal("100"))

        assert ledger.available_to_sell(D2) == Decimal("2")
        with pytest.raises(InsufficientQuantityError):
            ledger.sell(Decimal("5"), D2, Decimal("100"))
        ledger.sell(Decimal("2"), D2, Decimal("100"))
        assert ledger.quantity_as_of(D4) == 0


# =============================================================================
# VALUATION TESTS
# =============================================================================


class TestLedgerValuation:
    """Tests for investment_as_of() and value_as_of()."""

    def test_investment_counts_strictly_earlier_trades(self):
        """
        GIVEN buy 10 @ 100 on D1 and sell 4 @ 120 on D3
        WHEN I read investment on D1, D2, D3 and D4
        THEN it is 0, 1000, 1000 and 520
        """
        ledger = Ledger(symbol="AAPL")
        ledger.buy(Decimal("10"), D1, Decimal("100"))
        ledger.sell(Decimal("4"), D3, Decimal("120"))

        assert ledger.investment_as_of(D1) == 0
        assert ledger.investment_as_of(D2) == Decimal("1000")
        assert ledger.investment_as_of(D3) == Decimal("1000")
        assert ledger.investment_as_of(D4) == Decimal("520")

    def test_value_uses_last_close(self):
        """
        GIVEN a ledger holding 10 and a lookup pricing at 150
        WHEN I value it on D2
        THEN the value is 1500
        """
        ledger = Ledger(symbol="AAPL")
        ledger.buy(Decimal("10"), D1, Decimal("100"))

        assert ledger.value_as_of(FixedPriceLookup(Decimal("150")), D2) == Decimal("1500")

    def test_value_with_no_holding_skips_lookup(self):
        """
        GIVEN a ledger whose first buy is on D3
        WHEN I value it on D1
        THEN the value is zero and no price is requested
        """
        ledger = Ledger(symbol="AAPL")
        ledger.buy(Decimal("10"), D3, Decimal("100"))
        lookup = FixedPriceLookup(Decimal("150"))

        assert ledger.value_as_of(lookup, D1) == 0
        assert lookup.calls == 0


class TestPortfolioModel:
    """Tests for Portfolio aggregation."""

    def test_holdings_value_and_investment_aggregate_ledgers(self):
        """
        GIVEN a portfolio with AAPL 10 @ 100 and GOOGL 5 @ 50 bought on D1
        WHEN I aggregate on D2 with a lookup pricing at 10
        THEN holdings, value and investment sum over ledgers
        """
        portfolio = Portfolio(name="P")
        portfolio.get_or_create_ledger("AAPL").buy(Decimal("10"), D1, Decimal("100"))
        portfolio.get_or_create_ledger("GOOGL").buy(Decimal("5"), D1, Decimal("50"))

        assert portfolio.holdings_as_of(D2) == {"AAPL": Decimal("10"), "GOOGL": Decimal("5")}
        assert portfolio.value_as_of(FixedPriceLookup(Decimal("10")), D2) == Decimal("150")
        assert portfolio.investment_as_of(D2) == Decimal("1250")
        assert portfolio.symbols == ["AAPL", "GOOGL"]
        assert portfolio.earliest_activity_date() == D1

    def test_empty_portfolio(self):
        """
        GIVEN an empty portfolio
        WHEN I query it
        THEN it has no holdings and no earliest date
        """
        portfolio = Portfolio(name="Empty")

        assert portfolio.holdings_as_of(D1) == {}
        assert portfolio.earliest_activity_date() is None
        assert portfolio.quantity_as_of("AAPL", D1) == 0
