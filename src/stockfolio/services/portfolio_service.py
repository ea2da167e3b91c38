"""Portfolio service for trades and point-in-time valuation."""

import logging
from datetime import date
from decimal import Decimal
from typing import Callable, Optional

from dateutil.relativedelta import relativedelta

from stockfolio.core.exceptions import (
    DuplicateNameError,
    DuplicateTransactionError,
    EmptyNameError,
    FutureDateError,
    InsufficientQuantityError,
    InvalidDateRangeError,
    InvalidQuantityError,
    NoPriceDataError,
    PortfolioNotFoundError,
    ValidationError,
    WeekendDateError,
)
from stockfolio.core.timezone import is_weekend, roll_forward_to_weekday, today_eastern
from stockfolio.core.util import ZERO, normalize_symbol, to_decimal
from stockfolio.domain.models import InvestmentFrequency, Portfolio, Transaction
from stockfolio.domain.views import HoldingView
from stockfolio.repositories.protocols import PortfolioRepository
from stockfolio.services.price_lookup_service import PriceLookupService

logger = logging.getLogger(__name__)

HUNDRED = Decimal("100")

_FREQUENCY_STEPS: dict[InvestmentFrequency, relativedelta] = {
    InvestmentFrequency.DAILY: relativedelta(days=1),
    InvestmentFrequency.WEEKLY: relativedelta(weeks=1),
    InvestmentFrequency.MONTHLY: relativedelta(months=1),
    InvestmentFrequency.YEARLY: relativedelta(years=1),
}


class PortfolioService:
    """
    Service for managing portfolios and their ledgers.

    Handles creation, buys and sells with calendar validation, and
    valuation / invested-capital queries as of any date.
    """

    def __init__(
        self,
        portfolio_repo: PortfolioRepository,
        price_lookup: PriceLookupService,
        clock: Callable[[], date] = today_eastern,
    ):
        self._repo = portfolio_repo
        self._prices = price_lookup
        self._clock = clock

    # Registry

    def create_portfolio(self, name: str) -> Portfolio:
        """
        Create a new, empty portfolio.

        Names must be non-blank and unique ignoring case.
        """
        name = (name or "").strip()
        if not name:
            raise EmptyNameError()
        if self._repo.exists(name):
            raise DuplicateNameError(name)
        portfolio = self._repo.add(Portfolio(name=name))
        logger.info("Created portfolio %s", name)
        return portfolio

    def get_portfolio(self, name: str) -> Portfolio:
        portfolio = self._repo.get_by_name(name or "")
        if portfolio is None:
            raise PortfolioNotFoundError(name)
        return portfolio

    def portfolio_exists(self, name: str) -> bool:
        return self._repo.exists(name or "")

    def list_portfolio_names(self) -> list[str]:
        return [p.name for p in self._repo.list_all()]

    def portfolio_count(self) -> int:
        return self._repo.count()

    def remove_portfolio(self, name: str) -> None:
        if not self._repo.remove(name or ""):
            raise PortfolioNotFoundError(name)

    # Trades

    def add_stock(
        self,
        portfolio_name: str,
        symbol: str,
        quantity,
        on_date: date,
        price: Optional[Decimal] = None,
    ) -> Transaction:
        """
        Buy quantity of symbol on on_date.

        The unit price defaults to that day's close from the price
        lookup, so an unknown symbol fails with InvalidSymbol.
        """
        portfolio, symbol, quantity = self._validate_trade(portfolio_name, symbol, quantity, on_date)
        unit_price = price if price is not None else self._prices.price_on_date(symbol, on_date)
        if unit_price == 0:
            logger.warning("No close price for %s on %s; recording zero unit price", symbol, on_date)
        txn = portfolio.get_or_create_ledger(symbol).buy(quantity, on_date, unit_price)
        logger.info("Bought %s %s on %s in %s", quantity, symbol, on_date, portfolio.name)
        return txn

    def sell_stock(
        self,
        portfolio_name: str,
        symbol: str,
        quantity,
        on_date: date,
        price: Optional[Decimal] = None,
    ) -> Transaction:
        """Sell quantity of symbol on on_date; the holding on that date must cover it."""
        portfolio, symbol, quantity = self._validate_trade(portfolio_name, symbol, quantity, on_date)
        ledger = portfolio.get_ledger(symbol)
        if ledger is None:
            raise InsufficientQuantityError(symbol, str(quantity), "0")
        unit_price = price if price is not None else self._prices.price_on_date(symbol, on_date)
        txn = ledger.sell(quantity, on_date, unit_price)
        logger.info("Sold %s %s on %s in %s", quantity, symbol, on_date, portfolio.name)
        return txn

    def _validate_trade(
        self,
        portfolio_name: str,
        symbol: str,
        quantity,
        on_date: date,
    ) -> tuple[Portfolio, str, Decimal]:
        portfolio = self.get_portfolio(portfolio_name)
        symbol = normalize_symbol(symbol)
        if not symbol:
            raise ValidationError("Stock symbol cannot be empty")
        quantity = to_decimal(quantity)
        if quantity <= 0:
            raise InvalidQuantityError(quantity)
        self._check_not_future(on_date)
        if is_weekend(on_date):
            raise WeekendDateError(on_date)
        ledger = portfolio.get_ledger(symbol)
        if ledger is not None and ledger.has_activity_on(on_date):
            raise DuplicateTransactionError(symbol, on_date)
        return portfolio, symbol, quantity

    # Valuation

    def value_as_of(self, portfolio_name: str, on_date: date) -> Decimal:
        """Market value of every holding on on_date."""
        self._check_not_future(on_date)
        portfolio = self.get_portfolio(portfolio_name)
        return portfolio.value_as_of(self._prices, on_date)

    def investment_as_of(self, portfolio_name: str, on_date: date) -> Decimal:
        """Net capital invested strictly before on_date."""
        return self.get_portfolio(portfolio_name).investment_as_of(on_date)

    def composition_as_of(self, portfolio_name: str, on_date: date) -> list[HoldingView]:
        """Holdings with a positive quantity on on_date, priced at the latest close."""
        self._check_not_future(on_date)
        portfolio = self.get_portfolio(portfolio_name)
        holdings: list[HoldingView] = []
        for symbol, quantity in portfolio.holdings_as_of(on_date).items():
            last_price = self._prices.last_close_price(symbol, on_date)
            holdings.append(
                HoldingView(
                    symbol=symbol,
                    quantity=quantity,
                    last_price=last_price,
                    market_value=quantity * last_price,
                )
            )
        return holdings

    def earliest_activity_date(self, portfolio_name: str) -> date:
        earliest = self.get_portfolio(portfolio_name).earliest_activity_date()
        if earliest is None:
            raise ValidationError(f"Portfolio does not contain any stocks: {portfolio_name}")
        return earliest

    # Strategies

    def invest_by_weights(
        self,
        portfolio_name: str,
        amount,
        on_date: date,
        weights: dict[str, Decimal],
    ) -> list[tuple[str, Transaction]]:
        """
        Split amount across symbols by percentage weights (summing to 100).

        Buys fractional quantities at each symbol's latest close on
        on_date. Every leg is validated before any ledger is touched.
        Returns (symbol, transaction) pairs in the order of weights.
        """
        portfolio = self.get_portfolio(portfolio_name)
        orders = self._plan_weighted_orders(portfolio, to_decimal(amount), on_date, weights)
        return [
            (symbol, portfolio.get_or_create_ledger(symbol).buy(quantity, on_date, price))
            for symbol, quantity, price in orders
        ]

    def dollar_cost_average(
        self,
        portfolio_name: str,
        amount,
        start: date,
        end: date,
        frequency: InvestmentFrequency,
        weights: dict[str, Decimal],
    ) -> list[tuple[str, Transaction]]:
        """
        Invest amount by weights on a recurring schedule from start until before end.

        Scheduled weekend dates roll forward to Monday; dates that
        collapse onto an earlier one are invested once.
        """
        if start > end:
            raise InvalidDateRangeError(f"Start date {start} is after end date {end}")
        self._check_not_future(start)
        self._check_not_future(end)
        portfolio = self.get_portfolio(portfolio_name)
        amount = to_decimal(amount)
        step = _FREQUENCY_STEPS[InvestmentFrequency(frequency)]

        schedule: list[date] = []
        scheduled = start
        while scheduled < end:
            trade_date = roll_forward_to_weekday(scheduled)
            if trade_date < end and trade_date not in schedule:
                schedule.append(trade_date)
            scheduled += step

        plan = [
            (trade_date, self._plan_weighted_orders(portfolio, amount, trade_date, weights))
            for trade_date in schedule
        ]
        transactions: list[tuple[str, Transaction]] = []
        for trade_date, orders in plan:
            for symbol, quantity, price in orders:
                txn = portfolio.get_or_create_ledger(symbol).buy(quantity, trade_date, price)
                transactions.append((symbol, txn))
        logger.info(
            "Dollar-cost averaged %s into %s on %d dates", amount, portfolio.name, len(schedule)
        )
        return transactions

    def _plan_weighted_orders(
        self,
        portfolio: Portfolio,
        amount: Decimal,
        on_date: date,
        weights: dict[str, Decimal],
    ) -> list[tuple[str, Decimal, Decimal]]:
        if amount <= 0:
            raise ValidationError(f"Investment amount must be positive: {amount}")
        self._check_not_future(on_date)
        normalized = {normalize_symbol(s): to_decimal(w) for s, w in weights.items()}
        if not normalized or None in normalized:
            raise ValidationError("Weights must name at least one symbol")
        if any(w < 0 for w in normalized.values()) or sum(normalized.values()) != HUNDRED:
            raise ValidationError("Stock weights must be non-negative and sum to 100")

        orders: list[tuple[str, Decimal, Decimal]] = []
        for symbol, weight in normalized.items():
            if weight == 0:
                continue
            ledger = portfolio.get_ledger(symbol)
            if ledger is not None and ledger.has_activity_on(on_date):
                raise DuplicateTransactionError(symbol, on_date)
            price = self._prices.last_close_price(symbol, on_date)
            if price == ZERO:
                raise NoPriceDataError(symbol, on_date)
            orders.append((symbol, amount * weight / HUNDRED / price, price))
        return orders

    def _check_not_future(self, on_date: date) -> None:
        if on_date > self._clock():
            raise FutureDateError(on_date)
