"""Domain models package."""

from stockfolio.domain.models.enums import (
    TransactionType,
    Resolution,
    GainLossDirection,
    InvestmentFrequency,
)
from stockfolio.domain.models.price import PriceBar
from stockfolio.domain.models.transaction import Transaction
from stockfolio.domain.models.ledger import Ledger, ClosePriceLookup
from stockfolio.domain.models.portfolio import Portfolio
from stockfolio.domain.models.identifier import Identifier, Symbol, PortfolioName

__all__ = [
    "TransactionType",
    "Resolution",
    "GainLossDirection",
    "InvestmentFrequency",
    "PriceBar",
    "Transaction",
    "Ledger",
    "ClosePriceLookup",
    "Portfolio",
    "Identifier",
    "Symbol",
    "PortfolioName",
]
