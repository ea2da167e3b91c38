"""Domain layer - pure business models with no external dependencies."""

from stockfolio.domain.models import (
    PriceBar,
    Transaction,
    Ledger,
    Portfolio,
    Identifier,
    Symbol,
    PortfolioName,
    TransactionType,
    Resolution,
    GainLossDirection,
    InvestmentFrequency,
)

__all__ = [
    "PriceBar",
    "Transaction",
    "Ledger",
    "Portfolio",
    "Identifier",
    "Symbol",
    "PortfolioName",
    "TransactionType",
    "Resolution",
    "GainLossDirection",
    "InvestmentFrequency",
]
