"""Pydantic schemas for portfolio endpoints."""

from datetime import date
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from stockfolio.domain.models import InvestmentFrequency, TransactionType


class PortfolioCreate(BaseModel):
    """Request schema for creating a portfolio."""

    name: str = Field(..., max_length=255, description="Unique portfolio name")


class PortfolioResponse(BaseModel):
    """Response schema for a single portfolio."""

    name: str
    symbols: list[str] = Field(default_factory=list)


class PortfolioListResponse(BaseModel):
    """Response schema for listing portfolios."""

    portfolios: list[str]
    count: int


class TradeRequest(BaseModel):
    """Request schema for a buy or sell."""

    symbol: str = Field(..., min_length=1, max_length=16)
    quantity: Decimal
    trade_date: date
    price: Optional[Decimal] = Field(
        default=None,
        description="Unit price; defaults to the close on trade_date",
    )

    @field_validator("symbol")
    @classmethod
    def normalize_symbol(cls, v: str) -> str:
        return v.strip().upper()


class TransactionResponse(BaseModel):
    """Response schema for a recorded transaction."""

    symbol: str
    txn_type: TransactionType
    quantity: Decimal
    unit_price: Decimal
    txn_date: date


class ValuationResponse(BaseModel):
    """Response schema for value / invested-capital queries."""

    portfolio: str
    on_date: date
    amount: Decimal


class HoldingResponse(BaseModel):
    """Response schema for a single holding."""

    symbol: str
    quantity: Decimal
    last_price: Optional[Decimal] = None
    market_value: Optional[Decimal] = None


class CompositionResponse(BaseModel):
    """Response schema for a portfolio's holdings on a date."""

    portfolio: str
    on_date: date
    holdings: list[HoldingResponse]


class WeightedInvestmentRequest(BaseModel):
    """Request schema for a one-off investment split by percentage weights."""

    amount: Decimal
    on_date: date
    weights: dict[str, Decimal] = Field(..., description="Symbol -> percent, summing to 100")


class DollarCostAverageRequest(BaseModel):
    """Request schema for a recurring investment plan."""

    amount: Decimal
    start_date: date
    end_date: date
    frequency: InvestmentFrequency
    weights: dict[str, Decimal] = Field(..., description="Symbol -> percent, summing to 100")


class PortfolioFileRequest(BaseModel):
    """Request schema naming a portfolio file (configured path if omitted)."""

    path: Optional[str] = None


class ImportSummaryResponse(BaseModel):
    """Response schema for portfolio file import results."""

    imported_count: int
    error_count: int
    errors: list[str]
    portfolio_names: list[str]


class ExportResponse(BaseModel):
    """Response schema for portfolio file export."""

    path: str
    row_count: int
