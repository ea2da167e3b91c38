"""Pydantic schemas for API request/response."""

from stockfolio.api.schemas.portfolio import (
    PortfolioCreate,
    PortfolioResponse,
    PortfolioListResponse,
    TradeRequest,
    TransactionResponse,
    ValuationResponse,
    HoldingResponse,
    CompositionResponse,
    WeightedInvestmentRequest,
    DollarCostAverageRequest,
    PortfolioFileRequest,
    ImportSummaryResponse,
    ExportResponse,
)
from stockfolio.api.schemas.analysis import (
    PriceResponse,
    MovingAverageResponse,
    CrossoverResponse,
    MovingCrossoverResponse,
    GainLossResponse,
    PerformancePointResponse,
    PerformanceResponse,
)

__all__ = [
    "PortfolioCreate",
    "PortfolioResponse",
    "PortfolioListResponse",
    "TradeRequest",
    "TransactionResponse",
    "ValuationResponse",
    "HoldingResponse",
    "CompositionResponse",
    "WeightedInvestmentRequest",
    "DollarCostAverageRequest",
    "PortfolioFileRequest",
    "ImportSummaryResponse",
    "ExportResponse",
    "PriceResponse",
    "MovingAverageResponse",
    "CrossoverResponse",
    "MovingCrossoverResponse",
    "GainLossResponse",
    "PerformancePointResponse",
    "PerformanceResponse",
]
