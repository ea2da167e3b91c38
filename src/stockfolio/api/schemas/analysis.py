"""Pydantic schemas for price and analysis endpoints."""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel

from stockfolio.domain.models import GainLossDirection, Resolution


class PriceResponse(BaseModel):
    """Response schema for a close price lookup."""

    symbol: str
    on_date: date
    close: Decimal


class MovingAverageResponse(BaseModel):
    """Response schema for a moving average."""

    symbol: str
    end_date: date
    window_days: int
    average: Decimal


class CrossoverResponse(BaseModel):
    """Response schema for price-over-average crossover days."""

    symbol: str
    days: list[date]


class MovingCrossoverResponse(BaseModel):
    """Response schema for short/long moving-average crossovers."""

    symbol: str
    golden_crosses: list[date]
    death_crosses: list[date]
    crossover_days: list[date]


class GainLossResponse(BaseModel):
    """Response schema for a day's close-versus-open movement."""

    symbol: str
    on_date: date
    direction: GainLossDirection
    amount: Decimal


class PerformancePointResponse(BaseModel):
    on_date: date
    value: Decimal


class PerformanceResponse(BaseModel):
    """Response schema for a sampled value series."""

    identifier: str
    resolution: Resolution
    points: list[PerformancePointResponse]
