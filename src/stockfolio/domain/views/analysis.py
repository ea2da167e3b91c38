"""View models for valuation and analysis outputs."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Optional

from stockfolio.domain.models.enums import GainLossDirection, Resolution


@dataclass
class HoldingView:
    """View model for a single holding on a given date."""

    symbol: str
    quantity: Decimal
    last_price: Optional[Decimal] = None
    market_value: Optional[Decimal] = None


@dataclass
class MovingCrossoverReport:
    """Golden and death crosses of a short vs long moving average."""

    golden_crosses: list[date] = field(default_factory=list)
    death_crosses: list[date] = field(default_factory=list)

    @property
    def crossover_days(self) -> list[date]:
        """Union of both lists in date order."""
        return sorted(self.golden_crosses + self.death_crosses)


@dataclass
class GainLossView:
    """Close-versus-open movement of a symbol on one day."""

    symbol: str
    on_date: date
    direction: GainLossDirection
    amount: Decimal


@dataclass
class PerformancePoint:
    """One sampled point of a value-over-time series."""

    on_date: date
    value: Decimal


@dataclass
class PerformanceSeries:
    """Sampled series for a symbol or portfolio."""

    identifier: str
    resolution: Resolution
    points: list[PerformancePoint] = field(default_factory=list)


@dataclass
class ImportSummary:
    """Summary of a portfolio file import."""

    imported_count: int = 0
    error_count: int = 0
    errors: list[str] = field(default_factory=list)
    portfolio_names: list[str] = field(default_factory=list)
