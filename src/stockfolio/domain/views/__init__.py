"""View models for service outputs."""

from stockfolio.domain.views.analysis import (
    HoldingView,
    MovingCrossoverReport,
    GainLossView,
    PerformancePoint,
    PerformanceSeries,
    ImportSummary,
)

__all__ = [
    "HoldingView",
    "MovingCrossoverReport",
    "GainLossView",
    "PerformancePoint",
    "PerformanceSeries",
    "ImportSummary",
]
