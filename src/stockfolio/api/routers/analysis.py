"""Price and trend-analysis endpoints."""

from datetime import date

from fastapi import APIRouter, Depends, Query

from stockfolio.api.deps import (
    get_indicator_service,
    get_performance_service,
    get_price_lookup,
)
from stockfolio.api.schemas import (
    CrossoverResponse,
    GainLossResponse,
    MovingAverageResponse,
    MovingCrossoverResponse,
    PerformancePointResponse,
    PerformanceResponse,
    PriceResponse,
)
from stockfolio.services import IndicatorService, PerformanceService, PriceLookupService

router = APIRouter(prefix="/analysis", tags=["analysis"])


@router.get("/prices/{symbol}", response_model=PriceResponse)
def get_price(
    symbol: str,
    on_date: date = Query(..., description="Trading day"),
    prices: PriceLookupService = Depends(get_price_lookup),
) -> PriceResponse:
    """Close price on a date (zero when the day has no data)."""
    symbol = symbol.strip().upper()
    return PriceResponse(symbol=symbol, on_date=on_date, close=prices.price_on_date(symbol, on_date))


@router.get("/prices/{symbol}/last-close", response_model=PriceResponse)
def get_last_close(
    symbol: str,
    on_date: date = Query(..., description="Latest close on or shortly before this date"),
    prices: PriceLookupService = Depends(get_price_lookup),
) -> PriceResponse:
    """Close on the date or the nearest earlier trading day."""
    symbol = symbol.strip().upper()
    return PriceResponse(
        symbol=symbol, on_date=on_date, close=prices.last_close_price(symbol, on_date)
    )


@router.get("/moving-average/{symbol}", response_model=MovingAverageResponse)
def get_moving_average(
    symbol: str,
    end_date: date = Query(...),
    window_days: int = Query(..., description="Calendar days in the window"),
    indicators: IndicatorService = Depends(get_indicator_service),
) -> MovingAverageResponse:
    """Mean close over a calendar window ending at end_date."""
    symbol = symbol.strip().upper()
    average = indicators.moving_average(symbol, end_date, window_days)
    return MovingAverageResponse(
        symbol=symbol, end_date=end_date, window_days=window_days, average=average
    )


@router.get("/crossovers/{symbol}", response_model=CrossoverResponse)
def get_crossovers(
    symbol: str,
    start_date: date = Query(...),
    end_date: date = Query(...),
    indicators: IndicatorService = Depends(get_indicator_service),
) -> CrossoverResponse:
    """Days the close moved above its 30-day average."""
    symbol = symbol.strip().upper()
    return CrossoverResponse(
        symbol=symbol, days=indicators.crossover_days(symbol, start_date, end_date)
    )


@router.get("/moving-crossovers/{symbol}", response_model=MovingCrossoverResponse)
def get_moving_crossovers(
    symbol: str,
    start_date: date = Query(...),
    end_date: date = Query(...),
    short_window: int = Query(...),
    long_window: int = Query(...),
    indicators: IndicatorService = Depends(get_indicator_service),
) -> MovingCrossoverResponse:
    """Golden and death crosses of two moving averages."""
    symbol = symbol.strip().upper()
    report = indicators.moving_crossover_days(
        symbol, start_date, end_date, short_window, long_window
    )
    return MovingCrossoverResponse(
        symbol=symbol,
        golden_crosses=report.golden_crosses,
        death_crosses=report.death_crosses,
        crossover_days=report.crossover_days,
    )


@router.get("/gain-loss/{symbol}", response_model=GainLossResponse)
def get_gain_loss(
    symbol: str,
    on_date: date = Query(...),
    indicators: IndicatorService = Depends(get_indicator_service),
) -> GainLossResponse:
    """Whether the symbol gained or lost on a day."""
    view = indicators.gain_loss(symbol, on_date)
    return GainLossResponse(
        symbol=view.symbol, on_date=view.on_date, direction=view.direction, amount=view.amount
    )


@router.get("/performance/{identifier}", response_model=PerformanceResponse)
def get_performance(
    identifier: str,
    start_date: date = Query(...),
    end_date: date = Query(...),
    performance: PerformanceService = Depends(get_performance_service),
) -> PerformanceResponse:
    """Sampled value series for a portfolio name or a symbol."""
    series = performance.performance(
        performance.resolve_identifier(identifier), start_date, end_date
    )
    return PerformanceResponse(
        identifier=series.identifier,
        resolution=series.resolution,
        points=[PerformancePointResponse(on_date=p.on_date, value=p.value) for p in series.points],
    )
