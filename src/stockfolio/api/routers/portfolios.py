"""Portfolio endpoints."""

from datetime import date

from fastapi import APIRouter, Depends, Query

from stockfolio.api.deps import (
    get_context,
    get_csv_exporter,
    get_csv_importer,
    get_portfolio_service,
)
from stockfolio.api.schemas import (
    CompositionResponse,
    DollarCostAverageRequest,
    ExportResponse,
    HoldingResponse,
    ImportSummaryResponse,
    PortfolioCreate,
    PortfolioFileRequest,
    PortfolioListResponse,
    PortfolioResponse,
    TradeRequest,
    TransactionResponse,
    ValuationResponse,
    WeightedInvestmentRequest,
)
from stockfolio.app_context import AppContext
from stockfolio.csv import PortfolioCsvExporter, PortfolioCsvImporter
from stockfolio.domain.models import Transaction
from stockfolio.services import PortfolioService

router = APIRouter(prefix="/portfolios", tags=["portfolios"])


def _txn_response(symbol: str, txn: Transaction) -> TransactionResponse:
    return TransactionResponse(
        symbol=symbol,
        txn_type=txn.txn_type,
        quantity=txn.quantity,
        unit_price=txn.unit_price,
        txn_date=txn.txn_date,
    )


@router.get("", response_model=PortfolioListResponse)
def list_portfolios(
    service: PortfolioService = Depends(get_portfolio_service),
) -> PortfolioListResponse:
    """List portfolio names in creation order."""
    names = service.list_portfolio_names()
    return PortfolioListResponse(portfolios=names, count=len(names))


@router.post("", response_model=PortfolioResponse, status_code=201)
def create_portfolio(
    data: PortfolioCreate,
    service: PortfolioService = Depends(get_portfolio_service),
) -> PortfolioResponse:
    """Create a new, empty portfolio."""
    portfolio = service.create_portfolio(data.name)
    return PortfolioResponse(name=portfolio.name, symbols=portfolio.symbols)


@router.post("/import", response_model=ImportSummaryResponse)
def import_portfolios(
    data: PortfolioFileRequest,
    ctx: AppContext = Depends(get_context),
    importer: PortfolioCsvImporter = Depends(get_csv_importer),
) -> ImportSummaryResponse:
    """Replace the registry with the portfolios in a portfolio file."""
    path = data.path or ctx.settings.get_portfolio_path()
    summary = importer.import_csv(path)
    return ImportSummaryResponse(
        imported_count=summary.imported_count,
        error_count=summary.error_count,
        errors=summary.errors,
        portfolio_names=summary.portfolio_names,
    )


@router.post("/export", response_model=ExportResponse)
def export_portfolios(
    data: PortfolioFileRequest,
    ctx: AppContext = Depends(get_context),
    exporter: PortfolioCsvExporter = Depends(get_csv_exporter),
) -> ExportResponse:
    """Write every portfolio to a portfolio file."""
    path = data.path or ctx.settings.get_portfolio_path()
    rows = exporter.export_csv(path)
    return ExportResponse(path=str(path), row_count=rows)


@router.get("/{name}", response_model=PortfolioResponse)
def get_portfolio(
    name: str,
    service: PortfolioService = Depends(get_portfolio_service),
) -> PortfolioResponse:
    """Get a portfolio by name (case-insensitive)."""
    portfolio = service.get_portfolio(name)
    return PortfolioResponse(name=portfolio.name, symbols=portfolio.symbols)


@router.delete("/{name}", status_code=204)
def delete_portfolio(
    name: str,
    service: PortfolioService = Depends(get_portfolio_service),
) -> None:
    """Remove a portfolio from the registry."""
    service.remove_portfolio(name)


@router.post("/{name}/buy", response_model=TransactionResponse, status_code=201)
def buy_stock(
    name: str,
    data: TradeRequest,
    service: PortfolioService = Depends(get_portfolio_service),
) -> TransactionResponse:
    """Buy shares on a weekday that is not in the future."""
    txn = service.add_stock(name, data.symbol, data.quantity, data.trade_date, data.price)
    return _txn_response(data.symbol, txn)


@router.post("/{name}/sell", response_model=TransactionResponse, status_code=201)
def sell_stock(
    name: str,
    data: TradeRequest,
    service: PortfolioService = Depends(get_portfolio_service),
) -> TransactionResponse:
    """Sell shares held on the trade date."""
    txn = service.sell_stock(name, data.symbol, data.quantity, data.trade_date, data.price)
    return _txn_response(data.symbol, txn)


@router.get("/{name}/value", response_model=ValuationResponse)
def get_value(
    name: str,
    on_date: date = Query(..., description="Valuation date"),
    service: PortfolioService = Depends(get_portfolio_service),
) -> ValuationResponse:
    """Market value of the portfolio on a date."""
    amount = service.value_as_of(name, on_date)
    return ValuationResponse(portfolio=name, on_date=on_date, amount=amount)


@router.get("/{name}/investment", response_model=ValuationResponse)
def get_investment(
    name: str,
    on_date: date = Query(..., description="Capital invested strictly before this date"),
    service: PortfolioService = Depends(get_portfolio_service),
) -> ValuationResponse:
    """Net capital invested before a date."""
    amount = service.investment_as_of(name, on_date)
    return ValuationResponse(portfolio=name, on_date=on_date, amount=amount)


@router.get("/{name}/composition", response_model=CompositionResponse)
def get_composition(
    name: str,
    on_date: date = Query(..., description="Holdings date"),
    service: PortfolioService = Depends(get_portfolio_service),
) -> CompositionResponse:
    """Holdings with a positive quantity on a date."""
    holdings = service.composition_as_of(name, on_date)
    return CompositionResponse(
        portfolio=name,
        on_date=on_date,
        holdings=[
            HoldingResponse(
                symbol=h.symbol,
                quantity=h.quantity,
                last_price=h.last_price,
                market_value=h.market_value,
            )
            for h in holdings
        ],
    )


@router.post("/{name}/invest", response_model=list[TransactionResponse], status_code=201)
def invest_by_weights(
    name: str,
    data: WeightedInvestmentRequest,
    service: PortfolioService = Depends(get_portfolio_service),
) -> list[TransactionResponse]:
    """Invest an amount across symbols by percentage weights."""
    transactions = service.invest_by_weights(name, data.amount, data.on_date, data.weights)
    return [_txn_response(symbol, txn) for symbol, txn in transactions]


@router.post("/{name}/dca", response_model=list[TransactionResponse], status_code=201)
def dollar_cost_average(
    name: str,
    data: DollarCostAverageRequest,
    service: PortfolioService = Depends(get_portfolio_service),
) -> list[TransactionResponse]:
    """Invest an amount by weights on a recurring schedule."""
    transactions = service.dollar_cost_average(
        name, data.amount, data.start_date, data.end_date, data.frequency, data.weights
    )
    return [_txn_response(symbol, txn) for symbol, txn in transactions]
