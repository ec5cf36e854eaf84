"""Portfolio endpoints: cash, trades, valuation and price refresh."""

from fastapi import APIRouter, Depends

from learnfolio.api.deps import get_ledger_service, get_refresher
from learnfolio.api.routers.refresh_common import run_refresh
from learnfolio.api.schemas import (
    AllocationResponse,
    BuyRequest,
    CashAdjustRequest,
    CashResponse,
    EditHoldingRequest,
    PortfolioSummaryResponse,
    RefreshRequest,
    RefreshResponse,
    TradeResponse,
)
from learnfolio.services import BatchRefresher, LedgerService, valuation

router = APIRouter(prefix="/portfolio", tags=["portfolio"])


@router.get("", response_model=PortfolioSummaryResponse)
def get_portfolio(
    ledger: LedgerService = Depends(get_ledger_service),
) -> PortfolioSummaryResponse:
    """Cash, total value, total gain/loss, best performer and every lot."""
    summary = valuation.summarize(ledger.holdings, ledger.cash)
    return PortfolioSummaryResponse.model_validate(summary)


@router.get("/allocation", response_model=AllocationResponse)
def get_allocation(
    ledger: LedgerService = Depends(get_ledger_service),
) -> AllocationResponse:
    """Market value share per symbol."""
    return AllocationResponse.model_validate(valuation.allocation(ledger.holdings))


@router.post("/cash", response_model=CashResponse)
def adjust_cash(
    data: CashAdjustRequest,
    ledger: LedgerService = Depends(get_ledger_service),
) -> CashResponse:
    """Deposit (positive delta) or withdraw (negative delta) cash."""
    return CashResponse(cash=ledger.adjust_cash(data.delta))


@router.post("/holdings", response_model=TradeResponse, status_code=201)
def buy(
    data: BuyRequest,
    ledger: LedgerService = Depends(get_ledger_service),
) -> TradeResponse:
    """Buy a new lot at the given price."""
    holding_id = ledger.buy(data.symbol, data.shares, data.price, name=data.name)
    return TradeResponse(
        cash=ledger.cash,
        amount=data.shares * data.price,
        holding_id=holding_id,
    )


@router.patch("/holdings/{holding_id}", response_model=TradeResponse)
def edit_holding(
    holding_id: str,
    data: EditHoldingRequest,
    ledger: LedgerService = Depends(get_ledger_service),
) -> TradeResponse:
    """Correct shares and cost basis; the cost difference is settled in cash."""
    difference = ledger.edit_holding(holding_id, data.shares, data.buy_price)
    return TradeResponse(cash=ledger.cash, amount=difference, holding_id=holding_id)


@router.delete("/holdings/{holding_id}", response_model=TradeResponse)
def sell(
    holding_id: str,
    ledger: LedgerService = Depends(get_ledger_service),
) -> TradeResponse:
    """Sell a whole lot at its latest price."""
    proceeds = ledger.sell(holding_id)
    return TradeResponse(cash=ledger.cash, amount=proceeds, holding_id=holding_id)


@router.post("/liquidate", response_model=TradeResponse)
def liquidate(
    ledger: LedgerService = Depends(get_ledger_service),
) -> TradeResponse:
    """Sell every lot and return the proceeds to cash."""
    proceeds = ledger.liquidate_all()
    return TradeResponse(cash=ledger.cash, amount=proceeds)


@router.post("/refresh", response_model=RefreshResponse)
async def refresh_prices(
    data: RefreshRequest,
    refresher: BatchRefresher = Depends(get_refresher),
) -> RefreshResponse:
    """Re-price every held symbol through the quote source."""
    return await run_refresh(refresher.refresh_holdings, refresher, data.confirm)


@router.post("/refresh/cancel", response_model=RefreshResponse)
def cancel_refresh(
    refresher: BatchRefresher = Depends(get_refresher),
) -> RefreshResponse:
    """Stop the running batch (holdings or watchlist) before its next symbol."""
    if refresher.cancel():
        return RefreshResponse(
            state=refresher.state,
            cancelled=True,
            message="Refresh will stop before the next symbol",
        )
    return RefreshResponse(state=refresher.state, message="No refresh is running")
