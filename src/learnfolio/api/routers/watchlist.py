"""Watchlist endpoints."""

from fastapi import APIRouter, Depends, Response

from learnfolio.api.deps import (
    get_market_data_service,
    get_refresher,
    get_watchlist_service,
)
from learnfolio.api.routers.refresh_common import run_refresh
from learnfolio.api.schemas import (
    RefreshRequest,
    RefreshResponse,
    WatchlistAddRequest,
    WatchlistItemResponse,
)
from learnfolio.services import BatchRefresher, MarketDataService, WatchlistService
from learnfolio.services.valuation import watchlist_view

router = APIRouter(prefix="/watchlist", tags=["watchlist"])


@router.get("", response_model=list[WatchlistItemResponse])
def list_watchlist(
    watchlist: WatchlistService = Depends(get_watchlist_service),
) -> list[WatchlistItemResponse]:
    return [WatchlistItemResponse.model_validate(v) for v in watchlist.views()]


@router.post("", response_model=WatchlistItemResponse, status_code=201)
def add_to_watchlist(
    data: WatchlistAddRequest,
    watchlist: WatchlistService = Depends(get_watchlist_service),
    market: MarketDataService = Depends(get_market_data_service),
) -> WatchlistItemResponse:
    """Start watching a symbol; looks up the current price when none is given."""
    price = data.price
    if price is None:
        price = market.get_quote(data.symbol).price
    item = watchlist.add(data.symbol, price)
    return WatchlistItemResponse.model_validate(watchlist_view(item))


@router.delete("/{item_id}", status_code=204)
def remove_from_watchlist(
    item_id: str,
    watchlist: WatchlistService = Depends(get_watchlist_service),
) -> Response:
    watchlist.remove(item_id)
    return Response(status_code=204)


@router.post("/refresh", response_model=RefreshResponse)
async def refresh_watchlist(
    data: RefreshRequest,
    refresher: BatchRefresher = Depends(get_refresher),
) -> RefreshResponse:
    """Re-price every watched symbol through the quote source."""
    return await run_refresh(refresher.refresh_watchlist, refresher, data.confirm)
