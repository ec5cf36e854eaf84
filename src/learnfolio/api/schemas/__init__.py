"""Pydantic schemas for API request/response."""

from learnfolio.api.schemas.portfolio import (
    CashAdjustRequest,
    CashResponse,
    BuyRequest,
    EditHoldingRequest,
    HoldingResponse,
    PortfolioSummaryResponse,
    TradeResponse,
    AllocationItemResponse,
    AllocationResponse,
)
from learnfolio.api.schemas.watchlist import WatchlistAddRequest, WatchlistItemResponse
from learnfolio.api.schemas.refresh import RefreshRequest, RefreshResponse
from learnfolio.api.schemas.research import (
    QuoteResponse,
    CompanyOverviewResponse,
    SavingsPlanRequest,
    SavingsProjectionResponse,
)

__all__ = [
    "CashAdjustRequest",
    "CashResponse",
    "BuyRequest",
    "EditHoldingRequest",
    "HoldingResponse",
    "PortfolioSummaryResponse",
    "TradeResponse",
    "AllocationItemResponse",
    "AllocationResponse",
    "WatchlistAddRequest",
    "WatchlistItemResponse",
    "RefreshRequest",
    "RefreshResponse",
    "QuoteResponse",
    "CompanyOverviewResponse",
    "SavingsPlanRequest",
    "SavingsProjectionResponse",
]
