"""Service layer - business logic orchestration."""

from learnfolio.services.ledger_service import LedgerService, LedgerSeed
from learnfolio.services.watchlist_service import WatchlistService
from learnfolio.services.market_data_service import MarketDataService
from learnfolio.services.rate_limiter import (
    RateLimiter,
    FixedDelayRateLimiter,
    SlidingWindowRateLimiter,
    build_rate_limiter_factory,
)
from learnfolio.services.refresh_service import (
    BatchRefresher,
    RefreshPrompter,
    AutoConfirmPrompter,
)
from learnfolio.services import valuation
from learnfolio.services.savings_projector import project

__all__ = [
    "LedgerService",
    "LedgerSeed",
    "WatchlistService",
    "MarketDataService",
    "RateLimiter",
    "FixedDelayRateLimiter",
    "SlidingWindowRateLimiter",
    "build_rate_limiter_factory",
    "BatchRefresher",
    "RefreshPrompter",
    "AutoConfirmPrompter",
    "valuation",
    "project",
]
