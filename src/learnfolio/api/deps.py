"""Dependency injection for FastAPI."""

from learnfolio.app_context import AppContext, get_app_context
from learnfolio.services import (
    BatchRefresher,
    LedgerService,
    MarketDataService,
    WatchlistService,
)


def get_context() -> AppContext:
    """Provide the process-wide AppContext."""
    return get_app_context()


def get_ledger_service() -> LedgerService:
    """Provide LedgerService instance."""
    return get_context().ledger


def get_watchlist_service() -> WatchlistService:
    """Provide WatchlistService instance."""
    return get_context().watchlist


def get_market_data_service() -> MarketDataService:
    """Provide MarketDataService instance."""
    return get_context().market_data


def get_refresher() -> BatchRefresher:
    """Provide BatchRefresher instance."""
    return get_context().refresher
