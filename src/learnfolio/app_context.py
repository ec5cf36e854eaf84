"""Application context for in-process service management.

Holds the single ledger, watchlist and refresher of the process, so every
caller (HTTP routes, scripts, tests) works against the same state.
"""

from collections.abc import Callable
from pathlib import Path
from typing import Optional

from sqlalchemy.orm import Session

from learnfolio.config.settings import Settings, get_settings, set_settings
from learnfolio.providers import QuoteProvider, build_quote_provider
from learnfolio.repositories.protocols import DocumentStore
from learnfolio.repositories.sqlalchemy import (
    SqlAlchemyDocumentStore,
    get_session,
    init_db,
)
from learnfolio.services import (
    BatchRefresher,
    LedgerSeed,
    LedgerService,
    MarketDataService,
    RateLimiter,
    WatchlistService,
    build_rate_limiter_factory,
)


class AppContext:
    """
    Application context providing in-process access to all services.

    Services are created lazily on first access and then reused.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        store: Optional[DocumentStore] = None,
        provider: Optional[QuoteProvider] = None,
        limiter_factory: Optional[Callable[[], RateLimiter]] = None,
    ):
        """
        Initialize application context.

        Args:
            settings: Settings to use; the global settings when omitted.
            store: Document store; a SQLAlchemy store on the configured
                database when omitted.
            provider: Quote provider; chosen from settings when omitted.
            limiter_factory: Rate limiter factory for batch refreshes.
        """
        self._settings = settings or get_settings()
        self._store = store
        self._provider = provider
        self._limiter_factory = limiter_factory
        self._session: Optional[Session] = None

        self._ledger: Optional[LedgerService] = None
        self._watchlist: Optional[WatchlistService] = None
        self._market_data: Optional[MarketDataService] = None
        self._refresher: Optional[BatchRefresher] = None

    @classmethod
    def for_data_dir(cls, data_dir: Path) -> "AppContext":
        """Create a context whose database lives in data_dir."""
        settings = Settings(data_dir=data_dir)
        set_settings(settings)
        init_db(settings.get_data_dir() / "learnfolio.db")
        return cls(settings=settings)

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def store(self) -> DocumentStore:
        """Get the document store, opening the database if needed."""
        if self._store is None:
            init_db()
            self._session = get_session()
            self._store = SqlAlchemyDocumentStore(self._session)
        return self._store

    @property
    def ledger(self) -> LedgerService:
        """Get the LedgerService instance."""
        if self._ledger is None:
            self._ledger = LedgerService(
                store=self.store,
                seed=LedgerSeed.from_settings(self._settings),
            )
        return self._ledger

    @property
    def watchlist(self) -> WatchlistService:
        """Get the WatchlistService instance."""
        if self._watchlist is None:
            self._watchlist = WatchlistService(store=self.store)
        return self._watchlist

    @property
    def market_data(self) -> MarketDataService:
        """Get the MarketDataService instance."""
        if self._market_data is None:
            provider = self._provider or build_quote_provider(self._settings)
            self._market_data = MarketDataService(
                provider=provider,
                cache_ttl_seconds=self._settings.market_data_cache_ttl_seconds,
            )
        return self._market_data

    @property
    def refresher(self) -> BatchRefresher:
        """Get the BatchRefresher instance."""
        if self._refresher is None:
            self._refresher = BatchRefresher(
                market_data=self.market_data,
                ledger=self.ledger,
                watchlist=self.watchlist,
                limiter_factory=self._limiter_factory
                or build_rate_limiter_factory(self._settings),
            )
        return self._refresher

    def close(self) -> None:
        """Clean up resources."""
        if self._session:
            self._session.close()
            self._session = None


# Global application context (one ledger per process)
_app_context: Optional[AppContext] = None


def get_app_context() -> AppContext:
    """Get or create the global application context."""
    global _app_context
    if _app_context is None:
        _app_context = AppContext()
    return _app_context


def set_app_context(context: Optional[AppContext]) -> None:
    """Set (or clear) the global application context."""
    global _app_context
    _app_context = context
