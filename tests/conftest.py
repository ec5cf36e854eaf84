"""
Pytest configuration and fixtures for Learnfolio tests.

This module provides:
- In-memory SQLite and dict-backed document store fixtures
- Deterministic quote providers (including scripted failures)
- Ledger, watchlist, market data and refresher fixtures
- FastAPI test client wired to an isolated AppContext
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional

import pytest
from sqlalchemy import create_engine, StaticPool
from sqlalchemy.orm import sessionmaker, Session
from fastapi.testclient import TestClient

from learnfolio.app_context import AppContext, set_app_context
from learnfolio.config.settings import Settings, reset_settings
from learnfolio.core.exceptions import PersistenceError, QuoteUnavailableError
from learnfolio.core.timezone import EASTERN_TZ
from learnfolio.domain.models import QuoteErrorKind
from learnfolio.domain.views import CompanyOverview, Quote
from learnfolio.main import app
from learnfolio.repositories.sqlalchemy.database import Base
# Import ORM models to register them with Base before creating tables
from learnfolio.repositories.sqlalchemy import orm_models  # noqa: F401
from learnfolio.repositories.sqlalchemy import SqlAlchemyDocumentStore
from learnfolio.services import (
    BatchRefresher,
    FixedDelayRateLimiter,
    LedgerSeed,
    LedgerService,
    MarketDataService,
    WatchlistService,
)


# =============================================================================
# TIMEZONE HELPERS
# =============================================================================


def eastern_datetime(
    year: int,
    month: int,
    day: int,
    hour: int = 10,
    minute: int = 0,
) -> datetime:
    """Create a localized datetime in US/Eastern timezone."""
    return EASTERN_TZ.localize(datetime(year, month, day, hour, minute))


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture(scope="function")
def test_engine():
    """Create test database engine with shared in-memory SQLite."""
    reset_settings()

    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def test_session(test_engine) -> Session:
    """Create test database session."""
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def document_store(test_session) -> SqlAlchemyDocumentStore:
    """Provide test DocumentStore."""
    return SqlAlchemyDocumentStore(test_session)


class InMemoryDocumentStore:
    """
    Dict-backed DocumentStore whose saves can be made to fail.

    Saves touching a key in ``fail_keys`` raise PersistenceError, as do the
    next ``failing_saves`` saves. A failed save writes nothing.
    """

    def __init__(self):
        self.documents: dict[str, str] = {}
        self.fail_keys: set[str] = set()
        self.failing_saves = 0

    def load(self, key: str) -> Optional[str]:
        return self.documents.get(key)

    def save(self, key: str, document: str) -> None:
        self.save_many({key: document})

    def save_many(self, documents: dict[str, str]) -> None:
        if self.failing_saves > 0:
            self.failing_saves -= 1
            raise PersistenceError(", ".join(documents), "disk full")
        if self.fail_keys & documents.keys():
            raise PersistenceError(", ".join(documents), "disk full")
        self.documents.update(documents)


@pytest.fixture
def memory_store() -> InMemoryDocumentStore:
    """Provide a dict-backed DocumentStore."""
    return InMemoryDocumentStore()


# =============================================================================
# QUOTE PROVIDER FIXTURES
# =============================================================================


class DeterministicQuoteProvider:
    """
    Deterministic quote provider for testing.

    Known symbols return fixed prices; symbols listed in ``failures`` raise
    the given error kind; anything else is NOT_FOUND. Every call is recorded.
    """

    FIXED_PRICES = {
        "AAPL": Decimal("190.00"),
        "MSFT": Decimal("400.00"),
        "GOOGL": Decimal("140.00"),
        "TSLA": Decimal("250.00"),
        "KO": Decimal("60.00"),
    }

    def __init__(
        self,
        failures: Optional[dict[str, QuoteErrorKind]] = None,
        as_of: Optional[datetime] = None,
    ):
        self.failures = dict(failures or {})
        self.prices = dict(self.FIXED_PRICES)
        self.calls: list[str] = []
        self._as_of = as_of

    def get_quote(self, symbol: str) -> Quote:
        self.calls.append(symbol)
        if symbol in self.failures:
            raise QuoteUnavailableError(symbol, self.failures[symbol])
        if symbol not in self.prices:
            raise QuoteUnavailableError(symbol, QuoteErrorKind.NOT_FOUND)
        from learnfolio.core.timezone import now_eastern

        return Quote(symbol=symbol, price=self.prices[symbol], as_of=self._as_of or now_eastern())

    def get_company_overview(self, symbol: str) -> CompanyOverview:
        self.calls.append(symbol)
        if symbol not in self.prices:
            raise QuoteUnavailableError(symbol, QuoteErrorKind.NOT_FOUND)
        return CompanyOverview(
            symbol=symbol,
            name=f"{symbol} Inc.",
            sector="Technology",
            industry="Software",
            market_cap=Decimal("1000000000"),
            pe_ratio=Decimal("25.5"),
        )


@pytest.fixture
def quote_provider() -> DeterministicQuoteProvider:
    """Provide deterministic quote provider."""
    return DeterministicQuoteProvider()


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


EMPTY_SEED = LedgerSeed(cash=Decimal("10000.00"), symbol=None)


@pytest.fixture
def ledger_service(document_store) -> LedgerService:
    """Provide LedgerService with $10,000 cash and no holdings."""
    return LedgerService(store=document_store, seed=EMPTY_SEED)


@pytest.fixture
def watchlist_service(document_store) -> WatchlistService:
    """Provide empty WatchlistService."""
    return WatchlistService(store=document_store)


@pytest.fixture
def market_data_service(quote_provider) -> MarketDataService:
    """Provide MarketDataService with deterministic provider."""
    return MarketDataService(provider=quote_provider, cache_ttl_seconds=60)


@pytest.fixture
def refresher(market_data_service, ledger_service, watchlist_service) -> BatchRefresher:
    """Provide BatchRefresher that does not wait between calls."""
    return BatchRefresher(
        market_data=market_data_service,
        ledger=ledger_service,
        watchlist=watchlist_service,
        limiter_factory=lambda: FixedDelayRateLimiter(0),
    )


# =============================================================================
# API TEST CLIENT FIXTURE
# =============================================================================


@pytest.fixture
def app_context(document_store, quote_provider) -> AppContext:
    """Provide an AppContext on the test database with an empty seed."""
    settings = Settings(default_cash=Decimal("10000.00"), seed_symbol="")
    context = AppContext(
        settings=settings,
        store=document_store,
        provider=quote_provider,
        limiter_factory=lambda: FixedDelayRateLimiter(0),
    )
    set_app_context(context)
    yield context
    set_app_context(None)


@pytest.fixture
def client(app_context) -> TestClient:
    """Provide FastAPI test client bound to the test AppContext."""
    with TestClient(app) as c:
        yield c


# =============================================================================
# HELPER FUNCTIONS (exported for use in tests)
# =============================================================================


def assert_decimal_equal(
    actual: Decimal,
    expected: Decimal,
    tolerance: Decimal = Decimal("0.01"),
) -> None:
    """Assert two Decimals are equal within tolerance."""
    diff = abs(Decimal(actual) - expected)
    assert diff <= tolerance, f"Expected {expected}, got {actual} (diff={diff})"
