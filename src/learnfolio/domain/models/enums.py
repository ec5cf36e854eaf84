"""Enumerations for domain models."""

from enum import Enum


class QuoteErrorKind(str, Enum):
    """Classified reasons a symbol could not be priced."""

    NOT_FOUND = "NOT_FOUND"
    RATE_LIMITED = "RATE_LIMITED"
    NETWORK_ERROR = "NETWORK_ERROR"
    INVALID_CREDENTIAL = "INVALID_CREDENTIAL"
    # Quote fetched but the new price could not be saved
    STORAGE_ERROR = "STORAGE_ERROR"


class RefreshState(str, Enum):
    """Lifecycle of a batch price refresh."""

    IDLE = "IDLE"
    CONFIRMING = "CONFIRMING"
    RUNNING = "RUNNING"
    COMPLETED = "COMPLETED"


class RefreshTarget(str, Enum):
    """Which collection a batch refresh re-prices."""

    HOLDINGS = "HOLDINGS"
    WATCHLIST = "WATCHLIST"
