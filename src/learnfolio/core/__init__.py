"""Core utilities and shared functionality."""

from learnfolio.core.timezone import (
    now_eastern,
    to_eastern,
    parse_timestamp,
    to_iso,
    EASTERN_TZ,
)
from learnfolio.core.exceptions import (
    AppError,
    ValidationError,
    NotFoundError,
    InsufficientFundsError,
    QuoteUnavailableError,
    RefreshInProgressError,
    PersistenceError,
)
from learnfolio.core.util import normalize_symbol, to_decimal, round_money, CENTS

__all__ = [
    "now_eastern",
    "to_eastern",
    "parse_timestamp",
    "to_iso",
    "EASTERN_TZ",
    "AppError",
    "ValidationError",
    "NotFoundError",
    "InsufficientFundsError",
    "QuoteUnavailableError",
    "RefreshInProgressError",
    "PersistenceError",
    "normalize_symbol",
    "to_decimal",
    "round_money",
    "CENTS",
]
