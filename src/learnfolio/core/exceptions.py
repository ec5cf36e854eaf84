"""Application-level exceptions."""

from decimal import Decimal
from typing import Optional


class AppError(Exception):
    """Base exception for application errors."""

    def __init__(self, message: str, code: str = "APP_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationError(AppError):
    """Raised when input validation fails (non-positive amounts, empty symbol)."""

    def __init__(self, message: str):
        super().__init__(message, code="VALIDATION_ERROR")


class NotFoundError(AppError):
    """Raised when a requested holding or watchlist item is not found."""

    def __init__(self, resource: str, identifier: str):
        super().__init__(f"{resource} not found: {identifier}", code="NOT_FOUND")


class InsufficientFundsError(AppError):
    """Raised when an operation would take the cash balance below zero."""

    def __init__(self, requested: Decimal, available: Decimal):
        self.requested = requested
        self.available = available
        super().__init__(
            f"Insufficient funds: requested {requested}, available {available}",
            code="INSUFFICIENT_FUNDS",
        )


class QuoteUnavailableError(AppError):
    """Raised when the quote source cannot price a symbol."""

    def __init__(self, symbol: str, kind, detail: Optional[str] = None):
        self.symbol = symbol
        self.kind = kind
        message = f"Quote unavailable for {symbol}: {kind.value}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message, code="QUOTE_UNAVAILABLE")


class RefreshInProgressError(AppError):
    """Raised when a batch refresh is requested while another one is active."""

    def __init__(self, state: str):
        super().__init__(f"A refresh is already {state.lower()}", code="REFRESH_IN_PROGRESS")


class PersistenceError(AppError):
    """Raised when a document cannot be written to the store."""

    def __init__(self, key: str, detail: str):
        super().__init__(f"Could not save '{key}': {detail}", code="PERSISTENCE_ERROR")
