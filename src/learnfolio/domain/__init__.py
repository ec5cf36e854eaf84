"""Domain layer - pure business models with no external dependencies."""

from learnfolio.domain.models import (
    Holding,
    WatchlistItem,
    SavingsPlan,
    SavingsProjection,
    QuoteErrorKind,
    RefreshState,
    RefreshTarget,
)

__all__ = [
    "Holding",
    "WatchlistItem",
    "SavingsPlan",
    "SavingsProjection",
    "QuoteErrorKind",
    "RefreshState",
    "RefreshTarget",
]
