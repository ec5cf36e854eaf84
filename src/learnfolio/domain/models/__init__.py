"""Domain models package."""

from learnfolio.domain.models.enums import QuoteErrorKind, RefreshState, RefreshTarget
from learnfolio.domain.models.holding import Holding
from learnfolio.domain.models.watchlist import WatchlistItem
from learnfolio.domain.models.savings import SavingsPlan, SavingsProjection

__all__ = [
    "QuoteErrorKind",
    "RefreshState",
    "RefreshTarget",
    "Holding",
    "WatchlistItem",
    "SavingsPlan",
    "SavingsProjection",
]
