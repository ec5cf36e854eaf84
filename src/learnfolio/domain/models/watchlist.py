"""Watchlist domain model."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass
class WatchlistItem:
    """A symbol being followed without owning it; no cash interaction."""

    item_id: str
    symbol: str
    added_price: Decimal
    current_price: Decimal
    added_at: datetime
