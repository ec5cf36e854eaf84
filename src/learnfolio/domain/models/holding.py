"""Holding domain model."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass
class Holding:
    """
    One purchased lot of a symbol with its own cost basis.

    - shares > 0; a lot with zero shares is removed, never kept
    - buy_price is the cost basis per share
    - current_price starts at buy_price and only moves on refresh or edit
    """

    holding_id: str
    symbol: str
    shares: Decimal
    buy_price: Decimal
    current_price: Decimal
    acquired_at: datetime
    name: Optional[str] = field(default=None)

    def __post_init__(self) -> None:
        if not self.name:
            self.name = self.symbol

    @property
    def cost(self) -> Decimal:
        """Total amount paid for the lot."""
        return self.shares * self.buy_price
