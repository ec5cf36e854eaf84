"""View models for portfolio, quote and refresh outputs."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from learnfolio.domain.models.enums import QuoteErrorKind, RefreshTarget


@dataclass
class Quote:
    """Latest price observation for a symbol."""

    symbol: str
    price: Decimal
    as_of: datetime


@dataclass
class CompanyOverview:
    """Company fundamentals used by the research screen."""

    symbol: str
    name: Optional[str] = None
    sector: Optional[str] = None
    industry: Optional[str] = None
    market_cap: Optional[Decimal] = None
    pe_ratio: Optional[Decimal] = None
    dividend_yield: Optional[Decimal] = None
    week_52_high: Optional[Decimal] = None
    week_52_low: Optional[Decimal] = None
    description: Optional[str] = None


@dataclass
class HoldingValuation:
    """View model for a single holding with derived values."""

    holding_id: str
    symbol: str
    name: str
    shares: Decimal
    buy_price: Decimal
    current_price: Decimal
    market_value: Decimal
    gain_loss: Decimal
    gain_loss_percent: Optional[Decimal] = None
    acquired_at: Optional[datetime] = None


@dataclass
class PortfolioSummary:
    """Aggregate view of cash and holdings."""

    cash: Decimal
    total_value: Decimal
    total_gain_loss: Decimal
    net_worth: Decimal
    holding_count: int
    best_performer: Optional[HoldingValuation] = None
    holdings: list[HoldingValuation] = field(default_factory=list)


@dataclass
class AllocationItem:
    """Single item in allocation breakdown."""

    symbol: str
    market_value: Decimal
    percentage: Decimal


@dataclass
class AllocationView:
    """Portfolio allocation breakdown by symbol."""

    items: list[AllocationItem] = field(default_factory=list)
    total_value: Decimal = field(default_factory=lambda: Decimal("0"))


@dataclass
class WatchlistItemView:
    """Watchlist entry with change since it was added."""

    item_id: str
    symbol: str
    added_price: Decimal
    current_price: Decimal
    change_percent: Optional[Decimal]
    added_at: datetime


@dataclass
class RefreshReport:
    """Outcome of one batch refresh."""

    target: RefreshTarget
    success_count: int = 0
    fail_count: int = 0
    failures: dict[str, QuoteErrorKind] = field(default_factory=dict)
    cancelled: bool = False
