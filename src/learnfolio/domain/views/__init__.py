"""View models for service outputs."""

from learnfolio.domain.views.portfolio import (
    Quote,
    CompanyOverview,
    HoldingValuation,
    PortfolioSummary,
    AllocationItem,
    AllocationView,
    WatchlistItemView,
    RefreshReport,
)

__all__ = [
    "Quote",
    "CompanyOverview",
    "HoldingValuation",
    "PortfolioSummary",
    "AllocationItem",
    "AllocationView",
    "WatchlistItemView",
    "RefreshReport",
]
