"""API routers package."""

from learnfolio.api.routers.portfolio import router as portfolio_router
from learnfolio.api.routers.watchlist import router as watchlist_router
from learnfolio.api.routers.research import router as research_router

__all__ = [
    "portfolio_router",
    "watchlist_router",
    "research_router",
]
