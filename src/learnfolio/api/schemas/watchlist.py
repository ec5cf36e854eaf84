"""Pydantic schemas for watchlist endpoints."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field


class WatchlistAddRequest(BaseModel):
    """Add a symbol; the current quote is used when price is omitted."""

    symbol: str = Field(..., min_length=1, max_length=20)
    price: Optional[Decimal] = Field(None, gt=0)


class WatchlistItemResponse(BaseModel):
    model_config = {"from_attributes": True}

    item_id: str
    symbol: str
    added_price: Decimal
    current_price: Decimal
    change_percent: Optional[Decimal] = None
    added_at: datetime
