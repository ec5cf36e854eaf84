"""Pydantic schemas for portfolio endpoints."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field


class CashAdjustRequest(BaseModel):
    """Signed cash adjustment: positive deposits, negative withdraws."""

    delta: Decimal


class CashResponse(BaseModel):
    cash: Decimal


class BuyRequest(BaseModel):
    """Request schema for buying a new lot."""

    symbol: str = Field(..., min_length=1, max_length=20)
    shares: Decimal = Field(..., gt=0)
    price: Decimal = Field(..., gt=0, description="Price per share")
    name: Optional[str] = Field(None, max_length=255)


class EditHoldingRequest(BaseModel):
    """Request schema for correcting a lot's shares and cost basis."""

    shares: Decimal = Field(..., gt=0)
    buy_price: Decimal = Field(..., gt=0)


class HoldingResponse(BaseModel):
    """Response schema for a single holding with derived values."""

    model_config = {"from_attributes": True}

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


class PortfolioSummaryResponse(BaseModel):
    """Cash, totals and holdings."""

    model_config = {"from_attributes": True}

    cash: Decimal
    total_value: Decimal
    total_gain_loss: Decimal
    net_worth: Decimal
    holding_count: int
    best_performer: Optional[HoldingResponse] = None
    holdings: list[HoldingResponse]


class TradeResponse(BaseModel):
    """Result of a buy, sell, edit or liquidation."""

    cash: Decimal
    amount: Decimal = Field(..., description="Cash debited (buy/edit) or credited (sell/liquidate)")
    holding_id: Optional[str] = None


class AllocationItemResponse(BaseModel):
    model_config = {"from_attributes": True}

    symbol: str
    market_value: Decimal
    percentage: Decimal


class AllocationResponse(BaseModel):
    model_config = {"from_attributes": True}

    items: list[AllocationItemResponse]
    total_value: Decimal
