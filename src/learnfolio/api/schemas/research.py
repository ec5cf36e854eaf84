"""Pydantic schemas for quote, research and savings endpoints."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field


class QuoteResponse(BaseModel):
    model_config = {"from_attributes": True}

    symbol: str
    price: Decimal
    as_of: datetime


class CompanyOverviewResponse(BaseModel):
    model_config = {"from_attributes": True}

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


class SavingsPlanRequest(BaseModel):
    """Savings plan to project."""

    initial: Decimal = Field(..., ge=0)
    monthly_contribution: Decimal = Field(..., ge=0)
    years: int = Field(..., ge=0, le=100)
    annual_rate_percent: Decimal


class SavingsProjectionResponse(BaseModel):
    model_config = {"from_attributes": True}

    future_value: Decimal
    total_contributions: Decimal
    total_interest: Decimal
    yearly_balances: list[Decimal]
