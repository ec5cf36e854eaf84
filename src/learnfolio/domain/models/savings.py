"""Savings plan input and projection result."""

from dataclasses import dataclass, field
from decimal import Decimal


@dataclass(frozen=True)
class SavingsPlan:
    """Inputs to a compound-growth projection. Not part of the ledger."""

    initial: Decimal
    monthly_contribution: Decimal
    years: int
    annual_rate_percent: Decimal


@dataclass
class SavingsProjection:
    """Result of projecting a savings plan."""

    future_value: Decimal
    total_contributions: Decimal
    total_interest: Decimal
    # Balance at the end of each year, index 0 = end of year 1
    yearly_balances: list[Decimal] = field(default_factory=list)
