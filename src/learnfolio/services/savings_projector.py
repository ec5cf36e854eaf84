"""Compound-growth projection for a savings plan."""

from decimal import Decimal

from learnfolio.core.exceptions import ValidationError
from learnfolio.core.util import round_money
from learnfolio.domain.models import SavingsPlan, SavingsProjection

MONTHS_PER_YEAR = 12


def project(plan: SavingsPlan) -> SavingsProjection:
    """
    Project a savings plan with monthly compounding.

    Each month the whole balance earns one month of interest, then that
    month's contribution is added (it starts earning the following month).
    A negative rate is allowed and shrinks the balance.
    """
    _validate(plan)

    months = plan.years * MONTHS_PER_YEAR
    monthly_rate = Decimal(plan.annual_rate_percent) / Decimal(100) / Decimal(MONTHS_PER_YEAR)
    growth = 1 + monthly_rate

    value = Decimal(plan.initial)
    yearly_balances: list[Decimal] = []
    for month in range(1, months + 1):
        value = value * growth + plan.monthly_contribution
        if month % MONTHS_PER_YEAR == 0:
            yearly_balances.append(round_money(value))

    future_value = round_money(value)
    total_contributions = round_money(plan.initial + plan.monthly_contribution * months)
    return SavingsProjection(
        future_value=future_value,
        total_contributions=total_contributions,
        total_interest=future_value - total_contributions,
        yearly_balances=yearly_balances,
    )


def _validate(plan: SavingsPlan) -> None:
    if plan.initial < 0:
        raise ValidationError("Initial amount cannot be negative")
    if plan.monthly_contribution < 0:
        raise ValidationError("Monthly contribution cannot be negative")
    if plan.years < 0:
        raise ValidationError("Years cannot be negative")
