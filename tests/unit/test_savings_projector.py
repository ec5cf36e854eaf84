"""
Unit tests for the savings projector.

Reference values computed independently with monthly compounding
(interest on the balance, then the month's contribution).
"""

from decimal import Decimal

import pytest

from learnfolio.core.exceptions import ValidationError
from learnfolio.domain.models import SavingsPlan
from learnfolio.services import project


def plan(initial, monthly, years, rate) -> SavingsPlan:
    return SavingsPlan(
        initial=Decimal(str(initial)),
        monthly_contribution=Decimal(str(monthly)),
        years=years,
        annual_rate_percent=Decimal(str(rate)),
    )


class TestProject:
    """Tests for compound growth projections."""

    def test_ten_year_plan_at_seven_percent(self):
        """
        GIVEN 1000 initial, 100 monthly, 10 years at 7%
        WHEN the plan is projected
        THEN future value is 19318.14 with 13000 contributed and 6318.14 interest
        """
        projection = project(plan(1000, 100, 10, 7))

        assert projection.future_value == Decimal("19318.14")
        assert projection.total_contributions == Decimal("13000.00")
        assert projection.total_interest == Decimal("6318.14")

    def test_yearly_balances(self):
        projection = project(plan(1000, 100, 10, 7))

        assert projection.yearly_balances == [
            Decimal("2311.55"),
            Decimal("3717.91"),
            Decimal("5225.94"),
            Decimal("6842.98"),
            Decimal("8576.92"),
            Decimal("10436.20"),
            Decimal("12429.89"),
            Decimal("14567.71"),
            Decimal("16860.07"),
            Decimal("19318.14"),
        ]

    def test_one_year_plan(self):
        projection = project(plan(500, 50, 1, 5))

        assert projection.future_value == Decimal("1139.52")
        assert projection.total_contributions == Decimal("1100.00")
        assert projection.total_interest == Decimal("39.52")

    def test_zero_rate_only_accumulates_contributions(self):
        projection = project(plan(1000, 100, 2, 0))

        assert projection.future_value == Decimal("3400.00")
        assert projection.total_interest == Decimal("0.00")

    def test_zero_years_returns_initial(self):
        """
        GIVEN a plan with 0 years
        WHEN projected
        THEN the future value is the initial amount and no balances are listed
        """
        projection = project(plan(1000, 100, 0, 7))

        assert projection.future_value == Decimal("1000.00")
        assert projection.total_contributions == Decimal("1000.00")
        assert projection.yearly_balances == []

    def test_negative_rate_shrinks_balance(self):
        projection = project(plan(1000, 0, 1, -12))

        assert projection.future_value == Decimal("886.38")
        assert projection.total_interest == Decimal("-113.62")

    @pytest.mark.parametrize(
        "initial,monthly,years",
        [(-1, 0, 1), (0, -1, 1), (0, 0, -1)],
    )
    def test_negative_inputs_are_rejected(self, initial, monthly, years):
        with pytest.raises(ValidationError):
            project(plan(initial, monthly, years, 5))
