"""Compound investment growth under fixed assumptions."""

from collections.abc import Sequence
from decimal import ROUND_HALF_UP, Decimal

import structlog

from .exceptions import InvalidInputError
from .models import InvestmentInputs, InvestmentSummary, YearlySnapshot

logger = structlog.get_logger()

_ONE = Decimal("1")


def to_whole_units(amount: Decimal) -> Decimal:
    """Round a money amount to whole currency units for display."""
    return amount.quantize(_ONE, rounding=ROUND_HALF_UP)


class CompoundGrowthEngine:
    """
    Project an investment balance year by year.

    Within each year the monthly contribution is added before that month's
    growth is applied. Snapshots are rounded for display only; the running
    balance and contribution totals are carried forward unrounded.
    """

    def _validate(self, inputs: InvestmentInputs) -> None:
        for field in ("initial_amount", "monthly_contribution", "annual_return_percent"):
            value = getattr(inputs, field)
            if value < 0:
                raise InvalidInputError(
                    f"{field.replace('_', ' ').capitalize()} cannot be negative",
                    field=field,
                    value=value,
                    constraint=">= 0",
                )
        if inputs.time_horizon_years < 1:
            raise InvalidInputError(
                "Time horizon must be at least one year",
                field="time_horizon_years",
                value=inputs.time_horizon_years,
                constraint=">= 1",
            )

    def project(self, inputs: InvestmentInputs) -> list[YearlySnapshot]:
        """
        Project the balance for every year of the horizon.

        Args:
            inputs: Initial amount, monthly contribution, return and horizon

        Returns:
            One snapshot per year, starting with year 0 (the initial state)

        Raises:
            InvalidInputError: If an amount or rate is negative or the horizon
                is shorter than one year.
        """
        self._validate(inputs)

        growth = _ONE + inputs.monthly_rate
        contribution = inputs.monthly_contribution
        balance = inputs.initial_amount
        total_contributions = inputs.initial_amount

        snapshots = [
            YearlySnapshot(
                year=0,
                balance=to_whole_units(balance),
                contributions_this_year=to_whole_units(inputs.initial_amount),
                earnings=Decimal("0"),
                cumulative_contributions=to_whole_units(total_contributions),
            )
        ]

        for year in range(1, inputs.time_horizon_years + 1):
            year_contributions = Decimal("0")
            for _ in range(12):
                balance += contribution
                year_contributions += contribution
                total_contributions += contribution
                balance *= growth

            snapshots.append(
                YearlySnapshot(
                    year=year,
                    balance=to_whole_units(balance),
                    contributions_this_year=to_whole_units(year_contributions),
                    earnings=to_whole_units(balance - total_contributions),
                    cumulative_contributions=to_whole_units(total_contributions),
                )
            )

        logger.info(
            "growth_projection_complete",
            years=inputs.time_horizon_years,
            final_balance=str(snapshots[-1].balance),
        )
        return snapshots

    @staticmethod
    def summarize(snapshots: Sequence[YearlySnapshot]) -> InvestmentSummary:
        """Headline totals from the final snapshot (zeros if empty)."""
        if not snapshots:
            return InvestmentSummary()
        final = snapshots[-1]
        return InvestmentSummary(
            total_balance=final.balance,
            total_contributions=final.cumulative_contributions,
            total_earnings=final.earnings,
        )
