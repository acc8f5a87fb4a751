"""Debt payoff data models.

This module provides the structures consumed and produced by the
amortization engine and the strategy comparator:
- Debts and payoff strategies
- Per-month aggregate snapshots
- Per-strategy results and the three-way comparison
"""

import math
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field, computed_field, field_validator


class PayoffStrategy(str, Enum):
    """Order in which extra payment capacity is directed.

    MINIMUM pays only the minimum on every debt, SNOWBALL targets the
    smallest balance first and AVALANCHE the highest interest rate first.
    """

    MINIMUM = "minimum"
    SNOWBALL = "snowball"
    AVALANCHE = "avalanche"


class Debt(BaseModel):
    """A single debt owned by the caller.

    The engine never mutates a caller's Debt; it works on deep copies.
    """

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "id": "1",
                    "name": "Credit Card 1",
                    "balance": "5000",
                    "interest_rate": "18.99",
                    "minimum_payment": "150",
                }
            ]
        }
    }

    id: str = Field(description="Caller-assigned identifier")
    name: str = Field(default="", description="Display name of the debt")
    balance: Decimal = Field(ge=0, description="Outstanding balance")
    interest_rate: Decimal = Field(
        ge=0,
        description="Annual interest rate in percent (18.99 means 18.99%)",
    )
    minimum_payment: Decimal = Field(ge=0, description="Required monthly payment")

    @computed_field
    @property
    def monthly_rate(self) -> Decimal:
        """Periodic interest rate as a fraction."""
        return self.interest_rate / Decimal(100) / Decimal(12)

    @field_validator("balance", "interest_rate", "minimum_payment", mode="before")
    @classmethod
    def coerce_to_decimal(cls, v):
        """Coerce string and float amounts to Decimal."""
        if isinstance(v, (str, float)):
            return Decimal(str(v))
        return v


class MonthlySnapshot(BaseModel):
    """Aggregate state of all debts at the end of one simulated month."""

    month: int = Field(ge=1)
    balance: Decimal = Field(description="Total remaining balance across debts")
    payment: Decimal = Field(description="Total paid this month, extra included")
    interest: Decimal = Field(description="Total interest accrued this month")


class StrategyResult(BaseModel):
    """Outcome of running one payoff strategy to payoff or cutoff.

    Attributes:
        strategy: The strategy that produced this result
        months: Simulated months until payoff, or the cutoff
        max_months: The cutoff the run was subject to
        total_paid: Sum of every payment over the full run
        total_interest: Sum of every interest accrual over the full run
        final_balance: Aggregate balance left when the run stopped
        monthly_savings_vs_minimum: Interest saved relative to the minimum
            strategy (zero for MINIMUM itself and for standalone runs)
        monthly_data: Leading monthly snapshots kept for presentation
    """

    strategy: PayoffStrategy
    months: int = Field(ge=0)
    max_months: int = Field(default=600, gt=0)
    total_paid: Decimal
    total_interest: Decimal
    final_balance: Decimal = Decimal("0")
    monthly_savings_vs_minimum: Decimal = Decimal("0")
    monthly_data: list[MonthlySnapshot] = Field(default_factory=list)

    @computed_field
    @property
    def years(self) -> int:
        """Whole years needed, rounded up."""
        return math.ceil(self.months / 12)

    @computed_field
    @property
    def reached_cutoff(self) -> bool:
        """True if the run stopped at the cutoff with balance remaining."""
        return self.months >= self.max_months and self.final_balance > 0


class StrategyComparison(BaseModel):
    """Results for every strategy, computed against the same debts.

    Indexable by PayoffStrategy; ordered views follow the enum order.
    """

    minimum: StrategyResult
    snowball: StrategyResult
    avalanche: StrategyResult

    def __getitem__(self, strategy: PayoffStrategy) -> StrategyResult:
        return getattr(self, PayoffStrategy(strategy).value)

    def results(self) -> list[StrategyResult]:
        """Return the results in strategy order."""
        return [self[s] for s in PayoffStrategy]

    def as_dict(self) -> dict[PayoffStrategy, StrategyResult]:
        """Return an enum-keyed mapping of the results."""
        return {s: self[s] for s in PayoffStrategy}

    @property
    def best_strategy(self) -> PayoffStrategy:
        """Strategy with the least interest, then fewest months."""
        best = min(
            self.results(),
            key=lambda r: (r.total_interest, r.months),
        )
        return best.strategy
