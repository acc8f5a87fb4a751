"""Multi-debt amortization under a single payoff strategy.

The engine is stateless apart from its settings: every call works on deep
copies of the caller's debts and returns a fresh StrategyResult, so one
engine may be shared between threads.
"""

from collections.abc import Sequence
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

import structlog

from .config import AmortizationSettings
from .exceptions import ConfigurationError, InvalidInputError
from .models import Debt, MonthlySnapshot, PayoffStrategy, StrategyResult

logger = structlog.get_logger()

_ZERO = Decimal("0")
_CENTS = Decimal("0.01")


def to_cents(amount: Decimal) -> Decimal:
    """Round a money amount to cents for display."""
    return amount.quantize(_CENTS, rounding=ROUND_HALF_UP)


def order_debts(debts: Sequence[Debt], strategy: PayoffStrategy) -> list[Debt]:
    """
    Order debts for a payoff strategy.

    MINIMUM keeps the input order, SNOWBALL sorts by ascending balance and
    AVALANCHE by descending interest rate. Sorting is stable, so ties keep
    their input order.
    """
    if strategy == PayoffStrategy.SNOWBALL:
        return sorted(debts, key=lambda d: d.balance)
    if strategy == PayoffStrategy.AVALANCHE:
        return sorted(debts, key=lambda d: d.interest_rate, reverse=True)
    return list(debts)


def validate_debts(debts: Sequence[Debt], extra_payment: Decimal) -> None:
    """
    Check the numeric preconditions of a payoff run.

    Raises:
        InvalidInputError: If a balance, rate, payment or the extra payment
            is negative.
    """
    if extra_payment < 0:
        raise InvalidInputError(
            "Extra payment cannot be negative",
            field="extra_payment",
            value=extra_payment,
            constraint=">= 0",
        )
    for debt in debts:
        for field in ("balance", "interest_rate", "minimum_payment"):
            value = getattr(debt, field)
            if value < 0:
                raise InvalidInputError(
                    f"Debt {debt.id!r} has a negative {field.replace('_', ' ')}",
                    field=field,
                    value=value,
                    constraint=">= 0",
                    details={"debt_id": debt.id},
                )


class AmortizationEngine:
    """
    Simulate paying down a set of debts month by month.

    Each month, in the strategy's fixed order, every debt with a balance
    accrues a month of interest and then receives its minimum payment.
    For SNOWBALL and AVALANCHE the extra payment then goes to the first
    debt still carrying a balance. The run stops at payoff or at the
    configured cutoff.
    """

    def __init__(self, settings: Optional[AmortizationSettings] = None):
        """
        Initialize the engine.

        Args:
            settings: Cutoff and display settings (default: from environment)

        Raises:
            ConfigurationError: If the display window exceeds the cutoff.
        """
        self.settings = settings or AmortizationSettings()
        if self.settings.display_months > self.settings.max_months:
            raise ConfigurationError(
                "Display window exceeds the simulation cutoff",
                config_key="display_months",
                expected=f"<= {self.settings.max_months}",
                actual=self.settings.display_months,
            )

    def simulate(
        self,
        debts: Sequence[Debt],
        strategy: PayoffStrategy,
        extra_payment: Decimal = _ZERO,
    ) -> StrategyResult:
        """
        Run one payoff strategy to payoff or cutoff.

        Args:
            debts: Caller-owned debts; never mutated
            strategy: Ordering and extra-payment policy
            extra_payment: Monthly amount on top of the minimums

        Returns:
            StrategyResult with totals over the full run and the leading
            monthly snapshots

        Raises:
            InvalidInputError: If any numeric precondition is violated.
        """
        strategy = PayoffStrategy(strategy)
        extra_payment = Decimal(str(extra_payment))
        validate_debts(debts, extra_payment)

        working = order_debts([d.model_copy(deep=True) for d in debts], strategy)
        use_extra = extra_payment > 0 and strategy != PayoffStrategy.MINIMUM
        max_months = self.settings.max_months

        total_paid = _ZERO
        total_interest = _ZERO
        remaining = sum((d.balance for d in working), _ZERO)
        months = 0
        snapshots: list[MonthlySnapshot] = []

        while remaining > 0 and months < max_months:
            months += 1
            month_payment = _ZERO
            month_interest = _ZERO

            for debt in working:
                if debt.balance <= 0:
                    continue
                interest = debt.balance * debt.monthly_rate
                debt.balance += interest
                month_interest += interest

                payment = min(debt.minimum_payment, debt.balance)
                debt.balance -= payment
                month_payment += payment

            if use_extra:
                target = next((d for d in working if d.balance > 0), None)
                if target is not None:
                    extra = min(extra_payment, target.balance)
                    target.balance -= extra
                    month_payment += extra

            total_paid += month_payment
            total_interest += month_interest
            remaining = sum((d.balance for d in working), _ZERO)

            if len(snapshots) < self.settings.display_months:
                snapshots.append(
                    MonthlySnapshot(
                        month=months,
                        balance=to_cents(remaining),
                        payment=to_cents(month_payment),
                        interest=to_cents(month_interest),
                    )
                )

        result = StrategyResult(
            strategy=strategy,
            months=months,
            max_months=max_months,
            total_paid=to_cents(total_paid),
            total_interest=to_cents(total_interest),
            final_balance=to_cents(max(remaining, _ZERO)),
            monthly_data=snapshots,
        )

        if result.reached_cutoff:
            logger.warning(
                "amortization_cutoff_reached",
                strategy=strategy.value,
                months=months,
                remaining_balance=str(result.final_balance),
            )
        logger.info(
            "amortization_complete",
            strategy=strategy.value,
            debts=len(working),
            months=months,
            total_paid=str(result.total_paid),
            total_interest=str(result.total_interest),
        )
        return result
