"""Side-by-side comparison of every payoff strategy."""

from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal
from typing import Optional

import structlog

from .amortization import AmortizationEngine
from .config import AmortizationSettings
from .models import Debt, PayoffStrategy, StrategyComparison, StrategyResult

logger = structlog.get_logger()


class StrategyComparator:
    """
    Run every payoff strategy against the same debts.

    Each run gets its own deep copy of the debts. Savings are measured
    against the MINIMUM result of the same pass, never a stored one.
    """

    def __init__(
        self,
        engine: Optional[AmortizationEngine] = None,
        settings: Optional[AmortizationSettings] = None,
    ):
        """
        Initialize comparator.

        Args:
            engine: Engine used for every run (default: built from settings)
            settings: Amortization settings, used when no engine is given
        """
        self.engine = engine or AmortizationEngine(settings)

    def _run_all(
        self, debts: Sequence[Debt], extra_payment: Decimal
    ) -> dict[PayoffStrategy, StrategyResult]:
        copies = {s: [d.model_copy(deep=True) for d in debts] for s in PayoffStrategy}

        if self.engine.settings.parallel_comparison:
            with ThreadPoolExecutor(max_workers=len(copies)) as pool:
                futures = {
                    s: pool.submit(self.engine.simulate, copies[s], s, extra_payment)
                    for s in PayoffStrategy
                }
                return {s: f.result() for s, f in futures.items()}

        return {
            s: self.engine.simulate(copies[s], s, extra_payment)
            for s in PayoffStrategy
        }

    def compare_all(
        self,
        debts: Sequence[Debt],
        extra_payment: Decimal = Decimal("0"),
    ) -> StrategyComparison:
        """
        Compare MINIMUM, SNOWBALL and AVALANCHE on the same debts.

        Args:
            debts: Caller-owned debts; never mutated
            extra_payment: Monthly amount on top of the minimums

        Returns:
            StrategyComparison with one result per strategy

        Raises:
            InvalidInputError: If any numeric precondition is violated.
        """
        results = self._run_all(debts, Decimal(str(extra_payment)))

        baseline = results[PayoffStrategy.MINIMUM].total_interest
        for strategy, result in results.items():
            if strategy == PayoffStrategy.MINIMUM:
                continue
            results[strategy] = result.model_copy(
                update={"monthly_savings_vs_minimum": baseline - result.total_interest}
            )

        comparison = StrategyComparison(
            minimum=results[PayoffStrategy.MINIMUM],
            snowball=results[PayoffStrategy.SNOWBALL],
            avalanche=results[PayoffStrategy.AVALANCHE],
        )
        logger.info(
            "strategy_comparison_complete",
            debts=len(debts),
            extra_payment=str(extra_payment),
            best_strategy=comparison.best_strategy.value,
        )
        return comparison
