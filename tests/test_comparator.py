"""Tests for the strategy comparator."""

from decimal import Decimal

import pytest

from finsight_core import (
    AmortizationSettings,
    Debt,
    InvalidInputError,
    PayoffStrategy,
    StrategyComparator,
    StrategyComparison,
)


@pytest.fixture
def mixed_debts() -> list[Debt]:
    """A small cheap debt and a large expensive one."""
    return [
        Debt(id="small", balance="1000", interest_rate="5", minimum_payment="50"),
        Debt(id="large", balance="5000", interest_rate="25", minimum_payment="150"),
    ]


class TestStrategyComparator:
    """Test suite for StrategyComparator.compare_all."""

    def test_returns_result_for_every_strategy(self, sample_debts):
        """Every strategy appears exactly once, keyed by the enum."""
        comparison = StrategyComparator().compare_all(sample_debts, Decimal("200"))

        assert isinstance(comparison, StrategyComparison)
        assert set(comparison.as_dict()) == set(PayoffStrategy)
        for strategy in PayoffStrategy:
            assert comparison[strategy].strategy == strategy
        assert [r.strategy for r in comparison.results()] == list(PayoffStrategy)

    def test_no_extra_payment_makes_strategies_equal(self, sample_debts):
        """Without extra payment the ordering has no effect on the outcome."""
        comparison = StrategyComparator().compare_all(sample_debts, Decimal("0"))
        baseline = comparison.minimum

        for result in (comparison.snowball, comparison.avalanche):
            assert result.months == baseline.months
            assert result.total_paid == baseline.total_paid
            assert result.total_interest == baseline.total_interest
            assert result.monthly_data == baseline.monthly_data
            assert result.monthly_savings_vs_minimum == Decimal("0")

    def test_extra_payment_never_costs_more_interest(self, sample_debts, mixed_debts):
        """Snowball and avalanche pay no more interest than minimum payments."""
        comparator = StrategyComparator()

        for debts in (sample_debts, mixed_debts):
            comparison = comparator.compare_all(debts, Decimal("150"))
            assert comparison.avalanche.total_interest <= comparison.minimum.total_interest
            assert comparison.snowball.total_interest <= comparison.minimum.total_interest

    def test_savings_measured_against_same_pass(self, mixed_debts):
        """Savings use the minimum result computed in the same comparison."""
        comparison = StrategyComparator().compare_all(mixed_debts, Decimal("300"))
        minimum_interest = comparison.minimum.total_interest

        assert comparison.minimum.monthly_savings_vs_minimum == Decimal("0")
        assert comparison.snowball.monthly_savings_vs_minimum == (
            minimum_interest - comparison.snowball.total_interest
        )
        assert comparison.avalanche.monthly_savings_vs_minimum == (
            minimum_interest - comparison.avalanche.total_interest
        )

    def test_savings_do_not_depend_on_previous_comparisons(self, mixed_debts):
        """A second comparison with new inputs is not influenced by the first."""
        comparator = StrategyComparator()
        comparator.compare_all(mixed_debts, Decimal("1000"))

        fresh = StrategyComparator().compare_all(mixed_debts, Decimal("100"))
        repeated = comparator.compare_all(mixed_debts, Decimal("100"))

        assert repeated.model_dump() == fresh.model_dump()

    def test_avalanche_wins_when_expensive_debt_is_larger(self, mixed_debts):
        """Targeting the highest rate first saves the most interest here."""
        comparison = StrategyComparator().compare_all(mixed_debts, Decimal("300"))

        assert comparison.avalanche.total_interest < comparison.snowball.total_interest
        assert comparison.best_strategy == PayoffStrategy.AVALANCHE

    def test_best_strategy_ties_prefer_enum_order(self, sample_debts):
        """With identical outcomes the first strategy in enum order is chosen."""
        comparison = StrategyComparator().compare_all(sample_debts, Decimal("0"))
        assert comparison.best_strategy == PayoffStrategy.MINIMUM

    def test_caller_debts_untouched(self, sample_debts):
        """No strategy run mutates the caller's debts."""
        before = [d.model_dump() for d in sample_debts]

        StrategyComparator().compare_all(sample_debts, Decimal("500"))

        assert [d.model_dump() for d in sample_debts] == before

    def test_parallel_matches_sequential(self, sample_debts):
        """Running the strategies on threads yields identical results."""
        sequential = StrategyComparator().compare_all(sample_debts, Decimal("250"))
        parallel = StrategyComparator(
            settings=AmortizationSettings(parallel_comparison=True)
        ).compare_all(sample_debts, Decimal("250"))

        assert parallel.model_dump() == sequential.model_dump()

    def test_invalid_input_propagates(self, sample_debts):
        """Precondition failures surface from the comparison."""
        sample_debts[0].balance = Decimal("-100")

        with pytest.raises(InvalidInputError):
            StrategyComparator().compare_all(sample_debts, Decimal("100"))

    def test_invalid_input_propagates_from_threads(self, sample_debts):
        sample_debts[1].minimum_payment = Decimal("-1")
        comparator = StrategyComparator(
            settings=AmortizationSettings(parallel_comparison=True)
        )

        with pytest.raises(InvalidInputError):
            comparator.compare_all(sample_debts, Decimal("100"))
