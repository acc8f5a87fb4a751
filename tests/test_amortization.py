"""Tests for the amortization engine."""

from decimal import Decimal

import pytest

from finsight_core import (
    AmortizationEngine,
    AmortizationSettings,
    ConfigurationError,
    Debt,
    InvalidInputError,
    PayoffStrategy,
    StrategyResult,
)
from finsight_core.amortization import order_debts


def make_debt(debt_id: str, balance: str, rate: str, minimum: str) -> Debt:
    return Debt(
        id=debt_id,
        name=f"Debt {debt_id}",
        balance=Decimal(balance),
        interest_rate=Decimal(rate),
        minimum_payment=Decimal(minimum),
    )


class TestAmortizationEngine:
    """Test suite for AmortizationEngine.simulate."""

    def test_zero_rate_debt_pays_off_in_ten_months(self):
        """A 1000 balance at 0% paying 100 a month takes exactly 10 months."""
        engine = AmortizationEngine()
        result = engine.simulate(
            [make_debt("a", "1000", "0", "100")], PayoffStrategy.MINIMUM, Decimal("0")
        )

        assert isinstance(result, StrategyResult)
        assert result.months == 10
        assert result.total_interest == Decimal("0")
        assert result.total_paid == Decimal("1000")
        assert result.final_balance == Decimal("0")
        assert result.reached_cutoff is False
        assert result.years == 1
        assert len(result.monthly_data) == 10
        assert result.monthly_data[0].month == 1
        assert result.monthly_data[0].balance == Decimal("900")
        assert result.monthly_data[-1].balance == Decimal("0")

    def test_interest_accrues_before_payment(self):
        """Interest is charged on the opening balance, then the minimum is paid."""
        engine = AmortizationEngine()
        result = engine.simulate(
            [make_debt("a", "1000", "12", "100")], PayoffStrategy.MINIMUM
        )

        first = result.monthly_data[0]
        # 1000 * 1% = 10 interest, then 100 paid
        assert first.interest == Decimal("10.00")
        assert first.payment == Decimal("100.00")
        assert first.balance == Decimal("910.00")

    def test_final_payment_is_capped_at_balance(self):
        """The last minimum payment never exceeds what is owed."""
        engine = AmortizationEngine()
        result = engine.simulate(
            [make_debt("a", "250", "0", "100")], PayoffStrategy.MINIMUM
        )

        assert result.months == 3
        assert result.monthly_data[-1].payment == Decimal("50")
        assert result.total_paid == Decimal("250")

    def test_extra_payment_targets_first_debt_in_order(self):
        """Snowball sends the whole extra payment to the smallest balance."""
        engine = AmortizationEngine()
        debts = [
            make_debt("big", "1000", "0", "50"),
            make_debt("small", "500", "0", "50"),
        ]
        result = engine.simulate(debts, PayoffStrategy.SNOWBALL, Decimal("100"))

        first = result.monthly_data[0]
        # 1500 - 50 - 50 - 100 extra
        assert first.balance == Decimal("1300")
        assert first.payment == Decimal("200")
        assert result.months < engine.simulate(debts, PayoffStrategy.MINIMUM).months

    def test_extra_payment_capped_at_target_balance(self):
        """Only the remaining balance of the target debt is taken from the extra."""
        engine = AmortizationEngine()
        result = engine.simulate(
            [make_debt("a", "120", "0", "100")], PayoffStrategy.AVALANCHE, Decimal("50")
        )

        assert result.months == 1
        assert result.total_paid == Decimal("120")

    def test_minimum_strategy_ignores_extra_payment(self):
        """MINIMUM never applies the extra payment."""
        engine = AmortizationEngine()
        debts = [make_debt("a", "1000", "0", "100")]

        with_extra = engine.simulate(debts, PayoffStrategy.MINIMUM, Decimal("500"))
        without = engine.simulate(debts, PayoffStrategy.MINIMUM, Decimal("0"))

        assert with_extra.months == without.months == 10
        assert with_extra.total_paid == without.total_paid

    def test_cutoff_when_minimum_does_not_cover_interest(self):
        """A debt that grows every month stops at the cutoff without error."""
        engine = AmortizationEngine()
        result = engine.simulate(
            [make_debt("a", "10000", "24", "100")], PayoffStrategy.MINIMUM
        )

        assert result.months == 600
        assert result.final_balance > 0
        assert result.reached_cutoff is True
        assert result.years == 50

    def test_monthly_data_truncated_but_totals_complete(self):
        """Only the first 120 snapshots are kept, totals cover the full run."""
        engine = AmortizationEngine()
        result = engine.simulate(
            [make_debt("a", "20000", "0", "100")], PayoffStrategy.MINIMUM
        )

        assert result.months == 200
        assert len(result.monthly_data) == 120
        assert result.monthly_data[-1].month == 120
        assert result.total_paid == Decimal("20000")

    def test_custom_cutoff_settings(self):
        """The cutoff and display window come from settings."""
        engine = AmortizationEngine(AmortizationSettings(max_months=12, display_months=6))
        result = engine.simulate(
            [make_debt("a", "5000", "0", "100")], PayoffStrategy.MINIMUM
        )

        assert result.months == 12
        assert result.max_months == 12
        assert len(result.monthly_data) == 6
        assert result.final_balance == Decimal("3800")
        assert result.reached_cutoff is True

    def test_display_window_larger_than_cutoff_rejected(self):
        """Settings with a display window beyond the cutoff are inconsistent."""
        with pytest.raises(ConfigurationError) as exc_info:
            AmortizationEngine(AmortizationSettings(max_months=60, display_months=120))

        assert exc_info.value.config_key == "display_months"

    def test_no_debts(self):
        """An empty debt list is already paid off."""
        result = AmortizationEngine().simulate([], PayoffStrategy.SNOWBALL, Decimal("100"))

        assert result.months == 0
        assert result.total_paid == Decimal("0")
        assert result.monthly_data == []

    def test_caller_debts_are_not_mutated(self, sample_debts):
        """Balances and order of the caller's list are unchanged after a run."""
        before = [d.model_dump() for d in sample_debts]
        ids_before = [d.id for d in sample_debts]

        AmortizationEngine().simulate(sample_debts, PayoffStrategy.SNOWBALL, Decimal("200"))

        assert [d.model_dump() for d in sample_debts] == before
        assert [d.id for d in sample_debts] == ids_before

    def test_accepts_string_strategy_and_numeric_extra(self):
        """Strategy names and plain numbers are coerced."""
        result = AmortizationEngine().simulate(
            [make_debt("a", "1000", "0", "100")], "snowball", 100
        )

        assert result.strategy == PayoffStrategy.SNOWBALL
        assert result.months == 5


class TestAmortizationValidation:
    """Precondition checks raise InvalidInputError."""

    def test_negative_balance_rejected(self):
        """A negative balance set after construction is caught by the engine."""
        debt = make_debt("a", "1000", "5", "100")
        debt.balance = Decimal("-1")

        with pytest.raises(InvalidInputError) as exc_info:
            AmortizationEngine().simulate([debt], PayoffStrategy.MINIMUM)

        assert exc_info.value.field == "balance"
        assert exc_info.value.details["debt_id"] == "a"
        assert exc_info.value.recoverable is True

    def test_negative_rate_rejected(self):
        debt = make_debt("a", "1000", "5", "100")
        debt.interest_rate = Decimal("-0.5")

        with pytest.raises(InvalidInputError) as exc_info:
            AmortizationEngine().simulate([debt], PayoffStrategy.AVALANCHE)

        assert exc_info.value.field == "interest_rate"

    def test_negative_minimum_payment_rejected(self):
        debt = Debt.model_construct(
            id="a",
            name="",
            balance=Decimal("100"),
            interest_rate=Decimal("0"),
            minimum_payment=Decimal("-10"),
        )

        with pytest.raises(InvalidInputError) as exc_info:
            AmortizationEngine().simulate([debt], PayoffStrategy.MINIMUM)

        assert exc_info.value.field == "minimum_payment"

    def test_negative_extra_payment_rejected(self):
        with pytest.raises(InvalidInputError) as exc_info:
            AmortizationEngine().simulate(
                [make_debt("a", "1000", "0", "100")],
                PayoffStrategy.SNOWBALL,
                Decimal("-5"),
            )

        assert exc_info.value.field == "extra_payment"


class TestOrderDebts:
    """Strategy ordering is computed once from the starting debts."""

    def test_minimum_keeps_input_order(self, sample_debts):
        ordered = order_debts(sample_debts, PayoffStrategy.MINIMUM)
        assert [d.id for d in ordered] == ["1", "2", "3"]

    def test_snowball_orders_by_ascending_balance(self, sample_debts):
        ordered = order_debts(sample_debts, PayoffStrategy.SNOWBALL)
        assert [d.id for d in ordered] == ["2", "1", "3"]

    def test_avalanche_orders_by_descending_rate(self, sample_debts):
        ordered = order_debts(sample_debts, PayoffStrategy.AVALANCHE)
        assert [d.id for d in ordered] == ["2", "1", "3"]

    def test_ties_keep_input_order(self):
        debts = [
            make_debt("x", "100", "10", "10"),
            make_debt("y", "100", "10", "10"),
        ]
        assert [d.id for d in order_debts(debts, PayoffStrategy.SNOWBALL)] == ["x", "y"]
        assert [d.id for d in order_debts(debts, PayoffStrategy.AVALANCHE)] == ["x", "y"]
