"""Shared fixtures for finsight-core tests."""

from decimal import Decimal

import pytest
import structlog

from finsight_core.models import Debt, PersonalFinancialData


class FakeHandle:
    """Handle returned by FakeScheduler."""

    def __init__(self, delay: float, callback):
        self.delay = delay
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeScheduler:
    """Manual-clock scheduler: callbacks only run when fired by the test."""

    def __init__(self):
        self.handles: list[FakeHandle] = []

    def call_later(self, delay, callback, *args):
        handle = FakeHandle(delay, lambda: callback(*args))
        self.handles.append(handle)
        return handle

    @property
    def pending(self) -> list[FakeHandle]:
        return [h for h in self.handles if not h.cancelled]

    def fire_next(self) -> None:
        """Run the oldest non-cancelled callback."""
        handle = self.pending[0]
        handle.cancelled = True
        handle.callback()


@pytest.fixture
def sample_debts() -> list[Debt]:
    """Three debts with distinct balances and rates."""
    return [
        Debt(
            id="1",
            name="Credit Card 1",
            balance=Decimal("5000"),
            interest_rate=Decimal("18.99"),
            minimum_payment=Decimal("150"),
        ),
        Debt(
            id="2",
            name="Credit Card 2",
            balance=Decimal("3000"),
            interest_rate=Decimal("22.99"),
            minimum_payment=Decimal("100"),
        ),
        Debt(
            id="3",
            name="Personal Loan",
            balance=Decimal("8000"),
            interest_rate=Decimal("12.99"),
            minimum_payment=Decimal("250"),
        ),
    ]


@pytest.fixture
def seed() -> PersonalFinancialData:
    """A 30 year old with some investments and debt."""
    return PersonalFinancialData(
        age=30,
        current_salary=Decimal("50000"),
        savings=Decimal("10000"),
        investments=Decimal("10000"),
        debt_amount=Decimal("10000"),
        debt_interest_rate=Decimal("6.5"),
    )


@pytest.fixture
def fake_scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture(autouse=True)
def reset_structlog():
    """Restore default structlog configuration after each test."""
    yield
    structlog.reset_defaults()
