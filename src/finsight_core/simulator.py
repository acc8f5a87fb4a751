"""Life-stage simulation driven by a scheduler tick.

The simulator owns the mutable state of a run: progress in simulated
time, the financial position, the yearly history samples and recent life
events. Each tick advances simulated age by the speed's step, grows the
salary at year boundaries, compounds investments, pays down debt and
samples history once per integer age.

Scheduling is delegated to any object with a ``call_later(delay,
callback)`` method returning a cancellable handle; an ``asyncio`` event
loop satisfies this directly. Without a scheduler the caller drives the
simulation by calling ``tick()``.
"""

from __future__ import annotations

import functools
import math
from decimal import Decimal, InvalidOperation
from fractions import Fraction
from typing import Any, Callable, Optional, Protocol, runtime_checkable

import structlog

from .config import SimulationSettings
from .exceptions import InvalidInputError, InvalidStateTransitionError
from .history import TimeWindow, window_history
from .models import (
    FinancialState,
    HistoricalDataPoint,
    LifeEvent,
    LifeEventType,
    PersonalFinancialData,
    SimulationProgress,
    SimulationSpeed,
    SimulationState,
)

logger = structlog.get_logger()


# =============================================================================
# SCHEDULING PROTOCOLS
# =============================================================================

@runtime_checkable
class CancellableHandle(Protocol):
    """A scheduled callback that can be cancelled before it fires."""

    def cancel(self) -> None:
        ...


@runtime_checkable
class Scheduler(Protocol):
    """Anything that can run a callback once after a delay in seconds."""

    def call_later(
        self, delay: float, callback: Callable[..., Any], *args: Any
    ) -> CancellableHandle:
        ...


# =============================================================================
# CONSTANTS
# =============================================================================

RETIREMENT_MILESTONES: dict[int, str] = {
    60: "You turned 60! You can now make penalty-free withdrawals from your IRA accounts (available since age 59 1/2).",
    62: "You turned 62! You can now claim early Social Security benefits (at reduced rates).",
    65: "You turned 65! You can now access Medicare and make full retirement withdrawals from your 401k.",
    67: "You turned 67! You can now claim full Social Security benefits without reduction.",
}

PROMOTION_RAISE = Decimal("0.15")
DEMOTION_CUT = Decimal("0.10")


def _to_decimal(value: Fraction) -> Decimal:
    return Decimal(value.numerator) / Decimal(value.denominator)


class LifeStageSimulator:
    """
    State machine for a time-stepped salary, investment and debt model.

    States move setup -> running <-> paused, and running -> completed once
    simulated age reaches the configured end age. ``reset`` returns to
    setup from any state. Illegal transitions raise
    InvalidStateTransitionError.
    """

    def __init__(
        self,
        settings: Optional[SimulationSettings] = None,
        scheduler: Optional[Scheduler] = None,
        speed: SimulationSpeed = SimulationSpeed.MONTH,
    ):
        """
        Initialize simulator in the setup state.

        Args:
            settings: Model assumptions (default: from environment)
            scheduler: Timer used for automatic playback (default: manual ticks)
            speed: Initial playback speed
        """
        self.settings = settings or SimulationSettings()
        self._scheduler = scheduler
        self._speed = SimulationSpeed(speed)

        self._state = SimulationState.SETUP
        self._seed: Optional[PersonalFinancialData] = None
        self._elapsed = Fraction(0)
        self._last_recorded_age = 0
        self._financial = FinancialState()
        self._history: list[HistoricalDataPoint] = []
        self._events: list[LifeEvent] = []

        self._handle: Optional[CancellableHandle] = None
        self._generation = 0
        self._ticking = False
        self._closed = False

    # -------------------------------------------------------------------------
    # Read-only accessors
    # -------------------------------------------------------------------------

    @property
    def state(self) -> SimulationState:
        return self._state

    @property
    def speed(self) -> SimulationSpeed:
        return self._speed

    @property
    def seed(self) -> Optional[PersonalFinancialData]:
        return self._seed

    @property
    def current_age(self) -> Decimal:
        return _to_decimal(self._current_age())

    @property
    def progress(self) -> SimulationProgress:
        """Snapshot of progress in simulated time."""
        elapsed = self._elapsed
        return SimulationProgress(
            current_age=self.current_age,
            years_elapsed=math.floor(elapsed),
            months_elapsed=math.floor(elapsed * 12),
            days_elapsed=math.floor(elapsed * 365),
        )

    @property
    def financial_state(self) -> FinancialState:
        """Copy of the current financial position."""
        return self._financial.model_copy()

    @property
    def historical_data(self) -> list[HistoricalDataPoint]:
        """All yearly samples, in ascending age order."""
        return list(self._history)

    @property
    def recent_events(self) -> list[LifeEvent]:
        """Most recent life events, newest first."""
        return list(self._events)

    @property
    def has_pending_tick(self) -> bool:
        return self._handle is not None

    def history(self, window: TimeWindow = TimeWindow.ALL) -> list[HistoricalDataPoint]:
        """Yearly samples restricted to a time window."""
        return window_history(self._history, window, self.current_age)

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def start(self, seed: PersonalFinancialData) -> None:
        """
        Begin a run from seed data.

        Raises:
            InvalidStateTransitionError: If not in the setup state.
            InvalidInputError: If the seed age is already at the end age.
        """
        self._require({SimulationState.SETUP}, "start")
        if seed.age >= self.settings.end_age:
            raise InvalidInputError(
                "Starting age must be below the simulation end age",
                field="age",
                value=seed.age,
                constraint=f"< {self.settings.end_age}",
            )

        self._seed = seed.model_copy(deep=True)
        self._initialize_from_seed()
        self._state = SimulationState.RUNNING
        logger.info(
            "simulation_started",
            age=seed.age,
            salary=str(seed.current_salary),
            speed=self._speed.value,
        )
        self._schedule_next()

    def pause(self) -> None:
        """Stop ticking until resumed; the pending tick is cancelled."""
        self._require({SimulationState.RUNNING}, "pause")
        self._cancel_pending()
        self._state = SimulationState.PAUSED
        logger.info("simulation_paused", age=str(self.current_age))

    def resume(self) -> None:
        """Continue from exactly where the run was paused."""
        self._require({SimulationState.PAUSED}, "resume")
        self._state = SimulationState.RUNNING
        logger.info("simulation_resumed", age=str(self.current_age))
        self._schedule_next()

    def reset(self) -> None:
        """Return to setup, discarding history, events and progress."""
        self._cancel_pending()
        self._state = SimulationState.SETUP
        self._initialize_from_seed()
        logger.info("simulation_reset")

    def close(self) -> None:
        """Dispose of the simulator; no further ticks will fire."""
        self._cancel_pending()
        self._closed = True

    def set_speed(self, speed: SimulationSpeed) -> None:
        """
        Change playback speed, re-arming the timer if running.

        Raises:
            InvalidStateTransitionError: If the simulator has been closed.
        """
        if self._closed:
            raise InvalidStateTransitionError(
                "Cannot set_speed: simulator has been closed",
                current_state=self._state.value,
                attempted="set_speed",
            )
        self._speed = SimulationSpeed(speed)
        if self._state == SimulationState.RUNNING:
            self._schedule_next()

    # -------------------------------------------------------------------------
    # Ticking
    # -------------------------------------------------------------------------

    def tick(self) -> None:
        """
        Apply one simulation step.

        Raises:
            InvalidStateTransitionError: If not running, or if a tick is
                already being applied.
        """
        if self._ticking:
            raise InvalidStateTransitionError(
                "A tick is already in progress",
                current_state=self._state.value,
                attempted="tick",
            )
        self._require({SimulationState.RUNNING}, "tick")

        self._ticking = True
        try:
            self._advance()
        finally:
            self._ticking = False

    def _advance(self) -> None:
        settings = self.settings
        fs = self._financial

        step = Fraction(1, self._speed.ticks_per_year)
        age_before = self._current_age()
        self._elapsed += step
        age_after = self._current_age()

        years = _to_decimal(step)
        months = _to_decimal(step * 12)

        if math.floor(age_after) > math.floor(age_before):
            fs.current_salary *= Decimal(1) + settings.salary_growth_rate

        contribution = fs.current_salary * settings.contribution_rate * months / 12
        growth = (Decimal(1) + settings.investment_return_rate) ** years
        fs.current_investments = fs.current_investments * growth + contribution
        fs.remaining_debt = max(
            Decimal(0), fs.remaining_debt - fs.monthly_payment * months
        )
        fs.net_worth = fs.current_investments - fs.remaining_debt

        self._check_milestones(age_before, age_after)
        self._record_history(age_after)

        logger.debug(
            "simulation_tick",
            age=str(self.current_age),
            net_worth=str(fs.net_worth),
        )

        if age_after >= settings.end_age:
            self._complete()

    def _record_history(self, age: Fraction) -> None:
        whole_age = math.floor(age)
        if whole_age <= self._last_recorded_age:
            return
        if self._seed is not None and whole_age < self._seed.age:
            return

        fs = self._financial
        self._history.append(
            HistoricalDataPoint(
                age=whole_age,
                net_worth=fs.net_worth,
                salary=fs.current_salary,
                investments=fs.current_investments,
                debt=fs.remaining_debt,
            )
        )
        self._last_recorded_age = whole_age

    def _check_milestones(self, age_before: Fraction, age_after: Fraction) -> None:
        for milestone_age, description in RETIREMENT_MILESTONES.items():
            if age_before < milestone_age <= age_after:
                self._add_event(
                    LifeEventType.RETIREMENT_MILESTONE, description, milestone_age
                )

    def _complete(self) -> None:
        self._cancel_pending()
        self._state = SimulationState.COMPLETED
        logger.info(
            "simulation_completed",
            age=str(self.current_age),
            net_worth=str(self._financial.net_worth),
            samples=len(self._history),
        )

    # -------------------------------------------------------------------------
    # Career actions
    # -------------------------------------------------------------------------

    def promote(self) -> None:
        """Raise salary by 15%."""
        self._require_active("promote")
        self._set_salary(self._financial.current_salary * (1 + PROMOTION_RAISE))
        self._add_event(
            LifeEventType.PROMOTION, "You got promoted with a 15% salary increase!"
        )

    def demote(self) -> None:
        """Cut salary by 10%."""
        self._require_active("demote")
        self._set_salary(self._financial.current_salary * (1 - DEMOTION_CUT))
        self._add_event(
            LifeEventType.DEMOTION, "You were demoted with a 10% salary decrease"
        )

    def quit_job(self) -> None:
        """Drop salary to zero."""
        self._require_active("quit_job")
        self._set_salary(Decimal(0))
        self._add_event(
            LifeEventType.LAYOFF, "You quit your job and are now unemployed"
        )

    def take_new_job(self, salary: Decimal) -> None:
        """
        Replace salary with a new job's salary.

        Raises:
            InvalidInputError: If the salary is not a finite, non-negative amount.
        """
        self._require_active("take_new_job")
        try:
            amount = Decimal(str(salary))
        except InvalidOperation as e:
            raise InvalidInputError(
                "Salary must be a number",
                field="salary",
                value=salary,
                constraint="finite number",
            ) from e
        if not amount.is_finite():
            raise InvalidInputError(
                "Salary must be a finite amount",
                field="salary",
                value=salary,
                constraint="finite number",
            )
        salary = amount
        if salary < 0:
            raise InvalidInputError(
                "Salary cannot be negative",
                field="salary",
                value=salary,
                constraint=">= 0",
            )
        self._set_salary(salary)
        self._add_event(
            LifeEventType.NEW_JOB, f"You got a new job with salary ${salary:,.0f}!"
        )

    def _set_salary(self, salary: Decimal) -> None:
        self._financial.current_salary = salary
        logger.info("salary_changed", salary=str(salary), age=str(self.current_age))

    def _add_event(
        self, event_type: LifeEventType, description: str, age: Optional[int] = None
    ) -> None:
        if age is None:
            age = math.floor(self._current_age())
        self._events.insert(0, LifeEvent(type=event_type, description=description, age=age))
        del self._events[self.settings.max_recent_events:]

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _current_age(self) -> Fraction:
        start_age = self._seed.age if self._seed is not None else 0
        return Fraction(start_age) + self._elapsed

    def _initialize_from_seed(self) -> None:
        self._elapsed = Fraction(0)
        self._history = []
        self._events = []

        seed = self._seed
        if seed is None:
            self._last_recorded_age = 0
            self._financial = FinancialState()
            return

        self._last_recorded_age = seed.age
        monthly_payment = max(
            seed.debt_amount * self.settings.debt_payment_rate,
            self.settings.minimum_debt_payment,
        )
        self._financial = FinancialState(
            current_salary=seed.current_salary,
            current_investments=seed.investments,
            remaining_debt=seed.debt_amount,
            net_worth=seed.investments - seed.debt_amount,
            monthly_payment=monthly_payment,
        )

    def _require(self, allowed: set[SimulationState], attempted: str) -> None:
        if self._closed:
            raise InvalidStateTransitionError(
                f"Cannot {attempted}: simulator has been closed",
                current_state=self._state.value,
                attempted=attempted,
            )
        if self._state not in allowed:
            raise InvalidStateTransitionError(
                f"Cannot {attempted} from {self._state.value}",
                current_state=self._state.value,
                attempted=attempted,
            )

    def _require_active(self, attempted: str) -> None:
        self._require({SimulationState.RUNNING, SimulationState.PAUSED}, attempted)

    def _schedule_next(self) -> None:
        self._cancel_pending()
        if self._closed or self._scheduler is None:
            return
        if self._state != SimulationState.RUNNING:
            return
        generation = self._generation
        self._handle = self._scheduler.call_later(
            self._speed.interval_ms / 1000,
            functools.partial(self._on_timer, generation),
        )

    def _cancel_pending(self) -> None:
        self._generation += 1
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _on_timer(self, generation: int) -> None:
        if self._closed or generation != self._generation:
            return
        if self._state != SimulationState.RUNNING:
            return
        self._handle = None
        self.tick()
        self._schedule_next()
