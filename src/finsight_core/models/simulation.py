"""Life-stage simulation data models.

This module provides the structures owned by the life-stage simulator:
- The seed data a run is started from
- Lifecycle state and playback speed
- Progress, financial state and the yearly history samples
- Life events (retirement milestones and career actions)
"""

from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator


def _utc_now() -> datetime:
    """Return current UTC datetime with timezone info."""
    return datetime.now(timezone.utc)


class SimulationState(str, Enum):
    """Lifecycle states of a life-stage simulation."""

    SETUP = "setup"
    RUNNING = "running"
    PAUSED = "paused"
    COMPLETED = "completed"


class SimulationSpeed(str, Enum):
    """Playback speed.

    Each speed sets two independent rates: how much simulated time one
    tick covers, and how long the scheduler waits between ticks.
    """

    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"

    @property
    def ticks_per_year(self) -> int:
        """Number of ticks that make up one simulated year."""
        return _TICKS_PER_YEAR[self]

    @property
    def interval_ms(self) -> int:
        """Wall-clock delay between ticks, in milliseconds."""
        return _INTERVAL_MS[self]


_TICKS_PER_YEAR = {
    SimulationSpeed.DAY: 365,
    SimulationSpeed.WEEK: 52,
    SimulationSpeed.MONTH: 12,
    SimulationSpeed.YEAR: 1,
}

_INTERVAL_MS = {
    SimulationSpeed.DAY: 100,
    SimulationSpeed.WEEK: 300,
    SimulationSpeed.MONTH: 500,
    SimulationSpeed.YEAR: 1000,
}


class PersonalFinancialData(BaseModel):
    """Seed state for a life-stage simulation."""

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "age": 30,
                    "current_salary": "50000",
                    "savings": "10000",
                    "investments": "25000",
                    "debt_amount": "15000",
                    "debt_interest_rate": "6.5",
                }
            ]
        }
    }

    age: int = Field(ge=0, le=150)
    current_salary: Decimal = Field(ge=0)
    savings: Decimal = Field(default=Decimal("0"), ge=0)
    investments: Decimal = Field(default=Decimal("0"), ge=0)
    debt_amount: Decimal = Field(default=Decimal("0"), ge=0)
    debt_interest_rate: Decimal = Field(
        default=Decimal("0"),
        ge=0,
        description="Informational; simulated debt is paid down without accruing interest",
    )

    @field_validator(
        "current_salary",
        "savings",
        "investments",
        "debt_amount",
        "debt_interest_rate",
        mode="before",
    )
    @classmethod
    def coerce_to_decimal(cls, v):
        """Coerce string and float amounts to Decimal."""
        if isinstance(v, (str, float)):
            return Decimal(str(v))
        return v


class SimulationProgress(BaseModel):
    """How far a simulation has advanced in simulated time."""

    current_age: Decimal = Decimal("0")
    years_elapsed: int = 0
    months_elapsed: int = 0
    days_elapsed: int = 0


class FinancialState(BaseModel):
    """Financial position, updated once per tick."""

    current_salary: Decimal = Decimal("0")
    current_investments: Decimal = Decimal("0")
    remaining_debt: Decimal = Decimal("0")
    net_worth: Decimal = Decimal("0")
    monthly_payment: Decimal = Decimal("0")


class HistoricalDataPoint(BaseModel):
    """One yearly sample of the simulated trajectory."""

    age: int
    net_worth: Decimal
    salary: Decimal
    investments: Decimal
    debt: Decimal


class LifeEventType(str, Enum):
    """Kinds of events surfaced to the user during a run."""

    RETIREMENT_MILESTONE = "retirement_milestone"
    PROMOTION = "promotion"
    DEMOTION = "demotion"
    LAYOFF = "layoff"
    NEW_JOB = "new_job"


class LifeEvent(BaseModel):
    """A notable event during a simulation."""

    type: LifeEventType
    description: str
    age: Optional[int] = None
    timestamp: datetime = Field(default_factory=_utc_now)
