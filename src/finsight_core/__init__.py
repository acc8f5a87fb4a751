"""Finsight Core - Debt payoff, investment growth and life-stage projections."""

__version__ = "0.1.0"

from .amortization import AmortizationEngine
from .comparator import StrategyComparator
from .config import AmortizationSettings, FinsightConfig, SimulationSettings
from .exceptions import (
    ConfigurationError,
    FinsightError,
    InvalidInputError,
    InvalidStateTransitionError,
)
from .growth import CompoundGrowthEngine
from .history import TimeWindow, window_history
from .log import configure_logging
from .models import (
    Debt,
    FinancialState,
    HistoricalDataPoint,
    InvestmentInputs,
    InvestmentSummary,
    LifeEvent,
    LifeEventType,
    MonthlySnapshot,
    PayoffStrategy,
    PersonalFinancialData,
    SimulationProgress,
    SimulationSpeed,
    SimulationState,
    StrategyComparison,
    StrategyResult,
    YearlySnapshot,
)
from .simulator import LifeStageSimulator, Scheduler

__all__ = [
    "AmortizationEngine",
    "StrategyComparator",
    "CompoundGrowthEngine",
    "LifeStageSimulator",
    "Scheduler",
    "TimeWindow",
    "window_history",
    "configure_logging",
    "AmortizationSettings",
    "SimulationSettings",
    "FinsightConfig",
    "FinsightError",
    "InvalidInputError",
    "InvalidStateTransitionError",
    "ConfigurationError",
    "Debt",
    "PayoffStrategy",
    "MonthlySnapshot",
    "StrategyResult",
    "StrategyComparison",
    "InvestmentInputs",
    "InvestmentSummary",
    "YearlySnapshot",
    "PersonalFinancialData",
    "SimulationProgress",
    "SimulationSpeed",
    "SimulationState",
    "FinancialState",
    "HistoricalDataPoint",
    "LifeEvent",
    "LifeEventType",
]
