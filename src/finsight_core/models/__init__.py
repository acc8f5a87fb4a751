"""Data models for finsight-core.

This package provides the pydantic structures shared by the engines:
- Debt payoff inputs and results (debt.py)
- Compound growth inputs and yearly snapshots (investment.py)
- Life-stage simulation state and history (simulation.py)
"""

from finsight_core.models.debt import (
    Debt,
    MonthlySnapshot,
    PayoffStrategy,
    StrategyComparison,
    StrategyResult,
)
from finsight_core.models.investment import (
    InvestmentInputs,
    InvestmentSummary,
    YearlySnapshot,
)
from finsight_core.models.simulation import (
    FinancialState,
    HistoricalDataPoint,
    LifeEvent,
    LifeEventType,
    PersonalFinancialData,
    SimulationProgress,
    SimulationSpeed,
    SimulationState,
)

__all__ = [
    # Debt payoff
    "Debt",
    "MonthlySnapshot",
    "PayoffStrategy",
    "StrategyComparison",
    "StrategyResult",
    # Investment growth
    "InvestmentInputs",
    "InvestmentSummary",
    "YearlySnapshot",
    # Life-stage simulation
    "FinancialState",
    "HistoricalDataPoint",
    "LifeEvent",
    "LifeEventType",
    "PersonalFinancialData",
    "SimulationProgress",
    "SimulationSpeed",
    "SimulationState",
]
