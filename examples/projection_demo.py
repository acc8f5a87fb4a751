#!/usr/bin/env python3
"""
Projection Engine Demonstration

This script walks through the three projections:
1. Compare debt payoff strategies on a sample debt set
2. Project compound investment growth
3. Play a life-stage simulation on an asyncio event loop

Run: python examples/projection_demo.py
"""

import asyncio
from decimal import Decimal

from finsight_core import (
    CompoundGrowthEngine,
    Debt,
    FinsightConfig,
    InvestmentInputs,
    LifeStageSimulator,
    PersonalFinancialData,
    SimulationSpeed,
    SimulationState,
    StrategyComparator,
    TimeWindow,
    configure_logging,
)


def sample_debts() -> list[Debt]:
    """Create a sample debt set."""
    return [
        Debt(id="1", name="Credit Card 1", balance="5000", interest_rate="18.99", minimum_payment="150"),
        Debt(id="2", name="Credit Card 2", balance="3000", interest_rate="22.99", minimum_payment="100"),
        Debt(id="3", name="Personal Loan", balance="8000", interest_rate="12.99", minimum_payment="250"),
    ]


def demo_debt_payoff() -> None:
    print("Debt payoff strategies (extra payment $200/month)")
    print("-" * 70)
    comparison = StrategyComparator().compare_all(sample_debts(), Decimal("200"))
    for result in comparison.results():
        print(
            f"  {result.strategy.value:<10} {result.months:>4} months  "
            f"paid ${result.total_paid:>10,.2f}  interest ${result.total_interest:>9,.2f}  "
            f"saved ${result.monthly_savings_vs_minimum:>9,.2f}"
        )
    print(f"  Best strategy: {comparison.best_strategy.value}")
    print()


def demo_growth() -> None:
    print("Investment growth ($1,000 initial, $500/month, 7% for 30 years)")
    print("-" * 70)
    engine = CompoundGrowthEngine()
    snapshots = engine.project(
        InvestmentInputs(
            initial_amount="1000",
            monthly_contribution="500",
            annual_return_percent="7",
            time_horizon_years=30,
        )
    )
    for snapshot in snapshots[::10]:
        print(f"  year {snapshot.year:>2}: balance ${snapshot.balance:>12,.0f}")
    summary = engine.summarize(snapshots)
    print(
        f"  Final: ${summary.total_balance:,.0f} "
        f"(contributed ${summary.total_contributions:,.0f}, "
        f"earned ${summary.total_earnings:,.0f})"
    )
    print()


async def demo_life_simulation() -> None:
    print("Life-stage simulation (first five years, one year per tick)")
    print("-" * 70)
    loop = asyncio.get_running_loop()
    simulator = LifeStageSimulator(scheduler=loop, speed=SimulationSpeed.YEAR)
    simulator.start(
        PersonalFinancialData(
            age=30,
            current_salary="50000",
            savings="10000",
            investments="25000",
            debt_amount="15000",
            debt_interest_rate="6.5",
        )
    )
    try:
        while simulator.state != SimulationState.COMPLETED:
            await asyncio.sleep(0.5)
            print(f"  age {simulator.progress.current_age:.0f}  net worth ${simulator.financial_state.net_worth:,.0f}")
            if simulator.progress.years_elapsed >= 5:
                break
    finally:
        simulator.close()

    for point in simulator.history(TimeWindow.FIVE_YEARS):
        print(f"  sample age {point.age}: net worth ${point.net_worth:,.0f}")
    print()


def main():
    configure_logging(FinsightConfig(log_level="WARNING"))

    print("=" * 70)
    print("Finsight projection engine demo")
    print("=" * 70)
    print()

    demo_debt_payoff()
    demo_growth()
    asyncio.run(demo_life_simulation())

    print("=" * 70)
    print("Demo complete!")
    print("=" * 70)


if __name__ == "__main__":
    main()
