"""Year-by-year wealth growth simulation for the emergency fund and investments."""

from __future__ import annotations

from dataclasses import dataclass

from .allocation import EMERGENCY_FUND, INVESTMENTS, allocate_surplus, cover_deficit, emergency_fund_goal
from .diagnostics import Diagnostics, finite_or_zero
from .projection import calculate_projections
from .schema import FinancialState

SIM_MODES = {"real", "projected"}
MONTHS_PER_YEAR = 12


@dataclass(slots=True)
class YearlyPoint:
    year: int
    contributed: float
    growth: float
    emergency_fund: float
    investments: float

    @property
    def total(self) -> float:
        return self.contributed + self.growth


@dataclass(slots=True)
class WealthSummary:
    net_worth: float
    total_assets: float
    total_patrimony: float
    emergency_fund_goal: float
    emergency_fund_progress: float


def simulate_wealth(
    state: FinancialState,
    monthly_performance: float,
    years: int,
    mode: str,
    *,
    emergency_goal: float | None = None,
    today: str | None = None,
    diagnostics: Diagnostics | None = None,
) -> list[YearlyPoint]:
    """Simulate monthly-compounded balances and return one point per year, 0..years.

    In ``real`` mode only interest accrues. In ``projected`` mode a surplus
    first fills the emergency fund toward its goal and is then split by the
    configured allocation; a deficit is withdrawn in ``deficit_strategy``
    order and is only covered up to the combined balance.
    """
    if mode not in SIM_MODES:
        raise ValueError(f"unsupported simulation mode: {mode}")
    if years < 0:
        raise ValueError("years must be >= 0")

    if emergency_goal is None and mode == "projected":
        projection = calculate_projections(state, today)
        emergency_goal = emergency_fund_goal(state, projection.average_future_expense)

    performance = finite_or_zero(monthly_performance, "monthlyPerformance", diagnostics)
    emergency_rate = finite_or_zero(
        state.emergency_fund.settings.monthly_interest_rate, "emergencyFund.settings.monthlyInterestRate", diagnostics
    ) / 100.0
    investment_rate = finite_or_zero(
        state.investments.settings.monthly_interest_rate, "investments.settings.monthlyInterestRate", diagnostics
    ) / 100.0
    balances = {
        EMERGENCY_FUND: finite_or_zero(state.emergency_fund.balance, "emergencyFund.balance", diagnostics),
        INVESTMENTS: finite_or_zero(state.investments.balance, "investments.balance", diagnostics),
    }
    total_contributed = balances[EMERGENCY_FUND] + balances[INVESTMENTS]

    points: list[YearlyPoint] = []
    for year in range(years + 1):
        if year > 0:
            for _ in range(MONTHS_PER_YEAR):
                balances[EMERGENCY_FUND] *= 1.0 + emergency_rate
                balances[INVESTMENTS] *= 1.0 + investment_rate

                if mode == "real":
                    continue

                if performance >= 0:
                    split = allocate_surplus(
                        performance,
                        balances[EMERGENCY_FUND],
                        emergency_goal or 0.0,
                        state.surplus_allocation,
                    )
                    balances[EMERGENCY_FUND] += split.to_emergency_fund
                    balances[INVESTMENTS] += split.to_investments
                    total_contributed += split.invested
                else:
                    cover_deficit(performance, balances, state.deficit_strategy)

        total_value = balances[EMERGENCY_FUND] + balances[INVESTMENTS]
        points.append(
            YearlyPoint(
                year=year,
                contributed=total_contributed,
                growth=total_value - total_contributed,
                emergency_fund=balances[EMERGENCY_FUND],
                investments=balances[INVESTMENTS],
            )
        )
    return points


def wealth_summary(state: FinancialState, emergency_goal: float) -> WealthSummary:
    net_worth = state.emergency_fund.balance + state.investments.balance
    total_assets = sum(asset.value for asset in state.assets)
    progress = (state.emergency_fund.balance / emergency_goal) * 100.0 if emergency_goal > 0 else 0.0
    return WealthSummary(
        net_worth=net_worth,
        total_assets=total_assets,
        total_patrimony=net_worth + total_assets,
        emergency_fund_goal=emergency_goal,
        emergency_fund_progress=progress,
    )
