"""Chart payload generation for presentation layers."""

from __future__ import annotations

from .cashflow import CashflowPoint
from .goals import GoalProjection
from .schema import FinancialState
from .wealth import YearlyPoint


def _wealth_stack(points: list[YearlyPoint]) -> dict[str, list[float]]:
    return {
        "years": [point.year for point in points],
        "contributed": [point.contributed for point in points],
        "growth": [point.growth for point in points],
        "total": [point.total for point in points],
    }


def _account_stack(points: list[YearlyPoint]) -> dict[str, list[float]]:
    return {
        "emergencyFund": [point.emergency_fund for point in points],
        "investments": [point.investments for point in points],
    }


def _cashflow_series(points: list[CashflowPoint]) -> dict[str, list]:
    return {
        "months": [point.month for point in points],
        "balance": [point.balance for point in points],
        "income": [point.income for point in points],
        "expense": [point.expense for point in points],
    }


def _goal_timelines(state: FinancialState, goals: list[GoalProjection]) -> list[dict[str, object]]:
    names = {goal.id: goal.name for goal in state.financial_goals}
    return [
        {
            "id": goal.goal_id,
            "name": names.get(goal.goal_id, ""),
            "months": goal.months,
            "reachMonth": goal.reach_month,
            "progress": goal.progress,
        }
        for goal in goals
    ]


def build_chart_payload(
    state: FinancialState,
    wealth_by_mode: dict[str, list[YearlyPoint]],
    cashflow: list[CashflowPoint],
    goals: list[GoalProjection],
) -> dict[str, object]:
    return {
        "wealth": {mode: _wealth_stack(points) for mode, points in wealth_by_mode.items()},
        "accounts": {mode: _account_stack(points) for mode, points in wealth_by_mode.items()},
        "cashflow": _cashflow_series(cashflow),
        "goals": _goal_timelines(state, goals),
    }
