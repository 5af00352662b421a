"""Goal reachability under monthly contributions and compound interest."""

from __future__ import annotations

from dataclasses import dataclass

from .diagnostics import finite_or_zero
from .months import add_months, resolve_today
from .schema import FinancialGoal

MAX_GOAL_MONTHS = 1200
DEFAULT_CONTRIBUTION = 100.0


@dataclass(slots=True)
class GoalProjection:
    goal_id: str
    months: int | None
    reach_month: str | None
    progress: float


def months_to_reach_goal(goal: FinancialGoal, monthly_rate_percent: float) -> int | None:
    """Return the months needed to reach the goal, or None if it is never reached.

    Each month the contribution is added first and interest then accrues on
    the new total. Searches stop after 1200 months.
    """
    base = f"financialGoals[{goal.id}]"
    target = finite_or_zero(goal.target_value, f"{base}.targetValue")
    value = finite_or_zero(goal.current_value, f"{base}.currentValue")
    contribution = finite_or_zero(goal.monthly_contribution, f"{base}.monthlyContribution")
    if target <= value:
        return 0
    if contribution <= 0:
        return None

    rate = finite_or_zero(monthly_rate_percent, f"{base}.monthlyRate") / 100.0
    months = 0
    while value < target:
        value = (value + contribution) * (1.0 + rate)
        months += 1
        if months > MAX_GOAL_MONTHS:
            return None
    return months


def goal_projection(goal: FinancialGoal, monthly_rate_percent: float, today: str | None = None) -> GoalProjection:
    today = resolve_today(today)
    months = months_to_reach_goal(goal, monthly_rate_percent)
    target = finite_or_zero(goal.target_value, f"financialGoals[{goal.id}].targetValue")
    current = finite_or_zero(goal.current_value, f"financialGoals[{goal.id}].currentValue")
    progress = 100.0
    if target > 0:
        progress = min(100.0, max(0.0, current / target * 100.0))
    return GoalProjection(
        goal_id=goal.id,
        months=months,
        reach_month=add_months(today, months) if months is not None else None,
        progress=progress,
    )


def suggested_contribution(average_future_surplus: float) -> float:
    if average_future_surplus > 0:
        return average_future_surplus
    return DEFAULT_CONTRIBUTION
