"""JSON report assembly."""

from __future__ import annotations

from dataclasses import asdict
from datetime import UTC, datetime
import hashlib
import json
from pathlib import Path

from .allocation import emergency_fund_goal, plan_deficit_coverage
from .cashflow import cashflow_forecast, month_summary
from .charts import build_chart_payload
from .goals import goal_projection, suggested_contribution
from .projection import FinancialProjection, calculate_projections
from .schema import FinancialState
from .validate import validate_state
from .wealth import SIM_MODES, simulate_wealth, wealth_summary


def state_hash(state: FinancialState) -> str:
    canonical = json.dumps(asdict(state), sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()[:12]


def _monthly_table(projection: FinancialProjection) -> list[dict[str, object]]:
    return [
        {
            "month": month,
            "income": detail.income,
            "expense": detail.expense,
            "surplus": detail.surplus,
            "confirmedIncome": detail.confirmed_income,
            "confirmedExpense": detail.confirmed_expense,
            "projectedPlaceholders": dict(detail.projected_placeholders),
        }
        for month, detail in projection.monthly_details.items()
    ]


def build_report(state: FinancialState, *, years: int, mode: str, today: str | None = None) -> dict[str, object]:
    if mode not in SIM_MODES:
        raise ValueError(f"unsupported simulation mode: {mode}")
    projection = calculate_projections(state, today)
    today = projection.today
    goal = emergency_fund_goal(state, projection.average_future_expense)

    performance = {"real": 0.0, "projected": projection.average_future_surplus}
    wealth_by_mode = {
        sim_mode: simulate_wealth(
            state,
            performance[sim_mode],
            years,
            sim_mode,
            emergency_goal=goal,
            diagnostics=projection.diagnostics,
        )
        for sim_mode in sorted(SIM_MODES)
    }
    cashflow = cashflow_forecast(state, projection, today)
    goal_rate = state.investments.settings.monthly_interest_rate
    goals = [goal_projection(item, goal_rate, today) for item in state.financial_goals]
    validation = validate_state(state)

    summary: dict[str, object] = {
        "averageFutureSurplus": projection.average_future_surplus,
        "averageFutureExpense": projection.average_future_expense,
        "suggestedGoalContribution": suggested_contribution(projection.average_future_surplus),
        "currentMonth": asdict(month_summary(projection, today)),
        "wealth": asdict(wealth_summary(state, goal)),
    }
    if projection.average_future_surplus < 0:
        summary["deficitCoverage"] = asdict(plan_deficit_coverage(state, projection.average_future_surplus))

    return {
        "generated": datetime.now(UTC).isoformat(timespec="seconds"),
        "stateHash": state_hash(state),
        "today": today,
        "mode": mode,
        "years": years,
        "summary": summary,
        "monthly": _monthly_table(projection),
        "wealth": [asdict(point) for point in wealth_by_mode[mode]],
        "charts": build_chart_payload(state, wealth_by_mode, cashflow, goals),
        "validation": {"errors": validation.errors, "warnings": validation.warnings},
        "diagnostics": asdict(projection.diagnostics),
    }


def write_report(path: str | Path, report: dict[str, object]) -> None:
    Path(path).write_text(json.dumps(report, indent=2), encoding="utf-8")
