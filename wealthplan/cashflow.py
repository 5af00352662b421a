"""Monthly control view: performance, savings rate and checking balance forecast."""

from __future__ import annotations

from dataclasses import dataclass, field

from .months import add_months
from .projection import FinancialProjection
from .schema import FinancialState

EXCELLENT_SAVINGS_RATE = 30.0
GOOD_SAVINGS_RATE = 15.0


@dataclass(slots=True)
class MonthSummary:
    month: str
    income: float
    expense: float
    realized_performance: float
    projected_performance: float
    savings_rate: float
    savings_rate_label: str
    projected_placeholders: dict[str, float] = field(default_factory=dict)


@dataclass(slots=True)
class CashflowPoint:
    month: str
    balance: float
    income: float
    expense: float


def savings_rate_label(rate: float) -> str:
    if rate >= EXCELLENT_SAVINGS_RATE:
        return "excellent"
    if rate >= GOOD_SAVINGS_RATE:
        return "good"
    return "poor"


def month_summary(projection: FinancialProjection, month: str) -> MonthSummary:
    detail = projection.detail(month)
    projected = detail.income - detail.expense
    rate = (projected / detail.income) * 100.0 if detail.income > 0 else 0.0
    return MonthSummary(
        month=month,
        income=detail.income,
        expense=detail.expense,
        realized_performance=detail.confirmed_income - detail.confirmed_expense,
        projected_performance=projected,
        savings_rate=rate,
        savings_rate_label=savings_rate_label(rate),
        projected_placeholders=dict(detail.projected_placeholders),
    )


def cashflow_forecast(
    state: FinancialState,
    projection: FinancialProjection,
    start_month: str,
    months: int = 12,
) -> list[CashflowPoint]:
    """Running checking-account balance assuming each month's surplus lands in checking."""
    balance = state.checking_account_balance
    out: list[CashflowPoint] = []
    for offset in range(max(0, months)):
        month = add_months(start_month, offset)
        detail = projection.detail(month)
        balance += detail.surplus
        out.append(CashflowPoint(month=month, balance=balance, income=detail.income, expense=detail.expense))
    return out
