"""Month-by-month income/expense projection with carry-forward of sparse records."""

from __future__ import annotations

from dataclasses import dataclass, field

from .diagnostics import Diagnostics, finite_or_zero
from .months import add_months, month_range, parse_month, resolve_today
from .schema import Category, FinancialState, Record

PAST_BUFFER_MONTHS = 12
FUTURE_BUFFER_MONTHS = 24
AVERAGE_WINDOW_MONTHS = 12


@dataclass(slots=True)
class MonthlyDetail:
    income: float = 0.0
    expense: float = 0.0
    surplus: float = 0.0
    confirmed_income: float = 0.0
    confirmed_expense: float = 0.0
    projected_placeholders: dict[str, float] = field(default_factory=dict)


@dataclass(slots=True)
class FinancialProjection:
    monthly_details: dict[str, MonthlyDetail]
    average_future_surplus: float
    average_future_expense: float
    today: str
    diagnostics: Diagnostics = field(default_factory=Diagnostics)

    def detail(self, month: str) -> MonthlyDetail:
        return self.monthly_details.get(month) or MonthlyDetail()


def _projection_window(state: FinancialState, today: str) -> list[str]:
    months: set[str] = set()
    for record in state.records:
        parse_month(record.month)
        months.add(record.month)
    for adjustment in state.monthly_adjustments:
        parse_month(adjustment.start_month)
        months.add(adjustment.start_month)
        if adjustment.end_month is not None:
            parse_month(adjustment.end_month)
            months.add(adjustment.end_month)
    for offset in range(-PAST_BUFFER_MONTHS, FUTURE_BUFFER_MONTHS):
        months.add(add_months(today, offset))
    if not months:
        months.add(today)
    ordered = sorted(months)
    return month_range(ordered[0], ordered[-1])


def _records_by_month(
    state: FinancialState,
    categories: dict[str, Category],
    diagnostics: Diagnostics,
) -> dict[str, dict[str, Record]]:
    out: dict[str, dict[str, Record]] = {}
    for record in state.records:
        if record.category_id not in categories:
            diagnostics.dangling(record.id, record.category_id)
            continue
        # Later duplicates for the same (category, month) replace earlier ones.
        out.setdefault(record.month, {})[record.category_id] = record
    return out


def calculate_projections(state: FinancialState, today: str | None = None) -> FinancialProjection:
    """Project income, expense and surplus for every month in the working window.

    Each category carries its latest recorded value forward into months that
    have no record of their own; a record never affects months before it.
    Placeholders are reported only for the current month and later.
    """
    today = resolve_today(today)
    diagnostics = Diagnostics()
    diagnostics.merge(state.diagnostics)

    categories = {category.id: category for category in state.categories}
    records_by_month = _records_by_month(state, categories, diagnostics)
    running_values = {category_id: 0.0 for category_id in categories}
    # Positional, since adjustment ids are not guaranteed unique.
    adjustments = [
        (adjustment, finite_or_zero(adjustment.value, f"monthlyAdjustments[{idx}].value", diagnostics))
        for idx, adjustment in enumerate(state.monthly_adjustments)
    ]

    monthly_details: dict[str, MonthlyDetail] = {}
    for month in _projection_window(state, today):
        detail = MonthlyDetail()
        month_records = records_by_month.get(month, {})

        for category_id, record in month_records.items():
            running_values[category_id] = finite_or_zero(record.value, f"records[{record.id}].value", diagnostics)

        for category in state.categories:
            value = running_values[category.id]
            record = month_records.get(category.id)
            is_income = category.type == "income"

            if is_income:
                detail.income += value
            else:
                detail.expense += value

            if record is None:
                if value != 0 and month >= today:
                    detail.projected_placeholders[category.id] = value
            elif record.status == "confirmed":
                if is_income:
                    detail.confirmed_income += value
                else:
                    detail.confirmed_expense += value

        for adjustment, value in adjustments:
            if not adjustment.applies_to(month):
                continue
            confirmed = adjustment.is_confirmed(month)
            if adjustment.type == "income":
                detail.income += value
                if confirmed:
                    detail.confirmed_income += value
            else:
                detail.expense += value
                if confirmed:
                    detail.confirmed_expense += value

        detail.surplus = detail.income - detail.expense
        monthly_details[month] = detail

    surplus_sum = 0.0
    expense_sum = 0.0
    for offset in range(AVERAGE_WINDOW_MONTHS):
        detail = monthly_details.get(add_months(today, offset))
        if detail is None:
            continue
        surplus_sum += detail.surplus
        expense_sum += detail.expense

    return FinancialProjection(
        monthly_details=monthly_details,
        average_future_surplus=surplus_sum / AVERAGE_WINDOW_MONTHS,
        average_future_expense=expense_sum / AVERAGE_WINDOW_MONTHS,
        today=today,
        diagnostics=diagnostics,
    )
