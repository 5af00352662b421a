"""Semantic and cross-reference validation for financial state snapshots."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from .allocation import DEFICIT_ORDERS
from .schema import FinancialState

LINE_TYPES = {"income", "expense"}
RECORD_STATUS = {"pending", "confirmed"}
GOAL_TYPES = {"months_of_expense", "manual"}
MANUAL_TRANSACTION_TYPES = {"deposit", "withdrawal"}
MANUAL_TRANSACTION_ACCOUNTS = {"emergencyFund", "investments"}
ALLOCATION_TOTAL = 100.0


@dataclass(slots=True)
class ValidationResult:
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


def _check_enum(result: ValidationResult, path: str, value: str, allowed: Iterable[str]) -> None:
    allowed_set = set(allowed)
    if value not in allowed_set:
        expected = ", ".join(sorted(allowed_set))
        result.errors.append(f"{path}: '{value}' is not valid; expected one of [{expected}]")


def validate_state(state: FinancialState) -> ValidationResult:
    result = ValidationResult()

    category_ids: set[str] = set()
    for idx, category in enumerate(state.categories):
        base = f"categories[{idx}]"
        if category.id in category_ids:
            result.errors.append(f"{base}.id: duplicate category id '{category.id}'")
        category_ids.add(category.id)
        _check_enum(result, f"{base}.type", category.type, LINE_TYPES)

    seen_records: set[tuple[str, str]] = set()
    for idx, record in enumerate(state.records):
        base = f"records[{idx}]"
        _check_enum(result, f"{base}.status", record.status, RECORD_STATUS)
        if record.category_id not in category_ids:
            result.warnings.append(
                f"{base}.categoryId: '{record.category_id}' does not match any category; record is ignored"
            )
        key = (record.category_id, record.month)
        if key in seen_records:
            result.errors.append(
                f"{base}: duplicate record for category '{record.category_id}' in {record.month}"
            )
        seen_records.add(key)

    adjustment_ids: set[str] = set()
    for idx, adjustment in enumerate(state.monthly_adjustments):
        base = f"monthlyAdjustments[{idx}]"
        if adjustment.id in adjustment_ids:
            result.errors.append(f"{base}.id: duplicate adjustment id '{adjustment.id}'")
        adjustment_ids.add(adjustment.id)
        _check_enum(result, f"{base}.type", adjustment.type, LINE_TYPES)
        if adjustment.end_month is not None and adjustment.start_month > adjustment.end_month:
            result.errors.append(f"{base}.startMonth/{base}.endMonth: startMonth must be <= endMonth")
        for midx, month in enumerate(adjustment.confirmed_months):
            if not adjustment.applies_to(month):
                result.warnings.append(
                    f"{base}.confirmedMonths[{midx}]: '{month}' is outside the adjustment range"
                )

    settings = state.emergency_fund.settings
    _check_enum(result, "emergencyFund.settings.goalType", settings.goal_type, GOAL_TYPES)
    if settings.target_months < 0:
        result.errors.append("emergencyFund.settings.targetMonths: must be >= 0")
    if settings.monthly_interest_rate < 0:
        result.warnings.append("emergencyFund.settings.monthlyInterestRate: negative rate shrinks the balance")
    if state.investments.settings.monthly_interest_rate < 0:
        result.warnings.append("investments.settings.monthlyInterestRate: negative rate shrinks the balance")

    _check_enum(result, "deficitStrategy", state.deficit_strategy, DEFICIT_ORDERS)

    allocation = state.surplus_allocation
    allocation_total = allocation.emergency_fund + allocation.investments + allocation.checking_account
    if abs(allocation_total - ALLOCATION_TOTAL) > 1e-9:
        result.warnings.append(
            f"surplusAllocation: percentages sum to {allocation_total:g}, expected {ALLOCATION_TOTAL:g}"
        )

    for idx, txn in enumerate(state.manual_transactions):
        base = f"manualTransactions[{idx}]"
        _check_enum(result, f"{base}.type", txn.type, MANUAL_TRANSACTION_TYPES)
        _check_enum(result, f"{base}.account", txn.account, MANUAL_TRANSACTION_ACCOUNTS)

    for idx, goal in enumerate(state.financial_goals):
        if goal.target_value <= 0:
            result.warnings.append(f"financialGoals[{idx}].targetValue: must be > 0 to be meaningful")

    for path in state.diagnostics.non_finite_fields:
        result.warnings.append(f"{path}: missing or non-finite amount treated as 0")

    return result
