"""Financial state dataclasses and JSON loading."""

from __future__ import annotations

from dataclasses import dataclass, field
import json
from pathlib import Path
from typing import Any

from .diagnostics import Diagnostics, finite_or_zero
from .months import InvalidMonthFormat, parse_month


class SchemaError(ValueError):
    """Raised when raw JSON cannot be parsed into schema objects."""


def _expect_dict(value: Any, path: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise SchemaError(f"{path}: expected object")
    return value


def _expect_list(value: Any, path: str) -> list[Any]:
    if not isinstance(value, list):
        raise SchemaError(f"{path}: expected array")
    return value


def _require(data: dict[str, Any], key: str, path: str) -> Any:
    if key not in data:
        raise SchemaError(f"{path}.{key}: missing required field")
    return data[key]


def _optional(data: dict[str, Any], key: str, default: Any = None) -> Any:
    return data.get(key, default)


def _amount(data: dict[str, Any], key: str, path: str, diagnostics: Diagnostics | None, default: Any = None) -> float:
    return finite_or_zero(_optional(data, key, default), f"{path}.{key}", diagnostics)


def _month(value: Any, path: str) -> str:
    try:
        parse_month(value)
    except InvalidMonthFormat as exc:
        raise SchemaError(f"{path}: {exc}") from exc
    return value


def _order(data: dict[str, Any], path: str) -> int:
    raw = _optional(data, "order", 0) or 0
    try:
        return int(raw)
    except (TypeError, ValueError) as exc:
        raise SchemaError(f"{path}.order: expected integer, got {raw!r}") from exc


@dataclass(slots=True)
class Category:
    id: str
    name: str
    type: str
    order: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any], path: str) -> "Category":
        return cls(
            id=_require(data, "id", path),
            name=_optional(data, "name", ""),
            type=_require(data, "type", path),
            order=_order(data, path),
        )


@dataclass(slots=True)
class Record:
    id: str
    category_id: str
    month: str
    value: float
    status: str = "pending"

    @classmethod
    def from_dict(cls, data: dict[str, Any], path: str, diagnostics: Diagnostics | None = None) -> "Record":
        return cls(
            id=_require(data, "id", path),
            category_id=_require(data, "categoryId", path),
            month=_month(_require(data, "month", path), f"{path}.month"),
            value=_amount(data, "value", path, diagnostics),
            status=_optional(data, "status", "pending"),
        )


@dataclass(slots=True)
class MonthlyAdjustment:
    id: str
    description: str
    value: float
    start_month: str
    end_month: str | None
    type: str
    confirmed_months: list[str] = field(default_factory=list)
    order: int = 0

    def applies_to(self, month: str) -> bool:
        return month >= self.start_month and (self.end_month is None or month <= self.end_month)

    def is_confirmed(self, month: str) -> bool:
        return month in self.confirmed_months

    @classmethod
    def from_dict(cls, data: dict[str, Any], path: str, diagnostics: Diagnostics | None = None) -> "MonthlyAdjustment":
        start_month = _month(_require(data, "startMonth", path), f"{path}.startMonth")
        end_raw = _optional(data, "endMonth")
        end_month = _month(end_raw, f"{path}.endMonth") if end_raw is not None else None
        confirmed_raw = _optional(data, "confirmedMonths")
        if confirmed_raw is None:
            # Single-status adjustments confirm only their first month.
            confirmed_months = [start_month] if _optional(data, "status") == "confirmed" else []
        else:
            confirmed_months = [
                _month(item, f"{path}.confirmedMonths[{idx}]")
                for idx, item in enumerate(_expect_list(confirmed_raw, f"{path}.confirmedMonths"))
            ]
        return cls(
            id=_require(data, "id", path),
            description=_optional(data, "description", ""),
            value=_amount(data, "value", path, diagnostics),
            start_month=start_month,
            end_month=end_month,
            type=_require(data, "type", path),
            confirmed_months=confirmed_months,
            order=_order(data, path),
        )


@dataclass(slots=True)
class EmergencyFundSettings:
    goal_type: str = "months_of_expense"
    target_months: float = 6.0
    manual_goal: float = 30000.0
    monthly_interest_rate: float = 0.5

    @classmethod
    def from_dict(cls, data: dict[str, Any], path: str, diagnostics: Diagnostics | None = None) -> "EmergencyFundSettings":
        return cls(
            goal_type=_optional(data, "goalType", "months_of_expense"),
            target_months=_amount(data, "targetMonths", path, diagnostics, 6),
            manual_goal=_amount(data, "manualGoal", path, diagnostics, 30000),
            monthly_interest_rate=_amount(data, "monthlyInterestRate", path, diagnostics, 0.5),
        )


@dataclass(slots=True)
class EmergencyFund:
    balance: float
    settings: EmergencyFundSettings = field(default_factory=EmergencyFundSettings)

    @classmethod
    def from_dict(cls, data: dict[str, Any], path: str = "emergencyFund", diagnostics: Diagnostics | None = None) -> "EmergencyFund":
        settings_raw = _optional(data, "settings", {})
        return cls(
            balance=_amount(data, "balance", path, diagnostics),
            settings=EmergencyFundSettings.from_dict(
                _expect_dict(settings_raw, f"{path}.settings"), f"{path}.settings", diagnostics
            ),
        )


@dataclass(slots=True)
class InvestmentSettings:
    monthly_interest_rate: float = 0.8

    @classmethod
    def from_dict(cls, data: dict[str, Any], path: str, diagnostics: Diagnostics | None = None) -> "InvestmentSettings":
        return cls(monthly_interest_rate=_amount(data, "monthlyInterestRate", path, diagnostics, 0.8))


@dataclass(slots=True)
class Investments:
    balance: float
    settings: InvestmentSettings = field(default_factory=InvestmentSettings)

    @classmethod
    def from_dict(cls, data: dict[str, Any], path: str = "investments", diagnostics: Diagnostics | None = None) -> "Investments":
        settings_raw = _optional(data, "settings", {})
        return cls(
            balance=_amount(data, "balance", path, diagnostics),
            settings=InvestmentSettings.from_dict(
                _expect_dict(settings_raw, f"{path}.settings"), f"{path}.settings", diagnostics
            ),
        )


@dataclass(slots=True)
class Asset:
    id: str
    name: str
    value: float

    @classmethod
    def from_dict(cls, data: dict[str, Any], path: str, diagnostics: Diagnostics | None = None) -> "Asset":
        return cls(
            id=_require(data, "id", path),
            name=_optional(data, "name", ""),
            value=_amount(data, "value", path, diagnostics),
        )


@dataclass(slots=True)
class SurplusAllocation:
    """Percentages of a surplus routed to each account after the emergency goal is met."""

    emergency_fund: float = 50.0
    investments: float = 50.0
    checking_account: float = 0.0

    @classmethod
    def from_dict(cls, data: dict[str, Any], path: str = "surplusAllocation", diagnostics: Diagnostics | None = None) -> "SurplusAllocation":
        return cls(
            emergency_fund=_amount(data, "emergencyFund", path, diagnostics, 50),
            investments=_amount(data, "investments", path, diagnostics, 50),
            checking_account=_amount(data, "checkingAccount", path, diagnostics, 0),
        )


@dataclass(slots=True)
class ManualTransaction:
    id: str
    type: str
    account: str
    amount: float
    date: str
    description: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any], path: str, diagnostics: Diagnostics | None = None) -> "ManualTransaction":
        return cls(
            id=_require(data, "id", path),
            type=_require(data, "type", path),
            account=_require(data, "account", path),
            amount=_amount(data, "amount", path, diagnostics),
            date=_require(data, "date", path),
            description=_optional(data, "description", ""),
        )


@dataclass(slots=True)
class FinancialGoal:
    id: str
    name: str
    target_value: float
    current_value: float
    monthly_contribution: float

    @classmethod
    def from_dict(cls, data: dict[str, Any], path: str, diagnostics: Diagnostics | None = None) -> "FinancialGoal":
        return cls(
            id=_require(data, "id", path),
            name=_optional(data, "name", ""),
            target_value=_amount(data, "targetValue", path, diagnostics),
            current_value=_amount(data, "currentValue", path, diagnostics),
            monthly_contribution=_amount(data, "monthlyContribution", path, diagnostics),
        )


@dataclass(slots=True)
class FinancialState:
    checking_account_balance: float
    categories: list[Category]
    records: list[Record]
    monthly_adjustments: list[MonthlyAdjustment]
    emergency_fund: EmergencyFund
    investments: Investments
    assets: list[Asset] = field(default_factory=list)
    surplus_allocation: SurplusAllocation = field(default_factory=SurplusAllocation)
    deficit_strategy: str = "emergency_first"
    manual_transactions: list[ManualTransaction] = field(default_factory=list)
    financial_goals: list[FinancialGoal] = field(default_factory=list)
    diagnostics: Diagnostics = field(default_factory=Diagnostics)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FinancialState":
        diagnostics = Diagnostics()
        return cls(
            checking_account_balance=_amount(data, "checkingAccountBalance", "state", diagnostics),
            categories=[
                Category.from_dict(_expect_dict(item, f"categories[{idx}]"), f"categories[{idx}]")
                for idx, item in enumerate(_expect_list(_optional(data, "categories", []), "categories"))
            ],
            records=[
                Record.from_dict(_expect_dict(item, f"records[{idx}]"), f"records[{idx}]", diagnostics)
                for idx, item in enumerate(_expect_list(_optional(data, "records", []), "records"))
            ],
            monthly_adjustments=[
                MonthlyAdjustment.from_dict(
                    _expect_dict(item, f"monthlyAdjustments[{idx}]"), f"monthlyAdjustments[{idx}]", diagnostics
                )
                for idx, item in enumerate(_expect_list(_optional(data, "monthlyAdjustments", []), "monthlyAdjustments"))
            ],
            emergency_fund=EmergencyFund.from_dict(
                _expect_dict(_require(data, "emergencyFund", "state"), "emergencyFund"), diagnostics=diagnostics
            ),
            investments=Investments.from_dict(
                _expect_dict(_require(data, "investments", "state"), "investments"), diagnostics=diagnostics
            ),
            assets=[
                Asset.from_dict(_expect_dict(item, f"assets[{idx}]"), f"assets[{idx}]", diagnostics)
                for idx, item in enumerate(_expect_list(_optional(data, "assets", []), "assets"))
            ],
            surplus_allocation=SurplusAllocation.from_dict(
                _expect_dict(_optional(data, "surplusAllocation", {}), "surplusAllocation"), diagnostics=diagnostics
            ),
            deficit_strategy=_optional(data, "deficitStrategy", "emergency_first"),
            manual_transactions=[
                ManualTransaction.from_dict(
                    _expect_dict(item, f"manualTransactions[{idx}]"), f"manualTransactions[{idx}]", diagnostics
                )
                for idx, item in enumerate(_expect_list(_optional(data, "manualTransactions", []), "manualTransactions"))
            ],
            financial_goals=[
                FinancialGoal.from_dict(_expect_dict(item, f"financialGoals[{idx}]"), f"financialGoals[{idx}]", diagnostics)
                for idx, item in enumerate(_expect_list(_optional(data, "financialGoals", []), "financialGoals"))
            ],
            diagnostics=diagnostics,
        )


def load_state(path: str | Path) -> FinancialState:
    """Load a financial state snapshot from JSON into typed dataclasses."""
    source = Path(path)
    raw = json.loads(source.read_text(encoding="utf-8"))
    if not isinstance(raw, dict):
        raise SchemaError("state: root must be a JSON object")
    return FinancialState.from_dict(raw)
