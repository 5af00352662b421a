"""Surplus allocation and deficit coverage policies."""

from __future__ import annotations

from dataclasses import dataclass, field

from .schema import FinancialState, SurplusAllocation

EMERGENCY_FUND = "emergencyFund"
INVESTMENTS = "investments"

DEFICIT_ORDERS = {
    "emergency_first": (EMERGENCY_FUND, INVESTMENTS),
    "investments_first": (INVESTMENTS, EMERGENCY_FUND),
}

# Used in place of a zero average expense when sizing the emergency fund.
FALLBACK_MONTHLY_EXPENSE = 3000.0


@dataclass(slots=True)
class SurplusSplit:
    to_emergency_fund: float = 0.0
    to_investments: float = 0.0
    to_checking: float = 0.0

    @property
    def invested(self) -> float:
        return self.to_emergency_fund + self.to_investments


@dataclass(slots=True)
class Withdrawal:
    account: str
    amount: float


@dataclass(slots=True)
class DeficitCoverage:
    deficit: float
    withdrawals: list[Withdrawal] = field(default_factory=list)
    uncovered: float = 0.0

    @property
    def covered(self) -> float:
        return sum(item.amount for item in self.withdrawals)

    @property
    def is_coverable(self) -> bool:
        return self.uncovered <= 0

    def from_account(self, account: str) -> float:
        return sum(item.amount for item in self.withdrawals if item.account == account)


@dataclass(slots=True)
class ContributionPlan:
    amount: float
    split: SurplusSplit
    is_valid: bool


def emergency_fund_goal(state: FinancialState, average_future_expense: float) -> float:
    settings = state.emergency_fund.settings
    if settings.goal_type == "manual":
        return settings.manual_goal
    monthly_expense = average_future_expense or FALLBACK_MONTHLY_EXPENSE
    return monthly_expense * settings.target_months


def allocate_surplus(
    amount: float,
    emergency_balance: float,
    emergency_goal: float,
    allocation: SurplusAllocation,
) -> SurplusSplit:
    """Top up the emergency fund toward its goal, then split the rest by percentage."""
    if amount <= 0:
        return SurplusSplit()

    shortfall = max(0.0, emergency_goal - emergency_balance)
    to_goal = min(amount, shortfall)
    remaining = amount - to_goal

    split = SurplusSplit(to_emergency_fund=to_goal)
    if remaining > 0:
        split.to_emergency_fund += remaining * (allocation.emergency_fund / 100.0)
        split.to_investments = remaining * (allocation.investments / 100.0)
        split.to_checking = remaining * (allocation.checking_account / 100.0)
    return split


def _ordered_accounts(strategy: str) -> tuple[str, ...]:
    try:
        return DEFICIT_ORDERS[strategy]
    except KeyError:
        raise ValueError(f"unsupported deficit strategy: {strategy}") from None


def cover_deficit(deficit: float, balances: dict[str, float], strategy: str) -> DeficitCoverage:
    """Withdraw from accounts in strategy order, each capped at its balance.

    Mutates ``balances``. Whatever the accounts cannot cover is reported as
    ``uncovered``; balances never go negative.
    """
    deficit = abs(deficit)
    coverage = DeficitCoverage(deficit=deficit)
    remaining = deficit
    for name in _ordered_accounts(strategy):
        if remaining <= 0:
            break
        available = max(0.0, balances.get(name, 0.0))
        if available <= 0:
            continue
        amount = min(available, remaining)
        balances[name] = balances.get(name, 0.0) - amount
        coverage.withdrawals.append(Withdrawal(account=name, amount=amount))
        remaining -= amount
    coverage.uncovered = max(0.0, remaining)
    return coverage


def plan_contribution(state: FinancialState, amount: float, emergency_goal: float) -> ContributionPlan:
    split = allocate_surplus(amount, state.emergency_fund.balance, emergency_goal, state.surplus_allocation)
    return ContributionPlan(
        amount=amount,
        split=split,
        is_valid=0 < amount <= state.checking_account_balance,
    )


def plan_deficit_coverage(state: FinancialState, deficit: float) -> DeficitCoverage:
    balances = {
        EMERGENCY_FUND: state.emergency_fund.balance,
        INVESTMENTS: state.investments.balance,
    }
    return cover_deficit(deficit, balances, state.deficit_strategy)
