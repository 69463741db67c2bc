"""Data models for the debt payoff planner.

This module defines dataclasses representing the entities used by the
planner: the immutable debts supplied by the user, the mutable working copies
used while simulating, the per-debt and per-strategy results, and the cash
flow context. Using dataclasses makes it easy to construct, inspect and
serialize these structures.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional, Union

# Month count reported for debts that can never be repaid.
NEVER_PAYOFF_MONTHS = 999


@dataclass(frozen=True)
class Debt:
    """A single debt as entered by the user.

    Attributes
    ----------
    id: str
        Stable identifier of the debt.
    name: str
        Display name (e.g. ``"Chase Freedom"``).
    balance: Decimal
        Outstanding balance. Never negative.
    interest_rate: Decimal
        Annual nominal interest rate in percent (``24`` means 24 % a year).
    minimum_payment: Decimal
        Required monthly payment.
    is_active: bool
        Whether the debt should be included when loading user input.
    """

    id: str
    name: str
    balance: Decimal
    interest_rate: Decimal
    minimum_payment: Decimal
    is_active: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "balance": float(self.balance),
            "interestRate": float(self.interest_rate),
            "minimumPayment": float(self.minimum_payment),
            "isActive": self.is_active,
        }


@dataclass
class WorkingDebt:
    """Simulation-local, mutable copy of a :class:`Debt`.

    A working debt belongs to exactly one simulation run and is discarded
    when the run finishes.
    """

    debt: Debt
    remaining_balance: Decimal
    current_payment: Decimal
    interest_paid: Decimal = Decimal("0")
    months_paid_off: int = 0

    @classmethod
    def from_debt(cls, debt: Debt) -> "WorkingDebt":
        return cls(
            debt=debt,
            remaining_balance=debt.balance,
            current_payment=debt.minimum_payment,
        )

    @property
    def is_paid_off(self) -> bool:
        return self.remaining_balance <= 0


@dataclass(frozen=True)
class PaidOff:
    """The debt is fully repaid after ``months`` months."""

    months: int
    interest: Decimal

    never_pays_off = False

    @property
    def months_to_payoff(self) -> int:
        return self.months

    @property
    def total_interest(self) -> Decimal:
        return self.interest


@dataclass(frozen=True)
class NeverPaysOff:
    """The payment can never amortize the debt.

    ``penalty`` is not an amount of money that will be paid; it is a large
    stand-in used when ranking strategies. ``months_to_payoff`` reports the
    999-month marker understood by the formatters.
    """

    penalty: Decimal

    never_pays_off = True
    months_to_payoff = NEVER_PAYOFF_MONTHS

    @property
    def total_interest(self) -> Decimal:
        return self.penalty


PayoffOutcome = Union[PaidOff, NeverPaysOff]


@dataclass
class DebtResult:
    """Outcome of simulating a single debt within a strategy."""

    debt: Debt
    priority: int  # 1-based position in the payoff order
    outcome: PayoffOutcome
    current_payment: Decimal  # payment after all cascades
    payoff_date: Optional[datetime]

    @property
    def months_to_payoff(self) -> int:
        return self.outcome.months_to_payoff

    @property
    def total_interest(self) -> Decimal:
        return self.outcome.total_interest

    @property
    def never_pays_off(self) -> bool:
        return self.outcome.never_pays_off

    def to_dict(self) -> Dict[str, Any]:
        data = self.debt.to_dict()
        data.update(
            {
                "priority": self.priority,
                "monthsToPayoff": self.months_to_payoff,
                "totalInterest": float(self.total_interest),
                "currentPayment": float(self.current_payment),
                "neverPaysOff": self.never_pays_off,
                "payoffDate": self.payoff_date.isoformat() if self.payoff_date else None,
            }
        )
        return data


@dataclass(frozen=True)
class PayoffStrategy:
    """Descriptive metadata for a payoff strategy."""

    key: str  # 'avalanche', 'snowball' or 'cashflow'
    name: str
    description: str
    icon: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key": self.key,
            "name": self.name,
            "description": self.description,
            "icon": self.icon,
        }


@dataclass
class StrategyResult:
    """Aggregated outcome of running one strategy over all debts."""

    strategy: PayoffStrategy
    debts: List[DebtResult]
    total_interest: Decimal
    total_months: int
    total_payments: Decimal
    monthly_payment: Decimal
    extra_payment: Decimal
    payoff_date: Optional[datetime]

    @property
    def never_pays_off(self) -> bool:
        return any(d.never_pays_off for d in self.debts)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "strategy": self.strategy.to_dict(),
            "debts": [d.to_dict() for d in self.debts],
            "totalInterest": float(self.total_interest),
            "totalMonths": self.total_months,
            "totalPayments": float(self.total_payments),
            "monthlyPayment": float(self.monthly_payment),
            "extraPayment": float(self.extra_payment),
            "neverPaysOff": self.never_pays_off,
            "payoffDate": self.payoff_date.isoformat() if self.payoff_date else None,
        }


@dataclass(frozen=True)
class CashFlowAnalysis:
    """Household cash flow used to cap the extra payment.

    ``available_for_debt`` is the total monthly amount the household can put
    towards debts, minimum payments included.
    """

    monthly_income: Decimal
    monthly_expenses: Decimal
    available_for_debt: Decimal
    emergency_fund: Decimal
    target_emergency_months: int = 3

    @classmethod
    def empty(cls) -> "CashFlowAnalysis":
        zero = Decimal("0")
        return cls(zero, zero, zero, zero, 3)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "monthlyIncome": float(self.monthly_income),
            "monthlyExpenses": float(self.monthly_expenses),
            "availableForDebt": float(self.available_for_debt),
            "emergencyFund": float(self.emergency_fund),
            "targetEmergencyMonths": self.target_emergency_months,
        }


@dataclass
class PayoffComparison:
    """All strategy results plus the best/worst comparison."""

    strategies: List[StrategyResult]
    best_strategy: StrategyResult
    worst_strategy: StrategyResult
    interest_savings: Decimal
    time_savings: int
    cash_flow: CashFlowAnalysis

    def to_dict(self) -> Dict[str, Any]:
        return {
            "strategies": [s.to_dict() for s in self.strategies],
            "bestStrategy": self.best_strategy.strategy.key,
            "worstStrategy": self.worst_strategy.strategy.key,
            "interestSavings": float(self.interest_savings),
            "timeSavings": self.time_savings,
            "cashFlow": self.cash_flow.to_dict(),
        }


@dataclass
class CalculationParams:
    """Input bundle for :func:`debt_payoff.engine.calculate_all_strategies`."""

    debts: List[Debt]
    extra_payment: Decimal = Decimal("0")
    cash_flow: Optional[CashFlowAnalysis] = None
