"""Core calculation engine for the debt payoff planner.

This module implements the month-by-month payoff simulation shared by all
strategies. Each month interest accrues on every open debt and the current
payment is applied to it. When a debt is cleared, its whole payment is
redirected to the next open debt in priority order (the "snowball" effect
common to all strategies). Results are returned as ``DebtResult`` objects and
aggregated into a ``PayoffComparison`` across strategies.
"""

from __future__ import annotations

import logging
import math
from datetime import datetime
from decimal import Decimal, getcontext
from typing import Iterable, List, Optional, Sequence

from .data_models import (
    NEVER_PAYOFF_MONTHS,
    CalculationParams,
    CashFlowAnalysis,
    Debt,
    DebtResult,
    NeverPaysOff,
    PaidOff,
    PayoffComparison,
    PayoffOutcome,
    PayoffStrategy,
    StrategyResult,
    WorkingDebt,
)
from .strategies import PAYOFF_STRATEGIES, adjust_extra_payment, get_strategy, order_debts
from .utils import add_days

getcontext().prec = 28  # increase precision for financial calculations

logger = logging.getLogger(__name__)

MAX_SIMULATION_MONTHS = 600  # 50 years
NEVER_PAYOFF_PENALTY_MULTIPLIER = 10
DAYS_PER_MONTH = 30

_ZERO = Decimal("0")


def _monthly_rate(interest_rate: Decimal) -> Decimal:
    return interest_rate / Decimal(100) / Decimal(12)


def months_to_payoff(balance: Decimal, payment: Decimal, interest_rate: Decimal) -> int:
    """Return the number of months a fixed payment needs to clear ``balance``.

    For a monthly rate ``r`` the closed form is:

        n = ceil( ln(1 + B*r / (P - B*r)) / ln(1 + r) )

    When the rate is zero this simplifies to ``ceil(B / P)``. If the payment
    does not exceed the monthly interest charge the debt never amortizes and
    ``NEVER_PAYOFF_MONTHS`` is returned.
    """
    if balance <= 0:
        return 0
    if payment <= 0:
        return NEVER_PAYOFF_MONTHS
    if interest_rate == 0:
        return math.ceil(balance / payment)
    rate = _monthly_rate(interest_rate)
    monthly_interest = balance * rate
    if payment <= monthly_interest:
        return NEVER_PAYOFF_MONTHS
    months = math.ceil(
        (1 + monthly_interest / (payment - monthly_interest)).ln() / (1 + rate).ln()
    )
    return min(months, NEVER_PAYOFF_MONTHS)


def total_interest(balance: Decimal, payment: Decimal, interest_rate: Decimal) -> Decimal:
    """Return the approximate interest paid on a fixed-payment schedule.

    Debts that never pay off are charged ``balance * 10`` so they rank below
    any schedule that terminates.
    """
    months = months_to_payoff(balance, payment, interest_rate)
    if months >= NEVER_PAYOFF_MONTHS:
        return balance * NEVER_PAYOFF_PENALTY_MULTIPLIER
    if interest_rate == 0:
        return _ZERO
    return max(_ZERO, payment * months - balance)


def _continued_outcome(working: WorkingDebt) -> PayoffOutcome:
    """Finish a debt still open at the simulation cap with the closed form.

    The remaining balance and the final payment carry on from where the loop
    stopped, so months and interest already simulated are kept.
    """
    debt = working.debt
    remaining_months = months_to_payoff(
        working.remaining_balance, working.current_payment, debt.interest_rate
    )
    months = MAX_SIMULATION_MONTHS + remaining_months
    if remaining_months >= NEVER_PAYOFF_MONTHS or months >= NEVER_PAYOFF_MONTHS:
        return NeverPaysOff(penalty=debt.balance * NEVER_PAYOFF_PENALTY_MULTIPLIER)
    interest = working.interest_paid + total_interest(
        working.remaining_balance, working.current_payment, debt.interest_rate
    )
    return PaidOff(months=months, interest=interest)


def _apply_month(working: WorkingDebt) -> None:
    """Accrue one month of interest on ``working`` and apply its payment."""
    monthly_interest = (
        working.remaining_balance * _monthly_rate(working.debt.interest_rate)
        if working.debt.interest_rate > 0
        else _ZERO
    )
    # A payment below the interest charge leaves the balance untouched
    principal_payment = max(
        _ZERO, min(working.current_payment - monthly_interest, working.remaining_balance)
    )
    working.interest_paid += monthly_interest
    working.remaining_balance -= principal_payment


def simulate_payoff(
    ordered_debts: Sequence[Debt],
    extra_payment: Decimal,
    now: Optional[datetime] = None,
) -> List[DebtResult]:
    """Simulate paying off ``ordered_debts`` in the given priority order.

    Parameters
    ----------
    ordered_debts: Sequence[Debt]
        Debts sorted by payoff priority (first = target of the extra payment).
    extra_payment: Decimal
        Money available each month on top of all minimum payments.
    now: datetime, optional
        Reference time for payoff dates. Defaults to the current time.

    Returns
    -------
    List[DebtResult]
        One result per input debt, in the same order, with ``priority`` set to
        the 1-based position in that order.
    """
    now = now or datetime.now()
    working_debts = [WorkingDebt.from_debt(d) for d in ordered_debts]
    logger.debug(
        "Simulating %d debts with extra payment %s", len(working_debts), extra_payment
    )

    # The extra payment targets the first debt that still has a balance
    if extra_payment > 0:
        target = next((w for w in working_debts if not w.is_paid_off), None)
        if target is not None:
            target.current_payment += extra_payment

    current_month = 0
    while any(not w.is_paid_off for w in working_debts) and current_month < MAX_SIMULATION_MONTHS:
        current_month += 1
        newly_paid_off: Optional[WorkingDebt] = None

        for working in working_debts:
            if working.is_paid_off:
                continue
            _apply_month(working)
            if working.remaining_balance <= 0:
                working.remaining_balance = _ZERO
                working.months_paid_off = current_month
                if newly_paid_off is None:
                    newly_paid_off = working

        # Redirect the freed payment to the next open debt
        if newly_paid_off is not None:
            next_debt = next((w for w in working_debts if not w.is_paid_off), None)
            if next_debt is not None:
                next_debt.current_payment += newly_paid_off.current_payment
                logger.debug(
                    "Month %d: %s paid off, %s now pays %s",
                    current_month,
                    newly_paid_off.debt.name,
                    next_debt.debt.name,
                    next_debt.current_payment,
                )

    results: List[DebtResult] = []
    for index, working in enumerate(working_debts):
        if working.debt.balance <= 0:
            outcome: PayoffOutcome = PaidOff(months=0, interest=_ZERO)
        elif working.is_paid_off:
            outcome = PaidOff(months=working.months_paid_off, interest=working.interest_paid)
        else:
            outcome = _continued_outcome(working)
        if outcome.never_pays_off:
            logger.warning(
                "%s never pays off: payment %s does not cover interest at %s%%",
                working.debt.name,
                working.current_payment,
                working.debt.interest_rate,
            )
            payoff_date = None
        else:
            payoff_date = add_days(now, outcome.months_to_payoff * DAYS_PER_MONTH)
        results.append(
            DebtResult(
                debt=working.debt,
                priority=index + 1,
                outcome=outcome,
                current_payment=working.current_payment,
                payoff_date=payoff_date,
            )
        )
    return results


def _empty_strategy_result(strategy: PayoffStrategy, now: datetime) -> StrategyResult:
    return StrategyResult(
        strategy=strategy,
        debts=[],
        total_interest=_ZERO,
        total_months=0,
        total_payments=_ZERO,
        monthly_payment=_ZERO,
        extra_payment=_ZERO,
        payoff_date=now,
    )


def _aggregate(
    strategy: PayoffStrategy,
    results: List[DebtResult],
    requested_extra: Decimal,
    applied_extra: Decimal,
    now: datetime,
) -> StrategyResult:
    total_interest_paid = sum((r.total_interest for r in results), _ZERO)
    total_months = max(r.months_to_payoff for r in results)
    total_payments = sum((r.current_payment for r in results), _ZERO)
    monthly_payment = sum((r.debt.minimum_payment for r in results), _ZERO) + requested_extra
    never = any(r.never_pays_off for r in results)
    return StrategyResult(
        strategy=strategy,
        debts=results,
        total_interest=total_interest_paid,
        total_months=total_months,
        total_payments=total_payments,
        monthly_payment=monthly_payment,
        extra_payment=applied_extra,
        payoff_date=None if never else add_days(now, total_months * DAYS_PER_MONTH),
    )


def calculate_strategy(
    debts: Iterable[Debt],
    key: str,
    extra_payment: Decimal = _ZERO,
    cash_flow: Optional[CashFlowAnalysis] = None,
    now: Optional[datetime] = None,
) -> StrategyResult:
    """Run a single payoff strategy and aggregate its per-debt results.

    The ``cashflow`` strategy needs a cash flow analysis to rank debts and
    cap the extra payment. Without one it falls back to avalanche ordering
    with the requested extra payment.
    """
    if extra_payment < 0:
        raise ValueError("Extra payment cannot be negative")
    strategy = get_strategy(key)
    debts = list(debts)
    now = now or datetime.now()
    if not debts:
        return _empty_strategy_result(strategy, now)

    applied_extra = extra_payment
    if key == "cashflow":
        if cash_flow is None:
            ordered = order_debts(debts, "avalanche")
        else:
            ordered = order_debts(debts, "cashflow")
            applied_extra = adjust_extra_payment(extra_payment, debts, cash_flow)
    else:
        ordered = order_debts(debts, key)

    results = simulate_payoff(ordered, applied_extra, now)
    return _aggregate(strategy, results, extra_payment, applied_extra, now)


def calculate_all_strategies(
    params: CalculationParams, now: Optional[datetime] = None
) -> PayoffComparison:
    """Compare every payoff strategy for the given debts.

    The best strategy is the one with the lowest total interest and the worst
    the one with the highest; on ties the earlier strategy in
    ``PAYOFF_STRATEGIES`` wins. With no debts a single zero-valued avalanche
    result is returned.
    """
    now = now or datetime.now()
    cash_flow = params.cash_flow or CashFlowAnalysis.empty()

    if not params.debts:
        empty = _empty_strategy_result(PAYOFF_STRATEGIES[0], now)
        return PayoffComparison(
            strategies=[empty],
            best_strategy=empty,
            worst_strategy=empty,
            interest_savings=_ZERO,
            time_savings=0,
            cash_flow=cash_flow,
        )

    strategies = [
        calculate_strategy(params.debts, s.key, params.extra_payment, params.cash_flow, now)
        for s in PAYOFF_STRATEGIES
    ]

    best = strategies[0]
    worst = strategies[0]
    for result in strategies[1:]:
        if result.total_interest < best.total_interest:
            best = result
        if result.total_interest > worst.total_interest:
            worst = result

    logger.info(
        "Best strategy %s saves %s interest over %s",
        best.strategy.key,
        worst.total_interest - best.total_interest,
        worst.strategy.key,
    )
    return PayoffComparison(
        strategies=strategies,
        best_strategy=best,
        worst_strategy=worst,
        interest_savings=worst.total_interest - best.total_interest,
        time_savings=worst.total_months - best.total_months,
        cash_flow=cash_flow,
    )
