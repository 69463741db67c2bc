"""Payoff strategy catalogue, debt ordering and cash flow adjustment."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Tuple

from .data_models import CashFlowAnalysis, Debt, PayoffStrategy

logger = logging.getLogger(__name__)

PAYOFF_STRATEGIES: List[PayoffStrategy] = [
    PayoffStrategy(
        key="avalanche",
        name="Debt Avalanche",
        description="Pay minimums on all debts, put extra money toward highest interest rate first",
        icon="🏔️",
    ),
    PayoffStrategy(
        key="snowball",
        name="Debt Snowball",
        description="Pay minimums on all debts, put extra money toward smallest balance first",
        icon="❄️",
    ),
    PayoffStrategy(
        key="cashflow",
        name="Cash Flow Optimized",
        description="Optimize payment strategy based on your cash flow and financial goals",
        icon="💰",
    ),
]

STRATEGY_BY_KEY: Dict[str, PayoffStrategy] = {s.key: s for s in PAYOFF_STRATEGIES}

# Weights of the cash flow score
RATE_WEIGHT = Decimal("0.4")
BURDEN_WEIGHT = Decimal("0.6")


def get_strategy(key: str) -> PayoffStrategy:
    try:
        return STRATEGY_BY_KEY[key]
    except KeyError:
        raise ValueError(f"Unknown payoff strategy: {key}") from None


def cash_flow_score(debt: Debt) -> Optional[Decimal]:
    """Return the cash flow priority score of ``debt``.

    The score blends the interest rate with the payment burden (minimum
    payment relative to balance):

        score = 0.4 * rate / 100 + 0.6 * minimum_payment / balance

    Debts without a balance have nothing left to prioritize and return
    ``None``.
    """
    if debt.balance <= 0:
        return None
    return RATE_WEIGHT * (debt.interest_rate / Decimal(100)) + BURDEN_WEIGHT * (
        debt.minimum_payment / debt.balance
    )


def _cash_flow_sort_key(debt: Debt) -> Tuple[bool, Decimal]:
    score = cash_flow_score(debt)
    if score is None:
        # unscored debts go last
        return True, Decimal("0")
    return False, -score


def order_debts(debts: Iterable[Debt], key: str) -> List[Debt]:
    """Return ``debts`` in the payoff order of the strategy named ``key``.

    The result is always a permutation of the input. Sorting is stable, so
    debts that compare equal keep their original relative order.
    """
    debts = list(debts)
    if key == "avalanche":
        return sorted(debts, key=lambda d: d.interest_rate, reverse=True)
    if key == "snowball":
        return sorted(debts, key=lambda d: d.balance)
    if key == "cashflow":
        return sorted(debts, key=_cash_flow_sort_key)
    raise ValueError(f"Unknown payoff strategy: {key}")


def adjust_extra_payment(
    requested: Decimal,
    debts: Iterable[Debt],
    cash_flow: Optional[CashFlowAnalysis],
) -> Decimal:
    """Cap the requested extra payment to what the cash flow can support.

    Without a cash flow analysis the request is returned unchanged. Otherwise
    the result is the smaller of the request and whatever is left of
    ``available_for_debt`` after all minimum payments, and never negative.
    """
    if cash_flow is None:
        return requested
    minimums = sum((d.minimum_payment for d in debts), Decimal("0"))
    headroom = max(Decimal("0"), cash_flow.available_for_debt - minimums)
    adjusted = min(requested, headroom)
    if adjusted < requested:
        logger.info(
            "Extra payment capped from %s to %s by available cash flow %s",
            requested,
            adjusted,
            cash_flow.available_for_debt,
        )
    return adjusted
