from __future__ import annotations

from decimal import Decimal

import pytest

from conftest import make_debt
from debt_payoff.data_models import CashFlowAnalysis
from debt_payoff.strategies import (
    PAYOFF_STRATEGIES,
    adjust_extra_payment,
    cash_flow_score,
    get_strategy,
    order_debts,
)


def _names(debts):
    return [d.name for d in debts]


def _cash_flow(available) -> CashFlowAnalysis:
    return CashFlowAnalysis(
        monthly_income=Decimal("5000"),
        monthly_expenses=Decimal("3000"),
        available_for_debt=Decimal(str(available)),
        emergency_fund=Decimal("1000"),
    )


class TestOrderDebts:
    def test_avalanche_orders_by_rate_descending(self, two_debts):
        debts = [make_debt("Low", 100, 5, 10)] + two_debts
        assert _names(order_debts(debts, "avalanche")) == ["A", "B", "Low"]

    def test_snowball_orders_by_balance_ascending(self, two_debts):
        debts = two_debts + [make_debt("Tiny", 50, 5, 10)]
        assert _names(order_debts(debts, "snowball")) == ["Tiny", "B", "A"]

    def test_ties_keep_input_order(self):
        debts = [make_debt("First", 100, 20, 10), make_debt("Second", 200, 20, 10)]
        assert _names(order_debts(debts, "avalanche")) == ["First", "Second"]
        same_balance = [make_debt("X", 100, 5, 10), make_debt("Y", 100, 25, 10)]
        assert _names(order_debts(same_balance, "snowball")) == ["X", "Y"]

    def test_cashflow_orders_by_score(self):
        # scores: A = 0.1 + 0.06 = 0.16, B = 0.04 + 0.018 = 0.058, C = 0.08 + 0.3 = 0.38
        debts = [
            make_debt("A", 500, 25, 50),
            make_debt("B", 2000, 10, 60),
            make_debt("C", 200, 20, 100),
        ]
        assert _names(order_debts(debts, "cashflow")) == ["C", "A", "B"]

    def test_cashflow_puts_settled_debts_last(self):
        debts = [
            make_debt("Settled", 0, 30, 25),
            make_debt("A", 500, 25, 50),
            make_debt("B", 2000, 10, 60),
        ]
        assert _names(order_debts(debts, "cashflow")) == ["A", "B", "Settled"]

    def test_result_is_a_permutation(self, two_debts):
        for strategy in PAYOFF_STRATEGIES:
            ordered = order_debts(two_debts, strategy.key)
            assert sorted(_names(ordered)) == sorted(_names(two_debts))

    def test_unknown_strategy(self, two_debts):
        with pytest.raises(ValueError, match="Unknown payoff strategy"):
            order_debts(two_debts, "random")


def test_cash_flow_score_skips_zero_balance():
    assert cash_flow_score(make_debt("Settled", 0, 30, 25)) is None
    assert cash_flow_score(make_debt("A", 500, 25, 50)) == Decimal("0.16")


def test_get_strategy():
    assert get_strategy("snowball").name == "Debt Snowball"
    with pytest.raises(ValueError):
        get_strategy("nope")


class TestAdjustExtraPayment:
    def test_without_cash_flow_returns_request(self, two_debts):
        assert adjust_extra_payment(Decimal("500"), two_debts, None) == Decimal("500")

    def test_caps_to_headroom_after_minimums(self, two_debts):
        # minimums total 80
        assert adjust_extra_payment(Decimal("500"), two_debts, _cash_flow(300)) == Decimal("220")

    def test_never_exceeds_request(self, two_debts):
        assert adjust_extra_payment(Decimal("100"), two_debts, _cash_flow(1000)) == Decimal("100")

    def test_never_negative(self, two_debts):
        assert adjust_extra_payment(Decimal("100"), two_debts, _cash_flow(50)) == Decimal("0")
