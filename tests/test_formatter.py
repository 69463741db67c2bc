from __future__ import annotations

from decimal import Decimal

import pytest

from debt_payoff.data_models import CalculationParams
from debt_payoff.engine import calculate_all_strategies, calculate_strategy
from debt_payoff.formatter import format_currency, format_months, print_comparison, print_strategy
from debt_payoff.sample_data import SAMPLE_DEBTS
from conftest import make_debt


@pytest.mark.parametrize(
    "months, expected",
    [
        (0, "0 months"),
        (1, "1 month"),
        (11, "11 months"),
        (12, "1 year"),
        (13, "1 year, 1 month"),
        (24, "2 years"),
        (27, "2 years, 3 months"),
        (999, "Never"),
        (1200, "Never"),
    ],
)
def test_format_months(months, expected):
    assert format_months(months) == expected


def test_format_currency():
    assert format_currency(Decimal("1234.56")) == "$1,234.56"
    assert format_currency(1234.5) == "$1,234.50"
    assert format_currency(Decimal("-12")) == "-$12.00"
    assert format_currency(Decimal("1000"), "PLN") == "1,000.00 zł"
    assert format_currency(Decimal("5"), "eur") == "€5.00"
    assert format_currency(Decimal("5"), "XYZ") == "$5.00"


def test_print_comparison_marks_best_strategy(capsys):
    comparison = calculate_all_strategies(
        CalculationParams(debts=list(SAMPLE_DEBTS), extra_payment=Decimal("500"))
    )
    print_comparison(comparison)
    output = capsys.readouterr().out
    assert "Best strategy      : " + comparison.best_strategy.strategy.name in output
    assert "Debt Avalanche" in output
    assert "Interest saved" in output


def test_print_strategy_shows_never(capsys):
    result = calculate_strategy([make_debt("Stuck Card", 1000, 24, 20)], "avalanche")
    print_strategy(result)
    output = capsys.readouterr().out
    assert "Stuck Card" in output
    assert "Never" in output
    assert "n/a (never)" in output
    assert "Debt free by" not in output
