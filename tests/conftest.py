"""Shared fixtures for the debt payoff test suite."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

import pytest

from debt_payoff.data_models import Debt


def make_debt(name: str, balance, rate, minimum, is_active: bool = True) -> Debt:
    """Build a ``Debt`` from plain numbers."""
    return Debt(
        id=name.lower(),
        name=name,
        balance=Decimal(str(balance)),
        interest_rate=Decimal(str(rate)),
        minimum_payment=Decimal(str(minimum)),
        is_active=is_active,
    )


@pytest.fixture
def now() -> datetime:
    return datetime(2024, 1, 1, 12, 0, 0)


@pytest.fixture
def two_debts():
    """Card A (higher rate, larger balance) and card B (lower rate, smaller balance)."""
    return [
        make_debt("A", 1000, 20, 50),
        make_debt("B", 500, 10, 30),
    ]


@pytest.fixture
def zero_rate_ladder():
    """Three interest-free debts of increasing size, useful for exact cascade checks."""
    return [
        make_debt("D1", 100, 0, 10),
        make_debt("D2", 300, 0, 10),
        make_debt("D3", 1000, 0, 10),
    ]
