"""Sample debts and cash flow used by ``debt-payoff compare --sample`` and the web demo."""

from __future__ import annotations

from decimal import Decimal
from typing import List

from .data_models import CashFlowAnalysis, Debt

SAMPLE_DEBTS: List[Debt] = [
    Debt("debt-1", "Amazon Store Card", Decimal("852.00"), Decimal("29.99"), Decimal("45.00")),
    Debt("debt-2", "AmEx Delta SkyMiles", Decimal("7548.17"), Decimal("28.99"), Decimal("186.00")),
    Debt("debt-3", "Discover Card", Decimal("5962.44"), Decimal("27.24"), Decimal("156.00")),
    Debt("debt-4", "AmEx Platinum", Decimal("13415.61"), Decimal("27.24"), Decimal("443.26")),
    Debt("debt-5", "Target RedCard", Decimal("9338.54"), Decimal("27.15"), Decimal("265.00")),
    Debt("debt-6", "Chase Freedom", Decimal("3479.77"), Decimal("19.24"), Decimal("80.00")),
    Debt("debt-7", "Student Loans", Decimal("14778.58"), Decimal("7.125"), Decimal("167.99")),
]

SAMPLE_CASH_FLOW = CashFlowAnalysis(
    monthly_income=Decimal("6500"),
    monthly_expenses=Decimal("4200"),
    available_for_debt=Decimal("2300"),
    emergency_fund=Decimal("3500"),
    target_emergency_months=3,
)
