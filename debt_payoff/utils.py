"""Utility functions for the debt payoff planner.

This module provides helpers for parsing user input into Python data types:
numbers into ``Decimal``, JSON-style mappings into ``Debt`` and
``CashFlowAnalysis`` objects, and whole input files. It also holds the date
arithmetic used for payoff dates.
"""

from __future__ import annotations

import json
from datetime import datetime, timedelta
from decimal import Decimal, InvalidOperation, getcontext
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from .data_models import CashFlowAnalysis, Debt

getcontext().prec = 28  # increase decimal precision to avoid rounding errors


def decimal_from_str(value: Any) -> Decimal:
    """Convert a numeric string (or number) into a ``Decimal``.

    The function strips commas, whitespace and a leading ``$`` and handles
    both integer and float-like strings. It raises ``ValueError`` if
    conversion fails or the result is not finite.
    """
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            if isinstance(value, (int, float)) and not isinstance(value, bool):
                cleaned = str(value)
            else:
                cleaned = str(value).strip().replace(",", "").lstrip("$")
            result = Decimal(cleaned)
        except (InvalidOperation, ValueError, TypeError) as exc:
            raise ValueError(f"Invalid numeric value: {value}") from exc
    if not result.is_finite():
        raise ValueError(f"Invalid numeric value: {value}")
    return result


def add_days(dt: datetime, days: int) -> datetime:
    """Return ``dt`` shifted forward by ``days`` days."""
    return dt + timedelta(days=days)


def _pick(mapping: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        if key in mapping and mapping[key] is not None:
            return mapping[key]
    return default


def _non_negative(mapping: Mapping[str, Any], label: str, *keys: str) -> Decimal:
    raw = _pick(mapping, *keys)
    if raw is None:
        raise ValueError(f"Missing field '{label}'")
    try:
        value = decimal_from_str(raw)
    except ValueError as exc:
        raise ValueError(f"Invalid {label}: {raw}") from exc
    if value < 0:
        raise ValueError(f"{label} cannot be negative: {raw}")
    return value


_TRUE_STRINGS = ("true", "yes", "1")
_FALSE_STRINGS = ("false", "no", "0")


def parse_flag(value: Any, label: str = "flag") -> bool:
    """Parse a JSON or form boolean.

    Accepts real booleans, the integers 0 and 1, and the strings
    ``true/false/yes/no/1/0`` in any case. Anything else raises ``ValueError``.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    raise ValueError(f"Invalid {label}: {value!r}")


def _whole_months(value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError(f"Invalid target emergency months: {value!r}")
    try:
        months = decimal_from_str(value)
    except ValueError as exc:
        raise ValueError(f"Invalid target emergency months: {value!r}") from exc
    if months < 0 or months != months.to_integral_value():
        raise ValueError(f"Invalid target emergency months: {value!r}")
    return int(months)


def debt_from_dict(mapping: Mapping[str, Any], index: int = 0) -> Debt:
    """Build a :class:`Debt` from a JSON-style mapping.

    Both camelCase (``interestRate``) and snake_case (``interest_rate``) keys
    are accepted. Missing ids and names are generated from ``index``.
    """
    if not isinstance(mapping, Mapping):
        raise ValueError(f"Debt #{index + 1} must be an object")
    debt_id = str(_pick(mapping, "id", default=f"debt-{index + 1}"))
    return Debt(
        id=debt_id,
        name=str(_pick(mapping, "name", default=debt_id)),
        balance=_non_negative(mapping, "balance", "balance"),
        interest_rate=_non_negative(mapping, "interest rate", "interestRate", "interest_rate", "rate"),
        minimum_payment=_non_negative(
            mapping, "minimum payment", "minimumPayment", "minimum_payment", "minimum"
        ),
        is_active=parse_flag(_pick(mapping, "isActive", "is_active", default=True), "isActive"),
    )


def cash_flow_from_dict(mapping: Mapping[str, Any]) -> CashFlowAnalysis:
    """Build a :class:`CashFlowAnalysis` from a JSON-style mapping."""
    if not isinstance(mapping, Mapping):
        raise ValueError("Cash flow must be an object")
    zero = Decimal("0")
    return CashFlowAnalysis(
        monthly_income=decimal_from_str(_pick(mapping, "monthlyIncome", "monthly_income", default=zero)),
        monthly_expenses=decimal_from_str(
            _pick(mapping, "monthlyExpenses", "monthly_expenses", default=zero)
        ),
        available_for_debt=_non_negative(
            mapping, "available for debt", "availableForDebt", "available_for_debt"
        ),
        emergency_fund=decimal_from_str(_pick(mapping, "emergencyFund", "emergency_fund", default=zero)),
        target_emergency_months=_whole_months(
            _pick(mapping, "targetEmergencyMonths", "target_emergency_months", default=3)
        ),
    )


def debts_from_list(
    items: Iterable[Mapping[str, Any]], include_inactive: bool = False
) -> List[Debt]:
    """Convert raw mappings into debts, dropping inactive ones by default."""
    if not isinstance(items, (list, tuple)):
        raise ValueError("Debts must be a list")
    debts = [debt_from_dict(item, i) for i, item in enumerate(items)]
    if include_inactive:
        return debts
    return [d for d in debts if d.is_active]


def parse_debt_lines(text: str) -> List[Debt]:
    """Parse ``name, balance, rate, minimum`` lines (one debt per line).

    Blank lines and lines starting with ``#`` are skipped.
    """
    debts: List[Debt] = []
    for line_no, line in enumerate(text.splitlines(), start=1):
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        parts = [p.strip() for p in line.split(",")]
        if len(parts) != 4:
            raise ValueError(
                f"Line {line_no}: expected 'name, balance, rate, minimum'; got {line!r}"
            )
        name, balance, rate, minimum = parts
        try:
            debts.append(
                debt_from_dict(
                    {
                        "id": f"debt-{len(debts) + 1}",
                        "name": name,
                        "balance": balance,
                        "interestRate": rate.rstrip("%"),
                        "minimumPayment": minimum,
                    },
                    len(debts),
                )
            )
        except ValueError as exc:
            raise ValueError(f"Line {line_no}: {exc}") from exc
    return debts


def load_debts(
    path: Path, include_inactive: bool = False
) -> Tuple[List[Debt], Optional[CashFlowAnalysis]]:
    """Load debts (and an optional cash flow) from a JSON file.

    The file holds either a list of debts or an object of the form
    ``{"debts": [...], "cashFlow": {...}}``.
    """
    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
    cash_flow = None
    if isinstance(data, dict):
        raw_cash_flow = _pick(data, "cashFlow", "cash_flow")
        if raw_cash_flow is not None:
            cash_flow = cash_flow_from_dict(raw_cash_flow)
        data = data.get("debts", [])
    if not isinstance(data, list):
        raise ValueError(f"{path} must contain a list of debts")
    return debts_from_list(data, include_inactive), cash_flow


def inputs_to_dict(debts: Iterable[Debt], cash_flow: Optional[CashFlowAnalysis]) -> Dict[str, Any]:
    """Serialize debts and cash flow in the format read by :func:`load_debts`."""
    data: Dict[str, Any] = {"debts": [d.to_dict() for d in debts]}
    if cash_flow is not None:
        data["cashFlow"] = cash_flow.to_dict()
    return data
