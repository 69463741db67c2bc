"""Output helpers for the debt payoff planner.

This module renders amounts, month counts and strategy comparisons as text.
Tables are written with ``click.echo`` so they play well with the CLI and
with ``CliRunner`` in tests.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Dict, Union

import click

from .data_models import NEVER_PAYOFF_MONTHS, PayoffComparison, StrategyResult

CURRENCY_OPTIONS: Dict[str, Dict[str, str]] = {
    "USD": {"label": "US dollar", "prefix": "$", "suffix": ""},
    "EUR": {"label": "Euro", "prefix": "€", "suffix": ""},
    "GBP": {"label": "British pound", "prefix": "£", "suffix": ""},
    "PLN": {"label": "Polish złoty", "prefix": "", "suffix": " zł"},
}


def format_currency(amount: Union[Decimal, float, int], currency: str = "USD") -> str:
    """Format ``amount`` with thousands separators and two decimals.

    Unknown currency codes fall back to USD. Negative amounts put the sign in
    front of the symbol (``-$12.00``).
    """
    meta = CURRENCY_OPTIONS.get(currency.upper(), CURRENCY_OPTIONS["USD"])
    value = Decimal(str(amount)) if not isinstance(amount, Decimal) else amount
    sign = "-" if value < 0 else ""
    return f"{sign}{meta['prefix']}{abs(value):,.2f}{meta['suffix']}"


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}{'' if count == 1 else 's'}"


def format_months(months: int) -> str:
    """Render a month count as ``"2 years, 3 months"``; the 999 marker is ``"Never"``."""
    if months == 0:
        return "0 months"
    if months >= NEVER_PAYOFF_MONTHS:
        return "Never"
    years, remaining_months = divmod(months, 12)
    if years == 0:
        return _plural(months, "month")
    if remaining_months == 0:
        return _plural(years, "year")
    return f"{_plural(years, 'year')}, {_plural(remaining_months, 'month')}"


def _format_interest(result_interest: Decimal, never: bool, currency: str) -> str:
    # the penalty is not real money; show it only as a marker
    if never:
        return "n/a (never)"
    return format_currency(result_interest, currency)


def print_strategy(result: StrategyResult, currency: str = "USD") -> None:
    """Print one strategy's payoff order as a simple table."""
    click.echo(f"{result.strategy.icon} {result.strategy.name}".strip())
    click.echo(result.strategy.description)
    click.echo("-" * 88)
    click.echo(
        f"{'#':>3s}  {'Debt':24s} {'Balance':>14s} {'Rate':>7s} {'Payment':>12s} "
        f"{'Paid off in':>18s}"
    )
    for debt_result in result.debts:
        debt = debt_result.debt
        click.echo(
            f"{debt_result.priority:>3d}  {debt.name[:24]:24s} "
            f"{format_currency(debt.balance, currency):>14s} "
            f"{float(debt.interest_rate):>6.2f}% "
            f"{format_currency(debt_result.current_payment, currency):>12s} "
            f"{format_months(debt_result.months_to_payoff):>18s}"
        )
    click.echo("-" * 88)
    click.echo(f"Monthly payment    : {format_currency(result.monthly_payment, currency)}")
    click.echo(f"Extra applied      : {format_currency(result.extra_payment, currency)}")
    click.echo(
        f"Total interest     : {_format_interest(result.total_interest, result.never_pays_off, currency)}"
    )
    click.echo(f"Debt free in       : {format_months(result.total_months)}")
    if result.payoff_date:
        click.echo(f"Debt free by       : {result.payoff_date.strftime('%Y-%m')}")


def print_comparison(comparison: PayoffComparison, currency: str = "USD") -> None:
    """Print all strategies side by side and highlight the best one."""
    click.echo("Comparison")
    click.echo("=" * 88)
    click.echo(
        f"{'Strategy':24s} {'Total interest':>18s} {'Debt free in':>20s} {'Monthly':>14s}"
    )
    for result in comparison.strategies:
        marker = " *" if result is comparison.best_strategy else ""
        click.echo(
            f"{(result.strategy.name + marker):24s} "
            f"{_format_interest(result.total_interest, result.never_pays_off, currency):>18s} "
            f"{format_months(result.total_months):>20s} "
            f"{format_currency(result.monthly_payment, currency):>14s}"
        )
    click.echo("=" * 88)
    click.echo(f"Best strategy      : {comparison.best_strategy.strategy.name}")
    if len(comparison.strategies) > 1:
        click.echo(
            f"Interest saved     : {format_currency(comparison.interest_savings, currency)}"
        )
        click.echo(f"Time saved         : {format_months(comparison.time_savings)}")
