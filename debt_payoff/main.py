"""Command‑line interface for the debt payoff planner.

This module uses the ``click`` library to implement a multi‑command
interface. Users can compare all payoff strategies, inspect the payoff order
of a single strategy or dump the built-in sample data. Results can be printed
to the terminal or exported to JSON files.
"""

from __future__ import annotations

import json
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, List, Optional

import click

from .data_models import CalculationParams, CashFlowAnalysis, Debt
from .engine import calculate_all_strategies, calculate_strategy
from .formatter import CURRENCY_OPTIONS, print_comparison, print_strategy
from .log import setup_logging
from .sample_data import SAMPLE_CASH_FLOW, SAMPLE_DEBTS
from .utils import decimal_from_str, inputs_to_dict, load_debts


def parse_amount(value: str) -> Decimal:
    """Parse a money string with optional suffixes.

    Accepts plain numbers ("500", "1,250.50") and shorthand with ``k``/``m``
    suffixes (e.g., "2.5k" meaning 2_500). Returns a ``Decimal``.
    """
    value = value.strip().lower().replace(",", "").lstrip("$")
    factor = Decimal(1)
    if value.endswith("k"):
        factor = Decimal(1_000)
        value = value[:-1]
    elif value.endswith("m"):
        factor = Decimal(1_000_000)
        value = value[:-1]
    try:
        return decimal_from_str(value) * factor
    except ValueError:
        raise click.BadParameter(f"Invalid amount: {value}")


def build_cash_flow_from_options(
    income: Optional[str],
    expenses: Optional[str],
    available: Optional[str],
    emergency_fund: Optional[str],
) -> Optional[CashFlowAnalysis]:
    """Return a cash flow analysis, or ``None`` when no cash flow option is set.

    When ``available`` is omitted it defaults to income minus expenses.
    """
    if not any((income, expenses, available, emergency_fund)):
        return None
    income_value = parse_amount(income) if income else Decimal("0")
    expenses_value = parse_amount(expenses) if expenses else Decimal("0")
    if available:
        available_value = parse_amount(available)
    else:
        available_value = max(Decimal("0"), income_value - expenses_value)
    return CashFlowAnalysis(
        monthly_income=income_value,
        monthly_expenses=expenses_value,
        available_for_debt=available_value,
        emergency_fund=parse_amount(emergency_fund) if emergency_fund else Decimal("0"),
    )


def build_params_from_options(
    debts_file: Optional[str],
    sample: bool,
    extra: str,
    income: Optional[str] = None,
    expenses: Optional[str] = None,
    available: Optional[str] = None,
    emergency_fund: Optional[str] = None,
    include_inactive: bool = False,
) -> CalculationParams:
    if bool(debts_file) == bool(sample):
        raise click.UsageError("Provide exactly one of --debts FILE or --sample")
    file_cash_flow: Optional[CashFlowAnalysis] = None
    if sample:
        debts: List[Debt] = list(SAMPLE_DEBTS)
        file_cash_flow = SAMPLE_CASH_FLOW
    else:
        try:
            debts, file_cash_flow = load_debts(Path(debts_file), include_inactive)
        except (OSError, ValueError) as exc:
            raise click.BadParameter(str(exc), param_hint="--debts")
    extra_value = parse_amount(extra)
    if extra_value < 0:
        raise click.BadParameter("Extra payment cannot be negative", param_hint="--extra")
    # Cash flow given on the command line overrides the one stored in the file
    cash_flow = build_cash_flow_from_options(income, expenses, available, emergency_fund)
    return CalculationParams(
        debts=debts,
        extra_payment=extra_value,
        cash_flow=cash_flow or file_cash_flow,
    )


def export_to_json(path: Path, data: Dict[str, Any]) -> None:
    """Export a result dictionary to a JSON file."""
    with path.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)


def _input_options(func):
    """Attach the debt and cash flow options shared by ``compare`` and ``plan``."""
    options = [
        click.option("--debts", "debts_file", type=click.Path(exists=True, dir_okay=False), help="JSON file with debts (and optional cashFlow)"),
        click.option("--sample", "sample", is_flag=True, help="Use the built-in sample debts and cash flow"),
        click.option("--extra", "-e", "extra", default="0", show_default=True, help="Extra monthly payment on top of minimums"),
        click.option("--income", "income", help="Monthly income"),
        click.option("--expenses", "expenses", help="Monthly expenses"),
        click.option("--available", "available", help="Monthly amount available for debt (defaults to income - expenses)"),
        click.option("--emergency-fund", "emergency_fund", help="Current emergency fund"),
        click.option("--include-inactive", "include_inactive", is_flag=True, help="Include debts marked inactive in the input file"),
        click.option("--currency", "currency", type=click.Choice(sorted(CURRENCY_OPTIONS)), default="USD", show_default=True, help="Currency used when printing"),
        click.option("--output", "output", type=str, help="Output file path (.json)"),
        click.option("--verbose", "-v", "verbose", is_flag=True, help="Log simulation details to stderr"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _write_or_print(output: Optional[str], data: Dict[str, Any], printer) -> None:
    if output:
        path = Path(output)
        if path.suffix.lower() != ".json":
            raise click.BadParameter("Unsupported output format; use .json", param_hint="--output")
        export_to_json(path, data)
        click.echo(f"Results exported to {path}")
    else:
        printer()


@click.group()
def cli() -> None:
    """A command‑line planner comparing debt payoff strategies."""
    pass


@cli.command()
@_input_options
def compare(
    debts_file: Optional[str],
    sample: bool,
    extra: str,
    income: Optional[str],
    expenses: Optional[str],
    available: Optional[str],
    emergency_fund: Optional[str],
    include_inactive: bool,
    currency: str,
    output: Optional[str],
    verbose: bool,
) -> None:
    """Compare avalanche, snowball and cash flow strategies."""
    setup_logging("DEBUG" if verbose else None)
    params = build_params_from_options(
        debts_file, sample, extra, income, expenses, available, emergency_fund, include_inactive
    )
    comparison = calculate_all_strategies(params)
    _write_or_print(output, comparison.to_dict(), lambda: print_comparison(comparison, currency))


@cli.command()
@_input_options
@click.option(
    "--strategy",
    "-s",
    "strategy",
    type=click.Choice(["avalanche", "snowball", "cashflow"]),
    default="avalanche",
    show_default=True,
    help="Payoff strategy",
)
def plan(
    debts_file: Optional[str],
    sample: bool,
    extra: str,
    income: Optional[str],
    expenses: Optional[str],
    available: Optional[str],
    emergency_fund: Optional[str],
    include_inactive: bool,
    currency: str,
    output: Optional[str],
    verbose: bool,
    strategy: str,
) -> None:
    """Show the payoff order and timeline of a single strategy."""
    setup_logging("DEBUG" if verbose else None)
    params = build_params_from_options(
        debts_file, sample, extra, income, expenses, available, emergency_fund, include_inactive
    )
    result = calculate_strategy(params.debts, strategy, params.extra_payment, params.cash_flow)
    _write_or_print(output, result.to_dict(), lambda: print_strategy(result, currency))


@cli.command()
@click.option("--output", "output", type=str, help="Write the sample to this file instead of stdout")
def sample(output: Optional[str]) -> None:
    """Print the built-in sample debts and cash flow as JSON."""
    data = inputs_to_dict(SAMPLE_DEBTS, SAMPLE_CASH_FLOW)
    if output:
        export_to_json(Path(output), data)
        click.echo(f"Sample exported to {output}")
    else:
        click.echo(json.dumps(data, indent=2, ensure_ascii=False))


if __name__ == "__main__":
    cli()
