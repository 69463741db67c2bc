import os
from decimal import Decimal

from flask import Flask, jsonify, render_template, request

from debt_payoff.data_models import CalculationParams
from debt_payoff.engine import calculate_all_strategies
from debt_payoff.formatter import CURRENCY_OPTIONS, format_currency, format_months
from debt_payoff.log import setup_logging
from debt_payoff.sample_data import SAMPLE_CASH_FLOW, SAMPLE_DEBTS
from debt_payoff.utils import (
    cash_flow_from_dict,
    decimal_from_str,
    debts_from_list,
    inputs_to_dict,
    parse_debt_lines,
    parse_flag,
)

app = Flask(__name__)
app.config["ASSET_VERSION"] = os.environ.get("ASSET_VERSION", "1")
app.config["DEFAULT_CURRENCY"] = os.environ.get("DEBT_PAYOFF_CURRENCY", "USD").upper()
app.secret_key = os.environ.get("FLASK_SECRET_KEY", "dev-secret-key")
logger = setup_logging()


@app.template_filter("currency")
def _currency_filter(amount, currency="USD"):
    return format_currency(amount, currency)


@app.template_filter("months")
def _months_filter(months):
    return format_months(months)


def _normalized_currency(form) -> str:
    code = form.get("currency", app.config["DEFAULT_CURRENCY"]).upper()
    return code if code in CURRENCY_OPTIONS else "USD"


def _optional_decimal(form, name: str):
    value = form.get(name, "").strip()
    return decimal_from_str(value) if value else None


def _form_to_params(form) -> CalculationParams:
    debts = parse_debt_lines(form.get("debts", ""))
    extra = _optional_decimal(form, "extra_payment") or Decimal("0")
    if extra < 0:
        raise ValueError("Extra payment cannot be negative")

    available = _optional_decimal(form, "available_for_debt")
    cash_flow = None
    if available is not None:
        cash_flow = cash_flow_from_dict(
            {
                "monthlyIncome": _optional_decimal(form, "monthly_income") or 0,
                "monthlyExpenses": _optional_decimal(form, "monthly_expenses") or 0,
                "availableForDebt": available,
                "emergencyFund": _optional_decimal(form, "emergency_fund") or 0,
            }
        )
    return CalculationParams(debts=debts, extra_payment=extra, cash_flow=cash_flow)


def _json_to_params(payload) -> CalculationParams:
    if not isinstance(payload, dict):
        raise ValueError("Request body must be a JSON object")
    raw_debts = payload.get("debts")
    include_inactive = parse_flag(payload.get("includeInactive") or False, "includeInactive")
    debts = debts_from_list([] if raw_debts is None else raw_debts, include_inactive)
    extra = decimal_from_str(payload.get("extraPayment", 0))
    if extra < 0:
        raise ValueError("Extra payment cannot be negative")
    raw_cash_flow = payload.get("cashFlow")
    cash_flow = cash_flow_from_dict(raw_cash_flow) if raw_cash_flow else None
    return CalculationParams(debts=debts, extra_payment=extra, cash_flow=cash_flow)


def sample_debt_lines() -> str:
    """Render the sample debts in the textarea line format."""
    return "\n".join(
        f"{d.name}, {d.balance}, {d.interest_rate}, {d.minimum_payment}" for d in SAMPLE_DEBTS
    )


@app.route("/", methods=["GET", "POST"])
def index():
    comparison = None
    error = None
    form = request.form if request.method == "POST" else {}
    currency_code = _normalized_currency(form)

    if request.method == "POST":
        try:
            comparison = calculate_all_strategies(_form_to_params(request.form))
        except ValueError as exc:
            error = str(exc)

    return render_template(
        "index.html",
        comparison=comparison,
        error=error,
        form=form,
        sample_debts=sample_debt_lines(),
        sample_cash_flow=SAMPLE_CASH_FLOW,
        currency_code=currency_code,
        currency_options=CURRENCY_OPTIONS,
        asset_version=app.config["ASSET_VERSION"],
    )


@app.post("/api/compare")
def api_compare():
    payload = request.get_json(silent=True)
    try:
        params = _json_to_params(payload)
    except ValueError as exc:
        logger.info("Rejected comparison request: %s", exc)
        return jsonify({"error": str(exc)}), 400
    return jsonify(calculate_all_strategies(params).to_dict())


@app.get("/api/sample")
def api_sample():
    return jsonify(inputs_to_dict(SAMPLE_DEBTS, SAMPLE_CASH_FLOW))


if __name__ == "__main__":
    print("Starting Debt Payoff Planner web app...")
    app.run(host="0.0.0.0", port=8710, debug=True)
