from __future__ import annotations

import pytest

from debt_payoff_web.app import app


@pytest.fixture
def client():
    app.config["TESTING"] = True
    with app.test_client() as client:
        yield client


def test_index_renders_form(client):
    response = client.get("/")
    assert response.status_code == 200
    assert b"Debt Payoff Planner" in response.data
    assert b"Amazon Store Card" in response.data


def test_index_post_shows_comparison(client):
    response = client.post(
        "/",
        data={
            "debts": "Card, 1000, 20, 50\nLoan, 500, 10, 30",
            "extra_payment": "100",
            "currency": "USD",
        },
    )
    assert response.status_code == 200
    assert b"Best strategy" in response.data
    assert b"Debt Snowball" in response.data


def test_index_post_reports_errors(client):
    response = client.post("/", data={"debts": "Card, lots, 20, 50", "extra_payment": "0"})
    assert response.status_code == 200
    assert b"Invalid balance" in response.data


def test_api_compare(client):
    response = client.post(
        "/api/compare",
        json={
            "debts": [
                {"name": "A", "balance": 1000, "interestRate": 20, "minimumPayment": 50},
                {"name": "B", "balance": 500, "interestRate": 10, "minimumPayment": 30},
            ],
            "extraPayment": 100,
        },
    )
    assert response.status_code == 200
    data = response.get_json()
    assert len(data["strategies"]) == 3
    avalanche = data["strategies"][0]
    assert avalanche["debts"][0]["name"] == "A"
    assert avalanche["debts"][0]["currentPayment"] == 150
    assert avalanche["monthlyPayment"] == 180


def test_api_compare_never_pays_off(client):
    response = client.post(
        "/api/compare",
        json={"debts": [{"name": "Stuck", "balance": 1000, "interestRate": 24, "minimumPayment": 20}]},
    )
    data = response.get_json()
    debt = data["strategies"][0]["debts"][0]
    assert debt["monthsToPayoff"] == 999
    assert debt["totalInterest"] == 10000
    assert debt["neverPaysOff"] is True
    assert debt["payoffDate"] is None


def test_api_compare_empty_debts(client):
    response = client.post("/api/compare", json={"debts": [], "extraPayment": 50})
    data = response.get_json()
    assert response.status_code == 200
    assert len(data["strategies"]) == 1
    assert data["strategies"][0]["totalMonths"] == 0


def test_api_compare_rejects_bad_input(client):
    response = client.post("/api/compare", json={"debts": [{"name": "X", "balance": -5}]})
    assert response.status_code == 400
    assert "error" in response.get_json()

    response = client.post("/api/compare", data="not json", content_type="text/plain")
    assert response.status_code == 400


@pytest.mark.parametrize(
    "payload",
    [
        {"debts": 5},
        {"debts": "Card"},
        {"debts": [], "cashFlow": {"availableForDebt": 100, "targetEmergencyMonths": [1]}},
        {"debts": [], "includeInactive": "sometimes"},
    ],
)
def test_api_compare_rejects_malformed_fields(client, payload):
    response = client.post("/api/compare", json=payload)
    assert response.status_code == 400
    assert "error" in response.get_json()


def test_api_compare_string_false_drops_inactive_debt(client):
    debts = [
        {"name": "Open", "balance": 1000, "interestRate": 20, "minimumPayment": 50},
        {"name": "Closed", "balance": 500, "interestRate": 10, "minimumPayment": 30, "isActive": "false"},
    ]
    response = client.post("/api/compare", json={"debts": debts})
    names = [d["name"] for d in response.get_json()["strategies"][0]["debts"]]
    assert names == ["Open"]

    response = client.post("/api/compare", json={"debts": debts, "includeInactive": "true"})
    names = [d["name"] for d in response.get_json()["strategies"][0]["debts"]]
    assert names == ["Open", "Closed"]


def test_api_sample(client):
    response = client.get("/api/sample")
    assert response.status_code == 200
    assert len(response.get_json()["debts"]) == 7
