from __future__ import annotations

import json

from click.testing import CliRunner

from debt_payoff.main import cli


def test_compare_sample():
    result = CliRunner().invoke(cli, ["compare", "--sample", "--extra", "500"])
    assert result.exit_code == 0, result.output
    assert "Best strategy" in result.output
    assert "Debt Snowball" in result.output


def test_compare_requires_input():
    result = CliRunner().invoke(cli, ["compare"])
    assert result.exit_code == 2
    assert "--debts FILE or --sample" in result.output


def test_compare_rejects_bad_amount():
    result = CliRunner().invoke(cli, ["compare", "--sample", "--extra", "lots"])
    assert result.exit_code == 2
    assert "Invalid amount" in result.output


def test_compare_exports_json(tmp_path):
    out = tmp_path / "comparison.json"
    result = CliRunner().invoke(cli, ["compare", "--sample", "--extra", "1k", "--output", str(out)])
    assert result.exit_code == 0, result.output
    data = json.loads(out.read_text(encoding="utf-8"))
    assert [s["strategy"]["key"] for s in data["strategies"]] == ["avalanche", "snowball", "cashflow"]
    assert data["interestSavings"] >= 0


def test_compare_debts_file_with_cash_flow_options(tmp_path):
    path = tmp_path / "debts.json"
    path.write_text(
        json.dumps(
            {
                "debts": [
                    {"name": "Card", "balance": 1000, "interestRate": 20, "minimumPayment": 50},
                    {"name": "Loan", "balance": 500, "interestRate": 10, "minimumPayment": 30},
                ]
            }
        ),
        encoding="utf-8",
    )
    out = tmp_path / "out.json"
    result = CliRunner().invoke(
        cli,
        [
            "compare",
            "--debts", str(path),
            "--extra", "500",
            "--income", "3000",
            "--expenses", "2800",
            "--output", str(out),
        ],
    )
    assert result.exit_code == 0, result.output
    data = json.loads(out.read_text(encoding="utf-8"))
    cashflow = data["strategies"][2]
    # 200 available minus 80 of minimums
    assert cashflow["extraPayment"] == 120
    assert data["cashFlow"]["availableForDebt"] == 200


def test_plan_single_strategy():
    result = CliRunner().invoke(cli, ["plan", "--sample", "--strategy", "snowball", "--extra", "250"])
    assert result.exit_code == 0, result.output
    lines = result.output.splitlines()
    assert "Debt Snowball" in lines[0]
    # smallest balance is paid first
    assert any(line.strip().startswith("1  Amazon Store Card") for line in lines)


def test_sample_command_outputs_loadable_json():
    result = CliRunner().invoke(cli, ["sample"])
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert len(data["debts"]) == 7
    assert data["cashFlow"]["availableForDebt"] == 2300
