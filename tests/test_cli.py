import json
import logging
from pathlib import Path

import pytest
from click.testing import CliRunner

from app.cli import cli
from app.configuration.partner_loader import load_partner_config


@pytest.fixture
def runner():
    # The CLI reconfigures the root logger against the runner's stdout.
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    load_partner_config.cache_clear()
    yield CliRunner()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_budget_prints_results_as_json(runner):
    result = runner.invoke(cli, ["budget", "--equity", "3000000", "--income", "40000", "--age", "30"])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert 5_000_000 < payload["maxPropertyValue"] < 5_250_000
    assert payload["taxProfile"] == "SINGLE_HOME"
    assert len(payload["amortizationTable"]) == 60


def test_budget_investment_uses_investor_profile(runner):
    result = runner.invoke(
        cli,
        ["budget", "--equity", "2000000", "--income", "30000", "--age", "40", "--investment"],
    )

    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert payload["taxProfile"] == "INVESTOR"
    assert payload["actualLTV"] <= 50 + 1e-9


def test_budget_reports_infeasible_inputs(runner):
    result = runner.invoke(cli, ["budget", "--equity", "500000", "--income", "20000", "--age", "80"])

    assert result.exit_code == 1
    assert "Cannot compute" in result.output


def test_budget_rejects_out_of_range_values(runner):
    result = runner.invoke(cli, ["budget", "--equity", "500000", "--income", "20000", "--age", "12"])

    assert result.exit_code == 1
    assert "Invalid input data" in result.output


def test_snapshot_approve_check_cycle(runner, tmp_path):
    snapshot_path = tmp_path / "snapshot-output.json"
    reference_path = tmp_path / "golden-reference.json"

    snapshot = runner.invoke(cli, ["snapshot", "--output", str(snapshot_path)])
    assert snapshot.exit_code == 0, snapshot.output
    assert len(json.loads(snapshot_path.read_text(encoding="utf-8"))["scenarios"]) == 16

    approve = runner.invoke(
        cli, ["approve", "--snapshot", str(snapshot_path), "--reference", str(reference_path)]
    )
    assert approve.exit_code == 0, approve.output
    assert reference_path.exists()

    check = runner.invoke(cli, ["check", "--reference", str(reference_path)])
    assert check.exit_code == 0, check.output
    assert "All scenarios match" in check.output


def test_check_fails_on_drift(runner, tmp_path):
    snapshot_path = tmp_path / "snapshot-output.json"
    runner.invoke(cli, ["snapshot", "--output", str(snapshot_path)])

    reference = json.loads(snapshot_path.read_text(encoding="utf-8"))
    reference["scenarios"][0]["OUTPUTS"]["maxPropertyValue"] += 10_000
    reference_path = tmp_path / "golden-reference.json"
    reference_path.write_text(json.dumps(reference), encoding="utf-8")

    check = runner.invoke(cli, ["check", "--reference", str(reference_path)])

    assert check.exit_code == 1
    assert "S01_BASELINE" in check.output


def test_check_passes_against_committed_reference(runner):
    reference_path = Path(__file__).parent / "golden" / "golden-reference.json"

    check = runner.invoke(cli, ["check", "--reference", str(reference_path)])

    assert check.exit_code == 0, check.output
    assert "All scenarios match" in check.output
