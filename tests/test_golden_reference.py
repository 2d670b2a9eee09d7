import copy
from pathlib import Path

import pytest

from app.domain.schemas import LimitingFactor
from app.services.golden_reference import (
    MONEY_TOLERANCE,
    Mismatch,
    approve_snapshot,
    compare_to_reference,
    load_reference,
    run_snapshot,
    snapshot_scenario,
    write_snapshot,
)
from app.services.scenarios import SCENARIOS, get_scenario

REFERENCE_FILE = Path(__file__).parent / "golden" / "golden-reference.json"


@pytest.fixture(scope="module")
def snapshot():
    return run_snapshot()


def _entry(snapshot, scenario_id):
    return next(entry for entry in snapshot["scenarios"] if entry["id"] == scenario_id)


def test_battery_covers_sixteen_scenarios(snapshot):
    ids = [entry["id"] for entry in snapshot["scenarios"]]

    assert len(ids) == 16
    assert len(set(ids)) == 16
    assert ids[0] == "S01_BASELINE"
    assert ids[-1] == "S16_AMORTIZATION_TABLE"
    assert "generatedAt" in snapshot


def test_every_scenario_except_age_limit_has_outputs(snapshot):
    for entry in snapshot["scenarios"]:
        assert "error" not in entry
        if entry["id"] == "S14_AGE_TOO_OLD":
            assert entry["OUTPUTS"] is None
        else:
            assert entry["OUTPUTS"]["maxPropertyValue"] > 0


def test_snapshot_uses_wire_names(snapshot):
    entry = _entry(snapshot, "S01_BASELINE")

    assert entry["INPUTS"]["netIncome"] == 40_000
    assert "actualLTV" in entry["OUTPUTS"]
    assert "lawyerFeeTTC" in entry["OUTPUTS"]
    assert entry["OUTPUTS"]["taxProfile"] == "SINGLE_HOME"


def test_scenario_branches_land_where_named(snapshot):
    assert _entry(snapshot, "S06_LTV_BINDING")["OUTPUTS"]["limitingFactor"] == (
        LimitingFactor.LTV_LIMIT.value
    )
    assert _entry(snapshot, "S11_RENT_WARNING_HIGH")["OUTPUTS"]["rentWarning"] == "high"
    assert _entry(snapshot, "S12_RENT_WARNING_LOW")["OUTPUTS"]["rentWarning"] == "low"
    assert _entry(snapshot, "S13_RENT_VALIDATION_OFF")["OUTPUTS"]["rentWarning"] is None
    assert _entry(snapshot, "S05_NON_ISRAELI")["OUTPUTS"]["taxProfile"] == "INVESTOR"
    assert _entry(snapshot, "S02_TAX_ZERO")["OUTPUTS"]["purchaseTax"] == 0


def test_amortization_scenario_carries_full_schedule(snapshot):
    outputs = _entry(snapshot, "S16_AMORTIZATION_TABLE")["OUTPUTS"]

    assert len(outputs["amortizationTable"]) == 360
    assert _entry(snapshot, "S01_BASELINE")["OUTPUTS"]["amortizationTable"] is None


def test_snapshot_matches_itself_after_round_trip(snapshot, tmp_path):
    path = write_snapshot(snapshot, tmp_path / "golden" / "snapshot.json")

    assert compare_to_reference(snapshot, load_reference(path)) == []


def test_small_drift_within_tolerance_accepted(snapshot):
    reference = copy.deepcopy(snapshot)
    outputs = _entry(reference, "S01_BASELINE")["OUTPUTS"]
    outputs["maxPropertyValue"] += MONEY_TOLERANCE / 2
    outputs["actualLTV"] += 0.001

    assert compare_to_reference(snapshot, reference) == []


def test_drift_beyond_tolerance_reported(snapshot):
    reference = copy.deepcopy(snapshot)
    outputs = _entry(reference, "S01_BASELINE")["OUTPUTS"]
    outputs["maxPropertyValue"] += MONEY_TOLERANCE * 5
    outputs["actualLTV"] += 0.01

    mismatches = compare_to_reference(snapshot, reference)

    assert sorted(m.field for m in mismatches) == ["actualLTV", "maxPropertyValue"]
    assert all(m.scenario_id == "S01_BASELINE" for m in mismatches)


def test_categorical_change_reported(snapshot):
    reference = copy.deepcopy(snapshot)
    _entry(reference, "S06_LTV_BINDING")["OUTPUTS"]["limitingFactor"] = "INCOME_LIMIT"

    mismatches = compare_to_reference(snapshot, reference)

    assert mismatches == [
        Mismatch("S06_LTV_BINDING", "limitingFactor", "INCOME_LIMIT", "LTV_LIMIT")
    ]
    assert "S06_LTV_BINDING" in mismatches[0].describe()


def test_schedule_length_change_reported(snapshot):
    reference = copy.deepcopy(snapshot)
    _entry(reference, "S16_AMORTIZATION_TABLE")["OUTPUTS"]["amortizationTable"].pop()

    mismatches = compare_to_reference(snapshot, reference)

    assert [m.field for m in mismatches] == ["amortizationTable.length"]


def test_missing_scenario_and_vanished_result_reported(snapshot):
    current = copy.deepcopy(snapshot)
    current["scenarios"] = [
        entry for entry in current["scenarios"] if entry["id"] != "S02_TAX_ZERO"
    ]
    _entry(current, "S03_TAX_3_5_PCT")["OUTPUTS"] = None

    mismatches = compare_to_reference(current, snapshot)

    assert {(m.scenario_id, m.field) for m in mismatches} == {
        ("S02_TAX_ZERO", "scenario"),
        ("S03_TAX_3_5_PCT", "OUTPUTS"),
    }


def test_approve_copies_snapshot_to_reference(snapshot, tmp_path):
    snapshot_path = write_snapshot(snapshot, tmp_path / "snapshot-output.json")
    reference_path = approve_snapshot(snapshot_path, tmp_path / "ref" / "golden-reference.json")

    assert reference_path.read_text(encoding="utf-8") == snapshot_path.read_text(encoding="utf-8")


def test_single_scenario_snapshot():
    entry = snapshot_scenario(get_scenario("S14_AGE_TOO_OLD"))

    assert entry["OUTPUTS"] is None
    assert entry["description"]


def test_unknown_scenario_id():
    with pytest.raises(KeyError):
        get_scenario("S99_UNKNOWN")


def test_scenarios_name_their_branches():
    for scenario in SCENARIOS:
        assert scenario.branches


def test_engine_matches_approved_golden_reference(snapshot):
    reference = load_reference(REFERENCE_FILE)

    mismatches = compare_to_reference(snapshot, reference)

    assert [m.describe() for m in mismatches] == []
    assert [entry["id"] for entry in reference["scenarios"]] == [
        scenario.id for scenario in SCENARIOS
    ]
