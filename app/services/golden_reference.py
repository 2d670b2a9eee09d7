"""Golden-reference snapshots of the scenario battery.

A snapshot records the inputs and outputs of every scenario. Once a snapshot
has been checked by hand it is approved as the reference; later runs must
stay within ``MONEY_TOLERANCE`` on monetary fields and ``RATIO_TOLERANCE``
on ratio fields.
"""

from __future__ import annotations

import json
import logging
import shutil
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from app.services.budget_solver import calculate
from app.services.scenarios import SCENARIOS, Scenario

logger = logging.getLogger(__name__)

MONEY_TOLERANCE: float = 100.0
RATIO_TOLERANCE: float = 0.005
RATIO_FIELDS = frozenset({"actualLTV"})


@dataclass(frozen=True)
class Mismatch:
    scenario_id: str
    field: str
    expected: Any
    actual: Any

    def describe(self) -> str:
        return f"[{self.scenario_id}] {self.field}: expected {self.expected!r}, got {self.actual!r}"


def snapshot_scenario(scenario: Scenario) -> Dict[str, Any]:
    entry: Dict[str, Any] = {
        "id": scenario.id,
        "description": scenario.description,
        "INPUTS": scenario.inputs.model_dump(mode="json", by_alias=True),
        "OUTPUTS": None,
    }
    try:
        results = calculate(scenario.inputs, scenario.config)
    except Exception as exc:
        logger.error("scenario %s raised: %s", scenario.id, exc)
        entry["error"] = str(exc)
        return entry

    if results is not None:
        entry["OUTPUTS"] = results.model_dump(mode="json", by_alias=True)
    return entry


def run_snapshot(scenarios: Iterable[Scenario] = SCENARIOS) -> Dict[str, Any]:
    entries = [snapshot_scenario(scenario) for scenario in scenarios]
    logger.info("captured %d scenario snapshots", len(entries))
    return {
        "generatedAt": datetime.now(timezone.utc).isoformat(),
        "scenarios": entries,
    }


def write_snapshot(snapshot: Dict[str, Any], path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(snapshot, indent=2, ensure_ascii=False), encoding="utf-8")
    return path


def load_reference(path: Path) -> Dict[str, Any]:
    return json.loads(path.read_text(encoding="utf-8"))


def approve_snapshot(snapshot_path: Path, reference_path: Path) -> Path:
    """Promote a verified snapshot to the golden reference."""

    reference_path.parent.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(snapshot_path, reference_path)
    logger.info("approved %s as golden reference", snapshot_path)
    return reference_path


def _compare_values(
    scenario_id: str, field: str, expected: Any, actual: Any, mismatches: List[Mismatch]
) -> None:
    if isinstance(expected, dict) and isinstance(actual, dict):
        for key in sorted(set(expected) | set(actual)):
            _compare_values(
                scenario_id,
                f"{field}.{key}" if field else key,
                expected.get(key),
                actual.get(key),
                mismatches,
            )
        return

    if isinstance(expected, list) and isinstance(actual, list):
        if len(expected) != len(actual):
            mismatches.append(
                Mismatch(scenario_id, f"{field}.length", len(expected), len(actual))
            )
            return
        for index, (exp_item, act_item) in enumerate(zip(expected, actual)):
            _compare_values(scenario_id, f"{field}[{index}]", exp_item, act_item, mismatches)
        return

    numeric = (int, float)
    if (
        isinstance(expected, numeric)
        and isinstance(actual, numeric)
        and not isinstance(expected, bool)
        and not isinstance(actual, bool)
    ):
        leaf = field.rsplit(".", 1)[-1]
        tolerance = RATIO_TOLERANCE if leaf in RATIO_FIELDS else MONEY_TOLERANCE
        if abs(expected - actual) > tolerance:
            mismatches.append(Mismatch(scenario_id, field, expected, actual))
        return

    if expected != actual:
        mismatches.append(Mismatch(scenario_id, field, expected, actual))


def compare_to_reference(
    snapshot: Dict[str, Any], reference: Dict[str, Any]
) -> List[Mismatch]:
    """Every difference between a fresh snapshot and the approved reference."""

    mismatches: List[Mismatch] = []
    current = {entry["id"]: entry for entry in snapshot.get("scenarios", [])}

    for golden in reference.get("scenarios", []):
        scenario_id = golden["id"]
        entry: Optional[Dict[str, Any]] = current.get(scenario_id)
        if entry is None:
            mismatches.append(Mismatch(scenario_id, "scenario", "present", "missing"))
            continue

        expected = golden.get("OUTPUTS")
        actual = entry.get("OUTPUTS")
        if (expected is None) != (actual is None):
            mismatches.append(Mismatch(scenario_id, "OUTPUTS", expected, actual))
            continue
        _compare_values(scenario_id, "", expected, actual, mismatches)

    if mismatches:
        logger.warning("golden reference drift in %d field(s)", len(mismatches))
    return mismatches


__all__ = [
    "MONEY_TOLERANCE",
    "RATIO_TOLERANCE",
    "Mismatch",
    "approve_snapshot",
    "compare_to_reference",
    "load_reference",
    "run_snapshot",
    "snapshot_scenario",
    "write_snapshot",
]
