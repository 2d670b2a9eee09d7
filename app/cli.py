"""Command line entry point for quick calculations and golden-reference upkeep.

Snapshot workflow::

    budget-engine snapshot          # run every scenario, write snapshot-output.json
    (verify the snapshot by hand)
    budget-engine approve           # lock it in as golden-reference.json
    budget-engine check             # fail on drift beyond tolerance
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Optional

import click

from app.configuration.partner_loader import load_partner_config
from app.exceptions import AppException
from app.services import build_calculator_inputs, calculate
from app.services.golden_reference import (
    approve_snapshot,
    compare_to_reference,
    load_reference,
    run_snapshot,
    write_snapshot,
)
from app.utils import setup_logging

GOLDEN_DIR = Path("tests") / "golden"
SNAPSHOT_FILE = GOLDEN_DIR / "snapshot-output.json"
REFERENCE_FILE = GOLDEN_DIR / "golden-reference.json"


@click.group()
@click.option("--log-level", default="WARNING", show_default=True)
def cli(log_level: str) -> None:
    """Maximum property budget engine."""
    setup_logging(log_level, stream=sys.stderr)


@cli.command()
@click.option("--equity", type=float, required=True, help="Available equity")
@click.option("--income", "net_income", type=float, required=True, help="Monthly net income")
@click.option("--age", type=int, required=True)
@click.option("--interest", type=float, default=None, help="Annual rate, percent")
@click.option("--budget-cap", type=float, default=None, help="Monthly payment ceiling")
@click.option("--rent", "expected_rent", type=float, default=None, help="Expected monthly rent")
@click.option("--rented/--not-rented", "is_rented", default=False)
@click.option("--investment", is_flag=True, help="Not the buyer's first property")
@click.option("--foreign-resident", is_flag=True, help="Not an Israeli tax resident")
@click.option(
    "--partner-config",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
)
def budget(
    equity: float,
    net_income: float,
    age: int,
    interest: Optional[float],
    budget_cap: Optional[float],
    expected_rent: Optional[float],
    is_rented: bool,
    investment: bool,
    foreign_resident: bool,
    partner_config: Optional[Path],
) -> None:
    """Print the maximum budget for a borrower as JSON."""

    try:
        config = load_partner_config(partner_config)
        inputs = build_calculator_inputs(
            config,
            equity=equity,
            net_income=net_income,
            age=age,
            interest=interest,
            budget_cap=budget_cap,
            expected_rent=expected_rent,
            is_rented=is_rented,
            is_first_property=not investment,
            is_israeli_tax_resident=not foreign_resident,
        )
    except AppException as exc:
        raise click.ClickException(f"{exc.message}: {json.dumps(exc.details)}")

    results = calculate(inputs, config)
    if results is None:
        raise click.ClickException("Cannot compute a recommendation with these inputs.")

    click.echo(json.dumps(results.model_dump(mode="json", by_alias=True), indent=2))


@cli.command()
@click.option("--output", type=click.Path(path_type=Path), default=SNAPSHOT_FILE, show_default=True)
def snapshot(output: Path) -> None:
    """Run the scenario battery and write the outputs."""
    path = write_snapshot(run_snapshot(), output)
    click.echo(f"Snapshot written to {path}")


@cli.command()
@click.option(
    "--snapshot",
    "snapshot_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=SNAPSHOT_FILE,
    show_default=True,
)
@click.option("--reference", type=click.Path(path_type=Path), default=REFERENCE_FILE, show_default=True)
def approve(snapshot_path: Path, reference: Path) -> None:
    """Promote a verified snapshot to the golden reference."""
    approve_snapshot(snapshot_path, reference)
    click.echo(f"Golden reference updated: {reference}")


@cli.command()
@click.option(
    "--reference",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=REFERENCE_FILE,
    show_default=True,
)
def check(reference: Path) -> None:
    """Compare a fresh run against the golden reference."""
    mismatches = compare_to_reference(run_snapshot(), load_reference(reference))
    if not mismatches:
        click.echo("All scenarios match the golden reference.")
        return

    for mismatch in mismatches:
        click.echo(mismatch.describe(), err=True)
    click.echo(f"{len(mismatches)} field(s) drifted from the golden reference.", err=True)
    sys.exit(1)


if __name__ == "__main__":
    cli()
