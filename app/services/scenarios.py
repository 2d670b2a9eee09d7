"""Named calculator scenarios, one per decision branch of the budget engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

from app.domain.schemas import CalculatorInputs, PartnerConfig

# Baseline partner config; the amortization table is off to keep snapshots lean.
DEFAULT_CONFIG = PartnerConfig(
    vat_percent=18.0,
    show_amortization_table=False,
    max_amortization_months=360,
)

_BASE_INPUTS: Dict[str, Any] = {
    "equity": 3_000_000,
    "ltv": 75,
    "net_income": 40_000,
    "ratio": 33,
    "age": 30,
    "max_age": 80,
    "interest": 5.0,
    "is_rented": False,
    "rental_yield": 3.0,
    "rent_recognition": 0,
    "budget_cap": None,
    "is_first_property": True,
    "is_israeli_tax_resident": True,
    "expected_rent": None,
    "lawyer_pct": 1.0,
    "broker_pct": 2.0,
    "vat_pct": 18,
    "advisor_fee": 9000,
    "other_fee": 3000,
}

_INVESTMENT_RENTAL: Dict[str, Any] = {
    "ltv": 50,
    "age": 40,
    "is_rented": True,
    "rent_recognition": 80,
    "is_first_property": False,
}


@dataclass(frozen=True)
class Scenario:
    id: str
    description: str
    inputs: CalculatorInputs
    config: PartnerConfig = field(default_factory=lambda: DEFAULT_CONFIG)
    branches: Tuple[str, ...] = field(default_factory=tuple)


def _inputs(**overrides: Any) -> CalculatorInputs:
    return CalculatorInputs(**{**_BASE_INPUTS, **overrides})


SCENARIOS: List[Scenario] = [
    Scenario(
        id="S01_BASELINE",
        description="Standard first-time resident buyer, no rental, typical inputs",
        inputs=_inputs(),
        branches=("tax profile SINGLE_HOME", "income binding", "no rent", "no cap"),
    ),
    Scenario(
        id="S02_TAX_ZERO",
        description="Low-equity buyer whose price stays in the 0% bracket",
        inputs=_inputs(equity=500_000, net_income=18_000, age=40),
        branches=("SINGLE_HOME 0% bracket", "equity binding"),
    ),
    Scenario(
        id="S03_TAX_3_5_PCT",
        description="Buyer priced just under the 3.5% SINGLE_HOME bracket threshold",
        inputs=_inputs(equity=600_000, net_income=20_000, age=35),
        branches=("SINGLE_HOME 3.5% bracket",),
    ),
    Scenario(
        id="S04_INVESTOR",
        description="Second property purchase, flat 8% INVESTOR schedule",
        inputs=_inputs(
            equity=2_000_000,
            net_income=35_000,
            age=45,
            ltv=50,
            is_rented=True,
            rent_recognition=80,
            is_first_property=False,
        ),
        branches=("tax profile INVESTOR",),
    ),
    Scenario(
        id="S05_NON_ISRAELI",
        description="First property bought by a non-resident, INVESTOR schedule",
        inputs=_inputs(
            equity=2_500_000,
            net_income=50_000,
            age=40,
            ltv=50,
            is_israeli_tax_resident=False,
        ),
        branches=("non-resident forces INVESTOR",),
    ),
    Scenario(
        id="S06_LTV_BINDING",
        description="Very high income, LTV cap restricts the loan first",
        inputs=_inputs(equity=5_000_000, net_income=200_000, age=35),
        branches=("LTV binding", "actual LTV equals cap"),
    ),
    Scenario(
        id="S07_INCOME_BINDING",
        description="High equity but low income, DTI ratio limits the loan",
        inputs=_inputs(equity=10_000_000, net_income=8_000),
        branches=("income binding",),
    ),
    Scenario(
        id="S08_BUDGET_CAP",
        description="Explicit monthly payment ceiling below the income limit",
        inputs=_inputs(net_income=60_000, age=35, budget_cap=8_000),
        branches=("budget cap applied",),
    ),
    Scenario(
        id="S09_RENTAL_YIELD",
        description="Investment property with rent estimated from yield",
        inputs=_inputs(net_income=25_000, **_INVESTMENT_RENTAL),
        branches=("yield-based rent", "investment rent recognition"),
    ),
    Scenario(
        id="S10_EXPLICIT_RENT",
        description="Explicit expected rent overrides the yield estimate",
        inputs=_inputs(
            equity=2_500_000, net_income=20_000, expected_rent=9_000, **_INVESTMENT_RENTAL
        ),
        branches=("explicit rent wins",),
    ),
    Scenario(
        id="S11_RENT_WARNING_HIGH",
        description="Explicit rent far above the market estimate",
        inputs=_inputs(net_income=20_000, expected_rent=25_000, **_INVESTMENT_RENTAL),
        branches=("rent warning high",),
    ),
    Scenario(
        id="S12_RENT_WARNING_LOW",
        description="Explicit rent far below the market estimate",
        inputs=_inputs(net_income=20_000, expected_rent=1_000, **_INVESTMENT_RENTAL),
        branches=("rent warning low",),
    ),
    Scenario(
        id="S13_RENT_VALIDATION_OFF",
        description="Rent validation disabled, no warning even for extreme rent",
        inputs=_inputs(net_income=20_000, expected_rent=50_000, **_INVESTMENT_RENTAL),
        config=DEFAULT_CONFIG.model_copy(update={"enable_rent_validation": False}),
        branches=("rent validation off",),
    ),
    Scenario(
        id="S14_AGE_TOO_OLD",
        description="Borrower already at the maximum age, no result",
        inputs=_inputs(equity=5_000_000, net_income=100_000, age=80),
        branches=("term exhausted",),
    ),
    Scenario(
        id="S15_ZERO_INTEREST",
        description="Zero interest, straight-line amortization factor",
        inputs=_inputs(interest=0.0),
        branches=("zero-rate factor",),
    ),
    Scenario(
        id="S16_AMORTIZATION_TABLE",
        description="Amortization table attached to the result",
        inputs=_inputs(),
        config=DEFAULT_CONFIG.model_copy(update={"show_amortization_table": True}),
        branches=("amortization table attached",),
    ),
]


def get_scenario(scenario_id: str) -> Scenario:
    for scenario in SCENARIOS:
        if scenario.id == scenario_id:
            return scenario
    raise KeyError(scenario_id)


__all__ = ["DEFAULT_CONFIG", "SCENARIOS", "Scenario", "get_scenario"]
