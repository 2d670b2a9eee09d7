"""
Maximum purchase budget search.

Bisects over candidate property prices to find the highest price at which
equity still covers price plus closing costs minus the largest loan allowed
by income (debt-to-income), an optional monthly payment cap, and the LTV cap.
Returns ``None`` when no price is feasible or no loan term remains.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from app.configuration import boi_limits
from app.domain.schemas import (
    CalculatorInputs,
    CalculatorResults,
    LimitingFactor,
    PartnerConfig,
    RentWarning,
    TaxProfile,
)
from app.services.amortization import amortization_factor, generate_amortization_table
from app.services.closing_costs import calculate_closing_costs, fee_with_vat
from app.services.purchase_tax import compute_purchase_tax, determine_tax_profile

logger = logging.getLogger(__name__)

# Bisection precision (NIS) and safety break; both bound the search.
TOLERANCE: float = 100.0
MAX_ITERATIONS: int = 50

# Initial upper bound as a multiple of equity, doubled while still affordable.
UPPER_BOUND_EQUITY_MULTIPLE: float = 20.0
MAX_BOUND_EXPANSIONS: int = 16


@dataclass(frozen=True)
class PricePoint:
    """Constraint evaluation for a single candidate price."""

    price: float
    purchase_tax: float
    closing_costs: float
    rent: float
    max_payment: float
    max_loan_by_payment: float
    max_loan_by_ltv: float

    @property
    def max_loan(self) -> float:
        return min(self.max_loan_by_payment, self.max_loan_by_ltv)

    @property
    def required_equity(self) -> float:
        return self.price + self.closing_costs - self.max_loan

    def is_affordable(self, equity: float) -> bool:
        return self.required_equity <= equity + TOLERANCE


def estimate_market_rent(price: float, rental_yield_pct: float) -> float:
    return price * (rental_yield_pct / 100) / 12


def resolve_rent(inputs: CalculatorInputs, price: float) -> float:
    """Monthly rent counted for a rented property.

    An explicit positive ``expected_rent`` always wins over the yield estimate.
    """

    if not inputs.is_rented:
        return 0.0
    if inputs.expected_rent is not None and inputs.expected_rent > 0:
        return inputs.expected_rent
    return estimate_market_rent(price, inputs.rental_yield)


def evaluate_price(
    inputs: CalculatorInputs,
    tax_profile: TaxProfile,
    factor: float,
    price: float,
) -> PricePoint:
    purchase_tax = compute_purchase_tax(price, tax_profile)
    closing_costs = calculate_closing_costs(
        price,
        purchase_tax,
        inputs.lawyer_pct,
        inputs.broker_pct,
        inputs.vat_pct,
        inputs.advisor_fee,
        inputs.other_fee,
    )

    rent = resolve_rent(inputs, price)
    recognized_rent = rent * (inputs.rent_recognition / 100)
    max_payment = (inputs.net_income + recognized_rent) * (inputs.ratio / 100)
    if inputs.budget_cap is not None and inputs.budget_cap > 0:
        max_payment = min(max_payment, inputs.budget_cap)

    return PricePoint(
        price=price,
        purchase_tax=purchase_tax,
        closing_costs=closing_costs,
        rent=rent,
        max_payment=max_payment,
        max_loan_by_payment=max_payment / factor,
        max_loan_by_ltv=price * (inputs.ltv / 100),
    )


def _rent_warning(
    inputs: CalculatorInputs,
    rent: float,
    market_rent: float,
    config: Optional[PartnerConfig],
) -> Optional[RentWarning]:
    if config is None or not config.enable_rent_validation or not inputs.is_rented:
        return None
    if rent > market_rent * config.rent_warning_high_multiplier:
        return RentWarning.HIGH
    if 0 < rent < market_rent * config.rent_warning_low_multiplier:
        return RentWarning.LOW
    return None


def term_limits(
    inputs: CalculatorInputs, config: Optional[PartnerConfig] = None
) -> Tuple[int, int]:
    """Years left before the maximum age, and the regulatory/partner term cap."""

    max_age = inputs.max_age
    term_cap_years = boi_limits.MAX_TERM_YEARS
    if config is not None:
        max_age = min(config.max_age, inputs.max_age)
        term_cap_years = config.max_loan_term_years
    return max_age - inputs.age, term_cap_years


def _limiting_factor(
    point: PricePoint, months: int, age_term_years: int, term_cap_years: int
) -> LimitingFactor:
    """Name the cap that bound the loan at this price."""
    if point.max_loan_by_ltv <= point.max_loan_by_payment:
        return LimitingFactor.LTV_LIMIT
    if age_term_years < term_cap_years and months == age_term_years * 12:
        return LimitingFactor.AGE_LIMIT
    return LimitingFactor.INCOME_LIMIT


def _build_result(
    inputs: CalculatorInputs,
    tax_profile: TaxProfile,
    factor: float,
    months: int,
    point: PricePoint,
    config: Optional[PartnerConfig],
) -> CalculatorResults:
    price = point.price
    loan = point.max_loan
    payment = loan * factor
    equity_used = price + point.closing_costs - loan
    equity_remaining = inputs.equity - equity_used
    market_rent = estimate_market_rent(price, inputs.rental_yield)
    age_term_years, term_cap_years = term_limits(inputs, config)

    return CalculatorResults(
        max_property_value=price,
        loan_amount=loan,
        actual_ltv=(loan / price) * 100,
        monthly_payment=payment,
        rent_income=point.rent,
        net_payment=payment - point.rent,
        closing_costs=point.closing_costs,
        total_interest=payment * months - loan,
        total_cost=payment * months,
        loan_term_years=months / 12,
        purchase_tax=point.purchase_tax,
        tax_profile=tax_profile,
        equity_used=equity_used,
        equity_remaining=equity_remaining,
        lawyer_fee_ttc=fee_with_vat(price, inputs.lawyer_pct, inputs.vat_pct),
        broker_fee_ttc=fee_with_vat(price, inputs.broker_pct, inputs.vat_pct),
        limiting_factor=_limiting_factor(point, months, age_term_years, term_cap_years),
        estimated_market_rent=market_rent,
        rent_warning=_rent_warning(inputs, point.rent, market_rent, config),
    )


def solve_maximum_budget(
    inputs: CalculatorInputs,
    tax_profile: TaxProfile,
    amortization_factor: float,
    max_loan_term_months: int,
    config: Optional[PartnerConfig] = None,
) -> Optional[CalculatorResults]:
    """Find the highest affordable price by monotone bisection."""

    low = 0.0
    high = inputs.equity * UPPER_BOUND_EQUITY_MULTIPLE
    best: Optional[PricePoint] = None

    # Grow the bracket while its top is still affordable.
    expansions = 0
    while high > 0 and expansions < MAX_BOUND_EXPANSIONS:
        point = evaluate_price(inputs, tax_profile, amortization_factor, high)
        if not point.is_affordable(inputs.equity):
            break
        best = point
        low = high
        high *= 2
        expansions += 1

    if expansions:
        logger.debug(
            "expanded price search bound",
            extra={"expansions": expansions, "high": high},
        )

    iterations = 0
    while high - low > TOLERANCE and iterations < MAX_ITERATIONS:
        iterations += 1
        price = (low + high) / 2
        point = evaluate_price(inputs, tax_profile, amortization_factor, price)

        if point.is_affordable(inputs.equity):
            best = point
            low = price
        else:
            high = price

    if best is None:
        logger.info(
            "no affordable price found",
            extra={
                "equity": inputs.equity,
                "tax_profile": tax_profile.value,
                "iterations": iterations,
            },
        )
        return None

    logger.debug(
        "budget search converged",
        extra={"iterations": iterations, "low": low, "high": high},
    )
    return _build_result(
        inputs, tax_profile, amortization_factor, max_loan_term_months, best, config
    )


def calculate(
    inputs: CalculatorInputs, config: Optional[PartnerConfig] = None
) -> Optional[CalculatorResults]:
    """Compute the maximum budget, honouring partner limits when given."""

    age_term_years, term_cap_years = term_limits(inputs, config)
    years = min(term_cap_years, age_term_years)
    if years <= 0:
        logger.info(
            "no loan term left for borrower age",
            extra={"age": inputs.age, "age_term_years": age_term_years},
        )
        return None

    months = years * 12
    factor = amortization_factor(inputs.interest, months)
    tax_profile = determine_tax_profile(
        inputs.is_first_property, inputs.is_israeli_tax_resident
    )

    results = solve_maximum_budget(inputs, tax_profile, factor, months, config)

    if results is not None and config is not None and config.show_amortization_table:
        table = generate_amortization_table(
            results.loan_amount,
            inputs.interest,
            years,
            config.max_amortization_months,
        )
        results = results.model_copy(update={"amortization_table": table})

    return results


__all__ = [
    "TOLERANCE",
    "MAX_ITERATIONS",
    "PricePoint",
    "calculate",
    "evaluate_price",
    "resolve_rent",
    "solve_maximum_budget",
    "term_limits",
]
