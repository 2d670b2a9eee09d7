"""Purchase-tax profile classification and progressive bracket computation."""

from __future__ import annotations

from app.configuration.tax_brackets import TAX_BRACKETS
from app.domain.schemas import TaxProfile


def determine_tax_profile(
    is_first_property: bool, is_israeli_tax_resident: bool
) -> TaxProfile:
    """Only a resident buying a first home gets the reduced schedule."""
    if is_first_property and is_israeli_tax_resident:
        return TaxProfile.SINGLE_HOME
    return TaxProfile.INVESTOR


def compute_purchase_tax(price: float, profile: TaxProfile) -> float:
    """Sum ``rate * slice`` over every bracket that starts below ``price``."""

    tax = 0.0
    for bracket in TAX_BRACKETS[profile]:
        if price <= bracket.min:
            break
        taxable_amount = min(price, bracket.max) - bracket.min
        tax += taxable_amount * bracket.rate
    return tax


__all__ = ["determine_tax_profile", "compute_purchase_tax"]
