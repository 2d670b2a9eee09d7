"""Centralized Bank of Israel mortgage constraints used across the service layer."""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Core quantitative guardrails (Directive 329)
# ---------------------------------------------------------------------------

# Loan-to-value ceilings, percent of price.
LTV_FIRST_HOME_PCT: float = 75.0
LTV_INVESTMENT_PCT: float = 50.0
LTV_FOREIGN_RESIDENT_PCT: float = 50.0

# Maximum permitted term in years when no partner limit applies.
MAX_TERM_YEARS: int = 30


def resolve_ltv_limit(is_first_property: bool, is_israeli_resident: bool) -> float:
    """Regulatory LTV cap (percent) for the deal classification."""
    if not is_first_property:
        return LTV_INVESTMENT_PCT
    if is_israeli_resident:
        return LTV_FIRST_HOME_PCT
    return LTV_FOREIGN_RESIDENT_PCT
