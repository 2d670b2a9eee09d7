"""Merge partner defaults with user-entered values into calculator inputs."""

from __future__ import annotations

import logging
from typing import Any, Dict

import pydantic

from app.configuration.boi_limits import resolve_ltv_limit
from app.domain.schemas import CalculatorInputs, PartnerConfig
from app.exceptions import ValidationError
from app.utils.validation import format_validation_errors

logger = logging.getLogger(__name__)


def partner_defaults(config: PartnerConfig, *, is_first_property: bool) -> Dict[str, Any]:
    """Calculator fields derived from partner configuration."""

    recognition = (
        config.rent_recognition_first_property
        if is_first_property
        else config.rent_recognition_investment
    )
    return {
        "ratio": config.max_dti_ratio * 100,
        "max_age": config.max_age,
        "interest": config.default_interest_rate,
        "rental_yield": config.rental_yield_default,
        "rent_recognition": recognition * 100,
        "lawyer_pct": config.lawyer_fee_percent,
        "broker_pct": config.broker_fee_percent,
        "vat_pct": config.vat_percent,
        "advisor_fee": config.advisor_fee_fixed,
        "other_fee": config.other_fee_fixed,
    }


def build_calculator_inputs(config: PartnerConfig, **overrides: Any) -> CalculatorInputs:
    """User overrides win over partner defaults; ``None`` overrides are ignored.

    Without an explicit ``ltv`` the regulatory cap for the deal type applies.
    """

    provided = {key: value for key, value in overrides.items() if value is not None}
    is_first_property = bool(provided.get("is_first_property", True))
    is_resident = bool(provided.get("is_israeli_tax_resident", True))
    provided.setdefault("ltv", resolve_ltv_limit(is_first_property, is_resident))

    merged = {**partner_defaults(config, is_first_property=is_first_property), **provided}
    if not merged.get("is_rented", False):
        merged.pop("expected_rent", None)

    try:
        return CalculatorInputs.model_validate(merged)
    except pydantic.ValidationError as exc:
        errors = format_validation_errors(exc)
        logger.info("rejected calculator inputs", extra={"errors": errors})
        raise ValidationError("Invalid input data", details={"errors": errors}) from exc


__all__ = ["build_calculator_inputs", "partner_defaults"]
