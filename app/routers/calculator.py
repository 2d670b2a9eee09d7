"""Budget calculation endpoints."""

from __future__ import annotations

import logging
import uuid
from typing import Any, Dict

import pydantic
from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from ..dependencies import get_partner_config
from ..domain.schemas import CalculatorInputs, CalculatorResults, PartnerConfig
from ..exceptions import ValidationError
from ..models import BudgetRequest, BudgetResponse, ErrorResponse, PartnerConfigResponse
from ..services import (
    build_calculator_inputs,
    calculate,
    generate_amortization_table,
    summarize_by_year,
)
from ..utils import format_validation_errors

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["calculator"],
    responses={
        400: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)


def _error(status_code: int, **fields: Any) -> JSONResponse:
    body = ErrorResponse(**fields)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(by_alias=True, exclude_none=True),
    )


def _calculation_failed() -> JSONResponse:
    return _error(
        422,
        error="Could not calculate budget. Please check your input values.",
        code="CALCULATION_FAILED",
    )


def _unexpected_failure(exc: Exception) -> JSONResponse:
    error_id = uuid.uuid4().hex[:8]
    logger.error(f"[{error_id}] Calculate error: {exc}", exc_info=exc)
    return _error(
        500,
        error="An error occurred during calculation. Please try again.",
        error_id=error_id,
    )


def _build_response(inputs: CalculatorInputs, results: CalculatorResults) -> BudgetResponse:
    amortization = generate_amortization_table(
        results.loan_amount, inputs.interest, results.loan_term_years
    )
    return BudgetResponse(
        results=results,
        amortization=amortization,
        yearly_breakdown=summarize_by_year(amortization),
    )


@router.post("/calculate-budget", response_model=BudgetResponse)
async def calculate_budget(payload: Dict[str, Any] = Body(...)):
    """Maximum budget for fully specified calculator inputs."""

    try:
        inputs = CalculatorInputs.model_validate(payload)
    except pydantic.ValidationError as exc:
        logger.info("Rejected calculator payload")
        return _error(
            400, error="Invalid input data", details=format_validation_errors(exc)
        )

    try:
        results = calculate(inputs)
        if results is None:
            return _calculation_failed()
        return _build_response(inputs, results)
    except Exception as exc:
        return _unexpected_failure(exc)


@router.post("/calculate-budget/partner", response_model=BudgetResponse)
async def calculate_partner_budget(
    request: BudgetRequest,
    config: PartnerConfig = Depends(get_partner_config),
):
    """Maximum budget with partner defaults filling the omitted fields."""

    try:
        inputs = build_calculator_inputs(config, **request.model_dump())
    except ValidationError as exc:
        return _error(400, error=exc.message, details=exc.details.get("errors", []))

    try:
        results = calculate(inputs, config)
        if results is None:
            return _calculation_failed()
        return _build_response(inputs, results)
    except Exception as exc:
        return _unexpected_failure(exc)


@router.get("/partner-config", response_model=PartnerConfigResponse)
async def partner_config(config: PartnerConfig = Depends(get_partner_config)):
    return PartnerConfigResponse(config=config)


__all__ = ["router"]
