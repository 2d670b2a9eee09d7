from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..domain.schemas import (
    AmortizationRow,
    CalculatorResults,
    PartnerConfig,
    YearlyBreakdown,
)


class BudgetRequest(BaseModel):
    """User-entered wizard values; anything omitted comes from partner defaults."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    equity: float = Field(..., ge=0)
    net_income: float = Field(..., ge=0)
    age: int = Field(..., ge=18, le=120)
    is_first_property: bool = True
    is_israeli_tax_resident: bool = True
    is_rented: bool = False
    expected_rent: Optional[float] = Field(None, ge=0)
    budget_cap: Optional[float] = Field(None, ge=0)
    ltv: Optional[float] = Field(None, ge=0, le=100)
    ratio: Optional[float] = Field(None, ge=0, le=100)
    max_age: Optional[int] = Field(None, ge=50, le=120)
    interest: Optional[float] = Field(None, ge=0, le=30)
    rental_yield: Optional[float] = Field(None, ge=0, le=20)
    rent_recognition: Optional[float] = Field(None, ge=0, le=100)
    lawyer_pct: Optional[float] = Field(None, ge=0, le=10)
    broker_pct: Optional[float] = Field(None, ge=0, le=10)
    vat_pct: Optional[float] = Field(None, ge=0, le=50)
    advisor_fee: Optional[float] = Field(None, ge=0)
    other_fee: Optional[float] = Field(None, ge=0)


class BudgetResponse(BaseModel):
    """Calculation results with the full repayment schedule."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    results: CalculatorResults
    amortization: List[AmortizationRow]
    yearly_breakdown: List[YearlyBreakdown] = Field(default_factory=list)


class FieldError(BaseModel):
    field: str
    message: str


class ErrorResponse(BaseModel):
    """Error body returned for rejected or failed calculations."""

    error: str
    code: Optional[str] = None
    error_id: Optional[str] = Field(None, alias="errorId")
    details: List[FieldError] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)


class PartnerConfigResponse(BaseModel):
    config: PartnerConfig
