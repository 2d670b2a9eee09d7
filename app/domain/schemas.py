"""Domain schemas for the purchase-budget engine."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, List, Optional

from pydantic import BaseModel, ConfigDict, Field, NonNegativeFloat
from pydantic.alias_generators import to_camel


Percent = Annotated[float, Field(ge=0.0, le=100.0)]
Fraction = Annotated[float, Field(ge=0.0, le=1.0)]
Money = Annotated[float, Field(ge=0.0, le=1e9)]
FixedFee = Annotated[float, Field(ge=0.0, le=1e6)]


class _WireModel(BaseModel):
    """Snake-case in Python, camelCase on the wire; either spelling accepted."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class TaxProfile(str, Enum):
    """Purchase-tax schedule a buyer falls under."""

    SINGLE_HOME = "SINGLE_HOME"
    INVESTOR = "INVESTOR"


class RentWarning(str, Enum):
    """Advisory flag when declared rent strays from the market estimate."""

    HIGH = "high"
    LOW = "low"


class LimitingFactor(str, Enum):
    """Loan cap that bound the loan at the chosen price."""

    INCOME_LIMIT = "INCOME_LIMIT"
    LTV_LIMIT = "LTV_LIMIT"
    AGE_LIMIT = "AGE_LIMIT"


class CalculatorInputs(_WireModel):
    """Validated borrower inputs for a single budget calculation."""

    equity: float = Field(..., ge=0.0, le=1e12, description="Available equity")
    ltv: Percent = Field(..., description="Maximum loan-to-value, percent")
    net_income: Money = Field(..., description="Monthly net income")
    ratio: Percent = Field(..., description="Maximum debt-to-income, percent")
    age: int = Field(..., ge=18, le=120)
    max_age: int = Field(
        ..., ge=50, le=120, description="Age by which the loan must be repaid"
    )
    interest: float = Field(..., ge=0.0, le=30.0, description="Annual rate, percent")
    is_rented: bool = False
    rental_yield: float = Field(
        default=3.0,
        ge=0.0,
        le=20.0,
        description="Annual gross yield used to estimate rent from price, percent",
    )
    rent_recognition: Percent = Field(
        default=0.0, description="Share of rent counted as income, percent"
    )
    budget_cap: Optional[Money] = Field(
        default=None, description="Explicit monthly payment ceiling"
    )
    is_first_property: bool = True
    is_israeli_tax_resident: bool = True
    expected_rent: Optional[Money] = Field(
        default=None,
        description="Explicit monthly rent; overrides the yield estimate when positive",
    )
    lawyer_pct: float = Field(default=0.0, ge=0.0, le=10.0)
    broker_pct: float = Field(default=0.0, ge=0.0, le=10.0)
    vat_pct: float = Field(default=0.0, ge=0.0, le=50.0)
    advisor_fee: FixedFee = 0.0
    other_fee: FixedFee = 0.0


class PartnerConfig(BaseModel):
    """Regulatory and product defaults supplied by a partner."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    # Regulatory
    max_dti_ratio: float = Field(default=0.33, ge=0.25, le=0.50)
    max_age: int = Field(default=80, ge=70, le=95)
    max_loan_term_years: int = Field(default=30, ge=10, le=35)
    rent_recognition_first_property: Fraction = 0.0
    rent_recognition_investment: Fraction = 0.8

    # Financial
    default_interest_rate: float = Field(default=5.0, ge=1.0, le=15.0)
    lawyer_fee_percent: float = Field(default=1.0, ge=0.0, le=10.0)
    broker_fee_percent: float = Field(default=2.0, ge=0.0, le=10.0)
    vat_percent: float = Field(default=18.0, ge=0.0, le=25.0)
    advisor_fee_fixed: int = Field(default=9000, ge=0, le=100_000)
    other_fee_fixed: int = Field(default=3000, ge=0, le=100_000)
    rental_yield_default: float = Field(default=3.0, ge=0.0, le=20.0)

    # Rent validation
    rent_warning_high_multiplier: float = Field(default=1.5, ge=1.0, le=3.0)
    rent_warning_low_multiplier: float = Field(default=0.7, ge=0.3, le=0.9)

    # Feature flags
    enable_rent_validation: bool = True
    enable_what_if_calculator: bool = Field(
        default=True,
        description="Passed through to the UI for the what-if panel; the engine does not read it",
    )
    show_amortization_table: bool = True
    max_amortization_months: int = Field(default=60, ge=12, le=360)


class AmortizationRow(_WireModel):
    """One month of a level-payment schedule."""

    month: int = Field(..., ge=1)
    opening: float
    payment: float
    interest: float
    principal: float
    closing: NonNegativeFloat


class YearlyBreakdown(_WireModel):
    """Interest and principal paid within one loan year."""

    year: int = Field(..., ge=1)
    interest: float
    principal: float


class CalculatorResults(_WireModel):
    """Outcome of a successful budget search."""

    max_property_value: float
    loan_amount: float
    actual_ltv: float = Field(..., alias="actualLTV")
    monthly_payment: float
    rent_income: float
    net_payment: float
    closing_costs: float
    total_interest: float
    total_cost: float
    loan_term_years: float
    purchase_tax: float
    tax_profile: TaxProfile
    equity_used: float
    equity_remaining: float
    lawyer_fee_ttc: float = Field(..., alias="lawyerFeeTTC")
    broker_fee_ttc: float = Field(..., alias="brokerFeeTTC")
    limiting_factor: LimitingFactor
    estimated_market_rent: float
    rent_warning: Optional[RentWarning] = None
    amortization_table: Optional[List[AmortizationRow]] = None
