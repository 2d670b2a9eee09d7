from .calculator import (
    BudgetRequest,
    BudgetResponse,
    ErrorResponse,
    FieldError,
    PartnerConfigResponse,
)

__all__ = [
    "BudgetRequest",
    "BudgetResponse",
    "ErrorResponse",
    "FieldError",
    "PartnerConfigResponse",
]
