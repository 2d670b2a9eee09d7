from .amortization import generate_amortization_table, summarize_by_year
from .budget_solver import calculate, solve_maximum_budget
from .closing_costs import calculate_closing_costs
from .input_builder import build_calculator_inputs
from .purchase_tax import compute_purchase_tax, determine_tax_profile

__all__ = [
    "build_calculator_inputs",
    "calculate",
    "calculate_closing_costs",
    "compute_purchase_tax",
    "determine_tax_profile",
    "generate_amortization_table",
    "solve_maximum_budget",
    "summarize_by_year",
]
