"""Level-payment amortization schedules."""

from __future__ import annotations

from typing import Dict, List, Sequence

from app.domain.schemas import AmortizationRow, YearlyBreakdown

MAX_SCHEDULE_MONTHS: int = 360
SETTLED_BALANCE: float = 0.1


def amortization_factor(annual_interest_pct: float, months: int) -> float:
    """Monthly payment per unit of principal.

    Degenerates to straight-line repayment (``1 / months``) at a zero rate.
    """

    monthly_rate = annual_interest_pct / 100 / 12
    if monthly_rate == 0:
        return 1 / months
    return monthly_rate / (1 - (1 + monthly_rate) ** -months)


def generate_amortization_table(
    loan_amount: float,
    annual_interest_pct: float,
    years: float,
    max_months: int = MAX_SCHEDULE_MONTHS,
) -> List[AmortizationRow]:
    """Replay the schedule month by month.

    Stops at ``max_months`` rows, or earlier once the balance is settled.
    """

    months = int(round(years * 12))
    if months <= 0 or loan_amount <= 0:
        return []

    monthly_rate = annual_interest_pct / 100 / 12
    monthly_payment = amortization_factor(annual_interest_pct, months) * loan_amount

    rows: List[AmortizationRow] = []
    balance = loan_amount
    month = 1
    while month <= min(months, max_months) and balance > SETTLED_BALANCE:
        interest = balance * monthly_rate
        principal = monthly_payment - interest
        closing = max(0.0, balance - principal)

        rows.append(
            AmortizationRow(
                month=month,
                opening=balance,
                payment=monthly_payment,
                interest=interest,
                principal=principal,
                closing=closing,
            )
        )

        balance = closing
        month += 1

    return rows


def summarize_by_year(rows: Sequence[AmortizationRow]) -> List[YearlyBreakdown]:
    """Aggregate interest and principal per 12-month loan year."""

    totals: Dict[int, List[float]] = {}
    for row in rows:
        year = (row.month - 1) // 12 + 1
        bucket = totals.setdefault(year, [0.0, 0.0])
        bucket[0] += row.interest
        bucket[1] += row.principal

    return [
        YearlyBreakdown(year=year, interest=interest, principal=principal)
        for year, (interest, principal) in sorted(totals.items())
    ]


__all__ = [
    "amortization_factor",
    "generate_amortization_table",
    "summarize_by_year",
    "MAX_SCHEDULE_MONTHS",
]
