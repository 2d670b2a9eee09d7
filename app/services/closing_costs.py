"""Transaction costs paid on top of the purchase price."""

from __future__ import annotations


def fee_with_vat(price: float, fee_pct: float, vat_pct: float) -> float:
    """Percent-of-price fee, VAT inclusive (TTC)."""
    return price * (fee_pct / 100) * (1 + vat_pct / 100)


def calculate_closing_costs(
    price: float,
    purchase_tax: float,
    lawyer_pct: float,
    broker_pct: float,
    vat_pct: float,
    advisor_fee: float,
    other_fee: float,
) -> float:
    # Fixed fees are taken as-is; VAT applies to the percentage fees only.
    lawyer_fee = fee_with_vat(price, lawyer_pct, vat_pct)
    broker_fee = fee_with_vat(price, broker_pct, vat_pct)
    return purchase_tax + lawyer_fee + broker_fee + advisor_fee + other_fee


__all__ = ["fee_with_vat", "calculate_closing_costs"]
