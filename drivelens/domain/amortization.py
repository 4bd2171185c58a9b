"""Fixed-rate loan and lease payment math"""

import math


def monthly_payment(principal: float, apr: float, months: int) -> float:
    """
    Standard fixed-rate amortized payment: P*r / (1 - (1+r)^-n), r = apr/12.

    Zero-rate loans fall back to principal/months. Returns 0.0 for non-finite
    inputs, non-positive principal or term, and for payments that blow up at
    extreme rates.
    """
    if not all(math.isfinite(x) for x in (principal, apr, months)):
        return 0.0
    if principal <= 0 or months <= 0:
        return 0.0

    monthly_rate = apr / 12
    if monthly_rate == 0:
        return principal / months

    try:
        discount = (1 + monthly_rate) ** (-months)
        payment = principal * monthly_rate / (1 - discount)
    except (OverflowError, ZeroDivisionError):
        return 0.0

    return payment if math.isfinite(payment) else 0.0


def total_interest(principal: float, apr: float, months: int) -> float:
    """Interest paid over the life of the loan, never negative"""
    payment = monthly_payment(principal, apr, months)
    if payment <= 0:
        return 0.0
    return max(0.0, payment * months - principal)


def financed_principal(price: float, down_payment: float = 0.0) -> float:
    return max(0.0, price - down_payment)


def lease_principal(principal: float, residual_pct: float) -> float:
    """Portion of the principal consumed over the lease (everything but the residual)"""
    return principal * (1 - residual_pct)
