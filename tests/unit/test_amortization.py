"""Unit tests for loan and lease payment math"""

import math

import pytest

from drivelens.domain.amortization import financed_principal, lease_principal, monthly_payment, total_interest


def test_reference_loan():
    """Test $30,000 at 6% over 60 months"""
    payment = monthly_payment(30000, 0.06, 60)
    interest = total_interest(30000, 0.06, 60)

    assert 550 < payment < 650
    assert 0 < interest < 10000
    assert math.isclose(payment, 579.98, abs_tol=0.01)


@pytest.mark.parametrize("apr", [0.0, 0.029, 0.06, 0.14, 0.25])
def test_payment_covers_principal(apr: float):
    """Payment is positive and at least principal / months"""
    payment = monthly_payment(25000, apr, 48)
    assert payment > 0
    assert payment >= 25000 / 48 - 1e-9


def test_total_interest_identity():
    payment = monthly_payment(18000, 0.07, 72)
    assert math.isclose(total_interest(18000, 0.07, 72), payment * 72 - 18000)


def test_zero_rate_is_straight_division():
    assert monthly_payment(12000, 0.0, 24) == 500
    assert total_interest(12000, 0.0, 24) == 0


def test_degenerate_inputs_return_zero():
    """Test non-positive principal, term and non-finite input"""
    assert monthly_payment(0, 0.06, 60) == 0.0
    assert monthly_payment(-500, 0.06, 60) == 0.0
    assert monthly_payment(30000, 0.06, 0) == 0.0
    assert monthly_payment(float("nan"), 0.06, 60) == 0.0
    assert monthly_payment(30000, float("inf"), 60) == 0.0
    assert total_interest(0, 0.06, 60) == 0.0


def test_financed_principal_floors_at_zero():
    assert financed_principal(30000, 5000) == 25000
    assert financed_principal(30000, 40000) == 0


def test_lease_principal():
    """Test only the non-residual portion is financed"""
    assert math.isclose(lease_principal(30000, 0.58), 12600)
