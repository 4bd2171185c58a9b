"""Month-by-month lease, buy and credit-boost cost projections"""

from typing import List

from drivelens.domain.amortization import financed_principal, lease_principal, monthly_payment, total_interest
from drivelens.domain.costs import (
    DEFAULT_FUEL_PRICE,
    DEFAULT_KWH_PRICE,
    MaintenanceModel,
    depreciation_by_month,
    model_year_maintenance,
    vehicle_co2_per_month,
    vehicle_fuel_cost,
)
from drivelens.domain.models import ProjectionPoint, ScenarioHeadline, ScenarioSeries, UserProfile, VehicleModel
from drivelens.domain.rates import apr_for_profile

CREDIT_BOOST_WAIT_MONTHS = 12
CREDIT_BOOST_APR_FACTOR = 0.85  # simulated 15% rate improvement after the wait
MIN_DEPRECIATION_HORIZON = 60


def build_scenario_series(
    profile: UserProfile,
    vehicle: VehicleModel,
    *,
    fuel_price: float = DEFAULT_FUEL_PRICE,
    kwh_price: float = DEFAULT_KWH_PRICE,
    maintenance: MaintenanceModel = model_year_maintenance,
) -> ScenarioSeries:
    """
    Build the three financing paths for one vehicle.

    - lease: constant lease payment for the lease term
    - buy: constant loan payment for the loan term
    - credit_boost: 12 months of saving (no payment), then the same loan at
      85% of the APR

    Fuel and CO2 are flat per month; depreciation is measured against the
    longest of the two terms or five years.
    """
    loan_months = profile.loan_term_months
    lease_months = profile.lease_term_months
    miles_per_month = profile.monthly_miles
    apr = apr_for_profile(profile, vehicle.apr_base)

    principal = financed_principal(vehicle.msrp, profile.down_payment)
    buy_monthly = monthly_payment(principal, apr, loan_months)
    lease_monthly = monthly_payment(lease_principal(principal, vehicle.lease_residual_pct), apr, lease_months)

    horizon = max(loan_months, lease_months, MIN_DEPRECIATION_HORIZON)
    fuel = vehicle_fuel_cost(vehicle, miles_per_month, fuel_price, kwh_price)
    co2 = vehicle_co2_per_month(vehicle, miles_per_month)

    def make_point(month: int, payment: float) -> ProjectionPoint:
        return ProjectionPoint(
            month=month,
            payment=payment,
            fuel_cost=fuel,
            maintenance_cost=maintenance(vehicle, month),
            depreciation=depreciation_by_month(vehicle.msrp, month, horizon, miles_per_month * 12),
            co2=co2,
        )

    lease = [make_point(m, lease_monthly) for m in range(1, lease_months + 1)]
    buy = [make_point(m, buy_monthly) for m in range(1, loan_months + 1)]

    boosted_monthly = monthly_payment(principal, max(0.0, apr * CREDIT_BOOST_APR_FACTOR), loan_months)
    credit_boost = [make_point(m, 0.0) for m in range(1, CREDIT_BOOST_WAIT_MONTHS + 1)]
    credit_boost += [
        make_point(m, boosted_monthly)
        for m in range(CREDIT_BOOST_WAIT_MONTHS + 1, CREDIT_BOOST_WAIT_MONTHS + loan_months + 1)
    ]

    return ScenarioSeries(
        lease=lease,
        buy=buy,
        credit_boost=credit_boost,
        headline=ScenarioHeadline(
            buy_monthly=buy_monthly,
            lease_monthly=lease_monthly,
            total_interest_buy=total_interest(principal, apr, loan_months),
            apr=apr,
        ),
    )


def series_total(points: List[ProjectionPoint]) -> float:
    """Cash spent across a series (payment + fuel + maintenance)"""
    return sum(p.total_cost for p in points)
