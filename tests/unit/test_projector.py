"""Unit tests for lease, buy and credit-boost projections"""

import math

from drivelens.domain.amortization import monthly_payment
from drivelens.domain.costs import baseline_maintenance
from drivelens.domain.projector import build_scenario_series, series_total


def test_series_lengths(make_profile, make_vehicle):
    """Lease and buy cover their terms; credit boost adds a 12-month wait"""
    series = build_scenario_series(make_profile(), make_vehicle())

    assert [p.month for p in series.lease] == list(range(1, 37))
    assert len(series.buy) == 60
    assert len(series.credit_boost) == 72


def test_headline_payments(make_profile, make_vehicle):
    """Test $30,000 at 6% base APR with a 0.58 residual"""
    series = build_scenario_series(make_profile(credit_score=720), make_vehicle(lease_residual_pct=0.58))

    assert math.isclose(series.headline.apr, 0.06)
    assert math.isclose(series.headline.buy_monthly, monthly_payment(30000, 0.06, 60))
    assert math.isclose(series.headline.lease_monthly, monthly_payment(12600, 0.06, 36))
    assert series.headline.lease_monthly < series.headline.buy_monthly
    assert 0 < series.headline.total_interest_buy < 10000


def test_credit_boost_waits_then_pays_less(make_profile, make_vehicle):
    series = build_scenario_series(make_profile(), make_vehicle())

    assert all(p.payment == 0 for p in series.credit_boost[:12])
    boosted = series.credit_boost[12].payment
    assert 0 < boosted < series.headline.buy_monthly
    assert math.isclose(boosted, monthly_payment(30000, 0.06 * 0.85, 60))


def test_points_carry_running_costs(make_profile, make_vehicle):
    profile = make_profile(daily_miles=None, avg_monthly_mileage=1000)
    series = build_scenario_series(profile, make_vehicle(mpg=25), fuel_price=4.0)
    point = series.buy[0]

    assert math.isclose(point.fuel_cost, 160.0)
    assert point.maintenance_cost == 75.0
    assert math.isclose(point.co2, 404.0)
    assert math.isclose(point.total_cost, point.payment + 160.0 + 75.0)


def test_depreciation_grows_over_the_term(make_profile, make_vehicle):
    series = build_scenario_series(make_profile(), make_vehicle())
    depreciation = [p.depreciation for p in series.buy]
    assert all(b > a for a, b in zip(depreciation, depreciation[1:]))
    assert depreciation[-1] < 30000


def test_maintenance_model_is_pluggable(make_profile, make_vehicle):
    vehicle = make_vehicle(maintenance_cost_per_year=1200)
    series = build_scenario_series(make_profile(), vehicle, maintenance=baseline_maintenance)
    assert all(p.maintenance_cost == 100.0 for p in series.lease)


def test_down_payment_covering_price(make_profile, make_vehicle):
    """Fully paid vehicles have zero payments but still cost fuel"""
    series = build_scenario_series(make_profile(down_payment=35000), make_vehicle())

    assert series.headline.buy_monthly == 0
    assert series.headline.total_interest_buy == 0
    assert series_total(series.buy) > 0


def test_series_total(make_profile, make_vehicle):
    series = build_scenario_series(make_profile(), make_vehicle())
    assert math.isclose(series_total(series.lease), sum(p.total_cost for p in series.lease))
