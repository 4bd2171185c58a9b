"""Unit tests for running-cost models"""

import math

from drivelens.domain.costs import (
    baseline_maintenance,
    co2_per_month,
    depreciation_by_month,
    insurance_per_month,
    model_year_maintenance,
    monthly_fuel_cost,
    vehicle_co2_per_month,
    vehicle_fuel_cost,
)
from drivelens.domain.models import Powertrain


def test_gas_fuel_cost():
    """Test 1000 miles at 25 mpg and $3.50/gal"""
    assert math.isclose(monthly_fuel_cost(1000, mpg=25), 140.0)


def test_missing_mpg_falls_back_to_25():
    assert math.isclose(monthly_fuel_cost(1000), 140.0)


def test_ev_fuel_cost_uses_mpge():
    """Test 1000 miles at 119 MPGe and $0.13/kWh"""
    expected = 1000 * 33.7 / 119 * 0.13
    assert math.isclose(monthly_fuel_cost(1000, mpge=119), expected)


def test_zero_miles_cost_nothing():
    assert monthly_fuel_cost(0, mpg=30) == 0.0
    assert co2_per_month(0, Powertrain.GAS) == 0.0


def test_vehicle_fuel_cost_respects_price_overrides(make_vehicle):
    vehicle = make_vehicle(mpg=40)
    assert math.isclose(vehicle_fuel_cost(vehicle, 800, fuel_price=4.0), 80.0)


def test_co2_by_powertrain():
    assert math.isclose(co2_per_month(1000, Powertrain.GAS), 404)
    assert math.isclose(co2_per_month(1000, Powertrain.HYBRID), 250)
    assert math.isclose(co2_per_month(1000, Powertrain.EV), 180)


def test_vehicle_co2_prefers_catalog_grams(make_vehicle):
    vehicle = make_vehicle(co2_grams_per_mile=300)
    assert math.isclose(vehicle_co2_per_month(vehicle, 1000), 300)


def test_depreciation_is_monotone_and_bounded():
    """Cumulative loss grows every month and never exceeds the price"""
    values = [depreciation_by_month(30000, m, 60, 12000) for m in range(1, 61)]
    assert all(b > a for a, b in zip(values, values[1:]))
    assert all(0 <= v <= 30000 for v in values)


def test_depreciation_scales_with_mileage():
    low = depreciation_by_month(30000, 36, 60, 6000)
    base = depreciation_by_month(30000, 36, 60, 12000)
    high = depreciation_by_month(30000, 36, 60, 24000)
    assert low < base < high


def test_depreciation_usage_factor_is_clamped():
    """Extreme mileage cannot push the rate past twice the baseline"""
    extreme = depreciation_by_month(30000, 12, 60, 1_000_000)
    capped = depreciation_by_month(30000, 12, 60, 72000)
    assert math.isclose(extreme, capped)
    assert math.isclose(extreme, 30000 * 0.36)


def test_depreciation_degenerate_inputs():
    assert depreciation_by_month(0, 12, 60, 12000) == 0.0
    assert depreciation_by_month(30000, 0, 60, 12000) == 0.0


def test_maintenance_models(make_vehicle):
    assert model_year_maintenance(make_vehicle(year=2024), 1) == 75.0
    assert model_year_maintenance(make_vehicle(year=2022), 1) == 100.0
    assert math.isclose(baseline_maintenance(make_vehicle(maintenance_cost_per_year=600), 1), 50.0)
    assert math.isclose(baseline_maintenance(make_vehicle(), 1), 500 / 12)


def test_insurance_is_bounded():
    assert insurance_per_month(20000) == 150.0
    assert insurance_per_month(80000) == 200.0
    assert insurance_per_month(200000) == 250.0
