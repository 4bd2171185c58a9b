"""Running-cost models: fuel/energy, CO2, depreciation, maintenance, insurance"""

import math
from typing import Callable, Optional

from drivelens.domain.models import Powertrain, VehicleModel

DEFAULT_FUEL_PRICE = 3.5  # $/gallon
DEFAULT_KWH_PRICE = 0.13  # $/kWh
KWH_PER_GALLON_EQUIVALENT = 33.7
FALLBACK_MPG = 25.0

# kg CO2 per mile: tailpipe for Gas/Hybrid, US grid average for EV
CO2_KG_PER_MILE = {
    Powertrain.GAS: 0.404,
    Powertrain.HYBRID: 0.25,
    Powertrain.EV: 0.18,
}

BASELINE_ANNUAL_MILES = 12_000
BASELINE_ANNUAL_DEPRECIATION = 0.18
MAX_USAGE_FACTOR = 2.0

# (vehicle, month) -> maintenance dollars for that month
MaintenanceModel = Callable[[VehicleModel, int], float]


def monthly_fuel_cost(
    miles_per_month: float,
    mpg: Optional[float] = None,
    mpge: Optional[float] = None,
    fuel_price: float = DEFAULT_FUEL_PRICE,
    kwh_price: float = DEFAULT_KWH_PRICE,
) -> float:
    """
    Monthly fuel or electricity spend.

    A vehicle with MPGe but no usable mpg is treated as electric
    (33.7 kWh per gallon equivalent). Otherwise gallons are priced at the
    pump, assuming 25 mpg when the rating is missing.
    """
    if not math.isfinite(miles_per_month) or miles_per_month <= 0:
        return 0.0

    if (mpg is None or mpg <= 0) and mpge is not None and mpge > 0:
        kwh_per_mile = KWH_PER_GALLON_EQUIVALENT / mpge
        return miles_per_month * kwh_per_mile * kwh_price

    effective_mpg = mpg if mpg is not None and mpg > 0 else FALLBACK_MPG
    return miles_per_month / effective_mpg * fuel_price


def vehicle_fuel_cost(
    vehicle: VehicleModel,
    miles_per_month: float,
    fuel_price: float = DEFAULT_FUEL_PRICE,
    kwh_price: float = DEFAULT_KWH_PRICE,
) -> float:
    return monthly_fuel_cost(miles_per_month, vehicle.mpg, vehicle.mpge, fuel_price, kwh_price)


def co2_per_month(
    miles_per_month: float,
    powertrain: Powertrain,
    override_kg_per_mile: Optional[float] = None,
) -> float:
    """Kilograms of CO2 emitted per month of driving"""
    if not math.isfinite(miles_per_month) or miles_per_month <= 0:
        return 0.0
    kg_per_mile = override_kg_per_mile if override_kg_per_mile is not None else CO2_KG_PER_MILE[powertrain]
    return miles_per_month * kg_per_mile


def vehicle_co2_per_month(vehicle: VehicleModel, miles_per_month: float) -> float:
    override = vehicle.co2_grams_per_mile / 1000 if vehicle.co2_grams_per_mile else None
    return co2_per_month(miles_per_month, vehicle.powertrain, override)


def depreciation_by_month(msrp: float, month: int, total_months: int, annual_mileage: float) -> float:
    """
    Cumulative value lost by `month`, on an exponential decay curve.

    The 18% annual baseline rate scales by +/-20% per 12k miles of deviation
    from a 12k-mile year, with the usage factor held within [0, 2].
    """
    if msrp <= 0 or month <= 0 or total_months <= 0:
        return 0.0

    deviation = (annual_mileage - BASELINE_ANNUAL_MILES) / BASELINE_ANNUAL_MILES
    usage_factor = min(MAX_USAGE_FACTOR, max(0.0, 1 + deviation * 0.2))
    annual_rate = BASELINE_ANNUAL_DEPRECIATION * usage_factor
    monthly_rate = 1 - (1 - annual_rate) ** (1 / 12)

    value_now = msrp * (1 - monthly_rate) ** month
    return max(0.0, msrp - value_now)


def model_year_maintenance(vehicle: VehicleModel, month: int) -> float:
    """Newer model years cost less to keep up: $75/mo for 2024+, else $100/mo"""
    if vehicle.year is not None and vehicle.year >= 2024:
        return 75.0
    return 100.0


def baseline_maintenance(vehicle: VehicleModel, month: int) -> float:
    """Catalog maintenance figure spread over the year ($500/yr when unknown)"""
    return (vehicle.maintenance_cost_per_year or 500.0) / 12


def insurance_per_month(msrp: float) -> float:
    """Premium scaled to vehicle value, held between $150 and $250"""
    return min(250.0, max(150.0, msrp / 400))
