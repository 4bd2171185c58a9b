"""Vehicle scoring engine - ranks catalog vehicles against a user profile"""

from collections import Counter
from dataclasses import dataclass, replace
from typing import Iterable, List, Optional, Sequence, Tuple

from drivelens.domain.amortization import financed_principal, monthly_payment
from drivelens.domain.costs import (
    DEFAULT_FUEL_PRICE,
    DEFAULT_KWH_PRICE,
    KWH_PER_GALLON_EQUIVALENT,
    baseline_maintenance,
    monthly_fuel_cost,
)
from drivelens.domain.models import (
    CostAnalysis,
    Powertrain,
    RecommendationSet,
    ScoredCandidate,
    UserProfile,
    VehicleModel,
)
from drivelens.domain.rates import apr_for_profile, apr_from_band, credit_multiplier

ESTIMATE_TERM_MONTHS = 60
PAYMENT_SHARE_OF_INCOME = 0.12
DEFAULT_BUDGET_SHARE = 0.15
INVENTORY_EV_KWH_PER_MILE = 0.33
OWNERSHIP_YEARS = 5


@dataclass(frozen=True)
class ScoringWeights:
    """
    Weight table for one catalog shape. A zero weight disables its factor.

    The inventory table rewards affordability, efficiency, fit and finance
    path; the model-catalog table scores distance from the monthly budget
    plus preference matches.
    """

    name: str
    payment_estimate: str = "banded"  # "banded" | "credit_adjusted"
    budget_distance: bool = False
    affordability: float = 0.0
    over_budget_penalty: float = 0.0
    ev_efficiency: float = 0.0
    hybrid_efficiency: float = 0.0
    gas_efficiency: float = 0.0
    high_mileage_bonus: float = 0.0
    powertrain_match: float = 0.0
    body_match: float = 0.0
    family_suv: float = 0.0
    young_compact: float = 0.0
    safety_five_star: float = 0.0
    safety_four_star: float = 0.0
    target_payment_match: float = 0.0
    lease_new_model: float = 0.0
    lease_electrified: float = 0.0
    buy_hybrid_resale: float = 0.0
    buy_efficient: float = 0.0
    eco_hybrid: float = 0.0
    eco_ev: float = 0.0
    include_cost_analysis: bool = False


INVENTORY_WEIGHTS = ScoringWeights(
    name="inventory",
    payment_estimate="banded",
    affordability=40,
    over_budget_penalty=50,
    ev_efficiency=30,
    hybrid_efficiency=25,
    gas_efficiency=20,
    high_mileage_bonus=10,
    powertrain_match=20,
    body_match=20,
    family_suv=15,
    young_compact=10,
    safety_five_star=10,
    safety_four_star=5,
    target_payment_match=15,
    lease_new_model=10,
    lease_electrified=5,
    buy_hybrid_resale=10,
    buy_efficient=5,
    include_cost_analysis=True,
)

CATALOG_WEIGHTS = ScoringWeights(
    name="catalog",
    payment_estimate="credit_adjusted",
    budget_distance=True,
    powertrain_match=50,
    body_match=25,
    eco_hybrid=10,
    eco_ev=20,
)


def estimate_monthly_payment(vehicle: VehicleModel, profile: UserProfile, weights: ScoringWeights) -> float:
    """
    Loan payment used for scoring.

    - banded: band APR over 60 months, rounded to whole dollars
    - credit_adjusted: vehicle base APR adjusted by credit, over the
      profile's loan term
    """
    principal = financed_principal(vehicle.msrp, profile.down_payment)
    if weights.payment_estimate == "banded":
        return float(round(monthly_payment(principal, apr_from_band(profile.band), ESTIMATE_TERM_MONTHS)))
    apr = apr_for_profile(profile, vehicle.apr_base)
    return monthly_payment(principal, apr, profile.loan_term_months)


def max_affordable_payment(profile: UserProfile) -> float:
    """12% of household income, stretched or shrunk by credit band"""
    return profile.total_income * PAYMENT_SHARE_OF_INCOME * credit_multiplier(profile.band)


def target_budget(profile: UserProfile) -> float:
    if profile.monthly_budget is not None:
        return profile.monthly_budget
    return profile.total_income * DEFAULT_BUDGET_SHARE


def calculate_total_cost(
    vehicle: VehicleModel,
    payment: float,
    daily_miles: float,
    term_months: int = ESTIMATE_TERM_MONTHS,
    fuel_price: float = DEFAULT_FUEL_PRICE,
    kwh_price: float = DEFAULT_KWH_PRICE,
) -> CostAnalysis:
    """Five-year cost of ownership net of resale value"""
    months = OWNERSHIP_YEARS * 12
    miles_per_month = daily_miles * 365 / 12

    if vehicle.powertrain is Powertrain.EV:
        fuel_monthly = monthly_fuel_cost(
            miles_per_month,
            mpge=KWH_PER_GALLON_EQUIVALENT / INVENTORY_EV_KWH_PER_MILE,
            kwh_price=kwh_price,
        )
    else:
        fuel_monthly = monthly_fuel_cost(miles_per_month, vehicle.combined_economy, fuel_price=fuel_price)

    total_purchase = payment * term_months
    total_fuel = fuel_monthly * months
    total_maintenance = sum(baseline_maintenance(vehicle, m) for m in range(1, months + 1))
    total_insurance = (vehicle.insurance_cost_per_month or 150.0) * months
    total = total_purchase + total_fuel + total_maintenance + total_insurance
    resale = vehicle.msrp * (vehicle.resale_value_percent or 50.0) / 100

    return CostAnalysis(
        total_purchase_cost=total_purchase,
        total_fuel_cost=total_fuel,
        total_maintenance_cost=total_maintenance,
        total_insurance_cost=total_insurance,
        total_cost=total,
        resale_value=resale,
        net_cost=total - resale,
    )


def efficiency_points(vehicle: VehicleModel, weights: ScoringWeights) -> float:
    if vehicle.powertrain is Powertrain.EV:
        return weights.ev_efficiency
    if vehicle.powertrain is Powertrain.HYBRID:
        return weights.hybrid_efficiency
    return min(vehicle.combined_economy / 40, 1.0) * weights.gas_efficiency


def score_vehicle(
    vehicle: VehicleModel,
    profile: UserProfile,
    weights: ScoringWeights = INVENTORY_WEIGHTS,
    fuel_price: float = DEFAULT_FUEL_PRICE,
    kwh_price: float = DEFAULT_KWH_PRICE,
) -> ScoredCandidate:
    """
    Additive weighted score of one vehicle for one profile.

    Each factor contributes independently; reasons are appended in a fixed
    factor order so output is deterministic.
    """
    payment = estimate_monthly_payment(vehicle, profile, weights)

    factors = (
        _budget_distance(payment, profile, weights),
        _affordability(payment, profile, weights),
        _efficiency(vehicle, profile, weights),
        _powertrain_match(vehicle, profile, weights),
        _body_fit(vehicle, profile, weights),
        _safety(vehicle, weights),
        _target_payment(payment, profile, weights),
        _finance_path(vehicle, profile, weights),
        _eco_goal(vehicle, profile, weights),
    )

    score = 0.0
    reasons: List[str] = []
    for points, factor_reasons in factors:
        score += points
        reasons.extend(factor_reasons)

    cost_analysis = None
    if weights.include_cost_analysis:
        cost_analysis = calculate_total_cost(
            vehicle, payment, profile.daily_mileage, fuel_price=fuel_price, kwh_price=kwh_price
        )

    return ScoredCandidate(
        vehicle=vehicle,
        monthly_payment=payment,
        score=score,
        reasons=reasons,
        cost_analysis=cost_analysis,
    )


def rank_candidates(candidates: Iterable[ScoredCandidate]) -> List[ScoredCandidate]:
    """Highest score first; ties keep catalog order"""
    return sorted(candidates, key=lambda c: -c.score)


def recommend_top_n(candidates: Iterable[ScoredCandidate], n: int) -> List[ScoredCandidate]:
    return _with_ranks(rank_candidates(candidates)[:n])


def recommend_diverse(
    candidates: Iterable[ScoredCandidate],
    n: int = 5,
    max_per_model: int = 2,
    backfill: Iterable[ScoredCandidate] = (),
) -> List[ScoredCandidate]:
    """
    Top-n selection that keeps at most `max_per_model` trims of one model.

    When the capped pass finds fewer than n, the backfill candidates (vehicles
    the pool filters excluded) are drawn in score order under the same cap.
    """
    counts: Counter = Counter()
    selected: List[ScoredCandidate] = []

    for pool in (rank_candidates(candidates), rank_candidates(backfill)):
        for candidate in pool:
            if len(selected) >= n:
                break
            family = candidate.vehicle.model_family
            if counts[family] >= max_per_model:
                continue
            counts[family] += 1
            selected.append(candidate)

    return _with_ranks(selected)


def filter_pool(catalog: Sequence[VehicleModel], profile: UserProfile) -> List[VehicleModel]:
    """Apply the hard filters: powertrain preference and usage"""
    pool = list(catalog)
    if profile.preferred_powertrain is not None:
        pool = [v for v in pool if v.powertrain is profile.preferred_powertrain]
    if profile.usage == "haul":
        pool = [v for v in pool if v.body == "truck" or (v.horsepower or 0) >= 250]
    if profile.usage == "family":
        pool = [v for v in pool if v.body == "suv" or (v.seats or 0) >= 5]
    return pool


def recommend_inventory(
    catalog: Sequence[VehicleModel],
    profile: UserProfile,
    *,
    weights: ScoringWeights = INVENTORY_WEIGHTS,
    strategy: str = "diverse",
    count: int = 5,
    max_per_model: int = 2,
    fuel_price: float = DEFAULT_FUEL_PRICE,
    kwh_price: float = DEFAULT_KWH_PRICE,
) -> RecommendationSet:
    """Score the filtered inventory and pick the recommendation set"""
    pool_ids = {v.id for v in filter_pool(catalog, profile)}
    scored = [score_vehicle(v, profile, weights, fuel_price, kwh_price) for v in catalog]
    in_pool = [c for c in scored if c.vehicle.id in pool_ids]
    excluded = [c for c in scored if c.vehicle.id not in pool_ids]

    if strategy == "top_n":
        recommendations = recommend_top_n(in_pool, count)
    else:
        recommendations = recommend_diverse(in_pool, count, max_per_model, backfill=excluded)

    chosen_ids = {c.vehicle.id for c in recommendations}
    others = [c for c in in_pool if c.vehicle.id not in chosen_ids and c.cost_analysis is not None]
    average_competitor_cost: Optional[float] = None
    if others:
        average_competitor_cost = sum(c.cost_analysis.net_cost for c in others) / len(others)

    return RecommendationSet(
        recommendations=recommendations,
        max_monthly_payment=max_affordable_payment(profile),
        average_competitor_cost=average_competitor_cost,
    )


def recommend_catalog(
    catalog: Sequence[VehicleModel],
    profile: UserProfile,
    *,
    weights: ScoringWeights = CATALOG_WEIGHTS,
    count: int = 3,
) -> List[ScoredCandidate]:
    """Model-catalog recommender: plain top-n by score"""
    return recommend_top_n((score_vehicle(v, profile, weights) for v in catalog), count)


def _with_ranks(candidates: List[ScoredCandidate]) -> List[ScoredCandidate]:
    return [replace(c, rank=i + 1) for i, c in enumerate(candidates)]


Factor = Tuple[float, List[str]]


def _budget_distance(payment: float, profile: UserProfile, weights: ScoringWeights) -> Factor:
    if not weights.budget_distance:
        return 0.0, []
    budget = target_budget(profile)
    # closer is better, in raw dollars
    return -abs(payment - budget), [f"Est. monthly ~ ${payment:.0f} vs budget ${budget:.0f}"]


def _affordability(payment: float, profile: UserProfile, weights: ScoringWeights) -> Factor:
    if not weights.affordability and not weights.over_budget_penalty:
        return 0.0, []
    max_payment = max_affordable_payment(profile)
    if payment <= 0:
        return weights.affordability, ["Well within budget"]
    if payment > max_payment:
        return -weights.over_budget_penalty, []

    ratio = payment / max_payment
    reason = "Well within budget" if ratio < 0.8 else "Fits your budget"
    return (1 - ratio) * weights.affordability, [reason]


def _efficiency(vehicle: VehicleModel, profile: UserProfile, weights: ScoringWeights) -> Factor:
    if not (weights.ev_efficiency or weights.hybrid_efficiency or weights.gas_efficiency):
        return 0.0, []

    points = efficiency_points(vehicle, weights)
    reasons: List[str] = []
    if vehicle.powertrain is Powertrain.EV:
        if profile.annual_miles > 15_000:
            reasons.append("Electric = major savings on high mileage")
        else:
            reasons.append("Zero emissions")
    elif vehicle.powertrain is Powertrain.HYBRID:
        if vehicle.combined_economy >= 40:
            reasons.append("Exceptional fuel economy")
        else:
            reasons.append("Great hybrid efficiency")
    elif vehicle.combined_economy >= 30:
        reasons.append("Good fuel economy")

    if profile.daily_mileage > 50 and vehicle.is_electrified:
        points += weights.high_mileage_bonus
        reasons.append("Perfect for your daily commute")

    return points, reasons


def _powertrain_match(vehicle: VehicleModel, profile: UserProfile, weights: ScoringWeights) -> Factor:
    if not weights.powertrain_match or profile.preferred_powertrain is None:
        return 0.0, []
    if vehicle.powertrain is profile.preferred_powertrain:
        return weights.powertrain_match, ["Matches your preferred powertrain"]
    return 0.0, []


def _body_fit(vehicle: VehicleModel, profile: UserProfile, weights: ScoringWeights) -> Factor:
    if profile.preferred_body is not None:
        if weights.body_match and vehicle.body == profile.preferred_body:
            return weights.body_match, [f"Matches your {profile.preferred_body} preference"]
        return 0.0, []

    # no stated preference: infer from age and household size
    points = 0.0
    reasons: List[str] = []
    age = profile.age
    if age is None:
        return points, reasons
    if weights.family_suv and age > 35 and vehicle.body == "suv" and (vehicle.seats or 0) >= 7:
        points += weights.family_suv
        reasons.append("Spacious family vehicle")
    if weights.young_compact and age < 30 and vehicle.body in ("sedan", "hatchback"):
        points += weights.young_compact
        reasons.append("Great for young professionals")
    return points, reasons


def _safety(vehicle: VehicleModel, weights: ScoringWeights) -> Factor:
    if vehicle.safety_rating == 5 and weights.safety_five_star:
        return weights.safety_five_star, ["5-star safety rating"]
    if vehicle.safety_rating == 4:
        return weights.safety_four_star, []
    return 0.0, []


def _target_payment(payment: float, profile: UserProfile, weights: ScoringWeights) -> Factor:
    budget = profile.monthly_budget
    if not weights.target_payment_match or not budget:
        return 0.0, []
    if abs(payment - budget) < budget * 0.1:
        return weights.target_payment_match, ["Matches your target payment"]
    return 0.0, []


def _finance_path(vehicle: VehicleModel, profile: UserProfile, weights: ScoringWeights) -> Factor:
    points = 0.0
    reasons: List[str] = []
    if profile.finance_path == "lease":
        if weights.lease_new_model and vehicle.year is not None and vehicle.year >= 2024:
            points += weights.lease_new_model
            reasons.append("Great lease option")
        if weights.lease_electrified and vehicle.is_electrified:
            points += weights.lease_electrified
            reasons.append("Strong lease incentives")
    elif profile.finance_path == "buy":
        if weights.buy_hybrid_resale and vehicle.powertrain is Powertrain.HYBRID:
            points += weights.buy_hybrid_resale
            reasons.append("Excellent resale value")
        if weights.buy_efficient and vehicle.combined_economy >= 35:
            points += weights.buy_efficient
            reasons.append("Long-term fuel savings")
    return points, reasons


def _eco_goal(vehicle: VehicleModel, profile: UserProfile, weights: ScoringWeights) -> Factor:
    if profile.goal != "eco":
        return 0.0, []
    if vehicle.powertrain is Powertrain.HYBRID:
        return weights.eco_hybrid, []
    if vehicle.powertrain is Powertrain.EV:
        return weights.eco_ev, []
    return 0.0, []
