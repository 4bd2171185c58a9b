"""Five-year insights and comparative savings across a recommendation set"""

from dataclasses import dataclass
from typing import Dict, List, Sequence

from drivelens.domain.amortization import financed_principal
from drivelens.domain.costs import (
    DEFAULT_FUEL_PRICE,
    FALLBACK_MPG,
    MaintenanceModel,
    insurance_per_month,
    model_year_maintenance,
)
from drivelens.domain.credit_impact import predict_credit_impact
from drivelens.domain.exceptions import VehicleNotFoundError
from drivelens.domain.models import (
    CostBreakdown,
    CreditImpact,
    FiveYearProjection,
    MonthlyBreakdown,
    OptionComparison,
    Powertrain,
    RecommendationNarrative,
    SavingsAnalysis,
    UserProfile,
    VehicleInsight,
    VehicleModel,
)

PROJECTION_MONTHS = 60
EV_COST_PER_MILE = 0.04
AVERAGE_CAR_FIVE_YEAR_COST = 45_000
COMPARISONS_PER_VEHICLE = 2


@dataclass
class Selection:
    """A vehicle already chosen by the recommender, with its payment and rank"""

    vehicle_id: str
    monthly_payment: float
    rank: int


def calculate_five_year_projection(
    vehicle: VehicleModel,
    profile: UserProfile,
    payment: float,
    maintenance: MaintenanceModel = model_year_maintenance,
    fuel_price: float = DEFAULT_FUEL_PRICE,
) -> FiveYearProjection:
    principal = financed_principal(vehicle.msrp, profile.down_payment)
    total_paid = payment * PROJECTION_MONTHS
    interest = max(0.0, total_paid - principal)

    annual_miles = profile.annual_miles
    if vehicle.powertrain is Powertrain.EV:
        fuel_total = annual_miles * EV_COST_PER_MILE * 5
    else:
        mpg = vehicle.combined_economy or FALLBACK_MPG
        fuel_total = annual_miles / mpg * fuel_price * 5

    insurance_monthly = insurance_per_month(vehicle.msrp)
    insurance_total = insurance_monthly * PROJECTION_MONTHS
    maintenance_total = sum(maintenance(vehicle, m) for m in range(1, PROJECTION_MONTHS + 1))
    maintenance_monthly = maintenance_total / PROJECTION_MONTHS
    fuel_monthly = fuel_total / PROJECTION_MONTHS

    return FiveYearProjection(
        total_cost=round(total_paid + fuel_total + insurance_total + maintenance_total),
        monthly_breakdown=MonthlyBreakdown(
            payment=round(payment),
            insurance=round(insurance_monthly),
            fuel=round(fuel_monthly),
            maintenance=round(maintenance_monthly),
            total=round(payment + insurance_monthly + fuel_monthly + maintenance_monthly),
        ),
        breakdown=CostBreakdown(
            principal=round(principal),
            interest=round(interest),
            fuel=round(fuel_total),
            insurance=round(insurance_total),
            maintenance=round(maintenance_total),
        ),
    )


def calculate_savings_analysis(
    vehicle: VehicleModel,
    projection: FiveYearProjection,
    totals: Dict[str, int],
    names: Dict[str, str],
) -> SavingsAnalysis:
    """Compare against a $45k average car and the two closest-cost alternatives"""
    others = [(vid, total) for vid, total in totals.items() if vid != vehicle.id]
    nearest = sorted(others, key=lambda item: abs(item[1] - projection.total_cost))[:COMPARISONS_PER_VEHICLE]

    return SavingsAnalysis(
        vs_average_car=round(AVERAGE_CAR_FIVE_YEAR_COST - projection.total_cost),
        vs_average_category="fuel" if vehicle.is_electrified else "overall",
        vs_other_options=[
            OptionComparison(compared_to=names[vid], amount=round(projection.total_cost - total))
            for vid, total in nearest
        ],
    )


def generate_recommendation(
    vehicle: VehicleModel,
    profile: UserProfile,
    projection: FiveYearProjection,
    credit_impact: CreditImpact,
    is_top_choice: bool,
) -> RecommendationNarrative:
    pros: List[str] = []
    cons: List[str] = []

    if projection.monthly_breakdown.total < profile.total_income * 0.12:
        pros.append("Very affordable monthly cost")
    else:
        cons.append("Higher monthly commitment")

    if vehicle.powertrain is Powertrain.EV:
        pros.append("Zero fuel costs (electric)")
    elif vehicle.combined_economy >= 40:
        pros.append("Excellent fuel economy")
    elif vehicle.combined_economy < 25:
        cons.append("Lower fuel efficiency")

    if credit_impact.level == "excellent":
        pros.append("Excellent credit building potential")
    elif credit_impact.level == "good":
        pros.append("Good credit building potential")

    if vehicle.safety_rating == 5:
        pros.append("Top safety rating")

    path = profile.finance_path
    if path == "lease" and vehicle.year is not None and vehicle.year >= 2024:
        pros.append("Great lease option (new model)")
    elif path == "buy" and vehicle.powertrain is Powertrain.HYBRID:
        pros.append("Strong resale value")
    elif path == "credit-build" and projection.monthly_breakdown.payment < 400:
        pros.append("Perfect for credit building")

    if is_top_choice:
        benefit = "credit building" if credit_impact.level == "excellent" else "financial"
        reason = f"Best overall match for your {path} path with strong {benefit} benefits."
    else:
        cost_word = "affordable" if projection.monthly_breakdown.total < 600 else "competitive"
        reason = f"Solid alternative offering good value with {cost_word} monthly costs."

    return RecommendationNarrative(is_top_choice=is_top_choice, reason=reason, pros=pros, cons=cons)


def build_insights(
    profile: UserProfile,
    catalog: Sequence[VehicleModel],
    selections: Sequence[Selection],
    maintenance: MaintenanceModel = model_year_maintenance,
    fuel_price: float = DEFAULT_FUEL_PRICE,
) -> List[VehicleInsight]:
    """
    Per-vehicle insights for an already-ranked recommendation set.

    The lowest-ranked selection (first on ties) is the single top choice.

    Raises:
        VehicleNotFoundError: a selection names a vehicle absent from the catalog
    """
    by_id = {v.id: v for v in catalog}
    for selection in selections:
        if selection.vehicle_id not in by_id:
            raise VehicleNotFoundError(selection.vehicle_id)
    if not selections:
        return []

    projections = {
        s.vehicle_id: calculate_five_year_projection(
            by_id[s.vehicle_id], profile, s.monthly_payment, maintenance, fuel_price
        )
        for s in selections
    }
    totals = {vid: p.total_cost for vid, p in projections.items()}
    names = {vid: f"{by_id[vid].year or ''} {by_id[vid].model_family}".strip() for vid in projections}
    top = min(range(len(selections)), key=lambda i: selections[i].rank)

    insights: List[VehicleInsight] = []
    for index, selection in enumerate(selections):
        vehicle = by_id[selection.vehicle_id]
        projection = projections[selection.vehicle_id]
        credit_impact = predict_credit_impact(profile, selection.monthly_payment)
        insights.append(
            VehicleInsight(
                vehicle_id=vehicle.id,
                vehicle_name=vehicle.display_name,
                finance_path=profile.finance_path,
                five_year_projection=projection,
                credit_impact=credit_impact,
                savings_analysis=calculate_savings_analysis(vehicle, projection, totals, names),
                recommendation=generate_recommendation(
                    vehicle, profile, projection, credit_impact, is_top_choice=index == top
                ),
            )
        )
    return insights
