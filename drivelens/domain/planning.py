"""Lease-vs-buy plan for the best catalog match, with a narration prompt"""

from dataclasses import dataclass
from typing import List, Optional, Sequence

from drivelens.domain.models import ScenarioSeries, ScoredCandidate, UserProfile, VehicleModel
from drivelens.domain.projector import build_scenario_series, series_total
from drivelens.domain.scoring import CATALOG_WEIGHTS, ScoringWeights, recommend_catalog


@dataclass
class Plan:
    models: List[ScoredCandidate]
    chosen: Optional[ScoredCandidate]
    scenarios: Optional[ScenarioSeries]
    lease_total: float
    buy_total: float
    summary: str
    narration_prompt: Optional[str] = None


def build_plan(
    profile: UserProfile,
    catalog: Sequence[VehicleModel],
    weights: ScoringWeights = CATALOG_WEIGHTS,
    count: int = 3,
    **projection_options,
) -> Plan:
    """Recommend, project the top model and summarise lease against buy"""
    models = recommend_catalog(catalog, profile, weights=weights, count=count)
    if not models:
        return Plan(models=[], chosen=None, scenarios=None, lease_total=0.0, buy_total=0.0, summary="No models available.")

    chosen = models[0]
    scenarios = build_scenario_series(profile, chosen.vehicle, **projection_options)
    lease_total = series_total(scenarios.lease)
    buy_total = series_total(scenarios.buy)

    summary = (
        f"If you lease the {chosen.vehicle.name}, your total cost after {profile.lease_term_months} months "
        f"is around ${lease_total:.0f}, saving ~${buy_total - lease_total:.0f} compared to buying."
    )
    credit = profile.credit_score if profile.credit_score is not None else profile.band
    prompt = (
        "User profile:\n"
        f"- Credit Score: {credit}\n"
        f"- Monthly Income: ${profile.monthly_income:.0f}\n"
        f"Car: {chosen.vehicle.name}\n"
        f"Lease Total: ${lease_total:.0f}\n"
        f"Buy Total: ${buy_total:.0f}\n"
        "Goal: Explain to a normal person what this means and which is smarter."
    )

    return Plan(
        models=models,
        chosen=chosen,
        scenarios=scenarios,
        lease_total=lease_total,
        buy_total=buy_total,
        summary=summary,
        narration_prompt=prompt,
    )
