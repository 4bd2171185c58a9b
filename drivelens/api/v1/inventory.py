"""POST /v1/inventory/recommend - Eligibility-gated inventory recommendations"""

import time

from fastapi import APIRouter, Depends, Request

from drivelens.api.dependencies import get_catalog_provider, get_request_id
from drivelens.api.v1.schemas import (
    CandidateSchema,
    EligibilityResponse,
    InventoryRecommendResponse,
    ProfileRequest,
)
from drivelens.config import settings
from drivelens.domain.eligibility import check_eligibility
from drivelens.domain.scoring import max_affordable_payment, recommend_inventory
from drivelens.infrastructure.catalog.provider import CatalogProvider
from drivelens.infrastructure.observability.logging import log_eligibility, log_recommendation
from drivelens.infrastructure.observability.metrics import record_eligibility, record_recommendation

router = APIRouter()


@router.post("/inventory/recommend", response_model=InventoryRecommendResponse)
def recommend_inventory_vehicles(
    request_body: ProfileRequest,
    request: Request,
    provider: CatalogProvider = Depends(get_catalog_provider),
):
    """
    Flow:
    1. Run the eligibility gate; stop with no recommendations if it fails
    2. Filter the inventory by powertrain preference and usage
    3. Score every vehicle and pick a diverse (or plain top-n) set
    """
    start_time = time.time()
    request_id = get_request_id(request)
    profile = request_body.to_profile()

    eligibility = check_eligibility(profile)
    record_eligibility(eligibility.eligible)
    log_eligibility(request_id, eligibility.eligible, eligibility.reason)

    if not eligibility.eligible:
        return InventoryRecommendResponse(
            eligibility=EligibilityResponse.model_validate(eligibility),
            recommendations=[],
            max_monthly_payment=max_affordable_payment(profile),
        )

    result = recommend_inventory(
        provider.inventory(),
        profile,
        strategy=settings.recommender_strategy,
        count=settings.recommendation_count,
        max_per_model=settings.max_trims_per_model,
        fuel_price=settings.fuel_price_per_gallon,
        kwh_price=settings.price_per_kwh,
    )

    duration_ms = (time.time() - start_time) * 1000
    record_recommendation("inventory")
    log_recommendation(
        request_id,
        "inventory",
        len(result.recommendations),
        result.recommendations[0].vehicle.id if result.recommendations else None,
        duration_ms,
    )

    return InventoryRecommendResponse(
        eligibility=EligibilityResponse.model_validate(eligibility),
        recommendations=[CandidateSchema.model_validate(c) for c in result.recommendations],
        max_monthly_payment=result.max_monthly_payment,
        average_competitor_cost=result.average_competitor_cost,
    )
