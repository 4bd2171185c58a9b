"""POST /v1/plan - Recommend, project and narrate in one call"""

import time

from fastapi import APIRouter, Depends, Request

from drivelens.api.dependencies import get_catalog_provider, get_narration_client, get_request_id
from drivelens.api.v1.schemas import CandidateSchema, HeadlineSchema, PlanResponse, ProfileRequest, ScenariosSchema
from drivelens.config import settings
from drivelens.domain.planning import build_plan
from drivelens.infrastructure.catalog.provider import CatalogProvider
from drivelens.infrastructure.clients.narration import NarrationClient
from drivelens.infrastructure.observability.logging import log_recommendation
from drivelens.infrastructure.observability.metrics import record_recommendation

router = APIRouter()


@router.post("/plan", response_model=PlanResponse)
async def create_plan(
    request_body: ProfileRequest,
    request: Request,
    provider: CatalogProvider = Depends(get_catalog_provider),
    narrator: NarrationClient = Depends(get_narration_client),
):
    """
    Flow:
    1. Score the model catalog and pick the top match
    2. Project lease, buy and credit-boost series for it
    3. Narrate the lease/buy totals (fallback text when the model is unavailable)
    """
    start_time = time.time()
    profile = request_body.to_profile()

    plan = build_plan(
        profile,
        await provider.models(),
        count=settings.catalog_recommendation_count,
        fuel_price=settings.fuel_price_per_gallon,
        kwh_price=settings.price_per_kwh,
    )
    narration = await narrator.narrate(plan.narration_prompt) if plan.narration_prompt else None

    duration_ms = (time.time() - start_time) * 1000
    record_recommendation("catalog")
    log_recommendation(
        get_request_id(request),
        "plan",
        len(plan.models),
        plan.chosen.vehicle.id if plan.chosen else None,
        duration_ms,
    )

    return PlanResponse(
        models=[CandidateSchema.model_validate(c) for c in plan.models],
        chosen=CandidateSchema.model_validate(plan.chosen) if plan.chosen else None,
        scenarios=ScenariosSchema.model_validate(plan.scenarios) if plan.scenarios else None,
        headline=HeadlineSchema.model_validate(plan.scenarios.headline) if plan.scenarios else None,
        lease_total=plan.lease_total,
        buy_total=plan.buy_total,
        summary=plan.summary,
        narration=narration,
    )
