"""POST /v1/recommend - Top catalog models for a profile"""

import time

from fastapi import APIRouter, Depends, Request

from drivelens.api.dependencies import get_catalog_provider, get_request_id
from drivelens.api.v1.schemas import CandidateSchema, ProfileRequest, RecommendResponse
from drivelens.config import settings
from drivelens.domain.scoring import recommend_catalog
from drivelens.infrastructure.catalog.provider import CatalogProvider
from drivelens.infrastructure.observability.logging import log_recommendation
from drivelens.infrastructure.observability.metrics import record_recommendation

router = APIRouter()


@router.post("/recommend", response_model=RecommendResponse)
async def recommend_models(
    request_body: ProfileRequest,
    request: Request,
    provider: CatalogProvider = Depends(get_catalog_provider),
):
    start_time = time.time()
    profile = request_body.to_profile()

    models = recommend_catalog(await provider.models(), profile, count=settings.catalog_recommendation_count)

    duration_ms = (time.time() - start_time) * 1000
    record_recommendation("catalog")
    log_recommendation(
        get_request_id(request),
        "catalog",
        len(models),
        models[0].vehicle.id if models else None,
        duration_ms,
    )

    return RecommendResponse(models=[CandidateSchema.model_validate(c) for c in models])
