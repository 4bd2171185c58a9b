"""POST /v1/insights - Five-year projections and credit impact per recommended vehicle"""

from fastapi import APIRouter, Depends, HTTPException

from drivelens.api.dependencies import get_catalog_provider
from drivelens.api.v1.schemas import InsightsRequest, InsightsResponse, VehicleInsightSchema
from drivelens.config import settings
from drivelens.domain.exceptions import VehicleNotFoundError
from drivelens.domain.insights import Selection, build_insights
from drivelens.infrastructure.catalog.provider import CatalogProvider

router = APIRouter()


@router.post("/insights", response_model=InsightsResponse)
def get_insights(
    request_body: InsightsRequest,
    provider: CatalogProvider = Depends(get_catalog_provider),
):
    """
    Returns:
        One insight per submitted vehicle; 404 when an id is not in the inventory
    """
    profile = request_body.to_profile()
    selections = [
        Selection(vehicle_id=v.vehicle_id, monthly_payment=v.monthly_payment, rank=v.rank)
        for v in request_body.vehicles
    ]

    try:
        insights = build_insights(
            profile, provider.inventory(), selections, fuel_price=settings.fuel_price_per_gallon
        )
    except VehicleNotFoundError as e:
        raise HTTPException(status_code=404, detail=f"Vehicle not found: {e.vehicle_id}")

    return InsightsResponse(insights=[VehicleInsightSchema.model_validate(i) for i in insights])
