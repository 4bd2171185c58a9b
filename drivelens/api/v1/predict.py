"""POST /v1/predict - Lease, buy and credit-boost projections for one model"""

from fastapi import APIRouter, Depends, HTTPException

from drivelens.api.dependencies import get_catalog_provider
from drivelens.api.v1.schemas import HeadlineSchema, PredictRequest, PredictResponse, ScenariosSchema, VehicleSchema
from drivelens.config import settings
from drivelens.domain.exceptions import VehicleNotFoundError
from drivelens.domain.projector import build_scenario_series
from drivelens.infrastructure.catalog.provider import CatalogProvider

router = APIRouter()


@router.post("/predict", response_model=PredictResponse)
async def predict_scenarios(
    request_body: PredictRequest,
    provider: CatalogProvider = Depends(get_catalog_provider),
):
    """
    Month-by-month cost series for a named catalog model.

    Returns:
        404 when the model is not in the catalog
    """
    profile = request_body.to_profile()
    try:
        vehicle = await provider.find_model(request_body.model_name)
    except VehicleNotFoundError:
        raise HTTPException(status_code=404, detail="Model not found")

    series = build_scenario_series(
        profile,
        vehicle,
        fuel_price=settings.fuel_price_per_gallon,
        kwh_price=settings.price_per_kwh,
    )

    return PredictResponse(
        vehicle=VehicleSchema.model_validate(vehicle),
        scenarios=ScenariosSchema.model_validate(series),
        headline=HeadlineSchema.model_validate(series.headline),
    )
