"""POST /v1/analysis - Profile segment, heuristic scores and credit trajectory"""

from fastapi import APIRouter, Depends, HTTPException

from drivelens.api.dependencies import get_catalog_provider
from drivelens.api.v1.schemas import AnalysisRequest, AnalysisResponse, CreditImpactSchema
from drivelens.domain.credit_impact import predict_credit_impact
from drivelens.domain.exceptions import VehicleNotFoundError
from drivelens.domain.models import Powertrain, VehicleModel
from drivelens.domain.profiling import analyze_profile
from drivelens.domain.scoring import INVENTORY_WEIGHTS, estimate_monthly_payment
from drivelens.infrastructure.catalog.provider import CatalogProvider

router = APIRouter()


def vehicle_type_label(vehicle: VehicleModel) -> str:
    """e.g. "suv hybrid", "sedan electric" """
    drive = "electric" if vehicle.powertrain is Powertrain.EV else vehicle.powertrain.value.lower()
    return f"{vehicle.body} {drive}"


@router.post("/analysis", response_model=AnalysisResponse)
def analyze(
    request_body: AnalysisRequest,
    provider: CatalogProvider = Depends(get_catalog_provider),
):
    """
    Without a vehicle only the profile-level scores are returned. With a
    vehicle id the affordability and lifestyle scores are added, and the
    credit trajectory uses the submitted payment (or an estimate for that
    vehicle).
    """
    profile = request_body.to_profile()

    vehicle = None
    if request_body.vehicle_id:
        try:
            vehicle = provider.find_vehicle(request_body.vehicle_id)
        except VehicleNotFoundError:
            raise HTTPException(status_code=404, detail=f"Vehicle not found: {request_body.vehicle_id}")

    payment = request_body.monthly_payment
    if payment is None and vehicle is not None:
        payment = estimate_monthly_payment(vehicle, profile, INVENTORY_WEIGHTS)

    analysis = analyze_profile(
        profile,
        vehicle_price=vehicle.msrp if vehicle else None,
        vehicle_type=vehicle_type_label(vehicle) if vehicle else None,
        monthly_payment_estimate=payment or 0.0,
    )

    response = AnalysisResponse.model_validate(analysis)
    if payment is not None:
        impact = predict_credit_impact(profile, payment)
        response = response.model_copy(update={"credit_impact": CreditImpactSchema.model_validate(impact)})
    return response
