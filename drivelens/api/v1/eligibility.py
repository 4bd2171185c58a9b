"""POST /v1/eligibility - Affordability pre-check"""

from fastapi import APIRouter, Request

from drivelens.api.dependencies import get_request_id
from drivelens.api.v1.schemas import EligibilityResponse, ProfileRequest
from drivelens.domain.eligibility import check_eligibility
from drivelens.infrastructure.observability.logging import log_eligibility
from drivelens.infrastructure.observability.metrics import record_eligibility

router = APIRouter()


@router.post("/eligibility", response_model=EligibilityResponse)
def check_profile_eligibility(request_body: ProfileRequest, request: Request):
    """Ineligible profiles get 200 with eligible=false and suggested actions"""
    result = check_eligibility(request_body.to_profile())

    record_eligibility(result.eligible)
    log_eligibility(get_request_id(request), result.eligible, result.reason)

    return EligibilityResponse.model_validate(result)
