"""POST /v1/calc - Stateless buy and lease payment calculator"""

from fastapi import APIRouter

from drivelens.api.v1.schemas import CalcRequest, CalcResponse
from drivelens.domain.amortization import financed_principal, lease_principal, monthly_payment
from drivelens.domain.rates import apr_from_credit

router = APIRouter()


@router.post("/calc", response_model=CalcResponse)
def calculate_payments(request_body: CalcRequest):
    """
    Monthly buy and lease payments for one price and credit score.

    The lease finances only the depreciated portion of the principal
    (principal x (1 - residual)) at the same APR.
    """
    apr = apr_from_credit(request_body.credit_score, request_body.base_apr)
    principal = financed_principal(request_body.car_price, request_body.down_payment)

    return CalcResponse(
        buy_monthly=monthly_payment(principal, apr, request_body.loan_months),
        lease_monthly=monthly_payment(
            lease_principal(principal, request_body.residual_pct), apr, request_body.lease_months
        ),
        apr=apr,
    )
