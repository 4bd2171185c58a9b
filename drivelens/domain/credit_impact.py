"""Credit-score impact of taking on a car payment"""

import math
from typing import List

from drivelens.domain.models import CreditImpact, CreditTrajectoryPoint, UserProfile

MAX_CREDIT_SCORE = 850
ON_TIME_PAYMENT_GAIN = 35
CREDIT_BUILD_BONUS = 10

IMPACT_EXPLANATIONS = {
    "excellent": (
        "This payment is very manageable for your income, allowing consistent on-time payments "
        "that significantly boost your credit score."
    ),
    "good": (
        "This payment fits comfortably in your budget, enabling reliable payments that improve "
        "your credit score steadily."
    ),
    "moderate": (
        "This payment is at the upper range of affordability. Consistent payments will improve "
        "credit, but budget carefully."
    ),
    "minimal": (
        "This payment stretches your budget. While it can still build credit, there's higher "
        "risk of missed payments."
    ),
}


def payment_to_income_ratio(profile: UserProfile, monthly_payment: float) -> float:
    income = profile.total_income
    if income <= 0:
        return math.inf
    return monthly_payment / income


def predict_credit_impact(profile: UserProfile, monthly_payment: float) -> CreditImpact:
    """
    Project credit score after 12 and 60 months of on-time payments.

    A base gain of 35 points is adjusted by payment-to-income ratio:
    <10% +15 (excellent), <15% +0 (good), <20% -10 (moderate), else -25
    (minimal). The credit-build path earns 10 more. Projections cap at 850.
    """
    current = profile.numeric_score
    ratio = payment_to_income_ratio(profile, monthly_payment)

    if ratio < 0.10:
        delta, level = ON_TIME_PAYMENT_GAIN + 15, "excellent"
    elif ratio < 0.15:
        delta, level = ON_TIME_PAYMENT_GAIN, "good"
    elif ratio < 0.20:
        delta, level = ON_TIME_PAYMENT_GAIN - 10, "moderate"
    else:
        delta, level = ON_TIME_PAYMENT_GAIN - 25, "minimal"

    if profile.finance_path == "credit-build":
        delta += CREDIT_BUILD_BONUS

    return CreditImpact(
        current_score=current,
        current_band=profile.band,
        projected_12mo=min(MAX_CREDIT_SCORE, current + round(delta * 0.4)),
        projected_60mo=min(MAX_CREDIT_SCORE, current + round(delta)),
        delta=round(delta),
        level=level,
        explanation=IMPACT_EXPLANATIONS[level],
    )


def predict_credit_time_series(
    profile: UserProfile,
    monthly_payment: float,
    months: int = 60,
) -> List[CreditTrajectoryPoint]:
    """
    Month-by-month credit and net-worth trajectory, sampled every 6 months.

    Heuristic only: the update is shaped like a recurrent cell (forget, input
    and output gates over one scalar cell and hidden state) but its constants
    are hand-picked and have never been fitted to credit data. Treat the
    output as illustrative, not as a statistical forecast.
    """
    income = profile.total_income
    debt_ratio = monthly_payment / income if income > 0 else 1.0

    credit = float(profile.numeric_score)
    cell = 0.5
    hidden = 0.5
    points: List[CreditTrajectoryPoint] = []

    for month in range(months + 1):
        forget_gate = _sigmoid(debt_ratio * -2 + hidden * 0.5)
        cell *= forget_gate

        input_gate = _sigmoid(month * 0.01 + (1 - debt_ratio) * 2)
        candidate = math.tanh(month * 0.02 + credit * 0.001)
        cell += input_gate * candidate

        output_gate = _sigmoid(cell + hidden)
        hidden = output_gate * math.tanh(cell)

        if debt_ratio < 0.15:
            base_increase = 1.2
        elif debt_ratio < 0.25:
            base_increase = 0.8
        else:
            base_increase = 0.4
        momentum = hidden * 20
        credit = min(MAX_CREDIT_SCORE, credit + base_increase + momentum * 0.1)

        equity = monthly_payment * 0.7 * month
        savings = (income - monthly_payment) * 0.1 * month
        total_paid = monthly_payment * month

        if month % 6 == 0:
            points.append(
                CreditTrajectoryPoint(
                    month=month,
                    credit_score=round(credit),
                    net_worth=round(equity + savings),
                    total_paid=round(total_paid),
                )
            )

    return points


def _sigmoid(x: float) -> float:
    # exp only ever sees a non-positive argument, so it cannot overflow
    if x >= 0:
        return 1 / (1 + math.exp(-x))
    z = math.exp(x)
    return z / (1 + z)
