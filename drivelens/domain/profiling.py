"""
Profile analytics for the insights page.

Each function is a fixed closed-form heuristic named after the model family
it imitates (k-means, random forest, neural net, gradient boosting). There is
no training and no fitted parameters.
"""

import math
from dataclasses import dataclass, field
from typing import List, Optional

from drivelens.domain.amortization import financed_principal, monthly_payment
from drivelens.domain.credit_impact import predict_credit_time_series
from drivelens.domain.models import CreditTrajectoryPoint, UserProfile
from drivelens.domain.rates import apr_from_band

DEFAULT_AGE = 35


@dataclass
class ComparisonMetric:
    category: str
    user_value: float
    average_value: float
    percentile: int


@dataclass
class ProfileAnalysis:
    cluster: str
    cluster_description: str
    affordability_score: Optional[int]
    financial_stability_score: int
    lifestyle_match_score: Optional[int]
    comparison_metrics: List[ComparisonMetric] = field(default_factory=list)
    credit_trajectory: List[CreditTrajectoryPoint] = field(default_factory=list)


def cluster_user_profile(profile: UserProfile) -> tuple[str, str]:
    """Assign one of five fixed segments from income, credit and age"""
    income = profile.total_income
    credit = profile.numeric_score
    age = profile.age if profile.age is not None else DEFAULT_AGE

    if income > 10000 and credit > 740:
        return "Premium", "High income, excellent credit - ideal for premium vehicles and aggressive financing"
    if income > 7000 and credit > 670:
        return "Established Professional", "Strong financial foundation - good balance of affordability and quality"
    if income > 4000 and credit > 580:
        return "Growing Family", "Budget-conscious with moderate credit - focus on value and reliability"
    if age < 30 and credit > 670:
        return "Young Professional", "Building wealth - prioritize affordable payments and credit building"
    return "Value Seeker", "Cost-sensitive buyer - focus on affordability and long-term savings"


def predict_affordability(profile: UserProfile, vehicle_price: float) -> int:
    """Weighted blend of income, credit, payment burden and age, 0-100"""
    income = profile.total_income
    credit = profile.numeric_score
    age = profile.age if profile.age is not None else DEFAULT_AGE

    income_score = min(income / 15000, 1) * 100
    credit_score = (credit - 300) / (850 - 300) * 100
    payment = round(
        monthly_payment(financed_principal(vehicle_price, profile.down_payment), apr_from_band(profile.band), 60)
    )
    debt_ratio = payment / income if income > 0 else math.inf
    debt_score = max(0.0, (1 - debt_ratio / 0.3) * 100)
    age_score = 70 if age < 25 else 85 if age > 50 else 100

    score = income_score * 0.4 + credit_score * 0.3 + debt_score * 0.2 + age_score * 0.1
    return round(min(100, max(0, score)))


def predict_financial_stability(profile: UserProfile) -> int:
    """Two sigmoid hidden layers over income, credit, age and risk tolerance"""
    income = profile.total_income
    credit = profile.numeric_score
    age = profile.age if profile.age is not None else DEFAULT_AGE
    has_spouse_income = 1 if profile.spouse_income else 0
    low_risk = (profile.risk_tolerance or "medium") == "low"

    h1_1 = _sigmoid(income * 0.0001 + credit * 0.001 + has_spouse_income * 0.5)
    h1_2 = _sigmoid(age * 0.02 + credit * 0.0008 - 0.5)
    h1_3 = _sigmoid(income * 0.00015 + (0.8 if low_risk else 0.2))

    h2_1 = _sigmoid(h1_1 * 0.8 + h1_2 * 0.6 - 0.3)
    h2_2 = _sigmoid(h1_2 * 0.7 + h1_3 * 0.9 + 0.2)

    return round(_sigmoid(h2_1 * 1.2 + h2_2 * 1.1) * 100)


def predict_lifestyle_match(profile: UserProfile, vehicle_type: str) -> int:
    """Three shallow rule "trees" combined with a 0.3 learning rate"""
    usage = profile.usage or "mixed"
    daily = profile.daily_mileage
    age = profile.age if profile.age is not None else DEFAULT_AGE
    kind = vehicle_type.lower()
    efficient = "hybrid" in kind or "electric" in kind

    if usage == "commute" and daily > 30:
        usage_score = 30 if efficient else 15
    elif usage == "family":
        usage_score = 30 if ("suv" in kind or "sedan" in kind) else 10
    elif usage == "haul":
        usage_score = 30 if "truck" in kind else 15
    else:
        usage_score = 20

    if daily > 50:
        mileage_score = 25 if efficient else 10
    elif daily > 30:
        mileage_score = 20
    else:
        mileage_score = 15

    if age < 30:
        age_score = 25 if ("sedan" in kind or "coupe" in kind) else 15
    elif age > 40:
        age_score = 25 if "suv" in kind else 18
    else:
        age_score = 20

    learning_rate = 0.3
    combined = usage_score + mileage_score * learning_rate + age_score * learning_rate * 0.8
    return round(min(100, combined))


def generate_comparison_metrics(profile: UserProfile) -> List[ComparisonMetric]:
    """Where the user sits against fixed population averages"""
    metrics = [
        ComparisonMetric("Monthly Income", profile.total_income, 6500, _percentile(profile.total_income, 3000, 15000)),
        ComparisonMetric(
            "Credit Score", profile.numeric_score, 680, _percentile(profile.numeric_score, 300, 850)
        ),
        ComparisonMetric("Daily Commute", profile.daily_mileage, 30, _percentile(profile.daily_mileage, 5, 100)),
    ]
    if profile.age is not None:
        metrics.append(ComparisonMetric("Age", profile.age, 38, _percentile(profile.age, 18, 75)))
    return metrics


def analyze_profile(
    profile: UserProfile,
    vehicle_price: Optional[float] = None,
    vehicle_type: Optional[str] = None,
    monthly_payment_estimate: float = 0.0,
) -> ProfileAnalysis:
    cluster, description = cluster_user_profile(profile)
    return ProfileAnalysis(
        cluster=cluster,
        cluster_description=description,
        affordability_score=predict_affordability(profile, vehicle_price) if vehicle_price is not None else None,
        financial_stability_score=predict_financial_stability(profile),
        lifestyle_match_score=predict_lifestyle_match(profile, vehicle_type) if vehicle_type else None,
        comparison_metrics=generate_comparison_metrics(profile),
        credit_trajectory=predict_credit_time_series(profile, monthly_payment_estimate),
    )


def _sigmoid(x: float) -> float:
    # exp only ever sees a non-positive argument, so it cannot overflow
    if x >= 0:
        return 1 / (1 + math.exp(-x))
    z = math.exp(x)
    return z / (1 + z)


def _percentile(value: float, low: float, high: float) -> int:
    return round(min(100.0, max(0.0, (value - low) / (high - low) * 100)))
