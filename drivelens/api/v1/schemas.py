"""Pydantic schemas for API request/response validation"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from drivelens.domain.exceptions import ProfileValidationError
from drivelens.domain.models import Powertrain, UserProfile


class ProfileRequest(BaseModel):
    """Financial and driving profile; the body of every profile-based endpoint"""

    monthly_income: float = Field(..., ge=0, description="Applicant monthly income")
    spouse_income: Optional[float] = Field(None, ge=0)
    credit_score: Optional[int] = Field(None, description="Numeric score, 300-850")
    credit_band: Optional[str] = Field(None, description="One of 300-579, 580-669, 670-739, 740-799, 800-850")
    monthly_budget: Optional[float] = Field(None, ge=0)
    down_payment: float = Field(0.0, ge=0)
    total_assets: Optional[float] = None
    avg_monthly_mileage: Optional[float] = Field(None, ge=0)
    daily_miles: Optional[float] = Field(None, ge=0)
    preferred_powertrain: Optional[str] = Field(None, description="gas, hybrid or ev")
    preferred_body: Optional[str] = None
    loan_term_months: int = 60
    lease_term_months: int = 36
    goal: Optional[str] = None
    usage: Optional[str] = None
    risk_tolerance: Optional[str] = None
    ownership_years: Optional[int] = None
    age: Optional[int] = None
    finance_path: str = "buy"

    def to_profile(self) -> UserProfile:
        """
        Raises:
            ProfileValidationError: a field fails domain validation
        """
        powertrain = None
        if self.preferred_powertrain:
            try:
                powertrain = Powertrain.parse(self.preferred_powertrain)
            except ValueError as e:
                raise ProfileValidationError("preferred_powertrain", str(e)) from e

        return UserProfile(
            monthly_income=self.monthly_income,
            spouse_income=self.spouse_income,
            credit_score=self.credit_score,
            credit_band=self.credit_band,
            monthly_budget=self.monthly_budget,
            down_payment=self.down_payment,
            total_assets=self.total_assets,
            avg_monthly_mileage=self.avg_monthly_mileage,
            daily_miles=self.daily_miles,
            preferred_powertrain=powertrain,
            preferred_body=self.preferred_body,
            loan_term_months=self.loan_term_months,
            lease_term_months=self.lease_term_months,
            goal=self.goal,
            usage=self.usage,
            risk_tolerance=self.risk_tolerance,
            ownership_years=self.ownership_years,
            age=self.age,
            finance_path=self.finance_path,
        )


class CalcRequest(BaseModel):
    """Request body for POST /v1/calc"""

    car_price: float = Field(..., ge=0)
    down_payment: float = Field(0.0, ge=0)
    credit_score: int = Field(..., ge=300, le=850)
    loan_months: int = Field(60, gt=0)
    lease_months: int = Field(36, gt=0)
    base_apr: float = Field(0.06, ge=0)
    residual_pct: float = Field(0.58, ge=0, le=1)


class CalcResponse(BaseModel):
    buy_monthly: float
    lease_monthly: float
    apr: float


class PredictRequest(ProfileRequest):
    """Request body for POST /v1/predict"""

    model_name: str = Field(..., min_length=1, description="Catalog model name, e.g. RAV4 Hybrid")

    model_config = ConfigDict(protected_namespaces=())


class SelectionSchema(BaseModel):
    """A vehicle previously returned by /v1/inventory/recommend"""

    vehicle_id: str = Field(..., min_length=1)
    monthly_payment: float = Field(..., ge=0)
    rank: int = Field(..., ge=1)


class InsightsRequest(ProfileRequest):
    """Request body for POST /v1/insights"""

    vehicles: List[SelectionSchema] = Field(default_factory=list)


class AnalysisRequest(ProfileRequest):
    """Request body for POST /v1/analysis"""

    vehicle_id: Optional[str] = None
    monthly_payment: Optional[float] = Field(None, ge=0)


# Response shapes, validated from domain dataclasses by attribute


class DomainSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True, protected_namespaces=())


class VehicleSchema(DomainSchema):
    id: str
    name: str
    powertrain: Powertrain
    body: str
    msrp: float
    mpg: Optional[float] = None
    mpge: Optional[float] = None
    make: str
    model_family: str
    year: Optional[int] = None
    trim: Optional[str] = None
    safety_rating: Optional[int] = None
    horsepower: Optional[int] = None
    seats: Optional[int] = None


class CostAnalysisSchema(DomainSchema):
    total_purchase_cost: float
    total_fuel_cost: float
    total_maintenance_cost: float
    total_insurance_cost: float
    total_cost: float
    resale_value: float
    net_cost: float


class CandidateSchema(DomainSchema):
    vehicle: VehicleSchema
    monthly_payment: float
    score: float
    reasons: List[str]
    rationale: str
    rank: Optional[int] = None
    cost_analysis: Optional[CostAnalysisSchema] = None


class RecommendResponse(BaseModel):
    """Response for POST /v1/recommend"""

    models: List[CandidateSchema]


class ProjectionPointSchema(DomainSchema):
    month: int
    payment: float
    fuel_cost: float
    maintenance_cost: float
    depreciation: float
    co2: float
    total_cost: float


class HeadlineSchema(DomainSchema):
    buy_monthly: float
    lease_monthly: float
    total_interest_buy: float
    apr: float


class ScenariosSchema(DomainSchema):
    lease: List[ProjectionPointSchema]
    buy: List[ProjectionPointSchema]
    credit_boost: List[ProjectionPointSchema]


class PredictResponse(BaseModel):
    """Response for POST /v1/predict"""

    vehicle: VehicleSchema
    scenarios: ScenariosSchema
    headline: HeadlineSchema


class PlanResponse(BaseModel):
    """Response for POST /v1/plan"""

    models: List[CandidateSchema]
    chosen: Optional[CandidateSchema] = None
    scenarios: Optional[ScenariosSchema] = None
    headline: Optional[HeadlineSchema] = None
    lease_total: float
    buy_total: float
    summary: str
    narration: Optional[str] = None


class EligibilityResponse(DomainSchema):
    """Response for POST /v1/eligibility"""

    eligible: bool
    reason: Optional[str] = None
    suggested_actions: List[str]


class InventoryRecommendResponse(BaseModel):
    """Response for POST /v1/inventory/recommend"""

    eligibility: EligibilityResponse
    recommendations: List[CandidateSchema]
    max_monthly_payment: float
    average_competitor_cost: Optional[float] = None


class CreditImpactSchema(DomainSchema):
    current_score: int
    current_band: str
    projected_12mo: int
    projected_60mo: int
    delta: int
    level: str
    explanation: str


class MonthlyBreakdownSchema(DomainSchema):
    payment: int
    insurance: int
    fuel: int
    maintenance: int
    total: int


class CostBreakdownSchema(DomainSchema):
    principal: int
    interest: int
    fuel: int
    insurance: int
    maintenance: int


class FiveYearProjectionSchema(DomainSchema):
    total_cost: int
    monthly_breakdown: MonthlyBreakdownSchema
    breakdown: CostBreakdownSchema


class OptionComparisonSchema(DomainSchema):
    compared_to: str
    amount: int


class SavingsAnalysisSchema(DomainSchema):
    vs_average_car: int
    vs_average_category: str
    vs_other_options: List[OptionComparisonSchema]


class RecommendationNarrativeSchema(DomainSchema):
    is_top_choice: bool
    reason: str
    pros: List[str]
    cons: List[str]


class VehicleInsightSchema(DomainSchema):
    vehicle_id: str
    vehicle_name: str
    finance_path: str
    five_year_projection: FiveYearProjectionSchema
    credit_impact: CreditImpactSchema
    savings_analysis: SavingsAnalysisSchema
    recommendation: RecommendationNarrativeSchema


class InsightsResponse(BaseModel):
    """Response for POST /v1/insights"""

    insights: List[VehicleInsightSchema]


class ComparisonMetricSchema(DomainSchema):
    category: str
    user_value: float
    average_value: float
    percentile: int


class CreditTrajectoryPointSchema(DomainSchema):
    month: int
    credit_score: int
    net_worth: int
    total_paid: int


class AnalysisResponse(DomainSchema):
    """Response for POST /v1/analysis"""

    cluster: str
    cluster_description: str
    affordability_score: Optional[int] = None
    financial_stability_score: int
    lifestyle_match_score: Optional[int] = None
    comparison_metrics: List[ComparisonMetricSchema]
    credit_trajectory: List[CreditTrajectoryPointSchema]
    credit_impact: Optional[CreditImpactSchema] = None
