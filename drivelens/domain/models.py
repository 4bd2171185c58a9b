"""Domain models - pure Python dataclasses representing business entities"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from drivelens.domain import rates
from drivelens.domain.exceptions import ProfileValidationError

DAYS_PER_YEAR = 365
MIN_AGE = 16
MAX_AGE = 120
GOALS = ("lowest-monthly", "ownership", "eco")
USAGES = ("commute", "family", "haul", "mixed")
RISK_TOLERANCES = ("low", "medium", "high")
FINANCE_PATHS = ("lease", "buy", "credit-build")


class Powertrain(str, Enum):
    """Drivetrain family; drives fuel, CO2 and efficiency scoring"""

    GAS = "Gas"
    HYBRID = "Hybrid"
    EV = "EV"

    @classmethod
    def parse(cls, value: str) -> "Powertrain":
        """Accept catalog labels ("EV") as well as inventory fuel types ("electric")"""
        normalized = value.strip().lower()
        aliases = {
            "gas": cls.GAS,
            "gasoline": cls.GAS,
            "hybrid": cls.HYBRID,
            "ev": cls.EV,
            "electric": cls.EV,
        }
        if normalized not in aliases:
            raise ValueError(f"Unknown powertrain: {value}")
        return aliases[normalized]


@dataclass(frozen=True)
class VehicleModel:
    """Catalog entry. Immutable once loaded."""

    id: str
    name: str
    powertrain: Powertrain
    body: str  # lower-case size/class, e.g. "sedan", "suv"
    msrp: float
    mpg: Optional[float] = None
    mpge: Optional[float] = None  # authoritative for EVs
    apr_base: float = 0.06
    lease_residual_pct: float = 0.58
    make: str = "Toyota"
    model: str = ""  # model family; trims of one family share it
    year: Optional[int] = None
    trim: Optional[str] = None
    safety_rating: Optional[int] = None
    horsepower: Optional[int] = None
    seats: Optional[int] = None
    maintenance_cost_per_year: Optional[float] = None
    insurance_cost_per_month: Optional[float] = None
    resale_value_percent: Optional[float] = None
    co2_grams_per_mile: Optional[float] = None

    @property
    def model_family(self) -> str:
        return self.model or self.name

    @property
    def combined_economy(self) -> float:
        """Combined mpg, or MPGe for EVs; 0 when neither is known"""
        return self.mpg or self.mpge or 0.0

    @property
    def is_electrified(self) -> bool:
        return self.powertrain in (Powertrain.HYBRID, Powertrain.EV)

    @property
    def display_name(self) -> str:
        if self.year is not None:
            return f"{self.year} {self.make} {self.model_family}"
        return self.name


@dataclass
class UserProfile:
    """Validated financial and driving profile for one request"""

    monthly_income: float
    credit_score: Optional[int] = None
    credit_band: Optional[str] = None
    spouse_income: Optional[float] = None
    monthly_budget: Optional[float] = None
    down_payment: float = 0.0
    total_assets: Optional[float] = None
    avg_monthly_mileage: Optional[float] = None
    daily_miles: Optional[float] = None
    preferred_powertrain: Optional[Powertrain] = None
    preferred_body: Optional[str] = None
    loan_term_months: int = 60
    lease_term_months: int = 36
    goal: Optional[str] = None
    usage: Optional[str] = None
    risk_tolerance: Optional[str] = None
    ownership_years: Optional[int] = None
    age: Optional[int] = None
    finance_path: str = "buy"

    def __post_init__(self) -> None:
        _require_non_negative("monthly_income", self.monthly_income)
        _require_non_negative("spouse_income", self.spouse_income)
        _require_non_negative("down_payment", self.down_payment)
        _require_non_negative("monthly_budget", self.monthly_budget)
        _require_non_negative("avg_monthly_mileage", self.avg_monthly_mileage)
        _require_non_negative("daily_miles", self.daily_miles)

        if self.credit_score is None and self.credit_band is None:
            raise ProfileValidationError("credit_score", "a credit score or credit band is required")
        if self.credit_score is not None and not 300 <= self.credit_score <= 850:
            raise ProfileValidationError("credit_score", "must be between 300 and 850")
        if self.credit_band is not None and self.credit_band not in rates.CREDIT_BANDS:
            raise ProfileValidationError("credit_band", f"must be one of {', '.join(rates.CREDIT_BANDS)}")

        if self.loan_term_months <= 0:
            raise ProfileValidationError("loan_term_months", "must be positive")
        if self.lease_term_months <= 0:
            raise ProfileValidationError("lease_term_months", "must be positive")
        if self.age is not None and not MIN_AGE <= self.age <= MAX_AGE:
            raise ProfileValidationError("age", f"must be between {MIN_AGE} and {MAX_AGE}")

        _require_choice("goal", self.goal, GOALS)
        _require_choice("usage", self.usage, USAGES)
        _require_choice("risk_tolerance", self.risk_tolerance, RISK_TOLERANCES)
        _require_choice("finance_path", self.finance_path, FINANCE_PATHS)

        if self.preferred_body is not None:
            self.preferred_body = self.preferred_body.lower()

    @property
    def total_income(self) -> float:
        return self.monthly_income + (self.spouse_income or 0.0)

    @property
    def monthly_miles(self) -> float:
        if self.avg_monthly_mileage is not None:
            return self.avg_monthly_mileage
        if self.daily_miles is not None:
            return self.daily_miles * DAYS_PER_YEAR / 12
        return 0.0

    @property
    def daily_mileage(self) -> float:
        if self.daily_miles is not None:
            return self.daily_miles
        if self.avg_monthly_mileage is not None:
            return self.avg_monthly_mileage * 12 / DAYS_PER_YEAR
        return 0.0

    @property
    def annual_miles(self) -> float:
        return self.daily_mileage * DAYS_PER_YEAR

    @property
    def band(self) -> str:
        """Credit band, derived from the numeric score when no band was given"""
        if self.credit_band is not None:
            return self.credit_band
        return rates.band_for_score(self.credit_score)

    @property
    def numeric_score(self) -> int:
        if self.credit_score is not None:
            return self.credit_score
        return rates.band_midpoint(self.credit_band)


@dataclass
class CostAnalysis:
    """Five-year ownership cost used to rank inventory vehicles"""

    total_purchase_cost: float
    total_fuel_cost: float
    total_maintenance_cost: float
    total_insurance_cost: float
    total_cost: float
    resale_value: float
    net_cost: float


@dataclass
class ScoredCandidate:
    """Vehicle scored against a profile; rank is set once the set is ordered"""

    vehicle: VehicleModel
    monthly_payment: float
    score: float
    reasons: List[str] = field(default_factory=list)
    cost_analysis: Optional[CostAnalysis] = None
    rank: Optional[int] = None

    @property
    def rationale(self) -> str:
        return "; ".join(self.reasons)


@dataclass
class ProjectionPoint:
    """One month of a financing scenario"""

    month: int
    payment: float
    fuel_cost: float
    maintenance_cost: float
    depreciation: float
    co2: float

    @property
    def total_cost(self) -> float:
        # depreciation and CO2 are informational, not cash flow
        return self.payment + self.fuel_cost + self.maintenance_cost


@dataclass
class ScenarioHeadline:
    buy_monthly: float
    lease_monthly: float
    total_interest_buy: float
    apr: float


@dataclass
class ScenarioSeries:
    """Lease, buy and wait-then-buy cost series for one vehicle"""

    lease: List[ProjectionPoint]
    buy: List[ProjectionPoint]
    credit_boost: List[ProjectionPoint]
    headline: ScenarioHeadline


@dataclass
class EligibilityResult:
    """Outcome of the affordability pre-check; ineligible is not an error"""

    eligible: bool
    reason: Optional[str] = None
    suggested_actions: List[str] = field(default_factory=list)


@dataclass
class RecommendationSet:
    """Ranked inventory recommendations plus context for the results page"""

    recommendations: List[ScoredCandidate]
    max_monthly_payment: float
    average_competitor_cost: Optional[float] = None


@dataclass
class CreditImpact:
    current_score: int
    current_band: str
    projected_12mo: int
    projected_60mo: int
    delta: int
    level: str  # excellent | good | moderate | minimal
    explanation: str


@dataclass
class CreditTrajectoryPoint:
    month: int
    credit_score: int
    net_worth: int
    total_paid: int


@dataclass
class MonthlyBreakdown:
    payment: int
    insurance: int
    fuel: int
    maintenance: int
    total: int


@dataclass
class CostBreakdown:
    principal: int
    interest: int
    fuel: int
    insurance: int
    maintenance: int


@dataclass
class FiveYearProjection:
    total_cost: int
    monthly_breakdown: MonthlyBreakdown
    breakdown: CostBreakdown


@dataclass
class OptionComparison:
    compared_to: str
    amount: int  # positive means this vehicle costs more


@dataclass
class SavingsAnalysis:
    vs_average_car: int
    vs_average_category: str  # fuel | overall
    vs_other_options: List[OptionComparison] = field(default_factory=list)


@dataclass
class RecommendationNarrative:
    is_top_choice: bool
    reason: str
    pros: List[str] = field(default_factory=list)
    cons: List[str] = field(default_factory=list)


@dataclass
class VehicleInsight:
    vehicle_id: str
    vehicle_name: str
    finance_path: str
    five_year_projection: FiveYearProjection
    credit_impact: CreditImpact
    savings_analysis: SavingsAnalysis
    recommendation: RecommendationNarrative


def _require_non_negative(name: str, value: Optional[float]) -> None:
    if value is None:
        return
    if not math.isfinite(value) or value < 0:
        raise ProfileValidationError(name, "must be a non-negative number")


def _require_choice(name: str, value: Optional[str], choices: tuple) -> None:
    if value is not None and value not in choices:
        raise ProfileValidationError(name, f"must be one of {', '.join(choices)}")
