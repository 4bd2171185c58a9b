"""Affordability pre-check run before any vehicle is scored"""

from drivelens.domain.models import EligibilityResult, UserProfile
from drivelens.domain.rates import WORST_BAND

MINIMUM_MONTHLY_INCOME = 2500
POOR_CREDIT_MINIMUM_INCOME = 3500
MAX_PAYMENT_SHARE = 0.15  # conservative payment-to-income ceiling
CHEAPEST_VEHICLE_PRICE = 15_000
CHEAPEST_VEHICLE_TERM = 60

INCOME_FLOOR_ACTIONS = [
    "Consider increasing your income through additional work or side jobs",
    "Add a co-signer with higher income",
    "Save up to purchase a used vehicle with cash",
    "Look into public transportation or ride-sharing alternatives",
    "Explore employer transportation benefits or programs",
]

CREDIT_INCOME_ACTIONS = [
    "Work on improving your credit score (pay bills on time, reduce debt)",
    "Increase your monthly income to at least $3,500",
    "Consider a secured credit card to rebuild credit",
    "Wait 6-12 months while improving your financial situation",
    "Explore credit counseling services",
]

AFFORDABILITY_ACTIONS = [
    "Increase your income or add a co-signer",
    "Save for a larger down payment to reduce monthly payments",
    "Consider more affordable used vehicle options",
    "Look for vehicles under $15,000",
    "Explore lease options with lower monthly payments",
]


def check_eligibility(profile: UserProfile) -> EligibilityResult:
    """
    Screen a profile before recommending anything.

    Checks run in a fixed order and the first failure wins:
    1. Household income below $2,500/month
    2. Worst credit band combined with income below $3,500/month
    3. 15% of income cannot cover the cheapest plausible vehicle
       ($15,000 over 60 months, no interest)
    """
    total_income = profile.total_income

    if total_income < MINIMUM_MONTHLY_INCOME:
        return EligibilityResult(
            eligible=False,
            reason=(
                f"Your total monthly income (${total_income:,.0f}) is below our minimum "
                f"requirement of ${MINIMUM_MONTHLY_INCOME:,}."
            ),
            suggested_actions=list(INCOME_FLOOR_ACTIONS),
        )

    if profile.band == WORST_BAND and total_income < POOR_CREDIT_MINIMUM_INCOME:
        return EligibilityResult(
            eligible=False,
            reason="Your combination of credit score and income level does not meet our financing criteria.",
            suggested_actions=list(CREDIT_INCOME_ACTIONS),
        )

    max_car_payment = total_income * MAX_PAYMENT_SHARE
    cheapest_payment = CHEAPEST_VEHICLE_PRICE / CHEAPEST_VEHICLE_TERM
    if max_car_payment < cheapest_payment:
        return EligibilityResult(
            eligible=False,
            reason=(
                f"Based on your income, your maximum recommended car payment is "
                f"${round(max_car_payment)}/month, which may not be sufficient for most vehicles."
            ),
            suggested_actions=list(AFFORDABILITY_ACTIONS),
        )

    return EligibilityResult(eligible=True)
