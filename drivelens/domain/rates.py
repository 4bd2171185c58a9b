"""Credit-tier to APR mapping, for numeric scores and for discrete bands"""

import math

CREDIT_BANDS = ("300-579", "580-669", "670-739", "740-799", "800-850")
WORST_BAND = CREDIT_BANDS[0]

BAND_APR = {
    "300-579": 0.14,
    "580-669": 0.10,
    "670-739": 0.07,
    "740-799": 0.05,
    "800-850": 0.04,
}
DEFAULT_BAND_APR = 0.07

BAND_MIDPOINT = {
    "300-579": 440,
    "580-669": 625,
    "670-739": 705,
    "740-799": 770,
    "800-850": 825,
}
DEFAULT_MIDPOINT = 700

# Share of the 12%-of-income payment budget a lender will stretch to per band
BAND_CREDIT_MULTIPLIER = {
    "300-579": 0.7,
    "580-669": 0.85,
    "670-739": 1.0,
    "740-799": 1.1,
    "800-850": 1.15,
}


def apr_from_credit(score: float, base_apr: float) -> float:
    """
    Adjust a vehicle's base APR by numeric credit tier.

    Tiers:
    - 760+:    base - 1 point
    - 700-759: base
    - 640-699: base + 1 point
    - <640:    base + 2 points

    Never returns a negative rate.
    """
    if not math.isfinite(score) or not math.isfinite(base_apr):
        return max(0.0, base_apr) if math.isfinite(base_apr) else 0.0
    if score >= 760:
        return max(0.0, base_apr - 0.01)
    if score >= 700:
        return max(0.0, base_apr)
    if score >= 640:
        return max(0.0, base_apr + 0.01)
    return max(0.0, base_apr + 0.02)


def apr_from_band(band: str) -> float:
    """Absolute APR for a credit band; unknown bands get the mid-tier rate"""
    return BAND_APR.get(band, DEFAULT_BAND_APR)


def band_midpoint(band: str) -> int:
    return BAND_MIDPOINT.get(band, DEFAULT_MIDPOINT)


def band_for_score(score: float) -> str:
    """Band containing a numeric score (scores outside 300-850 are clamped)"""
    if score < 580:
        return "300-579"
    if score < 670:
        return "580-669"
    if score < 740:
        return "670-739"
    if score < 800:
        return "740-799"
    return "800-850"


def credit_multiplier(band: str) -> float:
    return BAND_CREDIT_MULTIPLIER.get(band, 1.0)


def apr_for_profile(profile, base_apr: float) -> float:
    """Numeric scores adjust the vehicle's base APR; band-only profiles use the band table"""
    if profile.credit_score is not None:
        return apr_from_credit(profile.credit_score, base_apr)
    return apr_from_band(profile.credit_band)
