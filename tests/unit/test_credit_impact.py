"""Unit tests for credit-score impact simulation"""

import math

from drivelens.domain.credit_impact import (
    IMPACT_EXPLANATIONS,
    payment_to_income_ratio,
    predict_credit_impact,
    predict_credit_time_series,
)


def test_low_payment_ratio_is_excellent(make_profile):
    """Test $500 on $6,000 income (8%)"""
    impact = predict_credit_impact(make_profile(monthly_income=6000, credit_score=720), 500)

    assert impact.level == "excellent"
    assert impact.delta == 50
    assert impact.projected_12mo == 740
    assert impact.projected_60mo == 770
    assert impact.explanation == IMPACT_EXPLANATIONS["excellent"]


def test_levels_follow_payment_ratio(make_profile):
    profile = make_profile(monthly_income=6000)
    assert predict_credit_impact(profile, 800).level == "good"
    assert predict_credit_impact(profile, 1000).level == "moderate"
    assert predict_credit_impact(profile, 1500).level == "minimal"
    assert predict_credit_impact(profile, 1500).delta == 10


def test_credit_build_path_bonus(make_profile):
    impact = predict_credit_impact(make_profile(finance_path="credit-build"), 500)
    assert impact.delta == 60
    assert impact.projected_12mo == 720 + 24


def test_projection_caps_at_850(make_profile):
    impact = predict_credit_impact(make_profile(credit_score=840), 100)
    assert impact.projected_60mo == 850
    assert impact.projected_12mo == 850


def test_band_only_profile_uses_midpoint(make_profile):
    impact = predict_credit_impact(make_profile(credit_score=None, credit_band="580-669"), 300)
    assert impact.current_score == 625
    assert impact.current_band == "580-669"


def test_zero_income_is_minimal(make_profile):
    """No income means an unbounded ratio, never a division error"""
    profile = make_profile(monthly_income=0)
    assert math.isinf(payment_to_income_ratio(profile, 300))
    assert predict_credit_impact(profile, 300).level == "minimal"


def test_time_series_sampling_and_bounds(make_profile):
    points = predict_credit_time_series(make_profile(), 450)

    assert [p.month for p in points] == list(range(0, 61, 6))
    scores = [p.credit_score for p in points]
    assert scores == sorted(scores)
    assert all(720 <= s <= 850 for s in scores)
    assert points[-1].total_paid == round(450 * 60)
    assert points[0].total_paid == 0


def test_time_series_survives_zero_income(make_profile):
    points = predict_credit_time_series(make_profile(monthly_income=0), 300, months=12)
    assert [p.month for p in points] == [0, 6, 12]


def test_time_series_saturates_on_extreme_payment_ratio(make_profile):
    """A payment a thousand times income drives the gates to 0 and 1 without overflow"""
    points = predict_credit_time_series(make_profile(monthly_income=1, credit_score=700), 1000)

    assert len(points) == 11
    assert all(700 <= p.credit_score <= 850 for p in points)
    assert points[-1].total_paid == 60000
