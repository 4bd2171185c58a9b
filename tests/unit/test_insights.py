"""Unit tests for per-vehicle insights"""

import pytest

from drivelens.domain.exceptions import VehicleNotFoundError
from drivelens.domain.insights import Selection, build_insights, calculate_five_year_projection


@pytest.fixture
def selections() -> list[Selection]:
    return [
        Selection(vehicle_id="rav4-le-2024", monthly_payment=550, rank=2),
        Selection(vehicle_id="prius-le-2024", monthly_payment=500, rank=1),
    ]


def test_top_choice_is_lowest_rank(make_profile, inventory, selections):
    insights = build_insights(make_profile(), inventory, selections)

    assert [i.vehicle_id for i in insights] == ["rav4-le-2024", "prius-le-2024"]
    assert [i.recommendation.is_top_choice for i in insights] == [False, True]
    assert insights[1].recommendation.reason.startswith("Best overall match for your buy path")


def test_five_year_projection_breakdown(make_profile, inventory):
    prius = next(v for v in inventory if v.id == "prius-le-2024")
    projection = calculate_five_year_projection(prius, make_profile(), 500)

    assert projection.breakdown.principal == 28350
    assert projection.breakdown.interest == 500 * 60 - 28350
    assert projection.breakdown.maintenance == 75 * 60
    assert projection.monthly_breakdown.payment == 500
    expected = 500 * 60 + projection.breakdown.fuel + projection.breakdown.insurance + projection.breakdown.maintenance
    assert abs(projection.total_cost - expected) <= 2


def test_savings_compare_against_each_other(make_profile, inventory, selections):
    rav4, prius = build_insights(make_profile(), inventory, selections)

    assert prius.savings_analysis.vs_average_category == "fuel"
    assert rav4.savings_analysis.vs_average_category == "overall"
    assert len(prius.savings_analysis.vs_other_options) == 1
    assert prius.savings_analysis.vs_other_options[0].compared_to == "2024 RAV4"
    assert (
        prius.savings_analysis.vs_other_options[0].amount
        == -rav4.savings_analysis.vs_other_options[0].amount
    )
    assert prius.savings_analysis.vs_average_car == 45000 - prius.five_year_projection.total_cost


def test_unknown_vehicle_raises(make_profile, inventory):
    with pytest.raises(VehicleNotFoundError) as exc_info:
        build_insights(make_profile(), inventory, [Selection(vehicle_id="delorean-dmc12", monthly_payment=1, rank=1)])
    assert exc_info.value.vehicle_id == "delorean-dmc12"


def test_no_selections(make_profile, inventory):
    assert build_insights(make_profile(), inventory, []) == []


def test_insight_carries_finance_path_and_credit_impact(make_profile, inventory, selections):
    insights = build_insights(make_profile(finance_path="lease"), inventory, selections)

    assert all(i.finance_path == "lease" for i in insights)
    assert insights[1].credit_impact.level == "excellent"
    assert "Great lease option (new model)" in insights[1].recommendation.pros
