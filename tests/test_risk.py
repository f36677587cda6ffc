"""
Unit tests for simulator/risk.py
Tests rule ordering, score bands and the derived interval.
"""

import pytest
from simulator.models import BookedCruise, TierForecast
from simulator.risk import RECOMMENDATIONS, calculate_risk_analysis, risk_band


def make_tier_forecast(tier_upgrade=False, points_to_next_tier=1000) -> TierForecast:
    return TierForecast(
        current_tier="Prime",
        projected_tier="Prime",
        current_points=12000,
        projected_points=13050,
        points_gained=1050,
        current_nights=45,
        projected_nights=52,
        nights_gained=7,
        tier_upgrade=tier_upgrade,
        next_tier_threshold=25001,
        points_to_next_tier=points_to_next_tier,
        months_to_next_tier=12,
        projected_date=None,
    )


def make_cruises(count, price=1500):
    return [BookedCruise(id=f"c{i}", nights=7, total_price=price) for i in range(count)]


class TestRiskBand:
    """Tests for score-to-band mapping."""

    def test_band_boundaries(self):
        assert risk_band(0) == "low"
        assert risk_band(34.9) == "low"
        assert risk_band(35) == "medium"
        assert risk_band(64.9) == "medium"
        assert risk_band(65) == "high"
        assert risk_band(100) == "high"


class TestRiskAnalysis:
    """Tests for calculate_risk_analysis."""

    def test_empty_portfolio_moderate_roi(self):
        analysis = calculate_risk_analysis([], 20, make_tier_forecast())

        assert analysis.risk_score == 60
        assert analysis.overall_risk == "medium"
        assert [f.name for f in analysis.factors] == ["Portfolio Concentration"]
        assert analysis.factors[0].impact == "negative"
        assert analysis.factors[0].weight == 15

    def test_moderate_portfolio_is_neutral(self):
        analysis = calculate_risk_analysis(make_cruises(3), 20, make_tier_forecast())

        assert analysis.risk_score == 50
        assert analysis.factors[0].name == "Portfolio Size"
        assert analysis.factors[0].impact == "neutral"
        assert analysis.factors[0].weight == 10

    def test_low_risk_portfolio(self):
        analysis = calculate_risk_analysis(make_cruises(5), 60, make_tier_forecast(tier_upgrade=True))

        # 50 - 10 - 15 - 10
        assert analysis.risk_score == 15
        assert analysis.overall_risk == "low"
        assert [f.name for f in analysis.factors] == [
            "Portfolio Diversity", "Strong ROI", "Tier Advancement"
        ]
        assert analysis.recommendations == RECOMMENDATIONS["low"]

    def test_high_risk_portfolio(self):
        analysis = calculate_risk_analysis(
            make_cruises(1, price=60000), 5, make_tier_forecast(points_to_next_tier=60000)
        )

        # 50 + 10 + 15 + 5 + 5
        assert analysis.risk_score == 85
        assert analysis.overall_risk == "high"
        assert [f.name for f in analysis.factors] == [
            "Portfolio Concentration", "Low ROI", "Long Tier Path", "High Commitment"
        ]
        assert len(analysis.recommendations) == 3

    def test_volatility_and_interval(self):
        analysis = calculate_risk_analysis(make_cruises(5), 60, make_tier_forecast(tier_upgrade=True))

        assert analysis.volatility == pytest.approx(0.35)
        assert analysis.confidence_interval.low == pytest.approx(60 - 7.5)
        assert analysis.confidence_interval.high == pytest.approx(60 + 7.5)

    def test_score_and_band_consistent(self):
        cases = [
            (0, 0, False, 0),
            (2, 30, False, 1000),
            (6, 80, True, 0),
            (1, -50, False, 90000),
        ]
        for count, roi, upgrade, to_next in cases:
            analysis = calculate_risk_analysis(
                make_cruises(count), roi, make_tier_forecast(upgrade, to_next)
            )
            assert 0 <= analysis.risk_score <= 100
            assert analysis.overall_risk == risk_band(analysis.risk_score)
            assert analysis.confidence_interval.low <= roi <= analysis.confidence_interval.high

    def test_extreme_roi_stays_in_range(self):
        for roi in (1_000_000, -1_000_000):
            analysis = calculate_risk_analysis([], roi, make_tier_forecast(points_to_next_tier=10**9))
            assert 0 <= analysis.risk_score <= 100

    def test_recommendations_are_a_copy(self):
        analysis = calculate_risk_analysis([], 20, make_tier_forecast())
        analysis.recommendations.append("extra")

        assert "extra" not in RECOMMENDATIONS["medium"]
