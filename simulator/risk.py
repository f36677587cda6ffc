"""
Heuristic risk scoring for a cruise portfolio.

Starts at a neutral score of 50 and applies weighted rules in a fixed order.
Each rule that fires records a RiskFactor; the score is clamped to [0, 100]
and mapped to a low/medium/high band with canned recommendations.
"""

from typing import List

from simulator.models import (
    BookedCruise,
    ConfidenceInterval,
    RiskAnalysis,
    RiskFactor,
    TierForecast,
)


BASE_RISK_SCORE = 50

RISK_CONFIG = {
    "diversified_portfolio_min_cruises": 5,
    "concentrated_portfolio_max_cruises": 2,
    "strong_roi_pct": 50,
    "low_roi_pct": 10,
    "long_tier_path_points": 50000,
    "high_commitment_spend": 50000,
    "low_band_below": 35,
    "medium_band_below": 65,
    # ROI treated as "typical" when measuring volatility
    "reference_roi_pct": 25,
    "confidence_margin_per_point": 0.5,
}

RECOMMENDATIONS = {
    "high": [
        "Consider diversifying with different ship classes",
        "Look for higher-value offers to improve ROI",
        "Focus on earning points through high-return cruises",
    ],
    "medium": [
        "Maintain current cruise frequency for steady progress",
        "Watch for exclusive offers to boost value",
    ],
    "low": [
        "Excellent position - consider optimizing for tier advancement",
        "Look for premium experiences within budget",
    ],
}


def risk_band(risk_score: float) -> str:
    """Map a 0-100 score to 'low' (<35), 'medium' (<65) or 'high'."""
    if risk_score < RISK_CONFIG["low_band_below"]:
        return "low"
    if risk_score < RISK_CONFIG["medium_band_below"]:
        return "medium"
    return "high"


def calculate_risk_analysis(
    booked_cruises: List[BookedCruise],
    projected_roi: float,
    tier_forecast: TierForecast,
) -> RiskAnalysis:
    """
    Score the risk of the player's cruise portfolio.

    Rules, in order:
    - Portfolio size: >=5 cruises -10, <2 cruises +10, otherwise neutral (no change)
    - ROI: >=50% -15, <10% +15, nothing recorded in between
    - Tier upgrade on the forecast: -10
    - More than 50,000 points to the next tier: +5
    - More than $50,000 booked: +5

    Args:
        booked_cruises: the player's booked cruises
        projected_roi: ROI percentage from the ROI projection
        tier_forecast: forecast for the same scenario

    Returns:
        RiskAnalysis with score, band, factors and recommendations
    """
    factors: List[RiskFactor] = []
    risk_score = BASE_RISK_SCORE

    cruise_count = len(booked_cruises)
    if cruise_count >= RISK_CONFIG["diversified_portfolio_min_cruises"]:
        factors.append(RiskFactor(
            name="Portfolio Diversity",
            impact="positive",
            weight=15,
            description="Well-diversified cruise portfolio",
        ))
        risk_score -= 10
    elif cruise_count < RISK_CONFIG["concentrated_portfolio_max_cruises"]:
        factors.append(RiskFactor(
            name="Portfolio Concentration",
            impact="negative",
            weight=15,
            description="Limited cruise experience may reduce reliability",
        ))
        risk_score += 10
    else:
        factors.append(RiskFactor(
            name="Portfolio Size",
            impact="neutral",
            weight=10,
            description="Moderate cruise portfolio",
        ))

    if projected_roi >= RISK_CONFIG["strong_roi_pct"]:
        factors.append(RiskFactor(
            name="Strong ROI",
            impact="positive",
            weight=20,
            description="Excellent return on investment potential",
        ))
        risk_score -= 15
    elif projected_roi < RISK_CONFIG["low_roi_pct"]:
        factors.append(RiskFactor(
            name="Low ROI",
            impact="negative",
            weight=20,
            description="Returns may not justify investment",
        ))
        risk_score += 15

    if tier_forecast.tier_upgrade:
        factors.append(RiskFactor(
            name="Tier Advancement",
            impact="positive",
            weight=15,
            description="On track for tier upgrade with enhanced benefits",
        ))
        risk_score -= 10

    if tier_forecast.points_to_next_tier > RISK_CONFIG["long_tier_path_points"]:
        factors.append(RiskFactor(
            name="Long Tier Path",
            impact="neutral",
            weight=10,
            description="Significant investment needed for next tier",
        ))
        risk_score += 5

    total_spend = sum(cruise.spend for cruise in booked_cruises)
    if total_spend > RISK_CONFIG["high_commitment_spend"]:
        factors.append(RiskFactor(
            name="High Commitment",
            impact="neutral",
            weight=10,
            description="Substantial financial commitment",
        ))
        risk_score += 5

    risk_score = max(0, min(100, risk_score))
    overall_risk = risk_band(risk_score)

    volatility = abs(projected_roi - RISK_CONFIG["reference_roi_pct"]) / 100
    margin = risk_score * RISK_CONFIG["confidence_margin_per_point"]

    return RiskAnalysis(
        overall_risk=overall_risk,
        risk_score=risk_score,
        factors=factors,
        recommendations=list(RECOMMENDATIONS[overall_risk]),
        volatility=volatility,
        confidence_interval=ConfidenceInterval(
            low=projected_roi - margin,
            high=projected_roi + margin,
        ),
    )
