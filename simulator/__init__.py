from .models import (
    PlayerContext, BookedCruise, CasinoOffer, ScenarioInput, ScenarioType, ScenarioDeltas,
    TierForecast, LoyaltyForecast, ROIProjection, RiskFactor, RiskAnalysis, ConfidenceInterval,
    SimulationResult, SimulationComparison, SimulationDifference, TimelinePoint, ThresholdProgress,
)
from .thresholds import (
    Threshold, ThresholdTable, CLUB_ROYALE_TIERS, CROWN_ANCHOR_LEVELS, DOLLARS_PER_POINT,
    coin_in_from_points, points_from_coin_in,
)
from .forecast import calculate_tier_forecast, calculate_loyalty_forecast
from .roi import calculate_roi_projection
from .risk import calculate_risk_analysis
from .simulation import DEFAULT_CONFIG, compute_scenario_deltas, run_simulation, run_comparison_simulation
from .timeline import generate_timeline_projections, months_until_expiration
from .context import build_player_context, validate_player_inputs

__all__ = [
    "PlayerContext", "BookedCruise", "CasinoOffer", "ScenarioInput", "ScenarioType", "ScenarioDeltas",
    "TierForecast", "LoyaltyForecast", "ROIProjection", "RiskFactor", "RiskAnalysis", "ConfidenceInterval",
    "SimulationResult", "SimulationComparison", "SimulationDifference", "TimelinePoint", "ThresholdProgress",
    "Threshold", "ThresholdTable", "CLUB_ROYALE_TIERS", "CROWN_ANCHOR_LEVELS", "DOLLARS_PER_POINT",
    "coin_in_from_points", "points_from_coin_in",
    "calculate_tier_forecast", "calculate_loyalty_forecast",
    "calculate_roi_projection",
    "calculate_risk_analysis",
    "DEFAULT_CONFIG", "compute_scenario_deltas", "run_simulation", "run_comparison_simulation",
    "generate_timeline_projections", "months_until_expiration",
    "build_player_context", "validate_player_inputs",
]
