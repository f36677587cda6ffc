"""
Simulation API Schemas - request and response DTOs for the What-If Simulator.

Requests carry the player's profile as plain data; the service converts them
into simulator dataclasses. Responses mirror the simulator's result
dataclasses field for field.

Validation is intentionally loose: numbers may be negative and scenario
types may be unknown, matching the simulator. Set `strict` on a request to
have the service reject negative or non-finite amounts.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


# =============================================================================
# Requests
# =============================================================================

class PlayerContextSchema(BaseModel):
    """
    The player's loyalty standing and historical averages.

    Example:
        {
            "current_points": 12000,
            "current_nights": 45,
            "current_tier": "Prime",
            "current_level": "Platinum",
            "average_points_per_night": 150,
            "average_nights_per_month": 7,
            "average_spend_per_cruise": 2000
        }
    """
    current_points: float = Field(..., description="Casino points this tier year")
    current_nights: float = Field(..., description="Cumulative cruise nights")
    current_tier: str = Field("", description="Tier reported by the profile")
    current_level: str = Field("", description="Loyalty level reported by the profile")
    average_points_per_night: float = Field(..., description="Points earned per night")
    average_nights_per_month: float = Field(..., description="Nights sailed per month")
    average_spend_per_cruise: float = Field(..., description="Cash spent per cruise (USD)")


class BookedCruiseSchema(BaseModel):
    id: str = Field(..., description="Cruise identifier")
    nights: float = Field(0, description="Cruise length in nights")
    total_price: Optional[float] = None
    price: Optional[float] = None
    retail_value: Optional[float] = None
    original_price: Optional[float] = None
    earned_points: Optional[float] = None
    casino_points: Optional[float] = None
    comp_value: Optional[float] = None
    ship_name: Optional[str] = None
    sail_date: Optional[str] = Field(None, description="YYYY-MM-DD")
    cabin_type: Optional[str] = None


class CasinoOfferSchema(BaseModel):
    id: str = Field(..., description="Offer identifier")
    min_nights: Optional[float] = None
    freeplay_amount: Optional[float] = None
    obc_amount: Optional[float] = None
    discount_percent: Optional[float] = None
    offer_name: Optional[str] = None
    ship_name: Optional[str] = None


class ScenarioSchema(BaseModel):
    """
    A hypothetical change. `type` is not restricted: unknown types simulate as no change.

    Example:
        {"type": "add_cruise", "new_nights": 7, "new_spend": 1800}
    """
    type: str = Field(..., description="add_cruise | remove_cruise | change_cabin | adjust_spend | book_offer | custom")
    cruise_id: Optional[str] = None
    new_nights: Optional[float] = None
    new_spend: Optional[float] = None
    new_cabin_type: Optional[str] = None
    offer_id: Optional[str] = None
    custom_points: Optional[float] = None
    custom_nights: Optional[float] = None


class SimulationRequest(BaseModel):
    player_context: PlayerContextSchema
    booked_cruises: List[BookedCruiseSchema] = Field(default_factory=list)
    scenario: ScenarioSchema
    offers: List[CasinoOfferSchema] = Field(default_factory=list)
    strict: bool = Field(default=False, description="Reject negative or non-finite amounts")


class TimelineRequest(BaseModel):
    player_context: PlayerContextSchema
    booked_cruises: List[BookedCruiseSchema] = Field(default_factory=list)
    months_ahead: Optional[int] = Field(None, ge=0, description="Months to project; server default when omitted")
    strict: bool = False


class PlayerContextRequest(BaseModel):
    booked_cruises: List[BookedCruiseSchema] = Field(default_factory=list)
    current_points: float
    current_nights: float
    average_nights_per_month: Optional[float] = None


# =============================================================================
# Responses
# =============================================================================

class TierForecastResponse(BaseModel):
    current_tier: str
    projected_tier: str
    current_points: float
    projected_points: float
    points_gained: float
    current_nights: float
    projected_nights: float
    nights_gained: float
    tier_upgrade: bool
    next_tier_threshold: float
    points_to_next_tier: float
    months_to_next_tier: int
    projected_date: Optional[datetime] = None


class LoyaltyForecastResponse(BaseModel):
    current_level: str
    projected_level: str
    current_nights: float
    projected_nights: float
    nights_gained: float
    level_upgrade: bool
    next_level_threshold: float
    nights_to_next_level: float
    months_to_next_level: int
    projected_date: Optional[datetime] = None


class ROIProjectionResponse(BaseModel):
    total_investment: float
    projected_value: float
    projected_roi: float
    points_value: float
    comp_value: float
    savings: float
    break_even_date: Optional[datetime] = None
    monthly_roi: float
    risk_adjusted_roi: float


class RiskFactorResponse(BaseModel):
    name: str
    impact: str
    weight: int
    description: str


class ConfidenceIntervalResponse(BaseModel):
    low: float
    high: float


class RiskAnalysisResponse(BaseModel):
    overall_risk: str
    risk_score: float
    factors: List[RiskFactorResponse]
    recommendations: List[str]
    volatility: float
    confidence_interval: ConfidenceIntervalResponse


class SimulationBaselineResponse(BaseModel):
    tier_forecast: TierForecastResponse
    loyalty_forecast: LoyaltyForecastResponse
    roi_projection: ROIProjectionResponse
    risk_analysis: RiskAnalysisResponse


class SimulationDifferenceResponse(BaseModel):
    points_diff: float
    nights_diff: float
    roi_diff: float
    tier_change: bool
    level_change: bool


class SimulationComparisonResponse(BaseModel):
    baseline: SimulationBaselineResponse
    difference: SimulationDifferenceResponse


class SimulationResultResponse(SimulationBaselineResponse):
    comparison: Optional[SimulationComparisonResponse] = None


class TimelinePointResponse(BaseModel):
    month: int
    points: float
    nights: float
    tier: str
    level: str


class TimelineResponse(BaseModel):
    months_ahead: int
    projections: List[TimelinePointResponse]


class ThresholdResponse(BaseModel):
    name: str
    threshold: float
    benefits: List[str]
    points_per_night: Optional[int] = None


class LoyaltyTablesResponse(BaseModel):
    tiers: List[ThresholdResponse]
    levels: List[ThresholdResponse]


class ThresholdProgressResponse(BaseModel):
    current: str
    next_name: Optional[str] = None
    remaining: float
    percent_complete: float


class LoyaltyStatusResponse(BaseModel):
    tier: ThresholdProgressResponse
    level: ThresholdProgressResponse
