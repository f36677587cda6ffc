"""
Data models for the loyalty What-If Simulator.
All models are dataclasses; inputs are read-only and outputs are built fresh per call.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import List, Optional


class ScenarioType(str, Enum):
    """Known scenario tags. Any other tag is accepted and simulated as a no-op."""
    ADD_CRUISE = "add_cruise"
    REMOVE_CRUISE = "remove_cruise"
    CHANGE_CABIN = "change_cabin"
    ADJUST_SPEND = "adjust_spend"
    BOOK_OFFER = "book_offer"
    CUSTOM = "custom"


@dataclass
class PlayerContext:
    """
    The player's present loyalty standing plus the historical averages
    used to extrapolate future behaviour.

    Fields:
    - current_points: casino points earned in the current tier year
    - current_nights: cumulative cruise nights (loyalty level ladder)
    - current_tier: tier name as last reported by the player profile
    - current_level: loyalty level name as last reported by the player profile
    - average_points_per_night: points earned per cruise night
    - average_nights_per_month: cruise nights sailed per month
    - average_spend_per_cruise: cash paid per cruise (USD)
    """
    current_points: float
    current_nights: float
    current_tier: str
    current_level: str
    average_points_per_night: float
    average_nights_per_month: float
    average_spend_per_cruise: float


@dataclass
class BookedCruise:
    """
    A cruise already on the player's books.

    Monetary and loyalty fields are optional. Readers take the first truthy
    alternative (total_price, then price), so 0 and None behave the same.
    """
    id: str
    nights: float = 0
    total_price: Optional[float] = None
    price: Optional[float] = None
    retail_value: Optional[float] = None
    original_price: Optional[float] = None
    earned_points: Optional[float] = None
    casino_points: Optional[float] = None
    comp_value: Optional[float] = None
    ship_name: Optional[str] = None
    sail_date: Optional[str] = None  # YYYY-MM-DD
    cabin_type: Optional[str] = None

    @property
    def spend(self) -> float:
        return self.total_price or self.price or 0

    @property
    def retail(self) -> float:
        return self.retail_value or self.original_price or self.total_price or 0

    @property
    def points(self) -> float:
        return self.earned_points or self.casino_points or 0


@dataclass
class CasinoOffer:
    """A casino offer the player could book."""
    id: str
    min_nights: Optional[float] = None
    freeplay_amount: Optional[float] = None
    obc_amount: Optional[float] = None
    discount_percent: Optional[float] = None
    offer_name: Optional[str] = None
    ship_name: Optional[str] = None


@dataclass
class ScenarioInput:
    """
    A hypothetical change to simulate.

    Only the fields relevant to `type` are read:
    - add_cruise: new_nights, new_spend
    - remove_cruise: cruise_id
    - change_cabin: new_cabin_type
    - book_offer: offer_id
    - custom: custom_points, custom_nights, new_spend
    """
    type: str
    cruise_id: Optional[str] = None
    new_nights: Optional[float] = None
    new_spend: Optional[float] = None
    new_cabin_type: Optional[str] = None
    offer_id: Optional[str] = None
    custom_points: Optional[float] = None
    custom_nights: Optional[float] = None


@dataclass
class ScenarioDeltas:
    """Numeric effect of a scenario, added on top of the current state."""
    additional_points: float = 0
    additional_nights: float = 0
    additional_spend: float = 0
    additional_retail_value: float = 0
    additional_comp_value: float = 0


@dataclass
class TierForecast:
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
    projected_date: Optional[datetime]


@dataclass
class LoyaltyForecast:
    current_level: str
    projected_level: str
    current_nights: float
    projected_nights: float
    nights_gained: float
    level_upgrade: bool
    next_level_threshold: float
    nights_to_next_level: float
    months_to_next_level: int
    projected_date: Optional[datetime]


@dataclass
class ROIProjection:
    """
    Return on investment for a cruise portfolio.

    Fields:
    - total_investment: cash spent
    - projected_value: retail value + points value + comps
    - projected_roi: percentage return over the horizon
    - points_value: points converted to dollars
    - comp_value: freeplay, onboard credit and other comps
    - savings: retail value minus spend, floored at 0
    - break_even_date: None unless spend exceeds retail value
    - monthly_roi: projected_roi spread over the horizon
    - risk_adjusted_roi: projected_roi after the fixed haircut
    """
    total_investment: float
    projected_value: float
    projected_roi: float
    points_value: float
    comp_value: float
    savings: float
    break_even_date: Optional[datetime]
    monthly_roi: float
    risk_adjusted_roi: float


@dataclass
class RiskFactor:
    name: str
    impact: str  # 'positive' | 'negative' | 'neutral'
    weight: int
    description: str


@dataclass
class ConfidenceInterval:
    low: float
    high: float


@dataclass
class RiskAnalysis:
    overall_risk: str  # 'low' | 'medium' | 'high'
    risk_score: float
    factors: List[RiskFactor]
    recommendations: List[str]
    volatility: float
    confidence_interval: ConfidenceInterval


@dataclass
class SimulationDifference:
    points_diff: float
    nights_diff: float
    roi_diff: float
    tier_change: bool
    level_change: bool


@dataclass
class SimulationComparison:
    baseline: "SimulationResult"
    difference: SimulationDifference


@dataclass
class SimulationResult:
    """
    The complete output of one simulation run.

    `comparison` is only set by run_comparison_simulation.
    """
    tier_forecast: TierForecast
    loyalty_forecast: LoyaltyForecast
    roi_projection: ROIProjection
    risk_analysis: RiskAnalysis
    comparison: Optional[SimulationComparison] = None


@dataclass
class TimelinePoint:
    """One monthly snapshot of a timeline projection; month 0 is the present."""
    month: int
    points: float
    nights: float
    tier: str
    level: str


@dataclass
class ThresholdProgress:
    """Progress within the current band of a threshold table."""
    next_name: Optional[str]
    remaining: float
    percent_complete: float
