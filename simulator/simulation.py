"""
What-if simulation engine.
Turns a scenario into numeric deltas, then runs the forecasts, the ROI
projection and the risk analysis on the resulting state.
"""

import logging
import math
from dataclasses import replace
from datetime import datetime
from typing import List, Optional

from simulator import clock
from simulator.forecast import calculate_loyalty_forecast, calculate_tier_forecast
from simulator.models import (
    BookedCruise,
    CasinoOffer,
    PlayerContext,
    ScenarioDeltas,
    ScenarioInput,
    ScenarioType,
    SimulationComparison,
    SimulationDifference,
    SimulationResult,
)
from simulator.risk import calculate_risk_analysis
from simulator.roi import calculate_roi_projection
from simulator.thresholds import CLUB_ROYALE_TIERS, CROWN_ANCHOR_LEVELS, ThresholdTable

logger = logging.getLogger(__name__)


# Scenario assumptions
DEFAULT_CONFIG = {
    "default_cruise_nights": 7,
    # Retail value assumed for a cruise added at a given spend
    "add_cruise_retail_markup": 1.3,
    "custom_retail_markup": 1.2,

    "default_cabin_type": "Balcony",
    "cabin_multipliers": {
        "Interior": 0.8,
        "Oceanview": 1.0,
        "Balcony": 1.3,
        "Suite": 2.0,
    },
    # Points earned per extra dollar spent on a cabin upgrade
    "cabin_points_per_dollar": 0.5,

    "roi_time_horizon_months": 12,
}


def compute_scenario_deltas(
    player_context: PlayerContext,
    booked_cruises: List[BookedCruise],
    scenario: ScenarioInput,
    offers: Optional[List[CasinoOffer]] = None,
    config: dict = None,
) -> ScenarioDeltas:
    """
    Translate a scenario into point, night, spend, retail and comp deltas.

    Rules:
    - add_cruise: new_nights (default 7) at the average earn rate; new_spend
      (default average spend) with retail value at 1.3x spend
    - remove_cruise: minus the booked cruise's nights, points and price
    - change_cabin: spend difference for the new cabin multiplier, half a
      point per extra dollar, no extra nights
    - book_offer: offer nights (default 7) at the average earn rate, average
      spend less the offer discount, freeplay and OBC as comps
    - custom: custom_points, custom_nights, new_spend with retail at 1.2x
    - adjust_spend and unknown types: no effect

    A cruise_id or offer_id that matches nothing also has no effect.

    Returns:
        ScenarioDeltas
    """
    if config is None:
        config = DEFAULT_CONFIG

    offers = offers or []
    deltas = ScenarioDeltas()
    default_nights = config.get("default_cruise_nights", 7)
    points_per_night = player_context.average_points_per_night
    average_spend = player_context.average_spend_per_cruise

    scenario_type = scenario.type

    if scenario_type == ScenarioType.ADD_CRUISE:
        deltas.additional_nights = scenario.new_nights or default_nights
        deltas.additional_points = deltas.additional_nights * points_per_night
        deltas.additional_spend = scenario.new_spend or average_spend
        deltas.additional_retail_value = deltas.additional_spend * config.get("add_cruise_retail_markup", 1.3)

    elif scenario_type == ScenarioType.REMOVE_CRUISE:
        cruise = None
        if scenario.cruise_id:
            cruise = next((c for c in booked_cruises if c.id == scenario.cruise_id), None)

        if cruise is None:
            logger.debug("Cruise %r not booked; remove_cruise has no effect", scenario.cruise_id)
        else:
            nights = cruise.nights or 0
            deltas.additional_nights = -nights
            deltas.additional_points = -(cruise.points or nights * points_per_night)
            deltas.additional_spend = -cruise.spend

    elif scenario_type == ScenarioType.CHANGE_CABIN:
        multipliers = config.get("cabin_multipliers", {})
        cabin_type = scenario.new_cabin_type or config.get("default_cabin_type", "Balcony")
        multiplier = multipliers.get(cabin_type) or 1.0

        deltas.additional_spend = average_spend * multiplier - average_spend
        deltas.additional_points = math.floor(
            deltas.additional_spend * config.get("cabin_points_per_dollar", 0.5)
        )

    elif scenario_type == ScenarioType.BOOK_OFFER:
        offer = None
        if scenario.offer_id:
            offer = next((o for o in offers if o.id == scenario.offer_id), None)

        if offer is None:
            logger.debug("Offer %r not available; book_offer has no effect", scenario.offer_id)
        else:
            deltas.additional_nights = offer.min_nights or default_nights
            deltas.additional_points = deltas.additional_nights * points_per_night
            deltas.additional_comp_value = (offer.freeplay_amount or 0) + (offer.obc_amount or 0)
            deltas.additional_spend = average_spend * (1 - (offer.discount_percent or 0) / 100)
            deltas.additional_retail_value = average_spend

    elif scenario_type == ScenarioType.CUSTOM:
        deltas.additional_points = scenario.custom_points or 0
        deltas.additional_nights = scenario.custom_nights or 0
        deltas.additional_spend = scenario.new_spend or 0
        deltas.additional_retail_value = deltas.additional_spend * config.get("custom_retail_markup", 1.2)

    elif scenario_type != ScenarioType.ADJUST_SPEND:
        logger.debug("Unknown scenario type %r; simulating as no change", scenario_type)

    return deltas


def run_simulation(
    player_context: PlayerContext,
    booked_cruises: List[BookedCruise],
    scenario: ScenarioInput,
    offers: Optional[List[CasinoOffer]] = None,
    config: dict = None,
    tiers: ThresholdTable = CLUB_ROYALE_TIERS,
    levels: ThresholdTable = CROWN_ANCHOR_LEVELS,
    now: Optional[datetime] = None,
) -> SimulationResult:
    """
    Simulate one scenario against the player's current state.

    The ROI projection covers the whole booked portfolio plus the scenario
    deltas. The risk analysis looks at the booked cruises as they are today.

    Args:
        player_context: current standing and averages
        booked_cruises: the player's booked cruises (not modified)
        scenario: the change to simulate
        offers: available casino offers (only read for book_offer)
        config: optional scenario config (uses DEFAULT_CONFIG if not provided)
        tiers: points ladder
        levels: nights ladder
        now: reference time for every projected date

    Returns:
        SimulationResult without a comparison
    """
    if config is None:
        config = DEFAULT_CONFIG
    now = now or clock.now()

    deltas = compute_scenario_deltas(player_context, booked_cruises, scenario, offers, config)

    tier_forecast = calculate_tier_forecast(
        player_context, deltas.additional_points, deltas.additional_nights, tiers=tiers, now=now
    )
    loyalty_forecast = calculate_loyalty_forecast(
        player_context, deltas.additional_nights, levels=levels, now=now
    )

    existing_spend = sum(cruise.spend for cruise in booked_cruises)
    existing_retail = sum(cruise.retail for cruise in booked_cruises)
    existing_points = sum(cruise.points for cruise in booked_cruises)
    existing_comp = sum(cruise.comp_value or 0 for cruise in booked_cruises)

    roi_projection = calculate_roi_projection(
        existing_spend + deltas.additional_spend,
        existing_retail + deltas.additional_retail_value,
        existing_points + deltas.additional_points,
        existing_comp + deltas.additional_comp_value,
        time_horizon_months=config.get("roi_time_horizon_months", 12),
        now=now,
    )

    risk_analysis = calculate_risk_analysis(booked_cruises, roi_projection.projected_roi, tier_forecast)

    logger.debug(
        "Simulated %s: %s -> %s, ROI %.1f%%, risk %s",
        scenario.type,
        tier_forecast.current_tier,
        tier_forecast.projected_tier,
        roi_projection.projected_roi,
        risk_analysis.overall_risk,
    )

    return SimulationResult(
        tier_forecast=tier_forecast,
        loyalty_forecast=loyalty_forecast,
        roi_projection=roi_projection,
        risk_analysis=risk_analysis,
    )


def run_comparison_simulation(
    player_context: PlayerContext,
    booked_cruises: List[BookedCruise],
    scenario: ScenarioInput,
    offers: Optional[List[CasinoOffer]] = None,
    config: dict = None,
    tiers: ThresholdTable = CLUB_ROYALE_TIERS,
    levels: ThresholdTable = CROWN_ANCHOR_LEVELS,
    now: Optional[datetime] = None,
) -> SimulationResult:
    """
    Simulate `scenario` next to a do-nothing baseline.

    Returns:
        The scenario's SimulationResult with `comparison` holding the
        baseline result and the scenario-minus-baseline difference.
    """
    now = now or clock.now()
    baseline_scenario = ScenarioInput(type=ScenarioType.CUSTOM.value, custom_points=0, custom_nights=0)

    baseline = run_simulation(
        player_context, booked_cruises, baseline_scenario, offers,
        config=config, tiers=tiers, levels=levels, now=now,
    )
    projected = run_simulation(
        player_context, booked_cruises, scenario, offers,
        config=config, tiers=tiers, levels=levels, now=now,
    )

    difference = SimulationDifference(
        points_diff=projected.tier_forecast.projected_points - baseline.tier_forecast.projected_points,
        nights_diff=projected.loyalty_forecast.projected_nights - baseline.loyalty_forecast.projected_nights,
        roi_diff=projected.roi_projection.projected_roi - baseline.roi_projection.projected_roi,
        tier_change=projected.tier_forecast.projected_tier != baseline.tier_forecast.projected_tier,
        level_change=projected.loyalty_forecast.projected_level != baseline.loyalty_forecast.projected_level,
    )

    return replace(projected, comparison=SimulationComparison(baseline=baseline, difference=difference))
