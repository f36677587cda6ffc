"""
Tier and loyalty level forecasts.

Both forecasts add a delta to the player's current standing, resolve the
rung before and after on their ladder, and estimate how long the player
needs at their historical pace to reach the next rung.
"""

import math
from datetime import datetime
from typing import Optional

from simulator import clock
from simulator.models import LoyaltyForecast, PlayerContext, TierForecast
from simulator.thresholds import CLUB_ROYALE_TIERS, CROWN_ANCHOR_LEVELS, ThresholdTable


def months_needed(remaining: float, monthly_rate: float) -> int:
    """
    Whole months to cover `remaining` at `monthly_rate` per month.

    0 when nothing remains, when the rate is not positive, or when the
    inputs are not finite.

    Example:
        >>> months_needed(2500, 1050)
        3
    """
    if not remaining > 0 or not monthly_rate > 0:
        return 0
    months = remaining / monthly_rate
    if not math.isfinite(months):
        return 0
    return math.ceil(months)


def calculate_tier_forecast(
    player_context: PlayerContext,
    additional_points: float,
    additional_nights: float,
    tiers: ThresholdTable = CLUB_ROYALE_TIERS,
    now: Optional[datetime] = None,
) -> TierForecast:
    """
    Forecast the casino tier after earning `additional_points`.

    The current tier is resolved from current_points, not taken from
    player_context.current_tier. Negative deltas are allowed and can move the
    projected tier down; tier_upgrade only reports upward moves.

    Args:
        player_context: the player's current standing and averages
        additional_points: points gained (or lost) by the scenario
        additional_nights: nights gained (or lost) by the scenario
        tiers: points ladder (defaults to Club Royale tiers)
        now: reference time for projected_date

    Returns:
        TierForecast
    """
    projected_points = player_context.current_points + additional_points
    projected_nights = player_context.current_nights + additional_nights

    current_tier = tiers.lookup(player_context.current_points)
    projected_tier = tiers.lookup(projected_points)
    tier_upgrade = tiers.index(projected_tier) > tiers.index(current_tier)

    next_tier = tiers.next_after(projected_tier)
    if next_tier is not None:
        next_tier_threshold = tiers.threshold(next_tier)
        points_to_next_tier = max(0, next_tier_threshold - projected_points)
    else:
        next_tier_threshold = 0
        points_to_next_tier = 0

    monthly_points = player_context.average_points_per_night * player_context.average_nights_per_month
    months_to_next_tier = months_needed(points_to_next_tier, monthly_points)

    projected_date = None
    if months_to_next_tier > 0:
        projected_date = clock.project_months(now or clock.now(), months_to_next_tier)

    return TierForecast(
        current_tier=current_tier,
        projected_tier=projected_tier,
        current_points=player_context.current_points,
        projected_points=projected_points,
        points_gained=additional_points,
        current_nights=player_context.current_nights,
        projected_nights=projected_nights,
        nights_gained=additional_nights,
        tier_upgrade=tier_upgrade,
        next_tier_threshold=next_tier_threshold,
        points_to_next_tier=points_to_next_tier,
        months_to_next_tier=months_to_next_tier,
        projected_date=projected_date,
    )


def calculate_loyalty_forecast(
    player_context: PlayerContext,
    additional_nights: float,
    levels: ThresholdTable = CROWN_ANCHOR_LEVELS,
    now: Optional[datetime] = None,
) -> LoyaltyForecast:
    """Forecast the loyalty level after sailing `additional_nights`; the nights-ladder twin of calculate_tier_forecast."""
    projected_nights = player_context.current_nights + additional_nights

    current_level = levels.lookup(player_context.current_nights)
    projected_level = levels.lookup(projected_nights)
    level_upgrade = levels.index(projected_level) > levels.index(current_level)

    next_level = levels.next_after(projected_level)
    if next_level is not None:
        next_level_threshold = levels.threshold(next_level)
        nights_to_next_level = max(0, next_level_threshold - projected_nights)
    else:
        next_level_threshold = 0
        nights_to_next_level = 0

    months_to_next_level = months_needed(nights_to_next_level, player_context.average_nights_per_month)

    projected_date = None
    if months_to_next_level > 0:
        projected_date = clock.project_months(now or clock.now(), months_to_next_level)

    return LoyaltyForecast(
        current_level=current_level,
        projected_level=projected_level,
        current_nights=player_context.current_nights,
        projected_nights=projected_nights,
        nights_gained=additional_nights,
        level_upgrade=level_upgrade,
        next_level_threshold=next_level_threshold,
        nights_to_next_level=nights_to_next_level,
        months_to_next_level=months_to_next_level,
        projected_date=projected_date,
    )
