"""
Player context assembly and opt-in input checks.

The simulator itself accepts any numbers. Callers that want stricter inputs
run validate_player_inputs first and decide what to do with the problems.
"""

import math
from typing import List, Optional

from simulator.models import BookedCruise, CasinoOffer, PlayerContext
from simulator.thresholds import CLUB_ROYALE_TIERS, CROWN_ANCHOR_LEVELS, ThresholdTable


# Fallbacks when the booked cruises say nothing useful
CONTEXT_DEFAULTS = {
    "average_points_per_night": 150,
    "average_nights_per_month": 7,
    "average_spend_per_cruise": 2000,
}


def build_player_context(
    booked_cruises: List[BookedCruise],
    current_points: float,
    current_nights: float,
    average_nights_per_month: Optional[float] = None,
    tiers: ThresholdTable = CLUB_ROYALE_TIERS,
    levels: ThresholdTable = CROWN_ANCHOR_LEVELS,
) -> PlayerContext:
    """
    Derive a PlayerContext from the player's booked cruises.

    - average_points_per_night: earned points over booked nights (at least 1 night)
    - average_spend_per_cruise: total spend over cruise count
    - both fall back to CONTEXT_DEFAULTS when there are no cruises or the average is 0
    - tier and level are resolved from the ladders

    Example:
        >>> ctx = build_player_context([BookedCruise("c1", nights=7, earned_points=1400, total_price=1800)], 1400, 7)
        >>> ctx.average_points_per_night, ctx.current_level
        (200.0, 'Gold')
    """
    if booked_cruises:
        total_points = sum(cruise.points for cruise in booked_cruises)
        total_nights = sum(cruise.nights or 0 for cruise in booked_cruises)
        total_spend = sum(cruise.spend for cruise in booked_cruises)
        points_per_night = total_points / max(1, total_nights)
        spend_per_cruise = total_spend / len(booked_cruises)
    else:
        points_per_night = 0
        spend_per_cruise = 0

    if average_nights_per_month is None:
        average_nights_per_month = CONTEXT_DEFAULTS["average_nights_per_month"]

    return PlayerContext(
        current_points=current_points,
        current_nights=current_nights,
        current_tier=tiers.lookup(current_points),
        current_level=levels.lookup(current_nights),
        average_points_per_night=points_per_night or CONTEXT_DEFAULTS["average_points_per_night"],
        average_nights_per_month=average_nights_per_month,
        average_spend_per_cruise=spend_per_cruise or CONTEXT_DEFAULTS["average_spend_per_cruise"],
    )


def _check_amount(problems: List[str], label: str, value: Optional[float]) -> None:
    if value is None:
        return
    if not math.isfinite(value):
        problems.append(f"{label} must be a finite number, got {value}")
    elif value < 0:
        problems.append(f"{label} must not be negative, got {value}")


def validate_player_inputs(
    player_context: PlayerContext,
    booked_cruises: List[BookedCruise],
    offers: Optional[List[CasinoOffer]] = None,
) -> List[str]:
    """
    List everything a strict caller would reject; an empty list means clean.

    Checks that every amount is finite and non-negative and that offer
    discounts are percentages between 0 and 100. Nothing is raised.
    """
    problems: List[str] = []

    for field_name in (
        "current_points",
        "current_nights",
        "average_points_per_night",
        "average_nights_per_month",
        "average_spend_per_cruise",
    ):
        _check_amount(problems, f"player_context.{field_name}", getattr(player_context, field_name))

    for cruise in booked_cruises:
        for field_name in (
            "nights",
            "total_price",
            "price",
            "retail_value",
            "original_price",
            "earned_points",
            "casino_points",
            "comp_value",
        ):
            _check_amount(problems, f"cruise {cruise.id}.{field_name}", getattr(cruise, field_name))

    for offer in offers or []:
        for field_name in ("min_nights", "freeplay_amount", "obc_amount"):
            _check_amount(problems, f"offer {offer.id}.{field_name}", getattr(offer, field_name))
        discount = offer.discount_percent
        if discount is not None and not (0 <= discount <= 100):
            problems.append(f"offer {offer.id}.discount_percent must be between 0 and 100, got {discount}")

    return problems
