"""
Month-by-month loyalty timeline.

Projects points and nights forward at the player's average pace. Casino
points expire once a year on a fixed calendar date (April 1); cruise nights
never expire.
"""

from datetime import datetime
from typing import List, Optional

from simulator import clock
from simulator.models import BookedCruise, PlayerContext, TimelinePoint
from simulator.thresholds import CLUB_ROYALE_TIERS, CROWN_ANCHOR_LEVELS, ThresholdTable


POINTS_EXPIRATION_MONTH = 4
POINTS_EXPIRATION_DAY = 1


def months_until_expiration(
    now: datetime,
    expiration_month: int = POINTS_EXPIRATION_MONTH,
    expiration_day: int = POINTS_EXPIRATION_DAY,
) -> int:
    """
    Calendar months from `now` to the next point expiration date.

    On or after this year's expiration date, counts to next year's.

    Example:
        >>> months_until_expiration(datetime(2025, 1, 15))
        3
        >>> months_until_expiration(datetime(2025, 4, 1))
        12
    """
    expiration = datetime(now.year, expiration_month, expiration_day, tzinfo=now.tzinfo)
    if now >= expiration:
        expiration = expiration.replace(year=now.year + 1)
    return (expiration.year - now.year) * 12 + (expiration.month - now.month)


def generate_timeline_projections(
    player_context: PlayerContext,
    booked_cruises: List[BookedCruise],
    months_ahead: int = 24,
    tiers: ThresholdTable = CLUB_ROYALE_TIERS,
    levels: ThresholdTable = CROWN_ANCHOR_LEVELS,
    now: Optional[datetime] = None,
) -> List[TimelinePoint]:
    """
    Project the player's tier and level for each of the next `months_ahead` months.

    Each month adds average_points_per_night * average_nights_per_month points
    and average_nights_per_month nights. Points drop to 0 on the month the
    expiration date falls in, and every 12 months after, before that month's
    snapshot is taken.

    Args:
        player_context: current standing and averages
        booked_cruises: the player's booked cruises; the projection runs on the
            context averages, so this only documents what the averages came from
        months_ahead: number of months after the present to project
        tiers: points ladder
        levels: nights ladder
        now: reference time for the expiration calendar

    Returns:
        months_ahead + 1 TimelinePoints; month 0 is the present state
    """
    now = now or clock.now()
    expiration_offset = months_until_expiration(now)

    monthly_points = player_context.average_points_per_night * player_context.average_nights_per_month
    monthly_nights = player_context.average_nights_per_month

    points = player_context.current_points
    nights = player_context.current_nights
    projections: List[TimelinePoint] = []

    for month in range(months_ahead + 1):
        if month > 0 and month >= expiration_offset and (month - expiration_offset) % 12 == 0:
            points = 0

        projections.append(TimelinePoint(
            month=month,
            points=points,
            nights=nights,
            tier=tiers.lookup(points),
            level=levels.lookup(nights),
        ))

        points += monthly_points
        nights += monthly_nights

    return projections
