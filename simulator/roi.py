"""
Return-on-investment projection for a cruise portfolio.
"""

from datetime import datetime
from typing import Optional

from simulator import clock
from simulator.models import ROIProjection
from simulator.thresholds import DOLLARS_PER_POINT


# Flat haircut applied to every projection; not derived from the risk analysis
RISK_ADJUSTMENT_FACTOR = 0.85


def calculate_roi_projection(
    total_spend: float,
    retail_value: float,
    points_earned: float,
    comp_value: float = 0,
    time_horizon_months: int = 12,
    now: Optional[datetime] = None,
) -> ROIProjection:
    """
    Project the return on `total_spend` from savings, points and comps.

    Savings never go negative: paying more than retail counts as zero savings
    here. Zero spend yields a 0% ROI.

    Args:
        total_spend: cash paid for the portfolio
        retail_value: retail value of the same cruises
        points_earned: casino points earned
        comp_value: freeplay, onboard credit and other comps
        time_horizon_months: months the ROI is spread over (minimum 1)
        now: reference time for break_even_date

    Returns:
        ROIProjection. break_even_date is set only when spend exceeds retail
        value and the monthly recovery rate is positive.

    Example:
        >>> calculate_roi_projection(1000, 1200, 0).projected_roi
        20.0
    """
    points_value = points_earned * DOLLARS_PER_POINT
    savings = max(0, retail_value - total_spend)
    projected_value = retail_value + points_value + comp_value

    if total_spend > 0:
        projected_roi = (savings + points_value + comp_value) / total_spend * 100
    else:
        projected_roi = 0

    monthly_roi = projected_roi / max(1, time_horizon_months)
    risk_adjusted_roi = projected_roi * RISK_ADJUSTMENT_FACTOR

    break_even_date = None
    if total_spend > retail_value:
        # Dollars of value recovered per month at the projected rate
        monthly_recovery = monthly_roi * total_spend / 100
        if monthly_recovery > 0:
            months = (total_spend - retail_value) / monthly_recovery
            break_even_date = clock.project_months(now or clock.now(), months)

    return ROIProjection(
        total_investment=total_spend,
        projected_value=projected_value,
        projected_roi=projected_roi,
        points_value=points_value,
        comp_value=comp_value,
        savings=savings,
        break_even_date=break_even_date,
        monthly_roi=monthly_roi,
        risk_adjusted_roi=risk_adjusted_roi,
    )
